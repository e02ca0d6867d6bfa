"""Pydantic schemas for API request/response validation."""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .cell import BoardSize


class CoordSchema(BaseModel):
    """A board coordinate."""
    x: int = Field(..., ge=0, description="Column index")
    y: int = Field(..., ge=0, description="Row index")


class GenerateRequest(BaseModel):
    """Request schema for board generation."""
    size: BoardSize = Field(default=BoardSize.STANDARD, description="Board size (small/standard)")
    seed: Optional[int] = Field(default=None, description="Random seed for a reproducible board")


class GenerateResponse(BaseModel):
    """Response schema for board generation."""
    size: BoardSize = Field(..., description="Board size")
    board: List[List[Dict[str, Any]]] = Field(..., description="Serialized board, one list per row")
    hints: List[CoordSchema] = Field(default=[], description="Coordinates revealed at start")
    hidden_fields: Dict[str, int] = Field(..., description="Hidden cell count per terrain")
    generation_time_ms: int = Field(default=0, description="Generation time in milliseconds")


class RevealRequest(BaseModel):
    """Request schema for revealing a cell of a generated board."""
    board: List[List[Dict[str, Any]]] = Field(..., description="Serialized board")
    x: int = Field(..., ge=0, description="Column of the cell to reveal")
    y: int = Field(..., ge=0, description="Row of the cell to reveal")
    target: Literal["next", "field", "crop"] = Field(
        default="next",
        description="What to reveal: field, crop, or next (field first, then crop)",
    )


class RevealResponse(BaseModel):
    """Response schema for a reveal operation."""
    board: List[List[Dict[str, Any]]] = Field(..., description="Updated serialized board")
    hidden_fields: Dict[str, int] = Field(..., description="Hidden cell count per terrain")


class ValidateRequest(BaseModel):
    """Request schema for board validation."""
    board: List[List[Dict[str, Any]]] = Field(..., description="Serialized board to validate")
    size: Optional[BoardSize] = Field(default=None, description="Also check against this preset")


class ValidateResponse(BaseModel):
    """Response schema for board validation."""
    valid: bool = Field(..., description="Whether the board satisfies every rule")
    violations: List[str] = Field(default=[], description="Rules the board breaks")


class ErrorResponse(BaseModel):
    """Error body returned with a 400 or 500 status."""
    detail: str = Field(..., description="Error message")
