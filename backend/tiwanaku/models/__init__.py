"""Data models package.

This package contains the board data model, generation parameters and API schemas.
"""
from .coord import Coord, CoordSet
from .cell import BoardSize, Cell, Crop, Terrain, MAX_CROP
from .group import Group
from .board import Board, BoardZoneSelector, SerializedBoard, SerializedCell
from .state import State
from .generation import BOARD_PRESETS, GameConfig, GenerationResult
from .schemas import (
    CoordSchema,
    GenerateRequest,
    GenerateResponse,
    RevealRequest,
    RevealResponse,
    ValidateRequest,
    ValidateResponse,
    ErrorResponse,
)

__all__ = [
    # Board models
    "Coord",
    "CoordSet",
    "BoardSize",
    "Cell",
    "Crop",
    "Terrain",
    "MAX_CROP",
    "Group",
    "Board",
    "BoardZoneSelector",
    "SerializedBoard",
    "SerializedCell",
    "State",
    # Generation
    "BOARD_PRESETS",
    "GameConfig",
    "GenerationResult",
    # API schemas
    "CoordSchema",
    "GenerateRequest",
    "GenerateResponse",
    "RevealRequest",
    "RevealResponse",
    "ValidateRequest",
    "ValidateResponse",
    "ErrorResponse",
]
