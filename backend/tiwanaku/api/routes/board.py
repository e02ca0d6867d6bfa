"""Routes operating on an already generated board."""
from fastapi import APIRouter, Depends, HTTPException

from ...core.validator import BoardValidator
from ...models.board import Board
from ...models.generation import GameConfig
from ...models.schemas import (
    ErrorResponse,
    RevealRequest,
    RevealResponse,
    ValidateRequest,
    ValidateResponse,
)
from ...utils.helpers import count_hidden_fields
from ..deps import get_board_validator

router = APIRouter(prefix="/api/board", tags=["board"])


@router.post(
    "/reveal",
    response_model=RevealResponse,
    responses={400: {"model": ErrorResponse}},
)
async def reveal_cell(request: RevealRequest) -> RevealResponse:
    """
    Reveal the field or the crop of one cell.

    With target "next", the field is revealed first and the crop on the
    following call. The rest of the board is returned unchanged.
    """
    try:
        board = Board.deserialize(request.board)
        if request.target == "field":
            board = board.reveal_field(request.x, request.y)
        elif request.target == "crop":
            board = board.reveal_crop(request.x, request.y)
        else:
            board = board.next_step(request.x, request.y)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Reveal failed: {str(e)}")

    return RevealResponse(
        board=board.serialize(),
        hidden_fields=count_hidden_fields(board),
    )


@router.post(
    "/validate",
    response_model=ValidateResponse,
    responses={400: {"model": ErrorResponse}},
)
async def validate_board(
    request: ValidateRequest,
    validator: BoardValidator = Depends(get_board_validator),
) -> ValidateResponse:
    """
    Check a board against the generation rules.

    Args:
        request: ValidateRequest with the board and an optional size preset.
        validator: BoardValidator dependency.

    Returns:
        ValidateResponse listing the violated rules.
    """
    try:
        board = Board.deserialize(request.board)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid board: {str(e)}")

    config = GameConfig.for_size(request.size) if request.size is not None else None
    report = validator.validate(board, config)
    return ValidateResponse(valid=report.valid, violations=report.violations)
