"""Board generation API routes."""
import logging
import random

from fastapi import APIRouter, Depends, HTTPException

from ...config import Settings
from ...core.exceptions import GenerationError
from ...core.generator import generate_game_board
from ...models.schemas import CoordSchema, ErrorResponse, GenerateRequest, GenerateResponse
from ...utils.helpers import count_hidden_fields
from ..deps import get_app_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["generate"])


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={500: {"model": ErrorResponse}},
)
def generate(
    request: GenerateRequest,
    settings: Settings = Depends(get_app_settings),
) -> GenerateResponse:
    """
    Generate a new board.

    Runs in FastAPI's threadpool so a long search never blocks the event loop.

    Args:
        request: GenerateRequest with the board size and optional seed.
        settings: Application settings (retry budgets).

    Returns:
        GenerateResponse with the serialized board and its hints.
    """
    rng = random.Random(request.seed) if request.seed is not None else None
    try:
        result = generate_game_board(request.size, rng=rng, settings=settings)
    except GenerationError as e:
        logger.error("Board generation failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Generation failed: {str(e)}")

    return GenerateResponse(
        size=result.size,
        board=result.board.serialize(),
        hints=[CoordSchema(x=coord.x, y=coord.y) for coord in result.hints],
        hidden_fields=count_hidden_fields(result.board),
        generation_time_ms=result.generation_time_ms,
    )
