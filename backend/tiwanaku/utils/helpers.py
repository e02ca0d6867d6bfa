"""Utility helper functions."""
import logging
from typing import Any, Dict, Optional

from ..models.board import Board
from ..models.cell import Terrain

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Single-letter codes used when printing boards
TERRAIN_CODES = {
    Terrain.FOREST: "F",
    Terrain.DESERT: "D",
    Terrain.MOUNTAIN: "M",
    Terrain.VALLEY: "V",
}


def configure_logging(level: str = "INFO", force: bool = False) -> None:
    """
    Configure root logging for the service and scripts.

    Args:
        level: Log level name.
        force: Replace handlers configured earlier.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        force=force,
    )


def count_hidden_fields(board: Board) -> Dict[str, int]:
    """
    Count the cells whose field is still hidden, per terrain.

    Args:
        board: A complete board.

    Returns:
        Dictionary mapping every terrain name to its hidden cell count.
    """
    counts = {terrain.value: 0 for terrain in Terrain}
    for cell in board.cells():
        if cell.field_hidden and cell.terrain is not None:
            counts[cell.terrain.value] += 1
    return counts


def format_board_for_display(board: Board, reveal_all: bool = False) -> str:
    """
    Format a board for human-readable display.

    Each cell prints as terrain code plus crop (``F3``); hidden values
    print as ``?`` unless ``reveal_all`` is set, unset values as ``.``.

    Args:
        board: Board to format.
        reveal_all: Ignore the hidden flags.

    Returns:
        Formatted string representation.
    """
    lines = [f"Board {board.board_width}x{board.board_height}:"]
    for row in board.rows:
        tokens = []
        for cell in row:
            if cell.terrain is None:
                terrain = "."
            elif cell.field_hidden and not reveal_all:
                terrain = "?"
            else:
                terrain = TERRAIN_CODES[cell.terrain]

            if cell.crop is None:
                crop = "."
            elif cell.crop_hidden and not reveal_all:
                crop = "?"
            else:
                crop = str(int(cell.crop))
            tokens.append(terrain + crop)
        lines.append("  " + " ".join(tokens))
    return "\n".join(lines)


def extract_board_statistics(board: Board) -> Dict[str, Any]:
    """
    Extract group and terrain statistics from a board.

    Args:
        board: Board to analyze.

    Returns:
        Dictionary with group sizes, terrain counts and hint count.
    """
    group_sizes: Dict[int, int] = {}
    terrain_counts = {terrain.value: 0 for terrain in Terrain}
    revealed = 0
    largest: Optional[int] = None

    for cell in board.cells():
        if cell.group_id is not None:
            group_sizes[cell.group_id] = group_sizes.get(cell.group_id, 0) + 1
        if cell.terrain is not None:
            terrain_counts[cell.terrain.value] += 1
        if not cell.field_hidden and not cell.crop_hidden:
            revealed += 1

    if group_sizes:
        largest = max(group_sizes.values())

    return {
        "total_cells": board.board_width * board.board_height,
        "group_count": len(group_sizes),
        "group_sizes": group_sizes,
        "largest_group": largest,
        "terrain_counts": terrain_counts,
        "revealed_cells": revealed,
    }
