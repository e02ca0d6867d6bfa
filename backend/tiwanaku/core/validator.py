"""Board invariant checks for generated or client-supplied boards."""
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..models.board import Board
from ..models.cell import Cell
from ..models.coord import Coord
from ..models.generation import GameConfig


@dataclass
class ValidationReport:
    """Outcome of validating a board."""
    violations: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.violations

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"valid": self.valid, "violations": self.violations}


class BoardValidator:
    """Checks the rules a complete board must satisfy."""

    MAX_GROUP_SIZE = 5

    def validate(self, board: Board, config: Optional[GameConfig] = None) -> ValidationReport:
        """
        Validate a board.

        Args:
            board: The board to check.
            config: If given, also check its extent and group count bounds.

        Returns:
            ValidationReport listing every violation found.
        """
        report = ValidationReport()

        incomplete = [cell for cell in board.cells() if not cell.is_complete]
        for cell in incomplete:
            report.violations.append(f"Cell {self._fmt(cell.coordinates)} is incomplete")

        groups: Dict[int, List[Cell]] = defaultdict(list)
        for cell in board.cells():
            if cell.group_id is not None:
                groups[cell.group_id].append(cell)

        if config is not None:
            self._check_config(board, config, len(groups), report)

        for group_id, cells in sorted(groups.items()):
            self._check_group(board, group_id, cells, report)

        self._check_neighbors(board, report)
        return report

    def _check_config(self, board: Board, config: GameConfig, group_count: int, report: ValidationReport) -> None:
        if (board.board_width, board.board_height) != (config.board_width, config.board_height):
            report.violations.append(
                f"Board is {board.board_width}x{board.board_height}, "
                f"expected {config.board_width}x{config.board_height}"
            )
        if not config.min_groups <= group_count <= config.max_groups:
            report.violations.append(
                f"Board has {group_count} groups, expected {config.min_groups}-{config.max_groups}"
            )

    def _check_group(self, board: Board, group_id: int, cells: List[Cell], report: ValidationReport) -> None:
        terrains = {cell.terrain for cell in cells}
        if len(terrains) > 1:
            names = sorted(t.value for t in terrains if t is not None)
            report.violations.append(f"Group {group_id} mixes terrains: {names}")

        if len(cells) > self.MAX_GROUP_SIZE:
            report.violations.append(
                f"Group {group_id} has {len(cells)} cells (max {self.MAX_GROUP_SIZE})"
            )

        if not self._is_connected(board, {cell.coordinates for cell in cells}):
            report.violations.append(f"Group {group_id} is not connected")

        crops = sorted(int(cell.crop) for cell in cells if cell.crop is not None)
        expected = list(range(1, len(cells) + 1))
        if all(cell.crop is not None for cell in cells) and crops != expected:
            report.violations.append(
                f"Group {group_id} has crops {crops}, expected {expected}"
            )

    def _check_neighbors(self, board: Board, report: ValidationReport) -> None:
        for cell in board.cells():
            for coord in cell.coordinates.get_neighbors(board.board_height, board.board_width):
                # report each pair once
                if (coord.y, coord.x) < (cell.coordinates.y, cell.coordinates.x):
                    continue
                neighbor = board.get_cell(coord.x, coord.y)
                if (
                    cell.group_id != neighbor.group_id
                    and cell.terrain is not None
                    and cell.terrain == neighbor.terrain
                ):
                    report.violations.append(
                        f"Groups {cell.group_id} and {neighbor.group_id} share terrain "
                        f"'{cell.terrain.value}' and touch at "
                        f"{self._fmt(cell.coordinates)}-{self._fmt(coord)}"
                    )
                if cell.crop is not None and cell.crop == neighbor.crop:
                    report.violations.append(
                        f"Crop {int(cell.crop)} touches itself at "
                        f"{self._fmt(cell.coordinates)}-{self._fmt(coord)}"
                    )

    @staticmethod
    def _is_connected(board: Board, coords: set) -> bool:
        if not coords:
            return True
        start = next(iter(coords))
        seen = {start}
        frontier = [start]
        while frontier:
            coord = frontier.pop()
            for neighbor in coord.get_orthogonal_neighbors(board.board_height, board.board_width):
                if neighbor in coords and neighbor not in seen:
                    seen.add(neighbor)
                    frontier.append(neighbor)
        return seen == coords

    @staticmethod
    def _fmt(coord: Coord) -> str:
        return f"({coord.x}, {coord.y})"


# Singleton instance
_validator = None


def get_validator() -> BoardValidator:
    """Get or create validator singleton instance."""
    global _validator
    if _validator is None:
        _validator = BoardValidator()
    return _validator
