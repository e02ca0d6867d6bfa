"""Board state used while generating a board."""
from types import MappingProxyType
from typing import Dict, Iterable, Mapping

from .board import Board
from .cell import Cell
from .group import Group


class State(Board):
    """
    A possibly incomplete board plus the groups it contains.

    The group map is derived from the cells and kept up to date
    incrementally: ``copy_with_cell`` touches only the group of the updated
    cell instead of rescanning the grid.
    """

    def __init__(self, rows: Iterable[Iterable[Cell]]):
        super().__init__(rows)
        groups: Dict[int, Group] = {}
        for cell in self.cells():
            self._update_groups(groups, cell)
        self._groups: Mapping[int, Group] = MappingProxyType(groups)

    @classmethod
    def empty(cls, width: int, height: int) -> "State":
        return cls(Board.empty(width, height).rows)

    @classmethod
    def from_board(cls, board: Board) -> "State":
        return cls(board.rows)

    @property
    def groups(self) -> Mapping[int, Group]:
        return self._groups

    def copy_with_cell(self, cell: Cell) -> "State":
        new_state = self._with_rows(self._replace_cell(cell))
        groups = dict(self._groups)
        self._update_groups(groups, cell)
        new_state._groups = MappingProxyType(groups)
        return new_state

    @staticmethod
    def _update_groups(groups: Dict[int, Group], cell: Cell) -> None:
        """Record the cell in its group, creating the group on first sight. Mutates ``groups``."""
        if cell.group_id is None:
            return
        existing = groups.get(cell.group_id)
        if existing is None:
            groups[cell.group_id] = Group([cell.coordinates], cell.terrain, cell.group_id)
        else:
            groups[cell.group_id] = existing.with_coord(cell.coordinates)
