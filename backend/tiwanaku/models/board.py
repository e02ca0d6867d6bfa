"""Immutable board grid, its wire format and zone selection."""
import json
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, TypeVar

from .cell import Cell
from .coord import Coord, CoordSet

SerializedCell = Dict[str, Any]
SerializedBoard = List[List[SerializedCell]]

BoardT = TypeVar("BoardT", bound="Board")


class Board:
    """
    An immutable ``height x width`` grid of cells.

    Rows are indexed by y and columns by x. Updates never mutate the board:
    ``copy_with_cell`` returns a new board sharing every untouched row.
    """

    def __init__(self, rows: Iterable[Iterable[Cell]]):
        self._rows: Tuple[Tuple[Cell, ...], ...] = tuple(tuple(row) for row in rows)
        if not self._rows or not self._rows[0]:
            raise ValueError("Board needs at least one row and one column")
        width = len(self._rows[0])
        for y, row in enumerate(self._rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {width}")
        self._hash: Optional[str] = None

    @classmethod
    def empty(cls, width: int, height: int) -> "Board":
        """Create a board where every cell is unset and hidden."""
        if width < 1 or height < 1:
            raise ValueError(f"Invalid board size: {width}x{height}")
        return cls([Cell.empty(x, y) for x in range(width)] for y in range(height))

    @property
    def rows(self) -> Tuple[Tuple[Cell, ...], ...]:
        return self._rows

    @property
    def board_height(self) -> int:
        return len(self._rows)

    @property
    def board_width(self) -> int:
        return len(self._rows[0])

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells, row by row."""
        for row in self._rows:
            yield from row

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.board_width and 0 <= y < self.board_height

    def get_cell(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise ValueError(f"Coordinates ({x}, {y}) are outside the board")
        return self._rows[y][x]

    def get_board_coordinates(self) -> CoordSet:
        return CoordSet(cell.coordinates for cell in self.cells())

    def copy_with_cell(self: BoardT, cell: Cell) -> BoardT:
        """Return a new board where only the cell at ``cell.coordinates`` is replaced."""
        return self._with_rows(self._replace_cell(cell))

    @property
    def hash(self) -> str:
        """Stable digest of the full board content."""
        if self._hash is None:
            self._hash = json.dumps(self.serialize(), sort_keys=True, separators=(",", ":"))
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def serialize(self) -> SerializedBoard:
        return [[cell.serialize() for cell in row] for row in self._rows]

    @classmethod
    def deserialize(cls, data: Sequence[Sequence[SerializedCell]]) -> "Board":
        """
        Build a board from its wire format.

        Raises:
            ValueError: If the data is not a non-empty rectangular grid of
                valid cells, or a cell's coordinates do not match its position.
        """
        if not isinstance(data, (list, tuple)) or not data:
            raise ValueError("Board must be a non-empty list of rows")
        rows = []
        for y, raw_row in enumerate(data):
            if not isinstance(raw_row, (list, tuple)):
                raise ValueError(f"Row {y} must be a list of cells")
            row = []
            for x, raw_cell in enumerate(raw_row):
                cell = Cell.deserialize(raw_cell)
                if cell.coordinates != Coord(x, y):
                    raise ValueError(
                        f"Cell at row {y}, column {x} has coordinates "
                        f"({cell.coordinates.x}, {cell.coordinates.y})"
                    )
                row.append(cell)
            rows.append(row)
        return cls(rows)

    @classmethod
    def from_complete_state(cls, state: "Board", hints: Iterable[Coord] = ()) -> "Board":
        """
        Build a playable board from a fully generated state.

        Hint coordinates are revealed (field and crop visible); every other
        cell is fully hidden.

        Raises:
            ValueError: If any cell is incomplete or a hint is off the board.
        """
        hint_set = CoordSet(hints)
        for coord in hint_set:
            if not state.in_bounds(coord.x, coord.y):
                raise ValueError(f"Hint ({coord.x}, {coord.y}) is outside the board")
        rows = []
        for row in state.rows:
            new_row = []
            for cell in row:
                if not cell.is_complete:
                    raise ValueError("Cannot create a game board from an incomplete cell")
                hidden = cell.coordinates not in hint_set
                new_row.append(cell.copy_with(field_hidden=hidden, crop_hidden=hidden))
            rows.append(new_row)
        return Board(rows)

    def reveal_field(self, x: int, y: int) -> "Board":
        return self.copy_with_cell(self.get_cell(x, y).copy_with(field_hidden=False))

    def reveal_crop(self, x: int, y: int) -> "Board":
        return self.copy_with_cell(self.get_cell(x, y).copy_with(crop_hidden=False))

    def next_step(self, x: int, y: int) -> "Board":
        """Reveal the field of a cell if still hidden, otherwise its crop."""
        if self.get_cell(x, y).field_hidden:
            return self.reveal_field(x, y)
        return self.reveal_crop(x, y)

    def _replace_cell(self, cell: Cell) -> Tuple[Tuple[Cell, ...], ...]:
        coord = cell.coordinates
        if not self.in_bounds(coord.x, coord.y):
            raise ValueError(f"Coordinates ({coord.x}, {coord.y}) are outside the board")
        row = self._rows[coord.y]
        new_row = row[:coord.x] + (cell,) + row[coord.x + 1:]
        return self._rows[:coord.y] + (new_row,) + self._rows[coord.y + 1:]

    def _with_rows(self: BoardT, rows: Tuple[Tuple[Cell, ...], ...]) -> BoardT:
        new_board = object.__new__(type(self))
        new_board._rows = rows
        new_board._hash = None
        return new_board


class BoardZoneSelector:
    """Select cell coordinates in the concentric zones of a board."""

    def __init__(self, board: Board):
        self._board = board

    def _is_on_border(self, coord: Coord) -> bool:
        return (
            coord.y == 0
            or coord.y == self._board.board_height - 1
            or coord.x == 0
            or coord.x == self._board.board_width - 1
        )

    def _is_on_inner_ring(self, coord: Coord) -> bool:
        return not self._is_on_border(coord) and (
            coord.y == 1
            or coord.y == self._board.board_height - 2
            or coord.x == 1
            or coord.x == self._board.board_width - 2
        )

    def _is_in_core(self, coord: Coord) -> bool:
        return (
            1 < coord.y < self._board.board_height - 2
            and 1 < coord.x < self._board.board_width - 2
        )

    @property
    def border(self) -> List[Coord]:
        """Coordinates on the outer ring of the board."""
        return [c.coordinates for c in self._board.cells() if self._is_on_border(c.coordinates)]

    @property
    def inner_ring(self) -> List[Coord]:
        """Coordinates on the second ring in from the edge."""
        return [c.coordinates for c in self._board.cells() if self._is_on_inner_ring(c.coordinates)]

    @property
    def core(self) -> List[Coord]:
        """Coordinates strictly inside the second ring."""
        return [c.coordinates for c in self._board.cells() if self._is_in_core(c.coordinates)]
