"""Board coordinates and value-keyed coordinate sets."""
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from ..utils.random_utils import shuffled_copy

# left, right, above, below
ORTHOGONAL_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))
# top-left, top-right, bottom-left, bottom-right
DIAGONAL_OFFSETS = ((-1, -1), (1, -1), (-1, 1), (1, 1))


@dataclass(frozen=True)
class Coord:
    """An immutable coordinate on the game board."""
    x: int
    y: int

    def is_neighbor_of(self, other: "Coord") -> bool:
        """Check if the coordinates touch orthogonally or diagonally."""
        dx = abs(self.x - other.x)
        dy = abs(self.y - other.y)
        return max(dx, dy) == 1

    def is_orthogonal_neighbor_of(self, other: "Coord") -> bool:
        """Check if the coordinates share an edge."""
        return abs(self.x - other.x) + abs(self.y - other.y) == 1

    def get_orthogonal_neighbors(self, board_height: int, board_width: int) -> List["Coord"]:
        """Get the (up to 4) orthogonal neighbors inside the board."""
        return self._offsets_in_bounds(ORTHOGONAL_OFFSETS, board_height, board_width)

    def get_neighbors(self, board_height: int, board_width: int) -> List["Coord"]:
        """Get the (up to 8) orthogonal and diagonal neighbors inside the board."""
        return self._offsets_in_bounds(
            ORTHOGONAL_OFFSETS + DIAGONAL_OFFSETS, board_height, board_width
        )

    def serialize(self) -> Dict[str, int]:
        """Convert to a plain dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def deserialize(cls, data: Dict[str, Any]) -> "Coord":
        """
        Create a coordinate from its plain dictionary form.

        Raises:
            ValueError: If x or y is missing or not an integer.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Coordinates must be an object, got {type(data).__name__}")
        x = data.get("x")
        y = data.get("y")
        for name, value in (("x", x), ("y", y)):
            # bool is an int subclass, reject it explicitly
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"Coordinate '{name}' must be an integer, got {value!r}")
        return cls(x, y)

    def _offsets_in_bounds(self, offsets, board_height: int, board_width: int) -> List["Coord"]:
        neighbors = []
        for dx, dy in offsets:
            x, y = self.x + dx, self.y + dy
            if 0 <= x < board_width and 0 <= y < board_height:
                neighbors.append(Coord(x, y))
        return neighbors


class CoordSet:
    """
    Immutable, insertion-ordered set of coordinates.

    Membership uses value equality, so two distinct ``Coord`` instances with
    the same x and y are the same element. Every operation returns a new set.
    """

    __slots__ = ("_items", "_lookup")

    def __init__(self, coords: Iterable[Coord] = ()):
        items: Dict[Coord, None] = {}
        for coord in coords:
            items.setdefault(coord, None)
        self._items = tuple(items)
        self._lookup = frozenset(self._items)

    @classmethod
    def _from_unique(cls, items: Iterable[Coord]) -> "CoordSet":
        new_set = cls.__new__(cls)
        new_set._items = tuple(items)
        new_set._lookup = frozenset(new_set._items)
        return new_set

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self._items)

    def __contains__(self, coord: object) -> bool:
        return coord in self._lookup

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoordSet):
            return NotImplemented
        return self._lookup == other._lookup

    def __hash__(self) -> int:
        return hash(self._lookup)

    def __repr__(self) -> str:
        inner = ", ".join(f"({c.x}, {c.y})" for c in self._items)
        return f"{type(self).__name__}([{inner}])"

    @property
    def size(self) -> int:
        return len(self._items)

    def has(self, coord: Coord) -> bool:
        return coord in self._lookup

    def first(self) -> Optional[Coord]:
        """Return the first coordinate in insertion order, if any."""
        return self._items[0] if self._items else None

    def with_coord(self, coord: Coord) -> "CoordSet":
        if coord in self._lookup:
            return self
        return CoordSet._from_unique(self._items + (coord,))

    def without_coord(self, coord: Coord) -> "CoordSet":
        if coord not in self._lookup:
            return self
        return CoordSet._from_unique(c for c in self._items if c != coord)

    def union(self, other: Iterable[Coord]) -> "CoordSet":
        return CoordSet(self._items + tuple(other))

    def difference(self, other: Iterable[Coord]) -> "CoordSet":
        excluded = other._lookup if isinstance(other, CoordSet) else frozenset(other)
        return CoordSet._from_unique(c for c in self._items if c not in excluded)

    def filter(self, predicate: Callable[[Coord], bool]) -> "CoordSet":
        return CoordSet._from_unique(c for c in self._items if predicate(c))

    def flat_map(self, fn: Callable[[Coord], Iterable[Coord]]) -> "CoordSet":
        return CoordSet(coord for c in self._items for coord in fn(c))

    def to_list(self) -> List[Coord]:
        return list(self._items)

    def copy_shuffled(self, rng: Optional[random.Random] = None) -> "CoordSet":
        """Return a copy whose iteration order is shuffled (Fisher-Yates)."""
        return CoordSet._from_unique(shuffled_copy(self._items, rng))
