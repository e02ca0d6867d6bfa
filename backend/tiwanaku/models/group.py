"""Groups of same-terrain cells."""
from typing import Iterable, Optional

from .cell import Terrain
from .coord import Coord, CoordSet


class Group(CoordSet):
    """A coordinate set that also carries a group id and a terrain."""

    __slots__ = ("_terrain", "_group_id")

    def __init__(
        self,
        coords: Iterable[Coord] = (),
        terrain: Optional[Terrain] = None,
        group_id: Optional[int] = None,
    ):
        super().__init__(coords)
        self._terrain = terrain
        self._group_id = group_id

    @property
    def terrain(self) -> Optional[Terrain]:
        return self._terrain

    @property
    def group_id(self) -> Optional[int]:
        return self._group_id

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Group):
            return (
                self._group_id == other._group_id
                and self._terrain == other._terrain
                and super().__eq__(other)
            )
        return super().__eq__(other)

    __hash__ = CoordSet.__hash__

    def __repr__(self) -> str:
        coords = ", ".join(f"({c.x}, {c.y})" for c in self)
        terrain = self._terrain.value if self._terrain else None
        return f"Group(id={self._group_id}, terrain={terrain}, coords=[{coords}])"

    def with_coord(self, coord: Coord) -> "Group":
        if self.has(coord):
            return self
        return Group(list(self) + [coord], self._terrain, self._group_id)

    def without_coord(self, coord: Coord) -> "Group":
        if not self.has(coord):
            return self
        return Group((c for c in self if c != coord), self._terrain, self._group_id)

    def get_orthogonal_neighbors(self, board_height: int, board_width: int) -> CoordSet:
        """Cells sharing an edge with the group but not part of it (growth frontier)."""
        return self.flat_map(
            lambda coord: coord.get_orthogonal_neighbors(board_height, board_width)
        ).difference(self)
