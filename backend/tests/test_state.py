"""Tests for generation states and groups."""
import pytest
from tiwanaku.models.cell import Terrain
from tiwanaku.models.coord import Coord, CoordSet
from tiwanaku.models.group import Group
from tiwanaku.models.state import State


def _assign(state: State, group_id: int, terrain: Terrain, coords):
    for coord in coords:
        cell = state.get_cell(coord.x, coord.y).copy_with(group_id=group_id, terrain=terrain)
        state = state.copy_with_cell(cell)
    return state


@pytest.fixture
def two_group_state():
    """3x3 state with a forest column and a desert pair."""
    state = State.empty(3, 3)
    state = _assign(state, 0, Terrain.FOREST, [Coord(0, 0), Coord(0, 1), Coord(0, 2)])
    return _assign(state, 1, Terrain.DESERT, [Coord(2, 0), Coord(2, 1)])


class TestGroup:
    """Test cases for Group."""

    def test_carries_id_and_terrain(self):
        """Test group metadata."""
        group = Group([Coord(0, 0)], Terrain.VALLEY, 4)
        assert group.group_id == 4
        assert group.terrain == Terrain.VALLEY
        assert group.with_coord(Coord(1, 0)).terrain == Terrain.VALLEY
        assert group.with_coord(Coord(1, 0)).group_id == 4

    def test_equality_includes_metadata(self):
        """Test that groups with different ids differ."""
        assert Group([Coord(0, 0)], Terrain.VALLEY, 1) == Group([Coord(0, 0)], Terrain.VALLEY, 1)
        assert Group([Coord(0, 0)], Terrain.VALLEY, 1) != Group([Coord(0, 0)], Terrain.VALLEY, 2)
        assert Group([Coord(0, 0)], Terrain.VALLEY, 1) != Group([Coord(0, 0)], Terrain.FOREST, 1)

    def test_frontier_excludes_members(self):
        """Test the growth frontier of a group."""
        group = Group([Coord(1, 1), Coord(2, 1)], Terrain.FOREST, 0)
        frontier = group.get_orthogonal_neighbors(3, 3)
        assert frontier == CoordSet([
            Coord(0, 1), Coord(1, 0), Coord(1, 2), Coord(2, 0), Coord(2, 2),
        ])

    def test_frontier_is_bounded_by_board(self):
        """Test that the frontier stays on the board."""
        group = Group([Coord(0, 0)], Terrain.FOREST, 0)
        assert group.get_orthogonal_neighbors(1, 2) == CoordSet([Coord(1, 0)])


class TestState:
    """Test cases for State."""

    def test_empty_state_has_no_groups(self):
        """Test that a fresh state has no groups."""
        assert len(State.empty(5, 5).groups) == 0

    def test_groups_follow_cells(self, two_group_state):
        """Test that groups are built from cell assignments."""
        groups = two_group_state.groups
        assert set(groups) == {0, 1}
        assert groups[0] == Group([Coord(0, 0), Coord(0, 1), Coord(0, 2)], Terrain.FOREST, 0)
        assert groups[1].terrain == Terrain.DESERT
        assert len(groups[1]) == 2

    def test_incremental_groups_match_rebuild(self, two_group_state):
        """Test that incremental tracking equals a full rescan."""
        rebuilt = State(two_group_state.rows)
        assert dict(rebuilt.groups) == dict(two_group_state.groups)

    def test_copy_does_not_touch_parent(self, two_group_state):
        """Test that the parent's groups are unchanged by a child update."""
        cell = two_group_state.get_cell(1, 1).copy_with(group_id=1, terrain=Terrain.DESERT)
        child = two_group_state.copy_with_cell(cell)
        assert len(child.groups[1]) == 3
        assert len(two_group_state.groups[1]) == 2
        assert two_group_state.get_cell(1, 1).group_id is None

    def test_groups_are_read_only(self, two_group_state):
        """Test that the group map cannot be mutated."""
        with pytest.raises(TypeError):
            two_group_state.groups[5] = Group()

    def test_from_board_keeps_cells(self, two_group_state):
        """Test that a state built from a board has the same cells and groups."""
        state = State.from_board(two_group_state)
        assert state.hash == two_group_state.hash
        assert set(state.groups) == {0, 1}

    def test_copy_with_cell_returns_state(self, two_group_state):
        """Test that updates keep the State type."""
        cell = two_group_state.get_cell(1, 2).copy_with(group_id=2, terrain=Terrain.MOUNTAIN)
        child = two_group_state.copy_with_cell(cell)
        assert isinstance(child, State)
        assert child.groups[2] == Group([Coord(1, 2)], Terrain.MOUNTAIN, 2)
