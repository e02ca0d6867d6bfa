"""Tests for cells, boards and their serialized form."""
import pytest
from tiwanaku.models.board import Board, BoardZoneSelector
from tiwanaku.models.cell import Cell, Crop, Terrain
from tiwanaku.models.coord import Coord
from tiwanaku.models.state import State


def _complete(board: Board) -> Board:
    """Fill every cell with a deterministic group, terrain and crop."""
    terrains = list(Terrain)
    for cell in list(board.cells()):
        x, y = cell.coordinates.x, cell.coordinates.y
        board = board.copy_with_cell(
            cell.copy_with(
                group_id=y * board.board_width + x,
                terrain=terrains[(x + y) % len(terrains)],
                crop=Crop.ONE,
            )
        )
    return board


@pytest.fixture
def empty_board():
    """Empty 4x3 board."""
    return Board.empty(4, 3)


@pytest.fixture
def sample_cell_data():
    """Sample serialized cell."""
    return {
        "field": "forest",
        "crop": 3,
        "coordinates": {"x": 1, "y": 0},
        "groupId": 2,
        "hiddenField": True,
        "hiddenCrop": False,
    }


class TestCell:
    """Test cases for Cell."""

    def test_empty_cell(self):
        """Test that a new cell is unset and hidden."""
        cell = Cell.empty(1, 2)
        assert cell.coordinates == Coord(1, 2)
        assert cell.group_id is None
        assert cell.terrain is None
        assert cell.crop is None
        assert cell.field_hidden and cell.crop_hidden
        assert not cell.is_complete

    def test_copy_with_only_changes_given_fields(self):
        """Test that omitted fields are kept."""
        cell = Cell.empty(0, 0).copy_with(group_id=3, terrain=Terrain.DESERT)
        updated = cell.copy_with(crop=Crop.TWO)
        assert updated.group_id == 3
        assert updated.terrain == Terrain.DESERT
        assert updated.crop == Crop.TWO
        assert updated.is_complete
        assert cell.crop is None

    def test_copy_with_can_unset(self):
        """Test that passing None explicitly unsets a field."""
        cell = Cell.empty(0, 0).copy_with(group_id=3, terrain=Terrain.DESERT)
        assert cell.copy_with(terrain=None).terrain is None
        assert cell.copy_with(terrain=None).group_id == 3

    def test_copy_with_cannot_move_cell(self):
        """Test that coordinates are fixed."""
        with pytest.raises(ValueError):
            Cell.empty(0, 0).copy_with(coordinates=Coord(1, 1))

    def test_serialize(self, sample_cell_data):
        """Test the wire format of a cell."""
        cell = Cell(
            group_id=2,
            coordinates=Coord(1, 0),
            terrain=Terrain.FOREST,
            crop=Crop.THREE,
            field_hidden=True,
            crop_hidden=False,
        )
        assert cell.serialize() == sample_cell_data
        assert Cell.deserialize(sample_cell_data) == cell

    def test_serialize_unset_cell(self):
        """Test that unset values serialize to None."""
        data = Cell.empty(0, 0).serialize()
        assert data["field"] is None
        assert data["crop"] is None
        assert data["groupId"] is None
        assert Cell.deserialize(data) == Cell.empty(0, 0)

    def test_deserialize_accepts_missing_optional_values(self):
        """Test that omitted optional keys mean unset."""
        cell = Cell.deserialize({"coordinates": {"x": 0, "y": 0}, "hiddenField": True, "hiddenCrop": True})
        assert cell == Cell.empty(0, 0)

    @pytest.mark.parametrize(
        "key,value",
        [
            ("field", "swamp"),
            ("crop", 0),
            ("crop", 6),
            ("crop", "3"),
            ("crop", True),
            ("groupId", "a"),
            ("hiddenField", "yes"),
            ("hiddenCrop", 1),
            ("coordinates", {"x": 1}),
        ],
    )
    def test_deserialize_rejects_malformed(self, sample_cell_data, key, value):
        """Test that malformed cells fail loudly."""
        sample_cell_data[key] = value
        with pytest.raises(ValueError):
            Cell.deserialize(sample_cell_data)

    @pytest.mark.parametrize("key", ["hiddenField", "hiddenCrop"])
    def test_deserialize_requires_hidden_flags(self, sample_cell_data, key):
        """Test that both reveal flags must be present."""
        del sample_cell_data[key]
        with pytest.raises(ValueError):
            Cell.deserialize(sample_cell_data)

    def test_deserialize_requires_coordinates(self, sample_cell_data):
        """Test that a cell without coordinates is rejected."""
        del sample_cell_data["coordinates"]
        with pytest.raises(ValueError):
            Cell.deserialize(sample_cell_data)


class TestBoard:
    """Test cases for Board."""

    def test_empty_board(self, empty_board):
        """Test the shape and content of an empty board."""
        assert empty_board.board_width == 4
        assert empty_board.board_height == 3
        for y in range(3):
            for x in range(4):
                cell = empty_board.get_cell(x, y)
                assert cell.coordinates == Coord(x, y)
                assert cell.group_id is None
                assert cell.field_hidden and cell.crop_hidden

    def test_empty_board_rejects_bad_size(self):
        """Test that degenerate boards are rejected."""
        with pytest.raises(ValueError):
            Board.empty(0, 3)

    def test_ragged_rows_rejected(self):
        """Test that every row must have the same width."""
        with pytest.raises(ValueError):
            Board([[Cell.empty(0, 0), Cell.empty(1, 0)], [Cell.empty(0, 1)]])

    def test_get_cell_out_of_bounds(self, empty_board):
        """Test that off-board lookups raise."""
        with pytest.raises(ValueError):
            empty_board.get_cell(4, 0)
        with pytest.raises(ValueError):
            empty_board.get_cell(0, -1)

    def test_board_coordinates(self, empty_board):
        """Test that all coordinates are listed once."""
        coords = empty_board.get_board_coordinates()
        assert len(coords) == 12
        assert Coord(3, 2) in coords

    def test_copy_with_cell_changes_one_cell(self, empty_board):
        """Test copy-on-write update."""
        cell = empty_board.get_cell(2, 1).copy_with(group_id=7)
        updated = empty_board.copy_with_cell(cell)

        assert updated.get_cell(2, 1).group_id == 7
        assert empty_board.get_cell(2, 1).group_id is None
        changed = [
            (a.coordinates.x, a.coordinates.y)
            for a, b in zip(updated.cells(), empty_board.cells())
            if a != b
        ]
        assert changed == [(2, 1)]

    def test_copy_with_cell_uses_value_equality(self, empty_board):
        """Test that a freshly built coordinate addresses the existing cell."""
        cell = Cell(group_id=1, coordinates=Coord(0, 2))
        assert empty_board.copy_with_cell(cell).get_cell(0, 2).group_id == 1

    def test_copy_with_cell_out_of_bounds(self, empty_board):
        """Test that a cell outside the board is rejected."""
        with pytest.raises(ValueError):
            empty_board.copy_with_cell(Cell.empty(9, 9))

    def test_serialization_round_trip(self, empty_board):
        """Test deserialize(serialize(board)) == board."""
        board = _complete(empty_board).reveal_field(1, 1)
        assert Board.deserialize(board.serialize()) == board
        assert Board.deserialize(empty_board.serialize()) == empty_board

    def test_serialized_round_trip(self, empty_board):
        """Test serialize(deserialize(data)) == data."""
        data = _complete(empty_board).serialize()
        assert Board.deserialize(data).serialize() == data

    def test_serialized_shape(self, empty_board):
        """Test that the wire format is row-major."""
        data = empty_board.serialize()
        assert len(data) == 3
        assert all(len(row) == 4 for row in data)
        assert data[2][1]["coordinates"] == {"x": 1, "y": 2}

    def test_deserialize_rejects_misplaced_cell(self, empty_board):
        """Test that cell coordinates must match their position."""
        data = empty_board.serialize()
        data[0][0]["coordinates"] = {"x": 2, "y": 2}
        with pytest.raises(ValueError):
            Board.deserialize(data)

    @pytest.mark.parametrize("data", [[], [[]], "board", [{"x": 0}]])
    def test_deserialize_rejects_malformed(self, data):
        """Test that malformed boards fail loudly."""
        with pytest.raises(ValueError):
            Board.deserialize(data)

    def test_deserialize_rejects_cell_without_hidden_flags(self):
        """Test that a board cell missing its reveal flags is rejected."""
        data = Board.empty(1, 1).serialize()
        del data[0][0]["hiddenField"]
        del data[0][0]["hiddenCrop"]
        with pytest.raises(ValueError):
            Board.deserialize(data)

    def test_hash_is_stable(self, empty_board):
        """Test that structurally identical boards hash equal."""
        a = _complete(empty_board)
        b = Board.deserialize(a.serialize())
        assert a is not b
        assert a.hash == b.hash

    def test_hash_changes_with_any_cell(self, empty_board):
        """Test that a single-cell difference changes the hash."""
        board = _complete(empty_board)
        hashes = {board.hash}
        hashes.add(board.reveal_field(0, 0).hash)
        hashes.add(board.reveal_crop(0, 0).hash)
        hashes.add(board.copy_with_cell(board.get_cell(3, 2).copy_with(crop=Crop.TWO)).hash)
        hashes.add(board.copy_with_cell(board.get_cell(3, 2).copy_with(group_id=99)).hash)
        hashes.add(board.copy_with_cell(board.get_cell(3, 2).copy_with(terrain=None)).hash)
        assert len(hashes) == 6


class TestCompleteBoard:
    """Test cases for playable boards and reveal operations."""

    def test_from_complete_state_reveals_hints(self, empty_board):
        """Test that hint cells are visible and the rest hidden."""
        state = State.from_board(_complete(empty_board))
        board = Board.from_complete_state(state, [Coord(0, 0), Coord(3, 2)])

        for cell in board.cells():
            is_hint = cell.coordinates in (Coord(0, 0), Coord(3, 2))
            assert cell.field_hidden is not is_hint
            assert cell.crop_hidden is not is_hint

    def test_from_complete_state_rejects_incomplete(self, empty_board):
        """Test that incomplete cells cannot be played."""
        with pytest.raises(ValueError):
            Board.from_complete_state(State.from_board(empty_board))

    def test_from_complete_state_rejects_off_board_hint(self, empty_board):
        """Test that hints must be on the board."""
        with pytest.raises(ValueError):
            Board.from_complete_state(_complete(empty_board), [Coord(10, 0)])

    def test_next_step_reveals_field_then_crop(self, empty_board):
        """Test the two-stage reveal of a cell."""
        board = Board.from_complete_state(_complete(empty_board))

        once = board.next_step(1, 2)
        assert not once.get_cell(1, 2).field_hidden
        assert once.get_cell(1, 2).crop_hidden

        twice = once.next_step(1, 2)
        assert not twice.get_cell(1, 2).field_hidden
        assert not twice.get_cell(1, 2).crop_hidden
        assert board.get_cell(1, 2).field_hidden

    def test_reveal_crop_leaves_field_hidden(self, empty_board):
        """Test that each flag is revealed independently."""
        board = Board.from_complete_state(_complete(empty_board)).reveal_crop(0, 0)
        assert board.get_cell(0, 0).field_hidden
        assert not board.get_cell(0, 0).crop_hidden


class TestBoardZoneSelector:
    """Test cases for BoardZoneSelector."""

    def test_zones_on_small_board(self):
        """Test the zones of a 5x5 board."""
        zones = BoardZoneSelector(Board.empty(5, 5))
        assert len(zones.border) == 16
        assert len(zones.inner_ring) == 8
        assert zones.core == [Coord(2, 2)]

    def test_zones_on_standard_board(self):
        """Test the zones of a 9x5 board."""
        zones = BoardZoneSelector(Board.empty(9, 5))
        assert len(zones.border) == 24
        assert len(zones.inner_ring) == 16
        assert zones.core == [Coord(x, 2) for x in range(2, 7)]

    def test_zones_partition_board(self):
        """Test that every cell is in exactly one zone."""
        board = Board.empty(9, 5)
        zones = BoardZoneSelector(board)
        all_coords = zones.border + zones.inner_ring + zones.core
        assert len(all_coords) == 45
        assert set(all_coords) == set(board.get_board_coordinates())
