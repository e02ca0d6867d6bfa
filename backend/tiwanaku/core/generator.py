"""Board generator engine.

A board is built in phases, each one retried when it hits a dead end:

1. seeding: scatter single-cell groups (each with crop 1) at least two cells apart;
2. growth: grow every group orthogonally up to five cells without ever letting
   two different groups of the same terrain touch, until every cell belongs
   to a group;
3. planting: place crops 2..5, one per group large enough, so that no two
   equal crops touch. Planting backtracks through a ``StateStack``.

When backtracking unwinds past the grown board, the whole pipeline restarts
from a fresh seed.
"""
import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Union

from ..config import Settings
from ..models.board import Board, BoardZoneSelector, SerializedBoard
from ..models.cell import BoardSize, Crop, Terrain
from ..models.coord import CoordSet
from ..models.generation import GameConfig, GenerationResult
from ..models.state import State
from ..utils.random_utils import get_random_int, get_random_with_percentage, pick_random, shuffled_copy
from .exceptions import GenerationError
from .state_stack import StateStack

logger = logging.getLogger(__name__)

TERRAINS = tuple(Terrain)


class GrowthStrategy(str, Enum):
    """How groups take turns while growing."""
    DEPTH_FIRST = "depth_first"  # grow each group to completion, one after the other
    BREADTH_FIRST = "breadth_first"  # round-robin, one cell per group per round


@dataclass
class GroupGrowthResult:
    """Outcome of a single growth attempt for one group."""
    state: State
    border: CoordSet


class GameGenerator:
    """Generates complete boards for a given configuration."""

    MAX_GROUP_SIZE = 5
    HINT_MAX_TRIES = 100
    # Percentage chance of drawing a hint from each board zone
    HINT_ZONE_WEIGHTS = (("border", 76), ("inner_ring", 18), ("core", 6))

    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None):
        self.config = config
        self._rng = rng or random.Random()
        self._stack = StateStack(config.step_max_tries)

    @property
    def _height(self) -> int:
        return self.config.board_height

    @property
    def _width(self) -> int:
        return self.config.board_width

    def seed_ones(self) -> State:
        """
        Seed the board with single-cell groups, each holding crop 1.

        Seeds get sequential group ids and a random terrain, and no seed is
        placed next to another (diagonals included). Retries until the
        number of groups is within the configured bounds.

        Returns:
            The seeded state.
        """
        rounds = 0
        while True:
            rounds += 1
            state = State.empty(self._width, self._height)
            # the shuffled order provides the randomness of the whole process
            valid_coords = state.get_board_coordinates().copy_shuffled(self._rng)

            while len(valid_coords) > 0:
                coord = valid_coords.first()
                state = state.copy_with_cell(
                    state.get_cell(coord.x, coord.y).copy_with(
                        crop=Crop.ONE,
                        group_id=len(state.groups),
                        terrain=pick_random(TERRAINS, self._rng),
                    )
                )
                valid_coords = valid_coords.difference(
                    coord.get_neighbors(self._height, self._width) + [coord]
                )

            if self.config.min_groups <= len(state.groups) <= self.config.max_groups:
                logger.debug("Seeded %d groups after %d round(s)", len(state.groups), rounds)
                return state

    def generate_first_step(self, strategies: Optional[Iterable[GrowthStrategy]] = None) -> State:
        """
        Seed and grow a board until every cell belongs to a group.

        Args:
            strategies: Growth strategies to pick from (default: all).

        Returns:
            A fully partitioned state with crop 1 planted in every group.

        Raises:
            ValueError: If an empty list of strategies is given.
        """
        strategies = tuple(GrowthStrategy) if strategies is None else tuple(strategies)
        if not strategies:
            raise ValueError("No growth strategy was provided")

        while True:
            strategy = pick_random(strategies, self._rng)
            seeded_state = self.seed_ones()

            for _ in range(self.config.grow_groups_max_tries):
                result = self.grow(strategy, seeded_state)
                if all(cell.group_id is not None for cell in result.cells()):
                    return result

            logger.debug("Could not partition seeded board with %s growth, reseeding", strategy.value)

    def grow(self, strategy: GrowthStrategy, state: State) -> State:
        """
        Grow the groups of a seeded state with the given strategy.

        The returned state may still contain cells without a group.
        """
        if strategy == GrowthStrategy.DEPTH_FIRST:
            return self._depth_first_growth(state)
        if strategy == GrowthStrategy.BREADTH_FIRST:
            return self._breadth_first_growth(state)
        raise ValueError(f"Unknown growth strategy: {strategy!r}")

    def _depth_first_growth(self, state: State) -> State:
        for group_id in list(state.groups):
            border = state.groups[group_id].get_orthogonal_neighbors(self._height, self._width)
            while self._can_group_grow(state, group_id, border):
                result = self._grow_group_once(state, group_id, border)
                state, border = result.state, result.border
        return state

    def _breadth_first_growth(self, state: State) -> State:
        borders = {
            group_id: group.get_orthogonal_neighbors(self._height, self._width)
            for group_id, group in state.groups.items()
        }
        growable = list(state.groups)

        while growable:
            still_growable = []
            for group_id in growable:
                if not self._can_group_grow(state, group_id, borders[group_id]):
                    continue
                result = self._grow_group_once(state, group_id, borders[group_id])
                state = result.state
                borders[group_id] = result.border
                still_growable.append(group_id)
            growable = still_growable

        return state

    def _grow_group_once(self, state: State, group_id: int, border: CoordSet) -> GroupGrowthResult:
        """
        Try to add one random border cell to the group.

        Border cells that are already taken, or that touch another group of
        the same terrain, are dropped from the border. If no cell can be
        added, the state is returned unchanged along with the emptied border.
        """
        group = state.groups[group_id]

        while len(border) > 0:
            candidate = pick_random(border.to_list(), self._rng)
            candidate_cell = state.get_cell(candidate.x, candidate.y)

            if candidate_cell.group_id is None:
                touches_same_terrain = any(
                    state.get_cell(coord.x, coord.y).terrain == group.terrain
                    for coord in candidate.get_neighbors(self._height, self._width)
                    if not group.has(coord)
                )
                if not touches_same_terrain:
                    new_state = state.copy_with_cell(
                        candidate_cell.copy_with(group_id=group_id, terrain=group.terrain)
                    )
                    new_border = border.union(
                        candidate.get_orthogonal_neighbors(self._height, self._width)
                    ).difference(new_state.groups[group_id])
                    return GroupGrowthResult(state=new_state, border=new_border)

            border = border.without_coord(candidate)

        return GroupGrowthResult(state=state, border=border)

    def _can_group_grow(self, state: State, group_id: int, border: CoordSet) -> bool:
        return len(state.groups[group_id]) < self.MAX_GROUP_SIZE and len(border) > 0

    def plant_crop(self, crop: Crop, state: State, groups_to_plant: Iterable[int]) -> Optional[State]:
        """
        Plant a crop once in every given group.

        A crop cannot be planted next to (diagonals included) the same crop.

        Args:
            crop: The crop to plant.
            state: The state to plant into. Never modified.
            groups_to_plant: Ids of the groups to plant, in planting order.

        Returns:
            The new state, or None if any group has no suitable cell.
        """
        for group_id in groups_to_plant:
            candidates = shuffled_copy(
                [coord for coord in state.groups[group_id]
                 if state.get_cell(coord.x, coord.y).crop is None],
                self._rng,
            )
            planted = False
            while candidates:
                coord = candidates.pop()
                touches_same_crop = any(
                    state.get_cell(n.x, n.y).crop == crop
                    for n in coord.get_neighbors(self._height, self._width)
                )
                if not touches_same_crop:
                    state = state.copy_with_cell(state.get_cell(coord.x, coord.y).copy_with(crop=crop))
                    planted = True
                    break
            if not planted:
                return None
        return state

    def generate_board(self) -> State:
        """
        Generate a complete board.

        Returns:
            A state where every cell has a group, a terrain and a crop.

        Raises:
            GenerationError: If no board was found within ``max_attempts`` restarts.
        """
        for attempt in range(1, self.config.max_attempts + 1):
            self._stack = StateStack(self.config.step_max_tries)
            stack = self._stack
            stack.push_valid(self.generate_first_step())

            # smallest groups first: they are the hardest to plant, so they fail fast
            groups_to_plant = [
                (group.group_id, len(group))
                for group in sorted(stack.last_state.groups.values(), key=len)
            ]

            while not stack.empty:
                if stack.full:
                    logger.debug("Board generated after %d attempt(s)", attempt)
                    return stack.last_state

                crop = stack.next_crop
                candidate = self.plant_crop(
                    crop,
                    stack.last_state,
                    [group_id for group_id, size in groups_to_plant if size >= crop],
                )
                if candidate is None or stack.is_blacklisted(candidate):
                    stack.mark_invalid()
                else:
                    stack.push_valid(candidate)

            logger.debug("Crop planting exhausted on attempt %d, restarting", attempt)

        raise GenerationError(
            f"Could not generate a {self._width}x{self._height} board "
            f"in {self.config.max_attempts} attempts"
        )

    def generate_hints(self, board: Board) -> CoordSet:
        """
        Pick the cells revealed to the player at the start.

        Cells on the border are preferred, then the inner ring, then the
        core. The target count may not be reached within the try cap.
        """
        hints = CoordSet()
        target = get_random_int(self.config.min_hints, self.config.max_hints, self._rng)
        zones = BoardZoneSelector(board)
        weighted_zones = [(getattr(zones, name), weight) for name, weight in self.HINT_ZONE_WEIGHTS]

        tries = 0
        while len(hints) < target and tries < self.HINT_MAX_TRIES:
            zone = get_random_with_percentage(weighted_zones, self._rng)
            coord = pick_random(zone, self._rng)
            if coord is not None:
                hints = hints.with_coord(coord)
            tries += 1
        return hints


def generate_game_board(
    size: Union[BoardSize, str],
    rng: Optional[random.Random] = None,
    settings: Optional[Settings] = None,
) -> GenerationResult:
    """
    Generate a playable board with its hints revealed.

    Args:
        size: "small" or "standard".
        rng: Random source, for reproducible boards.
        settings: Optional Settings overriding the retry budgets.

    Returns:
        GenerationResult with the board, the hint coordinates and timing.
    """
    config = GameConfig.for_size(size, settings)
    generator = GameGenerator(config, rng)

    start_time = time.time()
    state = generator.generate_board()
    hints = generator.generate_hints(state)
    board = Board.from_complete_state(state, hints)
    generation_time_ms = int((time.time() - start_time) * 1000)

    logger.info(
        "Generated %s board: %d groups, %d hints in %dms",
        BoardSize(size).value, len(state.groups), len(hints), generation_time_ms,
    )
    return GenerationResult(
        size=BoardSize(size),
        board=board,
        hints=hints,
        generation_time_ms=generation_time_ms,
    )


def generate_board(
    size: Union[BoardSize, str],
    rng: Optional[random.Random] = None,
    settings: Optional[Settings] = None,
) -> SerializedBoard:
    """Generate a board of the given size in its serialized form."""
    return generate_game_board(size, rng, settings).board.serialize()
