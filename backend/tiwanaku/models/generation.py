"""Board generation parameters and results."""
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Union

from ..config import Settings
from .board import Board
from .cell import BoardSize
from .coord import CoordSet


@dataclass(frozen=True)
class GameConfig:
    """Configuration for one board generation run."""
    board_width: int
    board_height: int
    # Tries spent developing a single stack step before backtracking
    step_max_tries: int
    # Growth attempts per seeded board before reseeding
    grow_groups_max_tries: int
    min_groups: int
    max_groups: int
    min_hints: int = 0
    max_hints: int = 0
    # Whole-pipeline restarts before giving up
    max_attempts: int = 1000

    def __post_init__(self):
        """Validate value ranges."""
        if self.board_width < 1 or self.board_height < 1:
            raise ValueError(f"Invalid board size: {self.board_width}x{self.board_height}")
        for name in ("step_max_tries", "grow_groups_max_tries", "max_attempts"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1")
        for label, low, high in (
            ("groups", self.min_groups, self.max_groups),
            ("hints", self.min_hints, self.max_hints),
        ):
            if low < 0 or high < 0:
                raise ValueError(f"{label} range cannot be negative")
            if high < low:
                raise ValueError(f"{label} has min ({low}) greater than max ({high})")
        if self.min_groups < 1:
            raise ValueError("min_groups must be at least 1")
        if self.max_hints > self.board_width * self.board_height:
            raise ValueError("max_hints cannot exceed the number of cells")

    @classmethod
    def for_size(cls, size: Union[BoardSize, str], settings: Optional[Settings] = None) -> "GameConfig":
        """
        Get the preset configuration for a board size.

        Args:
            size: "small" or "standard".
            settings: Optional Settings overriding the retry budgets.

        Raises:
            ValueError: If the size is unknown.
        """
        try:
            board_size = BoardSize(size)
        except ValueError:
            raise ValueError(
                f"Unknown board size: {size!r}. Must be one of: {[s.value for s in BoardSize]}"
            ) from None
        config = BOARD_PRESETS[board_size]
        if settings is not None:
            config = replace(
                config,
                step_max_tries=settings.step_max_tries,
                grow_groups_max_tries=settings.grow_groups_max_tries,
                max_attempts=settings.max_generation_attempts,
            )
        return config


BOARD_PRESETS: Dict[BoardSize, GameConfig] = {
    BoardSize.SMALL: GameConfig(
        board_width=5,
        board_height=5,
        step_max_tries=25,
        grow_groups_max_tries=5,
        min_groups=6,
        max_groups=8,
        min_hints=3,
        max_hints=7,
    ),
    BoardSize.STANDARD: GameConfig(
        board_width=9,
        board_height=5,
        step_max_tries=25,
        grow_groups_max_tries=5,
        min_groups=10,
        max_groups=14,
        min_hints=5,
        max_hints=12,
    ),
}


@dataclass
class GenerationResult:
    """Result of board generation."""
    size: BoardSize
    board: Board
    hints: CoordSet
    generation_time_ms: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "size": self.size.value,
            "board": self.board.serialize(),
            "hints": [coord.serialize() for coord in self.hints],
            "generation_time_ms": self.generation_time_ms,
        }
