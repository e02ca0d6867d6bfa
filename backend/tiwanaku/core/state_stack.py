"""Backtracking stack of generation states."""
from dataclasses import dataclass, field
from typing import List, Optional, Set

from ..models.cell import MAX_CROP, Crop
from ..models.state import State


@dataclass
class Step:
    """A state on the stack, its failed tries and the hashes of its dead children."""
    state: State
    tries: int = 0
    blacklist: Set[str] = field(default_factory=set)


class StateStack:
    """
    Chronological backtracking over crop placement.

    The bottom step holds the seeded and grown board (which already carries
    every crop 1). Each following step adds one more crop number, so the
    stack is full once it holds one step per crop.
    """

    def __init__(self, step_max_tries: int):
        if step_max_tries < 1:
            raise ValueError("step_max_tries must be at least 1")
        self._steps: List[Step] = []
        self._step_max_tries = step_max_tries

    def __len__(self) -> int:
        return len(self._steps)

    @property
    def empty(self) -> bool:
        """True once backtracking unwound past the root: this attempt failed."""
        return not self._steps

    @property
    def full(self) -> bool:
        """True once every crop has been placed: the last state is complete."""
        return len(self._steps) == MAX_CROP

    @property
    def last_state(self) -> Optional[State]:
        return self._steps[-1].state if self._steps else None

    @property
    def last_blacklist(self) -> Set[str]:
        return set(self._steps[-1].blacklist) if self._steps else set()

    @property
    def next_crop(self) -> Crop:
        return Crop(len(self._steps) + 1)

    def is_blacklisted(self, state: State) -> bool:
        """Check whether the state is a known dead child of the last step."""
        if not self._steps or not self._steps[-1].blacklist:
            return False
        return state.hash in self._steps[-1].blacklist

    def push_valid(self, state: State) -> None:
        if self.full:
            raise ValueError("Cannot push onto a full state stack")
        self._steps.append(Step(state=state))

    def mark_invalid(self) -> None:
        """
        Record a failed attempt to develop the last step.

        When the step runs out of tries it is popped, its hash is added to
        the parent's blacklist and the failure propagates to the parent.
        """
        while self._steps:
            step = self._steps[-1]
            step.tries += 1
            if step.tries < self._step_max_tries:
                return
            dead = self._steps.pop()
            if self._steps:
                self._steps[-1].blacklist.add(dead.state.hash)
