"""Core business logic package.

This package contains the board generator, its backtracking stack,
the board validator and the process-based generation worker.
"""
from .exceptions import GenerationCancelled, GenerationError
from .generator import GameGenerator, GrowthStrategy, generate_board, generate_game_board
from .state_stack import StateStack, Step
from .validator import BoardValidator, ValidationReport, get_validator
from .worker import GenerationHandle, dispatch_generation

__all__ = [
    "GenerationError",
    "GenerationCancelled",
    "GameGenerator",
    "GrowthStrategy",
    "generate_board",
    "generate_game_board",
    "StateStack",
    "Step",
    "BoardValidator",
    "ValidationReport",
    "get_validator",
    "GenerationHandle",
    "dispatch_generation",
]
