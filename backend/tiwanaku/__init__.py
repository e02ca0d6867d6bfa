"""Tiwanaku board generator."""
from .core.generator import generate_board

__version__ = "1.0.0"

__all__ = ["generate_board", "__version__"]
