"""API routes package.

This package contains all API route handlers for the application.
"""
from . import board
from . import generate

__all__ = [
    "board",
    "generate",
]
