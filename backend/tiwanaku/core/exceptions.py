"""Errors surfaced by board generation."""


class GenerationError(RuntimeError):
    """A board could not be produced (attempt cap exhausted or worker failure)."""


class GenerationCancelled(GenerationError):
    """The generation was cancelled by its caller before producing a board."""
