"""API dependencies."""
from ..config import Settings, get_settings
from ..core.validator import BoardValidator, get_validator


def get_app_settings() -> Settings:
    """Dependency for application settings."""
    return get_settings()


def get_board_validator() -> BoardValidator:
    """Dependency for board validator."""
    return get_validator()
