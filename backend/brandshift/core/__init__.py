"""Core utilities and configuration."""

from brandshift.core.config import Settings, get_settings
from brandshift.core.database import Base, db_manager, get_session, transaction
from brandshift.core.logging import (
    db_logger,
    generation_logger,
    get_logger,
    setup_logging,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Database
    "Base",
    "db_manager",
    "get_session",
    "transaction",
    # Logging
    "db_logger",
    "generation_logger",
    "get_logger",
    "setup_logging",
]
