"""
VO Foundry views service configuration — all environment variables in one place.

Read from environment at runtime.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # Storage for user-authored views
    VIEWS_FILE: str = os.environ.get("VOF_VIEWS_FILE", "data/views.json")

    # Tree building
    MAX_TREE_ROWS: int = int(os.environ.get("MAX_TREE_ROWS", "50000"))  # takes + media + bins per request

    # Logging
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"


# Singleton instance
settings = Settings()

if settings.MAX_TREE_ROWS <= 0:
    raise RuntimeError("MAX_TREE_ROWS must be a positive integer")
