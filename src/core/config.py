"""Central configuration for runtime-tunable parameters.

All values can be overridden via environment variables (prefix ``SHIPWRECK_``)
so that deployments and the test-suite can tune storage and placement without
code changes.
"""

from __future__ import annotations

import logging
import os

from src.core.exceptions import ConfigError


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name, "1" if default else "0")
    if raw not in ("0", "1"):
        raise ConfigError(f"{name} must be 0 or 1, got {raw!r}")
    return raw == "1"


# ===========================================================================
# Storage
# ===========================================================================
# SHIPWRECK_DATABASE_URL: SQLAlchemy URL of the game store.
#   Example: export SHIPWRECK_DATABASE_URL=postgresql+psycopg://user:pw@host/db
DATABASE_URL: str = os.getenv("SHIPWRECK_DATABASE_URL", "sqlite:///shipwreck.db")

# SHIPWRECK_DB_ECHO: If "1", SQLAlchemy logs every statement.
DB_ECHO: bool = _bool_env("SHIPWRECK_DB_ECHO", False)

# SHIPWRECK_STORAGE_TIMEOUT_MS: how long a save/load may take before the caller
#   is told the outcome is uncertain.
STORAGE_TIMEOUT_MS: int = _int_env("SHIPWRECK_STORAGE_TIMEOUT_MS", 2000)


# ===========================================================================
# Board generation
# ===========================================================================
# SHIPWRECK_NO_TOUCHING: "1" keeps a one-cell gap around every ship (classic rules),
#   "0" only forbids overlapping ships.
NO_TOUCHING: bool = _bool_env("SHIPWRECK_NO_TOUCHING", True)

# SHIPWRECK_PLACEMENT_RETRIES: random attempts per ship before scanning for the first fit.
PLACEMENT_RETRIES: int = _int_env("SHIPWRECK_PLACEMENT_RETRIES", 200)

# SHIPWRECK_BOARD_ATTEMPTS: full restarts before the fixed fallback layout is used.
BOARD_ATTEMPTS: int = _int_env("SHIPWRECK_BOARD_ATTEMPTS", 50)


# ===========================================================================
# Logging
# ===========================================================================
LOG_LEVEL: str = os.getenv("SHIPWRECK_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install the root handler. Meant to be called once by whatever process hosts the service."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
