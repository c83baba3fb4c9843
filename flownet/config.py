"""Runtime settings and logging setup."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from loguru import logger

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_BALANCE_TOLERANCE = 0.01


@dataclass(frozen=True)
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    balance_tolerance: float = DEFAULT_BALANCE_TOLERANCE

    @classmethod
    def from_env(cls) -> "Settings":
        log_level = os.getenv("FLOWNET_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        raw_tol = os.getenv("FLOWNET_BALANCE_TOLERANCE")
        if raw_tol is None:
            tolerance = DEFAULT_BALANCE_TOLERANCE
        else:
            try:
                tolerance = float(raw_tol)
            except ValueError as exc:
                raise ValueError(
                    f"FLOWNET_BALANCE_TOLERANCE must be a number, got {raw_tol!r}"
                ) from exc
            if tolerance < 0:
                raise ValueError(f"FLOWNET_BALANCE_TOLERANCE must be >= 0, got {tolerance}")
        return cls(log_level=log_level, balance_tolerance=tolerance)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Enable flownet logging with a single stderr sink at ``level``."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    logger.enable("flownet")
