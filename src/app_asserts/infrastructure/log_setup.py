"""Logging bootstrap for test sessions that want to see check traces."""

from __future__ import annotations

import logging

from app_asserts.infrastructure.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level and format to the root logger."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
