# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Process-wide logging setup."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_log_level(level_name: str) -> int:
    """Map a level name to its logging constant, falling back to INFO."""
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        return logging.INFO
    return level


def configure_logging(level_name: str = "INFO") -> None:
    """Configure the root logger once for the whole process."""
    logging.basicConfig(level=resolve_log_level(level_name), format=LOG_FORMAT)


__all__ = [
    "LOG_FORMAT",
    "configure_logging",
    "resolve_log_level",
]
