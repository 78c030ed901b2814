# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Origin system whitelist."""

from __future__ import annotations

import re


def compile_whitelist(pattern: str) -> re.Pattern[str]:
    """Compile the configured whitelist pattern.

    Raises:
        ValueError: If the pattern is not a valid regular expression.
    """
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ValueError(f"Invalid whitelist pattern {pattern!r}: {exc}") from exc


def is_whitelisted(system_code: str, whitelist: re.Pattern[str]) -> bool:
    """Whether the whitelist pattern matches anywhere within the system code."""
    return whitelist.search(system_code) is not None


__all__ = [
    "compile_whitelist",
    "is_whitelisted",
]
