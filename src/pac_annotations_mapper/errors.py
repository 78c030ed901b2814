# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Exception classes for the annotations mapper.

Every failure that aborts the handling of a single message derives from
AnnotationMapperError so the consumer loop can treat them uniformly.

Whitelist skips and unmapped predicates are NOT errors: the first is a
normal outcome (EnumHandleOutcome.SKIPPED) and the second is logged and
dropped.
"""

from __future__ import annotations


class AnnotationMapperError(Exception):
    """Base exception for all annotations mapper failures.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DecodeError(AnnotationMapperError):
    """The inbound message body is not a structurally valid publish event."""


class EncodeError(AnnotationMapperError):
    """The outbound concept annotations could not be serialized."""


class DispatchError(AnnotationMapperError):
    """The outbound message could not be handed to the producer."""


__all__ = [
    "AnnotationMapperError",
    "DecodeError",
    "DispatchError",
    "EncodeError",
]
