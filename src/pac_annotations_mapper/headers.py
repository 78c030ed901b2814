# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Outbound header derivation.

Every concept annotations message gets a new header set with exactly six
keys: a fresh Message-Id, the fixed Message-Type, the inherited
Content-Type / X-Request-Id / Origin-System-Id, and a fresh UTC
Message-Timestamp in ``YYYY-MM-DDTHH:MM:SS.sssZ`` form.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from uuid import uuid4

from pac_annotations_mapper.models import (
    HEADER_CONTENT_TYPE,
    HEADER_ORIGIN_SYSTEM_ID,
    HEADER_REQUEST_ID,
    ModelConceptAnnotationHeaders,
)

MESSAGE_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.{millis:03d}Z"


def format_message_timestamp(moment: datetime) -> str:
    """Format a moment as a UTC timestamp with millisecond precision.

    Naive datetimes are taken to already be in UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    moment = moment.astimezone(UTC)
    return moment.strftime(MESSAGE_TIMESTAMP_FORMAT).format(
        millis=moment.microsecond // 1000
    )


def build_concept_annotations_headers(
    publish_event_headers: Mapping[str, str],
    *,
    now: datetime | None = None,
    message_id: str | None = None,
) -> ModelConceptAnnotationHeaders:
    """Derive the outbound headers from the inbound ones.

    Args:
        publish_event_headers: Headers of the inbound publish event.
        now: Timestamp override for deterministic tests.
        message_id: Message id override for deterministic tests.

    Returns:
        A new ModelConceptAnnotationHeaders.
    """
    return ModelConceptAnnotationHeaders(
        message_id=message_id if message_id is not None else str(uuid4()),
        content_type=publish_event_headers.get(HEADER_CONTENT_TYPE, ""),
        request_id=publish_event_headers.get(HEADER_REQUEST_ID, ""),
        origin_system_id=publish_event_headers.get(HEADER_ORIGIN_SYSTEM_ID, ""),
        message_timestamp=format_message_timestamp(now or datetime.now(UTC)),
    )


__all__ = [
    "MESSAGE_TIMESTAMP_FORMAT",
    "build_concept_annotations_headers",
    "format_message_timestamp",
]
