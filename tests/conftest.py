# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
Pytest configuration and fixtures for pac_annotations_mapper tests.

Shared fixtures: inbound headers, publish event bodies, a recording
producer double and a compiled whitelist.
"""

from __future__ import annotations

import json
import re

import pytest

from pac_annotations_mapper.models import FTMessage
from pac_annotations_mapper.whitelist import compile_whitelist

ABOUT = "http://www.ft.com/ontology/annotation/about"
MENTIONS = "http://www.ft.com/ontology/annotation/mentions"
UNKNOWN = "http://unknown/x"

PAC_SYSTEM_CODE = "http://cmdb.ft.com/systems/pac"


class RecordingProducer:
    """Producer double that records sent messages, or raises ``error``."""

    def __init__(self, error: Exception | None = None) -> None:
        self.sent: list[FTMessage] = []
        self.error = error

    def send_message(self, message: FTMessage) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(message)


def make_body(uuid: str = "u1", annotations: list[dict] | None = None) -> str:
    """Build a JSON publish event body."""
    if annotations is None:
        annotations = [{"conceptId": "c1", "predicate": ABOUT}]
    return json.dumps({"uuid": uuid, "annotations": annotations})


# =========================================================================
# Fixtures
# =========================================================================


@pytest.fixture
def transaction_id() -> str:
    """Provide a request id for the X-Request-Id header."""
    return "tid_test_1234"


@pytest.fixture
def inbound_headers(transaction_id: str) -> dict[str, str]:
    """Headers of a whitelisted publish event, plus one that must not leak."""
    return {
        "X-Request-Id": transaction_id,
        "Origin-System-Id": PAC_SYSTEM_CODE,
        "Content-Type": "application/json",
        "Message-Id": "inbound-message-id",
        "X-Trace-Id": "trace-should-not-leak",
    }


@pytest.fixture
def whitelist() -> re.Pattern[str]:
    """Whitelist matching the PAC origin system."""
    return compile_whitelist(r"http://cmdb\.ft\.com/systems/pac")


@pytest.fixture
def producer() -> RecordingProducer:
    """Producer that records every message."""
    return RecordingProducer()
