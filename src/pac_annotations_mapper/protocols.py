# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Protocol definitions for the collaborators the mapper depends on."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pac_annotations_mapper.models import FTMessage


@runtime_checkable
class ProtocolMessageProducer(Protocol):
    """Sends one message to the downstream topic.

    Implementations block until the message is delivered or has failed, and
    apply their own timeout policy.
    """

    def send_message(self, message: FTMessage) -> None:
        """Send a message.

        Raises:
            DispatchError: If the message could not be delivered.
        """
        ...


__all__ = [
    "ProtocolMessageProducer",
]
