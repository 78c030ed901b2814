# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Annotations mapper service.

Consumes one metadata publish event and produces at most one concept
annotations message.

Flow:
    1. Check Origin-System-Id against the whitelist; skip if no match.
    2. Decode the body into a ModelPacMetadataPublishEvent.
    3. Map each annotation through the predicate table, dropping (and
       logging) annotations with an unsupported predicate.
    4. Serialize the ModelConceptAnnotations envelope.
    5. Derive the outbound headers.
    6. Send the message through the injected producer.

Any failure in steps 2, 4 or 6 is logged and raised to the caller. The
service never retries and never emits a partial message.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from pac_annotations_mapper.codec import (
    decode_publish_event,
    encode_concept_annotations,
)
from pac_annotations_mapper.errors import DecodeError, DispatchError, EncodeError
from pac_annotations_mapper.headers import build_concept_annotations_headers
from pac_annotations_mapper.models import (
    HEADER_ORIGIN_SYSTEM_ID,
    HEADER_REQUEST_ID,
    EnumHandleOutcome,
    FTMessage,
    ModelConceptAnnotations,
)
from pac_annotations_mapper.predicates import PREDICATES, map_annotations
from pac_annotations_mapper.protocols import ProtocolMessageProducer
from pac_annotations_mapper.whitelist import is_whitelisted

logger = logging.getLogger(__name__)


class AnnotationMapperService:
    """Maps PAC metadata publish events to concept annotations.

    The whitelist and predicate table are read-only after construction, so a
    single instance can handle messages from several threads at once.

    Args:
        whitelist: Compiled pattern that Origin-System-Id must match.
        message_producer: Producer used to send the outbound message.
        predicates: Predicate table; defaults to PREDICATES.
        log: Logger receiving the diagnostics; defaults to the module logger.
    """

    def __init__(
        self,
        whitelist: re.Pattern[str],
        message_producer: ProtocolMessageProducer,
        *,
        predicates: Mapping[str, str] = PREDICATES,
        log: logging.Logger | None = None,
    ) -> None:
        self._whitelist = whitelist
        self._producer = message_producer
        self._predicates = predicates
        self._log = log or logger

    def handle_message(self, message: FTMessage) -> EnumHandleOutcome:
        """Handle one inbound publish event.

        Args:
            message: Inbound message with headers and JSON body.

        Returns:
            SKIPPED if the origin system is not whitelisted, DISPATCHED once
            the concept annotations message has been sent.

        Raises:
            DecodeError: The body is not a valid publish event.
            EncodeError: The concept annotations could not be serialized.
            DispatchError: The producer failed to send the message.
        """
        transaction_id = message.headers.get(HEADER_REQUEST_ID, "")
        context: dict[str, str] = {"transaction_id": transaction_id}

        system_code = message.headers.get(HEADER_ORIGIN_SYSTEM_ID, "")
        if not is_whitelisted(system_code, self._whitelist):
            self._log.info(
                "Skipping annotations published with Origin-System-Id %r. "
                "It does not match the configured whitelist. transaction_id=%s",
                system_code,
                transaction_id,
                extra=context,
            )
            return EnumHandleOutcome.SKIPPED

        try:
            event = decode_publish_event(message.body)
        except DecodeError as exc:
            self._log.error(
                "Cannot unmarshal message body. transaction_id=%s error=%s",
                transaction_id,
                exc,
                extra=context,
            )
            raise

        context["uuid"] = event.uuid
        self._log.info(
            "Processing metadata publish event. transaction_id=%s uuid=%s",
            transaction_id,
            event.uuid,
            extra=context,
        )

        result = map_annotations(event.annotations, self._predicates)
        for metadata in result.unmapped:
            self._log.warning(
                "metadata for an unsupported predicate was not mapped. "
                "transaction_id=%s uuid=%s metadata=%s",
                transaction_id,
                event.uuid,
                metadata.model_dump(by_alias=True),
                extra={**context, "metadata": metadata.model_dump(by_alias=True)},
            )

        concept_annotations = ModelConceptAnnotations(
            uuid=event.uuid, annotations=result.mapped
        )
        try:
            body = encode_concept_annotations(concept_annotations)
        except EncodeError as exc:
            self._log.error(
                "Error marshalling the concept annotations. "
                "transaction_id=%s uuid=%s error=%s",
                transaction_id,
                event.uuid,
                exc,
                extra=context,
            )
            raise

        headers = build_concept_annotations_headers(message.headers)
        outbound = FTMessage(headers=headers.to_headers(), body=body)

        try:
            self._producer.send_message(outbound)
        except Exception as exc:
            self._log.error(
                "Error sending concept annotation to queue. "
                "transaction_id=%s uuid=%s error=%s",
                transaction_id,
                event.uuid,
                exc,
                extra=context,
            )
            if isinstance(exc, DispatchError):
                raise
            raise DispatchError(
                f"Error sending concept annotation to queue: {exc}"
            ) from exc

        self._log.info(
            "Sent annotation message to queue. transaction_id=%s uuid=%s "
            "annotations=%d",
            transaction_id,
            event.uuid,
            len(result.mapped),
            extra=context,
        )
        return EnumHandleOutcome.DISPATCHED


__all__ = [
    "AnnotationMapperService",
]
