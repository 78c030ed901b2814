# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""JSON decoding of publish events and encoding of concept annotations."""

from __future__ import annotations

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from pac_annotations_mapper.errors import DecodeError, EncodeError
from pac_annotations_mapper.models import (
    ModelConceptAnnotations,
    ModelPacMetadataPublishEvent,
)


def decode_publish_event(body: str | bytes) -> ModelPacMetadataPublishEvent:
    """Decode a metadata publish event from its JSON body.

    Args:
        body: Raw message body, UTF-8 text or bytes.

    Returns:
        The decoded event. An empty annotation list is valid.

    Raises:
        DecodeError: If the body is not UTF-8, not JSON, not a JSON object,
            or has fields of the wrong structural type.
    """
    try:
        return ModelPacMetadataPublishEvent.model_validate_json(body)
    except (ValidationError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Cannot unmarshal message body: {exc}") from exc


def encode_concept_annotations(annotations: ModelConceptAnnotations) -> str:
    """Serialize concept annotations to compact JSON.

    Raises:
        EncodeError: If serialization fails.
    """
    try:
        return annotations.model_dump_json()
    except PydanticSerializationError as exc:
        raise EncodeError(f"Error marshalling the concept annotations: {exc}") from exc


__all__ = [
    "decode_publish_event",
    "encode_concept_annotations",
]
