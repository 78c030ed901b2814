# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Data models for the annotations mapper.

Inbound side:
    ModelPacMetadataPublishEvent / ModelPacMetadataAnnotation describe the
    metadata publish event consumed from the publication topic. Decoding is
    deliberately lenient: key names match case-insensitively, missing or null
    fields (and null annotation entries) fall back to empty values, unknown
    fields are ignored.

Outbound side:
    ModelConceptAnnotations / ModelAnnotation / ModelThing describe the
    simplified annotation envelope written to the concept annotations topic.
    ModelConceptAnnotationHeaders is the closed set of six headers attached
    to every outbound message.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ---------------------------------------------------------------------------
# Header names
# ---------------------------------------------------------------------------

HEADER_MESSAGE_ID = "Message-Id"
HEADER_MESSAGE_TYPE = "Message-Type"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_REQUEST_ID = "X-Request-Id"
HEADER_ORIGIN_SYSTEM_ID = "Origin-System-Id"
HEADER_MESSAGE_TIMESTAMP = "Message-Timestamp"

CONCEPT_ANNOTATION_MESSAGE_TYPE = "concept-annotation"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class EnumHandleOutcome(str, Enum):
    """Successful terminal states of a single message handling.

    Values:
        SKIPPED: Origin system did not match the whitelist; nothing emitted.
        DISPATCHED: Exactly one concept annotations message was sent.
    """

    SKIPPED = "skipped"
    DISPATCHED = "dispatched"


# ---------------------------------------------------------------------------
# Transport message
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FTMessage:
    """A queue message: string headers plus a UTF-8 text body."""

    headers: Mapping[str, str] = field(default_factory=dict)
    body: str = ""


# ---------------------------------------------------------------------------
# Inbound publish event
# ---------------------------------------------------------------------------


def _fold_keys(data: Any, names: tuple[str, ...]) -> Any:  # any-ok: raw JSON value
    """Rename keys that match one of ``names`` ignoring case.

    Keys matching none of the names are dropped. When several keys fold to
    the same name, the last one wins.
    """
    if not isinstance(data, dict):
        return data
    canonical = {name.lower(): name for name in names}
    folded: dict[str, Any] = {}
    for key, value in data.items():
        name = canonical.get(key.lower()) if isinstance(key, str) else None
        if name is not None:
            folded[name] = value
    return folded


class ModelPacMetadataAnnotation(BaseModel):
    """A single raw annotation as published by the metadata source."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    concept_id: str = Field(default="", alias="conceptId")
    predicate: str = Field(default="")

    @model_validator(mode="before")
    @classmethod
    def _fold_wire_names(cls, data: Any) -> Any:  # any-ok: raw JSON value
        return _fold_keys(data, ("conceptId", "predicate"))

    @field_validator("concept_id", "predicate", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:  # any-ok: raw JSON value
        return "" if value is None else value


class ModelPacMetadataPublishEvent(BaseModel):
    """Metadata publish event for one content item."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    uuid: str = Field(default="")
    annotations: list[ModelPacMetadataAnnotation] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _fold_wire_names(cls, data: Any) -> Any:  # any-ok: raw JSON value
        return _fold_keys(data, ("uuid", "annotations"))

    @field_validator("uuid", mode="before")
    @classmethod
    def _null_uuid_as_empty(cls, value: Any) -> Any:  # any-ok: raw JSON value
        return "" if value is None else value

    @field_validator("annotations", mode="before")
    @classmethod
    def _null_annotations_as_empty(cls, value: Any) -> Any:  # any-ok: raw JSON value
        if value is None:
            return []
        if isinstance(value, list):
            # null entries decode as empty annotations
            return [{} if item is None else item for item in value]
        return value


# ---------------------------------------------------------------------------
# Outbound concept annotations
# ---------------------------------------------------------------------------


class ModelThing(BaseModel):
    """The concept an annotation points at, with its short predicate."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    predicate: str


class ModelAnnotation(BaseModel):
    """One mapped annotation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    thing: ModelThing


class ModelConceptAnnotations(BaseModel):
    """Outbound envelope: a content UUID and its mapped annotations."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    uuid: str
    annotations: tuple[ModelAnnotation, ...] = ()


class ModelConceptAnnotationHeaders(BaseModel):
    """The six headers attached to every outbound message.

    Built fresh for each message. Inbound headers outside of the three
    copied ones never reach this model.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    message_id: str = Field(..., alias=HEADER_MESSAGE_ID)
    message_type: Literal["concept-annotation"] = Field(
        default=CONCEPT_ANNOTATION_MESSAGE_TYPE, alias=HEADER_MESSAGE_TYPE
    )
    content_type: str = Field(default="", alias=HEADER_CONTENT_TYPE)
    request_id: str = Field(default="", alias=HEADER_REQUEST_ID)
    origin_system_id: str = Field(default="", alias=HEADER_ORIGIN_SYSTEM_ID)
    message_timestamp: str = Field(..., alias=HEADER_MESSAGE_TIMESTAMP)

    def to_headers(self) -> dict[str, str]:
        """Render as a new header-name to value mapping."""
        return self.model_dump(by_alias=True)


__all__ = [
    "CONCEPT_ANNOTATION_MESSAGE_TYPE",
    "EnumHandleOutcome",
    "FTMessage",
    "HEADER_CONTENT_TYPE",
    "HEADER_MESSAGE_ID",
    "HEADER_MESSAGE_TIMESTAMP",
    "HEADER_MESSAGE_TYPE",
    "HEADER_ORIGIN_SYSTEM_ID",
    "HEADER_REQUEST_ID",
    "ModelAnnotation",
    "ModelConceptAnnotationHeaders",
    "ModelConceptAnnotations",
    "ModelPacMetadataAnnotation",
    "ModelPacMetadataPublishEvent",
    "ModelThing",
]
