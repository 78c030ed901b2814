# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""PAC annotations mapper.

Consumes PAC metadata publish events, keeps those published by a
whitelisted origin system, maps their ontology predicates to short concept
annotation predicates and republishes them as concept annotations.

Quick Start:
    >>> from pac_annotations_mapper import (
    ...     AnnotationMapperService,
    ...     FTMessage,
    ...     compile_whitelist,
    ... )
    >>> service = AnnotationMapperService(
    ...     compile_whitelist(r"http://cmdb\\.ft\\.com/systems/pac"),
    ...     producer,
    ... )
    >>> service.handle_message(FTMessage(headers=headers, body=body))
    <EnumHandleOutcome.DISPATCHED: 'dispatched'>
"""

from pac_annotations_mapper.errors import (
    AnnotationMapperError,
    DecodeError,
    DispatchError,
    EncodeError,
)
from pac_annotations_mapper.models import (
    EnumHandleOutcome,
    FTMessage,
    ModelAnnotation,
    ModelConceptAnnotationHeaders,
    ModelConceptAnnotations,
    ModelPacMetadataAnnotation,
    ModelPacMetadataPublishEvent,
    ModelThing,
)
from pac_annotations_mapper.predicates import PREDICATES, map_annotation
from pac_annotations_mapper.service import AnnotationMapperService
from pac_annotations_mapper.whitelist import compile_whitelist, is_whitelisted

__version__ = "0.1.0"

__all__ = [
    "PREDICATES",
    "AnnotationMapperError",
    "AnnotationMapperService",
    "DecodeError",
    "DispatchError",
    "EncodeError",
    "EnumHandleOutcome",
    "FTMessage",
    "ModelAnnotation",
    "ModelConceptAnnotationHeaders",
    "ModelConceptAnnotations",
    "ModelPacMetadataAnnotation",
    "ModelPacMetadataPublishEvent",
    "ModelThing",
    "__version__",
    "compile_whitelist",
    "is_whitelisted",
    "map_annotation",
]
