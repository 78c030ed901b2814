# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Service settings loaded from environment variables."""

from __future__ import annotations

import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pac_annotations_mapper.whitelist import compile_whitelist


class AppSettings(BaseSettings):
    """Annotations mapper settings.

    Every field is read from the upper-cased environment variable of the
    same name (e.g. ``KAFKA_ADDRESS``).
    """

    model_config = SettingsConfigDict(frozen=True, extra="ignore")

    app_system_code: str = Field(
        default="pac-annotations-mapper",
        description="System code of this application",
    )
    app_name: str = Field(
        default="PAC Annotations Mapper",
        description="Human-readable application name",
    )
    app_port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the health-check HTTP server",
    )
    kafka_address: str = Field(
        default="localhost:9092",
        description="Kafka bootstrap servers (comma-separated)",
    )
    consumer_group: str = Field(
        default="pac-annotations-mapper",
        description="Kafka consumer group",
    )
    consumer_topic: str = Field(
        default="NativeCmsMetadataPublicationEvents",
        description="Topic carrying metadata publish events",
    )
    producer_topic: str = Field(
        default="ConceptAnnotations",
        description="Topic receiving concept annotations",
    )
    whitelist: str = Field(
        default=r"http://cmdb\.ft\.com/systems/pac",
        description="Regular expression the Origin-System-Id header must match",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level name; unknown names fall back to INFO",
    )

    @field_validator("whitelist")
    @classmethod
    def _validate_whitelist(cls, value: str) -> str:
        compile_whitelist(value)
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    def compiled_whitelist(self) -> re.Pattern[str]:
        """Return the compiled whitelist pattern."""
        return compile_whitelist(self.whitelist)


__all__ = [
    "AppSettings",
]
