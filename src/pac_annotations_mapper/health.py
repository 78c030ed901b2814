# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Health-check HTTP endpoints.

Provides create_health_app() to build a FastAPI application exposing:

    GET /__health       Detailed JSON report of every check.
    GET /__gtg          "Good to go": 200 OK, or 503 with the first failure.
    GET /__build-info   Application name and version.

Checks are plain callables that raise on failure. They run on every request;
nothing is cached.

Usage:
    >>> app = create_health_app(settings, default_checks(producer, consumer))
    >>> # uvicorn.run(app, host="0.0.0.0", port=settings.app_port)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field

from pac_annotations_mapper.kafka import KafkaMessageConsumer, KafkaMessageProducer
from pac_annotations_mapper.settings import AppSettings

logger = logging.getLogger(__name__)

HEALTH_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class HealthCheck:
    """A named health check.

    Attributes:
        id: Stable identifier of the check.
        name: Short description of what is checked.
        business_impact: What breaks for the business when this fails.
        technical_summary: What the check does.
        panic_guide: Where to look when it fails.
        severity: 1 (highest) to 3.
        checker: Callable raising an exception when the check fails.
    """

    id: str
    name: str
    business_impact: str
    technical_summary: str
    panic_guide: str
    severity: int
    checker: Callable[[], None]


class ModelCheckResult(BaseModel):
    """Outcome of a single health check."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    ok: bool
    severity: int
    business_impact: str = Field(alias="businessImpact")
    technical_summary: str = Field(alias="technicalSummary")
    panic_guide: str = Field(alias="panicGuide")
    check_output: str = Field(alias="checkOutput")
    last_updated: str = Field(alias="lastUpdated")


class ModelHealthReport(BaseModel):
    """Full /__health response body."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: int = Field(default=HEALTH_SCHEMA_VERSION, alias="schemaVersion")
    system_code: str = Field(alias="systemCode")
    name: str
    description: str
    ok: bool
    checks: list[ModelCheckResult]


def run_check(check: HealthCheck) -> ModelCheckResult:
    """Run one check, turning any exception into a failed result."""
    try:
        check.checker()
        ok, output = True, "OK"
    except Exception as exc:
        # fallback-ok: a failing check is reported, not raised
        logger.warning("Health check failed. check=%s error=%s", check.id, exc)
        ok, output = False, str(exc)
    return ModelCheckResult(
        id=check.id,
        name=check.name,
        ok=ok,
        severity=check.severity,
        business_impact=check.business_impact,
        technical_summary=check.technical_summary,
        panic_guide=check.panic_guide,
        check_output=output,
        last_updated=datetime.now(UTC).isoformat(),
    )


def default_checks(
    producer: KafkaMessageProducer,
    consumer: KafkaMessageConsumer,
    panic_guide: str = "Check the Kafka brokers are reachable and the topics exist",
) -> list[HealthCheck]:
    """Kafka connectivity checks for both sides of the mapper."""
    return [
        HealthCheck(
            id="check-kafka-producer-connectivity",
            name="Can publish to Kafka",
            business_impact="Concept annotations cannot be published downstream",
            technical_summary=(
                f"Checks that the producer can reach the {producer.topic} topic"
            ),
            panic_guide=panic_guide,
            severity=1,
            checker=producer.check_connectivity,
        ),
        HealthCheck(
            id="check-kafka-consumer-connectivity",
            name="Can consume from Kafka",
            business_impact="Metadata publish events are not being processed",
            technical_summary=(
                f"Checks that the consumer can reach the {consumer.topic} topic"
            ),
            panic_guide=panic_guide,
            severity=1,
            checker=consumer.check_connectivity,
        ),
    ]


def create_health_app(
    settings: AppSettings,
    checks: Sequence[HealthCheck],
    *,
    version: str = "unknown",
) -> FastAPI:
    """Build the health-check FastAPI application.

    Args:
        settings: Application settings (system code and name).
        checks: Checks to run on /__health and /__gtg.
        version: Reported by /__build-info.

    Returns:
        Configured FastAPI instance.
    """
    app = FastAPI(title=settings.app_name, version=version)
    description = (
        "Maps PAC metadata publish events to concept annotations "
        f"and publishes them to {settings.producer_topic}"
    )

    @app.get("/__health", response_model=None)
    def health() -> dict[str, object]:
        results = [run_check(check) for check in checks]
        report = ModelHealthReport(
            system_code=settings.app_system_code,
            name=settings.app_name,
            description=description,
            ok=all(result.ok for result in results),
            checks=results,
        )
        return report.model_dump(by_alias=True)

    @app.get("/__gtg", response_class=PlainTextResponse)
    def good_to_go() -> PlainTextResponse:
        for check in checks:
            result = run_check(check)
            if not result.ok:
                return PlainTextResponse(result.check_output, status_code=503)
        return PlainTextResponse("OK")

    @app.get("/__build-info")
    def build_info() -> dict[str, str]:
        return {"name": settings.app_system_code, "version": version}

    return app


__all__ = [
    "HealthCheck",
    "ModelCheckResult",
    "ModelHealthReport",
    "create_health_app",
    "default_checks",
    "run_check",
]
