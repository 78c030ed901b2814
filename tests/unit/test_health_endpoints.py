# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for the health-check HTTP endpoints."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from pac_annotations_mapper.health import (
    HealthCheck,
    create_health_app,
    default_checks,
)
from pac_annotations_mapper.settings import AppSettings


def _passing() -> None:
    return None


def _failing() -> None:
    raise RuntimeError("Kafka topic 'ConceptAnnotations' is not available")


def _check(check_id: str, checker) -> HealthCheck:
    return HealthCheck(
        id=check_id,
        name=f"{check_id} name",
        business_impact="impact",
        technical_summary="summary",
        panic_guide="guide",
        severity=1,
        checker=checker,
    )


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(app_system_code="pac-annotations-mapper", app_name="Mapper")


@pytest.mark.unit
class TestHealthEndpoints:
    """/__health, /__gtg and /__build-info."""

    def test_health_all_ok(self, settings: AppSettings) -> None:
        client = TestClient(
            create_health_app(settings, [_check("a", _passing), _check("b", _passing)])
        )

        response = client.get("/__health")

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["schemaVersion"] == 1
        assert body["systemCode"] == "pac-annotations-mapper"
        assert body["name"] == "Mapper"
        assert [c["id"] for c in body["checks"]] == ["a", "b"]
        assert body["checks"][0]["checkOutput"] == "OK"
        assert body["checks"][0]["businessImpact"] == "impact"

    def test_health_reports_failure(self, settings: AppSettings) -> None:
        client = TestClient(
            create_health_app(settings, [_check("a", _passing), _check("b", _failing)])
        )

        body = client.get("/__health").json()

        assert body["ok"] is False
        assert body["checks"][1]["ok"] is False
        assert "not available" in body["checks"][1]["checkOutput"]

    def test_gtg_ok(self, settings: AppSettings) -> None:
        client = TestClient(create_health_app(settings, [_check("a", _passing)]))

        response = client.get("/__gtg")

        assert response.status_code == 200
        assert response.text == "OK"

    def test_gtg_unavailable(self, settings: AppSettings) -> None:
        client = TestClient(
            create_health_app(settings, [_check("a", _passing), _check("b", _failing)])
        )

        response = client.get("/__gtg")

        assert response.status_code == 503
        assert "not available" in response.text

    def test_build_info(self, settings: AppSettings) -> None:
        client = TestClient(create_health_app(settings, [], version="1.2.3"))

        assert client.get("/__build-info").json() == {
            "name": "pac-annotations-mapper",
            "version": "1.2.3",
        }


@pytest.mark.unit
def test_default_checks_use_kafka_connectivity() -> None:
    producer = MagicMock()
    producer.topic = "ConceptAnnotations"
    consumer = MagicMock()
    consumer.topic = "NativeCmsMetadataPublicationEvents"

    checks = default_checks(producer, consumer)
    for check in checks:
        check.checker()

    assert [c.name for c in checks] == ["Can publish to Kafka", "Can consume from Kafka"]
    producer.check_connectivity.assert_called_once_with()
    consumer.check_connectivity.assert_called_once_with()
