# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Annotations mapper entry point.

    python -m pac_annotations_mapper [--log-level LEVEL] [--port PORT]

Environment Variables:
    KAFKA_ADDRESS: Kafka bootstrap servers (default: localhost:9092)
    CONSUMER_GROUP: Consumer group (default: pac-annotations-mapper)
    CONSUMER_TOPIC: Source topic (default: NativeCmsMetadataPublicationEvents)
    PRODUCER_TOPIC: Destination topic (default: ConceptAnnotations)
    WHITELIST: Origin-System-Id pattern (default: http://cmdb\\.ft\\.com/systems/pac)
    APP_PORT: Health-check HTTP port (default: 8080)
    LOG_LEVEL: Logging level (default: INFO)

The Kafka consumer runs on a background thread; the health-check server
runs on the main thread and handles SIGINT/SIGTERM. When the server stops,
the consumer is stopped and the producer flushed.
"""

from __future__ import annotations

import argparse
import logging
import threading
from collections.abc import Sequence

import uvicorn

from pac_annotations_mapper import __version__
from pac_annotations_mapper.health import create_health_app, default_checks
from pac_annotations_mapper.kafka import KafkaMessageConsumer, KafkaMessageProducer
from pac_annotations_mapper.logging_config import configure_logging
from pac_annotations_mapper.service import AnnotationMapperService
from pac_annotations_mapper.settings import AppSettings

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line overrides for the environment settings."""
    parser = argparse.ArgumentParser(
        prog="pac-annotations-mapper",
        description="Maps PAC metadata publish events to concept annotations.",
    )
    parser.add_argument("--log-level", help="Override LOG_LEVEL")
    parser.add_argument("--port", type=int, help="Override APP_PORT")
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> AppSettings:
    """Build settings from the environment, applying CLI overrides."""
    overrides: dict[str, object] = {}
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.port is not None:
        overrides["app_port"] = args.port
    return AppSettings(**overrides)


def main(argv: Sequence[str] | None = None) -> None:
    """Wire Kafka, the mapper and the health server, then run until stopped."""
    settings = load_settings(parse_args(argv))
    configure_logging(settings.log_level)

    producer = KafkaMessageProducer(settings.kafka_address, settings.producer_topic)
    service = AnnotationMapperService(settings.compiled_whitelist(), producer)
    consumer = KafkaMessageConsumer(
        settings.kafka_address,
        settings.consumer_topic,
        settings.consumer_group,
        service.handle_message,
    )

    stop_event = threading.Event()
    consumer_thread = threading.Thread(
        target=consumer.run,
        args=(stop_event,),
        name="kafka-consumer",
        daemon=True,
    )
    consumer_thread.start()
    logger.info(
        "%s started | consumer_topic=%s | producer_topic=%s | whitelist=%s",
        settings.app_system_code,
        settings.consumer_topic,
        settings.producer_topic,
        settings.whitelist,
    )

    app = create_health_app(
        settings, default_checks(producer, consumer), version=__version__
    )
    try:
        uvicorn.run(app, host="0.0.0.0", port=settings.app_port, log_config=None)
    finally:
        logger.info("Shutting down")
        stop_event.set()
        consumer_thread.join(timeout=30.0)
        producer.close()


if __name__ == "__main__":
    main()
