# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Kafka producer and consumer adapters.

KafkaMessageProducer implements ProtocolMessageProducer on top of a
confluent-kafka Producer: each send produces one record and waits for its
delivery report.

KafkaMessageConsumer polls the publication topic, converts every record to
an FTMessage, hands it to the message handler and commits the offset.
Handler failures are logged and the offset is committed anyway, so a single
malformed event cannot stall its partition.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from confluent_kafka import Consumer, KafkaError, KafkaException, Message, Producer

from pac_annotations_mapper.errors import DispatchError
from pac_annotations_mapper.models import FTMessage

logger = logging.getLogger(__name__)


# any-ok: Producer and Consumer both expose list_topics()
def _check_topic(client: Any, topic: str, timeout_s: float) -> None:
    """Raise RuntimeError unless the broker reports metadata for the topic."""
    try:
        metadata = client.list_topics(topic=topic, timeout=timeout_s)
    except KafkaException as exc:
        raise RuntimeError(f"Cannot reach Kafka: {exc}") from exc
    topic_metadata = metadata.topics.get(topic)
    if topic_metadata is None or topic_metadata.error is not None:
        raise RuntimeError(f"Kafka topic {topic!r} is not available")


def kafka_message_to_ft_message(msg: Message) -> FTMessage:
    """Convert a consumed Kafka record to an FTMessage.

    Header values are decoded as UTF-8; the last value wins for repeated
    keys. A null value becomes an empty body.
    """
    headers: dict[str, str] = {}
    for key, value in msg.headers() or []:
        if value is None:
            headers[key] = ""
        elif isinstance(value, bytes):
            headers[key] = value.decode("utf-8", errors="replace")
        else:
            headers[key] = str(value)

    raw_value = msg.value()
    if raw_value is None:
        body = ""
    elif isinstance(raw_value, bytes):
        body = raw_value.decode("utf-8", errors="replace")
    else:
        body = str(raw_value)
    return FTMessage(headers=headers, body=body)


# =============================================================================
# Producer
# =============================================================================


class KafkaMessageProducer:
    """Sends FTMessages to a single Kafka topic.

    Args:
        bootstrap_servers: Kafka bootstrap servers (comma-separated).
        topic: Destination topic.
        producer: Pre-built producer, mainly for tests.
        flush_timeout_s: How long send_message waits for delivery.
        client_id: Kafka client id.
    """

    def __init__(
        self,
        bootstrap_servers: str,
        topic: str,
        *,
        producer: Producer | None = None,
        flush_timeout_s: float = 10.0,
        client_id: str = "pac-annotations-mapper",
    ) -> None:
        self.topic = topic
        self._flush_timeout_s = flush_timeout_s
        if producer is None:
            producer = Producer(
                {
                    "bootstrap.servers": bootstrap_servers,
                    "client.id": client_id,
                    "acks": "all",
                    "enable.idempotence": True,
                }
            )
        self._producer = producer
        logger.info(
            "Kafka producer initialized | bootstrap_servers=%s | topic=%s",
            bootstrap_servers,
            topic,
        )

    def send_message(self, message: FTMessage) -> None:
        """Produce the message and block until it is delivered.

        Raises:
            DispatchError: On a produce error, a failed delivery report, or
                if the message is still queued after the flush timeout.
        """
        delivery_errors: list[KafkaError] = []

        # any-ok: confluent-kafka callback signature
        def delivery_callback(err: Any, _msg: Any) -> None:
            if err is not None:
                delivery_errors.append(err)

        try:
            self._producer.produce(
                topic=self.topic,
                value=message.body.encode("utf-8"),
                headers=[
                    (key, value.encode("utf-8"))
                    for key, value in message.headers.items()
                ],
                callback=delivery_callback,
            )
            remaining = self._producer.flush(timeout=self._flush_timeout_s)
        except (KafkaException, BufferError) as exc:
            raise DispatchError(
                f"Failed to produce message to {self.topic}: {exc}"
            ) from exc

        if delivery_errors:
            raise DispatchError(
                f"Delivery to {self.topic} failed: {delivery_errors[0]}"
            )
        if remaining > 0:
            raise DispatchError(
                f"{remaining} message(s) not delivered to {self.topic} "
                f"within {self._flush_timeout_s}s"
            )

    def check_connectivity(self, timeout_s: float = 5.0) -> None:
        """Raise RuntimeError if the destination topic cannot be reached."""
        _check_topic(self._producer, self.topic, timeout_s)

    def close(self) -> None:
        """Flush pending messages. Does not raise."""
        try:
            remaining = self._producer.flush(timeout=self._flush_timeout_s)
        except KafkaException as exc:
            logger.error("Error flushing producer: %s", exc)
            return
        if remaining > 0:
            logger.warning("%d messages failed to flush before shutdown", remaining)
        else:
            logger.info("All messages flushed successfully")


# =============================================================================
# Consumer
# =============================================================================


class KafkaMessageConsumer:
    """Feeds messages from a Kafka topic to a handler, one at a time.

    Args:
        bootstrap_servers: Kafka bootstrap servers (comma-separated).
        topic: Topic to subscribe to.
        group_id: Consumer group.
        handler: Called with each FTMessage; exceptions are logged.
        consumer: Pre-built consumer, mainly for tests.
        poll_timeout_s: Poll timeout, also the stop-check interval.
        auto_offset_reset: Where a new consumer group starts reading.
    """

    def __init__(
        self,
        bootstrap_servers: str,
        topic: str,
        group_id: str,
        handler: Callable[[FTMessage], object],
        *,
        consumer: Consumer | None = None,
        poll_timeout_s: float = 1.0,
        auto_offset_reset: str = "latest",
    ) -> None:
        self.topic = topic
        self._handler = handler
        self._poll_timeout_s = poll_timeout_s
        if consumer is None:
            consumer = Consumer(
                {
                    "bootstrap.servers": bootstrap_servers,
                    "group.id": group_id,
                    "enable.auto.commit": False,
                    "auto.offset.reset": auto_offset_reset,
                }
            )
        self._consumer = consumer
        logger.info(
            "Kafka consumer initialized | bootstrap_servers=%s | topic=%s | group_id=%s",
            bootstrap_servers,
            topic,
            group_id,
        )

    def run(self, stop_event: threading.Event) -> None:
        """Consume until stop_event is set, then close the consumer."""
        self._consumer.subscribe([self.topic])
        logger.info("Subscribed to %s", self.topic)
        try:
            while not stop_event.is_set():
                msg = self._consumer.poll(self._poll_timeout_s)
                if msg is None:
                    continue
                self.process(msg)
        finally:
            self.close()

    def process(self, msg: Message) -> None:
        """Handle a single polled record and commit its offset."""
        error = msg.error()
        if error is not None:
            if error.code() == KafkaError._PARTITION_EOF:
                return
            logger.error("Kafka consumer error: %s", error)
            return

        try:
            self._handler(kafka_message_to_ft_message(msg))
        except Exception:
            # fallback-ok: the handler already logged the failure; keep consuming
            logger.exception(
                "Failed to handle message. topic=%s partition=%s offset=%s",
                msg.topic(),
                msg.partition(),
                msg.offset(),
            )

        try:
            self._consumer.commit(message=msg, asynchronous=False)
        except KafkaException as exc:
            logger.error(
                "Failed to commit offset. topic=%s partition=%s offset=%s error=%s",
                msg.topic(),
                msg.partition(),
                msg.offset(),
                exc,
            )

    def check_connectivity(self, timeout_s: float = 5.0) -> None:
        """Raise RuntimeError if the source topic cannot be reached."""
        _check_topic(self._consumer, self.topic, timeout_s)

    def close(self) -> None:
        """Close the consumer, leaving the group. Does not raise."""
        try:
            self._consumer.close()
        except (KafkaException, RuntimeError) as exc:
            logger.error("Error closing consumer: %s", exc)
        else:
            logger.info("Kafka consumer closed")


__all__ = [
    "KafkaMessageConsumer",
    "KafkaMessageProducer",
    "kafka_message_to_ft_message",
]
