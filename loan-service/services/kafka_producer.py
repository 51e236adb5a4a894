import json
import logging
from typing import Optional
from confluent_kafka import Producer

from config import KafkaConfig

logger = logging.getLogger(__name__)

# created on first publish and reused across calls
_producer: Optional[Producer] = None


def _get_producer() -> Producer:
    global _producer
    if _producer is None:
        _producer = Producer({"bootstrap.servers": KafkaConfig.BOOTSTRAP_SERVERS})
    return _producer


def _delivery_report(err, msg):
    if err:
        logger.error("Delivery failed for message: %s", err)
    else:
        logger.info("Message delivered to %s [%d] at offset %s", msg.topic(), msg.partition(), msg.offset())


def publish_loan_decision(payload: dict, topic: str = KafkaConfig.LOAN_DECISIONS_TOPIC, timeout: float = 1.0) -> None:
    """
    Publish a recorded loan decision to the configured Kafka topic.
    This is fire-and-forget but will flush for a short timeout to improve delivery reliability.
    """
    try:
        producer = _get_producer()
        producer.produce(
            topic,
            key=str(payload.get("account_number", "")).encode("utf-8"),
            value=json.dumps(payload).encode("utf-8"),
            callback=_delivery_report,
        )
        # serve delivery callbacks and attempt to send outstanding messages
        producer.poll(0)
        producer.flush(timeout)
    except Exception as exc:
        logger.exception("Failed to publish loan decision to Kafka: %s", exc)
