import json
from unittest.mock import Mock, patch

import pytest

from services import kafka_producer


@pytest.fixture(autouse=True)
def reset_producer():
    kafka_producer._producer = None
    yield
    kafka_producer._producer = None


def test_publish_loan_decision_produces_json():
    mock_producer = Mock()
    with patch("services.kafka_producer.Producer", return_value=mock_producer) as mock_cls:
        kafka_producer.publish_loan_decision({"account_number": "12345", "status": "Approved"}, topic="test_topic")

    mock_cls.assert_called_once()
    args, kwargs = mock_producer.produce.call_args
    assert args == ("test_topic",)
    assert kwargs["key"] == b"12345"
    assert json.loads(kwargs["value"].decode("utf-8")) == {"account_number": "12345", "status": "Approved"}
    mock_producer.flush.assert_called_once_with(1.0)


def test_producer_is_reused():
    with patch("services.kafka_producer.Producer", return_value=Mock()) as mock_cls:
        kafka_producer.publish_loan_decision({"account_number": "1"})
        kafka_producer.publish_loan_decision({"account_number": "2"})

    mock_cls.assert_called_once()


def test_publish_failure_is_logged_not_raised(caplog):
    mock_producer = Mock()
    mock_producer.produce.side_effect = RuntimeError("broker down")
    with patch("services.kafka_producer.Producer", return_value=mock_producer):
        kafka_producer.publish_loan_decision({"account_number": "12345"})

    assert "Failed to publish loan decision" in caplog.text
