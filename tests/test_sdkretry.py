from datetime import timedelta

import pytest

from ssmchannel.sdkretry import SsmCliRetryer


def test_get_messages_client_timeout_uses_short_delay():
    retryer = SsmCliRetryer()
    delay = retryer.retry_rules("GetMessages", RuntimeError("Client.Timeout exceeded"), 4)
    assert delay == timedelta(milliseconds=100)


def test_default_max_retries():
    assert SsmCliRetryer().num_max_retries == 3


@pytest.mark.parametrize("retry_count", [0, 1, 2, 3])
def test_exponential_delay_bounds(retry_count):
    retryer = SsmCliRetryer()
    factor = 2 ** retry_count
    for _ in range(50):
        delay = retryer.retry_rules("StartSession", None, retry_count)
        millis = delay // timedelta(milliseconds=1)
        assert 1000 * factor <= millis < 1500 * factor
        assert millis % factor == 0


def test_timeout_on_other_operation_is_not_special():
    retryer = SsmCliRetryer()
    delay = retryer.retry_rules("StartSession", RuntimeError("Client.Timeout"), 0)
    assert delay >= timedelta(milliseconds=1000)


def test_get_messages_without_error_uses_backoff():
    retryer = SsmCliRetryer()
    delay = retryer.retry_rules("GetMessages", None, 0)
    assert delay >= timedelta(milliseconds=1000)


def test_get_messages_with_other_error_uses_backoff():
    retryer = SsmCliRetryer()
    delay = retryer.retry_rules("GetMessages", RuntimeError("connection reset"), 1)
    assert delay >= timedelta(milliseconds=2000)