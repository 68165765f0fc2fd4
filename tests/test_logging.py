"""Tests for structured logging processors."""

from castattest import __version__
from castattest.utils.logging import add_service_info, filter_sensitive_data


def test_filter_masks_credentials() -> None:
    event = {
        "event": "webhook",
        "token": "zapier-shared-secret",
        "private_key": "short",
        "alchemy_key": "abcdefghijklmnop",
        "fid": 42,
    }

    filtered = filter_sensitive_data(None, "info", event)

    assert filtered["token"] == "zapi...cret"
    assert filtered["private_key"] == "***REDACTED***"
    assert filtered["alchemy_key"] == "abcd...mnop"
    assert filtered["fid"] == 42
    assert filtered["event"] == "webhook"


def test_add_service_info() -> None:
    event = add_service_info(None, "info", {"event": "x"})
    assert event["service"] == "castattest"
    assert event["version"] == __version__
