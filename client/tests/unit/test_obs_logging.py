import json
import logging

import pytest

from tracker.infra.errors import AuthenticationError
from tracker.obs.logging import (
    InfoSamplingFilter,
    JSONLogFormatter,
    bind_context,
    configure_logging,
    reset_context,
)

API = "https://backend.test/api"


def _record(**extra):
    record = logging.LogRecord("tracker.test", logging.WARNING, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_context():
    tokens = bind_context(request_id="req-1", route="friends.add")
    try:
        payload = json.loads(JSONLogFormatter().format(_record(verb="friends.add")))
    finally:
        reset_context(tokens)

    assert payload["msg"] == "hello world"
    assert payload["level"] == "warning"
    assert payload["request_id"] == "req-1"
    assert payload["route"] == "friends.add"
    assert payload["verb"] == "friends.add"


def test_formatter_redacts_sensitive_fields():
    payload = json.loads(
        JSONLogFormatter().format(_record(auth_token="tok-1", contact="kofi@example.com", latitude=5.6))
    )
    assert payload["auth_token"] == "[redacted]"
    assert payload["contact"] == "[redacted]"
    assert payload["latitude"] == "[redacted]"


class _Capture(logging.Handler):
    def __init__(self):
        super().__init__()
        self.setFormatter(JSONLogFormatter(service="tracker-test", environment="test"))
        self.lines = []

    def emit(self, record):
        self.lines.append(json.loads(self.format(record)))


@pytest.mark.asyncio
async def test_gateway_logs_carry_route_and_request_id(gateway, backend, signed_in):
    backend.on("GET", f"{API}/circles", status=401)
    capture = _Capture()
    gateway_logger = logging.getLogger("tracker.infra.gateway")
    gateway_logger.addHandler(capture)
    try:
        with pytest.raises(AuthenticationError):
            await gateway.authenticated_fetch(gateway.url("circles"), route="circles.list_mine")
    finally:
        gateway_logger.removeHandler(capture)

    entry = capture.lines[-1]
    assert entry["route"] == "circles.list_mine"
    assert entry["request_id"] == backend.last.headers["X-Request-Id"]
    assert entry["service"] == "tracker-test"


def test_sampling_filter_uses_configured_rate():
    info = _record()
    info.levelno = logging.INFO
    assert InfoSamplingFilter(0.0).filter(info) is False
    assert InfoSamplingFilter(0.0).filter(_record()) is True


def test_configure_logging_uses_injected_settings(test_settings):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging(test_settings.model_copy(update={"service_name": "svc-x", "log_level": "warning"}))
        handler = root.handlers[0]
        assert root.level == logging.WARNING
        assert handler.formatter.service == "svc-x"
        assert handler.formatter.environment == "test"
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
