import json
import logging

from coverresolver.logging_cfg import (
    REDACTED,
    JsonFormatter,
    configure_logging,
    get_correlation_id,
    redact_secrets,
    set_correlation_id,
)


def test_redact_secrets_masks_known_keys():
    params = {"apikey": "k", "name": "Halo", "nested": {"client_secret": "s"}, "items": [{"key": "x"}]}
    out = redact_secrets(params)
    assert out["apikey"] == REDACTED
    assert out["name"] == "Halo"
    assert out["nested"]["client_secret"] == REDACTED
    assert out["items"][0]["key"] == REDACTED
    # Original left untouched
    assert params["apikey"] == "k"


def test_redact_secrets_passes_through_scalars():
    assert redact_secrets(None) is None
    assert redact_secrets("text") == "text"


def test_json_formatter_includes_correlation_id():
    cid = set_correlation_id("abc123")
    assert get_correlation_id() == cid == "abc123"

    record = logging.LogRecord("coverresolver", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "hello world"
    assert payload["correlation_id"] == "abc123"
    assert payload["level"] == "INFO"


def test_set_correlation_id_generates_one():
    assert len(set_correlation_id()) == 32


def test_configure_logging_is_idempotent():
    root = configure_logging("json")
    configure_logging("human")
    handlers = [h for h in root.handlers if h.name == "coverresolver_console"]
    assert len(handlers) == 1
    assert not isinstance(handlers[0].formatter, JsonFormatter)
    root.removeHandler(handlers[0])


def test_configure_logging_env_override(monkeypatch):
    monkeypatch.setenv("COVERRESOLVER_LOG_FORMAT", "json")
    root = configure_logging("auto")
    handler = next(h for h in root.handlers if h.name == "coverresolver_console")
    assert isinstance(handler.formatter, JsonFormatter)
    root.removeHandler(handler)
