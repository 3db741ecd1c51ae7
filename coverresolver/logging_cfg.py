"""Centralized logging helpers for coverresolver.

The CLI configures the root logger once; library modules only ever call
``logging.getLogger(__name__)``. Every batch run carries a correlation id so
that the log lines of one run can be grouped together in JSON output.
"""

from __future__ import annotations

import contextvars
import json
import logging
import os
import sys
import uuid
from typing import Any, Optional

from .config import ENV_LOG_FORMAT

_STD_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

# Query parameters, headers and JSON fields that must never be logged verbatim
SECRET_KEYS = (
    "key",
    "apikey",
    "api_key",
    "client_secret",
    "secret",
    "password",
    "authorization",
    "access_token",
)

REDACTED = "***REDACTED***"


# Correlation ID support for tracing a batch run across modules
_cid_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "coverresolver_correlation_id", default=None
)


def set_correlation_id(cid: str | None = None) -> str:
    """Set or create and set a correlation id for the current context.

    Returns the correlation id string.
    """
    if cid is None:
        cid = uuid.uuid4().hex
    _cid_var.set(cid)
    return cid


def get_correlation_id() -> str | None:
    return _cid_var.get()


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter that includes correlation id when available."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        cid = get_correlation_id()
        if cid:
            payload["correlation_id"] = cid
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def redact_secrets(obj: Any, redact_keys: tuple[str, ...] = SECRET_KEYS) -> Any:
    """Return a copy of ``obj`` with secret-looking mapping values masked.

    Mappings are walked recursively, lists and tuples element by element.
    Anything else is returned unchanged.
    """
    if isinstance(obj, dict):
        return {
            k: (
                REDACTED
                if isinstance(k, str) and k.lower() in redact_keys
                else redact_secrets(v, redact_keys)
            )
            for k, v in obj.items()
        }
    if isinstance(obj, (list, tuple)):
        return type(obj)(redact_secrets(x, redact_keys) for x in obj)
    return obj


def configure_logging(env: Optional[str] = "auto", level: int = logging.INFO):
    """Configure the root logger.

    env: 'auto' (default) | 'json' | 'human'
    - 'auto' chooses human-readable when stderr is a TTY, otherwise JSON.
    - 'json' forces JSON output.
    - 'human' forces a readable formatter.
    With 'auto', COVERRESOLVER_LOG_FORMAT may still pick 'json' or 'human'.

    Returns the root logger.
    """
    chosen = (env or "auto").lower()
    if chosen == "auto":
        chosen = os.getenv(ENV_LOG_FORMAT, "auto").lower()
    mode = "human"
    if chosen == "json":
        mode = "json"
    elif chosen == "human":
        mode = "human"
    else:
        # auto: prefer human when interactive
        try:
            mode = "human" if sys.stderr.isatty() else "json"
        except (AttributeError, ValueError):
            mode = "json"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Add one console handler idempotently (mark by name)
    existing = [
        h for h in root_logger.handlers
        if getattr(h, "name", None) == "coverresolver_console"
    ]
    if existing:
        handler = existing[0]
    else:
        handler = logging.StreamHandler()
        handler.name = "coverresolver_console"
        root_logger.addHandler(handler)

    if mode == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(_STD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )

    # urllib3 logs every connection at DEBUG including full query strings
    logging.getLogger("urllib3").setLevel(max(level, logging.WARNING))

    return root_logger
