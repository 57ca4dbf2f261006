"""
JSON logging for the storekeeper app.

Every line carries the request id of the request that produced it. Supplier
contact details are redacted and image blobs are reduced to their size, both
in dict messages and in lists of rows, unless the app logs at DEBUG outside
production.
"""
import json
import logging
import os
from typing import Any

from flask import g, has_request_context

from storekeeper.data.contract import COLUMN_IMAGE, COLUMN_SUPPLIER_EMAIL, COLUMN_SUPPLIER_PHONE

REDACTED = "[REDACTED]"
CONTACT_KEYS = {COLUMN_SUPPLIER_EMAIL, COLUMN_SUPPLIER_PHONE, "email", "phone"}
NO_REQUEST = "n/a"


def current_request_id() -> str:
    if not has_request_context():
        return NO_REQUEST
    return getattr(g, "request_id", None) or NO_REQUEST


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id()
        return True


def _describe_image(value):
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"<{len(value)} bytes>"
    return value


def mask(value: Any) -> Any:
    """Return ``value`` with contact fields redacted, recursing into rows."""
    if isinstance(value, dict):
        masked = {}
        for key, item in value.items():
            if key in CONTACT_KEYS:
                masked[key] = REDACTED
            elif key == COLUMN_IMAGE:
                masked[key] = _describe_image(item)
            else:
                masked[key] = mask(item)
        return masked
    if isinstance(value, (list, tuple)):
        return type(value)(mask(item) for item in value)
    return value


class MaskingFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        production = os.getenv("APP_ENV", "development").lower() == "production"
        if record.levelno == logging.DEBUG and not production:
            return True
        if isinstance(record.msg, (dict, list)):
            record.msg = mask(record.msg)
        if record.args:
            record.args = mask(record.args)
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "request_id": getattr(record, "request_id", NO_REQUEST),
        }
        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            payload["message"] = record.getMessage()
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _level_for(app) -> int:
    name = os.getenv("LOG_LEVEL") or app.config.get("LOG_LEVEL")
    if name:
        return getattr(logging, str(name).upper(), logging.INFO)
    return logging.DEBUG if app.config.get("DEBUG") else logging.INFO


def configure_logging(app) -> None:
    """Send app, package and werkzeug logs through one JSON handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(datefmt="%Y-%m-%dT%H:%M:%S%z"))
    handler.addFilter(RequestIdFilter())
    handler.addFilter(MaskingFilter())
    level = _level_for(app)

    # app.logger is the "storekeeper" logger, so module loggers in the package
    # reach this handler through propagation
    app.logger.handlers.clear()
    app.logger.addHandler(handler)
    app.logger.setLevel(level)

    werkzeug_logger = logging.getLogger("werkzeug")
    werkzeug_logger.handlers.clear()
    werkzeug_logger.addHandler(handler)
    werkzeug_logger.setLevel(level)
