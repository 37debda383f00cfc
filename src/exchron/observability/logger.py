import json
import logging
import os
import sys
import time
import uuid
from datetime import datetime, timezone

LOGGER_NAME = "exchron"
LEVEL_ENV_VAR = "EXCHRON_LOG_LEVEL"


class _C:
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    MAGENTA = "\033[35m"


def _use_color() -> bool:
    # Opt-in, and only on a terminal
    return os.getenv("LOG_COLOR", "0") == "1" and sys.stderr.isatty()


def _event_level(event_type: str) -> int:
    et = (event_type or "").upper()
    if "FAILED" in et or "ERROR" in et:
        return logging.ERROR
    if "WARNING" in et or "TRUNCATED" in et:
        return logging.WARNING
    return logging.INFO


def _event_color(event_type: str, level: int) -> str:
    if level >= logging.ERROR:
        return _C.RED
    if level >= logging.WARNING:
        return _C.YELLOW
    if "AUDIT" in (event_type or "").upper():
        return _C.CYAN
    if event_type.endswith(("_STARTED", "_COMPLETED")):
        return _C.GREEN
    return _C.MAGENTA


class JsonEventFormatter(logging.Formatter):
    """
    One JSON object per line: the event payload with event_type,
    level and timestamp on top. Payload keys never replace those three.
    """

    def format(self, record: logging.LogRecord) -> str:
        event_type = getattr(record, "event_type", None) or "LOG"
        payload = getattr(record, "payload", None)
        body = dict(payload) if payload else {"message": record.getMessage()}
        body.update({
            "event_type": event_type,
            "level": record.levelname,
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
        })

        text = json.dumps(body, default=str)
        if _use_color():
            return f"{_event_color(event_type, record.levelno)}{text}{_C.RESET}"
        return text


def get_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonEventFormatter())
    logger.addHandler(handler)
    logger.setLevel(os.getenv(LEVEL_ENV_VAR, "INFO").upper())
    logger.propagate = False
    return logger


logger = get_logger()


def generate_request_id() -> str:
    return str(uuid.uuid4())


def log_event(event_type: str, payload: dict):
    """
    Emit a structured event. The level follows the event name:
    *_FAILED / *_ERROR -> ERROR, *_WARNING / *_TRUNCATED -> WARNING.
    """
    logger.log(
        _event_level(event_type),
        event_type,
        extra={"event_type": event_type, "payload": dict(payload or {})},
    )


class RequestTimer:
    """
    Wall-clock timer for a single request or parse.
    """
    def __init__(self):
        self.start_time = time.perf_counter()

    def duration(self) -> float:
        return round(time.perf_counter() - self.start_time, 4)
