import json
import logging

from jose import jwt
from starlette.requests import Request

from exchron.observability.audit_logger import AuditLogger
from exchron.observability.identity import extract_user_identity
from exchron.observability.logger import JsonEventFormatter, _event_level


def make_request(headers):
    raw = [(k.lower().encode(), v.encode()) for k, v in headers.items()]
    return Request({"type": "http", "method": "POST", "path": "/", "headers": raw})


def test_event_level_follows_event_name():
    assert _event_level("PREDICTION_REQUEST_FAILED") == logging.ERROR
    assert _event_level("DATASET_WARNING") == logging.WARNING
    assert _event_level("DATASET_TRUNCATED") == logging.WARNING
    assert _event_level("DATASET_PARSE_COMPLETED") == logging.INFO


def test_formatter_renders_payload_as_json():
    record = logging.makeLogRecord({
        "levelno": logging.INFO,
        "levelname": "INFO",
        "msg": "DATASET_PARSE_COMPLETED",
        "event_type": "DATASET_PARSE_COMPLETED",
        "payload": {"dataset": "koi.csv", "rows": 10},
    })

    body = json.loads(JsonEventFormatter().format(record))

    assert body["event_type"] == "DATASET_PARSE_COMPLETED"
    assert body["level"] == "INFO"
    assert body["rows"] == 10
    assert "timestamp" in body


def test_payload_cannot_replace_fixed_keys():
    record = logging.makeLogRecord({
        "levelno": logging.ERROR,
        "levelname": "ERROR",
        "msg": "PREDICTION_REQUEST_FAILED",
        "event_type": "PREDICTION_REQUEST_FAILED",
        "payload": {"event_type": "SPOOFED", "level": "DEBUG", "timestamp": "never", "route": "ml-predict"},
    })

    body = json.loads(JsonEventFormatter().format(record))

    assert body["event_type"] == "PREDICTION_REQUEST_FAILED"
    assert body["level"] == "ERROR"
    assert body["timestamp"] != "never"
    assert body["route"] == "ml-predict"


def test_formatter_handles_plain_records():
    record = logging.makeLogRecord({"levelname": "WARNING", "msg": "hello %s", "args": ("there",)})
    body = json.loads(JsonEventFormatter().format(record))
    assert body["event_type"] == "LOG"
    assert body["message"] == "hello there"


def test_identity_from_forwarded_header():
    request = make_request({"X-Forwarded-User": "accounts.example:ana@example.org"})
    assert extract_user_identity(request, {"user_id": "ignored"}) == "ana@example.org"


def test_identity_from_bearer_token():
    token = jwt.encode({"email": "bob@example.org"}, "secret", algorithm="HS256")
    request = make_request({"Authorization": f"Bearer {token}"})
    assert extract_user_identity(request, {}) == "bob@example.org"


def test_bad_token_falls_back_to_payload():
    request = make_request({"Authorization": "Bearer not-a-jwt"})
    assert extract_user_identity(request, {"user_id": 7}) == "7"


def test_identity_without_request():
    assert extract_user_identity(None, {}) == "anonymous"


def test_audit_record_fields():
    record = AuditLogger().build_record(
        request_id="req-1",
        user_id="anonymous",
        route="ml-predict",
        model="gb",
        datasource="manual",
        outcome="FAILED",
        status_code=503,
        duration_seconds=0.01,
    )
    assert record["status_code"] == 503
    assert record["outcome"] == "FAILED"
    assert record["audit_id"] != record["request_id"]
