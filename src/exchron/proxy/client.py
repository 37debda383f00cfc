import json
from typing import Any, Dict

import requests

from exchron.utils.exceptions import (
    MalformedUpstreamResponseError,
    PredictionServiceError,
    UpstreamResponseError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def _upstream_error_message(response: requests.Response, default: str) -> str:
    """
    Prefer the service's own `error` / `message` field, then the raw body.
    """
    text = response.text or ""
    try:
        data = json.loads(text)
    except ValueError:
        return text or default
    if isinstance(data, dict):
        return data.get("error") or data.get("message") or default
    return text or default


class PredictionServiceClient:
    """
    Thin JSON-over-HTTP client for the external prediction service.

    Every transport failure is mapped to a PredictionServiceError
    subclass; nothing is retried.
    """

    def __init__(self, endpoint: str, timeout: float = 30.0, session=None):
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests

    def predict(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.post(
                self.endpoint,
                json=payload,
                headers=JSON_HEADERS,
                timeout=self.timeout,
            )
        # Timeout before ConnectionError: ConnectTimeout is both
        except requests.exceptions.Timeout as e:
            raise UpstreamTimeoutError("Prediction request timed out", details=str(e)) from e
        except requests.exceptions.ConnectionError as e:
            raise UpstreamUnavailableError(
                f"Cannot connect to ML prediction service. "
                f"Please ensure the service is running at {self.endpoint}",
                details=str(e),
            ) from e
        except requests.exceptions.RequestException as e:
            raise PredictionServiceError("ML prediction service unavailable", details=str(e)) from e

        if not response.ok:
            raise UpstreamResponseError(
                "ML prediction failed",
                details=_upstream_error_message(response, "Prediction failed"),
                upstream_status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedUpstreamResponseError(
                "Invalid response format from ML API",
                details="Response body is not valid JSON",
            ) from e

        if not isinstance(data, dict):
            raise MalformedUpstreamResponseError(
                "Invalid response format from ML API",
                details=f"Expected a JSON object, got {type(data).__name__}",
            )
        return data
