from typing import List, Optional


class ExchronError(Exception):
    """
    Base exception for all Exchron errors
    """
    pass


# ------------------------------------------------------------------
# Dataset ingestion
# ------------------------------------------------------------------

class DatasetParseError(ExchronError):
    """
    Raised when uploaded CSV content cannot be turned into a dataset.
    The message is meant to be shown to the end user as-is.
    """
    pass


class MalformedCSVError(DatasetParseError):
    """
    Raised when CSV text cannot be tokenized (e.g. unbalanced quotes)
    """
    pass


class HeaderValidationError(DatasetParseError):
    """
    Raised when the header row is empty, blank or has duplicates
    """
    pass


class RowConsistencyError(DatasetParseError):
    """
    Raised when too many rows disagree with the header width
    """
    pass


class DatasetValidationError(DatasetParseError):
    """
    Raised when a parsed dataset is not usable for training.
    Carries every violated rule in `errors`.
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Dataset validation failed:\n" + "\n".join(self.errors))


# ------------------------------------------------------------------
# Prediction proxy
# ------------------------------------------------------------------

class PredictionServiceError(ExchronError):
    """
    Raised when a prediction request cannot be served.
    Subclasses pin the HTTP status returned to the browser.
    """
    status_code = 500

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "details": self.details,
            "status": self.status_code,
        }


class PredictionRequestError(PredictionServiceError):
    """
    Raised when the incoming request body fails validation
    """
    status_code = 400


class UpstreamResponseError(PredictionServiceError):
    """
    Raised when the prediction service answers with a non-2xx status
    """
    status_code = 502

    def __init__(self, message: str, details: Optional[str] = None, upstream_status: Optional[int] = None):
        super().__init__(message, details=details)
        self.upstream_status = upstream_status

    def to_dict(self) -> dict:
        # Upstream status is surfaced so the UI can tell 4xx from 5xx
        body = super().to_dict()
        if self.upstream_status is not None:
            body["status"] = self.upstream_status
        return body


class MalformedUpstreamResponseError(PredictionServiceError):
    """
    Raised when the prediction service returns JSON of the wrong shape
    """
    status_code = 502


class UpstreamUnavailableError(PredictionServiceError):
    """
    Raised when the prediction service refuses the connection
    """
    status_code = 503


class UpstreamTimeoutError(PredictionServiceError):
    """
    Raised when the prediction service does not answer in time
    """
    status_code = 504
