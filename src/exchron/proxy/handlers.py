from typing import Any, Dict, Optional, Tuple

from fastapi import Request
from pydantic import ValidationError

from exchron.config.settings import Settings
from exchron.observability.audit_logger import AuditLogger
from exchron.observability.identity import extract_user_identity
from exchron.observability.logger import RequestTimer, generate_request_id, log_event
from exchron.proxy.client import PredictionServiceClient
from exchron.proxy.schemas import (
    RESPONSE_MODELS,
    DLPredictionRequest,
    LightCurvePredictionResponse,
    ml_request_adapter,
)
from exchron.standards.koi_features import REQUIRED_KOI_FEATURES, Datasource, TABULAR_MODELS
from exchron.utils.exceptions import (
    MalformedUpstreamResponseError,
    PredictionRequestError,
    PredictionServiceError,
)


# ------------------------------------------------------------------
# Validation helpers
# ------------------------------------------------------------------

def _describe_validation_error(exc: ValidationError) -> str:
    """
    Turn the first pydantic error into one user-facing sentence.
    """
    err = exc.errors()[0]
    loc = [str(part) for part in err.get("loc", ())]

    # Discriminated unions prefix the location with the tag value
    if loc and Datasource.is_valid(loc[0]):
        loc = loc[1:]

    # Absent or non-object features / absent dataset name
    if loc == ["features"]:
        return "Missing features object for manual datasource"
    if loc == ["data"] and err.get("type") == "missing":
        return "Missing data field for pre-loaded datasource"

    feature = next((part for part in loc if part in REQUIRED_KOI_FEATURES), None)
    if feature:
        container = loc[0] if loc and loc[0] != feature else "features"
        if container.startswith("features-target-"):
            return f"Missing or invalid feature in {container}: {feature}"
        return f"Missing or invalid feature: {feature}"

    if not loc:
        return err.get("msg", "Invalid request").replace("Value error, ", "")
    return f"Invalid field '{'.'.join(loc)}': {err.get('msg', 'invalid value')}"


def validate_ml_request(payload: Any):
    if not isinstance(payload, dict):
        raise PredictionRequestError("Request body must be a JSON object")

    if not payload.get("model") or not payload.get("datasource") or not payload.get("predict"):
        raise PredictionRequestError("Missing required fields: model, datasource, predict")

    if payload["model"] not in TABULAR_MODELS:
        raise PredictionRequestError('Invalid model type. Must be "gb" or "svm"')

    if not Datasource.is_valid(payload["datasource"]):
        raise PredictionRequestError(
            'Invalid datasource. Must be "manual", "upload", or "pre-loaded"'
        )

    try:
        return ml_request_adapter.validate_python(payload)
    except ValidationError as e:
        raise PredictionRequestError(_describe_validation_error(e), details=str(e)) from e


def validate_ml_response(datasource: str, data: Dict[str, Any]) -> Dict[str, Any]:
    model = RESPONSE_MODELS[datasource]
    try:
        model.model_validate(data)
    except ValidationError as e:
        label = "preloaded" if datasource == Datasource.PRELOADED else datasource
        raise MalformedUpstreamResponseError(
            f"Invalid response format from ML API for {label} prediction",
            details=_describe_validation_error(e),
        ) from e
    # Upstream JSON is returned verbatim
    return data


def validate_dl_request(payload: Any) -> DLPredictionRequest:
    if not isinstance(payload, dict):
        raise PredictionRequestError("Request body must be a JSON object")

    if not payload.get("model") or not payload.get("kepid"):
        raise PredictionRequestError("Missing required fields: model and kepid are required")

    try:
        return DLPredictionRequest.model_validate(payload)
    except ValidationError as e:
        raise PredictionRequestError(_describe_validation_error(e), details=str(e)) from e


# ------------------------------------------------------------------
# Audit
# ------------------------------------------------------------------

def _audit(
    request_id: str,
    user_id: str,
    route: str,
    payload: Any,
    outcome: str,
    status_code: int,
    timer: RequestTimer,
):
    payload = payload if isinstance(payload, dict) else {}
    audit_logger = AuditLogger()
    audit_logger.persist(audit_logger.build_record(
        request_id=request_id,
        user_id=user_id,
        route=route,
        model=payload.get("model"),
        datasource=payload.get("datasource"),
        outcome=outcome,
        status_code=status_code,
        duration_seconds=timer.duration(),
    ))


def _run(
    route: str,
    payload: Any,
    request: Optional[Request],
    forward,
) -> Tuple[int, Dict[str, Any]]:
    """
    Shared request lifecycle: log, forward, normalize errors, audit.
    """
    request_id = generate_request_id()
    user_id = extract_user_identity(request, payload if isinstance(payload, dict) else {})
    timer = RequestTimer()

    log_event("PREDICTION_REQUEST_STARTED", {
        "request_id": request_id,
        "route": route,
        "model": payload.get("model") if isinstance(payload, dict) else None,
        "datasource": payload.get("datasource") if isinstance(payload, dict) else None,
    })

    try:
        data = forward()
    except PredictionServiceError as e:
        log_event("PREDICTION_REQUEST_FAILED", {
            "request_id": request_id,
            "route": route,
            "error": e.message,
            "details": e.details,
            "status_code": e.status_code,
            "duration_seconds": timer.duration(),
        })
        _audit(request_id, user_id, route, payload, "FAILED", e.status_code, timer)
        return e.status_code, e.to_dict()

    log_event("PREDICTION_REQUEST_COMPLETED", {
        "request_id": request_id,
        "route": route,
        "duration_seconds": timer.duration(),
    })
    _audit(request_id, user_id, route, payload, "SUCCESS", 200, timer)
    return 200, data


# ==========================================================
# HANDLERS
# ==========================================================

def handle_ml_prediction(
    payload: Any,
    settings: Settings,
    request: Optional[Request] = None,
    client: Optional[PredictionServiceClient] = None,
) -> Tuple[int, Dict[str, Any]]:
    """
    Tabular (gb / svm) prediction proxy.

    Flow:
    validate request → forward → validate response shape → return verbatim
    """
    client = client or PredictionServiceClient(settings.ml_api_url, timeout=settings.request_timeout_seconds)

    def forward():
        validated = validate_ml_request(payload)
        data = client.predict(payload)
        return validate_ml_response(validated.datasource, data)

    return _run("ml-predict", payload, request, forward)


def handle_dl_prediction(
    payload: Any,
    settings: Settings,
    request: Optional[Request] = None,
    client: Optional[PredictionServiceClient] = None,
) -> Tuple[int, Dict[str, Any]]:
    """
    Light-curve (cnn / dnn) prediction proxy, keyed by Kepler ID.
    """
    client = client or PredictionServiceClient(settings.dl_api_url, timeout=settings.request_timeout_seconds)

    def forward():
        validated = validate_dl_request(payload)
        data = client.predict(validated.upstream_payload())
        try:
            LightCurvePredictionResponse.model_validate(data)
        except ValidationError as e:
            raise MalformedUpstreamResponseError(
                "Invalid response structure from external API",
                details=_describe_validation_error(e),
            ) from e
        return data

    return _run("dl-predict", payload, request, forward)
