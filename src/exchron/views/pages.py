from typing import Any, Dict, Mapping, Optional

from jinja2 import DictLoader, Environment, select_autoescape

from exchron.adapters.csv_tokenizer import tokenize
from exchron.inference.numeric_inference import parse_number
from exchron.standards.ingestion_limits import MIN_TRAINING_ROWS
from exchron.standards.koi_features import (
    KOI_FEATURES,
    LIGHT_CURVE_MODELS,
    MAX_UPLOAD_TARGETS,
    PRELOADED_DATASETS,
    PRELOADED_RESULT_KEYS,
    REQUIRED_KOI_FEATURES,
    TABULAR_MODELS,
    UPLOAD_TARGET_KEYS,
    Datasource,
)
from exchron.standards.report_panels import (
    MODEL_CARDS,
    PLANET_TYPES,
    RESULT_PANELS,
    format_metric,
    format_percent,
)
from exchron.utils.exceptions import DatasetParseError, PredictionRequestError
from exchron.views.templates import TEMPLATES

_env = Environment(
    loader=DictLoader(TEMPLATES),
    autoescape=select_autoescape(default=True, default_for_string=True),
)
_env.globals.update(format_metric=format_metric)


def render_page(template_name: str, **context) -> str:
    return _env.get_template(template_name).render(**context)


# ------------------------------------------------------------------
# Pages
# ------------------------------------------------------------------

def render_overview() -> str:
    return render_page("overview.html", models=MODEL_CARDS)


def render_data_input(error: Optional[str] = None) -> str:
    return render_page(
        "data_input.html",
        error=error,
        features=KOI_FEATURES,
        tabular_models=TABULAR_MODELS,
        light_curve_models=LIGHT_CURVE_MODELS,
        datasets=PRELOADED_DATASETS,
        max_targets=MAX_UPLOAD_TARGETS,
    )


def render_results(
    summary: Optional[Dict[str, Any]] = None,
    error: Optional[str] = None,
    details: Optional[str] = None,
) -> str:
    return render_page(
        "results.html",
        summary=summary,
        error=error,
        details=details,
        panels=RESULT_PANELS,
        planet_types=PLANET_TYPES,
    )


def render_classroom(parsed=None, error: Optional[str] = None) -> str:
    return render_page(
        "classroom.html",
        parsed=parsed,
        error=error,
        min_rows=MIN_TRAINING_ROWS,
    )


# ------------------------------------------------------------------
# Form → proxy payload
# ------------------------------------------------------------------

def build_manual_payload(model: str, form: Mapping[str, Any]) -> Dict[str, Any]:
    features = {}
    for key in REQUIRED_KOI_FEATURES:
        value = parse_number(form.get(key, ""))
        if value is None:
            raise PredictionRequestError(f"Missing or invalid feature: {key}")
        features[key] = value

    return {
        "model": model,
        "datasource": Datasource.MANUAL,
        "features": features,
        "predict": True,
    }


def build_upload_payload(model: str, csv_text: str) -> Dict[str, Any]:
    """
    Take up to three data rows of an uploaded KOI CSV and
    turn them into features-target-N objects.
    """
    try:
        lines = tokenize(csv_text or "")
    except DatasetParseError as e:
        raise PredictionRequestError(str(e)) from e

    if len(lines) < 2:
        raise PredictionRequestError("CSV file must contain header and at least one data row")

    header, rows = lines[0], lines[1:MAX_UPLOAD_TARGETS + 1]
    missing = [key for key in REQUIRED_KOI_FEATURES if key not in header]
    if missing:
        raise PredictionRequestError(
            f"Uploaded file is missing KOI columns: {', '.join(missing)}"
        )

    positions = {name: idx for idx, name in enumerate(header)}
    payload: Dict[str, Any] = {
        "model": model,
        "datasource": Datasource.UPLOAD,
        "predict": True,
    }
    for target_key, row in zip(UPLOAD_TARGET_KEYS, rows):
        features = {}
        for key in REQUIRED_KOI_FEATURES:
            idx = positions[key]
            value = parse_number(row[idx]) if idx < len(row) else None
            if value is None:
                raise PredictionRequestError(
                    f"Missing or invalid feature in {target_key}: {key}"
                )
            features[key] = value
        payload[target_key] = features

    return payload


def build_preloaded_payload(model: str, dataset: str) -> Dict[str, Any]:
    return {
        "model": model,
        "datasource": Datasource.PRELOADED,
        "data": dataset,
        "predict": True,
    }


def build_light_curve_payload(model: str, kepid: str) -> Dict[str, Any]:
    return {"model": model, "kepid": (kepid or "").strip()}


# ------------------------------------------------------------------
# Proxy response → results view
# ------------------------------------------------------------------

def summarize_prediction(data: Dict[str, Any], model: str, datasource: str) -> Dict[str, Any]:
    candidate = data.get("candidate_probability")
    targets = []
    for key in PRELOADED_RESULT_KEYS:
        entry = data.get(key)
        if isinstance(entry, dict):
            targets.append({
                "key": key,
                "kepid": entry.get("kepid"),
                "candidate": format_percent(entry.get("candidate_probability")),
                "non_candidate": format_percent(entry.get("non_candidate_probability")),
            })

    follow_up = "—"
    if isinstance(candidate, (int, float)):
        follow_up = "High" if candidate > 0.5 else "Low"

    return {
        "model": model,
        "datasource": datasource,
        "kepid": data.get("kepid"),
        "candidate": format_percent(candidate),
        "non_candidate": format_percent(data.get("non_candidate_probability")),
        "follow_up": follow_up,
        "targets": targets,
    }
