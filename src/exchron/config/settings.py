import os
from dataclasses import dataclass, fields, replace
from typing import Dict, Optional

import yaml

CONFIG_ENV_VAR = "EXCHRON_CONFIG"

_ENV_OVERRIDES = {
    "EXCHRON_ML_API_URL": "ml_api_url",
    "EXCHRON_DL_API_URL": "dl_api_url",
    "EXCHRON_REQUEST_TIMEOUT": "request_timeout_seconds",
    "EXCHRON_MAX_UPLOAD_ROWS": "max_upload_rows",
}


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration.

    Resolution order: defaults -> YAML file -> environment.
    """
    ml_api_url: str = "http://localhost:8000/api/ml/predict"
    dl_api_url: str = "http://localhost:8000/api/dl/predict"
    request_timeout_seconds: float = 30.0
    # 0 / None disables truncation of uploaded datasets
    max_upload_rows: Optional[int] = 5000


def _coerce(name: str, value):
    if name == "request_timeout_seconds":
        timeout = float(value)
        if timeout <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return timeout
    if name == "max_upload_rows":
        if value in (None, "", 0, "0"):
            return None
        rows = int(value)
        if rows < 0:
            raise ValueError("max_upload_rows must not be negative")
        return rows
    return str(value)


# ------------------------------------------
# Load YAML
# ------------------------------------------
def _load_config_file(config_path: str) -> Dict:
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return data


def load_settings(config_path: Optional[str] = None, environ: Optional[Dict[str, str]] = None) -> Settings:
    environ = os.environ if environ is None else environ
    config_path = config_path or environ.get(CONFIG_ENV_VAR)

    known = {f.name for f in fields(Settings)}
    overrides = {}

    if config_path:
        for key, value in _load_config_file(config_path).items():
            if key not in known:
                raise ValueError(f"Unknown config key '{key}'. Allowed: {sorted(known)}")
            overrides[key] = _coerce(key, value)

    for env_name, key in _ENV_OVERRIDES.items():
        if env_name in environ:
            overrides[key] = _coerce(key, environ[env_name])

    return replace(Settings(), **overrides)
