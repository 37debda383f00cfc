import pytest

from exchron.config.settings import Settings, load_settings


def test_defaults_without_config():
    settings = load_settings(environ={})
    assert settings == Settings()
    assert settings.request_timeout_seconds == 30.0
    assert settings.max_upload_rows == 5000


def test_yaml_file_overrides_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "ml_api_url: http://ml.internal/predict\n"
        "request_timeout_seconds: 12\n"
        "max_upload_rows: 0\n"
    )

    settings = load_settings(str(path), environ={})

    assert settings.ml_api_url == "http://ml.internal/predict"
    assert settings.request_timeout_seconds == 12.0
    assert settings.max_upload_rows is None
    assert settings.dl_api_url == Settings().dl_api_url


def test_config_path_from_environment(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("dl_api_url: http://dl.internal/predict\n")

    settings = load_settings(environ={"EXCHRON_CONFIG": str(path)})

    assert settings.dl_api_url == "http://dl.internal/predict"


def test_environment_beats_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("request_timeout_seconds: 12\n")

    settings = load_settings(str(path), environ={"EXCHRON_REQUEST_TIMEOUT": "3.5"})

    assert settings.request_timeout_seconds == 3.5


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(str(tmp_path / "nope.yaml"), environ={})


def test_unknown_key(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("ml_url: http://typo\n")
    with pytest.raises(ValueError, match="Unknown config key 'ml_url'"):
        load_settings(str(path), environ={})


def test_non_mapping_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError, match="must contain a mapping"):
        load_settings(str(path), environ={})


@pytest.mark.parametrize("env", [
    {"EXCHRON_REQUEST_TIMEOUT": "0"},
    {"EXCHRON_MAX_UPLOAD_ROWS": "-1"},
])
def test_invalid_values(env):
    with pytest.raises(ValueError):
        load_settings(environ=env)
