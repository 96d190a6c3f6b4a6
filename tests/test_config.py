# tests/test_config.py
"""
Тесты для модуля sheetdesk/utils/config.py.
"""
import pytest

from sheetdesk.exceptions import ConfigError
from sheetdesk.utils import config as config_module
from sheetdesk.utils.config import ENDPOINT_ENV_VAR, AppConfig, load_config


@pytest.fixture(autouse=True)
def no_default_config(tmp_path, monkeypatch):
    """Файл настроек по умолчанию не должен влиять на тесты."""
    monkeypatch.setattr(config_module, "get_default_config_path", lambda: tmp_path / "absent.yaml")


def test_defaults():
    config = load_config(environ={})

    assert config.endpoint == ""
    assert config.timeout_seconds == 30.0
    assert config.date_markers == ["fecha", "date", "дата"]
    assert config.open_delay_ms == 10
    assert config.close_delay_ms == 300
    assert not config.is_endpoint_configured


def test_yaml_env_and_overrides_precedence(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "endpoint: https://from-file.test/exec\n"
        "timeout_seconds: 12\n"
        "date_markers: [fecha, срок]\n",
        encoding="utf-8",
    )

    from_file = load_config(str(config_path), environ={})
    assert from_file.endpoint == "https://from-file.test/exec"
    assert from_file.timeout_seconds == 12
    assert from_file.date_markers == ["fecha", "срок"]

    from_env = load_config(str(config_path), environ={ENDPOINT_ENV_VAR: "https://from-env.test/exec"})
    assert from_env.endpoint == "https://from-env.test/exec"

    from_cli = load_config(
        str(config_path),
        overrides={"endpoint": "https://from-cli.test/exec", "timeout_seconds": None},
        environ={ENDPOINT_ENV_VAR: "https://from-env.test/exec"},
    )
    assert from_cli.endpoint == "https://from-cli.test/exec"
    assert from_cli.timeout_seconds == 12


def test_default_config_file_is_used(tmp_path, monkeypatch):
    default_path = tmp_path / "default.yaml"
    default_path.write_text("endpoint: https://default.test/exec\n", encoding="utf-8")
    monkeypatch.setattr(config_module, "get_default_config_path", lambda: default_path)

    assert load_config(environ={}).endpoint == "https://default.test/exec"


def test_empty_yaml_file(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_config(str(config_path), environ={}).endpoint == ""


@pytest.mark.parametrize("content", [
    "- just\n- a list\n",
    "endpoint: [unclosed\n",
    "timeout_seconds: not-a-number\n",
])
def test_invalid_config_file(tmp_path, content):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(str(config_path), environ={})


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "nope.yaml"), environ={})


@pytest.mark.parametrize("endpoint", ["", "   ", "URL_DE_TU_WEB_APP_AQUI", "YOUR_WEB_APP_URL_HERE"])
def test_placeholder_endpoint_is_not_configured(endpoint):
    config = AppConfig(endpoint=endpoint)

    assert not config.is_endpoint_configured
    with pytest.raises(ConfigError):
        config.require_endpoint()


def test_require_endpoint_strips_spaces():
    assert AppConfig(endpoint=" https://x.test/exec ").require_endpoint() == "https://x.test/exec"
