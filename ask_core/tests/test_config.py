import os
from pathlib import Path

import pytest
import yaml

from ask_core.config import config_file
from ask_core.config.config_file import (
    default_config,
    load_settings,
    parse_assignment,
    read_config,
    resolve_config_path,
    set_value,
    write_config,
)
from ask_core.config.settings import build_settings
from ask_core.domain.exceptions import ConfigError, ValidationError
from ask_core.domain.models import ClaudeProvider, OpenAIProvider, ZhipuProvider


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    for key in list(os.environ):
        if key.upper().startswith("ASKGPT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")


def test_default_config_loads_and_selects_openai(tmp_path):
    path = tmp_path / "config.yaml"
    write_config(path, default_config())
    settings = load_settings(path)
    provider = settings.active_provider()
    assert isinstance(provider, OpenAIProvider)
    assert provider.base_url == "https://api.openai.com/v1"
    assert provider.top_p == 1.0


def test_active_provider_claude_and_chatglm(tmp_path):
    path = tmp_path / "config.yaml"
    data = default_config()
    data["default_adapter"] = "claude_adapter"
    write_config(path, data)
    assert isinstance(load_settings(path).active_provider(), ClaudeProvider)

    data["default_adapter"] = "chatglm_adapter"
    write_config(path, data)
    assert isinstance(load_settings(path).active_provider(), ZhipuProvider)


def test_unknown_default_adapter(tmp_path):
    path = tmp_path / "config.yaml"
    data = default_config()
    data["default_adapter"] = "gemini_adapter"
    write_config(path, data)
    with pytest.raises(ValidationError):
        load_settings(path).active_provider()


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    write_config(path, default_config())
    monkeypatch.setenv("ASKGPT_OPENAI_ADAPTER__TOKEN", "sk-from-env")
    assert load_settings(path).active_provider().token == "sk-from-env"


def test_invalid_config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        read_config(path)

    data = default_config()
    data["openai_adapter"]["type"] = "Gemini"
    write_config(path, data)
    with pytest.raises(ConfigError):
        load_settings(path)


def test_resolve_config_path_creates_default(tmp_path):
    path = resolve_config_path()
    assert path == tmp_path / "home" / ".askgpt" / "config.yaml"
    assert yaml.safe_load(path.read_text(encoding="utf-8"))["default_adapter"] == "openai_adapter"


def test_resolve_config_path_prefers_valid_local_file(tmp_path):
    local = tmp_path / "config.yaml"
    write_config(local, default_config())
    assert resolve_config_path() == local


def test_resolve_config_path_invalid_local_file_falls_back_to_home(tmp_path, capsys):
    (tmp_path / "config.yaml").write_text("- not\n- a mapping\n", encoding="utf-8")
    path = resolve_config_path()
    assert path == tmp_path / "home" / ".askgpt" / "config.yaml"
    assert path.exists()
    out = capsys.readouterr()
    assert "invalid config file in the current directory" in out.out


def test_resolve_config_path_explicit(tmp_path):
    assert resolve_config_path(str(tmp_path / "custom.yaml")) == tmp_path / "custom.yaml"


def test_set_value_parses_scalars():
    data = set_value(default_config(), "openai_adapter.temperature", "0.2")
    assert data["openai_adapter"]["temperature"] == 0.2
    data = set_value(data, "default_adapter", "claude_adapter")
    assert data["default_adapter"] == "claude_adapter"
    data = set_value(data, "logging.redact_content", "true")
    assert data["logging"]["redact_content"] is True


def test_set_value_keeps_string_fields_verbatim():
    data = set_value(default_config(), "openai_adapter.token", "1234567890")
    assert data["openai_adapter"]["token"] == "1234567890"
    data = set_value(data, "claude_adapter.token", "abc #def")
    assert data["claude_adapter"]["token"] == "abc #def"
    data = set_value(data, "chatglm_adapter.default_model", "yes")
    assert data["chatglm_adapter"]["default_model"] == "yes"
    assert build_settings(data).active_provider().token == "1234567890"


def test_set_value_string_field_missing_from_file():
    data = default_config()
    del data["openai_adapter"]["token"]
    data = set_value(data, "openai_adapter.token", "null")
    assert data["openai_adapter"]["token"] == "null"


def test_set_value_rejects_invalid_result():
    original = default_config()
    with pytest.raises(ConfigError):
        set_value(original, "openai_adapter.temperature", "5")
    assert original["openai_adapter"]["temperature"] == 0.7


def test_parse_assignment():
    assert parse_assignment("openai_adapter.token = sk-1=2") == ("openai_adapter.token", "sk-1=2")
    with pytest.raises(ValidationError):
        parse_assignment("no-equals-sign")


def test_open_in_editor_without_editor(monkeypatch, tmp_path):
    monkeypatch.setattr(config_file.shutil, "which", lambda name: None)
    with pytest.raises(ValidationError):
        config_file.open_in_editor(tmp_path / "config.yaml")


def test_open_in_editor_uses_first_available(monkeypatch, tmp_path):
    calls = []

    class Done:
        returncode = 0

    monkeypatch.setattr(config_file.shutil, "which", lambda name: "/usr/bin/nano" if name == "nano" else None)
    monkeypatch.setattr(config_file.subprocess, "run", lambda args, check: calls.append(args) or Done())
    assert config_file.open_in_editor(tmp_path / "config.yaml") == 0
    assert calls == [["/usr/bin/nano", str(tmp_path / "config.yaml")]]
