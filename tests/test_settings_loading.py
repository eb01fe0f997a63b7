"""
Test settings loading from the environment and the YAML config file.

Environment variables win over the YAML file; the YAML file wins over
field defaults. Every key documented in .env.example must map to a field.
"""
from __future__ import annotations

from pathlib import Path
import re

import pytest

from core.settings import AppSettings, load_app_settings
from core.settings.yaml_config import load_yaml_config, split_sections

REPO_ROOT = Path(__file__).resolve().parents[1]

# read by the process itself, not by a settings section
PROCESS_KEYS = {"LOG_LEVEL", "CONFIG_PATH"}


def _parse_env_keys(env_path: Path) -> list[str]:
    keys: list[str] = []
    for line in env_path.read_text(encoding="utf-8").splitlines():
        s = line.strip().lstrip("#").strip()
        if "=" not in s:
            continue
        k = s.split("=", 1)[0].strip()
        if re.fullmatch(r"[A-Z_][A-Z0-9_]*", k) and k not in keys:
            keys.append(k)
    return keys


def _alias_map(settings: AppSettings) -> dict[str, tuple[str, str]]:
    """Return map: ENV_ALIAS -> (section, field_name)."""
    aliases: dict[str, tuple[str, str]] = {}
    for section_name in AppSettings.model_fields:
        section = getattr(settings, section_name)
        for field_name, field in type(section).model_fields.items():
            if field.alias in aliases:
                pytest.fail(f"Duplicate env alias mapped twice: {field.alias}")
            aliases[field.alias] = (section_name, field_name)
    return aliases


@pytest.fixture
def clean_env(monkeypatch):
    """Drop every settings variable from the environment."""
    for alias in _alias_map(load_app_settings(str(REPO_ROOT / "missing.yaml"))):
        monkeypatch.delenv(alias, raising=False)
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    return monkeypatch


def test_every_documented_env_key_is_mapped(clean_env):
    keys = _parse_env_keys(REPO_ROOT / ".env.example")
    aliases = _alias_map(load_app_settings(str(REPO_ROOT / "missing.yaml")))

    missing = [k for k in keys if k not in aliases and k not in PROCESS_KEYS]
    assert not missing, f"Unmapped env keys: {missing}"


def test_defaults_without_file_or_env(clean_env, tmp_path):
    settings = load_app_settings(str(tmp_path / "config.yaml"))

    assert settings.anthropic.api_key is None
    assert settings.executor.server_addr == "localhost:50051"
    assert settings.server.port == 8080
    assert settings.server.request_timeout_seconds is None
    assert settings.retry.max_attempts == 5
    assert settings.retry.delay_seconds == 3.0
    assert settings.generation.provider == "DigitalOcean"


def test_yaml_values_are_applied(clean_env, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text(
        "anthropic_api_key: sk-from-yaml\n"
        "grpc_server_addr: executor:50051\n"
        "server:\n"
        "  port: 9090\n"
        "retry:\n"
        "  max_attempts: 2\n"
        "  delay_seconds: 0.5\n",
        encoding="utf-8",
    )

    settings = load_app_settings(str(config))

    assert settings.anthropic.api_key == "sk-from-yaml"
    assert settings.executor.server_addr == "executor:50051"
    assert settings.server.port == 9090
    assert settings.retry.max_attempts == 2
    assert settings.retry.delay_seconds == 0.5


def test_environment_overrides_yaml(clean_env, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("grpc_server_addr: from-yaml:50051\nserver:\n  port: 9090\n", encoding="utf-8")
    clean_env.setenv("GRPC_SERVER_ADDR", "from-env:50051")

    settings = load_app_settings(str(config))

    assert settings.executor.server_addr == "from-env:50051"
    assert settings.server.port == 9090


def test_config_path_env_variable_is_used(clean_env, tmp_path):
    config = tmp_path / "custom.yaml"
    config.write_text("terraform_provider: AWS\n", encoding="utf-8")
    clean_env.setenv("CONFIG_PATH", str(config))

    assert load_app_settings().generation.provider == "AWS"


def test_invalid_retry_budget_is_rejected(clean_env, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("retry:\n  max_attempts: 0\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_app_settings(str(config))


def test_empty_file_is_an_empty_mapping(tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("", encoding="utf-8")

    assert load_yaml_config(config) == {}


@pytest.mark.parametrize("content", ["server: [unclosed\n", "- just\n- a list\n"])
def test_malformed_file_is_rejected(tmp_path, content):
    config = tmp_path / "config.yaml"
    config.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        load_yaml_config(config)


def test_unknown_keys_are_ignored():
    sections = split_sections({"grpc_server_addr": "x:1", "telemetry": True})

    assert sections["executor"] == {"server_addr": "x:1"}
    assert "telemetry" not in sections
