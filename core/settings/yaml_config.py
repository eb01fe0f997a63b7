"""
YAML config file support.

The file uses the flat layout operators already have:

    anthropic_api_key: sk-...
    grpc_server_addr: executor:50051
    server:
      port: 8080
    retry:
      max_attempts: 5
      delay_seconds: 3

and is split here into per-section keyword arguments.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

logger = logging.getLogger(__name__)

# flat yaml key -> (section, field)
_FLAT_KEYS = {
    "anthropic_api_key": ("anthropic", "api_key"),
    "anthropic_model": ("anthropic", "model"),
    "anthropic_max_tokens": ("anthropic", "max_tokens"),
    "grpc_server_addr": ("executor", "server_addr"),
    "grpc_timeout_seconds": ("executor", "timeout_seconds"),
    "terraform_provider": ("generation", "provider"),
}

_NESTED_SECTIONS = ("anthropic", "executor", "server", "retry", "generation")


def load_yaml_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML config file.

    A missing file yields an empty mapping; a malformed one raises.
    """
    config_path = Path(path)
    if not config_path.is_file():
        logger.info(f"Config file {config_path} not found, using environment only")
        return {}

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"error parsing config file {config_path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"config file {config_path} must contain a mapping")
    return raw


def split_sections(raw: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Group YAML values by settings section."""
    sections: Dict[str, Dict[str, Any]] = {name: {} for name in _NESTED_SECTIONS}

    for key, value in raw.items():
        if key in _FLAT_KEYS:
            section, field = _FLAT_KEYS[key]
            sections[section][field] = value
        elif key in _NESTED_SECTIONS and isinstance(value, dict):
            sections[key].update(value)
        else:
            logger.warning(f"Ignoring unknown config key: {key}")

    return sections
