from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.modules.anthropic_settings import AnthropicSettings
from core.settings.modules.executor_settings import ExecutorSettings
from core.settings.modules.generation_settings import GenerationSettings
from core.settings.modules.retry_settings import RetrySettings
from core.settings.modules.server_settings import ServerSettings
from core.settings.yaml_config import load_yaml_config, split_sections

DEFAULT_CONFIG_PATH = "config.yaml"


class AppSettings(BaseModel):
    """
    Application settings aggregator.

    Each section reads its own environment variables; the optional YAML
    config file only fills in what the environment leaves unset.
    """

    model_config = ConfigDict(extra="ignore")

    anthropic: AnthropicSettings
    executor: ExecutorSettings
    retry: RetrySettings
    server: ServerSettings
    generation: GenerationSettings


def load_app_settings(config_path: str | None = None) -> AppSettings:
    """Build settings from the YAML file (if any) and the environment."""
    path = config_path or os.getenv("CONFIG_PATH", DEFAULT_CONFIG_PATH)
    sections = split_sections(load_yaml_config(path))

    return AppSettings(
        anthropic=AnthropicSettings(**sections["anthropic"]),
        executor=ExecutorSettings(**sections["executor"]),
        retry=RetrySettings(**sections["retry"]),
        server=ServerSettings(**sections["server"]),
        generation=GenerationSettings(**sections["generation"]),
    )


@lru_cache()
def get_app_settings() -> AppSettings:
    return load_app_settings()
