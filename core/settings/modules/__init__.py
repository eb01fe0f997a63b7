# Settings modules
from .anthropic_settings import AnthropicSettings
from .app_settings import AppSettings, get_app_settings, load_app_settings
from .executor_settings import ExecutorSettings
from .generation_settings import GenerationSettings
from .retry_settings import RetrySettings
from .server_settings import ServerSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "load_app_settings",
    "AnthropicSettings",
    "ExecutorSettings",
    "GenerationSettings",
    "RetrySettings",
    "ServerSettings",
]
