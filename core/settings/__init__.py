# Settings package
from core.settings.modules import AppSettings, get_app_settings, load_app_settings

__all__ = ["get_app_settings", "load_app_settings", "AppSettings"]
