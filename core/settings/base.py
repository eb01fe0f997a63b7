# core/settings/base.py
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


class ProcessorBaseSettings(BaseSettings):
    """
    Base for every settings section.

    Source priority (highest first): environment, .env file, values passed
    to the constructor (the YAML config file), field defaults.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, dotenv_settings, init_settings, file_secret_settings
