"""Configuration loading with pydantic-settings.

Sources, highest precedence first:

1. Keyword overrides passed to ``load_config``
2. ``VCTX__SECTION__KEY`` environment variables
3. ``~/.config/vctx/config.yaml``
4. Model defaults
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from vctx.config.models import (
    LoggingConfig,
    ProcessConfig,
    RefreshConfig,
    StorageConfig,
    VctxConfig,
)
from vctx.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/vctx/config.yaml").expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    """Parse a YAML mapping. A missing or empty file reads as ``{}``."""
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


class _SectionSource(PydanticBaseSettingsSource):
    """Feeds already-parsed YAML sections to the settings model."""

    def __init__(self, settings_cls: type[BaseSettings], sections: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._sections = sections

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        section = self._sections.get(field_name)
        return section, field_name, section is not None

    def __call__(self) -> dict[str, Any]:
        return {name: value for name, value in self._sections.items() if value is not None}


def _settings_for(sections: dict[str, Any]) -> type[BaseSettings]:
    """Build a settings class whose file layer is ``sections``."""

    class VctxSettings(BaseSettings):
        """Env vars: VCTX__STORAGE__ROOT, VCTX__REFRESH__ENABLED, ..."""

        model_config = SettingsConfigDict(
            env_prefix="VCTX__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        storage: StorageConfig = StorageConfig()
        refresh: RefreshConfig = RefreshConfig()
        process: ProcessConfig = ProcessConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, _SectionSource(settings_cls, sections))

    return VctxSettings


def load_config(config_path: Path | None = None, **overrides: Any) -> VctxConfig:
    """Resolve configuration from overrides, environment and YAML.

    Args:
        config_path: YAML file to read instead of ``GLOBAL_CONFIG_PATH``
        **overrides: Per-section values, e.g. ``refresh={"enabled": False}``

    Raises:
        ConfigError: If the YAML does not parse or a value fails validation.
    """
    sections = _load_yaml(config_path or GLOBAL_CONFIG_PATH)
    try:
        settings = _settings_for(sections)(**overrides)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ConfigError.invalid_value(location, first.get("input"), first["msg"]) from e
    return VctxConfig.model_validate(settings.model_dump())
