"""Typed configuration models for WidError runtime settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, ClassVar, Literal, Mapping

from pydantic import BaseModel, Field
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .defaults import BUILTIN_DEFAULTS, DEFAULT_CONFIG_PATH, ENV_PREFIX
from .loader import load_env_config

UnknownDiscriminantPolicy = Literal["reject", "degrade"]

_LOGGING_DEFAULTS = BUILTIN_DEFAULTS["logging"]
_CODEC_DEFAULTS = BUILTIN_DEFAULTS["codec"]


class LoggingSettings(BaseModel):
    """Structured logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = _LOGGING_DEFAULTS["level"]
    json_output: bool = _LOGGING_DEFAULTS["json_output"]
    service: str = _LOGGING_DEFAULTS["service"]
    environment: str = _LOGGING_DEFAULTS["environment"]


class CodecSettings(BaseModel):
    """Defaults applied by the structured record codec.

    ``unknown_discriminants`` selects between rejecting enum integers outside
    the closed sets and degrading them to the closest safe variant.
    ``max_chain_depth`` caps accepted cause nesting; ``None`` accepts any depth.
    """

    unknown_discriminants: UnknownDiscriminantPolicy = _CODEC_DEFAULTS["unknown_discriminants"]
    max_chain_depth: int | None = Field(default=_CODEC_DEFAULTS["max_chain_depth"], gt=0)
    indent: int | None = Field(default=_CODEC_DEFAULTS["indent"], ge=0)


class MappingEnvSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading prefixed variables from an explicit mapping."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        *,
        environ: Mapping[str, str],
        prefix: str,
    ) -> None:
        super().__init__(settings_cls)
        self._values = load_env_config(environ=environ, prefix=prefix)

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self._values.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._values)


class WidErrorSettings(BaseSettings):
    """Root runtime settings resolved from init/env/yaml/defaults sources."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    codec: CodecSettings = Field(default_factory=CodecSettings)

    _config_path: ClassVar[Path] = DEFAULT_CONFIG_PATH
    _environ: ClassVar[Mapping[str, str] | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply precedence: init > env > yaml > defaults."""
        environ = cls._environ if cls._environ is not None else os.environ
        return (
            init_settings,
            MappingEnvSettingsSource(settings_cls, environ=environ, prefix=ENV_PREFIX),
            YamlConfigSettingsSource(
                settings_cls,
                yaml_file=cls._config_path,
                yaml_file_encoding="utf-8",
            ),
        )


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    config_path: str | Path | None = None,
) -> WidErrorSettings:
    """Resolve settings with an explicit environment and config file.

    ``environ`` defaults to ``os.environ`` and ``config_path`` to
    ``~/.config/widerror/widerror.yaml``; a missing file contributes nothing.
    """
    resolved_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    resolved_environ = dict(environ) if environ is not None else dict(os.environ)

    class _BoundSettings(WidErrorSettings):
        _config_path: ClassVar[Path] = resolved_path
        _environ: ClassVar[Mapping[str, str] | None] = resolved_environ

    return _BoundSettings(**dict(cli_params or {}))
