"""Public API for WidError configuration utilities."""

from .defaults import BUILTIN_DEFAULTS, DEFAULT_CONFIG_PATH, ENV_PREFIX
from .models import (
    CodecSettings,
    LoggingSettings,
    UnknownDiscriminantPolicy,
    WidErrorSettings,
    load_settings,
)

__all__ = [
    "BUILTIN_DEFAULTS",
    "CodecSettings",
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "LoggingSettings",
    "UnknownDiscriminantPolicy",
    "WidErrorSettings",
    "load_settings",
]
