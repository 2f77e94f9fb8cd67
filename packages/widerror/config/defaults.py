"""Built-in default configuration values.

These are the final fallback in the configuration cascade:
init params > ENV vars > config file > built-in defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "widerror" / "widerror.yaml"
ENV_PREFIX = "WIDERROR_"

BUILTIN_DEFAULTS: dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "json_output": True,
        "service": "widerror",
        "environment": "dev",
    },
    "codec": {
        "unknown_discriminants": "reject",
        "max_chain_depth": None,
        "indent": None,
    },
}
