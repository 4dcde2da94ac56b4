"""Configuration loading — read-only JSON config under the user config dir."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from kds.models import (
    CONFIG_APP_NAME,
    REQUEST_TIMEOUT_DEFAULT,
    REQUEST_TIMEOUT_LIMIT,
    UserConfig,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration Loading
# ============================================================================
#
# Validation contract: _dict_to_config() guarantees valid output for any input:
#
#   Field                    Rule                        Handler
#   ───────────────────────  ──────────────────────────  ─────────────────────────
#   request_timeout_seconds  1 ≤ x ≤ 300                 _coerce_request_timeout
#   scalar fields            type-checked via _safe_get  _dict_to_config
#
# The file is never written; kds only reads it.
#
CONFIG_FILENAME = "config.json"


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Uses platformdirs for cross-platform config directory:
    - Linux: ~/.config/kds/config.json
    - macOS: ~/Library/Application Support/kds/config.json
    - Windows: %APPDATA%/kds/config.json
    """
    config_dir = Path(user_config_dir(CONFIG_APP_NAME))
    return config_dir / CONFIG_FILENAME


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    if not isinstance(value, expected_type):
        return default
    return value


def _coerce_request_timeout(value: Any) -> int:
    """Validate and clamp the configured Kubernetes request timeout."""
    if isinstance(value, bool) or not isinstance(value, int):
        return REQUEST_TIMEOUT_DEFAULT
    return max(1, min(value, REQUEST_TIMEOUT_LIMIT))


def _dict_to_config(data: dict[str, Any]) -> UserConfig:
    """Deserialize a dictionary to UserConfig with type validation."""
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return UserConfig(
        theme_name=_safe_get(data, "theme_name", "default", str),
        kubeconfig=_safe_get(data, "kubeconfig", "", str),
        namespace=_safe_get(data, "namespace", "", str).strip(),
        request_timeout_seconds=_coerce_request_timeout(
            data.get("request_timeout_seconds", REQUEST_TIMEOUT_DEFAULT)
        ),
        version=_safe_get(data, "version", 1, int),
    )


def load_config(path: Path | None = None) -> UserConfig:
    """Load configuration from disk.

    Returns default config if file doesn't exist or is corrupted. A corrupt
    file yields defaults with ``config_defaulted`` set so the app can say so.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return UserConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        return _dict_to_config(data)
    except json.JSONDecodeError as e:
        logger.warning("Config file has invalid JSON, using defaults: %s", e)
        return UserConfig(config_defaulted=True)
    except (KeyError, TypeError) as e:
        logger.warning("Config file has invalid structure, using defaults: %s", e)
        return UserConfig(config_defaulted=True)
    except OSError as e:
        logger.warning("Could not read config file, using defaults: %s", e)
        return UserConfig()


__all__ = [
    "CONFIG_FILENAME",
    "get_config_path",
    "load_config",
]
