"""SnippetRAG configuration management.

Loads configuration from .snippetrag/config.yaml with defaults taken from the
dataclasses in ``types.py``. Every setting can be overridden via environment
variables (SNIPPETRAG_<SECTION>_<KEY>).

Config locations (in priority order):
1. Explicit path passed to load_config()
2. .snippetrag/config.yaml (project-local)
3. ~/.snippetrag/config.yaml (user-global)
4. Built-in defaults

Core code never calls get_config(); the CLI and session read it once and pass
plain values down.
"""


import logging
import os
import threading
from dataclasses import asdict
from pathlib import Path
from typing import Any

import yaml

from snippetrag.foundation.config.types import (
    AnalysisConfig,
    BackendConfig,
    SnippetRagConfig,
)
from snippetrag.foundation.errors import config_error

logger = logging.getLogger(__name__)

_ENV_PREFIX = "SNIPPETRAG_"

# Global config instance (lazy-loaded, thread-safe)
_config: SnippetRagConfig | None = None
_config_lock = threading.Lock()


def _defaults() -> dict[str, Any]:
    return asdict(SnippetRagConfig())


def _deep_update(base: dict, updates: dict) -> dict:
    """Recursively update a dict with another dict."""
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def _coerce(value: str) -> Any:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    return value


def _apply_env_overrides(config_dict: dict, environ: dict[str, str] | None = None) -> dict:
    """Apply environment variable overrides.

    Examples:
        SNIPPETRAG_BACKEND_SERVER_URL=http://rag.internal:8000
        SNIPPETRAG_ANALYSIS_MAX_FILES=2000
        SNIPPETRAG_DEBUG=true
    """
    env = os.environ if environ is None else environ

    for key, value in env.items():
        if not key.startswith(_ENV_PREFIX):
            continue
        path_str = key[len(_ENV_PREFIX):].lower()

        if path_str in config_dict and not isinstance(config_dict[path_str], dict):
            config_dict[path_str] = _coerce(value)
            continue

        for section, section_values in config_dict.items():
            if not isinstance(section_values, dict) or not path_str.startswith(section + "_"):
                continue
            field_name = path_str[len(section) + 1:]
            if field_name in section_values:
                section_values[field_name] = _coerce(value)
            break

    return config_dict


def _dict_to_config(data: dict) -> SnippetRagConfig:
    """Convert a dict to SnippetRagConfig."""
    sections = {"backend": BackendConfig, "analysis": AnalysisConfig}
    built: dict[str, Any] = {}
    for name, cls in sections.items():
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise config_error(name, "expected a mapping")
        try:
            built[name] = cls(**section)
        except TypeError as e:
            raise config_error(name, str(e)) from e

    return SnippetRagConfig(
        backend=built["backend"],
        analysis=built["analysis"],
        debug=bool(data.get("debug", False)),
    )


def load_config(path: str | Path | None = None) -> SnippetRagConfig:
    """Load configuration from file with defaults and env overrides.

    Args:
        path: Optional explicit config file path.

    Returns:
        Merged SnippetRagConfig instance.

    Raises:
        SnippetRagError: CONFIG_INVALID when a merged value fails validation.
    """
    global _config

    config_dict = _defaults()

    config_paths = []
    if path:
        config_paths.append(Path(path))
    config_paths.extend([
        Path(".snippetrag/config.yaml"),
        Path.home() / ".snippetrag" / "config.yaml",
    ])

    for config_path in config_paths:
        if not config_path.exists():
            continue
        try:
            with open(config_path, encoding="utf-8") as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("config.unreadable path=%s error=%s", config_path, e)
            continue
        if not isinstance(file_config, dict):
            logger.warning("config.ignored path=%s reason=not-a-mapping", config_path)
            continue
        _deep_update(config_dict, file_config)
        logger.debug("config.loaded path=%s", config_path)
        break  # Use first found config

    config_dict = _apply_env_overrides(config_dict)

    _config = _dict_to_config(config_dict)
    return _config


def get_config() -> SnippetRagConfig:
    """Get the current configuration, loading if needed.

    Thread-safe with double-check locking.
    """
    global _config

    if _config is not None:
        return _config

    with _config_lock:
        if _config is None:
            _config = load_config()
        return _config


def reset_config() -> None:
    """Reset the global config (useful for testing)."""
    global _config
    with _config_lock:
        _config = None
