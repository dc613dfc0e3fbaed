# src/design_token_compiler/pipeline/general/utils/load_config.py

"""Load build configuration JSON from a <data/> directory with an mtime cache.

Modes:
- "raw"             -> return parsed JSON as-is
- "validated_dict"  -> require a JSON object, then pass it through `validator`

The validator owns its error type: whatever it raises (e.g. BuildConfigError
from the build planner) propagates unchanged. Its result is cached per
(file, mtime, validator), so validators must return immutable values.

Used by the platform build planner (platforms.json).
"""

from __future__ import annotations

import json
import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal

# ── Public surface ────────────────────────────────────────────────────────────
Mode = Literal["raw", "validated_dict"]
Validator = Callable[[dict[str, Any]], Any]
__all__ = [
    "Mode",
    "Validator",
    "load_config",
    "clear_config_cache",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
]


# ── Exceptions ───────────────────────────────────────────────────────────────
class DataDirNotFound(FileNotFoundError):
    """Raise when no 'data' directory is found while walking upwards."""


class ConfigFileNotFound(FileNotFoundError):
    """Raise when the requested config file cannot be read or resolved."""


class ConfigParseError(ValueError):
    """Raise when a config file is not valid JSON."""


class ConfigTypeError(TypeError):
    """Raise when the parsed JSON doesn't match the expected structure."""


# ── Logging & cache ──────────────────────────────────────────────────────────
log = logging.getLogger(__name__)
_CACHE_LOCK = threading.RLock()
# cache key: path, mtime, mode, validator
_CONFIG_CACHE: dict[tuple[Path, float, str, Validator | None], Any] = {}

_ENV_VARS = ("DATA_DIR", "DTC_DATA_DIR")


def clear_config_cache() -> None:
    """Empty the in-memory config cache (useful for pytest/hot-reload)."""
    with _CACHE_LOCK:
        _CONFIG_CACHE.clear()
        log.debug("Config cache cleared.")


# =============================================================================
# 1) LOCATE
# =============================================================================

def _candidate_data_dirs(start: Path | None = None) -> list[Path]:
    """Every `<dir>/data` from start upwards; the package's own data/ comes first."""
    start = (start or Path(__file__)).resolve()
    return [(p / "data").resolve() for p in [start, *start.parents]]


def _default_data_dir() -> Path:
    candidates = _candidate_data_dirs()
    for cand in candidates:
        if cand.is_dir():
            return cand
    raise DataDirNotFound("No 'data' directory found.\nTried:\n  " + "\n  ".join(map(str, candidates)))


def _env_data_dir() -> Path | None:
    for var in _ENV_VARS:
        v = os.environ.get(var)
        if v:
            return Path(os.path.expanduser(v)).resolve()
    return None


def _config_path(file: str | os.PathLike[str], base_dir: str | os.PathLike[str] | None) -> Path:
    """
    Does: Resolve <base>/<file>.json where base is explicit > env > discovered.
    Raises: ConfigFileNotFound when the file is missing or escapes the base dir.
    """
    data_dir = Path(base_dir).resolve() if base_dir is not None else (_env_data_dir() or _default_data_dir())
    name = os.fspath(file)
    if not name.endswith(".json"):
        name += ".json"
    path = (data_dir / name).resolve()
    try:
        path.relative_to(data_dir)
    except ValueError as e:
        raise ConfigFileNotFound(f"Refusing to access file outside data dir: {path} (base={data_dir})") from e
    if not path.is_file():
        raise ConfigFileNotFound(f"Config file not found: {path}")
    return path


# =============================================================================
# 2) READ
# =============================================================================

def _read_json(path: Path, encoding: str) -> Any:
    try:
        with path.open("r", encoding=encoding) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileNotFound(f"Cannot read {path}: {e}") from e


def load_config(
    file: str | os.PathLike[str],
    mode: Mode = "raw",
    *,
    base_dir: str | os.PathLike[str] | None = None,
    encoding: str = "utf-8",
    validator: Validator | None = None,
) -> Any:
    """
    Does: Load <data>/<file>.json, check its shape for `mode`, run the validator,
          and cache the result until the file's mtime changes.
    Raises: DataDirNotFound, ConfigFileNotFound, ConfigParseError, ConfigTypeError,
            or whatever the validator raises.
    """
    if mode not in ("raw", "validated_dict"):
        raise ValueError(f"Unknown mode '{mode}'")
    if validator is not None and mode != "validated_dict":
        raise ValueError("A validator requires mode 'validated_dict'")

    path = _config_path(file, base_dir)
    try:
        mtime = path.stat().st_mtime
    except OSError as e:
        raise ConfigFileNotFound(f"Cannot stat {path}: {e}") from e

    cache_key = (path, mtime, mode, validator)
    with _CACHE_LOCK:
        if cache_key in _CONFIG_CACHE:
            log.debug("Config cache HIT: %s (mode=%s)", path.name, mode)
            return _CONFIG_CACHE[cache_key]

    result = _read_json(path, encoding)
    if mode == "validated_dict":
        if not isinstance(result, dict):
            raise ConfigTypeError(f"{path.name}: expected a JSON object, got {type(result).__name__}")
        if validator is not None:
            result = validator(result)

    with _CACHE_LOCK:
        _CONFIG_CACHE[cache_key] = result
        log.debug("Config cache MISS → STORED: %s (mode=%s)", path.name, mode)
    return result
