# design_token_compiler/pipeline/general/utils/__init__.py
"""

Does: Provide config loading and lightweight topic debug tracing for the build stack.
Returns: Public API via load_config/clear_config_cache and debug/reload_topics.
Used by: Build planner, resolver, tests.
"""

from __future__ import annotations

from .load_config import (
    ConfigFileNotFound,
    ConfigParseError,
    ConfigTypeError,
    DataDirNotFound,
    clear_config_cache,
    load_config,
)
from .log import (
    debug,
    reload_topics,
)

__all__ = [
    # Config loading
    "load_config",
    "clear_config_cache",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
    # Logging helpers
    "debug",
    "reload_topics",
]
