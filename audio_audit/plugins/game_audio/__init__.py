"""Game Audio Plugin - Read-only tools for auditing game audio artifacts.

This plugin provides safe, auto-approved tools for:
- Listing the configured roots (audio_roots)
- Searching file contents across roots (audio_search)
- Reading a file inside a root (audio_read)
- Heuristically checking an event across requirements/Wwise/Unity (audio_check_event)

All tools return structured JSON output.
"""

from .plugin import GameAudioPlugin, create_plugin, render_result
from .config_loader import (
    GameAudioConfig,
    RootConfig,
    load_config,
    validate_config,
    DEFAULT_MAX_FILE_BYTES,
    DEFAULT_MAX_HITS,
)
from .errors import (
    GameAudioError,
    ConfigurationError,
    ConfigValidationError,
    RequestValidationError,
    PolicyViolationError,
    TargetNotFoundError,
)
from .search import SearchHit, SearchResult, search_across_roots
from .event_check import check_event

# Plugin kind identifier for registry discovery
PLUGIN_KIND = "tool"

__all__ = [
    # Plugin
    "GameAudioPlugin",
    "create_plugin",
    "render_result",
    # Configuration
    "GameAudioConfig",
    "RootConfig",
    "load_config",
    "validate_config",
    # Errors
    "GameAudioError",
    "ConfigurationError",
    "ConfigValidationError",
    "RequestValidationError",
    "PolicyViolationError",
    "TargetNotFoundError",
    # Operations
    "SearchHit",
    "SearchResult",
    "search_across_roots",
    "check_event",
    # Constants
    "DEFAULT_MAX_FILE_BYTES",
    "DEFAULT_MAX_HITS",
]
