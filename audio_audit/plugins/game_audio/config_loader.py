"""Configuration loading and validation for the game_audio plugin.

This module handles loading game_audio.json config files and merging them
with hardcoded defaults. Supports three configuration sources (in priority order):
1. Runtime config passed to initialize()
2. Config file (explicit path, GAME_AUDIO_CONFIG_PATH, or default locations)
3. Hardcoded defaults

Keys may be written in the host's camelCase (``maxFileBytes``,
``includeExtensions``...) or in snake_case; both map to the same fields.

Example game_audio.json:

    {
      "roots": [
        {"id": "requirements", "path": "~/Docs/AudioSpecs", "kind": "docs"},
        {"id": "wwise", "path": "../WwiseProject", "exclude": ["/.cache/"]},
        {"id": "unity", "path": "../UnityProject/Assets"}
      ],
      "exclude": ["/.git/", "/Library/", "/Temp/"],
      "includeExtensions": [".md", ".xml", ".wwu", ".cs"],
      "maxFileBytes": 2000000,
      "maxHits": 200,
      "followSymlinks": false
    }
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .errors import ConfigurationError, ConfigValidationError

logger = logging.getLogger(__name__)


# Default limits
DEFAULT_MAX_FILE_BYTES = 2_000_000
DEFAULT_MAX_HITS = 200

CONFIG_FILE_NAME = "game_audio.json"

# Host (camelCase) spelling -> field name
KEY_ALIASES: Dict[str, str] = {
    "maxFileBytes": "max_file_bytes",
    "maxHits": "max_hits",
    "followSymlinks": "follow_symlinks",
    "includeExtensions": "include_extensions",
    "workspaceDir": "workspace_dir",
    "workspace": "workspace_dir",
}


@dataclass(frozen=True)
class RootConfig:
    """One configured root directory.

    Attributes:
        id: Caller-defined identifier (e.g. "requirements", "wwise", "unity").
        path: Raw path as configured, possibly "~"-prefixed or relative.
        kind: Optional free-form tag describing the root's content.
        exclude: Substring patterns excluded under this root only.
    """

    id: str
    path: str
    kind: Optional[str] = None
    exclude: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RootConfig":
        """Create a RootConfig from a raw config entry."""
        kind = data.get("kind")
        exclude = data.get("exclude")
        return cls(
            id=str(data.get("id")),
            path=str(data.get("path", "")),
            kind=kind if isinstance(kind, str) else None,
            exclude=tuple(p for p in exclude if isinstance(p, str))
            if isinstance(exclude, list) else (),
        )


@dataclass
class GameAudioConfig:
    """Structured configuration for the game_audio plugin.

    Attributes:
        roots: Configured roots, in declaration order.
        max_file_bytes: Files larger than this are skipped by search and
            truncated by read.
        max_hits: Default hit budget per search.
        follow_symlinks: Whether the walker and reader may follow symlinks
            that stay inside their root.
        exclude: Global substring exclusion patterns.
        include_extensions: Allowed file extensions (with leading dot);
            empty means every file is eligible.
        workspace_dir: Base directory for relative root paths.
    """

    roots: List[RootConfig] = field(default_factory=list)
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    max_hits: int = DEFAULT_MAX_HITS
    follow_symlinks: bool = False
    exclude: List[str] = field(default_factory=list)
    include_extensions: List[str] = field(default_factory=list)
    workspace_dir: Optional[str] = None

    def limits(self) -> Dict[str, Any]:
        """Return the limits block reported by the roots tool."""
        return {
            "maxFileBytes": self.max_file_bytes,
            "maxHits": self.max_hits,
            "followSymlinks": self.follow_symlinks,
        }


def detect_workspace_root() -> Optional[str]:
    """Auto-detect workspace root from environment variables.

    Checks JAATO_WORKSPACE_ROOT first, then workspaceRoot.

    Returns:
        Absolute path to workspace root, or None if not configured.
    """
    workspace = os.environ.get('JAATO_WORKSPACE_ROOT')
    if workspace:
        return os.path.abspath(workspace)
    workspace = os.environ.get('workspaceRoot')
    if workspace:
        return os.path.abspath(workspace)
    return None


def normalize_keys(config: Dict[str, Any]) -> Dict[str, Any]:
    """Map camelCase host keys onto snake_case field names."""
    return {KEY_ALIASES.get(key, key): value for key, value in config.items()}


def validate_config(config: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """Validate a game_audio configuration dict.

    Only structural problems are reported here. Out-of-range limits are not
    errors; they fall back to defaults when the config is built.

    Args:
        config: Raw configuration dict (camelCase or snake_case keys).

    Returns:
        Tuple of (is_valid, list_of_errors).
    """
    errors: List[str] = []
    config = normalize_keys(config)

    roots = config.get("roots")
    if roots is not None:
        if not isinstance(roots, list):
            errors.append("'roots' must be an array")
        else:
            for index, root in enumerate(roots):
                if not isinstance(root, dict):
                    # Non-object entries are ignored
                    continue
                prefix = f"roots[{index}]"
                if root.get("id") in (None, ""):
                    errors.append(f"{prefix}: 'id' is required")
                if not isinstance(root.get("path"), str) or not root["path"].strip():
                    errors.append(f"{prefix}: 'path' must be a non-empty string")
                if "exclude" in root and not isinstance(root["exclude"], list):
                    errors.append(f"{prefix}: 'exclude' must be an array")

    for key in ("exclude", "include_extensions"):
        value = config.get(key)
        if value is not None and not isinstance(value, list):
            errors.append(f"'{key}' must be an array")

    workspace_dir = config.get("workspace_dir")
    if workspace_dir is not None and not isinstance(workspace_dir, str):
        errors.append("'workspace_dir' must be a string")

    return len(errors) == 0, errors


def _positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return max(1, int(value)) if value > 0 else default


def build_config(config_dict: Dict[str, Any]) -> GameAudioConfig:
    """Build a sanitized GameAudioConfig from merged raw values.

    Raises:
        ConfigurationError: If no usable root is configured.
    """
    raw_roots = config_dict.get("roots")
    roots = [
        RootConfig.from_dict(r)
        for r in (raw_roots if isinstance(raw_roots, list) else [])
        if isinstance(r, dict)
    ]
    if not roots:
        raise ConfigurationError(
            "game_audio plugin misconfigured: roots is required and must be non-empty"
        )

    exclude = config_dict.get("exclude")
    include_extensions = config_dict.get("include_extensions")

    return GameAudioConfig(
        roots=roots,
        max_file_bytes=_positive_int(config_dict.get("max_file_bytes"), DEFAULT_MAX_FILE_BYTES),
        max_hits=_positive_int(config_dict.get("max_hits"), DEFAULT_MAX_HITS),
        follow_symlinks=config_dict.get("follow_symlinks") is True,
        exclude=[p for p in exclude if isinstance(p, str)] if isinstance(exclude, list) else [],
        include_extensions=[
            e for e in include_extensions if isinstance(e, str) and e.strip()
        ] if isinstance(include_extensions, list) else [],
        workspace_dir=config_dict.get("workspace_dir") or detect_workspace_root(),
    )


def load_config(
    path: Optional[str] = None,
    env_var: str = "GAME_AUDIO_CONFIG_PATH",
    runtime_config: Optional[Dict[str, Any]] = None,
    base_path: Optional[str] = None
) -> GameAudioConfig:
    """Load and validate a game_audio configuration.

    Configuration sources are merged in this priority order:
    1. runtime_config (highest priority)
    2. Config file (from path, env_var, or default locations)
    3. Hardcoded defaults (lowest priority)

    Args:
        path: Direct path to config file. If None, uses env_var or defaults.
        env_var: Environment variable name for config path.
        runtime_config: Runtime configuration dict passed to initialize().
        base_path: Base directory for resolving default config locations.

    Returns:
        GameAudioConfig instance with merged configuration.

    Raises:
        FileNotFoundError: If explicit path doesn't exist.
        ConfigValidationError: If config validation fails.
        ConfigurationError: If no roots are configured after merging.
        json.JSONDecodeError: If config file is not valid JSON.
    """
    config_dict: Dict[str, Any] = {
        "roots": [],
        "max_file_bytes": DEFAULT_MAX_FILE_BYTES,
        "max_hits": DEFAULT_MAX_HITS,
        "follow_symlinks": False,
        "exclude": [],
        "include_extensions": [],
        "workspace_dir": None,
    }

    # Resolve config file path
    config_path = None
    if path is not None:
        config_path = Path(path)
    else:
        env_path = os.environ.get(env_var)
        if env_path:
            config_path = Path(env_path)
        else:
            cwd = Path(base_path) if base_path else Path(detect_workspace_root() or Path.cwd())
            default_paths = [
                cwd / ".jaato" / CONFIG_FILE_NAME,
                cwd / CONFIG_FILE_NAME,
                Path.home() / ".config" / "jaato" / CONFIG_FILE_NAME,
            ]
            for default_path in default_paths:
                if default_path.exists():
                    config_path = default_path
                    logger.debug("Found config file at: %s", config_path)
                    break

    if config_path is not None:
        if path is not None and not config_path.exists():
            raise FileNotFoundError(f"Game audio config file not found: {config_path}")

        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                file_config = json.load(f)

            if not isinstance(file_config, dict):
                raise ConfigValidationError([f"{config_path} must contain a JSON object"])

            is_valid, errors = validate_config(file_config)
            if not is_valid:
                raise ConfigValidationError(errors)

            for key, value in normalize_keys(file_config).items():
                if key in config_dict:
                    config_dict[key] = value

            logger.info("Loaded game_audio config from: %s", config_path)

    if runtime_config:
        is_valid, errors = validate_config(runtime_config)
        if not is_valid:
            raise ConfigValidationError(errors)

        for key, value in normalize_keys(runtime_config).items():
            if key in config_dict:
                config_dict[key] = value

        logger.debug("Applied runtime configuration overrides")

    return build_config(config_dict)


__all__ = [
    "RootConfig",
    "GameAudioConfig",
    "ConfigValidationError",
    "detect_workspace_root",
    "normalize_keys",
    "validate_config",
    "build_config",
    "load_config",
    "DEFAULT_MAX_FILE_BYTES",
    "DEFAULT_MAX_HITS",
]
