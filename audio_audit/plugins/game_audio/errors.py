"""Error taxonomy for the game_audio tools.

Core functions raise these; the plugin executors turn them into
``{"error": ..., "error_type": ...}`` results. Soft skips (oversized files,
unreadable directories) never raise and are counted instead.
"""

from typing import List


class GameAudioError(Exception):
    """Base class for errors surfaced to the tool caller."""

    error_type = "error"


class ConfigurationError(GameAudioError):
    """The plugin configuration is unusable (e.g. no roots configured)."""

    error_type = "configuration"


class ConfigValidationError(ConfigurationError):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


class RequestValidationError(GameAudioError):
    """A tool argument is missing, empty or unsafe."""

    error_type = "validation"


class PolicyViolationError(GameAudioError):
    """The request would leave a root, hit an exclusion, or follow a forbidden symlink."""

    error_type = "policy"


class TargetNotFoundError(GameAudioError):
    """The root or target file does not exist, or the target is not a regular file."""

    error_type = "not_found"
