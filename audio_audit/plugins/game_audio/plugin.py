"""Game Audio Plugin - Read-only tools for auditing game audio artifacts.

This plugin provides safe, auto-approved tools for cross-checking audio
events across several configured roots (requirement documents, Wwise work
units, Unity sources):
- Listing the configured roots (audio_roots)
- Searching file contents by substring or regex (audio_search)
- Reading a single file inside a root (audio_read)
- Checking where an event is mentioned, defined and referenced (audio_check_event)

All tools return structured JSON output. Configuration and roots are
re-resolved on every call.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from ..base import ToolSchema, UserCommand
from .config_loader import GameAudioConfig, load_config
from .errors import GameAudioError, RequestValidationError
from .event_check import check_event
from .reader import read_file_from_root, validate_rel_path
from .roots import resolve_roots
from .search import search_across_roots

logger = logging.getLogger(__name__)

TOOL_NAMES = ["audio_roots", "audio_search", "audio_read", "audio_check_event"]


def render_result(result: Dict[str, Any]) -> str:
    """Render a tool result as human-readable text (indented JSON)."""
    return json.dumps(result, indent=2, ensure_ascii=False)


class GameAudioPlugin:
    """Plugin providing read-only game audio audit tools.

    Configuration (runtime dict, merged over the game_audio.json file):
    - roots: list of {id, path, kind?, exclude?} (required, non-empty)
    - exclude: global substring exclusion patterns
    - includeExtensions: allowed file extensions (empty = all)
    - maxFileBytes, maxHits, followSymlinks: limits and symlink policy
    - config_path: optional explicit path to a game_audio.json file
    """

    def __init__(self):
        """Initialize the game audio plugin."""
        self._config: Optional[GameAudioConfig] = None
        self._runtime_config: Dict[str, Any] = {}
        self._config_path: Optional[str] = None

    @property
    def name(self) -> str:
        """Return the plugin name."""
        return "game_audio"

    def initialize(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the plugin with configuration.

        The configuration is loaded once here so that a missing or malformed
        root list fails immediately, and again on every tool call.

        Args:
            config: Optional configuration dict overriding the config file.

        Raises:
            ConfigurationError: If no roots are configured.
        """
        config = dict(config or {})
        self._config_path = config.pop("config_path", None)
        self._runtime_config = config
        self._config = self._load_config()
        logger.info(
            "GameAudioPlugin initialized (roots=%s, max_hits=%d, follow_symlinks=%s)",
            ", ".join(root.id for root in self._config.roots),
            self._config.max_hits,
            self._config.follow_symlinks,
        )

    def shutdown(self) -> None:
        """Shutdown the plugin and release resources."""
        self._config = None
        logger.info("GameAudioPlugin shutdown")

    def _load_config(self) -> GameAudioConfig:
        return load_config(path=self._config_path, runtime_config=self._runtime_config)

    def get_tool_schemas(self) -> List[ToolSchema]:
        """Return the tool schemas for the four audit tools."""
        return [
            ToolSchema(
                name="audio_roots",
                description="List configured game-audio roots and whether they exist.",
                parameters={
                    "type": "object",
                    "properties": {},
                    "additionalProperties": False,
                },
                category="search",
                discoverability="discoverable",
            ),
            ToolSchema(
                name="audio_search",
                description=(
                    "Search for a string (or regex) across the configured audio roots. "
                    "Read-only."
                ),
                parameters={
                    "type": "object",
                    "properties": {
                        "query": {
                            "type": "string",
                            "description": "Text (or regex pattern) to search for.",
                        },
                        "rootIds": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": "Optional root ids to restrict search.",
                        },
                        "regex": {
                            "type": "boolean",
                            "description": "Treat query as regex.",
                        },
                        "caseSensitive": {
                            "type": "boolean",
                            "description": "Case-sensitive match.",
                        },
                        "maxHits": {
                            "type": "number",
                            "description": "Override max hits for this search.",
                        },
                    },
                    "required": ["query"],
                    "additionalProperties": False,
                },
                category="search",
                discoverability="discoverable",
            ),
            ToolSchema(
                name="audio_read",
                description=(
                    "Read a file within a configured root (rootId + relPath). Read-only."
                ),
                parameters={
                    "type": "object",
                    "properties": {
                        "rootId": {
                            "type": "string",
                            "description": "Root id.",
                        },
                        "relPath": {
                            "type": "string",
                            "description": "File path relative to the root.",
                        },
                        "maxBytes": {
                            "type": "number",
                            "description": "Max bytes to read.",
                        },
                    },
                    "required": ["rootId", "relPath"],
                    "additionalProperties": False,
                },
                category="filesystem",
                discoverability="discoverable",
            ),
            ToolSchema(
                name="audio_check_event",
                description=(
                    "Heuristic check for a Wwise event name across requirements + "
                    "Wwise + Unity roots. Read-only."
                ),
                parameters={
                    "type": "object",
                    "properties": {
                        "eventName": {
                            "type": "string",
                            "description": (
                                "Wwise event name (e.g. UI_Activity_Event410Lottery_Draw)."
                            ),
                        },
                    },
                    "required": ["eventName"],
                    "additionalProperties": False,
                },
                category="search",
                discoverability="discoverable",
            ),
        ]

    def get_executors(self) -> Dict[str, Callable[[Dict[str, Any]], Any]]:
        """Return the executor functions for each tool."""
        return {
            "audio_roots": self._execute_roots,
            "audio_search": self._execute_search,
            "audio_read": self._execute_read,
            "audio_check_event": self._execute_check_event,
        }

    def get_auto_approved_tools(self) -> List[str]:
        """Return tools that don't require permission (all are read-only)."""
        return list(TOOL_NAMES)

    def get_user_commands(self) -> List[UserCommand]:
        """Return user-facing commands (none for this plugin)."""
        return []

    def get_system_instructions(self) -> Optional[str]:
        """Return system instructions for the model."""
        return """You have access to read-only game audio audit tools.

They search the configured roots (typically "requirements" documents, the
"wwise" project with its .wwu work units, and the "unity" project sources).

## audio_roots
Lists the configured roots, whether each exists on disk, and the limits in
effect (maxFileBytes, maxHits, followSymlinks).

## audio_search
Finds lines containing `query` (or matching it when `regex` is true).
Restrict to specific roots with `rootIds`. Matching is case-insensitive
unless `caseSensitive` is true. Hits are capped at `maxHits`.

## audio_read
Reads a file by `rootId` and `relPath` (relative, no `..`). Large files are
truncated to `maxBytes`; check the `truncated` flag.

## audio_check_event
Checks an event name in one call: mentioned in requirements, defined in
Wwise (Name="<event>" attribute), referenced from Unity. The result is a
heuristic: a missing hit is evidence, not proof. Follow up with audio_search
or audio_read to confirm.
"""

    # --- Tool implementations ---

    def _run(
        self,
        tool_name: str,
        fn: Callable[[GameAudioConfig], Dict[str, Any]],
        validate: Optional[Callable[[], None]] = None,
    ) -> Dict[str, Any]:
        """Validate arguments, load fresh configuration, run ``fn`` and map errors to results."""
        try:
            if validate is not None:
                validate()
            return fn(self._load_config())
        except GameAudioError as e:
            logger.debug("%s rejected: %s", tool_name, e)
            return {"error": str(e), "error_type": e.error_type}
        except Exception as e:
            logger.exception("Error in %s: %s", tool_name, e)
            return {"error": f"{tool_name} failed: {e}"}

    def _execute_roots(self, args: Dict[str, Any]) -> Dict[str, Any]:
        """Execute the audio_roots tool."""
        def run(config: GameAudioConfig) -> Dict[str, Any]:
            return {
                "roots": [root.to_dict() for root in resolve_roots(config)],
                "limits": config.limits(),
                "exclude": list(config.exclude),
                "includeExtensions": list(config.include_extensions),
            }
        return self._run("audio_roots", run)

    def _execute_search(self, args: Dict[str, Any]) -> Dict[str, Any]:
        """Execute the audio_search tool.

        Args:
            args: Tool arguments containing query, rootIds, regex, etc.

        Returns:
            Dict with the query, rootIds, hits and scan counters.
        """
        query = args.get("query")
        query = query if isinstance(query, str) else ""
        root_ids = args.get("rootIds")
        root_ids = [r for r in root_ids if isinstance(r, str)] if isinstance(root_ids, list) else None

        def validate() -> None:
            if not query.strip():
                raise RequestValidationError("query required")

        def run(config: GameAudioConfig) -> Dict[str, Any]:
            result = search_across_roots(
                config,
                query,
                root_ids=root_ids,
                regex=args.get("regex") is True,
                case_sensitive=args.get("caseSensitive") is True,
                max_hits=args.get("maxHits"),
            )
            return {"query": query, "rootIds": root_ids, **result.to_dict()}
        return self._run("audio_search", run, validate)

    def _execute_read(self, args: Dict[str, Any]) -> Dict[str, Any]:
        """Execute the audio_read tool.

        Args:
            args: Tool arguments containing rootId, relPath and maxBytes.

        Returns:
            Dict with rootId, absPath, relPath, truncated and text.
        """
        root_id = args.get("rootId")
        root_id = root_id if isinstance(root_id, str) else ""
        rel_path = args.get("relPath")
        rel_path = rel_path if isinstance(rel_path, str) else ""

        def validate() -> None:
            if not root_id.strip() or not rel_path.strip():
                raise RequestValidationError("rootId and relPath required")
            validate_rel_path(rel_path)

        def run(config: GameAudioConfig) -> Dict[str, Any]:
            return read_file_from_root(config, root_id, rel_path, max_bytes=args.get("maxBytes"))
        return self._run("audio_read", run, validate)

    def _execute_check_event(self, args: Dict[str, Any]) -> Dict[str, Any]:
        """Execute the audio_check_event tool."""
        event_name = args.get("eventName")
        event_name = event_name if isinstance(event_name, str) else ""

        def validate() -> None:
            if not event_name.strip():
                raise RequestValidationError("eventName required")

        return self._run(
            "audio_check_event",
            lambda config: check_event(config, event_name),
            validate,
        )


def create_plugin() -> GameAudioPlugin:
    """Factory function for plugin discovery.

    Returns:
        A new GameAudioPlugin instance.
    """
    return GameAudioPlugin()


__all__ = ["GameAudioPlugin", "create_plugin", "render_result"]
