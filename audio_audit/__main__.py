"""Command line entry point for the game audio audit tools.

Runs one tool call against the configured roots and prints the result:

    python -m audio_audit roots
    python -m audio_audit search "UI_Activity" --root wwise
    python -m audio_audit read wwise Events/Default.wwu --max-bytes 4096
    python -m audio_audit check-event UI_Activity_Event410Lottery_Draw

Roots come from game_audio.json (see ``--config``) or from repeated
``--add-root ID=PATH`` options.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv
from rich.console import Console

from audio_audit.plugins.game_audio import GameAudioError, create_plugin, render_result


def _parse_root_specs(specs: List[str]) -> List[Dict[str, str]]:
    roots = []
    for spec in specs:
        root_id, sep, path = spec.partition("=")
        if not sep or not root_id.strip() or not path.strip():
            raise argparse.ArgumentTypeError(f"Invalid root spec (expected ID=PATH): {spec}")
        roots.append({"id": root_id.strip(), "path": path.strip()})
    return roots


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="game-audio-audit",
        description="Read-only search and inspection across game audio roots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List roots from ./game_audio.json
  python -m audio_audit roots

  # Ad-hoc roots without a config file
  python -m audio_audit --add-root wwise=../WwiseProject search "Play_Footstep"

  # Regex search limited to one root
  python -m audio_audit search "Event Name=\\"UI_.*\\"" --regex --root wwise
        """,
    )

    parser.add_argument("--config", metavar="PATH", help="Path to game_audio.json")
    parser.add_argument(
        "--add-root",
        metavar="ID=PATH",
        action="append",
        default=[],
        help="Configure a root directly (repeatable; overrides the config file roots)",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to .env file (default: .env)",
    )
    parser.add_argument("--json", action="store_true", help="Print plain JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("roots", help="List configured roots and limits")

    search = sub.add_parser("search", help="Search for text across roots")
    search.add_argument("query")
    search.add_argument("--root", dest="root_ids", action="append", help="Restrict to root id (repeatable)")
    search.add_argument("--regex", action="store_true", help="Treat query as a regular expression")
    search.add_argument("--case-sensitive", action="store_true", help="Match case exactly")
    search.add_argument("--max-hits", type=int, help="Override the hit budget")

    read = sub.add_parser("read", help="Read a file inside a root")
    read.add_argument("root_id")
    read.add_argument("rel_path")
    read.add_argument("--max-bytes", type=int, help="Maximum bytes to read")

    check = sub.add_parser("check-event", help="Heuristic event cross-check")
    check.add_argument("event_name")

    return parser


def build_tool_call(args: argparse.Namespace) -> Tuple[str, Dict[str, Any]]:
    """Map parsed arguments onto a (tool name, tool arguments) pair."""
    if args.command == "roots":
        return "audio_roots", {}
    if args.command == "search":
        tool_args: Dict[str, Any] = {
            "query": args.query,
            "regex": args.regex,
            "caseSensitive": args.case_sensitive,
        }
        if args.root_ids:
            tool_args["rootIds"] = args.root_ids
        if args.max_hits is not None:
            tool_args["maxHits"] = args.max_hits
        return "audio_search", tool_args
    if args.command == "read":
        tool_args = {"rootId": args.root_id, "relPath": args.rel_path}
        if args.max_bytes is not None:
            tool_args["maxBytes"] = args.max_bytes
        return "audio_read", tool_args
    return "audio_check_event", {"eventName": args.event_name}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    load_dotenv(args.env_file)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    runtime_config: Dict[str, Any] = {}
    if args.config:
        runtime_config["config_path"] = args.config
    try:
        if args.add_root:
            runtime_config["roots"] = _parse_root_specs(args.add_root)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    plugin = create_plugin()
    try:
        plugin.initialize(runtime_config)
    except (GameAudioError, FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        tool_name, tool_args = build_tool_call(args)
        result = plugin.get_executors()[tool_name](tool_args)
    finally:
        plugin.shutdown()

    if args.json:
        print(render_result(result))
    else:
        Console().print_json(data=result)

    return 1 if "error" in result else 0


if __name__ == "__main__":
    sys.exit(main())
