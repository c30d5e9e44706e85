"""Heuristic cross-check of a Wwise event across the conventional roots.

Four independent searches run concurrently:

    requirements   plain mention of the event in root "requirements"
    wwiseNameAttr  Name="<event>" attribute in root "wwise"
    unityRefs      plain mention of the event in root "unity"
    fallback       plain mention across all roots (always run)

A branch that raises is reported as None; the other branches still complete.
The root ids are a naming convention only. With differently named roots the
targeted branches find nothing and only the fallback carries information.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional

from .config_loader import GameAudioConfig
from .errors import RequestValidationError
from .search import search_across_roots

logger = logging.getLogger(__name__)

REQUIREMENTS_ROOT_ID = "requirements"
WWISE_ROOT_ID = "wwise"
UNITY_ROOT_ID = "unity"

HEURISTIC_NOTES = (
    'This tool is heuristic. For Wwise, it looks for Name="<event>" in XML/WWU. '
    "If your event is generated or stored differently, use audio_search to locate it."
)


def wwise_name_attribute(event_name: str) -> str:
    """Return the work-unit attribute text that defines ``event_name``."""
    return f'Name="{event_name}"'


def _has_hits(result: Optional[Dict[str, Any]]) -> bool:
    return bool(result and result.get("hits"))


def check_event(config: GameAudioConfig, event_name: str) -> Dict[str, Any]:
    """Run the four event searches and derive the interpretation flags.

    Args:
        config: Plugin configuration.
        event_name: Wwise event name, e.g. ``UI_Activity_Event410Lottery_Draw``.

    Returns:
        Dict with ``eventName``, the raw ``checks`` (search result dicts or
        None per branch) and the derived ``interpretation``.

    Raises:
        RequestValidationError: If ``event_name`` is empty.
    """
    if not event_name or not event_name.strip():
        raise RequestValidationError("eventName required")

    branches = {
        "requirements": dict(query=event_name, root_ids=[REQUIREMENTS_ROOT_ID]),
        "wwiseNameAttr": dict(query=wwise_name_attribute(event_name), root_ids=[WWISE_ROOT_ID]),
        "unityRefs": dict(query=event_name, root_ids=[UNITY_ROOT_ID]),
        "fallback": dict(query=event_name),
    }

    checks: Dict[str, Optional[Dict[str, Any]]] = {}
    with ThreadPoolExecutor(max_workers=len(branches)) as executor:
        futures = {
            name: executor.submit(search_across_roots, config, **kwargs)
            for name, kwargs in branches.items()
        }
        for name, future in futures.items():
            try:
                checks[name] = future.result().to_dict()
            except Exception as e:
                logger.debug("Event check branch '%s' failed: %s", name, e)
                checks[name] = None

    return {
        "eventName": event_name,
        "checks": checks,
        "interpretation": {
            "requirementsMentioned": _has_hits(checks["requirements"]),
            "wwiseProbablyDefined": _has_hits(checks["wwiseNameAttr"]),
            "unityReferenced": _has_hits(checks["unityRefs"]),
            "notes": HEURISTIC_NOTES,
        },
    }
