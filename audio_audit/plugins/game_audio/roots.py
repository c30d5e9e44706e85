"""Root resolution for the game_audio tools.

Roots are resolved fresh on every call so that configuration changes and
directories appearing or disappearing on disk are picked up immediately.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ...path_utils import to_abs_path
from .config_loader import GameAudioConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedRoot:
    """A configured root with its absolute path and existence probed."""

    id: str
    path: str
    exists: bool
    kind: Optional[str] = None
    exclude: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind,
            "path": self.path,
            "exists": self.exists,
            "exclude": list(self.exclude),
        }


def _path_exists(path: str) -> bool:
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def resolve_roots(config: GameAudioConfig) -> List[ResolvedRoot]:
    """Resolve every configured root against the workspace directory.

    An unreachable root is reported with ``exists=False`` rather than failing.
    """
    resolved = []
    for root in config.roots:
        abs_path = to_abs_path(root.path, config.workspace_dir)
        exists = _path_exists(abs_path)
        if not exists:
            logger.debug("Root '%s' does not exist: %s", root.id, abs_path)
        resolved.append(ResolvedRoot(
            id=root.id,
            path=abs_path,
            exists=exists,
            kind=root.kind,
            exclude=root.exclude,
        ))
    return resolved


def select_roots(
    roots: List[ResolvedRoot],
    root_ids: Optional[List[str]] = None,
) -> List[ResolvedRoot]:
    """Restrict roots to ``root_ids``, keeping declaration order.

    Unknown ids are dropped silently. ``None`` or an empty list selects all roots.
    """
    if not root_ids:
        return list(roots)
    wanted = set(root_ids)
    return [root for root in roots if root.id in wanted]


def find_root(roots: List[ResolvedRoot], root_id: str) -> Optional[ResolvedRoot]:
    """Return the first root with the given id, or None."""
    for root in roots:
        if root.id == root_id:
            return root
    return None
