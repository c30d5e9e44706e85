"""Shared sandbox utilities for root containment checks.

Every file the tools touch must live under one of the configured roots.
Containment is checked twice for anything that came from outside:

1. Nominal check: the joined, normalized path must stay under the root path.
   This rejects ``..`` traversal before touching the filesystem.
2. Real check: the symlink-resolved path must stay under the symlink-resolved
   root. A symlink can point outside the root even when its nominal path is
   contained.

Example:
    Root: /audio/wwise  (real: /mnt/share/wwise)

    ALLOWED:
        Events/Default.wwu          -> /mnt/share/wwise/Events/Default.wwu
        link_to_sub -> ./Events     -> /mnt/share/wwise/Events

    BLOCKED:
        ../unity/Audio.cs           (nominal escape)
        secrets -> /etc             (real escape)
"""

import os
from typing import Optional


def is_within_root(root_dir: str, candidate: str) -> bool:
    """Check whether ``candidate`` lies at or below ``root_dir``.

    The check is purely lexical; callers resolve symlinks first when the
    real location matters.

    Args:
        root_dir: Root directory (absolute).
        candidate: Path to test (absolute).

    Returns:
        True if the relative path from root to candidate does not climb out
        of the root and is not itself absolute.
    """
    try:
        rel = os.path.relpath(candidate, root_dir)
    except ValueError:
        # Different drives on Windows
        return False

    if rel == os.curdir:
        return True
    if rel == os.pardir or rel.startswith(os.pardir + os.sep):
        return False
    return not os.path.isabs(rel)


def real_path_or_none(path: str) -> Optional[str]:
    """Resolve all symlinks in ``path``.

    Returns:
        The canonical path, or None if the path (or a link target) does not
        exist or cannot be resolved.
    """
    try:
        return os.path.realpath(path, strict=True)
    except (OSError, RuntimeError):
        return None


def real_root(root_dir: str) -> str:
    """Resolve a root's real path, falling back to the nominal path."""
    return real_path_or_none(root_dir) or root_dir


def is_contained_real(root_real: str, candidate: str) -> bool:
    """Check that the symlink-resolved ``candidate`` stays inside ``root_real``.

    Args:
        root_real: Real (symlink-resolved) root directory.
        candidate: Path to resolve and test.

    Returns:
        False if the candidate cannot be resolved or resolves outside the root.
    """
    candidate_real = real_path_or_none(candidate)
    if candidate_real is None:
        return False
    return is_within_root(root_real, candidate_real)
