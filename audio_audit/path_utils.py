"""Path utilities for resolving user-supplied root and file paths.

Root paths come from host configuration and may be written in several ways:

    ~                      -> the user's home directory
    ~/Projects/Wwise       -> a directory under the home directory
    ../UnityProject        -> relative to the workspace base directory
    C:\\Audio\\Wwise        -> Windows separators (normalized for matching)

This module provides:
- Home directory expansion for the ``~`` shorthand only (``~user`` is left alone)
- Absolute path resolution against a base directory
- Separator normalization for substring matching and result display
"""

import os
from typing import Optional


# The home-directory shorthand recognised in configured paths
HOME_SHORTHAND = "~"


def normalize_for_match(path: str) -> str:
    """Normalize path separators to forward slashes.

    Exclusion patterns are written with forward slashes (``/.git/``,
    ``/Library/``) so paths are normalized the same way before a substring
    test, regardless of the platform separator.

    Args:
        path: Path string to normalize.

    Returns:
        Path with every backslash replaced by a forward slash.
    """
    if not path:
        return path
    return path.replace("\\", "/")


def expand_home(path: str) -> str:
    """Expand a leading ``~`` to the current user's home directory.

    Only the bare shorthand and the shorthand followed by a separator are
    expanded. Anything else (including ``~other``) is returned unchanged.

    Args:
        path: Path string, possibly starting with ``~``.

    Returns:
        Path with the home shorthand substituted.
    """
    if path == HOME_SHORTHAND:
        return os.path.expanduser(HOME_SHORTHAND)
    if path.startswith(HOME_SHORTHAND + "/") or path.startswith(HOME_SHORTHAND + os.sep):
        return os.path.join(os.path.expanduser(HOME_SHORTHAND), path[2:])
    return path


def to_abs_path(input_path: str, base_dir: Optional[str] = None) -> str:
    """Resolve a configured path to a normalized absolute path.

    The input is trimmed and home-expanded. Relative results are resolved
    against ``base_dir`` (itself home-expanded) or, when no base is given,
    against the process working directory. Symlinks are NOT resolved here;
    see ``sandbox_utils`` for real-path containment.

    Args:
        input_path: Raw path from configuration or a tool argument.
        base_dir: Optional base directory for relative paths.

    Returns:
        Absolute path with ``.``/``..`` segments collapsed.
    """
    expanded = expand_home(input_path.strip())
    if os.path.isabs(expanded):
        return os.path.normpath(expanded)
    base = expand_home(base_dir) if base_dir else os.getcwd()
    return os.path.normpath(os.path.join(os.path.abspath(base), expanded))


def display_path(path: str) -> str:
    """Normalize a path for inclusion in tool results."""
    return normalize_for_match(path)
