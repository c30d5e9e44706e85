"""Exclusion and extension filters applied during traversal and reads."""

import os
from typing import Iterable

from ...path_utils import normalize_for_match


def should_exclude(
    file_path: str,
    global_exclude: Iterable[str],
    root_exclude: Iterable[str],
) -> bool:
    """Check if a path matches any exclusion pattern.

    Patterns are plain substrings (no glob or regex semantics) tested against
    the separator-normalized path. Global patterns are checked first, then
    the root's own patterns; empty patterns never match.

    Args:
        file_path: Absolute path of the entry.
        global_exclude: Patterns applied to every root.
        root_exclude: Patterns applied to this root only.

    Returns:
        True if the path should be skipped.
    """
    norm = normalize_for_match(file_path)
    for pattern in global_exclude:
        if pattern and pattern in norm:
            return True
    for pattern in root_exclude:
        if pattern and pattern in norm:
            return True
    return False


def extension_allowed(file_path: str, include_extensions: Iterable[str]) -> bool:
    """Check a file's extension against the allowed set.

    An empty set allows every file. Comparison is case-insensitive and
    includes the leading dot (``.wwu``, ``.cs``).
    """
    allowed = [ext.lower() for ext in include_extensions]
    if not allowed:
        return True
    return os.path.splitext(file_path)[1].lower() in allowed
