"""Size-bounded file reading.

Two flavours:
- ``read_text_limited`` is used by search: oversized, non-regular or
  undecodable files are reported as unavailable (None) so the caller can
  count and skip them.
- ``read_file_bounded`` is used for direct reads: at most ``max_bytes`` are
  returned, with a ``truncated`` flag when the file is larger.

``read_file_from_root`` implements the audio_read tool on top of these,
including the root containment and symlink policy checks.
"""

import logging
import os
import stat
from typing import Any, Dict, Optional, Tuple

from ..sandbox_utils import is_within_root, real_path_or_none, real_root
from .config_loader import GameAudioConfig
from .errors import PolicyViolationError, RequestValidationError, TargetNotFoundError
from .filters import should_exclude
from .roots import find_root, resolve_roots

logger = logging.getLogger(__name__)


def read_text_limited(path: str, max_bytes: int) -> Optional[str]:
    """Read a whole file as UTF-8 text if it fits under ``max_bytes``.

    Returns:
        The file text, or None if the file is not a regular file, is larger
        than ``max_bytes``, cannot be read, or is not valid UTF-8.
    """
    try:
        st = os.stat(path)
    except OSError:
        return None
    if not stat.S_ISREG(st.st_mode):
        return None
    if st.st_size > max_bytes:
        logger.debug("Skipping large file %s (%d bytes)", path, st.st_size)
        return None
    try:
        with open(path, "rb") as f:
            data = f.read()
        return data.decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not read %s as text: %s", path, e)
        return None


def read_file_bounded(path: str, max_bytes: int) -> Tuple[str, bool]:
    """Read at most ``max_bytes`` bytes from ``path``.

    A multi-byte character cut at the boundary is replaced rather than
    raising.

    Returns:
        Tuple of (text, truncated).
    """
    size = os.stat(path).st_size
    truncated = size > max_bytes
    with open(path, "rb") as f:
        data = f.read(max_bytes)
    return data.decode("utf-8", errors="replace"), truncated


def validate_rel_path(rel_path: str) -> str:
    """Check that a root-relative path is safe before touching the filesystem.

    Raises:
        RequestValidationError: If the path is empty, absolute, or contains ``..``.
    """
    rel = rel_path.strip()
    if (
        not rel
        or rel.startswith("/")
        or rel.startswith("\\")
        or os.path.isabs(rel)
        or ".." in rel
    ):
        raise RequestValidationError(
            "relPath must be a safe, relative path (no absolute paths / ..)"
        )
    return rel


def read_file_from_root(
    config: GameAudioConfig,
    root_id: str,
    rel_path: str,
    max_bytes: Optional[Any] = None,
) -> Dict[str, Any]:
    """Read a file addressed by root id and root-relative path.

    Args:
        config: Plugin configuration (roots are resolved fresh).
        root_id: Id of the configured root.
        rel_path: Path relative to the root.
        max_bytes: Optional positive byte bound overriding ``max_file_bytes``.

    Returns:
        Dict with rootId, absPath, relPath, truncated and text.

    Raises:
        RequestValidationError: Unsafe relPath or unknown rootId.
        PolicyViolationError: Root escape, symlink policy, or exclusion match.
        TargetNotFoundError: Root or file missing, or target not a regular file.
    """
    rel = validate_rel_path(rel_path)

    root = find_root(resolve_roots(config), root_id)
    if root is None:
        raise RequestValidationError(f"Unknown rootId: {root_id}")
    if not root.exists:
        raise TargetNotFoundError(f"Root does not exist: {root.id} ({root.path})")

    abs_path = os.path.normpath(os.path.join(root.path, rel))
    if not is_within_root(root.path, abs_path):
        raise PolicyViolationError("Path escapes root")

    # With follow_symlinks off, the real path must equal the literal join of
    # the real root and the relative path.
    rel_from_root = os.path.relpath(abs_path, root.path)
    root_real = real_root(root.path)
    abs_real = real_path_or_none(abs_path)
    if abs_real is None:
        raise TargetNotFoundError("File not found")
    if not is_within_root(root_real, abs_real):
        raise PolicyViolationError("Path escapes root (symlink)")
    expected_real = os.path.normpath(os.path.join(root_real, rel_from_root))
    if not config.follow_symlinks and abs_real != expected_real:
        raise PolicyViolationError("Symlinks are not allowed by policy")

    if should_exclude(abs_path, config.exclude, root.exclude):
        raise PolicyViolationError("Path is excluded by policy")

    limit = config.max_file_bytes
    if isinstance(max_bytes, (int, float)) and not isinstance(max_bytes, bool) and max_bytes > 0:
        limit = max(1, int(max_bytes))

    try:
        st = os.stat(abs_path)
    except OSError:
        raise TargetNotFoundError("File not found")
    if not stat.S_ISREG(st.st_mode):
        raise TargetNotFoundError("Not a file")

    text, truncated = read_file_bounded(abs_path, limit)
    logger.debug("Read %s from root '%s' (truncated=%s)", rel, root.id, truncated)

    return {
        "rootId": root.id,
        "absPath": abs_path,
        "relPath": rel,
        "truncated": truncated,
        "text": text,
    }
