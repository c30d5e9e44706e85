"""Line-oriented text search across configured roots.

Results are ordered by root selection order, then file visitation order,
then line number. The search stops as soon as the hit budget is reached,
mid-root and mid-file, so counters only reflect work done before the cutoff.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ...path_utils import display_path
from .config_loader import GameAudioConfig
from .errors import RequestValidationError
from .reader import read_text_limited
from .roots import resolve_roots, select_roots
from .walker import walk_files

logger = logging.getLogger(__name__)

# Matched line text is capped at this many characters
MAX_HIT_TEXT_CHARS = 400

_LINE_SPLIT_RE = re.compile(r"\r?\n")


@dataclass(frozen=True)
class SearchHit:
    """One matching line of one file."""

    root_id: str
    file: str
    line: int
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rootId": self.root_id,
            "file": self.file,
            "line": self.line,
            "text": self.text,
        }


@dataclass
class SearchResult:
    """Hits plus counters describing how much of the tree was examined.

    Attributes:
        hits: Matches in traversal order.
        scanned_files: Files handed to the reader (including skipped ones).
        skipped_large_files: Files the reader reported as unavailable
            (too large, not a regular file, unreadable or not UTF-8).
    """

    hits: List[SearchHit] = field(default_factory=list)
    scanned_files: int = 0
    skipped_large_files: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hits": [hit.to_dict() for hit in self.hits],
            "scannedFiles": self.scanned_files,
            "skippedLargeFiles": self.skipped_large_files,
        }


def make_matcher(query: str, regex: bool = False, case_sensitive: bool = False) -> Callable[[str], bool]:
    """Build a line predicate for ``query``.

    Raises:
        RequestValidationError: If ``regex`` is set and the pattern is invalid.
    """
    if regex:
        try:
            pattern = re.compile(query, 0 if case_sensitive else re.IGNORECASE)
        except re.error as e:
            raise RequestValidationError(f"Invalid regex pattern: {e}")
        return lambda line: pattern.search(line) is not None

    if case_sensitive:
        return lambda line: query in line

    needle = query.casefold()
    return lambda line: needle in line.casefold()


def effective_max_hits(max_hits: Optional[Any], default: int) -> int:
    """Use ``max_hits`` floored to an int when it is a positive number, else ``default``."""
    if isinstance(max_hits, (int, float)) and not isinstance(max_hits, bool) and max_hits > 0:
        return max(1, int(max_hits))
    return default


def _relative_display(root_path: str, file_path: str) -> str:
    try:
        rel = os.path.relpath(file_path, root_path)
    except ValueError:
        rel = ""
    return display_path(rel) if rel and rel != os.curdir else display_path(file_path)


def search_across_roots(
    config: GameAudioConfig,
    query: str,
    root_ids: Optional[List[str]] = None,
    regex: bool = False,
    case_sensitive: bool = False,
    max_hits: Optional[Any] = None,
) -> SearchResult:
    """Search every selected root for lines matching ``query``.

    Args:
        config: Plugin configuration (roots are resolved fresh).
        query: Substring, or pattern when ``regex`` is set.
        root_ids: Optional root ids to restrict the search; unknown ids
            match nothing.
        regex: Treat ``query`` as a regular expression.
        case_sensitive: Match case exactly.
        max_hits: Optional positive override of ``config.max_hits``.

    Returns:
        SearchResult with at most the effective hit budget of hits.

    Raises:
        RequestValidationError: Empty query or invalid regex.
    """
    if not query or not query.strip():
        raise RequestValidationError("query required")

    matcher = make_matcher(query, regex=regex, case_sensitive=case_sensitive)
    limit = effective_max_hits(max_hits, config.max_hits)
    selected = select_roots(resolve_roots(config), root_ids)

    result = SearchResult()

    for root in selected:
        if not root.exists:
            continue

        for file_path in walk_files(
            root.path,
            global_exclude=config.exclude,
            root_exclude=root.exclude,
            include_extensions=config.include_extensions,
            follow_symlinks=config.follow_symlinks,
        ):
            if len(result.hits) >= limit:
                return result

            result.scanned_files += 1
            text = read_text_limited(file_path, config.max_file_bytes)
            if text is None:
                result.skipped_large_files += 1
                continue

            for line_num, line in enumerate(_LINE_SPLIT_RE.split(text), start=1):
                if not matcher(line):
                    continue
                result.hits.append(SearchHit(
                    root_id=root.id,
                    file=_relative_display(root.path, file_path),
                    line=line_num,
                    text=line[:MAX_HIT_TEXT_CHARS],
                ))
                if len(result.hits) >= limit:
                    logger.debug("Hit budget %s reached in root '%s'", limit, root.id)
                    return result

    logger.debug(
        "Search %r: %d hits, %d files scanned, %d skipped",
        query, len(result.hits), result.scanned_files, result.skipped_large_files,
    )
    return result
