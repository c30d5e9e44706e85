"""Lazy, stack-based traversal of a root directory.

``walk_files`` is a generator: the consumer can stop iterating at any point
(the search engine does so as soon as its hit budget is spent) and no
further directories are listed.

Sibling order follows ``os.scandir``; subdirectories are visited in reverse
push order. Callers must not depend on lexical ordering.

Directories are tracked by real path. When symlinks are followed, a
directory reachable under several names (the directory and an in-root link
to it) is listed once, under whichever name is reached first. This also
terminates link cycles.
"""

import logging
import os
from typing import Iterable, Iterator, List, Set

from ..sandbox_utils import is_contained_real, real_path_or_none, real_root
from .filters import extension_allowed, should_exclude

logger = logging.getLogger(__name__)


def walk_files(
    root_dir: str,
    global_exclude: Iterable[str] = (),
    root_exclude: Iterable[str] = (),
    include_extensions: Iterable[str] = (),
    follow_symlinks: bool = False,
) -> Iterator[str]:
    """Yield eligible file paths under ``root_dir``.

    For each directory entry:
    - excluded paths are skipped (directories are pruned, not descended into)
    - symlinks are skipped unless ``follow_symlinks`` is set; followed links
      must resolve inside the root's real path
    - directories are pushed onto the traversal stack
    - regular files are yielded if their extension is allowed

    Unreadable directories are skipped silently.

    Args:
        root_dir: Absolute root directory.
        global_exclude: Global exclusion substrings.
        root_exclude: Root-specific exclusion substrings.
        include_extensions: Allowed extensions; empty allows all.
        follow_symlinks: Whether in-root symlinks may be followed.

    Yields:
        Absolute file paths (nominal, not symlink-resolved).
    """
    global_exclude = list(global_exclude)
    root_exclude = list(root_exclude)
    include_extensions = list(include_extensions)

    root_real = real_root(root_dir)
    # Real paths of directories already listed; guards against link cycles
    visited: Set[str] = set()
    stack: List[str] = [root_dir]

    while stack:
        directory = stack.pop()

        dir_real = real_path_or_none(directory)
        if dir_real is not None:
            if dir_real in visited:
                continue
            visited.add(dir_real)

        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            continue

        for entry in entries:
            full = os.path.join(directory, entry.name)

            if should_exclude(full, global_exclude, root_exclude):
                continue

            try:
                if entry.is_symlink():
                    if not follow_symlinks:
                        continue
                    if not is_contained_real(root_real, full):
                        logger.debug("Skipping symlink outside root: %s", full)
                        continue
                    if os.path.isdir(full):
                        stack.append(full)
                    elif os.path.isfile(full) and extension_allowed(full, include_extensions):
                        yield full
                    continue

                if entry.is_dir(follow_symlinks=False):
                    stack.append(full)
                    continue

                if entry.is_file(follow_symlinks=False):
                    if extension_allowed(full, include_extensions):
                        yield full
            except OSError as e:
                logger.debug("Skipping entry %s: %s", full, e)
