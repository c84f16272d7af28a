"""Filesystem tree walk that maps source paths to archive entry names.

Entry names are built by literal concatenation: a child of prefix ``p`` is
named ``p + "/" + child`` (or ``child`` when ``p`` is empty), so the archive
mirrors the directory structure exactly and no two files share a name.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from .constants import SKIP_SELF_MESSAGE
from .errors import NotFoundError
from .progress import ProgressFn, resolve

if TYPE_CHECKING:  # pragma: no cover
    from .writer import ArchiveWriter


def child_entry_name(prefix: str, child: str) -> str:
    if not prefix:
        return child
    return prefix + "/" + child


def walk_tree(
    source: str,
    self_path: str,
    prefix: str,
    progress: Optional[ProgressFn] = None,
) -> Iterator[Tuple[str, str]]:
    """Yield ``(fs_path, entry_name)`` for every file under ``source``.

    Args:
        source: Normalized path of a file or directory.
        self_path: Normalized path of the archive being written; skipped
            (and reported as "skip self") when met inside the tree.
        prefix: Entry name of ``source`` itself ("" for the archive root).
        progress: Optional per-line callback.

    Directories come before their children; siblings keep the order of the
    host directory listing. Traversal uses an explicit stack so very deep
    trees do not hit the recursion limit.

    Raises:
        NotFoundError: ``source`` does not exist.
        OSError: any stat/listing failure below ``source``.
    """
    report = resolve(progress)
    if source != self_path and not os.path.exists(source):
        raise NotFoundError(f"{source} not exist")
    stack: List[Tuple[str, str]] = [(source, prefix)]
    while stack:
        path, name = stack.pop()
        if path == self_path:
            report(SKIP_SELF_MESSAGE)
            continue
        if os.path.isdir(path):
            with os.scandir(path) as it:
                children = [d.name for d in it]
            # reversed so the first listed child is popped first
            for child in reversed(children):
                stack.append((path + "/" + child, child_entry_name(name, child)))
        else:
            yield path, name


def add_files(
    writer: "ArchiveWriter",
    source: str,
    self_path: str,
    prefix: str,
    progress: Optional[ProgressFn] = None,
) -> int:
    """Stream every file under ``source`` into ``writer``.

    Each file is opened, reported to ``progress`` by its absolute path and
    copied into a new entry. The first error aborts the walk.

    Returns:
        Number of bytes copied.
    """
    report = resolve(progress)
    total = 0
    for fs_path, name in walk_tree(source, self_path, prefix, report):
        total += writer.add_file(name, fs_path, report)
    return total
