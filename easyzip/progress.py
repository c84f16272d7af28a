from __future__ import annotations

import sys
from typing import Callable, Optional, TextIO

ProgressFn = Callable[[str], None]


def null_progress(line: str) -> None:
    return None


def make_progress(verbose: bool, stream: Optional[TextIO] = None, label: str = "add") -> ProgressFn:
    """Build the per-file progress callback.

    Args:
        verbose: When False, the returned callback discards every line.
        stream: Output stream; defaults to stdout at call time.
        label: Prefix printed before each path ("add" when archiving,
            "extract" when unpacking).
    """
    if not verbose:
        return null_progress

    def _report(line: str) -> None:
        print(f"{label}: {line}", file=stream if stream is not None else sys.stdout)

    return _report


def resolve(progress: Optional[ProgressFn]) -> ProgressFn:
    return progress if progress is not None else null_progress
