from __future__ import annotations

import os

from .errors import PathError


_SEP_IS_SLASH = os.sep == "/"


def to_slash(p: str) -> str:
    """Render host separators as '/'. No-op on slash-separator hosts."""
    if _SEP_IS_SLASH:
        return p
    return p.replace(os.sep, "/")


def normalize(p: str) -> str:
    """Return the absolute, forward-slash form of a filesystem path.

    Raises:
        PathError: the path cannot be resolved (working directory gone,
            embedded NUL byte, ...).
    """
    try:
        r = os.path.abspath(p)
    except (OSError, ValueError) as exc:
        raise PathError(f"cannot resolve {p!r}: {exc}") from exc
    if "\x00" in r:
        raise PathError(f"cannot resolve {p!r}: embedded null byte")
    return to_slash(r)


def base_name(p: str) -> str:
    return to_slash(os.path.basename(os.path.normpath(p)))


def dir_name(p: str) -> str:
    return to_slash(os.path.dirname(os.path.normpath(p)))


def norm_entry_name(name: str) -> str:
    """Normalize an archive entry name to a canonical forward-slash form.

    Rules:
    - Convert backslashes to slashes on backslash-separator hosts only
    - Strip leading/trailing slashes (no absolute names)
    - Remove empty and '.' segments
    - Reject '..' segments
    """
    n = name if _SEP_IS_SLASH else name.replace("\\", "/")
    n = n.strip("/")
    parts = [q for q in n.split("/") if q not in ("", ".")]
    for q in parts:
        if q == "..":
            raise PathError(f"Entry name may not contain '..': {name}")
    if parts and len(parts[0]) == 2 and parts[0][1] == ":":
        raise PathError(f"Entry name may not carry a drive letter: {name}")
    return "/".join(parts)
