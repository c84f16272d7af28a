"""
easyzip — archive files or directory trees into ZIP containers and extract them back.

Features:

- Deterministic entry names: every entry is the '/'-joined path of the file
  below the archived root, independent of the host operating system.
- Directory archiving with an optional wrapping root directory, or archiving
  an explicit list of files/directories each under its own name.
- The destination archive is skipped when it lies inside its own source tree.
- Extraction in archive order, creating directories on demand and
  overwriting existing files.
- DEFLATE (default) or stored entries via the standard zipfile codec.
"""

__version__ = "0.1"

from .errors import (
    EasyZipError,
    PathError,
    NotFoundError,
    NotDirectoryError,
    AlreadyExistsError,
    ArchiveOpenError,
    ArchiveCorruptError,
    ArchiveWriteError,
)
from .writer import ArchiveWriter, build_from_directory, build_from_files
from .reader import ArchiveReader, extract, list_entries

__all__ = [
    "ArchiveWriter",
    "ArchiveReader",
    "build_from_directory",
    "build_from_files",
    "extract",
    "list_entries",
    "EasyZipError",
    "PathError",
    "NotFoundError",
    "NotDirectoryError",
    "AlreadyExistsError",
    "ArchiveOpenError",
    "ArchiveCorruptError",
    "ArchiveWriteError",
]
