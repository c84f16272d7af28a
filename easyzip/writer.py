from __future__ import annotations

import os
import shutil
import zipfile
from dataclasses import dataclass
from typing import IO, Iterable, Optional

from .codec import Codec
from .constants import COPY_BUFFER_SIZE, DEFAULT_CODEC_ID
from .errors import AlreadyExistsError, ArchiveWriteError, NotDirectoryError, NotFoundError
from .pathutil import base_name, normalize
from .progress import ProgressFn, resolve
from .walker import add_files


# zipfile switches to ZIP64 headers once an entry may exceed this size
_ZIP64_THRESHOLD = int(zipfile.ZIP64_LIMIT / 1.05)


class ArchiveWriter:
    """Write handle over a new ZIP container.

    Entries are created by name and filled through the returned stream. The
    container is finalized (central directory written) on ``close``.
    """

    def __init__(self, out_path: str, codec_id: int = DEFAULT_CODEC_ID, level: Optional[int] = None):
        self.out_path = out_path
        self.codec = Codec(codec_id, level)
        self.zf: Optional[zipfile.ZipFile] = None
        self.entry_count = 0

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self):
        if self.zf is not None:
            return
        try:
            self.zf = zipfile.ZipFile(
                self.out_path,
                "w",
                compression=self.codec.compression,
                compresslevel=self.codec.compresslevel,
            )
        except OSError as exc:
            raise ArchiveWriteError(f"cannot create archive {self.out_path}: {exc}") from exc

    def close(self):
        if self.zf is not None:
            zf, self.zf = self.zf, None
            zf.close()

    def create_entry(self, name: str, file_size: int = 0) -> IO[bytes]:
        """Create a file entry and return a writable stream for its content."""
        if self.zf is None:
            raise ArchiveWriteError("Archive not open")
        try:
            stream = self.zf.open(name, "w", force_zip64=file_size >= _ZIP64_THRESHOLD)
        except (ValueError, RuntimeError, zipfile.LargeZipFile) as exc:
            raise ArchiveWriteError(f"cannot create entry {name}: {exc}") from exc
        self.entry_count += 1
        return stream

    def add_file(self, name: str, fs_path: str, progress: Optional[ProgressFn] = None) -> int:
        """Stream a filesystem file into a new entry; returns its size.

        The source is opened and reported to ``progress`` before the entry is
        created.
        """
        with open(fs_path, "rb") as src:
            size = os.fstat(src.fileno()).st_size
            resolve(progress)(fs_path)
            with self.create_entry(name, file_size=size) as dst:
                shutil.copyfileobj(src, dst, COPY_BUFFER_SIZE)
        return size


@dataclass
class BuildResult:
    destination: str
    entries: int
    bytes_in: int


def build_from_files(
    sources: Iterable[str],
    destination: str,
    *,
    progress: Optional[ProgressFn] = None,
    codec_id: int = DEFAULT_CODEC_ID,
    level: Optional[int] = None,
) -> BuildResult:
    """Create ``destination`` from a list of files and/or directories.

    Each source becomes a top-level entry named after its own base name;
    directories keep their subtree below it. Sources are archived in input
    order and the first failure aborts the rest.

    On failure the destination may be left partial; removing it is up to
    the caller.
    """
    report = resolve(progress)
    abs_dst = normalize(destination)
    abs_src = [normalize(s) for s in sources]

    total = 0
    with ArchiveWriter(abs_dst, codec_id=codec_id, level=level) as w:
        for src in abs_src:
            total += add_files(w, src, abs_dst, base_name(src), report)
        count = w.entry_count
    return BuildResult(abs_dst, count, total)


def build_from_directory(
    source: str,
    destination: str,
    overwrite: bool = True,
    create_root: bool = True,
    *,
    progress: Optional[ProgressFn] = None,
    codec_id: int = DEFAULT_CODEC_ID,
    level: Optional[int] = None,
) -> BuildResult:
    """Create ``destination`` from the tree under ``source``.

    Args:
        source: Directory to archive.
        destination: Archive path to write.
        overwrite: Remove an existing destination first (recursively when it
            is a directory). When False an existing destination raises
            AlreadyExistsError and is left untouched.
        create_root: Put everything under a top-level directory named after
            ``source``; otherwise the archive root holds its contents.

    Raises:
        NotFoundError: ``source`` does not exist.
        NotDirectoryError: ``source`` is not a directory.
        AlreadyExistsError: ``destination`` exists and ``overwrite`` is False.

    On failure the destination may be left partial; removing it is up to
    the caller.
    """
    report = resolve(progress)
    abs_src = normalize(source)
    abs_dst = normalize(destination)
    if not os.path.exists(abs_src):
        raise NotFoundError(f"{source} not exist")
    if not os.path.isdir(abs_src):
        raise NotDirectoryError(f"{source} is not a directory")

    if os.path.lexists(abs_dst):
        if not overwrite:
            raise AlreadyExistsError(f"{destination} exist, skip")
        if os.path.isdir(abs_dst) and not os.path.islink(abs_dst):
            shutil.rmtree(abs_dst)
        else:
            os.remove(abs_dst)

    prefix = base_name(abs_src) if create_root else ""
    with ArchiveWriter(abs_dst, codec_id=codec_id, level=level) as w:
        total = add_files(w, abs_src, abs_dst, prefix, report)
        count = w.entry_count
    return BuildResult(abs_dst, count, total)
