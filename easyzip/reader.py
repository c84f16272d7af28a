from __future__ import annotations

import os
import shutil
import zipfile
import zlib
from dataclasses import dataclass
from typing import IO, List, Optional

from .constants import COPY_BUFFER_SIZE, DIR_MODE
from .errors import ArchiveCorruptError, ArchiveOpenError
from .pathutil import dir_name, norm_entry_name, normalize
from .progress import ProgressFn, resolve


@dataclass
class Entry:
    name: str
    is_dir: bool
    size: int = 0
    compressed_size: int = 0
    info: Optional[zipfile.ZipInfo] = None


@dataclass
class ExtractResult:
    destination: str
    files: int
    dirs: int
    bytes_out: int


class ArchiveReader:
    """Read-only handle over an existing ZIP container."""

    def __init__(self, path: str):
        self.path = path
        self.zf: Optional[zipfile.ZipFile] = None
        self.entries: List[Entry] = []

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self):
        if self.zf is not None:
            return
        try:
            self.zf = zipfile.ZipFile(self.path, "r")
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
            raise ArchiveOpenError(f"cannot open archive {self.path}: {exc}") from exc
        # Index order, as stored in the central directory
        self.entries = [
            Entry(
                name=zi.filename,
                is_dir=zi.is_dir(),
                size=zi.file_size,
                compressed_size=zi.compress_size,
                info=zi,
            )
            for zi in self.zf.infolist()
        ]

    def close(self):
        if self.zf is not None:
            zf, self.zf = self.zf, None
            zf.close()

    def list(self) -> List[Entry]:
        return self.entries

    def open_entry(self, entry: Entry) -> IO[bytes]:
        if self.zf is None:
            raise ArchiveOpenError("Archive not open")
        try:
            return self.zf.open(entry.info if entry.info is not None else entry.name, "r")
        except (zipfile.BadZipFile, NotImplementedError, zlib.error) as exc:
            raise ArchiveCorruptError(f"cannot read entry {entry.name}: {exc}") from exc

    def extract(self, entry: Entry, out_path: str) -> int:
        """Stream one file entry to ``out_path``, replacing any existing file."""
        with self.open_entry(entry) as src, open(out_path, "wb") as dst:
            try:
                shutil.copyfileobj(src, dst, COPY_BUFFER_SIZE)
            except (zipfile.BadZipFile, zlib.error, EOFError) as exc:
                raise ArchiveCorruptError(f"corrupt entry {entry.name}: {exc}") from exc
        return entry.size


def list_entries(source: str) -> List[Entry]:
    with ArchiveReader(normalize(source)) as r:
        return list(r.list())


def extract(source: str, destination: str = "", *, progress: Optional[ProgressFn] = None) -> ExtractResult:
    """Extract every entry of ``source`` below ``destination``.

    An empty ``destination`` means the current working directory. Entries are
    processed in archive order: directory entries are created (existing ones
    are fine), file entries get their parent chain created and are written
    over whatever is at the target path. The first error aborts the rest.

    Raises:
        ArchiveOpenError: ``source`` is missing or not a valid archive.
        ArchiveCorruptError: an entry fails to decode.
        PathError: an entry name would escape ``destination``.
        OSError: any filesystem failure while writing.
    """
    report = resolve(progress)
    abs_src = normalize(source)
    abs_dst = normalize(destination or ".")

    files = dirs = total = 0
    with ArchiveReader(abs_src) as r:
        for e in r.list():
            name = norm_entry_name(e.name)
            target = abs_dst + "/" + name if name else abs_dst
            if e.is_dir:
                os.makedirs(target, mode=DIR_MODE, exist_ok=True)
                dirs += 1
                continue
            os.makedirs(dir_name(target), mode=DIR_MODE, exist_ok=True)
            report(target)
            total += r.extract(e, target)
            files += 1
    return ExtractResult(abs_dst, files, dirs, total)
