from __future__ import annotations

import os
import sys
import time
import shutil
import argparse

from typing import List, Optional

from easyzip import __version__
from easyzip.constants import CODEC_DEFLATE, CODEC_NONE
from easyzip.errors import AlreadyExistsError, EasyZipError
from easyzip.progress import make_progress
from easyzip.reader import extract, list_entries
from easyzip.writer import build_from_directory, build_from_files


class _UsageParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on bad usage."""

    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"{self.prog}: error: {message}", file=sys.stderr)
        sys.exit(1)


def _remove_destination(path: str) -> None:
    """Best-effort recursive removal of a partial destination; never raises."""
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        elif os.path.lexists(path):
            os.remove(path)
    except OSError as exc:
        print(f"Warning: failed to remove {path}: {exc}", file=sys.stderr)


def _codec_args(store: bool, level: Optional[int]):
    return (CODEC_NONE if store else CODEC_DEFLATE), level


def _summary(verb: str, files: int, nbytes: int, t0: float) -> None:
    dt = max(0.000001, time.time() - t0)
    mib = nbytes / (1024.0 * 1024.0)
    print(f"Done: {verb} {files} files ({mib:.2f} MiB) in {dt:.1f}s; {mib / dt:.2f} MiB/s")


def cmd_zip(
    src: str,
    dst: str,
    *,
    overwrite: bool = True,
    create_root: bool = True,
    store: bool = False,
    level: Optional[int] = None,
    quiet: bool = False,
) -> bool:
    """Archive a directory tree.

    Args:
        src: Directory to archive.
        dst: Archive path to write.
        overwrite: Replace an existing ``dst`` (default); otherwise refuse.
        create_root: Wrap the contents in a top-level directory named after ``src``.
        store: Store entries uncompressed instead of DEFLATE.
        level: DEFLATE level 0..9.
        quiet: Suppress per-file lines and the summary.
    """
    codec_id, level = _codec_args(store, level)
    t0 = time.time()
    res = build_from_directory(
        src,
        dst,
        overwrite,
        create_root,
        progress=make_progress(not quiet),
        codec_id=codec_id,
        level=level,
    )
    if not quiet:
        _summary("archived", res.entries, res.bytes_in, t0)
    return True


def cmd_zipfiles(
    dst: str,
    files: List[str],
    *,
    store: bool = False,
    level: Optional[int] = None,
    quiet: bool = False,
) -> bool:
    """Archive a list of files and/or directories, each under its own name."""
    codec_id, level = _codec_args(store, level)
    t0 = time.time()
    res = build_from_files(files, dst, progress=make_progress(not quiet), codec_id=codec_id, level=level)
    if not quiet:
        _summary("archived", res.entries, res.bytes_in, t0)
    return True


def cmd_unzip(src: str, dst: str = "", *, quiet: bool = False) -> bool:
    """Extract an archive below ``dst`` (current directory when empty)."""
    t0 = time.time()
    res = extract(src, dst, progress=make_progress(not quiet, label="extract"))
    if not quiet:
        _summary("extracted", res.files, res.bytes_out, t0)
    return True


def cmd_list(archive: str) -> bool:
    """List archive entries in index order."""
    for e in list_entries(archive):
        if e.is_dir:
            print(f"dir\t{e.name}")
        else:
            print(f"file\t{e.size}\t{e.name}")
    return True


def main(argv: List[str] | None = None):
    ap = _UsageParser(
        prog="easyzip",
        description="Create and extract ZIP archives",
        epilog="On failure the partially written destination is removed.",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = ap.add_subparsers(dest="cmd", required=True, parser_class=_UsageParser)

    ap_zip = sub.add_parser("zip", help="Archive a directory")
    ap_zip.add_argument("src", help="Source directory")
    ap_zip.add_argument("dst", help="Destination archive")
    ap_zip.add_argument("--no-overwrite", action="store_true", help="Fail if the destination already exists")
    ap_zip.add_argument("--no-root", action="store_true", help="Store directory contents at the archive root")

    ap_unzip = sub.add_parser("unzip", help="Extract an archive")
    ap_unzip.add_argument("src", help="Source archive")
    ap_unzip.add_argument("dst", help="Destination directory")

    ap_files = sub.add_parser("zipfiles", help="Archive a list of files/directories")
    ap_files.add_argument("dst", help="Destination archive")
    ap_files.add_argument("files", nargs="+", help="Input files/directories")

    ap_list = sub.add_parser("list", help="List archive contents")
    ap_list.add_argument("archive", help="Archive path")

    for p in (ap_zip, ap_files):
        p.add_argument("--store", action="store_true", help="Store entries without compression")
        p.add_argument("--level", type=int, choices=range(0, 10), metavar="0-9", help="DEFLATE level (default 6)")
    for p in (ap_zip, ap_unzip, ap_files):
        p.add_argument("--quiet", help="suppress per-file output and summary", action="store_true")

    args = ap.parse_args(argv)
    cleanup: Optional[str] = None
    try:
        if args.cmd == "zip":
            cleanup = args.dst
            cmd_zip(
                args.src,
                args.dst,
                overwrite=not args.no_overwrite,
                create_root=not args.no_root,
                store=args.store,
                level=args.level,
                quiet=args.quiet,
            )
        elif args.cmd == "zipfiles":
            cleanup = args.dst
            cmd_zipfiles(args.dst, args.files, store=args.store, level=args.level, quiet=args.quiet)
        elif args.cmd == "unzip":
            # Never remove a directory that was there before we started
            if not os.path.lexists(args.dst):
                cleanup = args.dst
            cmd_unzip(args.src, args.dst, quiet=args.quiet)
        elif args.cmd == "list":
            cmd_list(args.archive)
        else:
            raise RuntimeError("Unknown command")
    except AlreadyExistsError as e:
        # Destination belongs to the user; leave it alone
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (EasyZipError, OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if cleanup:
            _remove_destination(cleanup)
        sys.exit(2)


if __name__ == "__main__":
    main()
