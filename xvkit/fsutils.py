"""Directory walking: find files by pattern and list directories."""

from __future__ import annotations

import os
import stat
import sys
from typing import Iterator

from xvkit.fmt import sprintf
from xvkit.layout import FileType
from xvkit.matching import whole_match

DIRSIZ = 14
PATH_BUFFER = 512


def basename(path: str) -> str:
    """The part of ``path`` after its last slash."""
    return path.rsplit("/", 1)[-1]


def fmtname(path: str) -> str:
    """The base name of ``path``, blank-padded to DIRSIZ characters."""
    name = basename(path)
    return name if len(name) >= DIRSIZ else name.ljust(DIRSIZ)


def _file_type(info: os.stat_result) -> FileType:
    if stat.S_ISDIR(info.st_mode):
        return FileType.DIR
    if stat.S_ISREG(info.st_mode):
        return FileType.FILE
    return FileType.DEVICE


def _too_long(path: str) -> bool:
    return len(path) + 1 + DIRSIZ + 1 > PATH_BUFFER


def _listing(path: str, tool: str) -> list[str] | None:
    try:
        return sorted(os.listdir(path))
    except OSError:
        sys.stderr.write(f"{tool}: cannot open {path}\n")
        return None


def find(path: str, pattern: str) -> Iterator[str]:
    """Yield the output lines of a search for files whose name matches ``pattern``.

    Unreadable paths are reported on standard error.
    """
    try:
        info = os.stat(path)
    except OSError:
        sys.stderr.write(f"find: cannot open {path}\n")
        return
    kind = _file_type(info)
    if kind is FileType.FILE:
        if whole_match(pattern, basename(path)):
            yield f"{path}\n"
    elif kind is FileType.DIR:
        if _too_long(path):
            yield "find: path too long\n"
            return
        names = _listing(path, "find")
        for name in names or ():
            yield from find(f"{path}/{name}", pattern)


def ls(path: str) -> Iterator[str]:
    """Yield the lines ls prints for ``path``: name, type, inode and size."""
    try:
        info = os.stat(path)
    except OSError:
        sys.stderr.write(f"ls: cannot open {path}\n")
        return
    kind = _file_type(info)
    if kind is FileType.FILE:
        yield sprintf("%s %d %d %l\n", fmtname(path), int(kind), info.st_ino, info.st_size)
    elif kind is FileType.DIR:
        if _too_long(path):
            yield "ls: path too long\n"
            return
        names = _listing(path, "ls")
        if names is None:
            return
        for name in (".", "..", *names):
            entry = f"{path}/{name}"
            try:
                st = os.stat(entry)
            except OSError:
                yield f"ls: cannot stat {entry}\n"
                continue
            yield sprintf("%s %d %d %d\n", fmtname(entry), int(_file_type(st)), st.st_ino, st.st_size)


def _args(argv: list[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def main_find(argv: list[str] | None = None) -> int:
    args = _args(argv)
    if not args:
        sys.stderr.write("usage: find path pattern\n")
        return 1
    path, pattern = (".", args[0]) if len(args) == 1 else (args[0], args[1])
    sys.stdout.writelines(find(path, pattern))
    return 0


def main_ls(argv: list[str] | None = None) -> int:
    for path in _args(argv) or ["."]:
        sys.stdout.writelines(ls(path))
    return 0