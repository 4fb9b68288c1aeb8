"""Small file utilities: cat, echo, wc, mkdir, rm, ln, kill and sleep."""

from __future__ import annotations

import os
import re
import signal
import sys
import time
from typing import BinaryIO, NamedTuple

CAT_BUFFER = 512
TICK_SECONDS = 0.1
"""Length of one clock tick, the unit sleep counts in."""

_WORD = re.compile(rb"[^ \r\t\n\v\x00]+")


def atoi(s: str) -> int:
    """Value of the leading decimal digits of ``s``; 0 when there are none."""
    n = 0
    for ch in s:
        if not "0" <= ch <= "9":
            break
        n = n * 10 + ord(ch) - ord("0")
    return n


def cat(stream: BinaryIO, out: BinaryIO) -> None:
    """Copy ``stream`` to ``out`` in small chunks.

    Raises OSError with the message "read error" or "write error".
    """
    while True:
        try:
            chunk = stream.read(CAT_BUFFER)
        except OSError as exc:
            raise OSError("read error") from exc
        if not chunk:
            return
        try:
            written = out.write(chunk)
        except OSError as exc:
            raise OSError("write error") from exc
        if written is not None and written != len(chunk):
            raise OSError("write error")


def echo(args: list[str]) -> str:
    """The text echo prints for ``args``."""
    return " ".join(args) + "\n" if args else ""


class WordCount(NamedTuple):
    lines: int
    words: int
    chars: int


def word_count(data: bytes | str) -> WordCount:
    """Count newlines, words and bytes in ``data``."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return WordCount(data.count(b"\n"), len(_WORD.findall(data)), len(data))


def _args(argv: list[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def _binary_stdout() -> BinaryIO:
    sys.stdout.flush()
    return getattr(sys.stdout, "buffer", sys.stdout)


def _binary_stdin() -> BinaryIO:
    return getattr(sys.stdin, "buffer", sys.stdin)


def main_cat(argv: list[str] | None = None) -> int:
    """Concatenate the named files, or standard input, to standard output."""
    args = _args(argv)
    out = _binary_stdout()
    try:
        if not args:
            cat(_binary_stdin(), out)
            return 0
        for path in args:
            try:
                handle = open(path, "rb")
            except OSError:
                sys.stderr.write(f"cat: cannot open {path}\n")
                return 1
            with handle:
                cat(handle, out)
    except OSError as exc:
        sys.stderr.write(f"cat: {exc}\n")
        return 1
    finally:
        out.flush()
    return 0


def main_echo(argv: list[str] | None = None) -> int:
    sys.stdout.write(echo(_args(argv)))
    return 0


def _report(counts: WordCount, name: str) -> None:
    sys.stdout.write(f"{counts.lines} {counts.words} {counts.chars} {name}\n")


def main_wc(argv: list[str] | None = None) -> int:
    """Print line, word and byte counts of the named files or standard input."""
    args = _args(argv)
    if not args:
        try:
            data = _binary_stdin().read()
        except OSError:
            sys.stdout.write("wc: read error\n")
            return 1
        _report(word_count(data), "")
        return 0
    for path in args:
        try:
            handle = open(path, "rb")
        except OSError:
            sys.stdout.write(f"wc: cannot open {path}\n")
            return 1
        with handle:
            try:
                data = handle.read()
            except OSError:
                sys.stdout.write("wc: read error\n")
                return 1
        _report(word_count(data), path)
    return 0


def main_mkdir(argv: list[str] | None = None) -> int:
    args = _args(argv)
    if not args:
        sys.stderr.write("Usage: mkdir files...\n")
        return 1
    for path in args:
        try:
            os.mkdir(path)
        except OSError:
            sys.stderr.write(f"mkdir: {path} failed to create\n")
            break
    return 0


def main_rm(argv: list[str] | None = None) -> int:
    """Remove files and empty directories; stop at the first failure."""
    args = _args(argv)
    if not args:
        sys.stderr.write("Usage: rm files...\n")
        return 1
    for path in args:
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                os.rmdir(path)
            else:
                os.unlink(path)
        except OSError:
            sys.stderr.write(f"rm: {path} failed to delete\n")
            break
    return 0


def main_ln(argv: list[str] | None = None) -> int:
    args = _args(argv)
    if len(args) != 2:
        sys.stderr.write("Usage: ln old new\n")
        return 1
    old, new = args
    try:
        os.link(old, new)
    except OSError:
        sys.stderr.write(f"link {old} {new}: failed\n")
    return 0


def main_kill(argv: list[str] | None = None) -> int:
    """Kill each listed process; failures are ignored."""
    args = _args(argv)
    if not args:
        sys.stderr.write("usage: kill pid...\n")
        return 1
    sig = getattr(signal, "SIGKILL", signal.SIGTERM)
    for arg in args:
        pid = atoi(arg)
        if pid <= 0:
            continue
        try:
            os.kill(pid, sig)
        except OSError:
            pass
    return 0


def main_sleep(argv: list[str] | None = None) -> int:
    """Sleep for the given number of clock ticks."""
    args = _args(argv)
    if not args:
        sys.stderr.write("Usage: sleep time\n")
        return 1
    time.sleep(atoi(args[0]) * TICK_SECONDS)
    return 0