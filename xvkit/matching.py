"""Small regular-expression matcher supporting ^ . * $, and a grep built on it."""

from __future__ import annotations

import sys
from typing import Iterable, TextIO

GREP_BUFFER = 1024


def _match_here(re: str, text: str) -> bool:
    if not re:
        return True
    if re[1:2] == "*":
        return _match_star(re[0], re[2:], text)
    if re == "$":
        return not text
    if text and (re[0] == "." or re[0] == text[0]):
        return _match_here(re[1:], text[1:])
    return False


def _match_star(c: str, re: str, text: str) -> bool:
    pos = 0
    while True:
        if _match_here(re, text[pos:]):
            return True
        if pos < len(text) and (text[pos] == c or c == "."):
            pos += 1
            continue
        return False


def grep_match(re: str, text: str) -> bool:
    """Search ``text`` for ``re``; ``^`` and ``$`` anchor, ``.`` and ``*`` as usual."""
    if re.startswith("^"):
        return _match_here(re[1:], text)
    return any(_match_here(re, text[start:]) for start in range(len(text) + 1))


def _whole(re: str, text: str) -> bool:
    if not re:
        return not text
    if re[1:2] == "*":
        return _whole_star(re[0], re[2:], text)
    if text and (re[0] == "." or re[0] == text[0]):
        return _whole(re[1:], text[1:])
    return False


def _whole_star(c: str, re: str, text: str) -> bool:
    pos = 0
    while True:
        if _whole(re, text[pos:]):
            return True
        if pos < len(text) and (text[pos] == c or c == "."):
            pos += 1
            continue
        return False


def whole_match(re: str, text: str) -> bool:
    """True when ``re`` (with ``.`` and ``*``) matches all of ``text``."""
    return _whole(re, text)


def grep(pattern: str, stream: Iterable[str], out: TextIO) -> None:
    """Write the newline-terminated lines of ``stream`` that match ``pattern``.

    A final line without a newline is never printed, and a line that does
    not fit the read buffer ends the search.
    """
    for line in stream:
        if len(line) > GREP_BUFFER - 1 or not line.endswith("\n"):
            break
        if grep_match(pattern, line[:-1]):
            out.write(line)


def main_grep(argv: list[str] | None = None) -> int:
    """Run grep over the named files, or standard input; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        sys.stderr.write("usage: grep pattern [file ...]\n")
        return 1
    pattern, files = args[0], args[1:]
    if not files:
        grep(pattern, sys.stdin, sys.stdout)
        return 0
    for path in files:
        try:
            handle = open(path, encoding="utf-8", errors="replace", newline="\n")
        except OSError:
            sys.stdout.write(f"grep: cannot open {path}\n")
            return 1
        with handle:
            grep(pattern, handle, sys.stdout)
    return 0