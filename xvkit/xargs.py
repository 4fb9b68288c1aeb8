"""Argument lists for running a command once per input line."""

from __future__ import annotations

from xvkit.layout import MAXARG

MAXBUF = 1024


def split_lines(data: str) -> list[str]:
    """Split the first MAXBUF characters of ``data`` into lines.

    Leading newlines are skipped, a final newline adds no empty line, and
    empty lines in the middle are kept.  More than MAXARG lines is an error.
    """
    text = data[:MAXBUF].lstrip("\n")
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    if len(lines) > MAXARG:
        raise ValueError(f"xargs: more than {MAXARG} input lines")
    return lines


def build_argvs(argv: list[str], data: str) -> list[list[str]]:
    """One argument vector per input line: the command, its arguments, the line."""
    if not argv:
        raise ValueError("usage: xargs command args")
    return [[*argv, line] for line in split_lines(data)]