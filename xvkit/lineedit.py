"""Interactive line reading with history recall and file-name completion."""

from __future__ import annotations

import itertools
import os
import stat
import sys
from typing import Callable, Iterable, TextIO

from xvkit.shellparse import SYMBOLS, WHITESPACE

HISTORY_COUNT = 16
BUFSIZE = 100
MATCH_COUNT = 10

BACKSPACE = "\x08"
DELETE = "\x7f"
CTRL_N = "\x0e"
CTRL_P = "\x10"
CTRL_U = "\x15"

_REDRAW = "\r\033[K$ "


def find_matches(prefix: str, names: Iterable[str], limit: int = MATCH_COUNT) -> list[str]:
    """The first ``limit`` names that start with ``prefix``, in the given order."""
    return list(itertools.islice((n for n in names if n.startswith(prefix)), limit))


class History:
    """A ring of recent command lines with a browsing cursor.

    ``written`` counts the lines ever added; ``cursor`` is the line being
    shown, equal to ``written`` when the user is on the line being typed.
    """

    def __init__(self, capacity: int = HISTORY_COUNT) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._lines = [""] * capacity
        self.written = 0
        self.cursor = 0
        self._staged = ""

    def add(self, line: str) -> None:
        """Record ``line`` without its final character (its terminator)."""
        if not line:
            raise ValueError("cannot record an empty line")
        self._lines[self.written % self.capacity] = line[:-1]
        self.written += 1
        self.cursor = self.written

    def stage(self, text: str) -> None:
        """Remember the line being typed, unless browsing older entries."""
        if self.cursor == self.written:
            self._staged = text

    def step(self, step: int) -> str | None:
        """Move the cursor by ``step``; return the line now shown, or None if it could not move."""
        cur = self.cursor + step
        if cur < 0 or cur <= self.written - self.capacity:
            return None
        if cur == self.written:
            self.cursor = cur
            return self._staged
        if cur > self.written:
            return None
        self.cursor = cur
        return self._lines[cur % self.capacity]


def _list_cwd() -> list[str]:
    try:
        names = sorted(os.listdir("."))
    except OSError:
        sys.stderr.write("tab completion: cannot open current directory\n")
        return []
    return [".", "..", *names]


def _is_regular_file(stream: TextIO) -> bool:
    try:
        return stat.S_ISREG(os.fstat(stream.fileno()).st_mode)
    except (AttributeError, OSError, ValueError):
        return True


class LineEditor:
    """Collects keystrokes into a command line.

    ``list_names`` returns the names offered for completion; ``out``
    receives the screen updates the editor draws.
    """

    def __init__(
        self,
        history: History | None = None,
        list_names: Callable[[], Iterable[str]] | None = None,
        out: TextIO | None = None,
    ) -> None:
        self.history = history if history is not None else History()
        self._list_names = list_names if list_names is not None else _list_cwd
        self._out = out if out is not None else sys.stdout
        self.text = ""

    def feed(self, char: str) -> bool:
        """Process one character; return True when it ends the line."""
        if char == "\t":
            self._complete()
        elif char in ("\n", "\r"):
            self.text += "\n"
            return True
        elif char in (DELETE, BACKSPACE):
            if self.text:
                self.text = self.text[:-1]
                self._out.write("\b \b")
        elif char == CTRL_U:
            self.text = ""
        elif char in (CTRL_P, CTRL_N):
            self.history.stage(self.text)
            recalled = self.history.step(-1 if char == CTRL_P else 1)
            if recalled is not None:
                self.text = recalled
            self._out.write(_REDRAW + self.text)
        else:
            self.text += char
        return False

    def _complete(self) -> None:
        start = len(self.text)
        while start > 0 and self.text[start - 1] not in WHITESPACE + SYMBOLS:
            start -= 1
        prefix = self.text[start:]
        if not prefix:
            return
        matches = find_matches(prefix, self._list_names(), MATCH_COUNT)
        if len(matches) == 1:
            self.text = self.text[:start] + matches[0]
            self._out.write(_REDRAW + self.text)
        elif matches:
            listing = "".join(f"{m}  " for m in matches)
            self._out.write(f"\n{listing}\n$ {self.text}")

    def read_line(self, stream: TextIO) -> str | None:
        """Read one line from ``stream``; None when nothing was entered before end of input."""
        if not _is_regular_file(stream):
            sys.stderr.write("$ ")
        self.text = ""
        while len(self.text) < BUFSIZE - 1:
            char = stream.read(1)
            if not char:
                break
            if self.feed(char):
                break
        return self.text or None