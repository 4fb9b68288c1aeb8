"""Parser for the shell's command language: words, < > >>, |, ;, & and ( )."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from xvkit.layout import OpenFlag

WHITESPACE = " \t\r\n\v"
SYMBOLS = "<|>&;()"
MAXARGS = 10
"""An exec command holds fewer than this many words."""


class ShellSyntaxError(ValueError):
    """Raised when a command line cannot be parsed."""


@dataclass
class ExecCmd:
    """Run a program with arguments; an empty argv does nothing."""

    argv: list[str] = field(default_factory=list)


@dataclass
class RedirCmd:
    """Run ``cmd`` with descriptor ``fd`` reopened on ``file`` with ``mode``."""

    cmd: "Command"
    file: str
    mode: OpenFlag
    fd: int


@dataclass
class PipeCmd:
    """Connect the output of ``left`` to the input of ``right``."""

    left: "Command"
    right: "Command"


@dataclass
class ListCmd:
    """Run ``left`` and then ``right``."""

    left: "Command"
    right: "Command"


@dataclass
class BackCmd:
    """Run ``cmd`` in the background."""

    cmd: "Command"


@dataclass
class SubshellCmd:
    """Run ``cmd`` in a child shell."""

    cmd: "Command"


Command = Union[ExecCmd, RedirCmd, PipeCmd, ListCmd, BackCmd, SubshellCmd]

_REDIRECTS = {
    "<": (OpenFlag.RDONLY, 0),
    ">": (OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC, 1),
    "+": (OpenFlag.WRONLY | OpenFlag.CREATE, 1),
}


class Parser:
    """Recursive-descent parser over one command line.

    The text ends at its first NUL character, if any.
    """

    def __init__(self, text: str) -> None:
        self._text = text.split("\0", 1)[0]
        self._pos = 0

    def parse(self) -> Command:
        """Parse the whole line; raise ShellSyntaxError on malformed input."""
        self._pos = 0
        cmd = self._line()
        self._peek("")
        if self._pos != len(self._text):
            raise ShellSyntaxError(f"leftovers: {self._text[self._pos:]}")
        return cmd

    def _char(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _skip_space(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos] in WHITESPACE:
            self._pos += 1

    def _peek(self, toks: str) -> bool:
        self._skip_space()
        c = self._char()
        return c != "" and c in toks

    def _token(self) -> tuple[str, str]:
        """Consume one token; return its kind and its text.

        The kind is "" at the end of input, "a" for a word, "+" for ">>"
        and the symbol itself otherwise.
        """
        self._skip_space()
        start = self._pos
        c = self._char()
        if c == "":
            kind = ""
        elif c in "|();&<":
            self._pos += 1
            kind = c
        elif c == ">":
            self._pos += 1
            if self._char() == ">":
                self._pos += 1
                kind = "+"
            else:
                kind = ">"
        else:
            kind = "a"
            text = self._text
            while (
                self._pos < len(text)
                and text[self._pos] not in WHITESPACE
                and text[self._pos] not in SYMBOLS
            ):
                self._pos += 1
        word = self._text[start:self._pos]
        self._skip_space()
        return kind, word

    def _line(self) -> Command:
        cmd = self._pipe()
        while self._peek("&"):
            self._token()
            cmd = BackCmd(cmd)
        if self._peek(";"):
            self._token()
            cmd = ListCmd(cmd, self._line())
        return cmd

    def _pipe(self) -> Command:
        cmd = self._exec()
        if self._peek("|"):
            self._token()
            cmd = PipeCmd(cmd, self._pipe())
        return cmd

    def _redirs(self, cmd: Command) -> Command:
        while self._peek("<>"):
            kind, _ = self._token()
            target_kind, target = self._token()
            if target_kind != "a":
                raise ShellSyntaxError("missing file for redirection")
            mode, fd = _REDIRECTS[kind]
            cmd = RedirCmd(cmd, target, mode, fd)
        return cmd

    def _block(self) -> Command:
        if not self._peek("("):
            raise ShellSyntaxError("parseblock")
        self._token()
        cmd: Command = SubshellCmd(self._line())
        if not self._peek(")"):
            raise ShellSyntaxError("syntax - missing )")
        self._token()
        return self._redirs(cmd)

    def _exec(self) -> Command:
        if self._peek("("):
            return self._block()
        node = ExecCmd()
        cmd = self._redirs(node)
        while not self._peek("|)&;"):
            kind, word = self._token()
            if kind == "":
                break
            if kind != "a":
                raise ShellSyntaxError("syntax")
            node.argv.append(word)
            if len(node.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            cmd = self._redirs(cmd)
        return cmd


def parse_command(line: str) -> Command:
    """Parse one command line into a command tree."""
    return Parser(line).parse()