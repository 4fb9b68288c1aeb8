"""Minimal printf: %d, %l, %x, %p, %s, %c and %%."""

from __future__ import annotations

import operator
from typing import Any, Callable, TextIO

DIGITS = "0123456789ABCDEF"
_UINT32 = 0xFFFFFFFF
_UINT64 = (1 << 64) - 1


def _digits(x: int, base: int) -> str:
    out = []
    while True:
        x, r = divmod(x, base)
        out.append(DIGITS[r])
        if x == 0:
            break
    return "".join(reversed(out))


def _int(value: Any, base: int, signed: bool) -> str:
    x = operator.index(value) & _UINT32
    if signed and x & 0x80000000:
        return "-" + _digits((1 << 32) - x, base)
    return _digits(x, base)


def _ptr(value: Any) -> str:
    x = operator.index(value) & _UINT64
    return "0x" + "".join(DIGITS[(x >> shift) & 0xF] for shift in range(60, -4, -4))


def _str(value: Any) -> str:
    return "(null)" if value is None else str(value)


def _char(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c requires a single character")
        return value
    return chr(operator.index(value) & 0xFF)


_CONVERSIONS: dict[str, Callable[[Any], str]] = {
    "d": lambda v: _int(v, 10, True),
    "l": lambda v: _int(v, 10, False),
    "x": lambda v: _int(v, 16, False),
    "p": _ptr,
    "s": _str,
    "c": _char,
}


def sprintf(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` and return the text.

    Integers are taken as 32-bit values; unknown conversions are echoed
    with their percent sign, and a lone trailing percent is dropped.
    """
    values = iter(args)
    pieces = []
    chars = iter(fmt)
    for c in chars:
        if c != "%":
            pieces.append(c)
            continue
        spec = next(chars, None)
        if spec is None:
            break
        convert = _CONVERSIONS.get(spec)
        if convert is not None:
            try:
                value = next(values)
            except StopIteration:
                raise TypeError("not enough arguments for format string") from None
            pieces.append(convert(value))
        elif spec == "%":
            pieces.append("%")
        else:
            pieces.append("%" + spec)
    return "".join(pieces)


def fprintf(stream: TextIO, fmt: str, *args: Any) -> None:
    """Format like :func:`sprintf` and write the text to ``stream``."""
    stream.write(sprintf(fmt, *args))