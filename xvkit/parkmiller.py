"""Park-Miller minimal standard pseudo-random number generator."""

from __future__ import annotations

from typing import Iterator

_MODULUS = 0x7FFFFFFF
_ULONG = (1 << 64) - 1


def do_rand(ctx: int) -> int:
    """Return the value that follows state ``ctx``; it is also the next state.

    Results lie in the range [0, 0x7ffffffd].
    """
    x = (ctx & _ULONG) % 0x7FFFFFFE + 1
    hi, lo = divmod(x, 127773)
    x = 16807 * lo - 2836 * hi
    if x < 0:
        x += _MODULUS
    return x - 1


class ParkMiller:
    """A generator holding its own state."""

    def __init__(self, seed: int = 1) -> None:
        self.state = seed & _ULONG

    def next(self) -> int:
        """Advance the state and return the new value."""
        self.state = do_rand(self.state)
        return self.state

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.next()