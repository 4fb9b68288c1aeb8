"""Prime sieve in the style of a pipeline of filters."""

from __future__ import annotations

import sys
from typing import Iterable, Iterator

from xvkit.fmt import sprintf


def primes(numbers: Iterable[int]) -> Iterator[int]:
    """Yield each number not divisible by any earlier yielded number.

    Every stage of the sieve takes the first number it sees as its prime
    and drops that prime's multiples from the rest.
    """
    found: list[int] = []
    for n in numbers:
        if all(n % p for p in found):
            if n == 0:
                raise ValueError("0 cannot head a sieve stage")
            found.append(n)
            yield n


def main(argv: list[str] | None = None) -> int:
    """Print the primes up to 35."""
    for p in primes(range(2, 36)):
        sys.stdout.write(sprintf("prime %d\n", p))
    return 0