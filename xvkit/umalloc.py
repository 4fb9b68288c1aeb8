"""First-fit free-list allocator over a simulated heap that grows like sbrk."""

from __future__ import annotations

HEADER_SIZE = 16
"""Bytes in one block header; blocks are measured in units of this size."""

MIN_UNITS = 4096
"""The heap grows by at least this many units at a time."""

_MAX_REQUEST = 0xFFFFFFFF
_BASE = 0


class Allocator:
    """A circular, address-ordered free list with neighbour coalescing.

    Addresses are byte offsets into the simulated heap.  Unit 0 holds the
    list's zero-sized anchor block, so the heap proper begins at
    ``HEADER_SIZE``.  ``limit`` caps how many bytes the heap may grow to;
    ``None`` means no cap.
    """

    def __init__(self, limit: int | None = None) -> None:
        if limit is not None and limit < 0:
            raise ValueError("limit must not be negative")
        self._limit = limit
        self._brk = 1
        self._size: dict[int, int] = {}
        self._next: dict[int, int] = {}
        self._freep: int | None = None
        self._allocated: set[int] = set()

    @property
    def heap_bytes(self) -> int:
        """Bytes the heap has grown to so far."""
        return (self._brk - 1) * HEADER_SIZE

    def malloc(self, nbytes: int) -> int:
        """Allocate ``nbytes`` and return the address of the block.

        Raises MemoryError when the heap cannot grow far enough.
        """
        if nbytes < 0 or nbytes > _MAX_REQUEST:
            raise ValueError("request size out of range")
        nunits = (nbytes + HEADER_SIZE - 1) // HEADER_SIZE + 1
        if self._freep is None:
            self._next[_BASE] = _BASE
            self._size[_BASE] = 0
            self._freep = _BASE
        prevp = self._freep
        p = self._next[prevp]
        while True:
            if self._size[p] >= nunits:
                if self._size[p] == nunits:
                    self._next[prevp] = self._next[p]
                else:
                    self._size[p] -= nunits
                    p += self._size[p]
                    self._size[p] = nunits
                self._next.pop(p, None)
                self._freep = prevp
                self._allocated.add(p)
                return (p + 1) * HEADER_SIZE
            if p == self._freep:
                grown = self._morecore(nunits)
                if grown is None:
                    raise MemoryError(f"cannot allocate {nbytes} bytes")
                p = grown
            prevp, p = p, self._next[p]

    def free(self, addr: int) -> None:
        """Return a block obtained from :meth:`malloc` to the free list."""
        if addr % HEADER_SIZE:
            raise ValueError(f"address {addr} was not returned by malloc")
        bp = addr // HEADER_SIZE - 1
        if bp not in self._allocated:
            raise ValueError(f"address {addr} is not an allocated block")
        self._allocated.remove(bp)
        self._insert(bp)

    def free_blocks(self) -> list[tuple[int, int]]:
        """List the free blocks as (header address, size in bytes), lowest first."""
        blocks = []
        if self._freep is None:
            return blocks
        p = self._next[_BASE]
        while p != _BASE:
            blocks.append((p * HEADER_SIZE, self._size[p] * HEADER_SIZE))
            p = self._next[p]
        return blocks

    def _morecore(self, nunits: int) -> int | None:
        nunits = max(nunits, MIN_UNITS)
        if self._limit is not None and (self._brk - 1 + nunits) * HEADER_SIZE > self._limit:
            return None
        hp = self._brk
        self._brk += nunits
        self._size[hp] = nunits
        self._insert(hp)
        return self._freep

    def _insert(self, bp: int) -> None:
        size, nxt = self._size, self._next
        p = self._freep
        while not (p < bp < nxt[p]):
            if p >= nxt[p] and (bp > p or bp < nxt[p]):
                break
            p = nxt[p]
        after = nxt[p]
        if bp + size[bp] == after:
            size[bp] += size[after]
            nxt[bp] = nxt[after]
            del size[after], nxt[after]
        else:
            nxt[bp] = after
        if p + size[p] == bp:
            size[p] += size[bp]
            nxt[p] = nxt[bp]
            del size[bp], nxt[bp]
        else:
            nxt[p] = bp
        self._freep = p