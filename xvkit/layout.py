"""Machine memory layout, page-table arithmetic, kernel limits and record formats."""

from __future__ import annotations

import enum
import struct
from dataclasses import astuple, dataclass
from typing import ClassVar

U64_MASK = (1 << 64) - 1

# Machine status register.
MSTATUS_MPP_MASK = 3 << 11
MSTATUS_MPP_M = 3 << 11
MSTATUS_MPP_S = 1 << 11
MSTATUS_MPP_U = 0 << 11
MSTATUS_MIE = 1 << 3

# Supervisor status register.
SSTATUS_SPP = 1 << 8
SSTATUS_SPIE = 1 << 5
SSTATUS_UPIE = 1 << 4
SSTATUS_SIE = 1 << 1
SSTATUS_UIE = 1 << 0

# Supervisor interrupt enable.
SIE_SEIE = 1 << 9
SIE_STIE = 1 << 5
SIE_SSIE = 1 << 1

# Machine-mode interrupt enable.
MIE_MEIE = 1 << 11
MIE_MTIE = 1 << 7
MIE_MSIE = 1 << 3

SATP_SV39 = 8 << 60

PGSIZE = 4096
PGSHIFT = 12

PTE_V = 1 << 0
PTE_R = 1 << 1
PTE_W = 1 << 2
PTE_X = 1 << 3
PTE_U = 1 << 4

PXMASK = 0x1FF

# One beyond the highest usable virtual address.
MAXVA = 1 << (9 + 9 + 9 + 12 - 1)

# Physical memory layout of the virt machine.
UART0 = 0x10000000
UART0_IRQ = 10
VIRTIO0 = 0x10001000
VIRTIO0_IRQ = 1
CLINT = 0x2000000
CLINT_MTIME = CLINT + 0xBFF8
PLIC = 0x0C000000
PLIC_PRIORITY = PLIC + 0x0
PLIC_PENDING = PLIC + 0x1000
KERNBASE = 0x80000000
PHYSTOP = KERNBASE + 128 * 1024 * 1024

TRAMPOLINE = MAXVA - PGSIZE
TRAPFRAME = TRAMPOLINE - PGSIZE

# Kernel limits.
NPROC = 64
NCPU = 8
NOFILE = 16
NFILE = 100
NINODE = 50
NDEV = 10
ROOTDEV = 1
MAXARG = 32
MAXOPBLOCKS = 10
LOGSIZE = MAXOPBLOCKS * 3
NBUF = MAXOPBLOCKS * 3
FSSIZE = 1000
MAXPATH = 128

# Executable format.
ELF_MAGIC = 0x464C457F
ELF_PROG_LOAD = 1
ELF_PROG_FLAG_EXEC = 1
ELF_PROG_FLAG_WRITE = 2
ELF_PROG_FLAG_READ = 4


class FileType(enum.IntEnum):
    """Kind of object an inode describes."""

    DIR = 1
    FILE = 2
    DEVICE = 3


class OpenFlag(enum.IntFlag):
    """Flags accepted by open."""

    RDONLY = 0x000
    WRONLY = 0x001
    RDWR = 0x002
    CREATE = 0x200
    TRUNC = 0x400


@dataclass
class Stat:
    """What fstat reports about an open file."""

    dev: int
    ino: int
    type: FileType
    nlink: int
    size: int

    def __post_init__(self) -> None:
        self.type = FileType(self.type)


@dataclass
class RtcDate:
    """A calendar date and time of day."""

    second: int
    minute: int
    hour: int
    day: int
    month: int
    year: int


def pg_round_up(sz: int) -> int:
    """Round an address up to the next page boundary."""
    return (sz + PGSIZE - 1) & ~(PGSIZE - 1) & U64_MASK


def pg_round_down(a: int) -> int:
    """Round an address down to its page boundary."""
    return a & ~(PGSIZE - 1) & U64_MASK


def pa2pte(pa: int) -> int:
    """Shift a physical address into the position it takes in a PTE."""
    return (((pa & U64_MASK) >> 12) << 10) & U64_MASK


def pte2pa(pte: int) -> int:
    """Extract the physical address held by a PTE."""
    return (((pte & U64_MASK) >> 10) << 12) & U64_MASK


def pte_flags(pte: int) -> int:
    """Return the flag bits of a PTE."""
    return pte & 0x3FF


def px(level: int, va: int) -> int:
    """Return the 9-bit page-table index of ``va`` at ``level``."""
    return ((va & U64_MASK) >> (PGSHIFT + 9 * level)) & PXMASK


def make_satp(pagetable: int) -> int:
    """Build the satp value selecting Sv39 with the given root page table."""
    return SATP_SV39 | ((pagetable & U64_MASK) >> 12)


def kstack(p: int) -> int:
    """Virtual address of the kernel stack of process slot ``p``."""
    return TRAMPOLINE - (p + 1) * 2 * PGSIZE


def clint_mtimecmp(hartid: int) -> int:
    return CLINT + 0x4000 + 8 * hartid


def plic_menable(hart: int) -> int:
    return PLIC + 0x2000 + hart * 0x100


def plic_senable(hart: int) -> int:
    return PLIC + 0x2080 + hart * 0x100


def plic_mpriority(hart: int) -> int:
    return PLIC + 0x200000 + hart * 0x2000


def plic_spriority(hart: int) -> int:
    return PLIC + 0x201000 + hart * 0x2000


def plic_mclaim(hart: int) -> int:
    return PLIC + 0x200004 + hart * 0x2000


def plic_sclaim(hart: int) -> int:
    return PLIC + 0x201004 + hart * 0x2000


_ELF_HEADER = struct.Struct("<I12sHHIQQQIHHHHHH")
_PROG_HEADER = struct.Struct("<IIQQQQQQ")


def _pack(layout: struct.Struct, values: tuple) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ValueError(str(exc)) from None


def _unpack(layout: struct.Struct, data: bytes, what: str) -> tuple:
    if len(data) < layout.size:
        raise ValueError(f"{what} needs {layout.size} bytes, got {len(data)}")
    return layout.unpack_from(data)


@dataclass
class ElfHeader:
    """The file header of an executable."""

    magic: int = ELF_MAGIC
    elf: bytes = bytes(12)
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = 0
    phentsize: int = 0
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0

    SIZE: ClassVar[int] = _ELF_HEADER.size

    @property
    def valid(self) -> bool:
        """True when the magic number marks an executable."""
        return self.magic == ELF_MAGIC

    @classmethod
    def from_bytes(cls, data: bytes) -> "ElfHeader":
        return cls(*_unpack(_ELF_HEADER, bytes(data), "ELF header"))

    def pack(self) -> bytes:
        if len(self.elf) != 12:
            raise ValueError("elf identification must be 12 bytes")
        return _pack(_ELF_HEADER, astuple(self))


@dataclass
class ProgramHeader:
    """A program section header of an executable."""

    type: int = 0
    flags: int = 0
    off: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    align: int = 0

    SIZE: ClassVar[int] = _PROG_HEADER.size

    @property
    def loadable(self) -> bool:
        return self.type == ELF_PROG_LOAD

    @classmethod
    def from_bytes(cls, data: bytes) -> "ProgramHeader":
        return cls(*_unpack(_PROG_HEADER, bytes(data), "program header"))

    def pack(self) -> bytes:
        return _pack(_PROG_HEADER, astuple(self))