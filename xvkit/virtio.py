"""Legacy virtio MMIO registers, descriptor rings and block requests."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import ClassVar

# MMIO control registers.
VIRTIO_MMIO_MAGIC_VALUE = 0x000
VIRTIO_MMIO_VERSION = 0x004
VIRTIO_MMIO_DEVICE_ID = 0x008
VIRTIO_MMIO_VENDOR_ID = 0x00C
VIRTIO_MMIO_DEVICE_FEATURES = 0x010
VIRTIO_MMIO_DRIVER_FEATURES = 0x020
VIRTIO_MMIO_GUEST_PAGE_SIZE = 0x028
VIRTIO_MMIO_QUEUE_SEL = 0x030
VIRTIO_MMIO_QUEUE_NUM_MAX = 0x034
VIRTIO_MMIO_QUEUE_NUM = 0x038
VIRTIO_MMIO_QUEUE_ALIGN = 0x03C
VIRTIO_MMIO_QUEUE_PFN = 0x040
VIRTIO_MMIO_QUEUE_READY = 0x044
VIRTIO_MMIO_QUEUE_NOTIFY = 0x050
VIRTIO_MMIO_INTERRUPT_STATUS = 0x060
VIRTIO_MMIO_INTERRUPT_ACK = 0x064
VIRTIO_MMIO_STATUS = 0x070

# Status register bits.
VIRTIO_CONFIG_S_ACKNOWLEDGE = 1
VIRTIO_CONFIG_S_DRIVER = 2
VIRTIO_CONFIG_S_DRIVER_OK = 4
VIRTIO_CONFIG_S_FEATURES_OK = 8

# Device feature bits.
VIRTIO_BLK_F_RO = 5
VIRTIO_BLK_F_SCSI = 7
VIRTIO_BLK_F_CONFIG_WCE = 11
VIRTIO_BLK_F_MQ = 12
VIRTIO_F_ANY_LAYOUT = 27
VIRTIO_RING_F_INDIRECT_DESC = 28
VIRTIO_RING_F_EVENT_IDX = 29

# Number of descriptors; a power of two.
NUM = 8

VIRTIO_BLK_T_IN = 0
VIRTIO_BLK_T_OUT = 1


class DescFlag(enum.IntFlag):
    """Descriptor flags."""

    NEXT = 1
    WRITE = 2


def _pack(layout: struct.Struct, values) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ValueError(str(exc)) from None


def _unpack(layout: struct.Struct, data: bytes, what: str) -> tuple:
    if len(data) < layout.size:
        raise ValueError(f"{what} needs {layout.size} bytes, got {len(data)}")
    return layout.unpack_from(bytes(data))


_DESC = struct.Struct("<QIHH")
_AVAIL = struct.Struct(f"<HH{NUM}HH")
_USED_ELEM = struct.Struct("<II")
_USED = struct.Struct("<HH" + "II" * NUM)
_BLK_REQ = struct.Struct("<IIQ")


@dataclass
class VirtqDesc:
    """A single descriptor."""

    addr: int = 0
    length: int = 0
    flags: DescFlag = DescFlag(0)
    next: int = 0

    SIZE: ClassVar[int] = _DESC.size

    def pack(self) -> bytes:
        return _pack(_DESC, (self.addr, self.length, int(self.flags), self.next))

    @classmethod
    def unpack(cls, data: bytes) -> "VirtqDesc":
        addr, length, flags, nxt = _unpack(_DESC, data, "descriptor")
        return cls(addr, length, DescFlag(flags), nxt)


@dataclass
class VirtqAvail:
    """The available ring: descriptor numbers of chain heads."""

    flags: int = 0
    idx: int = 0
    ring: tuple = (0,) * NUM
    unused: int = 0

    SIZE: ClassVar[int] = _AVAIL.size

    def pack(self) -> bytes:
        if len(self.ring) != NUM:
            raise ValueError(f"avail ring must hold {NUM} entries")
        return _pack(_AVAIL, (self.flags, self.idx, *self.ring, self.unused))

    @classmethod
    def unpack(cls, data: bytes) -> "VirtqAvail":
        values = _unpack(_AVAIL, data, "avail ring")
        return cls(values[0], values[1], tuple(values[2:2 + NUM]), values[2 + NUM])


@dataclass
class VirtqUsedElem:
    """One completed request reported by the device."""

    id: int = 0
    length: int = 0

    SIZE: ClassVar[int] = _USED_ELEM.size

    def pack(self) -> bytes:
        return _pack(_USED_ELEM, (self.id, self.length))

    @classmethod
    def unpack(cls, data: bytes) -> "VirtqUsedElem":
        return cls(*_unpack(_USED_ELEM, data, "used element"))


@dataclass
class VirtqUsed:
    """The used ring, written by the device."""

    flags: int = 0
    idx: int = 0
    ring: tuple = field(default_factory=lambda: tuple(VirtqUsedElem() for _ in range(NUM)))

    SIZE: ClassVar[int] = _USED.size

    def pack(self) -> bytes:
        if len(self.ring) != NUM:
            raise ValueError(f"used ring must hold {NUM} entries")
        flat = [value for elem in self.ring for value in (elem.id, elem.length)]
        return _pack(_USED, (self.flags, self.idx, *flat))

    @classmethod
    def unpack(cls, data: bytes) -> "VirtqUsed":
        values = _unpack(_USED, data, "used ring")
        pairs = values[2:]
        ring = tuple(VirtqUsedElem(i, n) for i, n in zip(pairs[0::2], pairs[1::2]))
        return cls(values[0], values[1], ring)


@dataclass
class BlkRequest:
    """Header of a block-device request."""

    type: int = VIRTIO_BLK_T_IN
    reserved: int = 0
    sector: int = 0

    SIZE: ClassVar[int] = _BLK_REQ.size

    def pack(self) -> bytes:
        return _pack(_BLK_REQ, (self.type, self.reserved, self.sector))

    @classmethod
    def unpack(cls, data: bytes) -> "BlkRequest":
        return cls(*_unpack(_BLK_REQ, data, "block request"))