"""PNG chunk types, their property bits, and chunk serialisation."""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass
from typing import BinaryIO, Union

__all__ = [
    "ChunkType",
    "IHDR",
    "PLTE",
    "IDAT",
    "IEND",
    "tRNS",
    "bKGD",
    "tIME",
    "pHYs",
    "cHRM",
    "gAMA",
    "sRGB",
    "iCCP",
    "tEXt",
    "zTXt",
    "iTXt",
    "acTL",
    "fcTL",
    "fdAT",
    "is_critical",
    "is_private",
    "reserved_set",
    "safe_to_copy",
    "write_chunk",
]

_PROPERTY_BIT = 32
_MAX_CHUNK_LENGTH = 0xFFFFFFFF


@dataclass(frozen=True)
class ChunkType:
    """A four-byte PNG chunk type code."""

    code: bytes

    def __post_init__(self) -> None:
        code = bytes(self.code)
        if len(code) != 4:
            raise ValueError(f"chunk type must be 4 bytes long, got {len(code)}")
        object.__setattr__(self, "code", code)

    @property
    def name(self) -> str:
        """The type code as text, with non-printable bytes escaped."""
        return self.code.decode("latin-1").encode("unicode_escape").decode("ascii")

    def is_critical(self) -> bool:
        """True if the chunk is critical (ancillary bit clear)."""
        return self.code[0] & _PROPERTY_BIT == 0

    def is_private(self) -> bool:
        """True if the chunk is private."""
        return self.code[1] & _PROPERTY_BIT != 0

    def reserved_set(self) -> bool:
        """True if the reserved bit is set, which makes the name invalid."""
        return self.code[2] & _PROPERTY_BIT != 0

    def safe_to_copy(self) -> bool:
        """True if the chunk may be copied by editors that do not know it."""
        return self.code[3] & _PROPERTY_BIT != 0

    def __bytes__(self) -> bytes:
        return self.code

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return (
            f"ChunkType(type={self.name!r}, critical={self.is_critical()}, "
            f"private={self.is_private()}, reserved={self.reserved_set()}, "
            f"safecopy={self.safe_to_copy()})"
        )


# Critical chunks
IHDR = ChunkType(b"IHDR")
PLTE = ChunkType(b"PLTE")
IDAT = ChunkType(b"IDAT")
IEND = ChunkType(b"IEND")

# Ancillary chunks
tRNS = ChunkType(b"tRNS")
bKGD = ChunkType(b"bKGD")
tIME = ChunkType(b"tIME")
pHYs = ChunkType(b"pHYs")
cHRM = ChunkType(b"cHRM")
gAMA = ChunkType(b"gAMA")
sRGB = ChunkType(b"sRGB")
iCCP = ChunkType(b"iCCP")
tEXt = ChunkType(b"tEXt")
zTXt = ChunkType(b"zTXt")
iTXt = ChunkType(b"iTXt")

# Animation extension chunks
acTL = ChunkType(b"acTL")
fcTL = ChunkType(b"fcTL")
fdAT = ChunkType(b"fdAT")


def is_critical(chunk_type: ChunkType) -> bool:
    """Return True if the chunk is critical."""
    return chunk_type.is_critical()


def is_private(chunk_type: ChunkType) -> bool:
    """Return True if the chunk is private."""
    return chunk_type.is_private()


def reserved_set(chunk_type: ChunkType) -> bool:
    """Return True if the reserved bit of the chunk name is set."""
    return chunk_type.reserved_set()


def safe_to_copy(chunk_type: ChunkType) -> bool:
    """Return True if the chunk is safe to copy if unknown."""
    return chunk_type.safe_to_copy()


def write_chunk(
    stream: BinaryIO, chunk_type: Union[ChunkType, bytes], data: bytes
) -> None:
    """Write one chunk: length, type, data and CRC-32 of type and data."""
    if not isinstance(chunk_type, ChunkType):
        chunk_type = ChunkType(chunk_type)
    data = bytes(data)
    if len(data) > _MAX_CHUNK_LENGTH:
        raise ValueError(f"chunk data too long: {len(data)} bytes")
    crc = zlib.crc32(chunk_type.code + data) & 0xFFFFFFFF
    stream.write(struct.pack(">I", len(data)))
    stream.write(chunk_type.code)
    stream.write(data)
    stream.write(struct.pack(">I", crc))