"""Pixel layout: colour types, bit depths, units and output transformations."""

from __future__ import annotations

import enum
from typing import Optional

__all__ = ["ColorType", "BitDepth", "BytesPerPixel", "Unit", "Transformations"]

_MAX_WIDTH = 0xFFFFFFFF


def _check_width(width: int) -> None:
    if not 0 <= width <= _MAX_WIDTH:
        raise ValueError(f"width out of range: {width}")


class BitDepth(enum.IntEnum):
    """Number of bits per sample."""

    ONE = 1
    TWO = 2
    FOUR = 4
    EIGHT = 8
    SIXTEEN = 16

    @classmethod
    def from_u8(cls, n: int) -> Optional[BitDepth]:
        """Return the bit depth with value n, or None if there is none."""
        try:
            return cls(n)
        except ValueError:
            return None


class ColorType(enum.IntEnum):
    """How a pixel is encoded."""

    GRAYSCALE = 0
    RGB = 2
    INDEXED = 3
    GRAYSCALE_ALPHA = 4
    RGBA = 6

    def samples(self) -> int:
        """Number of samples per pixel."""
        return _SAMPLES[self]

    @classmethod
    def from_u8(cls, n: int) -> Optional[ColorType]:
        """Return the colour type with value n, or None if there is none."""
        try:
            return cls(n)
        except ValueError:
            return None

    def checked_raw_row_length(self, depth: BitDepth, width: int) -> int:
        """Bytes of one raw row including the filter byte, for a validated width."""
        _check_width(width)
        bits = width * self.samples() * int(depth)
        return 1 + (bits + 7) // 8

    def raw_row_length_from_width(self, depth: BitDepth, width: int) -> int:
        """Bytes of one raw row of the given width, including the filter byte."""
        samples = width * self.samples()
        depth = BitDepth(depth)
        if depth is BitDepth.SIXTEEN:
            return 1 + samples * 2
        if depth is BitDepth.EIGHT:
            return 1 + samples
        samples_per_byte = 8 // int(depth)
        whole, rest = divmod(samples, samples_per_byte)
        return 1 + whole + (1 if rest else 0)

    def is_combination_invalid(self, bit_depth: BitDepth) -> bool:
        """True if the PNG standard forbids this colour type at this bit depth."""
        sub_byte = bit_depth in (BitDepth.ONE, BitDepth.TWO, BitDepth.FOUR)
        multi_sample = self in (
            ColorType.RGB,
            ColorType.GRAYSCALE_ALPHA,
            ColorType.RGBA,
        )
        return (sub_byte and multi_sample) or (
            bit_depth == BitDepth.SIXTEEN and self is ColorType.INDEXED
        )


_SAMPLES = {
    ColorType.GRAYSCALE: 1,
    ColorType.INDEXED: 1,
    ColorType.RGB: 3,
    ColorType.GRAYSCALE_ALPHA: 2,
    ColorType.RGBA: 4,
}


class BytesPerPixel(enum.IntEnum):
    """Whole bytes per pixel as used by the scanline filters."""

    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    SIX = 6
    EIGHT = 8

    @classmethod
    def from_usize(cls, bpp: int) -> BytesPerPixel:
        """Return the member for bpp; raise ValueError if no pixel has that width."""
        try:
            return cls(bpp)
        except ValueError:
            raise ValueError(
                f"not a possible byte rounded pixel width: {bpp}"
            ) from None


class Unit(enum.IntEnum):
    """Physical unit of the pixel dimensions."""

    UNSPECIFIED = 0
    METER = 1

    @classmethod
    def from_u8(cls, n: int) -> Optional[Unit]:
        """Return the unit with value n, or None if there is none."""
        try:
            return cls(n)
        except ValueError:
            return None


class Transformations(enum.IntFlag):
    """Output transformations applied while decoding."""

    IDENTITY = 0x00000
    STRIP_16 = 0x00001
    EXPAND = 0x00010
    ALPHA = 0x10000

    @classmethod
    def normalize_to_color8(cls) -> Transformations:
        """Transform every input to 8-bit grayscale or colour."""
        return cls.EXPAND | cls.STRIP_16