"""Image metadata: gamma, chromaticities, sRGB intent, and the Info record."""

from __future__ import annotations

import enum
import math
import struct
from dataclasses import dataclass, field
from typing import Any, BinaryIO, List, Optional, Tuple

from pngcore.animation import AnimationControl, FrameControl
from pngcore.chunk import cHRM, gAMA, sRGB, write_chunk
from pngcore.colors import BitDepth, BytesPerPixel, ColorType, Unit

__all__ = [
    "ScaledFloat",
    "SourceChromaticities",
    "SrgbRenderingIntent",
    "PixelDimensions",
    "Compression",
    "Info",
    "ParameterErrorKind",
    "ParameterError",
]

_U32_MAX = 0xFFFFFFFF
# The largest u32 as a single-precision float rounds up to 2**32.
_U32_MAX_AS_F32 = 4294967296.0


def _f32(value: float) -> float:
    """Round a float to the nearest single-precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


@dataclass(frozen=True)
class ScaledFloat:
    """A non-negative value stored as an integer with denominator 100000."""

    scaled: int

    SCALING = 100_000.0

    def __post_init__(self) -> None:
        if not 0 <= self.scaled <= _U32_MAX:
            raise ValueError(f"scaled value out of range: {self.scaled}")

    @classmethod
    def _forward(cls, value: float) -> int:
        value = _f32(value)
        if math.isnan(value) or value < 0.0:
            value = 0.0
        product = _f32(value * cls.SCALING)
        if math.isinf(product):
            return _U32_MAX
        return min(math.floor(product), _U32_MAX)

    @classmethod
    def _reverse(cls, encoded: int) -> float:
        return _f32(_f32(float(encoded)) / cls.SCALING)

    @classmethod
    def in_range(cls, value: float) -> bool:
        """Whether the value lies within the representable range."""
        value = _f32(value)
        if not value >= 0.0:
            return False
        product = _f32(value * cls.SCALING)
        if math.isinf(product):
            return False
        return math.floor(product) <= _U32_MAX_AS_F32

    @classmethod
    def exact(cls, value: float) -> bool:
        """Whether the value survives conversion and back unchanged."""
        value = _f32(value)
        return value == cls._reverse(cls._forward(value))

    @classmethod
    def from_value(cls, value: float) -> ScaledFloat:
        """Scale and quantise a value, clamping it into the representable range."""
        return cls(cls._forward(value))

    @classmethod
    def from_scaled(cls, val: int) -> ScaledFloat:
        """Construct from a value already scaled by 100000."""
        return cls(val)

    def into_scaled(self) -> int:
        """The exact encoded integer."""
        return self.scaled

    def into_value(self) -> float:
        """The unscaled value as a single-precision float."""
        return self._reverse(self.scaled)

    def encode_gama(self, stream: BinaryIO) -> None:
        """Write this value as a gAMA chunk."""
        write_chunk(stream, gAMA, struct.pack(">I", self.scaled))


_Pair = Tuple[ScaledFloat, ScaledFloat]


@dataclass(frozen=True)
class SourceChromaticities:
    """Chromaticities of the colour space primaries and white point."""

    white: _Pair
    red: _Pair
    green: _Pair
    blue: _Pair

    @classmethod
    def from_values(
        cls,
        white: Tuple[float, float],
        red: Tuple[float, float],
        green: Tuple[float, float],
        blue: Tuple[float, float],
    ) -> SourceChromaticities:
        """Build from unscaled (x, y) pairs."""

        def pair(xy: Tuple[float, float]) -> _Pair:
            x, y = xy
            return (ScaledFloat.from_value(x), ScaledFloat.from_value(y))

        return cls(pair(white), pair(red), pair(green), pair(blue))

    def to_be_bytes(self) -> bytes:
        """The 32-byte big-endian cHRM payload."""
        values = [
            component.into_scaled()
            for xy in (self.white, self.red, self.green, self.blue)
            for component in xy
        ]
        return struct.pack(">8I", *values)

    def encode(self, stream: BinaryIO) -> None:
        """Write these chromaticities as a cHRM chunk."""
        write_chunk(stream, cHRM, self.to_be_bytes())


class SrgbRenderingIntent(enum.IntEnum):
    """Rendering intent of an sRGB image."""

    PERCEPTUAL = 0
    RELATIVE_COLORIMETRIC = 1
    SATURATION = 2
    ABSOLUTE_COLORIMETRIC = 3

    @classmethod
    def from_raw(cls, raw: int) -> Optional[SrgbRenderingIntent]:
        """Return the intent with value raw, or None if there is none."""
        try:
            return cls(raw)
        except ValueError:
            return None

    def encode(self, stream: BinaryIO) -> None:
        """Write this intent as an sRGB chunk."""
        write_chunk(stream, sRGB, bytes([int(self)]))


@dataclass(frozen=True)
class PixelDimensions:
    """Physical pixel density."""

    xppu: int
    yppu: int
    unit: Unit = Unit.UNSPECIFIED


class Compression(enum.Enum):
    """Type and strength of applied compression."""

    DEFAULT = "default"
    FAST = "fast"
    BEST = "best"
    HUFFMAN = "huffman"
    RLE = "rle"


@dataclass
class Info:
    """Header information of a PNG image."""

    width: int = 0
    height: int = 0
    bit_depth: BitDepth = BitDepth.EIGHT
    color_type: ColorType = ColorType.GRAYSCALE
    interlaced: bool = False
    trns: Optional[bytes] = None
    pixel_dims: Optional[PixelDimensions] = None
    palette: Optional[bytes] = None
    gama_chunk: Optional[ScaledFloat] = None
    chrm_chunk: Optional[SourceChromaticities] = None
    frame_control: Optional[FrameControl] = None
    animation_control: Optional[AnimationControl] = None
    compression: Compression = Compression.FAST
    source_gamma: Optional[ScaledFloat] = None
    source_chromaticities: Optional[SourceChromaticities] = None
    srgb: Optional[SrgbRenderingIntent] = None
    icc_profile: Optional[bytes] = None
    uncompressed_latin1_text: List[Any] = field(default_factory=list)
    compressed_latin1_text: List[Any] = field(default_factory=list)
    utf8_text: List[Any] = field(default_factory=list)

    @classmethod
    def with_size(cls, width: int, height: int) -> Info:
        """Default info with the given dimensions."""
        return cls(width=width, height=height)

    def size(self) -> Tuple[int, int]:
        """Width and height."""
        return (self.width, self.height)

    def is_animated(self) -> bool:
        """True if both frame and animation control are present."""
        return self.frame_control is not None and self.animation_control is not None

    def bits_per_pixel(self) -> int:
        """Number of bits per pixel."""
        return self.color_type.samples() * int(self.bit_depth)

    def bytes_per_pixel(self) -> int:
        """Number of bytes per pixel, with sub-byte depths rounded up."""
        return self.color_type.samples() * ((int(self.bit_depth) + 7) >> 3)

    def bpp_in_prediction(self) -> BytesPerPixel:
        """Bytes per pixel as used by the scanline filters."""
        return BytesPerPixel.from_usize(self.bytes_per_pixel())

    def raw_bytes(self) -> int:
        """Bytes needed for one deinterlaced image including filter bytes."""
        return self.height * self.raw_row_length()

    def raw_row_length(self) -> int:
        """Bytes of one deinterlaced row including the filter byte."""
        return self.raw_row_length_from_width(self.width)

    def checked_raw_row_length(self) -> int:
        """Row length for a validated width; raises ValueError if out of range."""
        return self.color_type.checked_raw_row_length(self.bit_depth, self.width)

    def raw_row_length_from_width(self, width: int) -> int:
        """Bytes of one deinterlaced row of the given width."""
        return self.color_type.raw_row_length_from_width(self.bit_depth, width)


class ParameterErrorKind(enum.Enum):
    """What a caller got wrong."""

    IMAGE_BUFFER_SIZE = "image_buffer_size"
    POLLED_AFTER_END_OF_IMAGE = "polled_after_end_of_image"


class ParameterError(ValueError):
    """A parameter supplied by the caller was not acceptable."""

    def __init__(
        self,
        kind: ParameterErrorKind,
        message: str,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.expected = expected
        self.actual = actual

    @classmethod
    def image_buffer_size(cls, expected: int, actual: int) -> ParameterError:
        """The supplied buffer does not have the required size."""
        return cls(
            ParameterErrorKind.IMAGE_BUFFER_SIZE,
            f"wrong data size, expected {expected} got {actual}",
            expected,
            actual,
        )

    @classmethod
    def polled_after_end_of_image(cls) -> ParameterError:
        """A further image was requested after the last one."""
        return cls(
            ParameterErrorKind.POLLED_AFTER_END_OF_IMAGE,
            "End of image has been reached",
        )