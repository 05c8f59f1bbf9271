"""Adam7 interlacing: pass enumeration and pass expansion."""

from __future__ import annotations

from typing import Iterator

__all__ = ["Adam7Iterator", "subbyte_pixels", "expand_adam7_bits", "expand_pass"]

# (line_width offset, line_width step, lines offset, lines step) per pass
_PASS_BOUNDS = {
    1: (0, 8, 0, 8),
    2: (4, 8, 0, 8),
    3: (0, 4, 4, 8),
    4: (2, 4, 0, 4),
    5: (0, 2, 2, 4),
    6: (1, 2, 0, 2),
    7: (0, 1, 1, 2),
}

# (line_mul, line_off, samp_mul, samp_off) per pass
_PASS_LAYOUT = {
    1: (8, 0, 8, 0),
    2: (8, 0, 8, 4),
    3: (8, 4, 4, 0),
    4: (4, 0, 4, 2),
    5: (4, 2, 2, 0),
    6: (2, 0, 2, 1),
    7: (2, 1, 1, 0),
}


def _ceil_div_clamped(size: int, offset: int, step: int) -> int:
    remaining = size - offset
    if remaining <= 0:
        return 0
    return -(-remaining // step)


class Adam7Iterator:
    """Yields (pass, line, line_width) for every scanline of an Adam7 image.

    The pattern is:
        16462646
        77777777
        56565656
        77777777
        36463646
        77777777
        56565656
        77777777
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._pass = 1
        self._init_pass()

    def _init_pass(self) -> None:
        w_off, w_step, h_off, h_step = _PASS_BOUNDS[self._pass]
        self._line_width = _ceil_div_clamped(self.width, w_off, w_step)
        self._lines = _ceil_div_clamped(self.height, h_off, h_step)
        self._line = 0

    def current_pass(self) -> int:
        """The current pass number, 1 to 7."""
        return self._pass

    def __iter__(self) -> Adam7Iterator:
        return self

    def __next__(self) -> tuple[int, int, int]:
        while True:
            if self._line < self._lines and self._line_width > 0:
                line = self._line
                self._line += 1
                return (self._pass, line, self._line_width)
            if self._pass >= 7:
                raise StopIteration
            self._pass += 1
            self._init_pass()


def subbyte_pixels(scanline: bytes, bits_pp: int) -> Iterator[int]:
    """Yield the packed samples of a scanline, high-order bits first."""
    if bits_pp not in (1, 2, 4):
        raise ValueError(f"sub-byte pixel width must be 1, 2 or 4, got {bits_pp}")
    mask = (1 << bits_pp) - 1
    for bit_idx in range(0, len(scanline) * 8, bits_pp):
        shift = 8 - bit_idx % 8 - bits_pp
        yield (scanline[bit_idx // 8] >> shift) & mask


def expand_adam7_bits(pass_: int, width: int, line_no: int, bits_pp: int) -> range:
    """Bit positions in the full image of the pixels of one pass line."""
    try:
        line_mul, line_off, samp_mul, samp_off = _PASS_LAYOUT[pass_]
    except KeyError:
        raise ValueError(f"Adam7 pass out of range: {pass_}") from None

    prog_line = line_mul * line_no + line_off
    line_width = (width * bits_pp + 7) & ~7
    line_start = prog_line * line_width
    start = line_start + samp_off * bits_pp
    stop = line_start + width * bits_pp
    return range(start, stop, bits_pp * samp_mul)


def expand_pass(
    img: bytearray,
    width: int,
    scanline: bytes,
    pass_: int,
    line_no: int,
    bits_pp: int,
) -> None:
    """Scatter one pass scanline into the deinterlaced image buffer in place.

    Passes outside 1..7 are ignored.
    """
    if not 1 <= pass_ <= 7:
        return

    bit_indices = expand_adam7_bits(pass_, width, line_no, bits_pp)

    if bits_pp < 8:
        for pos, px in zip(bit_indices, subbyte_pixels(scanline, bits_pp)):
            shift = 8 - pos % 8 - bits_pp
            img[pos // 8] |= px << shift
        return

    bytes_pp = bits_pp // 8
    pixels = (scanline[i : i + bytes_pp] for i in range(0, len(scanline), bytes_pp))
    for bitpos, px in zip(bit_indices, pixels):
        start = bitpos // 8
        end = start + len(px)
        if end > len(img):
            raise IndexError(f"pixel at byte {start} lies outside the image buffer")
        img[start:end] = px