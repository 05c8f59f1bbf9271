"""Animation (APNG) control data: frame and animation control chunks."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import BinaryIO, Optional

from pngcore.chunk import acTL, fcTL, write_chunk

__all__ = ["DisposeOp", "BlendOp", "FrameControl", "AnimationControl"]

_U32_MAX = 0xFFFFFFFF


class DisposeOp(enum.IntEnum):
    """How to reset the output buffer at the end of a frame."""

    NONE = 0
    BACKGROUND = 1
    PREVIOUS = 2

    @classmethod
    def from_u8(cls, n: int) -> Optional[DisposeOp]:
        """Return the operation with value n, or None if there is none."""
        try:
            return cls(n)
        except ValueError:
            return None

    def __str__(self) -> str:
        return f"DISPOSE_OP_{self.name}"


class BlendOp(enum.IntEnum):
    """How the pixels of a frame are written into the buffer."""

    SOURCE = 0
    OVER = 1

    @classmethod
    def from_u8(cls, n: int) -> Optional[BlendOp]:
        """Return the operation with value n, or None if there is none."""
        try:
            return cls(n)
        except ValueError:
            return None

    def __str__(self) -> str:
        return f"BLEND_OP_{self.name}"


@dataclass
class FrameControl:
    """Contents of an fcTL chunk."""

    sequence_number: int = 0
    width: int = 0
    height: int = 0
    x_offset: int = 0
    y_offset: int = 0
    delay_num: int = 1
    delay_den: int = 30
    dispose_op: DisposeOp = DisposeOp.NONE
    blend_op: BlendOp = BlendOp.SOURCE

    def set_seq_num(self, s: int) -> None:
        """Set the sequence number."""
        if not 0 <= s <= _U32_MAX:
            raise OverflowError(f"sequence number out of range: {s}")
        self.sequence_number = s

    def inc_seq_num(self, i: int) -> None:
        """Advance the sequence number by i."""
        self.set_seq_num(self.sequence_number + i)

    def encode(self, stream: BinaryIO) -> None:
        """Write this frame control as an fcTL chunk."""
        try:
            data = struct.pack(
                ">IIIIIHHBB",
                self.sequence_number,
                self.width,
                self.height,
                self.x_offset,
                self.y_offset,
                self.delay_num,
                self.delay_den,
                int(self.dispose_op),
                int(self.blend_op),
            )
        except struct.error as exc:
            raise ValueError(f"frame control field out of range: {exc}") from None
        write_chunk(stream, fcTL, data)


@dataclass
class AnimationControl:
    """Contents of an acTL chunk."""

    num_frames: int
    num_plays: int = 0

    def encode(self, stream: BinaryIO) -> None:
        """Write this animation control as an acTL chunk."""
        try:
            data = struct.pack(">II", self.num_frames, self.num_plays)
        except struct.error as exc:
            raise ValueError(f"animation control field out of range: {exc}") from None
        write_chunk(stream, acTL, data)