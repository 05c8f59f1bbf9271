import io
import struct
import zlib

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pngcore import chunk
from pngcore.chunk import ChunkType, write_chunk


def test_critical_chunks_are_critical():
    for ct in (chunk.IHDR, chunk.PLTE, chunk.IDAT, chunk.IEND):
        assert chunk.is_critical(ct)
        assert not chunk.is_private(ct)
        assert not chunk.reserved_set(ct)


def test_ancillary_chunks_are_not_critical():
    for ct in (chunk.tRNS, chunk.gAMA, chunk.tEXt, chunk.acTL, chunk.fcTL):
        assert not chunk.is_critical(ct)


def test_safe_to_copy_follows_last_letter():
    assert chunk.safe_to_copy(chunk.tEXt)
    assert chunk.safe_to_copy(chunk.iTXt)
    assert not chunk.safe_to_copy(chunk.tRNS)
    assert not chunk.safe_to_copy(chunk.gAMA)


def test_methods_agree_with_functions():
    ct = chunk.fdAT
    assert ct.is_critical() == chunk.is_critical(ct)
    assert ct.is_private() == chunk.is_private(ct)
    assert ct.reserved_set() == chunk.reserved_set(ct)
    assert ct.safe_to_copy() == chunk.safe_to_copy(ct)


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        ChunkType(b"IHD")
    with pytest.raises(ValueError):
        ChunkType(b"IHDRX")


def test_equality_and_hash():
    assert ChunkType(b"IDAT") == chunk.IDAT
    assert len({ChunkType(b"IDAT"), chunk.IDAT, chunk.IEND}) == 2


def test_repr_and_str_show_name():
    ct = ChunkType(b"IHDR")
    assert ct.is_critical()
    assert str(ct) == "IHDR"
    assert "IHDR" in repr(ct)
    assert "critical=True" in repr(ct)


def test_write_iend_wire_bytes():
    out = io.BytesIO()
    write_chunk(out, chunk.IEND, b"")
    assert out.getvalue() == b"\x00\x00\x00\x00IEND\xaeB`\x82"


def test_write_chunk_accepts_raw_bytes_type():
    a, b = io.BytesIO(), io.BytesIO()
    write_chunk(a, b"gAMA", b"\x00\x00\xb1\x8f")
    write_chunk(b, chunk.gAMA, b"\x00\x00\xb1\x8f")
    assert a.getvalue() == b.getvalue()


@given(st.binary(max_size=300))
def test_write_chunk_layout(data):
    out = io.BytesIO()
    write_chunk(out, chunk.tEXt, data)
    raw = out.getvalue()
    assert len(raw) == 12 + len(data)
    (length,) = struct.unpack(">I", raw[:4])
    assert length == len(data)
    assert raw[4:8] == b"tEXt"
    assert raw[8 : 8 + length] == data
    (crc,) = struct.unpack(">I", raw[8 + length :])
    assert crc == zlib.crc32(raw[4 : 8 + length]) & 0xFFFFFFFF


@given(st.binary(min_size=4, max_size=4), st.integers(min_value=0, max_value=3))
def test_flipping_property_bit_toggles_property(code, index):
    flipped = bytearray(code)
    flipped[index] ^= 32
    a, b = ChunkType(code), ChunkType(bytes(flipped))
    props = [
        lambda c: c.is_critical(),
        lambda c: c.is_private(),
        lambda c: c.reserved_set(),
        lambda c: c.safe_to_copy(),
    ]
    assert props[index](a) != props[index](b)
    for other, prop in enumerate(props):
        if other != index:
            assert prop(a) == prop(b)