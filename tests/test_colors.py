import pytest
from hypothesis import given, strategies as st

from pngcore.colors import BitDepth, BytesPerPixel, ColorType, Transformations, Unit

VALID_COMBOS = [
    (int(c), int(d))
    for c in ColorType
    for d in BitDepth
    if not c.is_combination_invalid(d)
]


@pytest.mark.parametrize(
    "color, expected",
    [
        (ColorType.GRAYSCALE, 1),
        (ColorType.INDEXED, 1),
        (ColorType.RGB, 3),
        (ColorType.GRAYSCALE_ALPHA, 2),
        (ColorType.RGBA, 4),
    ],
)
def test_samples(color, expected):
    assert color.samples() == expected


@pytest.mark.parametrize("color", list(ColorType))
def test_color_type_from_u8_round_trip(color):
    assert ColorType.from_u8(int(color)) is color


@pytest.mark.parametrize("n", [1, 5, 7, 255])
def test_color_type_from_u8_invalid(n):
    assert ColorType.from_u8(n) is None


@pytest.mark.parametrize("depth", list(BitDepth))
def test_bit_depth_from_u8_round_trip(depth):
    assert BitDepth.from_u8(int(depth)) is depth


@pytest.mark.parametrize("n", [0, 3, 7, 32])
def test_bit_depth_from_u8_invalid(n):
    assert BitDepth.from_u8(n) is None


def test_unit_from_u8():
    assert Unit.from_u8(0) is Unit.UNSPECIFIED
    assert Unit.from_u8(1) is Unit.METER
    assert Unit.from_u8(2) is None


@pytest.mark.parametrize("bpp", [1, 2, 3, 4, 6, 8])
def test_bytes_per_pixel_valid(bpp):
    assert int(BytesPerPixel.from_usize(bpp)) == bpp


@pytest.mark.parametrize("bpp", [0, 5, 7, 9])
def test_bytes_per_pixel_invalid(bpp):
    with pytest.raises(ValueError):
        BytesPerPixel.from_usize(bpp)


def test_is_combination_invalid():
    for depth in (BitDepth.ONE, BitDepth.TWO, BitDepth.FOUR):
        assert ColorType.RGB.is_combination_invalid(depth)
        assert ColorType.RGBA.is_combination_invalid(depth)
        assert ColorType.GRAYSCALE_ALPHA.is_combination_invalid(depth)
        assert not ColorType.INDEXED.is_combination_invalid(depth)
    assert ColorType.INDEXED.is_combination_invalid(BitDepth.SIXTEEN)
    assert not any(ColorType.GRAYSCALE.is_combination_invalid(d) for d in BitDepth)


def test_raw_row_length_eight_bit_matches_samples():
    for width in range(0, 20):
        assert (
            ColorType.RGBA.raw_row_length_from_width(BitDepth.EIGHT, width)
            == 1 + width * ColorType.RGBA.samples()
        )


def test_raw_row_length_sixteen_bit_is_double():
    for width in range(0, 20):
        eight = ColorType.RGB.raw_row_length_from_width(BitDepth.EIGHT, width)
        sixteen = ColorType.RGB.raw_row_length_from_width(BitDepth.SIXTEEN, width)
        assert sixteen - 1 == 2 * (eight - 1)


def test_raw_row_length_one_bit_packs_eight_per_byte():
    for k in range(0, 10):
        assert ColorType.GRAYSCALE.raw_row_length_from_width(BitDepth.ONE, 8 * k) == 1 + k
        if k:
            assert (
                ColorType.GRAYSCALE.raw_row_length_from_width(BitDepth.ONE, 8 * k - 1)
                == 1 + k
            )


@given(st.integers(min_value=0, max_value=0xFFFFFFFF), st.sampled_from(VALID_COMBOS))
def test_checked_matches_unchecked(width, combo):
    color_code, depth_code = combo
    color = ColorType.from_u8(color_code)
    depth = BitDepth.from_u8(depth_code)
    checked = ColorType.checked_raw_row_length(color, depth, width)
    unchecked = ColorType.raw_row_length_from_width(color, depth, width)
    assert checked == unchecked
    assert checked >= 1


def test_checked_raw_row_length_rejects_bad_width():
    with pytest.raises(ValueError):
        ColorType.RGB.checked_raw_row_length(BitDepth.EIGHT, 1 << 32)
    with pytest.raises(ValueError):
        ColorType.RGB.checked_raw_row_length(BitDepth.EIGHT, -1)


def test_transformations():
    norm = Transformations.normalize_to_color8()
    assert norm == Transformations.EXPAND | Transformations.STRIP_16
    assert Transformations.ALPHA not in norm
    assert int(Transformations.IDENTITY) == 0
    assert int(Transformations.EXPAND) == 0x10
    assert int(Transformations.ALPHA) == 0x10000