# pngcore

`pngcore` provides the building blocks that a PNG or APNG encoder or decoder
needs. It depends only on the Python standard library.

## Modules

- **`pngcore.chunk`** deals with chunk types.
  - `ChunkType` wraps a four-byte chunk name. It reports the name's property
    bits through `is_critical()`, `is_private()`, `reserved_set()` and
    `safe_to_copy()`. The same checks are also available as module functions.
  - The standard chunk types are provided as constants: `IHDR`, `PLTE`,
    `IDAT`, `IEND`, `tRNS`, `bKGD`, `tIME`, `pHYs`, `cHRM`, `gAMA`, `sRGB`,
    `iCCP`, `tEXt`, `zTXt`, `iTXt`, `acTL`, `fcTL` and `fdAT`.
  - `write_chunk(stream, chunk_type, data)` writes one framed chunk (length,
    type, data and CRC-32) to a binary stream.
- **`pngcore.adam7`** deals with Adam7 interlacing.
  - `Adam7Iterator(width, height)` yields `(pass, line, line_width)` for every
    reduced scanline.
  - `subbyte_pixels` unpacks 1-, 2- or 4-bit samples.
  - `expand_adam7_bits` gives the bit positions of one pass line in the full
    image.
  - `expand_pass` scatters one reduced scanline into a deinterlaced
    `bytearray` in place.
- **`pngcore.colors`** describes pixel formats.
  - It defines `ColorType`, `BitDepth`, `BytesPerPixel` and `Unit`.
  - It provides the row-length helpers `ColorType.raw_row_length_from_width`
    and `ColorType.checked_raw_row_length`.
  - `ColorType.is_combination_invalid` checks colour type and bit depth
    combinations.
  - It defines the `Transformations` flags (`IDENTITY`, `STRIP_16`, `EXPAND`,
    `ALPHA`, and `normalize_to_color8()`).
- **`pngcore.animation`** holds the APNG records.
  - `FrameControl` and `AnimationControl` each have an `encode(stream)`
    method that writes an `fcTL` or `acTL` chunk.
  - It also defines `DisposeOp` and `BlendOp`.
- **`pngcore.info`** holds image metadata.
  - `ScaledFloat` stores a value in units of 1/100000. `encode_gama` writes
    it as a `gAMA` chunk.
  - `SourceChromaticities` writes a `cHRM` chunk.
  - `SrgbRenderingIntent` writes an `sRGB` chunk.
  - It defines `PixelDimensions` and `Compression`.
  - The `Info` header record provides size and row-length queries.
  - `ParameterError` is a `ValueError` that carries a `kind`.

## Installation

```
pip install .
```

## Example

```python
import io

from pngcore.adam7 import Adam7Iterator
from pngcore.animation import AnimationControl
from pngcore.chunk import IEND, ChunkType, write_chunk
from pngcore.colors import BitDepth, ColorType
from pngcore.info import Info

# Walk the reduced scanlines of a 4x4 interlaced image.
for pass_, line, width in Adam7Iterator(4, 4):
    print(pass_, line, width)

# Inspect a chunk name.
trns = ChunkType(b"tRNS")
print(trns.is_critical(), trns.safe_to_copy())  # False False

# Describe an image.
info = Info.with_size(2, 1)
info.color_type = ColorType.RGBA
info.bit_depth = BitDepth.EIGHT
print(info.raw_row_length())  # 9: filter byte + 8 bytes of pixels

# Write chunks to a stream.
out = io.BytesIO()
AnimationControl(num_frames=2).encode(out)
write_chunk(out, IEND, b"")
```

## What it does not do

`pngcore` does not read or write complete PNG files.

- It has no decoder and no scanline filtering.
- It does not compress image data.
- It does not write the PNG signature.
- It has no routine that serialises an `Info` record as `IHDR`.
- It does not handle text chunks. The `Info` text fields are plain lists.

## Tests

```
pip install .[test]
pytest
```