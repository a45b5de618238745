"""Pixel to PC-6001 VRAM encoding for SCREEN 3 and SCREEN 4."""

# Reference: output layout (no header, rows top to bottom, bytes left to right)
# Mode     | Source  | Device  | Bits/pixel | Stride (bytes/row)
# ---------|---------|---------|------------|-------------------------
# SCREEN 3 | 256x192 | 128x192 | 2          | ceil((width / 2) / 4) = 32
# SCREEN 4 | 256x192 | 256x192 | 1          | ceil(width / 8)       = 32
#
# SCREEN 3 byte: [p0 p0 p1 p1 p2 p2 p3 p3]  (p0 = leftmost, in bits 7-6)
# SCREEN 4 byte: [b0 b1 b2 b3 b4 b5 b6 b7]  (b0 = leftmost, mask 0x80)

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Sequence

from PIL import Image

from .palette import Color, Palette, nearest_palette_index

LUMA_THRESHOLD = 127


class ScreenMode(IntEnum):
    SCREEN3 = 3
    SCREEN4 = 4


@dataclass(frozen=True)
class FrameParameters:
    """Resolved settings for a single conversion run."""

    mode: ScreenMode
    palette: Palette
    width: int
    height: int

    @property
    def stride(self) -> int:
        if self.mode == ScreenMode.SCREEN3:
            return (self.width // 2 + 3) // 4
        return (self.width + 7) // 8

    @property
    def frame_size(self) -> int:
        return self.height * self.stride


@dataclass(frozen=True)
class SourceImage:
    """Decoded RGB pixels, row-major, three bytes per pixel."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * 3
        if len(self.pixels) != expected:
            raise ValueError(
                f"RGB buffer holds {len(self.pixels)} bytes, expected {expected} "
                f"for {self.width}x{self.height}"
            )

    @classmethod
    def from_image(cls, image: Image.Image) -> "SourceImage":
        rgb = image.convert("RGB")
        width, height = rgb.size
        return cls(width, height, rgb.tobytes())


def luma(r: int, g: int, b: int) -> int:
    return (299 * r + 587 * g + 114 * b) // 1000


def threshold_bit(r: int, g: int, b: int) -> int:
    return 1 if luma(r, g, b) > LUMA_THRESHOLD else 0


def downsample_row(pixels: bytes, width: int, y: int) -> List[Color]:
    """Average horizontal pixel pairs of row ``y``, halving its width.

    Channels are summed and floor-divided by two, which truncates
    (254 + 255) // 2 == 254 rather than rounding up.
    """
    if width % 2:
        raise ValueError(f"Cannot halve an odd row width: {width}")
    row = pixels[y * width * 3 : (y + 1) * width * 3]
    halved: List[Color] = []
    for x in range(0, len(row), 6):
        halved.append(
            (
                (row[x] + row[x + 3]) // 2,
                (row[x + 1] + row[x + 4]) // 2,
                (row[x + 2] + row[x + 5]) // 2,
            )
        )
    return halved


def pack_crumbs(indices: Sequence[int], stride: int) -> bytes:
    """Pack 2-bit palette indices four per byte, leftmost pixel in bits 7-6.

    Slots past the end of ``indices`` are packed as index 0.
    """
    packed = bytearray()
    for x_byte in range(stride):
        out_byte = 0
        for i in range(4):
            x = x_byte * 4 + i
            color = indices[x] if x < len(indices) else 0
            out_byte |= (color & 0x03) << ((3 - i) * 2)
        packed.append(out_byte)
    return bytes(packed)


def pack_bits(bits: Sequence[int], stride: int) -> bytes:
    """Pack 1-bit pixels eight per byte, leftmost pixel in bit 7.

    Slots past the end of ``bits`` are packed as 0.
    """
    packed = bytearray()
    for x_byte in range(stride):
        out_byte = 0
        for bit in range(8):
            x = x_byte * 8 + bit
            if x < len(bits) and bits[x]:
                out_byte |= 0x80 >> bit
        packed.append(out_byte)
    return bytes(packed)


def encode_screen3_row(source: SourceImage, y: int, palette: Palette, stride: int) -> bytes:
    halved = downsample_row(source.pixels, source.width, y)
    indices = [nearest_palette_index(rgb, palette) for rgb in halved]
    return pack_crumbs(indices, stride)


def encode_screen4_row(source: SourceImage, y: int, stride: int) -> bytes:
    row_start = y * source.width * 3
    row = source.pixels[row_start : row_start + source.width * 3]
    bits = [threshold_bit(row[x], row[x + 1], row[x + 2]) for x in range(0, len(row), 3)]
    return pack_bits(bits, stride)


def iter_frame_rows(source: SourceImage, params: FrameParameters) -> Iterator[bytes]:
    """Yield the encoded bytes of each row, top row first."""

    if (source.width, source.height) != (params.width, params.height):
        raise ValueError(
            f"Source is {source.width}x{source.height}, "
            f"parameters expect {params.width}x{params.height}"
        )

    stride = params.stride
    for y in range(source.height):
        if params.mode == ScreenMode.SCREEN3:
            yield encode_screen3_row(source, y, params.palette, stride)
        else:
            yield encode_screen4_row(source, y, stride)


def encode_frame(source: SourceImage, params: FrameParameters) -> bytes:
    return b"".join(iter_frame_rows(source, params))
