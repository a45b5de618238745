"""Simple image to PC-6001 VRAM converter.

This package maps an RGB image onto the raw video memory layout of the
PC-6001 SCREEN 3 (4 colors, 128x192) or SCREEN 4 (monochrome, 256x192)
modes. It can be invoked through the CLI (``python -m simple_p6_converter``)
or imported to convert a single image into bytes.
"""

from .converter import (
    MAX_HEIGHT,
    MAX_WIDTH,
    ConfigurationError,
    ConversionError,
    ConvertOptions,
    DimensionMismatchError,
    ImageDecodeError,
    OutputOpenError,
    OutputWriteError,
    convert_file,
    convert_image,
    load_source_image,
    resolve_parameters,
    write_frame,
)
from .encoder import FrameParameters, ScreenMode, SourceImage, encode_frame
from .palette import (
    COLOR_SET_1,
    COLOR_SET_2,
    PALETTES,
    format_palette_text,
    nearest_palette_index,
)

__all__ = [
    "COLOR_SET_1",
    "COLOR_SET_2",
    "MAX_HEIGHT",
    "MAX_WIDTH",
    "PALETTES",
    "ConfigurationError",
    "ConversionError",
    "ConvertOptions",
    "DimensionMismatchError",
    "FrameParameters",
    "ImageDecodeError",
    "OutputOpenError",
    "OutputWriteError",
    "ScreenMode",
    "SourceImage",
    "convert_file",
    "convert_image",
    "encode_frame",
    "format_palette_text",
    "load_source_image",
    "nearest_palette_index",
    "resolve_parameters",
    "write_frame",
]
