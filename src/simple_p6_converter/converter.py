"""Parameter resolution, image loading and output writing."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Tuple

from PIL import Image

from .encoder import FrameParameters, ScreenMode, SourceImage, encode_frame, iter_frame_rows
from .palette import PALETTES

MAX_WIDTH = 256
MAX_HEIGHT = 192


@dataclass
class ConvertOptions:
    """Options for mode, palette and expected source size."""

    mode: int = ScreenMode.SCREEN3  # 3 or 4
    color_set: int = 1  # 1 or 2
    width: int | None = None  # defaults to MAX_WIDTH
    height: int | None = None  # defaults to MAX_HEIGHT


class ConversionError(Exception):
    """Base class for every failure reported by the converter."""


class ConfigurationError(ConversionError):
    """Invalid mode, color set or dimensions."""


class ImageDecodeError(ConversionError):
    """The input image is missing or cannot be decoded."""


class DimensionMismatchError(ConversionError):
    """The decoded image size differs from the expected size."""

    def __init__(self, expected: Tuple[int, int], actual: Tuple[int, int]):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Input image must be {expected[0]}x{expected[1]} "
            f"(input image size: {actual[0]}x{actual[1]})"
        )


class OutputOpenError(ConversionError):
    """The output path cannot be opened for writing."""


class OutputWriteError(ConversionError):
    """Writing the frame failed part way through."""


def resolve_parameters(options: ConvertOptions | None = None) -> FrameParameters:
    options = options or ConvertOptions()

    try:
        mode = ScreenMode(options.mode)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown screen mode: {options.mode} (expected 3 or 4)") from exc

    palette = PALETTES.get(options.color_set)
    if palette is None:
        raise ConfigurationError(f"Unknown color set: {options.color_set} (expected 1 or 2)")

    width = MAX_WIDTH if options.width is None else options.width
    height = MAX_HEIGHT if options.height is None else options.height
    if not 0 < width <= MAX_WIDTH:
        raise ConfigurationError(f"Width must be between 1 and {MAX_WIDTH}: {width}")
    if not 0 < height <= MAX_HEIGHT:
        raise ConfigurationError(f"Height must be between 1 and {MAX_HEIGHT}: {height}")
    if mode == ScreenMode.SCREEN3 and width % 2:
        raise ConfigurationError(
            f"SCREEN 3 averages pixel pairs, so the width must be even: {width}"
        )

    return FrameParameters(mode=mode, palette=palette, width=width, height=height)


def check_dimensions(source: SourceImage, params: FrameParameters) -> None:
    actual = (source.width, source.height)
    expected = (params.width, params.height)
    if actual != expected:
        raise DimensionMismatchError(expected, actual)


def load_source_image(path: str | Path) -> SourceImage:
    path = Path(path)
    try:
        with Image.open(path) as img:
            return SourceImage.from_image(img)
    except FileNotFoundError as exc:
        raise ImageDecodeError(f"Input file not found: {path}") from exc
    except (OSError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(f"Failed to read image: {path} ({exc})") from exc


def write_frame(source: SourceImage, params: FrameParameters, sink: BinaryIO) -> int:
    """Write the encoded frame to ``sink`` row by row and return the byte count.

    The first failed or short write aborts the run; bytes already written
    stay in the sink.
    """

    written = 0
    for row in iter_frame_rows(source, params):
        try:
            count = sink.write(row)
        except OSError as exc:
            raise OutputWriteError(f"Write failed after {written} bytes: {exc}") from exc
        if count is not None and count != len(row):
            raise OutputWriteError(
                f"Short write after {written} bytes ({count} of {len(row)} accepted)"
            )
        written += len(row)
    return written


def convert_image(image: Image.Image, options: ConvertOptions | None = None) -> bytes:
    """Convert an in-memory Pillow image to raw VRAM bytes."""

    params = resolve_parameters(options)
    source = SourceImage.from_image(image)
    check_dimensions(source, params)
    return encode_frame(source, params)


def convert_file(
    input_path: str | Path,
    output_path: str | Path,
    options: ConvertOptions | None = None,
) -> int:
    """Convert ``input_path`` and write the VRAM bytes to ``output_path``.

    The output file is opened only after the input has been decoded and its
    size checked, so configuration, decode and size errors leave the output
    path untouched.
    """

    params = resolve_parameters(options)
    source = load_source_image(input_path)
    check_dimensions(source, params)

    output_path = Path(output_path)
    try:
        handle = output_path.open("wb")
    except OSError as exc:
        raise OutputOpenError(f"Could not open output file: {output_path} ({exc})") from exc

    # close() flushes again, so a full disk can fail there after flush() did.
    try:
        with handle:
            written = write_frame(source, params, handle)
            handle.flush()
    except OutputWriteError:
        raise
    except OSError as exc:
        raise OutputWriteError(f"Failed to write output: {output_path} ({exc})") from exc
    return written
