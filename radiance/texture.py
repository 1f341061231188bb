"""Two-dimensional textures held as pixel arrays, plus shared texture settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

import numpy as np
from PIL import Image

from radiance.resource_unit import ResourceBase
from radiance.utils import (
    get_ext,
    load_text_file,
    remove_ppm_comments,
    require_non_null,
    to_unix_style_path,
)

_LDR_GAMMA = 2.2


class WrapMode(Enum):
    """How texture coordinates outside ``[0, 1]`` are resolved."""

    REPEAT = "repeat"
    MIRRORED_REPEAT = "mirrored_repeat"
    CLAMP_TO_EDGE = "clamp_to_edge"
    CLAMP_TO_BORDER = "clamp_to_border"


class RotateMode(Enum):
    """Rotation applied to an image after it is read."""

    NONE = "none"
    CW = "cw"
    CCW = "ccw"
    ONE_EIGHTY = "180"


def _no_rotation() -> tuple[RotateMode, ...]:
    return (RotateMode.NONE,) * 6


@dataclass
class TextureConfig:
    """Sampling and loading settings shared by all texture kinds.

    ``rotate_config`` holds one rotation per cube face, in the order
    front, back, top, bottom, left, right.
    """

    generate_mipmap: bool = True
    scale_nearest_min: bool = False
    scale_nearest_mag: bool = False
    srgb: bool = False
    wrap_mode_s: WrapMode = WrapMode.REPEAT
    wrap_mode_t: WrapMode = WrapMode.REPEAT
    wrap_mode_r: WrapMode = WrapMode.REPEAT
    rotate_config: tuple[RotateMode, ...] = field(default_factory=_no_rotation)


def _require_square(data: np.ndarray) -> None:
    if data.ndim < 2 or data.shape[0] != data.shape[1]:
        raise ValueError("Only allowed to rotate a square image.")


def rotate_cw(data) -> np.ndarray:
    """Return a square image, shaped ``(rows, cols[, channels])``, turned clockwise."""
    pixels = np.asarray(data)
    _require_square(pixels)
    return np.rot90(pixels, k=-1, axes=(0, 1)).copy()


def rotate_ccw(data) -> np.ndarray:
    """Return a square image, shaped ``(rows, cols[, channels])``, turned counter-clockwise."""
    pixels = np.asarray(data)
    _require_square(pixels)
    return np.rot90(pixels, k=1, axes=(0, 1)).copy()


def rotate_180(data) -> np.ndarray:
    """Return an image, shaped ``(rows, cols[, channels])``, turned half a revolution."""
    pixels = np.asarray(data)
    if pixels.ndim < 2:
        raise ValueError("Expected an image with rows and columns.")
    return pixels[::-1, ::-1].copy()


def parse_ppm(path: str) -> np.ndarray:
    """Read a plain-text (P3) PPM file into a ``(height, width, 3)`` byte array.

    Pixels are kept in file order and scaled so that the file's maximum
    value maps to 255.
    """
    tokens = remove_ppm_comments(load_text_file(path)).split()
    if not tokens or tokens[0] != "P3":
        raise ValueError("Error: not a P3 ppm file")
    try:
        width, height = int(tokens[1]), int(tokens[2])
        max_value = float(tokens[3])
        count = width * height * 3
        samples = [int(token) for token in tokens[4:4 + count]]
    except (IndexError, ValueError) as exc:
        raise ValueError(f"Malformed ppm header in {path}") from exc
    if width < 0 or height < 0 or max_value <= 0:
        raise ValueError(f"Malformed ppm header in {path}")
    if len(samples) != count:
        raise ValueError(f"Expected {count} samples in {path}, found {len(samples)}.")
    scaled = np.array(samples, dtype=np.float64) * (255.0 / max_value)
    pixels = np.clip(np.trunc(scaled), 0, 255).astype(np.uint8)
    return pixels.reshape(height, width, 3)


def _read_image(path: str, mode: str, shown_path: str) -> np.ndarray:
    try:
        with Image.open(to_unix_style_path(path)) as image:
            pixels = np.asarray(image.convert(mode), dtype=np.uint8)
    except (OSError, ValueError) as exc:
        raise OSError(f"Failed to load image at path: {shown_path}") from exc
    if pixels.ndim == 2:
        pixels = pixels[:, :, np.newaxis]
    return pixels


class Texture2D(ResourceBase):
    """A two-dimensional texture whose pixels are a ``(height, width, channels)`` array."""

    resource_type: ClassVar[str] = "texture_2d"
    channels: ClassVar[int] = 3
    dtype: ClassVar[type] = np.uint8
    _image_mode: ClassVar[str] = "RGB"

    def __init__(self, config: TextureConfig | None = None, path: str = "") -> None:
        self.config = config if config is not None else TextureConfig()
        self.path = path
        self.data: np.ndarray | None = None

    @property
    def width(self) -> int:
        return 0 if self.data is None else self.data.shape[1]

    @property
    def height(self) -> int:
        return 0 if self.data is None else self.data.shape[0]

    def load(self) -> None:
        """Read the image at ``path``."""
        self.parse_img(self.path)

    def create_empty_texture(self, width: int, height: int) -> None:
        """Replace the pixels with a zero-filled image of the given size."""
        if width < 0 or height < 0:
            raise ValueError("Texture dimensions must not be negative.")
        self.data = np.zeros((height, width, self.channels), dtype=self.dtype)

    def parse_img(self, path: str) -> None:
        """Read an image file, converting it to this texture's channel layout."""
        self.data = self._convert(_read_image(path, self._image_mode, path))

    def _convert(self, pixels: np.ndarray) -> np.ndarray:
        return pixels.astype(self.dtype, copy=False)

    def _check_row(self, row: int) -> None:
        if row < 0 or row >= self.height:
            raise IndexError(f"Row out of bounds: {row}")

    def set_texture_row(self, row: int, row_data) -> None:
        """Overwrite row ``row`` with ``width * channels`` values."""
        self._check_row(row)
        values = np.asarray(require_non_null(row_data, "row_data"), dtype=self.dtype).reshape(-1)
        expected = self.width * self.channels
        if values.size != expected:
            raise ValueError(f"Row data must hold {expected} values, got {values.size}.")
        self.data[row] = values.reshape(self.width, self.channels)

    def get_texture_row(self, row: int) -> np.ndarray:
        """Return a copy of row ``row`` as ``width * channels`` values."""
        self._check_row(row)
        return self.data[row].reshape(-1).copy()


class Texture2DRGB(Texture2D):
    """An 8-bit RGB texture; also reads plain-text PPM files."""

    resource_type: ClassVar[str] = "texture_2d_rgb"
    channels: ClassVar[int] = 3
    _image_mode: ClassVar[str] = "RGB"

    def parse_img(self, path: str) -> None:
        if get_ext(path) == "ppm":
            # PPM pixels are stored in reverse order.
            self.data = rotate_180(parse_ppm(path))
            return
        self.data = _read_image(path, self._image_mode, to_unix_style_path(path))


class Texture2DRGBA(Texture2D):
    """An 8-bit RGBA texture."""

    resource_type: ClassVar[str] = "texture_2d_rgba"
    channels: ClassVar[int] = 4
    _image_mode: ClassVar[str] = "RGBA"


class Texture2DR(Texture2D):
    """An 8-bit single-channel texture."""

    resource_type: ClassVar[str] = "texture_2d_r"
    channels: ClassVar[int] = 1
    _image_mode: ClassVar[str] = "L"


class _FloatTexture2D(Texture2D):
    dtype: ClassVar[type] = np.float32

    def _convert(self, pixels: np.ndarray) -> np.ndarray:
        normalised = pixels.astype(np.float32) / np.float32(255.0)
        color = self.channels if self.channels % 2 == 1 else self.channels - 1
        normalised[..., :color] = np.power(normalised[..., :color], np.float32(_LDR_GAMMA))
        return normalised


class Texture2DFRGB(_FloatTexture2D):
    """A floating-point RGB texture; 8-bit images are converted to linear values."""

    resource_type: ClassVar[str] = "texture_2d_frgb"
    channels: ClassVar[int] = 3
    _image_mode: ClassVar[str] = "RGB"


class Texture2DFRGBA(_FloatTexture2D):
    """A floating-point RGBA texture; colour is linearised, alpha only normalised."""

    resource_type: ClassVar[str] = "texture_2d_frgba"
    channels: ClassVar[int] = 4
    _image_mode: ClassVar[str] = "RGBA"