"""Cube-map textures built from one shared image or six face images."""

from __future__ import annotations

from collections.abc import Sequence
from typing import ClassVar

import numpy as np
from PIL import Image

from radiance.resource_unit import ResourceBase
from radiance.texture import (
    RotateMode,
    TextureConfig,
    parse_ppm,
    rotate_180,
    rotate_ccw,
    rotate_cw,
)
from radiance.utils import get_ext, to_unix_style_path

FACE_COUNT = 6
FACE_NAMES = ("front", "back", "top", "bottom", "left", "right")


def _rotate(pixels: np.ndarray, mode: RotateMode) -> np.ndarray:
    if mode is RotateMode.CW:
        return rotate_cw(pixels)
    if mode is RotateMode.CCW:
        return rotate_ccw(pixels)
    if mode is RotateMode.ONE_EIGHTY:
        return rotate_180(pixels)
    return pixels


class TextureCube(ResourceBase):
    """A cube map whose faces are ``(size, size, 3)`` byte arrays.

    Faces are ordered front, back, top, bottom, left, right. A face stored
    as ``None`` uses the first face's pixels instead.
    """

    resource_type: ClassVar[str] = "texture_cube"
    main_only = False

    def __init__(
        self,
        paths: str | Sequence[str],
        config: TextureConfig | None = None,
        is_single: bool | None = None,
    ) -> None:
        self.config = config if config is not None else TextureConfig()
        if isinstance(paths, str):
            self.paths: tuple[str, ...] = (paths,) + ("",) * (FACE_COUNT - 1)
            self.is_single = True if is_single is None else is_single
        else:
            paths = tuple(paths)
            if len(paths) != FACE_COUNT:
                raise ValueError(f"A cube map needs {FACE_COUNT} face paths, got {len(paths)}.")
            self.paths = paths
            self.is_single = False if is_single is None else is_single
        self.width = 0
        self.height = 0
        self.faces: list[np.ndarray | None] = [None] * FACE_COUNT

    def face(self, index: int) -> np.ndarray | None:
        """Return the pixels used for face ``index``."""
        pixels = self.faces[index]
        return self.faces[0] if pixels is None else pixels

    def load(self) -> None:
        """Read the image or images named by ``paths``."""
        if self.is_single:
            self.parse_img(self.paths[0])
        else:
            self.parse_faces(self.paths)

    def create_empty_texture(self, width: int, height: int) -> None:
        """Make every face a zero-filled square image of the given size."""
        if width != height:
            raise ValueError("Error: the texture should be a square")
        if width < 0:
            raise ValueError("Texture dimensions must not be negative.")
        self.faces = [np.zeros((height, width, 3), dtype=np.uint8)] + [None] * (FACE_COUNT - 1)
        self.width = width
        self.height = height

    def parse_img(self, path: str) -> None:
        """Use one image, rotated by the first face's setting, for all faces."""
        pixels = self._read_face(path)
        self.faces = [_rotate(pixels, self.config.rotate_config[0])] + [None] * (FACE_COUNT - 1)

    def parse_faces(self, paths: Sequence[str]) -> None:
        """Read six face images, each rotated by its own setting."""
        paths = tuple(paths)
        if len(paths) != FACE_COUNT:
            raise ValueError(f"A cube map needs {FACE_COUNT} face paths, got {len(paths)}.")
        self.faces = [
            _rotate(self._read_face(path), mode)
            for path, mode in zip(paths, self.config.rotate_config)
        ]

    def _read_face(self, path: str) -> np.ndarray:
        if get_ext(path) == "ppm":
            pixels = parse_ppm(path)
            height, width = pixels.shape[:2]
            if width != height:
                raise ValueError("Error: the texture should be a square")
            if self.width != 0 and width != self.width:
                raise ValueError(
                    "Error: all the faces of the cube should have the same dimension"
                )
        else:
            shown = to_unix_style_path(path)
            try:
                with Image.open(shown) as image:
                    pixels = np.asarray(image.convert("RGB"), dtype=np.uint8).copy()
            except (OSError, ValueError) as exc:
                raise OSError(f"Failed to load image at path: {shown}") from exc
            height, width = pixels.shape[:2]
        self.width = width
        self.height = height
        return pixels