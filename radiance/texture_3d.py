"""Three-dimensional textures held as voxel arrays."""

from __future__ import annotations

from typing import ClassVar

import numpy as np

from radiance.texture import TextureConfig


class Texture3D:
    """A volume texture whose voxels are a ``(depth, height, width, channels)`` array."""

    channels: ClassVar[int] = 4
    dtype: ClassVar[type] = np.float32

    def __init__(
        self,
        width: int,
        height: int,
        depth: int,
        config: TextureConfig | None = None,
    ) -> None:
        self.config = config if config is not None else TextureConfig()
        self.data = np.zeros((0, 0, 0, self.channels), dtype=self.dtype)
        self.create_empty_texture(width, height, depth)

    @property
    def width(self) -> int:
        return self.data.shape[2]

    @property
    def height(self) -> int:
        return self.data.shape[1]

    @property
    def depth(self) -> int:
        return self.data.shape[0]

    def create_empty_texture(self, width: int, height: int, depth: int) -> None:
        """Replace the voxels with a zero-filled volume of the given size."""
        if width < 0 or height < 0 or depth < 0:
            raise ValueError("Texture dimensions must not be negative.")
        self.data = np.zeros((depth, height, width, self.channels), dtype=self.dtype)


class Texture3DFRGBA(Texture3D):
    """A floating-point RGBA volume texture."""

    channels: ClassVar[int] = 4
    dtype: ClassVar[type] = np.float32


class Texture3DRGBA(Texture3D):
    """An 8-bit volume texture, stored with three colour channels per voxel."""

    channels: ClassVar[int] = 3
    dtype: ClassVar[type] = np.uint8