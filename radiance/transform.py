"""Affine transforms stored as 4x4 matrices acting on column vectors."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


def _vector(x: float | Sequence[float], y: float | None, z: float | None) -> np.ndarray:
    if y is None and z is None:
        values = np.asarray(x, dtype=np.float64)
        if values.shape != (3,):
            raise ValueError("Expected three components.")
        return values
    if y is None or z is None:
        raise ValueError("Expected three components.")
    return np.array([x, y, z], dtype=np.float64)


class Transform:
    """A transform; each operation is applied after those already recorded."""

    def __init__(self) -> None:
        self.matrix = np.identity(4)
        self.reset()

    def reset(self) -> None:
        """Return to the identity transform."""
        self.matrix = np.identity(4)

    def translate(self, x, y=None, z=None) -> None:
        """Translate by ``(x, y, z)`` or by a three-component vector ``x``."""
        offset = _vector(x, y, z)
        step = np.identity(4)
        step[:3, 3] = offset
        self.matrix = step @ self.matrix

    def rotate(self, angle: float, x, y=None, z=None) -> None:
        """Rotate by ``angle`` radians about the axis ``(x, y, z)`` or vector ``x``."""
        axis = _vector(x, y, z)
        length = np.linalg.norm(axis)
        if length == 0:
            raise ValueError("Rotation axis must not be zero.")
        axis = axis / length
        c = math.cos(angle)
        s = math.sin(angle)
        ax, ay, az = axis
        cross = np.array([[0.0, -az, ay], [az, 0.0, -ax], [-ay, ax, 0.0]])
        step = np.identity(4)
        step[:3, :3] = c * np.identity(3) + s * cross + (1.0 - c) * np.outer(axis, axis)
        self.matrix = step @ self.matrix

    def scale(self, x, y=None, z=None) -> None:
        """Scale by ``(x, y, z)`` or by a three-component vector ``x``."""
        factors = _vector(x, y, z)
        step = np.identity(4)
        step[0, 0], step[1, 1], step[2, 2] = factors
        self.matrix = step @ self.matrix