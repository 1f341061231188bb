"""Scene graph nodes holding a local transform and a cached global transform."""

from __future__ import annotations

import numpy as np

from radiance.transform import Transform


class SceneNode:
    """A node in the scene graph.

    ``global_transform`` caches the node's world matrix. It is refreshed by
    ``update_global_transform`` (one level, using the parent's cached matrix)
    or by ``update_all_global_transform`` (walking up through the ancestors).
    ``cast_shadow`` and ``lighting_enabled`` control how drawable nodes render.
    """

    def __init__(self) -> None:
        self.parent: SceneNode | None = None
        self.children: set[SceneNode] = set()
        self.local_transform = Transform()
        self.global_transform: np.ndarray = np.identity(4)
        self.cast_shadow = True
        self.lighting_enabled = True
        self._tick_tock = False

    def add_child(self, child: SceneNode) -> None:
        """Attach ``child`` below this node."""
        child.parent = self
        self.children.add(child)

    def update_global_transform(self) -> np.ndarray:
        """Recompute the global matrix from the parent's cached one and return it."""
        local = self.local_transform.matrix
        if self.parent is not None:
            self.global_transform = self.parent.global_transform @ local
        else:
            self.global_transform = local.copy()
        return self.global_transform

    def update_all_global_transform(self, tick_tock: bool) -> np.ndarray:
        """Recompute the global matrix through all ancestors and return it.

        A node already refreshed with ``tick_tock`` set is skipped when
        called again with ``tick_tock`` set.
        """
        if tick_tock and self._tick_tock:
            return self.global_transform
        local = self.local_transform.matrix
        if self.parent is not None:
            self.parent.update_all_global_transform(tick_tock)
            self.global_transform = self.parent.global_transform @ local
        else:
            self.global_transform = local.copy()
        self._tick_tock = tick_tock
        return self.global_transform