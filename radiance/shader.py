"""Shader programs described by the paths of their stage sources."""

from __future__ import annotations

from typing import ClassVar

from radiance.resource_unit import ResourceBase
from radiance.utils import load_text_file


class ShaderPipeline(ResourceBase):
    """A vertex/fragment shader program with an optional geometry stage.

    Loading reads each stage's source text. An empty ``geometry_path``
    means the program has no geometry stage.
    """

    resource_type: ClassVar[str] = "shader_pipeline"
    main_only = True

    def __init__(self, vertex_path: str, fragment_path: str, geometry_path: str = "") -> None:
        self.vertex_path = vertex_path
        self.fragment_path = fragment_path
        self.geometry_path = geometry_path
        self.vertex_source: str | None = None
        self.fragment_source: str | None = None
        self.geometry_source: str | None = None

    @property
    def has_geometry_stage(self) -> bool:
        return self.geometry_path != ""

    def load(self) -> None:
        """Read the source of every stage, replacing any previously read."""
        vertex = load_text_file(self.vertex_path)
        fragment = load_text_file(self.fragment_path)
        geometry = load_text_file(self.geometry_path) if self.has_geometry_stage else None
        self.vertex_source = vertex
        self.fragment_source = fragment
        self.geometry_source = geometry


class ShaderCompute(ResourceBase):
    """A compute shader program read from a single source file."""

    resource_type: ClassVar[str] = "shader_compute"
    main_only = True

    def __init__(self, path: str) -> None:
        self.path = path
        self.source: str | None = None

    def load(self) -> None:
        """Read the compute shader source, replacing any previously read."""
        self.source = load_text_file(self.path)