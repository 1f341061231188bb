"""Deserializers that build shader and texture resources from header sections."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from radiance.deserializer import Deserializer, get_optional_value, get_required_value
from radiance.resource_unit import ResourceUnit
from radiance.shader import ShaderCompute, ShaderPipeline
from radiance.system import get_singleton
from radiance.texture import RotateMode, TextureConfig, Texture2DRGB, Texture2DRGBA
from radiance.texture_cube import FACE_NAMES, TextureCube
from radiance.utils import remove_quotes


def rotate_mode_from_str(text: str) -> RotateMode:
    """Map ``"none"``, ``"cw"``, ``"ccw"`` or ``"180"`` to a ``RotateMode``."""
    try:
        return RotateMode(text)
    except ValueError:
        raise ValueError(f"Unrecognized rotate direction: {text}") from None


class _PathDeserializer(Deserializer):
    """A deserializer whose paths are relative to the program's directory.

    ``base_directory`` overrides the program's directory when given.
    """

    resource_type: ClassVar[str] = ""

    def __init__(self, base_directory: str | None = None) -> None:
        self.base_directory = base_directory

    def _directory(self) -> str:
        if self.base_directory is not None:
            return self.base_directory
        return get_singleton().get_exe_directory()

    def _resolve(self, path: str, directory: str | None = None) -> str:
        base = self._directory() if directory is None else directory
        return f"{base}/{remove_quotes(path)}"

    @staticmethod
    def _section(resource_id: str, header_table: Mapping[str, Any]) -> Mapping[str, Any] | None:
        section = header_table.get(resource_id)
        return section if isinstance(section, Mapping) else None

    def _unit(self, resource_id: str, data) -> ResourceUnit:
        return ResourceUnit(resource_id, data, self.resource_type)


def _texture_config(section: Mapping[str, Any] | None) -> TextureConfig:
    config = TextureConfig()
    config.scale_nearest_min = get_optional_value(section, "scale_nearest_min", bool, True)
    config.scale_nearest_mag = get_optional_value(section, "scale_nearest_mag", bool, True)
    config.generate_mipmap = get_optional_value(section, "generate_mipmap", bool, False)
    return config


class ShaderPipelineDeserializer(_PathDeserializer):
    """Builds a ``ShaderPipeline`` from ``vertex``, ``fragment`` and optional ``geometry`` keys."""

    resource_type: ClassVar[str] = ShaderPipeline.resource_type

    def deserialize(self, resource_id: str, header_table: Mapping[str, Any]) -> ResourceUnit:
        section = self._section(resource_id, header_table)
        vertex = get_required_value(section, "vertex", str)
        fragment = get_required_value(section, "fragment", str)
        geometry = get_optional_value(section, "geometry", str)
        directory = self._directory()
        vertex_path = self._resolve(vertex, directory)
        fragment_path = self._resolve(fragment, directory)
        if geometry is not None:
            shader = ShaderPipeline(vertex_path, fragment_path, self._resolve(geometry, directory))
        else:
            shader = ShaderPipeline(vertex_path, fragment_path)
        return self._unit(resource_id, shader)


class ShaderComputeDeserializer(_PathDeserializer):
    """Builds a ``ShaderCompute`` from a ``path`` key."""

    resource_type: ClassVar[str] = ShaderCompute.resource_type

    def deserialize(self, resource_id: str, header_table: Mapping[str, Any]) -> ResourceUnit:
        section = self._section(resource_id, header_table)
        path = get_required_value(section, "path", str)
        return self._unit(resource_id, ShaderCompute(self._resolve(path)))


class Texture2DRGBDeserializer(_PathDeserializer):
    """Builds a ``Texture2DRGB`` from a ``path`` key and sampling options."""

    resource_type: ClassVar[str] = Texture2DRGB.resource_type

    def deserialize(self, resource_id: str, header_table: Mapping[str, Any]) -> ResourceUnit:
        section = self._section(resource_id, header_table)
        path = self._resolve(get_required_value(section, "path", str))
        return self._unit(resource_id, Texture2DRGB(_texture_config(section), path))


class Texture2DRGBADeserializer(_PathDeserializer):
    """Builds a ``Texture2DRGBA`` from a ``path`` key and sampling options."""

    resource_type: ClassVar[str] = Texture2DRGBA.resource_type

    def deserialize(self, resource_id: str, header_table: Mapping[str, Any]) -> ResourceUnit:
        section = self._section(resource_id, header_table)
        path = self._resolve(get_required_value(section, "path", str))
        return self._unit(resource_id, Texture2DRGBA(_texture_config(section), path))


class TextureCubeDeserializer(_PathDeserializer):
    """Builds a ``TextureCube`` from one ``path`` or six face keys.

    With six faces, each may carry a ``rotate_<face>`` setting.
    """

    resource_type: ClassVar[str] = TextureCube.resource_type

    def deserialize(self, resource_id: str, header_table: Mapping[str, Any]) -> ResourceUnit:
        section = self._section(resource_id, header_table)
        config = _texture_config(section)
        directory = self._directory()
        path = get_optional_value(section, "path", str)
        if path is not None:
            cube = TextureCube(self._resolve(path, directory), config)
            return self._unit(resource_id, cube)
        config.rotate_config = tuple(
            rotate_mode_from_str(get_optional_value(section, f"rotate_{face}", str, "none"))
            for face in FACE_NAMES
        )
        paths = [
            self._resolve(get_required_value(section, face, str), directory)
            for face in FACE_NAMES
        ]
        return self._unit(resource_id, TextureCube(paths, config, is_single=False))