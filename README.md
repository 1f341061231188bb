# radiance

The parts of a real-time renderer that work without a GPU: scene nodes, resource loading and texture data.

- `radiance.transform.Transform`: a 4×4 matrix built up from `translate`, `rotate` (angle in radians) and `scale`. Each operation is applied after the ones already recorded.
- `radiance.scene_node.SceneNode`: a scene-graph node with a `local_transform`, a cached `global_transform`, `add_child`, `update_global_transform` and `update_all_global_transform`.
- `radiance.resource.Resource` and `GlobalResource`: registries filled from TOML header files by pluggable deserializers.
- `radiance.texture`: 2D textures held as numpy arrays (`Texture2DRGB`, `Texture2DRGBA`, `Texture2DR`, `Texture2DFRGB`, `Texture2DFRGBA`), `TextureConfig`, a P3 PPM reader (`parse_ppm`) and image rotations (`rotate_cw`, `rotate_ccw`, `rotate_180`).
- `radiance.texture_cube.TextureCube` and `radiance.texture_3d` (`Texture3DFRGBA`, `Texture3DRGBA`): cube maps and volume textures.
- `radiance.shader`: `ShaderPipeline` and `ShaderCompute`, which read the source text of their shader stages.
- `radiance.system.get_singleton()`: platform helpers for the current time, sleeping, this process's memory usage and the path of the running program.
- `radiance.utils`: path helpers (`get_directory`, `get_ext`, `get_file_name`, `to_unix_style_path`), `remove_quotes`, `load_text_file`, `triangulate` and `Reflectable`.

## Installation

```
pip install .
```

To also install the test dependencies:

```
pip install .[test]
```

## Resource headers

A resource header file is a TOML document. Each table in it describes one resource and names, in its `type` key, the deserializer that builds it:

```toml
[include]
dependencies = ["shaders", "textures.toml"]

[default_texture_2d]
type = "texture_2d_rgb"
path = "textures/default.ppm"
scale_nearest_min = true
generate_mipmap = false
```

The `include` table pulls in other header files, resolved relative to the directory of the file that includes them. A `.toml` suffix is added when it is missing. Declaring the same id twice raises `ValueError`.

The deserializers in `radiance.deserializers` handle these types:

| `type` | Deserializer | Keys |
| --- | --- | --- |
| `shader_pipeline` | `ShaderPipelineDeserializer` | `vertex`, `fragment`, optional `geometry` |
| `shader_compute` | `ShaderComputeDeserializer` | `path` |
| `texture_2d_rgb` | `Texture2DRGBDeserializer` | `path`, optional `scale_nearest_min`, `scale_nearest_mag`, `generate_mipmap` |
| `texture_2d_rgba` | `Texture2DRGBADeserializer` | as for `texture_2d_rgb` |
| `texture_cube` | `TextureCubeDeserializer` | `path`, or `front`, `back`, `top`, `bottom`, `left`, `right` with optional `rotate_<face>` (`none`, `cw`, `ccw`, `180`) |

Paths in these sections are resolved against the directory of the running program, or against `base_directory` when a deserializer is created with one.

Loading resources:

```python
from radiance.deserializers import Texture2DRGBDeserializer
from radiance.resource import Resource
from radiance.texture import Texture2DRGB

res = Resource()
res.add_deserializer(Texture2DRGBDeserializer(base_directory="assets"))
res.load_resources("assets/resources.toml")
texture = res.get_resource_as("default_texture_2d", Texture2DRGB)
print(texture.width, texture.height, texture.data.shape)
```

Once every section is read, all resources are loaded: those marked `main_only`, such as shaders, on the calling thread and the rest on a thread pool. `get_resource_as` returns `None` for an unknown id and raises `TypeError` when the resource is of another type.

`get_global_resource()` returns the process-wide `GlobalResource`. Resources loaded with `load_global_resources` survive `clear_resources` and are dropped only by `clear_all_resources`. Its `get_resource_ids` returns the ids in sorted order.

## Textures

Pixel data lives in `data`, a numpy array shaped `(height, width, channels)`: `uint8` for the 8-bit kinds and `float32` for the `F` kinds. 8-bit images loaded into a float texture are scaled to `[0, 1]` and their colour channels linearised with a gamma of 2.2. `Texture2DRGB` also reads plain-text P3 PPM files, whose pixels it stores in reverse order. `set_texture_row` and `get_texture_row` raise `IndexError` for rows out of range.

## What the package does not do

Nothing here talks to a graphics API. There is no window, no rendering, no framebuffer, and no upload of textures to a GPU. Shader "loading" only reads the stage sources into `vertex_source`, `fragment_source`, `geometry_source` or `source`; nothing is compiled or linked. The package has no command-line program.

## Running the tests

```
pytest
```