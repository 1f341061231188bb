"""Scene graph, resource loading and CPU-side texture and shader-source handling for a renderer."""

__version__ = "0.1.0"