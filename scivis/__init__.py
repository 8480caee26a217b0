"""Vector math, matrices, colour conversion, camera, meshes, images and grids for visualization."""

__version__ = "0.1.0"
__all__ = ["camera", "color", "grid", "image", "matrix", "objfile", "rand", "tesselation", "vec"]