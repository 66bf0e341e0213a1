"""Anisotropic eikonal equation solver on triangular and tetrahedral meshes."""

__version__ = "0.1.0"