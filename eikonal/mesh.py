"""Mesh nodes, elements and the reader of legacy VTK meshes."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from typing import Iterator, Union

import numpy as np


class MeshFormatError(ValueError):
    """The mesh file does not have the expected layout."""


@dataclass(eq=False)
class Node:
    """A mesh vertex carrying the current value of u."""

    id: int
    u: float = 0.0
    is_source: bool = False
    point: np.ndarray = field(default_factory=lambda: np.zeros(0))


@dataclass(eq=False)
class MeshElement:
    """A triangle or tetrahedron given by its vertices."""

    vertices: tuple[Node, ...]

    @property
    def dimension(self) -> int:
        return len(self.vertices) - 1


@dataclass
class Mesh:
    """Nodes and simplicial elements of a 2D or 3D mesh."""

    dimension: int
    nodes: list[Node] = field(default_factory=list)
    elements: list[MeshElement] = field(default_factory=list)

    @property
    def points(self) -> list[np.ndarray]:
        return [node.point for node in self.nodes]


def _take(tokens: Iterator[str], message: str) -> str:
    try:
        return next(tokens)
    except StopIteration:
        raise MeshFormatError(message) from None


def _take_int(tokens: Iterator[str], message: str) -> int:
    token = _take(tokens, message)
    try:
        return int(token)
    except ValueError:
        raise MeshFormatError(message) from None


def _take_float(tokens: Iterator[str], message: str) -> float:
    token = _take(tokens, message)
    try:
        return float(token)
    except ValueError:
        raise MeshFormatError(message) from None


def load_mesh(path: Union[str, PathLike], dimension: int) -> Mesh:
    """Read a legacy ASCII VTK mesh of triangles (2D) or tetrahedra (3D)."""
    if dimension not in (2, 3):
        raise ValueError("dimension must be 2 or 3")
    mesh = Mesh(dimension)
    with open(path, encoding="utf-8") as handle:
        for _ in range(4):
            if not handle.readline():
                raise MeshFormatError("Incomplete VTK header in mesh file")
        tokens = iter(handle.read().split())

    if _take(tokens, "Expected POINTS section in VTK file") != "POINTS":
        raise MeshFormatError("Expected POINTS section in VTK file")
    count = _take_int(tokens, "Error reading number of vertices")
    _take(tokens, "Error reading vertex data type")

    coord_error = "Error reading vertex coordinates"
    for index in range(count):
        coords = [_take_float(tokens, coord_error) for _ in range(dimension)]
        if dimension == 2:
            _take_float(tokens, coord_error)  # z coordinate, unused in 2D
        mesh.nodes.append(Node(id=index, point=np.array(coords)))

    marker = _take(tokens, "Expected POLYGONS or CELLS section in VTK file")
    if marker not in ("POLYGONS", "CELLS"):
        raise MeshFormatError("Expected POLYGONS or CELLS section in VTK file")
    element_count = _take_int(tokens, "Error reading number of elements")
    _take_int(tokens, "Error reading number of element indices")

    element_error = "Error reading element vertices"
    for _ in range(element_count):
        per_element = _take_int(tokens, element_error)
        if per_element != dimension + 1:
            raise MeshFormatError("Invalid number of vertices per element")
        vertices = []
        for _ in range(per_element):
            vertex = _take_int(tokens, element_error)
            if not 0 <= vertex < len(mesh.nodes):
                raise MeshFormatError("Vertex index out of bounds")
            vertices.append(mesh.nodes[vertex])
        mesh.elements.append(MeshElement(tuple(vertices)))
    return mesh