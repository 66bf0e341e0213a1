"""Writer of meshes and their solution as legacy ASCII VTK files."""

from __future__ import annotations

from os import PathLike
from typing import Union

from .mesh import Mesh

_CELL_TYPES = {2: 5, 3: 10}


def write_vtk(path: Union[str, PathLike], mesh: Mesh) -> None:
    """Write nodes, cells and the nodal values of u to ``path``."""
    if mesh.dimension not in _CELL_TYPES:
        raise ValueError("mesh dimension must be 2 or 3")
    points_per_cell = mesh.dimension + 1
    cells = len(mesh.elements)
    with open(path, "w", encoding="utf-8") as out:
        out.write("# vtk DataFile Version 3.0\n")
        out.write("Eikonal solution\n")
        out.write("ASCII\n")
        out.write("DATASET UNSTRUCTURED_GRID\n")

        out.write(f"POINTS {len(mesh.nodes)} double\n")
        for node in mesh.nodes:
            coords = "".join(f"{float(x):g} " for x in node.point[: mesh.dimension])
            if mesh.dimension == 2:
                coords += "0 "
            out.write(coords + "\n")

        out.write(f"\nCELLS {cells} {cells * (points_per_cell + 1)}\n")
        for element in mesh.elements:
            ids = "".join(f"{vertex.id} " for vertex in element.vertices)
            out.write(f"{points_per_cell} {ids}\n")

        out.write(f"\nCELL_TYPES {cells}\n")
        out.writelines(f"{_CELL_TYPES[mesh.dimension]}\n" for _ in range(cells))

        out.write(f"\nPOINT_DATA {len(mesh.nodes)}\n")
        out.write("SCALARS solution double 1\n")
        out.write("LOOKUP_TABLE default\n")
        out.writelines(f"{float(node.u):g}\n" for node in mesh.nodes)