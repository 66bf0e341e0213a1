import numpy as np
import pytest

from eikonal.mesh import Mesh, MeshElement, Node, load_mesh
from eikonal.vtk_writer import write_vtk


def _triangle_mesh():
    nodes = [
        Node(0, u=0.0, point=np.array([0.0, 0.0])),
        Node(1, u=1.5, point=np.array([1.0, 0.0])),
        Node(2, u=2.5, point=np.array([0.0, 1.0])),
    ]
    return Mesh(2, nodes=nodes, elements=[MeshElement(tuple(nodes))])


def _tetra_mesh():
    coords = [[0, 0, 0], [1, 0, 0], [0, 1, 0], [0, 0, 1], [1, 1, 1]]
    nodes = [Node(i, u=float(i), point=np.array(c, dtype=float)) for i, c in enumerate(coords)]
    elements = [
        MeshElement(tuple(nodes[:4])),
        MeshElement(tuple(nodes[1:])),
    ]
    return Mesh(3, nodes=nodes, elements=elements)


def test_2d_file_layout(tmp_path):
    path = tmp_path / "out.vtk"
    write_vtk(path, _triangle_mesh())
    lines = path.read_text().splitlines()
    assert lines[:5] == [
        "# vtk DataFile Version 3.0",
        "Eikonal solution",
        "ASCII",
        "DATASET UNSTRUCTURED_GRID",
        "POINTS 3 double",
    ]
    assert lines[5:8] == ["0 0 0 ", "1 0 0 ", "0 1 0 "]
    assert "CELLS 1 4" in lines
    assert "3 0 1 2 " in lines
    index = lines.index("CELL_TYPES 1")
    assert lines[index + 1] == "5"
    data = lines.index("POINT_DATA 3")
    assert lines[data + 1] == "SCALARS solution double 1"
    assert lines[data + 2] == "LOOKUP_TABLE default"


def test_solution_values_round_trip(tmp_path):
    mesh = _triangle_mesh()
    path = tmp_path / "out.vtk"
    write_vtk(path, mesh)
    lines = path.read_text().splitlines()
    values = [float(v) for v in lines[-3:]]
    assert values == [node.u for node in mesh.nodes]


def test_3d_cell_types_and_round_trip(tmp_path):
    mesh = _tetra_mesh()
    path = tmp_path / "out.vtk"
    write_vtk(path, mesh)
    lines = path.read_text().splitlines()
    index = lines.index("CELL_TYPES 2")
    assert lines[index + 1 : index + 3] == ["10", "10"]
    assert "CELLS 2 10" in lines

    reread = load_mesh(path, 3)
    assert len(reread.nodes) == len(mesh.nodes)
    for a, b in zip(reread.nodes, mesh.nodes):
        assert np.array_equal(a.point, b.point)
    assert [[v.id for v in e.vertices] for e in reread.elements] == [
        [v.id for v in e.vertices] for e in mesh.elements
    ]


def test_2d_round_trip_through_loader(tmp_path):
    mesh = _triangle_mesh()
    path = tmp_path / "out.vtk"
    write_vtk(path, mesh)
    reread = load_mesh(path, 2)
    assert [n.point.tolist() for n in reread.nodes] == [n.point.tolist() for n in mesh.nodes]
    assert len(reread.elements) == 1


def test_large_value_uses_exponent_notation(tmp_path):
    mesh = _triangle_mesh()
    mesh.nodes[0].u = 10e7
    path = tmp_path / "out.vtk"
    write_vtk(path, mesh)
    assert float(path.read_text().splitlines()[-3]) == pytest.approx(10e7)


def test_invalid_dimension_raises(tmp_path):
    with pytest.raises(ValueError):
        write_vtk(tmp_path / "out.vtk", Mesh(4))


def test_unwritable_path_raises(tmp_path):
    with pytest.raises(OSError):
        write_vtk(tmp_path / "missing" / "out.vtk", _triangle_mesh())