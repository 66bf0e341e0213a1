import numpy as np
import pytest

from eikonal.mesh import Mesh, MeshElement, MeshFormatError, Node, load_mesh

HEADER = "# vtk DataFile Version 3.0\ntest mesh\nASCII\nDATASET UNSTRUCTURED_GRID\n"

MESH_2D = HEADER + (
    "POINTS 4 double\n"
    "0 0 0\n1 0 0\n0 1 0\n1 1 0\n"
    "CELLS 2 8\n"
    "3 0 1 2\n3 1 2 3\n"
)

MESH_3D = HEADER + (
    "POINTS 5 float\n"
    "0 0 0\n1 0 0\n0 1 0\n0 0 1\n1 1 1\n"
    "CELLS 2 10\n"
    "4 0 1 2 3\n4 1 2 3 4\n"
)


def _write(tmp_path, text, name="mesh.vtk"):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_load_2d_mesh(tmp_path):
    mesh = load_mesh(_write(tmp_path, MESH_2D), 2)
    assert mesh.dimension == 2
    assert [node.id for node in mesh.nodes] == [0, 1, 2, 3]
    assert np.array_equal(mesh.nodes[3].point, [1.0, 1.0])
    assert len(mesh.points) == 4
    assert len(mesh.elements) == 2
    assert [v.id for v in mesh.elements[1].vertices] == [1, 2, 3]
    assert all(not node.is_source and node.u == 0.0 for node in mesh.nodes)


def test_elements_share_nodes(tmp_path):
    mesh = load_mesh(_write(tmp_path, MESH_2D), 2)
    assert mesh.elements[0].vertices[1] is mesh.nodes[1]
    assert mesh.elements[1].vertices[0] is mesh.nodes[1]
    mesh.nodes[2].u = 5.0
    assert mesh.elements[0].vertices[2].u == 5.0


def test_load_3d_mesh(tmp_path):
    mesh = load_mesh(_write(tmp_path, MESH_3D), 3)
    assert len(mesh.nodes) == 5
    assert np.array_equal(mesh.nodes[4].point, [1.0, 1.0, 1.0])
    assert all(element.dimension == 3 for element in mesh.elements)
    assert [v.id for v in mesh.elements[0].vertices] == [0, 1, 2, 3]


def test_polygons_section_accepted(tmp_path):
    mesh = load_mesh(_write(tmp_path, MESH_2D.replace("CELLS", "POLYGONS")), 2)
    assert len(mesh.elements) == 2


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        load_mesh(tmp_path / "missing.vtk", 2)


def test_incomplete_header(tmp_path):
    with pytest.raises(MeshFormatError, match="header"):
        load_mesh(_write(tmp_path, "# vtk\nonly two lines\n"), 2)


def test_missing_points_section(tmp_path):
    with pytest.raises(MeshFormatError, match="POINTS"):
        load_mesh(_write(tmp_path, MESH_2D.replace("POINTS", "VERTICES")), 2)


def test_bad_coordinates(tmp_path):
    with pytest.raises(MeshFormatError, match="coordinates"):
        load_mesh(_write(tmp_path, MESH_2D.replace("1 1 0", "1 x 0")), 2)


def test_missing_cells_section(tmp_path):
    with pytest.raises(MeshFormatError, match="POLYGONS or CELLS"):
        load_mesh(_write(tmp_path, MESH_2D.replace("CELLS", "LINES")), 2)


def test_wrong_vertex_count(tmp_path):
    with pytest.raises(MeshFormatError, match="vertices per element"):
        load_mesh(_write(tmp_path, MESH_2D), 3)


def test_index_out_of_bounds(tmp_path):
    with pytest.raises(MeshFormatError, match="out of bounds"):
        load_mesh(_write(tmp_path, MESH_2D.replace("3 1 2 3", "3 1 2 9")), 2)


def test_invalid_dimension(tmp_path):
    with pytest.raises(ValueError):
        load_mesh(_write(tmp_path, MESH_2D), 4)


def test_constructed_mesh_points_follow_nodes():
    nodes = [Node(0, point=np.array([0.0, 0.0])), Node(1, point=np.array([2.0, 3.0]))]
    mesh = Mesh(2, nodes=nodes, elements=[MeshElement(tuple(nodes))])
    assert np.array_equal(mesh.points[1], [2.0, 3.0])
    assert mesh.elements[0].dimension == 1