import numpy as np
import pytest

from eikonal.mesh import MeshElement, Node
from eikonal.solver import INF, EikonalSolver


def square_mesh():
    coords = [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0)]
    nodes = [Node(id=i, point=np.array(c)) for i, c in enumerate(coords)]
    nodes[0].is_source = True
    elements = [
        MeshElement((nodes[0], nodes[1], nodes[2])),
        MeshElement((nodes[1], nodes[3], nodes[2])),
    ]
    return nodes, elements


def tetra_mesh():
    coords = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]
    nodes = [Node(id=i, point=np.array(c)) for i, c in enumerate(coords)]
    nodes[0].is_source = True
    return nodes, [MeshElement(tuple(nodes))]


def test_initialization_sets_sources_and_active_list():
    nodes, elements = square_mesh()
    solver = EikonalSolver(elements, np.eye(2))
    assert nodes[0].u == 0.0
    assert [n.u for n in nodes[1:]] == [INF, INF, INF]
    assert solver.active == (1, 2)


def test_neighbours_are_unique_and_ordered():
    nodes, elements = square_mesh()
    solver = EikonalSolver(elements, np.eye(2))
    assert [n.id for n in solver.neighbours(nodes[0])] == [1, 2]
    assert [n.id for n in solver.neighbours(nodes[1])] == [0, 2, 3]
    assert [n.id for n in solver.neighbours(nodes[3])] == [1, 2]


def test_update_2d_square():
    nodes, elements = square_mesh()
    solver = EikonalSolver(elements, np.eye(2))
    solver.update()
    assert solver.active == ()
    assert nodes[0].u == 0.0
    assert nodes[1].u == pytest.approx(1.0, abs=1e-3)
    assert nodes[2].u == pytest.approx(nodes[1].u, abs=1e-6)
    assert nodes[1].u < nodes[3].u <= nodes[1].u + 1.0 + 1e-6


def test_update_3d_tetrahedron_is_symmetric():
    nodes, elements = tetra_mesh()
    solver = EikonalSolver(elements, np.eye(3))
    solver.update()
    values = [n.u for n in nodes[1:]]
    assert values[0] == pytest.approx(1.0, abs=1e-3)
    assert max(values) - min(values) < 1e-6
    assert nodes[0].u == 0.0


def test_default_anisotropy_is_identity():
    nodes_a, elements_a = square_mesh()
    nodes_b, elements_b = square_mesh()
    EikonalSolver(elements_a).update()
    EikonalSolver(elements_b, np.eye(2)).update()
    assert [n.u for n in nodes_a] == pytest.approx([n.u for n in nodes_b])


def test_print_results(capsys):
    nodes, elements = square_mesh()
    solver = EikonalSolver(elements, np.eye(2))
    solver.print_results()
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4
    assert "Node 0: u = 0" in lines
    assert "Node 3: u = 1e+08" in lines


def test_nodes_mapping_covers_mesh():
    nodes, elements = square_mesh()
    solver = EikonalSolver(elements, np.eye(2))
    assert sorted(solver.nodes) == [0, 1, 2, 3]
    assert solver.nodes[3] is nodes[3]