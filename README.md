# eikonal

Solve the anisotropic eikonal equation on unstructured triangular (2D) and
tetrahedral (3D) meshes.

The package computes arrival times `u` from source nodes with an iterative
active-list scheme. Source nodes start at zero, every other node at a large
value (`eikonal.solver.INF`), and the neighbours of the sources form the first
active list. A node's value is the smallest value obtained by solving a small
constrained minimisation on each element around it; that local problem is
solved by a projected Newton line search. The speed of propagation is given by
a symmetric positive definite anisotropy matrix.

## Installation

```
pip install .
```

The only runtime dependency is `numpy`. To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

Two commands are installed.

### `eikonal`

```
eikonal [MESH] [--dimension {2,3}] [--source N] [--output FILE] [--parallel] [--workers N]
```

Reads a legacy ASCII VTK mesh, marks node `N` as the source (default 44),
prints the value at every node, propagates the solution through the mesh with
the identity as anisotropy matrix, prints the values again and writes the
result to a VTK file.

- `MESH` defaults to `../tests/mesh3D.vtk` (or `mesh2D.vtk` with
  `--dimension 2`).
- `--dimension` defaults to 3.
- `--output` defaults to `solution.vtk`, or `parallel_solution.vtk` with
  `--parallel`.
- `--parallel` uses the threaded solver; `--workers` sets its number of
  threads.

The command exits with status 1 if the mesh cannot be read, the source index is
not in the mesh, or the output file cannot be written.

### `eikonal-local`

```
eikonal-local [--dimension {2,3}]
```

Solves sample local problems and prints, for each, the value, the foot of the
characteristic (`lambda`) and the solver status. With `--dimension 3` (the
default) it runs ten problems on a tetrahedron whose first vertex and base
values change from one run to the next; with `--dimension 2` it solves one
problem on a triangle with an anisotropy matrix `diag(3, 9)`.

## Library use

### The local problem

The building block is the solution of the eikonal equation on one simplex,
given the values at its base vertices. The last point of the element is the
vertex whose value is sought:

```python
import numpy as np
from eikonal.local_problem import solve_local_problem, solve_local_problem_isotropic

element = [
    [0.1, 0.2, 0.5],
    [0.2, 0.1, 0.5],
    [0.1, 0.1, 0.5],
    [0.2, 0.1, 0.4],
]
values = [1.0, 0.0, 1.0]

solution = solve_local_problem_isotropic(element, values)
print(solution.value, solution.lam, solution.status)

anisotropy = np.diag([1.0, 2.0, 1.0])
print(solve_local_problem(element, values, anisotropy).value)
```

The result is an `EikonalSolution` with `value`, `lam` (the barycentric
coordinates of the foot of the characteristic) and `status`, a `SolverStatus`
from `eikonal.line_search` (`CONVERGED`, `NON_DESCENT_DIRECTION`,
`NO_SUFFICIENT_DECREASE` or `MAX_ITERATIONS`). `LocalProblemSolver` does the
same work from a `SimplexData` (in `eikonal.simplex`) and the base values.

Tolerances and backtracking parameters used by every local solve can be changed
with `set_optimization_options` and `set_line_search_options`, passing an
`OptimizationOptions` or a `LineSearchOptions` from `eikonal.options`.

### Solving on a mesh

```python
import numpy as np
from eikonal.mesh import load_mesh
from eikonal.solver import EikonalSolver
from eikonal.vtk_writer import write_vtk

mesh = load_mesh("mesh3D.vtk", 3)
mesh.nodes[44].is_source = True

solver = EikonalSolver(mesh.elements, np.eye(3))
solver.update()
solver.print_results()

write_vtk("solution.vtk", mesh)
```

`EikonalSolver.neighbours(node)` lists the nodes sharing an element with a
node. `ParallelEikonalSolver` in `eikonal.parallel_solver` has the same
interface and takes an extra `workers` argument: each sweep over the active
list is spread over a pool of threads.

### The optimisation toolkit

The line search used for the local problem is available on its own as
`LineSearchSolver` in `eikonal.line_search`. It takes an `OptimizationData`
(cost function, gradient, Hessian, bounds set with `set_bounds`) and a descent
direction from `eikonal.directions`: `GradientDirection`, `NewtonDirection`
(with handling of the bounds of the local problem), `BFGSDirection`,
`BFGSIDirection` (BFGS on the inverse Hessian), `BBDirection`
(Barzilai–Borwein) and `CGDirection` (Polak–Ribière conjugate gradient).
Trial points are clamped to the bounds, and with two unknowns are first
projected under the line `x0 + x1 = 1`.

`load_directions()` in `eikonal.direction_factory` returns a `Factory` (from
`eikonal.factory`) in which each direction is registered under its class name.
`GradientFiniteDifference` in `eikonal.finite_difference` approximates a
gradient by centred, forward or backward differences (`FiniteDifferenceType`).

## Mesh format

Meshes are read from legacy ASCII VTK files: four header lines, a `POINTS`
section, then a `CELLS` (or `POLYGONS`) section whose cells all have
dimension + 1 vertices. In two dimensions the third coordinate of each point is
read and ignored. Anything after the cells is not read. A malformed file raises
`MeshFormatError` (a `ValueError`).

Output files use the same format, with `CELL_TYPES` (5 for triangles, 10 for
tetrahedra) and the solution stored as point data named `solution`.

## Limitations

- Only legacy ASCII VTK files are read and written; binary VTK and other mesh
  formats are not supported.
- The command line marks a single source node and always uses the identity as
  anisotropy matrix; other sources and matrices need the library interface.