"""Command that solves the eikonal equation on a VTK mesh and writes the result."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

import numpy as np

from .mesh import load_mesh
from .parallel_solver import ParallelEikonalSolver
from .solver import EikonalSolver
from .vtk_writer import write_vtk

_DEFAULT_SOURCE = 51 - 7


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve the eikonal equation on a triangular or tetrahedral mesh."
    )
    parser.add_argument("mesh", nargs="?", help="legacy ASCII VTK mesh file")
    parser.add_argument("--dimension", type=int, choices=(2, 3), default=3)
    parser.add_argument(
        "--source", type=int, default=_DEFAULT_SOURCE, help="index of the source node"
    )
    parser.add_argument("--output", help="VTK file to write the solution to")
    parser.add_argument("--parallel", action="store_true", help="use the threaded solver")
    parser.add_argument("--workers", type=int, default=None)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load a mesh, solve from the source node and write the solution."""
    args = _parser().parse_args(argv)
    dimension = args.dimension
    mesh_path = args.mesh or f"../tests/mesh{dimension}D.vtk"
    output = args.output or ("parallel_solution.vtk" if args.parallel else "solution.vtk")

    try:
        mesh = load_mesh(mesh_path, dimension)
    except (OSError, ValueError) as exc:
        print(f"Error loading mesh: {exc}", file=sys.stderr)
        return 1

    if mesh.nodes:
        if not 0 <= args.source < len(mesh.nodes):
            print(f"Error: source node {args.source} is not in the mesh", file=sys.stderr)
            return 1
        mesh.nodes[args.source].is_source = True

    anisotropy = np.eye(dimension)
    if args.parallel:
        solver: EikonalSolver = ParallelEikonalSolver(mesh.elements, anisotropy, args.workers)
    else:
        solver = EikonalSolver(mesh.elements, anisotropy)
    solver.print_results()
    solver.update()
    solver.print_results()

    try:
        write_vtk(output, mesh)
    except OSError as exc:
        print(f"Error writing VTK file: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())