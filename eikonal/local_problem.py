"""Solution of the local eikonal problem on a single triangle or tetrahedron."""

from __future__ import annotations

import argparse
import dataclasses
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from .directions import NewtonDirection
from .line_search import LineSearchSolver, SolverStatus
from .options import LineSearchOptions, OptimizationData, OptimizationOptions
from .simplex import Phi, SimplexData

_INITIAL_LAMBDA = 0.333


@dataclass
class EikonalSolution:
    """Value at the unknown vertex, foot of the characteristic and status."""

    value: float
    lam: np.ndarray
    status: SolverStatus


@dataclass
class _Settings:
    line_search: LineSearchOptions = field(default_factory=LineSearchOptions)
    optimization: OptimizationOptions = field(default_factory=OptimizationOptions)


_SETTINGS = _Settings()


def set_line_search_options(options: LineSearchOptions) -> None:
    """Set the backtracking options used by every local solve."""
    _SETTINGS.line_search = dataclasses.replace(options)


def set_optimization_options(options: OptimizationOptions) -> None:
    """Set the outer iteration options used by every local solve."""
    _SETTINGS.optimization = dataclasses.replace(options)


class LocalProblemSolver:
    """Minimises the local functional over the feasible barycentric coordinates."""

    def __init__(self, simplex: SimplexData, values) -> None:
        self.phi = Phi(simplex, values)

    def __call__(self) -> EikonalSolution:
        phi = self.phi
        unknowns = phi.unknowns
        data = OptimizationData(
            cost_function=phi,
            gradient=phi.gradient,
            hessian=phi.hessian,
            number_of_variables=unknowns,
        )
        data.set_bounds([0.0] * unknowns, [1.0] * unknowns)
        solver = LineSearchSolver(
            data,
            NewtonDirection(),
            dataclasses.replace(_SETTINGS.optimization),
            dataclasses.replace(_SETTINGS.line_search),
        )
        solver.set_initial_point(np.full(unknowns, _INITIAL_LAMBDA))
        result = solver.solve()
        return EikonalSolution(
            value=result.values.cost_value,
            lam=result.values.point.copy(),
            status=result.status,
        )


def solve_local_problem(element, values, anisotropy) -> EikonalSolution:
    """Solve on ``element`` (base vertices first, unknown vertex last)."""
    return LocalProblemSolver(SimplexData(element, anisotropy), values)()


def solve_local_problem_isotropic(element, values) -> EikonalSolution:
    """Solve with the identity as anisotropy matrix."""
    return solve_local_problem(element, values, None)


def _format(solution: EikonalSolution) -> str:
    lam = " ".join(f"{x:g}" for x in solution.lam)
    return f"Solution={solution.value:g} lambda:{lam} status:{int(solution.status)}"


def _demo_2d() -> None:
    element = [[0.0, 0.1], [0.0, 1.5], [1.0, 0.0]]
    anisotropy = np.array([[3.0, 0.0], [0.0, 9.0]])
    values = [float("inf"), 0.0]
    print(_format(solve_local_problem(element, values, anisotropy)))


def _demo_3d() -> None:
    p1 = [0.1, 0.2, 0.5]
    p2 = [0.2, 0.1, 0.5]
    p3 = [0.1, 0.1, 0.5]
    p4 = [0.2, 0.1, 0.4]
    anisotropy = np.eye(3)
    values = [1.0, 1.0, 1.0]
    for i in range(10):
        values[1] = 0.5 * i
        p1[1] = 0.1 + i / 10.0
        print(_format(solve_local_problem([p1, p2, p3, p4], values, anisotropy)))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Solve a few sample local problems and print the results."""
    parser = argparse.ArgumentParser(description="Solve sample local eikonal problems.")
    parser.add_argument("--dimension", type=int, choices=(2, 3), default=3)
    args = parser.parse_args(argv)
    with np.errstate(invalid="ignore"):
        if args.dimension == 2:
            _demo_2d()
        else:
            _demo_3d()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())