"""Line-search minimisation with backtracking and box/simplex projection."""

from __future__ import annotations

import dataclasses
import logging
from enum import IntEnum
from typing import NamedTuple, Optional

import numpy as np

from .directions import DescentDirection
from .options import (
    LineSearchOptions,
    OptimizationCurrentValues,
    OptimizationData,
    OptimizationOptions,
)

_log = logging.getLogger(__name__)


class SolverStatus(IntEnum):
    """Outcome of a line-search run."""

    CONVERGED = 0
    NON_DESCENT_DIRECTION = 1
    NO_SUFFICIENT_DECREASE = 2
    MAX_ITERATIONS = 3


class SolveResult(NamedTuple):
    """Final state, number of iterations and status of a run."""

    values: OptimizationCurrentValues
    iterations: int
    status: SolverStatus


class LineSearchSolver:
    """Minimises a function by line search along a chosen descent direction.

    Every trial point is projected: with two unknowns it is first pulled
    under the line ``x0 + x1 = 1``, then clamped to the bounds if any.
    """

    def __init__(
        self,
        data: OptimizationData,
        direction: DescentDirection,
        options: Optional[OptimizationOptions] = None,
        line_search_options: Optional[LineSearchOptions] = None,
    ) -> None:
        self.data = dataclasses.replace(
            data,
            lower_bounds=list(data.lower_bounds),
            upper_bounds=list(data.upper_bounds),
        )
        self.direction = direction
        self.options = options if options is not None else OptimizationOptions()
        self.line_search_options = (
            line_search_options if line_search_options is not None else LineSearchOptions()
        )
        self._values: Optional[OptimizationCurrentValues] = None

    def set_initial_point(self, point) -> None:
        """Start the search from ``point``; the direction rule is reset."""
        data = self.data
        if data.cost_function is None or data.gradient is None:
            raise RuntimeError(
                "You cannot set an initial point before setting cost function and gradient"
            )
        point = np.array(point, dtype=float).reshape(-1)
        self.direction.reset()
        values = OptimizationCurrentValues(
            cost_value=float(data.cost_function(point)),
            point=point,
            gradient=np.asarray(data.gradient(point), dtype=float),
            hessian=np.asarray(data.hessian(point), dtype=float),
            bounded=data.bounded,
            lower_bounds=list(data.lower_bounds),
            upper_bounds=list(data.upper_bounds),
        )
        n = point.size
        if n != data.number_of_variables:
            _log.warning(
                "Number of variables indicated in the data (%d) does not correspond "
                "to the size of the initial point (%d); using %d.",
                data.number_of_variables,
                n,
                n,
            )
            data.number_of_variables = n
        if data.bounded:
            inside = all(
                lo <= x <= up
                for x, lo, up in zip(point, data.lower_bounds, data.upper_bounds)
            )
            if not inside:
                raise ValueError("Initial point must be within given bounds")
        self._values = values

    def solve(self) -> SolveResult:
        """Iterate until a stopping test holds; return the final state."""
        if self._values is None:
            raise RuntimeError("the initial point has not been set")
        values = self._values
        opts = self.options
        rel_tol, abs_tol, max_iter = opts.rel_tol, opts.abs_tol, opts.max_iter

        gradient_norm = float(np.linalg.norm(values.gradient))
        test_value = rel_tol * gradient_norm
        step_length = 2 * abs_tol
        val_tol = abs_tol + rel_tol * abs(values.cost_value)
        val_change = 2 * val_tol
        iterations = 0
        status = SolverStatus.CONVERGED

        while (
            gradient_norm > test_value + abs_tol
            and step_length > abs_tol
            and val_change > val_tol
            and iterations < max_iter
            and status == SolverStatus.CONVERGED
        ):
            new_point = values.point
            new_value = values.cost_value
            direction = np.asarray(self.direction(values), dtype=float)
            if float(np.linalg.norm(direction)) > abs_tol:
                new_point, new_value, status = self._backtrack(direction)
            if status != SolverStatus.CONVERGED:
                if status == SolverStatus.NON_DESCENT_DIRECTION:
                    _log.error("line search found a non-descent direction")
                else:
                    _log.error("line search cannot satisfy the sufficient decrease condition")
                continue
            step_length = float(np.linalg.norm(new_point - values.point))
            val_change = abs(values.cost_value - new_value)
            values.point = new_point
            values.cost_value = new_value
            values.gradient = np.asarray(self.data.gradient(new_point), dtype=float)
            values.hessian = np.asarray(self.data.hessian(new_point), dtype=float)
            gradient_norm = float(np.linalg.norm(values.gradient))
            iterations += 1

        if status == SolverStatus.CONVERGED and iterations >= max_iter:
            status = SolverStatus.MAX_ITERATIONS
        snapshot = dataclasses.replace(
            values,
            point=values.point.copy(),
            gradient=values.gradient.copy(),
            hessian=values.hessian.copy(),
            lower_bounds=list(values.lower_bounds),
            upper_bounds=list(values.upper_bounds),
        )
        return SolveResult(snapshot, iterations, status)

    def _backtrack(self, direction: np.ndarray):
        """Backtracking with the sufficient decrease (Armijo) condition only."""
        values = self._values
        ls = self.line_search_options
        current = values.point
        if float(np.linalg.norm(direction)) < self.options.abs_tol:
            return current, values.cost_value, SolverStatus.CONVERGED
        gradstep = float(values.gradient @ direction)
        if gradstep >= 0.0:
            _log.warning("%g not valid. Reverted to gradient", gradstep)
            direction = -values.gradient
            gradstep = -float(direction @ direction)

        f = self.data.cost_function
        alpha = ls.initial_step
        next_point = self._project(current + alpha * direction)
        next_value = float(f(next_point))
        alpha = min(1.0, 1.0 / float(np.linalg.norm(direction)))
        iterations = 0
        while (
            next_value
            >= values.cost_value + ls.sufficient_decrease_coefficient * alpha * gradstep
            and iterations < ls.max_iter
        ):
            iterations += 1
            alpha *= ls.step_size_decrement_factor
            next_point = self._project(current + alpha * direction)
            next_value = float(f(next_point))
        status = (
            SolverStatus.CONVERGED
            if iterations < ls.max_iter
            else SolverStatus.NO_SUFFICIENT_DECREASE
        )
        return next_point, next_value, status

    def _project(self, point: np.ndarray) -> np.ndarray:
        result = np.array(point, dtype=float)
        if result.size == 2:
            avg = min(1.0, result[0] + result[1])
            jump = result[0] - result[1]
            result = np.array([(avg + jump) / 2.0, (avg - jump) / 2.0])
        lower, upper = self.data.lower_bounds, self.data.upper_bounds
        if lower and upper:
            result = np.clip(result, lower[: result.size], upper[: result.size])
        return result