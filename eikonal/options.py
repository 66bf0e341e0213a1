"""Option and data containers shared by the line-search optimiser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

import numpy as np

CostFunction = Callable[[np.ndarray], float]
GradientFunction = Callable[[np.ndarray], np.ndarray]
HessianFunction = Callable[[np.ndarray], np.ndarray]


def _empty_hessian(_x: np.ndarray) -> np.ndarray:
    """Default Hessian: an empty matrix."""
    return np.empty((0, 0))


@dataclass
class LineSearchOptions:
    """Options of the backtracking step."""

    sufficient_decrease_coefficient: float = 1.0e-2
    step_size_decrement_factor: float = 0.5
    second_wolfe_condition_factor: float = 0.9  # not used by the backtracking
    initial_step: float = 1.0
    max_iter: int = 40


@dataclass
class OptimizationOptions:
    """Options of the outer line-search iteration."""

    rel_tol: float = 1.0e-5
    abs_tol: float = 1.0e-5
    max_iter: int = 500


@dataclass
class OptimizationData:
    """Cost function, its derivatives and optional box bounds."""

    cost_function: Optional[CostFunction] = None
    gradient: Optional[GradientFunction] = None
    hessian: HessianFunction = _empty_hessian
    number_of_variables: int = 0
    bounded: bool = False
    lower_bounds: list[float] = field(default_factory=list)
    upper_bounds: list[float] = field(default_factory=list)

    def set_bounds(self, lower: Sequence[float], upper: Sequence[float]) -> None:
        """Install box bounds; both lists too short for the variables is an error."""
        lower = [float(v) for v in lower]
        upper = [float(v) for v in upper]
        if self.number_of_variables > len(lower) and self.number_of_variables > len(upper):
            raise ValueError("Wrong bound sizes")
        self.bounded = True
        self.lower_bounds = lower
        self.upper_bounds = upper


@dataclass
class OptimizationCurrentValues:
    """State of the optimiser at the current iterate."""

    cost_value: float = 0.0
    point: np.ndarray = field(default_factory=lambda: np.zeros(0))
    gradient: np.ndarray = field(default_factory=lambda: np.zeros(0))
    hessian: np.ndarray = field(default_factory=lambda: np.empty((0, 0)))
    bounded: bool = False
    lower_bounds: list[float] = field(default_factory=list)
    upper_bounds: list[float] = field(default_factory=list)