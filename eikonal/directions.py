"""Rules that choose the descent direction of the line-search optimiser."""

from __future__ import annotations

import copy
import math
import sys
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from .options import OptimizationCurrentValues

_SMALL = math.sqrt(sys.float_info.epsilon)
_BOUNDARY_EPS = 100.0 * sys.float_info.epsilon


def _norm(v: np.ndarray) -> float:
    return float(np.linalg.norm(v))


class DescentDirection(ABC):
    """Callable that maps the current optimiser state to a descent direction."""

    @abstractmethod
    def __call__(self, values: OptimizationCurrentValues) -> np.ndarray:
        """Return a descent direction for ``values``."""

    def reset(self) -> None:
        """Forget any state kept between calls."""

    def clone(self) -> "DescentDirection":
        """An independent copy of this rule, state included."""
        return copy.deepcopy(self)


class GradientDirection(DescentDirection):
    """Steepest descent: minus the gradient."""

    def __call__(self, values: OptimizationCurrentValues) -> np.ndarray:
        return -np.asarray(values.gradient, dtype=float)


class NewtonDirection(DescentDirection):
    """Newton step restricted to the feasible set of the local problem.

    With one unknown the feasible set is [0, 1]; with two it is the triangle
    lambda_0 >= 0, lambda_1 >= 0, lambda_0 + lambda_1 <= 1.
    """

    def __call__(self, values: OptimizationCurrentValues) -> np.ndarray:
        point = np.asarray(values.point, dtype=float)
        gradient = np.asarray(values.gradient, dtype=float)
        hessian = np.asarray(values.hessian, dtype=float)
        if point.size == 1:
            return self._segment(point, gradient, hessian)
        return self._triangle(point, gradient, hessian)

    @staticmethod
    def _segment(point, gradient, hessian) -> np.ndarray:
        active = (point[0] == 0.0 and gradient[0] > 0) or (
            point[0] == 1.0 and gradient[0] < 0
        )
        if active:
            return np.zeros_like(point)
        return -np.linalg.inv(hessian) @ gradient

    @staticmethod
    def _triangle(point, gradient, hessian) -> np.ndarray:
        constrained = [
            bool(p == 0.0 and g > 0) for p, g in zip(point, gradient)
        ]
        constrained.append(
            bool(
                abs(point[0] + point[1] - 1.0) <= _BOUNDARY_EPS
                and gradient[0] + gradient[1] <= 0.0
            )
        )
        if not any(constrained):
            return -np.linalg.inv(hessian) @ gradient

        at_corner_10 = (
            point[0] == 1.0
            and point[1] == 0.0
            and gradient[1] - gradient[0] >= 0.0
            and gradient[0] <= 0.0
        )
        at_corner_01 = (
            point[0] == 0.0
            and point[1] == 1.0
            and gradient[1] - gradient[0] <= 0.0
            and gradient[1] <= 0.0
        )
        if (constrained[0] and constrained[1]) or at_corner_10 or at_corner_01:
            # the gradient pushes out of the feasible set
            return np.zeros_like(point)

        inverse = np.linalg.inv(hessian)
        if constrained[0]:
            inverse[0, :] = 0.0
            inverse[:, 0] = 0.0
        elif constrained[1]:
            inverse[1, :] = 0.0
            inverse[:, 1] = 0.0
        else:
            n = point.size
            projector = np.eye(n) - 0.5 * np.ones((n, n))
            inverse = projector @ inverse @ projector
        return -inverse @ gradient


class _Memory(DescentDirection):
    """Shared state for rules that look at the previous iterate."""

    def __init__(self) -> None:
        self._first_time = True
        self._previous_point: Optional[np.ndarray] = None
        self._previous_gradient: Optional[np.ndarray] = None

    def reset(self) -> None:
        self._first_time = True

    def _remember(self, point: np.ndarray, gradient: np.ndarray) -> None:
        self._previous_point = point.copy()
        self._previous_gradient = gradient.copy()

    @staticmethod
    def _read(values: OptimizationCurrentValues):
        return (
            np.array(values.point, dtype=float),
            np.array(values.gradient, dtype=float),
        )


class BFGSDirection(_Memory):
    """Classic BFGS quasi-Newton update of an approximate Hessian."""

    def __init__(self) -> None:
        super().__init__()
        self._h: Optional[np.ndarray] = None

    def reset(self) -> None:
        """Start again with a gradient step on the next call."""
        super().reset()

    def __call__(self, values: OptimizationCurrentValues) -> np.ndarray:
        point, g = self._read(values)
        if self._first_time:
            self._h = np.eye(point.size)
            self._first_time = False
            self._remember(point, g)
            return -g

        yk = g - self._previous_gradient
        sk = point - self._previous_point
        yks = float(yk @ sk)
        # keep the old approximation unless the update stays positive definite
        if yks > _SMALL * _norm(sk) * _norm(yk):
            hs = self._h @ sk
            self._h = self._h + np.outer(yk, yk) / yks - np.outer(hs, hs) / float(sk @ hs)
        self._remember(point, g)
        return np.linalg.solve(self._h, -g)


class BFGSIDirection(_Memory):
    """BFGS updating the approximate inverse of the Hessian directly."""

    def __init__(self) -> None:
        super().__init__()
        self._h: Optional[np.ndarray] = None

    def reset(self) -> None:
        """Start again with a gradient step on the next call."""
        super().reset()

    def __call__(self, values: OptimizationCurrentValues) -> np.ndarray:
        point, g = self._read(values)
        if self._first_time:
            self._h = np.eye(point.size)
            self._first_time = False
            self._remember(point, g)
            return -g

        yk = g - self._previous_gradient
        sk = point - self._previous_point
        yks = float(yk @ sk)
        if yks > _SMALL * _norm(sk) * _norm(yk):
            h = self._h
            self._h = (
                h
                + np.outer(sk, sk) * (yks + float(yk @ h @ yk)) / (yks * yks)
                - (np.outer(h @ yk, sk) + np.outer(sk, yk @ h)) / yks
            )
        self._remember(point, g)
        return -self._h @ g


class BBDirection(_Memory):
    """Barzilai-Borwein step, averaging the two classic step lengths."""

    def reset(self) -> None:
        """Start again with a gradient step on the next call."""
        super().reset()

    def __call__(self, values: OptimizationCurrentValues) -> np.ndarray:
        point, g = self._read(values)
        if self._first_time:
            self._first_time = False
            self._remember(point, g)
            return -g

        yk = g - self._previous_gradient
        sk = point - self._previous_point
        yks = float(yk @ sk)
        ykk = float(yk @ yk)
        self._remember(point, g)
        if yks > _SMALL * _norm(sk) * _norm(yk) and ykk > _SMALL:
            return -0.5 * (yks / ykk + float(sk @ sk) / yks) * g
        return -g


class CGDirection(_Memory):
    """Non-linear conjugate gradient with the Polak-Ribiere formula."""

    def __init__(self) -> None:
        super().__init__()
        self._previous_direction: Optional[np.ndarray] = None

    def reset(self) -> None:
        """Start again with a gradient step on the next call."""
        super().reset()

    def __call__(self, values: OptimizationCurrentValues) -> np.ndarray:
        point, gk1 = self._read(values)
        if self._first_time:
            self._first_time = False
            direction = -gk1
        else:
            gk = self._previous_gradient
            dk = self._previous_direction
            beta = float(gk1 @ (gk1 - gk)) / float(gk @ gk)
            direction = -gk1 + beta * dk
            if float(direction @ gk1) > 0:
                # not a descent direction: fall back to the gradient
                direction = -gk1
        self._previous_direction = direction
        self._remember(point, gk1)
        return direction.copy()