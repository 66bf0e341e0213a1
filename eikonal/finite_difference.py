"""Gradients of scalar functions by finite differences."""

from __future__ import annotations

import math
import sys
from enum import Enum
from typing import Callable, Optional

import numpy as np

_SMALL = math.sqrt(sys.float_info.epsilon)


class FiniteDifferenceType(Enum):
    """Kind of difference quotient."""

    CENTERED = "centered"
    FORWARD = "forward"
    BACKWARD = "backward"


class GradientFiniteDifference:
    """Approximates the gradient of a function from R^n to R."""

    def __init__(
        self,
        function: Optional[Callable[[np.ndarray], float]] = None,
        kind: FiniteDifferenceType = FiniteDifferenceType.CENTERED,
    ) -> None:
        self.function = function
        self.kind = kind

    def __call__(self, x) -> np.ndarray:
        if self.function is None:
            raise ValueError("no function to differentiate")
        f = self.function
        x = np.asarray(x, dtype=float)
        h = max(_SMALL, float(np.linalg.norm(x)) * _SMALL)
        steps = np.eye(x.size) * h
        if self.kind is FiniteDifferenceType.CENTERED:
            return np.array([(f(x + e) - f(x - e)) / (2.0 * h) for e in steps])
        f0 = f(x)
        if self.kind is FiniteDifferenceType.FORWARD:
            return np.array([(f(x + e) - f0) / h for e in steps])
        return np.array([(f0 - f(x - e)) / h for e in steps])