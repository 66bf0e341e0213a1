"""The registry of named descent-direction rules."""

from __future__ import annotations

from .directions import (
    BBDirection,
    BFGSDirection,
    BFGSIDirection,
    CGDirection,
    DescentDirection,
    GradientDirection,
    NewtonDirection,
)
from .factory import Factory

_FACTORY: Factory[DescentDirection] = Factory()

_BUILDERS = {
    "GradientDirection": GradientDirection,
    "BFGSDirection": BFGSDirection,
    "BFGSIDirection": BFGSIDirection,
    "BBDirection": BBDirection,
    "CGDirection": CGDirection,
    "NewtonDirection": NewtonDirection,
}


def load_directions() -> Factory[DescentDirection]:
    """Register every descent direction in the shared factory and return it."""
    for name, builder in _BUILDERS.items():
        if name not in _FACTORY:
            _FACTORY.add(name, builder)
    return _FACTORY