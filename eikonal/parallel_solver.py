"""Eikonal solver that recomputes the active nodes of a sweep concurrently."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Iterable, Optional

import numpy as np

from .mesh import MeshElement
from .solver import EikonalSolver


class ParallelEikonalSolver(EikonalSolver):
    """Same scheme as :class:`EikonalSolver`, with each sweep spread over threads."""

    def __init__(
        self,
        elements: Iterable[MeshElement],
        anisotropy: Optional[np.ndarray] = None,
        workers: Optional[int] = None,
    ) -> None:
        if workers is not None and workers < 1:
            raise ValueError("workers must be at least 1")
        self.workers = workers
        super().__init__(elements, anisotropy)

    def update(self) -> None:
        """Run the sweeps until the active list is empty."""
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            while self._active:
                snapshot = list(self._active)
                visit = partial(self._visit_entry, frozenset(snapshot))
                self._apply(pool.map(visit, snapshot))

    def _visit_entry(self, active: frozenset, node_id: int):
        added, settled = self._visit(node_id, active)
        return node_id, added, settled