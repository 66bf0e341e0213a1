"""Iterative solver of the eikonal equation on a simplicial mesh."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Mapping, Optional

import numpy as np

from .local_problem import LocalProblemSolver
from .mesh import MeshElement, Node
from .simplex import SimplexData

INF = 10e7
EPSILON = 1e-6

_log = logging.getLogger(__name__)


class EikonalSolver:
    """Sweeps an active list of nodes until every local value settles.

    Source nodes start at zero and every other node at ``INF``; the
    neighbours of the sources form the first active list.
    """

    def __init__(
        self, elements: Iterable[MeshElement], anisotropy: Optional[np.ndarray] = None
    ) -> None:
        self.elements: list[MeshElement] = list(elements)
        if anisotropy is None and self.elements:
            anisotropy = np.eye(self.elements[0].dimension)
        self.anisotropy = None if anisotropy is None else np.array(anisotropy, dtype=float)
        self._nodes: dict[int, Node] = {}
        self._elements_of: dict[int, list[MeshElement]] = defaultdict(list)
        self._active: list[int] = []
        self._build_maps()
        self._initialize()

    @property
    def nodes(self) -> Mapping[int, Node]:
        """The mesh nodes keyed by id."""
        return dict(self._nodes)

    @property
    def active(self) -> tuple[int, ...]:
        """Ids of the nodes still waiting to settle."""
        return tuple(self._active)

    def update(self) -> None:
        """Run the sweeps until the active list is empty."""
        while self._active:
            active = frozenset(self._active)
            results = [
                (node_id, *self._visit(node_id, active)) for node_id in list(self._active)
            ]
            self._apply(results)

    def print_results(self) -> None:
        """Print the value of u at every node."""
        for node in self._nodes.values():
            print(f"Node {node.id}: u = {node.u:g}")

    def neighbours(self, node: Node) -> list[Node]:
        """Nodes sharing an element with ``node``, each once, in order of discovery."""
        seen: set[int] = set()
        result: list[Node] = []
        for element in self._elements_of.get(node.id, ()):
            for vertex in element.vertices:
                if vertex.id != node.id and vertex.id not in seen:
                    seen.add(vertex.id)
                    result.append(self._nodes[vertex.id])
        return result

    def _build_maps(self) -> None:
        for element in self.elements:
            for node in element.vertices:
                self._nodes[node.id] = node
                self._elements_of[node.id].append(element)

    def _initialize(self) -> None:
        for element in self.elements:
            for node in element.vertices:
                if node.is_source:
                    node.u = 0.0
                    for neighbour in self.neighbours(node):
                        if neighbour.id not in self._active and not neighbour.is_source:
                            self._active.append(neighbour.id)
                else:
                    node.u = INF

    def _visit(self, node_id: int, active: frozenset) -> tuple[list[int], bool]:
        """Recompute one active node; return the nodes it activates and whether it settled."""
        node = self._nodes[node_id]
        previous = node.u
        node.u = self._solve_local(node)
        if abs(previous - node.u) >= EPSILON:
            return [], False
        added: list[int] = []
        for neighbour in self.neighbours(node):
            if neighbour.id in active or neighbour.is_source:
                continue
            candidate = self._solve_local(neighbour)
            if neighbour.u > candidate:
                neighbour.u = candidate
                added.append(neighbour.id)
                _log.debug("node %d activated", neighbour.id)
        return added, True

    def _apply(self, results: Iterable[tuple[int, list[int], bool]]) -> None:
        results = list(results)
        settled = {node_id for node_id, _, done in results if done}
        added = [new_id for _, new_ids, _ in results for new_id in new_ids]
        self._active = [i for i in self._active if i not in settled] + added

    def _solve_local(self, node: Node) -> float:
        best = INF
        for element in self._elements_of.get(node.id, ()):
            dimension = element.dimension
            others = [self._nodes[v.id] for v in element.vertices if v.id != node.id]
            if len(others) < dimension:
                continue
            others = others[:dimension]
            points = [other.point for other in others] + [node.point]
            values = [other.u for other in others]
            try:
                with np.errstate(all="ignore"):
                    solution = LocalProblemSolver(
                        SimplexData(points, self.anisotropy), values
                    )()
            except np.linalg.LinAlgError:
                continue
            if solution.value < best:
                best = solution.value
        return best