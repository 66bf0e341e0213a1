"""Simplex geometry and the local eikonal functional."""

from __future__ import annotations

from typing import Optional

import numpy as np


class SimplexData:
    """A triangle or tetrahedron whose last vertex is where u is sought.

    ``edges`` holds the edge vectors as columns and ``mm_matrix`` is
    ``edges.T @ anisotropy @ edges``.
    """

    def __init__(self, points, anisotropy: Optional[np.ndarray] = None) -> None:
        pts = np.array(points, dtype=float)
        if pts.ndim != 2 or pts.shape[1] not in (2, 3) or pts.shape[0] != pts.shape[1] + 1:
            raise ValueError("a simplex needs d+1 points of dimension d, with d 2 or 3")
        dim = pts.shape[1]
        m = np.eye(dim) if anisotropy is None else np.array(anisotropy, dtype=float)
        if m.shape != (dim, dim):
            raise ValueError(f"anisotropy matrix must be {dim}x{dim}")
        self.dimension = dim
        self.points = pts
        self.anisotropy = m
        edges = np.zeros((dim, dim))
        edges[:, 0] = pts[dim - 1] - pts[0]
        if dim == 3:
            edges[:, 1] = pts[dim - 1] - pts[1]
        edges[:, dim - 1] = pts[dim] - pts[dim - 1]
        self.edges = edges
        self.mm_matrix = edges.T @ m @ edges


class Phi:
    """The functional minimised over the barycentric coordinates lambda."""

    def __init__(self, simplex: SimplexData, values) -> None:
        vals = np.array(values, dtype=float).reshape(-1)
        dim = simplex.dimension
        if vals.size != dim:
            raise ValueError(f"expected {dim} values, got {vals.size}")
        self.simplex = simplex
        self.values = vals
        self.unknowns = dim - 1
        du = np.empty(dim)
        du[: self.unknowns] = vals[: self.unknowns] - vals[self.unknowns]
        du[self.unknowns] = vals[self.unknowns]
        self.du = du

    def _extend(self, lam) -> np.ndarray:
        lam = np.asarray(lam, dtype=float).reshape(-1)
        if lam.size != self.unknowns:
            raise ValueError(f"expected {self.unknowns} lambda values, got {lam.size}")
        return np.append(lam, 1.0)

    def norm(self, lam) -> float:
        """M-norm of the extended lambda vector."""
        ext = self._extend(lam)
        return float(np.sqrt(ext @ self.simplex.mm_matrix @ ext))

    def __call__(self, lam) -> float:
        ext = self._extend(lam)
        return float(ext @ self.du) + self.norm(lam)

    def gradient(self, lam) -> np.ndarray:
        ext = self._extend(lam)
        k = self.unknowns
        return self.du[:k] + self.simplex.mm_matrix[:k, :] @ ext / self.norm(lam)

    def hessian(self, lam) -> np.ndarray:
        ext = self._extend(lam)
        k = self.unknowns
        n = 1.0 / self.norm(lam)
        part = self.simplex.mm_matrix[:k, :] @ ext
        return n * self.simplex.mm_matrix[:k, :k] - n**3 * np.outer(part, part)