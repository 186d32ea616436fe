"""Delaunay tessellation volumes assigned to particles."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from scipy.spatial import Delaunay, QhullError

_CM_SCALE = 288.0


def _as_tetrahedron(vertices: Sequence[Sequence[float]]) -> np.ndarray:
    verts = np.asarray(vertices, dtype=float)
    if verts.shape != (4, 3):
        raise ValueError("a tetrahedron needs exactly four 3-D vertices")
    return verts


def cayley_menger_matrix(vertices: Sequence[Sequence[float]]) -> np.ndarray:
    """Return the 5x5 Cayley-Menger matrix of a tetrahedron.

    The first row and column are bordered by ones (with a zero corner);
    the remaining entries are squared distances between the vertices.
    """
    verts = _as_tetrahedron(vertices)
    diff = verts[:, None, :] - verts[None, :, :]
    squared = np.einsum("ijk,ijk->ij", diff, diff)
    matrix = np.ones((5, 5))
    matrix[0, 0] = 0.0
    matrix[1:, 1:] = squared
    return matrix


def tetrahedron_volume(vertices: Sequence[Sequence[float]]) -> float:
    """Volume of a tetrahedron from its Cayley-Menger determinant.

    A negative determinant, which only arises from rounding on degenerate
    tetrahedra, is taken as zero volume.
    """
    det = float(np.linalg.det(cayley_menger_matrix(vertices)))
    return float(np.sqrt(max(det, 0.0) / _CM_SCALE))


def delaunay_tetrahedra(points: Sequence[Sequence[float]]) -> np.ndarray:
    """Indices of the vertices of each lower Delaunay tetrahedron.

    The triangulation is joggled so that every input point becomes a vertex.
    Raises ValueError when the points cannot be triangulated.
    """
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError("points must be an (N, 3) array")
    if len(pts) < 5:
        raise ValueError("at least five points are needed for a 3-D Delaunay tessellation")
    try:
        tessellation = Delaunay(pts, qhull_options="QJ")
    except QhullError as exc:
        raise ValueError(f"Error computing convex hull: {exc}") from exc
    return np.asarray(tessellation.simplices, dtype=int)


def tetrahedron_volumes(points: Sequence[Sequence[float]],
                        tetrahedra: Sequence[Sequence[int]]) -> np.ndarray:
    """Volume of every tetrahedron given by vertex indices into ``points``."""
    pts = np.asarray(points, dtype=float)
    tets = np.asarray(tetrahedra, dtype=int).reshape(-1, 4)
    return np.array([tetrahedron_volume(pts[tet]) for tet in tets], dtype=float)


def particle_volumes(points: Sequence[Sequence[float]]) -> np.ndarray:
    """Volume associated with each point: a quarter of its incident tetrahedra.

    Points that belong to no tetrahedron get zero volume.
    """
    pts = np.asarray(points, dtype=float)
    tets = delaunay_tetrahedra(pts)
    volumes = tetrahedron_volumes(pts, tets)
    totals = np.zeros(len(pts))
    np.add.at(totals, tets.ravel(), np.repeat(volumes, 4))
    counts = np.bincount(tets.ravel(), minlength=len(pts))
    return np.where(counts > 0, 0.25 * totals, 0.0)


def grid_points(n: int, extent: float = 100.0) -> np.ndarray:
    """Regular n x n x n lattice spanning ``[0, extent]`` on each axis.

    Points are ordered with x slowest and z fastest.
    """
    if n < 2:
        raise ValueError("a grid needs at least two points per side")
    axis = np.arange(n) * (extent / (n - 1))
    x, y, z = np.meshgrid(axis, axis, axis, indexing="ij")
    return np.stack([x.ravel(), y.ravel(), z.ravel()], axis=1)


_EDGES = ((0, 1), (0, 2), (0, 3), (1, 3), (1, 2), (2, 3))


def _fmt(point: np.ndarray) -> str:
    return ",".join(f"{c:f}" for c in point)


def gnuplot_tetrahedron(vertices: Sequence[Sequence[float]], mark: int) -> str:
    """Gnuplot commands drawing a tetrahedron's edges and labelling one vertex."""
    verts = _as_tetrahedron(vertices)
    if not 0 <= mark < 4:
        raise ValueError("mark must index one of the four vertices")
    lines = [
        f"set arrow from {_fmt(verts[a])} to {_fmt(verts[b])} nohead"
        for a, b in _EDGES
    ]
    lines.append(f"set label 'Here' at {_fmt(verts[mark])}")
    return "\n".join(lines) + "\n"