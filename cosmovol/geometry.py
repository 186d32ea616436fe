"""Distances, periodic wrapping and key sorting for particles in a cubic box."""

from __future__ import annotations

import math
from typing import Sequence

Vector = Sequence[float]


def distance(a: Vector, b: Vector) -> float:
    """Euclidean distance between two 3-D points."""
    return math.sqrt(sum((ai - bi) ** 2 for ai, bi in zip(a, b)))


def distance_eps(a: Vector, b: Vector, eps: float) -> float:
    """Euclidean distance softened by ``eps``."""
    squared = sum((ai - bi) ** 2 for ai, bi in zip(a, b))
    return math.sqrt(squared + eps * eps)


def ngb_periodic(x: float, box_size: float) -> float:
    """Wrap a coordinate difference into ``[-box_size/2, box_size/2]``."""
    if box_size <= 0:
        raise ValueError("box_size must be positive")
    half = 0.5 * box_size
    while x > half:
        x -= box_size
    while x < -half:
        x += box_size
    return x


def periodic_image(pos: Vector, center: Vector, box_size: float) -> tuple[float, float, float]:
    """Return the periodic image of ``pos`` nearest to ``center``.

    A coordinate is shifted by one box length when it lies more than half
    a box away from the matching coordinate of ``center``.
    """
    limit = (0.5 * box_size) ** 2
    image = []
    for p, c in zip(pos, center):
        if (p - c) ** 2 > limit:
            p = p + box_size if c > p else p - box_size
        image.append(p)
    return tuple(image)  # type: ignore[return-value]


def periodic_distance(a: Vector, b: Vector, box_size: float) -> float:
    """Distance between ``a`` and ``b`` with periodic boundary corrections."""
    direct = distance(a, b)
    if direct <= 0.5 * box_size:
        return direct
    return distance(a, periodic_image(b, a, box_size))


def sort_by_key(keys: Sequence, values: Sequence) -> tuple[list, list]:
    """Sort ``keys`` in increasing order, carrying ``values`` along."""
    if len(keys) != len(values):
        raise ValueError("keys and values must have the same length")
    pairs = sorted(zip(keys, values), key=lambda pair: pair[0])
    return [k for k, _ in pairs], [v for _, v in pairs]