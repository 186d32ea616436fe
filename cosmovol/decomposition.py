"""Splitting a periodic box into overlapping cubic domains and assigning particles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .geometry import periodic_image

Vector = Sequence[float]

_OVERLAP_FRACTION = 0.1


@dataclass(frozen=True)
class Domain:
    """A cubic cell of the box, padded on every side by an overlap layer.

    ``lower``/``upper`` bound the padded region; ``core_lower``/``core_upper``
    bound the cell itself.
    """

    lower: tuple[float, float, float]
    upper: tuple[float, float, float]
    core_lower: tuple[float, float, float]
    core_upper: tuple[float, float, float]

    @property
    def center(self) -> tuple[float, float, float]:
        """Centre of the padded region."""
        return tuple(0.5 * (lo + hi) for lo, hi in zip(self.lower, self.upper))  # type: ignore[return-value]

    def contains(self, pos: Vector) -> bool:
        """True when ``pos`` lies in the padded region, bounds included."""
        return all(lo <= p <= hi for p, lo, hi in zip(pos, self.lower, self.upper))

    def in_core(self, pos: Vector) -> bool:
        """True when ``pos`` lies in the cell itself, bounds included."""
        return all(lo <= p <= hi for p, lo, hi in zip(pos, self.core_lower, self.core_upper))


@dataclass(frozen=True)
class Membership:
    """One particle's presence in one domain."""

    box_index: int
    particle_index: int
    in_core: bool


def build_domains(box_size: float, np1d: int) -> list[Domain]:
    """Cut the box into ``np1d**3`` cells, each padded by a tenth of its side.

    Domains are ordered with x fastest and z slowest, so the domain of cell
    ``(ix, iy, iz)`` is at index ``ix + iy*np1d + iz*np1d**2``.
    """
    if box_size <= 0:
        raise ValueError("box_size must be positive")
    if np1d < 1:
        raise ValueError("np1d must be at least 1")
    cellsize = box_size / np1d
    overlap = cellsize * _OVERLAP_FRACTION
    levels = [i * cellsize for i in range(np1d)]
    domains = []
    for z in levels:
        for y in levels:
            for x in levels:
                core_lower = (x, y, z)
                core_upper = (x + cellsize, y + cellsize, z + cellsize)
                domains.append(
                    Domain(
                        lower=tuple(c - overlap for c in core_lower),  # type: ignore[arg-type]
                        upper=tuple(c + overlap for c in core_upper),  # type: ignore[arg-type]
                        core_lower=core_lower,
                        core_upper=core_upper,
                    )
                )
    return domains


def assign_to_domains(positions: Iterable[Vector], domains: Sequence[Domain],
                      box_size: float, np1d: int) -> list[Membership]:
    """Find every domain each particle falls in, allowing for periodic wrapping.

    For each particle the 27 cells around its own cell are tried, in order
    of x offset, then y, then z. A particle is a member of a domain when its
    periodic image nearest the domain centre lies in the padded region; the
    membership is marked ``in_core`` when the unwrapped position lies in the
    cell itself.
    """
    if len(domains) != np1d ** 3:
        raise ValueError("domains must hold np1d**3 entries")
    cellsize = box_size / np1d
    memberships: list[Membership] = []
    for index, pos in enumerate(positions):
        pos = tuple(float(c) for c in pos)
        cell = [int(c / cellsize) for c in pos]
        for dx in (-1, 0, 1):
            ix = (cell[0] + dx + np1d) % np1d
            for dy in (-1, 0, 1):
                iy = (cell[1] + dy + np1d) % np1d
                for dz in (-1, 0, 1):
                    iz = (cell[2] + dz + np1d) % np1d
                    box = ix + iy * np1d + iz * np1d * np1d
                    domain = domains[box]
                    image = periodic_image(pos, domain.center, box_size)
                    if domain.contains(image):
                        memberships.append(
                            Membership(box, index, domain.in_core(pos))
                        )
    return memberships


def gather_domain(positions: Sequence[Vector], memberships: Sequence[Membership],
                  box_index: int, domain: Domain,
                  box_size: float) -> tuple[np.ndarray, list[int], np.ndarray]:
    """Collect the particles of one domain, moved to their images near its centre.

    Returns the shifted positions as an (N, 3) array, the index into
    ``memberships`` of each particle, and a boolean mask of core particles.
    """
    pts = np.asarray(positions, dtype=float)
    center = domain.center
    images = []
    origins = []
    core = []
    for m_index, member in enumerate(memberships):
        if member.box_index != box_index:
            continue
        images.append(periodic_image(pts[member.particle_index], center, box_size))
        origins.append(m_index)
        core.append(member.in_core)
    points = np.asarray(images, dtype=float).reshape(-1, 3)
    return points, origins, np.asarray(core, dtype=bool)