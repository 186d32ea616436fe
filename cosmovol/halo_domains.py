"""Assigning unclustered particles to the domain of the nearest halo."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from os import PathLike
from typing import Iterable, Optional, Sequence, Union

from .geometry import periodic_distance

Vector = Sequence[float]
PathType = Union[str, PathLike]

_COUNT = struct.Struct("=i")
_RECORD = struct.Struct("=5f3i")


@dataclass
class Halo:
    """A halo from the group catalogue and the particles of its domain."""

    id: int
    pos: tuple[float, float, float]
    rvir: float
    mass: float = 0.0
    mvir: float = 0.0
    members: list[int] = field(default_factory=list)
    domain_particles: list[int] = field(default_factory=list)


def split_ranges(n_unclustered: int, n_clustered: int,
                 n_processes: int) -> list[tuple[int, int]]:
    """Share the unclustered particles out in contiguous ranges.

    Unclustered particles follow the ``n_clustered`` clustered ones. Every
    process gets the same share; the last one also takes the remainder.
    Each range is ``(start, end)`` with ``end`` excluded.
    """
    if n_processes < 1:
        raise ValueError("n_processes must be at least 1")
    if n_unclustered < 0 or n_clustered < 0:
        raise ValueError("particle counts must not be negative")
    share = n_unclustered // n_processes
    starts = [n_clustered + i * share for i in range(n_processes)]
    ranges = [(start, start + share) for start in starts]
    last_start = ranges[-1][0]
    ranges[-1] = (last_start, n_clustered + n_unclustered)
    return ranges


def nearest_halo(pos: Vector, halos: Sequence[Halo], box_size: float) -> int:
    """Index of the halo closest to ``pos`` in units of its virial radius.

    Distances allow for periodic boundaries. On a tie the first halo wins;
    halos with a non-positive radius are never chosen.
    """
    best: Optional[int] = None
    best_distance = 1_000_000 * box_size
    for index, halo in enumerate(halos):
        if halo.rvir <= 0:
            continue
        scaled = periodic_distance(halo.pos, pos, box_size) / halo.rvir
        if scaled < best_distance and not math.isnan(scaled):
            best, best_distance = index, scaled
    if best is None:
        raise ValueError("no halo can take the particle")
    return best


def assign_domains(positions: Iterable[Vector], halos: Sequence[Halo],
                   box_size: float, ids: Optional[Sequence[int]] = None) -> list[int]:
    """Add every particle to the domain of its nearest halo.

    ``ids`` gives the identifier recorded for each particle (its position in
    ``positions`` by default). Returns the chosen halo index per particle.
    """
    chosen = []
    for index, pos in enumerate(positions):
        halo_index = nearest_halo(pos, halos, box_size)
        particle_id = index if ids is None else ids[index]
        halos[halo_index].domain_particles.append(int(particle_id))
        chosen.append(halo_index)
    if ids is not None and len(ids) != len(chosen):
        raise ValueError("ids and positions must have the same length")
    return chosen


def write_rescue(path: PathType, halos: Sequence[Halo]) -> None:
    """Write halos and their particle lists to a binary backup file.

    The file holds the halo count, then per halo a record of mass, position,
    virial radius, member count, domain count and id, followed by the member
    ids and the domain particle ids.
    """
    with open(path, "wb") as handle:
        handle.write(_COUNT.pack(len(halos)))
        for halo in halos:
            handle.write(_RECORD.pack(
                halo.mass, *halo.pos, halo.rvir,
                len(halo.members), len(halo.domain_particles), halo.id,
            ))
            if halo.members:
                handle.write(struct.pack(f"={len(halo.members)}i", *halo.members))
            if halo.domain_particles:
                handle.write(struct.pack(f"={len(halo.domain_particles)}i",
                                         *halo.domain_particles))


def write_halo_catalog(path: PathType, halos: Sequence[Halo], particle_mass: float) -> None:
    """Write one text line per halo: position, Mvir, Rvir, domain mass, domain count."""
    with open(path, "w", encoding="utf-8") as handle:
        for halo in halos:
            n_domain = len(halo.domain_particles)
            values = (*halo.pos, halo.mvir, halo.rvir, n_domain * particle_mass)
            handle.write(" ".join(f"{v:16.8f}" for v in values) + f" {n_domain:12d}\n")