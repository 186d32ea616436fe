"""Command line entry: Delaunay volumes of particles in a periodic box."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from .decomposition import assign_to_domains, build_domains, gather_domain
from .volumes import particle_volumes


def run(positions: Sequence[Sequence[float]], box_size: float,
        np1d: int = 4) -> tuple[np.ndarray, np.ndarray]:
    """Compute the Delaunay volume of every particle.

    The box is split into ``np1d**3`` overlapping domains, each tessellated
    on its own; a particle takes its volume from the domain whose core holds
    it. Returns the core positions and their volumes, in assignment order.
    """
    pts = np.asarray(positions, dtype=float).reshape(-1, 3)
    domains = build_domains(box_size, np1d)
    memberships = assign_to_domains(pts, domains, box_size, np1d)
    volumes = np.zeros(len(memberships))

    for box_index, domain in enumerate(domains):
        points, origins, core = gather_domain(pts, memberships, box_index, domain, box_size)
        if len(points) == 0:
            continue
        domain_volumes = particle_volumes(points)
        for origin, is_core, volume in zip(origins, core, domain_volumes):
            if is_core:
                volumes[origin] = volume

    core_members = [i for i, m in enumerate(memberships) if m.in_core]
    core_positions = np.array(
        [pts[memberships[i].particle_index] for i in core_members], dtype=float
    ).reshape(-1, 3)
    return core_positions, volumes[core_members]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Read particle positions, compute volumes and write the result files."""
    parser = argparse.ArgumentParser(
        prog="cosmovol",
        description="Delaunay volume of every particle in a periodic box.",
    )
    parser.add_argument("positions", help="text file with one 'x y z' line per particle")
    parser.add_argument("--box-size", type=float, required=True, help="side of the periodic box")
    parser.add_argument("--np1d", type=int, default=4, help="domains along each axis")
    parser.add_argument("--output-dir", default=".", help="where the result files go")
    args = parser.parse_args(argv)

    try:
        positions = np.loadtxt(args.positions, ndmin=2)
        if positions.size == 0:
            positions = positions.reshape(0, 3)
        if positions.shape[1] != 3:
            raise ValueError("each line must hold three coordinates")
        cellsize = args.box_size / args.np1d if args.np1d else float("nan")
        print(f" \nCellsize = {cellsize:g}")
        print(f" overlap = {cellsize / 10.0:g}")
        print(f" Np1D = {args.np1d}\n")
        core_positions, volumes = run(positions, args.box_size, args.np1d)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    out = Path(args.output_dir)
    out.mkdir(parents=True, exist_ok=True)
    with open(out / "posiciones.dat", "w", encoding="utf-8") as handle:
        for x, y, z in core_positions:
            handle.write(f"{x:f} {y:f} {z:f}\n")
    print("Writing...")
    volumes.astype("=f8").tofile(out / "volumenes.dat")
    return 0


if __name__ == "__main__":
    sys.exit(main())