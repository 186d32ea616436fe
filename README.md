# cosmovol

Tools for estimating the local volume (and so the density) of every particle
in a periodic cosmological box, and for assigning field particles to the
domain of the nearest halo.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `cosmovol.decomposition`: the box is cut into `np1d**3` cubic cells, each
  padded on every side by a tenth of the cell size. `build_domains` returns
  the `Domain` objects, ordered with x fastest and z slowest.
  `Domain.contains` tests the padded region, `Domain.in_core` tests the cell
  itself, and `Domain.center` is the centre of the padded region.
  `assign_to_domains` returns one `Membership` (`box_index`,
  `particle_index`, `in_core`) for every domain a particle falls into,
  allowing for periodic wrapping. `gather_domain` collects the particles of
  one domain, moved to their periodic images nearest its centre.
- `cosmovol.volumes`: `delaunay_tetrahedra` builds a joggled 3-D Delaunay
  tessellation (at least five points are needed; failures raise
  `ValueError`). `cayley_menger_matrix` and `tetrahedron_volume` give a
  tetrahedron's volume from its Cayley–Menger determinant, with a negative
  determinant taken as zero. `tetrahedron_volumes` applies this to a list of
  vertex indices, and `particle_volumes` gives each point a quarter of the
  summed volume of its tetrahedra. `grid_points` produces a regular
  `n x n x n` lattice, and `gnuplot_tetrahedron` returns gnuplot commands
  drawing a tetrahedron's edges and labelling one vertex.
- `cosmovol.halo_domains`: a `Halo` holds an id, position, virial radius,
  masses and particle lists. `nearest_halo` picks the halo with the smallest
  periodic distance in units of its virial radius; `assign_domains` does this
  for a set of particles and appends each particle's id to the chosen halo's
  `domain_particles`. `split_ranges` shares unclustered particles out in
  contiguous ranges. `write_rescue` writes the halos and their particle lists
  to a binary file; `write_halo_catalog` writes one text line per halo.
- `cosmovol.geometry`: `distance`, `distance_eps`, `ngb_periodic`,
  `periodic_image`, `periodic_distance` and `sort_by_key`.
- `cosmovol.physics`: `mean_molecular_weight`, `cosmic_time`,
  `virial_criterion`, `linking_length`, `quadrupole_sum`, `dipole_sum`,
  `grav_soft_spline`, `seconds_of_year`, a few cgs constants, and `Ran1`, a
  minimal-standard generator with shuffle that can be iterated for uniform
  deviates in (0, 1).
- `cosmovol.params`: `load_parameters` and `parse_parameters` read a units
  and parameters file into a frozen `Parameters` object, raising
  `ParameterError` on a missing or short line.

## Library use

```python
from cosmovol.volumes import grid_points, particle_volumes

points = grid_points(5, 100.0)
volumes = particle_volumes(points)
print(volumes.sum())
```

```python
from cosmovol.cli import run

core_positions, volumes = run(positions, box_size=100.0, np1d=4)
```

`run` decomposes the box, tessellates each domain on its own, and gives each
particle the volume computed in the domain whose core holds it. It returns
the core positions and their volumes, in assignment order.

## Command line

```
cosmovol positions.txt --box-size 100 --np1d 4 --output-dir out
```

The positions file holds one `x y z` line per particle. The command prints
the cell size, overlap and number of domains per axis, then writes two files
to the output directory (default: the current one):

- `posiciones.dat`: the core positions as text, one `x y z` line each;
- `volumenes.dat`: the matching volumes as raw native-endian 64-bit floats.

On an unreadable or malformed input file it prints an error to standard
error and exits with status 1. `--np1d` defaults to 4.

## What it does not do

The package reads particle positions only from plain text files and halos
only from `Halo` objects built by the caller: it does not read simulation
snapshots or group catalogues in HDF5 or any other format. All work runs in
a single process; there is no distributed or parallel execution, and the
halo-domain tools have no command of their own.