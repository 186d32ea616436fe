"""Reading the units-and-parameters file."""

from __future__ import annotations

import re
from dataclasses import dataclass
from os import PathLike
from typing import Iterable, Iterator, Union

_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.IGNORECASE,
)


class ParameterError(ValueError):
    """A line of the parameter file is missing or malformed."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Error in parameter {name} in parameter file")
        self.name = name


@dataclass(frozen=True)
class Parameters:
    """Run parameters and internal units (cgs equivalents)."""

    minimum_members: int
    minimum_nsubstruct: int
    b_link: float
    ngb_max: int
    grav_soft: float
    flag_subfind: int
    nbins: int
    mass_bins: tuple[int, ...]
    rmin: float
    rmax: float
    niter: int
    omega_baryon: float
    omega_matter: float
    g_internal_units: float
    length_internal_units: float
    velocity_internal_units: float
    mass_internal_units: float
    time_internal_units: float
    energy_internal_units: float
    density_internal_units: float
    hubble_internal_units: float


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group()) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group()) if match else 0.0


class _Reader:
    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: Iterator[str] = iter(lines)

    def skip(self) -> None:
        next(self._lines, None)

    def value(self, name: str) -> str:
        line = next(self._lines, None)
        if line is None:
            raise ParameterError(name)
        tokens = line.split()
        if len(tokens) < 2:
            raise ParameterError(tokens[0] if tokens else name)
        return tokens[1]

    def int(self, name: str) -> int:
        return _atoi(self.value(name))

    def float(self, name: str) -> float:
        return _atof(self.value(name))


def parse_parameters(lines: Iterable[str]) -> Parameters:
    """Parse the lines of a parameter file.

    Each meaningful line holds a name and a value; separator lines between
    sections are skipped. Raises ParameterError on a missing or short line.
    """
    r = _Reader(lines)
    minimum_members = r.int("MINIMUM_MEMBERS")
    minimum_nsubstruct = r.int("MINIMUM_NSUBSTRUCT")
    b_link = r.float("b_Link")
    ngb_max = r.int("NGB_MAX")
    grav_soft = r.float("GRAV_SOFT")
    flag_subfind = r.int("FLAG_SUBFIND")
    r.skip()

    nbins = r.int("NBINS")
    if nbins < 0:
        raise ParameterError("NBINS")
    mass_bins = tuple(r.int(f"Mbins[{i}]") for i in range(nbins + 1))
    r.skip()

    rmin = r.float("RMIN")
    rmax = r.float("RMAX")
    niter = r.int("NITER")
    r.skip()

    omega_baryon = r.float("OMEGABARYON")
    omega_matter = r.float("OMEGA_MATTER")
    r.skip()

    units = [
        r.float(name)
        for name in (
            "G_INTERNAL_UNITS",
            "LENGHT_INTERNAL_UNITS",
            "VELOCITY_INTERNAL_UNITS",
            "MASS_INTERNAL_UNITS",
            "TIME_INTERNAL_UNITS",
            "ENERGY_INTERNAL_UNITS",
            "DENSITY_INTERNAL_UNITS",
            "HUBBLE_INTERNAL_UNITS",
        )
    ]
    r.skip()

    return Parameters(
        minimum_members,
        minimum_nsubstruct,
        b_link,
        ngb_max,
        grav_soft,
        flag_subfind,
        nbins,
        mass_bins,
        rmin,
        rmax,
        niter,
        omega_baryon,
        omega_matter,
        *units,
    )


def load_parameters(path: Union[str, PathLike]) -> Parameters:
    """Read and parse a parameter file from ``path``."""
    with open(path, encoding="utf-8") as handle:
        return parse_parameters(handle)