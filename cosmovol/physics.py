"""Physical constants, cosmology helpers, multipole terms and a random generator."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterator, Optional

EMPTY_FLAG = -1
BH_OPENING = 0.7

# Physical and astrophysical constants in cgs units.
G_GRAVITY = 6.672e-8
HUBBLE = 3.2407789e-18  # h / s
HUBBLE_TIME = 3.09e17  # s / h

_SECONDS_PER_YEAR = 31536000
_LITTLE_H = 0.73


class Ran1:
    """Minimal-standard generator with Bays-Durham shuffle, uniform in (0, 1)."""

    _IA = 16807
    _IM = 2147483647
    _AM = 1.0 / _IM
    _IQ = 127773
    _IR = 2836
    _NTAB = 32
    _NDIV = 1 + (_IM - 1) // _NTAB
    _RNMX = 1.0 - 1.2e-7

    def __init__(self, seed: int) -> None:
        self._idum = int(seed)
        self._iy = 0
        self._iv = [0] * self._NTAB

    def _step(self, idum: int) -> int:
        k = idum // self._IQ
        idum = self._IA * (idum - k * self._IQ) - self._IR * k
        if idum < 0:
            idum += self._IM
        return idum

    def next(self) -> float:
        """Return the next deviate."""
        if self._idum <= 0 or not self._iy:
            self._idum = 1 if -self._idum < 1 else -self._idum
            for j in range(self._NTAB + 7, -1, -1):
                self._idum = self._step(self._idum)
                if j < self._NTAB:
                    self._iv[j] = self._idum
            self._iy = self._iv[0]
        self._idum = self._step(self._idum)
        j = self._iy // self._NDIV
        self._iy = self._iv[j]
        self._iv[j] = self._idum
        return min(self._AM * self._iy, self._RNMX)

    def __iter__(self) -> Iterator[float]:
        return self

    def __next__(self) -> float:
        return self.next()


def mean_molecular_weight(x: float, y: float, z: float) -> float:
    """Mean molecular weight of a fully ionised gas with mass fractions X, Y, Z."""
    return 1.0 / (2.0 * x + 0.75 * y + 0.5 * z)


def cosmic_time(redshift: float) -> float:
    """Age of an Einstein-de Sitter universe at ``redshift``, in years."""
    age_now = (2.0 / 3.0) * (HUBBLE_TIME / _SECONDS_PER_YEAR) / _LITTLE_H
    return age_now / (1.0 + redshift) ** 1.5


def virial_criterion(omega_matter: float, redshift: float, g_internal_units: float) -> float:
    """Virial overdensity times the critical density at ``redshift``."""
    ez_square = omega_matter * (1.0 + redshift) ** 3 + (1.0 - omega_matter)
    omega_z = omega_matter * (1.0 + redshift) ** 3 / ez_square
    x = omega_z - 1.0
    delta = 18.0 * math.pi ** 2 + 82.0 * x - 39.0 * x * x
    rho_crit = (3.0 / (8.0 * math.pi * g_internal_units)) * 10000 * _LITTLE_H ** 2 * ez_square
    return delta * rho_crit


def linking_length(b_link: float, box_size: float, npart_total: int) -> float:
    """Friends-of-friends linking length for a mean interparticle spacing."""
    return b_link * box_size / (1.0 * npart_total) ** (1.0 / 3.0)


def quadrupole_sum(xi: float, yi: float, zi: float,
                   x: float, y: float, z: float, r: float, r5: float) -> float:
    """Quadrupole term of the potential of a mass at (xi, yi, zi) seen at (x, y, z)."""
    ri2 = xi * xi + yi * yi + zi * zi
    qxx = 3.0 * xi * xi - ri2
    qyy = 3.0 * yi * yi - ri2
    qzz = 3.0 * zi * zi - ri2
    qxy = 3.0 * xi * yi
    qxz = 3.0 * xi * zi
    qyz = 3.0 * yi * zi

    rxx = 3.0 * x * x - r * r
    ryy = 3.0 * y * y - r * r
    rzz = 3.0 * z * z - r * r
    rxy = 3.0 * x * y
    rxz = 3.0 * x * z
    ryz = 3.0 * y * z

    total = (qxx * rxx + qyy * ryy + qzz * rzz
             + 2.0 * (qxy * rxy + qxz * rxz + qyz * ryz))
    return total / (6.0 * r5)


def dipole_sum(xi: float, yi: float, zi: float,
               x: float, y: float, z: float, r3: float) -> float:
    """Dipole term of the potential."""
    return (xi * x + yi * y + zi * z) / r3


def grav_soft_spline(x: float, h: float) -> float:
    """Spline-softened gravitational potential kernel at distance ``x``."""
    u = x / h
    if u < 0:
        raise ValueError("distance must not be negative")
    if u < 0.5:
        kern = (16.0 / 3.0) * u * u - (48.0 / 5.0) * u ** 4 + (32.0 / 5.0) * u ** 5 - 14.0 / 5.0
    elif u < 1.0:
        kern = (1.0 / (15.0 * u) + (32.0 / 3.0) * u * u - 16.0 * u ** 3
                + (48.0 / 5.0) * u ** 4 - (32.0 / 15.0) * u ** 5 - 16.0 / 5.0)
    else:
        kern = -1.0 / u
    return -kern


def seconds_of_year(moment: Optional[datetime] = None) -> int:
    """Seconds elapsed since the start of the year of ``moment`` (local now by default)."""
    if moment is None:
        moment = datetime.now()
    tm = moment.timetuple()
    return tm.tm_sec + tm.tm_min * 60 + tm.tm_hour * 3600 + (tm.tm_yday - 1) * 86400