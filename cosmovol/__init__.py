"""Delaunay particle volumes and halo domain assignment in periodic boxes."""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "decomposition",
    "geometry",
    "halo_domains",
    "params",
    "physics",
    "volumes",
]