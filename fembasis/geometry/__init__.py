"""
The `fembasis.geometry` package computes the Jacobian of the reference-to-physical
map and the quantities derived from it.
"""

from .mapping import (
    GeometryError,
    SingularGeometryError,
    UnsupportedGeometryError,
    grad,
    invert,
    jacobian,
    jacobian_determinant,
    manifold_measure,
)

__all__ = [
    "GeometryError",
    "SingularGeometryError",
    "UnsupportedGeometryError",
    "jacobian",
    "jacobian_determinant",
    "invert",
    "manifold_measure",
    "grad",
]
