"""
The `fembasis.elements` package contains the basis descriptor contract and a
catalogue of nodal Lagrange bases.
"""

from .element import (
    Basis,
    DimensionMismatchError,
    as_nodal_array,
    shape_derivatives,
    shape_values,
)
from .lagrange import (
    CATALOGUE,
    Hex8,
    LagrangeBasis,
    Quad4,
    Quad8,
    Quad9,
    Seg2,
    Seg3,
    Tet4,
    Tet10,
    Tri3,
    Tri6,
    Wedge6,
)

__all__ = [
    "Basis",
    "DimensionMismatchError",
    "as_nodal_array",
    "shape_values",
    "shape_derivatives",
    "LagrangeBasis",
    "CATALOGUE",
    "Seg2",
    "Seg3",
    "Tri3",
    "Tri6",
    "Quad4",
    "Quad8",
    "Quad9",
    "Tet4",
    "Tet10",
    "Wedge6",
    "Hex8",
]
