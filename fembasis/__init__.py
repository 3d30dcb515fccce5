"""
`fembasis` evaluates finite-element bases on their reference elements: shape
functions, parametric derivatives, the Jacobian of the reference-to-physical map,
its inverse and determinant, and physical gradients of nodal fields.
"""

from .config import DEFAULT_SETTINGS, Settings
from .elements import (
    CATALOGUE,
    Basis,
    DimensionMismatchError,
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
    shape_derivatives,
    shape_values,
)
from .fields import field_grad, interpolate
from .geometry import (
    GeometryError,
    SingularGeometryError,
    UnsupportedGeometryError,
    grad,
    invert,
    jacobian,
    jacobian_determinant,
    manifold_measure,
)
from .workspace import BasisInfo, create_workspace, evaluate, gradient_of_field

__all__ = [
    "Settings",
    "DEFAULT_SETTINGS",
    "Basis",
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
    "shape_values",
    "shape_derivatives",
    "interpolate",
    "jacobian",
    "jacobian_determinant",
    "invert",
    "manifold_measure",
    "grad",
    "field_grad",
    "BasisInfo",
    "create_workspace",
    "evaluate",
    "gradient_of_field",
    "DimensionMismatchError",
    "GeometryError",
    "SingularGeometryError",
    "UnsupportedGeometryError",
]
