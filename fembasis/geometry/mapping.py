"""
The `fembasis.geometry.mapping` module maps parametric derivatives to physical
space: the Jacobian of the isoparametric map, its closed-form inverse and
determinant, the length/area measure of manifold elements, and the physical
gradient operator.
"""

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from fembasis.config import DEFAULT_SETTINGS, Settings
from fembasis.elements.element import (
    Basis,
    DimensionMismatchError,
    as_nodal_array,
    shape_derivatives,
)

__all__ = [
    "GeometryError",
    "SingularGeometryError",
    "UnsupportedGeometryError",
    "as_coordinate_array",
    "jacobian",
    "invert",
    "inverse_1x1",
    "inverse_2x2",
    "inverse_3x3",
    "manifold_measure",
    "jacobian_determinant",
    "grad",
]


def __dir__() -> list[str]:
    return __all__


class GeometryError(Exception):
    """Base class of the errors raised for element geometries."""


class SingularGeometryError(GeometryError):
    """Raised when the Jacobian of a square mapping is singular, i.e. the element
    is degenerate (coincident nodes, collapsed edges) at the evaluation point.

    Args:
        det (float): the computed determinant.
        scale (float): the product of the row lengths of J, the largest value
            |det(J)| can take for those rows. The determinant was compared against
            it.
        xi (ArrayLike | None): the parametric point, if known.
    """

    def __init__(self, det: float, scale: float, xi: ArrayLike | None = None):
        where = (
            "" if xi is None else f" at parametric point {tuple(np.ravel(xi).tolist())}"
        )
        super().__init__(
            "Element geometry is degenerate!\n"
            + f"   det(J) = {det:e} with row-length product {scale:e}{where}"
        )
        self.det = det
        self.scale = scale
        self.xi = xi


class UnsupportedGeometryError(GeometryError):
    """Raised for a (parametric dimension, physical dimension) pairing that has no
    meaning for the requested quantity, e.g. a 3D basis with 2D coordinates.

    Args:
        dims (tuple[int, ...]): the shape of the offending Jacobian.
        what (str): the quantity that was requested.
    """

    def __init__(self, dims: tuple[int, ...], what: str = "the element geometry"):
        super().__init__(
            f"Cannot compute {what} for a Jacobian of shape {tuple(dims)}"
            " (parametric x physical dimension)."
        )
        self.dims = tuple(dims)


def as_coordinate_array(
    basis: Basis, X: ArrayLike, dtype: DTypeLike = None
) -> NDArray:
    """Converts nodal coordinates into an array of shape
    `(node_count(), physical dimension)`. Scalar coordinates are read as points
    on a line.

    Raises:
        DimensionMismatchError: if `X` does not hold one point per node.
    """
    X = as_nodal_array(basis, X, "X", float if dtype is None else dtype)
    if X.ndim == 1:
        return X[:, np.newaxis]
    if X.ndim != 2 or X.shape[1] == 0:
        raise DimensionMismatchError(
            f"X must be a sequence of points, got an array of shape {X.shape}"
        )
    return X


def jacobian(basis: Basis, X: ArrayLike, xi: ArrayLike) -> NDArray:
    """
    Calculates the Jacobian `J[i, j] = dX_j / dxi_i` of the map from parametric
    to physical coordinates at `xi`.

    Args:
        basis (Basis): the basis.
        X (ArrayLike): nodal coordinates, one point per node.
        xi (ArrayLike): the parametric point.

    Returns:
        NDArray: an array of shape `(parametric_dimension(), physical dimension)`.
    """
    dN = shape_derivatives(basis, xi)
    return dN @ as_coordinate_array(basis, X)


def _check_determinant(detJ, J: NDArray, rtol: float, xi):
    # |det(J)| never exceeds the product of the row lengths (Hadamard), and equals
    # it for orthogonal rows: the ratio only sees the angles between the rows
    scale = float(np.prod(np.linalg.norm(J, axis=1)))
    if not np.isfinite(detJ) or not scale > 0 or abs(detJ) <= rtol * scale:
        raise SingularGeometryError(float(detJ), scale, xi)


def inverse_1x1(J: NDArray, out: NDArray, rtol: float, xi=None):
    detJ = J[0, 0]
    _check_determinant(detJ, J, rtol, xi)
    out[0, 0] = 1.0 / detJ
    return detJ


def inverse_2x2(J: NDArray, out: NDArray, rtol: float, xi=None):
    (a, b), (c, d) = J
    detJ = a * d - b * c
    _check_determinant(detJ, J, rtol, xi)
    inv_det = 1.0 / detJ
    out[0, 0] = inv_det * d
    out[0, 1] = inv_det * -b
    out[1, 0] = inv_det * -c
    out[1, 1] = inv_det * a
    return detJ


def inverse_3x3(J: NDArray, out: NDArray, rtol: float, xi=None):
    """Writes the inverse of the 3x3 matrix `J` into `out` from its adjugate and
    returns `det(J)`. The 1x1 and 2x2 versions follow the same protocol.

    Raises:
        SingularGeometryError: if `|det(J)| <= rtol * |J[0]| * |J[1]| * |J[2]|`.
    """
    (a, b, c), (d, e, f), (g, h, i) = J
    # cofactor expansion along the first row
    detJ = a * (e * i - f * h) + b * (f * g - d * i) + c * (d * h - e * g)
    _check_determinant(detJ, J, rtol, xi)
    inv_det = 1.0 / detJ
    out[0, 0] = inv_det * (e * i - f * h)
    out[0, 1] = inv_det * (c * h - b * i)
    out[0, 2] = inv_det * (b * f - c * e)
    out[1, 0] = inv_det * (f * g - d * i)
    out[1, 1] = inv_det * (a * i - c * g)
    out[1, 2] = inv_det * (c * d - a * f)
    out[2, 0] = inv_det * (d * h - e * g)
    out[2, 1] = inv_det * (b * g - a * h)
    out[2, 2] = inv_det * (a * e - b * d)
    return detJ


_CLOSED_FORM_INVERSES = {1: inverse_1x1, 2: inverse_2x2, 3: inverse_3x3}


def invert(
    J: NDArray,
    out: NDArray | None = None,
    xi: ArrayLike | None = None,
    settings: Settings = DEFAULT_SETTINGS,
) -> tuple[NDArray, float]:
    """Inverts a 1x1, 2x2 or 3x3 Jacobian with closed-form (adjugate) formulas.

    Args:
        J (NDArray): the square Jacobian.
        out (NDArray | None, optional): a buffer of the shape of `J` to hold the
            inverse. A new array is allocated when None. Defaults to None.
        xi (ArrayLike | None, optional): the parametric point, only used to
            report errors. Defaults to None.
        settings (Settings, optional): the numerical settings. Defaults to
            `DEFAULT_SETTINGS`.

    Raises:
        UnsupportedGeometryError: if `J` is not 1x1, 2x2 or 3x3.
        SingularGeometryError: if `det(J)` is zero within tolerance; nothing is
            written to `out` in that case.

    Returns:
        tuple[NDArray, float]: `(invJ, detJ)`.
    """
    J = np.asarray(J)
    if (
        J.ndim != 2
        or J.shape[0] != J.shape[1]
        or J.shape[0] not in _CLOSED_FORM_INVERSES
    ):
        raise UnsupportedGeometryError(J.shape, "a closed-form inverse")
    if out is None:
        out = np.empty_like(J, dtype=np.result_type(J.dtype, float))
    detJ = _CLOSED_FORM_INVERSES[J.shape[0]](
        J, out, settings.singular_tolerance(out.dtype), xi
    )
    return out, detJ


def manifold_measure(J: NDArray) -> float:
    """The length (curves) or area (surfaces in 3D) element of a non-square
    Jacobian: `|J|` when `J` has a single row, `|J[0] x J[1]|` when it is 2x3.

    Raises:
        UnsupportedGeometryError: for any other shape.
    """
    dim1, dim2 = np.shape(J)
    if dim1 == 1 and dim2 > 1:
        return np.linalg.norm(J)
    if (dim1, dim2) == (2, 3):
        return np.linalg.norm(np.cross(J[0], J[1]))
    raise UnsupportedGeometryError((dim1, dim2), "a manifold measure")


def jacobian_determinant(
    basis: Basis,
    X: ArrayLike,
    xi: ArrayLike,
    settings: Settings = DEFAULT_SETTINGS,
) -> float:
    """
    Calculates the volume element of the map at `xi`: `det(J)` for square
    Jacobians, and the manifold measure (see `manifold_measure()`) for curves and
    surfaces embedded in a higher-dimensional space.

    Raises:
        SingularGeometryError: if a square Jacobian is singular.
        UnsupportedGeometryError: for unsupported dimension pairings.
    """
    J = jacobian(basis, X, xi)
    if J.shape[0] == J.shape[1]:
        return invert(J, xi=xi, settings=settings)[1]
    return manifold_measure(J)


def grad(
    basis: Basis,
    X: ArrayLike,
    xi: ArrayLike,
    settings: Settings = DEFAULT_SETTINGS,
) -> NDArray:
    """
    Calculates the physical gradient operator `G = inv(J) @ dN` at `xi`, where
    `G[i, k]` is the derivative of shape function `k` along physical axis `i`.

    Args:
        basis (Basis): the basis.
        X (ArrayLike): nodal coordinates, one point per node.
        xi (ArrayLike): the parametric point.
        settings (Settings, optional): the numerical settings. Defaults to
            `DEFAULT_SETTINGS`.

    Raises:
        SingularGeometryError: if the Jacobian is singular at `xi`.
        UnsupportedGeometryError: if the Jacobian is not square (manifold
            elements have no inverse map), or larger than 3x3.

    Returns:
        NDArray: an array of shape `(parametric_dimension(), node_count())`.
    """
    dN = shape_derivatives(basis, xi)
    J = dN @ as_coordinate_array(basis, X)
    if J.shape[0] != J.shape[1]:
        raise UnsupportedGeometryError(J.shape, "a gradient operator")
    invJ, _ = invert(J, xi=xi, settings=settings)
    return invJ @ dN
