import numpy as np
from numpy.typing import ArrayLike, NDArray

from fembasis.config import DEFAULT_SETTINGS, Settings
from fembasis.elements.element import (
    Basis,
    DimensionMismatchError,
    as_nodal_array,
    shape_values,
)
from fembasis.geometry import mapping as geometry


def _as_field_array(basis: Basis, T: ArrayLike, name: str) -> NDArray:
    T = as_nodal_array(basis, T, name)
    if T.ndim > 2:
        raise DimensionMismatchError(
            f"{name} must hold a scalar or a vector per node, got shape {T.shape}"
        )
    return T


def interpolate(basis: Basis, T: ArrayLike, xi: ArrayLike):
    """Interpolates the nodal field `T` at the parametric point `xi`, as
    `sum(N[k] * T[k])`.

    Args:
        basis (Basis): the basis.
        T (ArrayLike): nodal values, a scalar or an equal-length tuple per node.
        xi (ArrayLike): the parametric point.

    Raises:
        DimensionMismatchError: if `T` does not have one entry per node.

    Returns:
        A numpy scalar for scalar fields, or an array of shape `(c,)` for fields
        with `c` components.
    """
    N = shape_values(basis, xi)
    return np.tensordot(N[0], _as_field_array(basis, T, "T"), axes=1)[()]


def field_grad(
    basis: Basis,
    T: ArrayLike,
    X: ArrayLike,
    xi: ArrayLike,
    settings: Settings = DEFAULT_SETTINGS,
) -> NDArray:
    """
    Calculates the physical gradient of the field interpolated from `T` on the
    element with nodal coordinates `X`, at the parametric point `xi`.

    For a vector field the result is `out[i, j] = du_i / dx_j`: one row per
    field component, one column per physical direction. For a scalar field it is
    the gradient vector.

    Args:
        basis (Basis): the basis.
        T (ArrayLike): nodal values, a scalar or an equal-length tuple per node.
        X (ArrayLike): nodal coordinates.
        xi (ArrayLike): the parametric point.
        settings (Settings, optional): the numerical settings. Defaults to
            `DEFAULT_SETTINGS`.

    Raises:
        DimensionMismatchError: if `T` or `X` do not have one entry per node.
        SingularGeometryError: if the element is degenerate at `xi`.
        UnsupportedGeometryError: if the element is a manifold element.

    Returns:
        NDArray: an array of shape `(dim,)` for scalar fields, or `(c, dim)`.
    """
    G = geometry.grad(basis, X, xi, settings)
    return (G @ _as_field_array(basis, T, "T")).T
