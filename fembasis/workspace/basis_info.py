"""
The `fembasis.workspace.basis_info` module contains `BasisInfo`, a reusable
buffer bundle that evaluates shape functions, Jacobian, inverse Jacobian,
determinant and gradient operator of one basis in a single pass, overwriting its
arrays in place. It is meant for hot assembly loops: create one per basis and
precision, and call `evaluate()` for every element and quadrature point.

A workspace is mutable scratch space and must not be shared between threads.
"""

import logging

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from fembasis.config import DEFAULT_SETTINGS, Settings
from fembasis.elements.element import Basis, DimensionMismatchError, as_nodal_array
from fembasis.geometry import mapping as geometry

__all__ = ["BasisInfo", "create_workspace", "evaluate", "gradient_of_field"]


def __dir__() -> list[str]:
    return __all__


logger = logging.getLogger(__name__)


class BasisInfo:
    """Cached evaluation of a basis at one parametric point of one element.

    Attributes:
        basis (Basis): the basis being evaluated.
        dtype (np.dtype): the precision of every buffer.
        N (NDArray): shape function values, shape `(1, n)`.
        dN (NDArray): parametric derivatives, shape `(dim, n)`.
        grad (NDArray): physical gradient operator `invJ @ dN`, shape `(dim, n)`.
            Only updated for square Jacobians; for curves and surfaces it keeps
            whatever it held before.
        J (NDArray): Jacobian, shape `(dim, physical dimension)`.
        invJ (NDArray): inverse Jacobian. Meaningful only when `J` is square.
        detJ: `det(J)`, or the length/area element for curves and surfaces.
    """

    def __init__(
        self,
        basis: Basis,
        dtype: DTypeLike | None = None,
        settings: Settings = DEFAULT_SETTINGS,
    ):
        dim, nbasis = basis.size()
        self.basis = basis
        self.settings = settings
        self.dtype = np.dtype(settings.dtype if dtype is None else dtype)
        self._rtol = settings.singular_tolerance(self.dtype)

        self.N = np.zeros((1, nbasis), dtype=self.dtype)
        self.dN = np.zeros((dim, nbasis), dtype=self.dtype)
        self.grad = np.zeros((dim, nbasis), dtype=self.dtype)
        self.J = np.zeros((dim, dim), dtype=self.dtype)
        self.invJ = np.zeros((dim, dim), dtype=self.dtype)
        self.detJ = self.dtype.type(0)

    def __len__(self) -> int:
        return self.basis.node_count()

    def size(self) -> tuple[int, int]:
        return self.basis.size()

    def __repr__(self) -> str:
        return (
            f"BasisInfo({self.basis!r}, dtype={self.dtype.name},"
            f" J.shape={self.J.shape}, detJ={self.detJ!r})"
        )

    def evaluate(self, X: ArrayLike, xi: ArrayLike) -> "BasisInfo":
        """
        Evaluates the basis, Jacobian, inverse Jacobian, determinant and gradient
        operator for the element with nodal coordinates `X` at the parametric
        point `xi`.

        Args:
            X (ArrayLike): nodal coordinates, one point per node.
            xi (ArrayLike): the parametric point.

        Raises:
            DimensionMismatchError: if `xi` or `X` have the wrong size.
            SingularGeometryError: if a square Jacobian is singular.
            UnsupportedGeometryError: if the physical dimension of `X` cannot be
                paired with the parametric dimension of the basis.

        On either geometry error `N`, `dN` and `J` already hold the new element
        and point, while `grad` and `detJ` keep their previous values, and so
        does `invJ` unless the physical dimension changed.
        The workspace is usable again after the next successful `evaluate()`.

        Returns:
            BasisInfo: `self`, updated in place.
        """
        X = geometry.as_coordinate_array(self.basis, X, self.dtype)

        self.basis.evaluate_values(self.N, xi)
        self.basis.evaluate_derivatives(self.dN, xi)

        dim1 = self.dN.shape[0]
        dim2 = X.shape[1]
        dims = (dim1, dim2)
        if self.J.shape != dims:
            logger.debug(
                "%r: physical dimension changed, reallocating J %s -> %s",
                self.basis,
                self.J.shape,
                dims,
            )
            self.J = np.zeros(dims, dtype=self.dtype)
            self.invJ = np.zeros((dim2, dim1), dtype=self.dtype)

        np.matmul(self.dN, X, out=self.J)

        if dims == (3, 3):
            detJ = geometry.inverse_3x3(self.J, self.invJ, self._rtol, xi)
            np.matmul(self.invJ, self.dN, out=self.grad)
        elif dims == (2, 2):
            detJ = geometry.inverse_2x2(self.J, self.invJ, self._rtol, xi)
            np.matmul(self.invJ, self.dN, out=self.grad)
        elif dims == (1, 1):
            detJ = geometry.inverse_1x1(self.J, self.invJ, self._rtol, xi)
            np.matmul(self.invJ, self.dN, out=self.grad)
        elif dim1 == 1 and dim2 > 1:  # curve
            detJ = self.dtype.type(np.linalg.norm(self.J))
        elif dims == (2, 3):  # surface
            detJ = self.dtype.type(np.linalg.norm(np.cross(self.J[0], self.J[1])))
        else:
            raise geometry.UnsupportedGeometryError(dims)

        self.detJ = detJ
        return self

    def field_grad(self, gradu: NDArray, u: ArrayLike) -> NDArray:
        """
        Writes the physical gradient of the field with nodal values `u` into
        `gradu`, with `gradu[i, j] = du_i / dx_j`. For a scalar field `gradu`
        is the gradient vector.

        The geometry is not recomputed: `evaluate()` must have been called with
        the element and point of interest, on a square Jacobian. Otherwise the
        result is silently computed from stale data.

        Args:
            gradu (NDArray): a floating-point buffer of shape `(c, dim)` for a
                field with `c` components, or `(dim,)` for a scalar field. Integer
                buffers are rejected.
            u (ArrayLike): nodal values, a scalar or an equal-length tuple per node.

        Raises:
            DimensionMismatchError: if `u` does not have one entry per node, or
                `gradu` has the wrong shape or a dtype that cannot hold the result.

        Returns:
            NDArray: `gradu`.
        """
        u = as_nodal_array(self.basis, u, "u", self.dtype)
        dim = self.grad.shape[0]
        expected = (dim,) if u.ndim == 1 else (u.shape[1], dim)
        if u.ndim > 2 or np.shape(gradu) != expected:
            raise DimensionMismatchError(
                f"gradu must have shape {expected} for u of shape {u.shape},"
                f" got {np.shape(gradu)}"
            )
        if not isinstance(gradu, np.ndarray) or not np.can_cast(
            self.dtype, gradu.dtype, "same_kind"
        ):
            raise DimensionMismatchError(
                f"gradu must be a floating-point array to hold the {self.dtype}"
                f" result, got {getattr(gradu, 'dtype', type(gradu).__name__)}"
            )
        np.matmul(u.T, self.grad.T, out=gradu)
        return gradu


def create_workspace(basis: Basis, dtype: DTypeLike | None = None) -> BasisInfo:
    """Creates a workspace for `basis` with buffers of the given precision."""
    return BasisInfo(basis, dtype)


def evaluate(workspace: BasisInfo, X: ArrayLike, xi: ArrayLike) -> BasisInfo:
    """Same as `workspace.evaluate(X, xi)`."""
    return workspace.evaluate(X, xi)


def gradient_of_field(workspace: BasisInfo, gradu: NDArray, u: ArrayLike) -> NDArray:
    """Same as `workspace.field_grad(gradu, u)`."""
    return workspace.field_grad(gradu, u)
