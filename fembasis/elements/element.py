import abc
import warnings

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray


class DimensionMismatchError(ValueError):
    """Raised when an array does not have the length or shape that the basis
    expects, e.g. a parametric point of the wrong dimension or nodal data whose
    length differs from the number of nodes.
    """


class Basis(abc.ABC):
    """
    Describes one reference element variant: the number of nodes, the parametric
    dimension and the shape functions on the reference domain. Descriptors are
    stateless; positions and fields are handled by the caller as arrays of nodal
    values, ordered like `reference_coordinates()`.

    A basis is consumed only through `node_count()`, `parametric_dimension()`,
    `evaluate_values()` and `evaluate_derivatives()`.
    """

    def _dev_warn(self, message: str):
        """To be used by developers, only.

        This method is called by the base `Basis` class to warn the use of default
        (most likely unoptimized) strategies to compute certain values.

        For example, `Basis.evaluate_derivatives()` falls back on central
        differences of `evaluate_values()`, which is both slower and less accurate
        than an analytic derivative.

        This method can be overridden by the developer to suppress these warnings.

        Args:
            message (str): the message to show.
        """
        warnings.warn(f"Basis developer message: {message}")

    @abc.abstractmethod
    def node_count(self) -> int:
        """The number of nodes (and shape functions) of the basis."""
        pass

    @abc.abstractmethod
    def parametric_dimension(self) -> int:
        """The dimension of the reference domain."""
        pass

    def size(self) -> tuple[int, int]:
        """Returns `(parametric_dimension(), node_count())`, the shape of the
        derivative matrix.
        """
        return (self.parametric_dimension(), self.node_count())

    def __len__(self) -> int:
        return self.node_count()

    @abc.abstractmethod
    def reference_coordinates(self) -> NDArray:
        """
        The nodal coordinates of the reference element.

        Returns:
            NDArray: An array of shape `(node_count(), parametric_dimension())`.
        """
        pass

    @abc.abstractmethod
    def evaluate_values(self, out: NDArray, xi: ArrayLike) -> NDArray:
        """Evaluates the shape functions at the parametric point `xi`.

        Args:
            out (NDArray): a buffer of shape `(1, node_count())` to fill.
            xi (ArrayLike): the parametric point, of length
                `parametric_dimension()`.

        Raises:
            DimensionMismatchError: when `xi` has the wrong length.

        Returns:
            NDArray: `out`.
        """
        pass

    def evaluate_derivatives(self, out: NDArray, xi: ArrayLike) -> NDArray:
        """Evaluates the parametric derivatives of the shape functions at `xi`,
        with `out[i, k]` the derivative of shape function `k` along parametric
        axis `i`.

        The default implementation uses central differences of
        `evaluate_values()`.

        Args:
            out (NDArray): a buffer of shape `(parametric_dimension(),
                node_count())` to fill.
            xi (ArrayLike): the parametric point.

        Raises:
            DimensionMismatchError: when `xi` has the wrong length.

        Returns:
            NDArray: `out`.
        """
        self._dev_warn(
            "Basis.evaluate_derivatives() called, "
            + "which delegates to central differences of evaluate_values()"
        )
        xi = self.parametric_point(xi)
        h = float(np.cbrt(np.finfo(float).eps))
        plus = np.empty((1, self.node_count()))
        minus = np.empty((1, self.node_count()))
        for i in range(xi.shape[0]):
            step = np.zeros_like(xi)
            step[i] = h
            self.evaluate_values(plus, xi + step)
            self.evaluate_values(minus, xi - step)
            out[i, :] = (plus[0] - minus[0]) / (2 * h)
        return out

    def parametric_point(self, xi: ArrayLike) -> NDArray:
        """Converts `xi` into a float array of shape `(parametric_dimension(),)`.
        Scalars are accepted for one-dimensional bases.

        Raises:
            DimensionMismatchError: when `xi` has the wrong length.
        """
        point = np.atleast_1d(np.asarray(xi, dtype=float))
        if point.shape != (self.parametric_dimension(),):
            raise DimensionMismatchError(
                f"{type(self).__name__} expects a parametric point of dimension"
                f" {self.parametric_dimension()}, got {np.shape(xi)}"
            )
        return point

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def as_nodal_array(
    basis: Basis, values: ArrayLike, name: str = "values", dtype: DTypeLike = None
) -> NDArray:
    """Converts nodal data (one scalar or one tuple per node) into an array whose
    leading axis runs over the nodes of `basis`.

    Args:
        basis (Basis): the basis the data belongs to.
        values (ArrayLike): the nodal data.
        name (str, optional): the name used in error messages.
        dtype (DTypeLike, optional): the dtype of the array. Defaults to None,
            letting numpy decide.

    Raises:
        DimensionMismatchError: if the data is ragged, or does not have one entry
            per node.

    Returns:
        NDArray: an array of shape `(node_count(), ...)`.
    """
    try:
        arr = np.asarray(values, dtype=dtype)
    except ValueError as err:
        raise DimensionMismatchError(
            f"{name} must have entries of equal length for every node"
        ) from err
    if arr.ndim == 0 or arr.shape[0] != basis.node_count():
        raise DimensionMismatchError(
            f"{name} must have {basis.node_count()} nodal entries for"
            f" {basis!r}, got shape {arr.shape}"
        )
    return arr


def shape_values(basis: Basis, xi: ArrayLike) -> NDArray:
    """Evaluates the shape functions of `basis` at `xi` into a new
    `(1, node_count())` array.
    """
    N = np.zeros((1, basis.node_count()))
    basis.evaluate_values(N, xi)
    return N


def shape_derivatives(basis: Basis, xi: ArrayLike) -> NDArray:
    """Evaluates the parametric derivatives of the shape functions of `basis` at
    `xi` into a new `(parametric_dimension(), node_count())` array.
    """
    dN = np.zeros(basis.size())
    basis.evaluate_derivatives(dN, xi)
    return dN
