import numpy as np


# Monomials are stored as integer exponent arrays `E` of shape (nterms, dim),
# where term m is the product over axes a of x[a] ** E[m, a].
def as_exponents(exponents):
    """Converts a sequence of exponent tuples into an integer array of shape
    (nterms, dim). Negative exponents are rejected.
    """
    E = np.array(exponents, dtype=int)
    if E.ndim != 2:
        raise ValueError(f"exponents must be a 2D table, got shape {E.shape}")
    if np.any(E < 0):
        raise ValueError("monomial exponents must be non-negative")
    return E


def lowered_exponents(E):
    """Returns `(factors, lowered)` for the first derivative of every monomial
    along every axis. `lowered[a]` is the exponent table of d/dx_a, and
    `factors[a]` the multiplier that comes down from the power. Terms that do not
    depend on x_a get a factor of zero (and an unchanged exponent).
    """
    dim = E.shape[1]
    lowered = np.repeat(E[np.newaxis, :, :], dim, axis=0)
    factors = np.empty((dim, E.shape[0]), dtype=float)
    for a in range(dim):
        factors[a] = E[:, a]
        lowered[a, :, a] = np.maximum(E[:, a] - 1, 0)
    return factors, lowered


def polyeval(E, x):
    """Evaluates all monomials of `E` at the point `x` (shape (dim,))."""
    return np.prod(np.asarray(x, dtype=float) ** E, axis=-1)


def polyderiv(factors, lowered, x):
    """Evaluates the first derivatives of all monomials at `x`, as an array of
    shape (dim, nterms), using the tables from `lowered_exponents`.
    """
    return factors * np.prod(np.asarray(x, dtype=float) ** lowered, axis=-1)


def vandermonde(E, points):
    """The generalized Vandermonde matrix V[p, m] = monomial m at point p."""
    points = np.asarray(points, dtype=float)
    return np.prod(points[:, np.newaxis, :] ** E[np.newaxis, :, :], axis=-1)


def lagrange_coefficients(E, points):
    """Solves for the coefficient matrix `C` of shape (nterms, npoints) such that
    the nodal Lagrange functions are `polyeval(E, x) @ C`, i.e.
    `vandermonde(E, points) @ C` is the identity.
    """
    V = vandermonde(E, points)
    if V.shape[0] != V.shape[1]:
        raise ValueError(
            f"{V.shape[0]} nodes cannot be interpolated by {V.shape[1]} monomials"
        )
    try:
        return np.linalg.solve(V, np.eye(V.shape[0]))
    except np.linalg.LinAlgError as err:
        raise ValueError(
            "Vandermonde matrix is singular; the nodes are not unisolvent for the"
            " given monomials"
        ) from err
