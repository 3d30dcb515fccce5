import logging
import typing

import numpy as np
from numpy.typing import ArrayLike, NDArray

import fembasis.elements.element as element
from fembasis.elements import _poly_util

logger = logging.getLogger(__name__)


class LagrangeBasis(element.Basis):
    """A nodal Lagrange basis on a reference element, given by the reference node
    coordinates and a set of monomials spanning the shape-function space. The shape
    functions are the unique combinations of the monomials that are one at their
    own node and zero at every other node. The coefficients are found once per
    variant by inverting the Vandermonde matrix.

    Subclasses set `reference_coords` and `exponents`. Every subclass is a
    singleton: `Quad4() is Quad4()`.
    """

    reference_coords: tuple[tuple[float, ...], ...] = ()
    exponents: tuple[tuple[int, ...], ...] = ()

    _instance = None

    def __new__(cls):
        """Return the variant's single instance, building it on first use."""
        if cls.__dict__.get("_instance") is None:
            instance = super().__new__(cls)
            instance._build()
            cls._instance = instance
        return cls._instance

    def _build(self):
        if not self.reference_coords:
            raise TypeError(f"{type(self).__name__} defines no reference nodes")
        nodes = np.array(self.reference_coords, dtype=float)
        E = _poly_util.as_exponents(self.exponents)
        if E.shape[1] != nodes.shape[1]:
            raise ValueError(
                f"{type(self).__name__}: monomials of dimension {E.shape[1]} for"
                f" nodes of dimension {nodes.shape[1]}"
            )
        coefficients = _poly_util.lagrange_coefficients(E, nodes)
        factors, lowered = _poly_util.lowered_exponents(E)
        logger.debug(
            "built %s: %d nodes, %d-dimensional, cond(V) = %.3e",
            type(self).__name__,
            nodes.shape[0],
            nodes.shape[1],
            np.linalg.cond(_poly_util.vandermonde(E, nodes)),
        )

        # shared by every caller; keep them read-only
        for arr in (nodes, E, coefficients, factors, lowered):
            arr.setflags(write=False)
        self._nodes = nodes
        self._exponents = E
        self._coefficients = coefficients
        self._factors = factors
        self._lowered = lowered

    @typing.override
    def node_count(self) -> int:
        return self._nodes.shape[0]

    @typing.override
    def parametric_dimension(self) -> int:
        return self._nodes.shape[1]

    @typing.override
    def reference_coordinates(self) -> NDArray:
        return self._nodes

    @typing.override
    def evaluate_values(self, out: NDArray, xi: ArrayLike) -> NDArray:
        xi = self.parametric_point(xi)
        out[...] = _poly_util.polyeval(self._exponents, xi) @ self._coefficients
        return out

    @typing.override
    def evaluate_derivatives(self, out: NDArray, xi: ArrayLike) -> NDArray:
        xi = self.parametric_point(xi)
        out[...] = (
            _poly_util.polyderiv(self._factors, self._lowered, xi)
            @ self._coefficients
        )
        return out


# ======================================================================================
#                                       Segments
# ======================================================================================


class Seg2(LagrangeBasis):
    """2-node linear segment on [-1, 1]."""

    reference_coords = ((-1.0,), (1.0,))
    exponents = ((0,), (1,))


class Seg3(LagrangeBasis):
    """3-node quadratic segment on [-1, 1]; the midside node is last."""

    reference_coords = ((-1.0,), (1.0,), (0.0,))
    exponents = ((0,), (1,), (2,))


# ======================================================================================
#                                       Triangles
# ======================================================================================


class Tri3(LagrangeBasis):
    """3-node linear triangle on the unit simplex."""

    reference_coords = ((0.0, 0.0), (1.0, 0.0), (0.0, 1.0))
    exponents = ((0, 0), (1, 0), (0, 1))


class Tri6(LagrangeBasis):
    """6-node quadratic triangle; midside nodes follow the corners."""

    reference_coords = (
        (0.0, 0.0),
        (1.0, 0.0),
        (0.0, 1.0),
        (0.5, 0.0),
        (0.5, 0.5),
        (0.0, 0.5),
    )
    exponents = ((0, 0), (1, 0), (0, 1), (2, 0), (1, 1), (0, 2))


# ======================================================================================
#                                     Quadrilaterals
# ======================================================================================


class Quad4(LagrangeBasis):
    """4-node bilinear quadrilateral on [-1, 1]^2, counter-clockwise."""

    reference_coords = ((-1.0, -1.0), (1.0, -1.0), (1.0, 1.0), (-1.0, 1.0))
    exponents = ((0, 0), (1, 0), (0, 1), (1, 1))


class Quad8(LagrangeBasis):
    """8-node serendipity quadrilateral."""

    reference_coords = Quad4.reference_coords + (
        (0.0, -1.0),
        (1.0, 0.0),
        (0.0, 1.0),
        (-1.0, 0.0),
    )
    exponents = ((0, 0), (1, 0), (0, 1), (2, 0), (1, 1), (0, 2), (2, 1), (1, 2))


class Quad9(LagrangeBasis):
    """9-node biquadratic quadrilateral; the center node is last."""

    reference_coords = Quad8.reference_coords + ((0.0, 0.0),)
    exponents = tuple((i, j) for j in range(3) for i in range(3))


# ======================================================================================
#                                        Solids
# ======================================================================================


class Tet4(LagrangeBasis):
    """4-node linear tetrahedron on the unit simplex."""

    reference_coords = (
        (0.0, 0.0, 0.0),
        (1.0, 0.0, 0.0),
        (0.0, 1.0, 0.0),
        (0.0, 0.0, 1.0),
    )
    exponents = ((0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1))


class Tet10(LagrangeBasis):
    """10-node quadratic tetrahedron; edge midpoints follow the corners."""

    reference_coords = Tet4.reference_coords + (
        (0.5, 0.0, 0.0),
        (0.5, 0.5, 0.0),
        (0.0, 0.5, 0.0),
        (0.0, 0.0, 0.5),
        (0.5, 0.0, 0.5),
        (0.0, 0.5, 0.5),
    )
    exponents = (
        (0, 0, 0),
        (1, 0, 0),
        (0, 1, 0),
        (0, 0, 1),
        (2, 0, 0),
        (0, 2, 0),
        (0, 0, 2),
        (1, 1, 0),
        (0, 1, 1),
        (1, 0, 1),
    )


class Wedge6(LagrangeBasis):
    """6-node linear wedge: the unit triangle extruded over [-1, 1]."""

    reference_coords = (
        (0.0, 0.0, -1.0),
        (1.0, 0.0, -1.0),
        (0.0, 1.0, -1.0),
        (0.0, 0.0, 1.0),
        (1.0, 0.0, 1.0),
        (0.0, 1.0, 1.0),
    )
    exponents = ((0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1), (1, 0, 1), (0, 1, 1))


class Hex8(LagrangeBasis):
    """8-node trilinear hexahedron on [-1, 1]^3; bottom face first."""

    reference_coords = (
        (-1.0, -1.0, -1.0),
        (1.0, -1.0, -1.0),
        (1.0, 1.0, -1.0),
        (-1.0, 1.0, -1.0),
        (-1.0, -1.0, 1.0),
        (1.0, -1.0, 1.0),
        (1.0, 1.0, 1.0),
        (-1.0, 1.0, 1.0),
    )
    exponents = (
        (0, 0, 0),
        (1, 0, 0),
        (0, 1, 0),
        (0, 0, 1),
        (1, 1, 0),
        (0, 1, 1),
        (1, 0, 1),
        (1, 1, 1),
    )


CATALOGUE: dict[str, type[LagrangeBasis]] = {
    cls.__name__: cls
    for cls in (Seg2, Seg3, Tri3, Tri6, Quad4, Quad8, Quad9, Tet4, Tet10, Wedge6, Hex8)
}
