import numpy as np
import pytest

from fembasis.elements import lagrange


def affine_map(mod, dim, *args):
    """Returns `(A, b)` for the element modifier `mod`, acting on points as
    `x -> A @ x + b` in `dim` dimensions.
    """
    A = np.eye(dim)
    b = np.zeros(dim)
    if mod == "translate":
        if len(args) < dim:
            raise ValueError(f"modifier '{mod}' expects {dim} arguments!")
        b = np.array(args[:dim], dtype=float)
    elif mod == "rotate":
        if len(args) < 1:
            raise ValueError(f"modifier '{mod}' expects 1 argument! (angle)")
        t = args[0]
        # rotation in the (x,y) plane; the identity on a line
        if dim >= 2:
            A[:2, :2] = [[np.cos(t), -np.sin(t)], [np.sin(t), np.cos(t)]]
    elif mod == "scale":
        if len(args) < dim:
            raise ValueError(f"modifier '{mod}' expects {dim} arguments!")
        A = np.diag(np.array(args[:dim], dtype=float))
    elif mod == "lin_trans":
        if len(args) < 1:
            raise ValueError(f"modifier '{mod}' expects 1 argument! (matrix)")
        A = np.array(args[0], dtype=float)[:dim, :dim]
    else:
        raise ValueError(f"'{mod}' not acceptable element modifier!")
    return A, b


def compose(outer, inner):
    """The affine map `outer(inner(x))`."""
    return outer[0] @ inner[0], outer[0] @ inner[1] + outer[1]


def transform_posmatrix(pos_matrix, A, b):
    return pos_matrix @ A.T + b  # no in-place op, since we want a copy


_PRESET_TRANSFORMS = {
    "ref": lambda d: affine_map("scale", d, 1, 1, 1),
    "translated": lambda d: affine_map("translate", d, 5, -2, 3),
    "rotated": lambda d: affine_map("rotate", d, 1),
    "x-scaled": lambda d: affine_map("scale", d, 2, 1, 1),
    "y-scaled": lambda d: affine_map("scale", d, 1, 2, 1),
    "combo1": lambda d: compose(
        affine_map("translate", d, -4, 2, 1),
        affine_map("lin_trans", d, [[2, 1, 0], [-1, 1, 0], [0, 0.5, 1.5]]),
    ),
    "combo2": lambda d: compose(
        affine_map("translate", d, 300, 600, -50),
        affine_map("lin_trans", d, [[0.5, 1.3, 0.2], [10, 0.3, -1], [0.1, 0.4, 2]]),
    ),
}


@pytest.fixture(scope="module", params=lagrange.CATALOGUE.keys())
def element(request):
    return lagrange.CATALOGUE[request.param]()


@pytest.fixture(scope="module", params=_PRESET_TRANSFORMS.keys())
def transformation(request):
    name = request.param
    return _PRESET_TRANSFORMS[name]


@pytest.fixture(scope="module")
def transformed_element(element, transformation):
    """`(basis, X, A, b)` for the reference element mapped by `x -> A @ x + b`."""
    A, b = transformation(element.parametric_dimension())
    return element, transform_posmatrix(element.reference_coordinates(), A, b), A, b


def interior_points(basis, count=4, seed=0):
    """Convex combinations of the reference nodes, which lie in the (convex)
    reference domain. The centroid comes first.
    """
    nodes = basis.reference_coordinates()
    rng = np.random.default_rng(seed)
    weights = np.vstack(
        [np.full(len(nodes), 1 / len(nodes)), rng.dirichlet(np.ones(len(nodes)), count)]
    )
    return weights @ nodes


@pytest.fixture(scope="module")
def points(element):
    return interior_points(element)
