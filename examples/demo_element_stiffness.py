import fembasis
import numpy as np
import argparse
import itertools

# bases whose reference domain is [-1,1]^dim, so tensor Gauss-Legendre applies
TENSOR_BASES = ("Seg2", "Seg3", "Quad4", "Quad8", "Quad9", "Hex8")


def gauss_points(dim: int, npts: int):
    """Yields (xi, weight) pairs of the tensor Gauss-Legendre rule on [-1,1]^dim."""
    x, w = np.polynomial.legendre.leggauss(npts)
    for inds in itertools.product(range(npts), repeat=dim):
        yield x[list(inds)], np.prod(w[list(inds)])


def run_demo(basis_name: str, npts: int, shear: float, scale: float):
    """Integrates the Laplace stiffness matrix K[i,j] = int grad(N_i).grad(N_j) dV
    and the measure of an element obtained by shearing and scaling the reference
    element. A single workspace is reused for every quadrature point.

    Args:
        basis_name (str): one of `TENSOR_BASES`.
        npts (int): the number of Gauss points per direction.
        shear (float): the shear applied to the first coordinate.
        scale (float): the uniform scale factor.

    Returns:
        tuple[NDArray, float]: the stiffness matrix and the element measure.
    """
    basis = fembasis.CATALOGUE[basis_name]()
    dim, nbasis = basis.size()

    A = scale * np.eye(dim)
    if dim > 1:
        A[0, 1] = scale * shear
    X = basis.reference_coordinates() @ A.T

    ws = fembasis.create_workspace(basis)
    K = np.zeros((nbasis, nbasis))
    measure = 0.0
    for xi, w in gauss_points(dim, npts):
        fembasis.evaluate(ws, X, xi)
        K += w * ws.detJ * (ws.grad.T @ ws.grad)
        measure += w * ws.detJ
    return K, measure


def build_argparse():
    parser = argparse.ArgumentParser(
        description="Integrates the stiffness matrix of a single element."
    )
    parser.add_argument(
        "-b",
        "--basis",
        help="""
The element basis
    """,
        action="store",
        default="Quad4",
        choices=TENSOR_BASES,
    )
    parser.add_argument(
        "-n",
        "--npts",
        help="""
Number of Gauss points per direction
    """,
        action="store",
        default=3,
        type=int,
        metavar="NPTS",
    )
    parser.add_argument(
        "--shear",
        help="""
Shear factor of the element
    """,
        action="store",
        default=0.5,
        type=float,
    )
    parser.add_argument(
        "--scale",
        help="""
Scale factor of the element
    """,
        action="store",
        default=1.0,
        type=float,
    )
    return parser


if __name__ == "__main__":
    args = build_argparse().parse_args()
    print(f"Demo-ing {args.basis} with {args.npts} Gauss points per direction")
    K, measure = run_demo(args.basis, args.npts, args.shear, args.scale)
    np.set_printoptions(precision=4, suppress=True, linewidth=120)
    print(f"  element measure: {measure:.6f}")
    print(f"  row sums of K (should vanish): {np.abs(K.sum(axis=1)).max():.2e}")
    print(K)
