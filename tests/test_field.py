import numpy as np
import pytest

from fembasis.elements import lagrange
from fembasis.elements.element import DimensionMismatchError
from fembasis.fields import field
from fembasis.geometry import mapping

UNIT_SQUARE = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))


def test_interpolate_quad4_center():
    T = (1.0, 2.0, 3.0, 4.0)
    assert field.interpolate(lagrange.Quad4(), T, (0.0, 0.0)) == pytest.approx(2.5)


def test_interpolate_returns_nodal_values(element):
    n = len(element)
    T = np.arange(1, n + 1, dtype=float) ** 2
    U = np.stack([T, -T, 0.5 * T], axis=-1)
    for k, xi in enumerate(element.reference_coordinates()):
        assert field.interpolate(element, T, xi) == pytest.approx(T[k])
        np.testing.assert_allclose(field.interpolate(element, U, xi), U[k], atol=1e-10)


def test_interpolate_reproduces_linear_fields(transformed_element, points):
    basis, X, A, b = transformed_element
    dim = basis.parametric_dimension()
    c = np.arange(1, dim + 1, dtype=float)
    T = X @ c + 7.0
    for xi in points:
        x = A @ xi + b
        assert field.interpolate(basis, T, xi) == pytest.approx(x @ c + 7.0)
        np.testing.assert_allclose(field.interpolate(basis, X, xi), x, rtol=1e-10)


def test_field_grad_quad4_example():
    u = ((0.0, 0.0), (1.0, -1.0), (2.0, 3.0), (0.0, 0.0))
    gradu = field.field_grad(lagrange.Quad4(), u, UNIT_SQUARE, (0.0, 0.0))
    np.testing.assert_allclose(gradu, [[1.5, 0.5], [1.0, 2.0]], atol=1e-14)


def test_field_grad_of_position_is_identity(transformed_element, points):
    basis, X, _, _ = transformed_element
    dim = basis.parametric_dimension()
    for xi in points:
        np.testing.assert_allclose(
            field.field_grad(basis, X, X, xi), np.eye(dim), atol=1e-8
        )


def test_field_grad_linear_vector_field(transformed_element, points):
    basis, X, _, _ = transformed_element
    dim = basis.parametric_dimension()
    # u(x) = B x + c with two components
    B = np.arange(1, 2 * dim + 1, dtype=float).reshape(2, dim)
    u = X @ B.T + np.array([1.0, -1.0])
    for xi in points:
        np.testing.assert_allclose(
            field.field_grad(basis, u, X, xi), B, rtol=1e-7, atol=1e-7
        )


def test_field_grad_scalar_field():
    tri = lagrange.Tri3()
    X = ((0.0, 0.0), (2.0, 0.0), (0.0, 4.0))
    T = [3 * x - 0.5 * y for x, y in X]
    gradT = field.field_grad(tri, T, X, (0.25, 0.25))
    assert gradT.shape == (2,)
    np.testing.assert_allclose(gradT, [3.0, -0.5], atol=1e-12)


def test_field_grad_singular_element():
    X = ((0.0, 0.0), (1.0, 1.0), (2.0, 2.0))
    with pytest.raises(mapping.SingularGeometryError):
        field.field_grad(lagrange.Tri3(), (1.0, 2.0, 3.0), X, (0.2, 0.2))


def test_nodal_length_mismatch():
    quad = lagrange.Quad4()
    with pytest.raises(DimensionMismatchError):
        field.interpolate(quad, (1.0, 2.0, 3.0), (0.0, 0.0))
    with pytest.raises(DimensionMismatchError):
        field.interpolate(quad, ((1.0,), (2.0, 3.0), (1.0,), (1.0,)), (0.0, 0.0))
    with pytest.raises(DimensionMismatchError):
        field.field_grad(quad, np.zeros((4, 2, 2)), UNIT_SQUARE, (0.0, 0.0))
