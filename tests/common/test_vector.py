import numpy as np
import pytest

from rwsat.common import (
    as_basis,
    as_vector,
    axis_torque_magnitude,
    basis_to_vector,
    normalize,
    project_onto_basis,
)


def test_project_onto_identity_basis_returns_components():
    proj = project_onto_basis((1.0, 2.0, 3.0))
    assert np.allclose(proj, [1.0, 2.0, 3.0])


def test_project_onto_rotated_basis_and_back():
    s = np.sqrt(0.5)
    basis = np.array([[s, s, 0.0], [-s, s, 0.0], [0.0, 0.0, 1.0]])
    vec = np.array([1.0, 0.0, 2.0])

    comps = project_onto_basis(vec, basis)
    assert np.allclose(comps, [s, -s, 2.0])
    assert np.allclose(basis_to_vector(comps, basis), vec)


def test_normalize_handles_zero_and_regular_vectors():
    assert np.array_equal(normalize((0.0, 0.0, 0.0)), np.zeros(3))
    assert np.allclose(normalize((3.0, 4.0, 0.0)), [0.6, 0.8, 0.0])


def test_shape_checks_raise_value_error():
    with pytest.raises(ValueError):
        as_vector((1.0, 2.0))
    with pytest.raises(ValueError):
        as_basis(np.eye(2))


def test_axis_torque_magnitude_aligned_and_diagonal():
    nominal = (1.0, 2.0, 3.0)
    assert axis_torque_magnitude(np.eye(3), nominal, (0.0, 1.0, 0.0)) == pytest.approx(2.0)

    diagonal = normalize((1.0, 1.0, 0.0))
    assert axis_torque_magnitude(np.eye(3), nominal, diagonal) == pytest.approx(
        np.sqrt(2.5)
    )
