import numpy as np
import numpy.typing as npt

# Identity basis: reference axes a, b, c as rows
REFERENCE_BASIS: npt.NDArray[np.float64] = np.eye(3, dtype=np.float64)


def as_vector(value: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Coerce a 3-sequence to a float vector or raise if it has the wrong shape."""
    vec = np.asarray(value, dtype=np.float64).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {vec.shape}")
    return vec


def as_basis(value: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Coerce a set of three axis vectors (rows) to a 3x3 float array."""
    mat = np.asarray(value, dtype=np.float64)
    if mat.shape != (3, 3):
        raise ValueError(f"Expected three 3-vectors (3x3), got shape {mat.shape}")
    return mat


def normalize(vector: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Return the unit vector along `vector`, or zeros for a zero-length input."""
    vec = as_vector(vector)
    nrm = np.linalg.norm(vec)
    if nrm <= 0:
        return np.zeros(3, dtype=np.float64)
    return vec / nrm


def project_onto_basis(
    vector: npt.ArrayLike, basis: npt.ArrayLike = REFERENCE_BASIS
) -> npt.NDArray[np.float64]:
    """Project a vector onto three basis axes.

    Args:
        vector: Vector expressed in the fixed reference frame, typically a
            body-frame control axis scaled by some magnitude.
        basis: 3x3 array whose rows are the basis axes.

    Returns:
        The three dot products ``(v . b0, v . b1, v . b2)``.
    """
    return as_basis(basis).dot(as_vector(vector))


def basis_to_vector(
    components: npt.ArrayLike, basis: npt.ArrayLike = REFERENCE_BASIS
) -> npt.NDArray[np.float64]:
    """Rebuild a vector from its per-axis components (inverse of projection)."""
    return as_vector(components).dot(as_basis(basis))


def axis_torque_magnitude(
    orientation: npt.ArrayLike,
    nominal_torque: npt.ArrayLike,
    reference_axis: npt.ArrayLike,
) -> float:
    """Torque magnitude the control axes can exert about one reference axis.

    Each control axis (row of `orientation`, ordered pitch, yaw, roll) is
    projected onto `reference_axis` and weighted by its nominal torque; the
    magnitude of the resulting 3-vector is returned.
    """
    alignment = as_basis(orientation).dot(as_vector(reference_axis))
    return float(np.linalg.norm(alignment * as_vector(nominal_torque)))
