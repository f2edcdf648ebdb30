import numpy as np

from so3tools._typing import SCALAR_OR_ARRAY, ARRAY_LIKE, DOUBLE_ARRAY
from so3tools.core._helpers import _check_vector_array_and_shape


__all__ = ["rot_x", "rot_y", "rot_z", "quaternion_x", "quaternion_y", "quaternion_z", "skew"]


def rot_x(theta: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    r"""
    This function forms the right handed rotation matrix about the x axis by angle theta (the roll rotation).

    .. math::
        \mathbf{R}_x(\theta)=\left[\begin{array}{ccc} 1 & 0 & 0 \\
        0 & \text{cos}(\theta) & -\text{sin}(\theta) \\
        0 & \text{sin}(\theta) & \text{cos}(\theta) \end{array}\right]

    Theta should be in units of radians and can be a scalar or a vector.  If theta is a vector then each theta value
    will have a corresponding rotation matrix down the first axis of the output.

    :param theta: The angles to form the rotation matrix(ces) for
    :return: The rotation matrix(ces) corresponding to the rotation angle(s)
    """

    ctheta, stheta, ones, zeros = _trig_terms(theta)

    return np.vstack([ones, zeros, zeros, zeros, ctheta, -stheta, zeros, stheta, ctheta]).T.reshape(-1, 3, 3).squeeze()


def rot_y(theta: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    r"""
    This function forms the right handed rotation matrix about the y axis by angle theta (the pitch rotation).

    .. math::
        \mathbf{R}_y(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & 0 & \text{sin}(\theta) \\
        0 & 1 & 0 \\
        -\text{sin}(\theta) & 0 & \text{cos}(\theta) \end{array}\right]

    :param theta: The angles to form the rotation matrix(ces) for
    :return: The rotation matrix(ces) corresponding to the rotation angle(s)
    """

    ctheta, stheta, ones, zeros = _trig_terms(theta)

    return np.vstack([ctheta, zeros, stheta, zeros, ones, zeros, -stheta, zeros, ctheta]).T.reshape(-1, 3, 3).squeeze()


def rot_z(theta: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    r"""
    This function forms the right handed rotation matrix about the z axis by angle theta (the yaw rotation).

    .. math::
        \mathbf{R}_z(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & -\text{sin}(\theta) & 0 \\
        \text{sin}(\theta) & \text{cos}(\theta) & 0 \\
        0 & 0 & 1 \end{array}\right]

    For example::

        >>> from so3tools.core import rot_z
        >>> rot_z(np.pi/2).round(12)
        array([[ 0., -1.,  0.],
               [ 1.,  0.,  0.],
               [ 0.,  0.,  1.]])

    :param theta: The angles to form the rotation matrix(ces) for
    :return: The rotation matrix(ces) corresponding to the rotation angle(s)
    """

    ctheta, stheta, ones, zeros = _trig_terms(theta)

    return np.vstack([ctheta, -stheta, zeros, stheta, ctheta, zeros, zeros, zeros, ones]).T.reshape(-1, 3, 3).squeeze()


def _trig_terms(theta: SCALAR_OR_ARRAY) -> tuple[DOUBLE_ARRAY, DOUBLE_ARRAY, DOUBLE_ARRAY, DOUBLE_ARRAY]:

    # ensure we have an array of theta(s)
    theta = np.atleast_1d(np.asarray(theta, dtype=np.float64)).flatten()

    return np.cos(theta), np.sin(theta), np.ones(theta.shape), np.zeros(theta.shape)


def _elementary_quaternion(axis: int, theta: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:

    theta = np.asarray(theta, dtype=np.float64)

    quaternion = np.zeros((4,) + theta.shape)
    quaternion[axis] = np.sin(theta / 2)
    quaternion[3] = np.cos(theta / 2)

    return quaternion


def quaternion_x(theta: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    """
    The rotation quaternion(s) about the x axis by angle(s) theta, stored as columns for array input.

    :param theta: The angles to form the quaternion(s) for
    :return: The quaternion(s) as ``[x, y, z, s]``
    """
    return _elementary_quaternion(0, theta)


def quaternion_y(theta: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    """
    The rotation quaternion(s) about the y axis by angle(s) theta, stored as columns for array input.

    :param theta: The angles to form the quaternion(s) for
    :return: The quaternion(s) as ``[x, y, z, s]``
    """
    return _elementary_quaternion(1, theta)


def quaternion_z(theta: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    """
    The rotation quaternion(s) about the z axis by angle(s) theta, stored as columns for array input.

    :param theta: The angles to form the quaternion(s) for
    :return: The quaternion(s) as ``[x, y, z, s]``
    """
    return _elementary_quaternion(2, theta)


def skew(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function returns a numpy array with the skew symmetric cross product matrix for vector.

    The skew symmetric cross product matrix is defined such that

    .. math::
        \left[\mathbf{x}\times\right]\mathbf{y}=\mathbf{x}\times\mathbf{y}

    This function is vectorized, therefore you can input multiple vectors as a 3xn array where each column is an
    independent vector.  The resulting skew matrix output will be nx3x3 where the first axis stores each matrix.

    :param vector: The vector to compute a skew symmetric matrix for
    :return: The skew symmetric cross product matrix(ces) corresponding to the vector(s)
    """

    vector = _check_vector_array_and_shape(vector)

    if vector.ndim > 1:
        zeros = np.zeros(vector.shape[-1])

    else:
        zeros = 0

    return np.array([zeros, -vector[2], vector[1],
                     vector[2], zeros, -vector[0],
                     -vector[1], vector[0], zeros]).T.reshape(-1, 3, 3).squeeze()
