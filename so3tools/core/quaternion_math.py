# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
Core quaternion algebra routines

All routines work on quaternions stored as ``[x, y, z, s]`` (vector part first, scalar last) in numpy arrays (or
array like objects).  The routines that are cheap to vectorize accept several quaternions stored as the columns of a
4xn array.
"""

import numpy as np

from so3tools._typing import ARRAY_LIKE, DOUBLE_ARRAY

from so3tools.core._helpers import _check_quaternion_array_and_shape


__all__ = ["quaternion_normalize", "quaternion_conjugate", "quaternion_inverse", "quaternion_multiplication",
           "quaternion_dot", "quaternion_angle", "quaternion_distance", "quaternion_distance_precise",
           "quaternion_power", "nlerp", "slerp", "SLERP_EPSILON"]


SLERP_EPSILON: float = 1e-12
"""
When ``1 - cos(angle)`` between the two quaternions is below this value :func:`slerp` falls back to linear weights.
"""


def quaternion_normalize(quaternion: ARRAY_LIKE, positive_scalar: bool = False) -> DOUBLE_ARRAY:
    """
    Normalizes the quaternion(s) to unit length.

    A quaternion with a norm of exactly 0 becomes the identity quaternion ``[0, 0, 0, 1]``.  Quaternions containing
    NaN are returned as is.  Since ``q`` and ``-q`` represent the same rotation the sign of the input is kept unless
    ``positive_scalar`` is ``True``, in which case the result is flipped so that its scalar term is non-negative
    (which limits the rotation angle to :math:`[0, \\pi]`).

    :param quaternion: the quaternion(s) to normalize
    :param positive_scalar: a flag specifying whether to enforce a non-negative scalar term
    :returns: The normalized quaternion(s)
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion, return_copy=True)

    norm = np.linalg.norm(work_quaternion, axis=0, keepdims=True)

    zero_norm = (norm == 0).ravel()
    norm[norm == 0] = 1

    work_quaternion /= norm

    if zero_norm.any():
        if work_quaternion.ndim > 1:
            work_quaternion[:, zero_norm] = np.array([[0.], [0.], [0.], [1.]])
        else:
            work_quaternion[:] = [0., 0., 0., 1.]

    if positive_scalar:
        signs = np.sign(work_quaternion[-1])

        if np.shape(signs):
            signs[signs == 0] = 1
        else:
            signs = signs if signs != 0 else 1

        work_quaternion *= signs

    return work_quaternion


def quaternion_conjugate(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function returns the conjugate of the quaternion(s), which negates the vector portion.

    For a unit quaternion the conjugate is the inverse rotation:

    .. math::
        \mathbf{q}^*=\left[\begin{array}{c}-\mathbf{q}_v\\q_s\end{array}\right]

    :param quaternion: The quaternion(s) to conjugate
    :return: the conjugated quaternion(s)
    """

    # ensure the value is an array and break mutability
    quaternion = _check_quaternion_array_and_shape(quaternion, return_copy=True)

    # negate the vector portion
    quaternion[:3] *= -1

    return quaternion


def quaternion_inverse(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function provides the inverse of a quaternion.

    The inverse is defined such that :math:`\mathbf{q}\otimes\mathbf{q}^{-1}=\mathbf{q}_I` where
    :math:`\mathbf{q}_I=\left[\begin{array}{cccc}0&0&0&1\end{array}\right]^T` is the identity quaternion.  For a
    general (not necessarily unit) quaternion this is

    .. math::
        \mathbf{q}^{-1}=\frac{\mathbf{q}^*}{\mathbf{q}^T\mathbf{q}}

    which reduces to the conjugate (see :func:`quaternion_conjugate`) for unit quaternions.

    This function is vectorized, meaning that you can specify multiple quaternions to be inverted by specifying each
    quaternion as a column.

    :param quaternion: The quaternion(s) to be inverted
    :return: a numpy array representing the inverse quaternion(s)
    """

    conjugate = quaternion_conjugate(quaternion)

    return conjugate / (conjugate * conjugate).sum(axis=0)


def quaternion_multiplication(quaternion_1_in: ARRAY_LIKE,
                              quaternion_2_in: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function performs the Hamilton quaternion product.

    The product is defined such that the rotation matrix of the result is the product of the rotation matrices,
    :math:`\mathbf{R}(\mathbf{q}_1\otimes\mathbf{q}_2)=\mathbf{R}(\mathbf{q}_1)\mathbf{R}(\mathbf{q}_2)`:

    .. math::
        \mathbf{q}_1\otimes\mathbf{q}_2=\left[\begin{array}{c}q_{s1}\mathbf{q}_{v2} + q_{s2}\mathbf{q}_{v1} +
        \mathbf{q}_{v1}\times\mathbf{q}_{v2}\\
        q_{s1}q_{s2}-\mathbf{q}_{v1}^T\mathbf{q}_{v2}\end{array}\right]

    This function is vectorized, therefore you can input multiple quaternions as a 4xn array where each column is an
    independent quaternion.  The result is not normalized.

    :param quaternion_1_in: The first (left) quaternion to multiply
    :param quaternion_2_in: The second (right) quaternion to multiply
    :return: The Hamilton product of quaternion_1 and quaternion_2
    """

    quaternion_1 = _check_quaternion_array_and_shape(quaternion_1_in)
    quaternion_2 = _check_quaternion_array_and_shape(quaternion_2_in)

    qs1 = quaternion_1[-1]
    qv1 = quaternion_1[0:3]

    qs2 = quaternion_2[-1]
    qv2 = quaternion_2[0:3]

    return np.concatenate([qs1 * qv2 + qs2 * qv1 + np.cross(qv1, qv2, axis=0),
                           [qs1 * qs2 - (qv1 * qv2).sum(axis=0)]], axis=0)


def quaternion_dot(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> float:
    """
    The 4D dot product of two quaternions.

    :param quaternion_1: The first quaternion
    :param quaternion_2: The second quaternion
    :return: the dot product
    """

    return float(np.dot(_check_quaternion_array_and_shape(quaternion_1), _check_quaternion_array_and_shape(quaternion_2)))


def quaternion_angle(quaternion: ARRAY_LIKE, limit_to_pi: bool = False) -> float:
    r"""
    The angle of the rotation represented by a quaternion, :math:`2\text{atan2}(\|\mathbf{q}_v\|, q_s)`.

    The result lies in :math:`[0, 2\pi]`.  When ``limit_to_pi`` is ``True`` the angle of the shorter of the two
    double cover representatives is returned instead, which lies in :math:`[0, \pi]`.

    :param quaternion: The quaternion to get the angle of
    :param limit_to_pi: whether to return the angle of the shorter rotation
    :return: the rotation angle in radians
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    angle = 2.0 * np.arctan2(np.linalg.norm(quaternion[:3]), quaternion[3])

    if limit_to_pi and angle > np.pi:
        angle = 2.0 * np.pi - angle

    return float(angle)


def quaternion_distance(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> float:
    r"""
    The geodesic distance on SO(3) between the rotations represented by two unit quaternions.

    This is the angle of the rotation :math:`\mathbf{q}_1^{-1}\otimes\mathbf{q}_2`, computed from the dot product
    as :math:`2\text{cos}^{-1}(|\mathbf{q}_1^T\mathbf{q}_2|)`.  Taking the absolute value of the dot product makes the
    result independent of the sign of either quaternion and places it in :math:`[0, \pi]`.

    This formulation loses precision when the distance is near 0 or :math:`\pi`.  See
    :func:`quaternion_distance_precise` for a more accurate alternative.

    :param quaternion_1: The first unit quaternion
    :param quaternion_2: The second unit quaternion
    :return: the angle between the two rotations in radians
    """

    dot = abs(quaternion_dot(quaternion_1, quaternion_2))

    return float(2.0 * np.arccos(min(dot, 1.0)))


def quaternion_distance_precise(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> float:
    r"""
    The geodesic distance between two unit quaternions computed with the numerically stable ``atan2`` form.

    The difference quaternion :math:`\mathbf{d}=\mathbf{q}_1^{-1}\otimes\mathbf{q}_2` is formed explicitly and the
    distance is :math:`2\text{atan2}(\|\mathbf{d}_v\|, |d_s|)`, which lies in :math:`[0, \pi]`.

    :param quaternion_1: The first unit quaternion
    :param quaternion_2: The second unit quaternion
    :return: the angle between the two rotations in radians
    """

    difference = quaternion_multiplication(quaternion_conjugate(quaternion_1), quaternion_2)

    return float(2.0 * np.arctan2(np.linalg.norm(difference[:3]), abs(difference[3])))


def quaternion_power(quaternion: ARRAY_LIKE, exponent: float) -> DOUBLE_ARRAY:
    r"""
    Raises a unit quaternion to a real power, scaling the angle of the rotation it represents by ``exponent``.

    .. math::
        \mathbf{q}^t=\left[\begin{array}{c}\text{sin}(t\theta/2)\hat{\mathbf{x}}\\
        \text{cos}(t\theta/2)\end{array}\right]

    :param quaternion: The unit quaternion to raise to a power
    :param exponent: The power
    :return: The resulting unit quaternion
    """

    quaternion = quaternion_normalize(quaternion)

    vector_norm = np.linalg.norm(quaternion[:3])

    if vector_norm < SLERP_EPSILON:
        return np.array([0., 0., 0., 1.])

    half_angle = exponent * np.arctan2(vector_norm, quaternion[3])

    return np.concatenate([np.sin(half_angle) * quaternion[:3] / vector_norm, [np.cos(half_angle)]])


def nlerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE, alpha: float) -> DOUBLE_ARRAY:
    r"""
    This function performs normalized linear interpolation of rotation quaternions.

    NLERP of quaternions involves first performing a linear interpolation between the two vectors, and then normalizing
    the interpolated result to have unit length.  That is:

    .. math::
        \mathbf{q}=\frac{\mathbf{q}_0(1-\alpha)+\mathbf{q}_1\alpha}
        {\left\|\mathbf{q}_0(1-\alpha)+\mathbf{q}_1\alpha\right\|}

    .. warning::
        NLERP does not perform a constant angular velocity interpolation and does not pick the shorter path.  Use
        :func:`slerp` when that matters.

    This function is vectorized, so quaternions stored as columns of 4xn arrays are interpolated pairwise.

    :param quaternion0: The starting quaternion(s)
    :param quaternion1: The ending quaternion(s)
    :param alpha: The fractional percent to interpolate at
    :return: The interpolated quaternion(s)
    """

    q0 = _check_quaternion_array_and_shape(quaternion0)
    q1 = _check_quaternion_array_and_shape(quaternion1)

    q = q0 * (1 - alpha) + q1 * alpha

    return q / np.linalg.norm(q, axis=0, keepdims=True)


def slerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE, alpha: float) -> DOUBLE_ARRAY:
    r"""
    This function performs spherical linear interpolation of unit rotation quaternions along the shorter arc.

    .. math::
        \omega = \text{cos}^{-1}(\mathbf{q}_0^T\mathbf{q}_1)\\
        \mathbf{q}=\frac{\text{sin}((1-\alpha)\omega)}{\text{sin}(\omega)}\mathbf{q}_0 +
        \frac{\text{sin}(\alpha\omega)}{\text{sin}(\omega)}\mathbf{q}_1

    If the dot product of the quaternions is negative the second quaternion is negated first so that the shorter of
    the two arcs is followed.  When the quaternions are nearly identical (``1 - cos(omega)`` below
    :data:`SLERP_EPSILON`) linear weights are used instead.  The result is normalized.

    The end points are returned exactly: ``alpha == 0`` gives a copy of ``quaternion0`` and ``alpha == 1`` gives a copy
    of ``quaternion1`` (with its sign as given).

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param alpha: The fractional percent to interpolate at
    :return: The interpolated quaternion
    """

    q0 = _check_quaternion_array_and_shape(quaternion0, return_copy=True)
    q1 = _check_quaternion_array_and_shape(quaternion1, return_copy=True)

    if alpha == 0:
        return q0
    if alpha == 1:
        return q1

    cos_angle = float(np.dot(q0, q1))

    sign = 1.0
    if cos_angle < 0:
        # take the shorter path
        sign = -1.0
        cos_angle = -cos_angle

    if 1.0 - cos_angle > SLERP_EPSILON:
        angle = np.arccos(min(cos_angle, 1.0))
        sin_angle = np.sin(angle)
        weight0 = np.sin((1.0 - alpha) * angle) / sin_angle
        weight1 = np.sin(alpha * angle) / sin_angle
    else:
        weight0 = 1.0 - alpha
        weight1 = alpha

    return quaternion_normalize(weight0 * q0 + sign * weight1 * q1)
