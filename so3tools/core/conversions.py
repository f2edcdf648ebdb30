# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
Core conversion routines for rotation representations

This module contains the closed form routines for converting between the five rotation representations used in
so3tools.  All routines are pure functions implemented on numpy arrays (or array like objects) and can be called
concurrently.

====================  =================================================================================================
Representation        Data layout
====================  =================================================================================================
``matrix``            a 3x3 proper orthonormal matrix
``quaternion``        ``[x, y, z, s]`` with the scalar last
``axis_angle``        ``[ux, uy, uz, angle]``, a unit axis followed by the rotation angle in radians
``rotation_vector``   ``[rx, ry, rz]``, the rotation axis scaled by the rotation angle
``yaw_pitch_roll``    ``[yaw, pitch, roll]`` such that :math:`\\mathbf{R}=\\mathbf{R}_z(yaw)\\mathbf{R}_y(pitch)
                      \\mathbf{R}_x(roll)`
====================  =================================================================================================

Every routine returns NaN for all components of its output when any input component is NaN.  The degenerate inputs
are handled as follows:

* the zero rotation is reported as the axis-angle ``[1, 0, 0, 0]`` and the rotation vector ``[0, 0, 0]``;
* an axis-angle whose axis is shorter than :data:`AXIS_EPSILON` is the zero rotation;
* at gimbal lock (pitch at :math:`\\pm\\pi/2`, detected with :data:`GIMBAL_LOCK_EPSILON`) the yaw and roll angles are
  not separately observable, so the roll is set to 0 and the remaining rotation about the z axis is reported as yaw.

The generic :func:`convert` function dispatches to the appropriate routine given the names of the source and target
representations.
"""

from typing import Callable

import numpy as np

from so3tools._typing import ARRAY_LIKE, DOUBLE_ARRAY, REPRESENTATIONS

from so3tools.core._helpers import (_check_matrix_array_and_shape, _check_quaternion_array_and_shape,
                                    _check_vector_array_and_shape, _check_axis_angle_array_and_shape, _contains_nan)
from so3tools.core.elementals import skew
from so3tools.core.quaternion_math import quaternion_normalize


__all__ = ['quaternion_to_rotmat', 'quaternion_to_axis_angle', 'quaternion_to_rotvec', 'quaternion_to_yaw_pitch_roll',
           'rotmat_to_quaternion', 'rotmat_to_axis_angle', 'rotmat_to_rotvec', 'rotmat_to_yaw_pitch_roll',
           'axis_angle_to_rotmat', 'axis_angle_to_quaternion', 'axis_angle_to_rotvec', 'axis_angle_to_yaw_pitch_roll',
           'rotvec_to_rotmat', 'rotvec_to_quaternion', 'rotvec_to_axis_angle', 'rotvec_to_yaw_pitch_roll',
           'yaw_pitch_roll_to_rotmat', 'yaw_pitch_roll_to_quaternion', 'yaw_pitch_roll_to_axis_angle',
           'yaw_pitch_roll_to_rotvec',
           'rotmat_to_euler', 'quaternion_to_euler', 'euler_to_rotmat', 'euler_to_quaternion',
           'compute_yaw', 'compute_pitch', 'compute_roll', 'convert',
           'AXIS_EPSILON', 'ANGLE_EPSILON', 'GIMBAL_LOCK_EPSILON']


AXIS_EPSILON: float = 1e-7
"""
Axis-angle axes and rotation vectors shorter than this are treated as the zero rotation when forming quaternions.
"""

ANGLE_EPSILON: float = 1e-12
"""
The vector part magnitude below which a matrix or quaternion is treated as the zero rotation when extracting an axis.
"""

GIMBAL_LOCK_EPSILON: float = 1e-12
"""
Gimbal lock is assumed when ``cos(pitch)``, the length of the first column of the rotation matrix, is below this
value.  Since ``cos(pitch)`` is about ``pi/2 - |pitch|`` there, this is also the angular distance from ``+-pi/2``.
"""

_BRANCH_THRESHOLD = -0.19
"""
A quaternion component of magnitude 0.45 gives 4q^2 - 1 = -0.19.  At least one component is >= 0.5 for a unit
quaternion, so the first diagonal combination above this threshold is always a safe divisor.
"""


def _zero_axis_angle() -> DOUBLE_ARRAY:
    return np.array([1., 0., 0., 0.])


# ---------------------------------------------------------------------------------------------------------------------
# quaternion sources
# ---------------------------------------------------------------------------------------------------------------------


def quaternion_to_rotmat(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation quaternion into its equivalent rotation matrix.

    The quaternion is normalized first and is then converted using

    .. math::
        \mathbf{R} = (q_s^2-\mathbf{q}_v^T\mathbf{q}_v)\mathbf{I}_{3\times 3}+2\mathbf{q}_v\mathbf{q}_v^T+2q_s
        \left[\mathbf{q}_v\times\right]

    where :math:`\left[\bullet\times\right]` is the skew symmetric cross product matrix (see :func:`.skew`).  A
    quaternion with zero norm is converted to the identity matrix.

    This function is vectorized, meaning that you can specify multiple rotation quaternions to be converted to matrices
    by specifying each quaternion as a column.  The resulting matrices are stacked along the first axis.  For example::

        >>> from so3tools.core import quaternion_to_rotmat
        >>> from numpy import sqrt
        >>> quaternion_to_rotmat([[0, 0], [1, 1/sqrt(3)], [0, 1/sqrt(3)], [0, 1/sqrt(3)]]).round(8)
        array([[[-1.        ,  0.        ,  0.        ],
                [ 0.        ,  1.        ,  0.        ],
                [ 0.        ,  0.        , -1.        ]],
               [[-0.33333333, -0.66666667,  0.66666667],
                [ 0.66666667,  0.33333333,  0.66666667],
                [-0.66666667,  0.66666667,  0.33333333]]])

    :param quaternion: The rotation quaternion(s) to be converted to the rotation matrix(ces)
    :return: a numpy array containing the rotation matrix(ces) corresponding to the input quaternion(s)
    """

    quaternion = quaternion_normalize(quaternion)

    # extract the scalar and vector portion of the quaternion(s)
    qs = quaternion[-1].reshape(-1, 1, 1)
    qv = quaternion[:3].reshape(3, -1)

    return ((qs ** 2 - (qv * qv).sum(axis=0).reshape(-1, 1, 1)) * np.eye(3) + 2 * np.einsum('ij,jk->jik', qv, qv.T) +
            2 * qs * skew(qv).reshape(-1, 3, 3)).squeeze()


def quaternion_to_axis_angle(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a quaternion into an axis-angle ``[ux, uy, uz, angle]``.

    .. math::
        \theta = 2\text{atan2}(\|\mathbf{q}_v\|, q_s) \\
        \hat{\mathbf{x}} = \frac{\mathbf{q}_v}{\|\mathbf{q}_v\|}

    The quaternion does not need to be normalized.  The angle is in :math:`[0, 2\pi]`.  When the vector part is shorter
    than :data:`ANGLE_EPSILON` the zero axis-angle ``[1, 0, 0, 0]`` is returned.

    :param quaternion: the quaternion to convert
    :return: the axis-angle as a length 4 array
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    if _contains_nan(quaternion):
        return np.full(4, np.nan)

    vector_norm = np.linalg.norm(quaternion[:3])

    if vector_norm > ANGLE_EPSILON:
        return np.concatenate([quaternion[:3] / vector_norm, [2.0 * np.arctan2(vector_norm, quaternion[3])]])

    return _zero_axis_angle()


def quaternion_to_rotvec(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation quaternion into a rotation vector.

    .. math::
        \theta = 2\text{atan2}(\|\mathbf{q}_v\|, q_s) \\
        \mathbf{v} = \theta\frac{\mathbf{q}_v}{\|\mathbf{q}_v\|}

    When the vector part is shorter than :data:`ANGLE_EPSILON` the small angle limit
    :math:`\mathbf{v}=2\text{sign}(q_s)\mathbf{q}_v` is used, which is the zero vector for the identity quaternion.

    :param quaternion: the rotation quaternion to be converted to the rotation vector
    :return: The rotation vector corresponding to the input rotation quaternion
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    if _contains_nan(quaternion):
        return np.full(3, np.nan)

    vector_norm = np.linalg.norm(quaternion[:3])

    if vector_norm > ANGLE_EPSILON:
        return quaternion[:3] * (2.0 * np.arctan2(vector_norm, quaternion[3]) / vector_norm)

    sign = 1.0 if quaternion[3] >= 0 else -1.0

    return 2.0 * sign * quaternion[:3]


def quaternion_to_yaw_pitch_roll(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a quaternion into yaw, pitch, and roll angles ``[yaw, pitch, roll]``.

    The quaternion is normalized first.  Then

    .. math::
        \psi = \text{atan2}(2(q_xq_y+q_zq_s), 1-2(q_y^2+q_z^2)) \\
        \theta = \text{atan2}(2(q_sq_y-q_xq_z), \sqrt{R_{00}^2+R_{10}^2}) \\
        \phi = \text{atan2}(2(q_yq_z+q_xq_s), 1-2(q_x^2+q_y^2))

    where :math:`R_{00} = 1-2(q_y^2+q_z^2)` and :math:`R_{10} = 2(q_xq_y+q_zq_s)` are the first column of the
    equivalent rotation matrix.

    At gimbal lock the roll is 0 and the yaw is :math:`\text{atan2}(2(q_zq_s-q_xq_y), 1-2(q_x^2+q_z^2))`.

    :param quaternion: the quaternion to convert
    :return: the yaw, pitch, and roll angles in radians
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    if _contains_nan(quaternion):
        return np.full(3, np.nan)

    qx, qy, qz, qs = quaternion_normalize(quaternion)

    sin_pitch = 2.0 * (qs * qy - qx * qz)

    # the first column of the matrix, its length is cos(pitch)
    m00 = 1.0 - 2.0 * (qy * qy + qz * qz)
    m10 = 2.0 * (qx * qy + qz * qs)

    cos_pitch = np.hypot(m00, m10)

    pitch = np.arctan2(sin_pitch, cos_pitch)

    if cos_pitch < GIMBAL_LOCK_EPSILON:
        yaw = np.arctan2(2.0 * (qz * qs - qx * qy), 1.0 - 2.0 * (qx * qx + qz * qz))
        roll = 0.0
    else:
        yaw = np.arctan2(m10, m00)
        roll = np.arctan2(2.0 * (qy * qz + qx * qs), 1.0 - 2.0 * (qx * qx + qy * qy))

    return np.array([yaw, pitch, roll], dtype=np.float64)


# ---------------------------------------------------------------------------------------------------------------------
# matrix sources
# ---------------------------------------------------------------------------------------------------------------------


def rotmat_to_quaternion(rotation_matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation matrix into a rotation quaternion.

    One quaternion component is computed from a combination of the diagonal of the matrix and the other three are
    deduced from the off diagonal terms divided by that component.  To avoid dividing by a small number the first
    combination of

    .. math::
        \text{tr}(\mathbf{R}),\quad R_{00}-R_{11}-R_{22},\quad R_{11}-R_{00}-R_{22},\quad R_{22}-R_{00}-R_{11}

    that is greater than -0.19 selects the component (:math:`q_s, q_x, q_y, q_z` respectively).  The result is not
    renormalized.

    :param rotation_matrix: the rotation matrix to convert
    :return: the quaternion ``[x, y, z, s]``
    """

    matrix = _check_matrix_array_and_shape(rotation_matrix)

    if _contains_nan(matrix):
        return np.full(4, np.nan)

    (m00, m01, m02), (m10, m11, m12), (m20, m21, m22) = matrix

    trace = m00 + m11 + m22

    if trace > _BRANCH_THRESHOLD:
        qs = 0.5 * np.sqrt(trace + 1.0)
        inv = 0.25 / qs
        qx = inv * (m21 - m12)
        qy = inv * (m02 - m20)
        qz = inv * (m10 - m01)

    elif m00 - m11 - m22 > _BRANCH_THRESHOLD:
        qx = 0.5 * np.sqrt(m00 - m11 - m22 + 1.0)
        inv = 0.25 / qx
        qs = inv * (m21 - m12)
        qy = inv * (m10 + m01)
        qz = inv * (m20 + m02)

    elif m11 - m00 - m22 > _BRANCH_THRESHOLD:
        qy = 0.5 * np.sqrt(m11 - m00 - m22 + 1.0)
        inv = 0.25 / qy
        qs = inv * (m02 - m20)
        qx = inv * (m10 + m01)
        qz = inv * (m12 + m21)

    else:
        qz = 0.5 * np.sqrt(m22 - m00 - m11 + 1.0)
        inv = 0.25 / qz
        qs = inv * (m10 - m01)
        qx = inv * (m20 + m02)
        qy = inv * (m12 + m21)

    return np.array([qx, qy, qz, qs], dtype=np.float64)


def rotmat_to_axis_angle(rotation_matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation matrix into an axis-angle ``[ux, uy, uz, angle]``.

    The axis is taken from the skew symmetric part of the matrix,
    :math:`\mathbf{a}=[R_{21}-R_{12}, R_{02}-R_{20}, R_{10}-R_{01}]^T`, and the angle is
    :math:`\text{atan2}(\|\mathbf{a}\|/2, (\text{tr}(\mathbf{R})-1)/2)`, which lies in :math:`[0, \pi]`.

    When :math:`\|\mathbf{a}\|` is below :data:`ANGLE_EPSILON` the rotation is either the zero rotation (returned as
    ``[1, 0, 0, 0]``) or a half turn.  For a half turn the axis is recovered from the symmetric part of the matrix using
    its largest diagonal term.

    :param rotation_matrix: the rotation matrix to convert
    :return: the axis-angle as a length 4 array
    """

    matrix = _check_matrix_array_and_shape(rotation_matrix)

    if _contains_nan(matrix):
        return np.full(4, np.nan)

    (m00, m01, m02), (m10, m11, m12), (m20, m21, m22) = matrix

    axis = np.array([m21 - m12, m02 - m20, m10 - m01])

    sin_norm = np.linalg.norm(axis)

    if sin_norm > ANGLE_EPSILON:
        angle = np.arctan2(0.5 * sin_norm, 0.5 * (m00 + m11 + m22 - 1.0))
        return np.concatenate([axis / sin_norm, [angle]])

    if m00 + m11 + m22 > 1.0:
        return _zero_axis_angle()

    # half turn
    xx = 0.5 * (m00 + 1.0)
    yy = 0.5 * (m11 + 1.0)
    zz = 0.5 * (m22 + 1.0)
    xy = 0.25 * (m01 + m10)
    xz = 0.25 * (m02 + m20)
    yz = 0.25 * (m12 + m21)

    if xx > yy and xx > zz:
        x = np.sqrt(xx)
        axis = np.array([x, xy / x, xz / x])
    elif yy > zz:
        y = np.sqrt(yy)
        axis = np.array([xy / y, y, yz / y])
    else:
        z = np.sqrt(zz)
        axis = np.array([xz / z, yz / z, z])

    return np.concatenate([axis, [np.pi]])


def rotmat_to_rotvec(rotation_matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function converts a rotation matrix into a rotation vector by way of :func:`rotmat_to_axis_angle`.

    :param rotation_matrix: the rotation matrix to convert
    :return: the rotation vector
    """

    axis_angle = rotmat_to_axis_angle(rotation_matrix)

    return axis_angle[:3] * axis_angle[3]


def rotmat_to_yaw_pitch_roll(rotation_matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation matrix into yaw, pitch, and roll angles ``[yaw, pitch, roll]``.

    .. math::
        \psi = \text{atan2}(R_{10}, R_{00}) \\
        \theta = \text{atan2}(-R_{20}, \sqrt{R_{00}^2+R_{10}^2}) \\
        \phi = \text{atan2}(R_{21}, R_{22})

    At gimbal lock the roll is 0 and the yaw is
    :math:`\text{atan2}(-R_{01}, R_{11})`.

    :param rotation_matrix: the rotation matrix to convert
    :return: the yaw, pitch, and roll angles in radians
    """

    matrix = _check_matrix_array_and_shape(rotation_matrix)

    if _contains_nan(matrix):
        return np.full(3, np.nan)

    sin_pitch = -matrix[2, 0]
    cos_pitch = np.hypot(matrix[0, 0], matrix[1, 0])

    pitch = np.arctan2(sin_pitch, cos_pitch)

    if cos_pitch < GIMBAL_LOCK_EPSILON:
        yaw = np.arctan2(-matrix[0, 1], matrix[1, 1])
        roll = 0.0
    else:
        yaw = np.arctan2(matrix[1, 0], matrix[0, 0])
        roll = np.arctan2(matrix[2, 1], matrix[2, 2])

    return np.array([yaw, pitch, roll], dtype=np.float64)


# ---------------------------------------------------------------------------------------------------------------------
# axis-angle sources
# ---------------------------------------------------------------------------------------------------------------------


def axis_angle_to_rotmat(axis_angle: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts an axis-angle ``[ux, uy, uz, angle]`` into a rotation matrix using Rodrigues' formula.

    .. math::
        \mathbf{R} = \mathbf{I}_{3\times 3} + \text{sin}(\theta)\left[\hat{\mathbf{x}}\times\right] +
        (1-\text{cos}(\theta))\left[\hat{\mathbf{x}}\times\right]^2

    The axis is normalized first.  A zero angle or an axis shorter than :data:`ANGLE_EPSILON` gives the identity.

    :param axis_angle: the axis-angle to convert
    :return: the rotation matrix
    """

    axis_angle = _check_axis_angle_array_and_shape(axis_angle)

    if _contains_nan(axis_angle):
        return np.full((3, 3), np.nan)

    angle = axis_angle[3]
    axis_norm = np.linalg.norm(axis_angle[:3])

    if abs(angle) < ANGLE_EPSILON or axis_norm < ANGLE_EPSILON:
        return np.eye(3)

    ux, uy, uz = axis_angle[:3] / axis_norm

    sin_angle = np.sin(angle)
    cos_angle = np.cos(angle)
    t = 1.0 - cos_angle

    xz = ux * uz
    xy = ux * uy
    yz = uy * uz

    return np.array([[t * ux * ux + cos_angle, t * xy - sin_angle * uz, t * xz + sin_angle * uy],
                     [t * xy + sin_angle * uz, t * uy * uy + cos_angle, t * yz - sin_angle * ux],
                     [t * xz - sin_angle * uy, t * yz + sin_angle * ux, t * uz * uz + cos_angle]])


def axis_angle_to_quaternion(axis_angle: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts an axis-angle ``[ux, uy, uz, angle]`` into a unit quaternion.

    .. math::
        \mathbf{q}=\left[\begin{array}{c}\text{sin}(\frac{\theta}{2})\frac{\mathbf{u}}{\|\mathbf{u}\|}\\
        \text{cos}(\frac{\theta}{2})\end{array}\right]

    An axis shorter than :data:`AXIS_EPSILON` gives the identity quaternion.

    :param axis_angle: the axis-angle to convert
    :return: the quaternion ``[x, y, z, s]``
    """

    axis_angle = _check_axis_angle_array_and_shape(axis_angle)

    if _contains_nan(axis_angle):
        return np.full(4, np.nan)

    axis_norm = np.linalg.norm(axis_angle[:3])

    if axis_norm < AXIS_EPSILON:
        return np.array([0., 0., 0., 1.])

    half_angle = 0.5 * axis_angle[3]

    return np.concatenate([axis_angle[:3] * (np.sin(half_angle) / axis_norm), [np.cos(half_angle)]])


def axis_angle_to_rotvec(axis_angle: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function converts an axis-angle ``[ux, uy, uz, angle]`` into a rotation vector.

    The axis is normalized first.  An axis shorter than :data:`AXIS_EPSILON` gives the zero vector.

    :param axis_angle: the axis-angle to convert
    :return: the rotation vector
    """

    axis_angle = _check_axis_angle_array_and_shape(axis_angle)

    if _contains_nan(axis_angle):
        return np.full(3, np.nan)

    axis_norm = np.linalg.norm(axis_angle[:3])

    if axis_norm < AXIS_EPSILON:
        return np.zeros(3)

    return axis_angle[:3] * (axis_angle[3] / axis_norm)


def axis_angle_to_yaw_pitch_roll(axis_angle: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function converts an axis-angle into yaw, pitch, and roll angles by way of the quaternion.

    :param axis_angle: the axis-angle to convert
    :return: the yaw, pitch, and roll angles in radians
    """

    return quaternion_to_yaw_pitch_roll(axis_angle_to_quaternion(axis_angle))


# ---------------------------------------------------------------------------------------------------------------------
# rotation vector sources
# ---------------------------------------------------------------------------------------------------------------------


def rotvec_to_rotmat(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation vector :math:`\theta\hat{\mathbf{x}}` into a rotation matrix.

    See :func:`axis_angle_to_rotmat`.  A vector shorter than :data:`ANGLE_EPSILON` gives the identity matrix.

    :param vector: The rotation vector to convert to a rotation matrix
    :return: the rotation matrix
    """

    return axis_angle_to_rotmat(rotvec_to_axis_angle(vector))


def rotvec_to_quaternion(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation vector into a unit quaternion.

    .. math::
        \theta = \|\mathbf{v}\| \\
        \mathbf{q}=\left[\begin{array}{c}\text{sin}(\frac{\theta}{2})\frac{\mathbf{v}}{\theta}\\
        \text{cos}(\frac{\theta}{2})\end{array}\right]

    For vectors shorter than :data:`AXIS_EPSILON` the small angle form :math:`[\mathbf{v}/2, 1]` is normalized instead
    of dividing by the vanishing angle.

    :param vector: The rotation vector to convert
    :return: the quaternion ``[x, y, z, s]``
    """

    vector = _check_vector_array_and_shape(vector)

    if _contains_nan(vector):
        return np.full(4, np.nan)

    angle = np.linalg.norm(vector)

    if angle < AXIS_EPSILON:
        return quaternion_normalize(np.concatenate([0.5 * vector, [1.0]]))

    half_angle = 0.5 * angle

    return np.concatenate([vector * (np.sin(half_angle) / angle), [np.cos(half_angle)]])


def rotvec_to_axis_angle(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function converts a rotation vector into an axis-angle ``[ux, uy, uz, angle]``.

    Vectors shorter than :data:`ANGLE_EPSILON` give the zero axis-angle ``[1, 0, 0, 0]``.

    :param vector: The rotation vector to convert
    :return: the axis-angle as a length 4 array
    """

    vector = _check_vector_array_and_shape(vector)

    if _contains_nan(vector):
        return np.full(4, np.nan)

    angle = np.linalg.norm(vector)

    if angle > ANGLE_EPSILON:
        return np.concatenate([vector / angle, [angle]])

    return _zero_axis_angle()


def rotvec_to_yaw_pitch_roll(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function converts a rotation vector into yaw, pitch, and roll angles by way of the quaternion.

    :param vector: The rotation vector to convert
    :return: the yaw, pitch, and roll angles in radians
    """

    return quaternion_to_yaw_pitch_roll(rotvec_to_quaternion(vector))


# ---------------------------------------------------------------------------------------------------------------------
# yaw-pitch-roll sources
# ---------------------------------------------------------------------------------------------------------------------


def yaw_pitch_roll_to_rotmat(yaw_pitch_roll: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts yaw, pitch, and roll angles into the rotation matrix
    :math:`\mathbf{R}=\mathbf{R}_z(\psi)\mathbf{R}_y(\theta)\mathbf{R}_x(\phi)`.

    :param yaw_pitch_roll: the ``[yaw, pitch, roll]`` angles in radians
    :return: the rotation matrix
    """

    yaw_pitch_roll = _check_vector_array_and_shape(yaw_pitch_roll)

    if _contains_nan(yaw_pitch_roll):
        return np.full((3, 3), np.nan)

    cos_yaw, cos_pitch, cos_roll = np.cos(yaw_pitch_roll)
    sin_yaw, sin_pitch, sin_roll = np.sin(yaw_pitch_roll)

    return np.array([[cos_yaw * cos_pitch,
                      cos_yaw * sin_pitch * sin_roll - sin_yaw * cos_roll,
                      cos_yaw * sin_pitch * cos_roll + sin_yaw * sin_roll],
                     [sin_yaw * cos_pitch,
                      sin_yaw * sin_pitch * sin_roll + cos_yaw * cos_roll,
                      sin_yaw * sin_pitch * cos_roll - cos_yaw * sin_roll],
                     [-sin_pitch, cos_pitch * sin_roll, cos_pitch * cos_roll]])


def yaw_pitch_roll_to_quaternion(yaw_pitch_roll: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts yaw, pitch, and roll angles into a unit quaternion, the product of the elementary
    quaternions :math:`\mathbf{q}_z(\psi)\otimes\mathbf{q}_y(\theta)\otimes\mathbf{q}_x(\phi)` expanded in closed form.

    :param yaw_pitch_roll: the ``[yaw, pitch, roll]`` angles in radians
    :return: the quaternion ``[x, y, z, s]``
    """

    yaw_pitch_roll = _check_vector_array_and_shape(yaw_pitch_roll)

    if _contains_nan(yaw_pitch_roll):
        return np.full(4, np.nan)

    cos_yaw, cos_pitch, cos_roll = np.cos(0.5 * yaw_pitch_roll)
    sin_yaw, sin_pitch, sin_roll = np.sin(0.5 * yaw_pitch_roll)

    qs = cos_yaw * cos_pitch * cos_roll + sin_yaw * sin_pitch * sin_roll
    qx = cos_yaw * cos_pitch * sin_roll - sin_yaw * sin_pitch * cos_roll
    qy = sin_yaw * cos_pitch * sin_roll + cos_yaw * sin_pitch * cos_roll
    qz = sin_yaw * cos_pitch * cos_roll - cos_yaw * sin_pitch * sin_roll

    return np.array([qx, qy, qz, qs], dtype=np.float64)


def yaw_pitch_roll_to_axis_angle(yaw_pitch_roll: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function converts yaw, pitch, and roll angles into an axis-angle by way of the quaternion.

    :param yaw_pitch_roll: the ``[yaw, pitch, roll]`` angles in radians
    :return: the axis-angle as a length 4 array
    """

    return quaternion_to_axis_angle(yaw_pitch_roll_to_quaternion(yaw_pitch_roll))


def yaw_pitch_roll_to_rotvec(yaw_pitch_roll: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function converts yaw, pitch, and roll angles into a rotation vector by way of the quaternion.

    :param yaw_pitch_roll: the ``[yaw, pitch, roll]`` angles in radians
    :return: the rotation vector
    """

    return quaternion_to_rotvec(yaw_pitch_roll_to_quaternion(yaw_pitch_roll))


# ---------------------------------------------------------------------------------------------------------------------
# euler angles (the yaw-pitch-roll sequence written as rotations about x, y, then z)
# ---------------------------------------------------------------------------------------------------------------------


def rotmat_to_euler(rotation_matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the euler angles ``[rx, ry, rz]`` of a rotation matrix, which are ``[roll, pitch, yaw]``.

    :param rotation_matrix: the rotation matrix to convert
    :return: the euler angles in radians
    """
    return rotmat_to_yaw_pitch_roll(rotation_matrix)[::-1].copy()


def quaternion_to_euler(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the euler angles ``[rx, ry, rz]`` of a quaternion, which are ``[roll, pitch, yaw]``.

    :param quaternion: the quaternion to convert
    :return: the euler angles in radians
    """
    return quaternion_to_yaw_pitch_roll(quaternion)[::-1].copy()


def euler_to_rotmat(euler: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Converts the euler angles ``[rx, ry, rz]`` into the rotation matrix :math:`R_z(r_z)R_y(r_y)R_x(r_x)`.

    :param euler: the euler angles in radians
    :return: the rotation matrix
    """
    return yaw_pitch_roll_to_rotmat(_check_vector_array_and_shape(euler)[::-1])


def euler_to_quaternion(euler: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Converts the euler angles ``[rx, ry, rz]`` into a quaternion.

    :param euler: the euler angles in radians
    :return: the quaternion ``[x, y, z, s]``
    """
    return yaw_pitch_roll_to_quaternion(_check_vector_array_and_shape(euler)[::-1])


# ---------------------------------------------------------------------------------------------------------------------
# single angle extraction
# ---------------------------------------------------------------------------------------------------------------------


def _yaw_pitch_roll_of(rotation: ARRAY_LIKE) -> DOUBLE_ARRAY:
    # interpret the data by its size, 4 is a quaternion and 9 is a matrix
    if np.size(rotation) == 4:
        return quaternion_to_yaw_pitch_roll(rotation)
    elif np.size(rotation) == 9:
        return rotmat_to_yaw_pitch_roll(rotation)

    raise ValueError('The rotation must be a quaternion (4 elements) or a rotation matrix (9 elements)')


def compute_yaw(rotation: ARRAY_LIKE) -> float:
    """
    Computes only the yaw angle of a quaternion or a rotation matrix (interpreted by size).

    :param rotation: a quaternion or a rotation matrix
    :return: the yaw angle in radians
    """
    return float(_yaw_pitch_roll_of(rotation)[0])


def compute_pitch(rotation: ARRAY_LIKE) -> float:
    """
    Computes only the pitch angle of a quaternion or a rotation matrix (interpreted by size).

    The result is NaN if the input contains NaN, which can be used to detect degenerate input.

    :param rotation: a quaternion or a rotation matrix
    :return: the pitch angle in radians
    """
    return float(_yaw_pitch_roll_of(rotation)[1])


def compute_roll(rotation: ARRAY_LIKE) -> float:
    """
    Computes only the roll angle of a quaternion or a rotation matrix (interpreted by size).

    :param rotation: a quaternion or a rotation matrix
    :return: the roll angle in radians
    """
    return float(_yaw_pitch_roll_of(rotation)[2])


# ---------------------------------------------------------------------------------------------------------------------
# dispatch
# ---------------------------------------------------------------------------------------------------------------------


_CONVERTERS: dict[tuple[str, str], Callable[[ARRAY_LIKE], DOUBLE_ARRAY]] = {
    ('matrix', 'quaternion'): rotmat_to_quaternion,
    ('matrix', 'axis_angle'): rotmat_to_axis_angle,
    ('matrix', 'rotation_vector'): rotmat_to_rotvec,
    ('matrix', 'yaw_pitch_roll'): rotmat_to_yaw_pitch_roll,
    ('quaternion', 'matrix'): quaternion_to_rotmat,
    ('quaternion', 'axis_angle'): quaternion_to_axis_angle,
    ('quaternion', 'rotation_vector'): quaternion_to_rotvec,
    ('quaternion', 'yaw_pitch_roll'): quaternion_to_yaw_pitch_roll,
    ('axis_angle', 'matrix'): axis_angle_to_rotmat,
    ('axis_angle', 'quaternion'): axis_angle_to_quaternion,
    ('axis_angle', 'rotation_vector'): axis_angle_to_rotvec,
    ('axis_angle', 'yaw_pitch_roll'): axis_angle_to_yaw_pitch_roll,
    ('rotation_vector', 'matrix'): rotvec_to_rotmat,
    ('rotation_vector', 'quaternion'): rotvec_to_quaternion,
    ('rotation_vector', 'axis_angle'): rotvec_to_axis_angle,
    ('rotation_vector', 'yaw_pitch_roll'): rotvec_to_yaw_pitch_roll,
    ('yaw_pitch_roll', 'matrix'): yaw_pitch_roll_to_rotmat,
    ('yaw_pitch_roll', 'quaternion'): yaw_pitch_roll_to_quaternion,
    ('yaw_pitch_roll', 'axis_angle'): yaw_pitch_roll_to_axis_angle,
    ('yaw_pitch_roll', 'rotation_vector'): yaw_pitch_roll_to_rotvec,
}


_SIZES: dict[str, tuple[int, ...]] = {'matrix': (3, 3), 'quaternion': (4,), 'axis_angle': (4,),
                                      'rotation_vector': (3,), 'yaw_pitch_roll': (3,)}


def convert(data: ARRAY_LIKE, source: REPRESENTATIONS, target: REPRESENTATIONS) -> DOUBLE_ARRAY:
    """
    Converts rotation data from the ``source`` representation to the ``target`` representation.

    The representations are named ``'matrix'``, ``'quaternion'``, ``'axis_angle'``, ``'rotation_vector'``, and
    ``'yaw_pitch_roll'`` and use the data layouts described in this module's documentation.  Converting a
    representation to itself returns a copy of the data. For example::

        >>> from so3tools.core import convert
        >>> convert([0, 0, 1, np.pi/2], 'axis_angle', 'matrix').round(12)
        array([[ 0., -1.,  0.],
               [ 1.,  0.,  0.],
               [ 0.,  0.,  1.]])

    :param data: the rotation data in the source representation
    :param source: the name of the representation of ``data``
    :param target: the name of the representation to convert to
    :return: the rotation data in the target representation
    :raises ValueError: if either representation name is unknown
    """

    if source not in _SIZES or target not in _SIZES:
        raise ValueError(f'Unknown rotation representation(s) {source!r}, {target!r}.  '
                         f'Expected one of {list(_SIZES)}')

    if source == target:
        if source == 'matrix':
            return _check_matrix_array_and_shape(data, return_copy=True)
        return np.array(data, dtype=np.float64).reshape(_SIZES[source])

    return _CONVERTERS[(source, target)](data)
