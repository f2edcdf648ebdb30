# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
This module provides the :class:`LinearTransform3D` class, a general 3x3 linear map that also keeps its factorization
into a rotation, a scaling, and a second rotation,

.. math::
    \mathbf{M} = \mathbf{R}(\mathbf{q}_{pre})\text{diag}(\mathbf{s})\mathbf{R}(\mathbf{q}_{post})

where :math:`\mathbf{q}_{pre}` and :math:`\mathbf{q}_{post}` are unit quaternions and the scale
:math:`\mathbf{s}` is sorted by decreasing magnitude, :math:`|s_0|\geq|s_1|\geq|s_2|\geq 0`.  Only the smallest
scale :math:`s_2` may be negative, which is how a reflection (a negative determinant) is represented.

The factorization is computed with a singular value decomposition (:func:`scipy.linalg.svd`) only when it is needed.
Edits that have a closed form effect on the factors (appending or prepending rotations, uniform scaling, transposing)
update the factors directly.  Edits that do not (non-uniform scaling, inversion, setting an arbitrary matrix) mark
the factorization as stale and it is recomputed the next time a factor is requested.

As an :class:`.Orientation3D` the transform represents the rotation
:math:`\mathbf{R}(\mathbf{q}_{pre}\otimes\mathbf{q}_{post})`, the orientation left once the scale is removed.  This is
the rotation factor of the polar decomposition of :math:`\mathbf{M}`, so it does not depend on the scale::

    >>> import numpy as np
    >>> from so3tools import LinearTransform3D, AxisAngle, Quaternion
    >>> transform = LinearTransform3D(AxisAngle([0, 0, 1], 0.3))
    >>> transform.append_scale([2, 0.5, 3])
    >>> transform.append_rotation(AxisAngle([1, 0, 0], 0.2))
    >>> expected = Quaternion(AxisAngle([0, 0, 1], 0.3))
    >>> expected.append(AxisAngle([1, 0, 0], 0.2))
    >>> transform.get_orientation().geometrically_equals(expected, 1e-12)
    True
"""

import logging

import numpy as np

from scipy.linalg import svd

from so3tools._typing import ARRAY_LIKE, DOUBLE_ARRAY, REPRESENTATIONS

from so3tools.core import matrix_tools
from so3tools.core.conversions import convert, quaternion_to_rotmat, rotmat_to_quaternion
from so3tools.core.elementals import quaternion_z
from so3tools.core.quaternion_math import quaternion_normalize, quaternion_multiplication, quaternion_conjugate
from so3tools.core.interop import DenseMatrix
from so3tools.core._helpers import (_check_array_and_shape, _check_matrix_array_and_shape, _check_vector_array_and_shape,
                                    _check_index, _contains_nan)
from so3tools.options import OrientationOptions
from so3tools.orientation import Orientation3D
from so3tools.quaternion import Quaternion
from so3tools.rotation_scale_matrix import RotationScaleMatrix


__all__ = ['LinearTransform3D']


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
This is the logging interface for reporting status, results, issues, and other information.
"""


ROTATION_EPSILON: float = 1e-12
"""
Matrices that are rotation matrices within this tolerance are factored directly as ``(q(M), [1, 1, 1], identity)``
instead of through the singular value decomposition.
"""


_IDENTITY_QUATERNION = np.array([0., 0., 0., 1.])


class LinearTransform3D(Orientation3D):
    """
    A general 3x3 linear transformation with its rotation/scale/rotation factorization.

    The transform can be initialized from nothing (the identity), a 3x3 array, a :class:`.DenseMatrix`, another
    :class:`LinearTransform3D`, a :class:`.RotationScaleMatrix` (its full matrix is used), or any other rotation.

    The orientation methods inherited from :class:`.Orientation3D` work on the rotation part.  The composition methods
    (:meth:`append`, :meth:`prepend` and their inverting variants, also available as :meth:`append_rotation`,
    :meth:`prepend_rotation`, ...) multiply the full matrix by the rotation, with the inverse of this transform being
    its full matrix inverse.
    """

    representation: REPRESENTATIONS = 'quaternion'

    _shape = (3, 3)

    def __init__(self, data: Orientation3D | DenseMatrix | ARRAY_LIKE | None = None, *,
                 options: OrientationOptions | None = None):
        """
        :param data: the transform to initialize with, see :meth:`set`
        :param options: the tolerances to use for this instance
        """

        super().__init__(options=options)

        self._matrix: DOUBLE_ARRAY = np.eye(3)
        """
        The full 3x3 matrix of the transform.  This is always up to date.
        """

        self._pre_quaternion: DOUBLE_ARRAY = _IDENTITY_QUATERNION.copy()
        """
        The quaternion of the rotation applied after the scale
        """

        self._scale: DOUBLE_ARRAY = np.ones(3)
        """
        The scale sorted by decreasing magnitude
        """

        self._post_quaternion: DOUBLE_ARRAY = _IDENTITY_QUATERNION.copy()
        """
        The quaternion of the rotation applied before the scale
        """

        self._dirty: bool = False
        """
        Whether the factors are stale and need to be recomputed from :attr:`_matrix`
        """

        if data is not None:
            self.set(data)

    # -----------------------------------------------------------------------------------------------------------------
    # state
    # -----------------------------------------------------------------------------------------------------------------

    def _native(self) -> DOUBLE_ARRAY:
        return self.get_as_quaternion()

    def _set_native(self, data: DOUBLE_ARRAY) -> None:

        quaternion = quaternion_normalize(data)

        self._pre_quaternion = quaternion
        self._scale = np.ones(3)
        self._post_quaternion = _IDENTITY_QUATERNION.copy()
        self._matrix = quaternion_to_rotmat(quaternion)
        self._dirty = False

    def _set_data(self, data: ARRAY_LIKE) -> None:

        self._matrix = np.array(_check_matrix_array_and_shape(data), dtype=np.float64)
        self._dirty = True

    def _flat_data(self) -> DOUBLE_ARRAY:
        return self._matrix

    def set(self, other: Orientation3D | DenseMatrix | ARRAY_LIKE) -> None:
        """
        Sets this transform.

        * Another :class:`LinearTransform3D` is copied along with its factors.
        * The full matrix of a :class:`.RotationScaleMatrix` is used.
        * Any other rotation gives a pure rotation with a scale of 1.
        * A :class:`.DenseMatrix` or an array is taken as the 3x3 matrix, which does not need to be invertible.

        :param other: the transform to copy
        """

        if isinstance(other, LinearTransform3D):
            self._matrix = other._matrix.copy()
            self._pre_quaternion = other._pre_quaternion.copy()
            self._scale = other._scale.copy()
            self._post_quaternion = other._post_quaternion.copy()
            self._dirty = other._dirty
        elif isinstance(other, RotationScaleMatrix):
            self._set_data(other.matrix)
        elif isinstance(other, Orientation3D):
            super().set(other)
        elif isinstance(other, DenseMatrix):
            self.set_from_dense(other)
        else:
            self._set_data(other)

    def _update(self) -> None:
        """
        Recomputes the factors if they are stale.
        """

        if self._dirty:
            self._decompose()

    def _decompose(self) -> None:
        """
        Factors :attr:`_matrix` into the pre rotation, the sorted scale, and the post rotation.
        """

        self._dirty = False

        if _contains_nan(self._matrix):
            _LOGGER.debug('The matrix contains NaN, the factors are set to NaN')
            self._pre_quaternion = np.full(4, np.nan)
            self._scale = np.full(3, np.nan)
            self._post_quaternion = np.full(4, np.nan)
            return

        if matrix_tools.is_rotation_matrix(self._matrix, ROTATION_EPSILON):
            self._pre_quaternion = quaternion_normalize(rotmat_to_quaternion(self._matrix))
            self._scale = np.ones(3)
            self._post_quaternion = _IDENTITY_QUATERNION.copy()
            return

        _LOGGER.debug('Factoring the matrix\n%s', self._matrix)

        # singular values come back sorted in decreasing order
        left, singular_values, right = svd(self._matrix)

        # keep both rotations proper, any reflection ends up in the smallest scale
        if matrix_tools.determinant(left) < 0:
            left[:, 2] *= -1
            singular_values[2] *= -1
        if matrix_tools.determinant(right) < 0:
            right[2] *= -1
            singular_values[2] *= -1

        if abs(singular_values[2]) <= matrix_tools.SINGULAR_EPSILON * singular_values[0]:
            _LOGGER.debug('The matrix is rank deficient, its smallest scale is %s', singular_values[2])

        self._pre_quaternion = quaternion_normalize(rotmat_to_quaternion(left))
        self._scale = singular_values
        self._post_quaternion = quaternion_normalize(rotmat_to_quaternion(right))

    def _compose_factors(self) -> DOUBLE_ARRAY:
        return (quaternion_to_rotmat(self._pre_quaternion) * self._scale) @ quaternion_to_rotmat(self._post_quaternion)

    # -----------------------------------------------------------------------------------------------------------------
    # factors
    # -----------------------------------------------------------------------------------------------------------------

    @property
    def matrix(self) -> DOUBLE_ARRAY:
        """
        A copy of the full 3x3 matrix of the transform.
        """
        return self._matrix.copy()

    def get_scale(self) -> DOUBLE_ARRAY:
        """
        :return: a copy of the scale, sorted by decreasing magnitude with only the last element possibly negative
        """

        self._update()

        return self._scale.copy()

    def get_pre_scale_quaternion(self) -> DOUBLE_ARRAY:
        """
        :return: a copy of the quaternion of the rotation applied after the scale
        """

        self._update()

        return self._pre_quaternion.copy()

    def get_post_scale_quaternion(self) -> DOUBLE_ARRAY:
        """
        :return: a copy of the quaternion of the rotation applied before the scale
        """

        self._update()

        return self._post_quaternion.copy()

    def get_as_quaternion(self) -> DOUBLE_ARRAY:
        """
        :return: the quaternion of the rotation part of the transform, the product of the pre and post quaternions
        """

        self._update()

        return quaternion_normalize(quaternion_multiplication(self._pre_quaternion, self._post_quaternion))

    def get_orientation(self) -> Quaternion:
        """
        :return: the rotation part of the transform as a :class:`.Quaternion`
        """

        orientation = Quaternion(options=self.original_options)
        orientation.set_unsafe(self.get_as_quaternion())

        return orientation

    def reset_scale(self) -> None:
        """
        Sets the scale to ``[1, 1, 1]``, leaving the pure rotation returned by :meth:`get_as_quaternion`.
        """

        self._set_native(self.get_as_quaternion())

    # -----------------------------------------------------------------------------------------------------------------
    # edits
    # -----------------------------------------------------------------------------------------------------------------

    def _compose_with(self, data: DOUBLE_ARRAY, representation: REPRESENTATIONS, prepend: bool,
                      invert_this: bool, invert_other: bool) -> None:

        if invert_this:
            self.invert()

        quaternion = quaternion_normalize(convert(data, representation, 'quaternion'))

        if invert_other:
            quaternion = quaternion_conjugate(quaternion)

        rotation = quaternion_to_rotmat(quaternion)

        if prepend:
            self._matrix = matrix_tools.multiply(rotation, self._matrix)
            if not self._dirty:
                self._pre_quaternion = quaternion_normalize(quaternion_multiplication(quaternion,
                                                                                      self._pre_quaternion))
        else:
            self._matrix = matrix_tools.multiply(self._matrix, rotation)
            if not self._dirty:
                self._post_quaternion = quaternion_normalize(quaternion_multiplication(self._post_quaternion,
                                                                                       quaternion))

    append_rotation = Orientation3D.append
    append_rotation_invert_other = Orientation3D.append_invert_other
    append_rotation_invert_this = Orientation3D.append_invert_this
    append_rotation_invert_both = Orientation3D.append_invert_both
    prepend_rotation = Orientation3D.prepend
    prepend_rotation_invert_other = Orientation3D.prepend_invert_other
    prepend_rotation_invert_this = Orientation3D.prepend_invert_this
    prepend_rotation_invert_both = Orientation3D.prepend_invert_both

    def _uniform_scale(self, factor: float) -> None:

        self._matrix = self._matrix * factor

        if self._dirty:
            return

        self._scale = self._scale * factor

        if factor < 0:
            # diag(c*s) = Rz(pi) diag(-c*s0, -c*s1, c*s2)
            self._scale[:2] *= -1
            self._pre_quaternion = quaternion_normalize(quaternion_multiplication(self._pre_quaternion,
                                                                                  quaternion_z(np.pi)))

    def _scale_factors(self, scale: float | ARRAY_LIKE) -> float | DOUBLE_ARRAY:
        if np.ndim(scale) == 0:
            return float(scale)

        scale = _check_vector_array_and_shape(scale).ravel()

        if scale[0] == scale[1] == scale[2]:
            return float(scale[0])

        return scale

    def append_scale(self, scale: float | ARRAY_LIKE) -> None:
        """
        Replaces this transform ``M`` with ``M*diag(scale)``.

        A uniform scale (a scalar or three equal values) updates the factors directly.  A non-uniform scale requires
        the factors to be recomputed.

        :param scale: the scale factor or the three scale factors
        """

        factors = self._scale_factors(scale)

        if isinstance(factors, float):
            self._uniform_scale(factors)
        else:
            self._matrix = self._matrix * factors
            self._dirty = True

    def prepend_scale(self, scale: float | ARRAY_LIKE) -> None:
        """
        Replaces this transform ``M`` with ``diag(scale)*M``.

        A uniform scale (a scalar or three equal values) updates the factors directly.  A non-uniform scale requires
        the factors to be recomputed.

        :param scale: the scale factor or the three scale factors
        """

        factors = self._scale_factors(scale)

        if isinstance(factors, float):
            self._uniform_scale(factors)
        else:
            self._matrix = factors.reshape(3, 1) * self._matrix
            self._dirty = True

    def invert(self) -> None:
        """
        Replaces the transform with its matrix inverse.

        :raises SingularMatrixError: if the matrix is singular
        """

        self._matrix = matrix_tools.invert(self._matrix)
        self._dirty = True

    def transpose(self) -> None:
        """
        Transposes the transform in place.  The scale is unchanged and the pre and post rotations trade places
        (inverted).
        """

        self._matrix = self._matrix.T.copy()

        if not self._dirty:
            self._pre_quaternion, self._post_quaternion = (quaternion_conjugate(self._post_quaternion),
                                                           quaternion_conjugate(self._pre_quaternion))

    def set_and_normalize(self, other: Orientation3D | DenseMatrix | ARRAY_LIKE) -> None:
        """
        Sets this transform, see :meth:`set`.  The matrix of a transform has no invariant to restore, so this is the
        same as :meth:`set`.

        :param other: the transform to copy
        """

        self.set(other)

    def set_identity(self) -> None:
        """
        Sets the transform to the identity, a pure rotation with a scale of 1.
        """

        self._set_native(_IDENTITY_QUATERNION)

    def set_to_zero(self) -> None:
        """
        Sets every element of the matrix to 0.

        The factors are an identity pre and post rotation with a scale of ``[0, 0, 0]``, so the orientation is the
        zero rotation while :meth:`is_identity` and :meth:`is_rotation_matrix` are both ``False``.
        """

        self._matrix = np.zeros((3, 3))
        self._pre_quaternion = _IDENTITY_QUATERNION.copy()
        self._scale = np.zeros(3)
        self._post_quaternion = _IDENTITY_QUATERNION.copy()
        self._dirty = False

    def set_to_nan(self) -> None:

        self._matrix = np.full((3, 3), np.nan)
        self._pre_quaternion = np.full(4, np.nan)
        self._scale = np.full(3, np.nan)
        self._post_quaternion = np.full(4, np.nan)
        self._dirty = False

    # -----------------------------------------------------------------------------------------------------------------
    # queries
    # -----------------------------------------------------------------------------------------------------------------

    def contains_nan(self) -> bool:
        return _contains_nan(self._matrix)

    def is_identity(self, epsilon: float | None = None) -> bool:
        """
        :param epsilon: the element-wise tolerance, defaults to :attr:`identity_epsilon`
        :return: ``True`` if the matrix is the identity matrix
        """

        epsilon = self.identity_epsilon if epsilon is None else epsilon

        return matrix_tools.is_identity(self._matrix, epsilon)

    def is_rotation_matrix(self, epsilon: float | None = None) -> bool:
        """
        :param epsilon: the tolerance, defaults to :attr:`rotation_matrix_epsilon`
        :return: ``True`` if the matrix is a rotation matrix (no scale and no reflection)
        """

        epsilon = self.rotation_matrix_epsilon if epsilon is None else epsilon

        return matrix_tools.is_rotation_matrix(self._matrix, epsilon)

    def determinant(self) -> float:
        """
        :return: the determinant of the matrix
        """
        return matrix_tools.determinant(self._matrix)

    def transform(self, vectors: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        Applies the full transform (rotation and scale) to a vector or to the columns of a 3xn array.

        :param vectors: the vector(s) to transform
        :return: the transformed vector(s)
        """

        return self._matrix @ _check_array_and_shape(vectors, first_axis_length=3)

    def inverse_transform(self, vectors: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        Applies the inverse of the full transform to a vector or to the columns of a 3xn array.

        :param vectors: the vector(s) to transform
        :return: the transformed vector(s)
        :raises SingularMatrixError: if the matrix is singular
        """

        return matrix_tools.invert(self._matrix) @ _check_array_and_shape(vectors, first_axis_length=3)

    def epsilon_equals(self, other: Orientation3D | ARRAY_LIKE, epsilon: float) -> bool:
        """
        Element-wise comparison of the full matrices.

        :param other: another transform, a rotation, or a 3x3 matrix
        :param epsilon: the element-wise tolerance
        :return: ``True`` if every element differs by at most ``epsilon``
        """

        if isinstance(other, (LinearTransform3D, RotationScaleMatrix)):
            other = other.matrix
        elif isinstance(other, Orientation3D):
            other = other.as_rotation_matrix()

        return matrix_tools.epsilon_equals(self._matrix, _check_matrix_array_and_shape(other), epsilon)

    def get_element(self, row: int, column: int) -> float:
        """
        :param row: the row index in [0, 2]
        :param column: the column index in [0, 2]
        :return: the element of the matrix at ``(row, column)``
        :raises IndexError: if either index is outside [0, 2]
        """

        return float(self._matrix[_check_index(row, 3), _check_index(column, 3)])

    def __getitem__(self, index: tuple[int, int]) -> float:

        row, column = index

        return self.get_element(row, column)

    def __eq__(self, other) -> bool:

        if not isinstance(other, LinearTransform3D):
            return NotImplemented

        return bool(np.array_equal(self._matrix, other._matrix))

    def __repr__(self) -> str:
        return 'LinearTransform3D({0!r})'.format(self._matrix)

    def __str__(self) -> str:
        return str(self._matrix)
