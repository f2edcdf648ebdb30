# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module provides the :class:`Orientation3D` abstract base class, the contract shared by every rotation type in
so3tools.

Each concrete type stores its rotation in one representation (its :attr:`~Orientation3D.representation`) and
everything else (setting from another type, getting as another representation, composing, transforming vectors,
and comparing) goes through the pairwise conversions in :mod:`so3tools.core.conversions`.  This means any rotation
type can be set from, composed with, or compared against any other::

    >>> import numpy as np
    >>> from so3tools import RotationMatrix, AxisAngle, YawPitchRoll
    >>> matrix = RotationMatrix(AxisAngle([0, 0, 1], np.pi/2))
    >>> matrix.append(YawPitchRoll([0, 0, np.pi/2]))
    >>> np.round(matrix.as_yaw_pitch_roll(), 12)
    array([1.57079633, 0.        , 1.57079633])

Composition
-----------

For ``A`` the instance the method is called on and ``B`` the argument, the composition methods replace ``A`` with

================================  =======================
Method                            Result
================================  =======================
:meth:`~.append`                  :math:`A B`
:meth:`~.append_invert_other`     :math:`A B^{-1}`
:meth:`~.append_invert_this`      :math:`A^{-1} B`
:meth:`~.append_invert_both`      :math:`A^{-1} B^{-1}`
:meth:`~.prepend`                 :math:`B A`
:meth:`~.prepend_invert_other`    :math:`B^{-1} A`
:meth:`~.prepend_invert_this`     :math:`B A^{-1}`
:meth:`~.prepend_invert_both`     :math:`B^{-1} A^{-1}`
================================  =======================

where the products are products of the rotation matrices (or equivalently Hamilton products of the quaternions).
"""

from abc import abstractmethod

import copy

from typing import Self

import numpy as np

from so3tools._typing import ARRAY_LIKE, DOUBLE_ARRAY, REPRESENTATIONS

from so3tools.core.conversions import convert
from so3tools.core.elementals import quaternion_x, quaternion_y, quaternion_z
from so3tools.core.quaternion_math import (quaternion_conjugate, quaternion_multiplication, quaternion_normalize,
                                           quaternion_angle)
from so3tools.core.matrix_tools import check_rotation_matrix
from so3tools.core.interop import DenseMatrix, read_flat, write_flat, read_dense, write_dense
from so3tools.core._helpers import _check_array_and_shape, _check_vector_array_and_shape, _contains_nan
from so3tools.exceptions import NotAnOrientation2DError
from so3tools.options import OrientationOptions
from so3tools.utilities.mixin_classes import UserOptionConfigured


__all__ = ['Orientation3D']


_IDENTITY_QUATERNION = np.array([0., 0., 0., 1.])


class Orientation3D(UserOptionConfigured[OrientationOptions], OrientationOptions):
    """
    The abstract base class for every rotation type.

    Subclasses set the :attr:`representation` and :attr:`_shape` class attributes and implement :meth:`_native`,
    :meth:`_set_native`, and :meth:`_set_data`.  All other behavior is provided here in terms of those three methods
    and can be overridden where a representation allows something cheaper or more accurate (for instance
    :class:`.RotationMatrix` composes with matrix products instead of quaternion products).

    The tolerances used when a method is called without an explicit ``epsilon`` come from the
    :class:`.OrientationOptions` the instance was created with.
    """

    representation: REPRESENTATIONS
    """
    The name of the representation the rotation is stored in, as understood by :func:`.convert`.
    """

    _shape: tuple[int, ...]
    """
    The shape of the data accepted by :meth:`set` and exchanged with flat arrays and dense matrices.
    """

    def __init__(self, options: OrientationOptions | None = None) -> None:
        """
        :param options: the tolerances to use for this instance
        """

        super().__init__(OrientationOptions, options=options)

    # -----------------------------------------------------------------------------------------------------------------
    # representation hooks
    # -----------------------------------------------------------------------------------------------------------------

    @abstractmethod
    def _native(self) -> DOUBLE_ARRAY:
        """
        Returns the stored rotation data in :attr:`representation`.  The returned array must not be modified.
        """

    @abstractmethod
    def _set_native(self, data: DOUBLE_ARRAY) -> None:
        """
        Stores rotation data already in :attr:`representation` without any validation.
        """

    @abstractmethod
    def _set_data(self, data: ARRAY_LIKE) -> None:
        """
        Validates and stores user supplied data in :attr:`representation`.
        """

    def _flat_data(self) -> DOUBLE_ARRAY:
        """
        The data written by :meth:`get_into_array` and :meth:`get_into_dense`.
        """
        return self._native()

    def _check_data(self, data: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        Checks that ``data`` has :attr:`_shape` (or the matching number of elements) and returns it as a new array.
        """

        array = np.array(data, dtype=np.float64)

        if array.size != np.prod(self._shape):
            raise ValueError(f'{type(self).__name__} data must have shape {self._shape}, got {array.shape}')

        return array.reshape(self._shape)

    # -----------------------------------------------------------------------------------------------------------------
    # setters
    # -----------------------------------------------------------------------------------------------------------------

    def set(self, other: 'Orientation3D | ARRAY_LIKE') -> None:
        """
        Sets this rotation from another rotation of any type, or from data in this type's representation.

        Data is validated before it is stored, see the individual types for what is checked.

        :param other: the rotation to copy
        """

        if isinstance(other, Orientation3D):
            self._set_native(convert(other._native(), other.representation, self.representation))
        else:
            self._set_data(other)

    def set_quaternion(self, quaternion: ARRAY_LIKE) -> None:
        """
        Sets this rotation from a quaternion ``[x, y, z, s]``, which is normalized first.

        :param quaternion: the quaternion
        """

        self._set_native(convert(quaternion_normalize(quaternion), 'quaternion', self.representation))

    def set_rotation_matrix(self, matrix: ARRAY_LIKE) -> None:
        """
        Sets this rotation from a rotation matrix.

        :param matrix: the 3x3 (or flat row-major 9 element) rotation matrix
        :raises NotARotationMatrixError: if the matrix is not a rotation matrix within
                                         :attr:`rotation_matrix_epsilon`
        """

        self._set_native(convert(check_rotation_matrix(matrix, self.rotation_matrix_epsilon), 'matrix',
                                 self.representation))

    def set_axis_angle(self, axis: ARRAY_LIKE, angle: float) -> None:
        """
        Sets this rotation to a rotation of ``angle`` radians about ``axis``.

        The axis does not need to be normalized.  An axis of zero length gives the zero rotation.

        :param axis: the rotation axis
        :param angle: the rotation angle in radians
        """

        self._set_native(convert(np.concatenate([_check_vector_array_and_shape(axis), [angle]]), 'axis_angle',
                                 self.representation))

    def set_rotation_vector(self, vector: ARRAY_LIKE) -> None:
        """
        Sets this rotation from a rotation vector (the rotation angle times the unit rotation axis).

        :param vector: the rotation vector
        """

        self._set_native(convert(_check_vector_array_and_shape(vector), 'rotation_vector', self.representation))

    def set_yaw_pitch_roll(self, yaw: float, pitch: float, roll: float) -> None:
        r"""
        Sets this rotation from yaw, pitch, and roll angles, :math:`\mathbf{R}_z(yaw)\mathbf{R}_y(pitch)
        \mathbf{R}_x(roll)`.

        :param yaw: the rotation about the z axis in radians
        :param pitch: the rotation about the y axis in radians
        :param roll: the rotation about the x axis in radians
        """

        self._set_native(convert(np.array([yaw, pitch, roll], dtype=np.float64), 'yaw_pitch_roll',
                                 self.representation))

    def set_euler(self, euler: ARRAY_LIKE) -> None:
        """
        Sets this rotation from an euler angle vector ``[rx, ry, rz]``, which is ``[roll, pitch, yaw]``.

        :param euler: the euler angles in radians
        """

        roll, pitch, yaw = _check_vector_array_and_shape(euler)

        self.set_yaw_pitch_roll(yaw, pitch, roll)

    def set_to_yaw_orientation(self, yaw: float) -> None:
        """
        Sets this rotation to a rotation of ``yaw`` radians about the z axis.

        :param yaw: the angle in radians
        """

        self._set_native(convert(quaternion_z(yaw), 'quaternion', self.representation))

    def set_to_pitch_orientation(self, pitch: float) -> None:
        """
        Sets this rotation to a rotation of ``pitch`` radians about the y axis.

        :param pitch: the angle in radians
        """

        self._set_native(convert(quaternion_y(pitch), 'quaternion', self.representation))

    def set_to_roll_orientation(self, roll: float) -> None:
        """
        Sets this rotation to a rotation of ``roll`` radians about the x axis.

        :param roll: the angle in radians
        """

        self._set_native(convert(quaternion_x(roll), 'quaternion', self.representation))

    def set_to_zero(self) -> None:
        """
        Sets this rotation to the zero (identity) rotation.
        """

        self._set_native(convert(_IDENTITY_QUATERNION, 'quaternion', self.representation))

    def set_to_nan(self) -> None:
        """
        Sets every component to NaN, marking the rotation as not to be trusted.
        """

        self._set_native(np.full(np.shape(self._native()), np.nan))

    def set_and_invert(self, other: 'Orientation3D | ARRAY_LIKE') -> None:
        """
        Sets this rotation to the inverse of ``other``.

        :param other: the rotation to invert, see :meth:`set`
        """

        self.set(other)
        self.invert()

    def set_and_normalize(self, other: 'Orientation3D | ARRAY_LIKE') -> None:
        """
        Sets this rotation from ``other`` without validating it and then normalizes it.

        :param other: the rotation to copy, either another rotation or data in this type's representation
        """

        if isinstance(other, Orientation3D):
            self.set(other)
        else:
            self._set_native(self._check_data(other))

        self.normalize()

    def set_from_array(self, array: ARRAY_LIKE, start: int = 0) -> None:
        """
        Sets this rotation from a flat buffer (row-major for matrices) starting at index ``start``.

        :param array: the flat buffer
        :param start: the index of the first element
        :raises IndexError: if the buffer is too short
        """

        self.set(read_flat(array, int(np.prod(self._shape)), start).reshape(self._shape))

    def get_into_array(self, array: ARRAY_LIKE, start: int = 0) -> None:
        """
        Writes this rotation into a flat buffer (row-major for matrices) starting at index ``start``.

        :param array: the flat buffer to write into
        :param start: the index of the first element
        :raises IndexError: if the buffer is too short
        """

        write_flat(self._flat_data(), array, start)

    def set_from_dense(self, matrix: DenseMatrix, start_row: int = 0, start_column: int = 0) -> None:
        """
        Sets this rotation from a block of a dense matrix with its upper left element at
        ``(start_row, start_column)``.

        Matrix types read a 3x3 block, the other types read a column.

        :param matrix: the dense matrix
        :param start_row: the row of the first element
        :param start_column: the column of the first element
        :raises IndexError: if the block does not fit in the dense matrix
        """

        shape = self._shape if len(self._shape) == 2 else (self._shape[0], 1)

        self.set(read_dense(matrix, shape, start_row, start_column).reshape(self._shape))

    def get_into_dense(self, matrix: DenseMatrix, start_row: int = 0, start_column: int = 0) -> None:
        """
        Writes this rotation into a dense matrix with its upper left element at ``(start_row, start_column)``.

        Matrix types write a 3x3 block, the other types write a column.

        :param matrix: the dense matrix to write into
        :param start_row: the row of the first element
        :param start_column: the column of the first element
        :raises IndexError: if the block does not fit in the dense matrix
        """

        write_dense(self._flat_data(), matrix, start_row, start_column)

    # -----------------------------------------------------------------------------------------------------------------
    # getters
    # -----------------------------------------------------------------------------------------------------------------

    def as_quaternion(self) -> DOUBLE_ARRAY:
        """
        :return: this rotation as a quaternion ``[x, y, z, s]``
        """
        return convert(self._native(), self.representation, 'quaternion')

    def as_rotation_matrix(self) -> DOUBLE_ARRAY:
        """
        :return: this rotation as a 3x3 rotation matrix
        """
        return convert(self._native(), self.representation, 'matrix')

    def as_axis_angle(self) -> DOUBLE_ARRAY:
        """
        :return: this rotation as an axis-angle ``[ux, uy, uz, angle]``
        """
        return convert(self._native(), self.representation, 'axis_angle')

    def as_rotation_vector(self) -> DOUBLE_ARRAY:
        """
        :return: this rotation as a rotation vector
        """
        return convert(self._native(), self.representation, 'rotation_vector')

    def as_yaw_pitch_roll(self) -> DOUBLE_ARRAY:
        """
        :return: this rotation as ``[yaw, pitch, roll]`` in radians
        """
        return convert(self._native(), self.representation, 'yaw_pitch_roll')

    def as_euler(self) -> DOUBLE_ARRAY:
        """
        :return: this rotation as an euler angle vector ``[roll, pitch, yaw]`` in radians
        """
        return self.as_yaw_pitch_roll()[::-1].copy()

    @property
    def yaw(self) -> float:
        """
        The yaw angle (about the z axis) of this rotation in radians.
        """
        return float(self.as_yaw_pitch_roll()[0])

    @property
    def pitch(self) -> float:
        """
        The pitch angle (about the y axis) of this rotation in radians.
        """
        return float(self.as_yaw_pitch_roll()[1])

    @property
    def roll(self) -> float:
        """
        The roll angle (about the x axis) of this rotation in radians.
        """
        return float(self.as_yaw_pitch_roll()[2])

    # -----------------------------------------------------------------------------------------------------------------
    # composition
    # -----------------------------------------------------------------------------------------------------------------

    def _compose_with(self, data: DOUBLE_ARRAY, representation: REPRESENTATIONS, prepend: bool,
                      invert_this: bool, invert_other: bool) -> None:
        """
        Replaces this rotation with its product with the rotation ``data`` given in ``representation``.

        The product is ``this*other`` unless ``prepend`` is ``True`` in which case it is ``other*this``.  Either
        operand is inverted first when the matching flag is set.
        """

        this = self.as_quaternion()
        other = convert(data, representation, 'quaternion')

        if invert_this:
            this = quaternion_conjugate(this)
        if invert_other:
            other = quaternion_conjugate(other)

        if prepend:
            self.set_quaternion(quaternion_multiplication(other, this))
        else:
            self.set_quaternion(quaternion_multiplication(this, other))

    def append(self, other: 'Orientation3D') -> None:
        """
        Replaces this rotation ``A`` with ``A*B`` where ``B`` is ``other``.

        :param other: the rotation to append
        """
        self._compose_with(other._native(), other.representation, False, False, False)

    def append_invert_other(self, other: 'Orientation3D') -> None:
        """
        Replaces this rotation ``A`` with ``A*inv(B)`` where ``B`` is ``other``.

        :param other: the rotation whose inverse is appended
        """
        self._compose_with(other._native(), other.representation, False, False, True)

    def append_invert_this(self, other: 'Orientation3D') -> None:
        """
        Replaces this rotation ``A`` with ``inv(A)*B`` where ``B`` is ``other``.

        :param other: the rotation to append
        """
        self._compose_with(other._native(), other.representation, False, True, False)

    def append_invert_both(self, other: 'Orientation3D') -> None:
        """
        Replaces this rotation ``A`` with ``inv(A)*inv(B)`` where ``B`` is ``other``.

        :param other: the rotation whose inverse is appended
        """
        self._compose_with(other._native(), other.representation, False, True, True)

    def prepend(self, other: 'Orientation3D') -> None:
        """
        Replaces this rotation ``A`` with ``B*A`` where ``B`` is ``other``.

        :param other: the rotation to prepend
        """
        self._compose_with(other._native(), other.representation, True, False, False)

    def prepend_invert_other(self, other: 'Orientation3D') -> None:
        """
        Replaces this rotation ``A`` with ``inv(B)*A`` where ``B`` is ``other``.

        :param other: the rotation whose inverse is prepended
        """
        self._compose_with(other._native(), other.representation, True, False, True)

    def prepend_invert_this(self, other: 'Orientation3D') -> None:
        """
        Replaces this rotation ``A`` with ``B*inv(A)`` where ``B`` is ``other``.

        :param other: the rotation to prepend
        """
        self._compose_with(other._native(), other.representation, True, True, False)

    def prepend_invert_both(self, other: 'Orientation3D') -> None:
        """
        Replaces this rotation ``A`` with ``inv(B)*inv(A)`` where ``B`` is ``other``.

        :param other: the rotation whose inverse is prepended
        """
        self._compose_with(other._native(), other.representation, True, True, True)

    def append_yaw_rotation(self, yaw: float) -> None:
        """
        Appends a rotation of ``yaw`` radians about the z axis, ``A*Rz(yaw)``.
        """
        self._compose_with(quaternion_z(yaw), 'quaternion', False, False, False)

    def append_pitch_rotation(self, pitch: float) -> None:
        """
        Appends a rotation of ``pitch`` radians about the y axis, ``A*Ry(pitch)``.
        """
        self._compose_with(quaternion_y(pitch), 'quaternion', False, False, False)

    def append_roll_rotation(self, roll: float) -> None:
        """
        Appends a rotation of ``roll`` radians about the x axis, ``A*Rx(roll)``.
        """
        self._compose_with(quaternion_x(roll), 'quaternion', False, False, False)

    def prepend_yaw_rotation(self, yaw: float) -> None:
        """
        Prepends a rotation of ``yaw`` radians about the z axis, ``Rz(yaw)*A``.
        """
        self._compose_with(quaternion_z(yaw), 'quaternion', True, False, False)

    def prepend_pitch_rotation(self, pitch: float) -> None:
        """
        Prepends a rotation of ``pitch`` radians about the y axis, ``Ry(pitch)*A``.
        """
        self._compose_with(quaternion_y(pitch), 'quaternion', True, False, False)

    def prepend_roll_rotation(self, roll: float) -> None:
        """
        Prepends a rotation of ``roll`` radians about the x axis, ``Rx(roll)*A``.
        """
        self._compose_with(quaternion_x(roll), 'quaternion', True, False, False)

    def invert(self) -> None:
        """
        Replaces this rotation with its inverse.
        """

        self.set_quaternion(quaternion_conjugate(self.as_quaternion()))

    def normalize(self) -> None:
        """
        Restores the invariants of the representation after numerical drift.

        Representations without an invariant leave the data unchanged.
        """

    # -----------------------------------------------------------------------------------------------------------------
    # vectors
    # -----------------------------------------------------------------------------------------------------------------

    def transform(self, vectors: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        Rotates a vector (length 3) or several vectors (stored as the columns of a 3xn array) by this rotation.

        :param vectors: the vector(s) to rotate
        :return: the rotated vector(s)
        """

        return self.as_rotation_matrix() @ _check_array_and_shape(vectors, first_axis_length=3)

    def inverse_transform(self, vectors: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        Rotates a vector (length 3) or several vectors (stored as the columns of a 3xn array) by the inverse of this
        rotation.

        :param vectors: the vector(s) to rotate
        :return: the rotated vector(s)
        """

        return self.as_rotation_matrix().T @ _check_array_and_shape(vectors, first_axis_length=3)

    # -----------------------------------------------------------------------------------------------------------------
    # queries
    # -----------------------------------------------------------------------------------------------------------------

    def angle(self, limit_to_pi: bool = False) -> float:
        """
        The angle of this rotation.

        :param limit_to_pi: whether to return the angle of the shorter of the two equivalent rotations, in
                            :math:`[0, \\pi]` instead of :math:`[0, 2\\pi]`
        :return: the rotation angle in radians
        """

        return quaternion_angle(self.as_quaternion(), limit_to_pi)

    def distance(self, other: 'Orientation3D', limit_to_pi: bool = True) -> float:
        r"""
        The angle of the rotation from this rotation to ``other``, the angle of :math:`\mathbf{A}^{-1}\mathbf{B}`.

        By default the angle of the shorter of the two equivalent rotations is returned, which lies in
        :math:`[0, \pi]` and does not depend on the sign of either quaternion.

        :param other: the other rotation
        :param limit_to_pi: whether to limit the result to :math:`[0, \pi]`
        :return: the distance in radians
        """

        difference = quaternion_multiplication(quaternion_conjugate(self.as_quaternion()), other.as_quaternion())

        return quaternion_angle(difference, limit_to_pi)

    def geometrically_equals(self, other: 'Orientation3D', epsilon: float) -> bool:
        """
        Checks whether this rotation and ``other`` represent the same rotation, regardless of how they are represented.

        Any two rotations are within :math:`\\pi` of each other, so this is always ``True`` when ``epsilon`` is at
        least :math:`\\pi`.

        :param other: the other rotation
        :param epsilon: the largest angle between the rotations in radians
        :return: ``True`` if the distance between the rotations is at most ``epsilon``
        """

        if epsilon >= np.pi:
            return True

        return self.distance(other) <= epsilon

    def is_zero_orientation(self, epsilon: float | None = None) -> bool:
        """
        Checks whether this is the zero (identity) rotation.

        :param epsilon: the largest angle of the rotation in radians, defaults to :attr:`zero_epsilon`
        :return: ``True`` if the rotation angle is at most ``epsilon``
        """

        epsilon = self.zero_epsilon if epsilon is None else epsilon

        return self.angle(limit_to_pi=True) <= epsilon

    def is_orientation_2d(self, epsilon: float | None = None) -> bool:
        """
        Checks whether this rotation only rotates about the z axis, meaning the x and y components of its quaternion
        are both negligible.

        :param epsilon: the tolerance, defaults to :attr:`orientation_2d_epsilon`
        :return: ``True`` if this is a rotation about z
        """

        epsilon = self.orientation_2d_epsilon if epsilon is None else epsilon

        quaternion = self.as_quaternion()

        return bool(abs(quaternion[0]) <= epsilon and abs(quaternion[1]) <= epsilon)

    def check_if_orientation_2d(self, epsilon: float | None = None) -> None:
        """
        Raises if this rotation does not only rotate about the z axis.

        :param epsilon: the tolerance, defaults to :attr:`orientation_2d_epsilon`
        :raises NotAnOrientation2DError: if :meth:`is_orientation_2d` is ``False``
        """

        if not self.is_orientation_2d(epsilon):
            raise NotAnOrientation2DError(f'{self!r} is not a 2D orientation')

    def contains_nan(self) -> bool:
        """
        :return: ``True`` if any component of this rotation is NaN
        """
        return _contains_nan(self._native())

    def copy(self) -> Self:
        """
        Returns a deep copy of self.

        :return: A deep copy of self breaking all mutability
        """

        return copy.deepcopy(self)

    def __eq__(self, other) -> bool:

        if type(other) is not type(self):
            return NotImplemented

        return bool(np.array_equal(self._native(), other._native()))

    def __repr__(self) -> str:
        return '{0}({1!r})'.format(type(self).__name__, self._native())

    def __str__(self) -> str:
        return str(self._native())
