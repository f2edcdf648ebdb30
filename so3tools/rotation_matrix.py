# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module provides the :class:`RotationMatrix` class, a rotation stored as a 3x3 orthonormal matrix with a
determinant of +1.

Safe and unsafe entry points
----------------------------

Every way of storing arbitrary data in a :class:`RotationMatrix` comes in two flavors.  The safe entry points
(the constructor, :meth:`~RotationMatrix.set`, :meth:`~.Orientation3D.set_rotation_matrix`,
:meth:`~.Orientation3D.set_from_array`, ...) check that the data is a rotation matrix within
:attr:`~.OrientationOptions.rotation_matrix_epsilon` and raise a :exc:`.NotARotationMatrixError` if not.
:meth:`~RotationMatrix.set_unsafe` writes the data as is, leaving the caller responsible for its validity.

Products of rotation matrices are accumulated in extended precision (see :func:`.matrix_tools.multiply`) so that long
chains of compositions stay orthonormal without calling :meth:`~RotationMatrix.normalize`.
"""

import numpy as np

from so3tools._typing import ARRAY_LIKE, DOUBLE_ARRAY, REPRESENTATIONS

from so3tools.core import matrix_tools
from so3tools.core.conversions import convert, rotmat_to_axis_angle, axis_angle_to_rotmat
from so3tools.core._helpers import _check_array_and_shape, _check_matrix_array_and_shape, _check_index
from so3tools.exceptions import NotARotationMatrixError, NotAMatrix2DError
from so3tools.options import OrientationOptions
from so3tools.orientation import Orientation3D


__all__ = ['RotationMatrix']


class RotationMatrix(Orientation3D):
    """
    A rotation stored as a 3x3 rotation matrix.

    The matrix rotates vectors actively, that is ``RotationMatrix.transform(v)`` is ``M@v``.  The matrix can be
    initialized from a 3x3 array (or a flat, row-major, length 9 array) or from any other rotation type::

        >>> import numpy as np
        >>> from so3tools import RotationMatrix, Quaternion
        >>> RotationMatrix(Quaternion([0, 0, np.sqrt(0.5), np.sqrt(0.5)])).matrix.round(12)
        array([[ 0., -1.,  0.],
               [ 1.,  0.,  0.],
               [ 0.,  0.,  1.]])

    A new instance is the identity matrix.
    """

    representation: REPRESENTATIONS = 'matrix'

    _shape = (3, 3)

    def __init__(self, data: Orientation3D | ARRAY_LIKE | None = None, *, options: OrientationOptions | None = None):
        """
        :param data: the rotation to initialize with, see :meth:`set`
        :param options: the tolerances to use for this instance
        """

        super().__init__(options=options)

        self._matrix: DOUBLE_ARRAY = np.eye(3)
        """
        The rotation matrix
        """

        if data is not None:
            self.set(data)

    def _native(self) -> DOUBLE_ARRAY:
        return self._matrix

    def _set_native(self, data: DOUBLE_ARRAY) -> None:
        self._matrix = np.array(data, dtype=np.float64).reshape(3, 3)

    def _set_data(self, data: ARRAY_LIKE) -> None:
        self._matrix = matrix_tools.check_rotation_matrix(data, self.rotation_matrix_epsilon)

    @property
    def matrix(self) -> DOUBLE_ARRAY:
        """
        A copy of the 3x3 rotation matrix.

        This property is read only, use :meth:`set` or :meth:`set_unsafe` to change the matrix.
        """

        return self._matrix.copy()

    def set_unsafe(self, matrix: ARRAY_LIKE) -> None:
        """
        Stores a 3x3 (or flat row-major 9 element) matrix without checking that it is a rotation matrix.

        :param matrix: the matrix to store
        """

        self._matrix = np.array(_check_matrix_array_and_shape(matrix), dtype=np.float64)

    def set_identity(self) -> None:
        """
        Sets the matrix to the identity matrix.
        """

        self._matrix = np.eye(3)

    def set_to_zero(self) -> None:
        self.set_identity()

    # -----------------------------------------------------------------------------------------------------------------
    # validity
    # -----------------------------------------------------------------------------------------------------------------

    def is_rotation_matrix(self, epsilon: float | None = None) -> bool:
        """
        Checks whether the stored matrix is a rotation matrix, see :func:`.matrix_tools.is_rotation_matrix`.

        :param epsilon: the tolerance, defaults to :attr:`rotation_matrix_epsilon`
        :return: ``True`` if the matrix is a rotation matrix
        """

        epsilon = self.rotation_matrix_epsilon if epsilon is None else epsilon

        return matrix_tools.is_rotation_matrix(self._matrix, epsilon)

    def check_if_rotation_matrix(self, epsilon: float | None = None) -> None:
        """
        :param epsilon: the tolerance, defaults to :attr:`rotation_matrix_epsilon`
        :raises NotARotationMatrixError: if the stored matrix is not a rotation matrix
        """

        if not self.is_rotation_matrix(epsilon):
            raise NotARotationMatrixError(f'The matrix is not a rotation matrix:\n{self._matrix}')

    def is_identity(self, epsilon: float | None = None) -> bool:
        """
        :param epsilon: the element-wise tolerance, defaults to :attr:`identity_epsilon`
        :return: ``True`` if the stored matrix is the identity matrix
        """

        epsilon = self.identity_epsilon if epsilon is None else epsilon

        return matrix_tools.is_identity(self._matrix, epsilon)

    def is_matrix_2d(self, epsilon: float | None = None) -> bool:
        """
        Checks whether the matrix only rotates about the z axis, that is whether its third row and column are those of
        the identity matrix.

        :param epsilon: the element-wise tolerance, defaults to :attr:`orientation_2d_epsilon`
        :return: ``True`` if the matrix is a 2D rotation
        """

        epsilon = self.orientation_2d_epsilon if epsilon is None else epsilon

        return matrix_tools.is_matrix_2d(self._matrix, epsilon)

    def check_if_matrix_2d(self, epsilon: float | None = None) -> None:
        """
        :param epsilon: the element-wise tolerance, defaults to :attr:`orientation_2d_epsilon`
        :raises NotAMatrix2DError: if the matrix does not only rotate about the z axis
        """

        if not self.is_matrix_2d(epsilon):
            raise NotAMatrix2DError(f'The matrix is not a 2D matrix:\n{self._matrix}')

    def is_orientation_2d(self, epsilon: float | None = None) -> bool:
        return self.is_matrix_2d(epsilon)

    def normalize(self) -> None:
        """
        Re-orthonormalizes the matrix in place, see :func:`.matrix_tools.normalize_rotation_matrix`.

        A matrix within :attr:`identity_epsilon` of the identity becomes exactly the identity and a matrix containing
        NaN is left alone.  Normalizing an already normalized matrix only changes it by round-off.
        """

        if self.contains_nan():
            return

        if self.is_identity():
            self.set_identity()
            return

        self._matrix = matrix_tools.normalize_rotation_matrix(self._matrix)

    # -----------------------------------------------------------------------------------------------------------------
    # matrix operations
    # -----------------------------------------------------------------------------------------------------------------

    def determinant(self) -> float:
        """
        :return: the determinant of the matrix
        """
        return matrix_tools.determinant(self._matrix)

    def trace(self) -> float:
        """
        :return: the trace of the matrix
        """
        return float(np.trace(self._matrix))

    def transpose(self) -> None:
        """
        Transposes the matrix in place, which inverts the rotation.
        """

        self._matrix = self._matrix.T.copy()

    def invert(self) -> None:
        self.transpose()

    def _compose_with(self, data: DOUBLE_ARRAY, representation: REPRESENTATIONS, prepend: bool,
                      invert_this: bool, invert_other: bool) -> None:

        other = convert(data, representation, 'matrix')

        # the inverse of a rotation matrix is its transpose
        if prepend:
            self._matrix = matrix_tools.multiply(other, self._matrix, invert_other, invert_this)
        else:
            self._matrix = matrix_tools.multiply(self._matrix, other, invert_this, invert_other)

    def multiply(self, other: Orientation3D) -> None:
        """
        Replaces this matrix ``A`` with ``A*B``.  This is the same as :meth:`append`.

        :param other: the rotation ``B``
        """
        self.append(other)

    def multiply_transpose_this(self, other: Orientation3D) -> None:
        """
        Replaces this matrix ``A`` with ``A.T*B``.  This is the same as :meth:`append_invert_this`.

        :param other: the rotation ``B``
        """
        self.append_invert_this(other)

    def multiply_transpose_other(self, other: Orientation3D) -> None:
        """
        Replaces this matrix ``A`` with ``A*B.T``.  This is the same as :meth:`append_invert_other`.

        :param other: the rotation ``B``
        """
        self.append_invert_other(other)

    def multiply_transpose_both(self, other: Orientation3D) -> None:
        """
        Replaces this matrix ``A`` with ``A.T*B.T``.  This is the same as :meth:`append_invert_both`.

        :param other: the rotation ``B``
        """
        self.append_invert_both(other)

    def interpolate(self, other: Orientation3D, alpha: float) -> None:
        r"""
        Replaces this matrix with the rotation a fraction ``alpha`` of the way along the geodesic to ``other``.

        .. math::
            \mathbf{R}_\alpha = \mathbf{R}_0\text{exp}(\alpha\text{log}(\mathbf{R}_0^T\mathbf{R}_f))

        At ``alpha == 0`` the matrix is unchanged and at ``alpha == 1`` it is set to ``other`` exactly.

        :param other: the rotation to interpolate towards
        :param alpha: the fraction of the way to go, normally in [0, 1]
        """

        if alpha == 0:
            return
        if alpha == 1:
            self.set(other)
            return

        relative = rotmat_to_axis_angle(matrix_tools.multiply(self._matrix, other.as_rotation_matrix(), True))

        relative[3] *= alpha

        self._matrix = matrix_tools.multiply(self._matrix, axis_angle_to_rotmat(relative))

    def transform(self, vectors: ARRAY_LIKE) -> DOUBLE_ARRAY:
        return self._matrix @ _check_array_and_shape(vectors, first_axis_length=3)

    def inverse_transform(self, vectors: ARRAY_LIKE) -> DOUBLE_ARRAY:
        return self._matrix.T @ _check_array_and_shape(vectors, first_axis_length=3)

    def epsilon_equals(self, other: Orientation3D | ARRAY_LIKE, epsilon: float) -> bool:
        """
        Element-wise comparison of this matrix with another matrix.

        :param other: the other rotation or a 3x3 matrix
        :param epsilon: the element-wise tolerance
        :return: ``True`` if every element differs by at most ``epsilon``
        """

        if isinstance(other, Orientation3D):
            other = other.as_rotation_matrix()

        return matrix_tools.epsilon_equals(self._matrix, _check_matrix_array_and_shape(other), epsilon)

    def get_element(self, row: int, column: int) -> float:
        """
        :param row: the row index in [0, 2]
        :param column: the column index in [0, 2]
        :return: the element at ``(row, column)``
        :raises IndexError: if either index is outside [0, 2]
        """

        return float(self._matrix[_check_index(row, 3), _check_index(column, 3)])

    def __getitem__(self, index: tuple[int, int]) -> float:

        row, column = index

        return self.get_element(row, column)
