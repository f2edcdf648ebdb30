r"""
This module provides the :class:`RotationScaleMatrix` class, a rotation matrix followed by a non-negative scale along
each axis,

.. math::
    \mathbf{M} = \mathbf{R}\text{diag}(\mathbf{s}), \quad s_i \geq 0

Unlike :class:`.LinearTransform3D` the scale is not reordered: it is applied along the axes of the frame the caller
chooses, so each column of :math:`\mathbf{M}` is a column of :math:`\mathbf{R}` stretched by the matching scale.
"""

import numpy as np

from so3tools._typing import ARRAY_LIKE, DOUBLE_ARRAY, REPRESENTATIONS

from so3tools.core import matrix_tools
from so3tools.core._helpers import (_check_array_and_shape, _check_matrix_array_and_shape, _check_vector_array_and_shape,
                                    _check_index)
from so3tools.exceptions import NotARotationMatrixError, NotARotationScaleMatrixError, SingularMatrixError
from so3tools.options import OrientationOptions
from so3tools.orientation import Orientation3D
from so3tools.rotation_matrix import RotationMatrix


__all__ = ['RotationScaleMatrix']


class RotationScaleMatrix(Orientation3D):
    """
    A rotation matrix and a non-negative scale, :math:`\\mathbf{R}\\text{diag}(\\mathbf{s})`.

    The orientation methods inherited from :class:`.Orientation3D` (setting from another rotation, composing,
    inverting, comparing) act on the rotation part and leave the scale alone.  :attr:`matrix`, :meth:`transform`,
    :meth:`inverse_transform`, :meth:`determinant`, and the flat array and dense matrix I/O use the full scaled
    matrix.

    A new instance has the identity rotation and a scale of ``[1, 1, 1]``.
    """

    representation: REPRESENTATIONS = 'matrix'

    _shape = (3, 3)

    def __init__(self, rotation: Orientation3D | ARRAY_LIKE | None = None, scale: float | ARRAY_LIKE | None = None, *,
                 options: OrientationOptions | None = None):
        """
        :param rotation: the rotation part, or the full scaled matrix if ``scale`` is not given (see :meth:`set`)
        :param scale: the scale, a scalar or one value per axis
        :param options: the tolerances to use for this instance
        """

        super().__init__(options=options)

        self._rotation: RotationMatrix = RotationMatrix(options=self.original_options)
        """
        The rotation part
        """

        self._scale: DOUBLE_ARRAY = np.ones(3)
        """
        The non-negative scale applied along each axis before the rotation
        """

        if scale is not None:
            self.set(rotation if rotation is not None else RotationMatrix(), scale)
        elif rotation is not None:
            self.set(rotation)

    def _native(self) -> DOUBLE_ARRAY:
        return self._rotation._native()

    def _set_native(self, data: DOUBLE_ARRAY) -> None:
        self._rotation._set_native(data)

    def _set_data(self, data: ARRAY_LIKE) -> None:

        matrix = np.array(_check_matrix_array_and_shape(data), dtype=np.float64)

        if not matrix_tools.determinant(matrix) > 0:
            raise NotARotationScaleMatrixError(f'The matrix does not have a positive determinant:\n{matrix}')

        scale = np.linalg.norm(matrix, axis=0)

        rotation = matrix / scale

        if not matrix_tools.is_rotation_matrix(rotation, self.rotation_matrix_epsilon):
            raise NotARotationScaleMatrixError(f'The matrix is not a rotation matrix times a scale:\n{matrix}')

        self._rotation.set_unsafe(rotation)
        self._scale = scale

    def _flat_data(self) -> DOUBLE_ARRAY:
        return self.matrix

    def set(self, rotation: Orientation3D | ARRAY_LIKE, scale: float | ARRAY_LIKE | None = None) -> None:
        """
        Sets this matrix.

        * With a ``scale``, the rotation part is set from ``rotation`` (see :meth:`set_rotation`) and the scale from
          ``scale`` (see :meth:`set_scale`).
        * Another :class:`RotationScaleMatrix` is copied.
        * Any other rotation sets the rotation part and resets the scale to ``[1, 1, 1]``.  Use :meth:`set_rotation` to
          keep the scale.
        * An array is taken as the full scaled matrix and is split into the rotation and the scale, which requires a
          positive determinant and columns that are a rotation matrix once normalized.

        :param rotation: the rotation (or the full scaled matrix)
        :param scale: the scale, a scalar or one value per axis
        :raises NotARotationScaleMatrixError: if the data is not a rotation matrix times a non-negative scale
        """

        if scale is not None:
            scale = self._check_scale(scale)
            self.set_rotation(rotation)
            self._scale = scale
        elif isinstance(rotation, RotationScaleMatrix):
            self._rotation.set(rotation._rotation)
            self._scale = rotation._scale.copy()
        elif isinstance(rotation, Orientation3D):
            self.set_rotation(rotation)
            self.reset_scale()
        else:
            super().set(rotation)

    def set_rotation(self, rotation: Orientation3D | ARRAY_LIKE) -> None:
        """
        Sets the rotation part, leaving the scale alone.

        :param rotation: any rotation or a 3x3 rotation matrix
        :raises NotARotationScaleMatrixError: if the matrix is not a rotation matrix
        """

        try:
            self._rotation.set(rotation)
        except NotARotationMatrixError as e:
            raise NotARotationScaleMatrixError(str(e)) from e

    def set_scale(self, scale: float | ARRAY_LIKE) -> None:
        """
        Sets the scale, leaving the rotation part alone.

        :param scale: a scalar applied to each axis, or one value per axis
        :raises NotARotationScaleMatrixError: if any scale is negative.  A scale of exactly 0 is allowed.
        """

        self._scale = self._check_scale(scale)

    @staticmethod
    def _check_scale(scale: float | ARRAY_LIKE) -> DOUBLE_ARRAY:

        if np.ndim(scale) == 0:
            scale = np.full(3, scale, dtype=np.float64)
        else:
            scale = np.array(_check_vector_array_and_shape(scale), dtype=np.float64).ravel()

        if (scale < 0).any():
            raise NotARotationScaleMatrixError(f'The scale must not be negative, got {scale}')

        return scale

    def reset_scale(self) -> None:
        """
        Sets the scale to ``[1, 1, 1]``.
        """

        self._scale = np.ones(3)

    def set_to_zero(self) -> None:
        """
        Sets the rotation part to the identity and the scale to ``[1, 1, 1]``.
        """

        self._rotation.set_identity()
        self.reset_scale()

    def set_identity(self) -> None:
        self.set_to_zero()

    def set_to_nan(self) -> None:

        self._rotation.set_to_nan()
        self._scale = np.full(3, np.nan)

    def check_if_scales_proper(self) -> None:
        """
        :raises NotARotationScaleMatrixError: if any scale is negative
        """

        if (self._scale < 0).any():
            raise NotARotationScaleMatrixError(f'The scale must not be negative, got {self._scale}')

    # -----------------------------------------------------------------------------------------------------------------
    # parts
    # -----------------------------------------------------------------------------------------------------------------

    def get_rotation_matrix(self) -> RotationMatrix:
        """
        :return: a copy of the rotation part
        """
        return self._rotation.copy()

    def get_scale(self) -> DOUBLE_ARRAY:
        """
        :return: a copy of the scale
        """
        return self._scale.copy()

    def get_max_scale(self) -> float:
        """
        :return: the largest of the three scales
        """
        return float(self._scale.max())

    @property
    def matrix(self) -> DOUBLE_ARRAY:
        """
        The full scaled 3x3 matrix, :math:`\\mathbf{R}\\text{diag}(\\mathbf{s})`.
        """
        return self._rotation._native() * self._scale

    def get_element(self, row: int, column: int) -> float:
        """
        :param row: the row index in [0, 2]
        :param column: the column index in [0, 2]
        :return: the element of the full scaled matrix at ``(row, column)``
        :raises IndexError: if either index is outside [0, 2]
        """

        row = _check_index(row, 3)
        column = _check_index(column, 3)

        return float(self._rotation._native()[row, column] * self._scale[column])

    def __getitem__(self, index: tuple[int, int]) -> float:

        row, column = index

        return self.get_element(row, column)

    # -----------------------------------------------------------------------------------------------------------------
    # rotation part
    # -----------------------------------------------------------------------------------------------------------------

    def _compose_with(self, data: DOUBLE_ARRAY, representation: REPRESENTATIONS, prepend: bool,
                      invert_this: bool, invert_other: bool) -> None:
        self._rotation._compose_with(data, representation, prepend, invert_this, invert_other)

    def invert(self) -> None:
        self._rotation.invert()

    def normalize(self) -> None:
        self._rotation.normalize()

    def normalize_rotation_matrix(self) -> None:
        """
        Re-orthonormalizes the rotation part, see :meth:`.RotationMatrix.normalize`.
        """

        self._rotation.normalize()

    def contains_nan(self) -> bool:
        return self._rotation.contains_nan() or bool(np.isnan(self._scale).any())

    # -----------------------------------------------------------------------------------------------------------------
    # full matrix
    # -----------------------------------------------------------------------------------------------------------------

    def determinant(self) -> float:
        """
        :return: the determinant of the full scaled matrix
        """
        return self._rotation.determinant() * float(np.prod(self._scale))

    def transform(self, vectors: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        Applies the scale and then the rotation to a vector or to the columns of a 3xn array.

        :param vectors: the vector(s) to transform
        :return: the transformed vector(s)
        """

        vectors = _check_array_and_shape(vectors, first_axis_length=3)

        return self._rotation.transform((self._scale * vectors.T).T)

    def inverse_transform(self, vectors: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        Undoes :meth:`transform`, applying the inverse rotation and then dividing by the scale.

        :param vectors: the vector(s) to transform
        :return: the transformed vector(s)
        :raises SingularMatrixError: if any scale is 0
        """

        if (self._scale == 0).any():
            raise SingularMatrixError(f'The scale {self._scale} has a zero component and cannot be inverted')

        return (self._rotation.inverse_transform(vectors).T / self._scale).T

    def epsilon_equals(self, other: 'RotationScaleMatrix', epsilon: float) -> bool:
        """
        Element-wise comparison of the rotation parts and of the scales.

        :param other: the other rotation scale matrix
        :param epsilon: the tolerance
        :return: ``True`` if every element differs by at most ``epsilon``
        """

        return (self._rotation.epsilon_equals(other._rotation, epsilon) and
                bool((np.abs(self._scale - other._scale) <= epsilon).all()))

    def geometrically_equals(self, other: Orientation3D, epsilon: float) -> bool:
        """
        Checks whether the rotation parts represent the same rotation and, if ``other`` is also a
        :class:`RotationScaleMatrix`, whether the scales are within ``epsilon`` of each other.

        :param other: the other rotation
        :param epsilon: the largest angle between the rotations in radians and the tolerance on the scales
        :return: ``True`` if the two are geometrically equal
        """

        if isinstance(other, RotationScaleMatrix):
            return (self._rotation.geometrically_equals(other._rotation, epsilon) and
                    bool((np.abs(self._scale - other._scale) <= epsilon).all()))

        return super().geometrically_equals(other, epsilon)

    def __eq__(self, other) -> bool:

        if not isinstance(other, RotationScaleMatrix):
            return NotImplemented

        return self._rotation == other._rotation and bool(np.array_equal(self._scale, other._scale))

    def __repr__(self) -> str:
        return 'RotationScaleMatrix(rotation={0!r}, scale={1!r})'.format(self._rotation._native(), self._scale)

    def __str__(self) -> str:
        return str(self.matrix)
