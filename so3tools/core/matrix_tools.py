"""
Core routines on 3x3 matrices

These are the matrix level building blocks used by :class:`.RotationMatrix`, :class:`.RotationScaleMatrix`, and
:class:`.LinearTransform3D`.  Every routine takes and returns numpy arrays and leaves its inputs untouched.
"""

import math

import numpy as np

from so3tools._typing import ARRAY_LIKE, DOUBLE_ARRAY

from so3tools.core._helpers import _check_matrix_array_and_shape
from so3tools.exceptions import SingularMatrixError, NotARotationMatrixError


__all__ = ['determinant', 'is_identity', 'is_rotation_matrix', 'check_rotation_matrix', 'is_matrix_2d',
           'normalize_rotation_matrix', 'multiply', 'invert', 'epsilon_equals', 'SINGULAR_EPSILON']


SINGULAR_EPSILON: float = 1e-15
"""
A matrix is treated as singular when ``|det(M)|`` is below this value times the cube of its largest element.
"""


def determinant(matrix: ARRAY_LIKE) -> float:
    """
    The determinant of a 3x3 matrix, computed with the cofactor expansion along the first column.

    :param matrix: the matrix
    :return: the determinant
    """

    (m00, m01, m02), (m10, m11, m12), (m20, m21, m22) = _check_matrix_array_and_shape(matrix).tolist()

    return m00 * (m11 * m22 - m21 * m12) + m10 * (m21 * m02 - m01 * m22) + m20 * (m01 * m12 - m11 * m02)


def is_identity(matrix: ARRAY_LIKE, epsilon: float = 1e-12) -> bool:
    """
    Checks whether every element of a matrix is within ``epsilon`` of the identity matrix.

    :param matrix: the matrix to check
    :param epsilon: the element-wise tolerance
    :return: ``True`` if the matrix is the identity matrix
    """

    return bool((np.abs(_check_matrix_array_and_shape(matrix) - np.eye(3)) <= epsilon).all())


def is_rotation_matrix(matrix: ARRAY_LIKE, epsilon: float = 1e-7) -> bool:
    r"""
    Checks whether a matrix is a proper rotation matrix.

    The matrix is a rotation matrix if

    * the squared length of each row is within ``epsilon`` of 1,
    * the dot product of each pair of rows is within ``epsilon`` of 0,
    * the determinant is within ``epsilon`` of 1.

    :param matrix: the matrix to check
    :param epsilon: the tolerance
    :return: ``True`` if the matrix is a rotation matrix
    """

    rows = _check_matrix_array_and_shape(matrix).tolist()

    for i in range(3):
        if abs(math.sumprod(rows[i], rows[i]) - 1.0) > epsilon:
            return False
        for j in range(i + 1, 3):
            if abs(math.sumprod(rows[i], rows[j])) > epsilon:
                return False

    # NaN elements slip through the comparisons above but not this one
    det = determinant(rows)

    return abs(det - 1.0) <= epsilon


def check_rotation_matrix(matrix: ARRAY_LIKE, epsilon: float = 1e-7) -> DOUBLE_ARRAY:
    """
    Checks that a matrix is a rotation matrix and returns it as a new 3x3 array.

    :param matrix: the 3x3 (or flat row-major 9 element) matrix to check
    :param epsilon: the tolerance, see :func:`is_rotation_matrix`
    :return: a copy of the matrix
    :raises NotARotationMatrixError: if the matrix is not a rotation matrix
    """

    matrix = np.array(_check_matrix_array_and_shape(matrix), dtype=np.float64)

    if not is_rotation_matrix(matrix, epsilon):
        raise NotARotationMatrixError(f'The matrix is not a rotation matrix:\n{matrix}')

    return matrix


def is_matrix_2d(matrix: ARRAY_LIKE, epsilon: float = 1e-8) -> bool:
    """
    Checks whether a matrix only acts in the XY plane, meaning its third row and column are those of the identity.

    :param matrix: the matrix to check
    :param epsilon: the element-wise tolerance
    :return: ``True`` if the matrix is a 2D matrix
    """

    matrix = _check_matrix_array_and_shape(matrix)

    return bool(abs(matrix[2, 0]) <= epsilon and abs(matrix[0, 2]) <= epsilon and abs(matrix[2, 1]) <= epsilon and
                abs(matrix[1, 2]) <= epsilon and abs(matrix[2, 2] - 1.0) <= epsilon)


def normalize_rotation_matrix(matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    Returns the closest orthonormal frame to ``matrix`` built from its first two columns.

    The first column is normalized, the second column is orthogonalized against it and normalized, and the third
    column is recomputed as the cross product of the first two:

    .. math::
        \hat{\mathbf{x}} = \frac{\mathbf{c}_0}{\|\mathbf{c}_0\|} \\
        \hat{\mathbf{y}} = \frac{\mathbf{c}_1 - (\hat{\mathbf{x}}^T\mathbf{c}_1)\hat{\mathbf{x}}}
        {\|\mathbf{c}_1 - (\hat{\mathbf{x}}^T\mathbf{c}_1)\hat{\mathbf{x}}\|} \\
        \hat{\mathbf{z}} = \hat{\mathbf{x}}\times\hat{\mathbf{y}}

    which guarantees a determinant of +1.  Applying it to a valid rotation matrix changes it by round-off only.

    :param matrix: the nearly orthonormal matrix to normalize
    :return: the normalized rotation matrix
    """

    matrix = _check_matrix_array_and_shape(matrix)

    x_axis = matrix[:, 0] / np.linalg.norm(matrix[:, 0])

    y_axis = matrix[:, 1] - np.dot(x_axis, matrix[:, 1]) * x_axis
    y_axis /= np.linalg.norm(y_axis)

    return np.column_stack([x_axis, y_axis, np.cross(x_axis, y_axis)])


def multiply(matrix_1: ARRAY_LIKE, matrix_2: ARRAY_LIKE,
             transpose_1: bool = False, transpose_2: bool = False) -> DOUBLE_ARRAY:
    r"""
    Multiplies two 3x3 matrices, optionally transposing either operand first.

    Each element of the product is accumulated with :func:`math.sumprod`, which keeps the intermediate products and
    sums in extended precision so that each element is rounded only once.  Long chains of rotation matrix products
    therefore stay valid rotations (within 1e-11 after hundreds of thousands of products) without renormalization.

    :param matrix_1: the left matrix
    :param matrix_2: the right matrix
    :param transpose_1: whether to use the transpose of the left matrix
    :param transpose_2: whether to use the transpose of the right matrix
    :return: the product
    """

    left = _check_matrix_array_and_shape(matrix_1)
    right = _check_matrix_array_and_shape(matrix_2)

    rows = (left.T if transpose_1 else left).tolist()
    columns = (right if transpose_2 else right.T).tolist()

    return np.array([[math.sumprod(row, column) for column in columns] for row in rows])


def invert(matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    The inverse of a general 3x3 matrix, computed from the adjugate.

    :param matrix: the matrix to invert
    :return: the inverse matrix
    :raises SingularMatrixError: if the matrix is singular
    """

    matrix = _check_matrix_array_and_shape(matrix)

    det = determinant(matrix)

    scale = np.abs(matrix).max()

    if not np.isfinite(det) or abs(det) <= SINGULAR_EPSILON * scale ** 3:
        raise SingularMatrixError(f'The matrix is singular (determinant {det}) and cannot be inverted:\n{matrix}')

    (m00, m01, m02), (m10, m11, m12), (m20, m21, m22) = matrix.tolist()

    adjugate = np.array([[m11 * m22 - m12 * m21, m02 * m21 - m01 * m22, m01 * m12 - m02 * m11],
                         [m12 * m20 - m10 * m22, m00 * m22 - m02 * m20, m02 * m10 - m00 * m12],
                         [m10 * m21 - m11 * m20, m01 * m20 - m00 * m21, m00 * m11 - m01 * m10]])

    return adjugate / det


def epsilon_equals(matrix_1: ARRAY_LIKE, matrix_2: ARRAY_LIKE, epsilon: float) -> bool:
    """
    Element-wise comparison of two arrays of the same shape with an absolute tolerance.

    :param matrix_1: the first array
    :param matrix_2: the second array
    :param epsilon: the tolerance
    :return: ``True`` if every pair of elements differs by at most ``epsilon``
    """

    return bool((np.abs(np.asarray(matrix_1, dtype=np.float64) - np.asarray(matrix_2, dtype=np.float64)) <= epsilon).all())
