"""
Routines for exchanging rotation data with flat buffers and with external dense matrix types

Flat buffers store matrices row-major (``index = row*3 + column``) and vectors/quaternions component by component
(``x, y, z[, s]``), starting at an arbitrary offset into a larger buffer.

Dense matrices can be any object satisfying the small :class:`DenseMatrix` protocol.  No particular matrix library is
assumed.
"""

from typing import Protocol, runtime_checkable, Any, MutableSequence, Sequence

import numpy as np

from so3tools._typing import ARRAY_LIKE, DOUBLE_ARRAY


__all__ = ['DenseMatrix', 'read_flat', 'write_flat', 'read_dense', 'write_dense']


@runtime_checkable
class DenseMatrix(Protocol):
    """
    The accessor contract required of an external dense matrix.
    """

    def get(self, row: int, col: int, /) -> float: ...

    def set(self, row: int, col: int, value: float, /) -> Any: ...

    def num_rows(self) -> int: ...

    def num_cols(self) -> int: ...


def _check_range(start: int, size: int, available: int, what: str):
    if start < 0 or start + size > available:
        raise IndexError(f'Cannot access {size} {what} starting at {start}, only {available} are available')


def read_flat(buffer: Sequence[float] | DOUBLE_ARRAY, size: int, start: int = 0) -> DOUBLE_ARRAY:
    """
    Reads ``size`` consecutive values from a flat buffer starting at index ``start``.

    :param buffer: the flat buffer to read from
    :param size: the number of values to read
    :param start: the index of the first value
    :return: the values as a new array
    :raises IndexError: if the buffer does not hold ``size`` values after ``start``
    """

    _check_range(start, size, len(buffer), 'elements')

    return np.array(buffer[start:start + size], dtype=np.float64)


def write_flat(values: ARRAY_LIKE, buffer: MutableSequence[float] | DOUBLE_ARRAY, start: int = 0) -> None:
    """
    Writes the (raveled, row-major) values into a flat buffer starting at index ``start``.

    :param values: the values to write
    :param buffer: the buffer to write into, modified in place
    :param start: the index of the first value
    :raises IndexError: if the buffer is too short
    """

    flat = np.ravel(values).tolist()

    _check_range(start, len(flat), len(buffer), 'elements')

    buffer[start:start + len(flat)] = flat


def read_dense(matrix: DenseMatrix, shape: tuple[int, int], start_row: int = 0, start_column: int = 0) -> DOUBLE_ARRAY:
    """
    Reads a ``shape`` sized block from a dense matrix, the upper left element of which is at
    ``(start_row, start_column)``.

    :param matrix: the dense matrix to read from
    :param shape: the number of rows and columns to read
    :param start_row: the row of the first element
    :param start_column: the column of the first element
    :return: the block as a new array
    :raises IndexError: if the block does not fit in the dense matrix
    """

    rows, columns = shape

    _check_range(start_row, rows, matrix.num_rows(), 'rows')
    _check_range(start_column, columns, matrix.num_cols(), 'columns')

    return np.array([[matrix.get(start_row + row, start_column + column) for column in range(columns)]
                     for row in range(rows)], dtype=np.float64)


def write_dense(values: ARRAY_LIKE, matrix: DenseMatrix, start_row: int = 0, start_column: int = 0) -> None:
    """
    Writes a 2D block of values into a dense matrix with its upper left element at ``(start_row, start_column)``.

    One dimensional values are written as a column.

    :param values: the values to write
    :param matrix: the dense matrix to write into, modified in place
    :param start_row: the row of the first element
    :param start_column: the column of the first element
    :raises IndexError: if the block does not fit in the dense matrix
    """

    block = np.asarray(values, dtype=np.float64)

    if block.ndim == 1:
        block = block.reshape(-1, 1)

    rows, columns = block.shape

    _check_range(start_row, rows, matrix.num_rows(), 'rows')
    _check_range(start_column, columns, matrix.num_cols(), 'columns')

    for row in range(rows):
        for column in range(columns):
            matrix.set(start_row + row, start_column + column, float(block[row, column]))
