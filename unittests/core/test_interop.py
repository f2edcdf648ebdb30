from unittest import TestCase

import numpy as np

from so3tools.core.interop import DenseMatrix, read_flat, write_flat, read_dense, write_dense


class ArrayMatrix:
    """
    A minimal dense matrix backed by a numpy array, standing in for a user's matrix type.
    """

    def __init__(self, rows, columns):
        self.data = np.zeros((rows, columns))

    def get(self, row, col):
        return self.data[row, col]

    def set(self, row, col, value):
        self.data[row, col] = value

    def num_rows(self):
        return self.data.shape[0]

    def num_cols(self):
        return self.data.shape[1]


class TestDenseMatrix(TestCase):

    def test_protocol(self):

        self.assertIsInstance(ArrayMatrix(2, 2), DenseMatrix)

        self.assertNotIsInstance(np.zeros((3, 3)), DenseMatrix)
        self.assertNotIsInstance([1, 2, 3], DenseMatrix)


class TestFlat(TestCase):

    def test_read_flat(self):

        buffer = [0, 1, 2, 3, 4, 5]

        np.testing.assert_array_equal(read_flat(buffer, 4), [0, 1, 2, 3])
        np.testing.assert_array_equal(read_flat(buffer, 4, 2), [2, 3, 4, 5])
        np.testing.assert_array_equal(read_flat(np.array(buffer), 3, 1), [1, 2, 3])

        with self.assertRaises(IndexError):
            read_flat(buffer, 4, 3)

        with self.assertRaises(IndexError):
            read_flat(buffer, 2, -1)

    def test_write_flat(self):

        buffer = [0.] * 6

        write_flat([1, 2, 3], buffer, 2)

        self.assertEqual(buffer, [0, 0, 1, 2, 3, 0])

        array = np.zeros(9)

        write_flat(np.arange(9).reshape(3, 3), array)

        np.testing.assert_array_equal(array, np.arange(9))

        with self.assertRaises(IndexError):
            write_flat([1, 2, 3], buffer, 4)

        # nothing is written when the buffer is too short
        self.assertEqual(buffer, [0, 0, 1, 2, 3, 0])


class TestDense(TestCase):

    def test_read_dense(self):

        matrix = ArrayMatrix(5, 4)
        matrix.data[:] = np.arange(20).reshape(5, 4)

        np.testing.assert_array_equal(read_dense(matrix, (3, 3)), matrix.data[:3, :3])
        np.testing.assert_array_equal(read_dense(matrix, (3, 3), 2, 1), matrix.data[2:, 1:])
        np.testing.assert_array_equal(read_dense(matrix, (4, 1), 1, 3), matrix.data[1:, 3:])

        with self.assertRaises(IndexError):
            read_dense(matrix, (3, 3), 3, 0)

        with self.assertRaises(IndexError):
            read_dense(matrix, (3, 3), 0, 2)

    def test_write_dense(self):

        matrix = ArrayMatrix(4, 4)

        write_dense(np.arange(9).reshape(3, 3), matrix, 1, 1)

        np.testing.assert_array_equal(matrix.data[1:, 1:], np.arange(9).reshape(3, 3))
        np.testing.assert_array_equal(matrix.data[0], 0)
        np.testing.assert_array_equal(matrix.data[:, 0], 0)

        # one dimensional data is a column
        write_dense([7, 8, 9, 10], matrix, 0, 0)

        np.testing.assert_array_equal(matrix.data[:, 0], [7, 8, 9, 10])

        with self.assertRaises(IndexError):
            write_dense(np.ones((3, 3)), matrix, 2, 0)

        with self.assertRaises(IndexError):
            write_dense([1, 2, 3], matrix, -1, 0)
