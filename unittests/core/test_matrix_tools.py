from unittest import TestCase

import numpy as np

from scipy.spatial.transform import Rotation

from so3tools.core import matrix_tools as mt
from so3tools.core.elementals import rot_x, rot_y, rot_z
from so3tools.exceptions import NotARotationMatrixError, SingularMatrixError


class TestDeterminant(TestCase):

    def test_determinant(self):

        self.assertAlmostEqual(mt.determinant(rot_x(0.3) @ rot_z(1.2)), 1)

        self.assertEqual(mt.determinant(np.diag([2, 3, 4])), 24)

        self.assertEqual(mt.determinant(np.diag([1, 1, -1])), -1)

        matrix = np.random.default_rng(2).normal(size=(3, 3))

        self.assertAlmostEqual(mt.determinant(matrix), np.linalg.det(matrix))

        self.assertAlmostEqual(mt.determinant(matrix.ravel()), np.linalg.det(matrix))


class TestChecks(TestCase):

    def test_is_identity(self):

        self.assertTrue(mt.is_identity(np.eye(3)))

        self.assertFalse(mt.is_identity(rot_z(1e-6)))

        self.assertTrue(mt.is_identity(rot_z(1e-6), 1e-5))

    def test_is_rotation_matrix(self):

        self.assertTrue(mt.is_rotation_matrix(np.eye(3)))
        self.assertTrue(mt.is_rotation_matrix(rot_y(2) @ rot_x(-1)))

        self.assertFalse(mt.is_rotation_matrix(np.diag([1, 1, -1])))
        self.assertFalse(mt.is_rotation_matrix(2 * np.eye(3)))
        self.assertFalse(mt.is_rotation_matrix(np.zeros((3, 3))))
        self.assertFalse(mt.is_rotation_matrix(np.full((3, 3), np.nan)))

        perturbed = rot_z(0.5) + 1e-6

        self.assertFalse(mt.is_rotation_matrix(perturbed))
        self.assertTrue(mt.is_rotation_matrix(perturbed, 1e-5))

    def test_check_rotation_matrix(self):

        matrix = rot_x(0.2)

        checked = mt.check_rotation_matrix(matrix)

        np.testing.assert_array_equal(checked, matrix)

        checked[0, 0] = 5

        self.assertEqual(matrix[0, 0], 1)

        np.testing.assert_array_equal(mt.check_rotation_matrix(matrix.ravel()), matrix)

        with self.assertRaises(NotARotationMatrixError):
            mt.check_rotation_matrix(np.diag([1, -1, 1]))

        with self.assertRaises(NotARotationMatrixError):
            mt.check_rotation_matrix(matrix + 1e-3, 1e-4)

    def test_is_matrix_2d(self):

        self.assertTrue(mt.is_matrix_2d(rot_z(2.5)))
        self.assertTrue(mt.is_matrix_2d(np.eye(3)))

        self.assertFalse(mt.is_matrix_2d(rot_x(0.1)))
        self.assertFalse(mt.is_matrix_2d(rot_y(1e-7)))
        self.assertTrue(mt.is_matrix_2d(rot_y(1e-7), 1e-6))


class TestNormalizeRotationMatrix(TestCase):

    def test_normalize_rotation_matrix(self):

        rng = np.random.default_rng(14)

        for matrix in Rotation.random(20, rng).as_matrix():

            with self.subTest(matrix=matrix):
                perturbed = matrix + rng.normal(scale=1e-6, size=(3, 3))

                self.assertFalse(mt.is_rotation_matrix(perturbed, 1e-9))

                normalized = mt.normalize_rotation_matrix(perturbed)

                self.assertTrue(mt.is_rotation_matrix(normalized, 1e-14))

                np.testing.assert_allclose(normalized, matrix, atol=1e-4)

    def test_idempotent(self):

        normalized = mt.normalize_rotation_matrix(rot_x(0.4) @ rot_z(-1) + 1e-4)

        np.testing.assert_allclose(mt.normalize_rotation_matrix(normalized), normalized, atol=1e-14)

        np.testing.assert_allclose(mt.normalize_rotation_matrix(np.eye(3)), np.eye(3), atol=1e-16)


class TestMultiply(TestCase):

    def test_multiply(self):

        rng = np.random.default_rng(5)

        matrix_1, matrix_2 = rng.normal(size=(2, 3, 3))

        np.testing.assert_allclose(mt.multiply(matrix_1, matrix_2), matrix_1 @ matrix_2, atol=1e-14)
        np.testing.assert_allclose(mt.multiply(matrix_1, matrix_2, True), matrix_1.T @ matrix_2, atol=1e-14)
        np.testing.assert_allclose(mt.multiply(matrix_1, matrix_2, False, True), matrix_1 @ matrix_2.T, atol=1e-14)
        np.testing.assert_allclose(mt.multiply(matrix_1, matrix_2, True, True), matrix_1.T @ matrix_2.T, atol=1e-14)

    def test_inputs_untouched(self):

        matrix_1 = rot_x(0.1)
        matrix_2 = rot_y(0.2)

        mt.multiply(matrix_1, matrix_2, True, True)

        np.testing.assert_array_equal(matrix_1, rot_x(0.1))
        np.testing.assert_array_equal(matrix_2, rot_y(0.2))


class TestInvert(TestCase):

    def test_invert(self):

        rng = np.random.default_rng(6)

        for matrix in rng.normal(size=(10, 3, 3)):

            with self.subTest(matrix=matrix):
                np.testing.assert_allclose(mt.invert(matrix), np.linalg.inv(matrix), rtol=1e-8, atol=1e-10)

        np.testing.assert_array_almost_equal(mt.invert(np.diag([2, 4, -8])), np.diag([0.5, 0.25, -0.125]))

    def test_singular(self):

        with self.assertRaises(SingularMatrixError):
            mt.invert(np.zeros((3, 3)))

        with self.assertRaises(SingularMatrixError):
            mt.invert([[1, 2, 3], [2, 4, 6], [0, 1, 0]])

        with self.assertRaises(SingularMatrixError):
            mt.invert(np.full((3, 3), np.nan))


class TestEpsilonEquals(TestCase):

    def test_epsilon_equals(self):

        self.assertTrue(mt.epsilon_equals(np.eye(3), np.eye(3) + 1e-9, 1e-8))

        self.assertFalse(mt.epsilon_equals(np.eye(3), np.eye(3) + 1e-7, 1e-8))

        self.assertFalse(mt.epsilon_equals(np.eye(3), np.full((3, 3), np.nan), 1))
