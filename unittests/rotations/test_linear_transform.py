from unittest import TestCase

import numpy as np

from scipy.spatial.transform import Rotation

from so3tools import (LinearTransform3D, RotationMatrix, RotationScaleMatrix, Quaternion, AxisAngle,
                      SingularMatrixError)
from so3tools.core.conversions import quaternion_to_rotmat
from so3tools.core.elementals import rot_x, rot_z


class ArrayMatrix:

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


def recompose(transform):

    return ((quaternion_to_rotmat(transform.get_pre_scale_quaternion()) * transform.get_scale()) @
            quaternion_to_rotmat(transform.get_post_scale_quaternion()))


class TestLinearTransform3D(TestCase):

    def test_default(self):

        transform = LinearTransform3D()

        np.testing.assert_array_equal(transform.get_scale(), [1, 1, 1])
        np.testing.assert_array_equal(transform.get_pre_scale_quaternion(), [0, 0, 0, 1])
        np.testing.assert_array_equal(transform.get_post_scale_quaternion(), [0, 0, 0, 1])

        self.assertTrue(transform.is_identity())
        self.assertTrue(transform.is_rotation_matrix())
        self.assertEqual(transform.determinant(), 1)

    def test_set(self):

        matrix = np.random.default_rng(40).normal(size=(3, 3))

        transform = LinearTransform3D(matrix)

        np.testing.assert_array_equal(transform.matrix, matrix)

        copied = LinearTransform3D(transform)

        np.testing.assert_array_equal(copied.matrix, matrix)
        np.testing.assert_array_equal(copied.get_scale(), transform.get_scale())

        copied.append_scale([1, 2, 3])

        np.testing.assert_array_equal(transform.matrix, matrix)

        transform.set(matrix.ravel())

        np.testing.assert_array_equal(transform.matrix, matrix)

        with self.assertRaises(ValueError):
            transform.set([1, 2, 3])

    def test_set_from_rotation_scale_matrix(self):

        rotation = Rotation.random(1, np.random.default_rng(41)).as_matrix()[0]

        transform = LinearTransform3D(RotationScaleMatrix(rotation, [1, 2, 3]))

        np.testing.assert_allclose(transform.matrix, rotation * [1, 2, 3], atol=1e-14)

        np.testing.assert_allclose(transform.get_scale(), [3, 2, 1], atol=1e-14)

        self.assertTrue(transform.get_orientation().geometrically_equals(RotationMatrix(rotation), 1e-12))

    def test_set_from_rotation(self):

        transform = LinearTransform3D(AxisAngle([0, 0, 1], 0.5))

        np.testing.assert_allclose(transform.matrix, rot_z(0.5), atol=1e-14)
        np.testing.assert_array_equal(transform.get_scale(), [1, 1, 1])

        self.assertTrue(transform.is_rotation_matrix())

    def test_set_from_dense(self):

        matrix = np.random.default_rng(42).normal(size=(3, 3))

        dense = ArrayMatrix(4, 5)
        dense.data[:3, :3] = matrix

        transform = LinearTransform3D(dense)

        np.testing.assert_array_equal(transform.matrix, matrix)

        transform.set_from_dense(dense, 1, 2)

        np.testing.assert_array_equal(transform.matrix, dense.data[1:, 2:])

        output = ArrayMatrix(3, 3)

        transform.get_into_dense(output)

        np.testing.assert_array_equal(output.data, transform.matrix)

    def test_nan(self):

        transform = LinearTransform3D(np.full((3, 3), np.nan))

        self.assertTrue(transform.contains_nan())
        self.assertTrue(np.isnan(transform.get_scale()).all())
        self.assertTrue(np.isnan(transform.get_as_quaternion()).all())

        transform = LinearTransform3D()

        transform.set_to_nan()

        self.assertTrue(transform.contains_nan())
        self.assertTrue(np.isnan(transform.matrix).all())

    def test_set_to_zero(self):

        transform = LinearTransform3D(np.diag([2, 3, 4]))

        transform.set_to_zero()

        np.testing.assert_array_equal(transform.matrix, np.zeros((3, 3)))
        np.testing.assert_array_equal(transform.get_scale(), [0, 0, 0])
        np.testing.assert_array_equal(transform.get_pre_scale_quaternion(), [0, 0, 0, 1])
        np.testing.assert_array_equal(transform.get_post_scale_quaternion(), [0, 0, 0, 1])
        np.testing.assert_array_equal(transform.get_as_quaternion(), [0, 0, 0, 1])

        self.assertFalse(transform.is_identity())
        self.assertFalse(transform.is_rotation_matrix())
        self.assertTrue(transform.is_zero_orientation())

        transform.set_identity()

        np.testing.assert_array_equal(transform.matrix, np.eye(3))
        np.testing.assert_array_equal(transform.get_scale(), [1, 1, 1])

        self.assertTrue(transform.is_identity())
        self.assertTrue(transform.is_rotation_matrix())

    def test_set_and_normalize(self):

        matrix = np.diag([2., 3., 4.])

        transform = LinearTransform3D()

        transform.set_and_normalize(matrix)

        np.testing.assert_array_equal(transform.matrix, matrix)
        np.testing.assert_allclose(transform.get_scale(), [4, 3, 2], atol=1e-14)

        transform.set_and_normalize(RotationMatrix(rot_z(0.3)))

        np.testing.assert_allclose(transform.matrix, rot_z(0.3), atol=1e-15)


class TestLinearTransform3DFactors(TestCase):

    def test_random(self):

        rng = np.random.default_rng(43)

        for matrix in rng.normal(size=(20, 3, 3)):

            with self.subTest(matrix=matrix):
                transform = LinearTransform3D(matrix)

                scale = transform.get_scale()

                self.assertGreaterEqual(scale[0], abs(scale[1]))
                self.assertGreaterEqual(scale[1], abs(scale[2]))
                self.assertGreaterEqual(scale[1], 0)

                self.assertEqual(np.sign(scale[2]), np.sign(np.linalg.det(matrix)))

                self.assertAlmostEqual(np.linalg.norm(transform.get_pre_scale_quaternion()), 1)
                self.assertAlmostEqual(np.linalg.norm(transform.get_post_scale_quaternion()), 1)

                np.testing.assert_allclose(recompose(transform), matrix, atol=1e-12)

    def test_reflection(self):

        transform = LinearTransform3D(np.diag([1, -3, 2]))

        np.testing.assert_allclose(transform.get_scale(), [3, 2, -1], atol=1e-14)

        np.testing.assert_allclose(recompose(transform), np.diag([1, -3, 2]), atol=1e-14)

        self.assertAlmostEqual(transform.determinant(), -6)

    def test_rank_deficient(self):

        with self.assertLogs('so3tools.linear_transform', level='DEBUG'):
            scale = LinearTransform3D(np.diag([2, 0, 1])).get_scale()

        np.testing.assert_allclose(scale, [2, 1, 0], atol=1e-14)

    def test_rotation_and_scale_consistency(self):

        rotation_1, rotation_2 = Rotation.random(2, np.random.default_rng(44)).as_matrix()

        transform = LinearTransform3D(RotationMatrix(rotation_1))

        transform.append_scale([2, 0.5, 3])

        transform.append_rotation(RotationMatrix(rotation_2))

        np.testing.assert_allclose(transform.matrix, rotation_1 * [2, 0.5, 3] @ rotation_2, atol=1e-14)

        np.testing.assert_allclose(transform.get_scale(), [3, 2, 0.5], atol=1e-14)

        self.assertTrue(transform.get_orientation().geometrically_equals(RotationMatrix(rotation_1 @ rotation_2),
                                                                         1e-12))

    def test_orientation_independent_of_scale(self):

        rng = np.random.default_rng(49)

        rotation_1, rotation_2 = Rotation.random(2, rng).as_matrix()

        expected = RotationMatrix(rotation_1 @ rotation_2)

        for scale in rng.uniform(0.5, 10, (10, 3)):

            with self.subTest(scale=scale):
                transform = LinearTransform3D(rotation_1 * scale @ rotation_2)

                self.assertTrue(transform.get_orientation().geometrically_equals(expected, 1e-12))

        for magnitude in [1e-3, 1, 1e3]:

            with self.subTest(magnitude=magnitude):
                transform = LinearTransform3D(RotationMatrix(rotation_1))

                transform.append_scale(magnitude * np.array([2, 0.5, 3]))
                transform.append_rotation(RotationMatrix(rotation_2))

                np.testing.assert_allclose(transform.get_scale(), magnitude * np.array([3, 2, 0.5]),
                                           rtol=1e-13)

                self.assertTrue(transform.get_orientation().geometrically_equals(expected, 1e-12))

    def test_rotations_keep_factors(self):

        rotation_1, rotation_2, rotation_3 = Rotation.random(3, np.random.default_rng(45)).as_matrix()

        transform = LinearTransform3D(rotation_1 * [4, 2, 1])

        scale = transform.get_scale()

        transform.append_rotation(RotationMatrix(rotation_2))
        transform.prepend_rotation(Quaternion(RotationMatrix(rotation_3)))

        expected = rotation_3 @ rotation_1 * [4, 2, 1] @ rotation_2

        np.testing.assert_allclose(transform.matrix, expected, atol=1e-14)
        np.testing.assert_array_equal(transform.get_scale(), scale)
        np.testing.assert_allclose(recompose(transform), expected, atol=1e-12)

        transform.append_rotation_invert_other(RotationMatrix(rotation_2))
        transform.prepend_rotation_invert_other(RotationMatrix(rotation_3))

        np.testing.assert_allclose(transform.matrix, rotation_1 * [4, 2, 1], atol=1e-13)
        np.testing.assert_allclose(recompose(transform), rotation_1 * [4, 2, 1], atol=1e-12)

    def test_uniform_scale(self):

        rotation = Rotation.random(1, np.random.default_rng(46)).as_matrix()[0]

        transform = LinearTransform3D(RotationMatrix(rotation))

        transform.append_scale(3)

        np.testing.assert_allclose(transform.matrix, 3 * rotation, atol=1e-14)
        np.testing.assert_array_equal(transform.get_scale(), [3, 3, 3])

        transform.prepend_scale([0.5, 0.5, 0.5])

        np.testing.assert_allclose(transform.matrix, 1.5 * rotation, atol=1e-14)
        np.testing.assert_array_equal(transform.get_scale(), [1.5, 1.5, 1.5])

        self.assertTrue(transform.get_orientation().geometrically_equals(RotationMatrix(rotation), 1e-12))

    def test_negative_uniform_scale(self):

        rotation = Rotation.random(1, np.random.default_rng(47)).as_matrix()[0]

        transform = LinearTransform3D(RotationMatrix(rotation))

        transform.append_scale(-2)

        np.testing.assert_allclose(transform.matrix, -2 * rotation, atol=1e-14)

        np.testing.assert_array_equal(transform.get_scale(), [2, 2, -2])

        np.testing.assert_allclose(recompose(transform), -2 * rotation, atol=1e-14)

        self.assertAlmostEqual(transform.determinant(), -8)

        np.testing.assert_allclose(LinearTransform3D(-2 * rotation).get_scale(), [2, 2, -2], atol=1e-14)

    def test_prepend_scale(self):

        matrix = np.random.default_rng(48).normal(size=(3, 3))

        transform = LinearTransform3D(matrix)

        transform.prepend_scale([1, 2, 3])

        np.testing.assert_allclose(transform.matrix, np.diag([1, 2, 3]) @ matrix, atol=1e-14)

        np.testing.assert_allclose(recompose(transform), np.diag([1, 2, 3]) @ matrix, atol=1e-12)

    def test_reset_scale(self):

        rotation = Rotation.random(1, np.random.default_rng(49)).as_matrix()[0]

        transform = LinearTransform3D(RotationMatrix(rotation))

        transform.append_scale([1, 2, 4])

        transform.reset_scale()

        self.assertTrue(transform.is_rotation_matrix(1e-12))
        np.testing.assert_allclose(transform.matrix, rotation, atol=1e-12)


class TestLinearTransform3DOperations(TestCase):

    def test_invert(self):

        matrix = np.random.default_rng(50).normal(size=(3, 3))

        transform = LinearTransform3D(matrix)

        transform.invert()

        np.testing.assert_allclose(transform.matrix, np.linalg.inv(matrix), rtol=1e-10, atol=1e-12)

        np.testing.assert_allclose(recompose(transform), np.linalg.inv(matrix), rtol=1e-10, atol=1e-12)

    def test_invert_singular(self):

        transform = LinearTransform3D(np.diag([1, 1, 0]))

        with self.assertRaises(SingularMatrixError):
            transform.invert()

        np.testing.assert_array_equal(transform.matrix, np.diag([1, 1, 0]))

        with self.assertRaises(SingularMatrixError):
            transform.inverse_transform([1, 2, 3])

    def test_transpose(self):

        matrix = np.random.default_rng(51).normal(size=(3, 3))

        transform = LinearTransform3D(matrix)

        scale = transform.get_scale()

        transform.transpose()

        np.testing.assert_array_equal(transform.matrix, matrix.T)
        np.testing.assert_array_equal(transform.get_scale(), scale)

        np.testing.assert_allclose(recompose(transform), matrix.T, atol=1e-12)

    def test_transform(self):

        rng = np.random.default_rng(52)

        matrix = rng.normal(size=(3, 3))
        vectors = rng.normal(size=(3, 5))

        transform = LinearTransform3D(matrix)

        np.testing.assert_allclose(transform.transform(vectors), matrix @ vectors, atol=1e-14)
        np.testing.assert_allclose(transform.transform(vectors[:, 0]), matrix @ vectors[:, 0], atol=1e-14)

        np.testing.assert_allclose(transform.inverse_transform(transform.transform(vectors)), vectors, atol=1e-10)

    def test_elements(self):

        transform = LinearTransform3D(np.arange(9.).reshape(3, 3) + np.eye(3))

        self.assertEqual(transform.get_element(0, 0), 1)
        self.assertEqual(transform[1, 2], 5)

        with self.assertRaises(IndexError):
            transform.get_element(0, 3)

        self.assertTrue(transform.epsilon_equals(np.arange(9.).reshape(3, 3) + np.eye(3) + 1e-10, 1e-9))
        self.assertFalse(transform.epsilon_equals(np.arange(9.).reshape(3, 3), 1e-9))

        self.assertTrue(LinearTransform3D(rot_x(0.3)).epsilon_equals(RotationMatrix(rot_x(0.3)), 1e-15))

    def test_equality(self):

        matrix = np.random.default_rng(53).normal(size=(3, 3))

        self.assertEqual(LinearTransform3D(matrix), LinearTransform3D(matrix))
        self.assertNotEqual(LinearTransform3D(matrix), LinearTransform3D(2 * matrix))

        self.assertIn('LinearTransform3D', repr(LinearTransform3D()))
