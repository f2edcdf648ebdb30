from unittest import TestCase

import numpy as np

from so3tools.core import quaternion_math as qm
from so3tools.core.conversions import quaternion_to_rotmat
from so3tools.core.elementals import quaternion_x, quaternion_y, quaternion_z


class TestQuaternionNormalize(TestCase):

    def test_quaternion_normalize(self):

        np.testing.assert_array_almost_equal(qm.quaternion_normalize([1, 2, 3, 4]), np.array([1, 2, 3, 4]) / np.sqrt(30))

        np.testing.assert_array_almost_equal(qm.quaternion_normalize([1, 2, 3, -4]),
                                             np.array([1, 2, 3, -4]) / np.sqrt(30))

        np.testing.assert_array_almost_equal(qm.quaternion_normalize([1, 2, 3, -4], positive_scalar=True),
                                             np.array([-1, -2, -3, 4]) / np.sqrt(30))

    def test_zero(self):

        np.testing.assert_array_equal(qm.quaternion_normalize([0, 0, 0, 0]), [0, 0, 0, 1])

        np.testing.assert_array_almost_equal(qm.quaternion_normalize([[0, 0], [0, 0], [0, 3], [0, 4]]),
                                             [[0, 0], [0, 0], [0, 0.6], [1, 0.8]])

    def test_nan(self):

        self.assertTrue(np.isnan(qm.quaternion_normalize([np.nan, 0, 0, 1])).any())

    def test_input_untouched(self):

        quaternion = np.array([1., 2., 3., 4.])

        qm.quaternion_normalize(quaternion)

        np.testing.assert_array_equal(quaternion, [1, 2, 3, 4])


class TestQuaternionInverse(TestCase):

    def test_quaternion_conjugate(self):

        np.testing.assert_array_equal(qm.quaternion_conjugate([1, 2, 3, 4]), [-1, -2, -3, 4])

    def test_quaternion_inverse(self):

        quaternion = np.array([1., 2., 3., 4.])

        np.testing.assert_array_almost_equal(qm.quaternion_inverse(quaternion), [-1 / 30, -2 / 30, -3 / 30, 4 / 30])

        np.testing.assert_array_almost_equal(qm.quaternion_multiplication(quaternion,
                                                                          qm.quaternion_inverse(quaternion)),
                                             [0, 0, 0, 1])


class TestQuaternionMultiplication(TestCase):

    def test_quaternion_multiplication(self):

        np.testing.assert_array_almost_equal(qm.quaternion_multiplication(quaternion_z(0.3), quaternion_z(0.4)),
                                             quaternion_z(0.7))

        np.testing.assert_array_almost_equal(qm.quaternion_multiplication([0, 0, 0, 1], [1, 2, 3, 4]), [1, 2, 3, 4])

        # i*j = k
        np.testing.assert_array_equal(qm.quaternion_multiplication([1, 0, 0, 0], [0, 1, 0, 0]), [0, 0, 1, 0])

    def test_matches_matrix_product(self):

        rng = np.random.default_rng(31)

        for quaternion_1, quaternion_2 in rng.normal(size=(30, 2, 4)):
            quaternion_1 /= np.linalg.norm(quaternion_1)
            quaternion_2 /= np.linalg.norm(quaternion_2)

            with self.subTest(quaternion_1=quaternion_1, quaternion_2=quaternion_2):
                np.testing.assert_allclose(quaternion_to_rotmat(qm.quaternion_multiplication(quaternion_1,
                                                                                             quaternion_2)),
                                           quaternion_to_rotmat(quaternion_1) @ quaternion_to_rotmat(quaternion_2),
                                           atol=1e-14)

    def test_vectorized(self):

        quaternions_1 = np.column_stack([quaternion_x(0.1), quaternion_y(0.2)])
        quaternions_2 = np.column_stack([quaternion_x(0.3), quaternion_y(-0.2)])

        np.testing.assert_array_almost_equal(qm.quaternion_multiplication(quaternions_1, quaternions_2),
                                             np.column_stack([quaternion_x(0.4), [0, 0, 0, 1]]))


class TestQuaternionAngle(TestCase):

    def test_quaternion_angle(self):

        self.assertEqual(qm.quaternion_angle([0, 0, 0, 1]), 0)

        self.assertAlmostEqual(qm.quaternion_angle(quaternion_x(0.5)), 0.5)

        self.assertAlmostEqual(qm.quaternion_angle(quaternion_z(1.5 * np.pi)), 1.5 * np.pi)

        self.assertAlmostEqual(qm.quaternion_angle(quaternion_z(1.5 * np.pi), limit_to_pi=True), 0.5 * np.pi)

        self.assertAlmostEqual(qm.quaternion_angle(-quaternion_z(0.5), limit_to_pi=True), 0.5)

    def test_quaternion_dot(self):

        self.assertEqual(qm.quaternion_dot([1, 2, 3, 4], [4, 3, 2, 1]), 20)


class TestQuaternionDistance(TestCase):

    def test_quaternion_distance(self):

        self.assertAlmostEqual(qm.quaternion_distance(quaternion_z(0.3), quaternion_z(0.5)), 0.2)

        self.assertAlmostEqual(qm.quaternion_distance(quaternion_z(0.3), -quaternion_z(0.5)), 0.2)

        self.assertAlmostEqual(qm.quaternion_distance(quaternion_x(-3), quaternion_x(3)), 2 * np.pi - 6)

        self.assertLess(qm.quaternion_distance(quaternion_y(0.4), -quaternion_y(0.4)), 1e-7)

    def test_quaternion_distance_precise(self):

        rng = np.random.default_rng(8)

        for quaternion_1, quaternion_2 in rng.normal(size=(30, 2, 4)):
            quaternion_1 /= np.linalg.norm(quaternion_1)
            quaternion_2 /= np.linalg.norm(quaternion_2)

            with self.subTest(quaternion_1=quaternion_1, quaternion_2=quaternion_2):
                distance = qm.quaternion_distance_precise(quaternion_1, quaternion_2)

                self.assertGreaterEqual(distance, 0)
                self.assertLessEqual(distance, np.pi)

                self.assertAlmostEqual(distance, qm.quaternion_distance(quaternion_1, quaternion_2), places=7)

                self.assertEqual(distance, qm.quaternion_distance_precise(quaternion_1, -quaternion_2))

        self.assertEqual(qm.quaternion_distance_precise(quaternion_y(0.4), -quaternion_y(0.4)), 0)

        # small distances are resolved far below the precision of the arc-cosine form
        self.assertAlmostEqual(qm.quaternion_distance_precise(quaternion_z(0.2), quaternion_z(0.2 + 1e-10)), 1e-10,
                               delta=1e-15)


class TestQuaternionPower(TestCase):

    def test_quaternion_power(self):

        np.testing.assert_array_almost_equal(qm.quaternion_power(quaternion_z(0.4), 0.5), quaternion_z(0.2))

        np.testing.assert_array_almost_equal(qm.quaternion_power(quaternion_x(0.4), 3), quaternion_x(1.2))

        np.testing.assert_array_almost_equal(qm.quaternion_power(quaternion_x(0.4), -1), quaternion_x(-0.4))

        np.testing.assert_array_equal(qm.quaternion_power([0, 0, 0, 1], 5), [0, 0, 0, 1])


class TestSlerp(TestCase):

    def test_slerp(self):

        np.testing.assert_array_almost_equal(qm.slerp(quaternion_z(0), quaternion_z(1), 0.5), quaternion_z(0.5))

        np.testing.assert_array_almost_equal(qm.slerp(quaternion_x(0.2), quaternion_x(1.2), 0.25), quaternion_x(0.45))

        for alpha in np.linspace(0.1, 0.9, 5):

            with self.subTest(alpha=alpha):
                result = qm.slerp(quaternion_y(-1), quaternion_y(1), alpha)

                self.assertAlmostEqual(np.linalg.norm(result), 1)
                np.testing.assert_array_almost_equal(result, quaternion_y(-1 + 2 * alpha))

    def test_end_points(self):

        quaternion_0 = qm.quaternion_normalize([0.1, -0.3, 0.2, 0.9])
        quaternion_1 = qm.quaternion_normalize([-0.7, 0.1, 0.4, -0.2])

        np.testing.assert_array_equal(qm.slerp(quaternion_0, quaternion_1, 0), quaternion_0)
        np.testing.assert_array_equal(qm.slerp(quaternion_0, quaternion_1, 1), quaternion_1)

    def test_shorter_path(self):

        result = qm.slerp(quaternion_z(0.2), -quaternion_z(0.4), 0.5)

        np.testing.assert_array_almost_equal(result, quaternion_z(0.3))

    def test_nearly_identical(self):

        quaternion_0 = quaternion_z(0.3)
        quaternion_1 = quaternion_z(0.3 + 1e-9)

        result = qm.slerp(quaternion_0, quaternion_1, 0.5)

        self.assertFalse(np.isnan(result).any())
        np.testing.assert_array_almost_equal(result, quaternion_z(0.3 + 5e-10))


class TestNlerp(TestCase):

    def test_nlerp(self):

        np.testing.assert_array_almost_equal(qm.nlerp(quaternion_z(0), quaternion_z(1), 0.5), quaternion_z(0.5))

        result = qm.nlerp(np.column_stack([quaternion_z(0), quaternion_x(0)]),
                          np.column_stack([quaternion_z(1), quaternion_x(0.5)]), 0.5)

        np.testing.assert_array_almost_equal(result, np.column_stack([quaternion_z(0.5), quaternion_x(0.25)]))
