# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module provides the :class:`Quaternion` class, a rotation stored as a unit quaternion ``[x, y, z, s]``.

The quaternion algebra itself lives in :mod:`so3tools.core.quaternion_math`; this class wraps it in the
:class:`.Orientation3D` contract and adds the in place operations.  Products are Hamilton products, so that
``A.append(B)`` gives the quaternion of the rotation matrix product ``A*B``.

Since ``q`` and ``-q`` represent the same rotation, comparisons that care about the rotation rather than the
numbers (:meth:`~.Orientation3D.distance`, :meth:`~.Orientation3D.geometrically_equals`) are independent of the sign
of either quaternion, while :meth:`~Quaternion.epsilon_equals` and ``==`` compare the components.
"""

import warnings

import numpy as np

from so3tools._typing import ARRAY_LIKE, DOUBLE_ARRAY, REPRESENTATIONS

from so3tools.core.quaternion_math import (quaternion_normalize, quaternion_conjugate, quaternion_inverse,
                                           quaternion_multiplication, quaternion_power, quaternion_dot,
                                           quaternion_distance_precise, slerp)
from so3tools.core._helpers import _check_quaternion_array_and_shape, _check_index
from so3tools.options import OrientationOptions
from so3tools.orientation import Orientation3D


__all__ = ['Quaternion']


class Quaternion(Orientation3D):
    """
    A rotation stored as a unit quaternion ``[x, y, z, s]`` with the scalar last.

    The safe setters normalize the quaternion; :meth:`set_unsafe` stores it as is.  Setting data whose norm is
    further than :attr:`unitary_epsilon` from 1 issues a warning since it usually means the data was not a
    rotation quaternion to begin with.

    A new instance is the identity quaternion ``[0, 0, 0, 1]``.
    """

    representation: REPRESENTATIONS = 'quaternion'

    _shape = (4,)

    def __init__(self, data: Orientation3D | ARRAY_LIKE | None = None, *, options: OrientationOptions | None = None):
        """
        :param data: the rotation to initialize with, see :meth:`set`
        :param options: the tolerances to use for this instance
        """

        super().__init__(options=options)

        self._quaternion: DOUBLE_ARRAY = np.array([0., 0., 0., 1.])
        """
        The quaternion components ``[x, y, z, s]``
        """

        if data is not None:
            self.set(data)

    def _native(self) -> DOUBLE_ARRAY:
        return self._quaternion

    def _set_native(self, data: DOUBLE_ARRAY) -> None:
        self._quaternion = np.array(data, dtype=np.float64).reshape(4)

    def _set_data(self, data: ARRAY_LIKE) -> None:

        quaternion = self._check_data(data)

        norm = np.linalg.norm(quaternion)

        if abs(norm - 1) > self.unitary_epsilon:
            warnings.warn(f'The quaternion {quaternion} has a norm of {norm} and was normalized')

        self._quaternion = quaternion_normalize(quaternion)

    def set_unsafe(self, quaternion: ARRAY_LIKE) -> None:
        """
        Stores the quaternion components ``[x, y, z, s]`` without normalizing them.

        :param quaternion: the quaternion to store
        """

        self._quaternion = self._check_data(quaternion)

    @property
    def quaternion(self) -> DOUBLE_ARRAY:
        """
        A copy of the quaternion components ``[x, y, z, s]``.
        """
        return self._quaternion.copy()

    @property
    def x(self) -> float:
        """
        The first component of the vector part.
        """
        return float(self._quaternion[0])

    @property
    def y(self) -> float:
        """
        The second component of the vector part.
        """
        return float(self._quaternion[1])

    @property
    def z(self) -> float:
        """
        The third component of the vector part.
        """
        return float(self._quaternion[2])

    @property
    def s(self) -> float:
        """
        The scalar part.
        """
        return float(self._quaternion[3])

    def __getitem__(self, index: int) -> float:
        return float(self._quaternion[_check_index(index, 4)])

    # -----------------------------------------------------------------------------------------------------------------
    # norm
    # -----------------------------------------------------------------------------------------------------------------

    @property
    def norm(self) -> float:
        """
        The 4D norm of the quaternion.
        """
        return float(np.linalg.norm(self._quaternion))

    @property
    def norm_squared(self) -> float:
        """
        The square of the 4D norm of the quaternion.
        """
        return float(self._quaternion @ self._quaternion)

    def is_unitary(self, epsilon: float | None = None) -> bool:
        """
        :param epsilon: the tolerance on the norm, defaults to :attr:`unitary_epsilon`
        :return: ``True`` if the norm of the quaternion is within ``epsilon`` of 1
        """

        epsilon = self.unitary_epsilon if epsilon is None else epsilon

        return abs(self.norm - 1) <= epsilon

    def check_if_unitary(self, epsilon: float | None = None) -> None:
        """
        :param epsilon: the tolerance on the norm, defaults to :attr:`unitary_epsilon`
        :raises ValueError: if the quaternion is not a unit quaternion
        """

        if not self.is_unitary(epsilon):
            raise ValueError(f'The quaternion {self._quaternion} is not a unit quaternion (norm {self.norm})')

    def normalize(self) -> None:
        """
        Scales the quaternion to unit length.  The zero quaternion becomes the identity and NaN is left alone.
        """

        self._quaternion = quaternion_normalize(self._quaternion)

    def normalize_and_limit_to_pi(self) -> None:
        """
        Normalizes the quaternion and flips its sign if needed so that the scalar part is non-negative, which limits
        the rotation angle to :math:`[0, \\pi]`.
        """

        self._quaternion = quaternion_normalize(self._quaternion, positive_scalar=True)

    # -----------------------------------------------------------------------------------------------------------------
    # algebra
    # -----------------------------------------------------------------------------------------------------------------

    def negate(self) -> None:
        """
        Negates every component.  The rotation represented does not change.
        """

        self._quaternion = -self._quaternion

    def conjugate(self) -> None:
        """
        Negates the vector part in place.
        """

        self._quaternion = quaternion_conjugate(self._quaternion)

    def inverse(self) -> None:
        """
        Replaces the quaternion with its multiplicative inverse, the conjugate divided by the squared norm.

        For a unit quaternion this is the same as :meth:`conjugate`.
        """

        self._quaternion = quaternion_inverse(self._quaternion)

    def invert(self) -> None:
        self.conjugate()

    def multiply(self, other: Orientation3D) -> None:
        """
        Replaces this quaternion ``A`` with ``A*B``.  This is the same as :meth:`append`.
        """
        self.append(other)

    def pre_multiply(self, other: Orientation3D) -> None:
        """
        Replaces this quaternion ``A`` with ``B*A``.  This is the same as :meth:`prepend`.
        """
        self.prepend(other)

    def multiply_conjugate_this(self, other: Orientation3D) -> None:
        """
        Replaces this quaternion ``A`` with ``conj(A)*B``.  This is the same as :meth:`append_invert_this`.
        """
        self.append_invert_this(other)

    def multiply_conjugate_other(self, other: Orientation3D) -> None:
        """
        Replaces this quaternion ``A`` with ``A*conj(B)``.  This is the same as :meth:`append_invert_other`.
        """
        self.append_invert_other(other)

    def multiply_conjugate_both(self, other: Orientation3D) -> None:
        """
        Replaces this quaternion ``A`` with ``conj(A)*conj(B)``.  This is the same as :meth:`append_invert_both`.
        """
        self.append_invert_both(other)

    def difference(self, first: Orientation3D, second: Orientation3D) -> None:
        """
        Sets this quaternion to the rotation from ``first`` to ``second``, ``conj(first)*second``.

        :param first: the starting rotation
        :param second: the ending rotation
        """

        self.set_quaternion(quaternion_multiplication(quaternion_conjugate(first.as_quaternion()),
                                                      second.as_quaternion()))

    def pow(self, exponent: float) -> None:
        """
        Raises the quaternion to a real power in place, which scales the rotation angle by ``exponent``.

        :param exponent: the power
        """

        self._quaternion = quaternion_power(self._quaternion, exponent)

    def dot(self, other: Orientation3D) -> float:
        """
        :param other: the other rotation
        :return: the 4D dot product with the quaternion of ``other``
        """
        return quaternion_dot(self._quaternion, other.as_quaternion())

    def distance_precise(self, other: Orientation3D) -> float:
        """
        The distance to ``other`` in :math:`[0, \\pi]`, see :func:`.quaternion_distance_precise`.

        :param other: the other rotation
        :return: the distance in radians
        """

        return quaternion_distance_precise(self._quaternion, other.as_quaternion())

    def interpolate(self, other: Orientation3D, alpha: float) -> None:
        """
        Replaces this quaternion with the spherical linear interpolation (SLERP) from it to ``other``.

        The shorter of the two arcs is followed.  At ``alpha == 0`` the quaternion is unchanged and at ``alpha == 1``
        it becomes the quaternion of ``other`` exactly (with the sign ``other`` has).

        :param other: the rotation to interpolate towards
        :param alpha: the fraction of the way to go, normally in [0, 1]
        """

        self._quaternion = slerp(self._quaternion, other.as_quaternion(), alpha)

    def epsilon_equals(self, other: Orientation3D | ARRAY_LIKE, epsilon: float) -> bool:
        """
        Component-wise comparison with another quaternion.  ``q`` and ``-q`` are not considered equal here, use
        :meth:`geometrically_equals` for that.

        :param other: the other rotation or quaternion components
        :param epsilon: the tolerance on each component
        :return: ``True`` if every component differs by at most ``epsilon``
        """

        if isinstance(other, Orientation3D):
            other = other.as_quaternion()

        return bool((np.abs(self._quaternion - _check_quaternion_array_and_shape(other)) <= epsilon).all())
