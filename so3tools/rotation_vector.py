"""
This module provides the :class:`RotationVector` class, a rotation stored as the rotation angle times the unit rotation
axis.
"""

import numpy as np

from so3tools._typing import ARRAY_LIKE, DOUBLE_ARRAY, REPRESENTATIONS

from so3tools.core._helpers import _check_index
from so3tools.options import OrientationOptions
from so3tools.orientation import Orientation3D


__all__ = ['RotationVector']


class RotationVector(Orientation3D):
    """
    A rotation stored as a rotation vector, whose direction is the rotation axis and whose length is the rotation
    angle in radians.

    The zero vector is the zero rotation.
    """

    representation: REPRESENTATIONS = 'rotation_vector'

    _shape = (3,)

    def __init__(self, data: Orientation3D | ARRAY_LIKE | None = None, *, options: OrientationOptions | None = None):
        """
        :param data: the rotation vector or the rotation to initialize with
        :param options: the tolerances to use for this instance
        """

        super().__init__(options=options)

        self._vector: DOUBLE_ARRAY = np.zeros(3)
        """
        The rotation vector
        """

        if data is not None:
            self.set(data)

    def _native(self) -> DOUBLE_ARRAY:
        return self._vector

    def _set_native(self, data: DOUBLE_ARRAY) -> None:
        self._vector = np.array(data, dtype=np.float64).reshape(3)

    def _set_data(self, data: ARRAY_LIKE) -> None:
        self._vector = self._check_data(data)

    @property
    def vector(self) -> DOUBLE_ARRAY:
        """
        A copy of the rotation vector.
        """
        return self._vector.copy()

    def __getitem__(self, index: int) -> float:
        return float(self._vector[_check_index(index, 3)])

    def invert(self) -> None:
        self._vector = -self._vector

    def epsilon_equals(self, other: 'RotationVector', epsilon: float) -> bool:
        """
        Component-wise comparison of the rotation vectors.

        :param other: the other rotation vector
        :param epsilon: the tolerance on each component
        :return: ``True`` if every component differs by at most ``epsilon``
        """

        return bool((np.abs(self._vector - other._vector) <= epsilon).all())
