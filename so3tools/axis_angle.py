"""
This module provides the :class:`AxisAngle` class, a rotation stored as a unit axis and an angle.
"""

import numpy as np

from so3tools._typing import ARRAY_LIKE, DOUBLE_ARRAY, REPRESENTATIONS

from so3tools.core._helpers import _check_vector_array_and_shape, _check_index
from so3tools.options import OrientationOptions
from so3tools.orientation import Orientation3D


__all__ = ['AxisAngle']


class AxisAngle(Orientation3D):
    """
    A rotation of :attr:`theta` radians about the unit vector :attr:`axis`.

    The angle is not wrapped, so ``AxisAngle([0, 0, 1], 3*np.pi)`` keeps an angle of ``3*np.pi``.  The zero rotation
    is stored with the x axis, ``([1, 0, 0], 0)``.  Axis-angles can be built either from an axis and an angle or
    from the flat ``[ux, uy, uz, angle]`` layout::

        >>> import numpy as np
        >>> from so3tools import AxisAngle
        >>> AxisAngle([0, 0, 2], np.pi/2) == AxisAngle([0, 0, 1, np.pi/2])
        True
    """

    representation: REPRESENTATIONS = 'axis_angle'

    _shape = (4,)

    def __init__(self, data: Orientation3D | ARRAY_LIKE | None = None, angle: float | None = None, *,
                 options: OrientationOptions | None = None):
        """
        :param data: the axis if ``angle`` is given, otherwise the rotation to initialize with (see :meth:`set`)
        :param angle: the rotation angle in radians
        :param options: the tolerances to use for this instance
        """

        super().__init__(options=options)

        self._axis_angle: DOUBLE_ARRAY = np.array([1., 0., 0., 0.])
        """
        The axis and angle ``[ux, uy, uz, angle]``
        """

        if angle is not None:
            self.set_axis_angle(data, angle)
        elif data is not None:
            self.set(data)

    def _native(self) -> DOUBLE_ARRAY:
        return self._axis_angle

    def _set_native(self, data: DOUBLE_ARRAY) -> None:
        self._axis_angle = np.array(data, dtype=np.float64).reshape(4)

    def _set_data(self, data: ARRAY_LIKE) -> None:
        self._axis_angle = self._check_data(data)
        self.normalize()

    def set_axis_angle(self, axis: ARRAY_LIKE, angle: float) -> None:
        self._set_data(np.concatenate([_check_vector_array_and_shape(axis), [angle]]))

    @property
    def axis(self) -> DOUBLE_ARRAY:
        """
        A copy of the unit rotation axis.  Setting the axis normalizes it.
        """
        return self._axis_angle[:3].copy()

    @axis.setter
    def axis(self, val: ARRAY_LIKE):
        self.set_axis_angle(val, self._axis_angle[3])

    @property
    def theta(self) -> float:
        """
        The rotation angle in radians, as stored (not wrapped).
        """
        return float(self._axis_angle[3])

    @theta.setter
    def theta(self, val: float):
        self._axis_angle[3] = val

    def __getitem__(self, index: int) -> float:
        return float(self._axis_angle[_check_index(index, 4)])

    def normalize(self) -> None:
        """
        Scales the axis to unit length.  A zero axis gives the zero rotation and NaN is left alone.
        """

        if self.contains_nan():
            return

        norm = np.linalg.norm(self._axis_angle[:3])

        if norm == 0:
            self.set_to_zero()
        else:
            self._axis_angle[:3] /= norm

    def invert(self) -> None:
        self._axis_angle[3] = -self._axis_angle[3]

    def epsilon_equals(self, other: 'AxisAngle', epsilon: float) -> bool:
        """
        Component-wise comparison of the axes and the angles.

        :param other: the other axis-angle
        :param epsilon: the tolerance on each component
        :return: ``True`` if every component differs by at most ``epsilon``
        """

        return bool((np.abs(self._axis_angle - other._axis_angle) <= epsilon).all())
