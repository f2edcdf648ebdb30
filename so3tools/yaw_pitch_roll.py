"""
This module provides the :class:`YawPitchRoll` class, a rotation stored as yaw, pitch, and roll angles.
"""

import numpy as np

from so3tools._typing import ARRAY_LIKE, DOUBLE_ARRAY, REPRESENTATIONS

from so3tools.core._helpers import _check_index
from so3tools.options import OrientationOptions
from so3tools.orientation import Orientation3D


__all__ = ['YawPitchRoll']


class YawPitchRoll(Orientation3D):
    r"""
    A rotation stored as the yaw, pitch, and roll angles of the sequence
    :math:`\mathbf{R}=\mathbf{R}_z(yaw)\mathbf{R}_y(pitch)\mathbf{R}_x(roll)`.

    At a pitch of :math:`\pm\pi/2` (gimbal lock) yaw and roll rotate about the same axis.  Converting such a rotation
    into yaw, pitch, and roll gives a roll of 0 with the whole rotation about that axis reported as yaw.

    Unlike the other types, the angles can be read and written directly through :attr:`yaw`, :attr:`pitch`, and
    :attr:`roll`.
    """

    representation: REPRESENTATIONS = 'yaw_pitch_roll'

    _shape = (3,)

    def __init__(self, data: Orientation3D | ARRAY_LIKE | None = None, *, options: OrientationOptions | None = None):
        """
        :param data: the ``[yaw, pitch, roll]`` angles in radians or the rotation to initialize with
        :param options: the tolerances to use for this instance
        """

        super().__init__(options=options)

        self._yaw_pitch_roll: DOUBLE_ARRAY = np.zeros(3)
        """
        The ``[yaw, pitch, roll]`` angles in radians
        """

        if data is not None:
            self.set(data)

    def _native(self) -> DOUBLE_ARRAY:
        return self._yaw_pitch_roll

    def _set_native(self, data: DOUBLE_ARRAY) -> None:
        self._yaw_pitch_roll = np.array(data, dtype=np.float64).reshape(3)

    def _set_data(self, data: ARRAY_LIKE) -> None:
        self._yaw_pitch_roll = self._check_data(data)

    @property
    def yaw(self) -> float:
        """
        The rotation about the z axis in radians.
        """
        return float(self._yaw_pitch_roll[0])

    @yaw.setter
    def yaw(self, val: float):
        self._yaw_pitch_roll[0] = val

    @property
    def pitch(self) -> float:
        """
        The rotation about the y axis in radians.
        """
        return float(self._yaw_pitch_roll[1])

    @pitch.setter
    def pitch(self, val: float):
        self._yaw_pitch_roll[1] = val

    @property
    def roll(self) -> float:
        """
        The rotation about the x axis in radians.
        """
        return float(self._yaw_pitch_roll[2])

    @roll.setter
    def roll(self, val: float):
        self._yaw_pitch_roll[2] = val

    def __getitem__(self, index: int) -> float:
        return float(self._yaw_pitch_roll[_check_index(index, 3)])

    def epsilon_equals(self, other: 'YawPitchRoll', epsilon: float) -> bool:
        """
        Component-wise comparison of the angles.

        :param other: the other yaw-pitch-roll
        :param epsilon: the tolerance on each angle
        :return: ``True`` if every angle differs by at most ``epsilon``
        """

        return bool((np.abs(self._yaw_pitch_roll - other._yaw_pitch_roll) <= epsilon).all())
