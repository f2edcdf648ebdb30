"""
This module provides the tolerances used by the rotation types when they validate or compare their data.

Each rotation type takes an optional :class:`OrientationOptions` instance.  The fields of the options are applied as
attributes of the instance and are used whenever a method that accepts an ``epsilon`` is called without one.  For
instance::

    >>> from so3tools import RotationMatrix, OrientationOptions
    >>> loose = RotationMatrix(options=OrientationOptions(rotation_matrix_epsilon=1e-3))
    >>> loose.rotation_matrix_epsilon
    0.001
"""

from dataclasses import dataclass

from so3tools.utilities.options import UserOptions


__all__ = ['OrientationOptions']


@dataclass
class OrientationOptions(UserOptions):
    """
    Default tolerances for the rotation types.
    """

    zero_epsilon: float = 1e-8
    """
    The angle below which an orientation is considered to be the zero (identity) rotation.
    """

    orientation_2d_epsilon: float = 1e-8
    """
    The tolerance used to decide whether an orientation only rotates about the z axis.
    """

    rotation_matrix_epsilon: float = 1e-7
    """
    The tolerance on orthonormality and the determinant used when checking whether a matrix is a rotation matrix.
    """

    identity_epsilon: float = 1e-12
    """
    The element-wise tolerance used when checking whether a matrix is the identity matrix.
    """

    unitary_epsilon: float = 1e-7
    """
    The tolerance on the norm used when checking whether a quaternion is a unit quaternion.
    """
