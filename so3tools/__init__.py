# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
so3tools provides 3D rotations represented interchangeably as rotation matrices, unit quaternions, axis-angles,
yaw-pitch-roll angles, and rotation vectors, along with two composite matrix types that carry a scale.

The representations are stored as follows:

=================  =====================================================================================================
Representation     Description
=================  =====================================================================================================
rotation matrix    A :math:`3\times 3` orthonormal matrix with a determinant of +1 that rotates vectors actively,
                   :math:`\mathbf{y}=\mathbf{R}\mathbf{x}`.  Flat arrays store it row major.
quaternion         A 4 element unit quaternion with the scalar last,
                   :math:`\mathbf{q}=\left[\begin{array}{c}\text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\\
                   \text{cos}(\frac{\theta}{2})\end{array}\right]`.  :math:`\mathbf{q}` and :math:`-\mathbf{q}`
                   represent the same rotation.
axis-angle         A unit axis :math:`\hat{\mathbf{x}}` and an angle :math:`\theta` in radians, stored flat as
                   ``[ux, uy, uz, angle]``.
yaw-pitch-roll     The angles of :math:`\mathbf{R}=\mathbf{R}_z(yaw)\mathbf{R}_y(pitch)\mathbf{R}_x(roll)`.  The euler
                   vector ``[rx, ry, rz]`` is the same angles in the order ``[roll, pitch, yaw]``.
rotation vector    :math:`\mathbf{v}=\theta\hat{\mathbf{x}}`.
=================  =====================================================================================================

Every rotation type is an :class:`.Orientation3D`, so each can be set from, converted to, composed with, and compared
against any other.  The stateless conversions and algebra used underneath are available from :mod:`so3tools.core`.

:class:`.LinearTransform3D` holds an arbitrary 3x3 matrix together with its rotation/scale/rotation factorization
and :class:`.RotationScaleMatrix` holds a rotation matrix followed by a non-negative scale along each axis.

Failures are reported with the exceptions in :mod:`so3tools.exceptions`, and the tolerances the types use can be
changed through :class:`.OrientationOptions`.
"""

from so3tools import core

from so3tools.exceptions import (NotARotationMatrixError, NotARotationScaleMatrixError, NotAMatrix2DError,
                                 NotAnOrientation2DError, SingularMatrixError)
from so3tools.options import OrientationOptions
from so3tools.orientation import Orientation3D
from so3tools.rotation_matrix import RotationMatrix
from so3tools.quaternion import Quaternion
from so3tools.axis_angle import AxisAngle
from so3tools.yaw_pitch_roll import YawPitchRoll
from so3tools.rotation_vector import RotationVector
from so3tools.rotation_scale_matrix import RotationScaleMatrix
from so3tools.linear_transform import LinearTransform3D


__all__ = ['core', 'Orientation3D', 'RotationMatrix', 'Quaternion', 'AxisAngle', 'YawPitchRoll', 'RotationVector',
           'RotationScaleMatrix', 'LinearTransform3D', 'OrientationOptions',
           'NotARotationMatrixError', 'NotARotationScaleMatrixError', 'NotAMatrix2DError', 'NotAnOrientation2DError',
           'SingularMatrixError']

__version__ = '1.0.0'
