"""
This subpackage provides the pure routines underlying the rotation types: conversions between the rotation
representations, the quaternion algebra, 3x3 matrix tools, and the flat buffer/dense matrix interoperability helpers.

Everything here works directly on numpy arrays and keeps no state.
"""

from so3tools.core.conversions import *
from so3tools.core.elementals import *
from so3tools.core.quaternion_math import *
from so3tools.core.matrix_tools import *
from so3tools.core.interop import *

from so3tools.core import conversions, elementals, quaternion_math, matrix_tools, interop

__all__ = conversions.__all__ + elementals.__all__ + quaternion_math.__all__ + matrix_tools.__all__ + interop.__all__
