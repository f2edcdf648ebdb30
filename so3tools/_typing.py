from typing import Union, Literal, Sequence

import numpy as np
import numpy.typing as npt

DOUBLE_ARRAY = np.typing.NDArray[np.float64]
ARRAY_LIKE = npt.ArrayLike
SCALAR_OR_ARRAY = Union[float, npt.ArrayLike]
F_SCALAR_OR_ARRAY = Union[float, DOUBLE_ARRAY]

F_ARRAY_LIKE = Sequence[float] | DOUBLE_ARRAY

REPRESENTATIONS = Literal['matrix', 'quaternion', 'axis_angle', 'rotation_vector', 'yaw_pitch_roll']
"""
The closed set of rotation representation tags understood by :func:`.convert`.
"""
