# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module defines the exceptions raised when a validated operation would break one of the invariants of the
rotation types in :mod:`so3tools`.

All of the exceptions are raised immediately at the point the offending data is supplied.  None of them are ever
raised by the ``*_unsafe`` entry points, which leave validity up to the caller.  Element, flat array, and dense
matrix accessors that are asked for data outside of their bounds raise the builtin :exc:`IndexError`.

======================================  ==============================================================================
Exception                               Raised when
======================================  ==============================================================================
:exc:`NotARotationMatrixError`          a safe write would produce a matrix that is not orthonormal with determinant +1
:exc:`NotARotationScaleMatrixError`     a negative scale or a non-rotation base matrix is given to a scale aware type
:exc:`NotAMatrix2DError`                a matrix is required to only rotate about the z axis but does not
:exc:`NotAnOrientation2DError`          an orientation is required to only rotate about the z axis but does not
:exc:`SingularMatrixError`              a matrix with a (near) zero determinant is inverted
======================================  ==============================================================================
"""

__all__ = ['NotARotationMatrixError', 'NotARotationScaleMatrixError', 'NotAMatrix2DError', 'NotAnOrientation2DError',
           'SingularMatrixError']


class NotARotationMatrixError(ValueError):
    """
    Raised when a matrix that should be a proper rotation matrix is not orthonormal or has a determinant other than +1.
    """


class NotARotationScaleMatrixError(ValueError):
    """
    Raised when a rotation-scale matrix would get a negative scale or a base matrix that is not a rotation.
    """


class NotAMatrix2DError(ValueError):
    """
    Raised when a matrix is not confined to the rotations about the z axis.
    """


class NotAnOrientation2DError(ValueError):
    """
    Raised when an orientation is not confined to the rotations about the z axis.
    """


class SingularMatrixError(ValueError):
    """
    Raised when inverting a matrix whose determinant is zero.
    """
