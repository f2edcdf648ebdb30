"""
This package provides the configuration machinery used throughout so3tools.
"""

from so3tools.utilities.options import UserOptions
from so3tools.utilities.mixin_classes import UserOptionConfigured

__all__ = ["UserOptions", "UserOptionConfigured"]
