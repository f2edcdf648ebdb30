"""
This package contains the mixin classes shared by the rotation types.
"""

from so3tools.utilities.mixin_classes.user_option_configured import UserOptionConfigured

__all__ = ["UserOptionConfigured"]
