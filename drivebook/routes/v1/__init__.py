"""Version 1 API routers."""

from . import schedule

__all__ = ["schedule"]
