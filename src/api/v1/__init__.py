"""
Version 1 API routers.
"""

from src.api.v1 import schedule

__all__ = ["schedule"]
