"""Utility functions and constants."""

from .constants import *
from .privilege import ensure_privileged, is_privileged

__all__ = ["APP_NAME", "APP_VERSION", "CONFIG_FILE", "LOG_FILE", "STATUS_COLORS", "ensure_privileged", "is_privileged"]
