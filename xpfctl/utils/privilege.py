"""Privilege guard for operations that touch host state."""

import logging
import os

from ..exceptions import PrivilegeError

logger = logging.getLogger(__name__)


def is_privileged() -> bool:
    """Check whether the effective user is root.

    Returns:
        True if running with an effective UID of 0, False otherwise
    """
    return os.geteuid() == 0


def ensure_privileged():
    """Fail fast unless running as the host administrator.

    Raises:
        PrivilegeError: If the effective UID is not 0
    """
    if not is_privileged():
        logger.debug(f"Privilege check failed for euid {os.geteuid()}")
        raise PrivilegeError("This command must be run as root. Please use 'sudo'.")


def get_current_username() -> str:
    """Get the current username.

    Returns:
        Current username
    """
    return os.getenv("SUDO_USER") or os.getenv("USER") or os.getenv("USERNAME") or "unknown"
