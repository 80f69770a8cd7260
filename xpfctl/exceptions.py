"""Error taxonomy for installation and service management."""

from typing import Optional


class XpfError(Exception):
    """Base class for all xpfctl errors."""

    def __init__(self, message: str, stage=None):
        """Initialize the error.

        Args:
            message: Human readable description
            stage: Optional InstallStage where the error happened
        """
        super().__init__(message)
        self.message = message
        self.stage = stage


class PrivilegeError(XpfError):
    """The caller is not the host administrator."""


class FetchError(XpfError):
    """An artifact could not be retrieved from the remote source."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class FileSystemError(XpfError):
    """Creating, placing or chmod-ing an installed file failed."""


class ServiceManagerError(XpfError):
    """A systemd operation failed."""


class MenuInputError(XpfError):
    """Operator input did not match any menu choice."""
