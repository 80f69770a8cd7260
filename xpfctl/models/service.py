"""Data models for the managed systemd service."""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..exceptions import MenuInputError
from ..utils.constants import SERVICE_NAME_PATTERN


class ServiceStatus(Enum):
    """Enumeration of possible service states."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    FAILED = "failed"
    ACTIVATING = "activating"
    DEACTIVATING = "deactivating"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, status_str: str) -> 'ServiceStatus':
        """Convert a string to ServiceStatus enum.

        Args:
            status_str: Status string from systemctl

        Returns:
            ServiceStatus enum value
        """
        try:
            return cls(status_str.strip().lower())
        except ValueError:
            return cls.UNKNOWN


class LifecycleAction(Enum):
    """Operator choices offered by the operations menu."""

    STATUS = "1"
    TAIL_LOGS = "2"
    START = "3"
    STOP = "4"
    RESTART = "5"
    QUIT = "q"

    @property
    def label(self) -> str:
        return _ACTION_LABELS[self]

    @classmethod
    def from_input(cls, text: str) -> 'LifecycleAction':
        """Decode one line of operator input.

        Args:
            text: Raw input line

        Returns:
            LifecycleAction for the choice

        Raises:
            MenuInputError: If the input is not one of 1-5, q or Q
        """
        choice = text.strip()
        if choice == "Q":
            choice = "q"
        try:
            return cls(choice)
        except ValueError:
            raise MenuInputError(f"Invalid choice: {text.strip()!r}") from None


_ACTION_LABELS = {
    LifecycleAction.STATUS: "View service status",
    LifecycleAction.TAIL_LOGS: "Follow service logs (Ctrl+C to return)",
    LifecycleAction.START: "Start service",
    LifecycleAction.STOP: "Stop service",
    LifecycleAction.RESTART: "Restart service",
    LifecycleAction.QUIT: "Quit",
}


@dataclass(frozen=True)
class ServiceDefinition:
    """Everything needed to render the systemd unit.

    Attributes:
        service_name: Unit name without the '.service' suffix
        executable_path: Absolute path of the installed proxy binary
        working_directory: Directory the process runs in
        config_path: Configuration file passed as the only argument
        description: Value of the unit Description= field
        user: Identity the service runs as
        restart_delay: Seconds systemd waits before restarting after a failure
        open_files_limit: LimitNOFILE value
    """

    service_name: str
    executable_path: Path
    working_directory: Path
    config_path: Path
    description: str = ""
    user: str = "root"
    restart_delay: int = 5
    open_files_limit: int = 65535

    def __post_init__(self):
        """Validate the definition after initialization."""
        if not self.service_name:
            raise ValueError("Service name cannot be empty")

        if not re.fullmatch(SERVICE_NAME_PATTERN, self.service_name):
            raise ValueError(f"Invalid service name: {self.service_name!r}")

        if self.restart_delay < 0:
            raise ValueError(f"Invalid restart_delay: {self.restart_delay}")

        if self.open_files_limit <= 0:
            raise ValueError(f"Invalid open_files_limit: {self.open_files_limit}")

        if not self.description:
            object.__setattr__(self, "description", f"SNI Proxy Service ({self.service_name})")

    @property
    def unit_name(self) -> str:
        return f"{self.service_name}.service"

    @property
    def exec_start(self) -> str:
        return f"{self.executable_path} {self.config_path}"
