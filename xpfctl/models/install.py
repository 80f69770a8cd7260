"""Data models describing one installation run."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class InstallStage(Enum):
    """Stages of an install run, in execution order."""

    FETCH = "fetch"
    STOP_PREVIOUS = "stop-previous"
    DIRECTORY_CREATION = "directory-creation"
    PLACEMENT = "placement"
    PERMISSIONS = "permissions"
    UNIT_WRITE = "unit-write"
    HELPER_WRITE = "helper-write"
    ENABLE = "enable"


@dataclass(frozen=True)
class InstallationTarget:
    """Where the proxy artifacts end up on the host.

    Attributes:
        install_dir: Directory holding the executable and its configuration
        executable_name: File name of the proxy binary
        config_name: File name of the configuration
        service_name: systemd unit name without suffix
    """

    install_dir: Path
    executable_name: str
    config_name: str
    service_name: str

    @property
    def artifact_path(self) -> Path:
        return self.install_dir / self.executable_name

    @property
    def config_path(self) -> Path:
        return self.install_dir / self.config_name


@dataclass
class InstallationOutcome:
    """Result of one install run. Produced once, never persisted."""

    success: bool
    stage: Optional[InstallStage] = None
    message: str = ""

    @classmethod
    def succeeded(cls) -> 'InstallationOutcome':
        return cls(success=True)

    @classmethod
    def failed(cls, stage: InstallStage, message: str) -> 'InstallationOutcome':
        return cls(success=False, stage=stage, message=message)

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1
