"""Service manager for interacting with systemd via systemctl."""

import subprocess
import logging
from typing import List, Tuple, Optional

from ..models.service import ServiceStatus
from ..utils.constants import DEFAULT_LOG_LINES

logger = logging.getLogger(__name__)


class LogFollower:
    """Handle on a running `journalctl -f` process.

    The process inherits the terminal, so the operator's Ctrl+C reaches it
    directly. Callers wait on it and cancel it when they get the interrupt.
    """

    def __init__(self, process: subprocess.Popen):
        self.process = process

    def wait(self) -> int:
        """Block until the log follower exits.

        Returns:
            Exit status of journalctl
        """
        return self.process.wait()

    def cancel(self):
        """Stop following logs if the process is still running."""
        if self.process.poll() is None:
            self.process.terminate()
            try:
                self.process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                self.process.kill()
                self.process.wait()


class ServiceManager:
    """Manages system-level systemd services via systemctl and journalctl."""

    def get_service_status(self, service_name: str) -> ServiceStatus:
        """Get the current status of a service.

        Args:
            service_name: Name of the systemd service

        Returns:
            ServiceStatus enum value
        """
        cmd = ["systemctl", "show", service_name, "--property=ActiveState", "--value"]

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True
            )
            return ServiceStatus.from_string(result.stdout)

        except subprocess.CalledProcessError as e:
            logger.error(f"Failed to get status for {service_name}: {e.stderr}")
            return ServiceStatus.UNKNOWN
        except OSError as e:
            logger.error(f"Unexpected error getting status for {service_name}: {e}")
            return ServiceStatus.UNKNOWN

    def is_active(self, service_name: str) -> bool:
        """Check whether a service is currently running.

        Args:
            service_name: Name of the systemd service

        Returns:
            True if `systemctl is-active` reports the unit active
        """
        try:
            result = subprocess.run(
                ["systemctl", "is-active", "--quiet", service_name],
                check=False
            )
            return result.returncode == 0
        except OSError as e:
            logger.warning(f"Could not query {service_name}: {e}")
            return False

    def get_status_text(self, service_name: str) -> str:
        """Get the human readable `systemctl status` report.

        systemctl exits non-zero for stopped or failed units, which is not an
        error here; the report is returned either way.

        Args:
            service_name: Name of the systemd service

        Returns:
            Status report as string
        """
        try:
            result = subprocess.run(
                ["systemctl", "status", service_name, "--no-pager"],
                capture_output=True,
                text=True,
                check=False
            )
            return (result.stdout + result.stderr).rstrip()

        except OSError as e:
            logger.error(f"Unexpected error getting status report for {service_name}: {e}")
            return f"Error: {str(e)}"

    def start_service(self, service_name: str) -> Tuple[bool, Optional[str]]:
        """Start a systemd service.

        Args:
            service_name: Name of the systemd service

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        return self._execute_systemctl_action("start", service_name)

    def stop_service(self, service_name: str) -> Tuple[bool, Optional[str]]:
        """Stop a systemd service.

        Args:
            service_name: Name of the systemd service

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        return self._execute_systemctl_action("stop", service_name)

    def restart_service(self, service_name: str) -> Tuple[bool, Optional[str]]:
        """Restart a systemd service.

        Args:
            service_name: Name of the systemd service

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        return self._execute_systemctl_action("restart", service_name)

    def enable_service(self, service_name: str) -> Tuple[bool, Optional[str]]:
        """Enable a systemd service to start on boot.

        Args:
            service_name: Name of the systemd service

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        return self._execute_systemctl_action("enable", service_name)

    def daemon_reload(self) -> Tuple[bool, Optional[str]]:
        """Make systemd re-read unit files.

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        return self._run(["systemctl", "daemon-reload"], "reload unit files")

    def follow_service_logs(self, service_name: str, lines: int = DEFAULT_LOG_LINES) -> LogFollower:
        """Start following a service's journal.

        Args:
            service_name: Name of the systemd service
            lines: Number of past log lines to show first

        Returns:
            LogFollower for the running journalctl process
        """
        cmd = [
            "journalctl",
            "-u", service_name,
            "-n", str(lines),
            "-f",
            "--no-pager",
            "--output=short-iso"
        ]
        logger.debug(f"Following logs: {' '.join(cmd)}")
        return LogFollower(subprocess.Popen(cmd))

    def _execute_systemctl_action(self, action: str, service_name: str) -> Tuple[bool, Optional[str]]:
        """Execute a systemctl action (start, stop, restart, enable).

        Args:
            action: Systemctl action
            service_name: Name of the systemd service

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        return self._run(["systemctl", action, service_name], f"{action} {service_name}")

    def _run(self, cmd: List[str], description: str) -> Tuple[bool, Optional[str]]:
        try:
            subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True
            )
            logger.debug(f"Succeeded: {description}")
            return True, None

        except subprocess.CalledProcessError as e:
            error_msg = e.stderr.strip() if e.stderr else f"Failed to {description}"
            logger.error(f"Failed to {description}: {error_msg}")
            return False, error_msg

        except OSError as e:
            error_msg = str(e)
            logger.error(f"Unexpected error while trying to {description}: {error_msg}")
            return False, error_msg
