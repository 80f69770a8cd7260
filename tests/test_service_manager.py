"""Tests for the systemctl/journalctl adapter and the lifecycle controller."""

import subprocess
import unittest
from unittest.mock import MagicMock, patch

from xpfctl.core.lifecycle import LifecycleController
from xpfctl.core.service_manager import LogFollower, ServiceManager
from xpfctl.exceptions import ServiceManagerError
from xpfctl.models.service import ServiceStatus


class TestServiceManager(unittest.TestCase):

    def setUp(self):
        self.manager = ServiceManager()
        patcher = patch("xpfctl.core.service_manager.subprocess.run")
        self.mock_run = patcher.start()
        self.addCleanup(patcher.stop)

    def test_actions_call_systemctl(self):
        self.mock_run.return_value = MagicMock(returncode=0)
        actions = {
            "start": self.manager.start_service,
            "stop": self.manager.stop_service,
            "restart": self.manager.restart_service,
            "enable": self.manager.enable_service,
        }
        for action, method in actions.items():
            with self.subTest(action=action):
                self.assertEqual(method("xpf"), (True, None))
                self.assertEqual(self.mock_run.call_args[0][0], ["systemctl", action, "xpf"])

    def test_daemon_reload(self):
        self.mock_run.return_value = MagicMock(returncode=0)

        self.assertEqual(self.manager.daemon_reload(), (True, None))
        self.assertEqual(self.mock_run.call_args[0][0], ["systemctl", "daemon-reload"])

    def test_failed_action_returns_stderr(self):
        self.mock_run.side_effect = subprocess.CalledProcessError(
            1, ["systemctl", "start", "xpf"], stderr="Unit xpf.service not found.\n"
        )

        self.assertEqual(self.manager.start_service("xpf"), (False, "Unit xpf.service not found."))

    def test_missing_systemctl_returns_error(self):
        self.mock_run.side_effect = FileNotFoundError("systemctl")

        success, error = self.manager.stop_service("xpf")

        self.assertFalse(success)
        self.assertIn("systemctl", error)

    def test_get_service_status(self):
        self.mock_run.return_value = MagicMock(stdout="active\n")

        self.assertIs(self.manager.get_service_status("xpf"), ServiceStatus.ACTIVE)
        self.assertIn("--property=ActiveState", self.mock_run.call_args[0][0])

    def test_get_service_status_failure_is_unknown(self):
        self.mock_run.side_effect = subprocess.CalledProcessError(1, [], stderr="boom")

        self.assertIs(self.manager.get_service_status("xpf"), ServiceStatus.UNKNOWN)

    def test_is_active(self):
        self.mock_run.return_value = MagicMock(returncode=0)
        self.assertTrue(self.manager.is_active("xpf"))

        self.mock_run.return_value = MagicMock(returncode=3)
        self.assertFalse(self.manager.is_active("xpf"))
        self.assertEqual(self.mock_run.call_args[0][0], ["systemctl", "is-active", "--quiet", "xpf"])

    def test_status_text_of_stopped_unit(self):
        self.mock_run.return_value = MagicMock(
            returncode=3, stdout="xpf.service - SNI Proxy Service (xpf)\n   Active: inactive (dead)\n", stderr=""
        )

        text = self.manager.get_status_text("xpf")

        self.assertIn("inactive (dead)", text)
        self.assertFalse(text.endswith("\n"))

    def test_follow_service_logs(self):
        with patch("xpfctl.core.service_manager.subprocess.Popen") as mock_popen:
            follower = self.manager.follow_service_logs("xpf", lines=20)

        cmd = mock_popen.call_args[0][0]
        self.assertEqual(cmd[:3], ["journalctl", "-u", "xpf"])
        self.assertIn("-f", cmd)
        self.assertEqual(cmd[cmd.index("-n") + 1], "20")
        self.assertIs(follower.process, mock_popen.return_value)


class TestLogFollower(unittest.TestCase):

    def test_cancel_terminates_running_process(self):
        process = MagicMock()
        process.poll.return_value = None

        LogFollower(process).cancel()

        process.terminate.assert_called_once()
        process.kill.assert_not_called()

    def test_cancel_kills_stubborn_process(self):
        process = MagicMock()
        process.poll.return_value = None
        process.wait.side_effect = [subprocess.TimeoutExpired("journalctl", 5), 0]

        LogFollower(process).cancel()

        process.kill.assert_called_once()

    def test_cancel_after_exit_does_nothing(self):
        process = MagicMock()
        process.poll.return_value = 0

        LogFollower(process).cancel()

        process.terminate.assert_not_called()


class TestLifecycleController(unittest.TestCase):

    def setUp(self):
        self.manager = MagicMock(spec=ServiceManager)
        self.controller = LifecycleController("xpf", self.manager, log_lines=50)

    def test_delegates_to_service_manager(self):
        self.manager.restart_service.return_value = (True, None)

        self.assertEqual(self.controller.restart(), (True, None))
        self.manager.restart_service.assert_called_once_with("xpf")

        self.controller.tail_logs()
        self.manager.follow_service_logs.assert_called_once_with("xpf", 50)

    def test_start_and_enable(self):
        self.manager.start_service.return_value = (True, None)
        self.manager.enable_service.return_value = (True, None)

        self.controller.start_and_enable()

        self.manager.start_service.assert_called_once_with("xpf")
        self.manager.enable_service.assert_called_once_with("xpf")

    def test_start_and_enable_raises_on_failure(self):
        self.manager.start_service.return_value = (True, None)
        self.manager.enable_service.return_value = (False, "Access denied")

        with self.assertRaises(ServiceManagerError) as ctx:
            self.controller.start_and_enable()

        self.assertIn("enable", ctx.exception.message)
        self.assertIn("Access denied", ctx.exception.message)


if __name__ == "__main__":
    unittest.main()
