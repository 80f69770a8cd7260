"""Tests for data models."""

import unittest
from pathlib import Path

from xpfctl.exceptions import MenuInputError
from xpfctl.models.install import InstallationOutcome, InstallationTarget, InstallStage
from xpfctl.models.service import LifecycleAction, ServiceDefinition, ServiceStatus


class TestLifecycleAction(unittest.TestCase):

    def test_decodes_menu_choices(self):
        expected = {
            "1": LifecycleAction.STATUS,
            "2": LifecycleAction.TAIL_LOGS,
            "3": LifecycleAction.START,
            "4": LifecycleAction.STOP,
            "5": LifecycleAction.RESTART,
            "q": LifecycleAction.QUIT,
            "Q": LifecycleAction.QUIT,
        }
        for text, action in expected.items():
            with self.subTest(text=text):
                self.assertIs(LifecycleAction.from_input(text), action)

    def test_ignores_surrounding_whitespace(self):
        self.assertIs(LifecycleAction.from_input(" 3\n"), LifecycleAction.START)

    def test_rejects_other_input(self):
        for text in ["", "0", "6", "quit", "qq", "x", "1 2", "-1"]:
            with self.subTest(text=text):
                with self.assertRaises(MenuInputError):
                    LifecycleAction.from_input(text)

    def test_every_action_has_a_label(self):
        for action in LifecycleAction:
            self.assertTrue(action.label)


class TestServiceStatus(unittest.TestCase):

    def test_from_string(self):
        self.assertIs(ServiceStatus.from_string("active\n"), ServiceStatus.ACTIVE)
        self.assertIs(ServiceStatus.from_string("FAILED"), ServiceStatus.FAILED)
        self.assertIs(ServiceStatus.from_string("reloading"), ServiceStatus.UNKNOWN)


class TestServiceDefinition(unittest.TestCase):

    def make(self, **overrides):
        fields = dict(
            service_name="xpf",
            executable_path=Path("/etc/xpf/sni-proxy-server"),
            working_directory=Path("/etc/xpf"),
            config_path=Path("/etc/xpf/config.yaml"),
        )
        fields.update(overrides)
        return ServiceDefinition(**fields)

    def test_default_description_names_service(self):
        self.assertEqual(self.make().description, "SNI Proxy Service (xpf)")

    def test_unit_name_and_exec_start(self):
        definition = self.make()
        self.assertEqual(definition.unit_name, "xpf.service")
        self.assertEqual(definition.exec_start, "/etc/xpf/sni-proxy-server /etc/xpf/config.yaml")

    def test_rejects_invalid_values(self):
        with self.assertRaises(ValueError):
            self.make(service_name="")
        with self.assertRaises(ValueError):
            self.make(restart_delay=-1)
        with self.assertRaises(ValueError):
            self.make(open_files_limit=0)

    def test_rejects_names_outside_unit_charset(self):
        for name in ("xpf\nimport os", "../xpf", ".hidden", "xpf proxy", "xpf@1"):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    self.make(service_name=name)

    def test_accepts_unit_charset_names(self):
        for name in ("xpf", "edge-proxy_2", "sni.proxy", "a:b"):
            with self.subTest(name=name):
                self.assertEqual(self.make(service_name=name).unit_name, f"{name}.service")


class TestInstallationModels(unittest.TestCase):

    def test_target_paths_are_children_of_install_dir(self):
        target = InstallationTarget(Path("/etc/xpf"), "sni-proxy-server", "config.yaml", "xpf")
        self.assertEqual(target.artifact_path, Path("/etc/xpf/sni-proxy-server"))
        self.assertEqual(target.config_path, Path("/etc/xpf/config.yaml"))

    def test_outcome_exit_codes(self):
        self.assertEqual(InstallationOutcome.succeeded().exit_code, 0)
        failed = InstallationOutcome.failed(InstallStage.PLACEMENT, "disk full")
        self.assertEqual(failed.exit_code, 1)
        self.assertIs(failed.stage, InstallStage.PLACEMENT)
        self.assertEqual(InstallStage.STOP_PREVIOUS.value, "stop-previous")


if __name__ == "__main__":
    unittest.main()
