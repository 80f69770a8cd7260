"""Test doubles for the lifecycle controller and operator input."""

from xpfctl.core.lifecycle import LifecycleController
from xpfctl.models.service import ServiceStatus


class FakeFollower:
    """Stands in for a running journalctl process."""

    def __init__(self, interrupt=False):
        self.interrupt = interrupt
        self.waited = False
        self.cancelled = False

    def wait(self):
        self.waited = True
        if self.interrupt:
            raise KeyboardInterrupt
        return 0

    def cancel(self):
        self.cancelled = True


class FakeController(LifecycleController):
    """Records lifecycle calls instead of touching systemd.

    start_and_enable is inherited, so the real error mapping runs.
    """

    def __init__(self, service_name="xpf", active=False):
        self.service_name = service_name
        self.active = active
        self.calls = []
        self.results = {}
        self.status = ServiceStatus.ACTIVE
        self.follower = FakeFollower()
        self.on_stop = None
        self.tail_error = None
        self.status_queries = 0

    def _result(self, name):
        self.calls.append(name)
        result = self.results.get(name, (True, None))
        if isinstance(result, BaseException):
            raise result
        return result

    def is_active(self):
        return self.active

    def current_status(self):
        self.status_queries += 1
        return self.status

    def status_text(self):
        self.calls.append("status")
        return f"{self.service_name}.service - SNI Proxy Service\n   Active: {self.status.value}"

    def start(self):
        return self._result("start")

    def stop(self):
        if self.on_stop is not None:
            self.on_stop()
        return self._result("stop")

    def restart(self):
        return self._result("restart")

    def enable(self):
        return self._result("enable")

    def reload_units(self):
        return self._result("reload")

    def tail_logs(self):
        self.calls.append("tail")
        if self.tail_error is not None:
            raise self.tail_error
        return self.follower


class ScriptedInput:
    """Feeds prepared lines to a prompt, then raises EOFError."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)
