from typing import Dict, Optional, Sequence

import pytest

from sambactl.executor.base import Executor
from sambactl.executor.models import CommandResult

CONF_PATH = "/etc/samba/smb.conf"


class FakeExecutor(Executor):
    """
    In-memory stand-in for a host.

    ``cat``, ``test -f``, ``cp`` and ``tee`` operate on ``files``. Any other
    command fails unless a response was registered for its exact argv.
    """

    def __init__(self, files: Optional[Dict[str, str]] = None):
        super().__init__("sudo -n")
        self.files = dict(files or {})
        self.responses = {}
        self.calls = []

    def is_privileged(self) -> bool:
        return False

    def respond(self, argv, ok=True, output="", error=""):
        self.responses[tuple(argv)] = CommandResult(ok=ok, output=output, error=error)

    def handle(self, argv, handler):
        """Register a callable ``handler(argv, input)`` returning a CommandResult."""
        self.responses[tuple(argv)] = handler

    def commands(self):
        return [argv for argv, _, _ in self.calls]

    def elevated(self):
        return [argv for argv, elevate, _ in self.calls if elevate]

    async def execute(self, argv: Sequence[str], elevate: bool = False, input: Optional[str] = None) -> CommandResult:
        argv = list(argv)
        self.calls.append((argv, elevate, input))

        response = self.responses.get(tuple(argv))
        if response is not None:
            return response(argv, input) if callable(response) else response

        name = argv[0]
        if name == "test" and argv[1] == "-f":
            return CommandResult(ok=argv[2] in self.files)
        if name == "cat":
            if argv[1] in self.files:
                return CommandResult(ok=True, output=self.files[argv[1]])
            return CommandResult(ok=False, error=f"cat: {argv[1]}: No such file or directory", exit_code=1)
        if name == "cp":
            src, dst = argv[-2], argv[-1]
            if src not in self.files:
                return CommandResult(ok=False, error=f"cp: cannot stat '{src}'", exit_code=1)
            self.files[dst] = self.files[src]
            return CommandResult(ok=True)
        if name == "tee":
            path = argv[-1]
            if "-a" in argv:
                self.files[path] = self.files.get(path, "") + input
            else:
                self.files[path] = input
            return CommandResult(ok=True, output=input)
        return CommandResult(ok=False, error=f"{name}: command not found", exit_code=127)


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def no_settle(monkeypatch):
    from sambactl.config.settings import config
    monkeypatch.setattr(config, "start_settle_seconds", 0)
    monkeypatch.setattr(config, "stop_settle_seconds", 0)
