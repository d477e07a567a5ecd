import shlex
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from sambactl.executor.models import CommandResult


class Executor(ABC):
    """
    Runs commands on the machine that hosts the Samba daemon.

    Implementations never raise for a failed command; they report it through
    ``CommandResult.ok`` and ``CommandResult.error``.
    """

    def __init__(self, elevate_command: str = "sudo -n"):
        self.elevate_command = shlex.split(elevate_command) if elevate_command else []

    @abstractmethod
    async def execute(
        self,
        argv: Sequence[str],
        elevate: bool = False,
        input: Optional[str] = None,
    ) -> CommandResult:
        pass

    @abstractmethod
    def is_privileged(self) -> bool:
        """Whether commands already run as root."""
        pass

    def build_argv(self, argv: Sequence[str], elevate: bool) -> List[str]:
        if elevate and not self.is_privileged():
            return self.elevate_command + list(argv)
        return list(argv)
