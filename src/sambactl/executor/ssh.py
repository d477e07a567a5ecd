import asyncio
import logging
import shlex
import threading
from typing import Optional, Sequence

import paramiko

from sambactl.executor.base import Executor
from sambactl.executor.models import CommandResult

logger = logging.getLogger(__name__)


class SSHExecutor(Executor):
    """Runs commands on a remote host over a single reused SSH connection."""

    def __init__(
        self,
        hostname: str,
        port: int = 22,
        username: str = "root",
        key_path: Optional[str] = None,
        elevate_command: str = "sudo -n",
    ):
        super().__init__(elevate_command)
        self.hostname = hostname
        self.port = port
        self.username = username
        self.key_path = key_path
        self._client: Optional[paramiko.SSHClient] = None
        self._lock = threading.Lock()

    def is_privileged(self) -> bool:
        return self.username == "root"

    def _connect(self) -> paramiko.SSHClient:
        with self._lock:
            if self._client is None:
                ssh = paramiko.SSHClient()
                ssh.set_missing_host_key_policy(paramiko.AutoAddPolicy())
                ssh.connect(
                    self.hostname,
                    port=self.port,
                    username=self.username,
                    key_filename=self.key_path,
                    timeout=10,
                )
                self._client = ssh
            return self._client

    def _run(self, command: str, input: Optional[str]) -> CommandResult:
        ssh = self._connect()
        stdin, stdout, stderr = ssh.exec_command(command)
        if input is not None:
            stdin.write(input)
            stdin.flush()
        stdin.channel.shutdown_write()
        output = stdout.read().decode("utf-8", errors="replace")
        error = stderr.read().decode("utf-8", errors="replace").strip()
        exit_code = stdout.channel.recv_exit_status()
        if exit_code != 0:
            return CommandResult(
                ok=False,
                output=output,
                error=error or f"command exited with status {exit_code}",
                exit_code=exit_code,
            )
        return CommandResult(ok=True, output=output, exit_code=0)

    async def execute(
        self,
        argv: Sequence[str],
        elevate: bool = False,
        input: Optional[str] = None,
    ) -> CommandResult:
        command = shlex.join(self.build_argv(argv, elevate))
        logger.debug(f"Executing on {self.hostname}: {command}")
        try:
            return await asyncio.to_thread(self._run, command, input)
        except (paramiko.SSHException, OSError) as e:
            logger.warning(f"SSH error on {self.hostname}: {e}")
            return CommandResult(ok=False, error=f"SSH error: {e}")
