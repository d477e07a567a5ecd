import asyncio
import logging
import os
from typing import Optional, Sequence

from sambactl.executor.base import Executor
from sambactl.executor.models import CommandResult

logger = logging.getLogger(__name__)


class LocalExecutor(Executor):
    """Runs commands as local subprocesses."""

    def is_privileged(self) -> bool:
        return os.geteuid() == 0

    async def execute(
        self,
        argv: Sequence[str],
        elevate: bool = False,
        input: Optional[str] = None,
    ) -> CommandResult:
        cmd = self.build_argv(argv, elevate)
        logger.debug(f"Executing locally: {cmd}")
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE if input is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await process.communicate(
                input.encode("utf-8") if input is not None else None
            )
        except OSError as e:
            logger.warning(f"Command failed: {cmd}: {e}")
            return CommandResult(ok=False, error=str(e))

        output = stdout.decode("utf-8", errors="replace")
        if process.returncode != 0:
            error = stderr.decode("utf-8", errors="replace").strip()
            if not error:
                error = f"{cmd[0]} exited with status {process.returncode}"
            logger.debug(f"Command failed: {cmd}: {error}")
            return CommandResult(ok=False, output=output, error=error, exit_code=process.returncode)
        return CommandResult(ok=True, output=output, exit_code=0)
