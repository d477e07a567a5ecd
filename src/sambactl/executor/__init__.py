from sambactl.config.settings import config
from sambactl.executor.base import Executor
from sambactl.executor.models import CommandResult


def get_executor() -> Executor:
    """Pick the transport from configuration: SSH when a host is set, otherwise local."""
    if config.ssh_host:
        from sambactl.executor.ssh import SSHExecutor
        return SSHExecutor(
            config.ssh_host,
            port=config.ssh_port,
            username=config.ssh_user,
            key_path=config.ssh_key_path,
            elevate_command=config.elevate_command,
        )
    from sambactl.executor.local import LocalExecutor
    return LocalExecutor(elevate_command=config.elevate_command)


__all__ = ["CommandResult", "Executor", "get_executor"]
