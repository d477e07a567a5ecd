import asyncio
import logging

from sambactl.config.settings import config
from sambactl.errors import ExternalCommandError
from sambactl.executor import Executor
from sambactl.service.models import ServiceStatus
from sambactl.service.status import ServiceStatusReconciler

logger = logging.getLogger(__name__)


class ServiceController:
    """Starts, stops and restarts the Samba daemon, then re-reads its status."""

    def __init__(self, executor: Executor, reconciler: ServiceStatusReconciler):
        self.executor = executor
        self.reconciler = reconciler

    def _units(self):
        return [config.primary_service, config.secondary_service]

    async def start(self) -> ServiceStatus:
        return await self._start("start")

    async def restart(self) -> ServiceStatus:
        return await self._start("restart")

    async def _start(self, action: str) -> ServiceStatus:
        errors = []
        for unit in self._units():
            result = await self.executor.execute(["systemctl", action, unit], elevate=True)
            if result.ok:
                logger.info(f"systemctl {action} {unit} succeeded")
                await asyncio.sleep(config.start_settle_seconds)
                return await self.reconciler.refresh()
            errors.append(f"{unit}: {result.error}")
        raise ExternalCommandError(f"Failed to {action} Samba service: {'; '.join(errors)}")

    async def stop(self) -> ServiceStatus:
        # Both units are stopped; either may be the one running.
        stopped = False
        errors = []
        for unit in self._units():
            result = await self.executor.execute(["systemctl", "stop", unit], elevate=True)
            if result.ok:
                logger.info(f"systemctl stop {unit} succeeded")
                stopped = True
            else:
                errors.append(f"{unit}: {result.error}")
        if not stopped:
            raise ExternalCommandError(f"Failed to stop Samba service: {'; '.join(errors)}")
        await asyncio.sleep(config.stop_settle_seconds)
        return await self.reconciler.refresh()
