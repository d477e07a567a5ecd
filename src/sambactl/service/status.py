import logging
from typing import Dict, Optional

from sambactl.executor import Executor
from sambactl.service.models import ServiceState, ServiceStatus
from sambactl.service.registry import CANDIDATE_UNITS, DAEMON_BINARY, PORT_TOKEN, PROCESS_MARKER

logger = logging.getLogger(__name__)


class ServiceStatusReconciler:
    """
    Works out whether the Samba daemon is running.

    Signals are tried from most to least precise and the first conclusive one
    wins:

    1. a matching process in the process table means active;
    2. the pinned unit reporting ``active`` means active;
    3. the first candidate unit reporting ``active`` wins and is pinned;
       otherwise the last candidate reporting ``inactive`` is pinned;
    4. the SMB port being bound decides between active and inactive.

    A unit that cannot be queried is never taken to mean inactive.
    """

    def __init__(self, executor: Executor, service_name: Optional[str] = None):
        self.executor = executor
        self.service_name = service_name

    async def _unit_state(self, unit: str) -> Optional[str]:
        """ActiveState of ``unit``, or None when the unit cannot be queried."""
        result = await self.executor.execute(
            ["systemctl", "show", "-p", "LoadState", "-p", "ActiveState", unit]
        )
        if not result.ok:
            return None
        data: Dict[str, str] = {}
        for line in result.output.splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                data[k] = v.strip()
        if data.get("LoadState") == "not-found":
            return None
        return data.get("ActiveState") or None

    async def _process_running(self) -> bool:
        result = await self.executor.execute(["pgrep", "-f", DAEMON_BINARY])
        return result.ok and bool(result.output.strip())

    async def _port_bound(self) -> bool:
        for argv in (["ss", "-tuln"], ["netstat", "-tuln"]):
            result = await self.executor.execute(argv)
            if result.ok:
                return PORT_TOKEN in result.output
        logger.warning("Could not list listening sockets")
        return False

    async def refresh(self) -> ServiceStatus:
        if await self._process_running():
            return ServiceStatus(state=ServiceState.ACTIVE, service_name=self.service_name)

        if self.service_name and self.service_name != PROCESS_MARKER:
            if await self._unit_state(self.service_name) == "active":
                return ServiceStatus(state=ServiceState.ACTIVE, service_name=self.service_name)

        last_inactive = None
        for unit in CANDIDATE_UNITS:
            state = await self._unit_state(unit)
            if state == "active":
                self.service_name = unit
                logger.info(f"Samba service confirmed as {unit}")
                return ServiceStatus(state=ServiceState.ACTIVE, service_name=unit)
            if state == "inactive":
                last_inactive = unit
        if last_inactive:
            self.service_name = last_inactive

        if await self._port_bound():
            logger.info("Samba port is bound, treating service as active")
            return ServiceStatus(state=ServiceState.ACTIVE, service_name=self.service_name)
        return ServiceStatus(state=ServiceState.INACTIVE, service_name=self.service_name)
