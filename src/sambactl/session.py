"""
One management session against a Samba host.

The session owns the collaborators (store, detector, reconcilers) over a
single executor, keeps the pinned service name between calls, and makes sure
only one configuration mutation runs at a time.
"""

import asyncio
import logging
import threading
from contextlib import asynccontextmanager
from typing import Any, List, Optional

from pydantic import BaseModel, Field
from pydantic import ValidationError as ModelValidationError

from sambactl.errors import MutationInProgressError, NotInstalledError, SambaCtlError, ValidationError
from sambactl.executor import Executor, get_executor
from sambactl.service.detector import ServiceDetector
from sambactl.service.manager import ServiceController
from sambactl.service.models import Detection, ServiceAction, ServiceState, ServiceStatus
from sambactl.service.status import ServiceStatusReconciler
from sambactl.shares.models import MutationResult, Share
from sambactl.shares.parser import filter_shares
from sambactl.shares.store import ShareStore
from sambactl.users.enrollment import EnrollmentManager
from sambactl.users.models import SystemUser
from sambactl.users.reconciler import UserReconciler

logger = logging.getLogger(__name__)


class SessionSnapshot(BaseModel):
    detection: Detection
    status: Optional[ServiceStatus] = None
    shares: List[Share] = Field(default_factory=list)
    users: List[SystemUser] = Field(default_factory=list)


class ManagementSession:
    def __init__(self, executor: Executor, conf_path: Optional[str] = None):
        self.executor = executor
        self.detector = ServiceDetector(executor)
        self.reconciler = ServiceStatusReconciler(executor)
        self.store = ShareStore(
            executor,
            conf_path=conf_path,
            service_name=lambda: self.reconciler.service_name,
        )
        self.controller = ServiceController(executor, self.reconciler)
        self.user_reconciler = UserReconciler(executor)
        self.enrollment = EnrollmentManager(executor)

        self.detection: Optional[Detection] = None
        self.status = ServiceStatus(state=ServiceState.UNKNOWN)
        self.shares: List[Share] = []
        self._mutation_lock = asyncio.Lock()

    async def detect(self, force: bool = False, require: bool = False) -> Detection:
        """
        Run the installation probes once per session unless forced.

        With ``require`` a missing installation raises NotInstalledError.
        """
        if self.detection is None or force:
            self.detection = await self.detector.detect()
            if self.detection.installed and self.reconciler.service_name is None:
                self.reconciler.service_name = self.detection.service_name
        if require and not self.detection.installed:
            raise NotInstalledError("Samba is not installed. Install the samba package to manage shares.")
        return self.detection

    async def load(self) -> SessionSnapshot:
        detection = await self.detect()
        if not detection.installed:
            return SessionSnapshot(detection=detection)

        self.status, self.shares, users = await asyncio.gather(
            self.reconciler.refresh(),
            self.store.list_shares(),
            self.user_reconciler.list_users(),
        )
        return SessionSnapshot(detection=detection, status=self.status, shares=self.shares, users=users)

    async def refresh_status(self) -> ServiceStatus:
        self.status = await self.reconciler.refresh()
        return self.status

    # Shares

    @asynccontextmanager
    async def _mutation(self):
        if self._mutation_lock.locked():
            raise MutationInProgressError("Another share change is still in progress")
        async with self._mutation_lock:
            yield

    async def _after_mutation(self):
        self.shares = await self.store.list_shares()
        await self.refresh_status()

    async def list_shares(self, query: Optional[str] = None) -> List[Share]:
        await self.detect(require=True)
        shares = await self.store.list_shares()
        return filter_shares(shares, query) if query else shares

    async def get_share(self, name: str) -> Share:
        await self.detect(require=True)
        return await self.store.get_share(name)

    async def create_share(self, share: Share) -> MutationResult:
        async with self._mutation():
            await self.detect(require=True)
            result = await self.store.create(share)
            await self._after_mutation()
        return result

    async def update_share(self, original_name: str, share: Share) -> MutationResult:
        async with self._mutation():
            await self.detect(require=True)
            result = await self.store.update(original_name, share)
            await self._after_mutation()
        return result

    async def delete_share(self, name: str) -> MutationResult:
        async with self._mutation():
            await self.detect(require=True)
            result = await self.store.delete(name)
            await self._after_mutation()
        return result

    async def apply(self, definitions: Any) -> List[str]:
        """
        Bring the configuration in line with a declarative ``shares:`` list.

        Existing shares that already match are left alone. A failure on one
        share is reported and does not stop the others.
        """
        if not isinstance(definitions, dict):
            raise ValidationError("Configuration must be a mapping with a 'shares' list")
        share_configs = definitions.get("shares") or []
        if not isinstance(share_configs, list):
            raise ValidationError("'shares' must be a list of share definitions")
        await self.detect(require=True)

        messages = []
        for share_config in share_configs:
            if not isinstance(share_config, dict):
                messages.append(f"Invalid share definition {share_config!r}: expected a mapping")
                continue
            try:
                share = Share(**share_config)
            except ModelValidationError as e:
                messages.append(f"Invalid share definition {share_config!r}: {e}")
                continue
            try:
                current = await self.store.list_shares()
                existing = next((s for s in current if s.name == share.name), None)
                if existing is None:
                    result = await self.create_share(share)
                    messages.append(f"Share '{share.name}' created.")
                elif existing == share:
                    messages.append(f"Share '{share.name}' already up to date.")
                    continue
                else:
                    result = await self.update_share(share.name, share)
                    messages.append(f"Share '{share.name}' updated.")
                messages.extend(f"Warning: {w}" for w in result.warnings)
            except SambaCtlError as e:
                messages.append(f"Error applying share '{share.name}': {e}")
        return messages

    # Service

    async def service_action(self, action: ServiceAction) -> ServiceStatus:
        if action == ServiceAction.START:
            self.status = await self.controller.start()
        elif action == ServiceAction.STOP:
            self.status = await self.controller.stop()
        elif action == ServiceAction.RESTART:
            self.status = await self.controller.restart()
        elif action == ServiceAction.RELOAD:
            for warning in await self.store.reload_daemon():
                logger.warning(warning)
            await self.refresh_status()
        else:
            raise ValidationError(f"Invalid action: {action}")
        return self.status

    # Users

    async def list_users(self) -> List[SystemUser]:
        await self.detect(require=True)
        return await self.user_reconciler.list_users()

    async def enable_user(self, username: str, password: str):
        await self.detect(require=True)
        await self.enrollment.enable(username, password)

    async def disable_user(self, username: str):
        await self.detect(require=True)
        await self.enrollment.disable(username)


_session: Optional[ManagementSession] = None
_session_lock = threading.Lock()


def get_session() -> ManagementSession:
    """Process-wide session over the configured executor."""
    global _session
    # FastAPI resolves sync dependencies on worker threads.
    with _session_lock:
        if _session is None:
            _session = ManagementSession(get_executor())
        return _session
