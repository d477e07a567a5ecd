import logging

from sambactl.executor import Executor
from sambactl.service.models import Detection
from sambactl.service.registry import DAEMON_BINARY, DEFAULT_SERVICE, PACKAGE_NAME, PROCESS_MARKER

logger = logging.getLogger(__name__)


class ServiceDetector:
    """Decides whether Samba is installed by trying probes in order until one succeeds."""

    def __init__(self, executor: Executor):
        self.executor = executor

    def _probes(self):
        # (argv, method, inferred service name)
        return [
            (["which", DAEMON_BINARY], "binary", DEFAULT_SERVICE),
            (["systemctl", "status", "smb"], "service", "smb"),
            (["systemctl", "status", "smbd"], "service", "smbd"),
            (["rpm", "-q", PACKAGE_NAME], "package", DEFAULT_SERVICE),
            (["dpkg", "-l", PACKAGE_NAME], "package", DEFAULT_SERVICE),
        ]

    async def detect(self) -> Detection:
        for argv, method, service_name in self._probes():
            result = await self.executor.execute(argv)
            if result.ok:
                logger.info(f"Samba detected via {method} probe: {' '.join(argv)}")
                return Detection(installed=True, service_name=service_name, method=method)

        process = await self.executor.execute(["pgrep", "-f", DAEMON_BINARY])
        if process.ok and process.output.strip():
            logger.info("Samba detected via running process")
            return Detection(installed=True, service_name=PROCESS_MARKER, method="process")

        logger.warning("Samba not detected by any probe")
        return Detection(installed=False)
