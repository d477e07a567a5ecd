import logging
from typing import List, Optional, Set

from sambactl.executor import Executor
from sambactl.users.models import SystemUser

logger = logging.getLogger(__name__)

MIN_UID = 1000
MAX_UID = 65534

SERVICE_ACCOUNT_PREFIXES = ("cockpit", "systemd", "ssh")
NOLOGIN_SHELLS = ("/sbin/nologin", "/usr/sbin/nologin", "/bin/false")

SMBPASSWD_PATHS = [
    "/var/lib/samba/private/smbpasswd",
    "/etc/samba/smbpasswd",
    "/usr/local/samba/private/smbpasswd",
]


def is_human_account(username: str, uid: int, shell: str) -> bool:
    if not MIN_UID <= uid < MAX_UID:
        return False
    if "-" in username or "_" in username or username == "nobody":
        return False
    if username.startswith(SERVICE_ACCOUNT_PREFIXES):
        return False
    return shell not in NOLOGIN_SHELLS


def parse_passwd(output: str) -> List[SystemUser]:
    """Parse ``getent passwd`` output, keeping regular login accounts only."""
    users = []
    for line in output.splitlines():
        parts = line.split(":")
        if len(parts) < 5:
            continue
        username = parts[0]
        try:
            uid = int(parts[2])
        except ValueError:
            continue
        full_name = parts[4].split(",")[0]
        shell = parts[6] if len(parts) > 6 else ""

        if is_human_account(username, uid, shell):
            users.append(SystemUser(
                username=username,
                uid=uid,
                full_name=full_name or username,
                shell=shell,
            ))
    return users


def parse_usernames(output: str) -> Set[str]:
    """First colon-delimited field of each non-blank, non-comment line."""
    return {
        line.split(":")[0].strip()
        for line in output.splitlines()
        if line.strip() and not line.startswith("#")
    }


class UserReconciler:
    """Lists system accounts and marks which ones are enrolled with Samba."""

    def __init__(self, executor: Executor, smbpasswd_paths: Optional[List[str]] = None):
        self.executor = executor
        self.smbpasswd_paths = smbpasswd_paths or SMBPASSWD_PATHS

    async def list_users(self) -> List[SystemUser]:
        result = await self.executor.execute(["getent", "passwd"])
        if not result.ok:
            logger.warning(f"Could not enumerate system accounts: {result.error}")
            return []

        users = parse_passwd(result.output)
        enrolled = await self.enrolled_usernames()
        for user in users:
            user.samba_enabled = user.username in enrolled
        return users

    async def enrolled_usernames(self) -> Set[str]:
        result = await self.executor.execute(["pdbedit", "-L"])
        if result.ok:
            return parse_usernames(result.output)
        logger.info(f"pdbedit unavailable ({result.error}), reading smbpasswd files")

        for path in self.smbpasswd_paths:
            file_result = await self.executor.execute(["cat", path])
            if file_result.ok:
                logger.debug(f"Samba enrollment read from {path}")
                return parse_usernames(file_result.output)

        logger.warning("No Samba enrollment source readable, assuming no enrolled users")
        return set()
