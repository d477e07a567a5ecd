import logging
import re

from sambactl.errors import ExternalCommandError, ValidationError
from sambactl.executor import Executor

logger = logging.getLogger(__name__)

# Plain account names only; a leading "-" would reach smbpasswd as an option.
USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.-]*\$?")


def validate_username(username: str):
    if not username:
        raise ValidationError("Username is required")
    if not USERNAME_PATTERN.fullmatch(username):
        raise ValidationError(f"Invalid username: {username!r}")


class EnrollmentManager:
    """Adds and removes accounts from Samba's own password database."""

    def __init__(self, executor: Executor):
        self.executor = executor

    async def enable(self, username: str, password: str):
        validate_username(username)
        if not password:
            raise ValidationError("Password is required")

        argv = ["smbpasswd", "-a", "-s", username]
        result = await self.executor.execute(argv, elevate=True, input=f"{password}\n{password}\n")
        if not result.ok:
            raise ExternalCommandError(f"Failed to set Samba password: {result.error}", argv)
        logger.info(f"Samba access enabled for {username}")

    async def disable(self, username: str):
        validate_username(username)

        argv = ["smbpasswd", "-x", username]
        result = await self.executor.execute(argv, elevate=True)
        if not result.ok:
            raise ExternalCommandError(f"Failed to disable Samba user: {result.error}", argv)
        logger.info(f"Samba access disabled for {username}")
