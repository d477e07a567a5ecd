import logging
import re
import time
from typing import Callable, List, Optional

from sambactl.config.settings import config
from sambactl.errors import (
    ConflictError,
    ExternalCommandError,
    IntegrityError,
    InvalidPrincipalError,
    NotFoundError,
    PartialWriteError,
    ValidationError,
)
from sambactl.executor import Executor
from sambactl.service.registry import PROCESS_MARKER
from sambactl.shares import parser
from sambactl.shares.models import MutationAction, MutationResult, Share

logger = logging.getLogger(__name__)

SHARE_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
LINE_BREAKS = ("\n", "\r")


class ShareStore:
    """
    Reads and edits share sections of smb.conf through an executor.

    Edits are minimal-diff: a section is removed by slicing its lines out of
    the raw text and a new section is appended at the end of the file, so
    comments and directives in other sections are preserved byte-for-byte.
    """

    def __init__(
        self,
        executor: Executor,
        conf_path: Optional[str] = None,
        service_name: Optional[Callable[[], Optional[str]]] = None,
    ):
        self.executor = executor
        self.conf_path = conf_path or config.smb_conf_path
        self._service_name = service_name or (lambda: None)

    # Reads

    async def read_config(self) -> str:
        """Raw configuration text, or "" when the file is missing or unreadable."""
        found = await self.executor.execute(["test", "-f", self.conf_path])
        if not found.ok:
            logger.info(f"{self.conf_path} not found, treating as empty")
            return ""
        result = await self.executor.execute(["cat", self.conf_path])
        if not result.ok:
            logger.warning(f"Could not read {self.conf_path}: {result.error}")
            return ""
        return result.output

    async def list_shares(self) -> List[Share]:
        return parser.parse(await self.read_config())

    async def get_share(self, name: str) -> Share:
        share = parser.parse_one(await self.read_config(), name)
        if share is None:
            raise NotFoundError(f'Share "{name}" not found in configuration')
        return share

    async def exists(self, name: str) -> bool:
        return parser.section_exists(await self.read_config(), name)

    # Validation

    def validate(self, share: Share):
        if not share.name:
            raise ValidationError("Share name is required")
        if not SHARE_NAME_PATTERN.fullmatch(share.name):
            raise ValidationError(
                "Share name can only contain letters, numbers, hyphens, and underscores"
            )
        if not share.path or not share.path.strip():
            raise ValidationError("Path is required")
        # Every value is written as a single "key = value" line.
        for label, value in (("Path", share.path), ("Comment", share.comment), ("Valid users", share.valid_users)):
            if value and any(c in value for c in LINE_BREAKS):
                raise ValidationError(f"{label} must not contain line breaks")

    async def validate_principals(self, valid_users: Optional[str]):
        """Check every user and @group in a valid-users list exists on the system."""
        if not valid_users or not valid_users.strip():
            return

        tokens = [token.strip() for token in valid_users.split(",") if token.strip()]
        invalid_users = []
        invalid_groups = []
        for token in tokens:
            if token.startswith("@"):
                group = token[1:]
                result = await self.executor.execute(["getent", "group", group])
                if not result.ok or not result.output.strip():
                    invalid_groups.append(group)
            else:
                result = await self.executor.execute(["getent", "passwd", token])
                if not result.ok or not result.output.strip():
                    invalid_users.append(token)

        if invalid_users or invalid_groups:
            raise InvalidPrincipalError(invalid_users, invalid_groups)

    # Mutations

    async def create(self, share: Share) -> MutationResult:
        self.validate(share)
        if await self.exists(share.name):
            raise ConflictError(f'Share "{share.name}" already exists')
        await self.validate_principals(share.valid_users)

        await self._append(share)
        logger.info(f"Share {share.name} appended to {self.conf_path}")
        warnings = await self.reload_daemon()
        return MutationResult(action=MutationAction.CREATED, name=share.name, warnings=warnings)

    async def update(self, original_name: str, share: Share) -> MutationResult:
        self.validate(share)
        text = await self.read_config()
        if not parser.section_exists(text, original_name):
            raise NotFoundError(f'Share "{original_name}" not found in configuration')
        if share.name != original_name and parser.section_exists(text, share.name):
            raise ConflictError(f'Share "{share.name}" already exists')
        await self.validate_principals(share.valid_users)

        backup_path = await self.backup()
        await self._write(parser.range_delete(text, original_name))
        try:
            await self._append(share)
        except ExternalCommandError as e:
            logger.error(f"Section {original_name} removed but {share.name} could not be appended: {e}")
            raise PartialWriteError(
                f'Share "{original_name}" was removed but the updated section could not be written: {e}',
                backup_path=backup_path,
            ) from e

        logger.info(f"Share {original_name} replaced by {share.name}")
        warnings = await self.reload_daemon()
        return MutationResult(
            action=MutationAction.UPDATED,
            name=share.name,
            backup_path=backup_path,
            warnings=warnings,
        )

    async def delete(self, name: str) -> MutationResult:
        text = await self.read_config()
        if not parser.section_exists(text, name):
            raise NotFoundError(f'Share "{name}" not found in configuration')

        backup_path = await self.backup()
        await self._write(parser.range_delete(text, name))

        if await self.exists(name):
            raise IntegrityError(
                f"Share [{name}] still exists after deletion attempt",
                backup_path=backup_path,
            )

        logger.info(f"Share {name} removed from {self.conf_path}")
        warnings = await self.reload_daemon()
        return MutationResult(
            action=MutationAction.DELETED,
            name=name,
            backup_path=backup_path,
            warnings=warnings,
        )

    async def backup(self) -> str:
        backup_path = f"{self.conf_path}.backup.{int(time.time() * 1000)}"
        await self._run(["cp", "-p", self.conf_path, backup_path])
        logger.info(f"Backed up {self.conf_path} to {backup_path}")
        return backup_path

    async def reload_daemon(self) -> List[str]:
        """
        Ask the daemon to re-read its configuration.

        Returns warnings instead of raising: the new configuration is already
        on disk and is never rolled back.
        """
        warnings = []
        check = await self.executor.execute(["testparm", "-s"])
        if not check.ok:
            logger.warning(f"testparm reported problems: {check.error}")
            warnings.append(f"Configuration check failed: {check.error}")

        primary, secondary = self._reload_units()
        result = await self.executor.execute(["systemctl", "reload", primary], elevate=True)
        if result.ok:
            return warnings

        logger.warning(f"Reload of {primary} failed: {result.error}, retrying with {secondary}")
        retry = await self.executor.execute(["systemctl", "reload", secondary], elevate=True)
        if not retry.ok:
            logger.warning(f"Reload of {secondary} failed: {retry.error}")
            warnings.append(f"Failed to reload Samba service: {retry.error}")
        return warnings

    def _reload_units(self):
        pinned = self._service_name()
        defaults = [config.primary_service, config.secondary_service]
        if pinned and pinned != PROCESS_MARKER and pinned not in defaults:
            return pinned, config.primary_service
        if pinned == config.secondary_service:
            return config.secondary_service, config.primary_service
        return config.primary_service, config.secondary_service

    async def _append(self, share: Share):
        await self._run(["tee", "-a", self.conf_path], input=parser.serialize(share))

    async def _write(self, text: str):
        await self._run(["tee", self.conf_path], input=text)

    async def _run(self, argv: List[str], input: Optional[str] = None):
        result = await self.executor.execute(argv, elevate=True, input=input)
        if not result.ok:
            raise ExternalCommandError(result.error, argv)
        return result
