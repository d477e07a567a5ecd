"""Error taxonomy shared by the share store, service and user modules."""

from typing import List, Optional, Sequence


class SambaCtlError(Exception):
    """Base class for every failure reported to the management surface."""


class ValidationError(SambaCtlError):
    """Bad share name, path or user list. Raised before any external call."""


class InvalidPrincipalError(ValidationError):
    def __init__(self, users: List[str], groups: List[str]):
        self.users = users
        self.groups = groups
        message = "Invalid entries found:"
        if users:
            message += f"\n  Users not found: {', '.join(users)}"
        if groups:
            message += f"\n  Groups not found: {', '.join(groups)}"
        super().__init__(message)


class ConflictError(SambaCtlError):
    """The target share name is already present."""


class NotFoundError(SambaCtlError):
    """The share is absent from the configuration."""


class ExternalCommandError(SambaCtlError):
    """A command failed. The collaborator's message is passed through verbatim."""

    def __init__(self, message: str, argv: Optional[Sequence[str]] = None):
        self.argv = list(argv) if argv else []
        super().__init__(message)


class IntegrityError(SambaCtlError):
    """Post-mutation verification failed. A backup of the previous file exists."""

    def __init__(self, message: str, backup_path: Optional[str] = None):
        self.backup_path = backup_path
        if backup_path:
            message = f"{message} (backup: {backup_path})"
        super().__init__(message)


class PartialWriteError(IntegrityError):
    """
    The old section was removed but the replacement could not be appended.

    The configuration no longer contains the share at all. Restore it from
    ``backup_path`` or re-run the update.
    """


class MutationInProgressError(SambaCtlError):
    """Another create/update/delete is still running in this session."""


class NotInstalledError(SambaCtlError):
    """Samba could not be detected on the target system."""
