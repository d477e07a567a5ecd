from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class Share(BaseModel):
    name: str
    path: str = ""
    comment: Optional[str] = None
    readonly: bool = False
    guest: bool = False
    browseable: bool = True
    valid_users: Optional[str] = None

    @field_validator("comment", "valid_users", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        # An empty comment or user list is never written, so it reads back as None.
        if isinstance(value, str) and not value.strip():
            return None
        return value


class MutationAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class MutationResult(BaseModel):
    """What a create/update/delete did, plus any non-fatal reload problems."""
    action: MutationAction
    name: str
    backup_path: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)
