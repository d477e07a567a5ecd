from typing import Optional
from pydantic import BaseModel


class CommandResult(BaseModel):
    """Outcome of a single command run through an executor."""
    ok: bool
    output: str = ""
    error: str = ""
    exit_code: Optional[int] = None
