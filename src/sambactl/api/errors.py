import logging
import traceback

from fastapi import HTTPException

from sambactl.errors import (
    ConflictError,
    ExternalCommandError,
    MutationInProgressError,
    NotFoundError,
    NotInstalledError,
    SambaCtlError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_CODES = [
    (ValidationError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
    (MutationInProgressError, 409),
    (ExternalCommandError, 502),
    (NotInstalledError, 503),
]


def to_http_exception(e: SambaCtlError) -> HTTPException:
    for error_type, status_code in _STATUS_CODES:
        if isinstance(e, error_type):
            return HTTPException(status_code=status_code, detail=str(e))
    logger.error(f"{type(e).__name__}: {e}\n{traceback.format_exc()}")
    return HTTPException(status_code=500, detail=str(e))
