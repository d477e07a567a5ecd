import logging

from fastapi import APIRouter, Depends, HTTPException

from sambactl.api.dtos import DataResponse, ServiceStatusResponse
from sambactl.api.errors import to_http_exception
from sambactl.errors import SambaCtlError
from sambactl.service.models import ServiceAction
from sambactl.session import ManagementSession, get_session

router = APIRouter(prefix="/service", tags=["Service"])
logger = logging.getLogger(__name__)


@router.get("/detect", response_model=DataResponse)
async def detect_service(session: ManagementSession = Depends(get_session)):
    """Report under which service name Samba is installed; 503 when it is not."""
    try:
        return DataResponse(data=await session.detect(force=True, require=True))
    except SambaCtlError as e:
        raise to_http_exception(e)


@router.get("", response_model=ServiceStatusResponse)
async def get_status(session: ManagementSession = Depends(get_session)):
    await session.detect()
    return ServiceStatusResponse(data=await session.refresh_status())


@router.post("/{action}", response_model=ServiceStatusResponse)
async def manage_service(action: str, session: ManagementSession = Depends(get_session)):
    """Start, stop, restart or reload the Samba service."""
    logger.info(f"Managing Samba service: action={action}")
    try:
        service_action = ServiceAction(action)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid action: {action}")
    try:
        await session.detect()
        status = await session.service_action(service_action)
        return ServiceStatusResponse(message=f"Samba service {action} done.", data=status)
    except SambaCtlError as e:
        raise to_http_exception(e)
