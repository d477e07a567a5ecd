import logging
from typing import Optional

from fastapi import APIRouter, Depends

from sambactl.api.dtos import DataResponse, ShareMutationResponse, ShareRequest
from sambactl.api.errors import to_http_exception
from sambactl.errors import SambaCtlError
from sambactl.session import ManagementSession, get_session
from sambactl.shares.models import Share

router = APIRouter(prefix="/shares", tags=["Shares"])
logger = logging.getLogger(__name__)


@router.get("", response_model=DataResponse)
async def list_shares(q: Optional[str] = None, session: ManagementSession = Depends(get_session)):
    """List shares, optionally filtered by name, path or comment."""
    try:
        return DataResponse(data=await session.list_shares(q))
    except SambaCtlError as e:
        raise to_http_exception(e)


@router.get("/{name}", response_model=DataResponse)
async def get_share(name: str, session: ManagementSession = Depends(get_session)):
    try:
        return DataResponse(data=await session.get_share(name))
    except SambaCtlError as e:
        raise to_http_exception(e)


@router.post("", response_model=ShareMutationResponse, status_code=201)
async def create_share(request: ShareRequest, session: ManagementSession = Depends(get_session)):
    logger.info(f"Creating share {request.name}")
    try:
        result = await session.create_share(Share(**request.model_dump()))
        return ShareMutationResponse(message=f"Share {request.name} created.", data=result)
    except SambaCtlError as e:
        raise to_http_exception(e)


@router.put("/{name}", response_model=ShareMutationResponse)
async def update_share(name: str, request: ShareRequest, session: ManagementSession = Depends(get_session)):
    logger.info(f"Updating share {name}")
    try:
        result = await session.update_share(name, Share(**request.model_dump()))
        return ShareMutationResponse(message=f"Share {request.name} updated.", data=result)
    except SambaCtlError as e:
        raise to_http_exception(e)


@router.delete("/{name}", response_model=ShareMutationResponse)
async def delete_share(name: str, session: ManagementSession = Depends(get_session)):
    logger.info(f"Deleting share {name}")
    try:
        result = await session.delete_share(name)
        return ShareMutationResponse(message=f"Share {name} deleted.", data=result)
    except SambaCtlError as e:
        raise to_http_exception(e)
