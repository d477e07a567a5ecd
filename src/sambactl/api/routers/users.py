import logging

from fastapi import APIRouter, Depends

from sambactl.api.dtos import EnableUserRequest, SuccessResponse, UserListResponse
from sambactl.api.errors import to_http_exception
from sambactl.errors import SambaCtlError
from sambactl.session import ManagementSession, get_session

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.get("", response_model=UserListResponse)
async def list_users(session: ManagementSession = Depends(get_session)):
    try:
        return UserListResponse(data=await session.list_users())
    except SambaCtlError as e:
        raise to_http_exception(e)


@router.post("/{username}/enable", response_model=SuccessResponse)
async def enable_user(username: str, request: EnableUserRequest, session: ManagementSession = Depends(get_session)):
    logger.info(f"Enabling Samba access for {username}")
    try:
        await session.enable_user(username, request.password)
        return SuccessResponse(message=f'Samba password set for user "{username}"')
    except SambaCtlError as e:
        raise to_http_exception(e)


@router.post("/{username}/disable", response_model=SuccessResponse)
async def disable_user(username: str, session: ManagementSession = Depends(get_session)):
    logger.info(f"Disabling Samba access for {username}")
    try:
        await session.disable_user(username)
        return SuccessResponse(message=f'Samba access disabled for user "{username}"')
    except SambaCtlError as e:
        raise to_http_exception(e)
