from fastapi import APIRouter, Depends

from sambactl.api.dtos import DataResponse
from sambactl.api.errors import to_http_exception
from sambactl.errors import SambaCtlError
from sambactl.session import ManagementSession, get_session

router = APIRouter(prefix="/status", tags=["Status"])


@router.get("", response_model=DataResponse)
async def get_overview(session: ManagementSession = Depends(get_session)):
    """Installation, service state, shares and users in one response."""
    try:
        return DataResponse(data=await session.load())
    except SambaCtlError as e:
        raise to_http_exception(e)
