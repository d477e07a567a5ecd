from typing import Any, List, Optional

from pydantic import BaseModel

from sambactl.service.models import ServiceStatus
from sambactl.shares.models import MutationResult
from sambactl.users.models import SystemUser


class BaseResponse(BaseModel):
    status: str = "success"
    message: Optional[str] = None


class SuccessResponse(BaseResponse):
    pass


class DataResponse(BaseResponse):
    data: Optional[Any] = None


class ShareMutationResponse(BaseResponse):
    data: MutationResult


class ServiceStatusResponse(BaseResponse):
    data: ServiceStatus


class UserListResponse(BaseResponse):
    data: List[SystemUser]


class ShareRequest(BaseModel):
    name: str
    path: str
    comment: Optional[str] = None
    readonly: bool = False
    guest: bool = False
    browseable: bool = True
    valid_users: Optional[str] = None


class EnableUserRequest(BaseModel):
    password: str
