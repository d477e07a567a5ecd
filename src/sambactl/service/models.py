from enum import Enum
from typing import Optional
from pydantic import BaseModel


class ServiceState(str, Enum):
    UNKNOWN = "unknown"
    ACTIVE = "active"
    INACTIVE = "inactive"


class ServiceStatus(BaseModel):
    state: ServiceState
    service_name: Optional[str] = None


class Detection(BaseModel):
    installed: bool
    service_name: Optional[str] = None
    method: Optional[str] = None


class ServiceAction(str, Enum):
    START = "start"
    STOP = "stop"
    RESTART = "restart"
    RELOAD = "reload"
