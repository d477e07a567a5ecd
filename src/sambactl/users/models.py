from pydantic import BaseModel


class SystemUser(BaseModel):
    username: str
    uid: int
    full_name: str
    shell: str = ""
    samba_enabled: bool = False
