from fastapi import FastAPI

from sambactl import __version__
from sambactl.api.routers import service, shares, status, users

app = FastAPI(
    title="sambactl API",
    description="Manage Samba shares, the Samba service and Samba user enrollment.",
    version=__version__,
)

app.include_router(status.router)
app.include_router(shares.router)
app.include_router(service.router)
app.include_router(users.router)
