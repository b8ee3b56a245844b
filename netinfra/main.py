# netinfra/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from . import __version__
from .api.devices import main as devices_main_api
from .api.profiles import main as profiles_main_api
from .api.stats import main as stats_main_api
from .api.users import main as users_main_api
from .api.wan_monitors import main as wan_monitors_main_api
from .core.config import settings
from .core.exceptions import (
    DeviceNotFoundError,
    RouterConnectionError,
    RouterError,
    UnsupportedDeviceError,
)
from .db.init_db import setup_database
from .services.wan_monitor_scheduler import WanMonitorScheduler

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="NetInfra Manager", version=__version__)


# --- Database Initialization & WAN scheduler ---
@app.on_event("startup")
def on_startup():
    setup_database()
    logger.info("Database tables initialized")

    if settings.wan_scheduler_enabled:
        wan_scheduler = WanMonitorScheduler()
        wan_scheduler.start()
        app.state.wan_scheduler = wan_scheduler


@app.on_event("shutdown")
def on_shutdown():
    wan_scheduler = getattr(app.state, "wan_scheduler", None)
    if wan_scheduler is not None:
        wan_scheduler.shutdown()


# --- Error mapping ---
def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(DeviceNotFoundError)
async def device_not_found_handler(request: Request, exc: DeviceNotFoundError):
    return _error(status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(UnsupportedDeviceError)
async def unsupported_device_handler(request: Request, exc: UnsupportedDeviceError):
    return _error(status.HTTP_400_BAD_REQUEST, exc)


@app.exception_handler(RouterConnectionError)
async def router_connection_handler(request: Request, exc: RouterConnectionError):
    logger.warning(f"Device unreachable during {request.method} {request.url.path}: {exc}")
    return _error(status.HTTP_502_BAD_GATEWAY, exc)


@app.exception_handler(RouterError)
async def router_error_handler(request: Request, exc: RouterError):
    logger.error(f"Device error during {request.method} {request.url.path}: {exc}")
    return _error(status.HTTP_502_BAD_GATEWAY, exc)


# --- API Routers ---
app.include_router(devices_main_api.router, prefix="/api", tags=["Devices"])
app.include_router(stats_main_api.router, prefix="/api", tags=["Stats"])
app.include_router(profiles_main_api.router, prefix="/api", tags=["Profiles"])
app.include_router(users_main_api.router, prefix="/api", tags=["Users"])
app.include_router(wan_monitors_main_api.router, prefix="/api", tags=["WAN Monitors"])


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok", "version": __version__}
