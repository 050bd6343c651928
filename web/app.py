from __future__ import annotations

import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from dormkeep.db import initialize_db
from dormkeep.errors import (
    DormkeepError,
    DuplicateBillingError,
    InvalidTransitionError,
    MeterReadingError,
    NotFoundError,
    RoomFullError,
)
from dormkeep.logging import configure_logging, reconfigure
from dormkeep.settings import settings
from web.auth import router as auth_router
from web.deps import AuthMiddleware, DBConnectionMiddleware
from web.routes.announcements import router as announcements_router
from web.routes.billing import router as billing_router
from web.routes.rooms import router as rooms_router
from web.routes.settings import router as settings_router
from web.routes.staff import router as staff_router
from web.routes.tenants import router as tenants_router
from web.routes.users import router as users_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    initialize_db()
    # Alembic's fileConfig replaces the root handlers
    reconfigure()
    logger.info("Application started")
    yield


app = FastAPI(title="dormkeep", lifespan=lifespan)

app.add_middleware(DBConnectionMiddleware)
app.add_middleware(AuthMiddleware)
app.add_middleware(SessionMiddleware, secret_key=settings.get_secret_key())

app.include_router(auth_router)
app.include_router(rooms_router)
app.include_router(tenants_router)
app.include_router(staff_router)
app.include_router(announcements_router)
app.include_router(settings_router)
app.include_router(billing_router)
app.include_router(users_router)

_ERROR_STATUS: list[tuple[type[DormkeepError], int]] = [
    (NotFoundError, 404),
    (DuplicateBillingError, 409),
    (RoomFullError, 409),
    (InvalidTransitionError, 409),
]


@app.exception_handler(MeterReadingError)
async def meter_reading_error_handler(request: Request, exc: MeterReadingError):
    logger.warning("Meter readings rejected on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        {"detail": str(exc), "problems": {str(k): v for k, v in exc.problems.items()}},
        status_code=422,
    )


@app.exception_handler(DormkeepError)
async def domain_error_handler(request: Request, exc: DormkeepError):
    status_code = next((code for cls, code in _ERROR_STATUS if isinstance(exc, cls)), 400)
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return JSONResponse({"detail": str(exc)}, status_code=status_code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        traceback.format_exc(),
    )
    return JSONResponse({"detail": "Internal Server Error"}, status_code=500)


@app.get("/")
async def home(request: Request):
    return {"app": "dormkeep", "user": request.session.get("username")}


@app.get("/health")
async def health():
    return {"status": "ok"}
