from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from dormkeep.db import get_engine
from dormkeep.models.user import User
from dormkeep.repositories.sqlalchemy import (
    SQLAlchemyAnnouncementRepository,
    SQLAlchemyAuditLogRepository,
    SQLAlchemyBillingRepository,
    SQLAlchemyOccupancyRepository,
    SQLAlchemyRoomRepository,
    SQLAlchemySettingsRepository,
    SQLAlchemyStaffRepository,
    SQLAlchemyTenantRepository,
    SQLAlchemyUserRepository,
)
from dormkeep.services.announcement_service import AnnouncementService
from dormkeep.services.audit_service import AuditService
from dormkeep.services.authorization_service import AuthorizationService
from dormkeep.services.billing_service import BillingService
from dormkeep.services.room_service import RoomService
from dormkeep.services.settings_service import SettingsService
from dormkeep.services.staff_service import StaffService
from dormkeep.services.tenant_service import TenantService
from dormkeep.services.user_service import UserService

logger = logging.getLogger(__name__)

PUBLIC_PREFIX_PATHS = {"/login"}
PUBLIC_EXACT_PATHS = {"/", "/health"}


class AuthMiddleware:
    """Pure ASGI middleware; rejects requests without a session with 401."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        path = request.url.path
        if path in PUBLIC_EXACT_PATHS or any(path.startswith(p) for p in PUBLIC_PREFIX_PATHS):
            await self.app(scope, receive, send)
            return
        if not request.session.get("user_id"):
            logger.info("Unauthenticated request: %s %s", request.method, path)
            response = JSONResponse({"detail": "Not authenticated"}, status_code=401)
            await response(scope, receive, send)
            return
        await self.app(scope, receive, send)


class DBConnectionMiddleware:
    """Pure ASGI middleware; closes the request's DB connection if one was opened."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        request.state.db_conn = None
        try:
            await self.app(scope, receive, send)
        finally:
            conn = getattr(request.state, "db_conn", None)
            if conn is not None:
                conn.close()
                logger.debug("DB connection closed for %s %s", request.method, request.url.path)


def _get_conn(request: Request):
    """Lazy per-request connection, created on first use and closed by the middleware."""
    if request.state.db_conn is None:
        logger.debug("Creating DB connection for %s %s", request.method, request.url.path)
        request.state.db_conn = get_engine().connect()
    return request.state.db_conn


def get_billing_service(request: Request) -> BillingService:
    conn = _get_conn(request)
    return BillingService(SQLAlchemyBillingRepository(conn), SQLAlchemyRoomRepository(conn))


def get_room_service(request: Request) -> RoomService:
    conn = _get_conn(request)
    return RoomService(SQLAlchemyRoomRepository(conn), SQLAlchemyOccupancyRepository(conn))


def get_tenant_service(request: Request) -> TenantService:
    conn = _get_conn(request)
    return TenantService(
        SQLAlchemyTenantRepository(conn),
        SQLAlchemyOccupancyRepository(conn),
        SQLAlchemyRoomRepository(conn),
        SQLAlchemyUserRepository(conn),
    )


def get_staff_service(request: Request) -> StaffService:
    return StaffService(SQLAlchemyStaffRepository(_get_conn(request)))


def get_announcement_service(request: Request) -> AnnouncementService:
    return AnnouncementService(SQLAlchemyAnnouncementRepository(_get_conn(request)))


def get_settings_service(request: Request) -> SettingsService:
    return SettingsService(SQLAlchemySettingsRepository(_get_conn(request)))


def get_user_service(request: Request) -> UserService:
    return UserService(SQLAlchemyUserRepository(_get_conn(request)))


def get_audit_service(request: Request) -> AuditService:
    return AuditService(SQLAlchemyAuditLogRepository(_get_conn(request)))


def get_authorization_service(request: Request) -> AuthorizationService:
    return AuthorizationService()


def current_user(request: Request) -> User:
    """Load the logged-in user; a session pointing at a deleted user is treated as logged out."""
    user_id = request.session.get("user_id")
    user = get_user_service(request).get_by_id(user_id) if user_id else None
    if user is None:
        request.session.clear()
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require(request: Request, check: Callable[[AuthorizationService, User], bool]) -> User:
    """Return the current user, or raise 403 when ``check`` denies them."""
    user = current_user(request)
    if not check(get_authorization_service(request), user):
        logger.warning("Forbidden: user=%s role=%s %s %s", user.id, user.role.value, request.method, request.url.path)
        raise HTTPException(status_code=403, detail="Not allowed")
    return user
