from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from dormkeep.models.audit_log import AuditEventType
from dormkeep.services.audit_service import SOURCE_WEB
from web.deps import current_user, get_audit_service, get_user_service
from web.schemas import LoginRequest, user_out

logger = logging.getLogger(__name__)

router = APIRouter()

# In-memory rate limiter for login attempts, per client IP
_login_attempts: dict[str, list[float]] = {}
_MAX_ATTEMPTS = 5
_LOCKOUT_SECONDS = 60


def _recent_attempts(ip: str) -> list[float]:
    now = time.monotonic()
    attempts = [t for t in _login_attempts.get(ip, []) if now - t < _LOCKOUT_SECONDS]
    _login_attempts[ip] = attempts
    return attempts


def _is_rate_limited(ip: str) -> bool:
    return len(_recent_attempts(ip)) >= _MAX_ATTEMPTS


def _record_failed_attempt(ip: str) -> None:
    _recent_attempts(ip).append(time.monotonic())


def _clear_attempts(ip: str) -> None:
    _login_attempts.pop(ip, None)


@router.post("/login")
async def login(request: Request, body: LoginRequest):
    client_ip = request.client.host if request.client else "unknown"

    if _is_rate_limited(client_ip):
        logger.warning("Rate-limited login attempt from %s", client_ip)
        return JSONResponse({"detail": "Too many attempts, try again shortly"}, status_code=429)

    user = get_user_service(request).authenticate(body.username, body.password)
    audit = get_audit_service(request)

    if user is None:
        _record_failed_attempt(client_ip)
        logger.warning("Failed login attempt for username=%s from %s", body.username, client_ip)
        audit.safe_record(
            AuditEventType.USER_LOGIN_FAILED,
            source=SOURCE_WEB,
            entity_type="user",
            new_state={"username": body.username},
            metadata={"ip": client_ip},
        )
        return JSONResponse({"detail": "Invalid username or password"}, status_code=401)

    _clear_attempts(client_ip)
    request.session.clear()
    request.session["user_id"] = user.id
    request.session["username"] = user.username
    request.session["role"] = user.role.value
    logger.info("User %s logged in", user.username)

    audit.safe_record(
        AuditEventType.USER_LOGIN,
        actor=user,
        source=SOURCE_WEB,
        entity_type="user",
        entity_id=user.id,
        metadata={"ip": client_ip},
    )
    return user_out(user)


@router.post("/logout")
async def logout(request: Request):
    user = current_user(request)
    get_audit_service(request).safe_record(
        AuditEventType.USER_LOGOUT,
        actor=user,
        source=SOURCE_WEB,
        entity_type="user",
        entity_id=user.id,
    )
    request.session.clear()
    logger.info("User %s logged out", user.username)
    return {"detail": "Logged out"}


@router.get("/me")
async def me(request: Request):
    return user_out(current_user(request))
