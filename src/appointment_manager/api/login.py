"""Login router — authenticates a user and audits the attempt."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from appointment_manager.api.schemas import LoginRequest, LoginResponse
from appointment_manager.auth.audit import AuditSink, AuthResult, FileAuditSink
from appointment_manager.auth.authenticator import Authenticator
from appointment_manager.config import settings
from appointment_manager.database.engine import get_session
from appointment_manager.database.repository import Repository

router = APIRouter(tags=["auth"])


def get_audit_sink() -> AuditSink:
    """Audit sink writing to ``settings.audit_log_path``."""
    return FileAuditSink(settings.audit_log_path)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(get_session),
    audit_sink: AuditSink = Depends(get_audit_sink),
):
    """Check the credentials; 401 when they do not match a user."""
    authenticator = Authenticator(Repository(session), audit_sink)
    result = await authenticator.authenticate(body.name, body.password)
    if result is not AuthResult.SUCCESS:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    return LoginResponse(success=True)
