import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from family_loans.config import settings
from family_loans.core.sessions import SessionAuthority
from family_loans.database import get_db
from family_loans.dependencies import (
    get_optional_tenant_context,
    get_session_authority,
    get_session_token,
    get_tenant_context,
)
from family_loans.models.tenant_context import TenantContext
from family_loans.schemas.auth_schemas import AuthResponse, CheckAuthResponse, CredentialsRequest
from family_loans.schemas.base import MessageResponse
from family_loans.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


def _start_session(response: Response, authority: SessionAuthority, context: TenantContext) -> None:
    token = authority.create(context)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(authority.ttl.total_seconds()),
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


@router.post("/register", response_model=AuthResponse)
def register(
    credentials: CredentialsRequest,
    response: Response,
    db: Session = Depends(get_db),
    authority: SessionAuthority = Depends(get_session_authority),
):
    """
    Create a family account and log it in.

    - Family name must be unique (case-sensitive)
    - Returns 400 if the name is taken or a field is missing
    """
    service = AuthService(db)
    context = service.register(credentials.family_name, credentials.password)
    _start_session(response, authority, context)
    return AuthResponse(message="Account created successfully", family_name=context.family_name)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: CredentialsRequest,
    response: Response,
    db: Session = Depends(get_db),
    authority: SessionAuthority = Depends(get_session_authority),
):
    """
    Log in with family name and password.

    - Returns 401 with the same message for unknown names and wrong passwords
    """
    service = AuthService(db)
    context = service.verify(credentials.family_name, credentials.password)
    _start_session(response, authority, context)
    return AuthResponse(message="Login successful", family_name=context.family_name)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    context: TenantContext = Depends(get_tenant_context),
    token: Optional[str] = Depends(get_session_token),
    authority: SessionAuthority = Depends(get_session_authority),
):
    """End the current session and clear the cookie"""
    authority.destroy(token)
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    logger.info("Tenant %s logged out", context.tenant_id)
    return MessageResponse(message="Logged out successfully")


@router.get("/check-auth", response_model=CheckAuthResponse, response_model_exclude_none=True)
def check_auth(context: Optional[TenantContext] = Depends(get_optional_tenant_context)):
    """Report whether the request carries a live session. Never fails."""
    if context is None:
        return CheckAuthResponse(authenticated=False)
    return CheckAuthResponse(authenticated=True, family_name=context.family_name)
