from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request

from family_loans.config import settings
from family_loans.core.exceptions import UnauthorizedException
from family_loans.core.sessions import InMemorySessionStore, SessionAuthority
from family_loans.models.tenant_context import TenantContext


@lru_cache
def get_session_authority() -> SessionAuthority:
    """
    Process-wide session authority.

    Sessions are kept in memory, so they don't survive a restart.
    Tests override this dependency with a fresh authority.
    """
    return SessionAuthority(store=InMemorySessionStore(), ttl=settings.session_ttl)


def get_session_token(request: Request) -> Optional[str]:
    """Raw session token from the session cookie, if any"""
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_optional_tenant_context(
    token: Optional[str] = Depends(get_session_token),
    authority: SessionAuthority = Depends(get_session_authority),
) -> Optional[TenantContext]:
    """Tenant bound to the request's session, or None"""
    return authority.validate(token)


def get_tenant_context(
    context: Optional[TenantContext] = Depends(get_optional_tenant_context),
) -> TenantContext:
    """
    FastAPI dependency for routes that need a logged-in tenant.

    Flow:
    1. Read the session cookie
    2. Verify its signature and look the session up in the store
    3. Return the tenant the session is bound to

    Raises:
        UnauthorizedException: If there is no live session (401)
    """
    if context is None:
        raise UnauthorizedException()
    return context
