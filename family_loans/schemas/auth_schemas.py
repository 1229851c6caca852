from typing import Optional
from pydantic import Field

from family_loans.schemas.base import CamelModel


class CredentialsRequest(CamelModel):
    """Family name and password, used for both register and login"""

    family_name: str = Field(..., max_length=255)
    password: str


class AuthResponse(CamelModel):
    """Response after register or login (family name sent as familyName)"""

    success: bool = True
    message: str
    family_name: str


class CheckAuthResponse(CamelModel):
    """Session status; familyName only present when authenticated"""

    authenticated: bool
    family_name: Optional[str] = None
