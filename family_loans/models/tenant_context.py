"""Tenant context for request authorization."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantContext:
    """
    Authenticated tenant binding for a request.

    Built only from a validated session, never from request data, and
    passed to every service call so repositories can scope queries.

    Attributes:
        tenant_id: ID of the authenticated family account
        family_name: Display name of the family account
    """

    tenant_id: int
    family_name: str

    def __repr__(self) -> str:
        return f"<TenantContext(tenant_id={self.tenant_id}, family_name='{self.family_name}')>"
