import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from family_loans.core.exceptions import NotFoundException, ValidationException
from family_loans.models.family_member import FamilyMember
from family_loans.models.tenant_context import TenantContext
from family_loans.repositories.family_member_repository import FamilyMemberRepository
from family_loans.schemas.family_member_schemas import (
    FamilyMemberBulkCreate,
    FamilyMemberCreate,
    FamilyMemberUpdate,
)

logger = logging.getLogger(__name__)


def _clean_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationException("Name is required")
    return name


class FamilyMemberService:
    """Service for family member business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = FamilyMemberRepository(db)

    def list_members(self, context: TenantContext) -> list[FamilyMember]:
        """Get all family members for the tenant, sorted by name"""
        return self.repo.get_by_tenant(context.tenant_id)

    def get_member(self, member_id: int, context: TenantContext) -> FamilyMember:
        """
        Get specific family member ensuring tenant ownership.

        Raises:
            NotFoundException: If member not found or belongs to another tenant
        """
        member = self.repo.get_by_id_and_tenant(member_id, context.tenant_id)
        if not member:
            raise NotFoundException("Family member not found")
        return member

    def create_member(self, data: FamilyMemberCreate, context: TenantContext) -> FamilyMember:
        """Add one family member"""
        member = FamilyMember(tenant_id=context.tenant_id, name=_clean_name(data.name))
        return self.repo.create(member)

    def create_members_bulk(
        self, data: FamilyMemberBulkCreate, context: TenantContext
    ) -> list[FamilyMember]:
        """
        Add several family members in one transaction.

        Blank names are skipped. Either every name is stored or none is.

        Returns:
            The tenant's full member list after the insert

        Raises:
            ValidationException: If no non-blank names remain
        """
        names = [name.strip() for name in data.members if name and name.strip()]
        if not names:
            raise ValidationException("Members array is required")

        members = [FamilyMember(tenant_id=context.tenant_id, name=name) for name in names]
        try:
            self.repo.create_bulk(members)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info("Added %d family members for tenant %s", len(members), context.tenant_id)
        return self.list_members(context)

    def rename_member(
        self, member_id: int, data: FamilyMemberUpdate, context: TenantContext
    ) -> FamilyMember:
        """Rename a family member. Loans keep the old borrower name."""
        name = _clean_name(data.name)
        member = self.get_member(member_id, context)
        member.name = name
        return self.repo.update(member)

    def delete_member(self, member_id: int, context: TenantContext) -> None:
        """Delete a family member without touching any loan"""
        member = self.get_member(member_id, context)
        self.repo.delete(member)
