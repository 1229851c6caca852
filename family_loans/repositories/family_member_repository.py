from sqlalchemy.orm import Session
from family_loans.models.family_member import FamilyMember


class FamilyMemberRepository:
    """Repository for FamilyMember model operations with multi-tenant support"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_tenant(self, tenant_id: int) -> list[FamilyMember]:
        """Get all family members for a tenant, sorted by name"""
        return (
            self.db.query(FamilyMember)
            .filter(FamilyMember.tenant_id == tenant_id)
            .order_by(FamilyMember.name.asc(), FamilyMember.id.asc())
            .all()
        )

    def get_by_id_and_tenant(self, member_id: int, tenant_id: int) -> FamilyMember | None:
        """
        Get family member ensuring it belongs to tenant (multi-tenant safety).

        Returns None if member doesn't exist or belongs to another tenant.
        """
        return (
            self.db.query(FamilyMember)
            .filter(FamilyMember.id == member_id, FamilyMember.tenant_id == tenant_id)
            .first()
        )

    def create(self, member: FamilyMember) -> FamilyMember:
        """Create new family member"""
        self.db.add(member)
        self.db.commit()
        self.db.refresh(member)
        return member

    def create_bulk(self, members: list[FamilyMember]) -> list[FamilyMember]:
        """
        Create multiple family members without committing.
        Caller responsible for commit. Enables atomic batch operations.
        """
        self.db.add_all(members)
        self.db.flush()  # Assign IDs without committing
        return members

    def update(self, member: FamilyMember) -> FamilyMember:
        """Update existing family member"""
        self.db.commit()
        self.db.refresh(member)
        return member

    def delete(self, member: FamilyMember) -> None:
        """Delete family member (loans are not affected)"""
        self.db.delete(member)
        self.db.commit()
