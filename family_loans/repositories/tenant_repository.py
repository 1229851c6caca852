"""Repository for Tenant model operations."""

from sqlalchemy.orm import Session
from family_loans.models.tenant import Tenant


class TenantRepository:
    """Repository for Tenant model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_family_name(self, family_name: str) -> Tenant | None:
        """
        Get tenant by exact (case-sensitive) family name.

        Args:
            family_name: Login handle

        Returns:
            Tenant object or None if not found
        """
        return self.db.query(Tenant).filter(Tenant.family_name == family_name).first()

    def create(self, tenant: Tenant) -> Tenant:
        """
        Create a new tenant.

        Args:
            tenant: Tenant object to create

        Returns:
            Created Tenant object with ID populated

        Raises:
            IntegrityError: If family_name already exists
        """
        self.db.add(tenant)
        self.db.commit()
        self.db.refresh(tenant)
        return tenant
