from typing import Optional
from sqlalchemy.orm import Session

from family_loans.models.loan import Loan, LoanSource


class LoanRepository:
    """Repository for Loan data access"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, loan: Loan) -> Loan:
        """Create a new loan"""
        self.db.add(loan)
        self.db.commit()
        self.db.refresh(loan)
        return loan

    def get_by_id_and_tenant(self, loan_id: int, tenant_id: int) -> Optional[Loan]:
        """
        Get loan by ID, ensuring it belongs to the tenant.

        Args:
            loan_id: Loan ID
            tenant_id: Tenant ID

        Returns:
            Loan object or None if not found or belongs to different tenant
        """
        return (
            self.db.query(Loan)
            .filter(Loan.id == loan_id, Loan.tenant_id == tenant_id)
            .first()
        )

    def get_with_filters(
        self,
        tenant_id: int,
        loan_source: Optional[LoanSource] = None,
        borrowed_by: Optional[str] = None,
    ) -> list[Loan]:
        """
        Get loans with filters, ensuring multi-tenant isolation.

        Args:
            tenant_id: Tenant ID for isolation
            loan_source: Optional source filter (bank or shg)
            borrowed_by: Optional exact borrower name filter

        Returns:
            Loans, most recently created first
        """
        query = self.db.query(Loan).filter(Loan.tenant_id == tenant_id)

        if loan_source is not None:
            query = query.filter(Loan.loan_source == loan_source)

        if borrowed_by is not None:
            query = query.filter(Loan.borrowed_by == borrowed_by)

        return query.order_by(Loan.created_at.desc(), Loan.id.desc()).all()

    def update(self, loan: Loan) -> Loan:
        """Update a loan"""
        self.db.commit()
        self.db.refresh(loan)
        return loan

    def delete(self, loan: Loan) -> None:
        """Delete a loan"""
        self.db.delete(loan)
        self.db.commit()
