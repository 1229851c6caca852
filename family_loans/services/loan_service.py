import logging
from datetime import date, datetime, UTC
from typing import Optional
from sqlalchemy.orm import Session

from family_loans.core.exceptions import NotFoundException, ValidationException
from family_loans.core.interest import as_utc_datetime, project_current_amount
from family_loans.models.base import utc_now
from family_loans.models.loan import Loan, LoanSource
from family_loans.models.tenant_context import TenantContext
from family_loans.repositories.loan_repository import LoanRepository
from family_loans.schemas.loan_schemas import (
    LoanCreate,
    LoanProjection,
    LoanResponse,
    LoanSummaryResponse,
)

logger = logging.getLogger(__name__)


def _resolve_as_of(as_of: Optional[date | datetime]) -> datetime:
    return datetime.now(UTC) if as_of is None else as_utc_datetime(as_of)


def build_projection(loan: Loan, as_of: Optional[date | datetime] = None) -> Optional[LoanProjection]:
    """Projection for an interest-bearing loan, None for interest-free loans"""
    if not loan.has_interest:
        return None

    as_of = _resolve_as_of(as_of)
    principal = float(loan.amount)
    current = project_current_amount(principal, float(loan.interest_rate), loan.date, as_of)
    return LoanProjection(
        current_amount=round(current, 2),
        interest_accrued=round(current - principal, 2),
        as_of=as_of,
    )


def to_response(loan: Loan, as_of: Optional[date | datetime] = None) -> LoanResponse:
    """Serialize a loan with its projection attached"""
    response = LoanResponse.model_validate(loan)
    response.projection = build_projection(loan, as_of)
    return response


class LoanService:
    """Service layer for loan business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.loan_repo = LoanRepository(db)

    @staticmethod
    def _validated_fields(data: LoanCreate) -> dict:
        """
        Check a create/replace payload and return normalized column values.

        Raises:
            ValidationException: On empty required text, non-positive amount
                or negative interest rate
        """
        borrowed_by = (data.borrowed_by or "").strip()
        lender_name = (data.lender_name or "").strip()
        if not borrowed_by or not lender_name or data.loan_source is None or data.date is None:
            raise ValidationException("Missing required fields")

        if data.amount is None or data.amount <= 0:
            raise ValidationException("Amount must be greater than 0")

        if data.interest_rate is not None and data.interest_rate < 0:
            raise ValidationException("Interest rate cannot be negative")

        return {
            "borrowed_by": borrowed_by,
            "lender_name": lender_name,
            "loan_source": LoanSource(data.loan_source),
            "amount": data.amount,
            "date": data.date,
            "interest_rate": data.interest_rate,
            "notes": data.notes or "",
        }

    def create_loan(self, loan_data: LoanCreate, context: TenantContext) -> Loan:
        """
        Create a new loan for the tenant.

        Args:
            loan_data: Loan fields
            context: Authenticated tenant

        Returns:
            Created loan
        """
        loan = Loan(tenant_id=context.tenant_id, **self._validated_fields(loan_data))
        loan = self.loan_repo.create(loan)
        logger.info("Created loan %s for tenant %s", loan.id, context.tenant_id)
        return loan

    def get_loan(self, loan_id: int, context: TenantContext) -> Loan:
        """
        Get loan by ID with ownership verification.

        Raises:
            NotFoundException: If loan doesn't exist or doesn't belong to tenant
        """
        loan = self.loan_repo.get_by_id_and_tenant(loan_id, context.tenant_id)
        if not loan:
            raise NotFoundException("Loan not found")
        return loan

    def get_loans(
        self,
        context: TenantContext,
        loan_source: Optional[LoanSource] = None,
        borrowed_by: Optional[str] = None,
    ) -> list[Loan]:
        """Get the tenant's loans, newest first, optionally filtered"""
        return self.loan_repo.get_with_filters(
            tenant_id=context.tenant_id,
            loan_source=loan_source,
            borrowed_by=borrowed_by,
        )

    def update_loan(self, loan_id: int, loan_data: LoanCreate, context: TenantContext) -> Loan:
        """
        Replace every editable field of a loan.

        Raises:
            ValidationException: If the new fields are invalid
            NotFoundException: If loan doesn't exist or doesn't belong to tenant
        """
        fields = self._validated_fields(loan_data)
        loan = self.get_loan(loan_id, context)

        for column, value in fields.items():
            setattr(loan, column, value)
        # Refresh even when no column value changed
        loan.updated_at = utc_now()

        return self.loan_repo.update(loan)

    def delete_loan(self, loan_id: int, context: TenantContext) -> None:
        """
        Delete a loan.

        Raises:
            NotFoundException: If loan doesn't exist or doesn't belong to tenant
        """
        loan = self.get_loan(loan_id, context)
        self.loan_repo.delete(loan)
        logger.info("Deleted loan %s for tenant %s", loan_id, context.tenant_id)

    def summarize(
        self, context: TenantContext, as_of: Optional[date | datetime] = None
    ) -> LoanSummaryResponse:
        """Totals across all of the tenant's loans, by source and projected to as_of"""
        as_of = _resolve_as_of(as_of)
        loans = self.loan_repo.get_with_filters(tenant_id=context.tenant_id)

        total_borrowed = 0.0
        from_banks = 0.0
        from_shg = 0.0
        total_current = 0.0
        for loan in loans:
            principal = float(loan.amount)
            total_borrowed += principal
            if loan.loan_source == LoanSource.BANK:
                from_banks += principal
            else:
                from_shg += principal
            total_current += project_current_amount(
                principal,
                float(loan.interest_rate) if loan.interest_rate is not None else None,
                loan.date,
                as_of,
            )

        return LoanSummaryResponse(
            total_loans=len(loans),
            total_borrowed=round(total_borrowed, 2),
            from_banks=round(from_banks, 2),
            from_shg=round(from_shg, 2),
            total_current_amount=round(total_current, 2),
            as_of=as_of,
        )
