from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from family_loans.database import get_db
from family_loans.dependencies import get_tenant_context
from family_loans.models.loan import LoanSource
from family_loans.models.tenant_context import TenantContext
from family_loans.services.loan_service import LoanService, to_response
from family_loans.schemas.base import MessageResponse
from family_loans.schemas.loan_schemas import (
    LoanCreate,
    LoanResponse,
    LoanSummaryResponse,
)

router = APIRouter()

AS_OF_DESCRIPTION = "Project interest to this date instead of now"


@router.get("", response_model=list[LoanResponse])
def list_loans(
    loan_source: Optional[LoanSource] = Query(None, description="Filter by source (bank or shg)"),
    borrowed_by: Optional[str] = Query(None, description="Filter by borrower name"),
    as_of: Optional[date] = Query(None, description=AS_OF_DESCRIPTION),
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    List loans, most recently created first.

    - Interest-bearing loans include a projection of their current amount
    """
    service = LoanService(db)
    loans = service.get_loans(context, loan_source=loan_source, borrowed_by=borrowed_by)
    return [to_response(loan, as_of) for loan in loans]


@router.post("", response_model=LoanResponse)
def create_loan(
    loan_data: LoanCreate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Create a new loan.

    - borrowedBy, lenderName, loanSource, amount and date are required
    - interestRate and notes are optional
    """
    service = LoanService(db)
    return to_response(service.create_loan(loan_data, context))


@router.get("/summary", response_model=LoanSummaryResponse)
def get_loan_summary(
    as_of: Optional[date] = Query(None, description=AS_OF_DESCRIPTION),
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Totals borrowed overall, from banks and from self-help groups"""
    service = LoanService(db)
    return service.summarize(context, as_of)


@router.get("/{loan_id}", response_model=LoanResponse)
def get_loan(
    loan_id: int,
    as_of: Optional[date] = Query(None, description=AS_OF_DESCRIPTION),
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Get a specific loan by ID.

    - Returns 404 if loan doesn't exist or doesn't belong to tenant
    """
    service = LoanService(db)
    return to_response(service.get_loan(loan_id, context), as_of)


@router.put("/{loan_id}", response_model=LoanResponse)
def update_loan(
    loan_id: int,
    loan_data: LoanCreate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Replace a loan's fields.

    - Same required fields as create
    - Returns 404 if loan doesn't exist or doesn't belong to tenant
    """
    service = LoanService(db)
    return to_response(service.update_loan(loan_id, loan_data, context))


@router.delete("/{loan_id}", response_model=MessageResponse)
def delete_loan(
    loan_id: int,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Delete a loan.

    - Returns 404 if loan doesn't exist or doesn't belong to tenant
    """
    service = LoanService(db)
    service.delete_loan(loan_id, context)
    return MessageResponse(message="Loan deleted successfully")
