from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional

from family_loans.models.loan import LoanSource
from family_loans.schemas.base import CamelModel


class LoanCreate(CamelModel):
    """
    Schema for creating or fully replacing a loan.

    Accepts borrowedBy/lenderName/loanSource/interestRate as sent by the
    dashboard, or their snake_case names.
    """

    borrowed_by: str = Field(..., max_length=255)
    lender_name: str = Field(..., max_length=255)
    loan_source: LoanSource
    # Bounds match the NUMERIC columns so values are never rounded or overflow on insert
    amount: Decimal = Field(
        ..., max_digits=15, decimal_places=2, allow_inf_nan=False,
        description="Principal, must be greater than 0",
    )
    date: date
    interest_rate: Optional[Decimal] = Field(
        None, max_digits=7, decimal_places=3, allow_inf_nan=False,
        description="Annual simple interest in percent",
    )
    notes: Optional[str] = Field(None, max_length=5000)


class LoanProjection(BaseModel):
    """Current value of an interest-bearing loan"""

    current_amount: float
    interest_accrued: float
    as_of: datetime


class LoanResponse(BaseModel):
    """Schema for loan response"""

    model_config = {"from_attributes": True}

    id: int
    borrowed_by: str
    lender_name: str
    loan_source: LoanSource
    amount: float
    date: date
    interest_rate: Optional[float]
    notes: str
    created_at: datetime
    updated_at: datetime
    projection: Optional[LoanProjection] = None


class LoanSummaryResponse(BaseModel):
    """Dashboard totals for all of a tenant's loans"""

    total_loans: int
    total_borrowed: float
    from_banks: float
    from_shg: float
    total_current_amount: float
    as_of: datetime
