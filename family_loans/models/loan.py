from datetime import date
from enum import Enum as PyEnum
from sqlalchemy import String, Integer, Numeric, ForeignKey, Date, Text, Enum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from family_loans.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from family_loans.models.tenant import Tenant


class LoanSource(str, PyEnum):
    """Where the money came from"""

    BANK = "bank"
    SHG = "shg"  # Self-help group


class Loan(Base, TimestampMixin):
    """
    A loan taken by someone in the household.

    borrowed_by is a plain name, not a foreign key to FamilyMember.
    interest_rate is an annual percentage; NULL or 0 means interest-free.
    """

    __tablename__ = "loans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,  # Critical for multi-tenant queries
    )
    borrowed_by: Mapped[str] = mapped_column(String(255), nullable=False)
    lender_name: Mapped[str] = mapped_column(String(255), nullable=False)
    loan_source: Mapped[LoanSource] = mapped_column(
        Enum(LoanSource, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    amount: Mapped[float] = mapped_column(Numeric(precision=15, scale=2), nullable=False)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    interest_rate: Mapped[float | None] = mapped_column(
        Numeric(precision=7, scale=3), nullable=True
    )
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="loans")

    __table_args__ = (
        Index("ix_loans_tenant_created", "tenant_id", "created_at"),
    )

    @property
    def has_interest(self) -> bool:
        return bool(self.interest_rate) and float(self.interest_rate) > 0
