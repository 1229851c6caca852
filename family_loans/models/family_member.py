from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from family_loans.models.base import Base, CreatedAtMixin

if TYPE_CHECKING:
    from family_loans.models.tenant import Tenant


class FamilyMember(Base, CreatedAtMixin):
    """
    A person in the household who can borrow.

    Loans reference members by name only (Loan.borrowed_by), so deleting
    a member never touches any loan.
    """

    __tablename__ = "family_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,  # Critical for multi-tenant queries
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="family_members")

    def __repr__(self) -> str:
        return f"<FamilyMember(id={self.id}, tenant_id={self.tenant_id}, name='{self.name}')>"
