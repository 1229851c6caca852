"""Tenant model for multi-tenant isolation."""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from family_loans.models.base import Base, CreatedAtMixin

if TYPE_CHECKING:
    from family_loans.models.family_member import FamilyMember
    from family_loans.models.loan import Loan


class Tenant(Base, CreatedAtMixin):
    """
    Family account and multi-tenant isolation boundary.

    A tenant is one household sharing a single login (family name +
    password). All family members and loans belong to a tenant and are
    never visible to any other tenant.

    The family name is the login handle: unique and case-sensitive.
    Only the bcrypt hash of the password is stored.
    """

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    family_name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    family_members: Mapped[list["FamilyMember"]] = relationship(
        "FamilyMember",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )
    loans: Mapped[list["Loan"]] = relationship(
        "Loan",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, family_name='{self.family_name}')>"
