from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from family_loans.database import get_db
from family_loans.dependencies import get_tenant_context
from family_loans.models.tenant_context import TenantContext
from family_loans.services.family_member_service import FamilyMemberService
from family_loans.schemas.base import MessageResponse
from family_loans.schemas.family_member_schemas import (
    FamilyMemberBulkCreate,
    FamilyMemberCreate,
    FamilyMemberResponse,
    FamilyMemberUpdate,
)

router = APIRouter()


@router.get("", response_model=list[FamilyMemberResponse])
def list_family_members(
    context: TenantContext = Depends(get_tenant_context), db: Session = Depends(get_db)
):
    """Get all family members, sorted by name"""
    service = FamilyMemberService(db)
    return service.list_members(context)


@router.post("", response_model=FamilyMemberResponse)
def create_family_member(
    data: FamilyMemberCreate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Add a family member"""
    service = FamilyMemberService(db)
    return service.create_member(data, context)


@router.post("/bulk", response_model=list[FamilyMemberResponse])
def create_family_members_bulk(
    data: FamilyMemberBulkCreate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Add several family members at once.

    - Blank names are skipped
    - All names are stored or none is
    - Returns the full member list
    """
    service = FamilyMemberService(db)
    return service.create_members_bulk(data, context)


@router.put("/{member_id}", response_model=FamilyMemberResponse)
def rename_family_member(
    member_id: int,
    data: FamilyMemberUpdate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Rename a family member.

    - Returns 404 if member doesn't exist or doesn't belong to tenant
    """
    service = FamilyMemberService(db)
    return service.rename_member(member_id, data, context)


@router.delete("/{member_id}", response_model=MessageResponse)
def delete_family_member(
    member_id: int,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    Delete a family member.

    - Loans borrowed by this member are kept
    - Returns 404 if member doesn't exist or doesn't belong to tenant
    """
    service = FamilyMemberService(db)
    service.delete_member(member_id, context)
    return MessageResponse(message="Family member deleted successfully")
