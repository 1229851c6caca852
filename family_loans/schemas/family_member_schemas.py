from datetime import datetime
from typing import Annotated, Optional
from pydantic import BaseModel, Field

MemberName = Annotated[str, Field(max_length=255)]


class FamilyMemberCreate(BaseModel):
    """Schema for adding one family member"""

    name: MemberName


class FamilyMemberBulkCreate(BaseModel):
    """Schema for adding several family members at once (blank names are skipped)"""

    members: list[Optional[MemberName]] = Field(..., min_length=1)


class FamilyMemberUpdate(BaseModel):
    """Schema for renaming a family member"""

    name: MemberName


class FamilyMemberResponse(BaseModel):
    """Schema for family member response"""

    model_config = {"from_attributes": True}

    id: int
    name: str
    created_at: datetime
