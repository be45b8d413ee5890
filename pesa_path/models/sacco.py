"""
SACCO Models for Pesa Path

A SACCO (Savings and Credit Cooperative Organization) is a savings pool
created by one user and joined by others. Members deposit from their own
savings balance toward a shared goal.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SaccoCreate(BaseModel):
    """The "Create SACCO" form."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=3)
    goal: float = Field(default=1_000_000, gt=0)


class Sacco(BaseModel):
    """A stored `saccos/{id}` document."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    goal: float = Field(..., ge=0)
    admin_id: str = Field(..., alias="adminId")
    member_ids: list[str] = Field(default_factory=list, alias="memberIds")
    current_total: float = Field(default=0, alias="currentTotal")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    # Payout order; payouts themselves are not implemented yet
    rotation_order: list[str] = Field(default_factory=list, alias="rotationOrder")

    @property
    def progress_percent(self) -> float:
        if self.goal <= 0:
            return 0.0
        return self.current_total / self.goal * 100

    @property
    def member_count(self) -> int:
        return len(self.member_ids)

    def is_member(self, user_id: Optional[str]) -> bool:
        return bool(user_id) and user_id in self.member_ids

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude={"id", "created_at"})


class SaccoDeposit(BaseModel):
    """The "Make a Deposit" form."""

    amount: float = Field(..., gt=0)


class SaccoMember(BaseModel):
    """A member row on the SACCO detail page."""

    id: str
    name: str = ""
    photo_url: str = ""

    @property
    def initial(self) -> str:
        return self.name[:1] or "?"
