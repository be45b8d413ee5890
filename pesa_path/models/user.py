"""
User and Account Models for Pesa Path

A user document lives at `users/{uid}` and carries both the profile
(name, photo) and the running savings balance that every transaction
adjusts.

Firestore field names are camelCase (they are shared with the web
client); the Python side is snake_case and maps through aliases.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)


class SavingPlan(str, Enum):
    """How often the user plans to make deposits."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


_HTTP_URL = TypeAdapter(HttpUrl)


class UserProfile(BaseModel):
    """
    The `users/{uid}` document.

    New accounts start with zeroed finance fields and an empty saving
    plan; onboarding fills them in.
    """
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    email: str = ""
    photo_url: str = Field(default="", alias="photoURL")
    age: int = Field(default=0, ge=0)
    income: float = Field(default=0, ge=0)
    saving_plan: Optional[SavingPlan] = Field(default=None, alias="savingPlan")
    total_savings: float = Field(default=0, alias="totalSavings")
    is_frozen: bool = Field(default=False, alias="isFrozen")
    terms_accepted: bool = Field(default=False, alias="termsAccepted")

    # Only set for email/password accounts
    password_hash: Optional[str] = Field(default=None, alias="passwordHash", repr=False)

    @field_validator("name", "email", "photo_url", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        # External identity providers send null for unknown names/photos
        return "" if v is None else v

    @field_validator("saving_plan", mode="before")
    @classmethod
    def empty_plan_is_unset(cls, v: Any) -> Any:
        return None if v == "" else v

    @property
    def needs_onboarding(self) -> bool:
        """Onboarding is complete once age, income and plan are all set."""
        return not (self.age and self.income and self.saving_plan)

    @property
    def display_name(self) -> str:
        return self.name or "friend"

    def to_document(self) -> dict:
        """Serialize to the Firestore document shape."""
        doc = self.model_dump(mode="json", by_alias=True, exclude={"password_hash"})
        doc["savingPlan"] = self.saving_plan.value if self.saving_plan else ""
        if self.password_hash:
            doc["passwordHash"] = self.password_hash
        return doc


class SignupRequest(BaseModel):
    """Email/password sign-up form."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2)
    email: EmailStr
    password: str = Field(..., min_length=6)
    confirm_password: str = Field(..., min_length=6)
    terms: bool = Field(default=False, validate_default=True)

    @field_validator("terms")
    @classmethod
    def terms_must_be_accepted(cls, v: bool) -> bool:
        if v is not True:
            raise ValueError("You must accept the terms and conditions to continue.")
        return v

    @model_validator(mode="after")
    def passwords_match(self) -> "SignupRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    """Email/password login form."""
    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    password: str = Field(..., min_length=1)


class ExternalIdentity(BaseModel):
    """An identity asserted by an external provider (e.g. Google sign-in)."""

    uid: str = Field(..., min_length=1)
    name: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = None


class OnboardingRequest(BaseModel):
    """First-run questionnaire that tailors advice to the user."""

    saving_plan: SavingPlan = SavingPlan.MONTHLY
    age: int = Field(..., ge=18, le=100)
    income: float = Field(..., gt=0, description="Monthly income")


class ProfileUpdate(BaseModel):
    """Settings page profile form."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2)
    photo_url: str = ""

    @field_validator("photo_url", mode="before")
    @classmethod
    def valid_url_or_empty(cls, v: Any) -> str:
        if v is None or v == "":
            return ""
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError:
            raise ValueError("Please enter a valid URL.")
        return v


class PasswordChange(BaseModel):
    """Settings page password form."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class Streak(BaseModel):
    """A `users/{uid}/streaks/{id}` document (read only)."""
    model_config = ConfigDict(populate_by_name=True)

    xp: int = 0
    streak_length: int = Field(default=0, alias="streakLength")
