"""
Transaction Models for Pesa Path

A transaction is a deposit or withdrawal recorded under
`users/{uid}/transactions/{id}`. Recording one always moves the
user's `totalSavings` by the same amount, in the same batch.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionType(str, Enum):
    """Direction of a transaction."""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class PaymentMethod(str, Enum):
    """
    How the money moved.

    SACCO_DEPOSIT is written by the SACCO deposit flow only;
    users cannot pick it on the transaction form.
    """
    MTN_MOMO = "MTN MoMo"
    AIRTEL_MONEY = "Airtel Money"
    BANK_TRANSFER = "Bank Transfer"
    OTHER = "Other"
    SACCO_DEPOSIT = "SACCO Deposit"


USER_PAYMENT_METHODS = (
    PaymentMethod.MTN_MOMO,
    PaymentMethod.AIRTEL_MONEY,
    PaymentMethod.BANK_TRANSFER,
    PaymentMethod.OTHER,
)


class TransactionCreate(BaseModel):
    """The "New Transaction" form."""
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    amount: float = Field(..., gt=0)
    type: TransactionType = TransactionType.DEPOSIT
    method: PaymentMethod = PaymentMethod.MTN_MOMO
    phone_number: str = Field(..., min_length=10, alias="phoneNumber")
    reason: Optional[str] = None

    @field_validator("method")
    @classmethod
    def user_selectable_method(cls, v: PaymentMethod) -> PaymentMethod:
        if v not in USER_PAYMENT_METHODS:
            raise ValueError(f"{v.value} cannot be chosen as a payment method")
        return v

    @field_validator("reason")
    @classmethod
    def blank_reason_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class Transaction(BaseModel):
    """A stored transaction document."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(..., alias="userId")
    amount: float = Field(..., gt=0)
    type: TransactionType
    method: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    reason: Optional[str] = None
    category_id: Optional[str] = Field(default=None, alias="categoryId")

    # None while a server timestamp is still pending
    timestamp: Optional[datetime] = None

    @classmethod
    def from_form(cls, transaction_id: str, user_id: str, form: TransactionCreate) -> "Transaction":
        return cls(
            id=transaction_id,
            user_id=user_id,
            amount=form.amount,
            type=form.type,
            method=form.method.value,
            phone_number=form.phone_number,
            reason=form.reason,
        )

    @classmethod
    def sacco_deposit(
        cls,
        transaction_id: str,
        user_id: str,
        sacco_name: str,
        amount: float,
        phone_number: Optional[str] = None,
    ) -> "Transaction":
        """
        The withdrawal that mirrors a SACCO deposit on the user's history.

        Money leaves the user's own savings, so it is recorded as a
        withdrawal.
        """
        return cls(
            id=transaction_id,
            user_id=user_id,
            amount=amount,
            type=TransactionType.WITHDRAWAL,
            method=PaymentMethod.SACCO_DEPOSIT.value,
            phone_number=phone_number or "N/A",
            reason=f"Deposit to {sacco_name}",
        )

    @property
    def is_deposit(self) -> bool:
        return self.type == TransactionType.DEPOSIT

    @property
    def signed_amount(self) -> float:
        """Effect of this transaction on the savings balance."""
        return self.amount if self.is_deposit else -self.amount

    def to_document(self) -> dict:
        """Serialize to the Firestore document shape (timestamp excluded)."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude={"timestamp"},
            exclude_none=True,
        )
