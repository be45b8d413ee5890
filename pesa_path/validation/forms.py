"""
Form Validation

DESIGN DECISION: Every form is validated in two stages before anything
is written:

STAGE 1 - SCHEMA VALIDATION:
- Types, required fields, ranges (the pydantic models)
- Errors are mapped to the messages users see next to each field

STAGE 2 - SEMANTIC CHECKS:
- Business checks that need context (e.g. the current balance)
- These produce warnings only and never block a submission

IMPORTANT: Validation NEVER silently fixes input.
It reports issues for the user to correct.
"""

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from pesa_path.config import get_settings
from pesa_path.insights.dashboard import format_money
from pesa_path.models.budget import BudgetCategoryCreate
from pesa_path.models.sacco import SaccoCreate, SaccoDeposit
from pesa_path.models.transaction import TransactionCreate, TransactionType
from pesa_path.models.user import (
    LoginRequest,
    OnboardingRequest,
    PasswordChange,
    ProfileUpdate,
    SignupRequest,
)
from pesa_path.models.validation import FormResult, ValidationIssue


M = TypeVar("M", bound=BaseModel)


class FormValidationError(Exception):
    """A form submission had error-level issues."""

    def __init__(self, result: FormResult):
        self.result = result
        messages = "; ".join(issue.message for issue in result.errors)
        super().__init__(f"{result.form}: {messages}")


# (form, field) -> message, or (form, field, pydantic error type) -> message
# when one field needs different messages per failure.
FIELD_MESSAGES: dict[tuple, str] = {
    ("signup", "name"): "Name is too short",
    ("signup", "email", "value_error"): "Invalid email",
    ("signup", "email"): "Invalid email",
    ("signup", "password"): "Password must be at least 6 characters",
    ("signup", "confirm_password"): "Password must be at least 6 characters",
    ("login", "email", "value_error"): "Invalid email",
    ("login", "email"): "Invalid email",
    ("login", "password"): "Please enter your password.",
    ("onboarding", "saving_plan"): "Please select a saving plan.",
    ("onboarding", "age", "greater_than_equal"): "You must be at least 18 years old.",
    ("onboarding", "age", "less_than_equal"): "Age must be 100 or less.",
    ("onboarding", "age"): "Please enter your age.",
    ("onboarding", "income"): "Please enter a valid monthly income.",
    ("profile", "name"): "Name must be at least 2 characters.",
    ("password_change", "current_password"): "Please enter your current password.",
    ("password_change", "new_password"): "New password must be at least 6 characters.",
    ("transaction", "amount"): "Amount must be positive",
    ("transaction", "type"): "Please select a transaction type.",
    ("transaction", "method"): "Please select a payment method.",
    ("transaction", "phone_number"): "Please enter a valid phone number.",
    ("category", "name"): "Category name is too short",
    ("category", "budgeted"): "Budget must be a positive number",
    ("sacco", "name"): "SACCO name must be at least 3 characters",
    ("sacco", "goal"): "Goal must be a positive number",
    ("sacco_deposit", "amount"): "Deposit amount must be positive.",
}

# Where errors raised by whole-model validators are shown
MODEL_ERROR_FIELDS = {
    "signup": "confirm_password",
}


def _field_name(model: type[BaseModel], loc: tuple) -> str:
    if not loc:
        return "form"
    head = str(loc[0])
    for name, info in model.model_fields.items():
        if head == name or head == info.alias:
            return name
    return head


def _strip_prefix(message: str) -> str:
    # pydantic prefixes messages raised from validators
    prefix = "Value error, "
    return message[len(prefix):] if message.startswith(prefix) else message


class FormValidator:
    """
    Validates raw form data into models.

    Stage 1 runs the pydantic model; stage 2 adds warnings that need the
    user's current balance.
    """

    def __init__(self):
        self._settings = get_settings().app

    def _message(self, form: str, field: str, error: dict) -> str:
        error_type = error.get("type", "")
        specific = FIELD_MESSAGES.get((form, field, error_type))
        if specific:
            return specific
        if error_type == "value_error":
            # Validators raise the exact message users should see
            return _strip_prefix(error.get("msg", ""))
        return FIELD_MESSAGES.get((form, field)) or _strip_prefix(error.get("msg", "Invalid value"))

    def validate(self, form: str, model: type[M], data: dict[str, Any]) -> FormResult:
        """
        Stage 1: schema validation.

        Returns a FormResult holding either the model or the issues.
        """
        try:
            value = model.model_validate(data)
        except ValidationError as e:
            issues = []
            for error in e.errors():
                field = _field_name(model, tuple(error.get("loc", ())))
                if field == "form":
                    field = MODEL_ERROR_FIELDS.get(form, "form")
                issues.append(ValidationIssue(
                    field=field,
                    issue_type=error.get("type", "invalid"),
                    message=self._message(form, field, error),
                    severity="error",
                ))
            return FormResult(form=form, issues=issues)

        return FormResult(form=form, value=value)

    def validate_signup(self, data: dict[str, Any]) -> FormResult:
        return self.validate("signup", SignupRequest, data)

    def validate_login(self, data: dict[str, Any]) -> FormResult:
        return self.validate("login", LoginRequest, data)

    def validate_onboarding(self, data: dict[str, Any]) -> FormResult:
        return self.validate("onboarding", OnboardingRequest, data)

    def validate_profile(self, data: dict[str, Any]) -> FormResult:
        return self.validate("profile", ProfileUpdate, data)

    def validate_password_change(self, data: dict[str, Any]) -> FormResult:
        return self.validate("password_change", PasswordChange, data)

    def validate_category(self, data: dict[str, Any]) -> FormResult:
        return self.validate("category", BudgetCategoryCreate, data)

    def validate_sacco(self, data: dict[str, Any]) -> FormResult:
        return self.validate("sacco", SaccoCreate, data)

    def validate_transaction(
        self,
        data: dict[str, Any],
        balance: Optional[float] = None,
    ) -> FormResult:
        """
        Validate the transaction form.

        Stage 2 warns when a withdrawal is larger than `balance`. The
        balance is allowed to go negative, so this never blocks.
        """
        result = self.validate("transaction", TransactionCreate, data)
        if not result.is_valid or balance is None:
            return result

        form: TransactionCreate = result.value
        if form.type == TransactionType.WITHDRAWAL and form.amount > balance:
            result.issues.append(ValidationIssue(
                field="amount",
                issue_type="exceeds_balance",
                message=(
                    "This withdrawal is larger than your current balance of "
                    f"{format_money(balance, self._settings.currency)}."
                ),
                severity="warning",
            ))
        return result

    def validate_sacco_deposit(
        self,
        data: dict[str, Any],
        balance: Optional[float] = None,
    ) -> FormResult:
        """
        Validate the SACCO deposit form.

        The minimum deposit comes from settings. Depositing more than the
        current balance is a warning, not an error.
        """
        result = self.validate("sacco_deposit", SaccoDeposit, data)
        if not result.is_valid:
            return result

        form: SaccoDeposit = result.value
        minimum = self._settings.min_sacco_deposit
        if form.amount < minimum:
            return FormResult(
                form="sacco_deposit",
                issues=[ValidationIssue(
                    field="amount",
                    issue_type="below_minimum",
                    message=f"Minimum deposit is {format_money(minimum, self._settings.currency)}.",
                    severity="error",
                )],
            )

        if balance is not None and form.amount > balance:
            result.issues.append(ValidationIssue(
                field="amount",
                issue_type="exceeds_balance",
                message=(
                    "This deposit is larger than your current balance of "
                    f"{format_money(balance, self._settings.currency)}."
                ),
                severity="warning",
            ))
        return result

    def get_user_friendly_summary(self, result: FormResult) -> str:
        """
        Generate a user-friendly summary of validation results.

        This is what we show above a form that failed.
        """
        if result.is_valid and not result.warnings:
            return "✅ All good!"

        lines = []
        if result.has_errors:
            lines.append("❌ Please fix the following:")
            for issue in result.errors:
                lines.append(f"  • {issue.message}")

        if result.warnings:
            lines.append("⚠️ Please double-check:")
            for warning in result.warnings:
                lines.append(f"  • {warning}")

        return "\n".join(lines)
