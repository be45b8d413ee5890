"""
Data Models Package

This package contains all Pydantic models used in Pesa Path.
All data flowing through the system must conform to these schemas.
"""

from pesa_path.models.user import (
    ExternalIdentity,
    LoginRequest,
    OnboardingRequest,
    PasswordChange,
    ProfileUpdate,
    SavingPlan,
    SignupRequest,
    Streak,
    UserProfile,
)
from pesa_path.models.transaction import (
    USER_PAYMENT_METHODS,
    PaymentMethod,
    Transaction,
    TransactionCreate,
    TransactionType,
)
from pesa_path.models.budget import (
    BudgetCategory,
    BudgetCategoryCreate,
    BudgetPeriod,
    BudgetSummary,
    CategorySpend,
    TransactionAssignment,
)
from pesa_path.models.sacco import (
    Sacco,
    SaccoCreate,
    SaccoDeposit,
    SaccoMember,
)
from pesa_path.models.validation import (
    FormResult,
    ValidationIssue,
)
from pesa_path.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # User models
    "ExternalIdentity",
    "LoginRequest",
    "OnboardingRequest",
    "PasswordChange",
    "ProfileUpdate",
    "SavingPlan",
    "SignupRequest",
    "Streak",
    "UserProfile",
    # Transaction models
    "USER_PAYMENT_METHODS",
    "PaymentMethod",
    "Transaction",
    "TransactionCreate",
    "TransactionType",
    # Budget models
    "BudgetCategory",
    "BudgetCategoryCreate",
    "BudgetPeriod",
    "BudgetSummary",
    "CategorySpend",
    "TransactionAssignment",
    # SACCO models
    "Sacco",
    "SaccoCreate",
    "SaccoDeposit",
    "SaccoMember",
    # Validation models
    "FormResult",
    "ValidationIssue",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
