"""
Audit Models for Pesa Path

Every action that moves money or changes an account is logged for audit
purposes. This gives:
1. A trail of every balance change next to the batch that caused it
2. Debugging information when a flow or a write fails
3. Accountability for admin actions (granting admin, freezing accounts)

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Each user-facing operation has its own event type.
    """
    # Accounts
    USER_SIGNED_UP = "user_signed_up"
    USER_LOGGED_IN = "user_logged_in"
    LOGIN_FAILED = "login_failed"
    ONBOARDING_COMPLETED = "onboarding_completed"
    PROFILE_UPDATED = "profile_updated"
    PASSWORD_CHANGED = "password_changed"

    # Admin
    ADMIN_GRANTED = "admin_granted"
    USER_FREEZE_TOGGLED = "user_freeze_toggled"

    # Money
    TRANSACTION_RECORDED = "transaction_recorded"

    # Planner
    CATEGORY_ADDED = "category_added"
    CATEGORY_DELETED = "category_deleted"
    TRANSACTIONS_ASSIGNED = "transactions_assigned"

    # SACCOs
    SACCO_CREATED = "sacco_created"
    SACCO_JOINED = "sacco_joined"
    SACCO_DEPOSIT = "sacco_deposit"

    # AI flows
    AI_FLOW_FAILED = "ai_flow_failed"

    # System events
    SYSTEM_ERROR = "system_error"
    EXTERNAL_SERVICE_ERROR = "external_service_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'user', 'transaction', 'sacco')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Firestore document ID of the entity"
    )
    user_id: Optional[str] = Field(
        default=None,
        description="User who triggered the event"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one deposit request)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "user_id": self.user_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_document(self) -> dict:
        """
        Convert to an `audit_log/{event_id}` Firestore document.

        Same keys as the log dict, but the timestamp stays a datetime so
        Firestore stores it as a native timestamp and can order by it.
        """
        doc = self.to_log_dict()
        doc["timestamp"] = self.timestamp
        return doc


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_recorded(uid, txn_id, "deposit", 5000, cid)
        event = AuditEventBuilder.sacco_deposit(uid, sacco_id, 2000, cid)
    """

    @staticmethod
    def user_signed_up(
        user_id: str,
        provider: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_SIGNED_UP,
            entity_type="user",
            entity_id=user_id,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"New account created via {provider}",
            details={"provider": provider},
            is_user_action=True,
        )

    @staticmethod
    def user_logged_in(
        user_id: str,
        provider: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_LOGGED_IN,
            entity_type="user",
            entity_id=user_id,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"User logged in via {provider}",
            details={"provider": provider},
            is_user_action=True,
        )

    @staticmethod
    def login_failed(email: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            description="Login attempt rejected",
            details={"email": email, "reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def onboarding_completed(
        user_id: str,
        saving_plan: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ONBOARDING_COMPLETED,
            entity_type="user",
            entity_id=user_id,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"Onboarding completed with a {saving_plan} saving plan",
            details={"saving_plan": saving_plan},
            is_user_action=True,
        )

    @staticmethod
    def profile_updated(
        user_id: str,
        fields: list[str],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROFILE_UPDATED,
            entity_type="user",
            entity_id=user_id,
            user_id=user_id,
            correlation_id=correlation_id,
            description="Profile updated",
            details={"fields": fields},
            is_user_action=True,
        )

    @staticmethod
    def password_changed(user_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PASSWORD_CHANGED,
            entity_type="user",
            entity_id=user_id,
            user_id=user_id,
            description="Password changed",
            is_user_action=True,
        )

    @staticmethod
    def admin_granted(
        user_id: str,
        granted_by: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ADMIN_GRANTED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            entity_id=user_id,
            user_id=granted_by,
            correlation_id=correlation_id,
            description="Admin role granted",
            is_user_action=True,
        )

    @staticmethod
    def user_freeze_toggled(
        user_id: str,
        frozen: bool,
        admin_id: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_FREEZE_TOGGLED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            entity_id=user_id,
            user_id=admin_id,
            correlation_id=correlation_id,
            description=f"Account {'frozen' if frozen else 'unfrozen'}",
            details={"is_frozen": frozen},
            is_user_action=True,
        )

    @staticmethod
    def transaction_recorded(
        user_id: str,
        transaction_id: str,
        transaction_type: str,
        amount: float,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_RECORDED,
            entity_type="transaction",
            entity_id=transaction_id,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"Recorded {transaction_type} of {amount:,.0f}",
            details={
                "type": transaction_type,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def category_added(
        user_id: str,
        category_id: str,
        name: str,
        budgeted: float,
        period_key: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_ADDED,
            entity_type="budget_category",
            entity_id=category_id,
            user_id=user_id,
            description=f"Budget category added: {name}",
            details={"budgeted": budgeted, "period": period_key},
            is_user_action=True,
        )

    @staticmethod
    def category_deleted(user_id: str, category_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_DELETED,
            entity_type="budget_category",
            entity_id=category_id,
            user_id=user_id,
            description="Budget category deleted",
            is_user_action=True,
        )

    @staticmethod
    def transactions_assigned(
        user_id: str,
        count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_ASSIGNED,
            entity_type="transaction",
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"Assigned {count} withdrawals to budget categories",
            details={"count": count},
            is_user_action=True,
        )

    @staticmethod
    def sacco_created(
        user_id: str,
        sacco_id: str,
        name: str,
        goal: float,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SACCO_CREATED,
            entity_type="sacco",
            entity_id=sacco_id,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"SACCO created: {name}",
            details={"name": name, "goal": goal},
            is_user_action=True,
        )

    @staticmethod
    def sacco_joined(
        user_id: str,
        sacco_id: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SACCO_JOINED,
            entity_type="sacco",
            entity_id=sacco_id,
            user_id=user_id,
            correlation_id=correlation_id,
            description="Joined SACCO",
            is_user_action=True,
        )

    @staticmethod
    def sacco_deposit(
        user_id: str,
        sacco_id: str,
        amount: float,
        transaction_id: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SACCO_DEPOSIT,
            entity_type="sacco",
            entity_id=sacco_id,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"Deposited {amount:,.0f} into SACCO",
            details={
                "amount": amount,
                "transaction_id": transaction_id,
            },
            is_user_action=True,
        )

    @staticmethod
    def ai_flow_failed(
        flow_name: str,
        error_message: str,
        user_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AI_FLOW_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="flow",
            entity_id=flow_name,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"AI flow failed: {flow_name}",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )

    @staticmethod
    def external_service_error(
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXTERNAL_SERVICE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"External service error: {service}",
            error_message=error_message,
            details={
                "service": service,
            },
            correlation_id=correlation_id,
        )
