"""
Audit Logger

DESIGN DECISION: Every action that moves money or changes an account
is logged. This provides:
1. Traceability of every balance change
2. Debugging capability when a batch or a flow fails
3. Accountability for admin actions

The audit logger:
- Is async to not block main flow
- Gracefully handles failures (doesn't crash the app if logging fails)
- Supports correlation IDs to trace related events
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from pesa_path.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from pesa_path.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The `audit_log` collection (for persistence)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger()

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_signed_up(self, user_id: str, provider: str) -> None:
        await self.log(AuditEventBuilder.user_signed_up(user_id, provider))

    async def log_logged_in(self, user_id: str, provider: str) -> None:
        await self.log(AuditEventBuilder.user_logged_in(user_id, provider))

    async def log_login_failed(self, email: str, reason: str) -> None:
        await self.log(AuditEventBuilder.login_failed(email, reason))

    async def log_onboarding_completed(self, user_id: str, saving_plan: str) -> None:
        await self.log(AuditEventBuilder.onboarding_completed(user_id, saving_plan))

    async def log_profile_updated(self, user_id: str, fields: list[str]) -> None:
        await self.log(AuditEventBuilder.profile_updated(user_id, fields))

    async def log_password_changed(self, user_id: str) -> None:
        await self.log(AuditEventBuilder.password_changed(user_id))

    async def log_admin_granted(self, user_id: str, granted_by: str) -> None:
        await self.log(AuditEventBuilder.admin_granted(user_id, granted_by))

    async def log_freeze_toggled(self, user_id: str, frozen: bool, admin_id: str) -> None:
        await self.log(AuditEventBuilder.user_freeze_toggled(user_id, frozen, admin_id))

    async def log_transaction_recorded(
        self,
        user_id: str,
        transaction_id: str,
        transaction_type: str,
        amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a deposit or withdrawal."""
        event = AuditEventBuilder.transaction_recorded(
            user_id=user_id,
            transaction_id=transaction_id,
            transaction_type=transaction_type,
            amount=amount,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_category_added(
        self,
        user_id: str,
        category_id: str,
        name: str,
        budgeted: float,
        period_key: str,
    ) -> None:
        event = AuditEventBuilder.category_added(
            user_id=user_id,
            category_id=category_id,
            name=name,
            budgeted=budgeted,
            period_key=period_key,
        )
        await self.log(event)

    async def log_category_deleted(self, user_id: str, category_id: str) -> None:
        await self.log(AuditEventBuilder.category_deleted(user_id, category_id))

    async def log_transactions_assigned(self, user_id: str, count: int) -> None:
        await self.log(AuditEventBuilder.transactions_assigned(user_id, count))

    async def log_sacco_created(
        self,
        user_id: str,
        sacco_id: str,
        name: str,
        goal: float,
    ) -> None:
        await self.log(AuditEventBuilder.sacco_created(user_id, sacco_id, name, goal))

    async def log_sacco_joined(self, user_id: str, sacco_id: str) -> None:
        await self.log(AuditEventBuilder.sacco_joined(user_id, sacco_id))

    async def log_sacco_deposit(
        self,
        user_id: str,
        sacco_id: str,
        amount: float,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a deposit from a member's savings into a SACCO."""
        event = AuditEventBuilder.sacco_deposit(
            user_id=user_id,
            sacco_id=sacco_id,
            amount=amount,
            transaction_id=transaction_id,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_flow_failed(
        self,
        flow_name: str,
        error_message: str,
        user_id: Optional[str] = None,
    ) -> None:
        await self.log(AuditEventBuilder.ai_flow_failed(flow_name, error_message, user_id))

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_external_service_error(
        self,
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log external service error."""
        event = AuditEventBuilder.external_service_error(
            service=service,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., a SACCO deposit).
    Pass it through all subsequent operations.
    """
    return uuid4()
