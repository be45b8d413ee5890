"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Run against Firestore in production
2. Use in-memory storage for testing and local demos
3. Keep business logic decoupled from the Firestore SDK

The interface is intentionally simple - we're not building a full ORM.
Just the operations the app needs.

ATOMICITY: Operations documented as atomic must apply all of their writes
or none. Implementations get this from the backend's batch primitive;
they only group the writes.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional
from uuid import UUID

from pesa_path.models.audit import AuditEvent
from pesa_path.models.budget import (
    BudgetCategory,
    BudgetCategoryCreate,
    TransactionAssignment,
)
from pesa_path.models.sacco import Sacco, SaccoCreate
from pesa_path.models.transaction import Transaction, TransactionCreate
from pesa_path.models.user import Streak, UserProfile


class UserStorageInterface(ABC):
    """
    Abstract interface for user profiles and roles.

    Profiles live at `users/{uid}`; admin roles at `roles_admin/{uid}`.
    """

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[UserProfile]:
        """Return the profile, or None if the document doesn't exist."""
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[UserProfile]:
        """Case-insensitive lookup used by email/password login."""
        pass

    @abstractmethod
    async def create_user(self, profile: UserProfile) -> UserProfile:
        """
        Create a profile document.

        Raises:
            DuplicateError: If a profile with this ID or email already exists
        """
        pass

    @abstractmethod
    async def update_user(self, user_id: str, fields: dict[str, Any]) -> None:
        """
        Merge `fields` (Firestore field names) into the profile.

        Raises:
            NotFoundError: If the profile doesn't exist
        """
        pass

    @abstractmethod
    async def list_users(self) -> list[UserProfile]:
        pass

    @abstractmethod
    async def get_users(self, user_ids: list[str]) -> list[UserProfile]:
        """
        Fetch several profiles at once.

        Missing IDs are skipped, so the result may be shorter than the input.
        """
        pass

    @abstractmethod
    async def is_admin(self, user_id: str) -> bool:
        pass

    @abstractmethod
    async def grant_admin(self, user_id: str) -> None:
        """Create the (empty) role document. Granting twice is a no-op."""
        pass

    @abstractmethod
    async def set_frozen(self, user_id: str, frozen: bool) -> None:
        """
        Raises:
            NotFoundError: If the profile doesn't exist
        """
        pass

    @abstractmethod
    async def get_streak(self, user_id: str) -> Optional[Streak]:
        """First document of `users/{uid}/streaks`, if any."""
        pass


class TransactionStorageInterface(ABC):
    """
    Abstract interface for a user's transaction history.
    """

    @abstractmethod
    async def record_transaction(
        self,
        user_id: str,
        form: TransactionCreate,
    ) -> Transaction:
        """
        Record a deposit or withdrawal. ATOMIC.

        Writes the transaction document and moves the user's
        `totalSavings` by +amount (deposit) or -amount (withdrawal)
        in a single batch.

        Returns:
            The stored transaction (timestamp may be None until the
            server fills it in)

        Raises:
            NotFoundError: If the user doesn't exist
            StorageError: If the batch fails (nothing was written)
        """
        pass

    @abstractmethod
    async def list_transactions(
        self,
        user_id: str,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """
        List transactions newest first.

        Args:
            user_id: Owner of the transactions
            limit: Maximum number of results (None for all)
        """
        pass

    @abstractmethod
    async def assign_categories(
        self,
        user_id: str,
        assignments: list[TransactionAssignment],
    ) -> int:
        """
        Attach budget categories to withdrawals. ATOMIC.

        Only assignments that carry a category are written; `reason` is
        updated only when given.

        Returns:
            Number of transactions updated
        """
        pass


class BudgetStorageInterface(ABC):
    """
    Abstract interface for budget categories
    (`users/{uid}/budgetCategories/{id}`).
    """

    @abstractmethod
    async def add_category(
        self,
        user_id: str,
        form: BudgetCategoryCreate,
        period_key: str,
    ) -> BudgetCategory:
        pass

    @abstractmethod
    async def delete_category(self, user_id: str, category_id: str) -> None:
        """Deleting a missing category is a no-op."""
        pass

    @abstractmethod
    async def list_categories(
        self,
        user_id: str,
        period_key: Optional[str] = None,
    ) -> list[BudgetCategory]:
        """
        Args:
            user_id: Owner of the categories
            period_key: Only categories created for this period (None for all)
        """
        pass


class SaccoStorageInterface(ABC):
    """
    Abstract interface for SACCO savings pools (`saccos/{id}`).
    """

    @abstractmethod
    async def create_sacco(self, admin_id: str, form: SaccoCreate) -> Sacco:
        """
        Create a SACCO with the creator as admin, sole member and first
        in the rotation, with a zero total.
        """
        pass

    @abstractmethod
    async def get_sacco(self, sacco_id: str) -> Optional[Sacco]:
        pass

    @abstractmethod
    async def list_saccos(self) -> list[Sacco]:
        pass

    @abstractmethod
    async def join_sacco(self, sacco_id: str, user_id: str) -> None:
        """
        Add the user to the members and the rotation.

        Uses set-union semantics, so joining twice is a no-op.

        Raises:
            NotFoundError: If the SACCO doesn't exist
        """
        pass

    @abstractmethod
    async def deposit(
        self,
        sacco: Sacco,
        user_id: str,
        amount: float,
        phone_number: Optional[str] = None,
    ) -> Transaction:
        """
        Move money from the user's savings into the SACCO. ATOMIC.

        One batch:
        - user `totalSavings` -= amount
        - SACCO `currentTotal` += amount
        - a withdrawal transaction with method "SACCO Deposit"

        Returns:
            The transaction written to the user's history

        Raises:
            StorageError: If the batch fails (nothing was written)
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one deposit request).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity.

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
