"""
In-Memory Storage Implementation

Implements every storage interface over plain dicts. Used by the test
suite and for running the app locally without Firestore
(`create_app_components(use_storage=False)`).

Atomic operations check every precondition before touching any state,
which gives the same all-or-nothing outcome as a Firestore batch.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional
from uuid import UUID, uuid4

from pesa_path.models.audit import AuditEvent
from pesa_path.models.budget import (
    BudgetCategory,
    BudgetCategoryCreate,
    TransactionAssignment,
)
from pesa_path.models.sacco import Sacco, SaccoCreate
from pesa_path.models.transaction import Transaction, TransactionCreate
from pesa_path.models.user import Streak, UserProfile
from pesa_path.planner.budgeting import assignment_updates
from pesa_path.services.storage.interface import (
    AuditStorageInterface,
    BudgetStorageInterface,
    DuplicateError,
    NotFoundError,
    SaccoStorageInterface,
    TransactionStorageInterface,
    UserStorageInterface,
)


def _new_id() -> str:
    return uuid4().hex[:20]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryStore(
    UserStorageInterface,
    TransactionStorageInterface,
    BudgetStorageInterface,
    SaccoStorageInterface,
    AuditStorageInterface,
):
    """
    Single object holding all collections.

    Pass the same instance wherever a storage interface is expected.
    `clock` stamps new transactions and SACCOs; tests pin it to a fixed time.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or _utcnow
        self._users: dict[str, UserProfile] = {}
        self._admins: set[str] = set()
        self._streaks: dict[str, Streak] = {}
        self._transactions: dict[str, dict[str, Transaction]] = {}
        self._categories: dict[str, dict[str, BudgetCategory]] = {}
        self._saccos: dict[str, Sacco] = {}
        self._events: list[AuditEvent] = []

    # ------------------------------------------------------------------
    # Test helpers
    # ------------------------------------------------------------------

    def set_streak(self, user_id: str, streak: Streak) -> None:
        self._streaks[user_id] = streak

    def add_transaction(self, transaction: Transaction) -> None:
        """Insert a transaction as-is, without touching the balance."""
        self._transactions.setdefault(transaction.user_id, {})[transaction.id] = transaction

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def _require_user(self, user_id: str) -> UserProfile:
        profile = self._users.get(user_id)
        if profile is None:
            raise NotFoundError(f"User not found: {user_id}")
        return profile

    def _adjust_savings(self, user_id: str, delta: float) -> None:
        profile = self._users[user_id]
        self._users[user_id] = profile.model_copy(
            update={"total_savings": profile.total_savings + delta}
        )

    async def get_user(self, user_id: str) -> Optional[UserProfile]:
        profile = self._users.get(user_id)
        return profile.model_copy() if profile else None

    async def get_user_by_email(self, email: str) -> Optional[UserProfile]:
        wanted = email.strip().lower()
        for profile in self._users.values():
            if profile.email.lower() == wanted:
                return profile.model_copy()
        return None

    async def create_user(self, profile: UserProfile) -> UserProfile:
        if profile.id in self._users:
            raise DuplicateError(f"User already exists: {profile.id}")
        if profile.email and await self.get_user_by_email(profile.email):
            raise DuplicateError(f"Email already registered: {profile.email}")
        self._users[profile.id] = profile.model_copy()
        return profile

    async def update_user(self, user_id: str, fields: dict[str, Any]) -> None:
        profile = self._require_user(user_id)
        self._users[user_id] = UserProfile.model_validate({**profile.to_document(), **fields})

    async def list_users(self) -> list[UserProfile]:
        return [p.model_copy() for p in self._users.values()]

    async def get_users(self, user_ids: list[str]) -> list[UserProfile]:
        return [self._users[uid].model_copy() for uid in user_ids if uid in self._users]

    async def is_admin(self, user_id: str) -> bool:
        return user_id in self._admins

    async def grant_admin(self, user_id: str) -> None:
        self._admins.add(user_id)

    async def set_frozen(self, user_id: str, frozen: bool) -> None:
        await self.update_user(user_id, {"isFrozen": frozen})

    async def get_streak(self, user_id: str) -> Optional[Streak]:
        return self._streaks.get(user_id)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def record_transaction(
        self,
        user_id: str,
        form: TransactionCreate,
    ) -> Transaction:
        self._require_user(user_id)

        transaction = Transaction.from_form(_new_id(), user_id, form)
        transaction.timestamp = self._clock()

        self.add_transaction(transaction)
        self._adjust_savings(user_id, transaction.signed_amount)
        return transaction.model_copy()

    async def list_transactions(
        self,
        user_id: str,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        transactions = sorted(
            self._transactions.get(user_id, {}).values(),
            key=lambda t: t.timestamp or datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )
        if limit is not None:
            transactions = transactions[:limit]
        return [t.model_copy() for t in transactions]

    async def assign_categories(
        self,
        user_id: str,
        assignments: list[TransactionAssignment],
    ) -> int:
        owned = self._transactions.get(user_id, {})
        updates = assignment_updates(assignments)

        for transaction_id in updates:
            if transaction_id not in owned:
                raise NotFoundError(f"Transaction not found: {transaction_id}")

        for transaction_id, fields in updates.items():
            current = owned[transaction_id].model_dump(by_alias=True)
            owned[transaction_id] = Transaction.model_validate({**current, **fields})

        return len(updates)

    # ------------------------------------------------------------------
    # Budget categories
    # ------------------------------------------------------------------

    async def add_category(
        self,
        user_id: str,
        form: BudgetCategoryCreate,
        period_key: str,
    ) -> BudgetCategory:
        category = BudgetCategory(
            id=_new_id(),
            user_id=user_id,
            name=form.name,
            budgeted=form.budgeted,
            period=period_key,
        )
        self._categories.setdefault(user_id, {})[category.id] = category
        return category.model_copy()

    async def delete_category(self, user_id: str, category_id: str) -> None:
        self._categories.get(user_id, {}).pop(category_id, None)

    async def list_categories(
        self,
        user_id: str,
        period_key: Optional[str] = None,
    ) -> list[BudgetCategory]:
        return [
            c.model_copy()
            for c in self._categories.get(user_id, {}).values()
            if period_key is None or c.period == period_key
        ]

    # ------------------------------------------------------------------
    # SACCOs
    # ------------------------------------------------------------------

    async def create_sacco(self, admin_id: str, form: SaccoCreate) -> Sacco:
        sacco = Sacco(
            id=_new_id(),
            name=form.name,
            goal=form.goal,
            admin_id=admin_id,
            member_ids=[admin_id],
            current_total=0,
            created_at=self._clock(),
            rotation_order=[admin_id],
        )
        self._saccos[sacco.id] = sacco
        return sacco.model_copy(deep=True)

    async def get_sacco(self, sacco_id: str) -> Optional[Sacco]:
        sacco = self._saccos.get(sacco_id)
        return sacco.model_copy(deep=True) if sacco else None

    async def list_saccos(self) -> list[Sacco]:
        return [s.model_copy(deep=True) for s in self._saccos.values()]

    async def join_sacco(self, sacco_id: str, user_id: str) -> None:
        sacco = self._saccos.get(sacco_id)
        if sacco is None:
            raise NotFoundError(f"SACCO not found: {sacco_id}")
        if user_id not in sacco.member_ids:
            sacco.member_ids.append(user_id)
        if user_id not in sacco.rotation_order:
            sacco.rotation_order.append(user_id)

    async def deposit(
        self,
        sacco: Sacco,
        user_id: str,
        amount: float,
        phone_number: Optional[str] = None,
    ) -> Transaction:
        self._require_user(user_id)
        stored = self._saccos.get(sacco.id)
        if stored is None:
            raise NotFoundError(f"SACCO not found: {sacco.id}")

        transaction = Transaction.sacco_deposit(
            transaction_id=_new_id(),
            user_id=user_id,
            sacco_name=sacco.name,
            amount=amount,
            phone_number=phone_number,
        )
        transaction.timestamp = self._clock()

        self._adjust_savings(user_id, -amount)
        stored.current_total += amount
        self.add_transaction(transaction)
        return transaction.model_copy()

    # ------------------------------------------------------------------
    # Audit
    # ------------------------------------------------------------------

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        events = [e for e in self._events if e.correlation_id == correlation_id]
        return sorted(events, key=lambda e: e.timestamp)

    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        events = [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]
        return sorted(events, key=lambda e: e.timestamp)

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return sorted(self._events, key=lambda e: e.timestamp, reverse=True)[:limit]
