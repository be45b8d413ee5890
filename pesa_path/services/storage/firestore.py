"""
Firestore Storage Implementation

DESIGN DECISION: Firestore is the system of record because:
1. The web client already reads and writes the same collections
2. Batched writes give us all-or-nothing multi-document updates
3. Server-side increments keep balances correct under concurrent writes

Collections:
    users/{uid}
    users/{uid}/transactions/{id}
    users/{uid}/budgetCategories/{id}
    users/{uid}/streaks/{id}
    saccos/{id}
    roles_admin/{uid}
    audit_log/{event_id}

Batches that contain an Increment are never retried: a commit that
failed ambiguously may already have been applied.
"""

from typing import Any, Optional
from uuid import UUID

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from google.oauth2.service_account import Credentials
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from pesa_path.config import get_settings
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
    ConnectionError,
    DuplicateError,
    NotFoundError,
    SaccoStorageInterface,
    StorageError,
    TransactionStorageInterface,
    UserStorageInterface,
)


USERS = "users"
TRANSACTIONS = "transactions"
BUDGET_CATEGORIES = "budgetCategories"
STREAKS = "streaks"
SACCOS = "saccos"
ADMIN_ROLES = "roles_admin"
AUDIT_LOG = "audit_log"

TRANSIENT_ERRORS = (gcp_exceptions.ServiceUnavailable, gcp_exceptions.DeadlineExceeded)


def _is_transient(error: BaseException) -> bool:
    """Only retry when Firestore itself was unavailable or slow."""
    # Storage errors wrap the backend error they were raised from
    return isinstance(error, TRANSIENT_ERRORS) or isinstance(error.__context__, TRANSIENT_ERRORS)


class FirestoreClient:
    """
    Low-level Firestore client wrapper.

    Handles authentication and hands out collection references.
    """

    def __init__(self):
        self._client: Optional[firestore.Client] = None
        self._settings = get_settings().firebase

    @retry(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> firestore.Client:
        """
        Establish connection to Firestore.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                )
                self._client = firestore.Client(
                    project=self._settings.project_id,
                    credentials=credentials,
                    database=self._settings.database,
                )
            except FileNotFoundError:
                raise ConnectionError(
                    f"Firebase credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Firestore: {e}")

        return self._client

    def batch(self) -> firestore.WriteBatch:
        return self.connect().batch()

    def users(self) -> firestore.CollectionReference:
        return self.connect().collection(USERS)

    def user(self, user_id: str) -> firestore.DocumentReference:
        return self.users().document(user_id)

    def transactions(self, user_id: str) -> firestore.CollectionReference:
        return self.user(user_id).collection(TRANSACTIONS)

    def budget_categories(self, user_id: str) -> firestore.CollectionReference:
        return self.user(user_id).collection(BUDGET_CATEGORIES)

    def streaks(self, user_id: str) -> firestore.CollectionReference:
        return self.user(user_id).collection(STREAKS)

    def saccos(self) -> firestore.CollectionReference:
        return self.connect().collection(SACCOS)

    def admin_roles(self) -> firestore.CollectionReference:
        return self.connect().collection(ADMIN_ROLES)

    def audit_log(self) -> firestore.CollectionReference:
        return self.connect().collection(AUDIT_LOG)

    def get_all(self, refs: list) -> list:
        return list(self.connect().get_all(refs))


def _user_from_snapshot(snapshot) -> UserProfile:
    data = snapshot.to_dict() or {}
    data["id"] = snapshot.id
    return UserProfile.model_validate(data)


def _transaction_from_snapshot(user_id: str, snapshot) -> Transaction:
    # Older documents may predate the userId field
    data = {"userId": user_id, **(snapshot.to_dict() or {})}
    data["id"] = snapshot.id
    return Transaction.model_validate(data)


def _sacco_from_snapshot(snapshot) -> Sacco:
    data = snapshot.to_dict() or {}
    data["id"] = snapshot.id
    return Sacco.model_validate(data)


class FirestoreUserStorage(UserStorageInterface):
    """Firestore implementation of user profiles and admin roles."""

    def __init__(self, client: Optional[FirestoreClient] = None):
        self._client = client or FirestoreClient()

    @retry(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def get_user(self, user_id: str) -> Optional[UserProfile]:
        try:
            snapshot = self._client.user(user_id).get()
            if not snapshot.exists:
                return None
            return _user_from_snapshot(snapshot)
        except Exception as e:
            raise StorageError(f"Failed to get user: {e}")

    async def get_user_by_email(self, email: str) -> Optional[UserProfile]:
        try:
            query = (
                self._client.users()
                .where(filter=FieldFilter("email", "==", email.strip().lower()))
                .limit(1)
            )
            for snapshot in query.stream():
                return _user_from_snapshot(snapshot)
            return None
        except Exception as e:
            raise StorageError(f"Failed to look up user by email: {e}")

    async def create_user(self, profile: UserProfile) -> UserProfile:
        try:
            if profile.email and await self.get_user_by_email(profile.email):
                raise DuplicateError(f"Email already registered: {profile.email}")
            self._client.user(profile.id).create(profile.to_document())
            return profile
        except DuplicateError:
            raise
        except gcp_exceptions.AlreadyExists:
            raise DuplicateError(f"User already exists: {profile.id}")
        except Exception as e:
            raise StorageError(f"Failed to create user: {e}")

    async def update_user(self, user_id: str, fields: dict[str, Any]) -> None:
        try:
            self._client.user(user_id).update(fields)
        except gcp_exceptions.NotFound:
            raise NotFoundError(f"User not found: {user_id}")
        except Exception as e:
            raise StorageError(f"Failed to update user: {e}")

    async def list_users(self) -> list[UserProfile]:
        try:
            return [_user_from_snapshot(s) for s in self._client.users().stream()]
        except Exception as e:
            raise StorageError(f"Failed to list users: {e}")

    async def get_users(self, user_ids: list[str]) -> list[UserProfile]:
        if not user_ids:
            return []
        try:
            refs = [self._client.user(uid) for uid in user_ids]
            return [
                _user_from_snapshot(snapshot)
                for snapshot in self._client.get_all(refs)
                if snapshot.exists
            ]
        except Exception as e:
            raise StorageError(f"Failed to get users: {e}")

    async def is_admin(self, user_id: str) -> bool:
        try:
            return self._client.admin_roles().document(user_id).get().exists
        except Exception as e:
            raise StorageError(f"Failed to check admin role: {e}")

    @retry(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def grant_admin(self, user_id: str) -> None:
        try:
            self._client.admin_roles().document(user_id).set({})
        except Exception as e:
            raise StorageError(f"Failed to grant admin role: {e}")

    async def set_frozen(self, user_id: str, frozen: bool) -> None:
        await self.update_user(user_id, {"isFrozen": frozen})

    async def get_streak(self, user_id: str) -> Optional[Streak]:
        try:
            for snapshot in self._client.streaks(user_id).limit(1).stream():
                return Streak.model_validate(snapshot.to_dict() or {})
            return None
        except Exception as e:
            raise StorageError(f"Failed to get streak: {e}")


class FirestoreTransactionStorage(TransactionStorageInterface):
    """Firestore implementation of transaction history."""

    def __init__(self, client: Optional[FirestoreClient] = None):
        self._client = client or FirestoreClient()

    async def record_transaction(
        self,
        user_id: str,
        form: TransactionCreate,
    ) -> Transaction:
        try:
            ref = self._client.transactions(user_id).document()
            transaction = Transaction.from_form(ref.id, user_id, form)

            batch = self._client.batch()
            batch.set(ref, {
                **transaction.to_document(),
                "timestamp": firestore.SERVER_TIMESTAMP,
            })
            batch.update(self._client.user(user_id), {
                "totalSavings": firestore.Increment(transaction.signed_amount),
            })
            batch.commit()
            return transaction
        except gcp_exceptions.NotFound:
            raise NotFoundError(f"User not found: {user_id}")
        except Exception as e:
            raise StorageError(f"Failed to record transaction: {e}")

    @retry(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def list_transactions(
        self,
        user_id: str,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        try:
            query = self._client.transactions(user_id).order_by(
                "timestamp", direction=firestore.Query.DESCENDING
            )
            if limit is not None:
                query = query.limit(limit)
            return [_transaction_from_snapshot(user_id, s) for s in query.stream()]
        except Exception as e:
            raise StorageError(f"Failed to list transactions: {e}")

    async def assign_categories(
        self,
        user_id: str,
        assignments: list[TransactionAssignment],
    ) -> int:
        updates = assignment_updates(assignments)
        if not updates:
            return 0

        batch = self._client.batch()
        for transaction_id, fields in updates.items():
            batch.update(self._client.transactions(user_id).document(transaction_id), fields)

        try:
            batch.commit()
            return len(updates)
        except gcp_exceptions.NotFound as e:
            raise NotFoundError(f"Transaction not found: {e}")
        except Exception as e:
            raise StorageError(f"Failed to assign categories: {e}")


class FirestoreBudgetStorage(BudgetStorageInterface):
    """Firestore implementation of budget categories."""

    def __init__(self, client: Optional[FirestoreClient] = None):
        self._client = client or FirestoreClient()

    @retry(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def add_category(
        self,
        user_id: str,
        form: BudgetCategoryCreate,
        period_key: str,
    ) -> BudgetCategory:
        try:
            ref = self._client.budget_categories(user_id).document()
            category = BudgetCategory(
                id=ref.id,
                user_id=user_id,
                name=form.name,
                budgeted=form.budgeted,
                period=period_key,
            )
            ref.set(category.to_document())
            return category
        except Exception as e:
            raise StorageError(f"Failed to add budget category: {e}")

    async def delete_category(self, user_id: str, category_id: str) -> None:
        try:
            self._client.budget_categories(user_id).document(category_id).delete()
        except Exception as e:
            raise StorageError(f"Failed to delete budget category: {e}")

    async def list_categories(
        self,
        user_id: str,
        period_key: Optional[str] = None,
    ) -> list[BudgetCategory]:
        try:
            query = self._client.budget_categories(user_id)
            if period_key is not None:
                query = query.where(filter=FieldFilter("period", "==", period_key))
            categories = []
            for snapshot in query.stream():
                data = {"userId": user_id, **(snapshot.to_dict() or {})}
                data["id"] = snapshot.id
                categories.append(BudgetCategory.model_validate(data))
            return categories
        except Exception as e:
            raise StorageError(f"Failed to list budget categories: {e}")


class FirestoreSaccoStorage(SaccoStorageInterface):
    """Firestore implementation of SACCO savings pools."""

    def __init__(self, client: Optional[FirestoreClient] = None):
        self._client = client or FirestoreClient()

    async def create_sacco(self, admin_id: str, form: SaccoCreate) -> Sacco:
        try:
            ref = self._client.saccos().document()
            sacco = Sacco(
                id=ref.id,
                name=form.name,
                goal=form.goal,
                admin_id=admin_id,
                member_ids=[admin_id],
                current_total=0,
                rotation_order=[admin_id],
            )
            ref.set({
                **sacco.to_document(),
                "createdAt": firestore.SERVER_TIMESTAMP,
            })
            return sacco
        except Exception as e:
            raise StorageError(f"Failed to create SACCO: {e}")

    @retry(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def get_sacco(self, sacco_id: str) -> Optional[Sacco]:
        try:
            snapshot = self._client.saccos().document(sacco_id).get()
            if not snapshot.exists:
                return None
            return _sacco_from_snapshot(snapshot)
        except Exception as e:
            raise StorageError(f"Failed to get SACCO: {e}")

    async def list_saccos(self) -> list[Sacco]:
        try:
            return [_sacco_from_snapshot(s) for s in self._client.saccos().stream()]
        except Exception as e:
            raise StorageError(f"Failed to list SACCOs: {e}")

    @retry(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def join_sacco(self, sacco_id: str, user_id: str) -> None:
        # ArrayUnion makes a retried join idempotent
        try:
            self._client.saccos().document(sacco_id).update({
                "memberIds": firestore.ArrayUnion([user_id]),
                "rotationOrder": firestore.ArrayUnion([user_id]),
            })
        except gcp_exceptions.NotFound:
            raise NotFoundError(f"SACCO not found: {sacco_id}")
        except Exception as e:
            raise StorageError(f"Failed to join SACCO: {e}")

    async def deposit(
        self,
        sacco: Sacco,
        user_id: str,
        amount: float,
        phone_number: Optional[str] = None,
    ) -> Transaction:
        try:
            ref = self._client.transactions(user_id).document()
            transaction = Transaction.sacco_deposit(
                transaction_id=ref.id,
                user_id=user_id,
                sacco_name=sacco.name,
                amount=amount,
                phone_number=phone_number,
            )

            batch = self._client.batch()
            batch.update(self._client.user(user_id), {
                "totalSavings": firestore.Increment(-amount),
            })
            batch.update(self._client.saccos().document(sacco.id), {
                "currentTotal": firestore.Increment(amount),
            })
            batch.set(ref, {
                **transaction.to_document(),
                "timestamp": firestore.SERVER_TIMESTAMP,
            })
            batch.commit()
            return transaction
        except gcp_exceptions.NotFound as e:
            raise NotFoundError(f"User or SACCO not found: {e}")
        except Exception as e:
            raise StorageError(f"Failed to deposit into SACCO: {e}")


class FirestoreAuditStorage(AuditStorageInterface):
    """
    Firestore implementation of the audit log.

    One document per event, keyed by event ID.
    """

    def __init__(self, client: Optional[FirestoreClient] = None):
        self._client = client or FirestoreClient()

    @retry(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def append_event(self, event: AuditEvent) -> bool:
        try:
            self._client.audit_log().document(str(event.event_id)).set(event.to_document())
            return True
        except Exception as e:
            raise StorageError(f"Failed to write audit event: {e}")

    async def _query_events(self, field: str, value: str) -> list[AuditEvent]:
        query = self._client.audit_log().where(filter=FieldFilter(field, "==", value))
        return [AuditEvent.model_validate(s.to_dict()) for s in query.stream()]

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        try:
            events = await self._query_events("correlation_id", str(correlation_id))
            events.sort(key=lambda e: e.timestamp)
            return events
        except Exception as e:
            raise StorageError(f"Failed to get audit events: {e}")

    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        try:
            events = [
                event
                for event in await self._query_events("entity_id", entity_id)
                if event.entity_type == entity_type
            ]
            events.sort(key=lambda e: e.timestamp)
            return events
        except Exception as e:
            raise StorageError(f"Failed to get audit events: {e}")

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        try:
            query = (
                self._client.audit_log()
                .order_by("timestamp", direction=firestore.Query.DESCENDING)
                .limit(limit)
            )
            return [AuditEvent.model_validate(s.to_dict()) for s in query.stream()]
        except Exception as e:
            raise StorageError(f"Failed to get audit events: {e}")
