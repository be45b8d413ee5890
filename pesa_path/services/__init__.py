"""Services package."""

from pesa_path.services.auth import (
    AccountExistsError,
    AuthenticationError,
    AuthError,
    PasswordHasher,
)
from pesa_path.services.storage import (
    AuditStorageInterface,
    BudgetStorageInterface,
    ConnectionError,
    DuplicateError,
    FirestoreAuditStorage,
    FirestoreBudgetStorage,
    FirestoreClient,
    FirestoreSaccoStorage,
    FirestoreTransactionStorage,
    FirestoreUserStorage,
    InMemoryStore,
    NotFoundError,
    SaccoStorageInterface,
    StorageError,
    TransactionStorageInterface,
    UserStorageInterface,
)

__all__ = [
    # Auth services
    "AccountExistsError",
    "AuthenticationError",
    "AuthError",
    "PasswordHasher",
    # Storage services
    "AuditStorageInterface",
    "BudgetStorageInterface",
    "ConnectionError",
    "DuplicateError",
    "FirestoreAuditStorage",
    "FirestoreBudgetStorage",
    "FirestoreClient",
    "FirestoreSaccoStorage",
    "FirestoreTransactionStorage",
    "FirestoreUserStorage",
    "InMemoryStore",
    "NotFoundError",
    "SaccoStorageInterface",
    "StorageError",
    "TransactionStorageInterface",
    "UserStorageInterface",
]
