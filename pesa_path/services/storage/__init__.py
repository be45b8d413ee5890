"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Firestore is the production backend; the in-memory store backs tests and
local runs.
"""

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
from pesa_path.services.storage.firestore import (
    FirestoreAuditStorage,
    FirestoreBudgetStorage,
    FirestoreClient,
    FirestoreSaccoStorage,
    FirestoreTransactionStorage,
    FirestoreUserStorage,
)
from pesa_path.services.storage.memory import InMemoryStore

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "BudgetStorageInterface",
    "SaccoStorageInterface",
    "TransactionStorageInterface",
    "UserStorageInterface",
    # Exceptions
    "ConnectionError",
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # Firestore implementation
    "FirestoreAuditStorage",
    "FirestoreBudgetStorage",
    "FirestoreClient",
    "FirestoreSaccoStorage",
    "FirestoreTransactionStorage",
    "FirestoreUserStorage",
    # In-memory implementation
    "InMemoryStore",
]
