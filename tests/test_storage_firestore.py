"""
Tests for Firestore storage.

The Firestore client is a MagicMock: these tests check which writes go
into a batch, not what the server does with them.
"""

import pytest
from unittest.mock import MagicMock

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore
from tenacity import wait_none

from pesa_path.models.budget import TransactionAssignment
from pesa_path.models.sacco import Sacco
from pesa_path.models.transaction import TransactionCreate
from pesa_path.services.storage import StorageError
from pesa_path.services.storage.firestore import (
    FirestoreSaccoStorage,
    FirestoreTransactionStorage,
    FirestoreUserStorage,
)


@pytest.fixture
def client():
    mock = MagicMock()
    mock.transactions.return_value.document.return_value.id = "t1"
    return mock


@pytest.fixture
def sacco():
    return Sacco(id="s1", name="Boda Savers", goal=100000, admin_id="u1", member_ids=["u1"])


def _snapshot(**data):
    snapshot = MagicMock(exists=True, id="u1")
    snapshot.to_dict.return_value = data
    return snapshot


class TestRecordTransaction:
    """Tests for the transaction batch."""

    @pytest.mark.asyncio
    async def test_single_batch(self, client):
        """Test the transaction and the balance change commit together."""
        storage = FirestoreTransactionStorage(client)

        transaction = await storage.record_transaction("u1", TransactionCreate(
            amount=5000, type="withdrawal", phone_number="0772000000",
        ))

        batch = client.batch.return_value
        client.batch.assert_called_once()
        batch.commit.assert_called_once()
        assert transaction.id == "t1"

        ref, document = batch.set.call_args.args
        assert ref is client.transactions.return_value.document.return_value
        assert document["timestamp"] is firestore.SERVER_TIMESTAMP
        assert document["type"] == "withdrawal"

        user_ref, fields = batch.update.call_args.args
        client.user.assert_called_with("u1")
        assert user_ref is client.user.return_value
        assert fields["totalSavings"].value == -5000

    @pytest.mark.asyncio
    async def test_deposit_increments(self, client):
        """Test deposits add to the balance."""
        storage = FirestoreTransactionStorage(client)
        await storage.record_transaction("u1", TransactionCreate(amount=2500, phone_number="0772000000"))

        _, fields = client.batch.return_value.update.call_args.args
        assert fields["totalSavings"].value == 2500

    @pytest.mark.asyncio
    async def test_commit_failure(self, client):
        """Test a failed commit is reported as a storage error."""
        client.batch.return_value.commit.side_effect = RuntimeError("aborted")
        storage = FirestoreTransactionStorage(client)

        with pytest.raises(StorageError, match="aborted"):
            await storage.record_transaction("u1", TransactionCreate(amount=1, phone_number="0772000000"))
        client.batch.return_value.commit.assert_called_once()


class TestAssignCategories:
    """Tests for the withdrawal assignment batch."""

    @pytest.mark.asyncio
    async def test_one_commit_for_all_rows(self, client):
        """Test only rows with a category are written, in one batch."""
        storage = FirestoreTransactionStorage(client)

        count = await storage.assign_categories("u1", [
            TransactionAssignment(transaction_id="t1", category_id="c1", reason="Rent"),
            TransactionAssignment(transaction_id="t2", category_id="c2"),
            TransactionAssignment(transaction_id="t3"),
        ])

        batch = client.batch.return_value
        assert count == 2
        batch.commit.assert_called_once()
        assert [c.args[1] for c in batch.update.call_args_list] == [
            {"categoryId": "c1", "reason": "Rent"},
            {"categoryId": "c2"},
        ]

    @pytest.mark.asyncio
    async def test_nothing_to_write(self, client):
        """Test no batch is opened without a category."""
        storage = FirestoreTransactionStorage(client)

        count = await storage.assign_categories("u1", [TransactionAssignment(transaction_id="t1")])

        assert count == 0
        client.batch.assert_not_called()


class TestSaccoWrites:
    """Tests for SACCO joins and deposits."""

    @pytest.mark.asyncio
    async def test_deposit_batch(self, client, sacco):
        """Test the deposit moves money and mirrors a withdrawal in one batch."""
        storage = FirestoreSaccoStorage(client)

        transaction = await storage.deposit(sacco, "u1", 3000)

        batch = client.batch.return_value
        client.batch.assert_called_once()
        batch.commit.assert_called_once()

        updates = {c.args[0]: c.args[1] for c in batch.update.call_args_list}
        assert updates[client.user.return_value]["totalSavings"].value == -3000
        assert updates[client.saccos.return_value.document.return_value]["currentTotal"].value == 3000
        client.saccos.return_value.document.assert_called_with("s1")

        _, document = batch.set.call_args.args
        assert document["timestamp"] is firestore.SERVER_TIMESTAMP
        assert document["type"] == "withdrawal"
        assert document["method"] == "SACCO Deposit"
        assert document["reason"] == "Deposit to Boda Savers"
        assert transaction.phone_number == "N/A"

    @pytest.mark.asyncio
    async def test_join_adds_to_both_lists(self, client):
        """Test joining unions the user into members and rotation order."""
        storage = FirestoreSaccoStorage(client)

        await storage.join_sacco("s1", "u2")

        document = client.saccos.return_value.document
        document.assert_called_with("s1")
        fields = document.return_value.update.call_args.args[0]
        assert fields["memberIds"].values == ["u2"]
        assert fields["rotationOrder"].values == ["u2"]

    @pytest.mark.asyncio
    async def test_join_missing_sacco(self, client):
        """Test a missing SACCO document."""
        client.saccos.return_value.document.return_value.update.side_effect = (
            gcp_exceptions.NotFound("no document")
        )
        storage = FirestoreSaccoStorage(client)

        with pytest.raises(StorageError, match="SACCO not found"):
            await storage.join_sacco("missing", "u2")


class TestRetries:
    """Tests for which failures are retried."""

    @pytest.mark.asyncio
    async def test_unavailable_is_retried(self, client):
        """Test a read is retried after Firestore was unavailable."""
        client.user.return_value.get.side_effect = [
            gcp_exceptions.ServiceUnavailable("busy"),
            _snapshot(name="Amina", email="amina@example.com"),
        ]
        storage = FirestoreUserStorage(client)
        get_user = FirestoreUserStorage.get_user.retry_with(wait=wait_none())

        profile = await get_user(storage, "u1")

        assert profile.name == "Amina"
        assert client.user.return_value.get.call_count == 2

    @pytest.mark.asyncio
    async def test_bad_document_is_not_retried(self, client):
        """Test a document that fails validation is reported once."""
        client.user.return_value.get.return_value = _snapshot(age=-5)
        storage = FirestoreUserStorage(client)
        get_user = FirestoreUserStorage.get_user.retry_with(wait=wait_none())

        with pytest.raises(StorageError, match="Failed to get user"):
            await get_user(storage, "u1")
        client.user.return_value.get.assert_called_once()
