"""
Integration tests for the orchestrator flows.

Storage is the in-memory store and the AI flows are mocked, so these
run the real validation, planner and audit code end to end.
"""

import pytest
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from pesa_path.audit import AuditLogger
from pesa_path.config import GeminiSettings
from pesa_path.flows import (
    BudgetWarningOutput,
    DailyTipOutput,
    FinancialAdviceOutput,
    FlowError,
    GoalPredictionOutput,
    InvestmentTipsOutput,
)
from pesa_path.insights import TIP_FALLBACK
from pesa_path.models.audit import AuditEventType
from pesa_path.models.budget import BudgetPeriod, TransactionAssignment
from pesa_path.models.transaction import TransactionType
from pesa_path.models.user import ExternalIdentity, SavingPlan, Streak, UserProfile
from pesa_path.orchestrator import (
    ADVISOR_APOLOGY,
    ADVISOR_NO_PROFILE,
    TIPS_NEED_PROFILE,
    AccountFlow,
    AccountFrozenError,
    AdminFlow,
    AppComponents,
    AssistantFlow,
    NotAMemberError,
    PermissionDeniedError,
    PlannerFlow,
    SaccoFlow,
    TransactionFlow,
    create_app_components,
)
from pesa_path.services.auth import (
    AccountExistsError,
    AuthenticationError,
    AuthError,
    PasswordHasher,
)
from pesa_path.services.storage import InMemoryStore
from pesa_path.validation import FormValidationError


NOW = datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)
TODAY = date(2025, 1, 15)


@pytest.fixture
def store():
    return InMemoryStore(clock=lambda: NOW)


@pytest.fixture
def audit_logger(store):
    return AuditLogger(store)


@pytest.fixture
def flows():
    mock = MagicMock()
    mock.financial_advice = AsyncMock(return_value=FinancialAdviceOutput(advice="Save early."))
    mock.investment_tips = AsyncMock(return_value=InvestmentTipsOutput(tips="- Bonds\n- SACCOs\n- Stocks"))
    mock.daily_tip = AsyncMock(return_value=DailyTipOutput(tip="Track every shilling."))
    mock.budget_overspending_warning = AsyncMock(
        return_value=BudgetWarningOutput(is_overspending=True, warning_message="Slow down.")
    )
    mock.predict_goal = AsyncMock(
        return_value=GoalPredictionOutput(will_meet_goal=True, prediction_message="On track!")
    )
    return mock


@pytest.fixture
def accounts(store, audit_logger):
    return AccountFlow(store, hasher=PasswordHasher(rounds=4), audit_logger=audit_logger)


@pytest.fixture
def transactions(store, audit_logger):
    return TransactionFlow(store, store, audit_logger=audit_logger)


@pytest.fixture
def planner(store, audit_logger):
    return PlannerFlow(store, store, store, audit_logger=audit_logger)


@pytest.fixture
def saccos(store, audit_logger):
    return SaccoFlow(store, store, audit_logger=audit_logger)


@pytest.fixture
def assistant(store, flows, audit_logger):
    return AssistantFlow(store, store, flows=flows, audit_logger=audit_logger)


@pytest.fixture
def admin(store, audit_logger):
    return AdminFlow(store, store, audit_logger=audit_logger)


@pytest.fixture
async def member(store):
    profile = UserProfile(
        id="u1",
        name="Amina",
        email="amina@example.com",
        age=30,
        income=600000,
        saving_plan=SavingPlan.MONTHLY,
        total_savings=10000,
    )
    await store.create_user(profile)
    return profile


def _signup(**overrides):
    data = {
        "name": "Amina",
        "email": "Amina@Example.com",
        "password": "secret1",
        "confirm_password": "secret1",
        "terms": True,
    }
    data.update(overrides)
    return data


def _transaction(amount, kind="deposit"):
    return {
        "amount": amount,
        "type": kind,
        "method": "Airtel Money",
        "phone_number": "0752000000",
    }


async def _event_types(store):
    return [e.event_type for e in await store.get_recent_events()]


class TestAccountFlow:
    """Tests for sign-up, sign-in and settings."""

    @pytest.mark.asyncio
    async def test_sign_up(self, accounts, store):
        """Test a new account has a hash, a lowercase email and no finance data."""
        profile = await accounts.sign_up(_signup())

        assert profile.email == "amina@example.com"
        assert profile.password_hash.startswith("$2")
        assert profile.terms_accepted is True
        assert profile.needs_onboarding is True
        assert AuditEventType.USER_SIGNED_UP in await _event_types(store)

    @pytest.mark.asyncio
    async def test_sign_up_duplicate_email(self, accounts):
        """Test the same email cannot register twice."""
        await accounts.sign_up(_signup())
        with pytest.raises(AccountExistsError):
            await accounts.sign_up(_signup(email="amina@example.com"))

    @pytest.mark.asyncio
    async def test_sign_up_invalid_form(self, accounts):
        """Test form errors are raised before anything is written."""
        with pytest.raises(FormValidationError) as exc_info:
            await accounts.sign_up(_signup(confirm_password="other1"))
        assert exc_info.value.result.message_for("confirm_password") == "Passwords do not match"

    @pytest.mark.asyncio
    async def test_log_in(self, accounts):
        """Test logging in with the right password."""
        created = await accounts.sign_up(_signup())
        profile = await accounts.log_in({"email": "AMINA@example.com", "password": "secret1"})
        assert profile.id == created.id

    @pytest.mark.asyncio
    async def test_log_in_wrong_password(self, accounts, store):
        """Test a wrong password is rejected and audited."""
        await accounts.sign_up(_signup())
        with pytest.raises(AuthenticationError):
            await accounts.log_in({"email": "amina@example.com", "password": "wrong12"})
        assert AuditEventType.LOGIN_FAILED in await _event_types(store)

    @pytest.mark.asyncio
    async def test_log_in_unknown_email(self, accounts):
        """Test an unknown email gets the same error."""
        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            await accounts.log_in({"email": "nobody@example.com", "password": "secret1"})

    @pytest.mark.asyncio
    async def test_sign_in_with_identity(self, accounts):
        """Test the first external sign-in creates the profile."""
        identity = ExternalIdentity(uid="g-123", name=None, email="Kato@Example.com")

        profile, is_new = await accounts.sign_in_with_identity(identity)
        again, is_new_again = await accounts.sign_in_with_identity(identity)

        assert is_new is True
        assert is_new_again is False
        assert profile.id == again.id == "g-123"
        assert profile.name == ""
        assert profile.email == "kato@example.com"
        assert profile.total_savings == 0
        assert await accounts.needs_onboarding("g-123") is True

    @pytest.mark.asyncio
    async def test_sign_in_with_identity_existing_email(self, accounts, store):
        """Test an external sign-in reuses the account that owns the email."""
        existing = await accounts.sign_up(_signup())
        identity = ExternalIdentity(uid="google-sub-1", email="Amina@Example.com")

        profile, is_new = await accounts.sign_in_with_identity(identity)

        assert is_new is False
        assert profile.id == existing.id
        assert await store.get_user("google-sub-1") is None

    @pytest.mark.asyncio
    async def test_complete_onboarding(self, accounts):
        """Test onboarding fills in plan, age and income."""
        created = await accounts.sign_up(_signup())
        profile = await accounts.complete_onboarding(created.id, {
            "saving_plan": "weekly",
            "age": 28,
            "income": 450000,
        })

        assert profile.saving_plan == SavingPlan.WEEKLY
        assert await accounts.needs_onboarding(created.id) is False

    @pytest.mark.asyncio
    async def test_needs_onboarding_unknown_user(self, accounts):
        """Test a missing profile still needs onboarding."""
        assert await accounts.needs_onboarding("ghost") is True

    @pytest.mark.asyncio
    async def test_update_profile(self, accounts, member):
        """Test name and photo changes."""
        profile = await accounts.update_profile("u1", {
            "name": "Amina N.",
            "photo_url": "https://example.com/a.png",
        })
        assert profile.name == "Amina N."
        assert profile.photo_url == "https://example.com/a.png"

    @pytest.mark.asyncio
    async def test_change_password(self, accounts):
        """Test the new password works after a change."""
        created = await accounts.sign_up(_signup())
        await accounts.change_password(created.id, {
            "current_password": "secret1",
            "new_password": "secret2",
        })
        profile = await accounts.log_in({"email": "amina@example.com", "password": "secret2"})
        assert profile.id == created.id

    @pytest.mark.asyncio
    async def test_change_password_wrong_current(self, accounts):
        """Test the current password is checked first."""
        created = await accounts.sign_up(_signup())
        with pytest.raises(AuthenticationError):
            await accounts.change_password(created.id, {
                "current_password": "nope123",
                "new_password": "secret2",
            })

    @pytest.mark.asyncio
    async def test_change_password_external_account(self, accounts, member):
        """Test accounts without a password cannot change one."""
        with pytest.raises(AuthError):
            await accounts.change_password("u1", {
                "current_password": "anything",
                "new_password": "secret2",
            })

    @pytest.mark.asyncio
    async def test_grant_admin(self, accounts, member, store):
        """Test the self-service admin grant."""
        await accounts.grant_admin("u1")
        assert await accounts.is_admin("u1") is True
        assert AuditEventType.ADMIN_GRANTED in await _event_types(store)


class TestTransactionFlow:
    """Tests for recording transactions."""

    @pytest.mark.asyncio
    async def test_record_deposit(self, transactions, member, store):
        """Test a deposit raises the balance and is audited."""
        correlation_id = uuid4()
        txn, warnings = await transactions.record_transaction(
            "u1", _transaction(2500), correlation_id=correlation_id,
        )

        assert txn.method == "Airtel Money"
        assert warnings == []
        assert (await store.get_user("u1")).total_savings == 12500
        events = await store.get_events_by_correlation_id(correlation_id)
        assert [e.event_type for e in events] == [AuditEventType.TRANSACTION_RECORDED]

    @pytest.mark.asyncio
    async def test_large_withdrawal_warns_but_records(self, transactions, member, store):
        """Test overdrawing is allowed with a warning."""
        txn, warnings = await transactions.record_transaction(
            "u1", _transaction(15000, kind="withdrawal"),
        )

        assert txn.type == TransactionType.WITHDRAWAL
        assert len(warnings) == 1
        assert (await store.get_user("u1")).total_savings == -5000

    @pytest.mark.asyncio
    async def test_frozen_account_refused(self, transactions, member, store):
        """Test frozen accounts cannot record transactions."""
        await store.set_frozen("u1", True)
        with pytest.raises(AccountFrozenError):
            await transactions.record_transaction("u1", _transaction(100))
        assert await store.list_transactions("u1") == []

    @pytest.mark.asyncio
    async def test_invalid_form_writes_nothing(self, transactions, member, store):
        """Test validation happens before the write."""
        with pytest.raises(FormValidationError):
            await transactions.record_transaction("u1", _transaction(0))
        assert (await store.get_user("u1")).total_savings == 10000

    @pytest.mark.asyncio
    async def test_dashboard(self, transactions, member, store):
        """Test cards, chart and recent rows come from storage."""
        store.set_streak("u1", Streak(xp=50, streak_length=5))
        await transactions.record_transaction("u1", _transaction(2000))

        cards, chart, recent = await transactions.dashboard("u1", today=TODAY)

        assert cards[0].value == "UGX 12,000"
        assert cards[3].value == "5 days"
        assert chart[-1].deposits == 2000
        assert len(recent) == 1


class TestPlannerFlow:
    """Tests for the Money Planner."""

    @pytest.mark.asyncio
    async def test_add_category_uses_current_period(self, planner, member):
        """Test categories are stored with today's period key."""
        monthly = await planner.add_category(
            "u1", {"name": "Food", "budgeted": 100000}, BudgetPeriod.MONTHLY, today=TODAY,
        )
        weekly = await planner.add_category(
            "u1", {"name": "Fuel", "budgeted": 20000}, BudgetPeriod.WEEKLY, today=TODAY,
        )
        assert monthly.period == "2025-0"
        assert weekly.period == "2025-W3"

    @pytest.mark.asyncio
    async def test_budget_summary_and_assignment(self, planner, transactions, member):
        """Test assigning a withdrawal moves it into category spend."""
        category = await planner.add_category(
            "u1", {"name": "Food", "budgeted": 10000}, BudgetPeriod.MONTHLY, today=TODAY,
        )
        txn, _ = await transactions.record_transaction("u1", _transaction(4000, kind="withdrawal"))

        unassigned = await planner.unassigned_withdrawals("u1", BudgetPeriod.MONTHLY, today=TODAY)
        assert [t.id for t in unassigned] == [txn.id]

        count = await planner.assign_transactions("u1", [
            TransactionAssignment(transaction_id=txn.id, category_id=category.id),
        ])
        summary = await planner.budget_summary("u1", BudgetPeriod.MONTHLY, today=TODAY)

        assert count == 1
        assert summary.income == 600000
        assert summary.total_spent == 4000
        assert summary.categories[0].progress_percent == 40
        assert await planner.unassigned_withdrawals("u1", BudgetPeriod.MONTHLY, today=TODAY) == []

    @pytest.mark.asyncio
    async def test_assign_without_categories_is_noop(self, planner, member, store):
        """Test nothing is written when no row has a category."""
        count = await planner.assign_transactions("u1", [
            TransactionAssignment(transaction_id="t1"),
        ])
        assert count == 0
        assert AuditEventType.TRANSACTIONS_ASSIGNED not in await _event_types(store)

    @pytest.mark.asyncio
    async def test_delete_category(self, planner, member):
        """Test deleted categories leave the summary."""
        category = await planner.add_category(
            "u1", {"name": "Food", "budgeted": 10000}, BudgetPeriod.MONTHLY, today=TODAY,
        )
        await planner.delete_category("u1", category.id)
        summary = await planner.budget_summary("u1", BudgetPeriod.MONTHLY, today=TODAY)
        assert summary.categories == []


class TestSaccoFlow:
    """Tests for SACCOs."""

    @pytest.mark.asyncio
    async def test_create_and_join(self, saccos, member, store):
        """Test creating a SACCO and a second member joining."""
        await store.create_user(UserProfile(id="u2", name="Kato"))
        sacco = await saccos.create_sacco("u1", {"name": "Boda Savers", "goal": 500000})

        joined = await saccos.join_sacco("u2", sacco.id)
        again = await saccos.join_sacco("u2", sacco.id)

        assert joined.member_ids == ["u1", "u2"]
        assert again.member_ids == ["u1", "u2"]
        assert (await _event_types(store)).count(AuditEventType.SACCO_JOINED) == 1

    @pytest.mark.asyncio
    async def test_deposit(self, saccos, member, store):
        """Test a member deposit moves money from savings into the SACCO."""
        sacco = await saccos.create_sacco("u1", {"name": "Boda Savers"})

        txn, warnings = await saccos.deposit("u1", sacco.id, {"amount": 3000})

        assert warnings == []
        assert txn.method == "SACCO Deposit"
        assert (await store.get_user("u1")).total_savings == 7000
        assert (await saccos.get_sacco(sacco.id)).current_total == 3000

    @pytest.mark.asyncio
    async def test_deposit_requires_membership(self, saccos, member, store):
        """Test non-members cannot deposit."""
        await store.create_user(UserProfile(id="u2", name="Kato", total_savings=5000))
        sacco = await saccos.create_sacco("u1", {"name": "Boda Savers"})

        with pytest.raises(NotAMemberError):
            await saccos.deposit("u2", sacco.id, {"amount": 3000})

    @pytest.mark.asyncio
    async def test_deposit_minimum(self, saccos, member, store):
        """Test deposits below the minimum are refused."""
        sacco = await saccos.create_sacco("u1", {"name": "Boda Savers"})

        with pytest.raises(FormValidationError):
            await saccos.deposit("u1", sacco.id, {"amount": 999})
        assert (await saccos.get_sacco(sacco.id)).current_total == 0

    @pytest.mark.asyncio
    async def test_deposit_frozen(self, saccos, member, store):
        """Test frozen accounts cannot deposit."""
        sacco = await saccos.create_sacco("u1", {"name": "Boda Savers"})
        await store.set_frozen("u1", True)

        with pytest.raises(AccountFrozenError):
            await saccos.deposit("u1", sacco.id, {"amount": 3000})

    @pytest.mark.asyncio
    async def test_deposit_over_balance_warns(self, saccos, member):
        """Test depositing more than the balance is allowed with a warning."""
        sacco = await saccos.create_sacco("u1", {"name": "Boda Savers"})
        _, warnings = await saccos.deposit("u1", sacco.id, {"amount": 20000})
        assert len(warnings) == 1

    @pytest.mark.asyncio
    async def test_members_with_unknown_id(self, saccos, member, store):
        """Test ids without a profile get a placeholder row."""
        sacco = await saccos.create_sacco("u1", {"name": "Boda Savers"})
        await store.join_sacco(sacco.id, "ghost")

        members = await saccos.members(await saccos.get_sacco(sacco.id))

        assert [m.id for m in members] == ["u1", "ghost"]
        assert members[0].name == "Amina"
        assert members[1].name == ""

    @pytest.mark.asyncio
    async def test_members_past_lookup_limit(self, saccos, member, store):
        """Test members after the lookup limit still get a row."""
        sacco = await saccos.create_sacco("u1", {"name": "Boda Savers"})
        for n in range(34):
            await store.create_user(UserProfile(id=f"m{n}", name=f"Member {n}", email=f"m{n}@example.com"))
            await store.join_sacco(sacco.id, f"m{n}")

        sacco = await saccos.get_sacco(sacco.id)
        members = await saccos.members(sacco)

        assert len(members) == sacco.member_count == 35
        assert members[29].name == "Member 28"
        assert members[30].id == "m29"
        assert members[30].name == ""


class TestAssistantFlow:
    """Tests for the AI features."""

    @pytest.mark.asyncio
    async def test_ask_advisor_uses_fallbacks(self, assistant, flows, store):
        """Test empty profile fields fall back to defaults."""
        await store.create_user(UserProfile(id="u9"))

        answer = await assistant.ask_advisor("u9", "How do I start?")

        sent = flows.financial_advice.await_args.args[0]
        assert answer == "Save early."
        assert sent.user_data.age == 25
        assert sent.user_data.income == 50000
        assert sent.user_data.saving_plan == "monthly"
        assert sent.user_data.total_savings == 0

    @pytest.mark.asyncio
    async def test_ask_advisor_without_profile(self, assistant, flows):
        """Test a missing profile gets the onboarding message."""
        assert await assistant.ask_advisor("ghost", "Hi") == ADVISOR_NO_PROFILE
        flows.financial_advice.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ask_advisor_failure(self, assistant, flows, member, store):
        """Test model failures become an apology."""
        flows.financial_advice.side_effect = FlowError("financial_advice", "down")

        assert await assistant.ask_advisor("u1", "Hi") == ADVISOR_APOLOGY
        assert AuditEventType.AI_FLOW_FAILED in await _event_types(store)
        assert AuditEventType.EXTERNAL_SERVICE_ERROR not in await _event_types(store)

    @pytest.mark.asyncio
    async def test_provider_failure_is_audited(self, assistant, flows, member, store):
        """Test an unreachable model is logged as an external service error."""
        flows.financial_advice.side_effect = FlowError("financial_advice", "quota", provider_failed=True)

        assert await assistant.ask_advisor("u1", "Hi") == ADVISOR_APOLOGY
        events = await _event_types(store)
        assert AuditEventType.AI_FLOW_FAILED in events
        assert AuditEventType.EXTERNAL_SERVICE_ERROR in events

    @pytest.mark.asyncio
    async def test_investment_tips(self, assistant, flows, member):
        """Test tips use the onboarded profile."""
        tips = await assistant.investment_tips("u1")

        sent = flows.investment_tips.await_args.args[0]
        assert tips.startswith("- Bonds")
        assert sent.age == 30
        assert sent.saving_plan == SavingPlan.MONTHLY

    @pytest.mark.asyncio
    async def test_investment_tips_need_age_and_income(self, assistant, flows, store):
        """Test an incomplete profile is asked to finish settings."""
        await store.create_user(UserProfile(id="u9", age=30))

        assert await assistant.investment_tips("u9") == TIPS_NEED_PROFILE
        flows.investment_tips.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_daily_tip_cached(self, assistant, flows):
        """Test one model call per day."""
        assert await assistant.daily_tip(today=TODAY) == "Track every shilling."
        assert await assistant.daily_tip(today=TODAY) == "Track every shilling."
        flows.daily_tip.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_daily_tip_failure(self, assistant, flows):
        """Test a failed tip shows the fallback text."""
        flows.daily_tip.side_effect = FlowError("daily_tip", "down")
        assert await assistant.daily_tip(today=TODAY) == TIP_FALLBACK

    @pytest.mark.asyncio
    async def test_budget_warning(self, assistant, transactions, flows, member):
        """Test transactions are passed to the overspending check."""
        await transactions.record_transaction("u1", _transaction(9000, kind="withdrawal"))

        warning = await assistant.budget_warning("u1", now=NOW)

        sent = flows.budget_overspending_warning.await_args.args[0]
        assert warning.is_overspending is True
        assert sent.income == 600000
        assert [t.amount for t in sent.transactions] == [9000]

    @pytest.mark.asyncio
    async def test_budget_warning_without_income(self, assistant, flows, store):
        """Test no income means no warning."""
        await store.create_user(UserProfile(id="u9"))
        assert await assistant.budget_warning("u9") is None
        flows.budget_overspending_warning.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_budget_warning_failure(self, assistant, flows, member):
        """Test a failed check shows nothing."""
        flows.budget_overspending_warning.side_effect = FlowError("budget_overspending_warning", "x")
        assert await assistant.budget_warning("u1", now=NOW) is None

    @pytest.mark.asyncio
    async def test_predict_goal(self, assistant, flows, member):
        """Test the goal prediction input."""
        prediction = await assistant.predict_goal("u1", 1000000, "2025-12-31", now=NOW)

        sent = flows.predict_goal.await_args.args[0]
        assert prediction.will_meet_goal is True
        assert sent.total_savings == 10000
        assert sent.goal_deadline == "2025-12-31"


class TestAdminFlow:
    """Tests for the admin dashboard."""

    @pytest.mark.asyncio
    async def test_non_admin_denied(self, admin, member):
        """Test every admin operation checks the role."""
        with pytest.raises(PermissionDeniedError):
            await admin.list_users("u1")
        with pytest.raises(PermissionDeniedError):
            await admin.toggle_freeze("u1", "u1")

    @pytest.mark.asyncio
    async def test_toggle_freeze(self, admin, member, store):
        """Test freezing and unfreezing a user."""
        await store.create_user(UserProfile(id="u2", name="Kato"))
        await store.grant_admin("u1")

        assert await admin.toggle_freeze("u1", "u2") is True
        assert (await store.get_user("u2")).is_frozen is True
        assert await admin.toggle_freeze("u1", "u2") is False

    @pytest.mark.asyncio
    async def test_lists(self, admin, member, store, saccos):
        """Test admins see all users and SACCOs."""
        await store.grant_admin("u1")
        await saccos.create_sacco("u1", {"name": "Boda Savers"})

        assert [u.id for u in await admin.list_users("u1")] == ["u1"]
        assert len(await admin.list_saccos("u1")) == 1


class TestAppComponents:
    """Tests for the component factory."""

    def test_in_memory_components(self, flows):
        """Test the factory wires every flow without Firestore."""
        components = create_app_components(use_storage=False, flows=flows)

        assert isinstance(components, AppComponents)
        assert isinstance(components.accounts, AccountFlow)
        assert isinstance(components.admin, AdminFlow)

    @pytest.mark.asyncio
    async def test_in_memory_components_share_storage(self, flows):
        """Test a signed-up user can record a transaction."""
        components = create_app_components(use_storage=False, flows=flows)
        profile = await components.accounts.sign_up(_signup())

        await components.transactions.record_transaction(profile.id, _transaction(1000))

        listed = await components.transactions.list_transactions(profile.id)
        assert len(listed) == 1

    @pytest.mark.asyncio
    async def test_components_without_gemini_key(self, monkeypatch):
        """Test the app starts without a Gemini key and AI pages degrade."""
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setattr(
            "pesa_path.orchestrator.FinancialFlows",
            lambda: GeminiSettings(_env_file=None),
        )
        components = create_app_components(use_storage=False)
        profile = await components.accounts.sign_up(_signup())

        assert await components.assistant.ask_advisor(profile.id, "Hi") == ADVISOR_APOLOGY
        assert await components.assistant.daily_tip(date(2025, 1, 31)) == TIP_FALLBACK
