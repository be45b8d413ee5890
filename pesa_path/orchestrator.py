"""
Main Orchestrator for Pesa Path

This module ties together all the components and defines the
application operations behind every page:
1. Accounts (sign up / log in / external sign-in → onboarding → settings)
2. Transactions (form → validate → atomic write → audit)
3. Money Planner (categories per period, spend summary, assignment)
4. SACCOs (create, join, deposit from savings, members)
5. Assistant (AI advice, tips, overspending warning, goal prediction)
6. Admin (user freeze, overview)

DESIGN DECISION: The orchestrator enforces the boundaries:
- No write happens before the form is validated
- Balances only move inside an atomic storage operation
- AI output is advice only; it never triggers a write
- Every step is audited

This is the "glue" that ensures the system works correctly
even when individual components might behave unexpectedly.
"""

from datetime import date, datetime, timezone
from typing import Any, NamedTuple, Optional
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

import structlog
from pydantic import ValidationError

from pesa_path.audit import AuditLogger, create_correlation_id
from pesa_path.config import get_settings
from pesa_path.flows import (
    AdviceUserData,
    BudgetWarningInput,
    BudgetWarningOutput,
    FinancialAdviceInput,
    FinancialFlows,
    FlowError,
    FlowTransaction,
    GoalPredictionInput,
    GoalPredictionOutput,
    InvestmentTipsInput,
)
from pesa_path.insights import (
    ChartDay,
    DailyTipCache,
    OverviewCard,
    cash_flow_chart,
    overview_cards,
)
from pesa_path.insights import recent_transactions as latest_transactions
from pesa_path.models.budget import (
    BudgetCategory,
    BudgetPeriod,
    BudgetSummary,
    TransactionAssignment,
)
from pesa_path.models.sacco import Sacco, SaccoMember
from pesa_path.models.transaction import Transaction
from pesa_path.models.user import (
    ExternalIdentity,
    SavingPlan,
    UserProfile,
)
from pesa_path.models.validation import FormResult
from pesa_path.planner import period_key, summarize_budget, unassigned_withdrawals
from pesa_path.services.auth import (
    AccountExistsError,
    AuthenticationError,
    AuthError,
    PasswordHasher,
)
from pesa_path.services.storage import (
    AuditStorageInterface,
    BudgetStorageInterface,
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
    TransactionStorageInterface,
    UserStorageInterface,
)
from pesa_path.validation import FormValidationError, FormValidator


logger = structlog.get_logger()

ADVISOR_GREETING = (
    "Hello! I'm your AI financial assistant. "
    "How can I help you achieve your financial goals today?"
)
ADVISOR_NO_PROFILE = "User data not available. Please complete onboarding."
ADVISOR_APOLOGY = "I'm sorry, I couldn't process your request right now. Please try again later."
TIPS_NEED_PROFILE = "Please complete your profile in settings to get personalized tips."

# Used when an onboarded field is still empty
DEFAULT_ADVICE_AGE = 25
DEFAULT_ADVICE_INCOME = 50000


class PermissionDeniedError(Exception):
    """The user is not allowed to perform this action."""
    pass


class AccountFrozenError(Exception):
    """A frozen account tried to move money."""
    pass


class NotAMemberError(Exception):
    """Only SACCO members can deposit."""
    pass


def _require_valid(result: FormResult) -> Any:
    if result.has_errors:
        raise FormValidationError(result)
    return result.value


def _tz() -> ZoneInfo:
    return ZoneInfo(get_settings().app.timezone)


def _today() -> date:
    return datetime.now(_tz()).date()


def _to_flow_transactions(
    transactions: list[Transaction],
    now: datetime,
) -> list[FlowTransaction]:
    # Pending server timestamps are about to be "now"
    return [
        FlowTransaction(type=t.type, amount=t.amount, timestamp=t.timestamp or now)
        for t in transactions
    ]


async def _require_user(users: UserStorageInterface, user_id: str) -> UserProfile:
    profile = await users.get_user(user_id)
    if profile is None:
        raise NotFoundError(f"User not found: {user_id}")
    return profile


class AccountFlow:
    """
    Orchestrates sign-up, sign-in, onboarding and account settings.

    Two ways in:
    1. Email/password → bcrypt hash on the user document
    2. External identity (Google) → profile created on first sign-in

    Either way a new profile starts with zeroed finance fields and must
    finish onboarding (age, income, saving plan) before the dashboard.
    """

    def __init__(
        self,
        user_storage: UserStorageInterface,
        validator: Optional[FormValidator] = None,
        hasher: Optional[PasswordHasher] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._users = user_storage
        self._validator = validator or FormValidator()
        self._hasher = hasher or PasswordHasher()
        self._audit_logger = audit_logger

    async def sign_up(self, data: dict[str, Any]) -> UserProfile:
        """
        Create an email/password account.

        Raises:
            FormValidationError: The form has errors.
            AccountExistsError: The email is already registered.
        """
        form = _require_valid(self._validator.validate_signup(data))
        email = form.email.lower()

        if await self._users.get_user_by_email(email):
            raise AccountExistsError("An account with this email already exists.")

        profile = UserProfile(
            id=uuid4().hex,
            name=form.name,
            email=email,
            terms_accepted=True,
            password_hash=self._hasher.hash(form.password),
        )
        try:
            await self._users.create_user(profile)
        except DuplicateError as e:
            raise AccountExistsError("An account with this email already exists.") from e

        if self._audit_logger:
            await self._audit_logger.log_signed_up(profile.id, provider="password")

        return profile

    async def log_in(self, data: dict[str, Any]) -> UserProfile:
        """
        Check email and password.

        The same error is raised for an unknown email and a wrong
        password.
        """
        form = _require_valid(self._validator.validate_login(data))
        email = form.email.lower()

        profile = await self._users.get_user_by_email(email)
        if profile is None or not self._hasher.verify(form.password, profile.password_hash):
            if self._audit_logger:
                reason = "unknown_email" if profile is None else "wrong_password"
                await self._audit_logger.log_login_failed(email, reason)
            raise AuthenticationError("Invalid email or password.")

        if self._audit_logger:
            await self._audit_logger.log_logged_in(profile.id, provider="password")

        return profile

    async def sign_in_with_identity(
        self,
        identity: ExternalIdentity,
    ) -> tuple[UserProfile, bool]:
        """
        Sign in with an identity asserted by an external provider.

        One account per email: a provider identity whose email already
        belongs to a profile signs into that profile.

        Returns:
            (profile, is_new). New profiles still need onboarding.
        """
        profile = await self._users.get_user(identity.uid)
        if profile is None and identity.email:
            profile = await self._users.get_user_by_email(identity.email)
        if profile is not None:
            if self._audit_logger:
                await self._audit_logger.log_logged_in(profile.id, provider="google")
            return profile, False

        profile = UserProfile(
            id=identity.uid,
            name=identity.name,
            email=(identity.email or "").lower(),
            photo_url=identity.photo_url,
        )
        await self._users.create_user(profile)

        if self._audit_logger:
            await self._audit_logger.log_signed_up(profile.id, provider="google")

        return profile, True

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        return await self._users.get_user(user_id)

    async def needs_onboarding(self, user_id: str) -> bool:
        profile = await self._users.get_user(user_id)
        return profile is None or profile.needs_onboarding

    async def complete_onboarding(self, user_id: str, data: dict[str, Any]) -> UserProfile:
        form = _require_valid(self._validator.validate_onboarding(data))

        await self._users.update_user(user_id, {
            "savingPlan": form.saving_plan.value,
            "age": form.age,
            "income": form.income,
        })

        if self._audit_logger:
            await self._audit_logger.log_onboarding_completed(user_id, form.saving_plan.value)

        return await _require_user(self._users, user_id)

    async def update_profile(self, user_id: str, data: dict[str, Any]) -> UserProfile:
        form = _require_valid(self._validator.validate_profile(data))

        await self._users.update_user(user_id, {
            "name": form.name,
            "photoURL": form.photo_url,
        })

        if self._audit_logger:
            await self._audit_logger.log_profile_updated(user_id, ["name", "photoURL"])

        return await _require_user(self._users, user_id)

    async def change_password(self, user_id: str, data: dict[str, Any]) -> None:
        """
        Change the password after re-checking the current one.

        Raises:
            AuthError: The account signs in through an external provider.
            AuthenticationError: The current password is wrong.
        """
        form = _require_valid(self._validator.validate_password_change(data))
        profile = await _require_user(self._users, user_id)

        if not profile.password_hash:
            raise AuthError("This account signs in with Google and has no password to change.")
        if not self._hasher.verify(form.current_password, profile.password_hash):
            raise AuthenticationError("Please check your current password and try again.")

        await self._users.update_user(user_id, {
            "passwordHash": self._hasher.hash(form.new_password),
        })

        if self._audit_logger:
            await self._audit_logger.log_password_changed(user_id)

    async def is_admin(self, user_id: str) -> bool:
        return await self._users.is_admin(user_id)

    async def grant_admin(self, user_id: str) -> None:
        """Self-service "Become Admin" from the settings page."""
        await self._users.grant_admin(user_id)

        if self._audit_logger:
            await self._audit_logger.log_admin_granted(user_id, granted_by=user_id)


class TransactionFlow:
    """
    Orchestrates deposits and withdrawals, and the dashboard built on them.

    Recording a transaction and moving `totalSavings` is ONE atomic
    storage operation. Frozen accounts are refused before anything is
    written.
    """

    def __init__(
        self,
        user_storage: UserStorageInterface,
        transaction_storage: TransactionStorageInterface,
        validator: Optional[FormValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._users = user_storage
        self._transactions = transaction_storage
        self._validator = validator or FormValidator()
        self._audit_logger = audit_logger
        self._settings = get_settings().app

    async def record_transaction(
        self,
        user_id: str,
        data: dict[str, Any],
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Transaction, list[str]]:
        """
        Validate and record a transaction.

        Returns:
            (transaction, warnings). Warnings never block the write.

        Raises:
            FormValidationError: The form has errors.
            AccountFrozenError: The account is frozen.
        """
        correlation_id = correlation_id or create_correlation_id()
        profile = await _require_user(self._users, user_id)

        if profile.is_frozen:
            raise AccountFrozenError("Your account is frozen. Contact support to make transactions.")

        result = self._validator.validate_transaction(data, balance=profile.total_savings)
        form = _require_valid(result)

        try:
            transaction = await self._transactions.record_transaction(user_id, form)
        except Exception as e:
            if self._audit_logger:
                await self._audit_logger.log_error(
                    error_type="transaction_write_failed",
                    error_message=str(e),
                    details={"user_id": user_id},
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_transaction_recorded(
                user_id=user_id,
                transaction_id=transaction.id,
                transaction_type=transaction.type.value,
                amount=transaction.amount,
                correlation_id=correlation_id,
            )

        return transaction, result.warnings

    async def list_transactions(
        self,
        user_id: str,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        return await self._transactions.list_transactions(user_id, limit=limit)

    async def recent_transactions(self, user_id: str) -> list[Transaction]:
        limit = self._settings.recent_transactions_limit
        transactions = await self._transactions.list_transactions(user_id, limit=limit)
        return latest_transactions(transactions, limit=limit)

    async def dashboard(
        self,
        user_id: str,
        today: Optional[date] = None,
    ) -> tuple[list[OverviewCard], list[ChartDay], list[Transaction]]:
        """
        Everything on the dashboard that comes from storage.

        Returns:
            (overview_cards, chart_days, recent_transactions)
        """
        today = today or _today()
        profile = await self._users.get_user(user_id)
        streak = await self._users.get_streak(user_id)
        transactions = await self._transactions.list_transactions(user_id)

        cards = overview_cards(profile, streak, self._settings.currency)
        chart = cash_flow_chart(transactions, today, days=self._settings.chart_days, tz=_tz())
        recent = latest_transactions(transactions, limit=self._settings.recent_transactions_limit)
        return cards, chart, recent


class PlannerFlow:
    """
    Orchestrates the Money Planner.

    Categories belong to the period they were created in; the period
    key is computed here from today's date in the app timezone.
    """

    def __init__(
        self,
        user_storage: UserStorageInterface,
        transaction_storage: TransactionStorageInterface,
        budget_storage: BudgetStorageInterface,
        validator: Optional[FormValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._users = user_storage
        self._transactions = transaction_storage
        self._budgets = budget_storage
        self._validator = validator or FormValidator()
        self._audit_logger = audit_logger

    async def add_category(
        self,
        user_id: str,
        data: dict[str, Any],
        period: BudgetPeriod,
        today: Optional[date] = None,
    ) -> BudgetCategory:
        form = _require_valid(self._validator.validate_category(data))
        key = period_key(today or _today(), period)

        category = await self._budgets.add_category(user_id, form, key)

        if self._audit_logger:
            await self._audit_logger.log_category_added(
                user_id=user_id,
                category_id=category.id,
                name=category.name,
                budgeted=category.budgeted,
                period_key=key,
            )

        return category

    async def delete_category(self, user_id: str, category_id: str) -> None:
        await self._budgets.delete_category(user_id, category_id)

        if self._audit_logger:
            await self._audit_logger.log_category_deleted(user_id, category_id)

    async def budget_summary(
        self,
        user_id: str,
        period: BudgetPeriod,
        today: Optional[date] = None,
    ) -> BudgetSummary:
        today = today or _today()
        profile = await self._users.get_user(user_id)
        categories = await self._budgets.list_categories(user_id, period_key(today, period))
        transactions = await self._transactions.list_transactions(user_id)

        return summarize_budget(
            income=profile.income if profile else 0,
            categories=categories,
            transactions=transactions,
            period=period,
            today=today,
            tz=_tz(),
        )

    async def unassigned_withdrawals(
        self,
        user_id: str,
        period: BudgetPeriod,
        today: Optional[date] = None,
    ) -> list[Transaction]:
        transactions = await self._transactions.list_transactions(user_id)
        return unassigned_withdrawals(transactions, period, today or _today(), tz=_tz())

    async def assign_transactions(
        self,
        user_id: str,
        assignments: list[TransactionAssignment],
    ) -> int:
        """
        Tag withdrawals with categories in one batch.

        Returns the number of transactions updated; 0 (and no write)
        when no row has a category.
        """
        if not any(a.category_id for a in assignments):
            return 0

        count = await self._transactions.assign_categories(user_id, assignments)

        if self._audit_logger:
            await self._audit_logger.log_transactions_assigned(user_id, count)

        return count


class SaccoFlow:
    """
    Orchestrates SACCO savings circles.

    A deposit moves money out of the member's own savings:
    user `totalSavings` down, SACCO `currentTotal` up, and a withdrawal
    on the member's history, all in ONE atomic storage operation.
    """

    def __init__(
        self,
        user_storage: UserStorageInterface,
        sacco_storage: SaccoStorageInterface,
        validator: Optional[FormValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._users = user_storage
        self._saccos = sacco_storage
        self._validator = validator or FormValidator()
        self._audit_logger = audit_logger
        self._settings = get_settings().app

    async def _require_sacco(self, sacco_id: str) -> Sacco:
        sacco = await self._saccos.get_sacco(sacco_id)
        if sacco is None:
            raise NotFoundError(f"SACCO not found: {sacco_id}")
        return sacco

    async def create_sacco(self, user_id: str, data: dict[str, Any]) -> Sacco:
        """The creator becomes admin, sole member and first in rotation."""
        form = _require_valid(self._validator.validate_sacco(data))

        sacco = await self._saccos.create_sacco(user_id, form)

        if self._audit_logger:
            await self._audit_logger.log_sacco_created(user_id, sacco.id, sacco.name, sacco.goal)

        return sacco

    async def join_sacco(self, user_id: str, sacco_id: str) -> Sacco:
        """Joining a SACCO you already belong to changes nothing."""
        sacco = await self._require_sacco(sacco_id)
        if sacco.is_member(user_id):
            return sacco

        await self._saccos.join_sacco(sacco_id, user_id)

        if self._audit_logger:
            await self._audit_logger.log_sacco_joined(user_id, sacco_id)

        return await self._require_sacco(sacco_id)

    async def list_saccos(self) -> list[Sacco]:
        return await self._saccos.list_saccos()

    async def get_sacco(self, sacco_id: str) -> Optional[Sacco]:
        return await self._saccos.get_sacco(sacco_id)

    async def deposit(
        self,
        user_id: str,
        sacco_id: str,
        data: dict[str, Any],
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Transaction, list[str]]:
        """
        Deposit from the member's savings into the SACCO.

        Returns:
            (transaction, warnings). The transaction is the withdrawal
            written to the member's history.

        Raises:
            NotAMemberError: Only members can deposit.
            AccountFrozenError: The account is frozen.
            FormValidationError: Amount missing or below the minimum.
        """
        correlation_id = correlation_id or create_correlation_id()
        sacco = await self._require_sacco(sacco_id)

        if not sacco.is_member(user_id):
            raise NotAMemberError("You must be a member to deposit.")

        profile = await _require_user(self._users, user_id)
        if profile.is_frozen:
            raise AccountFrozenError("Your account is frozen. Contact support to make deposits.")

        result = self._validator.validate_sacco_deposit(data, balance=profile.total_savings)
        form = _require_valid(result)

        try:
            transaction = await self._saccos.deposit(sacco, user_id, form.amount)
        except Exception as e:
            if self._audit_logger:
                await self._audit_logger.log_error(
                    error_type="sacco_deposit_failed",
                    error_message=str(e),
                    details={"user_id": user_id, "sacco_id": sacco_id},
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_sacco_deposit(
                user_id=user_id,
                sacco_id=sacco_id,
                amount=form.amount,
                transaction_id=transaction.id,
                correlation_id=correlation_id,
            )

        return transaction, result.warnings

    async def members(self, sacco: Sacco) -> list[SaccoMember]:
        """
        Member rows for the detail page, in membership order.

        Every member gets a row, but only the first `member_lookup_limit`
        ids are looked up. The rest, and ids without a user document, are
        placeholders with an empty name.
        """
        lookup_ids = sacco.member_ids[:self._settings.member_lookup_limit]
        profiles = {p.id: p for p in await self._users.get_users(lookup_ids)}

        members = []
        for member_id in sacco.member_ids:
            profile = profiles.get(member_id)
            if profile is None:
                members.append(SaccoMember(id=member_id))
            else:
                members.append(SaccoMember(
                    id=member_id,
                    name=profile.name,
                    photo_url=profile.photo_url,
                ))
        return members


class AssistantFlow:
    """
    Orchestrates the AI features.

    CRITICAL BOUNDARIES:
    1. Profile and transactions are read from storage here
    2. Flows only see the slice of data they need
    3. Flow output is shown to the user, never written back

    A failing model never breaks a page: each operation either falls
    back to a fixed message or returns nothing.
    """

    def __init__(
        self,
        user_storage: UserStorageInterface,
        transaction_storage: TransactionStorageInterface,
        flows: Optional[FinancialFlows] = None,
        tip_cache: Optional[DailyTipCache] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._users = user_storage
        self._transactions = transaction_storage
        self._flows = flows
        self._tip_cache = tip_cache or DailyTipCache()
        self._audit_logger = audit_logger

    async def _flow_failed(self, error: FlowError, user_id: Optional[str] = None) -> None:
        logger.warning("flow_failed", flow=error.flow_name, error=str(error))
        if self._audit_logger:
            await self._audit_logger.log_flow_failed(error.flow_name, str(error), user_id)
            if error.provider_failed:
                await self._audit_logger.log_external_service_error("gemini", str(error))

    def _get_flows(self) -> FinancialFlows:
        # Built on first use so the app still starts without a Gemini key
        if self._flows is None:
            try:
                self._flows = FinancialFlows()
            except ValidationError as e:
                raise FlowError("gemini", f"AI features are not configured: {e}", provider_failed=True)
        return self._flows

    async def ask_advisor(self, user_id: str, query: str) -> str:
        """
        Answer a chat message using the user's profile.

        Empty profile fields fall back to age 25, income 50,000, a
        monthly plan and no savings.
        """
        profile = await self._users.get_user(user_id)
        if profile is None:
            return ADVISOR_NO_PROFILE

        user_data = AdviceUserData(
            age=profile.age or DEFAULT_ADVICE_AGE,
            income=profile.income or DEFAULT_ADVICE_INCOME,
            saving_plan=(profile.saving_plan or SavingPlan.MONTHLY).value,
            total_savings=profile.total_savings or 0,
        )

        try:
            output = await self._get_flows().financial_advice(
                FinancialAdviceInput(query=query, user_data=user_data)
            )
        except FlowError as e:
            await self._flow_failed(e, user_id)
            return ADVISOR_APOLOGY

        return output.advice

    async def investment_tips(self, user_id: str) -> str:
        """
        Personalised investment tips in markdown.

        Needs age and income from onboarding; without them the user is
        asked to complete their profile instead.
        """
        profile = await self._users.get_user(user_id)
        if profile is None or not profile.age or not profile.income:
            return TIPS_NEED_PROFILE

        try:
            output = await self._get_flows().investment_tips(InvestmentTipsInput(
                saving_plan=profile.saving_plan or SavingPlan.MONTHLY,
                age=profile.age,
                income=profile.income,
            ))
        except FlowError as e:
            await self._flow_failed(e, user_id)
            raise

        return output.tips

    async def daily_tip(self, today: Optional[date] = None) -> str:
        async def fetch() -> str:
            return (await self._get_flows().daily_tip()).tip

        return await self._tip_cache.get(today or _today(), fetch)

    async def budget_warning(
        self,
        user_id: str,
        now: Optional[datetime] = None,
    ) -> Optional[BudgetWarningOutput]:
        """None when there is no income to compare against, or the check failed."""
        profile = await self._users.get_user(user_id)
        if profile is None or not profile.income:
            return None

        now = now or datetime.now(timezone.utc)
        transactions = await self._transactions.list_transactions(user_id)

        try:
            return await self._get_flows().budget_overspending_warning(
                BudgetWarningInput(
                    income=profile.income,
                    transactions=_to_flow_transactions(transactions, now),
                ),
                now=now,
            )
        except FlowError as e:
            await self._flow_failed(e, user_id)
            return None

    async def predict_goal(
        self,
        user_id: str,
        saving_goal: float,
        goal_deadline: str,
        now: Optional[datetime] = None,
    ) -> GoalPredictionOutput:
        profile = await _require_user(self._users, user_id)
        transactions = await self._transactions.list_transactions(user_id)

        try:
            return await self._get_flows().predict_goal(GoalPredictionInput(
                income=profile.income,
                total_savings=profile.total_savings,
                saving_goal=saving_goal,
                goal_deadline=goal_deadline,
                transactions=_to_flow_transactions(
                    transactions, now or datetime.now(timezone.utc)
                ),
            ))
        except FlowError as e:
            await self._flow_failed(e, user_id)
            raise


class AdminFlow:
    """
    Orchestrates the admin dashboard.

    Every operation checks the caller's admin role first.
    """

    def __init__(
        self,
        user_storage: UserStorageInterface,
        sacco_storage: SaccoStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._users = user_storage
        self._saccos = sacco_storage
        self._audit_logger = audit_logger

    async def require_admin(self, user_id: str) -> None:
        if not await self._users.is_admin(user_id):
            raise PermissionDeniedError("You do not have permission to view this page.")

    async def list_users(self, admin_id: str) -> list[UserProfile]:
        await self.require_admin(admin_id)
        return await self._users.list_users()

    async def list_saccos(self, admin_id: str) -> list[Sacco]:
        await self.require_admin(admin_id)
        return await self._saccos.list_saccos()

    async def toggle_freeze(self, admin_id: str, user_id: str) -> bool:
        """Flip the user's frozen flag. Returns the new value."""
        await self.require_admin(admin_id)
        profile = await _require_user(self._users, user_id)
        frozen = not profile.is_frozen

        await self._users.set_frozen(user_id, frozen)

        if self._audit_logger:
            await self._audit_logger.log_freeze_toggled(user_id, frozen, admin_id)

        return frozen


class AppComponents(NamedTuple):
    accounts: AccountFlow
    transactions: TransactionFlow
    planner: PlannerFlow
    saccos: SaccoFlow
    assistant: AssistantFlow
    admin: AdminFlow


def create_app_components(
    use_storage: bool = True,
    flows: Optional[FinancialFlows] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to connect to Firestore.
                    Set to False (or leave Firestore unconfigured) to run
                    on the in-memory store.
        flows: AI flows to use. Built from Gemini settings if None.

    Returns:
        AppComponents with one flow per area of the app.
    """
    users = transactions = budgets = saccos = None
    audit_storage: Optional[AuditStorageInterface] = None

    if use_storage:
        try:
            client = FirestoreClient()
            users = FirestoreUserStorage(client)
            transactions = FirestoreTransactionStorage(client)
            budgets = FirestoreBudgetStorage(client)
            saccos = FirestoreSaccoStorage(client)
            audit_storage = FirestoreAuditStorage(client)
        except Exception as e:
            # Storage not configured - continue in memory
            logger.warning("storage_not_configured", error=str(e))
            users = None

    if users is None:
        store = InMemoryStore()
        users = transactions = budgets = saccos = audit_storage = store

    audit_logger = AuditLogger(audit_storage)
    validator = FormValidator()

    return AppComponents(
        accounts=AccountFlow(users, validator=validator, audit_logger=audit_logger),
        transactions=TransactionFlow(
            users, transactions, validator=validator, audit_logger=audit_logger,
        ),
        planner=PlannerFlow(
            users, transactions, budgets, validator=validator, audit_logger=audit_logger,
        ),
        saccos=SaccoFlow(users, saccos, validator=validator, audit_logger=audit_logger),
        assistant=AssistantFlow(users, transactions, flows=flows, audit_logger=audit_logger),
        admin=AdminFlow(users, saccos, audit_logger=audit_logger),
    )
