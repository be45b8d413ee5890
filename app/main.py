"""
Streamlit Frontend for Pesa Path

This is the web app savers use to track their money, plan budgets and
save together in SACCOs.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Every amount shown comes from storage, never from the AI
3. Clear error messages in simple language
4. Visual feedback for all operations
5. No hidden actions

Pages are plain functions; all work goes through the orchestrator flows
so the same rules apply whichever page triggers them.
"""

import asyncio
from datetime import date, timedelta

import streamlit as st

from pesa_path.config import validate_all_settings
from pesa_path.flows import FlowError
from pesa_path.insights import INVESTMENT_OPTIONS, describe_transaction, format_money
from pesa_path.models.budget import BudgetPeriod, TransactionAssignment
from pesa_path.models.transaction import USER_PAYMENT_METHODS, TransactionType
from pesa_path.models.user import ExternalIdentity, SavingPlan, UserProfile
from pesa_path.orchestrator import (
    ADVISOR_GREETING,
    AccountFrozenError,
    AppComponents,
    NotAMemberError,
    PermissionDeniedError,
    create_app_components,
)
from pesa_path.services.auth import AccountExistsError, AuthenticationError, AuthError
from pesa_path.validation import FormValidationError


# Page configuration
st.set_page_config(
    page_title="Pesa Path",
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .warning-box {
        padding: 20px;
        background-color: #fff3cd;
        border-radius: 10px;
        border-left: 5px solid #ffc107;
        margin: 10px 0;
    }
    .info-box {
        padding: 20px;
        background-color: #cce5ff;
        border-radius: 10px;
        border-left: 5px solid #004085;
        margin: 10px 0;
    }
</style>
""", unsafe_allow_html=True)


PAGES = [
    "🏠 Dashboard",
    "💳 Transactions",
    "🤝 SACCOs",
    "📈 Investments",
    "🗓️ Money Planner",
    "⚙️ Settings",
]
ADMIN_PAGE = "🛡️ Admin"
TERMS_PAGE = "📄 Terms"


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components() -> AppComponents:
    """Get or create application components (cached)."""
    try:
        return create_app_components(use_storage=True)
    except Exception as e:
        st.error(f"Failed to initialize: {e}")
        return create_app_components(use_storage=False)


def show_form_errors(error: FormValidationError):
    for issue in error.result.errors:
        st.error(issue.message)


def queue_warnings(warnings: list[str]):
    # Shown after the next rerun
    st.session_state["pending_warnings"] = list(warnings)


def show_pending_warnings():
    for warning in st.session_state.pop("pending_warnings", []):
        st.warning(warning)


def current_user_id():
    return st.session_state.get("user_id")


def sign_out():
    st.session_state.pop("user_id", None)
    st.session_state.pop("chat", None)
    if getattr(st.user, "is_logged_in", False):
        st.logout()


def main():
    """Main application entry point."""
    components = get_components()

    # Google sign-in comes back through Streamlit's OIDC session
    if not current_user_id() and getattr(st.user, "is_logged_in", False):
        identity = ExternalIdentity(
            uid=st.user.get("sub"),
            name=st.user.get("name"),
            email=st.user.get("email"),
            photo_url=st.user.get("picture"),
        )
        profile, _ = run_async(components.accounts.sign_in_with_identity(identity))
        st.session_state.user_id = profile.id

    user_id = current_user_id()
    if not user_id:
        if st.sidebar.radio("Navigate to:", ["🔑 Login", TERMS_PAGE]) == TERMS_PAGE:
            render_terms_page()
        else:
            render_login_page(components)
        return

    profile = run_async(components.accounts.get_profile(user_id))
    if profile is None:
        sign_out()
        st.rerun()

    if profile.needs_onboarding:
        render_onboarding_page(components, profile)
        return

    is_admin = run_async(components.accounts.is_admin(user_id))

    # Sidebar navigation
    st.sidebar.title("💸 Pesa Path")
    st.sidebar.markdown(f"Signed in as **{profile.display_name}**")
    st.sidebar.markdown("---")

    pages = PAGES + ([ADMIN_PAGE] if is_admin else []) + [TERMS_PAGE]
    page = st.sidebar.radio("Navigate to:", pages, index=0)

    st.sidebar.markdown("---")
    if st.sidebar.button("🚪 Sign out"):
        sign_out()
        st.rerun()

    show_pending_warnings()

    # Route to appropriate page
    if page == "🏠 Dashboard":
        render_dashboard_page(components, profile)
    elif page == "💳 Transactions":
        render_transactions_page(components, profile)
    elif page == "🤝 SACCOs":
        render_saccos_page(components, profile)
    elif page == "📈 Investments":
        render_investments_page(components, profile)
    elif page == "🗓️ Money Planner":
        render_planner_page(components, profile)
    elif page == "⚙️ Settings":
        render_settings_page(components, profile, is_admin)
    elif page == ADMIN_PAGE:
        render_admin_page(components, profile)
    elif page == TERMS_PAGE:
        render_terms_page()


def render_login_page(components: AppComponents):
    """Render the login / sign-up page."""
    st.title("💸 Pesa Path")
    st.markdown("Your path to financial freedom.")

    login_tab, signup_tab = st.tabs(["Login", "Sign Up"])

    with login_tab:
        with st.form("login"):
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Login", type="primary")

        if submitted:
            try:
                profile = run_async(components.accounts.log_in({
                    "email": email,
                    "password": password,
                }))
                st.session_state.user_id = profile.id
                st.rerun()
            except FormValidationError as e:
                show_form_errors(e)
            except AuthenticationError as e:
                st.error(f"Login Failed: {e}")

    with signup_tab:
        with st.form("signup"):
            name = st.text_input("Full Name")
            email = st.text_input("Email", key="signup_email")
            password = st.text_input("Password", type="password", key="signup_password")
            confirm = st.text_input("Confirm Password", type="password")
            terms = st.checkbox("I accept the terms and conditions")
            submitted = st.form_submit_button("Create Account", type="primary")

        if submitted:
            try:
                profile = run_async(components.accounts.sign_up({
                    "name": name,
                    "email": email,
                    "password": password,
                    "confirm_password": confirm,
                    "terms": terms,
                }))
                st.session_state.user_id = profile.id
                st.toast("Account created!")
                st.rerun()
            except FormValidationError as e:
                show_form_errors(e)
            except AccountExistsError as e:
                st.error(f"Sign Up Failed: {e}")

    st.markdown("---")
    if st.button("Continue with Google"):
        st.login("google")


def render_onboarding_page(components: AppComponents, profile: UserProfile):
    """Render the first-run questionnaire."""
    st.title(f"👋 Welcome, {profile.display_name}!")
    st.markdown("Tell us a little about yourself so we can tailor your advice.")

    with st.form("onboarding"):
        saving_plan = st.radio(
            "How often do you plan to save?",
            options=list(SavingPlan),
            index=list(SavingPlan).index(SavingPlan.MONTHLY),
            format_func=lambda p: p.value.title(),
            horizontal=True,
        )
        age = st.number_input("Age", min_value=0, max_value=120, value=0, step=1)
        income = st.number_input("Monthly income", min_value=0.0, value=0.0, step=1000.0)
        submitted = st.form_submit_button("Finish", type="primary")

    if submitted:
        try:
            run_async(components.accounts.complete_onboarding(profile.id, {
                "saving_plan": saving_plan,
                "age": int(age) or None,
                "income": income or None,
            }))
            st.toast("Profile saved!")
            st.rerun()
        except FormValidationError as e:
            show_form_errors(e)


def render_dashboard_page(components: AppComponents, profile: UserProfile):
    """Render the dashboard."""
    st.title(f"🏠 Welcome back, {profile.display_name}!")

    warning = run_async(components.assistant.budget_warning(profile.id))
    if warning and warning.is_overspending:
        st.markdown(f"""
        <div class="warning-box">
            <h4>⚠️ Spending Alert</h4>
            <p>{warning.warning_message}</p>
        </div>
        """, unsafe_allow_html=True)

    cards, chart, recent = run_async(components.transactions.dashboard(profile.id))

    for column, card in zip(st.columns(len(cards)), cards):
        with column:
            st.metric(card.title, card.value)
            if card.caption:
                st.caption(card.caption)

    with st.spinner("Loading today's tip..."):
        tip = run_async(components.assistant.daily_tip())
    st.markdown(f"""
    <div class="info-box">
        <h4>💡 Daily Tip</h4>
        <p>{tip}</p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2 = st.columns([3, 2])

    with col1:
        st.subheader("📊 Deposits vs. Withdrawals")
        st.bar_chart(
            {
                "Day": [row.label for row in chart],
                "Deposits": [row.deposits for row in chart],
                "Withdrawals": [row.withdrawals for row in chart],
            },
            x="Day",
        )

    with col2:
        st.subheader("🕒 Recent Transactions")
        if not recent:
            st.info("No transactions yet.")
        for transaction in recent:
            render_transaction_row(transaction)

    render_assistant_chat(components, profile)


def render_transaction_row(transaction):
    headline, subtitle = describe_transaction(transaction)
    sign = "+" if transaction.is_deposit else "-"
    when = transaction.timestamp.strftime("%b %d, %Y") if transaction.timestamp else "Just now"

    left, right = st.columns([3, 1])
    with left:
        st.markdown(f"**{headline}**")
        st.caption(f"{subtitle} · {when}" if subtitle else when)
    with right:
        st.markdown(f"**{sign}{format_money(transaction.amount)}**")


def render_assistant_chat(components: AppComponents, profile: UserProfile):
    st.markdown("---")
    st.subheader("🤖 AI Financial Assistant")

    if "chat" not in st.session_state:
        st.session_state.chat = [("🤖", ADVISOR_GREETING)]

    for speaker, content in st.session_state.chat:
        st.markdown(f"**{speaker}** {content}")

    query = st.text_input(
        "Your question:",
        placeholder="e.g., How much should I save each month?",
        help="Ask about saving, budgeting or investing",
    )

    if st.button("💬 Ask", type="primary") and query:
        with st.spinner("Thinking..."):
            answer = run_async(components.assistant.ask_advisor(profile.id, query))
        st.session_state.chat.append(("🧑", query))
        st.session_state.chat.append(("🤖", answer))
        st.rerun()


def render_transactions_page(components: AppComponents, profile: UserProfile):
    """Render the transactions page."""
    st.title("💳 Transactions")
    st.markdown(f"Current balance: **{format_money(profile.total_savings)}**")

    if profile.is_frozen:
        st.error("Your account is frozen. Contact support to make transactions.")

    with st.expander("➕ New Transaction", expanded=False):
        with st.form("transaction"):
            transaction_type = st.radio(
                "Type",
                options=list(TransactionType),
                format_func=lambda t: t.value.title(),
                horizontal=True,
            )
            amount = st.number_input("Amount", min_value=0.0, step=1000.0)
            method = st.selectbox(
                "Payment method",
                options=list(USER_PAYMENT_METHODS),
                format_func=lambda m: m.value,
            )
            phone_number = st.text_input("Phone number")
            reason = st.text_input("Reason (optional)")
            submitted = st.form_submit_button("Save Transaction", type="primary")

        if submitted:
            try:
                transaction, warnings = run_async(components.transactions.record_transaction(
                    profile.id,
                    {
                        "amount": amount or None,
                        "type": transaction_type,
                        "method": method,
                        "phone_number": phone_number,
                        "reason": reason,
                    },
                ))
                queue_warnings(warnings)
                st.toast(f"{transaction.type.value.title()} of {format_money(transaction.amount)} saved")
                st.rerun()
            except FormValidationError as e:
                show_form_errors(e)
            except AccountFrozenError as e:
                st.error(str(e))
            except Exception as e:
                st.error(f"Error saving transaction: {str(e)}")

    st.markdown("---")
    transactions = run_async(components.transactions.list_transactions(profile.id))
    if not transactions:
        st.info("📋 Your transactions will appear here once you add them.")
    for transaction in transactions:
        render_transaction_row(transaction)


def render_saccos_page(components: AppComponents, profile: UserProfile):
    """Render the SACCO list, or one SACCO when selected."""
    sacco_id = st.session_state.get("sacco_id")
    if sacco_id:
        render_sacco_detail(components, profile, sacco_id)
        return

    st.title("🤝 SACCOs")
    st.markdown("Save together toward a shared goal.")

    with st.expander("➕ Create SACCO"):
        with st.form("create_sacco"):
            name = st.text_input("SACCO name")
            goal = st.number_input("Goal", min_value=0.0, value=1_000_000.0, step=10_000.0)
            submitted = st.form_submit_button("Create", type="primary")

        if submitted:
            try:
                sacco = run_async(components.saccos.create_sacco(profile.id, {
                    "name": name,
                    "goal": goal,
                }))
                st.toast(f"{sacco.name} created")
                st.rerun()
            except FormValidationError as e:
                show_form_errors(e)

    saccos = run_async(components.saccos.list_saccos())
    if not saccos:
        st.info("No SACCOs yet. Create the first one!")

    for sacco in saccos:
        with st.container(border=True):
            st.subheader(sacco.name)
            st.progress(min(sacco.progress_percent, 100) / 100)
            st.caption(
                f"{format_money(sacco.current_total)} of {format_money(sacco.goal)}"
                f" · {sacco.member_count} members"
            )
            col1, col2 = st.columns(2)
            with col1:
                if st.button("View", key=f"view_{sacco.id}"):
                    st.session_state.sacco_id = sacco.id
                    st.rerun()
            with col2:
                if sacco.is_member(profile.id):
                    st.button("Joined", key=f"join_{sacco.id}", disabled=True)
                elif st.button("Join", key=f"join_{sacco.id}"):
                    run_async(components.saccos.join_sacco(profile.id, sacco.id))
                    st.toast(f"You joined {sacco.name}")
                    st.rerun()


def render_sacco_detail(components: AppComponents, profile: UserProfile, sacco_id: str):
    if st.button("← Back to SACCOs"):
        st.session_state.pop("sacco_id", None)
        st.rerun()

    sacco = run_async(components.saccos.get_sacco(sacco_id))
    if sacco is None:
        st.error("SACCO not found.")
        return

    st.title(f"🤝 {sacco.name}")
    st.progress(min(sacco.progress_percent, 100) / 100)
    st.markdown(
        f"**{format_money(sacco.current_total)}** saved of "
        f"**{format_money(sacco.goal)}** ({sacco.progress_percent:.0f}%)"
    )

    if sacco.is_member(profile.id):
        st.subheader("💰 Make a Deposit")
        st.caption(f"Your balance: {format_money(profile.total_savings)}")
        with st.form("sacco_deposit"):
            amount = st.number_input("Amount", min_value=0.0, step=1000.0)
            submitted = st.form_submit_button("Deposit", type="primary")

        if submitted:
            try:
                _, warnings = run_async(components.saccos.deposit(
                    profile.id, sacco.id, {"amount": amount or None},
                ))
                queue_warnings(warnings)
                st.toast(f"Deposited {format_money(amount)} to {sacco.name}")
                st.rerun()
            except FormValidationError as e:
                show_form_errors(e)
            except (AccountFrozenError, NotAMemberError) as e:
                st.error(str(e))
            except Exception as e:
                st.error(f"Deposit failed: {str(e)}")
    elif st.button("Join this SACCO", type="primary"):
        run_async(components.saccos.join_sacco(profile.id, sacco.id))
        st.rerun()

    st.subheader(f"👥 Members ({sacco.member_count})")
    for member in run_async(components.saccos.members(sacco)):
        label = member.name or "Unknown member"
        if member.id == sacco.admin_id:
            label += " (admin)"
        st.markdown(f"**{member.initial}** · {label}")


def render_investments_page(components: AppComponents, profile: UserProfile):
    """Render the investment catalogue and personalised tips."""
    st.title("📈 Investments")

    st.subheader("🤖 Personalized Tips")
    if st.button("Get AI Tips", type="primary"):
        with st.spinner("Generating tips..."):
            try:
                st.markdown(run_async(components.assistant.investment_tips(profile.id)))
            except FlowError:
                st.error("Failed to get investment tips. Please try again later.")

    st.markdown("---")
    st.subheader("📚 Investment Options")
    for option in INVESTMENT_OPTIONS:
        with st.container(border=True):
            st.markdown(f"### {option.title}")
            st.markdown(option.description)
            col1, col2 = st.columns(2)
            col1.markdown(f"**Risk:** {option.risk_level}")
            col2.markdown(f"**Average return:** {option.avg_return}")
            if option.is_internal:
                st.caption("See the SACCOs page to join one.")
            else:
                st.link_button("Learn more", option.link)

    st.markdown("---")
    st.subheader("🎯 Will I Reach My Goal?")
    with st.form("goal"):
        saving_goal = st.number_input("Saving goal", min_value=0.0, step=10_000.0)
        deadline = st.date_input("Deadline", value=date.today() + timedelta(days=365))
        submitted = st.form_submit_button("Predict")

    if submitted and saving_goal > 0:
        with st.spinner("Looking at your savings..."):
            try:
                prediction = run_async(components.assistant.predict_goal(
                    profile.id, saving_goal, deadline.isoformat(),
                ))
                show = st.success if prediction.will_meet_goal else st.warning
                show(prediction.prediction_message)
            except FlowError:
                st.error("Could not make a prediction right now. Please try again later.")


def render_planner_page(components: AppComponents, profile: UserProfile):
    """Render the Money Planner."""
    st.title("🗓️ Money Planner")

    period = st.radio(
        "Budget period",
        options=list(BudgetPeriod),
        format_func=lambda p: p.value.title(),
        horizontal=True,
    )

    summary = run_async(components.planner.budget_summary(profile.id, period))

    col1, col2, col3 = st.columns(3)
    col1.metric("Budgeted", format_money(summary.total_budgeted))
    col2.metric("Spent", format_money(summary.total_spent))
    col3.metric("Remaining", format_money(summary.remaining))
    st.progress(min(summary.overall_progress, 100) / 100)
    st.caption(f"{summary.period_start:%b %d} – {summary.period_end:%b %d, %Y}")

    st.subheader("📂 Categories")
    if not summary.categories:
        st.info(f"No categories for the current {period.noun} yet.")

    for item in summary.categories:
        with st.container(border=True):
            left, right = st.columns([4, 1])
            with left:
                st.markdown(f"**{item.category.name}**")
                st.progress(min(item.progress_percent, 100) / 100)
                st.caption(
                    f"{format_money(item.spent)} of {format_money(item.category.budgeted)}"
                )
                if item.is_over_budget:
                    st.error(f"Over budget by {format_money(-item.remaining)}")
            with right:
                if st.button("Delete", key=f"delete_{item.category.id}"):
                    run_async(components.planner.delete_category(profile.id, item.category.id))
                    st.toast(f"{item.category.name} deleted")
                    st.rerun()

    with st.expander("➕ Add Category"):
        with st.form("category"):
            name = st.text_input("Category name")
            budgeted = st.number_input("Budget", min_value=0.0, step=1000.0)
            submitted = st.form_submit_button("Add", type="primary")

        if submitted:
            try:
                run_async(components.planner.add_category(
                    profile.id, {"name": name, "budgeted": budgeted or None}, period,
                ))
                st.rerun()
            except FormValidationError as e:
                show_form_errors(e)

    render_assign_withdrawals(components, profile, period, summary)


def render_assign_withdrawals(components: AppComponents, profile: UserProfile, period, summary):
    unassigned = run_async(components.planner.unassigned_withdrawals(profile.id, period))
    if not unassigned:
        return

    st.subheader(f"🧾 Assign Withdrawals ({len(unassigned)})")
    categories = {item.category.id: item.category.name for item in summary.categories}

    with st.form("assign"):
        rows = []
        for transaction in unassigned:
            headline, _ = describe_transaction(transaction)
            st.markdown(f"**{format_money(transaction.amount)}** · {headline}")
            col1, col2 = st.columns(2)
            category_id = col1.selectbox(
                "Category",
                options=[None] + list(categories),
                format_func=lambda c: "Unassigned" if c is None else categories[c],
                key=f"cat_{transaction.id}",
            )
            reason = col2.text_input("Reason", key=f"reason_{transaction.id}")
            rows.append(TransactionAssignment(
                transaction_id=transaction.id,
                category_id=category_id,
                reason=reason or None,
            ))
        submitted = st.form_submit_button("Save Assignments", type="primary")

    if submitted:
        count = run_async(components.planner.assign_transactions(profile.id, rows))
        if count:
            st.toast(f"{count} transactions assigned")
            st.rerun()


def render_settings_page(components: AppComponents, profile: UserProfile, is_admin: bool):
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.subheader("👤 Profile")
    with st.form("profile"):
        name = st.text_input("Name", value=profile.name)
        photo_url = st.text_input("Photo URL", value=profile.photo_url)
        submitted = st.form_submit_button("Save Profile", type="primary")

    if submitted:
        try:
            run_async(components.accounts.update_profile(profile.id, {
                "name": name,
                "photo_url": photo_url,
            }))
            st.toast("Profile updated")
            st.rerun()
        except FormValidationError as e:
            show_form_errors(e)

    if profile.password_hash:
        st.subheader("🔒 Change Password")
        with st.form("password"):
            current = st.text_input("Current password", type="password")
            new = st.text_input("New password", type="password")
            submitted = st.form_submit_button("Change Password")

        if submitted:
            try:
                run_async(components.accounts.change_password(profile.id, {
                    "current_password": current,
                    "new_password": new,
                }))
                st.success("Password changed.")
            except FormValidationError as e:
                show_form_errors(e)
            except AuthError as e:
                st.error(f"Password Change Failed: {e}")

    st.subheader("🛡️ Admin Access")
    if is_admin:
        st.success("Admin Access Granted. Open the Admin page from the sidebar.")
    elif st.button("Become Admin"):
        run_async(components.accounts.grant_admin(profile.id))
        st.toast("You are now an administrator.")
        st.rerun()

    st.markdown("---")
    st.subheader("🔌 Connection Status")
    status = validate_all_settings()
    for name, key in [("Firestore (Storage)", "firebase"), ("Gemini (AI)", "gemini")]:
        if status.get(key, False):
            st.success(f"✅ {name} - Configured")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")


def render_admin_page(components: AppComponents, profile: UserProfile):
    """Render the admin dashboard."""
    st.title("🛡️ Admin")

    try:
        users = run_async(components.admin.list_users(profile.id))
        saccos = run_async(components.admin.list_saccos(profile.id))
    except PermissionDeniedError as e:
        st.error(str(e))
        return

    st.subheader(f"👥 Users ({len(users)})")
    for user in users:
        left, middle, right = st.columns([3, 2, 1])
        left.markdown(f"**{user.display_name}**  \n{user.email}")
        middle.markdown(format_money(user.total_savings))
        label = "Unfreeze" if user.is_frozen else "Freeze"
        if right.button(label, key=f"freeze_{user.id}"):
            frozen = run_async(components.admin.toggle_freeze(profile.id, user.id))
            st.toast(f"{user.display_name} {'frozen' if frozen else 'unfrozen'}")
            st.rerun()

    st.subheader(f"🤝 SACCOs ({len(saccos)})")
    for sacco in saccos:
        st.markdown(
            f"**{sacco.name}** · {sacco.member_count} members · "
            f"{format_money(sacco.current_total)} / {format_money(sacco.goal)}"
        )


def render_terms_page():
    """Render the terms and conditions."""
    st.title("📄 Terms and Conditions")
    st.markdown("""
    Please read these terms and conditions carefully before using Our Service.

    **Acknowledgment.** These Terms and Conditions govern the use of this Service.
    Your access to and use of the Service is conditioned on Your acceptance of
    and compliance with these Terms and Conditions.

    **User Accounts.** When You create an account with Us, You must provide
    information that is accurate, complete and current at all times. You are
    responsible for safeguarding the password that You use to access the Service.

    **Intellectual Property.** The Service and its original content remain the
    exclusive property of the Company and its licensors.

    **Termination.** We may terminate or suspend Your account immediately,
    without prior notice or liability, if You breach these Terms and Conditions.

    **Limitation of Liability.** Financial tips in the Service are general
    information, not professional advice.

    **Contact Us.** If you have any questions about these Terms and Conditions,
    You can contact us by email at support@pesapath.com.
    """)


if __name__ == "__main__":
    main()
