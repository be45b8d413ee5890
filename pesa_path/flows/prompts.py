"""
Prompt templates for the AI flows.

Templates use str.format placeholders; transaction lists are rendered
with `format_transactions` before substitution.
"""

from pesa_path.flows.schemas import FlowTransaction


FINANCIAL_ADVICE_PROMPT = """You are a financial advisor. Provide personalized advice based on the user's query and data.

User Query: {query}
User Data: Age: {age}, Income: {income}, Saving Plan: {saving_plan}, Total Savings: {total_savings}"""


INVESTMENT_TIPS_PROMPT = """You are an AI financial advisor for Pesa Path, a financial app popular in East Africa.

Based on the user's saving plan ({saving_plan}), age ({age}), and income in UGX ({income}), provide at least 3 personalized investment tips tailored to their financial profile.
Consider their risk tolerance (younger users with higher income can take more risk).
Suggest a mix of local (Ugandan/East African) and international investment options where applicable.
Keep the tips concise, actionable, and easy to understand. Present the tips as a markdown bulleted list."""


DAILY_TIP_PROMPT = """You are an AI assistant that provides a unique, actionable, and concise financial tip of the day."""


BUDGET_WARNING_PROMPT = """You are an AI financial assistant. Analyze the user's recent transactions and monthly income to determine if they are overspending.

User's monthly income: {income}

Recent Transactions:
{transactions}

A user is overspending if their withdrawals in the last 30 days are significantly higher than their deposits, or if their spending is unsustainable given their income.

If they are overspending, set isOverspending to true and provide a short, helpful warningMessage.
If they are not overspending, set isOverspending to false and warningMessage to an empty string."""


GOAL_PREDICTION_PROMPT = """You are an AI financial analyst. Your task is to predict whether a user will meet their savings goal based on their past behavior and current financial situation.

User's Financial Data:
- Monthly Income: {income}
- Current Savings: {total_savings}
- Savings Goal: {saving_goal}
- Goal Deadline: {goal_deadline}

Recent Transactions:
{transactions}

Analyze the data to calculate the required savings rate versus the user's actual savings rate.
Based on this analysis, determine if they are on track to meet their goal by the deadline.

Set 'willMeetGoal' to true if they are on track, and false otherwise.
Provide a concise 'predictionMessage' that is either encouraging if they are on track, or offers gentle advice if they are falling behind."""


STRUCTURED_OUTPUT_INSTRUCTIONS = """CRITICAL: You must respond in ONLY valid JSON format matching the following JSON Schema. Do not include markdown code blocks (```json) or any conversational text around the JSON.

EXPECTED SCHEMA:
{schema}"""


RETRY_INSTRUCTIONS = """RETRY INSTRUCTIONS: Your previous response was invalid or incomplete. Return ONLY a single JSON object matching the schema. Do not add any prose, headings, markdown fences, or explanations."""


def format_transactions(transactions: list[FlowTransaction]) -> str:
    if not transactions:
        return "(none)"
    return "\n".join(
        f"- Type: {t.type.value}, Amount: {t.amount:g}, Date: {t.timestamp.isoformat()}"
        for t in transactions
    )
