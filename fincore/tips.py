"""Rule-based financial tips.

Every rule is a pure function ``(FinancialSnapshot) -> Maybe[Tip]``. All rules
see the same snapshot; the tips they produce are collected in rule order and
then stable-sorted so that high priority comes first.
"""
from typing import Callable, Iterable, Sequence

from fincore.domain import FinancialSnapshot, Tip
from fincore.functional import Maybe, Nothing, Some, collect_some, maybe_when
from fincore.metrics import active_goals

PRIORITY_WEIGHT = {"high": 3, "medium": 2, "low": 1}

EMERGENCY_FUND_MONTHS = 6
LOW_SAVINGS_RATE = 10.0
GOOD_SAVINGS_RATE = 20.0
EXPENSE_RATIO_LIMIT = 70.0
SURPLUS_MONTHS = 2
TAX_PLANNING_MONTHLY_INCOME = 5000.0

Rule = Callable[[FinancialSnapshot], Maybe[Tip]]


def _emergency_target(s: FinancialSnapshot) -> float:
    return s.monthly_expenses * EMERGENCY_FUND_MONTHS


def emergency_fund_rule(s: FinancialSnapshot) -> Maybe[Tip]:
    target = _emergency_target(s)
    return maybe_when(s.total_savings < target, lambda: Tip(
        id="emergency-fund",
        title="Build Your Emergency Fund",
        content=(
            f"You currently have ${s.total_savings:.2f} in savings. Financial experts recommend "
            f"having 6 months of expenses (approximately ${target:.2f}) as an emergency fund. "
            f"Consider allocating a portion of your available balance "
            f"(${s.available_balance:.2f}) to build this safety net."
        ),
        category="emergency",
        priority="high",
    ))


def savings_rate_rule(s: FinancialSnapshot) -> Maybe[Tip]:
    rate = s.savings_rate
    if rate < LOW_SAVINGS_RATE:
        increase = s.monthly_income * 0.1 - s.total_savings / 12
        return Some(Tip(
            id="increase-savings-rate",
            title="Increase Your Savings Rate",
            content=(
                f"Your current savings rate is {rate:.1f}%. Financial advisors recommend saving "
                f"at least 10-20% of your income. Try to increase your monthly savings by "
                f"${increase:.2f} to reach the 10% target."
            ),
            category="saving",
            priority="high",
        ))
    if rate < GOOD_SAVINGS_RATE:
        return Some(Tip(
            id="good-savings-rate",
            title="Great Savings Progress!",
            content=(
                f"Your savings rate of {rate:.1f}% is above the recommended 10% minimum. "
                f"Consider increasing it to 20% for even better financial security and "
                f"faster goal achievement."
            ),
            category="saving",
            priority="medium",
        ))
    return Some(Tip(
        id="excellent-savings-rate",
        title="Excellent Savings Discipline!",
        content=(
            f"Outstanding! Your savings rate of {rate:.1f}% is excellent. You're well on your "
            f"way to financial independence. Consider exploring investment opportunities to "
            f"grow your wealth faster."
        ),
        category="investing",
        priority="low",
    ))


def expense_ratio_rule(s: FinancialSnapshot) -> Maybe[Tip]:
    # No ratio without income; the deficit rule covers that case.
    if s.total_income <= 0:
        return Nothing()
    ratio = s.total_expenses / s.total_income * 100
    return maybe_when(ratio > EXPENSE_RATIO_LIMIT, lambda: Tip(
        id="reduce-expenses",
        title="Review Your Expenses",
        content=(
            f"Your expenses account for {ratio:.1f}% of your income. Consider reviewing your "
            f"spending categories to identify areas where you can cut back. The 50/30/20 rule "
            f"suggests spending no more than 50% on needs and 30% on wants."
        ),
        category="budgeting",
        priority="high",
    ))


def available_balance_rule(s: FinancialSnapshot) -> Maybe[Tip]:
    balance = s.available_balance
    if balance > s.monthly_income * SURPLUS_MONTHS:
        return Some(Tip(
            id="invest-surplus",
            title="Consider Investing Your Surplus",
            content=(
                f"You have ${balance:.2f} available. This surplus could be working harder for "
                f"you. Consider investing in index funds, stocks, or other investment vehicles "
                f"to grow your wealth over time."
            ),
            category="investing",
            priority="medium",
        ))
    if balance < 0:
        return Some(Tip(
            id="budget-deficit",
            title="Address Budget Deficit",
            content=(
                f"You're spending more than you earn. Your deficit is ${abs(balance):.2f}. "
                f"Focus on reducing expenses or increasing income to get back on track "
                f"financially."
            ),
            category="budgeting",
            priority="high",
        ))
    return Nothing()


def savings_goals_rule(s: FinancialSnapshot) -> Maybe[Tip]:
    no_active = not active_goals(s.savings_goals)
    return maybe_when(no_active and s.total_savings > _emergency_target(s), lambda: Tip(
        id="set-savings-goals",
        title="Set New Savings Goals",
        content=(
            "You have a solid emergency fund! Consider setting specific savings goals for "
            "things like a house down payment, vacation, new equipment, or retirement. Having "
            "clear goals makes saving more motivating."
        ),
        category="goals",
        priority="medium",
    ))


def tax_planning_rule(s: FinancialSnapshot) -> Maybe[Tip]:
    return maybe_when(s.monthly_income > TAX_PLANNING_MONTHLY_INCOME, lambda: Tip(
        id="tax-planning",
        title="Consider Tax Planning Strategies",
        content=(
            "With your income level, you might benefit from tax planning strategies. Consider "
            "contributing to retirement accounts (401k, IRA), tracking business expenses for "
            "deductions, and consulting with a tax professional."
        ),
        category="taxes",
        priority="medium",
    ))


def income_diversification_rule(s: FinancialSnapshot) -> Maybe[Tip]:
    return maybe_when(s.total_income > 0, lambda: Tip(
        id="diversify-income",
        title="Diversify Your Income Streams",
        content=(
            "As a freelancer, consider developing multiple income streams to reduce risk. "
            "This could include recurring clients, passive income through courses or "
            "products, or different types of projects."
        ),
        category="budgeting",
        priority="medium",
    ))


DEFAULT_RULES: tuple[Rule, ...] = (
    emergency_fund_rule,
    savings_rate_rule,
    expense_ratio_rule,
    available_balance_rule,
    savings_goals_rule,
    tax_planning_rule,
    income_diversification_rule,
)


def sort_by_priority(tips: Iterable[Tip]) -> tuple[Tip, ...]:
    # sorted() is stable, so equal priorities keep rule order
    return tuple(sorted(tips, key=lambda t: PRIORITY_WEIGHT[t.priority], reverse=True))


def generate_tips(
    snapshot: FinancialSnapshot, rules: Sequence[Rule] = DEFAULT_RULES
) -> tuple[Tip, ...]:
    return sort_by_priority(collect_some(rule(snapshot) for rule in rules))
