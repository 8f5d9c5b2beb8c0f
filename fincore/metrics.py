from collections import defaultdict
from datetime import date
from functools import reduce
from typing import Iterable, Sequence

from fincore.domain import (
    ExpenseEntry,
    FinancialSnapshot,
    IncomeEntry,
    MonthlyTrend,
    Project,
    SavingsGoal,
)

# Totals are spread over a fixed twelve-month window, not the calendar span of the data.
NORMALIZATION_MONTHS = 12


def total_amount(entries: Iterable) -> float:
    return reduce(lambda acc, e: acc + e.amount, entries, 0.0)


def total_saved(goals: Iterable[SavingsGoal]) -> float:
    return reduce(lambda acc, g: acc + g.current_amount, goals, 0.0)


def savings_rate(total_savings: float, total_income: float) -> float:
    if total_income > 0:
        return total_savings / total_income * 100
    return 0.0


def compute_snapshot(
    income_entries: Sequence[IncomeEntry],
    expense_entries: Sequence[ExpenseEntry],
    savings_goals: Sequence[SavingsGoal],
) -> FinancialSnapshot:
    """Reduce the raw ledger into one FinancialSnapshot.

    Savings are what has already been put into goals (current_amount), so the
    available balance is income minus expenses minus that allocation.
    """
    total_income = total_amount(income_entries)
    total_expenses = total_amount(expense_entries)
    total_savings = total_saved(savings_goals)

    return FinancialSnapshot(
        total_income=total_income,
        total_expenses=total_expenses,
        total_savings=total_savings,
        savings_rate=savings_rate(total_savings, total_income),
        monthly_income=total_income / NORMALIZATION_MONTHS,
        monthly_expenses=total_expenses / NORMALIZATION_MONTHS,
        available_balance=total_income - total_expenses - total_savings,
        savings_goals=tuple(savings_goals),
    )


def net_profit(
    income_entries: Iterable[IncomeEntry], expense_entries: Iterable[ExpenseEntry]
) -> float:
    return total_amount(income_entries) - total_amount(expense_entries)


def active_goals(goals: Iterable[SavingsGoal]) -> tuple[SavingsGoal, ...]:
    return tuple(filter(lambda g: g.current_amount < g.target_amount, goals))


def goal_progress(goal: SavingsGoal) -> float:
    """Percent of the target already saved."""
    if goal.target_amount <= 0:
        return 0.0
    return goal.current_amount / goal.target_amount * 100


def _month_keys(today: date, months: int) -> list[str]:
    keys = []
    year, month = today.year, today.month
    for _ in range(months):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


def monthly_savings_trend(
    income_entries: Iterable[IncomeEntry],
    expense_entries: Iterable[ExpenseEntry],
    today: date,
    months: int = NORMALIZATION_MONTHS,
) -> tuple[MonthlyTrend, ...]:
    """Income, expenses and savings potential per month, oldest first.

    Covers the `months` calendar months ending with the month of `today`.
    Savings potential never goes below zero.
    """
    income_by_month: dict[str, float] = defaultdict(float)
    expenses_by_month: dict[str, float] = defaultdict(float)

    for e in income_entries:
        income_by_month[e.date[:7]] += e.amount
    for e in expense_entries:
        expenses_by_month[e.date[:7]] += e.amount

    return tuple(
        MonthlyTrend(
            month=key,
            income=income_by_month[key],
            expenses=expenses_by_month[key],
            savings=max(0.0, income_by_month[key] - expenses_by_month[key]),
        )
        for key in _month_keys(today, months)
    )


def expenses_by_category(expense_entries: Iterable[ExpenseEntry]) -> dict[str, float]:
    totals: dict[str, float] = defaultdict(float)
    for e in expense_entries:
        totals[e.category] += e.amount
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))


def income_by_project(income_entries: Iterable[IncomeEntry]) -> dict[str, float]:
    totals: dict[str, float] = defaultdict(float)
    for e in income_entries:
        totals[e.project_id] += e.amount
    return dict(totals)


def active_project_count(projects: Iterable[Project]) -> int:
    return sum(1 for p in projects if p.status == "active")


def recent_transactions(
    income_entries: Sequence[IncomeEntry],
    expense_entries: Sequence[ExpenseEntry],
    limit: int = 5,
) -> list[tuple[str, object]]:
    """Latest ledger activity as (kind, entry) pairs, newest first.

    Only the last three entries of each ledger are considered.
    """
    merged = [("income", e) for e in income_entries[-3:]]
    merged += [("expense", e) for e in expense_entries[-3:]]
    merged.sort(key=lambda item: item[1].date, reverse=True)
    return merged[: max(0, limit)]
