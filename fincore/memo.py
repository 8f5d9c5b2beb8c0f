from functools import lru_cache

from fincore.domain import ExpenseEntry, FinancialSnapshot, IncomeEntry, SavingsGoal, Tip
from fincore.metrics import compute_snapshot
from fincore.tips import generate_tips

# Inputs are frozen dataclasses in tuples, so equal ledgers hit the same cache entry.


@lru_cache(maxsize=128)
def cached_snapshot(
    income: tuple[IncomeEntry, ...],
    expenses: tuple[ExpenseEntry, ...],
    goals: tuple[SavingsGoal, ...],
) -> FinancialSnapshot:
    return compute_snapshot(income, expenses, goals)


@lru_cache(maxsize=128)
def cached_tips(snapshot: FinancialSnapshot) -> tuple[Tip, ...]:
    return generate_tips(snapshot)


def clear_caches() -> None:
    cached_snapshot.cache_clear()
    cached_tips.cache_clear()
