from fincore.domain import ExpenseEntry, IncomeEntry, SavingsGoal
from fincore.memo import cached_snapshot, cached_tips, clear_caches


def make_ledger():
    income = (IncomeEntry("i1", "p1", 5000.0, "", "2025-01-01"),)
    expenses = (ExpenseEntry("e1", None, 2000.0, "", "2025-01-02"),)
    goals = (SavingsGoal("g1", "Fund", 3000.0, 500.0, "2025-12-31"),)
    return income, expenses, goals


def test_cached_snapshot_hits_on_equal_inputs():
    clear_caches()
    first = cached_snapshot(*make_ledger())
    second = cached_snapshot(*make_ledger())

    assert first is second
    assert cached_snapshot.cache_info().hits == 1


def test_cached_snapshot_misses_on_changed_goal():
    clear_caches()
    income, expenses, goals = make_ledger()
    a = cached_snapshot(income, expenses, goals)
    b = cached_snapshot(income, expenses, (SavingsGoal("g1", "Fund", 3000.0, 600.0, "2025-12-31"),))

    assert a.available_balance == 2500.0
    assert b.available_balance == 2400.0


def test_cached_tips_matches_fresh_generation():
    clear_caches()
    snapshot = cached_snapshot(*make_ledger())
    tips = cached_tips(snapshot)

    assert tips is cached_tips(snapshot)
    assert tips[0].id == "emergency-fund"
