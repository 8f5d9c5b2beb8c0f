from datetime import date

import pytest

from fincore.domain import ExpenseEntry, IncomeEntry, Project, SavingsGoal
from fincore.metrics import (
    active_goals,
    active_project_count,
    compute_snapshot,
    expenses_by_category,
    goal_progress,
    income_by_project,
    monthly_savings_trend,
    net_profit,
    recent_transactions,
)


def make_income(id, amount, ts="2025-01-15", project_id="p1", category="project-payment"):
    return IncomeEntry(id=id, project_id=project_id, amount=amount, description="", date=ts, category=category)


def make_expense(id, amount, ts="2025-01-20", category="software", project_id=None):
    return ExpenseEntry(id=id, project_id=project_id, amount=amount, description="", date=ts, category=category)


def make_goal(id, current, target, title="Goal"):
    return SavingsGoal(id=id, title=title, target_amount=target, current_amount=current, deadline="2025-12-31")


def test_snapshot_totals_and_balance():
    income = (make_income("i1", 3000), make_income("i2", 2000))
    expenses = (make_expense("e1", 1200), make_expense("e2", 800))
    goals = (make_goal("g1", 500, 3000), make_goal("g2", 250, 1000))

    s = compute_snapshot(income, expenses, goals)

    assert s.total_income == 5000
    assert s.total_expenses == 2000
    assert s.total_savings == 750
    assert s.available_balance == s.total_income - s.total_expenses - s.total_savings
    assert s.available_balance == 2250
    assert s.savings_rate == pytest.approx(15.0)


def test_snapshot_sums_current_not_target():
    s = compute_snapshot((), (), (make_goal("g1", 100, 10_000),))
    assert s.total_savings == 100


def test_snapshot_zero_income_rate_is_zero():
    s = compute_snapshot((), (make_expense("e1", 300),), (make_goal("g1", 50, 100),))
    assert s.total_income == 0
    assert s.savings_rate == 0
    assert s.available_balance == -350


def test_snapshot_monthly_normalization():
    s = compute_snapshot((make_income("i1", 6000),), (make_expense("e1", 1200),), ())
    assert s.monthly_income == pytest.approx(500.0)
    assert s.monthly_expenses == pytest.approx(100.0)


def test_snapshot_empty_ledger():
    s = compute_snapshot((), (), ())
    assert s.total_income == 0
    assert s.available_balance == 0
    assert s.savings_goals == ()


def test_snapshot_does_not_depend_on_order_or_mutate_inputs():
    income = [make_income("i1", 100), make_income("i2", 250.5)]
    expenses = [make_expense("e1", 40)]
    goals = [make_goal("g1", 10, 50)]

    a = compute_snapshot(income, expenses, goals)
    b = compute_snapshot(list(reversed(income)), expenses, goals)

    assert a.total_income == b.total_income
    assert a.available_balance == b.available_balance
    assert [e.id for e in income] == ["i1", "i2"]
    assert isinstance(a.savings_goals, tuple)


def test_net_profit():
    assert net_profit((make_income("i1", 900),), (make_expense("e1", 400),)) == 500


def test_active_goals_and_progress():
    done = make_goal("g1", 100, 100)
    open_goal = make_goal("g2", 25, 100)

    assert active_goals((done, open_goal)) == (open_goal,)
    assert goal_progress(open_goal) == pytest.approx(25.0)
    assert goal_progress(done) == pytest.approx(100.0)
    assert goal_progress(make_goal("g3", 10, 0)) == 0.0


def test_monthly_savings_trend_window_and_clamp():
    income = (make_income("i1", 1000, "2025-03-02"), make_income("i2", 200, "2024-12-31"))
    expenses = (make_expense("e1", 400, "2025-03-10"), make_expense("e2", 500, "2024-12-01"))

    trend = monthly_savings_trend(income, expenses, date(2025, 3, 15))

    assert len(trend) == 12
    assert trend[0].month == "2024-04"
    assert trend[-1].month == "2025-03"
    assert trend[-1].income == 1000
    assert trend[-1].savings == 600
    december = next(t for t in trend if t.month == "2024-12")
    assert december.expenses == 500
    assert december.savings == 0


def test_monthly_savings_trend_ignores_entries_outside_window():
    income = (make_income("i1", 1000, "2023-01-05"),)
    trend = monthly_savings_trend(income, (), date(2025, 1, 1), months=3)
    assert [t.month for t in trend] == ["2024-11", "2024-12", "2025-01"]
    assert sum(t.income for t in trend) == 0


def test_expenses_by_category_sorted_desc():
    expenses = (
        make_expense("e1", 50, category="software"),
        make_expense("e2", 300, category="equipment"),
        make_expense("e3", 70, category="software"),
    )
    result = expenses_by_category(expenses)
    assert list(result.keys()) == ["equipment", "software"]
    assert result["software"] == 120


def test_income_by_project():
    income = (make_income("i1", 100, project_id="p1"), make_income("i2", 50, project_id="p2"), make_income("i3", 25, project_id="p1"))
    assert income_by_project(income) == {"p1": 125, "p2": 50}


def test_active_project_count():
    projects = (
        Project("p1", "A", "Client", 1000, "active", "2025-01-01", 10),
        Project("p2", "B", "Client", 1000, "completed", "2025-01-01", 10),
        Project("p3", "C", "Client", 1000, "active", "2025-01-01", 10),
    )
    assert active_project_count(projects) == 2


def test_recent_transactions_newest_first_and_limited():
    income = tuple(make_income(f"i{n}", 100, f"2025-01-0{n}") for n in range(1, 6))
    expenses = tuple(make_expense(f"e{n}", 10, f"2025-02-0{n}") for n in range(1, 4))

    recent = recent_transactions(income, expenses)

    assert len(recent) == 5
    assert recent[0] == ("expense", expenses[2])
    assert [e.id for _, e in recent] == ["e3", "e2", "e1", "i5", "i4"]
