from dataclasses import dataclass
from typing import Optional

# Enumerations are kept as plain strings, same as the ledger JSON.
INCOME_CATEGORIES = ("project-payment", "bonus", "other")
EXPENSE_CATEGORIES = ("software", "subscriptions", "equipment", "marketing", "other")
PROJECT_STATUSES = ("active", "completed", "on-hold")
GOAL_TYPES = ("monthly", "yearly")
TIP_CATEGORIES = ("budgeting", "saving", "investing", "taxes", "emergency", "goals")
PRIORITIES = ("high", "medium", "low")


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    client_name: str
    expected_payment: float
    status: str               # active / completed / on-hold
    created_date: str
    budget_allocation: float  # percentage


@dataclass(frozen=True)
class IncomeEntry:
    id: str
    project_id: str
    amount: float
    description: str
    date: str                 # "YYYY-MM-DD"
    category: str = "project-payment"


@dataclass(frozen=True)
class ExpenseEntry:
    id: str
    project_id: Optional[str]  # overhead expenses have no project
    amount: float
    description: str
    date: str
    category: str = "other"


@dataclass(frozen=True)
class SavingsGoal:
    id: str
    title: str
    target_amount: float
    current_amount: float
    deadline: str
    type: str = "monthly"     # monthly / yearly


@dataclass(frozen=True)
class FinancialSnapshot:
    total_income: float
    total_expenses: float
    total_savings: float
    savings_rate: float       # percent of total income
    monthly_income: float
    monthly_expenses: float
    available_balance: float
    savings_goals: tuple[SavingsGoal, ...] = ()


@dataclass(frozen=True)
class Tip:
    id: str
    title: str
    content: str
    category: str
    priority: str
    actionable: bool = True


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class MonthlyTrend:
    month: str                # "YYYY-MM"
    income: float
    expenses: float
    savings: float
