import math
from dataclasses import replace

from fincore.domain import SavingsGoal, ValidationResult
from fincore.functional import Either, Left, Right

MIN_CONTRIBUTION = 1.0


def _positive(amount: float) -> Either[str, float]:
    if amount <= 0:
        return Left("Amount must be greater than $0")
    return Right(amount)


def _within_balance(available_balance: float):
    def _check(amount: float) -> Either[str, float]:
        if amount > available_balance:
            return Left(f"Insufficient funds. Available balance: ${available_balance:.2f}")
        return Right(amount)
    return _check


def _at_least_minimum(amount: float) -> Either[str, float]:
    if amount < MIN_CONTRIBUTION:
        return Left("Minimum savings amount is $1.00")
    return Right(amount)


def check_contribution(amount: float, available_balance: float) -> Either[str, float]:
    """Run the contribution checks in order; the first failure is reported.

    The balance check runs before the minimum check, so 0.50 against a 0.30
    balance reports insufficient funds rather than the $1.00 minimum.
    """
    return (
        _positive(amount)
        .bind(_within_balance(available_balance))
        .bind(_at_least_minimum)
    )


def validate_contribution(amount: float, available_balance: float) -> ValidationResult:
    return check_contribution(amount, available_balance).fold(
        lambda error: ValidationResult(is_valid=False, error=error),
        lambda _: ValidationResult(is_valid=True),
    )


def apply_contribution(goal: SavingsGoal, amount: float) -> float:
    """New current amount for the goal, capped at its target.

    Whatever exceeds the target is dropped, not carried over.
    """
    return min(goal.current_amount + amount, goal.target_amount)


def credit_goal(goal: SavingsGoal, amount: float) -> SavingsGoal:
    return replace(goal, current_amount=apply_contribution(goal, amount))


def validate_goal_target(target_amount: float) -> ValidationResult:
    if target_amount <= 0:
        return ValidationResult(is_valid=False, error="Target amount must be greater than $0")
    return ValidationResult(is_valid=True)


def parse_amount(raw: str) -> Either[str, float]:
    """Parse a user-typed amount such as "25" or "12.50"."""
    try:
        value = float(str(raw).strip())
    except ValueError:
        return Left("Please enter a valid amount")
    if math.isnan(value) or math.isinf(value):
        return Left("Please enter a valid amount")
    return Right(value)
