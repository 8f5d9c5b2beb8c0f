import logging
from typing import Any, Dict, Optional, Sequence
from uuid import uuid4

from fincore.domain import ExpenseEntry, IncomeEntry, SavingsGoal
from fincore.events import (
    CONTRIBUTION_ADDED,
    GOAL_COMPLETED,
    GOAL_CREATED,
    EventBus,
    register_default_handlers,
)
from fincore.exceptions import NotFoundError, ValidationError
from fincore.metrics import compute_snapshot
from fincore.queries import ALL_CATEGORIES, count_by_priority, select_tips
from fincore.storage import GoalStore, add_goal, find_goal, update_goal
from fincore.tips import DEFAULT_RULES, Rule, generate_tips
from fincore.validation import apply_contribution, validate_contribution, validate_goal_target

logger = logging.getLogger(__name__)


class SavingsService:
    """Facade for savings goals backed by an injected GoalStore.

    The store is read and written here, never by the metrics or tips code.
    Callers must serialize contributions for the same user; two concurrent
    calls would both read the same current_amount.
    """

    def __init__(self, store: GoalStore, bus: Optional[EventBus] = None):
        self.store = store
        self.bus = bus or register_default_handlers(EventBus())

    def goals(self, user_id: str) -> tuple[SavingsGoal, ...]:
        return self.store.load(user_id)

    def create_goal(
        self,
        user_id: str,
        title: str,
        target_amount: float,
        deadline: str,
        type: str = "monthly",
    ) -> SavingsGoal:
        check = validate_goal_target(target_amount)
        if not check.is_valid:
            raise ValidationError(check.error, code="invalid_target")

        goal = SavingsGoal(
            id=uuid4().hex,
            title=title,
            target_amount=target_amount,
            current_amount=0.0,
            deadline=deadline,
            type=type,
        )
        self.store.save(user_id, add_goal(self.store.load(user_id), goal))
        logger.info("Created goal %s (%s) for user %s", goal.id, title, user_id)
        self.bus.publish(GOAL_CREATED, {"user_id": user_id, "goal_id": goal.id, "title": title})
        return goal

    def contribute(
        self,
        user_id: str,
        goal_id: str,
        amount: float,
        income: Sequence[IncomeEntry],
        expenses: Sequence[ExpenseEntry],
    ) -> Dict[str, Any]:
        """Validate a deposit against the available balance and credit the goal.

        Returns a report with the updated goal, the amount actually credited
        (deposits are capped at the goal target) and handler messages.
        """
        goals = self.store.load(user_id)
        snapshot = compute_snapshot(income, expenses, goals)

        result = validate_contribution(amount, snapshot.available_balance)
        if not result.is_valid:
            logger.warning(
                "Rejected contribution of %.2f to goal %s for user %s: %s",
                amount, goal_id, user_id, result.error,
            )
            raise ValidationError(result.error, code="contribution_rejected")

        goal = find_goal(goals, goal_id)
        if goal is None:
            raise NotFoundError("Savings goal not found", code="goal_not_found")

        new_amount = apply_contribution(goal, amount)
        credited = new_amount - goal.current_amount
        goals = update_goal(goals, goal_id, current_amount=new_amount)
        self.store.save(user_id, goals)
        updated = find_goal(goals, goal_id)
        logger.info(
            "Credited %.2f of %.2f to goal %s for user %s",
            credited, amount, goal_id, user_id,
        )

        payload = {
            "user_id": user_id,
            "goal_id": goal_id,
            "amount": amount,
            "credited": credited,
            "current_amount": new_amount,
        }
        messages = [r.get("message") for r in self.bus.publish(CONTRIBUTION_ADDED, payload) if r.get("message")]

        if goal.current_amount < goal.target_amount <= new_amount:
            completed = {"user_id": user_id, "goal_id": goal_id, "title": goal.title,
                         "target_amount": goal.target_amount}
            messages += [r.get("message") for r in self.bus.publish(GOAL_COMPLETED, completed) if r.get("message")]

        return {"goal": updated, "credited": credited, "messages": messages}


class AdvisorService:
    """Facade for the snapshot -> tips -> filters pipeline with injectable rules."""

    def __init__(self, rules: Sequence[Rule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def advise(
        self,
        income: Sequence[IncomeEntry],
        expenses: Sequence[ExpenseEntry],
        goals: Sequence[SavingsGoal],
        category: str = ALL_CATEGORIES,
        actionable_only: bool = False,
    ) -> Dict[str, Any]:
        snapshot = compute_snapshot(income, expenses, goals)
        tips = generate_tips(snapshot, self.rules)
        selected = select_tips(tips, category, actionable_only)
        logger.debug(
            "Generated %d tip(s), %d selected (category=%s, actionable_only=%s)",
            len(tips), len(selected), category, actionable_only,
        )
        return {
            "snapshot": snapshot,
            "tips": tips,
            "selected": selected,
            "counts": count_by_priority(tips),
        }
