import json
import logging
from dataclasses import asdict, replace
from pathlib import Path
from typing import Dict, Protocol, Tuple

from fincore.domain import ExpenseEntry, IncomeEntry, Project, SavingsGoal

logger = logging.getLogger(__name__)


def load_ledger(
    path: str | Path,
) -> Tuple[
    Tuple[Project, ...],
    Tuple[IncomeEntry, ...],
    Tuple[ExpenseEntry, ...],
]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    projects = tuple(Project(**p) for p in data.get("projects", []))
    income = tuple(IncomeEntry(**e) for e in data.get("income", []))
    expenses = tuple(ExpenseEntry(**e) for e in data.get("expenses", []))

    logger.info(
        "Loaded ledger from %s: %d projects, %d income, %d expense entries",
        path, len(projects), len(income), len(expenses),
    )
    return projects, income, expenses


def add_goal(goals: Tuple[SavingsGoal, ...], goal: SavingsGoal) -> Tuple[SavingsGoal, ...]:
    return goals + (goal,)


def update_goal(
    goals: Tuple[SavingsGoal, ...], goal_id: str, **changes
) -> Tuple[SavingsGoal, ...]:
    return tuple(replace(g, **changes) if g.id == goal_id else g for g in goals)


def find_goal(goals: Tuple[SavingsGoal, ...], goal_id: str) -> SavingsGoal | None:
    return next((g for g in goals if g.id == goal_id), None)


class GoalStore(Protocol):
    """Where a user's savings goals live between requests."""

    def load(self, user_id: str) -> Tuple[SavingsGoal, ...]:  # pragma: no cover - interface
        ...

    def save(self, user_id: str, goals: Tuple[SavingsGoal, ...]) -> None:  # pragma: no cover - interface
        ...


class InMemoryGoalStore:
    def __init__(self, initial: Dict[str, Tuple[SavingsGoal, ...]] | None = None):
        self._goals: Dict[str, Tuple[SavingsGoal, ...]] = dict(initial or {})

    def load(self, user_id: str) -> Tuple[SavingsGoal, ...]:
        return self._goals.get(user_id, ())

    def save(self, user_id: str, goals: Tuple[SavingsGoal, ...]) -> None:
        self._goals[user_id] = tuple(goals)


class JsonGoalStore:
    """One JSON file per user: <directory>/savings-goals-<user_id>.json."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def path_for(self, user_id: str) -> Path:
        return self.directory / f"savings-goals-{user_id}.json"

    def load(self, user_id: str) -> Tuple[SavingsGoal, ...]:
        path = self.path_for(user_id)
        if not path.exists():
            logger.debug("No goals file for user %s at %s", user_id, path)
            return ()
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return tuple(SavingsGoal(**g) for g in data)

    def save(self, user_id: str, goals: Tuple[SavingsGoal, ...]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(user_id)
        with open(path, "w", encoding="utf-8") as f:
            json.dump([asdict(g) for g in goals], f, indent=2)
        logger.info("Saved %d goal(s) for user %s", len(goals), user_id)
