from collections import defaultdict
from typing import Iterable

from fincore.domain import PRIORITIES, Tip

# Caller-level value meaning "do not filter by category".
ALL_CATEGORIES = "all"


def by_category(category: str):
    def _filter(tip: Tip) -> bool:
        return tip.category == category

    return _filter


def is_actionable(tip: Tip) -> bool:
    return tip.actionable


def filter_by_category(tips: Iterable[Tip], category: str) -> tuple[Tip, ...]:
    return tuple(filter(by_category(category), tips))


def filter_actionable(tips: Iterable[Tip]) -> tuple[Tip, ...]:
    return tuple(filter(is_actionable, tips))


def select_tips(
    tips: Iterable[Tip], category: str = ALL_CATEGORIES, actionable_only: bool = False
) -> tuple[Tip, ...]:
    """Apply the tip-list filters the way the tips page does."""
    selected = tuple(tips)
    if category != ALL_CATEGORIES:
        selected = filter_by_category(selected, category)
    if actionable_only:
        selected = filter_actionable(selected)
    return selected


def group_by_category(tips: Iterable[Tip]) -> dict[str, tuple[Tip, ...]]:
    groups: dict[str, list[Tip]] = defaultdict(list)
    for tip in tips:
        groups[tip.category].append(tip)
    return {category: tuple(group) for category, group in groups.items()}


def count_by_priority(tips: Iterable[Tip]) -> dict[str, int]:
    counts = {priority: 0 for priority in PRIORITIES}
    for tip in tips:
        counts[tip.priority] += 1
    return counts
