from fincore.domain import Tip
from fincore.queries import (
    ALL_CATEGORIES,
    by_category,
    count_by_priority,
    filter_actionable,
    filter_by_category,
    group_by_category,
    select_tips,
)


def make_tips():
    return (
        Tip("emergency-fund", "E", "", "emergency", "high"),
        Tip("reduce-expenses", "R", "", "budgeting", "high"),
        Tip("info", "I", "", "budgeting", "medium", actionable=False),
        Tip("second-emergency", "E2", "", "emergency", "medium"),
        Tip("excellent-savings-rate", "X", "", "investing", "low"),
    )


def test_filter_by_category_preserves_order():
    result = filter_by_category(make_tips(), "emergency")
    assert [t.id for t in result] == ["emergency-fund", "second-emergency"]
    assert all(t.category == "emergency" for t in result)


def test_filter_by_unknown_category_is_empty():
    assert filter_by_category(make_tips(), "crypto") == ()


def test_filter_actionable():
    result = filter_actionable(make_tips())
    assert "info" not in [t.id for t in result]
    assert len(result) == 4


def test_filters_accept_generators():
    gen = (t for t in make_tips())
    assert len(filter_by_category(gen, "budgeting")) == 2


def test_by_category_predicate():
    tips = make_tips()
    assert list(filter(by_category("investing"), tips)) == [tips[4]]


def test_select_tips_all_skips_category_filter():
    tips = make_tips()
    assert select_tips(tips) == tips
    assert select_tips(tips, ALL_CATEGORIES) == tips


def test_select_tips_combined_filters():
    selected = select_tips(make_tips(), "budgeting", actionable_only=True)
    assert [t.id for t in selected] == ["reduce-expenses"]


def test_group_by_category():
    groups = group_by_category(make_tips())
    assert set(groups) == {"emergency", "budgeting", "investing"}
    assert [t.id for t in groups["budgeting"]] == ["reduce-expenses", "info"]


def test_count_by_priority():
    assert count_by_priority(make_tips()) == {"high": 2, "medium": 2, "low": 1}
    assert count_by_priority(()) == {"high": 0, "medium": 0, "low": 0}
