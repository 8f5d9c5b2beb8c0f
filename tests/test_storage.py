import json
from pathlib import Path

import pytest

from fincore.domain import SavingsGoal
from fincore.storage import (
    InMemoryGoalStore,
    JsonGoalStore,
    add_goal,
    find_goal,
    load_ledger,
    update_goal,
)

SEED = Path(__file__).resolve().parent.parent / "data" / "seed.json"


def make_goal(id, current=0.0, target=1000.0):
    return SavingsGoal(id=id, title=f"Goal {id}", target_amount=target, current_amount=current, deadline="2025-12-31")


def test_load_seed_ledger():
    projects, income, expenses = load_ledger(SEED)

    assert len(projects) >= 3
    assert len(income) >= 5
    assert len(expenses) >= 5
    assert all(e.amount > 0 for e in income + expenses)
    assert any(e.project_id is None for e in expenses)


def test_add_goal_is_immutable():
    goals = (make_goal("g1"),)
    new_goals = add_goal(goals, make_goal("g2"))

    assert len(new_goals) == 2
    assert len(goals) == 1
    assert new_goals is not goals


def test_update_goal_replaces_only_matching():
    goals = (make_goal("g1"), make_goal("g2"))
    new_goals = update_goal(goals, "g2", current_amount=250.0)

    assert new_goals[1].current_amount == 250.0
    assert new_goals[0] is goals[0]
    assert goals[1].current_amount == 0.0


def test_find_goal():
    goals = (make_goal("g1"), make_goal("g2"))
    assert find_goal(goals, "g2").id == "g2"
    assert find_goal(goals, "missing") is None


def test_in_memory_store_keyed_by_user():
    store = InMemoryGoalStore()
    store.save("alice", (make_goal("g1"),))

    assert store.load("alice")[0].id == "g1"
    assert store.load("bob") == ()


def test_json_store_round_trip(tmp_path):
    store = JsonGoalStore(tmp_path / "goals")
    goals = (make_goal("g1", 10.0), make_goal("g2", 999.5, 2000.0))

    store.save("u1", goals)

    assert store.path_for("u1").name == "savings-goals-u1.json"
    assert store.load("u1") == goals
    assert store.load("u2") == ()


def test_json_store_file_format(tmp_path):
    store = JsonGoalStore(tmp_path)
    store.save("u1", (make_goal("g1", 5.0),))

    data = json.loads(store.path_for("u1").read_text(encoding="utf-8"))
    assert data[0]["current_amount"] == 5.0
    assert data[0]["type"] == "monthly"


def test_json_store_malformed_file_raises(tmp_path):
    store = JsonGoalStore(tmp_path)
    store.path_for("u1").write_text("{not json", encoding="utf-8")

    with pytest.raises(json.JSONDecodeError):
        store.load("u1")
