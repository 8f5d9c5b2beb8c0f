import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from datetime import date

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from fincore.config import get_settings
from fincore.domain import TIP_CATEGORIES
from fincore.exceptions import DomainError
from fincore.logging_config import setup_logging
from fincore.memo import cached_snapshot, cached_tips
from fincore.metrics import (
    active_goals,
    active_project_count,
    expenses_by_category,
    goal_progress,
    monthly_savings_trend,
    net_profit,
    recent_transactions,
)
from fincore.queries import ALL_CATEGORIES, count_by_priority, select_tips
from fincore.services import SavingsService
from fincore.storage import JsonGoalStore, load_ledger
from fincore.validation import parse_amount

st.set_page_config(page_title="Freelance Finance", layout="wide")

settings = get_settings()

if "logging_ready" not in st.session_state:
    setup_logging(settings)
    st.session_state.logging_ready = True

logger = logging.getLogger("app")

projects, income, expenses = load_ledger(settings.seed_path)

st.sidebar.markdown("### 👤 Profile")
user_id = st.sidebar.text_input("User ID", value=st.session_state.get("user_id", settings.default_user_id))
st.session_state["user_id"] = user_id or settings.default_user_id
user_id = st.session_state["user_id"]

savings = SavingsService(JsonGoalStore(settings.data_dir))
goals = savings.goals(user_id)
snapshot = cached_snapshot(income, expenses, goals)
tips = cached_tips(snapshot)

PRIORITY_BADGE = {"high": "🔴", "medium": "🟡", "low": "🟢"}
CATEGORY_LABELS = {
    ALL_CATEGORIES: "All Tips",
    "emergency": "Emergency Fund",
    "saving": "Savings",
    "budgeting": "Budgeting",
    "investing": "Investing",
    "goals": "Goals",
    "taxes": "Taxes",
}

menu = st.sidebar.radio("Menu", ["🏠 Overview", "🎯 Savings", "💡 Tips"])

if menu == "🏠 Overview":
    st.title("🏠 Financial Overview")
    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric("Total Income", f"${snapshot.total_income:,.2f}")
    with k2:
        st.metric("Total Expenses", f"${snapshot.total_expenses:,.2f}")
    with k3:
        st.metric("Net Profit", f"${net_profit(income, expenses):,.2f}")
    with k4:
        st.metric("Active Projects", active_project_count(projects))

    trend = monthly_savings_trend(income, expenses, date.today())
    df_trend = pd.DataFrame([t.__dict__ for t in trend])

    fig_ts = go.Figure()
    fig_ts.add_trace(go.Scatter(x=df_trend["month"], y=df_trend["income"], mode="lines+markers", name="Income"))
    fig_ts.add_trace(go.Scatter(x=df_trend["month"], y=df_trend["expenses"], mode="lines+markers", name="Expenses"))
    fig_ts.add_trace(go.Scatter(x=df_trend["month"], y=df_trend["savings"], mode="lines+markers", name="Savings"))
    fig_ts.update_layout(template="plotly_dark", margin=dict(t=30, b=10, l=10, r=10), title="Last 12 months")
    st.plotly_chart(fig_ts, use_container_width=True)

    by_cat = expenses_by_category(expenses)
    if by_cat:
        df_cat = pd.DataFrame({"Category": list(by_cat.keys()), "Amount": list(by_cat.values())})
        fig_cat = px.pie(df_cat, values="Amount", names="Category", title="Expenses by category")
        st.plotly_chart(fig_cat, use_container_width=True)

    recent = recent_transactions(income, expenses)
    if recent:
        st.subheader("🧾 Recent Transactions")
        rows = [
            {
                "Date": e.date,
                "Type": kind,
                "Description": e.description,
                "Project": next((p.name for p in projects if p.id == e.project_id), "Unknown"),
                "Amount": f"{'+' if kind == 'income' else '-'}${e.amount:,.2f}",
            }
            for kind, e in recent
        ]
        st.table(pd.DataFrame(rows))
    else:
        st.info("No transactions to display.")

elif menu == "🎯 Savings":
    st.title("🎯 Savings & Goals")

    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("Available Balance", f"${snapshot.available_balance:,.2f}")
    with c2:
        st.metric("Total Saved", f"${snapshot.total_savings:,.2f}")
    with c3:
        st.metric("Savings Rate", f"{snapshot.savings_rate:.1f}%")
    with c4:
        st.metric("Active Goals", len(active_goals(goals)))

    with st.expander("➕ New goal"):
        with st.form("new_goal"):
            title = st.text_input("Title")
            target_raw = st.text_input("Target amount", value="1000")
            deadline = st.date_input("Deadline")
            goal_type = st.selectbox("Type", ["monthly", "yearly"])
            if st.form_submit_button("Create goal"):
                parsed = parse_amount(target_raw)
                if parsed.is_left():
                    st.error(parsed.get_error())
                else:
                    try:
                        savings.create_goal(user_id, title, parsed.get_or_else(0.0), deadline.isoformat(), goal_type)
                        st.success("Savings goal created successfully!")
                        st.rerun()
                    except DomainError as e:
                        st.error(str(e))

    if not goals:
        st.info("No savings goals yet.")
    else:
        progress = np.clip([goal_progress(g) for g in goals], 0, 100)
        df_goals = pd.DataFrame({
            "Goal": [g.title for g in goals],
            "Saved": [g.current_amount for g in goals],
            "Target": [g.target_amount for g in goals],
            "Progress": progress,
        })
        fig_goals = px.bar(df_goals, x="Goal", y=["Saved", "Target"], barmode="group",
                           title="Savings goals progress", template="plotly_dark")
        st.plotly_chart(fig_goals, use_container_width=True)

        for g, pct in zip(goals, progress):
            st.write(f"**{g.title}** — ${g.current_amount:,.2f} / ${g.target_amount:,.2f} (due {g.deadline})")
            st.progress(float(pct) / 100)

        st.subheader("💸 Add funds")
        with st.form("add_funds"):
            titles = {g.title: g.id for g in goals if g.current_amount < g.target_amount}
            choice = st.selectbox("Goal", list(titles.keys()) or ["—"])
            amount_raw = st.text_input("Amount", value="100")
            if st.form_submit_button("Add to goal"):
                parsed = parse_amount(amount_raw)
                if parsed.is_left():
                    st.error(parsed.get_error())
                elif choice not in titles:
                    st.error("Savings goal not found")
                else:
                    try:
                        report = savings.contribute(user_id, titles[choice], parsed.get_or_else(0.0), income, expenses)
                        for msg in report["messages"]:
                            st.success(msg)
                    except DomainError as e:
                        logger.info("Contribution not applied: %s", e.code)
                        st.error(str(e))

elif menu == "💡 Tips":
    st.title("💡 Financial Tips")
    st.caption("Personalized advice based on your income and savings")

    counts = count_by_priority(tips)
    s1, s2, s3, s4 = st.columns(4)
    with s1:
        st.metric("Savings Rate", f"{snapshot.savings_rate:.1f}%")
    with s2:
        st.metric("Available", f"${snapshot.available_balance:,.2f}")
    with s3:
        st.metric("High priority", counts["high"])
    with s4:
        st.metric("Total tips", len(tips))

    category = st.selectbox(
        "Category",
        [ALL_CATEGORIES, *TIP_CATEGORIES],
        format_func=lambda c: CATEGORY_LABELS.get(c, c),
    )
    actionable_only = st.checkbox("Show only actionable tips", value=False)

    shown = select_tips(tips, category, actionable_only)
    if not shown:
        st.info("No tips match the selected filters.")
    for tip in shown:
        with st.container(border=True):
            st.markdown(f"{PRIORITY_BADGE[tip.priority]} **{tip.title}**  ·  _{CATEGORY_LABELS.get(tip.category, tip.category)}_")
            st.write(tip.content)
            if tip.actionable:
                st.caption("Action recommended")
