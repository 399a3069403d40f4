import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dataclasses import replace
from datetime import datetime

import streamlit as st
import pandas as pd
import numpy as np
import plotly.graph_objects as go
import plotly.express as px

from finsight.alerts import has_active_alerts
from finsight.categories import EXPENSE_CATEGORIES, categories_for
from finsight.config import STORE_PATH, configure_logging, ensure_data_directories
from finsight.domain import Budget, Transaction
from finsight.events import (
    EventBus,
    STORE_EVENTS,
    TRANSACTIONS_CHANGED,
    BUDGETS_CHANGED,
    ALERT_DISMISSED,
    persist_handler,
)
from finsight.functional import validate_transaction
from finsight.months import month_title
from finsight.services import default_service
from finsight.store import Store, load_store
from finsight.transforms import (
    add_budget,
    add_transaction,
    delete_budget,
    delete_transaction,
    dismiss_alert,
    new_id,
    replace_budget,
    replace_transaction,
)
from finsight.charts import budget_comparison_rows
from finsight.evaluate import evaluate
from finsight.views import available_months, budget_categories_available, filter_transactions

configure_logging()
ensure_data_directories()

st.set_page_config(page_title="Personal Finance Visualizer", layout="wide")

if "store" not in st.session_state:
    loaded = load_store(STORE_PATH)
    if loaded.is_left():
        st.error(f"Could not load saved data: {loaded.get_error()['message']}")
        st.stop()
    st.session_state.store = loaded.get_or_else(Store())

if "bus" not in st.session_state:
    bus = EventBus()
    for name in STORE_EVENTS:
        bus.subscribe(name, persist_handler(STORE_PATH))
    st.session_state.bus = bus


def commit(event_name: str, store: Store) -> None:
    st.session_state.store = store
    st.session_state.bus.publish(event_name, {"store": store})


def show_errors(error: dict) -> None:
    st.error(f"{error.get('field', 'input')}: {error.get('message', 'invalid input')}")


now = datetime.now()
store: Store = st.session_state.store
report = default_service().recompute(store, now)
result = report["result"]
alerts = result["alerts"]

for v in report["validation"]:
    for msg in v["messages"]:
        st.sidebar.warning(msg)

if has_active_alerts(store.transactions, store.budgets, now, store.dismissed_alerts):
    st.sidebar.error("🔴 Budget alerts need attention")

menu = st.sidebar.radio(
    "Menu",
    ["📊 Dashboard", "🎯 Budgets", "📈 Charts", "🥧 Categories", "🧾 Transactions"]
)


def render_alerts():
    if not alerts:
        return
    st.subheader("🚨 Budget Alerts")
    for alert in alerts:
        col_msg, col_btn = st.columns([10, 1])
        with col_msg:
            box = st.error if alert.severity == "critical" else st.warning
            box(f"**{alert.title}**\n\n{alert.message}")
        with col_btn:
            if st.button("✖", key=f"dismiss_{alert.id}"):
                commit(ALERT_DISMISSED, replace(store, dismissed_alerts=dismiss_alert(store.dismissed_alerts, alert.id)))
                st.rerun()


if menu == "📊 Dashboard":
    st.title("📊 Dashboard")
    render_alerts()

    summary = result["summary"]
    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric("Total Income", f"${summary.total_income:,.2f}")
    with k2:
        st.metric("Total Expenses", f"${summary.total_expenses:,.2f}")
    with k3:
        st.metric("Balance", f"${summary.balance:,.2f}")
    with k4:
        top = summary.top_expense_category.map(lambda item: f"{item[0]} (${item[1]:,.2f})")
        st.metric("Top Expense Category", top.get_or_else("-"))

    st.caption(
        f"This month: income ${summary.month_income:,.2f}, expenses ${summary.month_expenses:,.2f}"
    )

    st.subheader("💡 Spending Insights")
    insights = result["insights"]
    if not insights:
        st.info("No insights available yet. Add more transactions and budgets to get personalized insights.")
    for insight in insights:
        box = {"warning": st.warning, "success": st.success}.get(insight.kind, st.info)
        text = f"**{insight.title}**\n\n{insight.description}"
        if insight.amount:
            text += f"\n\nAmount: ${insight.amount:.2f}"
        box(text)

    st.subheader("🕒 Recent Transactions")
    if summary.recent:
        st.table(pd.DataFrame([
            {"Date": t.date, "Description": t.description, "Category": t.category,
             "Amount": f"{'+' if t.type == 'income' else '-'}${t.amount:,.2f}"}
            for t in summary.recent
        ]))
    else:
        st.info("No transactions yet.")

elif menu == "🎯 Budgets":
    st.title("🎯 Budgets")
    render_alerts()

    current = now.strftime("%Y-%m")
    months = available_months(store.budgets, current)
    selected_month = st.selectbox("Month", months, index=months.index(current), format_func=month_title)

    editing_id = st.session_state.get("editing_budget")
    editing = next((b for b in store.budgets if b.id == editing_id), None)

    st.subheader("✏️ Edit Budget" if editing else "➕ Set Budget")
    with st.form("budget_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            month = st.text_input("Month (YYYY-MM)", value=editing.month if editing else selected_month)
        with col2:
            options = budget_categories_available(store.budgets, month, editing) or list(EXPENSE_CATEGORIES)
            category = st.selectbox(
                "Category", options,
                index=options.index(editing.category) if editing and editing.category in options else 0,
            )
        amount = st.number_input("Amount ($)", min_value=0.0, step=10.0, format="%.2f",
                                 value=float(editing.amount) if editing else 0.0)
        submitted = st.form_submit_button("Save Budget")

        if submitted:
            budget = Budget(id=editing.id if editing else new_id(), category=category,
                            amount=amount, month=month.strip())
            updated = replace_budget(store.budgets, budget) if editing else add_budget(store.budgets, budget)
            if updated.is_left():
                show_errors(updated.get_error())
            else:
                st.session_state.pop("editing_budget", None)
                commit(BUDGETS_CHANGED, replace(store, budgets=updated.get_or_else(store.budgets)))
                st.success("✅ Budget saved!")
                st.rerun()

    st.subheader(f"📋 Budgets for {month_title(selected_month)}")
    rows = budget_comparison_rows(store.transactions, store.budgets, selected_month)
    month_budgets = [b for b in store.budgets if b.month == selected_month]
    if not month_budgets:
        st.info("No budgets set for this month.")
    status_icon = {"over": "🔴", "on-track": "🟡", "under": "🟢"}
    for b in month_budgets:
        row = evaluate(b, store.transactions)
        col_a, col_b, col_c = st.columns([6, 1, 1])
        with col_a:
            st.write(f"{status_icon[row.status]} **{b.category}**: ${row.actual_spent:,.2f} / ${b.amount:,.2f} "
                     f"({row.percentage:.1f}%, ${row.remaining:,.2f} left)")
            st.progress(float(np.clip(row.percentage / 100, 0, 1)))
        with col_b:
            if st.button("✏️", key=f"edit_budget_{b.id}"):
                st.session_state.editing_budget = b.id
                st.rerun()
        with col_c:
            if st.button("🗑", key=f"delete_budget_{b.id}"):
                commit(BUDGETS_CHANGED, replace(store, budgets=delete_budget(store.budgets, b.id)))
                st.rerun()

    if rows:
        df_rows = pd.DataFrame([
            {"Category": r.category, "Budgeted": r.budget_amount, "Actual": r.actual_spent}
            for r in rows
        ])
        fig = go.Figure()
        fig.add_trace(go.Bar(x=df_rows["Category"], y=df_rows["Budgeted"], name="Budgeted"))
        fig.add_trace(go.Bar(x=df_rows["Category"], y=df_rows["Actual"], name="Actual"))
        fig.update_layout(barmode="group", template="plotly_dark", title="Budget vs Actual")
        st.plotly_chart(fig, use_container_width=True)

elif menu == "📈 Charts":
    st.title("📈 Monthly Income & Expenses")
    series = result["monthly_series"]
    if series:
        df_ts = pd.DataFrame([{"Month": m.label, "Income": m.income, "Expenses": m.expense} for m in series])
        fig_ts = go.Figure()
        fig_ts.add_trace(go.Bar(x=df_ts["Month"], y=df_ts["Income"], name="Income"))
        fig_ts.add_trace(go.Bar(x=df_ts["Month"], y=df_ts["Expenses"], name="Expenses"))
        fig_ts.update_layout(barmode="group", template="plotly_dark", margin=dict(t=30, b=10, l=10, r=10))
        st.plotly_chart(fig_ts, use_container_width=True)
        st.table(df_ts)
    else:
        st.info("No transactions to chart.")

elif menu == "🥧 Categories":
    st.title("🥧 Categories")
    col_exp, col_inc = st.columns(2)
    for col, key, title in ((col_exp, "expense_breakdown", "Expenses"), (col_inc, "income_breakdown", "Income")):
        with col:
            slices = result[key]
            if not slices:
                st.info(f"No {title.lower()} yet")
                continue
            df_cat = pd.DataFrame([{"Category": s.name, "Total": s.value, "Color": s.color} for s in slices])
            fig_cat = px.pie(
                df_cat,
                values="Total",
                names="Category",
                title=f"{title} by Category",
                color="Category",
                color_discrete_map=dict(zip(df_cat["Category"], df_cat["Color"])),
            )
            st.plotly_chart(fig_cat, use_container_width=True)

elif menu == "🧾 Transactions":
    st.title("🧾 Transactions")

    editing_id = st.session_state.get("editing_tx")
    editing = next((t for t in store.transactions if t.id == editing_id), None)

    tx_type = st.radio("Type", ["expense", "income"], horizontal=True,
                       index=1 if editing and editing.type == "income" else 0)
    st.subheader("✏️ Edit Transaction" if editing else "➕ Add Transaction")
    with st.form("input_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            date = st.date_input("Date", value=pd.to_datetime(editing.date).date() if editing else now.date())
            amount = st.number_input("Amount ($)", min_value=0.0, step=1.0, format="%.2f",
                                     value=float(editing.amount) if editing else 0.0)
        with col2:
            options = list(categories_for(tx_type))
            category = st.selectbox(
                "Category", options,
                index=options.index(editing.category) if editing and editing.category in options else 0,
            )
        description = st.text_input("Description", value=editing.description if editing else "")
        submitted = st.form_submit_button("Save Transaction")

        if submitted:
            tx = Transaction(
                id=editing.id if editing else new_id(),
                amount=amount,
                date=date.strftime("%Y-%m-%d"),
                description=description.strip(),
                type=tx_type,
                category=category,
            )
            checked = validate_transaction(tx)
            if checked.is_left():
                show_errors(checked.get_error())
            else:
                if editing:
                    trans = replace_transaction(store.transactions, tx)
                else:
                    trans = add_transaction(store.transactions, tx)
                st.session_state.pop("editing_tx", None)
                commit(TRANSACTIONS_CHANGED, replace(store, transactions=trans))
                st.success("✅ Transaction saved!")
                st.rerun()

    st.divider()

    col_s, col_t, col_o, col_d = st.columns([3, 1, 1, 1])
    with col_s:
        search = st.text_input("Search", "")
    with col_t:
        type_filter = st.selectbox("Filter", ["all", "income", "expense"])
    with col_o:
        sort_by = st.selectbox("Sort by", ["date", "amount", "description"])
    with col_d:
        descending = st.selectbox("Order", ["Descending", "Ascending"]) == "Descending"

    shown = filter_transactions(store.transactions, search, type_filter, sort_by, descending)
    if not shown:
        st.info("No transactions match the selected filters" if store.transactions else "No transactions yet")
    for t in shown:
        col_a, col_b, col_c = st.columns([8, 1, 1])
        with col_a:
            sign = "+" if t.type == "income" else "-"
            st.write(f"{t.date} · **{t.description}** · {t.category} · {sign}${t.amount:,.2f}")
        with col_b:
            if st.button("✏️", key=f"edit_tx_{t.id}"):
                st.session_state.editing_tx = t.id
                st.rerun()
        with col_c:
            if st.button("🗑", key=f"delete_tx_{t.id}"):
                commit(TRANSACTIONS_CHANGED, replace(store, transactions=delete_transaction(store.transactions, t.id)))
                st.rerun()

    if shown:
        csv = pd.DataFrame([vars(t) for t in shown]).to_csv(index=False)
        st.download_button("⬇ Download CSV", csv, file_name="transactions.csv", mime="text/csv")
