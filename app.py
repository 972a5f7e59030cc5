"""Baccarat Exact-EV Advisor — Streamlit Dashboard.

Table-side advisor: record every card seen on the table and the exact
probability and EV of every wager is recomputed from the remaining shoe.

  Sidebar — capital, rolling %, banker mode, payout table
  Tab 1   — Recommendations   (positive-EV bets, Kelly stakes, horizon outlook)
  Tab 2   — All Bets          (probability / payout / EV table + Plotly chart)
  Tab 3   — Card Inventory    (per-rank −/+, quick entry, history, reset)

Run:
    streamlit run app.py
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from src.analysis.advisor import LatestResultPublisher
from src.analysis.bankroll import bet_std, recommend
from src.engine.cards import RANK_LABELS, RANKS
from src.engine.tracker import SEPARATOR, ShoeTracker
from src.solvers.payouts import DEFAULT_TABLE_PAYOUTS, BankerMode, PayoutConfig

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

TABLE_ROLLING: float = 1.5
DEFAULT_BANKROLL: float = 10_000_000.0
EV_WORKERS: int = 2

# ─── Page config ──────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Baccarat Exact-EV Advisor",
    page_icon="🂡",
    layout="wide",
)

# ─── Shared resources ─────────────────────────────────────────────────────────


@st.cache_resource
def _ev_executor() -> ThreadPoolExecutor:
    """One worker pool for every session (cached for the process lifetime)."""
    return ThreadPoolExecutor(max_workers=EV_WORKERS, thread_name_prefix="ev")


# ─── Session state ────────────────────────────────────────────────────────────

if "tracker" not in st.session_state:
    st.session_state["tracker"] = ShoeTracker()
if "publisher" not in st.session_state:
    st.session_state["publisher"] = LatestResultPublisher(executor=_ev_executor())

tracker: ShoeTracker = st.session_state["tracker"]
publisher: LatestResultPublisher = st.session_state["publisher"]


def _apply_quick_entry() -> None:
    """Record every keystroke typed into the quick-entry box, then clear it."""
    keys = st.session_state.get("quick_entry", "")
    for key in keys:
        tracker.record_key("Enter" if key == SEPARATOR else key)
    st.session_state["quick_entry"] = ""


def _undo() -> None:
    try:
        tracker.undo()
    except ValueError:
        st.toast("Nothing to undo.")


# ─── Sidebar controls ─────────────────────────────────────────────────────────

with st.sidebar:
    st.title("🂡 Exact-EV Advisor")
    st.markdown("---")

    bankroll = st.number_input("Capital", min_value=0.0, value=DEFAULT_BANKROLL, step=100_000.0)
    rolling = st.number_input("Rolling %", min_value=0.0, value=TABLE_ROLLING, step=0.1)

    mode = st.radio(
        "Banker mode",
        options=[BankerMode.COMMISSION, BankerMode.NO_COMMISSION],
        format_func=lambda m: "Commission" if m is BankerMode.COMMISSION else "No commission (6 pays half)",
    )

    base = DEFAULT_TABLE_PAYOUTS
    with st.expander("Payout table"):
        edits: dict[str, float] = {
            "banker": st.number_input("Banker", value=base.banker, step=0.01),
            "player": st.number_input("Player", value=base.player, step=0.01),
            "tie": st.number_input("Tie", value=base.tie),
            "player_pair": st.number_input("Player Pair", value=base.player_pair),
            "banker_pair": st.number_input("Banker Pair", value=base.banker_pair),
            "tiger.two_cards": st.number_input("Tiger (2 cards)", value=base.tiger.two_cards),
            "tiger.three_cards": st.number_input("Tiger (3 cards)", value=base.tiger.three_cards),
            "small_tiger": st.number_input("Small Tiger", value=base.small_tiger),
            "big_tiger": st.number_input("Big Tiger", value=base.big_tiger),
            "tiger_tie": st.number_input("Tiger Tie", value=base.tiger_tie),
            "tiger_pair.same": st.number_input("Tiger Pair (same)", value=base.tiger_pair.same),
            "tiger_pair.dual": st.number_input("Tiger Pair (dual)", value=base.tiger_pair.dual),
            "tiger_pair.single": st.number_input("Tiger Pair (single)", value=base.tiger_pair.single),
        }
        for point in range(10):
            edits[f"tie_bonus_{point}"] = st.number_input(f"Tie {point} bonus", value=base.tie_bonus[point])

    payouts: PayoutConfig = base.with_changes(banker_mode=mode, **edits)

# ─── Recompute ────────────────────────────────────────────────────────────────

publisher.submit(tracker.snapshot(), payouts=payouts, rolling=rolling)
generation, result = publisher.wait()

# ─── Tabs ─────────────────────────────────────────────────────────────────────

tab1, tab2, tab3 = st.tabs(["Recommendations", "All Bets", "Card Inventory"])

# ── Tab 1: Recommendations ────────────────────────────────────────────────────

with tab1:
    st.header("Recommendations")
    st.metric("Cards remaining", tracker.total)
    recs = recommend(result, bankroll) if result is not None else []
    if not recs:
        st.info("No positive-EV bet in this shoe.")
    else:
        cols = st.columns(min(len(recs), 4))
        for i, rec in enumerate(recs):
            cols[i % len(cols)].metric(
                rec.bet.label,
                f"{rec.stake:,}",
                f"EV {rec.bet.ev * 100:+.4f}%",
            )

        st.subheader("Outlook if the stake is repeated")
        st.caption("95% CLT interval on cumulative profit; assumes the current edge holds.")
        rows = [
            {
                "Bet": rec.bet.label,
                "Stake": rec.stake,
                "Hands": p.n_bets,
                "Expected": p.expected_profit,
                "95% low": p.ci_low,
                "95% high": p.ci_high,
                "P(profit)": p.prob_positive,
            }
            for rec in recs
            for p in rec.projections
        ]
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

# ── Tab 2: All Bets ───────────────────────────────────────────────────────────

with tab2:
    st.header("All Bets")
    if result is not None:
        bets = result.all_bets()
        df = pd.DataFrame(
            {
                "Bet": [b.label for b in bets],
                "P(win)": [b.probability for b in bets],
                "Payout": [b.payout for b in bets],
                "EV %": [b.ev * 100 for b in bets],
                "Std": [bet_std(b) for b in bets],
            }
        )
        st.dataframe(df, use_container_width=True, hide_index=True)

        fig = go.Figure(
            go.Bar(
                x=df["Bet"],
                y=df["EV %"],
                marker_color=["#2ca02c" if v > 0 else "#d62728" for v in df["EV %"]],
            )
        )
        fig.update_layout(yaxis_title="EV (%)", height=420, margin=dict(t=20))
        st.plotly_chart(fig, use_container_width=True)
        st.caption(f"Result generation {generation} · {result.total_cards} cards")

# ── Tab 3: Card Inventory ─────────────────────────────────────────────────────

with tab3:
    st.header("Card Inventory")
    st.text_input(
        "Quick entry (1–9, 0 = ten, J/Q/K, | = separator)",
        key="quick_entry",
        on_change=_apply_quick_entry,
    )

    cols = st.columns(len(RANKS))
    for col, rank in zip(cols, RANKS):
        with col:
            st.markdown(f"**{RANK_LABELS[rank]}**  \n{tracker.count(rank)}")
            st.button("−", key=f"minus_{rank}", on_click=tracker.record, args=(rank,))
            st.button("+", key=f"plus_{rank}", on_click=tracker.unrecord, args=(rank,))

    c1, c2, c3, c4 = st.columns(4)
    c1.button("Separator", on_click=tracker.separator)
    c2.button("Undo", on_click=_undo)
    c3.button("Clear history", on_click=tracker.clear_history)
    c4.button("Reset shoe", on_click=tracker.reset, type="primary")

    st.subheader("Card history")
    st.code(" ".join(tracker.history) if tracker.history else "No cards recorded yet.", language=None)
