"""Streamlit front-end for the prize wheel economics simulator."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Optional

import altair as alt
import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from wheel_core import (
    BreakOutcome,
    ConfigurationStore,
    HouseStats,
    SimulationMode,
    WheelConfig,
    WheelError,
    WheelSession,
    add_prize,
    break_profit_histogram,
    clamp_commission,
    history_frame,
    make_config,
    move_prize,
    prize_distribution_frame,
    remove_prize,
    reset_prizes,
    summarize_breaks,
    toggle_stop_when_hit,
    with_parameters,
)
from wheel_core.formatting import (
    format_currency,
    format_large_number,
    format_probability,
    format_probability_as_odds,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s",
)

MODE_LABELS = {
    SimulationMode.NORMAL: "Normal (slots can repeat)",
    SimulationMode.REMOVE_HIT_SLOTS: "Remove hit slots (breaks)",
}
BATCH_SIZES = [10, 100, 1000, 10_000]
HISTORY_ROWS = 100
BREAK_SAMPLE_LIMIT = 50_000
STORE_PATH = Path(__file__).resolve().parent / "saved_configurations.json"


def get_store() -> ConfigurationStore:
    return ConfigurationStore(STORE_PATH)


def ensure_session_state_defaults() -> None:
    """Populate Streamlit session state with expected default entries."""

    if "wheel_config" not in st.session_state:
        st.session_state.wheel_config = make_config()
    if "wheel_session" not in st.session_state:
        st.session_state.wheel_session = WheelSession(st.session_state.wheel_config)

    st.session_state.setdefault("wheel_error", None)
    st.session_state.setdefault("last_breaks", [])
    st.session_state.setdefault("mode", SimulationMode.NORMAL)
    st.session_state.setdefault("batch_size", 100)
    st.session_state.setdefault("new_prize_name", "")
    st.session_state.setdefault("new_prize_cost", 20.0)
    st.session_state.setdefault("new_prize_slots", 1)


def apply_config(config: WheelConfig) -> None:
    """Store a new configuration and hand it to the running session."""

    st.session_state.wheel_config = config
    st.session_state.wheel_session.update_config(config)
    # checkbox widgets must re-read stop flags from the new config
    for key in [key for key in st.session_state if str(key).startswith("stop_")]:
        del st.session_state[key]


def load_saved_config(config_id: int) -> None:
    """Replace the configuration with a saved one and start a fresh session."""

    config = get_store().load_configuration(config_id)
    st.session_state.wheel_session = WheelSession(config)
    st.session_state.last_breaks = []
    apply_config(config)


def render_saved_configs_sidebar() -> None:
    """Offer saved configurations for loading into the simulator."""

    summaries = get_store().list_configurations()
    with st.sidebar:
        st.subheader("Saved configurations")
        if not summaries:
            st.caption("Nothing saved yet.")
            return
        labels = {s["id"]: f"#{s['id']} {s['name']}" for s in summaries}
        choice = st.selectbox("Configuration", options=list(labels), format_func=labels.get)
        if st.button("Load", key="load_saved_config"):
            run_guarded(lambda: load_saved_config(int(choice)))


def run_guarded(action: Callable[[], object]) -> None:
    """Run a config or simulation action, surfacing engine errors in the UI."""

    st.session_state.wheel_error = None
    try:
        action()
    except (WheelError, KeyError) as exc:
        st.session_state.wheel_error = str(exc)


def render_game_parameters(config: WheelConfig) -> None:
    """Render wheel-level inputs and apply them when submitted."""

    with st.container(border=True):
        st.markdown('<div class="card-title">Game parameters</div>', unsafe_allow_html=True)
        with st.form("game_parameters"):
            col1, col2 = st.columns(2)
            total_slots = col1.number_input(
                "Total slots", min_value=1, step=1, value=int(config.total_slots)
            )
            price = col2.number_input(
                "Price per spin", min_value=0.0, step=1.0, value=float(config.price_per_spin)
            )
            col3, col4 = st.columns(2)
            default_prize = col3.number_input(
                "Default prize value", min_value=0.0, step=1.0, value=float(config.default_prize)
            )
            commission = col4.number_input(
                "Commission (%)",
                min_value=0.0,
                max_value=100.0,
                step=0.5,
                value=float(config.commission_percent),
            )
            submitted = st.form_submit_button("Apply parameters")
        if submitted:
            run_guarded(
                lambda: apply_config(
                    with_parameters(
                        config,
                        total_slots=int(total_slots),
                        price_per_spin=float(price),
                        default_prize=float(default_prize),
                        commission_percent=clamp_commission(commission),
                    )
                )
            )
        st.caption(
            f"{config.allocated_slots} of {config.total_slots} slots hold named prizes; "
            f"{config.remaining_slots} pay the default prize."
        )


def render_prize_table(config: WheelConfig) -> None:
    """Render the ordered prize list with per-row actions and an add form."""

    with st.container(border=True):
        st.markdown('<div class="card-title">Prizes</div>', unsafe_allow_html=True)
        first_slot = 1
        for index, prize in enumerate(config.prizes):
            last_slot = first_slot + prize.slot_count - 1
            name_col, slot_col, stop_col, up_col, remove_col = st.columns([2.2, 1.6, 1.2, 0.5, 0.7])
            name_col.markdown(f"**{prize.name}** · {format_currency(prize.unit_cost)}")
            slot_col.caption(f"Slots {first_slot}–{last_slot}")
            stop_value = stop_col.checkbox(
                "Stops break",
                value=prize.stop_when_hit,
                key=f"stop_{prize.id}",
            )
            if stop_value != prize.stop_when_hit:
                run_guarded(lambda pid=prize.id: apply_config(toggle_stop_when_hit(config, pid)))
            if up_col.button("↑", key=f"up_{prize.id}", disabled=index == 0):
                run_guarded(
                    lambda pid=prize.id, i=index: apply_config(move_prize(config, pid, i - 1))
                )
            if remove_col.button("Remove", key=f"remove_{prize.id}"):
                run_guarded(lambda pid=prize.id: apply_config(remove_prize(config, pid)))
            first_slot = last_slot + 1

        with st.form("add_prize", clear_on_submit=True):
            name_col, cost_col, slots_col = st.columns([2, 1, 1])
            name = name_col.text_input("Prize name", key="new_prize_name")
            cost = cost_col.number_input("Prize value", min_value=0.0, step=1.0, key="new_prize_cost")
            slots = slots_col.number_input("Slots", min_value=1, step=1, key="new_prize_slots")
            added = st.form_submit_button("Add prize")
        if added:
            run_guarded(
                lambda: apply_config(add_prize(config, name, float(cost), int(slots)))
            )

        if st.button("Reset to default prizes", type="secondary"):
            run_guarded(lambda: apply_config(reset_prizes(config)))


def record_breaks(breaks: list[BreakOutcome]) -> None:
    """Keep the most recent break summaries for the distribution chart."""

    combined = st.session_state.last_breaks + breaks
    st.session_state.last_breaks = combined[-BREAK_SAMPLE_LIMIT:]


def make_progress_callback(total: int):
    """Return a ``progress(done, total)`` callback bound to a Streamlit bar."""

    if total < 1000:
        return None
    bar = st.progress(0.0, text="Simulating…")

    def _update(done: int, expected: int) -> None:
        bar.progress(min(done / expected, 1.0), text=f"Simulating… {done:,}/{expected:,}")

    return _update


def render_simulation_controls(session: WheelSession) -> None:
    """Render mode selection and the spin/break buttons."""

    with st.container(border=True):
        st.markdown('<div class="card-title">Simulation</div>', unsafe_allow_html=True)
        mode = st.radio(
            "Mode",
            options=list(MODE_LABELS),
            format_func=MODE_LABELS.get,
            key="mode",
            horizontal=True,
        )
        st.select_slider("Batch size", options=BATCH_SIZES, key="batch_size")
        batch_size = int(st.session_state.batch_size)

        single_col, batch_col, clear_col = st.columns(3)
        if mode == SimulationMode.NORMAL:
            if single_col.button("Spin once", type="primary"):
                run_guarded(session.spin_once)
            if batch_col.button(f"Spin {batch_size:,} times"):
                progress = make_progress_callback(batch_size)
                run_guarded(lambda: session.spin_batch(batch_size, progress=progress))
        else:
            if single_col.button("Run 1 break", type="primary"):
                run_guarded(lambda: record_breaks(session.run_breaks(1).breaks))
            if batch_col.button(f"Run {batch_size:,} breaks"):
                progress = make_progress_callback(batch_size)
                run_guarded(
                    lambda: record_breaks(session.run_breaks(batch_size, progress=progress).breaks)
                )
        if clear_col.button("Clear history", type="secondary"):
            session.clear_history()
            st.session_state.last_breaks = []
            st.session_state.wheel_error = None


def render_latest_result(session: WheelSession) -> None:
    snapshot = session.snapshot
    if snapshot is None:
        st.caption("Spin the wheel to see results.")
        return
    with st.container(border=True):
        st.markdown("**Latest result**")
        cols = st.columns(4)
        cols[0].metric("Attempt", format_large_number(snapshot.target_hit_attempt))
        cols[1].metric("Slot", snapshot.final_slot)
        cols[2].metric("Prize", snapshot.final_prize_name, format_currency(snapshot.final_prize))
        cols[3].metric("House profit", format_currency(snapshot.final_profit))
        st.caption(f"Amount wagered in this run: {format_currency(snapshot.total_cost)}")


def render_break_record(
    label: str,
    record: Optional[BreakOutcome],
    probability: float,
    spin_probability: float,
) -> None:
    if record is None:
        st.caption(f"{label}: no breaks yet")
        return
    st.markdown(
        f"**{label}**: {record.spin_count} spins, {format_currency(record.total_profit)} "
        f"({format_currency(record.profit_per_spin)}/spin)  \n"
        f"Recurrence {format_probability(probability)} · "
        f"sequence odds {format_probability_as_odds(spin_probability)}"
    )


def render_house_stats(stats: HouseStats, mode: SimulationMode) -> None:
    """Render running house totals, risk, and break records."""

    with st.container(border=True):
        st.markdown("**House statistics**")
        cols = st.columns(4)
        cols[0].metric("Total earnings", format_currency(stats.total_earnings))
        cols[1].metric("Total spins", format_large_number(stats.total_spins))
        cols[2].metric("Total breaks", format_large_number(stats.total_breaks))
        risk_label = "Risk next spin" if mode == SimulationMode.NORMAL else "Risk next break"
        cols[3].metric(risk_label, format_probability(stats.short_term_risk))

        average = stats.average_profit_per_spin
        if average is not None:
            st.caption(f"Average house profit per spin: {format_currency(average)}")

        if stats.total_breaks:
            probabilities = stats.probabilities
            render_break_record(
                "Best break",
                stats.best_break,
                probabilities.best_break_probability,
                probabilities.best_break_spin_probability,
            )
            render_break_record(
                "Worst break",
                stats.worst_break,
                probabilities.worst_break_probability,
                probabilities.worst_break_spin_probability,
            )

        distribution = prize_distribution_frame(stats)
        if not distribution.empty:
            chart = alt.Chart(distribution).mark_bar(color="#6366f1", opacity=0.9).encode(
                x=alt.X("hits:Q", title="Hits"),
                y=alt.Y("prize:N", sort="-x", title=None),
                tooltip=[
                    alt.Tooltip("prize:N", title="Prize"),
                    alt.Tooltip("hits:Q", title="Hits", format=","),
                    alt.Tooltip("share:Q", title="Share", format=".2%"),
                ],
            ).properties(height=max(60, 28 * len(distribution)))
            st.altair_chart(chart.configure_view(strokeOpacity=0), use_container_width=True)


def render_break_distribution(breaks: list[BreakOutcome]) -> None:
    if not breaks:
        return
    with st.container(border=True):
        st.markdown("**Break profit per spin**")
        summary = summarize_breaks(breaks)
        cols = st.columns(3)
        cols[0].metric("Mean spins / break", f"{summary['mean_spins']:.1f}")
        cols[1].metric("95th percentile spins", f"{summary['p95_spins']:.0f}")
        cols[2].metric("Losing breaks", format_probability(summary["losing_share"]))
        histogram = break_profit_histogram(breaks)
        chart = alt.Chart(histogram).mark_bar(
            color="#6366f1",
            opacity=0.9,
            cornerRadiusTopLeft=2,
            cornerRadiusTopRight=2,
        ).encode(
            x=alt.X("bin_start:Q", title="Profit per spin"),
            x2="bin_end:Q",
            y=alt.Y("probability:Q", title="Share of breaks", axis=alt.Axis(format=".0%")),
            tooltip=[
                alt.Tooltip("bin_start:Q", title="From", format=".2f"),
                alt.Tooltip("bin_end:Q", title="To", format=".2f"),
                alt.Tooltip("count:Q", title="Breaks", format=","),
            ],
        ).properties(height=220)
        st.altair_chart(chart.configure_view(strokeOpacity=0), use_container_width=True)


def render_history(session: WheelSession) -> None:
    history = session.history
    if not history:
        return
    with st.expander(f"Spin history (last {min(len(history), HISTORY_ROWS)} shown)"):
        frame = history_frame(history)
        st.dataframe(frame.tail(HISTORY_ROWS).iloc[::-1], hide_index=True, use_container_width=True)
        line = alt.Chart(frame).mark_line(color="#0f172a").encode(
            x=alt.X("attempt:Q", title="Attempt"),
            y=alt.Y("cumulative_profit:Q", title="Cumulative profit (retained spins)"),
        ).properties(height=180)
        st.altair_chart(line, use_container_width=True)


def render_save_form(config: WheelConfig) -> None:
    with st.expander("Save configuration"):
        with st.form("save_configuration", clear_on_submit=True):
            name = st.text_input("Name")
            description = st.text_area("Description")
            is_public = st.checkbox("Public")
            submitted = st.form_submit_button("Save")
        if submitted:
            try:
                config_id = get_store().save_configuration(config, name, description, is_public)
            except WheelError as exc:
                st.error(str(exc))
            else:
                st.success(f"Saved as configuration #{config_id}.")


def apply_page_styling() -> None:
    """Inject CSS tweaks that style the Streamlit app."""

    st.set_page_config(page_title="Prize Wheel Simulator", layout="centered")
    st.markdown(
        """
        <style>
        div[data-testid="stVerticalBlockBorderWrapper"] {
            border: 1px solid #e3e6eb;
            border-radius: 12px;
            padding: 1.25rem;
            background-color: #ffffff;
            box-shadow: 0 4px 10px rgba(15, 23, 42, 0.06);
            margin-bottom: 1.25rem;
        }
        .card-title {
            font-size: 1.1rem;
            font-weight: 600;
            margin-bottom: 0.8rem;
        }
        div[data-testid="stMetricValue"] {
            font-size: 1.5rem;
            font-weight: 600;
            color: #0f172a;
        }
        div[data-testid="stMetricLabel"] {
            font-size: 0.95rem;
            color: #475569;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def main() -> None:
    """Entry point used by Streamlit."""

    apply_page_styling()
    ensure_session_state_defaults()

    st.title("Prize Wheel Simulator")
    render_saved_configs_sidebar()
    config: WheelConfig = st.session_state.wheel_config
    session: WheelSession = st.session_state.wheel_session

    render_game_parameters(config)
    render_prize_table(st.session_state.wheel_config)
    render_simulation_controls(session)

    if st.session_state.wheel_error:
        st.error(st.session_state.wheel_error)

    render_latest_result(session)
    render_house_stats(session.stats, session.mode)
    render_break_distribution(st.session_state.last_breaks)
    render_history(session)
    render_save_form(st.session_state.wheel_config)


if __name__ == "__main__":
    main()
