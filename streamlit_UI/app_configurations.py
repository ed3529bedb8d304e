"""Streamlit helper UI for browsing and managing saved wheel configurations."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Final

import pandas as pd
import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from wheel_core import (
    ConfigurationStore,
    SimulationMode,
    WheelError,
    simulate,
)
from wheel_core.formatting import format_currency, format_probability

STORE_FILE: Final[Path] = Path(__file__).resolve().parent / "saved_configurations.json"
PREVIEW_RUNS: Final[int] = 1000
LAYOUT_STYLES: Final[str] = """
<style>
    div.block-container {
        padding-top: 1.5rem;
    }
    .config-row-divider {
        border-bottom: 1px solid rgba(128, 128, 128, 0.25);
        margin: 0.4rem 0 0.4rem 0;
    }
</style>
"""


def get_relative_store_path() -> str:
    """Return a workspace-relative path for display."""

    try:
        return str(STORE_FILE.relative_to(Path.cwd()))
    except ValueError:
        return str(STORE_FILE)


def rerun_app() -> None:
    """Trigger a Streamlit rerun that works across Streamlit versions."""

    rerun_callable = getattr(st, "rerun", None)
    if callable(rerun_callable):
        rerun_callable()
        return

    experimental_rerun = getattr(st, "experimental_rerun", None)
    if callable(experimental_rerun):
        experimental_rerun()


def render_preview(store: ConfigurationStore, config_id: int) -> None:
    """Show the prize table and a quick seeded simulation for one configuration."""

    config = store.load_configuration(config_id)
    prizes = pd.DataFrame(
        [
            {
                "Prize": prize.name,
                "Value": prize.unit_cost,
                "Slots": prize.slot_count,
                "Stops break": prize.stop_when_hit,
            }
            for prize in config.prizes
        ]
    )
    st.dataframe(prizes, hide_index=True, use_container_width=True)
    st.caption(f"{config.remaining_slots} default slots paying {format_currency(config.default_prize)}")

    normal = simulate(config, SimulationMode.NORMAL, runs=PREVIEW_RUNS)
    cols = st.columns(2)
    edge = normal.house_edge
    cols[0].metric(
        f"House edge over {PREVIEW_RUNS:,} spins",
        format_probability(edge) if edge is not None else "N/A",
    )
    if config.stop_ranges:
        breaks = simulate(config, SimulationMode.REMOVE_HIT_SLOTS, runs=PREVIEW_RUNS // 10)
        cols[1].metric(
            f"Earnings over {PREVIEW_RUNS // 10:,} breaks",
            format_currency(breaks.stats.total_earnings),
        )
    else:
        cols[1].caption("No prize stops a break.")


def render_config_row(store: ConfigurationStore, summary: dict) -> None:
    """Render a single saved configuration with its actions."""

    config_id = int(summary["id"])
    info_col, delete_col = st.columns([7, 1.2], gap="small")
    visibility = "public" if summary["isPublic"] else "private"
    info_col.markdown(
        f"**#{config_id} {summary['name']}** · {summary['totalSlots']} slots · "
        f"{summary['prizeCount']} prizes · {visibility}"
    )
    if summary["description"]:
        info_col.caption(summary["description"])

    if delete_col.button("Delete", key=f"delete_{config_id}", type="secondary"):
        store.delete_configuration(config_id)
        rerun_app()

    with info_col.expander("Preview"):
        try:
            render_preview(store, config_id)
        except WheelError as exc:
            st.warning(f"Stored configuration is invalid: {exc}")

    st.markdown('<div class="config-row-divider"></div>', unsafe_allow_html=True)


def main() -> None:
    """Render the Streamlit application."""

    st.set_page_config(page_title="Saved Wheel Configurations", layout="wide")
    st.markdown(LAYOUT_STYLES, unsafe_allow_html=True)
    st.title("Saved Configurations")
    st.caption(f"Configurations are stored in `{get_relative_store_path()}`.")

    store = ConfigurationStore(STORE_FILE)
    summaries = store.list_configurations()
    if not summaries:
        st.info("No saved configurations yet. Save one from the simulator page; load them from its sidebar.", icon="ℹ️")
        return

    for summary in summaries:
        render_config_row(store, summary)


if __name__ == "__main__":
    main()
