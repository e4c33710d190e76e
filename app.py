"""Farmer's Burden (Streamlit)

Presentation layer only.

Principles:
- UI only renders + triggers.
- Core rules and the season engine are pure Python modules (core/, engine/).
- Every state change goes through engine.session.GameSession; the UI reads
  the frozen snapshot it returns and shows the notices.

Entry point: streamlit run app.py
"""

from __future__ import annotations

import asyncio
import os
from datetime import datetime
from typing import List, Optional

import streamlit as st

from content.decisions import decision_for_week
from content.locations import LOCATIONS
from content.schemas import format_consequence
from content.setup_options import BUSINESS_STRUCTURES, FARM_TYPES, URBAN_STATUSES
from core.state import STATUS_END, STATUS_SETUP, FarmState

from engine.config import EngineConfig
from engine.decisions import current_choice, pending_choice, preview_visible
from engine.logging import dumps_run_export
from engine.persistence import JsonFileStore
from engine.session import GameSession, Outcome
from engine.turn import Notice, monitoring_report


APP_TITLE = "Farmer's Burden"
APP_SUBTITLE = "Profit vs. Planet vs. Peace of Mind. A 24-week season, one decision at a time."
APP_VERSION = "1.0.0"

DEFAULT_SAVE_PATH = os.path.join(".farm_saves", "current_session.json")

st.set_page_config(page_title=APP_TITLE, page_icon="🌾", layout="wide", initial_sidebar_state="expanded")

CSS = """
<style>
.block-container {padding-top: 3.2rem; padding-bottom: 2rem;}
.card {
  border: 1px solid rgba(255,255,255,0.08);
  border-radius: 16px;
  padding: 14px 16px;
  background: rgba(255,255,255,0.03);
}
.dialogue {
  border-left: 4px solid rgba(120,200,255,0.5);
  padding: 10px 14px;
  font-family: monospace;
}
.headline {
  border-left: 4px solid rgba(255,120,120,0.7);
  padding: 10px 14px;
  background: rgba(255,120,120,0.08);
  border-radius: 8px;
}
hr.soft {border: none; border-top: 1px solid rgba(255,255,255,0.08); margin: 1rem 0;}
.small {font-size: 13px; opacity:.75;}
</style>
"""

st.markdown(CSS, unsafe_allow_html=True)


# =========================
# Helpers
# =========================


def _setting(name: str, default: str = "") -> str:
    # Streamlit Cloud: st.secrets; local: env
    try:
        if name in st.secrets:
            return str(st.secrets[name])  # type: ignore
    except FileNotFoundError:
        pass
    return os.getenv(name) or default


def _engine_config() -> EngineConfig:
    seed = _setting("FARM_SEED")
    delay = _setting("FARM_PROGRESS_DELAY")
    return EngineConfig(
        base_seed=int(seed) if seed.strip() else None,
        progress_delay=float(delay) if delay.strip() else 1.5,
    )


def _meter_badge(val: float) -> str:
    if val < 30:
        return "🔴"
    if val < 70:
        return "🟡"
    return "🟢"


def _show_notices(notices: List[Notice]) -> None:
    for n in notices:
        if n.level == "error":
            st.error(n.text)
        elif n.level == "warning":
            st.warning(n.text)
        elif n.level == "success":
            st.success(n.text)
        else:
            st.info(n.text)


# =========================
# Session State
# =========================


def _ensure_state() -> None:
    ss = st.session_state
    if "session" not in ss:
        store = JsonFileStore(_setting("FARM_SAVE_PATH", DEFAULT_SAVE_PATH))
        session = GameSession(config=_engine_config(), store=store)
        out = session.start()
        ss.session = session
        ss.notices = list(out.notices)
        ss.last_turn = None
    if "notices" not in ss:
        ss.notices = []
    if "last_turn" not in ss:
        ss.last_turn = None


def _session() -> GameSession:
    return st.session_state.session


def _take(out: Outcome) -> None:
    ss = st.session_state
    ss.notices = list(out.notices)
    if out.turn is not None:
        ss.last_turn = out.turn


def _with_progress(run) -> Outcome:
    """Show the progress screen while the next week is prepared."""
    card = _session().progress_card()
    with st.spinner(f"{card['emoji']} Week {card['week']} Progress Check: {card['text']}…"):
        return asyncio.run(run())


# =========================
# UI Pages
# =========================


def page_setup(state: FarmState) -> None:
    session = _session()
    st.title(state.farm_name or "FARMING SIMULATOR")
    st.caption(APP_SUBTITLE)

    phase = int(state.setup_phase)
    name_input: Optional[str] = None

    if phase == 0:
        st.markdown("<div class='dialogue'>Welcome! I am FARM-OS 3000. What would you like to call your farm?</div>", unsafe_allow_html=True)
        name_input = st.text_input("Farm Name (e.g., Doom Acres):", value=state.farm_name or "", placeholder="Name your doomed farm...")
        button = "CONFIRM NAME"

    elif phase == 1:
        st.markdown(f"<div class='dialogue'>Perfect, {state.farm_name}. Now, where in the world will you operate?</div>", unsafe_allow_html=True)
        st.markdown("Your **starting debt, infrastructure, and climate risks** are set by your location.")
        for key, loc in LOCATIONS.items():
            label = f"{loc.flag} {loc.name} · {loc.climate} | Role: {loc.development_status}"
            if st.button(label, key=f"loc_{key}", use_container_width=True, type="primary" if state.location == key else "secondary"):
                _take(session.select_setup_option("location", key))
                st.rerun()
        selected = LOCATIONS.get(state.location or "")
        if selected:
            st.info(f"Reality Check: Soil: {selected.soil} | Starting Debt: ${selected.starting_debt:,}")
        button = "CONFIRM LOCATION"

    elif phase == 2:
        loc = LOCATIONS[state.location]
        st.markdown(f"<div class='dialogue'>In {loc.name} ({loc.soil}), what will you focus on?</div>", unsafe_allow_html=True)
        cols = st.columns(len(FARM_TYPES))
        for col, (key, opt) in zip(cols, FARM_TYPES.items()):
            with col:
                if st.button(opt.label, key=f"ft_{key}", use_container_width=True, type="primary" if state.farm_type == key else "secondary"):
                    _take(session.select_setup_option("farm_type", key))
                    st.rerun()
        st.markdown("Neighborhood Type (Affects regulation/land cost):")
        cols = st.columns(len(URBAN_STATUSES))
        for col, (key, opt) in zip(cols, URBAN_STATUSES.items()):
            with col:
                if st.button(opt.label, key=f"us_{key}", use_container_width=True, type="primary" if state.urban_status == key else "secondary"):
                    _take(session.select_setup_option("urban_status", key))
                    st.rerun()
        button = "CONFIRM PRODUCTION"

    else:
        st.markdown("<div class='dialogue'>Final step: What is your business structure?</div>", unsafe_allow_html=True)
        for key, opt in BUSINESS_STRUCTURES.items():
            if st.button(f"{opt.label} ({opt.blurb})", key=f"bs_{key}", use_container_width=True, type="primary" if state.business_structure == key else "secondary"):
                _take(session.select_setup_option("business_structure", key))
                st.rerun()
        button = "FINALIZE & START SEASON"

    st.markdown("<hr class='soft'/>", unsafe_allow_html=True)
    if st.button(button, key=f"setup_next_{phase}", use_container_width=True):
        if phase == 3:
            card = session.progress_card()
            with st.spinner(f"{card['emoji']} {card['text']}…"):
                out = session.advance_setup_phase()
        else:
            out = session.advance_setup_phase(name=name_input)
        _take(out)
        st.rerun()


def status_panel(state: FarmState) -> None:
    cfg = _session().config
    a, b, c, d = st.columns(4)
    a.metric("Week", f"{state.week} of {cfg.max_weeks}")
    b.metric("Money", f"${state.money:,}")
    c.metric("Debt", f"${state.debt:,}")
    d.metric("Environment", f"{_meter_badge(state.environment)} {state.environment}%")

    r1, r2, r3, r4 = st.columns(4)
    r1.metric("Farmer Stress", f"{_meter_badge(100 - state.hidden_stress)} {state.hidden_stress}%")
    r2.metric("Infrastructure", f"{state.infrastructure_level}%")
    r3.metric("Climate Resilience", f"{state.climate_resilience}%")
    r4.metric("Consumer Risk", f"{state.health_risk}%")

    st.caption(f"{state.farm_name} · {state.location or 'N/A'} · {state.development_status or 'N/A'} · {state.business_structure or 'N/A'}")


def headline_panel() -> None:
    turn = st.session_state.get("last_turn")
    if turn is None or not turn.headline:
        return
    penalty = abs(int(turn.headline_penalty.get("money", 0)))
    st.markdown(
        f"<div class='headline'><b>BREAKING LOCAL NEWS:</b><br/>{turn.headline}"
        f"<div class='small'>Immediate Penalty: ${penalty:,} and Reputation Hit.</div></div>",
        unsafe_allow_html=True,
    )


def page_play(state: FarmState) -> None:
    session = _session()
    st.title(state.farm_name or APP_TITLE)
    status_panel(state)
    st.markdown("<hr class='soft'/>", unsafe_allow_html=True)
    headline_panel()

    decision = decision_for_week(state.week)
    if decision is None:
        report = monitoring_report(state)
        st.markdown(f"## {report['title']}")
        st.markdown(f"<div class='card'>🐞 <b>Observation:</b> {report['observation']}</div>", unsafe_allow_html=True)
        st.markdown("<br/>", unsafe_allow_html=True)
        st.markdown(f"<div class='card'>📋 <b>Farm Report:</b> {report['report']}</div>", unsafe_allow_html=True)
        if st.button(report["next_label"], key=f"advance_{state.week}", use_container_width=True):
            _take(_with_progress(session.advance_turn_async))
            st.rerun()
        return

    index = int(state.current_decision_index)
    choice = current_choice(state)
    st.markdown(f"**{decision.category}**")
    st.markdown(f"## {decision.prompt}")
    if st.button(choice.text, key=f"choice_{state.week}_{index}", use_container_width=True):
        _take(session.select_option(state.week, index))
        st.rerun()
    st.caption(f"Option {index + 1} of {len(decision.choices)}. Click the option to preview trade-offs.")

    if preview_visible(state):
        pending = pending_choice(state)
        st.markdown("<div class='card'>", unsafe_allow_html=True)
        st.markdown("**Consequence Preview:**")
        st.markdown(pending.consequence.narrative)
        st.markdown("**TRADE-OFFS:**")
        st.markdown(format_consequence(pending.consequence) or "No visible trade-offs.")
        st.markdown("</div>", unsafe_allow_html=True)

        c1, c2 = st.columns(2)
        with c1:
            if st.button("ACCEPT THIS OPTION", key=f"accept_{state.week}", use_container_width=True):
                _take(_with_progress(session.commit_async))
                st.rerun()
        with c2:
            if st.button("SEE NEXT OPTION", key=f"next_{state.week}", use_container_width=True):
                _take(session.cycle_option())
                st.rerun()


def page_end(state: FarmState) -> None:
    session = _session()
    legacy = session.legacy
    st.title("FARM LEGACY REPORT")
    st.markdown(f"### \"A Season at {state.farm_name}\"")
    if legacy is None:
        st.error("No legacy report available. Start a new farm.")
        return

    st.markdown("<div class='card'>", unsafe_allow_html=True)
    st.markdown("**NEGOTIATION DATA:**")
    st.markdown(f"National Loss Index (NLI): **{legacy.national_loss_index}%**")
    st.markdown(f"Your Role: **{legacy.development_status} Country**")
    st.markdown("</div>", unsafe_allow_html=True)

    a, b, c = st.columns(3)
    a.metric("Final Profit", f"${legacy.final_profit:,.0f}")
    b.metric("Yield Penalty", f"${legacy.yield_penalty:,.0f}")
    c.metric("Resilience Bonus", f"${legacy.resilience_bonus:,.0f}")

    st.markdown(f"## TOTAL LEGACY SCORE: {legacy.total_score:.0f}")
    st.markdown(f"### {legacy.legacy_rank}")
    st.caption("Screenshot this score to share and compare with friends!")

    if st.button("START NEW FARM", use_container_width=True):
        _take(session.reset())
        st.session_state.last_turn = None
        st.rerun()


# =========================
# Sidebar
# =========================


def sidebar() -> None:
    session = _session()
    st.sidebar.markdown(f"**{APP_TITLE}**  ")
    st.sidebar.markdown(f"v{APP_VERSION}")
    st.sidebar.markdown("---")

    seed = session.config.base_seed
    st.sidebar.caption(f"Seed: {seed if seed is not None else 'random'}")

    if st.sidebar.button("Reset", use_container_width=True):
        _take(session.reset())
        st.session_state.last_turn = None
        st.rerun()

    st.sidebar.markdown("---")
    st.sidebar.markdown("### Season Export")
    export = session.run_export()
    export["meta"] = {"app": APP_TITLE, "version": APP_VERSION, "exported_at": datetime.utcnow().isoformat() + "Z"}
    st.sidebar.download_button(
        "Download season log",
        data=dumps_run_export(export).encode("utf-8"),
        file_name=f"farm_season_{(session.state.farm_name or 'farm').replace(' ', '_')}.json",
        mime="application/json",
        disabled=session.state.status == STATUS_SETUP,
    )

    with st.sidebar.expander("Debug"):
        st.caption(f"core API: {getattr(__import__('core'), 'API_VERSION', None)}")
        st.json(export["final_state"])


# =========================
# Main
# =========================


def main() -> None:
    _ensure_state()
    sidebar()

    ss = st.session_state
    _show_notices(ss.notices)
    ss.notices = []

    state = _session().snapshot()
    if state.status == STATUS_SETUP:
        page_setup(state)
    elif state.status == STATUS_END:
        page_end(state)
    else:
        page_play(state)


if __name__ == "__main__":
    main()
