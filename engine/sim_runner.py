"""engine.sim_runner

Headless runner for quick sanity checks.

Plays a whole season through GameSession with a fixed choice policy, no UI and
no pause. A seeded config keeps runs reproducible.
"""

from __future__ import annotations

import random
from typing import Any, Dict, Mapping, Optional

from core.state import STATUS_PLAYING

from .config import EngineConfig
from .decisions import current_decision
from .persistence import MemoryStore
from .session import GameSession

DEFAULT_SETUP = {
    "name": "Doom Acres",
    "location": "Central Asia - Steppe",
    "farm_type": "Crop - Grains",
    "urban_status": "Rural",
    "business_structure": "Family Run",
}


def setup_farm(session: GameSession, setup: Optional[Mapping[str, str]] = None) -> None:
    """Walk the four setup phases; raises ValueError if the season does not start."""
    picks = dict(setup or DEFAULT_SETUP)
    session.advance_setup_phase(name=picks["name"])
    session.select_setup_option("location", picks["location"])
    session.advance_setup_phase()
    session.select_setup_option("farm_type", picks["farm_type"])
    session.select_setup_option("urban_status", picks["urban_status"])
    session.advance_setup_phase()
    session.select_setup_option("business_structure", picks["business_structure"])
    out = session.advance_setup_phase()
    if not out.accepted:
        raise ValueError(f"setup failed: {[n.text for n in out.notices]}")


def play_out(session: GameSession, choices: Optional[Mapping[int, int]] = None, *, until_week: Optional[int] = None) -> None:
    """Play weeks until the season ends (or the session reaches until_week)."""
    guard = session.config.max_weeks + 2
    while session.legacy is None and guard > 0:
        guard -= 1
        week = session.state.week
        if session.state.status != STATUS_PLAYING:
            break
        if until_week is not None and week >= until_week:
            break
        if current_decision(session.state) is not None:
            idx = int((choices or {}).get(week, 0))
            session.select_option(week, idx)
            out = session.commit()
        else:
            out = session.advance_turn()
        if not out.accepted:
            raise ValueError(f"week {week} rejected: {[n.text for n in out.notices]}")


def run_headless_season(
    *,
    config: Optional[EngineConfig] = None,
    setup: Optional[Mapping[str, str]] = None,
    choices: Optional[Mapping[int, int]] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """Run a full season and return summary.

    choices maps decision week -> choice index (default 0 for every decision).
    """
    cfg = config or EngineConfig(base_seed=123)
    session = GameSession(config=cfg, store=MemoryStore(), rng=rng)
    setup_farm(session, setup)
    play_out(session, choices)

    return {
        "weeks": session.state.week,
        "final": session.state,
        "legacy": session.legacy,
        "logs": list(session.week_logs),
        "export": session.run_export(),
    }
