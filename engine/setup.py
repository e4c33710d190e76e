"""engine.setup

Four-phase farm setup: Name -> Location -> Production/Neighbourhood -> Business
Structure. Each phase validates before advancing; the last one finalizes the
starting economy and opens the season.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Optional, Tuple

from core.effects import SETUP_MERGE, apply_consequence, settle
from core.state import SETUP_PHASES, STATUS_PLAYING, STATUS_SETUP, FarmState

from content.locations import LOCATIONS, get_location
from content.setup_options import (
    BUSINESS_STRUCTURES,
    FARM_TYPES,
    SETUP_GROUPS,
    SETUP_MODIFIER_ORDER,
    URBAN_STATUSES,
)

from .config import EngineConfig
from .errors import ValidationError
from .turn import TurnReport, advance_turn

logger = logging.getLogger(__name__)

SELECTABLE_GROUPS = ("location", *SETUP_GROUPS.keys())


def _require_setup(state: FarmState) -> None:
    if state.status != STATUS_SETUP:
        raise ValidationError("Setup is already finished for this farm.")


def select_setup_option(state: FarmState, group: str, value: str) -> FarmState:
    """Store a click-to-select choice (location, farm_type, urban_status, business_structure)."""
    _require_setup(state)
    if group not in SELECTABLE_GROUPS:
        raise ValidationError(f"Unknown setup option group: {group}")
    table = LOCATIONS if group == "location" else SETUP_GROUPS[group]
    if value not in table:
        raise ValidationError(f"{value!r} is not a valid choice.")
    return replace(state, **{group: value})


def advance_setup_phase(
    state: FarmState,
    *,
    config: EngineConfig,
    rng: random.Random,
    name: Optional[str] = None,
) -> Tuple[FarmState, Optional[TurnReport]]:
    """Validate the current phase and move on.

    Returns (new_state, opening_turn). opening_turn is only set when the last
    phase finalizes setup and the season starts.
    """
    _require_setup(state)
    phase = int(state.setup_phase)

    if phase == 0:
        raw = name if name is not None else (state.farm_name or "")
        farm_name = str(raw).strip()
        if not farm_name:
            raise ValidationError("Please enter a name for your farm.")
        return replace(state, farm_name=farm_name, setup_phase=1), None

    if phase == 1:
        if state.location not in LOCATIONS:
            raise ValidationError("Please click on a location box to select where you will farm.")
        return replace(state, setup_phase=2), None

    if phase == 2:
        if state.farm_type not in FARM_TYPES or state.urban_status not in URBAN_STATUSES:
            raise ValidationError("Please click one option for Production Type and one for Neighborhood Type.")
        return replace(state, setup_phase=3), None

    if state.business_structure not in BUSINESS_STRUCTURES:
        raise ValidationError("Please click one option for Business Structure.")
    return start_game_setup(state, config=config, rng=rng)


def finalize_setup(state: FarmState, *, config: EngineConfig) -> FarmState:
    """Load the location profile and apply the starting modifiers (no turn yet)."""
    _require_setup(state)
    if not state.farm_name or not state.location or not state.farm_type or not state.business_structure:
        raise ValidationError("Please complete all setup steps before starting the season.")

    loc = get_location(state.location)
    if loc is None:
        raise ValidationError("Please click on a location box to select where you will farm.")

    s = replace(
        state,
        money=int(config.starting_money) - int(loc.initial_money_penalty),
        debt=int(loc.starting_debt),
        climate_resilience=int(loc.initial_resilience),
        infrastructure_level=int(loc.initial_infrastructure),
        hidden_pest_risk=int(loc.base_pest_risk),
        development_status=loc.development_status,
    )

    for _key, applies, modifier in SETUP_MODIFIER_ORDER:
        if applies(s):
            s = apply_consequence(s, modifier, SETUP_MERGE)

    s = settle(replace(s, setup_phase=SETUP_PHASES, status=STATUS_PLAYING))
    return s


def start_game_setup(state: FarmState, *, config: EngineConfig, rng: random.Random) -> Tuple[FarmState, TurnReport]:
    """Final confirmation: finalize the farm, then play the opening turn (week 0 -> 1)."""
    s = finalize_setup(state, config=config)
    logger.info("season started: %s in %s (%s, %s)", s.farm_name, s.location, s.farm_type, s.business_structure)
    return advance_turn(s, config=config, rng=rng)
