"""
core.effects
Farm physics rules:
- one canonical consequence merge (decisions, events, headlines, setup modifiers)
- clamp rules
- weekly decay, debt interest, baseline pest drift
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Dict, Tuple

from .state import Consequence, FarmState, clamp, clamp_bounded, round_half_up


@dataclass(frozen=True)
class MergePolicy:
    """Which consequence fields a source may touch, and how.

    additive: plain add (bounded metrics are clamped later by clamp_bounded)
    clamped:  add, then clamp to [0, 100] on the spot
    Fields listed in neither are ignored.
    """

    key: str
    additive: Tuple[str, ...]
    clamped: Tuple[str, ...] = ()


DECISION_MERGE = MergePolicy(
    key="decision",
    additive=("money", "debt", "environment", "health_risk"),
    clamped=("hidden_pest_risk", "hidden_stress", "infrastructure_level", "climate_resilience"),
)

EVENT_MERGE = MergePolicy(
    key="event",
    additive=("money",),
    clamped=("hidden_pest_risk", "hidden_stress", "infrastructure_level"),
)

HEADLINE_MERGE = MergePolicy(
    key="headline",
    additive=("money", "health_risk", "hidden_stress"),
)

SETUP_MERGE = MergePolicy(
    key="setup",
    additive=("money", "hidden_stress", "infrastructure_level"),
)

PEST_DRIFT_RANGE = 5.0


def apply_consequence(state: FarmState, c: Consequence, policy: MergePolicy) -> FarmState:
    """Merge a consequence into state (pure). Returns the new state."""
    changes: Dict[str, int] = {}
    for k in policy.additive:
        v = getattr(c, k)
        if v is None:
            continue
        changes[k] = int(getattr(state, k)) + int(v)
    for k in policy.clamped:
        v = getattr(c, k)
        if v is None:
            continue
        changes[k] = int(clamp(int(getattr(state, k)) + int(v), 0, 100))
    if "debt" in changes:
        changes["debt"] = max(0, changes["debt"])
    return replace(state, **changes)


def apply_weekly_decay(state: FarmState, *, weekly_cost: int, environment_decay: int) -> FarmState:
    return replace(
        state,
        money=int(state.money) - int(weekly_cost),
        environment=max(0, int(state.environment) - int(environment_decay)),
    )


def debt_interest_due(state: FarmState, *, rate: float, period_weeks: int) -> int:
    """Interest owed this week, 0 when none is due."""
    if state.debt <= 0 or period_weeks <= 0 or state.week % period_weeks != 0:
        return 0
    return round_half_up(state.debt * float(rate))


def apply_debt_interest(state: FarmState, *, rate: float, period_weeks: int) -> Tuple[FarmState, int]:
    interest = debt_interest_due(state, rate=rate, period_weeks=period_weeks)
    if not interest:
        return state, 0
    return replace(state, money=int(state.money) - interest), interest


def apply_pest_drift(state: FarmState, rng: random.Random) -> Tuple[FarmState, int]:
    """Baseline pest pressure wander on a quiet week. Clamped to [0, 100]."""
    drift = round_half_up(rng.uniform(-PEST_DRIFT_RANGE, PEST_DRIFT_RANGE))
    new_risk = int(clamp(int(state.hidden_pest_risk) + drift, 0, 100))
    return replace(state, hidden_pest_risk=new_risk), drift


def settle(state: FarmState) -> FarmState:
    """Final normalization every public operation runs before returning."""
    return clamp_bounded(state)
