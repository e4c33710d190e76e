"""
core.state
Farm state data model (UI/persistence independent).
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional


STATUS_SETUP = "setup"
STATUS_PLAYING = "playing"
STATUS_END = "end"

SETUP_PHASES = 4

# Clamped to [0, 100] after every public operation.
BOUNDED_METRICS = (
    "environment",
    "health_risk",
    "hidden_stress",
    "infrastructure_level",
    "climate_resilience",
)


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def round_half_up(x: float) -> int:
    """Round .5 away from zero on the positive side (matches the scoring tables)."""
    return int(math.floor(float(x) + 0.5))


@dataclass(frozen=True)
class Consequence:
    """Sparse set of metric deltas plus narrative.

    A None field means "not touched". How each field is merged (plain add vs
    clamped add, or ignored) depends on who applies it; see core.effects.
    """

    narrative: str = ""
    money: Optional[int] = None
    debt: Optional[int] = None
    environment: Optional[int] = None
    health_risk: Optional[int] = None
    hidden_pest_risk: Optional[int] = None
    hidden_stress: Optional[int] = None
    infrastructure_level: Optional[int] = None
    climate_resilience: Optional[int] = None

    def deltas(self) -> Dict[str, int]:
        """Only the fields that are set."""
        out: Dict[str, int] = {}
        for k in CONSEQUENCE_FIELDS:
            v = getattr(self, k)
            if v is not None:
                out[k] = int(v)
        return out

    def get(self, key: str) -> int:
        return int(getattr(self, key) or 0)


CONSEQUENCE_FIELDS = (
    "money",
    "debt",
    "environment",
    "health_risk",
    "hidden_pest_risk",
    "hidden_stress",
    "infrastructure_level",
    "climate_resilience",
)


@dataclass(frozen=True)
class PendingDecision:
    """A tentatively selected choice, not yet applied."""
    week: int
    choice_index: int


@dataclass(frozen=True)
class FarmState:
    """One play-through.

    Engine operations never mutate a FarmState; they return a new one via
    dataclasses.replace(). That makes every snapshot handed to the UI read-only.

    hidden_pest_risk is intentionally left out of BOUNDED_METRICS: the starting
    value comes straight from the location table and may be negative.
    """

    status: str = STATUS_SETUP
    setup_phase: int = 0
    week: int = 0

    farm_name: Optional[str] = None
    location: Optional[str] = None
    farm_type: Optional[str] = None
    urban_status: Optional[str] = None
    business_structure: Optional[str] = None

    money: int = 100_000
    debt: int = 0

    environment: int = 50
    health_risk: int = 10
    hidden_stress: int = 0
    infrastructure_level: int = 20
    climate_resilience: int = 10
    hidden_pest_risk: int = 0

    pending_decision: Optional[PendingDecision] = None
    current_decision_index: int = 0

    development_status: str = "N/A"


def default_farm_state() -> FarmState:
    """Fresh state used at process start and on reset."""
    return FarmState()


def clamp_bounded(state: FarmState) -> FarmState:
    """Clamp the five bounded metrics into [0, 100]."""
    changes = {k: int(clamp(getattr(state, k), 0, 100)) for k in BOUNDED_METRICS}
    return replace(state, **changes)


def farm_state_to_dict(s: FarmState) -> Dict[str, Any]:
    return asdict(s)


def farm_state_from_mapping(d: Mapping[str, Any]) -> FarmState:
    """Bridge helper for persisted dict-based state. Unknown keys are ignored."""
    known = {f.name for f in fields(FarmState)}
    values: Dict[str, Any] = {k: v for k, v in dict(d).items() if k in known}

    pending = values.get("pending_decision")
    if isinstance(pending, Mapping):
        values["pending_decision"] = PendingDecision(
            week=int(pending.get("week", 0)),
            choice_index=int(pending.get("choice_index", 0)),
        )
    elif pending is not None and not isinstance(pending, PendingDecision):
        values["pending_decision"] = None

    for k in ("setup_phase", "week", "money", "debt", "hidden_pest_risk", "current_decision_index", *BOUNDED_METRICS):
        if k in values and values[k] is not None:
            values[k] = int(values[k])

    return FarmState(**values)
