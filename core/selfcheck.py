"""
core.selfcheck
Minimal "it runs" proof for the farm rules.

Run:
  python -m core.selfcheck
"""

from __future__ import annotations

import random
from dataclasses import asdict, replace

from .effects import (
    DECISION_MERGE,
    EVENT_MERGE,
    HEADLINE_MERGE,
    apply_consequence,
    apply_debt_interest,
    apply_pest_drift,
    apply_weekly_decay,
    settle,
)
from .rng import rng_from
from .state import BOUNDED_METRICS, STATUS_PLAYING, Consequence, FarmState


def _random_consequence(rng: random.Random) -> Consequence:
    def d(span: int) -> int:
        return rng.randint(-span, span)

    return Consequence(
        narrative="selfcheck",
        money=d(40_000),
        debt=d(5_000),
        environment=d(60),
        health_risk=d(40),
        hidden_pest_risk=d(50),
        hidden_stress=d(50),
        infrastructure_level=d(30),
        climate_resilience=d(20),
    )


def run_season_smoke(weeks: int = 24, base_seed: int = 42) -> FarmState:
    rng = rng_from("selfcheck", weeks, base_seed=base_seed)
    state = FarmState(status=STATUS_PLAYING, setup_phase=4, farm_name="Selfcheck Acres", debt=50_000, hidden_pest_risk=-10)

    for _ in range(weeks):
        state = settle(apply_consequence(state, _random_consequence(rng), DECISION_MERGE))

        state = replace(state, week=state.week + 1)
        state = apply_weekly_decay(state, weekly_cost=500, environment_decay=1)
        state, _ = apply_debt_interest(state, rate=0.015, period_weeks=4)

        if rng.random() < 0.5:
            state = apply_consequence(state, _random_consequence(rng), EVENT_MERGE)
        else:
            state, _ = apply_pest_drift(state, rng)
        state = settle(apply_consequence(state, _random_consequence(rng), HEADLINE_MERGE))

        # invariants
        for k in BOUNDED_METRICS:
            assert 0 <= getattr(state, k) <= 100, k
        assert 0 <= state.hidden_pest_risk <= 100
        assert state.debt >= 0

    return state


if __name__ == "__main__":
    final = run_season_smoke()
    print("OK: 24-week core smoke test passed.")
    print("Final state:", asdict(final))
