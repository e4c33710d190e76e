from core.effects import (
    DECISION_MERGE,
    EVENT_MERGE,
    HEADLINE_MERGE,
    SETUP_MERGE,
    apply_consequence,
    apply_debt_interest,
    apply_pest_drift,
    debt_interest_due,
    settle,
)
from core.selfcheck import run_season_smoke
from core.state import BOUNDED_METRICS, Consequence, FarmState, clamp_bounded, round_half_up


def test_decision_merge_clamps_only_the_listed_fields():
    """Decisions clamp the hidden metrics on the spot; the rest wait for settle()."""
    s = FarmState(money=1_000, environment=95, hidden_pest_risk=95, hidden_stress=5)
    c = Consequence(narrative="x", money=-5_000, environment=20, hidden_pest_risk=20, hidden_stress=-20)

    out = apply_consequence(s, c, DECISION_MERGE)

    assert out.money == -4_000
    assert out.environment == 115  # additive, settled later
    assert out.hidden_pest_risk == 100
    assert out.hidden_stress == 0
    assert settle(out).environment == 100


def test_event_merge_ignores_fields_it_does_not_own():
    s = FarmState(environment=50, health_risk=10)
    c = Consequence(narrative="x", money=100, environment=-30, health_risk=30, infrastructure_level=-50)

    out = apply_consequence(s, c, EVENT_MERGE)

    assert out.money == s.money + 100
    assert out.environment == 50
    assert out.health_risk == 10
    assert out.infrastructure_level == 0


def test_headline_and_setup_merges_are_plain_adds():
    s = FarmState(health_risk=98, hidden_stress=95)
    out = apply_consequence(s, Consequence(narrative="x", health_risk=5, hidden_stress=10), HEADLINE_MERGE)
    assert (out.health_risk, out.hidden_stress) == (103, 105)
    assert (settle(out).health_risk, settle(out).hidden_stress) == (100, 100)

    out = apply_consequence(FarmState(hidden_pest_risk=-10), Consequence(narrative="x", hidden_pest_risk=5, hidden_stress=15), SETUP_MERGE)
    assert out.hidden_pest_risk == -10
    assert out.hidden_stress == 15


def test_debt_never_goes_negative():
    out = apply_consequence(FarmState(debt=1_000), Consequence(narrative="payoff", debt=-5_000), DECISION_MERGE)
    assert out.debt == 0


def test_debt_interest_only_on_period_weeks():
    s = FarmState(week=4, debt=50_000, money=10_000)
    assert debt_interest_due(s, rate=0.015, period_weeks=4) == 750

    out, interest = apply_debt_interest(s, rate=0.015, period_weeks=4)
    assert interest == 750
    assert out.money == 9_250

    for week in (1, 2, 3, 5):
        assert debt_interest_due(FarmState(week=week, debt=50_000), rate=0.015, period_weeks=4) == 0
    assert debt_interest_due(FarmState(week=8, debt=0), rate=0.015, period_weeks=4) == 0


def test_interest_rounds_half_up():
    assert debt_interest_due(FarmState(week=4, debt=100), rate=0.015, period_weeks=4) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2


def test_pest_drift_clamps_a_negative_start(scripted_rng):
    """A negative starting pest risk is only pulled into range once drift touches it."""
    s = FarmState(hidden_pest_risk=-20)
    out, drift = apply_pest_drift(s, scripted_rng(fraction=1.0))
    assert drift == 5
    assert out.hidden_pest_risk == 0

    out, drift = apply_pest_drift(FarmState(hidden_pest_risk=98), scripted_rng(fraction=1.0))
    assert out.hidden_pest_risk == 100


def test_clamp_bounded_leaves_pest_risk_alone():
    s = clamp_bounded(FarmState(environment=-3, health_risk=140, hidden_pest_risk=-10))
    assert s.environment == 0
    assert s.health_risk == 100
    assert s.hidden_pest_risk == -10


def test_selfcheck_smoke_stays_in_bounds():
    final = run_season_smoke(weeks=24, base_seed=3)
    assert final.week == 24
    for k in BOUNDED_METRICS:
        assert 0 <= getattr(final, k) <= 100
