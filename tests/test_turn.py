import pytest

from content.decisions import decision_for_week
from content.events import HEADLINE_RULES, PEST_SPIKING, STRESS_HIGH
from core.state import STATUS_END
from engine.errors import ValidationError
from engine.turn import advance_turn, match_headline, monitoring_report, progress_card, roll_random_event


def test_week_advances_by_one_with_decay(playing_state, config, quiet_rng):
    s = playing_state(week=6, money=20_000, environment=0)
    out, report = advance_turn(s, config=config, rng=quiet_rng)

    assert out.week == 7
    assert report.week == 7
    assert out.money == 19_500
    assert out.environment == 0


def test_debt_interest_on_fourth_week(playing_state, config, quiet_rng):
    out, report = advance_turn(playing_state(week=3, debt=50_000, money=10_000), config=config, rng=quiet_rng)

    assert out.week == 4
    assert report.interest == 750
    assert out.money == 8_750
    assert "DEBT ALERT: -$750" in report.notices[0].text

    out, report = advance_turn(out, config=config, rng=quiet_rng)
    assert report.interest == 0


def test_first_matching_event_wins(playing_state, config, scripted_rng):
    s = playing_state(week=4, hidden_pest_risk=65, infrastructure_level=10, money=30_000)
    out, report = advance_turn(s, config=config, rng=scripted_rng([0.0, 0.0]))

    assert report.event_key == "locust_swarm"
    assert report.pest_drift is None
    assert out.money == 30_000 - 500 - 8_000
    assert out.hidden_pest_risk == 75
    assert out.hidden_stress == 10
    assert out.infrastructure_level == 10


def test_only_eligible_events_draw(playing_state, scripted_rng):
    s = playing_state(hidden_pest_risk=0, infrastructure_level=10, climate_resilience=50, hidden_stress=0)
    rng = scripted_rng([0.9, 0.01])

    event = roll_random_event(s, rng)

    # pump_failure draws and misses, then market_spike hits
    assert event.key == "market_spike"
    assert rng.calls == 2


def test_decision_weeks_skip_events_and_drift(playing_state, config, scripted_rng):
    """No chance card and no drift on a scripted decision week."""
    rng = scripted_rng([0.0] * 10, fraction=1.0)
    out, report = advance_turn(playing_state(week=1, hidden_pest_risk=90), config=config, rng=rng)

    assert out.week == 2
    assert report.decision_week
    assert report.event_key == ""
    assert report.pest_drift is None
    assert out.hidden_pest_risk == 90
    assert rng.calls == 0


def test_quiet_week_drifts_pests(playing_state, config, scripted_rng):
    out, report = advance_turn(playing_state(week=3, hidden_pest_risk=-10), config=config, rng=scripted_rng(fraction=0.0))
    assert report.pest_drift == -5
    assert out.hidden_pest_risk == 0


def test_headline_first_match_wins():
    double_dip = decision_for_week(6).choices[3].consequence
    assert match_headline(double_dip).key == "habitat_wreck"

    marketing_ploy = decision_for_week(2).choices[3].consequence
    assert match_headline(marketing_ploy).key == "residue_scandal"

    chemical_rush = decision_for_week(2).choices[0].consequence
    assert match_headline(chemical_rush) is None
    assert [r.key for r in HEADLINE_RULES] == ["residue_scandal", "habitat_wreck", "subsidy_audit"]


def test_headline_penalty_is_applied_then_settled(playing_state, config, quiet_rng):
    """Penalty is a plain add; bounded metrics come back into range before returning."""
    ploy = decision_for_week(2).choices[3].consequence
    s = playing_state(week=2, money=40_000, health_risk=98, hidden_stress=95)
    out, report = advance_turn(s, config=config, rng=quiet_rng, applied=ploy)

    assert report.headline_key == "residue_scandal"
    assert report.headline_penalty == {"money": -10_000, "health_risk": 5, "hidden_stress": 10}
    assert out.money == 40_000 - 500 - 10_000
    assert out.health_risk == 100
    assert out.hidden_stress == 100
    assert any(n.text.startswith("BREAKING LOCAL NEWS") for n in report.notices)


def test_season_ends_after_last_week(playing_state, config, quiet_rng):
    out, report = advance_turn(playing_state(week=24), config=config, rng=quiet_rng)

    assert out.week == 25
    assert out.status == STATUS_END
    assert report.ended
    assert report.legacy is not None
    assert report.legacy.farm_name == "Test Farm"

    with pytest.raises(ValidationError):
        advance_turn(out, config=config, rng=quiet_rng)


def test_progress_card_and_monitoring_text(playing_state, quiet_rng):
    s = playing_state(week=9, hidden_pest_risk=80, hidden_stress=60)

    card = progress_card(s, quiet_rng)
    assert card["week"] == 10
    assert card["emoji"] and card["text"]

    report = monitoring_report(s)
    assert report["title"] == "Week 9: Maintenance & Monitoring"
    assert report["observation"] == PEST_SPIKING
    assert report["report"] == STRESS_HIGH
    assert report["next_label"] == "Continue to Next Week (Week 10)"
