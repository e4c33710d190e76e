import pytest

from content.decisions import DECISIONS
from content.events import HEADLINE_RULES, RANDOM_EVENTS
from content.locations import LOCATIONS, get_location
from content.schemas import Choice, Decision, format_consequence, validate_decision, validate_reference_data
from core.state import Consequence


def test_shipped_tables_validate():
    """Locations, decisions, events and headlines all pass their validators."""
    validate_reference_data(
        locations=LOCATIONS,
        decisions=DECISIONS,
        events=RANDOM_EVENTS,
        headlines=HEADLINE_RULES,
        max_weeks=24,
    )


def test_location_lookup():
    assert get_location("Siberia - Taiga").base_pest_risk == -20
    assert get_location("Atlantis") is None
    assert get_location(None) is None


def test_decision_with_one_choice_is_rejected():
    only = Choice(text="Do the thing", consequence=Consequence(money=-1, narrative="ok"))
    with pytest.raises(ValueError, match="choices"):
        validate_decision(Decision(week=3, category="Ops", prompt="What now, farmer?", choices=[only]))


def test_duplicate_decision_weeks_are_rejected():
    with pytest.raises(ValueError, match="one decision per week"):
        validate_reference_data(locations={}, decisions=[DECISIONS[0], DECISIONS[0]], events=[], headlines=[])


def test_decision_past_season_end_is_rejected():
    with pytest.raises(ValueError, match="past the season end"):
        validate_reference_data(locations={}, decisions=DECISIONS, events=[], headlines=[], max_weeks=10)


def test_format_consequence():
    chemical_rush = DECISIONS[0].choices[0].consequence
    assert format_consequence(chemical_rush) == "💰 Money: -$15,000 | 🌿 Environment: -20 | 🤕 Consumer Risk: +15"

    zen = DECISIONS[2].choices[2].consequence
    assert format_consequence(zen) == "🌿 Environment: +10"


def test_debt_is_always_shown_as_added_burden():
    assert format_consequence(Consequence(debt=5_000, narrative="loan")) == "🏦 Debt: +$5,000"
    assert format_consequence(Consequence(debt=-5_000, narrative="payoff")) == "🏦 Debt: +$5,000"
