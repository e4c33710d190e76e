import pytest

from content.decisions import DECISIONS, decision_for_week, is_decision_week
from engine.decisions import (
    PHASE_IDLE,
    PHASE_PREVIEWING,
    commit,
    current_choice,
    current_decision,
    cycle_option,
    decision_phase,
    pending_choice,
    preview_visible,
    select_option,
)
from engine.errors import ValidationError
from engine.setup import start_game_setup
from engine.turn import advance_turn


def test_decision_weeks():
    assert [d.week for d in DECISIONS] == [2, 6, 12]
    assert is_decision_week(6)
    assert not is_decision_week(7)
    assert decision_for_week(3) is None


def test_select_only_previews(playing_state):
    s = playing_state(week=2)
    out = select_option(s, 2, 1)

    assert decision_phase(out) == PHASE_PREVIEWING
    assert out.pending_decision.choice_index == 1
    assert out.current_decision_index == 1
    assert out.money == s.money
    assert out.environment == s.environment


def test_cycle_wraps_and_keeps_pending(playing_state):
    """Cycling n times returns to the start and never touches the pending pick."""
    s = select_option(playing_state(week=2), 2, 0)
    seen = []
    for _ in range(4):
        s = cycle_option(s)
        seen.append(s.current_decision_index)

    assert seen == [1, 2, 3, 0]
    assert s.pending_decision.choice_index == 0
    assert current_choice(s) is pending_choice(s)


def test_cycle_and_commit_need_a_preview(playing_state):
    s = playing_state(week=2)
    assert decision_phase(s) == PHASE_IDLE
    with pytest.raises(ValidationError, match="Pick an option first."):
        cycle_option(s)
    with pytest.raises(ValidationError, match="Pick an option first."):
        commit(s)


@pytest.mark.parametrize("week, index", [(6, 0), (3, 0), (2, 4), (2, -1)])
def test_select_rejects_other_weeks_and_bad_indices(playing_state, week, index):
    with pytest.raises(ValidationError):
        select_option(playing_state(week=2), week, index)


def test_commit_applies_pending_choice_not_cursor(playing_state):
    s = select_option(playing_state(week=2, money=50_000), 2, 2)
    s = cycle_option(s)
    out, choice = commit(s)

    assert choice.text.startswith("Invest heavily")
    assert out.money == 10_000
    assert out.pending_decision is None
    assert out.current_decision_index == 0
    assert decision_phase(out) == PHASE_IDLE


def test_chemical_rush_scenario(steppe_setup, config, quiet_rng):
    """Steppe farm takes the Chemical Rush in week 2."""
    s, _ = start_game_setup(steppe_setup, config=config, rng=quiet_rng)
    s, report = advance_turn(s, config=config, rng=quiet_rng)
    assert s.week == 2
    assert report.decision_week
    assert current_decision(s).week == 2
    assert s.money == 79_000

    s = select_option(s, 2, 0)
    s, choice = commit(s)
    assert s.money == 64_000
    assert s.environment == 28
    assert s.health_risk == 25
    assert s.hidden_pest_risk == 0

    s, report = advance_turn(s, config=config, rng=quiet_rng, applied=choice.consequence)
    assert report.headline_key == ""
    assert report.event_key == ""
    assert s.week == 3
    assert s.money == 63_500
    assert s.environment == 27


def test_preview_hides_once_the_cursor_moves_away(playing_state):
    """The preview and accept button belong to the pending pick only."""
    s = select_option(playing_state(week=2), 2, 1)
    assert preview_visible(s)

    s = cycle_option(s)
    assert not preview_visible(s)
    assert pending_choice(s) is decision_for_week(2).choices[1]

    s = select_option(s, 2, s.current_decision_index)
    assert preview_visible(s)
    assert pending_choice(s) is decision_for_week(2).choices[2]

    assert not preview_visible(playing_state(week=2))
