"""engine.decisions

Decision protocol for scripted weeks:

    idle --select_option--> previewing --commit--> (advance_turn) --> idle
                              |    ^
                              cycle_option

Previewing means a choice is tentatively selected and its consequence is on
screen but not applied. cycle_option lets the player browse the other choices
before committing; only select_option changes what would be committed.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Tuple

from core.effects import DECISION_MERGE, apply_consequence, settle
from core.state import STATUS_PLAYING, FarmState, PendingDecision

from content.decisions import decision_for_week
from content.schemas import Choice, Decision

from .errors import ValidationError

PHASE_IDLE = "idle"
PHASE_PREVIEWING = "previewing"


def decision_phase(state: FarmState) -> str:
    return PHASE_PREVIEWING if state.pending_decision is not None else PHASE_IDLE


def preview_visible(state: FarmState) -> bool:
    """True while the cursor sits on the pending pick; cycling away hides the preview."""
    pending = state.pending_decision
    return pending is not None and int(state.current_decision_index) == int(pending.choice_index)


def current_decision(state: FarmState) -> Optional[Decision]:
    """Decision for the current week, None on monitoring weeks or outside play."""
    if state.status != STATUS_PLAYING:
        return None
    return decision_for_week(state.week)


def current_choice(state: FarmState) -> Optional[Choice]:
    """The option under the browsing cursor."""
    decision = current_decision(state)
    if decision is None:
        return None
    return decision.choices[int(state.current_decision_index) % len(decision.choices)]


def pending_choice(state: FarmState) -> Optional[Choice]:
    pending = state.pending_decision
    if pending is None:
        return None
    decision = decision_for_week(pending.week)
    if decision is None or not 0 <= pending.choice_index < len(decision.choices):
        return None
    return decision.choices[pending.choice_index]


def select_option(state: FarmState, week: int, choice_index: int) -> FarmState:
    """Preview a choice. Nothing but bookkeeping changes."""
    if state.status != STATUS_PLAYING:
        raise ValidationError("The season is not running.")
    decision = decision_for_week(week)
    if decision is None:
        raise ValidationError(f"There is no decision to make in week {week}.")
    if int(week) != int(state.week):
        raise ValidationError(f"Week {week} is not the current week.")
    if not 0 <= int(choice_index) < len(decision.choices):
        raise ValidationError("That option does not exist.")
    return replace(
        state,
        pending_decision=PendingDecision(week=int(week), choice_index=int(choice_index)),
        current_decision_index=int(choice_index),
    )


def cycle_option(state: FarmState) -> FarmState:
    """Move the browsing cursor to the next option, wrapping around."""
    if decision_phase(state) != PHASE_PREVIEWING:
        raise ValidationError("Pick an option first.")
    decision = current_decision(state)
    if decision is None:
        raise ValidationError("There is no decision to make this week.")
    next_index = (int(state.current_decision_index) + 1) % len(decision.choices)
    return replace(state, current_decision_index=next_index)


def commit(state: FarmState) -> Tuple[FarmState, Choice]:
    """Apply the pending choice.

    Returns (new_state, choice). The caller hands choice.consequence to
    engine.turn.advance_turn for the headline check.
    """
    if decision_phase(state) != PHASE_PREVIEWING:
        raise ValidationError("Pick an option first.")
    choice = pending_choice(state)
    if choice is None or state.pending_decision.week != state.week:
        raise ValidationError("That decision is no longer open.")

    s = apply_consequence(state, choice.consequence, DECISION_MERGE)
    s = settle(replace(s, pending_decision=None, current_decision_index=0))
    return s, choice
