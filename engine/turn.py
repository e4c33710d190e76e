"""engine.turn

Core week flow (headless).

Responsibilities:
- advance the week counter and apply fixed weekly costs / decay
- charge debt interest every interest period
- roll at most one random event on quiet weeks (else baseline pest drift)
- raise at most one breaking-news headline for the decision just committed
- close the season and score it once the last week has passed

This layer is UI-agnostic. The progress-screen pause lives in engine.session.
"""

from __future__ import annotations

import logging
import random
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from core.effects import (
    EVENT_MERGE,
    HEADLINE_MERGE,
    apply_consequence,
    apply_debt_interest,
    apply_pest_drift,
    apply_weekly_decay,
    settle,
)
from core.state import STATUS_END, STATUS_PLAYING, Consequence, FarmState

from content.decisions import is_decision_week
from content.events import HEADLINE_RULES, PROGRESS_MESSAGES, RANDOM_EVENTS, monitoring_texts
from content.schemas import HeadlineRule, RandomEvent

from .config import EngineConfig
from .errors import ValidationError
from .scoring import LegacyReport, compute_legacy_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    """A transient message for the presentation layer."""
    text: str
    level: str = "info"  # info | success | warning | error


@dataclass(frozen=True)
class TurnReport:
    week: int
    interest: int = 0
    event_key: str = ""
    event_narrative: str = ""
    headline_key: str = ""
    headline: str = ""
    headline_penalty: Dict[str, int] = field(default_factory=dict)
    pest_drift: Optional[int] = None
    decision_week: bool = False
    ended: bool = False
    legacy: Optional[LegacyReport] = None
    notices: List[Notice] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def roll_random_event(state: FarmState, rng: random.Random, events: Sequence[RandomEvent] = RANDOM_EVENTS) -> Optional[RandomEvent]:
    """First event whose condition holds and whose draw comes in under its risk."""
    for ev in events:
        if ev.condition(state) and rng.random() < float(ev.risk):
            return ev
    return None


def match_headline(applied: Consequence, rules: Sequence[HeadlineRule] = HEADLINE_RULES) -> Optional[HeadlineRule]:
    for rule in rules:
        if rule.condition(applied):
            return rule
    return None


def advance_turn(
    state: FarmState,
    *,
    config: EngineConfig,
    rng: random.Random,
    applied: Optional[Consequence] = None,
    events: Sequence[RandomEvent] = RANDOM_EVENTS,
    headlines: Sequence[HeadlineRule] = HEADLINE_RULES,
) -> Tuple[FarmState, TurnReport]:
    """Move the season one week forward.

    `applied` is the consequence committed just before this turn (if any); it
    is only used for the headline check.

    Returns (new_state, report).
    """
    if state.status != STATUS_PLAYING:
        raise ValidationError("The season is not running.")

    notices: List[Notice] = []

    # 1) week + fixed weekly decay
    s = replace(state, week=int(state.week) + 1)
    s = apply_weekly_decay(s, weekly_cost=config.weekly_cost, environment_decay=config.weekly_environment_decay)

    # 2) debt interest
    s, interest = apply_debt_interest(s, rate=config.debt_interest_rate, period_weeks=config.interest_period_weeks)
    if interest:
        notices.append(Notice(f"🚨 DEBT ALERT: -${interest:,} deducted for loan interest!", "error"))

    # 3) chance card on quiet weeks, else pest drift
    decision_week = is_decision_week(s.week)
    event: Optional[RandomEvent] = None
    drift: Optional[int] = None
    if not decision_week and s.week > 1:
        event = roll_random_event(s, rng, events)
        if event is not None:
            s = apply_consequence(s, event.consequence, EVENT_MERGE)
            notices.append(Notice(f"⚠️ EVENT: {event.consequence.narrative}", "warning"))
            logger.info("week %s: event %s", s.week, event.key)
        else:
            s, drift = apply_pest_drift(s, rng)

    # 4) breaking news for the decision just made
    rule: Optional[HeadlineRule] = None
    if applied is not None:
        rule = match_headline(applied, headlines)
        if rule is not None:
            s = apply_consequence(s, rule.penalty, HEADLINE_MERGE)
            notices.append(Notice(f"BREAKING LOCAL NEWS: {rule.headline}", "error"))
            logger.info("week %s: headline %s", s.week, rule.key)

    s = settle(s)

    # 5) season end
    legacy: Optional[LegacyReport] = None
    ended = s.week > int(config.max_weeks)
    if ended:
        s = replace(s, status=STATUS_END, pending_decision=None, current_decision_index=0)
        legacy = compute_legacy_report(s)
        logger.info("season over for %s: score %.1f", s.farm_name, legacy.total_score)

    logger.debug("week %s: money=%s debt=%s env=%s pest=%s", s.week, s.money, s.debt, s.environment, s.hidden_pest_risk)

    report = TurnReport(
        week=int(s.week),
        interest=int(interest),
        event_key=event.key if event else "",
        event_narrative=event.consequence.narrative if event else "",
        headline_key=rule.key if rule else "",
        headline=rule.headline if rule else "",
        headline_penalty=rule.penalty.deltas() if rule else {},
        pest_drift=drift,
        decision_week=bool(decision_week and not ended),
        ended=ended,
        legacy=legacy,
        notices=notices,
    )
    return s, report


def progress_card(state: FarmState, rng: random.Random) -> Dict[str, Any]:
    """What the progress screen shows while the next week is being prepared."""
    msg = rng.choice(PROGRESS_MESSAGES)
    return {"week": int(state.week) + 1, "emoji": msg["emoji"], "text": msg["text"]}


def monitoring_report(state: FarmState) -> Dict[str, str]:
    """Flavour text for a week without a scripted decision (no state change)."""
    texts = monitoring_texts(state)
    return {
        "title": f"Week {state.week}: Maintenance & Monitoring",
        "observation": texts["observation"],
        "report": texts["report"],
        "next_label": f"Continue to Next Week (Week {state.week + 1})",
    }
