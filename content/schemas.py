"""content.schemas

Contracts for the static reference tables:
- LocationProfile / SetupOption: what the player picks during setup
- Decision / Choice: scripted week prompts with explicit consequences
- RandomEvent / HeadlineRule: predicate + consequence tables

All entities are frozen and shared by reference. Consequence itself lives in
core.state so the rules layer does not depend on content.

Validation raises ValueError with a readable message; the shipped tables are
checked by validate_reference_data() in the test suite.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from core.state import Consequence, FarmState

MIN_CHOICES = 2
MAX_CHOICES = 4


@dataclass(frozen=True)
class LocationProfile:
    """Static economic / ecological profile of a farming region."""

    key: str
    flag: str
    name: str
    soil: str
    climate: str
    development_status: str
    starting_debt: int
    initial_money_penalty: int
    base_pest_risk: int
    initial_resilience: int
    initial_infrastructure: int
    common_crops: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SetupOption:
    key: str
    label: str
    blurb: str = ""


@dataclass(frozen=True)
class Choice:
    text: str
    consequence: Consequence


@dataclass(frozen=True)
class Decision:
    """A scripted prompt shown on exactly one week."""

    week: int
    category: str
    prompt: str
    choices: List[Choice]

    def to_dict(self) -> Dict[str, object]:
        return {
            "week": int(self.week),
            "category": self.category,
            "prompt": self.prompt,
            "choices": [{"text": c.text, "consequence": c.consequence.deltas(), "narrative": c.consequence.narrative} for c in self.choices],
        }


@dataclass(frozen=True)
class RandomEvent:
    """Chance card: fires on a quiet week if condition(state) holds and a draw < risk."""

    key: str
    condition: Callable[[FarmState], bool]
    risk: float
    consequence: Consequence


@dataclass(frozen=True)
class HeadlineRule:
    """Breaking news triggered by the consequence that was just committed."""

    key: str
    condition: Callable[[Consequence], bool]
    penalty: Consequence
    headline: str


# =========================
# Validation
# =========================


def validate_consequence(c: Consequence, where: str) -> None:
    if not (c.narrative or "").strip():
        raise ValueError(f"{where}: consequence narrative is empty")
    for k, v in c.deltas().items():
        if not isinstance(v, int):
            raise ValueError(f"{where}: {k} must be an int delta")


def validate_location(loc: LocationProfile) -> None:
    if not (loc.key or "").strip():
        raise ValueError("location key is empty")
    if not (loc.name or "").strip():
        raise ValueError(f"location {loc.key}: name is empty")
    if loc.starting_debt < 0:
        raise ValueError(f"location {loc.key}: starting_debt must be >= 0")
    if loc.initial_money_penalty < 0:
        raise ValueError(f"location {loc.key}: initial_money_penalty must be >= 0")
    for k in ("initial_resilience", "initial_infrastructure"):
        v = int(getattr(loc, k))
        if not 0 <= v <= 100:
            raise ValueError(f"location {loc.key}: {k} must be within 0..100")


def validate_decision(d: Decision) -> None:
    if not isinstance(d.week, int) or d.week < 1:
        raise ValueError("decision.week must be int >= 1")
    if len((d.prompt or "").strip()) < 10:
        raise ValueError(f"decision week {d.week}: prompt too short")
    if not (d.category or "").strip():
        raise ValueError(f"decision week {d.week}: category is empty")
    if not isinstance(d.choices, list) or not MIN_CHOICES <= len(d.choices) <= MAX_CHOICES:
        raise ValueError(f"decision week {d.week}: choices must be a list of {MIN_CHOICES}-{MAX_CHOICES} items")
    for i, ch in enumerate(d.choices):
        if len((ch.text or "").strip()) < 4:
            raise ValueError(f"decision week {d.week}, choice {i}: text too short")
        validate_consequence(ch.consequence, f"decision week {d.week}, choice {i}")


def validate_event(ev: RandomEvent) -> None:
    if not 0.0 <= float(ev.risk) <= 1.0:
        raise ValueError(f"event {ev.key}: risk must be within 0..1")
    if not callable(ev.condition):
        raise ValueError(f"event {ev.key}: condition must be callable")
    validate_consequence(ev.consequence, f"event {ev.key}")


def validate_headline(rule: HeadlineRule) -> None:
    if not (rule.headline or "").strip():
        raise ValueError(f"headline {rule.key}: text is empty")
    if not callable(rule.condition):
        raise ValueError(f"headline {rule.key}: condition must be callable")
    validate_consequence(rule.penalty, f"headline {rule.key}")


def validate_unique_weeks(decisions: Sequence[Decision]) -> None:
    weeks = [int(d.week) for d in decisions]
    if len(set(weeks)) != len(weeks):
        raise ValueError("at most one decision per week")


def validate_reference_data(
    *,
    locations: Mapping[str, LocationProfile],
    decisions: Sequence[Decision],
    events: Iterable[RandomEvent],
    headlines: Iterable[HeadlineRule],
    max_weeks: Optional[int] = None,
) -> None:
    for key, loc in locations.items():
        if key != loc.key:
            raise ValueError(f"location table key {key!r} does not match profile key {loc.key!r}")
        validate_location(loc)
    for d in decisions:
        validate_decision(d)
        if max_weeks is not None and d.week > max_weeks:
            raise ValueError(f"decision week {d.week} is past the season end ({max_weeks})")
    validate_unique_weeks(decisions)
    for ev in events:
        validate_event(ev)
    for rule in headlines:
        validate_headline(rule)


# =========================
# Display helpers
# =========================


def _signed_money(v: int) -> str:
    return f"{'+$' if v > 0 else '-$'}{abs(int(v)):,}"


def _signed(v: int) -> str:
    return f"{'+' if v > 0 else '-'}{abs(int(v))}"


def format_consequence(c: Consequence) -> str:
    """One-line trade-off summary; zero or missing deltas are skipped."""
    parts: List[str] = []
    if c.money:
        parts.append(f"💰 Money: {_signed_money(c.money)}")
    if c.debt:
        parts.append(f"🏦 Debt: +${abs(int(c.debt)):,}")
    if c.environment:
        parts.append(f"🌿 Environment: {_signed(c.environment)}")
    if c.health_risk:
        parts.append(f"🤕 Consumer Risk: {_signed(c.health_risk)}")
    if c.hidden_stress:
        parts.append(f"😟 Farmer Stress: {_signed(c.hidden_stress)}")
    return " | ".join(parts)
