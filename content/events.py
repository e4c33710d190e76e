"""content.events

Chance cards, breaking-news headlines and progress-screen flavour.

Order matters: both tables are scanned top to bottom and the first match wins.
Predicates are pure functions of their input.
"""

from __future__ import annotations

from typing import Dict, List

from core.state import Consequence, FarmState

from .schemas import HeadlineRule, RandomEvent


# =========================
# Random events (quiet weeks only)
# =========================

RANDOM_EVENTS: List[RandomEvent] = [
    RandomEvent(
        key="locust_swarm",
        condition=lambda s: s.hidden_pest_risk > 60,
        risk=0.40,
        consequence=Consequence(
            money=-8_000, hidden_pest_risk=10, hidden_stress=10,
            narrative="A locust swarm rolls in over the ridge. You lose a strip of crop and most of your sleep.",
        ),
    ),
    RandomEvent(
        key="pump_failure",
        condition=lambda s: s.infrastructure_level < 25,
        risk=0.25,
        consequence=Consequence(
            money=-5_000, infrastructure_level=-5, hidden_stress=5,
            narrative="The irrigation pump coughs, sputters and dies. The repair guy charges emergency rates.",
        ),
    ),
    RandomEvent(
        key="flash_drought",
        condition=lambda s: s.climate_resilience < 20,
        risk=0.15,
        consequence=Consequence(
            money=-6_000, hidden_pest_risk=5, hidden_stress=10,
            narrative="Two weeks without rain. The soil cracks and so does your patience.",
        ),
    ),
    RandomEvent(
        key="burnout_bookkeeping",
        condition=lambda s: s.hidden_stress > 70,
        risk=0.30,
        consequence=Consequence(
            money=-3_000, hidden_stress=5,
            narrative="Running on fumes, you pay the same invoice twice. The supplier is very grateful.",
        ),
    ),
    RandomEvent(
        key="coop_grant",
        condition=lambda s: s.business_structure == "Cooperative",
        risk=0.10,
        consequence=Consequence(
            money=4_000, infrastructure_level=5, hidden_stress=-5,
            narrative="The co-op lands a shared equipment grant. You get a week on the new seed drill.",
        ),
    ),
    RandomEvent(
        key="market_spike",
        condition=lambda s: True,
        risk=0.08,
        consequence=Consequence(
            money=6_000, hidden_stress=-5,
            narrative="A buyer overseas panics and prices jump. Your forward contract looks genius, briefly.",
        ),
    ),
]


# =========================
# Breaking news (reacts to the decision just committed)
# =========================

HEADLINE_RULES: List[HeadlineRule] = [
    HeadlineRule(
        key="residue_scandal",
        condition=lambda c: c.get("health_risk") > 15,
        penalty=Consequence(
            money=-10_000, health_risk=5, hidden_stress=10,
            narrative="Consumer trust hit after a residue story.",
        ),
        headline="Local Paper: 'Mystery Residue Found in Farmers' Market Produce'. Buyers cancel orders.",
    ),
    HeadlineRule(
        key="habitat_wreck",
        condition=lambda c: c.get("environment") <= -30,
        penalty=Consequence(
            money=-7_500, hidden_stress=10,
            narrative="Environmental backlash after viral footage.",
        ),
        headline="Drone footage of a stripped, silent field goes viral: 'Is This Farming or Demolition?'",
    ),
    HeadlineRule(
        key="subsidy_audit",
        condition=lambda c: c.get("money") >= 40_000,
        penalty=Consequence(
            money=-12_000, hidden_stress=15,
            narrative="Audit fees and a nervous accountant.",
        ),
        headline="Auditors Question Suspiciously Profitable Subsidy Claim in Rural District.",
    ),
]


# =========================
# Progress screen & monitoring flavour
# =========================

PROGRESS_MESSAGES: List[Dict[str, str]] = [
    {"emoji": "🚜", "text": "Tractor doing laps. Fuel gauge doing worse"},
    {"emoji": "🌦️", "text": "Checking the forecast for the ninth time today"},
    {"emoji": "🐛", "text": "Counting bugs on leaf samples"},
    {"emoji": "📒", "text": "Reconciling the books with the bank statement"},
    {"emoji": "🌱", "text": "Watching the crop grow. Slowly"},
    {"emoji": "☕", "text": "Third coffee. Still raining paperwork"},
]

PEST_ALERT_THRESHOLD = 70
STRESS_ALERT_THRESHOLD = 50

PEST_SPIKING = "Pest and disease pressures are spiking! Your crop is visibly unhappy and posting vague complaints on social media."
PEST_STABLE = "Routine monitoring shows stable conditions. The field looks resilient, but the critics are waiting."
STRESS_HIGH = "Your stress is high; you snapped at the weather forecast and a bookkeeping error cost you $2,000."
STRESS_CALM = "A quiet week; you feel organized and briefly achieved true inner peace (for 15 minutes)."


def monitoring_texts(state: FarmState) -> Dict[str, str]:
    """Observation + farm report for a week without a scripted decision."""
    return {
        "observation": PEST_SPIKING if state.hidden_pest_risk > PEST_ALERT_THRESHOLD else PEST_STABLE,
        "report": STRESS_HIGH if state.hidden_stress > STRESS_ALERT_THRESHOLD else STRESS_CALM,
    }
