"""engine.scoring

End-of-season legacy report. Pure function of the final FarmState.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Tuple

from core.state import FarmState, round_half_up

BASE_REVENUE = 50_000
PEST_YIELD_COST = 150  # per point of hidden pest risk
RESILIENCE_VALUE = 200  # per point of climate resilience
DEBT_SETTLEMENT = 1.05

# (threshold, label): first threshold the score is strictly above wins
LEGACY_RANKS: List[Tuple[float, str]] = [
    (850, "⭐️ Sustainable Titan"),
    (500, "🌟 Resilient Manager"),
    (200, "🌱 Surviving Operator"),
]
LOWEST_RANK = "🌪️ High Risk Venture"


@dataclass(frozen=True)
class LegacyReport:
    farm_name: str
    development_status: str
    yield_penalty: float
    resilience_bonus: float
    final_debt_penalty: float
    final_profit: float
    total_score: float
    national_loss_index: int
    legacy_rank: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def legacy_rank(total_score: float) -> str:
    for threshold, label in LEGACY_RANKS:
        if total_score > threshold:
            return label
    return LOWEST_RANK


def compute_legacy_report(state: FarmState) -> LegacyReport:
    yield_penalty = state.hidden_pest_risk * PEST_YIELD_COST
    resilience_bonus = state.climate_resilience * RESILIENCE_VALUE
    final_debt_penalty = state.debt * DEBT_SETTLEMENT

    final_profit = state.money + BASE_REVENUE + resilience_bonus - yield_penalty - final_debt_penalty

    # profit is weighted heaviest; stress counts inverted (100 = no stress)
    total_score = (
        (final_profit / 1000) * 3
        + state.environment * 1.5
        + (100 - state.hidden_stress)
        + state.infrastructure_level
        + state.climate_resilience
    )

    # NLI = (debt + yield loss) / base annual revenue, as a percentage
    national_loss_index = round_half_up((state.debt + yield_penalty) / BASE_REVENUE * 100)

    return LegacyReport(
        farm_name=str(state.farm_name or ""),
        development_status=str(state.development_status),
        yield_penalty=float(yield_penalty),
        resilience_bonus=float(resilience_bonus),
        final_debt_penalty=float(final_debt_penalty),
        final_profit=float(final_profit),
        total_score=float(total_score),
        national_loss_index=int(national_loss_index),
        legacy_rank=legacy_rank(total_score),
    )
