"""content.decisions

Scripted weekly decisions. A week has exactly one decision or none
(monitoring week).
"""

from __future__ import annotations

from typing import Dict, List, Optional

from core.state import Consequence

from .schemas import Choice, Decision


DECISIONS: List[Decision] = [
    # Week 2: inputs & resources (fertilization trade-off)
    Decision(
        week=2,
        category="🌱 4. Inputs & Resources",
        prompt="Your soil test is back. What nutrient strategy will you deploy for the season?",
        choices=[
            Choice(
                text="Go all-in on cheap, high-synthetic urea (The 'Chemical Rush').",
                consequence=Consequence(
                    money=-15_000, environment=-20, health_risk=15, hidden_pest_risk=10,
                    narrative="You saved capital, but the land screams for justice. This guarantees quick growth but kills soil life.",
                ),
            ),
            Choice(
                text="Use a balanced, high-quality conventional blend with some micronutrients.",
                consequence=Consequence(
                    money=-25_000, environment=-5, health_risk=5, hidden_pest_risk=5,
                    narrative="Moderate expense and moderate risk. A pragmatic, uninspired approach.",
                ),
            ),
            Choice(
                text="Invest heavily in regenerative organic amendments and cover crops (The 'Dirt Hippie').",
                consequence=Consequence(
                    money=-40_000, environment=25, health_risk=-10, hidden_pest_risk=-10, hidden_stress=15,
                    narrative="A massive expenditure, but your soil organisms are thriving. This strains cash flow but buys long-term resilience.",
                ),
            ),
            Choice(
                text="Buy cheap fertilizer and *tell* customers it's organic (The 'Marketing Ploy').",
                consequence=Consequence(
                    money=-5_000, environment=-5, health_risk=25, hidden_stress=10,
                    narrative="Huge short-term profit, but if the local press finds out, your reputation is ruined.",
                ),
            ),
        ],
    ),
    # Week 6: subsidy, environment & land use
    Decision(
        week=6,
        category="🌍 9. Environment & Subsidy Packages",
        prompt="The government offers a new environmental subsidy package. Do you enroll, sacrificing usable land for payments?",
        choices=[
            Choice(
                text="Accept the Full Gold Tier: Dedicate 20% of land to non-productive biodiversity (Max Subsidy).",
                consequence=Consequence(
                    money=30_000, environment=25, hidden_stress=-15,
                    narrative="Guaranteed large income stream and huge environmental points. You are now a friend to the bees and the bureaucrats.",
                ),
            ),
            Choice(
                text="Accept the Bronze Tier: Small change in practices for minimal payments.",
                consequence=Consequence(
                    money=5_000, environment=5, hidden_stress=-5,
                    narrative="Easy compliance and a small cheque. No real impact, but you ticked the box.",
                ),
            ),
            Choice(
                text="Reject the Subsidy: Keep all land in production, maximize raw yield potential.",
                consequence=Consequence(
                    money=15_000, environment=-10, hidden_stress=10,
                    narrative="You bet on the market, maximizing crop space. Higher risk and stress, but potentially massive profits if the harvest is perfect.",
                ),
            ),
            Choice(
                text="Enroll, but illegally farm the dedicated subsidy land anyway (The 'Double Dip').",
                consequence=Consequence(
                    money=45_000, environment=-50, hidden_stress=50,
                    narrative="If you are caught, the fines and legal fees will destroy you. If not, maximum illegal profit.",
                ),
            ),
        ],
    ),
    # Week 12: mid-season pest crisis
    Decision(
        week=12,
        category="🚨 9. Environment & Operations",
        prompt="A severe pest outbreak requires immediate action. This is the moment of truth for your IPM strategy.",
        choices=[
            Choice(
                text="Blanket the field with cheap, broad-spectrum chemical spray (The 'Wipeout').",
                consequence=Consequence(
                    money=-10_000, environment=-30, health_risk=30, hidden_pest_risk=-40,
                    narrative="The pests are annihilated, but so are the beneficial insects. You guaranteed residue and long-term ecosystem collapse.",
                ),
            ),
            Choice(
                text="Use a highly targeted, expensive, low-toxicity biopesticide.",
                consequence=Consequence(
                    money=-25_000, environment=5, health_risk=-10, hidden_pest_risk=-20,
                    narrative="A careful, costly approach. Pests are partially managed, but your ecological score is safe. A true trade-off.",
                ),
            ),
            Choice(
                text="Do nothing and rely on natural enemies and crop resilience (The 'Zen Master').",
                consequence=Consequence(
                    money=0, environment=10, health_risk=0, hidden_pest_risk=30,
                    narrative="You saved all the money and environmental points, but the pests are feasting. Your hidden Pest Risk just soared, guaranteeing lower yield.",
                ),
            ),
            Choice(
                text="Quickly flood the field using old, inefficient pumps to drown the pests (Only viable if you have high Infrastructure/Resilience).",
                consequence=Consequence(
                    money=-15_000, environment=-15, hidden_pest_risk=-35, infrastructure_level=-20,
                    narrative="The pests are gone, but your pumps nearly died from the stress. Huge infrastructure wear and water waste.",
                ),
            ),
        ],
    ),
]

_BY_WEEK: Dict[int, Decision] = {d.week: d for d in DECISIONS}


def decision_for_week(week: int) -> Optional[Decision]:
    """The scripted decision for `week`, or None on a monitoring week."""
    return _BY_WEEK.get(int(week))


def is_decision_week(week: int) -> bool:
    return int(week) in _BY_WEEK
