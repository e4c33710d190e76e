"""content.setup_options

Farm type, neighbourhood and business structure options.

Starting modifiers are kept as data (Consequence rows) so balancing lives in
one place; the setup resolver applies them in SETUP_MODIFIER_ORDER.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from core.state import Consequence, FarmState

from .schemas import SetupOption


FARM_TYPES: Dict[str, SetupOption] = {
    "Crop - Grains": SetupOption(key="Crop - Grains", label="🌾 Grains & Row Crops", blurb="Big fields, big input bills."),
    "Livestock - Cattle": SetupOption(key="Livestock - Cattle", label="🐄 Livestock & Pasture", blurb="Steady, but the herd never takes a day off."),
    "Mixed - Veg/Poultry": SetupOption(key="Mixed - Veg/Poultry", label="🐔 Mixed Farming", blurb="Diversified income, twice the juggling."),
}

URBAN_STATUSES: Dict[str, SetupOption] = {
    "Rural": SetupOption(key="Rural", label="🏞️ RURAL/REMOTE", blurb="Cheap land, long drives."),
    "Urban": SetupOption(key="Urban", label="🏙️ URBAN FRINGE", blurb="Better roads and services, pricier land and nosy neighbours."),
}

BUSINESS_STRUCTURES: Dict[str, SetupOption] = {
    "Sole Trader": SetupOption(key="Sole Trader", label="👤 Sole Trader", blurb="High Risk/High Stress"),
    "Family Run": SetupOption(key="Family Run", label="👨‍👩‍👧 Family Run", blurb="Moderate Risk/Disputes"),
    "Cooperative": SetupOption(key="Cooperative", label="🤝 Cooperative", blurb="Low Risk/Slow Decisions"),
}

SETUP_GROUPS: Dict[str, Dict[str, SetupOption]] = {
    "farm_type": FARM_TYPES,
    "urban_status": URBAN_STATUSES,
    "business_structure": BUSINESS_STRUCTURES,
}


def _is_urban(s: FarmState) -> bool:
    return s.urban_status == "Urban"


def _is_mixed(s: FarmState) -> bool:
    return "Mixed" in (s.farm_type or "")


def _is_sole_trader(s: FarmState) -> bool:
    return "Sole Trader" in (s.business_structure or "")


def _is_cooperative(s: FarmState) -> bool:
    return "Cooperative" in (s.business_structure or "")


# Applied additively, in this order, after the location profile is loaded.
SETUP_MODIFIER_ORDER: List[Tuple[str, Callable[[FarmState], bool], Consequence]] = [
    ("urban", _is_urban, Consequence(money=-10_000, hidden_stress=15, infrastructure_level=10, narrative="Urban fringe: pricier land, better services.")),
    ("mixed", _is_mixed, Consequence(hidden_stress=20, narrative="Mixed farming doubles the juggling.")),
    ("sole_trader", _is_sole_trader, Consequence(hidden_stress=10, narrative="Every call is yours alone.")),
    ("cooperative", _is_cooperative, Consequence(money=-10_000, hidden_stress=-10, narrative="Co-op buy-in; shared load.")),
]
