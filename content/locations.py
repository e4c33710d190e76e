"""content.locations

Farming regions. Starting debt, infrastructure and climate risk are set by
where you farm.
"""

from __future__ import annotations

from typing import Dict, Optional

from .schemas import LocationProfile


LOCATIONS: Dict[str, LocationProfile] = {
    "Japan - Yakushima": LocationProfile(
        key="Japan - Yakushima",
        flag="🇯🇵",
        name="Yakushima, Japan",
        soil="Humic Andosol (Volcanic Ash, High P-Fixation)",
        climate="Monsoon/High Humidity",
        development_status="Developed",
        starting_debt=60_000,
        initial_money_penalty=30_000,
        base_pest_risk=15,
        initial_resilience=25,
        initial_infrastructure=50,
        common_crops=["Tankan Citrus", "Tea", "Rice (Paddy)"],
    ),
    "Central Asia - Steppe": LocationProfile(
        key="Central Asia - Steppe",
        flag="🇰🇿",
        name="Kazakh Steppe",
        soil="Chernozem / Kastanozem (Dry Steppe)",
        climate="Semi-arid Continental",
        development_status="Developing",
        starting_debt=50_000,
        initial_money_penalty=20_000,
        base_pest_risk=-10,
        initial_resilience=10,
        initial_infrastructure=15,
        common_crops=["Wheat", "Alfalfa", "Cattle"],
    ),
    "East Africa - Highlands": LocationProfile(
        key="East Africa - Highlands",
        flag="🇰🇪",
        name="Kenyan Highlands",
        soil="Nitosols (Deep Red Clay)",
        climate="Tierra Fría (Highland)",
        development_status="Developing",
        starting_debt=35_000,
        initial_money_penalty=10_000,
        base_pest_risk=5,
        initial_resilience=20,
        initial_infrastructure=10,
        common_crops=["Coffee", "Maize", "Beans"],
    ),
    "Siberia - Taiga": LocationProfile(
        key="Siberia - Taiga",
        flag="🇷🇺",
        name="Siberian Taiga",
        soil="Gelic Cambisol / Dystric Podzoluvisol (Permafrost)",
        climate="Cold Continental Taiga",
        development_status="Developed",
        starting_debt=20_000,
        initial_money_penalty=10_000,
        base_pest_risk=-20,
        initial_resilience=5,
        initial_infrastructure=10,
        common_crops=["Larch (Forestry)", "Potatoes", "Hay"],
    ),
}


def get_location(key: Optional[str]) -> Optional[LocationProfile]:
    if not key:
        return None
    return LOCATIONS.get(key)
