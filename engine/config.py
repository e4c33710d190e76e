"""engine.config

Engine configuration passed from UI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EngineConfig:
    max_weeks: int = 24
    progress_delay: float = 1.5  # seconds the progress screen stays up
    starting_money: int = 100_000
    weekly_cost: int = 500
    weekly_environment_decay: int = 1
    debt_interest_rate: float = 0.015
    interest_period_weeks: int = 4  # roughly monthly
    base_seed: Optional[int] = None
