"""
core.rng
Seeded random sources for reproducible seasons.

- A seed plus the farm name always replays the same chance cards and drift,
  on any machine (no reliance on the salted built-in hash()).
- Without a seed every season gets a fresh stream.
"""

from __future__ import annotations

import hashlib
import json
import random
from typing import Any, Optional


def stable_int_seed(*parts: Any, salt: str = "farmers-burden") -> int:
    """32-bit seed from SHA-256 of the parts rendered as canonical JSON."""
    payload = json.dumps(parts, sort_keys=True, ensure_ascii=False, separators=(",", ":"), default=str)
    digest = hashlib.sha256(f"{salt}|{payload}".encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big", signed=False)


def rng_from(*parts: Any, base_seed: int) -> random.Random:
    return random.Random(stable_int_seed(base_seed, *parts))


def season_rng(farm_name: Optional[str], week: int = 0, *, base_seed: Optional[int]) -> random.Random:
    """Random source for one week of a season, keyed on the (normalized) farm name.

    Keying on the week means a saved game resumed at week N draws what an
    uninterrupted run would have drawn at week N.
    """
    if base_seed is None:
        return random.Random()
    return rng_from("season", (farm_name or "").strip().lower(), int(week), base_seed=int(base_seed))
