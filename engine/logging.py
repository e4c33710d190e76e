"""engine.logging

Small helpers for storing season logs.

A run export is JSON-serializable so it can be downloaded and compared later.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from core.state import FarmState, farm_state_to_dict

from .config import EngineConfig


def make_week_log(*, kind: str, before: FarmState, after: FarmState, detail: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """One entry per state-changing action (setup finish, commit, advance)."""
    return {
        "kind": str(kind),
        "week_before": int(before.week),
        "week_after": int(after.week),
        "money_delta": int(after.money) - int(before.money),
        "after": farm_state_to_dict(after),
        "detail": dict(detail or {}),
    }


def make_run_export(
    *,
    seed: Optional[int],
    config: EngineConfig,
    initial_state: FarmState,
    final_state: FarmState,
    week_logs: List[Dict[str, Any]],
    legacy: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "version": 1,
        "seed": seed,
        "config": asdict(config),
        "initial_state": farm_state_to_dict(initial_state),
        "final_state": farm_state_to_dict(final_state),
        "week_logs": list(week_logs),
        "legacy": dict(legacy) if legacy else None,
    }


def dumps_run_export(obj: Dict[str, Any]) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2, sort_keys=True)
