"""engine.persistence

Save-game stores. The session only needs load / save / clear; what sits
behind them (a JSON file, memory, a remote document) is up to the adapter.

Stores are allowed to raise. engine.session logs failures and keeps playing.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from core.state import FarmState, farm_state_from_mapping, farm_state_to_dict


class StateStore(Protocol):
    def load(self) -> Optional[FarmState]: ...

    def save(self, state: FarmState) -> None: ...

    def clear(self) -> None: ...


class MemoryStore:
    """Keeps the last saved document in memory (tests, no-backend play)."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self.document: Optional[Dict[str, Any]] = dict(initial) if initial else None
        self.saves = 0

    def load(self) -> Optional[FarmState]:
        if self.document is None:
            return None
        return farm_state_from_mapping(self.document)

    def save(self, state: FarmState) -> None:
        self.document = farm_state_to_dict(state)
        self.saves += 1

    def clear(self) -> None:
        self.document = None


class JsonFileStore:
    """One JSON document per session, replaced atomically on every save."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> Optional[FarmState]:
        if not self.path.exists():
            return None
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path}: saved game is not a JSON object")
        return farm_state_from_mapping(data)

    def save(self, state: FarmState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(farm_state_to_dict(state), ensure_ascii=False, indent=2, sort_keys=True)
        fd, tmp = tempfile.mkstemp(prefix=".farm-", suffix=".json", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
