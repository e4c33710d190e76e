"""engine.session

GameSession owns one play-through: the current FarmState, the random source,
the save store and the season log.

Every public method returns an Outcome (frozen state snapshot + notices) and
never raises for player mistakes: a ValidationError becomes an error notice
and the state stays as it was. Saves happen after each state-changing call;
a failing store is logged and ignored.

A commit is applied and saved together with the week it advances, never on
its own, so an interrupted pause leaves the decision open in the save.
Seeded seasons draw each week from a stream keyed on farm name and week, so
a resumed game plays on exactly as an uninterrupted one would.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.rng import season_rng
from core.state import STATUS_END, STATUS_SETUP, Consequence, FarmState, default_farm_state

from content.schemas import Choice

from .config import EngineConfig
from .decisions import PHASE_PREVIEWING, commit, current_decision, cycle_option, decision_phase, select_option
from .errors import ValidationError
from .logging import make_run_export, make_week_log
from .persistence import StateStore
from .scoring import LegacyReport, compute_legacy_report
from .setup import advance_setup_phase, select_setup_option
from .turn import Notice, TurnReport, advance_turn, progress_card

logger = logging.getLogger(__name__)

BUSY_MESSAGE = "Hold on, the next week is still loading."

Step = Callable[[FarmState], Tuple[FarmState, Optional[TurnReport]]]


@dataclass(frozen=True)
class Outcome:
    state: FarmState
    notices: List[Notice] = field(default_factory=list)
    turn: Optional[TurnReport] = None
    legacy: Optional[LegacyReport] = None
    accepted: bool = True


class GameSession:
    def __init__(
        self,
        *,
        config: Optional[EngineConfig] = None,
        store: Optional[StateStore] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.store = store
        self.state: FarmState = default_farm_state()
        self.initial_state: FarmState = self.state
        self.week_logs: List[Dict[str, Any]] = []
        self.legacy: Optional[LegacyReport] = None
        self._fixed_rng = rng
        self._season_rng: Optional[random.Random] = None
        self._season_key: Optional[Tuple[Optional[str], int]] = None
        self._flavour_rng = random.Random()
        self._busy = False

    # -------------------------
    # plumbing
    # -------------------------

    @property
    def rng(self) -> random.Random:
        if self._fixed_rng is not None:
            return self._fixed_rng
        key = (self.state.farm_name, int(self.state.week))
        if self._season_rng is None or self._season_key != key:
            self._season_rng = season_rng(self.state.farm_name, key[1], base_seed=self.config.base_seed)
            self._season_key = key
        return self._season_rng

    @property
    def busy(self) -> bool:
        return self._busy

    def _persist(self) -> None:
        if self.store is None:
            return
        try:
            self.store.save(self.state)
        except Exception:
            logger.warning("could not save farm state", exc_info=True)

    def _reject(self, err: ValidationError) -> Outcome:
        logger.debug("rejected: %s", err)
        return Outcome(state=self.state, notices=[Notice(str(err), "error")], legacy=self.legacy, accepted=False)

    def _run(self, kind: str, step: Step, *, persist: bool = True) -> Outcome:
        if self._busy:
            return self._reject(ValidationError(BUSY_MESSAGE))
        before = self.state
        try:
            after, turn = step(before)
        except ValidationError as e:
            return self._reject(e)

        self.state = after
        notices: List[Notice] = []
        if turn is not None:
            notices.extend(turn.notices)
            if turn.legacy is not None:
                self.legacy = turn.legacy
        if turn is not None or kind == "commit":
            detail = turn.to_dict() if turn is not None else {}
            self.week_logs.append(make_week_log(kind=kind, before=before, after=after, detail=detail))
        if persist:
            self._persist()
        return Outcome(state=self.state, notices=notices, turn=turn, legacy=self.legacy)

    # -------------------------
    # lifecycle
    # -------------------------

    def start(self) -> Outcome:
        """Load the last saved game, if there is one worth resuming."""
        if self.store is None:
            return Outcome(state=self.state)
        try:
            loaded = self.store.load()
        except Exception:
            logger.warning("could not load saved farm state", exc_info=True)
            return Outcome(state=self.state, notices=[Notice("Saved game could not be loaded. Starting fresh.", "warning")])

        if loaded is None or loaded.status == STATUS_SETUP:
            return Outcome(state=self.state)

        self.state = loaded
        self.initial_state = loaded
        self._season_rng = None
        if loaded.status == STATUS_END:
            self.legacy = compute_legacy_report(loaded)
        logger.info("resumed %s at week %s", loaded.farm_name, loaded.week)
        return Outcome(
            state=self.state,
            notices=[Notice(f"Game state loaded for {loaded.farm_name}. Welcome back!", "success")],
            legacy=self.legacy,
        )

    def reset(self) -> Outcome:
        self.state = default_farm_state()
        self.initial_state = self.state
        self.week_logs = []
        self.legacy = None
        self._season_rng = None
        self._busy = False
        notices: List[Notice] = []
        if self.store is not None:
            try:
                self.store.clear()
                notices.append(Notice("Game state cleared. Ready for a new beginning!", "warning"))
            except Exception:
                logger.warning("could not delete previous farm state", exc_info=True)
        return Outcome(state=self.state, notices=notices)

    # -------------------------
    # setup
    # -------------------------

    def select_setup_option(self, group: str, value: str) -> Outcome:
        return self._run("select", lambda s: (select_setup_option(s, group, value), None))

    def advance_setup_phase(self, name: Optional[str] = None) -> Outcome:
        out = self._run("setup", lambda s: advance_setup_phase(s, config=self.config, rng=self.rng, name=name))
        if out.turn is None:
            return out
        self.initial_state = self.state
        started = Notice(f"Season started in {self.state.location}! Role: {self.state.development_status}", "success")
        return replace(out, notices=[started, *out.notices])

    # -------------------------
    # decisions
    # -------------------------

    def select_option(self, week: int, choice_index: int) -> Outcome:
        return self._run("select", lambda s: (select_option(s, week, choice_index), None))

    def cycle_option(self) -> Outcome:
        return self._run("cycle", lambda s: (cycle_option(s), None))

    def _commit_choice(self) -> Tuple[Outcome, Optional[Choice]]:
        picked: List[Choice] = []

        def step(s: FarmState) -> Tuple[FarmState, Optional[TurnReport]]:
            after, choice = commit(s)
            picked.append(choice)
            return after, None

        # saved by the advance that follows
        out = self._run("commit", step, persist=False)
        if not picked:
            return out, None
        choice = picked[0]
        processed = Notice(f"Decision processed: {choice.text}", "success" if choice.consequence.get("money") > 0 else "error")
        return replace(out, notices=[processed, *out.notices]), choice

    def commit(self) -> Outcome:
        """Apply the previewed option, then advance the week with it."""
        out, choice = self._commit_choice()
        if choice is None:
            return out
        turn = self.advance_turn(choice.consequence)
        return replace(turn, notices=[*out.notices, *turn.notices])

    async def commit_async(self, *, delay: Optional[float] = None) -> Outcome:
        """commit behind the progress-screen pause.

        Nothing is applied until the pause is over; a cancelled pause leaves
        the pending pick in place.
        """
        if self._busy:
            return self._reject(ValidationError(BUSY_MESSAGE))
        if decision_phase(self.state) != PHASE_PREVIEWING:
            return self._reject(ValidationError("Pick an option first."))
        await self._pause(delay)
        return self.commit()

    # -------------------------
    # turns
    # -------------------------

    async def _pause(self, delay: Optional[float]) -> None:
        self._busy = True
        try:
            await asyncio.sleep(self.config.progress_delay if delay is None else float(delay))
        finally:
            self._busy = False

    def progress_card(self) -> Dict[str, Any]:
        return progress_card(self.state, self._flavour_rng)

    def advance_turn(self, applied: Optional[Consequence] = None) -> Outcome:
        """Move to the next week right away (no pause)."""
        if applied is None and current_decision(self.state) is not None:
            return self._reject(ValidationError("Make this week's decision first."))
        return self._run("advance", lambda s: advance_turn(s, config=self.config, rng=self.rng, applied=applied))

    async def advance_turn_async(self, applied: Optional[Consequence] = None, *, delay: Optional[float] = None) -> Outcome:
        """advance_turn behind the progress-screen pause.

        The session is busy while the pause runs; any other call is rejected.
        """
        if self._busy:
            return self._reject(ValidationError(BUSY_MESSAGE))
        await self._pause(delay)
        return self.advance_turn(applied)

    # -------------------------
    # reporting
    # -------------------------

    def snapshot(self) -> FarmState:
        return self.state

    def run_export(self) -> Dict[str, Any]:
        return make_run_export(
            seed=self.config.base_seed,
            config=self.config,
            initial_state=self.initial_state,
            final_state=self.state,
            week_logs=self.week_logs,
            legacy=self.legacy.to_dict() if self.legacy else None,
        )
