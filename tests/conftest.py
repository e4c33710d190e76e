import random
from dataclasses import replace

import pytest

from core.state import STATUS_PLAYING, FarmState
from engine.config import EngineConfig


class ScriptedRandom(random.Random):
    """random() pops scripted draws (then `fallback`); uniform() lands at `fraction` of the span."""

    def __init__(self, draws=(), *, fallback=0.99, fraction=0.5):
        super().__init__(0)
        self.draws = list(draws)
        self.fallback = fallback
        self.fraction = fraction
        self.calls = 0

    def random(self):
        self.calls += 1
        if self.draws:
            return self.draws.pop(0)
        return self.fallback

    def uniform(self, a, b):
        return a + (b - a) * self.fraction


@pytest.fixture
def config():
    return EngineConfig(base_seed=7, progress_delay=0.0)


@pytest.fixture
def quiet_rng():
    """No event ever fires and pest drift is exactly zero."""
    return ScriptedRandom()


@pytest.fixture
def steppe_setup():
    """A farm that has finished all four setup phases but not started yet."""
    return FarmState(
        setup_phase=3,
        farm_name="Doom Acres",
        location="Central Asia - Steppe",
        farm_type="Crop - Grains",
        urban_status="Rural",
        business_structure="Family Run",
    )


@pytest.fixture
def playing_state():
    def make(**overrides):
        base = FarmState(
            status=STATUS_PLAYING,
            setup_phase=4,
            week=3,
            farm_name="Test Farm",
            location="Central Asia - Steppe",
            farm_type="Crop - Grains",
            urban_status="Rural",
            business_structure="Family Run",
            development_status="Developing",
        )
        return replace(base, **overrides)

    return make


@pytest.fixture
def scripted_rng():
    return ScriptedRandom
