from dataclasses import replace

import pytest

from core.state import STATUS_PLAYING, FarmState
from engine.errors import ValidationError
from engine.setup import advance_setup_phase, finalize_setup, select_setup_option, start_game_setup


def test_steppe_finalize_loads_location_profile(steppe_setup, config):
    """Kazakh Steppe, grains, rural, family run: no modifiers apply."""
    s = finalize_setup(steppe_setup, config=config)

    assert s.status == STATUS_PLAYING
    assert s.setup_phase == 4
    assert s.money == 80_000
    assert s.debt == 50_000
    assert s.hidden_pest_risk == -10
    assert s.climate_resilience == 10
    assert s.infrastructure_level == 15
    assert s.hidden_stress == 0
    assert s.development_status == "Developing"
    assert s.week == 0


def test_start_plays_the_opening_turn(steppe_setup, config, quiet_rng):
    """Week 0 -> 1 pays the weekly cost but rolls nothing."""
    s, report = start_game_setup(steppe_setup, config=config, rng=quiet_rng)

    assert s.week == 1
    assert s.money == 79_500
    assert s.environment == 49
    # no drift or event in week 1
    assert s.hidden_pest_risk == -10
    assert report.pest_drift is None
    assert quiet_rng.calls == 0


@pytest.mark.parametrize(
    "state, kwargs, message",
    [
        (FarmState(), {"name": "   "}, "Please enter a name for your farm."),
        (FarmState(setup_phase=1, farm_name="A"), {}, "Please click on a location box to select where you will farm."),
        (
            FarmState(setup_phase=2, farm_name="A", location="Siberia - Taiga", farm_type="Crop - Grains"),
            {},
            "Please click one option for Production Type and one for Neighborhood Type.",
        ),
        (
            FarmState(setup_phase=3, farm_name="A", location="Siberia - Taiga", farm_type="Crop - Grains", urban_status="Rural"),
            {},
            "Please click one option for Business Structure.",
        ),
    ],
)
def test_phase_validation_messages(state, kwargs, message, config, quiet_rng):
    with pytest.raises(ValidationError) as exc:
        advance_setup_phase(state, config=config, rng=quiet_rng, **kwargs)
    assert str(exc.value) == message


def test_name_is_trimmed_and_phases_advance(config, quiet_rng):
    s, turn = advance_setup_phase(FarmState(), config=config, rng=quiet_rng, name="  Hill Top  ")
    assert turn is None
    assert s.farm_name == "Hill Top"
    assert s.setup_phase == 1

    s = select_setup_option(s, "location", "Japan - Yakushima")
    s, _ = advance_setup_phase(s, config=config, rng=quiet_rng)
    assert s.setup_phase == 2


def test_finalize_rejects_incomplete_setup(config):
    with pytest.raises(ValidationError, match="complete all setup steps"):
        finalize_setup(FarmState(setup_phase=3, farm_name="A", location="Siberia - Taiga"), config=config)


def test_unknown_options_are_rejected():
    with pytest.raises(ValidationError):
        select_setup_option(FarmState(), "location", "Atlantis")
    with pytest.raises(ValidationError):
        select_setup_option(FarmState(), "soil", "Loam")


def test_setup_is_frozen_once_playing(steppe_setup, config):
    s = finalize_setup(steppe_setup, config=config)
    with pytest.raises(ValidationError):
        select_setup_option(s, "location", "Japan - Yakushima")


def test_urban_mixed_sole_trader_modifiers(steppe_setup, config):
    s = replace(
        steppe_setup,
        location="Japan - Yakushima",
        farm_type="Mixed - Veg/Poultry",
        urban_status="Urban",
        business_structure="Sole Trader",
    )
    s = finalize_setup(s, config=config)

    assert s.money == 60_000
    assert s.hidden_stress == 45
    assert s.infrastructure_level == 60
    assert s.hidden_pest_risk == 15


def test_cooperative_modifier(steppe_setup, config):
    s = replace(steppe_setup, location="Siberia - Taiga", urban_status="Urban", business_structure="Cooperative")
    s = finalize_setup(s, config=config)

    assert s.money == 70_000
    assert s.hidden_stress == 5
    assert s.infrastructure_level == 20
    assert s.hidden_pest_risk == -20
