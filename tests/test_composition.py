import numpy as np
import pytest
from astropy import units as u

from planetdiff import (
    Altitude,
    AtmosphericMixture,
    AtmosphericTemperature,
    ChemicalMixture,
    InvalidConfiguration,
    NumericDegeneracy,
    PhysicalConstants,
    PlanetSchema,
    Species,
)

from conftest import TOTAL_DENSITY, titan_temperature, tolerance


def _build(neutrals, ions=None, dtype=np.float64, z=(600.0, 1400.0, 10.0), constants=None):
    altitude = Altitude(*z, dtype=dtype)
    temperature = AtmosphericTemperature(titan_temperature(altitude.altitudes.value), None, altitude)
    mixture = ChemicalMixture(neutrals, ions)
    kwargs = {} if constants is None else {"constants": constants}
    return AtmosphericMixture(mixture, altitude, temperature, **kwargs)


def test_total_density_is_sum_of_species(titan):
    density = titan.composition.neutral_density.value
    total = titan.composition.total_density.value
    np.testing.assert_allclose(total, density.sum(axis=0), rtol=tolerance(titan.dtype))


def test_density_decreases_with_altitude(titan):
    assert np.all(np.diff(titan.composition.total_density.value) < 0)


def test_single_species_reference_density(dtype):
    composition = _build(["N2"], dtype=dtype)
    composition.init_composition({"N2": 1.0}, TOTAL_DENSITY)
    composition.initialize()

    assert composition.total_density[0].to_value(u.cm**-3) == pytest.approx(TOTAL_DENSITY, rel=tolerance(dtype))


def test_local_fraction_matches_reference_fraction(titan):
    fraction = titan.composition.neutral_molar_fraction
    np.testing.assert_allclose(fraction[0], 0.96, rtol=tolerance(titan.dtype))
    np.testing.assert_allclose(fraction[1], 0.04, rtol=tolerance(titan.dtype))


def test_ion_density_follows_fraction():
    composition = _build(["N2", "CH4"], ["N2", "CH4", "N2+"])
    composition.init_composition({"N2": 0.96, "CH4": 0.04, "N2+": 1e-6}, TOTAL_DENSITY)
    composition.initialize()

    ions = composition.ionic_density.value
    assert ions.shape == (1, composition.altitude.size)
    np.testing.assert_allclose(ions[0], 1e-6 * composition.total_density.value)


def test_species_scale_height_ordering(titan):
    # Lighter species have larger scale heights.
    heights = titan.composition.scale_height.value
    atmosphere = titan.composition.atmosphere_scale_height.value
    assert np.all(heights[1] > atmosphere)
    assert np.all(heights[0] < atmosphere)


def test_density_quantity_accepted():
    composition = _build(["N2", "CH4"])
    composition.init_composition([0.96, 0.04], TOTAL_DENSITY * 1e6 * u.m**-3)
    assert composition.reference_density.to_value(u.cm**-3) == pytest.approx(TOTAL_DENSITY)


def test_heavier_planet_compresses_atmosphere():
    light = _build(["N2", "CH4"])
    heavy = _build(
        ["N2", "CH4"],
        constants=PhysicalConstants(planet=PlanetSchema(mass="2.6904e23 kg", radius="2575 km")),
    )
    for composition in (light, heavy):
        composition.init_composition([0.96, 0.04], TOTAL_DENSITY)
        composition.initialize()

    assert np.all(heavy.total_density.value[1:] < light.total_density.value[1:])
    np.testing.assert_allclose(
        heavy.atmosphere_scale_height.value, light.atmosphere_scale_height.value / 2, rtol=1e-12
    )


@pytest.mark.parametrize(
    "fractions",
    [
        [0.9, 0.04],
        [1.1, -0.1],
        [0.96, np.nan],
    ],
)
def test_invalid_fractions_rejected(fractions):
    composition = _build(["N2", "CH4"])
    with pytest.raises(InvalidConfiguration):
        composition.init_composition(fractions, TOTAL_DENSITY)


def test_wrong_number_of_fractions_rejected():
    composition = _build(["N2", "CH4"], ["N2", "CH4", "N2+"])
    with pytest.raises(InvalidConfiguration):
        composition.init_composition([0.5, 0.25, 0.25, 0.0], TOTAL_DENSITY)


def test_unknown_species_rejected():
    composition = _build(["N2", "CH4"])
    with pytest.raises(InvalidConfiguration):
        composition.init_composition({"N2": 0.96, "H2O": 0.04}, TOTAL_DENSITY)


@pytest.mark.parametrize("density", [0.0, -1e12, np.inf])
def test_invalid_total_density_rejected(density):
    composition = _build(["N2", "CH4"])
    with pytest.raises(InvalidConfiguration):
        composition.init_composition([0.96, 0.04], density)


def test_zero_molar_mass_rejected():
    with pytest.raises(InvalidConfiguration):
        Species("N2", molar_mass=0.0)


def test_initialize_requires_composition():
    composition = _build(["N2", "CH4"])
    with pytest.raises(InvalidConfiguration):
        composition.initialize()
    with pytest.raises(InvalidConfiguration):
        composition.total_density


def test_underflowing_density_is_degenerate():
    altitude = Altitude(0.0, 50000.0, 1000.0)
    temperature = AtmosphericTemperature(np.full(altitude.size, 10.0), None, altitude)
    composition = AtmosphericMixture(ChemicalMixture(["N2", "CH4"]), altitude, temperature)
    composition.init_composition([0.96, 0.04], TOTAL_DENSITY)

    with pytest.raises(NumericDegeneracy) as excinfo:
        composition.initialize()

    assert excinfo.value.component == "AtmosphericMixture"
    assert 0 < excinfo.value.altitude_index < altitude.size


def test_thermal_coefficient_for_ion_rejected():
    composition = _build(["N2", "CH4"], ["N2", "CH4", "N2+"])
    with pytest.raises(InvalidConfiguration):
        composition.set_thermal_coefficient({"N2+": 0.1})
