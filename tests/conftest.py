"""Shared fixtures: the N2/CH4 Titan scenario."""

import types

import numpy as np
import pytest

from planetdiff import (
    Altitude,
    AtmosphericMixture,
    AtmosphericTemperature,
    BinaryDiffusion,
    BinaryDiffusionTable,
    ChemicalMixture,
    DiffusionEvaluator,
    DiffusionType,
    EddyDiffusionEvaluator,
    MolecularDiffusionEvaluator,
    Species,
)

MN, MC, MH = 14.008, 12.011, 1.008
MN2 = 2 * MN
MCH4 = MC + 4 * MH

Z_MIN, Z_MAX, Z_STEP = 600.0, 1400.0, 10.0
TOTAL_DENSITY = 1e12  # cm^-3
K0 = 4.3e6 * 1e-4  # cm2 -> m2

# (coefficient_1, coefficient_2, model), coefficients in SI
N2_N2 = (0.1783 * 1e-4, 1.81, DiffusionType.MASSMAN)
N2_CH4 = (1.04e-5 * 1e-4, 1.76, DiffusionType.WAKEHAM)
CH4_CH4 = (5.73e16 * 1e-4, 0.5, DiffusionType.WILSON)


def tolerance(dtype) -> float:
    return 6000 * np.finfo(dtype).eps


def titan_temperature(altitude_km):
    """Smooth profile warming with altitude, in K."""
    return 150.0 + 0.1 * (np.asarray(altitude_km, dtype=np.float64) - Z_MIN)


@pytest.fixture(params=[np.float32, np.float64], ids=["float32", "float64"])
def dtype(request):
    return request.param


@pytest.fixture
def titan(dtype):
    """Every component of the N2/CH4 scenario, evaluated."""
    n2 = Species("N2", molar_mass=MN2)
    ch4 = Species("CH4", molar_mass=MCH4)
    n2_ion = Species("N2+", molar_mass=MN2)
    mixture = ChemicalMixture([n2, ch4], [n2, ch4, n2_ion])

    altitude = Altitude(Z_MIN, Z_MAX, Z_STEP, dtype=dtype)
    temperature = AtmosphericTemperature(titan_temperature(altitude.altitudes.value), None, altitude)

    table = BinaryDiffusionTable(
        mixture,
        [
            BinaryDiffusion(n2, n2, *N2_N2),
            BinaryDiffusion(n2, ch4, *N2_CH4),
            BinaryDiffusion(ch4, ch4, *CH4_CH4),
        ],
    )

    composition = AtmosphericMixture(mixture, altitude, temperature)
    composition.init_composition([0.96, 0.04, 0.0], TOTAL_DENSITY)
    composition.set_thermal_coefficient([0.0, 0.0])
    composition.initialize()

    molecular = MolecularDiffusionEvaluator(table, composition, altitude, temperature)
    molecular.make_molecular_diffusion()

    eddy = EddyDiffusionEvaluator(composition, altitude)
    eddy.set_K0(K0)
    eddy.make_eddy_diffusion()

    diffusion = DiffusionEvaluator(molecular, eddy, composition, altitude, temperature)
    diffusion.make_diffusion()

    return types.SimpleNamespace(
        dtype=dtype,
        mixture=mixture,
        altitude=altitude,
        temperature=temperature,
        table=table,
        composition=composition,
        molecular=molecular,
        eddy=eddy,
        diffusion=diffusion,
    )
