"""Closed-form evaluation of the diffusion formulas in double precision."""

import math

from planetdiff import DEFAULT_CONSTANTS

KB = float(DEFAULT_CONSTANTS.si("boltzmann"))
AVO = float(DEFAULT_CONSTANTS.si("avogadro"))
G = float(DEFAULT_CONSTANTS.si("gravitational_constant"))
P_NORMAL = float(DEFAULT_CONSTANTS.si("normal_pressure"))
T_STANDARD = float(DEFAULT_CONSTANTS.si("standard_temperature"))
PLANET_MASS = float(DEFAULT_CONSTANTS.si("planet_mass"))
PLANET_RADIUS = float(DEFAULT_CONSTANTS.si("planet_radius"))


def barometry(zmin, z, temperature, mean_molar_mass, bottom_density):
    """Hydrostatic density, altitudes in m and molar mass in kg/mol."""
    return bottom_density * math.exp(
        -(z - zmin)
        / (
            (PLANET_RADIUS + z)
            * (PLANET_RADIUS + zmin)
            * AVO
            * KB
            * temperature
            / (G * PLANET_MASS * mean_molar_mass)
        )
    )


def gravity(z):
    return G * PLANET_MASS / (PLANET_RADIUS + z) ** 2


def scale_height(temperature, z, molar_mass):
    return KB * temperature / (gravity(z) * molar_mass / AVO)


def pressure(density, temperature):
    return density * KB * temperature


def binary_coefficient(temperature, pressure, d01, beta):
    return d01 * P_NORMAL / pressure * (temperature / T_STANDARD) ** beta


def massman(temperature, pressure, a, s):
    return binary_coefficient(temperature, pressure, a, s)


def wakeham(temperature, pressure, a, s):
    return a * temperature**s * P_NORMAL / pressure


def wilson(temperature, pressure, a, s):
    return a * KB * temperature ** (s + 1) / pressure
