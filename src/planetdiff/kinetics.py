"""Hydrostatic relations used to build the atmosphere.

All functions work on plain arrays in SI units so the floating type of the
inputs is preserved.
"""

import numpy as np

from .types import PlanetArray


def gravity_at_height(
    gravitational_constant: float, mass: float, radius: float, altitude: PlanetArray
) -> PlanetArray:
    r"""Compute the gravity at a given altitude.

    The gravity at a given altitude is given by:

    ..math::
        g = \frac{Gm}{(R + z)^2}

    Where $G$ is the gravitational constant, $m$ is the mass of the planet,
    $R$ the radius of the planet and $z$ the altitude.

    Args:
        gravitational_constant: The gravitational constant.
        mass: The mass of the planet in kg.
        radius: The radius of the planet in m.
        altitude: The altitude in m.

    """
    return gravitational_constant * mass / (radius + altitude) ** 2


def pressure(boltzmann: float, number_density: PlanetArray, temperature: PlanetArray) -> PlanetArray:
    r"""Compute the pressure of an ideal gas.

    ..math::
        P = n k T

    Args:
        boltzmann: The Boltzmann constant.
        number_density: The number density in m^-3.
        temperature: The temperature in K.

    """
    return number_density * boltzmann * temperature


def scaleheight(boltzmann: float, temperature: PlanetArray, gravity: PlanetArray, mass: PlanetArray) -> PlanetArray:
    r"""Compute the scale height of the atmosphere.

    The scale height is given by:

    ..math::
        H = \frac{kT}{mg}

    Where $k$ is the Boltzmann constant, $T$ is the temperature,
    $m$ is the molecular mass, and $g$ is the gravity.

    Args:
        boltzmann: The Boltzmann constant.
        temperature: The temperature.
        gravity: The gravity at a given altitude.
        mass: Mass of one molecule in kg.

    """
    return boltzmann * temperature / (mass * gravity)


def barometric_density(
    reference_density: float,
    altitude: PlanetArray,
    temperature: PlanetArray,
    molecular_mass: float,
    boltzmann: float,
    gravitational_constant: float,
    planet_mass: float,
    planet_radius: float,
) -> PlanetArray:
    r"""Compute the hydrostatic number density above the lowest altitude.

    The exponent is the gravitational potential difference of a point mass
    between $z_0$ and $z$ over the thermal energy at $z$:

    ..math::
        n(z) = n_0 \exp\left(-\frac{(z - z_0) G M m}{k T(z) (R + z)(R + z_0)}\right)

    Args:
        reference_density: The density at the first altitude.
        altitude: The altitudes in m, the first one is $z_0$.
        temperature: The temperature in K.
        molecular_mass: The mean molecular mass in kg.
        boltzmann: The Boltzmann constant.
        gravitational_constant: The gravitational constant.
        planet_mass: Mass of the planet in kg.
        planet_radius: Radius of the planet in m.

    """
    z_0 = altitude[0]
    scale = (
        boltzmann
        * temperature
        * (planet_radius + altitude)
        * (planet_radius + z_0)
        / (gravitational_constant * planet_mass * molecular_mass)
    )
    return reference_density * np.exp(-(altitude - z_0) / scale)
