"""Physical and planetary constants.

Constants are resolved once into a :class:`PhysicalConstants` instance and
handed to every component, so an evaluation can be repeated for another
planetary body without touching module state.
"""

import typing as t

import numpy as np
from astropy import constants as const
from astropy import units as u
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .types import PlanetDType

ELECTRON_MOLAR_MASS = (const.m_e * const.N_A).to_value(u.g / u.mol)


def _parse_quantity(value: t.Any) -> t.Any:
    """Accept strings such as ``"2575 km"`` wherever a quantity is expected."""
    if isinstance(value, str):
        return u.Quantity(value)
    return value


def _check_positive(value: u.Quantity) -> u.Quantity:
    if not np.isfinite(value.value) or value.value <= 0:
        raise ValueError(f"{value} must be strictly positive")
    return value


class PlanetSchema(BaseModel):
    """Schema for the planet model."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    mass: u.Quantity
    radius: u.Quantity

    @field_validator("mass", "radius", mode="before")
    @classmethod
    def _parse(cls, value: t.Any) -> t.Any:
        return _parse_quantity(value)

    @field_validator("mass")
    @classmethod
    def _check_mass(cls, value: u.Quantity) -> u.Quantity:
        return _check_positive(value.to(u.kg))

    @field_validator("radius")
    @classmethod
    def _check_radius(cls, value: u.Quantity) -> u.Quantity:
        return _check_positive(value.to(u.km))

    @classmethod
    def titan(cls) -> "PlanetSchema":
        """Titan, the default body."""
        return cls(mass=1.3452e23 * u.kg, radius=2575.0 * u.km)


class PhysicalConstants(BaseModel):
    """Constants used by the diffusion pipeline."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    gravitational_constant: u.Quantity = const.G
    boltzmann: u.Quantity = const.k_B
    avogadro: u.Quantity = const.N_A
    normal_pressure: u.Quantity = const.atm
    standard_temperature: u.Quantity = 273.15 * u.K
    planet: PlanetSchema = Field(default_factory=PlanetSchema.titan)

    @field_validator(
        "gravitational_constant",
        "boltzmann",
        "avogadro",
        "normal_pressure",
        "standard_temperature",
        mode="before",
    )
    @classmethod
    def _parse(cls, value: t.Any) -> t.Any:
        return _parse_quantity(value)

    @field_validator(
        "gravitational_constant",
        "boltzmann",
        "avogadro",
        "normal_pressure",
        "standard_temperature",
    )
    @classmethod
    def _check(cls, value: u.Quantity) -> u.Quantity:
        return _check_positive(value)

    def si(self, name: str, dtype: PlanetDType = np.float64) -> np.floating:
        """Return a constant in SI units cast to ``dtype``.

        ``planet_mass`` and ``planet_radius`` address the planet.

        Args:
            name: Name of the constant.
            dtype: The floating type of the result.

        """
        if name == "planet_mass":
            quantity = self.planet.mass
        elif name == "planet_radius":
            quantity = self.planet.radius
        else:
            quantity = getattr(self, name)
        return np.dtype(dtype).type(quantity.si.value)


DEFAULT_CONSTANTS = PhysicalConstants()
