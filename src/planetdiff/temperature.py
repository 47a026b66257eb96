"""Neutral and ionic temperature profiles."""

import pathlib
import typing as t

import numpy as np
from astropy import units as u

from .altitude import Altitude
from .exceptions import InvalidConfiguration
from .log import Loggable
from .types import PlanetArray
from .utils import as_value


class AtmosphericTemperature(Loggable):
    """Temperature on every altitude of the grid."""

    def __init__(
        self,
        neutral_temperature: t.Union[u.Quantity, PlanetArray, t.Sequence[float]],
        ionic_temperature: t.Optional[t.Union[u.Quantity, PlanetArray, t.Sequence[float]]],
        altitude: Altitude,
    ) -> None:
        """Initialize the profiles.

        Args:
            neutral_temperature: Neutral temperature, K when unitless.
            ionic_temperature: Ion temperature, the neutral one when ``None``.
            altitude: The altitude grid the profiles are sampled on.

        """
        super().__init__()
        self.altitude = altitude
        self._neutral = self._check(neutral_temperature, "neutral")
        self._ionic = self._neutral if ionic_temperature is None else self._check(ionic_temperature, "ionic")

    def _check(self, temperature: t.Any, kind: str) -> PlanetArray:
        temperature = as_value(temperature, u.K, self.altitude.dtype)
        if temperature.shape != (self.altitude.size,):
            raise InvalidConfiguration(
                f"{kind} temperature has shape {temperature.shape}, expected ({self.altitude.size},)"
            )
        bad = ~np.isfinite(temperature) | (temperature <= 0)
        if np.any(bad):
            idx = int(np.argmax(bad))
            raise InvalidConfiguration(
                f"{kind} temperature must be positive, got {temperature[idx]} K at altitude index {idx}"
            )
        return temperature

    @classmethod
    def from_file(cls, path: t.Union[str, pathlib.Path], altitude: Altitude) -> "AtmosphericTemperature":
        """Read a temperature file and interpolate it onto the grid.

        The same profile is used for neutrals and ions.
        """
        from .io.temperature import interpolate_temperature, read_temperature

        temperature, measured_altitude = read_temperature(path)
        profile = interpolate_temperature(temperature, measured_altitude, altitude)
        return cls(profile, None, altitude)

    @property
    def neutral_temperature(self) -> u.Quantity:
        return self._neutral << u.K

    @property
    def ionic_temperature(self) -> u.Quantity:
        return self._ionic << u.K

    @property
    def neutral_temperature_k(self) -> PlanetArray:
        """Neutral temperature in K as a plain array."""
        return self._neutral

    @property
    def ionic_temperature_k(self) -> PlanetArray:
        return self._ionic
