"""Fixed altitude grid."""

import typing as t

import numpy as np
from astropy import units as u

from .exceptions import InvalidConfiguration
from .log import Loggable
from .types import PlanetArray, PlanetDType
from .utils import as_value

MIN_ALTITUDES = 3


class Altitude(Loggable):
    """Equally spaced altitudes from ``z_min`` to ``z_max``.

    Bare numbers are taken to be in km.
    """

    def __init__(
        self,
        z_min: t.Union[u.Quantity, float],
        z_max: t.Union[u.Quantity, float],
        z_step: t.Union[u.Quantity, float],
        dtype: PlanetDType = np.float64,
    ) -> None:
        """Initialize the grid.

        Args:
            z_min: The lowest altitude.
            z_max: The highest altitude (included when it falls on the grid).
            z_step: The spacing between altitudes.
            dtype: The floating type used throughout the evaluation.

        """
        super().__init__()
        self.dtype = np.dtype(dtype)
        if self.dtype.kind != "f":
            raise InvalidConfiguration(f"dtype must be a floating type, got {self.dtype}")

        z_min = float(as_value(z_min, u.km))
        z_max = float(as_value(z_max, u.km))
        z_step = float(as_value(z_step, u.km))

        if not np.isfinite([z_min, z_max, z_step]).all():
            raise InvalidConfiguration("Altitude bounds must be finite")
        if z_step <= 0:
            raise InvalidConfiguration(f"Altitude step must be positive, got {z_step} km")
        if z_max < z_min:
            raise InvalidConfiguration(f"z_max ({z_max} km) is below z_min ({z_min} km)")

        # Small slack so that z_max is kept when it lies on the grid.
        num_altitudes = int(np.floor((z_max - z_min) / z_step + 1e-9)) + 1
        if num_altitudes < MIN_ALTITUDES:
            raise InvalidConfiguration(
                f"Altitude grid needs at least {MIN_ALTITUDES} points, got {num_altitudes}"
            )

        self.z_min = z_min
        self.z_max = z_max
        self.z_step = z_step
        altitudes = z_min + z_step * np.arange(num_altitudes, dtype=np.float64)
        self._altitudes_km = altitudes.astype(self.dtype)
        self._altitudes_m = (altitudes * 1e3).astype(self.dtype)

        self.debug("Altitude grid %s km -> %s km, %d points (%s)", z_min, z_max, num_altitudes, self.dtype)

    @property
    def altitudes(self) -> u.Quantity:
        """The altitudes in km."""
        return self._altitudes_km << u.km

    @property
    def altitudes_km(self) -> PlanetArray:
        """The altitudes in km as a plain array."""
        return self._altitudes_km

    @property
    def altitudes_m(self) -> PlanetArray:
        """The altitudes in m as a plain array."""
        return self._altitudes_m

    @property
    def size(self) -> int:
        return self._altitudes_m.size

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"Altitude({self.z_min} km, {self.z_max} km, {self.z_step} km, dtype={self.dtype})"
