"""Eddy diffusion coefficient."""

import typing as t

import numpy as np
from astropy import units as u

from .altitude import Altitude
from .composition import AtmosphericMixture
from .exceptions import InvalidConfiguration
from .log import Loggable
from .types import PlanetArray
from .utils import as_value


class EddyDiffusionEvaluator(Loggable):
    r"""Turbulent diffusion, the same for every species.

    ..math::
        K(z) = K_0 \sqrt{\frac{n_0}{n(z)}}

    where $n_0$ is the total density at the lowest altitude.
    """

    def __init__(
        self,
        composition: AtmosphericMixture,
        altitude: Altitude,
        K0: t.Optional[t.Union[u.Quantity, float]] = None,
    ) -> None:
        super().__init__()
        self.composition = composition
        self.altitude = altitude
        self._K0: t.Optional[np.floating] = None
        self._K: t.Optional[PlanetArray] = None
        if K0 is not None:
            self.set_K0(K0)

    def set_K0(self, K0: t.Union[u.Quantity, float]) -> None:
        """Set the reference coefficient, m^2/s when unitless."""
        value = as_value(K0, u.m**2 / u.s, self.altitude.dtype)
        if value.ndim != 0 or not np.isfinite(value) or value < 0:
            raise InvalidConfiguration(f"K0 must be a non-negative scalar, got {K0}")
        self._K0 = value[()]
        self._K = None

    @property
    def K0(self) -> u.Quantity:
        if self._K0 is None:
            raise InvalidConfiguration("K0 has not been set")
        return u.Quantity(self._K0, u.m**2 / u.s)

    def make_eddy_diffusion(self) -> None:
        """Compute the eddy coefficient on every altitude."""
        if self._K0 is None:
            raise InvalidConfiguration("set_K0() must be called before make_eddy_diffusion()")
        reference = self.composition.reference_density_m3
        self._K = self._K0 * np.sqrt(reference / self.composition.total_density_m3)
        self.info("Eddy diffusion computed with K0 = %s m^2/s", self._K0)

    @property
    def computed(self) -> bool:
        return self._K is not None

    @property
    def K(self) -> u.Quantity:
        """Eddy coefficient, (altitude,)."""
        if self._K is None:
            raise InvalidConfiguration("make_eddy_diffusion() has not been called")
        return self._K << u.m**2 / u.s

    @property
    def k_m2s(self) -> PlanetArray:
        if self._K is None:
            raise InvalidConfiguration("make_eddy_diffusion() has not been called")
        return self._K
