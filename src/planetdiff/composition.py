"""Hydrostatic composition of the atmosphere."""

import typing as t

import numpy as np
from astropy import units as u

from .altitude import Altitude
from .constants import DEFAULT_CONSTANTS, PhysicalConstants
from .exceptions import InvalidConfiguration, NumericDegeneracy
from .kinetics import barometric_density, gravity_at_height, scaleheight
from .log import Loggable
from .species import ChemicalMixture, Species
from .temperature import AtmosphericTemperature
from .types import PlanetArray
from .utils import as_value, first_index

FRACTION_TOLERANCE = 100


class AtmosphericMixture(Loggable):
    """Number densities and scale heights of every species.

    Usage::

        composition = AtmosphericMixture(mixture, altitude, temperature)
        composition.init_composition(molar_fractions, 1e12)
        composition.initialize()

    """

    def __init__(
        self,
        mixture: ChemicalMixture,
        altitude: Altitude,
        temperature: AtmosphericTemperature,
        constants: PhysicalConstants = DEFAULT_CONSTANTS,
    ) -> None:
        super().__init__()
        if temperature.altitude is not altitude and temperature.altitude.size != altitude.size:
            raise InvalidConfiguration("Temperature profile and altitude grid differ in size")
        self.mixture = mixture
        self.altitude = altitude
        self.temperature = temperature
        self.constants = constants
        self.dtype = altitude.dtype

        self._molar_fraction: t.Optional[PlanetArray] = None
        self._reference_density: t.Optional[np.floating] = None
        self._thermal_coefficient = np.zeros(mixture.n_neutral, dtype=self.dtype)
        self._thermal_coefficient.setflags(write=False)
        self._initialized = False

    def init_composition(
        self,
        molar_fractions: t.Union[t.Mapping[t.Union[str, Species], float], t.Sequence[float], PlanetArray],
        total_density: t.Union[u.Quantity, float],
    ) -> None:
        """Set the composition at the lowest altitude.

        Args:
            molar_fractions: Fractions per species, either a mapping or a sequence
                ordered like the full (or neutral) species list. Ions default to 0.
            total_density: Total number density, cm^-3 when unitless.

        Raises:
            InvalidConfiguration: Fractions are negative or the neutral ones do not sum to 1,
                or the density is not positive.

        """
        fractions = np.zeros(len(self.mixture), dtype=np.float64)
        if isinstance(molar_fractions, t.Mapping):
            for species, value in molar_fractions.items():
                fractions[self.mixture.index(species)] = value
        else:
            values = np.asarray(molar_fractions, dtype=np.float64)
            if values.ndim != 1 or values.size not in (len(self.mixture), self.mixture.n_neutral):
                raise InvalidConfiguration(
                    f"Expected {len(self.mixture)} or {self.mixture.n_neutral} molar fractions, got {values.size}"
                )
            fractions[: values.size] = values

        if not np.isfinite(fractions).all() or np.any(fractions < 0):
            raise InvalidConfiguration(f"Molar fractions must be finite and non-negative, got {fractions}")

        neutral_sum = fractions[: self.mixture.n_neutral].sum()
        tolerance = FRACTION_TOLERANCE * np.finfo(self.dtype).eps
        if abs(neutral_sum - 1.0) > tolerance:
            raise InvalidConfiguration(f"Neutral molar fractions must sum to 1, got {neutral_sum}")

        density = float(as_value(total_density, u.cm**-3)) * 1e6
        if not np.isfinite(density) or density <= 0:
            raise InvalidConfiguration(f"Total density must be positive, got {total_density}")

        self._molar_fraction = fractions.astype(self.dtype)
        self._molar_fraction.setflags(write=False)
        self._reference_density = self.dtype.type(density)
        self._initialized = False
        self.debug("Composition at %s km: %s, total density %s m^-3", self.altitude.z_min, fractions, density)

    def set_thermal_coefficient(
        self, thermal_coefficient: t.Union[t.Mapping[t.Union[str, Species], float], t.Sequence[float]]
    ) -> None:
        """Set the thermal diffusion factors of the neutral species (default 0)."""
        coefficients = np.zeros(self.mixture.n_neutral, dtype=np.float64)
        if isinstance(thermal_coefficient, t.Mapping):
            for species, value in thermal_coefficient.items():
                idx = self.mixture.index(species)
                if idx >= self.mixture.n_neutral:
                    raise InvalidConfiguration(f"Thermal coefficient given for ion {species}")
                coefficients[idx] = value
        else:
            values = np.asarray(thermal_coefficient, dtype=np.float64)
            if values.shape != (self.mixture.n_neutral,):
                raise InvalidConfiguration(
                    f"Expected {self.mixture.n_neutral} thermal coefficients, got {values.size}"
                )
            coefficients[:] = values
        if not np.isfinite(coefficients).all():
            raise InvalidConfiguration(f"Thermal coefficients must be finite, got {coefficients}")
        self._thermal_coefficient = coefficients.astype(self.dtype)
        self._thermal_coefficient.setflags(write=False)

    def initialize(self) -> None:
        """Compute densities and scale heights."""
        if self._molar_fraction is None:
            raise InvalidConfiguration("init_composition() must be called before initialize()")

        dtype = self.dtype
        n_neutral = self.mixture.n_neutral
        kb = self.constants.si("boltzmann", dtype)
        avogadro = self.constants.si("avogadro", dtype)
        grav_const = self.constants.si("gravitational_constant", dtype)
        planet_mass = self.constants.si("planet_mass", dtype)
        planet_radius = self.constants.si("planet_radius", dtype)

        altitude = self.altitude.altitudes_m
        temperature = self.temperature.neutral_temperature_k

        molar_masses = self.mixture.neutral_molar_masses(dtype)
        neutral_fraction = self._molar_fraction[:n_neutral]
        mean_molar_mass = np.sum(neutral_fraction * molar_masses, dtype=dtype)
        if not mean_molar_mass > 0:
            raise NumericDegeneracy("AtmosphericMixture", "mean molar mass")
        self._mean_molar_mass = mean_molar_mass

        total = barometric_density(
            self._reference_density,
            altitude,
            temperature,
            mean_molar_mass / avogadro,
            kb,
            grav_const,
            planet_mass,
            planet_radius,
        )
        self._density = neutral_fraction[:, None] * total[None, :]
        self._total_density = np.sum(self._density, axis=0, dtype=dtype)

        bad = ~np.isfinite(self._total_density) | (self._total_density <= 0)
        if np.any(bad):
            (idx,) = first_index(bad)
            raise NumericDegeneracy("AtmosphericMixture", "total density", altitude_index=idx)

        self._ion_density = self._molar_fraction[n_neutral:, None] * self._total_density[None, :]
        self._local_fraction = self._density / self._total_density[None, :]

        gravity = gravity_at_height(grav_const, planet_mass, planet_radius, altitude)
        self._scale_height = scaleheight(kb, temperature[None, :], gravity[None, :], (molar_masses / avogadro)[:, None])
        self._atmosphere_scale_height = scaleheight(kb, temperature, gravity, mean_molar_mass / avogadro)

        for array in (
            self._density,
            self._total_density,
            self._ion_density,
            self._local_fraction,
            self._scale_height,
            self._atmosphere_scale_height,
        ):
            array.setflags(write=False)

        self._initialized = True
        self.info(
            "Composition initialized: %d neutral species, mean molar mass %.4g g/mol",
            n_neutral,
            mean_molar_mass * 1e3,
        )

    def _require(self) -> None:
        if not self._initialized:
            raise InvalidConfiguration("AtmosphericMixture.initialize() has not been called")

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def reference_density(self) -> u.Quantity:
        """Total density at the lowest altitude."""
        if self._reference_density is None:
            raise InvalidConfiguration("init_composition() has not been called")
        return u.Quantity(self._reference_density, u.m**-3)

    @property
    def reference_density_m3(self) -> np.floating:
        if self._reference_density is None:
            raise InvalidConfiguration("init_composition() has not been called")
        return self._reference_density

    @property
    def mean_molar_mass(self) -> u.Quantity:
        self._require()
        return u.Quantity(self._mean_molar_mass, u.kg / u.mol)

    @property
    def thermal_coefficient(self) -> PlanetArray:
        return self._thermal_coefficient

    @property
    def neutral_molar_fraction(self) -> PlanetArray:
        """Local molar fraction of each neutral species, (species, altitude)."""
        self._require()
        return self._local_fraction

    @property
    def reference_molar_fraction(self) -> PlanetArray:
        """Molar fractions at the lowest altitude for the full species list."""
        if self._molar_fraction is None:
            raise InvalidConfiguration("init_composition() has not been called")
        return self._molar_fraction

    @property
    def neutral_density(self) -> u.Quantity:
        """Number density of each neutral species, (species, altitude)."""
        self._require()
        return self._density << u.m**-3

    @property
    def ionic_density(self) -> u.Quantity:
        """Number density of the ions appended to the neutral list."""
        self._require()
        return self._ion_density << u.m**-3

    @property
    def total_density(self) -> u.Quantity:
        self._require()
        return self._total_density << u.m**-3

    @property
    def scale_height(self) -> u.Quantity:
        """Scale height of each neutral species, (species, altitude)."""
        self._require()
        return self._scale_height << u.m

    @property
    def atmosphere_scale_height(self) -> u.Quantity:
        """Scale height using the mean molar mass."""
        self._require()
        return self._atmosphere_scale_height << u.m

    # Plain read-only arrays for the evaluators.

    @property
    def density_m3(self) -> PlanetArray:
        self._require()
        return self._density

    @property
    def total_density_m3(self) -> PlanetArray:
        self._require()
        return self._total_density

    @property
    def scale_height_m(self) -> PlanetArray:
        self._require()
        return self._scale_height

    @property
    def atmosphere_scale_height_m(self) -> PlanetArray:
        self._require()
        return self._atmosphere_scale_height
