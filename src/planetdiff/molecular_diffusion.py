"""Computation of molecular diffusion coefficients."""

import typing as t

import numpy as np
from astropy import units as u

from .altitude import Altitude
from .binary_diffusion import BinaryDiffusionTable
from .composition import AtmosphericMixture
from .exceptions import InvalidConfiguration, NumericDegeneracy
from .kinetics import pressure
from .log import Loggable
from .temperature import AtmosphericTemperature
from .types import PlanetArray
from .utils import first_index


class MolecularDiffusionEvaluator(Loggable):
    r"""Effective diffusion coefficient of each species in the mixture.

    Every other neutral species acts as a diffusion medium:

    ..math::
        D_s = \frac{n - n_s}{\sum_{m \neq s} n_m / D_{ms}}

    followed by the correction

    ..math::
        \tilde{D}_s = \frac{D_s}{1 - x_s (1 - M_s / M_{diff})}

    with $M_{diff} = \sum_{j \neq s} n_j M_j / (N - 1)$, $n_j$ in cm^-3.
    """

    def __init__(
        self,
        binary_diffusion: BinaryDiffusionTable,
        composition: AtmosphericMixture,
        altitude: Altitude,
        temperature: AtmosphericTemperature,
    ) -> None:
        """Initialize the evaluator.

        Args:
            binary_diffusion: Calibrations of every neutral pair.
            composition: The atmosphere, initialized before evaluation.
            altitude: The altitude grid.
            temperature: The temperature profiles.

        Raises:
            InvalidConfiguration: Fewer than two neutral species or a missing pair.

        """
        super().__init__()
        if composition.mixture.n_neutral < 2:
            raise InvalidConfiguration(
                "Molecular diffusion needs at least two neutral species, "
                f"got {composition.mixture.n_neutral}"
            )
        if binary_diffusion.mixture.neutral_species != composition.mixture.neutral_species:
            raise InvalidConfiguration(
                "Binary diffusion table is built over "
                f"{[str(s) for s in binary_diffusion.mixture.neutral_species]}, composition over "
                f"{[str(s) for s in composition.mixture.neutral_species]}"
            )
        binary_diffusion.check_complete()

        self.binary_diffusion = binary_diffusion
        self.composition = composition
        self.altitude = altitude
        self.temperature = temperature

        self._diffusion: t.Optional[PlanetArray] = None
        self._dtilde: t.Optional[PlanetArray] = None

    def make_molecular_diffusion(self) -> None:
        """Compute the molecular diffusion coefficients."""
        composition = self.composition
        constants = composition.constants
        dtype = composition.dtype
        species = composition.mixture.neutral_species
        num_species = len(species)

        temperature = self.temperature.neutral_temperature_k
        density = composition.density_m3
        total_density = composition.total_density_m3
        molar_fraction = composition.neutral_molar_fraction
        molar_masses = composition.mixture.neutral_molar_masses(dtype)

        # M_diff is weighted by densities in cm^-3.
        density_cm3 = density * dtype.type(1e-6)

        atmos_pressure = pressure(constants.si("boltzmann", dtype), total_density, temperature)

        binary = np.empty((num_species, num_species, self.altitude.size), dtype=dtype)
        for i in range(num_species):
            for j in range(num_species):
                if i != j:
                    binary[i, j] = self.binary_diffusion[i, j].coefficient(temperature, atmos_pressure, constants)

        diffusion = np.empty((num_species, self.altitude.size), dtype=dtype)
        dtilde = np.empty_like(diffusion)

        for spec_idx, spec in enumerate(species):
            others = [m for m in range(num_species) if m != spec_idx]

            denominator = np.zeros(self.altitude.size, dtype=dtype)
            for medium in others:
                denominator += density[medium] / binary[medium, spec_idx]
            self._check("binary denominator", denominator, spec)

            diffusion[spec_idx] = (total_density - density[spec_idx]) / denominator

            m_diff = np.zeros(self.altitude.size, dtype=dtype)
            for j in others:
                m_diff += density_cm3[j] * molar_masses[j]
            m_diff /= dtype.type(num_species - 1)
            self._check("mean diffusion molar mass", m_diff, spec)

            correction = 1 - molar_fraction[spec_idx] * (1 - molar_masses[spec_idx] / m_diff)
            self._check("thermal correction", correction, spec)

            dtilde[spec_idx] = diffusion[spec_idx] / correction

        self._diffusion = diffusion
        self._dtilde = dtilde
        self.info("Molecular diffusion computed for %d species", num_species)

    def _check(self, quantity: str, values: PlanetArray, species: t.Any) -> None:
        bad = ~np.isfinite(values) | (values == 0)
        if np.any(bad):
            (idx,) = first_index(bad)
            raise NumericDegeneracy(self.__class__.__name__, quantity, str(species), idx)

    @property
    def computed(self) -> bool:
        return self._dtilde is not None

    def _require(self) -> None:
        if not self.computed:
            raise InvalidConfiguration("make_molecular_diffusion() has not been called")

    @property
    def diffusion(self) -> u.Quantity:
        """Multi-component coefficient before the correction."""
        self._require()
        return self._diffusion << u.m**2 / u.s

    @property
    def Dtilde(self) -> u.Quantity:
        """Effective molecular diffusion coefficient, (species, altitude)."""
        self._require()
        return self._dtilde << u.m**2 / u.s

    @property
    def dtilde_m2s(self) -> PlanetArray:
        self._require()
        return self._dtilde
