"""Net diffusive transport of every neutral species."""

import typing as t

import numpy as np
from astropy import units as u

from .altitude import Altitude
from .binary_diffusion import BinaryDiffusion, BinaryDiffusionTable
from .composition import AtmosphericMixture
from .constants import DEFAULT_CONSTANTS, PhysicalConstants
from .eddy_diffusion import EddyDiffusionEvaluator
from .exceptions import InvalidConfiguration, NumericDegeneracy
from .log import Loggable
from .molecular_diffusion import MolecularDiffusionEvaluator
from .species import ChemicalMixture, Species
from .temperature import AtmosphericTemperature
from .types import PlanetArray
from .utils import first_index


class DiffusionSolution(t.TypedDict):
    """TypedDict for the pipeline output."""

    altitude: u.Quantity
    temperature: u.Quantity
    species: list[Species]
    density: u.Quantity
    total_density: u.Quantity
    molar_fraction: PlanetArray
    scale_height: u.Quantity
    atmosphere_scale_height: u.Quantity
    molecular_diffusion: u.Quantity
    eddy_diffusion: u.Quantity
    omega: u.Quantity


class DiffusionEvaluator(Loggable):
    r"""Combine molecular and eddy diffusion into the transport term.

    On every interior altitude:

    ..math::
        \omega_s = -\tilde{D}_s \left(\frac{1}{n_s}\frac{dn_s}{dz} + \frac{1}{H_s}
            + \frac{1}{T}\frac{dT}{dz}\left(1 + (1 - x_s)\alpha_s\right)\right)
            - K \left(\frac{1}{n_s}\frac{dn_s}{dz} + \frac{1}{H}
            + \frac{1}{T}\frac{dT}{dz}\right)

    Gradients are central differences over the grid in km, so the first and
    last altitudes are left undefined (NaN). Scale heights are in m.
    """

    def __init__(
        self,
        molecular_diffusion: MolecularDiffusionEvaluator,
        eddy_diffusion: EddyDiffusionEvaluator,
        composition: AtmosphericMixture,
        altitude: Altitude,
        temperature: AtmosphericTemperature,
    ) -> None:
        super().__init__()
        self.molecular_diffusion = molecular_diffusion
        self.eddy_diffusion = eddy_diffusion
        self.composition = composition
        self.altitude = altitude
        self.temperature = temperature
        self._omega: t.Optional[PlanetArray] = None

    def make_diffusion(self) -> None:
        """Compute the transport term.

        Raises:
            InvalidConfiguration: The molecular or eddy coefficients are not computed yet.
            NumericDegeneracy: A zero density or scale height on an interior altitude.

        """
        if not self.molecular_diffusion.computed:
            raise InvalidConfiguration("make_molecular_diffusion() must be called before make_diffusion()")
        if not self.eddy_diffusion.computed:
            raise InvalidConfiguration("make_eddy_diffusion() must be called before make_diffusion()")

        composition = self.composition
        species = composition.mixture.neutral_species

        altitude = self.altitude.altitudes_km
        temperature = self.temperature.neutral_temperature_k
        density = composition.density_m3
        scale_height = composition.scale_height_m
        atmos_scale_height = composition.atmosphere_scale_height_m
        molar_fraction = composition.neutral_molar_fraction
        thermal_coefficient = composition.thermal_coefficient
        dtilde = self.molecular_diffusion.dtilde_m2s
        kzz = self.eddy_diffusion.k_m2s

        inner = slice(1, -1)
        self._check("density", density[:, inner], species)
        self._check("scale height", scale_height[:, inner], species)
        self._check("atmosphere scale height", atmos_scale_height[None, inner], None)

        delta_z = altitude[2:] - altitude[:-2]
        dn_dz = (density[:, 2:] - density[:, :-2]) / delta_z
        dT_dz = (temperature[2:] - temperature[:-2]) / delta_z

        density_term = dn_dz / density[:, inner]
        temperature_term = dT_dz / temperature[inner]

        molecular_term = -dtilde[:, inner] * (
            density_term
            + 1 / scale_height[:, inner]
            + temperature_term * (1 + (1 - molar_fraction[:, inner]) * thermal_coefficient[:, None])
        )
        eddy_term = -kzz[inner] * (density_term + 1 / atmos_scale_height[inner] + temperature_term)

        omega = np.full(density.shape, np.nan, dtype=composition.dtype)
        omega[:, inner] = molecular_term + eddy_term

        self._omega = omega
        self.info("Diffusion computed on %d interior altitudes", omega.shape[1] - 2)

    def _check(self, quantity: str, values: PlanetArray, species: t.Optional[t.Sequence[Species]]) -> None:
        bad = ~np.isfinite(values) | (values == 0)
        if np.any(bad):
            spec_idx, alt_idx = first_index(bad)
            name = str(species[spec_idx]) if species is not None else None
            # Interior slices start at altitude index 1.
            raise NumericDegeneracy(self.__class__.__name__, quantity, name, alt_idx + 1)

    @property
    def computed(self) -> bool:
        return self._omega is not None

    @property
    def omega(self) -> u.Quantity:
        """Transport term, (species, altitude), NaN on the boundaries."""
        if self._omega is None:
            raise InvalidConfiguration("make_diffusion() has not been called")
        return self._omega << u.m / u.s


def evaluate_diffusion(
    neutral_species: t.Sequence[t.Union[str, Species]],
    molar_fractions: t.Union[t.Mapping[t.Union[str, Species], float], t.Sequence[float]],
    total_density: t.Union[u.Quantity, float],
    altitude: Altitude,
    temperature: AtmosphericTemperature,
    binary_diffusion: t.Iterable[BinaryDiffusion],
    K0: t.Union[u.Quantity, float],
    ionic_species: t.Optional[t.Sequence[t.Union[str, Species]]] = None,
    thermal_coefficient: t.Optional[t.Union[t.Mapping[t.Union[str, Species], float], t.Sequence[float]]] = None,
    constants: PhysicalConstants = DEFAULT_CONSTANTS,
) -> DiffusionSolution:
    """Run the whole diffusion chain.

    Args:
        neutral_species: The neutral species.
        molar_fractions: Fractions at the lowest altitude.
        total_density: Total density at the lowest altitude, cm^-3 when unitless.
        altitude: The altitude grid.
        temperature: The temperature profiles on the grid.
        binary_diffusion: Calibration of every pair of neutral species.
        K0: Reference eddy coefficient, m^2/s when unitless.
        ionic_species: Full species list, neutral species first.
        thermal_coefficient: Thermal diffusion factors, zero when omitted.
        constants: Physical constants.

    Returns:
        DiffusionSolution: every derived profile.

    """
    mixture = ChemicalMixture(neutral_species, ionic_species)
    table = BinaryDiffusionTable(mixture, binary_diffusion)

    composition = AtmosphericMixture(mixture, altitude, temperature, constants)
    composition.init_composition(molar_fractions, total_density)
    if thermal_coefficient is not None:
        composition.set_thermal_coefficient(thermal_coefficient)

    molecular = MolecularDiffusionEvaluator(table, composition, altitude, temperature)
    eddy = EddyDiffusionEvaluator(composition, altitude, K0)

    composition.initialize()
    molecular.make_molecular_diffusion()
    eddy.make_eddy_diffusion()

    diffusion = DiffusionEvaluator(molecular, eddy, composition, altitude, temperature)
    diffusion.make_diffusion()

    return {
        "altitude": altitude.altitudes,
        "temperature": temperature.neutral_temperature,
        "species": list(mixture.neutral_species),
        "density": composition.neutral_density,
        "total_density": composition.total_density,
        "molar_fraction": composition.neutral_molar_fraction,
        "scale_height": composition.scale_height,
        "atmosphere_scale_height": composition.atmosphere_scale_height,
        "molecular_diffusion": molecular.Dtilde,
        "eddy_diffusion": eddy.K,
        "omega": diffusion.omega,
    }
