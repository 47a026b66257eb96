"""Binary molecular diffusion coefficients.

Each pair of species is calibrated with two constants and one of the
empirical correlations of :class:`DiffusionType`. All correlations are power
laws in temperature and are evaluated through :func:`binary_coefficient`.
"""

import enum
import typing as t

import numpy as np

from .constants import DEFAULT_CONSTANTS, PhysicalConstants
from .exceptions import InvalidConfiguration
from .species import ChemicalMixture, Species, as_species
from .types import PlanetArray


class DiffusionType(str, enum.Enum):
    """Binary diffusion correlations."""

    MASSMAN = "massman"
    WILSON = "wilson"
    WAKEHAM = "wakeham"


def binary_coefficient(
    temperature: PlanetArray,
    pressure: PlanetArray,
    ref_coeff: float,
    exponent: float,
    normal_pressure: float,
    standard_temperature: float,
) -> PlanetArray:
    r"""Compute a binary diffusion coefficient from a reference coefficient.

    ..math::
        D = D_0 \frac{P_0}{P} \left(\frac{T}{T_0}\right)^s

    Args:
        temperature: The temperature in K.
        pressure: The pressure in Pa.
        ref_coeff: The coefficient $D_0$ at $(P_0, T_0)$, m^2/s.
        exponent: The temperature exponent $s$.
        normal_pressure: $P_0$ in Pa.
        standard_temperature: $T_0$ in K.

    """
    return ref_coeff * (normal_pressure / pressure) * (temperature / standard_temperature) ** exponent


def scaled_binary_coefficient(
    self_coefficient: PlanetArray, mass_i: PlanetArray, mass_j: PlanetArray
) -> PlanetArray:
    r"""Estimate $D_{ij}$ from the self diffusion coefficient $D_{ii}$.

    ..math::
        D_{ij} = D_{ii} \sqrt{\frac{M_j / M_i + 1}{2}} \quad \text{if } M_j < M_i

        D_{ij} = D_{ii} \sqrt{\frac{M_j}{M_i}} \quad \text{otherwise}

    Args:
        self_coefficient: $D_{ii}$.
        mass_i: Molar mass of species $i$.
        mass_j: Molar mass of species $j$, any unit shared with ``mass_i``.

    """
    ratio = mass_j / mass_i
    return np.where(
        mass_j < mass_i,
        self_coefficient * np.sqrt((ratio + 1) / 2),
        self_coefficient * np.sqrt(ratio),
    )


class BinaryDiffusion:
    """Calibration of the diffusion of one species into another."""

    def __init__(
        self,
        species_1: t.Union[str, Species],
        species_2: t.Union[str, Species],
        coefficient_1: float,
        coefficient_2: float,
        model: t.Union[DiffusionType, str],
    ) -> None:
        """Initialize the pair.

        Args:
            species_1: First species.
            species_2: Second species.
            coefficient_1: Correlation prefactor in SI units.
            coefficient_2: Temperature exponent.
            model: Correlation used by this pair.

        """
        self.species_1 = as_species(species_1)
        self.species_2 = as_species(species_2)
        try:
            self.model = DiffusionType(model)
        except ValueError:
            raise InvalidConfiguration(
                f"Unknown diffusion model {model!r}, expected one of {[m.value for m in DiffusionType]}"
            ) from None
        if not np.isfinite(coefficient_1) or coefficient_1 <= 0:
            raise InvalidConfiguration(
                f"Binary coefficient of {self.species_1}-{self.species_2} must be positive, got {coefficient_1}"
            )
        if not np.isfinite(coefficient_2):
            raise InvalidConfiguration(
                f"Binary exponent of {self.species_1}-{self.species_2} must be finite, got {coefficient_2}"
            )
        self.coefficient_1 = float(coefficient_1)
        self.coefficient_2 = float(coefficient_2)

    def coefficient(
        self,
        temperature: PlanetArray,
        pressure: PlanetArray,
        constants: PhysicalConstants = DEFAULT_CONSTANTS,
    ) -> PlanetArray:
        """Evaluate the diffusion coefficient in m^2/s.

        Args:
            temperature: Temperature in K.
            pressure: Pressure in Pa.
            constants: Physical constants.

        """
        dtype = np.result_type(temperature, pressure)
        normal_pressure = constants.si("normal_pressure", dtype)
        standard_temperature = constants.si("standard_temperature", dtype)
        coeff = dtype.type(self.coefficient_1)
        exponent = dtype.type(self.coefficient_2)

        if self.model is DiffusionType.MASSMAN:
            ref_coeff = coeff
        elif self.model is DiffusionType.WAKEHAM:
            ref_coeff = coeff * standard_temperature**exponent
        elif self.model is DiffusionType.WILSON:
            exponent = exponent + 1
            ref_coeff = coeff * standard_temperature**exponent * constants.si("boltzmann", dtype) / normal_pressure
        else:
            raise InvalidConfiguration(f"Unsupported diffusion model {self.model}")

        return binary_coefficient(temperature, pressure, ref_coeff, exponent, normal_pressure, standard_temperature)

    def __repr__(self) -> str:
        return (
            f"BinaryDiffusion({self.species_1}, {self.species_2}, "
            f"{self.coefficient_1}, {self.coefficient_2}, {self.model.value})"
        )


class BinaryDiffusionTable:
    """Square table of binary diffusion calibrations over the neutral species."""

    def __init__(self, mixture: ChemicalMixture, pairs: t.Iterable[BinaryDiffusion] = ()) -> None:
        self.mixture = mixture
        size = mixture.n_neutral
        self._table: list[list[t.Optional[BinaryDiffusion]]] = [[None] * size for _ in range(size)]
        for pair in pairs:
            self.add(pair)

    def _neutral_index(self, species: Species) -> int:
        idx = self.mixture.index(species)
        if idx >= self.mixture.n_neutral:
            raise InvalidConfiguration(f"Binary diffusion is only defined for neutral species, got {species}")
        return idx

    def add(self, pair: BinaryDiffusion) -> None:
        """Store a pair, for both orderings of its species."""
        i = self._neutral_index(pair.species_1)
        j = self._neutral_index(pair.species_2)
        existing = self._table[i][j]
        if existing is not None and (
            existing.coefficient_1 != pair.coefficient_1
            or existing.coefficient_2 != pair.coefficient_2
            or existing.model is not pair.model
        ):
            raise InvalidConfiguration(f"Conflicting calibrations {existing} and {pair}")
        self._table[i][j] = pair
        self._table[j][i] = pair

    def check_complete(self) -> None:
        """Ensure every pair of distinct neutral species is calibrated."""
        species = self.mixture.neutral_species
        for i, row in enumerate(self._table):
            for j, pair in enumerate(row):
                if i != j and pair is None:
                    raise InvalidConfiguration(
                        f"Missing binary diffusion calibration for {species[i]}-{species[j]}"
                    )

    def __getitem__(self, index: tuple[int, int]) -> BinaryDiffusion:
        i, j = index
        pair = self._table[i][j]
        if pair is None:
            species = self.mixture.neutral_species
            raise InvalidConfiguration(f"Missing binary diffusion calibration for {species[i]}-{species[j]}")
        return pair

    def __len__(self) -> int:
        return len(self._table)
