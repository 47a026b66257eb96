"""Species and species collections."""

import typing as t

import numpy as np
from molmass import Formula

from .constants import ELECTRON_MOLAR_MASS
from .exceptions import InvalidConfiguration
from .types import PlanetArray, PlanetDType

_VT = t.TypeVar("_VT")
_T = t.TypeVar("_T")


def _split_charge(formula: str) -> tuple[str, int]:
    """Split trailing ``+``/``-`` characters off a formula."""
    stripped = formula.rstrip("+-")
    suffix = formula[len(stripped) :]
    return stripped, suffix.count("+") - suffix.count("-")


class Species(Formula):
    """Represents a particular species."""

    def __init__(
        self,
        formula: str,
        molar_mass: t.Optional[float] = None,
        charge: t.Optional[int] = None,
    ) -> None:
        """Initialize species.

        Args:
            formula: The formula of the species, ions carry trailing ``+`` or ``-``.
            molar_mass: Molar mass in g/mol, computed from the formula when omitted.
            charge: Explicit charge, overrides the one read from the formula.

        """
        formula = formula.strip()
        neutral_formula, parsed_charge = _split_charge(formula)
        if not neutral_formula:
            raise InvalidConfiguration(f"Empty species formula {formula!r}")
        self.ionic_charge = parsed_charge if charge is None else charge
        self.label = neutral_formula + _charge_suffix(self.ionic_charge)
        super().__init__(neutral_formula)

        if molar_mass is None:
            molar_mass = self.mass - self.ionic_charge * ELECTRON_MOLAR_MASS
        if not np.isfinite(molar_mass) or molar_mass <= 0:
            raise InvalidConfiguration(f"Molar mass of {self.label} must be positive, got {molar_mass}")
        self._molar_mass = float(molar_mass)

    @property
    def molar_mass(self) -> float:
        """Molar mass in g/mol."""
        return self._molar_mass

    @property
    def is_ion(self) -> bool:
        return self.ionic_charge != 0

    def __hash__(self) -> int:
        """Hash function. Necessary for sets and dicts."""
        return hash(self.label)

    def __eq__(self, other: object) -> bool:
        """Equality check, strings are compared against the symbol."""
        if isinstance(other, str):
            return self.label == other.strip()
        if not isinstance(other, Species):
            return NotImplemented
        return self.label == other.label

    def __str__(self) -> str:
        return self.label

    def __repr__(self) -> str:
        return f"Species({self.label})"


def _charge_suffix(charge: int) -> str:
    return "+" * charge if charge > 0 else "-" * -charge


def as_species(value: t.Union[str, Species]) -> Species:
    if isinstance(value, Species):
        return value
    return Species(value)


class SpeciesDict(dict[Species, _VT]):
    """A dictionary to hold species.

    A standard dictionary with the ability to use a string as a key
    as well.

    """

    def get(self, key: t.Union[str, Species], default: t.Optional[_VT | _T] = None) -> _VT | _T:
        return super().get(as_species(key), default)

    def __getitem__(self, key: t.Union[str, Species]) -> _VT:
        return super().__getitem__(as_species(key))

    def __setitem__(self, key: t.Union[str, Species], value: _VT) -> None:
        super().__setitem__(as_species(key), value)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            key = as_species(key)
        if not isinstance(key, Species):
            raise TypeError(f"Cannot look up {key!r} in a SpeciesDict")
        return super().__contains__(key)


class ChemicalMixture:
    """Neutral species and their ion-extended counterpart.

    ``ionic_species`` is the full species list: it starts with the neutral
    species in the same order and appends the ions. Only the neutral prefix
    takes part in diffusion.
    """

    def __init__(
        self,
        neutral_species: t.Sequence[t.Union[str, Species]],
        ionic_species: t.Optional[t.Sequence[t.Union[str, Species]]] = None,
    ) -> None:
        """Initialize the mixture.

        Args:
            neutral_species: The neutral species.
            ionic_species: The full list, neutral species first. ``None`` means no ions.

        """
        neutrals = tuple(as_species(s) for s in neutral_species)
        if not neutrals:
            raise InvalidConfiguration("At least one neutral species is required")
        full = neutrals if ionic_species is None else tuple(as_species(s) for s in ionic_species)

        if full[: len(neutrals)] != neutrals:
            raise InvalidConfiguration(
                "Ion-extended species list must start with the neutral species "
                f"{[str(s) for s in neutrals]}, got {[str(s) for s in full]}"
            )
        if len(set(full)) != len(full):
            raise InvalidConfiguration(f"Duplicate species in {[str(s) for s in full]}")
        charged = [str(s) for s in neutrals if s.is_ion]
        if charged:
            raise InvalidConfiguration(f"Charged species {charged} in the neutral list")

        self._neutral_species = neutrals
        self._species = full
        self._index = {s: idx for idx, s in enumerate(full)}

    @property
    def neutral_species(self) -> tuple[Species, ...]:
        return self._neutral_species

    @property
    def species(self) -> tuple[Species, ...]:
        """The full, ion-extended, species list."""
        return self._species

    @property
    def ions(self) -> tuple[Species, ...]:
        """The species appended after the neutral ones."""
        return self._species[self.n_neutral :]

    @property
    def n_neutral(self) -> int:
        return len(self._neutral_species)

    def index(self, species: t.Union[str, Species]) -> int:
        """Position of a species in the full list."""
        try:
            return self._index[as_species(species)]
        except KeyError:
            raise InvalidConfiguration(f"Unknown species {species}") from None

    def neutral_molar_masses(self, dtype: PlanetDType = np.float64) -> PlanetArray:
        """Molar masses of the neutral species in kg/mol."""
        return np.array([s.molar_mass * 1e-3 for s in self._neutral_species], dtype=dtype)

    def __len__(self) -> int:
        return len(self._species)

    def __repr__(self) -> str:
        return f"ChemicalMixture({[str(s) for s in self._species]})"
