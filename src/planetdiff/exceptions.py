"""Errors raised by planetdiff."""

import typing as t


class PlanetDiffError(Exception):
    """Base class for all planetdiff errors."""


class InvalidConfiguration(PlanetDiffError, ValueError):
    """Raised when inputs are rejected before any evaluation."""


class NumericDegeneracy(PlanetDiffError, ArithmeticError):
    """Raised when an evaluation would divide by zero or overflow."""

    def __init__(
        self,
        component: str,
        quantity: str,
        species: t.Optional[str] = None,
        altitude_index: t.Optional[int] = None,
    ) -> None:
        self.component = component
        self.quantity = quantity
        self.species = species
        self.altitude_index = altitude_index
        where = []
        if species is not None:
            where.append(f"species {species}")
        if altitude_index is not None:
            where.append(f"altitude index {altitude_index}")
        locus = f" ({', '.join(where)})" if where else ""
        super().__init__(f"{component}: degenerate {quantity}{locus}")


class DataIngestionError(PlanetDiffError, ValueError):
    """Raised when an input file cannot be read or parsed."""

    def __init__(self, path: t.Any, message: str, line: t.Optional[int] = None) -> None:
        self.path = path
        self.line = line
        location = f"{path}:{line}" if line is not None else f"{path}"
        super().__init__(f"{location}: {message}")
