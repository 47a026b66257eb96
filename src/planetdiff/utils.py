"""Utility functions for planetdiff."""

import typing as t

import numpy as np
from astropy import units as u

from .types import PlanetArray, PlanetDType


def as_value(value: t.Union[u.Quantity, float, t.Sequence[float], PlanetArray], unit: u.UnitBase, dtype: PlanetDType = np.float64) -> PlanetArray:
    """Strip the units off a value.

    Quantities are converted to ``unit`` first, bare numbers are assumed to
    already be expressed in ``unit``.

    Args:
        value: The value to convert.
        unit: The unit to express the value in.
        dtype: The floating type of the result.

    Returns:
        The value as an array of ``dtype``.

    """
    if isinstance(value, u.Quantity):
        value = value.to_value(unit)
    return np.asarray(value, dtype=dtype)


def first_index(mask: np.ndarray) -> tuple[int, ...]:
    """Return the index of the first ``True`` element of a mask."""
    return tuple(int(i) for i in np.argwhere(mask)[0])
