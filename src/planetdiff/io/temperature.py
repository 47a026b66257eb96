"""Reading temperature measurements.

The file has a single header line followed by whitespace separated rows::

    temperature  altitude  delta_temperature  delta_altitude

Only the first two columns are used.
"""

import pathlib
import typing as t

import numpy as np
from astropy import units as u

from ..altitude import Altitude
from ..exceptions import DataIngestionError
from ..types import PlanetArray
from ..utils import as_value


def _parse_temperature_line(line: str, path: pathlib.Path, line_number: int) -> tuple[float, float]:
    """Parse one data row into ``(temperature, altitude)``."""
    columns = line.split()
    if len(columns) < 2:
        raise DataIngestionError(path, f"expected at least 2 columns, got {len(columns)}", line_number)
    try:
        values = [float(c.replace("d", "e").replace("D", "e")) for c in columns]
    except ValueError:
        raise DataIngestionError(path, f"non numeric value in {line.strip()!r}", line_number) from None
    temperature, altitude = values[0], values[1]
    if not np.isfinite(values).all():
        raise DataIngestionError(path, f"non finite value in {line.strip()!r}", line_number)
    if temperature <= 0:
        raise DataIngestionError(path, f"temperature must be positive, got {temperature}", line_number)
    return temperature, altitude


def read_temperature(file_path: t.Union[pathlib.Path, str]) -> tuple[u.Quantity, u.Quantity]:
    """Load a temperature profile.

    Blank lines are ignored and the data ends at the end of the file.

    Args:
        file_path: The file path.

    Returns:
        Temperature (K) and altitude (km), sorted by increasing altitude.

    Raises:
        DataIngestionError: The file is unreadable or malformed.

    """
    file_path = pathlib.Path(file_path)

    rows = []
    try:
        with open(file_path) as file:
            header = file.readline()
            if not header:
                raise DataIngestionError(file_path, "file is empty")
            for line_number, line in enumerate(file, start=2):
                if not line.strip():
                    continue
                rows.append(_parse_temperature_line(line, file_path, line_number))
    except OSError as e:
        raise DataIngestionError(file_path, f"cannot read file: {e}") from e

    if len(rows) < 2:
        raise DataIngestionError(file_path, f"need at least 2 data rows, got {len(rows)}")

    data = np.array(rows, dtype=np.float64)
    order = np.argsort(data[:, 1], kind="stable")
    data = data[order]
    if np.any(np.diff(data[:, 1]) == 0):
        raise DataIngestionError(file_path, "duplicate altitudes")

    return data[:, 0] << u.K, data[:, 1] << u.km


def interpolate_temperature(
    temperature: t.Union[u.Quantity, PlanetArray],
    measured_altitude: t.Union[u.Quantity, PlanetArray],
    altitude: Altitude,
) -> u.Quantity:
    """Linearly interpolate measurements onto an altitude grid.

    Outside the measured range the nearest measurement is used.

    Args:
        temperature: Measured temperature, K when unitless.
        measured_altitude: Altitude of the measurements, km when unitless.
        altitude: The target grid.

    Returns:
        The temperature on the grid.

    """
    from scipy.interpolate import interp1d

    temperature = as_value(temperature, u.K)
    measured_altitude = as_value(measured_altitude, u.km)
    order = np.argsort(measured_altitude)
    temperature = temperature[order]
    measured_altitude = measured_altitude[order]

    temp_interp = interp1d(
        measured_altitude,
        temperature,
        kind="linear",
        bounds_error=False,
        fill_value=(temperature[0], temperature[-1]),
        assume_sorted=True,
    )
    grid = altitude.altitudes.to_value(u.km).astype(np.float64)
    return temp_interp(grid).astype(altitude.dtype) << u.K
