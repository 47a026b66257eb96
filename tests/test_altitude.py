import numpy as np
import pytest
from astropy import units as u

from planetdiff import Altitude, InvalidConfiguration


def test_grid_includes_both_ends():
    altitude = Altitude(600.0, 1400.0, 10.0)
    assert altitude.size == 81
    assert altitude.altitudes[0] == 600 * u.km
    assert altitude.altitudes[-1] == 1400 * u.km
    np.testing.assert_allclose(np.diff(altitude.altitudes_m), 1e4)


def test_grid_stops_below_z_max():
    altitude = Altitude(0.0, 25.0, 10.0)
    np.testing.assert_array_equal(altitude.altitudes.value, [0.0, 10.0, 20.0])


def test_grid_quantities():
    altitude = Altitude(600 * u.km, 1.4e6 * u.m, 10 * u.km)
    assert len(altitude) == 81


def test_grid_dtype():
    altitude = Altitude(600.0, 1400.0, 10.0, dtype=np.float32)
    assert altitude.altitudes_m.dtype == np.float32
    assert altitude.altitudes.dtype == np.float32


@pytest.mark.parametrize(
    "args",
    [
        (600.0, 610.0, 10.0),
        (600.0, 1400.0, 0.0),
        (600.0, 1400.0, -10.0),
        (1400.0, 600.0, 10.0),
        (600.0, np.inf, 10.0),
    ],
)
def test_invalid_grid_rejected(args):
    with pytest.raises(InvalidConfiguration):
        Altitude(*args)


def test_integer_dtype_rejected():
    with pytest.raises(InvalidConfiguration):
        Altitude(600.0, 1400.0, 10.0, dtype=np.int64)
