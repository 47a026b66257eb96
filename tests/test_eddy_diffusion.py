import numpy as np
import pytest
from astropy import units as u

from planetdiff import EddyDiffusionEvaluator, InvalidConfiguration

from conftest import K0, tolerance


def test_eddy_reference_value(titan):
    assert titan.eddy.K[0].to_value(u.m**2 / u.s) == pytest.approx(K0, rel=tolerance(titan.dtype))


def test_eddy_increases_with_altitude(titan):
    assert np.all(np.diff(titan.eddy.K.value) >= 0)


def test_eddy_inverse_square_root_of_density(titan):
    k = titan.eddy.K.value
    total = titan.composition.total_density.value
    np.testing.assert_allclose(k**2 * total, K0**2 * total[0], rtol=tolerance(titan.dtype))


def test_eddy_accepts_quantity(titan):
    eddy = EddyDiffusionEvaluator(titan.composition, titan.altitude, 4.3e6 * u.cm**2 / u.s)
    eddy.make_eddy_diffusion()
    np.testing.assert_allclose(eddy.K.value, titan.eddy.K.value, rtol=tolerance(titan.dtype))


def test_eddy_requires_K0(titan):
    eddy = EddyDiffusionEvaluator(titan.composition, titan.altitude)
    with pytest.raises(InvalidConfiguration):
        eddy.make_eddy_diffusion()
    with pytest.raises(InvalidConfiguration):
        eddy.set_K0(-1.0)
