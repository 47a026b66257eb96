import numpy as np
import pytest

from planetdiff import ChemicalMixture, InvalidConfiguration, Species, SpeciesDict
from planetdiff.constants import ELECTRON_MOLAR_MASS


def test_molar_mass_from_formula():
    assert Species("N2").molar_mass == pytest.approx(28.0134, abs=1e-3)
    assert Species("CH4").molar_mass == pytest.approx(16.043, abs=1e-3)


def test_molar_mass_override():
    assert Species("N2", molar_mass=28.016).molar_mass == 28.016


def test_ion_charge_and_mass():
    ion = Species("N2+")
    assert ion.is_ion
    assert ion.ionic_charge == 1
    assert str(ion) == "N2+"
    assert ion.molar_mass == pytest.approx(Species("N2").molar_mass - ELECTRON_MOLAR_MASS)
    assert ion != Species("N2")


def test_species_compares_with_strings():
    assert Species("CH4") == "CH4"
    assert hash(Species("CH4")) == hash(Species(" CH4 "))


def test_species_dict_accepts_strings():
    fractions = SpeciesDict[float]()
    fractions["N2"] = 0.96
    fractions[Species("CH4")] = 0.04

    assert fractions[Species("N2")] == 0.96
    assert fractions["CH4"] == 0.04
    assert "N2" in fractions
    assert fractions.get("Ar", 0.0) == 0.0


def test_mixture_prefix_relationship():
    mixture = ChemicalMixture(["N2", "CH4"], ["N2", "CH4", "N2+", "CH5+"])
    assert [str(s) for s in mixture.neutral_species] == ["N2", "CH4"]
    assert [str(s) for s in mixture.ions] == ["N2+", "CH5+"]
    assert mixture.n_neutral == 2
    assert len(mixture) == 4
    assert mixture.index("N2+") == 2
    np.testing.assert_allclose(
        mixture.neutral_molar_masses(), [Species("N2").molar_mass * 1e-3, Species("CH4").molar_mass * 1e-3]
    )


def test_mixture_without_ions():
    mixture = ChemicalMixture(["N2", "CH4"])
    assert mixture.species == mixture.neutral_species
    assert mixture.ions == ()


@pytest.mark.parametrize(
    "neutrals, full",
    [
        (["N2", "CH4"], ["CH4", "N2", "N2+"]),
        (["N2", "CH4"], ["N2", "N2+"]),
        (["N2", "N2"], None),
        (["N2", "N2+"], None),
        ([], None),
    ],
)
def test_invalid_mixtures_rejected(neutrals, full):
    with pytest.raises(InvalidConfiguration):
        ChemicalMixture(neutrals, full)


def test_unknown_species_index():
    with pytest.raises(InvalidConfiguration):
        ChemicalMixture(["N2"]).index("Ar")
