"""Vertical diffusion of trace species in planetary atmospheres."""

from .altitude import Altitude
from .binary_diffusion import (
    BinaryDiffusion,
    BinaryDiffusionTable,
    DiffusionType,
    binary_coefficient,
    scaled_binary_coefficient,
)
from .composition import AtmosphericMixture
from .constants import DEFAULT_CONSTANTS, PhysicalConstants, PlanetSchema
from .diffusion import DiffusionEvaluator, DiffusionSolution, evaluate_diffusion
from .eddy_diffusion import EddyDiffusionEvaluator
from .exceptions import DataIngestionError, InvalidConfiguration, NumericDegeneracy, PlanetDiffError
from .log import setup_log
from .molecular_diffusion import MolecularDiffusionEvaluator
from .species import ChemicalMixture, Species, SpeciesDict
from .temperature import AtmosphericTemperature

__version__ = "0.1.0"

__all__ = [
    "Altitude",
    "AtmosphericMixture",
    "AtmosphericTemperature",
    "BinaryDiffusion",
    "BinaryDiffusionTable",
    "ChemicalMixture",
    "DEFAULT_CONSTANTS",
    "DataIngestionError",
    "DiffusionEvaluator",
    "DiffusionSolution",
    "DiffusionType",
    "EddyDiffusionEvaluator",
    "InvalidConfiguration",
    "MolecularDiffusionEvaluator",
    "NumericDegeneracy",
    "PhysicalConstants",
    "PlanetDiffError",
    "PlanetSchema",
    "Species",
    "SpeciesDict",
    "binary_coefficient",
    "evaluate_diffusion",
    "scaled_binary_coefficient",
    "setup_log",
]
