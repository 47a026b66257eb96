"""Building an evaluation from an input document."""

import json
import pathlib
import typing as t

import numpy as np

from ..altitude import Altitude
from ..binary_diffusion import BinaryDiffusion
from ..constants import DEFAULT_CONSTANTS, PhysicalConstants
from ..diffusion import DiffusionSolution, evaluate_diffusion
from ..log import Loggable
from ..species import Species
from ..temperature import AtmosphericTemperature
from .schema import DiffusionInputSchema

_log = Loggable("io.loader")

_PRECISIONS = {"single": np.float32, "double": np.float64}


def load_diffusion_input(file_path: t.Union[pathlib.Path, str]) -> DiffusionInputSchema:
    """Validate a JSON input document.

    Relative temperature file paths are resolved against the document.

    Args:
        file_path: Path to the document.

    """
    file_path = pathlib.Path(file_path)
    _log.info("Loading %s", file_path)
    raw = json.loads(file_path.read_text())
    temperature_file = raw.get("temperature_file")
    if isinstance(temperature_file, str) and not pathlib.Path(temperature_file).is_absolute():
        raw["temperature_file"] = str(file_path.parent / temperature_file)
    return DiffusionInputSchema.model_validate(raw)


def run_diffusion_input(schema: DiffusionInputSchema) -> DiffusionSolution:
    """Evaluate the diffusion described by a validated input.

    Args:
        schema: The input.

    Returns:
        DiffusionSolution: every derived profile.

    """
    constants = DEFAULT_CONSTANTS
    if schema.planet is not None:
        constants = PhysicalConstants(planet=schema.planet)

    dtype = _PRECISIONS[schema.precision]
    altitude = Altitude(schema.altitude.z_min, schema.altitude.z_max, schema.altitude.z_step, dtype=dtype)
    temperature = AtmosphericTemperature.from_file(schema.temperature_file, altitude)

    def make_species(name: str) -> Species:
        return Species(name, molar_mass=schema.molar_masses.get(name))

    neutrals = [make_species(name) for name in schema.neutrals]
    ions = neutrals + [make_species(name) for name in schema.ions] if schema.ions else None

    pairs = [
        BinaryDiffusion(p.species[0], p.species[1], p.coefficient_1, p.coefficient_2, p.model)
        for p in schema.binary_diffusion
    ]

    _log.debug("Running %d neutral species on %d altitudes", len(neutrals), altitude.size)
    return evaluate_diffusion(
        neutrals,
        schema.molar_fractions,
        schema.total_density,
        altitude,
        temperature,
        pairs,
        schema.eddy_coefficient,
        ionic_species=ions,
        thermal_coefficient=schema.thermal_coefficients or None,
        constants=constants,
    )
