"""Used to read input files."""
from .loader import load_diffusion_input, run_diffusion_input
from .schema import DiffusionInputSchema
from .temperature import interpolate_temperature, read_temperature

__all__ = [
    "load_diffusion_input",
    "run_diffusion_input",
    "DiffusionInputSchema",
    "interpolate_temperature",
    "read_temperature",
]
