"""Input schemas."""

import typing as t

from pydantic import BaseModel, ConfigDict, Field, FilePath, field_validator, model_validator

from ..binary_diffusion import DiffusionType
from ..constants import PlanetSchema


class AltitudeSchema(BaseModel):
    """Altitude grid in km."""

    z_min: float
    z_max: float
    z_step: float = Field(gt=0)


class BinaryDiffusionSchema(BaseModel):
    """Calibration of a pair of species, SI units."""

    species: tuple[str, str]
    coefficient_1: float = Field(gt=0)
    coefficient_2: float
    model: DiffusionType

    @field_validator("model", mode="before")
    @classmethod
    def _lower(cls, value: t.Any) -> t.Any:
        return value.lower() if isinstance(value, str) else value


class DiffusionInputSchema(BaseModel):
    """Everything needed to evaluate the diffusion of an atmosphere."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    altitude: AltitudeSchema
    neutrals: list[str] = Field(min_length=1)
    ions: list[str] = []
    molar_masses: dict[str, float] = {}
    molar_fractions: dict[str, float]
    total_density: float = Field(gt=0, description="Total density at z_min in cm^-3")
    binary_diffusion: list[BinaryDiffusionSchema]
    eddy_coefficient: float = Field(ge=0, description="K0 in m^2/s")
    thermal_coefficients: dict[str, float] = {}
    temperature_file: FilePath
    precision: t.Literal["single", "double"] = "double"
    planet: t.Optional[PlanetSchema] = None

    @model_validator(mode="after")
    def _check_species(self) -> "DiffusionInputSchema":
        known = set(self.neutrals) | set(self.ions)
        for name in list(self.molar_fractions) + list(self.molar_masses) + list(self.thermal_coefficients):
            if name not in known:
                raise ValueError(f"Unknown species {name!r}")
        for pair in self.binary_diffusion:
            for name in pair.species:
                if name not in self.neutrals:
                    raise ValueError(f"Binary diffusion species {name!r} is not a neutral species")
        return self
