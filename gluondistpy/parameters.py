"""Validated construction parameters for saturation scales and gluon distributions.

Each distribution kind has its own pydantic model; the ``kind`` field selects
the model when a configuration section is parsed with
:func:`parse_gdist_parameters`.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from gluondistpy.errors import ConfigurationError
from gluondistpy.saturation import SaturationScale

# lowercase spelling -> canonical kind
KIND_ALIASES = {
    "gbw": "GBW",
    "mv": "MV",
    "fmv": "fMV",
    "fixed-mv": "fMV",
    "fixed_mv": "fMV",
    "file": "file",
    "tabulated": "file",
}


class SaturationParameters(BaseModel):
    """Fit constants of the saturation scale."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    Q02: float = Field(default=1.0, gt=0)
    x0: float = Field(default=0.000304, gt=0)
    lambda_: float = Field(default=0.288, alias="lambda")
    mass_number: float = Field(default=197.0, gt=0)
    centrality: float = Field(default=0.56, gt=0)

    def create(self) -> SaturationScale:
        return SaturationScale.from_fit(
            Q02=self.Q02,
            x0=self.x0,
            lambda_=self.lambda_,
            mass_number=self.mass_number,
            centrality=self.centrality,
        )


class GBWParameters(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["GBW"] = "GBW"


class GridParameters(BaseModel):
    """Settings shared by every grid-transform distribution."""

    model_config = ConfigDict(extra="forbid")

    q2min: float = Field(default=1e-6, gt=0)
    q2max: float = Field(default=1e3, gt=0)
    q2_dimension: int = Field(default=200, ge=2)
    subinterval_limit: int = Field(default=1000, ge=1)
    q2max_policy: Literal["error", "clamp", "extrapolate"] = "error"


class MVParameters(GridParameters):
    kind: Literal["MV"] = "MV"
    LambdaMV: float = Field(default=0.241, gt=0)
    Ymin: float = 0.0
    Ymax: float = 14.0
    Y_dimension: int = Field(default=29, ge=1)


class FixedScaleMVParameters(GridParameters):
    kind: Literal["fMV"] = "fMV"
    LambdaMV: float = Field(default=0.241, gt=0)
    Qs2: float = Field(gt=0)


class FileParameters(BaseModel):
    """Tabulated distribution, optionally backed by other distributions out of range."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["file"] = "file"
    position_filename: str
    momentum_filename: str
    lower: GluonDistributionParameters | None = None
    upper: GluonDistributionParameters | None = None


GluonDistributionParameters = Annotated[
    Union[GBWParameters, MVParameters, FixedScaleMVParameters, FileParameters],
    Field(discriminator="kind"),
]

FileParameters.model_rebuild()

_gdist_adapter = TypeAdapter(GluonDistributionParameters)


def _normalize_kind(data: dict) -> dict:
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"The gluon distribution settings need to be a mapping, got {data!r}"
        )
    if "kind" not in data:
        raise ConfigurationError("No value for gdist kind!")
    kind = str(data["kind"])
    if kind.lower() not in KIND_ALIASES:
        raise ConfigurationError(
            f"Unsupported gluon distribution kind: {kind!r}. "
            f"Expected one of {sorted(set(KIND_ALIASES.values()))}."
        )
    data = dict(data, kind=KIND_ALIASES[kind.lower()])
    for key in ("lower", "upper"):
        if data.get(key) is not None:
            data[key] = _normalize_kind(data[key])
    return data


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )


def parse_gdist_parameters(data: dict) -> GluonDistributionParameters:
    """Validate a gluon distribution section.

    Raises:
        ConfigurationError: If the kind is unknown or a parameter is missing
            or invalid. The message names the offending parameter.
    """
    data = _normalize_kind(data)
    try:
        return _gdist_adapter.validate_python(data)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid {data['kind']} gluon distribution settings: {_describe(exc)}"
        ) from exc


def parse_saturation_parameters(data: dict | None) -> SaturationParameters:
    try:
        return SaturationParameters.model_validate(data or {})
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid saturation scale settings: {_describe(exc)}"
        ) from exc
