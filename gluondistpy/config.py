import json
import logging
from pathlib import Path

import yaml

from gluondistpy.distribution import GluonDistribution
from gluondistpy.errors import ConfigurationError
from gluondistpy.factory import create_gluon_distribution
from gluondistpy.parameters import (
    FileParameters,
    parse_gdist_parameters,
    parse_saturation_parameters,
)
from gluondistpy.saturation import SaturationScale


class Config:
    """Settings for building a gluon distribution, read from a json or yaml file.

    The file has a ``saturation`` section (fit constants, all optional), a
    ``gdist`` section selecting the distribution by ``kind`` together with its
    parameters, and optionally ``trace_gdist`` and ``trace_filename``::

        saturation:
          x0: 0.000304
          lambda: 0.288
        gdist:
          kind: MV
          LambdaMV: 0.241
          q2min: 1.0e-6
          q2max: 1.0e+3
        trace_gdist: false

    Relative table paths of ``file`` distributions are resolved against the
    folder of the configuration file.
    """

    config: dict

    def __init__(self, path_config: str):
        if not isinstance(path_config, (str, Path)):
            raise ConfigurationError("The config file path needs to be a string!")
        _path_config = Path(path_config)
        self.path_config = _path_config
        self.file_type = _path_config.suffix
        try:
            match self.file_type:
                case ".json":
                    with open(_path_config) as data:
                        self.config = json.load(data)
                case ".yaml" | ".yml":
                    with open(_path_config) as data:
                        self.config = yaml.safe_load(data)
                case _:
                    raise ConfigurationError(
                        "The provided config file needs to be a json or yaml file!"
                    )
        except OSError as exc:
            raise ConfigurationError(
                f"Could not read config file {path_config}. Check if the file exists."
            ) from exc
        if not isinstance(self.config, dict):
            raise ConfigurationError(
                f"Could not read config file {path_config}: expected a mapping of settings."
            )

        self.log = logging.getLogger(self.__class__.__module__)
        self.__read()

    def __read(self):
        self.saturation = parse_saturation_parameters(self.config.get("saturation"))
        if "gdist" not in self.config:
            raise ConfigurationError("No value for gdist!")
        self.gdist = self.__resolve_paths(parse_gdist_parameters(self.config["gdist"]))

        self.trace_gdist = bool(self.config.get("trace_gdist", False))
        self.trace_filename = str(self.config.get("trace_filename", "gdist.trace"))
        if self.trace_gdist:
            self.trace_filename = str(self.__resolve(self.trace_filename))
            self.log.info(f"Gluon distribution calls will be traced to {self.trace_filename}")

    def __resolve(self, filename: str) -> Path:
        path = Path(filename)
        if not path.is_absolute():
            path = self.path_config.parent / path
        return path

    def __resolve_paths(self, parameters):
        if not isinstance(parameters, FileParameters):
            return parameters
        return parameters.model_copy(
            update=dict(
                position_filename=str(self.__resolve(parameters.position_filename)),
                momentum_filename=str(self.__resolve(parameters.momentum_filename)),
                lower=self.__resolve_paths(parameters.lower),
                upper=self.__resolve_paths(parameters.upper),
            )
        )

    def create_saturation_scale(self) -> SaturationScale:
        return self.saturation.create()

    def create_gluon_distribution(
        self, satscale: SaturationScale | None = None
    ) -> GluonDistribution:
        """Build the configured distribution, traced if ``trace_gdist`` is set.

        Args:
            satscale (SaturationScale, optional): Scale to share. A new one is
                created from the ``saturation`` section if omitted.

        Returns:
            (GluonDistribution): The constructed distribution.
        """
        if satscale is None:
            satscale = self.create_saturation_scale()
        self.log.info(f"Creating {self.gdist.kind} gluon distribution")
        return create_gluon_distribution(
            self.gdist,
            satscale,
            trace_sink=self.trace_filename if self.trace_gdist else None,
        )
