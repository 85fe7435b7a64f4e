from .config import Config
from .distribution import GBWGluonDistribution, GluonDistribution
from .errors import (
    ConfigurationError,
    DomainError,
    GluonDistributionError,
    QuadratureError,
)
from .factory import create_gluon_distribution
from .grid import InterpolationGrid
from .kernels import FixedScaleMVGluonDistribution, MVGluonDistribution
from .saturation import SaturationScale
from .tabulated import TabulatedDistribution
from .tracing import TraceRecord, TracingGluonDistribution
from .transform import GridTransformDistribution

__version__ = "0.1.0"
