"""Saturation scale.

The saturation scale grows as a power of ``1/x``; the rapidity-like variable
used throughout the package is ``Y = ln(1/x)``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from gluondistpy.errors import ConfigurationError


@dataclass(frozen=True)
class SaturationScale:
    """Power-law saturation scale ``Qs2(x) = Q02x0lambda * x^(-lambda_)``.

    Instances are shared, read-only, by every distribution built on them.

    Attributes
    ----------
    Q02x0lambda:
        Precomputed prefactor ``c A^(1/3) Q0^2 x0^lambda``.
    lambda_:
        Exponent of the power law.
    """

    Q02x0lambda: float
    lambda_: float

    def __post_init__(self):
        if not (math.isfinite(self.Q02x0lambda) and self.Q02x0lambda > 0):
            raise ConfigurationError(
                f"Invalid value {self.Q02x0lambda!r} for Q02x0lambda: must be positive and finite"
            )
        if not math.isfinite(self.lambda_):
            raise ConfigurationError(
                f"Invalid value {self.lambda_!r} for lambda: must be finite"
            )

    @staticmethod
    def compute_Q02x0lambda(
        Q02: float, x0: float, lambda_: float, mass_number: float, centrality: float
    ) -> float:
        return centrality * mass_number ** (1.0 / 3.0) * Q02 * x0**lambda_

    @classmethod
    def from_fit(
        cls,
        Q02: float,
        x0: float,
        lambda_: float,
        mass_number: float = 1.0,
        centrality: float = 1.0,
    ) -> "SaturationScale":
        """Create a saturation scale from the fit constants of the GBW-type parametrization."""
        return cls(
            Q02x0lambda=cls.compute_Q02x0lambda(Q02, x0, lambda_, mass_number, centrality),
            lambda_=lambda_,
        )

    def xY(self, Y: float) -> float:
        return math.exp(-Y)

    def Yx(self, x: float) -> float:
        return math.log(1.0 / x)

    def Qs2x(self, x: float) -> float:
        return self.Q02x0lambda * x ** (-self.lambda_)

    def Qs2Y(self, Y: float) -> float:
        # exp(lambda Y) == x^(-lambda) for x = exp(-Y)
        return self.Q02x0lambda * math.exp(self.lambda_ * Y)
