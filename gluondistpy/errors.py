"""Exceptions raised by gluon distributions.

All errors derive from :class:`GluonDistributionError` so a caller can catch
every failure of this package in one place, while the subclasses keep the
distinction between a bad setup and a bad query.
"""


class GluonDistributionError(Exception):
    """Base class for all gluon distribution errors."""


class ConfigurationError(GluonDistributionError, ValueError):
    """Invalid or missing construction parameters, or a malformed data table."""


class DomainError(GluonDistributionError, ValueError):
    """A query argument lies outside the range covered by an interpolation grid."""


class QuadratureError(GluonDistributionError, ArithmeticError):
    """Adaptive quadrature exhausted its subdivision budget."""
