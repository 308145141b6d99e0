"""
Error types raised by the chart engine.

Missing body longitudes are not errors: the affected row is dropped by the
table builders. Only contract violations raise: non-finite numbers, a
within-sign degree outside [0, 30), an unusable reference instant, or a
timezone nobody can resolve.
"""


class JyotishError(ValueError):
    """Base class for all engine errors."""


class InvalidLongitudeError(JyotishError):
    """A longitude or degree is NaN, infinite, or outside its allowed range."""


class UnresolvableTimezoneError(JyotishError):
    """A timezone identifier could not be resolved, even after correction."""


class InvalidInstantError(JyotishError):
    """A reference instant is non-finite or outside the calendar range."""
