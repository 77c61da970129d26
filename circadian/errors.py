"""
Error taxonomy.

Input problems subclass ValueError so callers that already guard numeric
code with ``except ValueError`` keep working. A failed conversion back to a
domain type is an internal invariant violation and is kept apart from bad
input.
"""


class CircadianError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(CircadianError, ValueError):
    """A sample or period is outside the domain the engine accepts."""


class EmptyInputError(CircadianError, ValueError):
    """No samples were supplied, so no mean exists."""


class DomainConversionError(CircadianError, RuntimeError):
    """A computed mean cannot be mapped back onto the adapter's domain type."""
