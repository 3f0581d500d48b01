class CalzhError(Exception):
    """Base error."""

class NumericalError(CalzhError):
    """Raised when a root search diverges or produces a non-finite estimate."""

class InconsistencyError(CalzhError):
    """Raised when a lunar year violates the 12/13-month or leap-month rules."""

class NotFoundError(CalzhError, LookupError):
    """Raised when no lunar month contains the requested date or label."""

class ScaleMismatchError(CalzhError, TypeError):
    """Raised when UT and TT instants are combined without conversion."""

class UnsupportedConfigurationError(CalzhError, ValueError):
    """Raised when a service configuration names an unknown locale or option."""
