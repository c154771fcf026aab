"""Exceptions raised by chamber_fdtd."""


class ConfigurationError(ValueError):
    """Raised when chamber parameters violate a construction-time precondition."""

    pass
