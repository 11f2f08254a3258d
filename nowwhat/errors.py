"""Exceptions raised by NowWhat."""


class ConfigError(ValueError):
    """Raised when an environment setting cannot be used."""
