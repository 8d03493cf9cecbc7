"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Settings are unusable in the current environment."""

    pass


class DependencyInjectionError(UtilError):
    """No provider implementation is registered for a component."""

    pass
