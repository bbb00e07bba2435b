"""Exceptions raised by the renderer."""


class ConfigurationError(ValueError):
    """Raised when a scene, camera or render setting is invalid.

    Subclasses ValueError so callers validating input generically keep working.
    """
