"""Errors raised by the publishing engine."""


class ConfigurationError(ValueError):
    """Invalid configuration detected before any file is copied.

    Raised when a pattern matches no files, when the manifest option resolves
    to an empty path, or when an existing manifest is not a JSON object.
    """


__all__ = ["ConfigurationError"]
