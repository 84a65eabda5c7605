"""Custom exceptions for configuration management."""


class ConfigError(Exception):
    """Raised when configuration data cannot be processed."""


class MigrationError(ConfigError):
    """Raised when a persisted configuration cannot be upgraded."""


class InvalidCategoryTypeError(ConfigError):
    """Raised when untrusted data names a category type that does not exist."""
