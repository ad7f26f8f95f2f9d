"""Exception definitions for settingsgen"""


class SettingsGenException(Exception):
    """Base exception for all settingsgen errors.

    Sanitizing and rendering never raise; these exceptions cover schema
    construction, configuration loading, persistence and the host adapters.
    """

    pass


class ConfigException(SettingsGenException):
    """Raised when configuration validation or loading fails.

    Use this exception when:
    - The configuration file cannot be found
    - The TOML syntax is invalid
    - Configuration validation fails (missing required fields, invalid values)
    """

    pass


class SchemaException(SettingsGenException):
    """Raised when a settings schema is assembled incorrectly.

    Use this exception when:
    - Two fields share the same id within a page
    - Two tabs share the same id within a page
    - A field definition cannot be validated
    """

    pass


class StoreException(SettingsGenException):
    """Raised when a settings record cannot be read or written."""

    pass


class PageNotFound(SettingsGenException):
    pass


class PermissionDenied(SettingsGenException):
    """Raised when a request lacks the capability required by a page."""

    pass
