from collections.abc import Iterable


class PasteShareError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:pasteshare_error'


class ValidationError(PasteShareError):
    """Raised when client-supplied paste data violates one or more constraints.

    All violated constraints are collected, never short-circuited.
    """

    error_code = 'app:validation_error'

    def __init__(self, errors: Iterable[str]):
        self.errors = list(errors)
        super().__init__(', '.join(self.errors))


class PasteUnavailableError(PasteShareError):
    """Raised when a stored paste is expired or has exhausted its views."""

    error_code = 'app:paste_unavailable_error'

    def __init__(self, paste_id: str, availability):
        self.paste_id = paste_id
        self.availability = availability
        super().__init__(f"Paste '{paste_id}' is not available ({availability}).")


class ConfigurationError(PasteShareError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
