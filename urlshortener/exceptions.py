class UrlShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:urlshortener_error'


class RequestError(UrlShortenerError):
    """Base exception for errors caused by the client's request."""

    error_code = 'request:request_error'


class ValidationError(RequestError):
    """Raised when a request is missing required input or carries invalid values."""

    error_code = 'request:validation_error'

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ParseError(RequestError):
    """Raised when a request body cannot be parsed."""

    error_code = 'request:parse_error'


class RandomSourceError(UrlShortenerError):
    """Raised when the operating system's entropy source is unavailable."""

    error_code = 'app:random_source_error'


class ConfigurationError(UrlShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
