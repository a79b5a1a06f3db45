"""Engine-specific exceptions."""


class EngineError(Exception):
    """Base exception for engine errors."""


class InvalidArgumentError(EngineError, ValueError):
    """Raised when a caller passes an argument the engine refuses to use."""


class MalformedResponseError(EngineError):
    """Raised when a search response does not have the expected shape."""


class ConfigurationError(EngineError):
    """Raised when engine configuration is invalid."""
