"""Custom exceptions for json-subset."""


class JsonSubsetError(Exception):
    """Base exception for json-subset errors."""
    pass


class ValidationError(JsonSubsetError):
    """Raised when an input is not a decoded JSON tree."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MaxDepthExceededError(JsonSubsetError):
    """Raised when a document nests deeper than the configured bound."""
    def __init__(self, depth: int, path: str):
        super().__init__(f"Maximum depth ({depth}) exceeded at path: {path}")
        self.depth = depth
        self.path = path


class LoadError(JsonSubsetError):
    """Raised when a document cannot be read or decoded."""
    def __init__(self, source: str, reason: str):
        super().__init__(f"Error loading {source}: {reason}")
        self.source = source
        self.reason = reason


class ConfigError(JsonSubsetError):
    """Raised when a configuration file is invalid."""
    def __init__(self, message: str, key: str = None):
        super().__init__(message)
        self.message = message
        self.key = key
