"""Exceptions raised by scribectl.

Every failure aborts the invocation; the command layer reports the message
and exits non-zero.
"""


class ScribeError(Exception):
    """Base exception for scribectl errors."""
    pass

class ConfigError(ScribeError):
    """Raised when the config file cannot be read or parsed."""
    pass

class KubeConnectionError(ScribeError):
    """Raised when a cluster identity cannot be resolved or its API server cannot be reached."""
    pass

class InvalidOptionError(ScribeError):
    """Raised for an unrecognized enum value such as a copy method."""
    pass

class ParseError(ScribeError):
    """Raised for a malformed quantity or key/value parameter string."""
    pass

class ValidationError(ScribeError):
    """Raised when a required combination of options is missing."""
    pass

class CreationError(ScribeError):
    """Raised when the API server rejects a create call."""
    pass

class NotFoundError(ScribeError):
    """Raised when an object the operation depends on does not exist."""
    pass

class KubeApiError(ScribeError):
    """Raised when a read or list request fails for any reason other than 404."""
    pass
