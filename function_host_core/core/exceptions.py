"""
Common exceptions used throughout the function host.
Each API-facing error maps onto one HTTP status in api/main.py.
"""

class BaseAppException(Exception):
    """Base exception for all application-specific errors."""
    pass

class ConfigurationError(BaseAppException):
    """Error related to service configuration."""
    pass

class NotFoundError(BaseAppException):
    """A function, or a document inside a function directory, does not exist."""
    pass

class FunctionNotFoundError(NotFoundError):
    """The function name does not resolve to a directory with a config document."""
    pass

class ScriptNotFoundError(NotFoundError):
    """The function exists but has no script file yet."""
    pass

class HostSettingsNotFoundError(NotFoundError):
    """The host settings document has not been written yet."""
    pass

class InvalidFunctionNameError(BaseAppException):
    """The function name cannot be used as a single directory segment."""
    pass

class InvalidContentError(BaseAppException):
    """A submitted document is not UTF-8 JSON of the expected shape."""
    pass

class ConfigParseError(BaseAppException):
    """A stored document is not a JSON object."""
    pass

class OperationNotImplementedError(BaseAppException):
    """The operation is declared but deliberately not implemented."""
    pass

class PathOutsideRootError(BaseAppException):
    """A path handed to the VFS resolver does not lie under the service root."""
    pass
