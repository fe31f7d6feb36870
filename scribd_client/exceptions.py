"""
Custom exceptions for the Scribd client library.
"""


class ScribdError(Exception):
    """Base exception for Scribd client errors."""
    pass


class NotReadyError(ScribdError):
    """Raised when the API key/secret are missing or a resource isn't created yet."""
    pass


class ArgumentError(ScribdError, ValueError):
    """Raised when a call is malformed (bad method name, options or parameters)."""
    pass


class ConfigurationError(ScribdError):
    """Raised when transport configuration is invalid."""
    pass


class MalformedResponseError(ScribdError):
    """Raised when the response has no recognizable envelope."""
    pass


class PrivilegeError(ScribdError):
    """Raised when the current actor may not modify a resource."""
    pass


class ResponseError(ScribdError):
    """
    Raised when the remote host answers with stat="fail".

    The remote error code is kept as received (usually a numeric string)
    in ``code``; ``int_code`` gives it as an integer for comparisons.
    """

    def __init__(self, code, message: str = "error"):
        super().__init__(message)
        self.code = code
        self.message = message

    @property
    def int_code(self) -> int:
        try:
            return int(self.code)
        except (TypeError, ValueError):
            return -1
