class OracleError(Exception):
    """Raised when an oracle call cannot produce a usable answer."""


class OracleValidationError(OracleError):
    """Raised when the oracle response does not match the expected shape."""


class OracleNetworkError(OracleError):
    """Raised when the AI provider call fails due to network/credential issues."""
