"""Domain-specific errors for cecbus."""


class CecError(Exception):
    """Base error for cecbus."""


class ConfigLoadError(CecError):
    """Raised when reading a configuration file fails."""


class ConfigValidationError(CecError):
    """Raised when a configuration file does not conform to schema or semantics."""


class InvalidAddressError(CecError, ValueError):
    """Raised when a logical address falls outside 0-15."""


class UnknownNameError(CecError, ValueError):
    """Raised when a name cannot be looked up at all (e.g. empty input)."""


class MalformedKeySpecError(CecError):
    """Raised when a key given as code, hex string or name cannot be resolved."""


class ConnectionStateError(CecError):
    """Raised when an operation is not valid in the connection's current state."""


class OpenFailedError(CecError):
    """Raised when opening a connection to the bus adapter fails."""


class DriverError(CecError):
    """Base driver error."""


class DriverInitError(DriverError):
    """Raised when the driver session cannot be initialised."""


class AdapterNotFoundError(DriverError):
    """Raised when no adapter matches the requested name."""


class DriverCommandError(DriverError):
    """Raised when an outbound press, release or query fails."""
