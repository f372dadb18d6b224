"""Standard exception hierarchy for topomerge.

All topomerge exceptions inherit from TopomergeError, making it easy
to catch all library-specific errors.

Exception Hierarchy:
    TopomergeError (base)
    ├── ConfigurationError - Invalid configuration
    └── TopologyError - Base for topology errors
        ├── TopologyValidationError - Topology failed its consistency check
        ├── InvalidIDError - Malformed edge or node identifier
        └── SerializationError - Malformed to_dict/from_dict payload

Copy, merge and flatten never raise. Only validation, strict ID parsing,
deserialization and configuration loading do.
"""


class TopomergeError(Exception):
    """Base exception for all topomerge errors.

    Catch this to handle any library-specific exception:
        try:
            topology.validate()
        except TopomergeError as e:
            logger.error(f"Topology error: {e}")
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{super().__str__()} (caused by: {self.cause})"
        return super().__str__()


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(TopomergeError):
    """Invalid configuration.

    Raised when TopomergeConfig has empty or clashing delimiters, or a
    config file cannot be read or parsed.
    """

    pass


# =============================================================================
# Topology Errors
# =============================================================================


class TopologyError(TopomergeError):
    """Base exception for topology-related errors."""

    pass


class TopologyValidationError(TopologyError):
    """A topology failed its consistency check.

    Every violation found is collected rather than stopping at the first
    one; they are available as ``violations``.
    """

    def __init__(self, violations: list[str]):
        self.violations = list(violations)
        super().__init__(
            f"{len(self.violations)} error(s): {'; '.join(self.violations)}"
        )


class InvalidIDError(TopologyError):
    """An edge or node identifier could not be parsed."""

    def __init__(self, message: str, identifier: str):
        super().__init__(message)
        self.identifier = identifier


class SerializationError(TopologyError):
    """A serialized payload does not have the expected shape.

    Raised when:
    - A counter is negative or not an integer
    - A label key or value is not a string
    - A section has the wrong container type
    """

    pass
