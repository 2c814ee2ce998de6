"""Error types raised while loading navigation configuration."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Category of a navigation validation failure."""

    CYCLE = "cycle"
    DUPLICATE_DOCUMENT = "duplicate_document"
    MALFORMED_NODE = "malformed_node"
    MALFORMED_CONFIG = "malformed_config"


class DocnavError(Exception):
    """Base class for docnav errors."""


class ValidationError(DocnavError):
    """Navigation configuration was rejected.

    Attributes:
        kind: Failure category
        message: Human-readable description
        location: Position of the offending entry (e.g., "sidebar[0].children[1]")
    """

    def __init__(self, kind: ErrorKind, message: str, location: str = "") -> None:
        self.kind = kind
        self.message = message
        self.location = location
        super().__init__(f"{location}: {message}" if location else message)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"kind": str(self.kind), "message": self.message, "location": self.location}


class InvariantViolation(DocnavError):
    """A validated tree broke an invariant the loader guarantees."""
