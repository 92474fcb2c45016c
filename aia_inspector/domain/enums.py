"""Domain enums for the project inspector."""
from enum import Enum


class Origin(Enum):
    """Where a component type comes from."""
    BUILT_IN = "BUILT_IN"
    EXTENSION = "EXTENSION"


class ResolutionStatus(Enum):
    """Outcome of matching one raw property against a descriptor."""
    RESOLVED = "RESOLVED"
    UNRESOLVED = "UNRESOLVED"


class AccessMode(Enum):
    """Block property access (the descriptor's ``rw`` field)."""
    READ_WRITE = "read-write"
    READ_ONLY = "read-only"
    WRITE_ONLY = "write-only"
    INVISIBLE = "invisible"
    UNKNOWN = "unknown"

    @classmethod
    def from_raw(cls, value) -> 'AccessMode':
        for mode in cls:
            if mode.value == value:
                return mode
        return cls.UNKNOWN


class HelperKind(Enum):
    """Kind of helper metadata attached to a property or parameter."""
    OPTION_LIST = "OPTION_LIST"
    ASSET = "ASSET"
    SCREEN = "SCREEN"
    PROVIDER = "PROVIDER"
    PROVIDER_MODEL = "PROVIDER_MODEL"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_raw(cls, value) -> 'HelperKind':
        for kind in cls:
            if kind.value == value:
                return kind
        return cls.UNKNOWN
