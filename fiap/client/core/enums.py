"""Core enumerations for the FIAP query protocol.

Architecture:
    String enums mirror the literal attribute values defined by the
    IEEE1888 schema so they serialize without any mapping table.

Key Types:
    - SelectType: min/max selection modifier on a key
    - QueryType: storage (FETCH) vs stream (TRAP) queries
    - AttrName: attribute a key filters on
    - ZeroTimePolicy: how a zero-value timestamp on a key is serialized
"""

from enum import Enum


class SelectType(str, Enum):
    """Selection modifier of a ``key`` element.

    ``NONE`` requests every value in range; it is never written to the wire.
    """

    NONE = ""
    MINIMUM = "minimum"
    MAXIMUM = "maximum"

    @classmethod
    def from_flag(cls, flag: str) -> "SelectType":
        """Map the command-line spelling (max/min/none) to a SelectType."""
        normalized = flag.lower()
        if normalized == "max":
            return cls.MAXIMUM
        if normalized == "min":
            return cls.MINIMUM
        if normalized == "none":
            return cls.NONE
        raise ValueError("select type allows only max, min, or none")


class QueryType(str, Enum):
    """Type attribute of a ``query`` element."""

    STORAGE = "storage"
    STREAM = "stream"


class AttrName(str, Enum):
    """Attribute a key filters on."""

    TIME = "time"
    VALUE = "value"


class ZeroTimePolicy(str, Enum):
    """How a zero-value timestamp (year 1) on a filter key is serialized.

    OMIT (the default) drops the attribute as if the filter were unset.
    EXPLICIT sends it as an ordinary filter value.
    """

    EXPLICIT = "explicit"
    OMIT = "omit"
