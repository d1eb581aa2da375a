"""
Value type tags for the lambdalang runtime.

Every runtime value carries exactly one of these tags. The conversion
lattice between tags is also defined here so that it can be queried
without constructing values:

    int -> bigint     (widening, always succeeds)
    int -> float      (widening, may lose precision for huge magnitudes)
    bigint -> int     (narrowing, only when the value fits 64 bits)

Every tag also converts to itself. All other pairs are undefined.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple


class ValueType(Enum):
    """The closed set of semantic value types."""
    STRING = "string"
    INT = "int"
    BIGINT = "bigint"
    FLOAT = "float"
    VAR = "var"
    BOOL = "bool"
    AST = "ast"

    def __str__(self) -> str:
        return self.value


# Shorthand aliases, mirroring the names used throughout the runtime
STRING = ValueType.STRING
INT = ValueType.INT
BIGINT = ValueType.BIGINT
FLOAT = ValueType.FLOAT
VAR = ValueType.VAR
BOOL = ValueType.BOOL
AST = ValueType.AST

# Signed 64-bit bounds for the native integer variant
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


# =============================================================================
# Conversion Lattice
# =============================================================================

# Edges other than identity. Conditional edges are checked by the
# converting value itself.
CONVERSIONS: FrozenSet[Tuple[ValueType, ValueType]] = frozenset({
    (INT, BIGINT),
    (INT, FLOAT),
    (BIGINT, INT),
})

# Widening order used for operand promotion: the key widens to each value.
WIDENS_TO: Dict[ValueType, FrozenSet[ValueType]] = {
    INT: frozenset({BIGINT, FLOAT}),
}


def can_convert(source: ValueType, target: ValueType) -> bool:
    """Check whether a conversion edge exists from source to target."""
    return source == target or (source, target) in CONVERSIONS


def fits_int64(n: int) -> bool:
    """Check whether an integer is representable as a signed 64-bit word."""
    return INT64_MIN <= n <= INT64_MAX


def common_type(t1: ValueType, t2: ValueType) -> Optional[ValueType]:
    """
    Find the tag both t1 and t2 widen to.

    Returns None if no common type exists (e.g. bigint and float).
    """
    if t1 == t2:
        return t1
    if t2 in WIDENS_TO.get(t1, ()):
        return t2
    if t1 in WIDENS_TO.get(t2, ()):
        return t1
    return None


def value_type_of(name: str) -> Optional[ValueType]:
    """Look up a tag by its name ("int", "bigint", ...)."""
    try:
        return ValueType(name.strip().lower())
    except ValueError:
        return None
