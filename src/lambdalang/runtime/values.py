"""
Runtime values for the lambdalang interpreter.

Each semantic type has its own immutable value class. A value class knows
how to recognize a raw token that belongs to it, how to build itself from
such a token, how to render itself, and how to convert an instance into
another value type along the conversion lattice (see ``lambdalang.types``).

Values are frozen; conversions always produce new instances.
"""

import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Tuple

from ..ast import AstNode, format_node
from ..errors import (
    error_construction_failed,
    error_conversion_overflow,
    error_no_common_type,
    error_no_conversion,
)
from ..types import (
    ValueType,
    STRING, INT, BIGINT, FLOAT, VAR, BOOL, AST,
    can_convert, common_type, fits_int64,
)


# =============================================================================
# Literal Grammars
# =============================================================================

# Integer literals: decimal, 0x hex, 0b binary, 0o octal and legacy 0-prefixed
# octal, with single underscores allowed between digits.
_INT_RE = re.compile(r"""
    (?P<sign>[+-])?
    (?:
        0[xX](?P<hex>_?[0-9a-fA-F]+(?:_[0-9a-fA-F]+)*)
      | 0[bB](?P<bin>_?[01]+(?:_[01]+)*)
      | 0[oO](?P<oct>_?[0-7]+(?:_[0-7]+)*)
      | 0(?P<legacy>_?[0-7]+(?:_[0-7]+)*)
      | (?P<dec>[1-9][0-9]*(?:_[0-9]+)*|0)
    )
""", re.VERBOSE)

_INT_BASES = (("hex", 16), ("bin", 2), ("oct", 8), ("legacy", 8), ("dec", 10))

# Decimal floats, with single underscores allowed between digits.
_DIGITS = r"[0-9]+(?:_[0-9]+)*"
_DECIMAL_FLOAT_RE = re.compile(
    rf"[+-]?(?:{_DIGITS}\.?(?:{_DIGITS})?|\.{_DIGITS})(?:[eE][+-]?{_DIGITS})?"
)
_HEX_FLOAT_RE = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)

_IDENTIFIER_RE = re.compile(r"[A-Za-z][A-Za-z0-9]*")

_QUOTES = ("'", '"')


def parse_integer(token: str) -> Optional[int]:
    """
    Parse an integer literal with an optional radix prefix.

    Returns None if the token is not an integer literal. No magnitude
    bound is applied.
    """
    m = _INT_RE.fullmatch(token)
    if m is None:
        return None
    for group, base in _INT_BASES:
        digits = m.group(group)
        if digits is not None:
            n = int(digits.replace("_", ""), base)
            return -n if m.group("sign") == "-" else n
    return None


def parse_float(token: str) -> Optional[float]:
    """
    Parse a double-precision literal.

    Accepts decimal and exponent forms, hex floats with a binary exponent,
    and inf/infinity/nan spellings. Finite literals that overflow the
    double range are rejected.
    """
    if _SPECIAL_FLOAT_RE.fullmatch(token):
        return float(token)
    if _DECIMAL_FLOAT_RE.fullmatch(token):
        x = float(token.replace("_", ""))
        return None if math.isinf(x) else x
    if _HEX_FLOAT_RE.fullmatch(token):
        try:
            return float.fromhex(token)
        except OverflowError:
            return None
    return None


# =============================================================================
# Value Base Class
# =============================================================================

@dataclass(frozen=True)
class Value(ABC):
    """
    Base class for all runtime values.

    Subclasses set `value_type` and implement the token protocol
    (`recognizes` / `from_token`) and `render`. Conversions are routed
    through `to`, which consults the conversion lattice before asking the
    subclass to build the converted value.
    """
    value_type: ClassVar[ValueType]

    @classmethod
    @abstractmethod
    def recognizes(cls, token: str) -> bool:
        """Check whether a raw token denotes a value of this type."""
        pass

    @classmethod
    @abstractmethod
    def from_token(cls, token: str) -> "Value":
        """Build a value from a token accepted by `recognizes`."""
        pass

    @abstractmethod
    def render(self) -> str:
        """Canonical textual form."""
        pass

    def to(self, target: ValueType) -> "Value":
        """
        Convert this value to the target type.

        Raises ConversionError if there is no conversion edge, or if a
        conditional edge refuses this particular value.
        """
        if target == self.value_type:
            return self
        if not can_convert(self.value_type, target):
            raise error_no_conversion(self.value_type.value, target.value)
        return self._convert(target)

    def _convert(self, target: ValueType) -> "Value":
        # Only reached for lattice edges; subclasses with edges override.
        raise error_no_conversion(self.value_type.value, target.value)

    @property
    def payload(self) -> Any:
        """The raw Python data carried by this value."""
        return getattr(self, "value")

    def __str__(self) -> str:
        return self.render()


# =============================================================================
# Literal Variants
# =============================================================================

@dataclass(frozen=True)
class StringValue(Value):
    """A quoted literal. `text` excludes the delimiting quotes."""
    value_type: ClassVar[ValueType] = STRING

    text: str
    quote: str = field(default='"', compare=False)

    @classmethod
    def recognizes(cls, token: str) -> bool:
        # Interior quotes are not validated: 'it''s' is a single string.
        if len(token) < 2:
            return False
        first, last = token[0], token[-1]
        return first in _QUOTES and first == last

    @classmethod
    def from_token(cls, token: str) -> "StringValue":
        if not cls.recognizes(token):
            raise error_construction_failed(STRING.value, token, "not a quoted literal")
        return cls(token[1:-1], quote=token[0])

    @property
    def payload(self) -> str:
        return self.text

    def render(self) -> str:
        return f"{self.quote}{self.text}{self.quote}"


@dataclass(frozen=True)
class IntValue(Value):
    """An integer that fits a signed 64-bit word."""
    value_type: ClassVar[ValueType] = INT

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise error_construction_failed(INT.value, repr(self.value), "not an integer")
        if not fits_int64(self.value):
            raise error_construction_failed(INT.value, str(self.value),
                                            "out of signed 64-bit range")

    @classmethod
    def recognizes(cls, token: str) -> bool:
        n = parse_integer(token)
        return n is not None and fits_int64(n)

    @classmethod
    def from_token(cls, token: str) -> "IntValue":
        n = parse_integer(token)
        if n is None:
            raise error_construction_failed(INT.value, token, "not an integer literal")
        return cls(n)

    def _convert(self, target: ValueType) -> Value:
        if target == BIGINT:
            return BigIntValue(self.value)
        if target == FLOAT:
            return FloatValue(float(self.value))
        return super()._convert(target)

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BigIntValue(Value):
    """An arbitrary-precision integer."""
    value_type: ClassVar[ValueType] = BIGINT

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise error_construction_failed(BIGINT.value, repr(self.value), "not an integer")

    @classmethod
    def recognizes(cls, token: str) -> bool:
        return parse_integer(token) is not None

    @classmethod
    def from_token(cls, token: str) -> "BigIntValue":
        n = parse_integer(token)
        if n is None:
            raise error_construction_failed(BIGINT.value, token, "not an integer literal")
        return cls(n)

    def _convert(self, target: ValueType) -> Value:
        if target == INT:
            # Narrow to 64 bits (two's complement wrap) and check that
            # nothing was lost.
            narrowed = ((self.value + (1 << 63)) % (1 << 64)) - (1 << 63)
            if narrowed != self.value:
                raise error_conversion_overflow(BIGINT.value, INT.value, self.render())
            return IntValue(narrowed)
        return super()._convert(target)

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class FloatValue(Value):
    """A double-precision floating point number."""
    value_type: ClassVar[ValueType] = FLOAT

    value: float

    @classmethod
    def recognizes(cls, token: str) -> bool:
        return parse_float(token) is not None

    @classmethod
    def from_token(cls, token: str) -> "FloatValue":
        x = parse_float(token)
        if x is None:
            raise error_construction_failed(FLOAT.value, token, "not a float literal")
        return cls(x)

    def render(self) -> str:
        # repr keeps the decimal point (2.0, not 2) so the text reads back
        # as a float.
        return repr(float(self.value))


@dataclass(frozen=True)
class BoolValue(Value):
    """The keywords `true` and `false`."""
    value_type: ClassVar[ValueType] = BOOL

    value: bool

    @classmethod
    def recognizes(cls, token: str) -> bool:
        return token in ("true", "false")

    @classmethod
    def from_token(cls, token: str) -> "BoolValue":
        if not cls.recognizes(token):
            raise error_construction_failed(BOOL.value, token, "expected true or false")
        return cls(token == "true")

    def render(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class VarValue(Value):
    """An unresolved identifier; resolve it against an environment."""
    value_type: ClassVar[ValueType] = VAR

    name: str

    @classmethod
    def recognizes(cls, token: str) -> bool:
        return _IDENTIFIER_RE.fullmatch(token) is not None

    @classmethod
    def from_token(cls, token: str) -> "VarValue":
        if not cls.recognizes(token):
            raise error_construction_failed(VAR.value, token, "not an identifier")
        return cls(token)

    @property
    def payload(self) -> str:
        return self.name

    def render(self) -> str:
        return self.name


# =============================================================================
# Unevaluated Subtrees
# =============================================================================

@dataclass(frozen=True)
class AstValue(Value):
    """
    An unevaluated expression captured as a value.

    Holds a reference to a parse-tree node owned by the caller, and the
    node's children after the head (the operator position). There is no
    token syntax for this type; build it with `wrap_subtree`.
    """
    value_type: ClassVar[ValueType] = AST

    parent: AstNode
    arguments: Tuple[AstNode, ...] = field(default=(), compare=False)

    @classmethod
    def recognizes(cls, token: str) -> bool:
        return False

    @classmethod
    def from_token(cls, token: str) -> "AstValue":
        raise error_construction_failed(AST.value, token, "ast values have no token form")

    @property
    def payload(self) -> AstNode:
        return self.parent

    def render(self) -> str:
        return format_node(self.parent)


def wrap_subtree(parent: AstNode) -> AstValue:
    """Capture a node and its argument subtrees (all children but the head)."""
    return AstValue(parent, tuple(parent.children[1:]))


# =============================================================================
# Convenience Constructors
# =============================================================================

def string_val(s: str, quote: str = '"') -> StringValue:
    """Create a string value."""
    return StringValue(str(s), quote=quote)


def int_val(n: int) -> IntValue:
    """Create a 64-bit integer value."""
    return IntValue(int(n))


def bigint_val(n: int) -> BigIntValue:
    """Create an arbitrary-precision integer value."""
    return BigIntValue(int(n))


def integer_val(n: int) -> Value:
    """Create an int value if n fits 64 bits, otherwise a bigint."""
    return IntValue(n) if fits_int64(n) else BigIntValue(n)


def float_val(x: float) -> FloatValue:
    """Create a float value."""
    return FloatValue(float(x))


def bool_val(b: bool) -> BoolValue:
    """Create a boolean value."""
    return BoolValue(bool(b))


def var_val(name: str) -> VarValue:
    """Create a variable reference."""
    return VarValue(name)


# =============================================================================
# Numeric Promotion
# =============================================================================

def promote(left: Value, right: Value) -> Tuple[Value, Value]:
    """
    Widen two operands to their common type.

    Values already sharing a type are returned unchanged. Otherwise the
    narrower operand is converted with `to`. Raises ConversionError if
    the types have no common type (e.g. bigint and float).
    """
    target = common_type(left.value_type, right.value_type)
    if target is None:
        raise error_no_common_type(left.value_type.value, right.value_type.value)
    return left.to(target), right.to(target)
