"""
Token classification.

A TypeRegistry is the ordered list of value classes consulted when a raw
token has to be turned into a value. Several recognizers overlap (`5` is
both an int and a float literal, `true` is also a valid identifier), so
the order is the whole ambiguity policy: the first class that accepts a
token wins.

Default precedence, most specific first:

    1. string   quote-delimited
    2. int      fits a signed 64-bit word
    3. bigint   any other integer literal
    4. float    decimal / exponent / inf / nan
    5. bool     exactly `true` or `false`
    6. var      identifier, catch-all

Ast values are never produced by classification.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple, Type

from ..errors import error_unrecognized_token
from ..types import ValueType
from .values import (
    Value,
    StringValue, IntValue, BigIntValue, FloatValue, BoolValue, VarValue, AstValue,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeRegistry:
    """An immutable, ordered sequence of value classes."""
    entries: Tuple[Type[Value], ...]

    def __post_init__(self):
        if not self.entries:
            raise ValueError("a type registry needs at least one value type")
        for entry in self.entries:
            if not (isinstance(entry, type) and issubclass(entry, Value)):
                raise ValueError(f"not a value type: {entry!r}")
            if entry is AstValue:
                raise ValueError("ast values cannot be classified from tokens")
        tags = [entry.value_type for entry in self.entries]
        if len(set(tags)) != len(tags):
            raise ValueError(f"duplicate value types in registry: {tags}")

    def __iter__(self) -> Iterator[Type[Value]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def value_types(self) -> Tuple[ValueType, ...]:
        """Tags in precedence order."""
        return tuple(entry.value_type for entry in self.entries)


DEFAULT_REGISTRY = TypeRegistry((
    StringValue,
    IntValue,
    BigIntValue,
    FloatValue,
    BoolValue,
    VarValue,
))


class Classifier:
    """Turns raw tokens into values using a TypeRegistry."""

    def __init__(self, registry: TypeRegistry = DEFAULT_REGISTRY):
        self.registry = registry

    def classify(self, token: str) -> Value:
        """
        Return the value for a token, built by the first accepting type.

        Raises ClassificationError if no type accepts the token. May raise
        ConstructionError if a type accepts the token but fails to build it.
        """
        for entry in self.registry:
            if entry.recognizes(token):
                logger.debug("classified %r as %s", token, entry.value_type)
                return entry.from_token(token)
        logger.debug("no value type accepts %r", token)
        raise error_unrecognized_token(token)

    def classify_all(self, tokens: Iterable[str]) -> List[Value]:
        """Classify tokens in order; the first failure propagates."""
        return [self.classify(token) for token in tokens]

    def recognizers_for(self, token: str) -> List[ValueType]:
        """Every type that accepts the token, in precedence order."""
        return [entry.value_type for entry in self.registry if entry.recognizes(token)]


_default_classifier = Classifier()


def get_classifier() -> Classifier:
    """Get the shared classifier over the default registry."""
    return _default_classifier


def classify(token: str) -> Value:
    """Classify a token with the default registry."""
    return _default_classifier.classify(token)
