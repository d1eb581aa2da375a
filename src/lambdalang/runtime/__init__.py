"""
lambdalang runtime - typed values, classification and resolution.

This module provides:
- Value classes: one immutable class per semantic type
- TypeRegistry / Classifier: ordered token classification
- Environment: variable and operator namespaces
- resolve: variable lookup against an environment
"""

from .values import (
    Value,
    StringValue,
    IntValue,
    BigIntValue,
    FloatValue,
    BoolValue,
    VarValue,
    AstValue,
    wrap_subtree,
    string_val,
    int_val,
    bigint_val,
    integer_val,
    float_val,
    bool_val,
    var_val,
    promote,
    parse_integer,
    parse_float,
)

from .registry import (
    TypeRegistry,
    Classifier,
    DEFAULT_REGISTRY,
    get_classifier,
    classify,
)

from .context import (
    EnvironmentLike,
    Scope,
    Environment,
)

from .resolver import (
    resolve,
)

__all__ = [
    # Values
    'Value',
    'StringValue',
    'IntValue',
    'BigIntValue',
    'FloatValue',
    'BoolValue',
    'VarValue',
    'AstValue',
    'wrap_subtree',
    'string_val',
    'int_val',
    'bigint_val',
    'integer_val',
    'float_val',
    'bool_val',
    'var_val',
    'promote',
    'parse_integer',
    'parse_float',

    # Classification
    'TypeRegistry',
    'Classifier',
    'DEFAULT_REGISTRY',
    'get_classifier',
    'classify',

    # Environment
    'EnvironmentLike',
    'Scope',
    'Environment',

    # Resolution
    'resolve',
]
