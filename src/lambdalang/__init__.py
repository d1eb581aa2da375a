"""
lambdalang - literal classification and value coercion for a small
expression language.

Usage:
    from lambdalang import classify, resolve, Environment, INT, BIGINT

    v = classify("0x1F")            # IntValue(31)
    big = v.to(BIGINT)              # BigIntValue(31)
    back = big.to(INT)              # IntValue(31)

    env = Environment()
    env.bind("x", classify("5"))
    env.define_operator("+")
    resolve(classify("x"), env)     # IntValue(5)
"""

__version__ = "0.3.0"

from .types import (
    ValueType,
    STRING, INT, BIGINT, FLOAT, VAR, BOOL, AST,
    INT64_MIN, INT64_MAX,
    can_convert,
    common_type,
    value_type_of,
)

from .errors import (
    LangError,
    ClassificationError,
    ConstructionError,
    ConversionError,
    ResolutionError,
    UnresolvedVariableError,
    InvalidResolutionTargetError,
    ConfigError,
    Diagnostic,
    DiagnosticCollector,
    ErrorSeverity,
)

from .ast import (
    AstNode,
    leaf,
    node,
    format_node,
)

from .runtime import (
    Value,
    StringValue,
    IntValue,
    BigIntValue,
    FloatValue,
    BoolValue,
    VarValue,
    AstValue,
    wrap_subtree,
    promote,
    TypeRegistry,
    Classifier,
    DEFAULT_REGISTRY,
    classify,
    Environment,
    Scope,
    resolve,
)

__all__ = [
    '__version__',

    # Type tags
    'ValueType',
    'STRING', 'INT', 'BIGINT', 'FLOAT', 'VAR', 'BOOL', 'AST',
    'INT64_MIN', 'INT64_MAX',
    'can_convert',
    'common_type',
    'value_type_of',

    # Errors
    'LangError',
    'ClassificationError',
    'ConstructionError',
    'ConversionError',
    'ResolutionError',
    'UnresolvedVariableError',
    'InvalidResolutionTargetError',
    'ConfigError',
    'Diagnostic',
    'DiagnosticCollector',
    'ErrorSeverity',

    # Parse tree
    'AstNode',
    'leaf',
    'node',
    'format_node',

    # Runtime
    'Value',
    'StringValue',
    'IntValue',
    'BigIntValue',
    'FloatValue',
    'BoolValue',
    'VarValue',
    'AstValue',
    'wrap_subtree',
    'promote',
    'TypeRegistry',
    'Classifier',
    'DEFAULT_REGISTRY',
    'classify',
    'Environment',
    'Scope',
    'resolve',
]
