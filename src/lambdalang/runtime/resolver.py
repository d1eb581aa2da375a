"""
Variable resolution against an environment.

A VarValue resolves to the value currently bound to its name. Names bound
only as operators resolve to the VarValue itself, so the caller can treat
them as operator references rather than data.
"""

import logging

from ..errors import error_not_a_reference, error_undefined_variable
from .context import EnvironmentLike
from .values import Value, VarValue

logger = logging.getLogger(__name__)


def resolve(value: Value, env: EnvironmentLike) -> Value:
    """
    Resolve a variable reference.

    Returns the bound value, or `value` unchanged when the name denotes an
    operator. Raises UnresolvedVariableError if the name is bound in
    neither namespace, and InvalidResolutionTargetError if `value` is not
    a VarValue.
    """
    if not isinstance(value, VarValue):
        if isinstance(value, Value):
            raise error_not_a_reference(value.value_type.value, value.render())
        raise error_not_a_reference(type(value).__name__, repr(value))

    bound = env.lookup_variable(value.name)
    if bound is not None:
        logger.debug("resolved %s to %s %s", value.name, bound.value_type, bound.render())
        return bound
    if env.lookup_operator(value.name) is not None:
        logger.debug("%s names an operator", value.name)
        return value
    raise error_undefined_variable(value.name)
