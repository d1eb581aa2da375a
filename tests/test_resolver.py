"""
Tests for variable resolution and the environment.
"""

import pytest

from lambdalang import (
    Environment, resolve, classify,
    ResolutionError, UnresolvedVariableError, InvalidResolutionTargetError,
    leaf, node,
)
from lambdalang.runtime import (
    Scope, int_val, float_val, var_val, string_val, bool_val, wrap_subtree,
)


@pytest.fixture
def env():
    e = Environment()
    e.bind("x", int_val(5))
    e.define_operator("+", "add")
    return e


class TestResolve:
    """Test the three resolution outcomes."""

    def test_bound_variable(self, env):
        """A bound name resolves to its current value."""
        assert resolve(var_val("x"), env) == int_val(5)

    def test_operator_returns_reference(self, env):
        """A name bound only as an operator resolves to itself."""
        ref = var_val("+")
        assert resolve(ref, env) is ref

    def test_undefined(self, env):
        """Unbound names raise UnresolvedVariableError."""
        with pytest.raises(UnresolvedVariableError) as exc_info:
            resolve(var_val("y"), env)
        assert exc_info.value.code == "E701"
        assert "undefined variable: y" in str(exc_info.value)

    def test_variable_beats_operator(self, env):
        """A name bound in both namespaces resolves to the variable."""
        env.bind("+", int_val(1))
        assert resolve(var_val("+"), env) == int_val(1)

    def test_classified_token(self, env):
        """Tokens classified as var resolve like constructed references."""
        assert resolve(classify("x"), env) == int_val(5)

    def test_sees_current_binding(self, env):
        """Rebinding is observed by later resolutions."""
        env.rebind("x", float_val(2.5))
        assert resolve(var_val("x"), env) == float_val(2.5)


class TestInvalidTargets:
    """Test resolving things that are not variable references."""

    @pytest.mark.parametrize("value", [
        int_val(1),
        string_val("x"),
        bool_val(True),
        wrap_subtree(node(leaf("f"), leaf("x"))),
    ])
    def test_non_var_values(self, env, value):
        """Only var values can be resolved."""
        with pytest.raises(InvalidResolutionTargetError) as exc_info:
            resolve(value, env)
        assert exc_info.value.code == "E702"

    def test_non_values(self, env):
        """Arbitrary objects are rejected the same way."""
        with pytest.raises(InvalidResolutionTargetError):
            resolve(None, env)

    def test_common_base(self, env):
        """Both failure kinds share the ResolutionError category."""
        with pytest.raises(ResolutionError):
            resolve(var_val("missing"), env)
        with pytest.raises(ResolutionError):
            resolve(int_val(1), env)


class TestEnvironment:
    """Test scoping in the reference environment."""

    def test_inner_scope_shadows(self, env):
        """Inner bindings hide outer ones until the scope closes."""
        with env.new_scope("let"):
            env.bind("x", int_val(6))
            assert resolve(var_val("x"), env) == int_val(6)
            assert resolve(var_val("+"), env) == var_val("+")
        assert resolve(var_val("x"), env) == int_val(5)

    def test_rebind_updates_defining_scope(self, env):
        """rebind writes to the scope where the name lives."""
        with env.new_scope():
            assert env.rebind("x", int_val(7)) is True
            assert env.rebind("nope", int_val(7)) is False
        assert env.lookup_variable("x") == int_val(7)

    def test_membership(self, env):
        """Namespaces are queried independently."""
        assert env.has_variable("x")
        assert not env.has_operator("x")
        assert env.has_operator("+")
        assert not env.has_variable("+")

    def test_resolver_does_not_mutate(self, env):
        """Resolution leaves both namespaces untouched."""
        before = (dict(env.current_scope.variables), dict(env.current_scope.operators))
        resolve(var_val("x"), env)
        resolve(var_val("+"), env)
        with pytest.raises(UnresolvedVariableError):
            resolve(var_val("z"), env)
        assert (env.current_scope.variables, env.current_scope.operators) == before

    def test_duck_typed_environment(self):
        """Any object with the two lookups can be used."""

        class Tables:
            def lookup_variable(self, name):
                return {"a": int_val(1)}.get(name)

            def lookup_operator(self, name):
                return {"*": object()}.get(name)

        assert resolve(var_val("a"), Tables()) == int_val(1)
        assert resolve(var_val("*"), Tables()) == var_val("*")

    def test_scope_chain(self):
        """Scope lookups walk parent links."""
        outer = Scope(name="outer")
        outer.variables["a"] = int_val(1)
        outer.operators["-"] = True
        inner = Scope(parent=outer, name="inner")
        assert inner.get_variable("a") == int_val(1)
        assert inner.get_operator("-") is True
        assert inner.get_variable("b") is None
