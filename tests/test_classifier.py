"""
Tests for token classification and the type registry.
"""

import pytest

from lambdalang import (
    STRING, INT, BIGINT, FLOAT, VAR, BOOL,
    ClassificationError, ConstructionError,
    classify, Classifier, TypeRegistry, DEFAULT_REGISTRY,
)
from lambdalang.runtime import (
    StringValue, IntValue, BigIntValue, FloatValue, BoolValue, VarValue, AstValue,
    int_val, bigint_val, float_val, bool_val, var_val, string_val,
)


class TestRegistry:
    """Test registry construction and default order."""

    def test_default_precedence(self):
        """The default order is string, int, bigint, float, bool, var."""
        assert DEFAULT_REGISTRY.value_types == (STRING, INT, BIGINT, FLOAT, BOOL, VAR)

    def test_ast_excluded(self):
        """Ast values cannot be registered for classification."""
        with pytest.raises(ValueError):
            TypeRegistry((IntValue, AstValue))

    def test_rejects_empty_and_duplicates(self):
        """A registry must be non-empty and list each type once."""
        with pytest.raises(ValueError):
            TypeRegistry(())
        with pytest.raises(ValueError):
            TypeRegistry((IntValue, IntValue))
        with pytest.raises(ValueError):
            TypeRegistry((IntValue, str))

    def test_registry_is_immutable(self):
        """The registry cannot be modified after construction."""
        with pytest.raises(AttributeError):
            DEFAULT_REGISTRY.entries = ()


class TestClassify:
    """Test classification of unambiguous tokens."""

    @pytest.mark.parametrize("token,expected", [
        ('"hello"', string_val("hello")),
        ("42", int_val(42)),
        ("-17", int_val(-17)),
        ("0x1F", int_val(31)),
        ("true", bool_val(True)),
        ("false", bool_val(False)),
        ("abc123", var_val("abc123")),
        ("3.14", float_val(3.14)),
    ])
    def test_scenarios(self, token, expected):
        """Tokens classify to the expected value."""
        v = classify(token)
        assert type(v) is type(expected)
        assert v == expected

    def test_string_with_interior_quotes(self):
        """Interior quotes are not validated."""
        v = classify("'it''s'")
        assert isinstance(v, StringValue)
        assert v.text == "it''s"

    def test_empty_string_literal(self):
        """Two quotes are the shortest string."""
        for token in ["''", '""']:
            v = classify(token)
            assert v == string_val("")
            assert v.render() == token

    def test_float_with_separators(self):
        """Digit separators are allowed in decimal floats."""
        assert classify("1_000.5") == float_val(1000.5)

    def test_unrecognized(self):
        """Tokens accepted by no type raise ClassificationError verbatim."""
        for token in ["", "+", "1abc", "a_b", "'", "1e400", "x y"]:
            with pytest.raises(ClassificationError) as exc_info:
                classify(token)
            assert exc_info.value.code == "E501"
            assert exc_info.value.diagnostic.subject == token

    def test_deterministic(self):
        """The same token always gives the same value."""
        assert classify("5") == classify("5")
        assert type(classify("5")) is type(classify("5"))


class TestPrecedence:
    """Test that registry order resolves overlapping recognizers."""

    def test_small_integer_is_int(self):
        """5 is an int, not a float or bigint."""
        assert isinstance(classify("5"), IntValue)

    def test_huge_integer_is_bigint(self):
        """Integers beyond 64 bits become bigints."""
        v = classify("99999999999999999999")
        assert isinstance(v, BigIntValue)
        assert v.value == 99999999999999999999

    def test_int64_boundaries(self):
        """The int/bigint split sits exactly at the 64-bit bounds."""
        assert isinstance(classify("9223372036854775807"), IntValue)
        assert isinstance(classify("9223372036854775808"), BigIntValue)
        assert isinstance(classify("-9223372036854775808"), IntValue)
        assert isinstance(classify("-9223372036854775809"), BigIntValue)

    def test_decimal_is_float(self):
        """3.14 is a float."""
        assert isinstance(classify("3.14"), FloatValue)

    def test_keyword_is_bool(self):
        """true is a bool, not a variable; True is a variable."""
        assert isinstance(classify("true"), BoolValue)
        assert isinstance(classify("True"), VarValue)

    def test_quoted_number_is_string(self):
        """Quotes win over numeric recognizers."""
        assert classify("'42'") == string_val("42")

    def test_special_float_spellings_beat_identifiers(self):
        """inf and nan are float literals, not variable names."""
        assert isinstance(classify("inf"), FloatValue)
        assert isinstance(classify("nan"), FloatValue)
        assert isinstance(classify("info"), VarValue)

    def test_recognizers_for(self):
        """All accepting types are listed in precedence order."""
        assert classify_recognizers("5") == [INT, BIGINT, FLOAT]
        assert classify_recognizers("true") == [BOOL, VAR]
        assert classify_recognizers("'x'") == [STRING]
        assert classify_recognizers("+") == []

    def test_custom_registry_changes_policy(self):
        """A registry without int sends small integers to bigint."""
        classifier = Classifier(TypeRegistry((BigIntValue, FloatValue, VarValue)))
        assert isinstance(classifier.classify("5"), BigIntValue)
        with pytest.raises(ClassificationError):
            classifier.classify("'quoted'")

    def test_order_is_the_policy(self):
        """Putting float before int classifies 5 as a float."""
        classifier = Classifier(TypeRegistry((FloatValue, IntValue)))
        assert classifier.classify("5") == float_val(5.0)


def classify_recognizers(token):
    return Classifier().recognizers_for(token)


class TestClassifyAll:
    """Test sequence classification."""

    def test_in_order(self):
        """Values come back in token order."""
        values = Classifier().classify_all(["1", "x", "'s'"])
        assert values == [int_val(1), var_val("x"), string_val("s")]

    def test_first_failure_propagates(self):
        """An unrecognized token aborts the sequence."""
        with pytest.raises(ClassificationError):
            Classifier().classify_all(["1", "+", "2"])


class TestIdempotence:
    """Reclassifying a rendered literal gives back the same value."""

    @pytest.mark.parametrize("value", [
        string_val("hello"),
        string_val("it''s", quote="'"),
        int_val(0),
        int_val(-17),
        int_val(9223372036854775807),
        bigint_val(10 ** 25),
        bigint_val(-(10 ** 25)),
        float_val(3.14),
        float_val(2.0),
        float_val(-0.5),
        float_val(1e300),
        float_val(float("inf")),
        bool_val(True),
        bool_val(False),
        var_val("abc123"),
    ])
    def test_render_round_trip(self, value):
        """classify(v.render()) has v's type and payload."""
        again = classify(value.render())
        assert again.value_type == value.value_type
        assert again == value


class TestConstructionMismatch:
    """A recognizer that accepts more than its constructor can build."""

    def test_construction_error_surfaces(self):
        """Construction failures propagate from classify."""

        class LooseInt(IntValue):
            @classmethod
            def recognizes(cls, token):
                return token.isdigit()

        classifier = Classifier(TypeRegistry((LooseInt,)))
        with pytest.raises(ConstructionError):
            classifier.classify("99999999999999999999")


class TestIdempotenceLimits:
    """Rendered values that do not reclassify to the same value."""

    def test_small_bigint_reclassifies_as_int(self):
        """A bigint within 64-bit range renders as an int literal."""
        v = int_val(5).to(BIGINT)
        again = classify(v.render())
        assert isinstance(again, IntValue)
        assert again == int_val(5)
        assert again.to(BIGINT) == v

    def test_nan_reclassifies_as_float_but_not_equal(self):
        """nan keeps its type but never compares equal."""
        v = float_val(float("nan"))
        again = classify(v.render())
        assert isinstance(again, FloatValue)
        assert again != v
