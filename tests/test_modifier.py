"""
Test suite for modifier composition.

Tests cover:
- Negation, including double negation
- Quantifiers over lists, tuples and strings
- Order sensitivity of mixed modifiers
- Non-sequence values under quantifiers
- Faults travelling through modifiers
"""

from __future__ import annotations

import asyncio

import pytest

from predychain import EVERY, NOT, SOME, Modifier, Outcome, ValidationException, chain
from predychain.modifier import (
    ComposedPredicate,
    ModifierNotSupportedError,
    NotQuantifiableError,
    compose,
    elements_of,
)
from predychain.modifier.modifier import FAILED, PASSED


class TestOutcome:
    """Test the tagged outcome used by every strategy."""

    def test_invert_flips_and_drops_fault(self):
        faulted = Outcome(passed=False, fault=TypeError("boom"))

        assert bool(faulted) is False
        assert ~faulted == PASSED
        assert (~faulted).fault is None
        assert ~PASSED == FAILED

    def test_invert_keeps_non_sequence_fault(self):
        refused = Outcome(passed=False, fault=NotQuantifiableError("some", 3))

        assert ~refused is refused
        assert not ~~refused

    def test_builtin_modifier_flags(self):
        for modifier in (NOT, SOME, EVERY):
            assert modifier.participates_in_simple_composition
            assert modifier.is_async_aware


class TestNegation:
    """Test the 'not' modifier."""

    def test_not_inverts_next_rule(self):
        validation = chain().number().not_.between(2, 8).not_.even()

        assert not validation.test(4)
        assert not validation.test(6)
        assert validation.test(11)

    def test_double_negation_is_identity(self):
        validation = chain().not_.not_.number().not_.not_.positive()

        assert validation.test(1)
        assert not validation.test("12")
        assert not validation.test(-1)
        assert validation.rule_ids() == ["not.not.number()", "not.not.positive()"]

    @pytest.mark.parametrize("value", [0, 1, -3, "x", None, [1]])
    def test_double_negation_matches_plain_rule(self, value):
        assert chain().not_.not_.even().test(value) == chain().even().test(value)

    def test_negated_fault_passes(self):
        # includes() raises on an int, which counts as "not satisfied".
        assert not chain().includes("2").test(2)
        assert chain().not_.includes("2").test(2)


class TestQuantifiers:
    """Test the 'some' and 'every' modifiers."""

    def test_some(self):
        validation = chain().some.positive()

        assert not validation.test([-1, -2, -3])
        assert validation.test([-1, -2, 1])
        assert validation.test((1, 2, 3))

    def test_every(self):
        validation = chain().every.positive()

        assert not validation.test([1, 2, 3, -1])
        assert validation.test([1, 2, 3])

    def test_empty_sequence(self):
        assert chain().every.even().test([])
        assert not chain().some.even().test([])

    def test_strings_are_quantified_per_character(self):
        assert chain().every.lowercase().test("abc")
        assert chain().not_.every.lowercase().test("aBc")
        assert chain().some.vowel().test("xyz a")

    @pytest.mark.parametrize("value", [10, None, {"a": 1}, 3.5])
    def test_quantifier_on_non_sequence_is_false(self, value):
        assert not chain().some.positive().test(value)
        assert not chain().every.positive().test(value)
        assert not chain().every.not_.positive().test(value)
        assert not chain().some.not_.positive().test(value)

    @pytest.mark.parametrize("value", [10, None, {"a": 1}])
    def test_negated_quantifier_on_non_sequence_is_false(self, value):
        assert not chain().not_.some.positive().test(value)
        assert not chain().not_.every.positive().test(value)
        assert not chain().not_.not_.every.positive().test(value)
        assert not chain().not_.every.not_.positive().test(value)

    def test_non_sequence_is_reported_as_cause(self):
        with pytest.raises(ValidationException) as exc_info:
            chain().not_.every.even().check(10)

        cause = exc_info.value.cause
        assert isinstance(cause, NotQuantifiableError)
        assert cause.modifier_name == "every"
        assert cause.value == 10
        assert isinstance(cause, TypeError)

    def test_nested_quantifier_only_fails_its_element(self):
        assert not chain().every.every.even().test([[2], 4])
        assert chain().not_.every.every.even().test([[2], 4])
        assert chain().some.every.even().test([4, [2, 6]])

    def test_element_fault_is_not_satisfied(self):
        assert chain().some.even().test(["a", 2])
        assert not chain().some.even().test(["a", "b"])
        assert not chain().every.even().test([2, "a"])


class TestModifierOrder:
    """Test that the order of modifiers changes the meaning."""

    def test_not_every(self):
        assert chain().not_.every.even().test([2, 3, 4])
        assert not chain().not_.every.even().test([2, 4])

    def test_every_not(self):
        validation = chain().every.not_.even()

        assert validation.test([1, 3, 5])
        assert not validation.test([1, 2, 3])

    def test_some_not(self):
        validation = chain().some.not_.exact(2)

        assert validation.test([2, 2, 3])
        assert not validation.test([2, 2, 2])

    def test_not_some(self):
        validation = chain().not_.some.exact(2)

        assert not validation.test([2, 3, 3])
        assert validation.test([3, 3, 3])

    def test_not_every_then_some_not(self):
        validation = chain().not_.every.even().some.not_.exact(3)

        assert not validation.test([2, 4, 6])
        assert not validation.test([3, 3, 3])
        assert validation.test([2, 3, 4])
        assert validation.test([2, 4, 5])

    def test_mixed_chain(self):
        validation = chain().array().some.positive().some.negative().not_.every.even().includes(6)

        assert not validation.test(10)
        assert not validation.test([1, 2, 3, 6])
        assert not validation.test([-1, -2, -3])
        assert not validation.test([2, -2, 4, 6])
        assert validation.test([2, -2, 4, 6, 7])

    def test_some_and_some_not(self):
        validation = chain().some.odd().some.not_.odd().length(3)

        assert not validation.test([1, 3, 5])
        assert validation.test([1, 2, 3])
        assert not validation.test([1, 2, 3, 4])

    def test_negated_quantifiers_and_equal(self):
        validation = chain().not_.every.positive().some.not_.even().not_.some.equal(3)

        assert not validation.test([1, 2, 4])
        assert not validation.test([-2, 2, 3])
        assert not validation.test([-2, 2, 4])
        assert validation.test([-2, 2, 5])

    def test_every_sequence(self):
        validation = chain().not_.every.equal(2).every.positive().every.even()

        assert not validation.test([2, 2, 2])
        assert not validation.test([2, 2, -4])
        assert validation.test([4, 4, 4])

    def test_string_rules_with_quantifiers(self):
        validation = chain().string().first("H").not_.last("o").not_.every.consonant().min_length(3)

        assert not validation.test("Hello")
        assert not validation.test("Hi")
        assert not validation.test("Hbrn")
        assert validation.test("Hbon")

    def test_nested_quantifiers(self):
        validation = chain().every.some.even()

        assert validation.test([[1, 2], [4]])
        assert not validation.test([[1, 2], [3]])


class TestComposition:
    """Test compose() directly and modifiers without an async variant."""

    def test_compose_without_modifiers(self):
        evaluate = compose(lambda value: value > 1, [])

        assert evaluate(2) == PASSED
        assert evaluate(0) == FAILED

    def test_first_modifier_is_outermost(self):
        evaluate = compose(lambda value: value == 2, [NOT, SOME])

        assert evaluate([1, 3]).passed
        assert not evaluate([1, 2]).passed

    def test_elements_of(self):
        assert elements_of("ab") == ["a", "b"]
        assert elements_of((1, 2)) == (1, 2)
        assert elements_of(12) is None

    def test_sync_only_modifier_in_async_mode(self):
        identity = Modifier(name="identity", simple=lambda inner: inner)
        predicate = ComposedPredicate(lambda value: True, [identity])

        assert predicate(1) is True
        assert identity.is_async_aware is False

        outcome = asyncio.run(predicate.evaluate_async(1))
        assert not outcome.passed
        assert isinstance(outcome.fault, ModifierNotSupportedError)
