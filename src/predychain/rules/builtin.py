"""
Built-in rule factories.

Each factory takes the rule arguments and returns the predicate run against the value.
Predicates are free to raise on values they cannot handle; the chain records that as a
fault and treats the rule as not satisfied.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from predychain.rules.errs import NestedValidationError
from predychain.types import DualPredicate

if TYPE_CHECKING:
    from predychain.chain import Chain
    from predychain.chain.errs import ValidationException
    from predychain.types import PredicateFn

_LOWERCASE = re.compile(r"[a-z][a-z\s]*")
_UPPERCASE = re.compile(r"[A-Z][A-Z\s]*")
_VOWELS = re.compile(r"[aeiou]+", re.IGNORECASE)
_CONSONANTS = re.compile(r"[bcdfghjklmnpqrstvwxyz]+", re.IGNORECASE)


def _is_number(value: Any) -> bool:  # noqa: ANN401
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_sequence(value: Any) -> bool:  # noqa: ANN401
    return isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray))


# ============================================================================
# Equality
# ============================================================================


def _loosely_equal(text: str, other: Any) -> bool:  # noqa: ANN401
    if _is_number(other):
        try:
            return float(text) == other
        except ValueError:
            return False
    return text == str(other)


def equal(expected: Any) -> PredicateFn:  # noqa: ANN401
    """
    Loose equality. A string equals a number when it parses to the same number, so
    ``"1"`` equals ``1.0``; against anything else it is compared with its ``str()``.
    """

    def check(value: Any) -> bool:  # noqa: ANN401
        if value == expected:
            return True
        if isinstance(value, str) and not isinstance(expected, str):
            return _loosely_equal(value, expected)
        if isinstance(expected, str) and not isinstance(value, str):
            return _loosely_equal(expected, value)
        return False

    return check


def exact(expected: Any) -> PredicateFn:  # noqa: ANN401
    """Equal and of the same type."""
    return lambda value: type(value) is type(expected) and value == expected


def pattern(regex: str | re.Pattern[str]) -> PredicateFn:
    compiled = re.compile(regex)
    return lambda value: isinstance(value, str) and compiled.search(value) is not None


# ============================================================================
# Types
# ============================================================================


def string() -> PredicateFn:
    return lambda value: isinstance(value, str)


def number() -> PredicateFn:
    return _is_number


def boolean() -> PredicateFn:
    return lambda value: isinstance(value, bool)


def array() -> PredicateFn:
    return lambda value: isinstance(value, (list, tuple))


def null() -> PredicateFn:
    return lambda value: value is None


def integer() -> PredicateFn:
    def check(value: Any) -> bool:  # noqa: ANN401
        if isinstance(value, float):
            return value.is_integer()
        return isinstance(value, int) and not isinstance(value, bool)

    return check


def type_(expected: str | type) -> PredicateFn:
    """Match a type object with ``isinstance`` or a type name exactly."""
    if isinstance(expected, type):
        return lambda value: isinstance(value, expected)
    return lambda value: type(value).__name__ == expected


# ============================================================================
# Strings and sequences
# ============================================================================


def lowercase() -> PredicateFn:
    return lambda value: isinstance(value, str) and _LOWERCASE.fullmatch(value) is not None


def uppercase() -> PredicateFn:
    return lambda value: isinstance(value, str) and _UPPERCASE.fullmatch(value) is not None


def vowel() -> PredicateFn:
    return lambda value: isinstance(value, str) and _VOWELS.fullmatch(value) is not None


def consonant() -> PredicateFn:
    return lambda value: isinstance(value, str) and _CONSONANTS.fullmatch(value) is not None


def first(item: Any) -> PredicateFn:  # noqa: ANN401
    return lambda value: _is_sequence(value) and len(value) > 0 and value[0] == item


def last(item: Any) -> PredicateFn:  # noqa: ANN401
    return lambda value: _is_sequence(value) and len(value) > 0 and value[-1] == item


def empty() -> PredicateFn:
    return lambda value: len(value) == 0


def length(min_length: int, max_length: int | None = None) -> PredicateFn:
    """Length within ``[min_length, max_length]``; exactly ``min_length`` when no max is given."""
    upper = min_length if max_length is None else max_length
    return lambda value: min_length <= len(value) <= upper


def min_length(minimum: int) -> PredicateFn:
    return lambda value: len(value) >= minimum


def max_length(maximum: int) -> PredicateFn:
    return lambda value: len(value) <= maximum


def includes(item: Any) -> PredicateFn:  # noqa: ANN401
    return lambda value: item in value


# ============================================================================
# Numbers
# ============================================================================


def negative() -> PredicateFn:
    return lambda value: value < 0


def positive() -> PredicateFn:
    return lambda value: value >= 0


def between(lower: Any, upper: Any) -> PredicateFn:  # noqa: ANN401
    return lambda value: lower <= value <= upper


def less_than(bound: Any) -> PredicateFn:  # noqa: ANN401
    return lambda value: value < bound


def less_than_or_equal(bound: Any) -> PredicateFn:  # noqa: ANN401
    return lambda value: value <= bound


def greater_than(bound: Any) -> PredicateFn:  # noqa: ANN401
    return lambda value: value > bound


def greater_than_or_equal(bound: Any) -> PredicateFn:  # noqa: ANN401
    return lambda value: value >= bound


def even() -> PredicateFn:
    return lambda value: value % 2 == 0


def odd() -> PredicateFn:
    return lambda value: value % 2 != 0


# ============================================================================
# Schema
# ============================================================================


def _field_value(value: Any, key: str) -> Any:  # noqa: ANN401
    if isinstance(value, Mapping):
        return value.get(key)
    return None


def schema(fields: Mapping[str, Chain]) -> DualPredicate:
    """
    Validate a mapping field by field, each field against its own chain.

    Every field is checked, fail-fast within the field. Each failing field contributes its
    ``ValidationException`` with ``target`` set to the field name, and any failure raises a
    [NestedValidationError][predychain.rules.errs.NestedValidationError] carrying them all.
    Missing fields, or fields of a value that is not a mapping, are validated as ``None``.
    """
    # predychain.chain imports this module at load time.
    from predychain.chain.errs import ValidationException  # noqa: PLC0415

    def collect(failures: list[ValidationException], key: str, ex: ValidationException) -> None:
        failures.append(ex.with_target(key))

    def simple(value: Any) -> bool:  # noqa: ANN401
        failures: list[ValidationException] = []
        for key, nested in fields.items():
            try:
                nested.check(_field_value(value, key))
            except ValidationException as ex:
                collect(failures, key, ex)
        if failures:
            raise NestedValidationError(failures)
        return True

    async def async_(value: Any) -> bool:  # noqa: ANN401
        failures: list[ValidationException] = []
        for key, nested in fields.items():
            try:
                await nested.test_async(_field_value(value, key))
            except ValidationException as ex:
                collect(failures, key, ex)
        if failures:
            raise NestedValidationError(failures)
        return True

    return DualPredicate(simple=simple, async_=async_)


BUILTIN_RULES = {
    "equal": equal,
    "exact": exact,
    "pattern": pattern,
    "string": string,
    "number": number,
    "boolean": boolean,
    "array": array,
    "null": null,
    "integer": integer,
    "type": type_,
    "lowercase": lowercase,
    "uppercase": uppercase,
    "vowel": vowel,
    "consonant": consonant,
    "first": first,
    "last": last,
    "empty": empty,
    "length": length,
    "min_length": min_length,
    "max_length": max_length,
    "includes": includes,
    "negative": negative,
    "positive": positive,
    "between": between,
    "range": between,
    "less_than": less_than,
    "less_than_or_equal": less_than_or_equal,
    "greater_than": greater_than,
    "greater_than_or_equal": greater_than_or_equal,
    "even": even,
    "odd": odd,
    "schema": schema,
}
