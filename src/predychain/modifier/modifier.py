from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from predychain.modifier.errs import AsyncPredicateError, ModifierNotSupportedError, NotQuantifiableError
from predychain.types import DualPredicate


@dataclass(frozen=True, slots=True)
class Outcome:
    """
    Result of evaluating a predicate: whether it passed and, if it raised, the fault.

    A fault always means "not satisfied" at the point it was raised. Negating a faulted
    outcome therefore passes, and the fault is dropped, except for a
    [NotQuantifiableError][predychain.modifier.errs.NotQuantifiableError], which no negation
    can turn into a pass.
    """

    passed: bool
    fault: Exception | None = field(default=None, compare=False)

    def __bool__(self) -> bool:
        return self.passed

    def __invert__(self) -> Outcome:
        if isinstance(self.fault, NotQuantifiableError):
            return self
        return PASSED if not self.passed else FAILED


PASSED = Outcome(passed=True)
FAILED = Outcome(passed=False)

Evaluator: TypeAlias = Callable[[Any], Outcome]
AsyncEvaluator: TypeAlias = Callable[[Any], Awaitable[Outcome]]


@dataclass(frozen=True, slots=True)
class Modifier:
    """
    A named transformation applied to the predicate of the next rule in a chain.

    ``simple`` wraps a synchronous evaluator, ``async_`` wraps an asynchronous one. A modifier
    missing one of them cannot be used with the matching strategies.
    """

    name: str
    simple: Callable[[Evaluator], Evaluator] | None = field(default=None, repr=False, compare=False)
    async_: Callable[[AsyncEvaluator], AsyncEvaluator] | None = field(default=None, repr=False, compare=False)

    @property
    def participates_in_simple_composition(self) -> bool:  # noqa: D102
        return self.simple is not None

    @property
    def is_async_aware(self) -> bool:  # noqa: D102
        return self.async_ is not None

    def __str__(self) -> str:
        return self.name


def elements_of(value: Any) -> Sequence[Any] | None:  # noqa: ANN401
    """
    Items a quantifier iterates over. Strings are split into characters.

    Returns:
        The elements, or None when the value cannot be quantified over.
    """
    if isinstance(value, str):
        return list(value)
    if isinstance(value, Sequence):
        return value
    return None


# ============================================================================
# Synchronous wrappers
# ============================================================================


def _not_quantifiable(modifier_name: str, value: Any) -> Outcome:  # noqa: ANN401
    return Outcome(passed=False, fault=NotQuantifiableError(modifier_name, value))


def _element(outcome: Outcome) -> Outcome:
    # A nested quantifier refusing an element only fails that element.
    if isinstance(outcome.fault, NotQuantifiableError):
        return FAILED
    return outcome


def _negate(inner: Evaluator) -> Evaluator:
    def negated(value: Any) -> Outcome:  # noqa: ANN401
        return ~inner(value)

    return negated


def _exists(inner: Evaluator) -> Evaluator:
    def exists(value: Any) -> Outcome:  # noqa: ANN401
        items = elements_of(value)
        if items is None:
            return _not_quantifiable("some", value)

        fault = None
        for item in items:
            outcome = _element(inner(item))
            if outcome.passed:
                return PASSED
            fault = fault or outcome.fault
        return Outcome(passed=False, fault=fault)

    return exists


def _for_all(inner: Evaluator) -> Evaluator:
    def for_all(value: Any) -> Outcome:  # noqa: ANN401
        items = elements_of(value)
        if items is None:
            return _not_quantifiable("every", value)

        for item in items:
            outcome = _element(inner(item))
            if not outcome.passed:
                return outcome
        return PASSED

    return for_all


# ============================================================================
# Asynchronous wrappers. Elements are awaited one after another, never gathered.
# ============================================================================


def _negate_async(inner: AsyncEvaluator) -> AsyncEvaluator:
    async def negated(value: Any) -> Outcome:  # noqa: ANN401
        outcome = await inner(value)
        # Faults pass through unchanged.
        if outcome.fault is not None:
            return outcome
        return ~outcome

    return negated


def _exists_async(inner: AsyncEvaluator) -> AsyncEvaluator:
    async def exists(value: Any) -> Outcome:  # noqa: ANN401
        items = elements_of(value)
        if items is None:
            return _not_quantifiable("some", value)

        fault = None
        for item in items:
            outcome = _element(await inner(item))
            if outcome.passed:
                return PASSED
            fault = fault or outcome.fault
        return Outcome(passed=False, fault=fault)

    return exists


def _for_all_async(inner: AsyncEvaluator) -> AsyncEvaluator:
    async def for_all(value: Any) -> Outcome:  # noqa: ANN401
        items = elements_of(value)
        if items is None:
            return _not_quantifiable("every", value)

        for item in items:
            outcome = _element(await inner(item))
            if not outcome.passed:
                return outcome
        return PASSED

    return for_all


NOT = Modifier(name="not", simple=_negate, async_=_negate_async)
SOME = Modifier(name="some", simple=_exists, async_=_exists_async)
EVERY = Modifier(name="every", simple=_for_all, async_=_for_all_async)

MODIFIERS: dict[str, Modifier] = {m.name: m for m in (NOT, SOME, EVERY)}


def get_modifier(name: str | Modifier) -> Modifier:
    """
    Look up the shared modifier instance for a name.

    Raises:
        KeyError: If no modifier has that name.
    """
    if isinstance(name, Modifier):
        return name
    return MODIFIERS[name]


# ============================================================================
# Composition
# ============================================================================


def _name_of(fn: Any) -> str:  # noqa: ANN401
    return getattr(fn, "__name__", type(fn).__name__)


def _discard(awaitable: Awaitable[Any]) -> None:
    # Never leave a coroutine un-awaited.
    if inspect.iscoroutine(awaitable):
        awaitable.close()
    elif hasattr(awaitable, "cancel"):
        awaitable.cancel()


def lift(fn: Callable[[Any], Any]) -> Evaluator:
    """
    Turn a plain predicate into an evaluator that records faults instead of raising them.
    """

    def evaluate(value: Any) -> Outcome:  # noqa: ANN401
        try:
            result = fn(value)
        except Exception as e:  # noqa: BLE001
            return Outcome(passed=False, fault=e)

        if inspect.isawaitable(result):
            _discard(result)
            return Outcome(passed=False, fault=AsyncPredicateError(_name_of(fn)))
        return PASSED if result else FAILED

    return evaluate


def lift_async(fn: Callable[[Any], Any]) -> AsyncEvaluator:
    """
    Async counterpart of [lift][predychain.modifier.modifier.lift]. Synchronous results are
    accepted as they are.
    """

    async def evaluate(value: Any) -> Outcome:  # noqa: ANN401
        try:
            result = fn(value)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:  # noqa: BLE001
            return Outcome(passed=False, fault=e)
        return PASSED if result else FAILED

    return evaluate


def _unsupported(modifier: Modifier) -> Evaluator:
    def evaluate(_: Any) -> Outcome:  # noqa: ANN401
        return Outcome(passed=False, fault=ModifierNotSupportedError(modifier.name, "sync"))

    return evaluate


def _unsupported_async(modifier: Modifier) -> AsyncEvaluator:
    async def evaluate(_: Any) -> Outcome:  # noqa: ANN401
        return Outcome(passed=False, fault=ModifierNotSupportedError(modifier.name, "async"))

    return evaluate


def compose(fn: Callable[[Any], Any] | DualPredicate, modifiers: Sequence[Modifier]) -> Evaluator:
    """
    Fold modifiers around a base predicate.

    The first modifier chained ends up outermost, so ``not.every.P`` reads as
    ``not (every P)`` and ``every.not.P`` as ``every (not P)``.

    Args:
        fn: The predicate produced by the rule factory.
        modifiers: Modifiers in the order they were chained.

    Returns:
        An evaluator returning an [Outcome][predychain.modifier.modifier.Outcome].
    """
    base = fn.simple if isinstance(fn, DualPredicate) else fn
    evaluator = lift(base)
    for modifier in reversed(modifiers):
        if modifier.simple is None:
            return _unsupported(modifier)
        evaluator = modifier.simple(evaluator)
    return evaluator


def compose_async(fn: Callable[[Any], Any] | DualPredicate, modifiers: Sequence[Modifier]) -> AsyncEvaluator:
    """
    Same fold as [compose][predychain.modifier.modifier.compose], with every step awaiting
    the one it wraps.
    """
    base = fn.async_ if isinstance(fn, DualPredicate) else fn
    evaluator = lift_async(base)
    for modifier in reversed(modifiers):
        if modifier.async_ is None:
            return _unsupported_async(modifier)
        evaluator = modifier.async_(evaluator)
    return evaluator


class ComposedPredicate:
    """
    A base predicate with its modifiers baked in, callable like the plain predicate.

    Both the synchronous and the asynchronous evaluators are built once, up front.
    """

    __slots__ = ("_evaluate", "_evaluate_async", "base", "modifiers")

    def __init__(self, base: Callable[[Any], Any] | DualPredicate, modifiers: Sequence[Modifier] = ()):
        self.base = base
        self.modifiers = tuple(modifiers)
        self._evaluate = compose(base, self.modifiers)
        self._evaluate_async = compose_async(base, self.modifiers)

    def __call__(self, value: Any) -> bool:  # noqa: ANN401
        return self._evaluate(value).passed

    def evaluate(self, value: Any) -> Outcome:  # noqa: ANN401
        """Evaluate synchronously, keeping any fault."""
        return self._evaluate(value)

    async def evaluate_async(self, value: Any) -> Outcome:  # noqa: ANN401
        """Evaluate, awaiting asynchronous predicates."""
        return await self._evaluate_async(value)

    def __repr__(self) -> str:
        prefix = "".join(f"{m.name}." for m in self.modifiers)
        return f"<ComposedPredicate {prefix}{_name_of(self.base)}>"
