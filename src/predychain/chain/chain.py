from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING, Any

from predychain.chain.errs import PendingModifierError, ValidationException
from predychain.modifier import EVERY, NOT, SOME, ComposedPredicate, Modifier, get_modifier
from predychain.rule import Rule
from predychain.rules import NestedValidationError, default_registry

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from predychain.modifier import Outcome
    from predychain.register import Registry

logger = logging.getLogger(__name__)


def _failure(rule: Rule, value: Any, outcome: Outcome) -> ValidationException:  # noqa: ANN401
    fault = outcome.fault
    if isinstance(fault, NestedValidationError):
        return ValidationException(rule, value, fault.failures)
    return ValidationException(rule, value, fault)


class Chain:
    """
    An immutable, ordered chain of rules and the strategies that run it against a value.

    Every builder call returns a new chain and leaves the receiver untouched, so chains can
    share a prefix and diverge:

    Examples:
        ```python
        number = chain().number()
        not_ten = number.not_.equal(10)

        assert number.test(10)
        assert not not_ten.test(10)
        ```

    Rules are dispatched by attribute from the chain's registry; ``not_``, ``some`` and
    ``every`` queue modifiers for the next rule.
    """

    __slots__ = ("_pending", "_registry", "_rules")

    def __init__(
        self,
        registry: Registry | None = None,
        rules: Iterable[Rule] = (),
        pending: Iterable[Modifier] = (),
    ):
        self._registry = registry if registry is not None else default_registry
        self._rules: tuple[Rule, ...] = tuple(rules)
        self._pending: tuple[Modifier, ...] = tuple(pending)

    # ============================================================================
    # Builder
    # ============================================================================

    @property
    def registry(self) -> Registry:  # noqa: D102
        return self._registry

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Rules in evaluation order."""
        return self._rules

    @property
    def pending_modifiers(self) -> tuple[Modifier, ...]:  # noqa: D102
        return self._pending

    def with_pending_modifier(self, modifier: Modifier | str) -> Chain:
        """
        Queue a modifier for the next rule.
        """
        return Chain(self._registry, self._rules, (*self._pending, get_modifier(modifier)))

    def with_rule(self, name: str, *args: Any) -> Chain:  # noqa: ANN401
        """
        Append a rule built from the registry, with the queued modifiers applied to it.

        Raises:
            RuleNotFoundError: If the registry has no rule with that name.
        """
        factory = self._registry.resolve(name)
        predicate = ComposedPredicate(factory(*args), self._pending)
        rule = Rule(name, args, predicate=predicate, modifiers=self._pending)
        logger.debug("Resolved rule %s from registry %r", rule.id, self._registry.name)
        return Chain(self._registry, (*self._rules, rule))

    rule = with_rule

    @property
    def not_(self) -> Chain:
        """Negate the next rule."""
        return self.with_pending_modifier(NOT)

    @property
    def some(self) -> Chain:
        """The next rule must pass for at least one element of the value."""
        return self.with_pending_modifier(SOME)

    @property
    def every(self) -> Chain:
        """The next rule must pass for every element of the value."""
        return self.with_pending_modifier(EVERY)

    def __getattr__(self, name: str) -> Callable[..., Chain]:
        if name.startswith("_"):
            raise AttributeError(name)
        self._registry.resolve(name)
        return partial(self.with_rule, name)

    def __dir__(self) -> Iterable[str]:
        return [*super().__dir__(), *(name for name in self._registry if name.isidentifier())]

    def rule_ids(self) -> list[str]:
        """
        Readable ids of the rules, e.g. ``["string()", "not.every.lowercase()"]``.
        """
        return [rule.id for rule in self._rules]

    def __repr__(self) -> str:
        return f"Chain({', '.join(self.rule_ids())})"

    # ============================================================================
    # Execution
    # ============================================================================

    def _ensure_finalized(self) -> None:
        if self._pending:
            raise PendingModifierError(tuple(m.name for m in self._pending))

    def test(self, value: Any) -> bool:  # noqa: ANN401
        """
        Whether every rule passes. Stops at the first rule that fails or raises.

        Chains holding asynchronous predicates must use
        [test_async][predychain.chain.chain.Chain.test_async]; here such a rule never passes.
        """
        self._ensure_finalized()
        return all(rule.predicate.evaluate(value).passed for rule in self._rules)

    def check(self, value: Any) -> None:  # noqa: ANN401
        """
        Raise on the first rule that fails.

        Raises:
            ValidationException: For the first failing rule. Later rules are not evaluated.
        """
        self._ensure_finalized()
        for rule in self._rules:
            outcome = rule.predicate.evaluate(value)
            if not outcome.passed:
                logger.debug("Rule %s failed for %r", rule.id, value)
                raise _failure(rule, value, outcome) from outcome.fault

    def test_all(self, value: Any) -> list[ValidationException]:  # noqa: ANN401
        """
        Evaluate every rule and collect one failure per rule that did not pass.

        Returns:
            The failures in chain order, empty when the value is valid.
        """
        self._ensure_finalized()
        failures = []
        for rule in self._rules:
            outcome = rule.predicate.evaluate(value)
            if not outcome.passed:
                logger.debug("Rule %s failed for %r", rule.id, value)
                failure = _failure(rule, value, outcome)
                failure.__cause__ = outcome.fault
                failures.append(failure)
        return failures

    async def test_async(self, value: Any) -> Any:  # noqa: ANN401
        """
        Evaluate the rules one at a time, awaiting each before starting the next.

        Returns:
            The value, unchanged, when every rule passes.

        Raises:
            ValidationException: For the first failing rule. No later rule is started.
        """
        self._ensure_finalized()
        for rule in self._rules:
            outcome = await rule.predicate.evaluate_async(value)
            if not outcome.passed:
                logger.debug("Rule %s failed for %r", rule.id, value)
                raise _failure(rule, value, outcome) from outcome.fault
        return value


def chain(registry: Registry | None = None) -> Chain:
    """
    Start an empty chain on ``registry``, the default registry when omitted.
    """
    return Chain(registry)
