from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic, Literal, ParamSpec, Protocol, TypeAlias

PredicateFn: TypeAlias = Callable[[Any], bool]
AsyncPredicateFn: TypeAlias = Callable[[Any], Awaitable[bool]]

ModifierName: TypeAlias = Literal["not", "some", "every"]


@dataclass(frozen=True, slots=True)
class DualPredicate:
    """
    A predicate shipped in two flavours: one used by the synchronous strategies and one
    awaited by ``test_async``.
    """

    simple: PredicateFn
    async_: AsyncPredicateFn = field(repr=False)


class RuleFactory(Protocol):
    """
    A callable that takes the rule arguments and returns the predicate to run against a value.
    """

    __name__: str

    def __call__(self, *args: Any) -> PredicateFn | AsyncPredicateFn | DualPredicate:  # noqa: ANN401
        """
        Take the arguments given to the rule in the chain and build the predicate.

        Examples:
            >>> def between(lower: int, upper: int):
            ...     return lambda value: lower <= value <= upper
            >>> between(1, 3)(2)
            True

        """

        ...


RuleParams = ParamSpec("RuleParams")


class RuleDef(Protocol, Generic[RuleParams]):
    """
    A callable that takes a value followed by the rule arguments and returns a boolean.
    """

    __name__: str

    def __call__(self, value: Any, /, *args: RuleParams.args, **kwargs: RuleParams.kwargs) -> bool:  # noqa: ANN401
        """
        Take a value and the rule arguments and returns a boolean.

        Examples:
            >>> def is_over(value: int, threshold: int) -> bool:
            ...     return value >= threshold
            >>> is_over.__name__
            'is_over'

        """

        ...
