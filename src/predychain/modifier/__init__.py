from .errs import AsyncPredicateError, ModifierError, ModifierNotSupportedError, NotQuantifiableError
from .modifier import (
    EVERY,
    MODIFIERS,
    NOT,
    SOME,
    ComposedPredicate,
    Modifier,
    Outcome,
    compose,
    compose_async,
    elements_of,
    get_modifier,
)

__all__ = [
    "EVERY",
    "MODIFIERS",
    "NOT",
    "SOME",
    "AsyncPredicateError",
    "ComposedPredicate",
    "Modifier",
    "ModifierError",
    "ModifierNotSupportedError",
    "NotQuantifiableError",
    "Outcome",
    "compose",
    "compose_async",
    "elements_of",
    "get_modifier",
]
