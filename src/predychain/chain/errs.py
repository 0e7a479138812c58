from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from predychain.rule import Rule


class ChainError(Exception):
    """Base Chain exception."""

    ...


class ValidationException(ChainError):
    """
    A rule did not pass.

    Attributes:
        rule: The failing rule, exposing at least ``name`` and ``args``.
        value: The exact value given to the failing rule.
        cause: ``None`` when the rule simply returned False, the exception when the predicate
            raised, or the list of child failures when the rule validated nested values.
        target: The field that produced this failure, set on failures collected by a schema.
    """

    def __init__(
        self,
        rule: Rule,
        value: Any,  # noqa: ANN401
        cause: Exception | list[ValidationException] | None = None,
        *,
        target: str | None = None,
    ):
        self.rule = rule
        self.value = value
        self.cause = cause
        self.target = target

        msg = f"Rule {rule.id} failed for value {value!r}"
        if target is not None:
            msg = f"{target}: {msg}"
        if isinstance(cause, list):
            msg += f" ({len(cause)} nested failure(s))"
        elif cause is not None:
            msg += f" ({type(cause).__name__}: {cause})"
        super().__init__(msg)

    def with_target(self, target: str) -> ValidationException:
        """
        Copy of this failure attributed to a nested field.
        """
        ex = ValidationException(self.rule, self.value, self.cause, target=target)
        ex.__cause__ = self.__cause__
        return ex


class PendingModifierError(ChainError):
    """
    Raised when a chain ending in modifiers with no rule after them is executed.
    """

    def __init__(self, pending: tuple[str, ...]):
        self.pending = pending
        super().__init__(f"Modifier(s) {'.'.join(pending)} not followed by a rule")
