from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from predychain.chain.errs import ValidationException


class RuleError(Exception):
    """Base exception for built-in rules."""

    ...


class NestedValidationError(RuleError):
    """
    Raised by schema-style predicates when one or more fields failed.

    The executing chain unwraps it, so the resulting ``ValidationException.cause`` is
    ``failures`` itself.
    """

    def __init__(self, failures: list[ValidationException]):
        self.failures = failures
        targets = ", ".join(str(f.target) for f in failures)
        super().__init__(f"{len(failures)} nested validation(s) failed: {targets}")
