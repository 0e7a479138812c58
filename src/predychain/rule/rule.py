from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from predychain.modifier import ComposedPredicate, Modifier


def _render_arg(arg: Any) -> str:  # noqa: ANN401
    if isinstance(arg, str):
        return f'"{arg}"'
    return repr(arg)


@dataclass(frozen=True, slots=True)
class Rule:
    """
    One step of a chain: a named rule, the arguments it was built with, and its predicate
    with the modifiers that were pending when the rule was added already applied.
    """

    name: str
    args: tuple[Any, ...] = ()
    predicate: ComposedPredicate = field(repr=False, compare=False, kw_only=True)
    modifiers: tuple[Modifier, ...] = field(default=(), kw_only=True)

    @property
    def id(self) -> str:
        """
        Readable identifier such as ``not.every.lowercase()`` or ``length(3, 5)``.
        """
        prefix = "".join(f"{m.name}." for m in self.modifiers)
        args = ", ".join(_render_arg(arg) for arg in self.args)
        return f"{prefix}{self.name}({args})"

    def __str__(self) -> str:
        return self.id
