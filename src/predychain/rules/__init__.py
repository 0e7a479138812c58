from __future__ import annotations

from typing import TYPE_CHECKING

from predychain.register import Registry

from .builtin import BUILTIN_RULES
from .errs import NestedValidationError, RuleError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from predychain.types import RuleFactory

DEFAULT_REGISTRY_NAME = "default"

default_registry = Registry(DEFAULT_REGISTRY_NAME, builtins=BUILTIN_RULES)


def extend(factories: Mapping[str, RuleFactory]) -> None:
    """
    Add custom rules to the default registry.
    """
    default_registry.extend(factories)


def clear_custom_rules() -> None:
    """
    Remove every custom rule from the default registry.
    """
    default_registry.clear_custom()


__all__ = [
    "BUILTIN_RULES",
    "DEFAULT_REGISTRY_NAME",
    "NestedValidationError",
    "RuleError",
    "clear_custom_rules",
    "default_registry",
    "extend",
]
