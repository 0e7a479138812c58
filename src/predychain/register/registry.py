from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterator, Mapping
from functools import wraps
from threading import RLock
from typing import TYPE_CHECKING, Any, Concatenate, ParamSpec, cast

from predychain.register.errs import (
    RegistryNameConflictError,
    RuleDefNotNamedError,
    RuleNameReservedError,
    RuleNotFoundError,
)

if TYPE_CHECKING:
    from predychain.types import PredicateFn, RuleDef, RuleFactory

P = ParamSpec("P")

logger = logging.getLogger(__name__)

# Public members of Chain. A rule with one of these names could not be reached by attribute.
RESERVED_RULE_NAMES = frozenset(
    {
        "check",
        "every",
        "not_",
        "pending_modifiers",
        "registry",
        "rule",
        "rule_ids",
        "rules",
        "some",
        "test",
        "test_all",
        "test_async",
        "with_pending_modifier",
        "with_rule",
    },
)


class RegistryManager:
    """
    Manage registries by name.
    """

    def __init__(self):
        self.__registers_instance: dict[str, Registry] = {}
        self.__register_lock = RLock()

    def try_add_register(self, name: str, register: Registry):
        """
        Try to add a register.

        Raises:
            RegistryNameConflictError: If the name is already in use.
        """
        with self.__register_lock:
            if name in self.__registers_instance:
                raise RegistryNameConflictError(name, self.__registers_instance[name])

            self.__registers_instance[name] = register

    def get_register(self, name: str) -> Registry | None:
        """
        Get a register by name.
        """
        return self.__registers_instance.get(name)

    def remove_register(self, name: str) -> Registry | None:
        """
        Forget a register. Chains already built from it keep working.
        """
        with self.__register_lock:
            return self.__registers_instance.pop(name, None)


GlobalRegistryManager = RegistryManager()


class Registry(Mapping[str, "RuleFactory"]):
    """
    Rule factories by name.

    Built-in factories are fixed when the registry is created. Custom factories are added with
    [register][predychain.register.registry.Registry.register] or
    [extend][predychain.register.registry.Registry.extend], shadow built-ins of the same name,
    and can all be dropped again with
    [clear_custom][predychain.register.registry.Registry.clear_custom].

    Lookups only happen while a chain is being built, so clearing never affects rules that
    already exist.
    """

    def __init__(
        self,
        name: str,
        *,
        builtins: Mapping[str, RuleFactory] | None = None,
        _manager: RegistryManager | None = None,
    ):
        self.name = name
        self.__builtins: dict[str, RuleFactory] = dict(builtins or {})
        self.__custom: dict[str, RuleFactory] = {}
        self.__lock = RLock()

        manager = _manager or GlobalRegistryManager
        manager.try_add_register(self.name, self)

    def __getitem__(self, key: str) -> RuleFactory:
        if key in self.__custom:
            return self.__custom[key]
        return self.__builtins[key]

    def __iter__(self) -> Iterator[str]:
        yield from self.__builtins
        yield from (name for name in self.__custom if name not in self.__builtins)

    def __len__(self) -> int:
        return len(self.__builtins.keys() | self.__custom.keys())

    def __repr__(self) -> str:
        return f"Registry({self.name!r}, builtins={len(self.__builtins)}, custom={len(self.__custom)})"

    def is_builtin(self, name: str) -> bool:
        """
        Whether ``name`` currently resolves to a built-in factory.
        """
        return name in self.__builtins and name not in self.__custom

    def resolve(self, name: str) -> RuleFactory:
        """
        Get the factory for a rule name.

        Raises:
            RuleNotFoundError: If nothing is registered under the name.
        """
        try:
            return self[name]
        except KeyError:
            raise RuleNotFoundError(name, self.name) from None

    def register(self, name: str, factory: RuleFactory) -> None:
        """
        Register a custom rule factory. A later registration for the same name wins.

        Raises:
            RuleNameReservedError: If the name is one of Chain's own members.
        """
        if name in RESERVED_RULE_NAMES:
            raise RuleNameReservedError(name, self.name)
        with self.__lock:
            if name in self.__custom or name in self.__builtins:
                logger.debug("Overriding rule %r in registry %r", name, self.name)
            self.__custom[name] = factory

    def extend(self, factories: Mapping[str, RuleFactory]) -> None:
        """
        Merge custom rule factories into the registry.

        Examples:
            ```python
            registry.extend({"one_of": lambda *options: lambda value: value in options})
            ```
        """
        for name in factories:
            if name in RESERVED_RULE_NAMES:
                raise RuleNameReservedError(name, self.name)
        with self.__lock:
            for name, factory in factories.items():
                self.register(name, factory)
        logger.debug("Registry %r extended with %s", self.name, ", ".join(factories))

    def clear_custom(self) -> None:
        """
        Drop every custom rule, leaving only the built-ins.
        """
        with self.__lock:
            self.__custom.clear()
        logger.debug("Custom rules cleared from registry %r", self.name)

    def rule_def(self) -> rule_def:
        """
        Decorator registering a ``(value, *args) -> bool`` function in this registry.
        """
        return rule_def(self)


class rule_def:  # noqa: N801
    """
    Convert a [predychain.types.RuleDef][] function into a rule factory taking only the rule
    arguments, and add it to the registries under the function name.
    This will modify the signature of RuleDef.

    Must be used on named functions

    Args:
        *registries: Registries to add the rule to.

    Examples:
        ```python
        registry = Registry("users")

        @rule_def(registry)
        def adult(value: dict, threshold: int = 18) -> bool:
            return value["age"] >= threshold

        assert chain(registry).adult().test({"age": 18})
        assert chain(registry).not_.adult(21).test({"age": 18})
        ```

    """

    def __init__(self, *registries: Registry):
        self.__registries = registries

    def __call__(self, fn: Callable[Concatenate[Any, P], bool]) -> Callable[P, PredicateFn]:
        """
        Convert the RuleDef function to a rule factory and add it to the registries.

        Args:
            fn (RuleDef[P]): Rule define func. Must be a named function.

        Raises:
            RuleDefNotNamedError: If the function has no usable name (e.g. a lambda).
        """
        fn = cast("RuleDef[P]", fn)
        name = getattr(fn, "__name__", "")
        if not name or name == "<lambda>":
            raise RuleDefNotNamedError

        @wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> PredicateFn:
            return lambda value: fn(value, *args, **kwargs)

        sig = inspect.signature(fn)

        new_params = list(sig.parameters.values())[1:]

        wrapper.__annotations__ = {p.name: p.annotation for p in new_params}
        wrapper.__annotations__["return"] = "PredicateFn"

        wrapper.__signature__ = inspect.Signature(parameters=new_params)  # ty:ignore[unresolved-attribute]

        for register in self.__registries:
            register.register(name, wrapper)

        return wrapper
