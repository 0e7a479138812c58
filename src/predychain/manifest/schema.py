from __future__ import annotations

import inspect
from functools import reduce
from typing import TYPE_CHECKING, Annotated, Any, Literal, TypeVar, cast

from caseconverter import pascalcase
from pydantic import BaseModel, Field, create_model

from predychain.manifest.base import X_PARAMS_ORDER, ChainManifest, RegistryManifest, RuleSpec
from predychain.rules.builtin import schema as builtin_schema

if TYPE_CHECKING:
    from predychain.register.registry import Registry
    from predychain.types import RuleFactory

CMT_co = TypeVar("CMT_co", bound=ChainManifest, covariant=True)

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class SchemaGenerator:
    """
    Generate a manifest model, and so a JSON Schema, for the rules of a registry.
    """

    def __init__(self, registry: Registry):
        self.registry = registry

    def generate(self) -> type[CMT_co]:
        """
        Generates a ChainManifest model restricted to the registry's rules.

        The ``rules`` of the generated model are a union discriminated on the rule name, one
        member per registered rule, each checking the number of arguments against the rule
        factory's signature. When the registry holds the built-in ``schema`` rule, the nested
        manifests of a schema rule are restricted the same way, at every level. Nested manifests
        are checked against this registry's rules, so they should not name another registry.
        ``model_json_schema()`` on the result documents the registry.

        Returns:
            A ChainManifest subclass named after the registry, e.g. ``DefaultManifest``.
        """
        defs = self.get_rule_spec_types()
        if self.has_schema_rule():
            base = RegistryManifest[self._rule_union(defs)]
            fields = {}
        else:
            base = ChainManifest
            fields = {
                "rules": (self._rules_type(defs), Field(default_factory=list, description="Rules in evaluation order")),
            }

        model = create_model(
            f"{to_pascal(self.registry.name)}Manifest",
            __base__=base,
            registry=(
                Literal[self.registry.name],  # ty:ignore[invalid-type-form]
                Field(self.registry.name, description="Name of the registry containing the rules"),
            ),
            **fields,
        )
        return cast("type[CMT_co]", model)

    def get_rule_spec_types(self) -> tuple[type[BaseModel], ...]:
        """
        One spec model per rule in the registry, the schema rule excepted.
        """
        return tuple(
            self._create_rule_model(rule_name, factory)
            for rule_name, factory in self.registry.items()
            if factory is not builtin_schema
        )

    def has_schema_rule(self) -> bool:
        """
        Whether the registry holds the built-in schema rule.
        """
        return any(factory is builtin_schema for factory in self.registry.values())

    @staticmethod
    def _rule_union(defs: tuple[type[BaseModel], ...]) -> Any:  # noqa: ANN401
        if not defs:
            return type(None)
        if len(defs) == 1:
            return defs[0]
        return Annotated[reduce(lambda a, b: a | b, defs), Field(discriminator="name")]  # ty:ignore[invalid-type-form]

    @staticmethod
    def _rules_type(defs: tuple[type[BaseModel], ...]) -> Any:  # noqa: ANN401
        if not defs:
            return Annotated[list[RuleSpec], Field(max_length=0)]
        return list[SchemaGenerator._rule_union(defs)]  # ty:ignore[invalid-type-form]

    def _create_rule_model(self, rule_name: str, factory: RuleFactory) -> type[BaseModel]:
        doc = inspect.getdoc(factory) or f"Specification for {rule_name}"
        params = ArgsConv(factory)

        model = create_model(
            f"{to_pascal(rule_name)}Spec",
            __base__=RuleSpec,
            __doc__=doc,
            name=(
                Literal[rule_name],  # ty:ignore[invalid-type-form]
                Field(rule_name, description="Name of the rule in the registry"),
            ),
            args=(list[Any], params.conv_to_pydantic_field()),
        )
        model.__name__ = f"{to_pascal(rule_name)}Spec"
        return model


class ArgsConv:
    """
    Helper class for converting a rule factory signature to the ``args`` field definition.
    """

    def __init__(self, factory: RuleFactory):
        try:
            self.sig: inspect.Signature | None = inspect.signature(factory)
        except (TypeError, ValueError):
            self.sig = None

    def conv_to_pydantic_field(self) -> Any:  # noqa: ANN401
        """
        Build a list field bounded by the factory's positional arity.
        """
        if self.sig is None:
            return Field(default_factory=list, description="Positional arguments for the rule")

        positional = [p for p in self.sig.parameters.values() if p.kind in _POSITIONAL]
        variadic = any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in self.sig.parameters.values())
        required = sum(1 for p in positional if p.default is inspect.Parameter.empty)

        default = {"default": ...} if required else {"default_factory": list}
        return Field(
            **default,
            min_length=required,
            max_length=None if variadic else len(positional),
            description="Positional arguments for the rule",
            json_schema_extra={X_PARAMS_ORDER: [p.name for p in positional]},
        )


def to_pascal(s: str) -> str:
    """
    Convert a string to PascalCase.
    """
    return pascalcase(s)
