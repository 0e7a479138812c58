from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from predychain.rules import DEFAULT_REGISTRY_NAME
from predychain.types import ModifierName  # noqa: TC001

X_PARAMS_ORDER = "x-params-order"


class RuleSpec(BaseModel):
    """
    One rule of a declared chain.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    name: str = Field(..., description="Name of the rule in the registry")
    args: list[Any] = Field(default_factory=list, description="Positional arguments for the rule")
    modifiers: list[ModifierName] = Field(
        default_factory=list,
        description="Modifiers applied to the rule, in chain order",
    )


class SchemaRuleSpec(BaseModel):
    """
    A schema rule: each property is validated by its own nested chain.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    name: Literal["schema"] = Field("schema", description="Schema rule")
    properties: dict[str, ChainManifest] = Field(..., description="Nested chain per property")
    modifiers: list[ModifierName] = Field(
        default_factory=list,
        description="Modifiers applied to the rule, in chain order",
    )


class ChainManifest(BaseModel):
    """
    Declarative form of a chain.

    Attributes:
        registry (str): Name of the registry the rules are looked up in. Nested manifests that
            do not set it use their parent's registry.
        rules (list[SchemaRuleSpec | RuleSpec]): Rules in evaluation order.

    Examples:
        ```python
        manifest = ChainManifest.model_validate(
            {
                "rules": [
                    {"name": "number"},
                    {"name": "equal", "args": [10], "modifiers": ["not"]},
                ],
            },
        )
        ```
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    registry: str = Field(DEFAULT_REGISTRY_NAME, description="Registry containing the rules")
    rules: list[SchemaRuleSpec | RuleSpec] = Field(default_factory=list, description="Rules in evaluation order")


RuleSpecT = TypeVar("RuleSpecT")


class RegistrySchemaRuleSpec(SchemaRuleSpec, Generic[RuleSpecT]):
    """
    A schema rule whose nested chains may only use the rule specs ``RuleSpecT``.
    """

    properties: dict[str, RegistryManifest[RuleSpecT]] = Field(..., description="Nested chain per property")


class RegistryManifest(ChainManifest, Generic[RuleSpecT]):
    """
    A chain manifest restricted to the rule specs ``RuleSpecT``, at every level of nesting.
    """

    rules: list[RegistrySchemaRuleSpec[RuleSpecT] | RuleSpecT] = Field(
        default_factory=list,
        description="Rules in evaluation order",
    )


SchemaRuleSpec.model_rebuild()
ChainManifest.model_rebuild()
RegistrySchemaRuleSpec.model_rebuild()
RegistryManifest.model_rebuild()
