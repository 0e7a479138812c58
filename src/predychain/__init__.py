from .chain import Chain, ChainError, PendingModifierError, ValidationException, chain
from .manifest import ChainLoader, ChainManifest, RuleSpec, SchemaGenerator, SchemaRuleSpec
from .modifier import EVERY, NOT, SOME, Modifier, Outcome
from .register import GlobalRegistryManager, Registry, RegistryManager, rule_def
from .rule import Rule
from .rules import NestedValidationError, clear_custom_rules, default_registry, extend
from .types import DualPredicate

__all__ = [
    "EVERY",
    "NOT",
    "SOME",
    "Chain",
    "ChainError",
    "ChainLoader",
    "ChainManifest",
    "DualPredicate",
    "GlobalRegistryManager",
    "Modifier",
    "NestedValidationError",
    "Outcome",
    "PendingModifierError",
    "Registry",
    "RegistryManager",
    "Rule",
    "RuleSpec",
    "SchemaGenerator",
    "SchemaRuleSpec",
    "ValidationException",
    "chain",
    "clear_custom_rules",
    "default_registry",
    "extend",
    "rule_def",
]
