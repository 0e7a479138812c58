from .base import ChainManifest, RegistryManifest, RegistrySchemaRuleSpec, RuleSpec, SchemaRuleSpec
from .loader import ChainLoader
from .schema import SchemaGenerator

__all__ = [
    "ChainLoader",
    "ChainManifest",
    "RegistryManifest",
    "RegistrySchemaRuleSpec",
    "RuleSpec",
    "SchemaGenerator",
    "SchemaRuleSpec",
]
