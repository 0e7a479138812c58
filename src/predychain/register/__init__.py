from .errs import (
    RegisterError,
    RegistryNameConflictError,
    RegistryNotFoundError,
    RuleNameReservedError,
    RuleNotFoundError,
)
from .registry import RESERVED_RULE_NAMES, GlobalRegistryManager, Registry, RegistryManager, rule_def

__all__ = [
    "RESERVED_RULE_NAMES",
    "GlobalRegistryManager",
    "RegisterError",
    "Registry",
    "RegistryManager",
    "RegistryNameConflictError",
    "RegistryNotFoundError",
    "RuleNameReservedError",
    "RuleNotFoundError",
    "rule_def",
]
