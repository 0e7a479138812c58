from collections.abc import Collection


class RegisterError(Exception):
    """Base class for exceptions in this module."""

    ...


class RuleDefNotNamedError(RegisterError):
    """Raised when a rule definition has no usable name."""

    def __init__(self):
        super().__init__("RuleDef must have a name.")


class RegistryNameConflictError(RegisterError):
    """
    Raised when attempting to add a registry under a name that is already in use.
    """

    def __init__(self, conflict_register_name: str, added_register: Collection[str]):
        """
        Args:
            conflict_register_name: conflict registry name.
            added_register: rules of the registry already added under that name.
        """
        self.conflict_register_name = conflict_register_name
        self.added_register = added_register

        super().__init__(f"{self.conflict_register_name} was added in: {', '.join(self.added_register)}")


class RegistryNotFoundError(RegisterError):
    """Raised when attempting to get a registry that does not exist."""

    def __init__(self, registry_name: str):
        self.registry_name = registry_name
        super().__init__(f"Registry '{self.registry_name}' not found")


class RuleNotFoundError(RegisterError, AttributeError):
    """
    Raised when a chain asks for a rule the registry does not know.

    Also an ``AttributeError``, so ``hasattr(chain(), "unknown")`` is False.
    """

    def __init__(self, rule_name: str, registry_name: str | None = None):
        self.rule_name = rule_name
        self.registry_name = registry_name
        where = f" in registry '{registry_name}'" if registry_name else ""
        super().__init__(f"Rule '{self.rule_name}' not found{where}")


class RuleNameReservedError(RegisterError, ValueError):
    """Raised when a rule would be registered under a name that chains use for themselves."""

    def __init__(self, rule_name: str, registry_name: str):
        self.rule_name = rule_name
        self.registry_name = registry_name
        super().__init__(f"Rule name '{rule_name}' is reserved by Chain (registry '{registry_name}')")
