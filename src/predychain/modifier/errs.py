class ModifierError(Exception):
    """Base Modifier exception."""

    ...


class AsyncPredicateError(ModifierError):
    """
    Raised when a synchronous strategy meets a predicate that returned an awaitable.
    """

    def __init__(self, predicate_name: str):
        self.predicate_name = predicate_name
        super().__init__(f"Predicate '{predicate_name}' is asynchronous, use test_async instead")


class ModifierNotSupportedError(ModifierError):
    """
    Raised when a modifier has no variant for the requested execution mode.
    """

    def __init__(self, modifier_name: str, mode: str):
        self.modifier_name = modifier_name
        self.mode = mode
        super().__init__(f"Modifier '{modifier_name}' cannot be used in {mode} mode")


class NotQuantifiableError(ModifierError, TypeError):
    """
    Raised when ``some`` or ``every`` meets a value that is not a sequence.

    A quantified rule on such a value is never satisfied, whatever modifiers surround it.
    """

    def __init__(self, modifier_name: str, value: object):
        self.modifier_name = modifier_name
        self.value = value
        super().__init__(f"Modifier '{modifier_name}' needs a sequence, got {type(value).__name__}")
