from .chain import Chain, chain
from .errs import ChainError, PendingModifierError, ValidationException

__all__ = [
    "Chain",
    "ChainError",
    "PendingModifierError",
    "ValidationException",
    "chain",
]
