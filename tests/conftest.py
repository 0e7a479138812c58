"""
Shared fixtures for predychain tests.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import pytest

from predychain import Registry, RegistryManager, clear_custom_rules

# ============================================================================
# Async rules
# ============================================================================


@dataclass
class CallLog:
    """Records when async predicates start and settle."""

    events: list[str] = field(default_factory=list)

    def started(self, name: str) -> None:
        self.events.append(f"start:{name}")

    def settled(self, name: str) -> None:
        self.events.append(f"end:{name}")


def make_async_rule(log: CallLog | None = None):
    """
    Rule factory ``async_rule(expected, delay=0.01, name=None)`` whose predicate sleeps before
    comparing the value with ``expected`` (or checking membership when it is a list).
    """

    def async_rule(expected, delay: float = 0.01, name: str | None = None):
        label = name or str(expected)

        async def check(value) -> bool:
            if log is not None:
                log.started(label)
            await asyncio.sleep(delay)
            if log is not None:
                log.settled(label)
            if isinstance(expected, list):
                return value in expected
            return value == expected

        return check

    return async_rule


def failing_async_rule(exc: Exception):
    async def check(_value) -> bool:
        await asyncio.sleep(0)
        raise exc

    return check


# ============================================================================
# Registry Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _clean_default_registry():
    """Custom rules never leak between tests."""
    clear_custom_rules()
    yield
    clear_custom_rules()


@pytest.fixture
def registry_manager() -> RegistryManager:
    """Provides a fresh RegistryManager instance."""
    return RegistryManager()


@pytest.fixture
def user_registry(registry_manager: RegistryManager) -> Registry:
    """Provides a registry with a couple of user rules and no built-ins."""
    registry = Registry("user_registry", _manager=registry_manager)

    @registry.rule_def()
    def adult(user: dict, min_age: int = 18) -> bool:
        """Check if user is at least min_age years old."""
        return user["age"] >= min_age

    @registry.rule_def()
    def active(user: dict) -> bool:
        """Check if user is active."""
        return user["active"]

    return registry


@pytest.fixture
def call_log() -> CallLog:
    return CallLog()


# ============================================================================
# Sample values
# ============================================================================


@pytest.fixture
def adult_user() -> dict:
    """Provides an adult active user."""
    return {"age": 25, "active": True, "name": "Alice"}


@pytest.fixture
def minor_user() -> dict:
    """Provides a minor inactive user."""
    return {"age": 16, "active": False, "name": "Bob"}
