"""
Seed fixture loading for Django.

Register fixture instances, select them by group, check that every selected
fixture's dependencies are selected too, and run them in dependency order.
"""

from seedbed.fixtures.exceptions import (
    CircularDependencyError,
    FixtureConfigurationError,
    FixtureError,
    FixtureReferenceError,
    MissingDependencyError,
    UnregisteredFixtureError,
)
from seedbed.fixtures.interfaces import (
    ContextAwareFixture,
    DependentFixture,
    GroupedFixture,
    SeedFixture,
    fixture_identity,
)
from seedbed.fixtures.loader import SeedFixturesLoader, validate_dependencies
from seedbed.fixtures.registry import FixtureRegistry
from seedbed.fixtures.tagging import build_loader, seed_fixture

__all__ = [
    # Loading
    "SeedFixturesLoader",
    "FixtureRegistry",
    "build_loader",
    "seed_fixture",
    "validate_dependencies",
    "fixture_identity",
    # Capabilities
    "SeedFixture",
    "GroupedFixture",
    "DependentFixture",
    "ContextAwareFixture",
    # Exceptions
    "FixtureError",
    "UnregisteredFixtureError",
    "MissingDependencyError",
    "CircularDependencyError",
    "FixtureReferenceError",
    "FixtureConfigurationError",
]
