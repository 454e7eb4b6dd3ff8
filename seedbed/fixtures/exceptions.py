"""
Exceptions raised while registering, selecting and loading seed fixtures.

Every error here is fatal for the current load: nothing is caught or retried
inside seedbed.fixtures. The load_fixtures command turns them into CommandError.
"""

from __future__ import annotations


class FixtureError(Exception):
    """Base exception for seed fixture errors."""


class UnregisteredFixtureError(FixtureError, LookupError):
    """
    Raised when a fixture identity is looked up but was never registered.

    Fixtures are registered instances, never classes to build on demand, so a
    dependency on an unregistered class cannot be satisfied.
    """

    def __init__(self, identity: str):
        self.identity = identity
        super().__init__(
            f'The "{identity}" fixture class is trying to be loaded, but is not '
            "available. Make sure this class is decorated with @seed_fixture or "
            'listed in SEEDBED["FIXTURES"].'
        )


class MissingDependencyError(FixtureError):
    """Raised when a selected fixture depends on a fixture outside the selection."""

    def __init__(self, dependent: str, missing: str):
        self.dependent = dependent
        self.missing = missing
        super().__init__(
            f'Fixture "{missing}" was declared as a dependency for fixture '
            f'"{dependent}", but it was not included in any of the loaded '
            "fixture groups."
        )


class CircularDependencyError(FixtureError):
    """Raised when fixture dependencies form a cycle."""

    def __init__(self, cycle: list[str]):
        self.cycle = list(cycle)
        super().__init__(
            "Circular fixture dependency detected: " + " -> ".join(self.cycle)
        )


class FixtureReferenceError(FixtureError, KeyError):
    """Raised when a fixture asks for a reference nobody added."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Reference to "{name}" does not exist')

    def __str__(self) -> str:
        return self.args[0]


class FixtureConfigurationError(FixtureError):
    """Raised for an invalid SEEDBED setting or an unimportable fixture path."""

    pass
