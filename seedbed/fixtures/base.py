"""
Base fixture loader: collects fixtures and orders them by dependency.

Dependencies that were not added explicitly are obtained through the injected
`resolver`, a callable mapping an identity to a fixture instance. The loader
never imports or instantiates fixture classes on its own.
"""

from __future__ import annotations

from typing import Any, Callable

from seedbed.fixtures.exceptions import CircularDependencyError, UnregisteredFixtureError
from seedbed.fixtures.interfaces import declared_dependencies, fixture_identity

Resolver = Callable[[str], Any]


class Loader:
    """Holds fixtures by identity and yields them dependencies-first."""

    def __init__(self, resolver: Resolver):
        self._resolve = resolver
        self._fixtures: dict[str, Any] = {}

    def add_fixture(self, fixture: Any) -> None:
        identity = fixture_identity(fixture)
        # Replacing keeps the original position in the ordering.
        self._fixtures[identity] = fixture

        for dependency in declared_dependencies(fixture):
            if dependency == identity:
                raise CircularDependencyError([identity, identity])
            if dependency not in self._fixtures:
                self.add_fixture(self._resolve(dependency))

    def has_fixture(self, fixture: Any) -> bool:
        return fixture_identity(fixture) in self._fixtures

    def get_fixture(self, identity: str) -> Any:
        try:
            return self._fixtures[identity]
        except KeyError:
            raise UnregisteredFixtureError(identity) from None

    def get_fixtures(self) -> list[Any]:
        """
        Return every fixture, each after all of its dependencies.

        Ties keep insertion order, and dependencies are visited in the order the
        fixture declares them, so the result is deterministic.
        """
        ordered: dict[str, Any] = {}
        visiting: list[str] = []

        def visit(identity: str) -> None:
            if identity in ordered:
                return
            if identity in visiting:
                start = visiting.index(identity)
                raise CircularDependencyError(visiting[start:] + [identity])

            fixture = self.get_fixture(identity)
            visiting.append(identity)
            for dependency in declared_dependencies(fixture):
                visit(dependency)
            visiting.pop()
            ordered[identity] = fixture

        for identity in self._fixtures:
            visit(identity)
        return list(ordered.values())
