"""
Group-aware seed fixture loader.

SeedFixturesLoader combines the FixtureRegistry (instances + group index) with
the base Loader (dependency ordering). The registry's non-constructing
`resolve` is injected as the base loader's resolver, so a dependency on a
fixture that was never registered fails instead of being built.

Usage:
    loader = SeedFixturesLoader()
    loader.add_fixtures([(UserFixture(), ["users"]), (PostFixture(), ["posts"])])
    fixtures = loader.get_fixtures({"users"})
"""

from __future__ import annotations

import logging
import warnings
from typing import Any, Iterable, Mapping

from seedbed.fixtures.base import Loader
from seedbed.fixtures.exceptions import MissingDependencyError
from seedbed.fixtures.interfaces import (
    ContextAwareFixture,
    declared_dependencies,
    fixture_identity,
)
from seedbed.fixtures.registry import FixtureRegistry

logger = logging.getLogger(__name__)

# Fixture classes already warned about, so the deprecation fires once per class.
_context_aware_warned: set[str] = set()


class SeedFixturesLoader:
    """Registers seed fixtures and returns validated, group-filtered selections."""

    def __init__(self, context: Any = None):
        self.context = context
        self.registry = FixtureRegistry()
        self._loader = Loader(resolver=self.registry.resolve)

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def add_fixtures(self, entries: Iterable[Any]) -> None:
        """
        Register a batch of (fixture, groups) pairs.

        Entries may also be mappings with "fixture" and "groups" keys. Every
        fixture is recorded before any is ordered: ordering may resolve a
        dependency that appears later in the same batch.
        """
        identities = []
        for entry in entries:
            fixture, groups = _unpack_entry(entry)
            identities.append(self.registry.register(fixture, groups))

        for identity in dict.fromkeys(identities):
            self._add(self.registry.resolve(identity))

    def add_fixture(self, fixture: Any) -> None:
        """Register a single fixture under its default and declared groups."""
        self.registry.register(fixture)
        self._add(fixture)

    def _add(self, fixture: Any) -> None:
        if isinstance(fixture, ContextAwareFixture):
            _warn_context_aware(fixture)
            fixture.set_context(self.context)
        self._loader.add_fixture(fixture)

    # =========================================================================
    # SELECTION
    # =========================================================================

    def select(self, groups: Iterable[str] = ()) -> list[Any]:
        """
        Return registered fixtures in dependency order, filtered by `groups`.

        With no groups every fixture is returned. Otherwise a fixture is kept
        when it belongs to at least one requested group; it appears once.
        """
        fixtures = self._loader.get_fixtures()
        requested = set(groups)
        if not requested:
            return fixtures

        matched = self.registry.identities_in(requested)
        selected: dict[str, Any] = {}
        for fixture in fixtures:
            identity = fixture_identity(fixture)
            if identity in matched:
                selected[identity] = fixture
        return list(selected.values())

    def get_fixtures(self, groups: Iterable[str] = ()) -> list[Any]:
        """Return the fixtures to execute for `groups` after checking dependencies."""
        requested = set(groups)
        fixtures = self.select(requested)
        if requested:
            validate_dependencies(fixtures)
        logger.debug(
            "Selected %d fixture(s) for groups %s",
            len(fixtures),
            sorted(requested) or "<all>",
        )
        return fixtures


def validate_dependencies(selection: Iterable[Any]) -> None:
    """
    Check that every dependency of a selected fixture is selected too.

    Raises MissingDependencyError for the first missing dependency found.
    """
    by_identity = {fixture_identity(fixture): fixture for fixture in selection}
    for identity, fixture in by_identity.items():
        for dependency in declared_dependencies(fixture):
            if dependency not in by_identity:
                raise MissingDependencyError(dependent=identity, missing=dependency)


def _unpack_entry(entry: Any) -> tuple[Any, list[str]]:
    if isinstance(entry, Mapping):
        return entry["fixture"], list(entry.get("groups", ()))
    fixture, groups = entry
    return fixture, list(groups)


def _warn_context_aware(fixture: Any) -> None:
    identity = fixture_identity(fixture)
    if identity in _context_aware_warned:
        return
    _context_aware_warned.add(identity)
    message = (
        f'Implementing "set_context" on fixture "{identity}" is deprecated, '
        "pass dependencies through the fixture constructor or use the "
        "FixtureContext given to load() instead."
    )
    logger.warning(message)
    warnings.warn(message, DeprecationWarning, stacklevel=3)
