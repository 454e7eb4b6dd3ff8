"""
Fixture registry and group index.

The registry owns every registered fixture instance keyed by identity, plus the
group index (group name -> identities). Both are mutated only while fixtures are
being registered; selection afterwards is read-only. Nothing here is locked:
registration is single-threaded and happens before any query.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator

from seedbed.fixtures.exceptions import UnregisteredFixtureError
from seedbed.fixtures.interfaces import declared_groups, default_group, fixture_identity

logger = logging.getLogger(__name__)


class FixtureRegistry:
    """
    Maps fixture identities to registered instances and groups to identities.

    Re-registering an identity replaces the instance and its group entries;
    the last registration wins.
    """

    def __init__(self) -> None:
        self._fixtures: dict[str, Any] = {}
        self._groups: dict[str, set[str]] = {}
        self._groups_by_identity: dict[str, set[str]] = {}

    def register(self, fixture: Any, groups: Iterable[str] = ()) -> str:
        """
        Record `fixture` with its groups and return its identity.

        The stored groups are the union of `groups`, the default group and any
        groups the fixture declares itself.
        """
        identity = fixture_identity(fixture)
        all_groups = {default_group(identity), *groups, *declared_groups(fixture)}

        if identity in self._fixtures:
            logger.debug("Replacing registered fixture %s", identity)
            self._unindex(identity)

        self._fixtures[identity] = fixture
        self._groups_by_identity[identity] = all_groups
        for group in all_groups:
            self._groups.setdefault(group, set()).add(identity)
        return identity

    def _unindex(self, identity: str) -> None:
        for group in self._groups_by_identity.pop(identity, set()):
            members = self._groups.get(group)
            if members is None:
                continue
            members.discard(identity)
            if not members:
                del self._groups[group]

    def resolve(self, identity: str) -> Any:
        """
        Return the registered instance for `identity`.

        Never instantiates anything: an unknown identity raises
        UnregisteredFixtureError.
        """
        try:
            return self._fixtures[identity]
        except KeyError:
            raise UnregisteredFixtureError(identity) from None

    def identities_in(self, groups: Iterable[str]) -> set[str]:
        """Identities registered under at least one of `groups`."""
        matched: set[str] = set()
        for group in groups:
            matched |= self._groups.get(group, set())
        return matched

    def groups_of(self, identity: str) -> frozenset[str]:
        return frozenset(self._groups_by_identity.get(identity, ()))

    def groups(self) -> tuple[str, ...]:
        return tuple(sorted(self._groups))

    def __contains__(self, identity: object) -> bool:
        return identity in self._fixtures

    def __len__(self) -> int:
        return len(self._fixtures)

    def __iter__(self) -> Iterator[str]:
        return iter(self._fixtures)
