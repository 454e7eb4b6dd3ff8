"""
Fixture capability protocols.

A seed fixture is any object with a `load(context)` method. The optional
capabilities below are probed with isinstance() against runtime-checkable
protocols; a fixture class implements zero or more of them:

- GroupedFixture: declares extra group names (class level)
- DependentFixture: declares fixtures that must be loaded first
- ContextAwareFixture: legacy hook receiving the loader context (deprecated)

Identities are the fully qualified class name, e.g.
"myapp.seed_fixtures.UserFixture". The implicit default group of a fixture is
the last dotted segment of its identity ("UserFixture").
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from seedbed.fixtures.executor import FixtureContext


@runtime_checkable
class SeedFixture(Protocol):
    """A unit of seed data."""

    def load(self, context: "FixtureContext") -> None:
        """Write the fixture's rows using `context.using`."""
        ...


@runtime_checkable
class GroupedFixture(Protocol):
    """Fixture that belongs to groups besides its default one."""

    @classmethod
    def get_groups(cls) -> Iterable[str]: ...


@runtime_checkable
class DependentFixture(Protocol):
    """Fixture that requires other fixtures in the same load."""

    def get_dependencies(self) -> Iterable[type | str]:
        """Return fixture classes (or their identities) this fixture needs."""
        ...


@runtime_checkable
class ContextAwareFixture(Protocol):
    """
    Legacy hook: the loader pushes its context into the fixture on registration.

    Deprecated. Pass what a fixture needs through its constructor, or read it
    from the FixtureContext given to load().
    """

    def set_context(self, context: Any) -> None: ...


def fixture_identity(fixture: Any) -> str:
    """
    Return the identity for a fixture instance, a fixture class or an identity string.

    >>> fixture_identity("app.seed_fixtures.UserFixture")
    'app.seed_fixtures.UserFixture'
    """
    if isinstance(fixture, str):
        return fixture
    cls = fixture if isinstance(fixture, type) else type(fixture)
    return f"{cls.__module__}.{cls.__qualname__}"


def default_group(identity: str) -> str:
    """Short name of an identity: its final dotted segment."""
    return identity.rsplit(".", 1)[-1]


def declared_groups(fixture: Any) -> list[str]:
    """Groups a fixture declares through GroupedFixture, or []."""
    if isinstance(fixture, GroupedFixture):
        return [str(group) for group in fixture.get_groups()]
    return []


def declared_dependencies(fixture: Any) -> list[str]:
    """Identities a fixture depends on, in declaration order, or []."""
    if isinstance(fixture, DependentFixture):
        return [fixture_identity(dep) for dep in fixture.get_dependencies()]
    return []
