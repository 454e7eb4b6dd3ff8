"""
Fixture registration source.

Fixture classes are tagged with @seed_fixture (usually in an app's
`seed_fixtures.py` module) or listed in SEEDBED["FIXTURES"]. build_loader()
imports the tagged modules, instantiates each class exactly once and registers
the instances in a SeedFixturesLoader as one batch.

    @seed_fixture(groups=["users"])
    class AdminUserFixture:
        def load(self, context): ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from django.utils.module_loading import autodiscover_modules, import_string

from seedbed.fixtures.conf import FixtureSettings, get_fixture_settings
from seedbed.fixtures.exceptions import FixtureConfigurationError
from seedbed.fixtures.interfaces import fixture_identity
from seedbed.fixtures.loader import SeedFixturesLoader

logger = logging.getLogger(__name__)

AUTODISCOVER_MODULE = "seed_fixtures"


@dataclass
class FixtureTag:
    fixture_class: type
    groups: list[str] = field(default_factory=list)


# identity -> tag, in tagging order
_tags: dict[str, FixtureTag] = {}


def seed_fixture(cls: type | None = None, *, groups: Iterable[str] = ()) -> Any:
    """
    Class decorator tagging a fixture class for loading.

    Usable bare (`@seed_fixture`) or with groups (`@seed_fixture(groups=[...])`).
    Tagging a class again replaces its groups.
    """

    def decorator(fixture_class: type) -> type:
        if not callable(getattr(fixture_class, "load", None)):
            raise TypeError(
                f"{fixture_class.__qualname__} cannot be tagged as a seed fixture: "
                "it has no load() method"
            )
        _tags[fixture_identity(fixture_class)] = FixtureTag(fixture_class, list(groups))
        return fixture_class

    if cls is not None:
        return decorator(cls)
    return decorator


def tagged_fixtures() -> tuple[FixtureTag, ...]:
    return tuple(_tags.values())


def clear_tags() -> None:
    """Forget every tagged class. Meant for tests."""
    _tags.clear()


def collect_fixture_tags(fixture_settings: FixtureSettings) -> list[FixtureTag]:
    """
    Merge decorator tags with SEEDBED["FIXTURES"] entries.

    A class present in both keeps one entry with the union of its groups.
    """
    if fixture_settings.autodiscover:
        autodiscover_modules(AUTODISCOVER_MODULE)

    merged: dict[str, FixtureTag] = {
        identity: FixtureTag(tag.fixture_class, list(tag.groups))
        for identity, tag in _tags.items()
    }
    for entry in fixture_settings.fixtures:
        try:
            fixture_class = import_string(entry.class_path)
        except ImportError as exc:
            raise FixtureConfigurationError(
                f'Cannot import fixture class "{entry.class_path}": {exc}'
            ) from exc

        identity = fixture_identity(fixture_class)
        if identity in merged:
            known = merged[identity].groups
            known.extend(group for group in entry.groups if group not in known)
        else:
            merged[identity] = FixtureTag(fixture_class, list(entry.groups))
    return list(merged.values())


def build_loader(
    fixture_settings: FixtureSettings | None = None,
    context: Any = None,
    factory: Callable[[type], Any] | None = None,
) -> SeedFixturesLoader:
    """
    Build a SeedFixturesLoader holding one instance of every tagged fixture class.

    Args:
        fixture_settings: Validated settings (read from Django settings if None)
        context: Object pushed into legacy context-aware fixtures
        factory: Builds an instance from a class (defaults to calling it)
    """
    fixture_settings = fixture_settings or get_fixture_settings()
    factory = factory or (lambda fixture_class: fixture_class())

    tags = collect_fixture_tags(fixture_settings)
    loader = SeedFixturesLoader(context=context)
    loader.add_fixtures(
        {"fixture": factory(tag.fixture_class), "groups": tag.groups} for tag in tags
    )
    logger.info("Registered %d seed fixture(s)", len(tags))
    return loader
