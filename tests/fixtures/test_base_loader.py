"""
Unit tests for the base dependency-ordering Loader.

All tests marked @pytest.mark.unit - no DB required.
"""

import pytest

from seedbed.fixtures.base import Loader
from seedbed.fixtures.exceptions import CircularDependencyError, UnregisteredFixtureError
from seedbed.fixtures.interfaces import fixture_identity


class Base:
    def load(self, context):
        pass


class Other:
    def load(self, context):
        pass


class Middle:
    def get_dependencies(self):
        return [Base]

    def load(self, context):
        pass


class Top:
    def get_dependencies(self):
        return [Middle, Base]

    def load(self, context):
        pass


class Loop:
    def get_dependencies(self):
        return [LoopPartner]

    def load(self, context):
        pass


class LoopPartner:
    def get_dependencies(self):
        return [Loop]

    def load(self, context):
        pass


class SelfLoop:
    def get_dependencies(self):
        return [SelfLoop]

    def load(self, context):
        pass


def _resolver_for(*fixtures):
    known = {fixture_identity(f): f for f in fixtures}
    calls = []

    def resolve(identity):
        calls.append(identity)
        if identity not in known:
            raise UnregisteredFixtureError(identity)
        return known[identity]

    resolve.calls = calls
    return resolve


def _names(fixtures):
    return [type(f).__name__ for f in fixtures]


@pytest.mark.unit
class TestOrdering:
    def test_dependencies_come_first(self):
        loader = Loader(resolver=_resolver_for(Base(), Middle()))
        loader.add_fixture(Top())

        assert _names(loader.get_fixtures()) == ["Base", "Middle", "Top"]

    def test_independent_fixtures_keep_insertion_order(self):
        loader = Loader(resolver=_resolver_for())
        loader.add_fixture(Other())
        loader.add_fixture(Base())

        assert _names(loader.get_fixtures()) == ["Other", "Base"]

    def test_ordering_is_deterministic(self):
        def build():
            loader = Loader(resolver=_resolver_for(Base(), Middle()))
            loader.add_fixture(Top())
            return _names(loader.get_fixtures())

        assert build() == build()


@pytest.mark.unit
class TestResolver:
    def test_missing_dependencies_come_from_resolver(self):
        base, middle = Base(), Middle()
        resolve = _resolver_for(base, middle)
        loader = Loader(resolver=resolve)
        loader.add_fixture(Top())

        assert resolve.calls == [fixture_identity(Middle), fixture_identity(Base)]
        assert loader.get_fixture(fixture_identity(Base)) is base
        assert loader.has_fixture(Middle)

    def test_known_dependencies_skip_resolver(self):
        resolve = _resolver_for()
        loader = Loader(resolver=resolve)
        loader.add_fixture(Base())
        loader.add_fixture(Middle())

        assert resolve.calls == []

    def test_resolver_failure_propagates(self):
        loader = Loader(resolver=_resolver_for())
        with pytest.raises(UnregisteredFixtureError) as excinfo:
            loader.add_fixture(Middle())
        assert excinfo.value.identity == fixture_identity(Base)

    def test_readding_identity_replaces_instance(self):
        loader = Loader(resolver=_resolver_for())
        first, second = Base(), Base()
        loader.add_fixture(first)
        loader.add_fixture(second)

        assert loader.get_fixtures() == [second]

    def test_get_fixture_unknown_identity(self):
        with pytest.raises(UnregisteredFixtureError):
            Loader(resolver=_resolver_for()).get_fixture("x.Unknown")


@pytest.mark.unit
class TestCycles:
    def test_cycle_detected_when_ordering(self):
        loader = Loader(resolver=_resolver_for(LoopPartner()))
        loader.add_fixture(Loop())

        with pytest.raises(CircularDependencyError) as excinfo:
            loader.get_fixtures()

        assert excinfo.value.cycle == [
            fixture_identity(Loop),
            fixture_identity(LoopPartner),
            fixture_identity(Loop),
        ]

    def test_self_dependency_rejected(self):
        loader = Loader(resolver=_resolver_for())
        with pytest.raises(CircularDependencyError):
            loader.add_fixture(SelfLoop())
