"""
Named references shared between fixtures during one load.

A fixture stores what it created (`add_reference("admin-user", user)`) and a
fixture that depends on it reads it back (`get_reference("admin-user")`).
The repository lives for a single load run and is never persisted.
"""

from __future__ import annotations

from typing import Any

from seedbed.fixtures.exceptions import FixtureError, FixtureReferenceError


class ReferenceRepository:
    def __init__(self) -> None:
        self._references: dict[str, Any] = {}

    def add_reference(self, name: str, obj: Any) -> None:
        """Store `obj` under `name`; a name can only be added once."""
        if name in self._references:
            raise FixtureError(
                f'Reference to "{name}" already exists, use set_reference() to overwrite it'
            )
        self._references[name] = obj

    def set_reference(self, name: str, obj: Any) -> None:
        self._references[name] = obj

    def get_reference(self, name: str) -> Any:
        try:
            return self._references[name]
        except KeyError:
            raise FixtureReferenceError(name) from None

    def has_reference(self, name: str) -> bool:
        return name in self._references

    def names(self) -> tuple[str, ...]:
        return tuple(self._references)
