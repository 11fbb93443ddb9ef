"""Fixture catalog: the static mapping from fixture id to flow profile."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from .exceptions import CatalogError
from .types import FixtureProfile, FixtureSelection, NoFixture, SelectedFixture

_LOGGER = logging.getLogger(__name__)


class FixtureCatalog:
    """Read-only lookup of fixture profiles by id."""

    def __init__(self, profiles: Iterable[FixtureProfile]) -> None:
        """Initialize the catalog. Duplicate ids are rejected."""
        self._profiles: dict[str, FixtureProfile] = {}
        for profile in profiles:
            if profile.fixture_id in self._profiles:
                raise CatalogError(f"Duplicate fixture id: {profile.fixture_id}")
            self._profiles[profile.fixture_id] = profile

    @classmethod
    def from_dicts(cls, raw_profiles: Iterable[Mapping[str, Any]]) -> FixtureCatalog:
        """Build a catalog from raw configuration mappings."""
        try:
            profiles = [FixtureProfile(**dict(raw)) for raw in raw_profiles]
        except ValidationError as err:
            raise CatalogError(f"Invalid fixture definition: {err}") from err
        return cls(profiles)

    def lookup(self, fixture_id: str | None) -> FixtureProfile | None:
        """Return the profile for fixture_id, or None when it is not found."""
        if not fixture_id:
            return None
        return self._profiles.get(fixture_id)

    def resolve(self, fixture_id: str | None) -> FixtureSelection:
        """Resolve fixture_id to an explicit selection."""
        profile = self.lookup(fixture_id)
        if profile is None:
            return NoFixture(requested_id=fixture_id or None)
        return SelectedFixture(profile=profile)

    def flow_rate_for(self, fixture_id: str | None) -> float:
        """Return the flow rate in L/min, 0.0 for an unknown fixture."""
        profile = self.lookup(fixture_id)
        if profile is None:
            _LOGGER.debug("No flow rate for fixture %s, using 0.0", fixture_id)
            return 0.0
        return profile.flow_rate

    @property
    def fixture_ids(self) -> list[str]:
        return list(self._profiles)

    def __contains__(self, fixture_id: object) -> bool:
        return fixture_id in self._profiles

    def __iter__(self) -> Iterator[FixtureProfile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)
