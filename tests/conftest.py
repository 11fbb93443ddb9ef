# tests/conftest.py
from collections.abc import Callable
from datetime import timedelta

import pytest
from homeassistant.config_entries import ConfigEntryState
from homeassistant.const import CONF_NAME
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.dropindex.catalog import FixtureCatalog
from custom_components.dropindex.const import DEFAULT_FIXTURES, DOMAIN


class ManualTicker:
    """Ticker driven by the test instead of the wall clock."""

    def __init__(self) -> None:
        self._actions: dict[object, Callable[[], None]] = {}
        self.intervals: list[timedelta] = []
        self.cancelled = 0

    def schedule_every(
        self, interval: timedelta, action: Callable[[], None]
    ) -> Callable[[], None]:
        token = object()
        self._actions[token] = action
        self.intervals.append(interval)

        def cancel() -> None:
            if self._actions.pop(token, None) is not None:
                self.cancelled += 1

        return cancel

    @property
    def scheduled(self) -> int:
        return len(self.intervals)

    @property
    def active(self) -> int:
        return len(self._actions)

    def advance(self, ticks: int = 1) -> None:
        """Fire every active action once per tick."""
        for _ in range(ticks):
            for action in list(self._actions.values()):
                action()


@pytest.fixture
def manual_ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture
def catalog() -> FixtureCatalog:
    return FixtureCatalog.from_dicts(DEFAULT_FIXTURES)


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Create a mock config entry."""
    return MockConfigEntry(
        domain=DOMAIN,
        title="Home",
        data={CONF_NAME: "Home"},
        unique_id=DOMAIN,
    )


@pytest.fixture
async def init_integration(
    hass: HomeAssistant, enable_custom_integrations: None, mock_config_entry
) -> MockConfigEntry:
    """Set up the DropIndex integration for testing."""
    mock_config_entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
    await hass.async_block_till_done()

    yield mock_config_entry

    # Unloading cancels any session tick still scheduled
    if mock_config_entry.state is ConfigEntryState.LOADED:
        assert await hass.config_entries.async_unload(mock_config_entry.entry_id)
        await hass.async_block_till_done()
