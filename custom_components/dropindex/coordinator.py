"""Data update coordinator and central hub for the DropIndex integration.

Owns the fixture catalog and the session timer, keeps today's usage tally,
translates domain errors for service callers and provides data to entities.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TypeAlias

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, ServiceCall, callback
from homeassistant.exceptions import ServiceValidationError
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator
from homeassistant.util import dt as dt_util

from .analytics import ImpactConfig, UsageAnalyzer
from .catalog import FixtureCatalog
from .const import (
    ATTR_FIXTURE_ID,
    DEFAULT_FIXTURES,
    DOMAIN,
    EVENT_DROPINDEX_SESSION_COMPLETED,
    DropIndexConfig,
)
from .exceptions import FixtureChangeError, InvalidFixtureError
from .session_timer import SessionTimer
from .ticker import HassTicker
from .types import CompletedSession

_LOGGER = logging.getLogger(__name__)

# Type alias for the config entry specific to this integration
DropIndexConfigEntry: TypeAlias = ConfigEntry["DropIndexCoordinator"]


class DropIndexCoordinator(DataUpdateCoordinator[None]):
    """Manages the session timer and integration data.

    This coordinator handles:
    - Session control (start/pause/stop) on behalf of services and buttons.
    - Fixture selection.
    - Dispatching completed sessions to the event bus.
    - Today's in-memory usage tally.
    - Providing data updates to registered listeners (entities).
    """

    config_entry: DropIndexConfigEntry

    def __init__(
        self,
        hass: HomeAssistant,
        entry: DropIndexConfigEntry,
        catalog: FixtureCatalog | None = None,
    ) -> None:
        """Initialize coordinator."""
        super().__init__(
            hass,
            _LOGGER,
            name=f"DropIndex {entry.title}",
            update_interval=None,  # Push-based, entities follow the timer
            config_entry=entry,
        )

        self.dropindex_config: DropIndexConfig = DropIndexConfig.from_config_entry(
            entry
        )
        self.catalog = catalog or FixtureCatalog.from_dicts(DEFAULT_FIXTURES)
        impact_config = self._impact_config()
        self.analyzer = UsageAnalyzer(impact_config)
        self.session_timer = SessionTimer(
            self.catalog,
            HassTicker(hass, self.name),
            impact_config=impact_config,
            on_update=self.async_update_listeners,
            on_completed=self._handle_session_completed,
            name=self.name,
        )

        self.selected_fixture_id: str | None = None
        self.last_session: CompletedSession | None = None

        self._usage_date: date = dt_util.now().date()
        self._completed_volume_today: float = 0.0
        self._sessions_today: int = 0

    async def _async_update_data(self) -> None:
        """Nothing to poll; state is pushed by the session timer."""
        return None

    def _impact_config(self) -> ImpactConfig:
        return ImpactConfig(
            cost_per_liter=self.dropindex_config.cost_per_liter,
            co2_kg_per_liter=self.dropindex_config.co2_kg_per_liter,
        )

    def _load_options(self) -> None:
        """Apply the entry options to the running coordinator.

        The session in progress and today's tally are kept; only the
        factors and the goal change.
        """
        self.dropindex_config = DropIndexConfig.from_config_entry(self.config_entry)
        impact_config = self._impact_config()
        self.analyzer.config = impact_config
        self.session_timer.analyzer.config = impact_config
        _LOGGER.debug(
            "%s: Reloaded options into self.dropindex_config: %s",
            self.name,
            self.dropindex_config,
        )

    async def _options_update_callback(
        self, hass: HomeAssistant, entry: DropIndexConfigEntry
    ) -> None:
        """Handle options update."""
        _LOGGER.debug("%s: Options update callback triggered.", self.name)
        self._load_options()
        self.async_update_listeners()

    def _roll_daily_tally(self) -> None:
        today = dt_util.now().date()
        if today != self._usage_date:
            _LOGGER.debug(
                "%s: New day, resetting usage tally (%.1f L over %s sessions on %s)",
                self.name,
                self._completed_volume_today,
                self._sessions_today,
                self._usage_date,
            )
            self._usage_date = today
            self._completed_volume_today = 0.0
            self._sessions_today = 0

    @property
    def volume_today(self) -> float:
        """Litres used today, including the session in progress."""
        self._roll_daily_tally()
        return self._completed_volume_today + self.session_timer.accumulated_volume

    @property
    def sessions_today(self) -> int:
        self._roll_daily_tally()
        return self._sessions_today

    @property
    def daily_goal_progress(self) -> float:
        return self.analyzer.goal_progress(
            self.volume_today, self.dropindex_config.daily_goal_liters
        )

    @property
    def daily_goal_status(self) -> str:
        return self.analyzer.goal_status(
            self.volume_today, self.dropindex_config.daily_goal_liters
        )

    @property
    def selected_flow_rate(self) -> float:
        active = self.session_timer.fixture
        if self.session_timer.is_active and active is not None:
            return active.flow_rate
        return self.catalog.flow_rate_for(self.selected_fixture_id)

    @callback
    def _handle_session_completed(self, session: CompletedSession) -> None:
        """Record a completed session and fire it on the event bus."""
        self._roll_daily_tally()
        self._completed_volume_today += session.volume_liters
        self._sessions_today += 1
        self.last_session = session

        event_data = session.model_dump(mode="json")
        event_data["entry_id"] = self.config_entry.entry_id
        self.hass.bus.async_fire(EVENT_DROPINDEX_SESSION_COMPLETED, event_data)
        _LOGGER.debug(
            "%s: Fired %s event with data: %s",
            self.name,
            EVENT_DROPINDEX_SESSION_COMPLETED,
            event_data,
        )

    async def async_select_fixture(self, fixture_id: str) -> None:
        """Select the fixture used by the next start."""
        if fixture_id not in self.catalog:
            raise ServiceValidationError(
                translation_domain=DOMAIN,
                translation_key="invalid_fixture",
                translation_placeholders={"fixture_id": fixture_id},
            )
        active = self.session_timer.fixture
        # Locked for the whole session, paused or not yet ticked included
        if (
            self.session_timer.is_active
            and active is not None
            and active.fixture_id != fixture_id
        ):
            _LOGGER.warning(
                "%s: Cannot select %s while a %s session is in progress",
                self.name,
                fixture_id,
                active.fixture_id,
            )
            raise ServiceValidationError(
                translation_domain=DOMAIN,
                translation_key="session_in_progress",
                translation_placeholders={"fixture_id": active.fixture_id},
            )
        _LOGGER.debug("%s: Selected fixture %s", self.name, fixture_id)
        self.selected_fixture_id = fixture_id
        self.async_update_listeners()

    async def async_start_session(self, fixture_id: str | None = None) -> None:
        """Start or resume a session, defaulting to the selected fixture."""
        fixture_id = fixture_id or self.selected_fixture_id
        try:
            self.session_timer.start(fixture_id)
        except FixtureChangeError as err:
            raise ServiceValidationError(
                translation_domain=DOMAIN,
                translation_key="session_in_progress",
                translation_placeholders={"fixture_id": err.active_fixture_id},
            ) from err
        except InvalidFixtureError as err:
            if not err.fixture_id:
                raise ServiceValidationError(
                    translation_domain=DOMAIN,
                    translation_key="no_fixture_selected",
                ) from err
            raise ServiceValidationError(
                translation_domain=DOMAIN,
                translation_key="invalid_fixture",
                translation_placeholders={"fixture_id": err.fixture_id},
            ) from err
        self.selected_fixture_id = self.session_timer.fixture.fixture_id  # type: ignore[union-attr]

    async def async_pause_session(self) -> None:
        self.session_timer.pause()

    async def async_stop_session(self) -> CompletedSession | None:
        return self.session_timer.stop()

    # Service call handlers
    async def async_start_session_service(self, call: ServiceCall) -> None:
        """Service call to start or resume a session via HA."""
        _LOGGER.info("%s: HA service starting session.", self.name)
        await self.async_start_session(call.data.get(ATTR_FIXTURE_ID))

    async def async_pause_session_service(self, call: ServiceCall) -> None:
        """Service call to pause the current session via HA."""
        await self.async_pause_session()

    async def async_stop_session_service(self, call: ServiceCall) -> None:
        """Service call to stop the current session via HA."""
        if not self.session_timer.is_active:
            _LOGGER.warning(
                "%s: Stop session service called, but no session is active.",
                self.name,
            )
            return
        _LOGGER.info("%s: HA service stopping session.", self.name)
        await self.async_stop_session()

    async def async_select_fixture_service(self, call: ServiceCall) -> None:
        """Service call to select the fixture via HA."""
        await self.async_select_fixture(call.data[ATTR_FIXTURE_ID])

    async def async_close(self) -> None:
        """Cancel the session tick and release coordinator resources."""
        _LOGGER.debug("Closing DropIndexCoordinator resources for %s", self.name)
        self.session_timer.shutdown()
        await super().async_shutdown()
