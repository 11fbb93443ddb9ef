"""Session timer: elapsed time and accumulated volume for one tracking view."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import timedelta

from homeassistant.util import dt as dt_util
from pydantic import ValidationError

from .analytics import ImpactConfig, UsageAnalyzer
from .catalog import FixtureCatalog
from .const import TICK_INTERVAL
from .exceptions import FixtureChangeError, InvalidFixtureError
from .ticker import CancelCallback, Ticker
from .types import (
    CompletedSession,
    FixtureProfile,
    FixtureSelection,
    NoFixture,
    SelectedFixture,
    TimerSnapshot,
    TimerState,
)

_LOGGER = logging.getLogger(__name__)


class SessionTimer:
    """Handles the state and tick accounting for a water usage session.

    The timer moves between idle, running and paused. While running, the
    injected ticker calls ``_tick`` once per ``tick_interval``; each tick adds
    one second and recomputes the volume from the selected fixture's flow
    rate. ``stop`` hands a ``CompletedSession`` to ``on_completed`` when any
    time was tracked, then resets the counters.
    """

    def __init__(
        self,
        catalog: FixtureCatalog,
        ticker: Ticker,
        *,
        impact_config: ImpactConfig | None = None,
        on_update: Callable[[], None] | None = None,
        on_completed: Callable[[CompletedSession], None] | None = None,
        name: str = "DropIndex",
        tick_interval: timedelta = TICK_INTERVAL,
    ) -> None:
        """Initialize the session timer."""
        self.catalog = catalog
        self.analyzer = UsageAnalyzer(impact_config)
        self.name = name

        self.state: TimerState = TimerState.IDLE
        self.elapsed_seconds: int = 0
        self.accumulated_volume: float = 0.0
        self.selection: FixtureSelection = NoFixture()

        self._ticker = ticker
        self._tick_interval = tick_interval
        self._unsub_tick: CancelCallback | None = None
        self._on_update = on_update
        self._on_completed = on_completed

    @property
    def fixture(self) -> FixtureProfile | None:
        if isinstance(self.selection, SelectedFixture):
            return self.selection.profile
        return None

    @property
    def is_active(self) -> bool:
        """True while running or paused."""
        return self.state is not TimerState.IDLE

    @property
    def is_ticking(self) -> bool:
        return self._unsub_tick is not None

    @property
    def estimated_cost(self) -> float:
        return self.analyzer.estimated_cost(self.accumulated_volume)

    @property
    def co2_equivalent(self) -> float:
        return self.analyzer.co2_equivalent(self.accumulated_volume)

    def snapshot(self) -> TimerSnapshot:
        """Return the current state as an immutable view."""
        fixture = self.fixture
        return TimerSnapshot(
            state=self.state,
            fixture_id=fixture.fixture_id if fixture else None,
            elapsed_seconds=self.elapsed_seconds,
            accumulated_volume=self.accumulated_volume,
            estimated_cost=self.estimated_cost,
            co2_equivalent=self.co2_equivalent,
        )

    def start(self, fixture_id: str | None) -> None:
        """Start or resume tracking for fixture_id.

        Raises:
            InvalidFixtureError: fixture_id is empty or not in the catalog.
            FixtureChangeError: a different fixture already has tracked time.
        """
        selection = self.catalog.resolve(fixture_id)
        if isinstance(selection, NoFixture):
            _LOGGER.warning(
                "%s: Cannot start session, fixture %r did not resolve",
                self.name,
                selection.requested_id,
            )
            raise InvalidFixtureError(selection.requested_id)

        requested = selection.profile
        active = self.fixture
        if (
            active is not None
            and self.elapsed_seconds > 0
            and active.fixture_id != requested.fixture_id
        ):
            _LOGGER.warning(
                "%s: Rejected start for %s, %s session has %s s tracked",
                self.name,
                requested.fixture_id,
                active.fixture_id,
                self.elapsed_seconds,
            )
            raise FixtureChangeError(requested.fixture_id, active.fixture_id)

        if self.state is TimerState.RUNNING and active == requested:
            _LOGGER.debug(
                "%s: Start called for %s but it is already running",
                self.name,
                requested.fixture_id,
            )
            return

        resuming = self.state is TimerState.PAUSED
        self.selection = selection
        self.state = TimerState.RUNNING
        self._schedule_tick()

        _LOGGER.info(
            "%s: %s session for %s (%.1f L/min)",
            self.name,
            "Resumed" if resuming else "Started",
            requested.fixture_id,
            requested.flow_rate,
        )
        self._notify_update()

    def pause(self) -> None:
        """Freeze the counters and stop ticking."""
        if self.state is not TimerState.RUNNING:
            _LOGGER.debug("%s: Pause ignored in state %s", self.name, self.state)
            return

        self._cancel_tick()
        self.state = TimerState.PAUSED
        _LOGGER.info(
            "%s: Paused session at %s s, %.2f L",
            self.name,
            self.elapsed_seconds,
            self.accumulated_volume,
        )
        self._notify_update()

    def stop(self) -> CompletedSession | None:
        """End the session and reset the counters.

        Returns the completed session, or None when stopped from idle or
        before any time was tracked.
        """
        if self.state is TimerState.IDLE:
            _LOGGER.debug("%s: Stop ignored, no session in progress", self.name)
            return None

        self._cancel_tick()
        self.state = TimerState.IDLE

        completed: CompletedSession | None = None
        try:
            if self.elapsed_seconds > 0:
                completed = self._build_completed_session()
            if completed is not None:
                _LOGGER.info(
                    "%s: Session saved, %.1f L of %s over %s",
                    self.name,
                    completed.volume_liters,
                    completed.fixture_id,
                    self.analyzer.format_duration(completed.duration_seconds),
                )
                if self._on_completed is not None:
                    self._on_completed(completed)
            else:
                _LOGGER.info("%s: Session stopped with nothing tracked", self.name)
        finally:
            self._reset_counters()
            self._notify_update()

        return completed

    def shutdown(self) -> None:
        """Cancel ticking on teardown. An unfinished session is discarded."""
        self._cancel_tick()
        if self.elapsed_seconds > 0:
            _LOGGER.warning(
                "%s: Discarding unfinished session (%s s, %.2f L) on shutdown",
                self.name,
                self.elapsed_seconds,
                self.accumulated_volume,
            )
        self.state = TimerState.IDLE
        self._reset_counters()
        self._notify_update()

    def _build_completed_session(self) -> CompletedSession | None:
        fixture = self.fixture
        assert fixture is not None, "tracked time without a fixture"
        try:
            return CompletedSession(
                fixture_id=fixture.fixture_id,
                fixture_name=fixture.display_name,
                duration_seconds=self.elapsed_seconds,
                volume_liters=self.accumulated_volume,
                estimated_cost=self.estimated_cost,
                co2_equivalent_kg=self.co2_equivalent,
                ended_at_utc=dt_util.utcnow(),
            )
        except ValidationError as e:
            _LOGGER.error(
                "%s: Validation error preparing completed session: %s",
                self.name,
                e,
                exc_info=True,
            )
            return None

    def _tick(self) -> None:
        """Advance a running session by one second."""
        fixture = self.fixture
        if self.state is not TimerState.RUNNING or fixture is None:
            return

        self.elapsed_seconds += 1
        assert self.elapsed_seconds > 0, "elapsed time went negative"
        # Recomputed from elapsed time so the volume never drifts from it
        self.accumulated_volume = self.elapsed_seconds * fixture.flow_rate / 60
        self._notify_update()

    def _schedule_tick(self) -> None:
        if self._unsub_tick is not None:
            return
        self._unsub_tick = self._ticker.schedule_every(self._tick_interval, self._tick)

    def _cancel_tick(self) -> None:
        if self._unsub_tick is not None:
            self._unsub_tick()
            self._unsub_tick = None

    def _reset_counters(self) -> None:
        self.elapsed_seconds = 0
        self.accumulated_volume = 0.0

    def _notify_update(self) -> None:
        if self._on_update is not None:
            self._on_update()
