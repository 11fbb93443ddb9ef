# tests/e2e/test_session_lifecycle.py
from datetime import timedelta

import pytest
from homeassistant.core import HomeAssistant, callback
from homeassistant.util import dt as dt_util
from pytest_homeassistant_custom_component.common import (
    MockConfigEntry,
    async_fire_time_changed,
)

from custom_components.dropindex.const import EVENT_DROPINDEX_SESSION_COMPLETED
from custom_components.dropindex.types import TimerState


async def _fire_seconds(hass: HomeAssistant, seconds: float) -> None:
    async_fire_time_changed(hass, dt_util.utcnow() + timedelta(seconds=seconds))
    await hass.async_block_till_done()


async def test_session_ticks_on_interval(
    hass: HomeAssistant, init_integration: MockConfigEntry
):
    """The interval tracker drives the session while it runs and only then."""
    coordinator = init_integration.runtime_data
    timer = coordinator.session_timer
    events = []

    @callback
    def capture_event(event):
        events.append(event)

    hass.bus.async_listen(EVENT_DROPINDEX_SESSION_COMPLETED, capture_event)

    await coordinator.async_start_session("shower")
    assert timer.is_ticking

    await _fire_seconds(hass, 1.5)
    assert timer.elapsed_seconds >= 1
    assert timer.accumulated_volume == pytest.approx(
        timer.elapsed_seconds * 9.5 / 60
    )

    await coordinator.async_pause_session()
    assert timer.state is TimerState.PAUSED
    assert not timer.is_ticking
    paused_at = timer.elapsed_seconds

    await _fire_seconds(hass, 5)
    assert timer.elapsed_seconds == paused_at

    await coordinator.async_start_session()
    await _fire_seconds(hass, 1.5)
    assert timer.elapsed_seconds > paused_at

    completed = await coordinator.async_stop_session()
    await hass.async_block_till_done()
    assert not timer.is_ticking

    assert completed is not None
    assert len(events) == 1
    assert events[0].data["duration_seconds"] == completed.duration_seconds
    assert coordinator.volume_today == pytest.approx(completed.volume_liters)

    await _fire_seconds(hass, 5)
    assert timer.state is TimerState.IDLE
    assert timer.elapsed_seconds == 0
