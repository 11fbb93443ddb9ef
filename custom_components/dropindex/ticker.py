"""Periodic tick sources for the session timer."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Protocol

from homeassistant.core import CALLBACK_TYPE, HomeAssistant, callback
from homeassistant.helpers.event import async_track_time_interval

CancelCallback = Callable[[], None]


class Ticker(Protocol):
    """Scheduling capability the session timer depends on."""

    def schedule_every(
        self, interval: timedelta, action: Callable[[], None]
    ) -> CancelCallback:
        """Call action once per interval until the returned callback is called."""


class HassTicker:
    """Ticker backed by Home Assistant's time interval tracker."""

    def __init__(self, hass: HomeAssistant, name: str) -> None:
        self.hass = hass
        self.name = name

    def schedule_every(
        self, interval: timedelta, action: Callable[[], None]
    ) -> CALLBACK_TYPE:
        @callback
        def _fire(now: datetime) -> None:
            action()

        return async_track_time_interval(
            self.hass,
            _fire,
            interval,
            name=f"{self.name} session tick",
            cancel_on_shutdown=True,
        )
