"""Binary sensor platform for DropIndex."""

from collections.abc import Callable
from dataclasses import dataclass

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
    BinarySensorEntityDescription,
)
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .analytics import GOAL_STATUS_EXCEEDED
from .coordinator import DropIndexConfigEntry, DropIndexCoordinator
from .entity import DropIndexEntity
from .types import TimerState

# Coordinator is used to centralize the data updates
PARALLEL_UPDATES = 0


@dataclass(kw_only=True, frozen=True)
class DropIndexBinarySensorEntityDescription(BinarySensorEntityDescription):
    """Description for DropIndex binary sensor entities."""

    is_on_fn: Callable[[DropIndexCoordinator], bool]


BINARY_SENSORS: tuple[DropIndexBinarySensorEntityDescription, ...] = (
    DropIndexBinarySensorEntityDescription(
        key="session_running",
        translation_key="session_running",
        device_class=BinarySensorDeviceClass.RUNNING,
        icon="mdi:timer-sand",
        is_on_fn=lambda coordinator: coordinator.session_timer.state
        is TimerState.RUNNING,
    ),
    DropIndexBinarySensorEntityDescription(
        key="daily_goal_exceeded",
        translation_key="daily_goal_exceeded",
        device_class=BinarySensorDeviceClass.PROBLEM,
        icon="mdi:water-alert",
        is_on_fn=lambda coordinator: coordinator.daily_goal_status
        == GOAL_STATUS_EXCEEDED,
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: DropIndexConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up binary sensors."""

    coordinator = entry.runtime_data
    async_add_entities(
        DropIndexBinarySensor(coordinator, description)
        for description in BINARY_SENSORS
    )


class DropIndexBinarySensor(DropIndexEntity, BinarySensorEntity):
    """Representation of a DropIndex binary sensor."""

    entity_description: DropIndexBinarySensorEntityDescription

    @property
    def is_on(self) -> bool:
        """Return true if the binary sensor is on."""
        return self.entity_description.is_on_fn(self.coordinator)
