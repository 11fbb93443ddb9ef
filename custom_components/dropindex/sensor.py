"""Sensor platform for DropIndex."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
    SensorStateClass,
)
from homeassistant.const import (
    PERCENTAGE,
    UnitOfMass,
    UnitOfTime,
    UnitOfVolume,
    UnitOfVolumeFlowRate,
)
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .coordinator import DropIndexConfigEntry, DropIndexCoordinator
from .entity import DropIndexEntity
from .types import TimerState

# Coordinator is used to centralize the data updates
PARALLEL_UPDATES = 0


@dataclass(kw_only=True, frozen=True)
class DropIndexSensorEntityDescription(SensorEntityDescription):
    """Description for DropIndex sensor entities."""

    value_fn: Callable[[DropIndexCoordinator], int | float | str | datetime | None]
    unit_fn: Callable[[DropIndexCoordinator], str | None] | None = None
    attr_fn: Callable[[DropIndexCoordinator], dict[str, Any] | None] | None = None


SENSORS: tuple[DropIndexSensorEntityDescription, ...] = (
    # Current Session Sensors
    DropIndexSensorEntityDescription(
        key="session_state",
        translation_key="session_state",
        device_class=SensorDeviceClass.ENUM,
        options=[state.value for state in TimerState],
        icon="mdi:state-machine",
        value_fn=lambda coordinator: coordinator.session_timer.state.value,
        attr_fn=lambda coordinator: {
            "fixture_id": coordinator.session_timer.snapshot().fixture_id
        },
    ),
    DropIndexSensorEntityDescription(
        key="session_duration",
        translation_key="session_duration",
        device_class=SensorDeviceClass.DURATION,
        native_unit_of_measurement=UnitOfTime.SECONDS,
        state_class=SensorStateClass.MEASUREMENT,
        icon="mdi:timer-outline",
        value_fn=lambda coordinator: coordinator.session_timer.elapsed_seconds,
        attr_fn=lambda coordinator: {
            "formatted": coordinator.analyzer.format_duration(
                coordinator.session_timer.elapsed_seconds
            )
        },
    ),
    DropIndexSensorEntityDescription(
        key="session_volume",
        translation_key="session_volume",
        device_class=SensorDeviceClass.WATER,
        native_unit_of_measurement=UnitOfVolume.LITERS,
        state_class=SensorStateClass.TOTAL_INCREASING,
        suggested_display_precision=1,
        value_fn=lambda coordinator: coordinator.session_timer.accumulated_volume,
    ),
    DropIndexSensorEntityDescription(
        key="session_cost",
        translation_key="session_cost",
        device_class=SensorDeviceClass.MONETARY,
        suggested_display_precision=3,
        icon="mdi:cash",
        value_fn=lambda coordinator: coordinator.session_timer.estimated_cost,
        unit_fn=lambda coordinator: coordinator.hass.config.currency,
    ),
    DropIndexSensorEntityDescription(
        key="session_co2",
        translation_key="session_co2",
        device_class=SensorDeviceClass.WEIGHT,
        native_unit_of_measurement=UnitOfMass.KILOGRAMS,
        suggested_display_precision=2,
        icon="mdi:leaf",
        value_fn=lambda coordinator: coordinator.session_timer.co2_equivalent,
    ),
    DropIndexSensorEntityDescription(
        key="flow_rate",
        translation_key="flow_rate",
        device_class=SensorDeviceClass.VOLUME_FLOW_RATE,
        native_unit_of_measurement=UnitOfVolumeFlowRate.LITERS_PER_MINUTE,
        suggested_display_precision=1,
        value_fn=lambda coordinator: coordinator.selected_flow_rate,
    ),
    # Last Session Sensors
    DropIndexSensorEntityDescription(
        key="last_session_volume",
        translation_key="last_session_volume",
        device_class=SensorDeviceClass.WATER,
        native_unit_of_measurement=UnitOfVolume.LITERS,
        suggested_display_precision=1,
        icon="mdi:history",
        value_fn=lambda coordinator: coordinator.last_session.volume_liters
        if coordinator.last_session
        else None,
        attr_fn=lambda coordinator: coordinator.last_session.model_dump(mode="json")
        if coordinator.last_session
        else None,
    ),
    DropIndexSensorEntityDescription(
        key="last_session_duration",
        translation_key="last_session_duration",
        device_class=SensorDeviceClass.DURATION,
        native_unit_of_measurement=UnitOfTime.SECONDS,
        icon="mdi:history",
        value_fn=lambda coordinator: coordinator.last_session.duration_seconds
        if coordinator.last_session
        else None,
    ),
    # Daily Sensors
    DropIndexSensorEntityDescription(
        key="volume_today",
        translation_key="volume_today",
        device_class=SensorDeviceClass.WATER,
        native_unit_of_measurement=UnitOfVolume.LITERS,
        state_class=SensorStateClass.TOTAL_INCREASING,
        suggested_display_precision=1,
        value_fn=lambda coordinator: coordinator.volume_today,
        attr_fn=lambda coordinator: {"sessions": coordinator.sessions_today},
    ),
    DropIndexSensorEntityDescription(
        key="daily_goal_progress",
        translation_key="daily_goal_progress",
        native_unit_of_measurement=PERCENTAGE,
        state_class=SensorStateClass.MEASUREMENT,
        icon="mdi:target",
        value_fn=lambda coordinator: coordinator.daily_goal_progress,
        attr_fn=lambda coordinator: {
            "status": coordinator.daily_goal_status,
            "goal_liters": coordinator.dropindex_config.daily_goal_liters,
        },
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: DropIndexConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up sensors."""

    coordinator = entry.runtime_data
    async_add_entities(
        DropIndexSensor(coordinator, entity_description)
        for entity_description in SENSORS
    )


class DropIndexSensor(DropIndexEntity, SensorEntity):
    """Representation of a DropIndex sensor."""

    entity_description: DropIndexSensorEntityDescription

    @property
    def native_unit_of_measurement(self) -> str | None:
        """Return the unit of measurement of this entity."""
        if self.entity_description.unit_fn is not None:
            return self.entity_description.unit_fn(self.coordinator)
        return self.entity_description.native_unit_of_measurement

    @property
    def native_value(self) -> int | float | str | datetime | None:
        """Return the state of the entity."""
        return self.entity_description.value_fn(self.coordinator)

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        if self.entity_description.attr_fn is None:
            return None
        return self.entity_description.attr_fn(self.coordinator)
