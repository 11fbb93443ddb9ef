"""Fixture selector for DropIndex."""

from typing import Any

from homeassistant.components.select import SelectEntity, SelectEntityDescription
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .coordinator import DropIndexConfigEntry, DropIndexCoordinator
from .entity import DropIndexEntity

PARALLEL_UPDATES = 0

FIXTURE_SELECT = SelectEntityDescription(
    key="fixture",
    translation_key="fixture",
    icon="mdi:shower-head",
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: DropIndexConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the fixture select."""

    coordinator = entry.runtime_data
    async_add_entities([DropIndexFixtureSelect(coordinator, FIXTURE_SELECT)])


class DropIndexFixtureSelect(DropIndexEntity, SelectEntity):
    """Select entity listing the catalog's fixtures by id."""

    def __init__(
        self, coordinator: DropIndexCoordinator, description: SelectEntityDescription
    ) -> None:
        super().__init__(coordinator, description)
        self._attr_options = coordinator.catalog.fixture_ids

    @property
    def current_option(self) -> str | None:
        return self.coordinator.selected_fixture_id

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        profile = self.coordinator.catalog.lookup(self.coordinator.selected_fixture_id)
        if profile is None:
            return None
        return {
            "display_name": profile.display_name,
            "flow_rate": profile.flow_rate,
            "description": profile.description,
            "efficiency": profile.efficiency.value,
        }

    async def async_select_option(self, option: str) -> None:
        await self.coordinator.async_select_fixture(option)
