"""Button entities for DropIndex session control."""

import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

from homeassistant.components.button import ButtonEntity, ButtonEntityDescription
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .coordinator import DropIndexConfigEntry, DropIndexCoordinator
from .entity import DropIndexEntity

PARALLEL_UPDATES = 0
_LOGGER = logging.getLogger(__name__)


@dataclass(kw_only=True, frozen=True)
class DropIndexButtonEntityDescription(ButtonEntityDescription):
    """Describes a DropIndex button entity.

    Attributes:
        press_fn: Coroutine function to call when the button is pressed.
                  It receives the DropIndexCoordinator instance.
    """

    press_fn: Callable[[DropIndexCoordinator], Coroutine[Any, Any, Any]]


BUTTONS: tuple[DropIndexButtonEntityDescription, ...] = (
    DropIndexButtonEntityDescription(
        key="start_session",
        translation_key="start_session",
        icon="mdi:play",
        press_fn=lambda coordinator: coordinator.async_start_session(),
    ),
    DropIndexButtonEntityDescription(
        key="pause_session",
        translation_key="pause_session",
        icon="mdi:pause",
        press_fn=lambda coordinator: coordinator.async_pause_session(),
    ),
    DropIndexButtonEntityDescription(
        key="stop_session",
        translation_key="stop_session",
        icon="mdi:stop",
        press_fn=lambda coordinator: coordinator.async_stop_session(),
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: DropIndexConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up DropIndex button entities based on the config entry."""

    coordinator = entry.runtime_data
    async_add_entities(
        DropIndexButton(coordinator, description) for description in BUTTONS
    )


class DropIndexButton(DropIndexEntity, ButtonEntity):
    """Representation of a DropIndex session control button."""

    entity_description: DropIndexButtonEntityDescription

    async def async_press(self) -> None:
        """Handle the button press.

        User-facing errors (no fixture selected, unknown fixture) pass through
        unchanged; anything else is logged and wrapped.
        """
        try:
            await self.entity_description.press_fn(self.coordinator)
        except HomeAssistantError:
            raise
        except Exception as e:
            _LOGGER.error(
                "Error pressing button %s: %s",
                self.entity_description.key,
                e,
                exc_info=True,
            )
            raise HomeAssistantError(
                f"Error pressing button {self.entity_description.key}: {e}"
            ) from e
