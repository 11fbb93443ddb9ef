"""Initialize the DropIndex component."""

import typing

import voluptuous as vol
from homeassistant.core import HomeAssistant
from homeassistant.helpers import config_validation as cv

from .const import (
    ATTR_FIXTURE_ID,
    DOMAIN,
    PLATFORMS,
    SERVICE_PAUSE_SESSION,
    SERVICE_SELECT_FIXTURE,
    SERVICE_START_SESSION,
    SERVICE_STOP_SESSION,
)
from .coordinator import DropIndexConfigEntry, DropIndexCoordinator

START_SESSION_SCHEMA = vol.Schema({vol.Optional(ATTR_FIXTURE_ID): cv.string})
SELECT_FIXTURE_SCHEMA = vol.Schema({vol.Required(ATTR_FIXTURE_ID): cv.string})

SERVICES = (
    SERVICE_START_SESSION,
    SERVICE_PAUSE_SESSION,
    SERVICE_STOP_SESSION,
    SERVICE_SELECT_FIXTURE,
)


async def async_setup_entry(hass: HomeAssistant, entry: DropIndexConfigEntry) -> bool:
    """Set up DropIndex as config entry."""

    coordinator = DropIndexCoordinator(hass, entry)
    await coordinator.async_config_entry_first_refresh()

    entry.runtime_data = coordinator
    # Runs on every unload path so the session tick never outlives the entry
    entry.async_on_unload(coordinator.async_close)
    entry.async_on_unload(
        entry.add_update_listener(coordinator._options_update_callback)
    )

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    # Register services
    hass.services.async_register(
        DOMAIN,
        SERVICE_START_SESSION,
        coordinator.async_start_session_service,
        schema=START_SESSION_SCHEMA,
    )
    hass.services.async_register(
        DOMAIN,
        SERVICE_PAUSE_SESSION,
        coordinator.async_pause_session_service,
    )
    hass.services.async_register(
        DOMAIN,
        SERVICE_STOP_SESSION,
        coordinator.async_stop_session_service,
    )
    hass.services.async_register(
        DOMAIN,
        SERVICE_SELECT_FIXTURE,
        coordinator.async_select_fixture_service,
        schema=SELECT_FIXTURE_SCHEMA,
    )

    return True


async def async_unload_entry(hass: HomeAssistant, entry: DropIndexConfigEntry) -> bool:
    """Unload a config entry."""

    unloaded = typing.cast(
        bool, await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    )
    if unloaded:
        for service in SERVICES:
            hass.services.async_remove(DOMAIN, service)
    return unloaded
