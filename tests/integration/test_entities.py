# tests/integration/test_entities.py
import pytest
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ServiceValidationError
from homeassistant.helpers import entity_registry as er
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.dropindex.const import DOMAIN


def _entity_id(hass: HomeAssistant, entry: MockConfigEntry, platform: str, key: str):
    entity_id = er.async_get(hass).async_get_entity_id(
        platform, DOMAIN, f"{entry.entry_id}_{key}"
    )
    assert entity_id is not None, f"{platform} {key} not registered"
    return entity_id


async def _press(hass: HomeAssistant, entity_id: str) -> None:
    await hass.services.async_call(
        "button", "press", {"entity_id": entity_id}, blocking=True
    )
    await hass.async_block_till_done()


async def test_entities_created(
    hass: HomeAssistant, init_integration: MockConfigEntry
):
    entries = er.async_entries_for_config_entry(
        er.async_get(hass), init_integration.entry_id
    )
    keys = {entry.unique_id.removeprefix(f"{init_integration.entry_id}_") for entry in entries}
    assert keys == {
        "session_state",
        "session_duration",
        "session_volume",
        "session_cost",
        "session_co2",
        "flow_rate",
        "last_session_volume",
        "last_session_duration",
        "volume_today",
        "daily_goal_progress",
        "session_running",
        "daily_goal_exceeded",
        "start_session",
        "pause_session",
        "stop_session",
        "fixture",
    }

    state = hass.states.get(_entity_id(hass, init_integration, "sensor", "session_state"))
    assert state.state == "idle"


async def test_start_button_without_fixture(
    hass: HomeAssistant, init_integration: MockConfigEntry
):
    """The start button reports a missing fixture to the user."""
    with pytest.raises(ServiceValidationError):
        await _press(
            hass, _entity_id(hass, init_integration, "button", "start_session")
        )


async def test_session_through_entities(
    hass: HomeAssistant, init_integration: MockConfigEntry
):
    """Drive a session with the select and buttons, watching the sensors."""
    coordinator = init_integration.runtime_data
    select_id = _entity_id(hass, init_integration, "select", "fixture")
    duration_id = _entity_id(hass, init_integration, "sensor", "session_duration")
    volume_id = _entity_id(hass, init_integration, "sensor", "session_volume")
    state_id = _entity_id(hass, init_integration, "sensor", "session_state")
    running_id = _entity_id(hass, init_integration, "binary_sensor", "session_running")

    await hass.services.async_call(
        "select",
        "select_option",
        {"entity_id": select_id, "option": "shower"},
        blocking=True,
    )
    await hass.async_block_till_done()

    select_state = hass.states.get(select_id)
    assert select_state.state == "shower"
    assert select_state.attributes["flow_rate"] == 9.5
    assert select_state.attributes["efficiency"] == "medium"
    assert float(
        hass.states.get(_entity_id(hass, init_integration, "sensor", "flow_rate")).state
    ) == pytest.approx(9.5)

    await _press(hass, _entity_id(hass, init_integration, "button", "start_session"))
    for _ in range(30):
        coordinator.session_timer._tick()
    await hass.async_block_till_done()

    assert hass.states.get(state_id).state == "running"
    assert hass.states.get(running_id).state == "on"
    duration_state = hass.states.get(duration_id)
    assert float(duration_state.state) == 30
    assert duration_state.attributes["formatted"] == "00:30"
    assert float(hass.states.get(volume_id).state) == pytest.approx(4.75)

    await _press(hass, _entity_id(hass, init_integration, "button", "pause_session"))
    assert hass.states.get(state_id).state == "paused"
    assert hass.states.get(running_id).state == "off"

    await _press(hass, _entity_id(hass, init_integration, "button", "stop_session"))
    assert hass.states.get(state_id).state == "idle"
    assert float(hass.states.get(volume_id).state) == 0.0

    last_volume = hass.states.get(
        _entity_id(hass, init_integration, "sensor", "last_session_volume")
    )
    assert float(last_volume.state) == pytest.approx(4.75)
    assert last_volume.attributes["fixture_id"] == "shower"
    assert float(
        hass.states.get(
            _entity_id(hass, init_integration, "sensor", "last_session_duration")
        ).state
    ) == 30
    today = hass.states.get(_entity_id(hass, init_integration, "sensor", "volume_today"))
    assert float(today.state) == pytest.approx(4.75)
    assert today.attributes["sessions"] == 1
    assert (
        hass.states.get(
            _entity_id(hass, init_integration, "binary_sensor", "daily_goal_exceeded")
        ).state
        == "off"
    )
