"""Constants for component."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform

DOMAIN = "dropindex"

# Event names
EVENT_DROPINDEX_SESSION_COMPLETED = f"{DOMAIN}_session_completed"

# Service names
SERVICE_START_SESSION = "start_session"
SERVICE_PAUSE_SESSION = "pause_session"
SERVICE_STOP_SESSION = "stop_session"
SERVICE_SELECT_FIXTURE = "select_fixture"

ATTR_FIXTURE_ID = "fixture_id"

# Option Keys
OPTION_COST_PER_LITER = "cost_per_liter"
OPTION_CO2_KG_PER_LITER = "co2_kg_per_liter"
OPTION_DAILY_GOAL_LITERS = "daily_goal_liters"

DEFAULT_COST_PER_LITER = 0.003  # average US water cost, $/L
DEFAULT_CO2_KG_PER_LITER = 0.4  # rough estimate, kg CO2/L
DEFAULT_DAILY_GOAL_LITERS = 300.0

TICK_INTERVAL = timedelta(seconds=1)

# Stock fixtures, flow rates in L/min
DEFAULT_FIXTURES: tuple[dict[str, Any], ...] = (
    {
        "fixture_id": "shower",
        "display_name": "Shower",
        "flow_rate": 9.5,
        "description": "Standard showerhead",
        "efficiency": "medium",
    },
    {
        "fixture_id": "low-flow-shower",
        "display_name": "Low-Flow Shower",
        "flow_rate": 6.5,
        "description": "Water-efficient showerhead",
        "efficiency": "high",
    },
    {
        "fixture_id": "bath",
        "display_name": "Bath",
        "flow_rate": 15.0,
        "description": "Standard bathtub",
        "efficiency": "low",
    },
    {
        "fixture_id": "dishwasher",
        "display_name": "Dishwasher",
        "flow_rate": 6.0,
        "description": "Energy Star rated",
        "efficiency": "high",
    },
    {
        "fixture_id": "car-wash",
        "display_name": "Car Wash",
        "flow_rate": 150.0,
        "description": "Garden hose",
        "efficiency": "low",
    },
    {
        "fixture_id": "washing-machine",
        "display_name": "Washing Machine",
        "flow_rate": 45.0,
        "description": "Front-loading",
        "efficiency": "medium",
    },
)


@dataclass(frozen=True)
class DropIndexConfig:
    """Typed configuration for the DropIndex integration."""

    cost_per_liter: float
    co2_kg_per_liter: float
    daily_goal_liters: float

    @classmethod
    def from_config_entry(cls, entry: ConfigEntry) -> "DropIndexConfig":
        """Create a DropIndexConfig instance from a ConfigEntry."""
        options = entry.options
        return cls(
            cost_per_liter=float(
                options.get(OPTION_COST_PER_LITER, DEFAULT_COST_PER_LITER)
            ),
            co2_kg_per_liter=float(
                options.get(OPTION_CO2_KG_PER_LITER, DEFAULT_CO2_KG_PER_LITER)
            ),
            daily_goal_liters=float(
                options.get(OPTION_DAILY_GOAL_LITERS, DEFAULT_DAILY_GOAL_LITERS)
            ),
        )


PLATFORMS: list[Platform] = [
    Platform.SENSOR,
    Platform.BINARY_SENSOR,
    Platform.BUTTON,  # Buttons for start/pause/stop services
    Platform.SELECT,
]
