"""Config flow for DropIndex integration."""

import logging
from typing import Any

import voluptuous as vol
from homeassistant.config_entries import (
    ConfigEntry,
    ConfigFlow,
    ConfigFlowResult,
    OptionsFlow,
)
from homeassistant.const import CONF_NAME
from homeassistant.core import callback

from .const import (
    DEFAULT_CO2_KG_PER_LITER,
    DEFAULT_COST_PER_LITER,
    DEFAULT_DAILY_GOAL_LITERS,
    DOMAIN,
    OPTION_CO2_KG_PER_LITER,
    OPTION_COST_PER_LITER,
    OPTION_DAILY_GOAL_LITERS,
)

_LOGGER = logging.getLogger(__name__)

DEFAULT_NAME = "DropIndex"


class DropIndexConfigFlow(ConfigFlow, domain=DOMAIN):  # type: ignore[call-arg]
    """Handle a config flow for DropIndex."""

    VERSION = 1

    @staticmethod
    @callback
    def async_get_options_flow(
        config_entry: ConfigEntry,
    ) -> "DropIndexOptionsFlowHandler":
        """Get the options flow for this handler."""
        return DropIndexOptionsFlowHandler()

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle a flow initialized by the user.

        Only one tracker is supported; its name becomes the device name.
        """
        if self._async_current_entries():
            return self.async_abort(reason="single_instance_allowed")

        if user_input is not None:
            await self.async_set_unique_id(DOMAIN)
            self._abort_if_unique_id_configured()
            _LOGGER.debug("Creating DropIndex entry %s", user_input[CONF_NAME])
            return self.async_create_entry(
                title=user_input[CONF_NAME],
                data={CONF_NAME: user_input[CONF_NAME]},
            )

        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema(
                {
                    vol.Required(CONF_NAME, default=DEFAULT_NAME): str,
                }
            ),
        )


class DropIndexOptionsFlowHandler(OptionsFlow):
    """Handle an options flow for DropIndex."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Manage the cost, emission and daily goal settings."""
        if user_input is not None:
            return self.async_create_entry(title="", data=user_input)

        current_options = self.config_entry.options

        options_schema = vol.Schema(
            {
                vol.Optional(
                    OPTION_COST_PER_LITER,
                    default=current_options.get(
                        OPTION_COST_PER_LITER, DEFAULT_COST_PER_LITER
                    ),
                ): vol.All(vol.Coerce(float), vol.Range(min=0.0, max=10.0)),
                vol.Optional(
                    OPTION_CO2_KG_PER_LITER,
                    default=current_options.get(
                        OPTION_CO2_KG_PER_LITER, DEFAULT_CO2_KG_PER_LITER
                    ),
                ): vol.All(vol.Coerce(float), vol.Range(min=0.0, max=10.0)),
                vol.Optional(
                    OPTION_DAILY_GOAL_LITERS,
                    default=current_options.get(
                        OPTION_DAILY_GOAL_LITERS, DEFAULT_DAILY_GOAL_LITERS
                    ),
                ): vol.All(vol.Coerce(float), vol.Range(min=0.0, max=100000.0)),
            }
        )

        return self.async_show_form(step_id="init", data_schema=options_schema)
