# 19.10.26

import logging

import aiohttp

from Presence.const import ACTIVITIES, AVAILABILITIES


logger = logging.getLogger(__name__)


class LightController:
    """Collaborator that changes a light to match a presence state"""
    name = "light"

    def is_enabled(self, config) -> bool:
        return True

    async def set_color(self, config, color, activity=None):
        logger.info("%s: set color %s (activity %s)", self.name, color, activity)


def custom_api_request(custom, state, activity=False):
    """(method, uri) configured for a presence state, None if incomplete"""
    prefixes = ACTIVITIES if activity else AVAILABILITIES
    prefix = prefixes.get(state)
    if prefix is None:
        return None

    method = getattr(custom, f"{prefix}_method")
    uri = getattr(custom, f"{prefix}_uri")
    if not method or not uri:
        return None
    return method.upper(), uri


class CustomApiLight(LightController):
    """Calls a user-configured HTTP endpoint per presence state"""
    name = "custom_api"

    def __init__(self, diagnostics):
        self.diagnostics = diagnostics

    def is_enabled(self, config) -> bool:
        return config.light_settings.custom.is_custom_api_enabled

    async def set_color(self, config, color, activity=None):
        custom = config.light_settings.custom
        request = None
        if activity:
            request = custom_api_request(custom, activity, activity=True)
        if request is None:
            request = custom_api_request(custom, color)
        if request is None:
            logger.debug("No custom API endpoint for %s", color)
            return False

        method, uri = request
        try:
            async with aiohttp.ClientSession() as session:
                async with session.request(method, uri) as response:
                    response.raise_for_status()
            logger.debug("Custom API %s %s -> %s", method, uri, response.status)
            return True
        except Exception as e:
            self.diagnostics.track_exception(e)
            return False
