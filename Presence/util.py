# 19.10.26

from functools import reduce

from Presence.config import Weekday, format_working_days, parse_working_days
from Presence.const import PANEL_FLAGS


def resolve_flag(config, path: str) -> bool:
    """Follow a dotted attribute path on the configuration"""
    return bool(reduce(getattr, path.split("."), config))


def panel_visibility(config) -> dict:
    """Map every panel name to whether it should be shown"""
    visibility = {panel: resolve_flag(config, path) for panel, path in PANEL_FLAGS.items()}

    lifx = config.light_settings.lifx
    visibility["lifx_token_link"] = bool(lifx.lifx_client_id and lifx.lifx_client_secret)
    return visibility


def working_days_from_checks(checks: dict) -> str:
    """Build the stored day string from {Weekday: checked}"""
    return format_working_days({day for day, checked in checks.items() if checked})


def checks_from_working_days(text) -> dict:
    days = parse_working_days(text)
    return {day: day in days for day in Weekday}


def format_time_of_day(value) -> str:
    """Time of day as stored in settings.json"""
    return value.strftime("%H:%M:%S") if value is not None else ""
