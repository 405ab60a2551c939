# 19.10.26

import enum
import logging
from dataclasses import dataclass, field, fields, asdict, is_dataclass
from datetime import date

from Presence.const import WEEKDAY_NAMES


logger = logging.getLogger(__name__)


class Weekday(enum.Enum):
    """Day of the week, in datetime.weekday() order"""
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return list(cls)[day.weekday()]

    @classmethod
    def from_name(cls, name: str):
        """Case-insensitive lookup by full English name, None if unknown"""
        for member in cls:
            if member.value.lower() == name.strip().lower():
                return member
        return None


def parse_working_days(text) -> set:
    """Turn a pipe-delimited day string into a set of Weekday members"""
    days = set()
    if not text:
        return days

    for token in text.split("|"):
        if not token.strip():
            continue
        day = Weekday.from_name(token)
        if day is None:
            logger.warning("Ignoring unknown working day %r", token)
            continue
        days.add(day)
    return days


def format_working_days(days) -> str:
    """Join days back into the stored Monday..Sunday pipe string"""
    return "|".join(d.value for d in Weekday if d in days)


@dataclass
class HueSettings:
    is_phillips_hue_enabled: bool = False
    hue_api_key: str = ""
    hue_ip_address: str = ""
    selected_hue_light_id: str = ""


@dataclass
class YeelightSettings:
    is_yeelight_enabled: bool = False
    selected_yeelight_id: str = ""


@dataclass
class LIFXSettings:
    is_lifx_enabled: bool = False
    lifx_client_id: str = ""
    lifx_client_secret: str = ""
    lifx_api_key: str = ""
    selected_lifx_item_id: str = ""


@dataclass
class CustomApiSettings:
    """Per-state HTTP verb and URI for a generic light endpoint"""
    is_custom_api_enabled: bool = False

    available_method: str = ""
    available_uri: str = ""
    busy_method: str = ""
    busy_uri: str = ""
    be_right_back_method: str = ""
    be_right_back_uri: str = ""
    away_method: str = ""
    away_uri: str = ""
    do_not_disturb_method: str = ""
    do_not_disturb_uri: str = ""
    available_idle_method: str = ""
    available_idle_uri: str = ""
    offline_method: str = ""
    offline_uri: str = ""
    off_method: str = ""
    off_uri: str = ""

    activity_available_method: str = ""
    activity_available_uri: str = ""
    activity_presenting_method: str = ""
    activity_presenting_uri: str = ""
    activity_in_a_call_method: str = ""
    activity_in_a_call_uri: str = ""
    activity_in_a_meeting_method: str = ""
    activity_in_a_meeting_uri: str = ""
    activity_busy_method: str = ""
    activity_busy_uri: str = ""
    activity_away_method: str = ""
    activity_away_uri: str = ""
    activity_be_right_back_method: str = ""
    activity_be_right_back_uri: str = ""
    activity_offline_method: str = ""
    activity_offline_uri: str = ""
    activity_do_not_disturb_method: str = ""
    activity_do_not_disturb_uri: str = ""
    activity_idle_method: str = ""
    activity_idle_uri: str = ""
    activity_off_method: str = ""
    activity_off_uri: str = ""


@dataclass
class LightSettings:
    sync_lights: bool = True
    use_default_brightness: bool = False
    default_brightness: int = 100

    use_working_hours: bool = False
    working_hours_start_time: str = ""
    working_hours_end_time: str = ""
    working_days: str = "|".join(WEEKDAY_NAMES[:5])
    hours_passed_status: str = "Keep"

    hue: HueSettings = field(default_factory=HueSettings)
    yeelight: YeelightSettings = field(default_factory=YeelightSettings)
    lifx: LIFXSettings = field(default_factory=LIFXSettings)
    custom: CustomApiSettings = field(default_factory=CustomApiSettings)


@dataclass
class Configuration:
    """Everything persisted to settings.json"""
    icon_type: str = "White"
    client_id: str = ""
    redirect_uri: str = ""
    light_settings: LightSettings = field(default_factory=LightSettings)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data) -> "Configuration":
        return _build(cls, data)


def _build(cls, data):
    """Fill a dataclass from a dict, keeping defaults for missing keys"""
    if not isinstance(data, dict):
        raise ValueError(f"Expected an object for {cls.__name__}, got {type(data).__name__}")

    instance = cls()
    for f in fields(cls):
        if f.name not in data:
            continue
        current = getattr(instance, f.name)
        value = data[f.name]
        if is_dataclass(current):
            value = _build(type(current), value)
        elif not _same_kind(current, value):
            raise TypeError(f"{cls.__name__}.{f.name} expects {type(current).__name__}, "
                            f"got {type(value).__name__}")
        setattr(instance, f.name, value)
    return instance


def _same_kind(default, value) -> bool:
    # bool is a subclass of int, so compare exact types
    return type(value) is type(default)
