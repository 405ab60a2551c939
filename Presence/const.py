# 19.10.26

SETTINGS_FILE_NAME = "settings.json"

WEEKDAY_NAMES = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday"
]

ICON_TYPES = ["White", "Transparent"]

HOURS_PASSED_KEEP = "Keep"
HOURS_PASSED_OFF = "Off"
HOURS_PASSED_WHITE = "White"
HOURS_PASSED_STATUSES = [HOURS_PASSED_KEEP, HOURS_PASSED_OFF, HOURS_PASSED_WHITE]

HTTP_METHODS = ["GET", "POST"]

# Presence availability -> custom API field prefix
AVAILABILITIES = {
    "Available": "available",
    "Busy": "busy",
    "BeRightBack": "be_right_back",
    "Away": "away",
    "DoNotDisturb": "do_not_disturb",
    "AvailableIdle": "available_idle",
    "Offline": "offline",
    "Off": "off"
}

# Presence activity -> custom API field prefix
ACTIVITIES = {
    "Available": "activity_available",
    "Presenting": "activity_presenting",
    "InACall": "activity_in_a_call",
    "InAMeeting": "activity_in_a_meeting",
    "Busy": "activity_busy",
    "Away": "activity_away",
    "BeRightBack": "activity_be_right_back",
    "Offline": "activity_offline",
    "DoNotDisturb": "activity_do_not_disturb",
    "Idle": "activity_idle",
    "Off": "activity_off"
}

# Panel name -> configuration attribute path that shows it
PANEL_FLAGS = {
    "working_hours": "light_settings.use_working_hours",
    "hue": "light_settings.hue.is_phillips_hue_enabled",
    "yeelight": "light_settings.yeelight.is_yeelight_enabled",
    "lifx": "light_settings.lifx.is_lifx_enabled",
    "custom_api": "light_settings.custom.is_custom_api_enabled",
    "default_brightness": "light_settings.use_default_brightness"
}
