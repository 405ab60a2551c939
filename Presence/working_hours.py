# 19.10.26

import re
from datetime import datetime, time

from Presence.config import Weekday, parse_working_days
from Presence.const import HOURS_PASSED_KEEP, HOURS_PASSED_STATUSES

TIME_PATTERN = re.compile(r'^\s*(\d{1,2}):(\d{2})(?::(\d{2})(?:\.(\d+))?)?\s*$')


def parse_time_of_day(text):
    """Parse 'H:MM', 'HH:MM:SS' or 'HH:MM:SS.fff' into a time, None if invalid"""
    if not text:
        return None

    match = TIME_PATTERN.match(str(text))
    if not match:
        return None

    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    fraction = match.group(4) or ""
    if hour > 23 or minute > 59 or second > 59:
        return None

    # Fraction may carry more than six digits
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0
    return time(hour, minute, second, microsecond)


def is_in_working_hours(start, end, working_days, now=None) -> bool:
    """Whether `now` falls inside the configured working-hours window"""
    if not start or not end or not working_days:
        return False

    now = now or datetime.now()
    if Weekday.of(now) not in parse_working_days(working_days):
        return False

    start_time = parse_time_of_day(start)
    end_time = parse_time_of_day(end)
    if start_time is None or end_time is None:
        return False

    current = now.time()
    if start_time < end_time:
        return start_time <= current <= end_time

    # Overnight window: outside only in the gap between end and start
    return not (end_time < current < start_time)


def hours_passed_action(light_settings, in_working_hours):
    """What to do with the lights once the window is closed, None while it is open"""
    if not light_settings.use_working_hours or in_working_hours:
        return None

    status = light_settings.hours_passed_status
    return status if status in HOURS_PASSED_STATUSES else HOURS_PASSED_KEEP
