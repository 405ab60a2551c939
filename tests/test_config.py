# 19.10.26

from datetime import date

import pytest

from Presence.config import Configuration, Weekday, format_working_days, parse_working_days
from Presence.util import checks_from_working_days, panel_visibility, working_days_from_checks


def test_weekday_of_date():
    assert Weekday.of(date(2026, 10, 19)) is Weekday.MONDAY
    assert Weekday.of(date(2026, 10, 25)) is Weekday.SUNDAY


def test_parse_working_days_ignores_unknown_tokens():
    assert parse_working_days(" tuesday |Funday||FRIDAY") == {Weekday.TUESDAY, Weekday.FRIDAY}
    assert parse_working_days("") == set()
    assert parse_working_days(None) == set()


def test_format_working_days_orders_monday_first():
    assert format_working_days({Weekday.SUNDAY, Weekday.MONDAY}) == "Monday|Sunday"


def test_checks_round_trip():
    checks = checks_from_working_days("Wednesday|Monday")
    assert checks[Weekday.MONDAY] and checks[Weekday.WEDNESDAY]
    assert not checks[Weekday.TUESDAY]
    assert working_days_from_checks(checks) == "Monday|Wednesday"


def test_from_dict_nested_partial():
    config = Configuration.from_dict({"light_settings": {"hue": {"hue_api_key": "k"}}})
    assert config.light_settings.hue.hue_api_key == "k"
    assert config.light_settings.hue.is_phillips_hue_enabled is False
    assert config.icon_type == "White"


def test_from_dict_rejects_non_objects():
    with pytest.raises(ValueError):
        Configuration.from_dict({"light_settings": "nope"})


def test_panel_visibility_mirrors_flags():
    config = Configuration()
    assert not any(panel_visibility(config).values())

    ls = config.light_settings
    ls.use_working_hours = True
    ls.yeelight.is_yeelight_enabled = True
    ls.custom.is_custom_api_enabled = True
    visibility = panel_visibility(config)
    assert visibility["working_hours"] and visibility["yeelight"] and visibility["custom_api"]
    assert not visibility["hue"] and not visibility["lifx"] and not visibility["default_brightness"]


def test_lifx_token_link_needs_client_credentials():
    config = Configuration()
    config.light_settings.lifx.is_lifx_enabled = True
    assert panel_visibility(config)["lifx_token_link"] is False

    config.light_settings.lifx.lifx_client_id = "id"
    config.light_settings.lifx.lifx_client_secret = "secret"
    assert panel_visibility(config)["lifx_token_link"] is True
