# 19.10.26

import asyncio

import aiohttp
from aiohttp import web
from aiohttp import test_utils

from Presence.config import Configuration, CustomApiSettings
from Presence.lights import CustomApiLight, custom_api_request


def test_custom_api_request_for_availability():
    custom = CustomApiSettings(busy_method="post", busy_uri="http://lamp/busy")
    assert custom_api_request(custom, "Busy") == ("POST", "http://lamp/busy")


def test_custom_api_request_for_activity():
    custom = CustomApiSettings(activity_in_a_call_method="GET", activity_in_a_call_uri="http://lamp/call")
    assert custom_api_request(custom, "InACall", activity=True) == ("GET", "http://lamp/call")
    assert custom_api_request(custom, "InACall") is None


def test_custom_api_request_incomplete_or_unknown():
    custom = CustomApiSettings(away_method="GET")
    assert custom_api_request(custom, "Away") is None
    assert custom_api_request(custom, "White") is None


def test_custom_light_skips_unconfigured_state(diagnostics):
    config = Configuration()
    config.light_settings.custom.is_custom_api_enabled = True
    light = CustomApiLight(diagnostics)
    assert light.is_enabled(config)
    assert asyncio.run(light.set_color(config, "Busy")) is False
    assert not diagnostics.exceptions


def lamp_app(calls):
    async def busy(request):
        calls.append((request.method, request.path))
        return web.Response(text="ok")

    async def broken(request):
        calls.append((request.method, request.path))
        return web.Response(status=500)

    app = web.Application()
    app.router.add_route("POST", "/busy", busy)
    app.router.add_route("GET", "/call", busy)
    app.router.add_route("GET", "/away", broken)
    return app


def custom_config(**fields):
    config = Configuration()
    config.light_settings.custom = CustomApiSettings(is_custom_api_enabled=True, **fields)
    return config


async def send(diagnostics, calls, color, activity=None, **paths):
    async with test_utils.TestServer(lamp_app(calls)) as server:
        fields = {name: str(server.make_url(path)) if name.endswith("_uri") else path
                  for name, path in paths.items()}
        return await CustomApiLight(diagnostics).set_color(custom_config(**fields), color, activity)


def test_custom_light_sends_configured_request(diagnostics):
    calls = []
    sent = asyncio.run(send(diagnostics, calls, "Busy", busy_method="post", busy_uri="/busy"))
    assert sent is True
    assert calls == [("POST", "/busy")]
    assert not diagnostics.exceptions


def test_custom_light_prefers_activity_request(diagnostics):
    calls = []
    sent = asyncio.run(send(diagnostics, calls, "Busy", "InACall",
                            busy_method="POST", busy_uri="/busy",
                            activity_in_a_call_method="GET", activity_in_a_call_uri="/call"))
    assert sent is True
    assert calls == [("GET", "/call")]


def test_custom_light_reports_http_error_status(diagnostics):
    calls = []
    sent = asyncio.run(send(diagnostics, calls, "Away", away_method="GET", away_uri="/away"))
    assert sent is False
    assert calls == [("GET", "/away")]
    error = diagnostics.exceptions[-1]
    assert isinstance(error, aiohttp.ClientResponseError)
    assert error.status == 500


def test_custom_light_reports_connection_error(diagnostics):
    async def closed_server_url():
        async with test_utils.TestServer(web.Application()) as server:
            url = str(server.make_url("/busy"))
        return url

    url = asyncio.run(closed_server_url())
    config = custom_config(busy_method="POST", busy_uri=url)
    sent = asyncio.run(CustomApiLight(diagnostics).set_color(config, "Busy"))
    assert sent is False
    assert isinstance(diagnostics.exceptions[-1], aiohttp.ClientConnectionError)
