import xml.etree.ElementTree as ET

import pytest

from remote.client import RokuClient, normalize_address
from remote.models import DeviceInfo, RemoteError
from remote.ssdp import location_to_address, parse_response


DEVICE_INFO_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<device-info>
  <udn>29380000-0800-1025-80a4-d83134a1b0c2</udn>
  <serial-number>YH009E000001</serial-number>
  <device-id>S00820000001</device-id>
  <model-name>7000X</model-name>
  <friendly-device-name>Living Room TV</friendly-device-name>
  <friendly-model-name>Roku TV</friendly-model-name>
  <is-tv>true</is-tv>
  <supports-find-remote>false</supports-find-remote>
</device-info>"""

ACTIVE_APP_XML = """<active-app><app id="12" type="appl" version="4.1.218">Netflix</app></active-app>"""
HOME_SCREEN_XML = """<active-app><app>Roku</app></active-app>"""
APPS_XML = """<apps>
  <app id="12" type="appl" version="4.1.218">Netflix</app>
  <app id="tvinput.dtv" type="tvin" version="1.0.0">Antenna TV</app>
</apps>"""


class StubClient(RokuClient):
    """RokuClient with canned XML instead of HTTP"""

    def __init__(self, responses):
        super().__init__("192.168.1.5")
        self.responses = responses
        self.posts = []

    async def _get_xml(self, path):
        return ET.fromstring(self.responses[path])

    async def _post(self, path):
        self.posts.append(path)


def test_normalize_address_forms():
    assert normalize_address("192.168.1.5") == "http://192.168.1.5:8060"
    assert normalize_address("http://192.168.1.5:8060/") == "http://192.168.1.5:8060"
    assert normalize_address("http://192.168.1.5:9000") == "http://192.168.1.5:9000"


def test_device_info_accepts_camel_and_kebab_keys():
    camel = DeviceInfo.from_mapping({"deviceId": "X1", "isTv": "true", "supportsFindRemote": "false"})
    kebab = DeviceInfo.from_mapping({"device-id": "X1", "is-tv": "true", "supports-find-remote": "false"})

    assert camel.device_id == kebab.device_id == "X1"
    assert camel.is_tv and kebab.is_tv
    assert not camel.supports_find_remote


def test_device_info_requires_id():
    with pytest.raises(RemoteError):
        DeviceInfo.from_mapping({"is-tv": "true"})


@pytest.mark.asyncio
async def test_info_parses_device_info_xml():
    client = StubClient({"/query/device-info": DEVICE_INFO_XML})

    info = await client.info()

    assert info.device_id == "S00820000001"
    assert info.friendly_device_name == "Living Room TV"
    assert info.is_tv is True
    assert info.supports_find_remote is False


@pytest.mark.asyncio
async def test_active_app_and_home_screen():
    assert (await StubClient({"/query/active-app": ACTIVE_APP_XML}).active_app()).name == "Netflix"
    assert await StubClient({"/query/active-app": HOME_SCREEN_XML}).active_app() is None


@pytest.mark.asyncio
async def test_apps_list():
    apps = await StubClient({"/query/apps": APPS_XML}).apps()
    assert [(a.id, a.name) for a in apps] == [("12", "Netflix"), ("tvinput.dtv", "Antenna TV")]


@pytest.mark.asyncio
async def test_command_paths():
    client = StubClient({})

    await client.keypress("Home")
    await client.text("a b")
    await client.launch("12")
    await client.tune("5.1")

    assert client.posts == [
        "/keypress/Home",
        "/keypress/Lit_a",
        "/keypress/Lit_%20",
        "/keypress/Lit_b",
        "/launch/12",
        "/launch/tvinput.dtv?ch=5.1",
    ]


def test_ssdp_response_to_address():
    response = (
        b"HTTP/1.1 200 OK\r\n"
        b"Cache-Control: max-age=3600\r\n"
        b"ST: roku:ecp\r\n"
        b"Location: http://192.168.1.134:8060/\r\n"
        b"USN: uuid:roku:ecp:P0A070000007\r\n\r\n"
    )
    assert location_to_address(parse_response(response)) == "http://192.168.1.134:8060"


def test_ssdp_ignores_other_devices():
    response = b"HTTP/1.1 200 OK\r\nST: upnp:rootdevice\r\nLOCATION: http://192.168.1.1:1900/\r\n\r\n"
    assert location_to_address(parse_response(response)) is None


def test_normalize_address_keeps_explicit_port_zero():
    assert normalize_address("http://192.168.1.5:0") == "http://192.168.1.5:0"


def test_normalize_address_rejects_out_of_range_port():
    with pytest.raises(ValueError):
        normalize_address("http://192.168.1.9:99999")
