import asyncio
import sys
import pathlib
from typing import Any, Dict, List, Optional

import pytest

# Ensure src/ is on sys.path so top-level packages (devices, discovery, remote) import correctly
SRC = pathlib.Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from remote.client import normalize_address
from remote.models import App, DeviceInfo, RemoteError


def make_info(device_id="X1", is_tv="false", supports_find_remote="false", **extra) -> DeviceInfo:
    data = {
        "deviceId": device_id,
        "friendlyDeviceName": f"Roku {device_id}",
        "friendlyModelName": "Roku Ultra",
        "isTv": is_tv,
        "supportsFindRemote": supports_find_remote,
    }
    data.update(extra)
    return DeviceInfo.from_mapping(data)


class FakeRokuClient:
    """Remote client double with per-method call counters"""

    def __init__(
        self,
        address: str,
        info: Optional[DeviceInfo] = None,
        active: Optional[App] = None,
        apps: Optional[List[App]] = None,
        fail: Optional[set] = None,
        info_gate: Optional[asyncio.Event] = None,
    ):
        self.address = normalize_address(address)
        self._info = info or make_info()
        self.active = active
        self._apps = apps if apps is not None else [App(id="12", name="Netflix"), App(id="2213", name="Roku Media Player")]
        self.fail = set(fail or ())
        self.info_gate = info_gate
        self.calls: Dict[str, List[Any]] = {}

    def _record(self, name: str, *args):
        self.calls.setdefault(name, []).append(args)
        if name in self.fail:
            raise RemoteError(f"{name} failed")

    def call_count(self, name: Optional[str] = None) -> int:
        if name is None:
            return sum(len(v) for v in self.calls.values())
        return len(self.calls.get(name, []))

    async def info(self):
        if self.info_gate is not None:
            await self.info_gate.wait()
        self._record("info")
        return self._info

    async def active_app(self):
        self._record("active_app")
        return self.active

    async def apps(self):
        self._record("apps")
        return list(self._apps)

    async def keypress(self, command):
        self._record("keypress", command)

    async def text(self, text):
        self._record("text", text)

    async def launch(self, app_id):
        self._record("launch", app_id)

    async def tune(self, channel):
        self._record("tune", channel)


class RecordingHost:
    """DeviceHost double recording every call"""

    def __init__(self):
        self.devices: Dict[str, Any] = {}
        self.registrations: List[str] = []
        self.unregistrations: List[str] = []
        self.property_changes: List[tuple] = []
        self.action_statuses: List[tuple] = []

    def register_device(self, device):
        self.registrations.append(device.id)
        self.devices[device.id] = device

    def unregister_device(self, device):
        self.unregistrations.append(device.id)
        self.devices.pop(device.id, None)

    def has_device(self, device_id):
        return device_id in self.devices

    def notify_property_changed(self, device_id, property_name, value):
        self.property_changes.append((device_id, property_name, value))

    def notify_action_status(self, device_id, action_name, status):
        self.action_statuses.append((device_id, action_name, status))

    def terminal_statuses(self, device_id=None):
        return [
            s for s in self.action_statuses
            if s[2] != "pending" and (device_id is None or s[0] == device_id)
        ]


class FakeNetwork:
    """Client factory + SSDP discovery double sharing one set of fake devices"""

    def __init__(self):
        self.clients: Dict[str, FakeRokuClient] = {}
        self.created: List[str] = []
        self.discovered: List[str] = []
        self.discover_error: Optional[Exception] = None
        self.discover_gate: Optional[asyncio.Event] = None
        self.discover_calls = 0

    def add(self, address: str, **kwargs) -> FakeRokuClient:
        client = FakeRokuClient(address, **kwargs)
        self.clients[client.address] = client
        return client

    def client_factory(self, address, request_timeout=5):
        address = normalize_address(address)
        self.created.append(address)
        if address not in self.clients:
            self.add(address, fail={"info"})
        return self.clients[address]

    async def discover(self, timeout=3, request_timeout=5):
        self.discover_calls += 1
        if self.discover_gate is not None:
            await self.discover_gate.wait()
        if self.discover_error is not None:
            raise self.discover_error
        return [self.clients[normalize_address(a)] for a in self.discovered]


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def network():
    return FakeNetwork()


@pytest.fixture
def config():
    return {
        "devices": [],
        "network": {"discovery_timeout": 0.1, "request_timeout": 1},
        "polling": {"active_app_interval_seconds": 60},
    }
