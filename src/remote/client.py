"""
Roku External Control Protocol (ECP) client

Thin aiohttp wrapper around the device's HTTP control endpoints on port 8060.
Every failure is raised as RemoteError so callers handle one exception type.
"""

import asyncio
import logging
import xml.etree.ElementTree as ET
from typing import List, Optional
from urllib.parse import quote, urlparse

import aiohttp

from http_helper import create_device_session
from .models import App, DeviceInfo, RemoteError

logger = logging.getLogger(__name__)

ECP_PORT = 8060


def normalize_address(address: str) -> str:
    """Return the canonical http://<host>:<port> form of a device address"""
    parsed = urlparse(address if '://' in address else f"http://{address}")
    if not parsed.hostname:
        raise ValueError(f"Invalid device address: {address}")
    # Raises ValueError for ports outside 0-65535
    port = parsed.port
    return f"http://{parsed.hostname}:{port if port is not None else ECP_PORT}"


class RokuClient:
    """Controls a single Roku device"""

    def __init__(self, address: str, request_timeout: float = 5):
        self.address = normalize_address(address)
        self.request_timeout = request_timeout

    @property
    def ip(self) -> str:
        return urlparse(self.address).hostname

    def __repr__(self) -> str:
        return f"RokuClient({self.address!r})"

    # ================== QUERIES ==================

    async def info(self) -> DeviceInfo:
        """GET /query/device-info"""
        root = await self._get_xml('/query/device-info')
        return DeviceInfo.from_mapping({child.tag: (child.text or '').strip() for child in root})

    async def active_app(self) -> Optional[App]:
        """GET /query/active-app; None while the home screen is showing"""
        root = await self._get_xml('/query/active-app')
        app = root.find('app')
        if app is None or not app.get('id'):
            return None
        return self._parse_app(app)

    async def apps(self) -> List[App]:
        """GET /query/apps"""
        root = await self._get_xml('/query/apps')
        return [self._parse_app(app) for app in root.findall('app')]

    # ================== COMMANDS ==================

    async def keypress(self, command: str):
        await self._post(f"/keypress/{quote(command, safe='')}")

    async def text(self, text: str):
        """Type text one literal character at a time"""
        for char in text:
            await self._post(f"/keypress/Lit_{quote(char, safe='')}")

    async def launch(self, app_id: str):
        await self._post(f"/launch/{quote(str(app_id), safe='')}")

    async def tune(self, channel: str):
        """Switch the TV tuner input to a channel, e.g. '5.1'"""
        await self._post(f"/launch/tvinput.dtv?ch={quote(str(channel), safe='')}")

    # ================== TRANSPORT ==================

    @staticmethod
    def _parse_app(element: ET.Element) -> App:
        return App(
            id=element.get('id'),
            name=(element.text or '').strip(),
            type=element.get('type'),
            version=element.get('version'),
        )

    async def _get_xml(self, path: str) -> ET.Element:
        url = f"{self.address}{path}"
        try:
            async with create_device_session(self.request_timeout) as session:
                async with session.get(url) as response:
                    if response.status != 200:
                        raise RemoteError(f"GET {url} returned HTTP {response.status}")
                    body = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RemoteError(f"GET {url} failed: {e}") from e

        try:
            return ET.fromstring(body)
        except ET.ParseError as e:
            raise RemoteError(f"Malformed XML from {url}: {e}") from e

    async def _post(self, path: str):
        url = f"{self.address}{path}"
        logger.debug(f"Command sent to {url}")
        try:
            async with create_device_session(self.request_timeout) as session:
                async with session.post(url) as response:
                    if not 200 <= response.status < 300:
                        raise RemoteError(f"POST {url} returned HTTP {response.status}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RemoteError(f"POST {url} failed: {e}") from e
