"""
Remote control client for Roku devices (ECP over HTTP, SSDP discovery)
"""

from .client import RokuClient, normalize_address
from .keys import KEYS, all_commands
from .models import App, DeviceInfo, RemoteError
from .ssdp import discover_all

__all__ = [
    'RokuClient', 'normalize_address', 'KEYS', 'all_commands',
    'App', 'DeviceInfo', 'RemoteError', 'discover_all',
]
