"""
API module for device control and monitoring
"""

from .main_api import BridgeAPI
from .device_routes import create_device_routes
from .system_routes import create_system_routes
from .registry import DeviceRegistry

__all__ = ['BridgeAPI', 'create_device_routes', 'create_system_routes', 'DeviceRegistry']
