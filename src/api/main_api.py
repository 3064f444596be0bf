"""
Main FastAPI application setup

Local HTTP API for the Roku bridge: device listing, action invocation and
discovery control
"""

from fastapi import FastAPI
from typing import Dict
import logging

# Import modular route factories
from .device_routes import create_device_routes
from .system_routes import create_system_routes

logger = logging.getLogger(__name__)


class BridgeAPI:
    """Local HTTP API exposing managed devices to the host"""

    def __init__(self, manager, registry, config: Dict):
        self.manager = manager
        self.registry = registry
        self.config = config
        self.app = FastAPI(
            title="Roku Local Bridge",
            description="Local API for Roku discovery, state and remote control",
            version="1.0.0"
        )
        self._setup_routes()

    def _setup_routes(self):
        """Setup FastAPI routes using modular approach"""
        self.app.include_router(create_device_routes(self.manager, self.registry))
        self.app.include_router(create_system_routes(self.manager, self.registry))
