"""
Roku Bridge Server - Main orchestrator for discovery, devices and the local API
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional
import uvicorn

# Local imports
from config_loader import load_config, setup_logging
from api.main_api import BridgeAPI
from api.registry import DeviceRegistry
from discovery.manager import DeviceDiscoveryManager

logger = logging.getLogger(__name__)

class RokuBridgeServer:
    """Main server wiring the host registry, the discovery manager and the HTTP API"""

    def __init__(self, config_path: str = "config/config.yaml", config: Optional[Dict] = None):
        self.config = config if config is not None else load_config(config_path)
        setup_logging(self.config)

        self.registry = DeviceRegistry()
        self.manager = DeviceDiscoveryManager(self.registry, self.config)
        self.api = BridgeAPI(self.manager, self.registry, self.config)

        self.running = False
        self.tasks: List[asyncio.Task] = []
        self.started_at: Optional[float] = None

    async def start(self, serve_api: bool = True):
        """Start all services; blocks while the API server runs"""
        logger.info("Starting Roku Local Bridge...")
        self.started_at = time.time()

        try:
            await self.start_devices()

            self.running = True
            self.tasks = [
                asyncio.create_task(self._discovery_service()),
                asyncio.create_task(self._monitoring_service())
            ]
            logger.info(f"All services started successfully ({len(self.tasks)} background tasks)")

            if serve_api:
                await self._start_api_server()

        except Exception as e:
            logger.error(f"Server startup failed: {e}")
            await self.stop()
            raise

    async def start_devices(self):
        """Register configured devices and kick off the first discovery sweep"""
        results = await self.manager.add_known_devices(self.config.get('devices', []))
        registered = sum(1 for result in results if result.registered)
        logger.info(f"Configured devices: {registered}/{len(results)} registered")

        if self.config['network'].get('discover_on_startup', True):
            self.manager.start_discovery()

    async def stop(self):
        """Stop all server services gracefully"""
        logger.info("Stopping server...")
        self.running = False

        for task in self.tasks:
            task.cancel()
        if self.tasks:
            await asyncio.gather(*self.tasks, return_exceptions=True)
        self.tasks = []

        await self.manager.close()
        logger.info("Server stopped")

    # ================== PERIODIC DISCOVERY ==================

    async def _discovery_service(self):
        """Background service for periodic discovery sweeps"""
        if not self.config['network'].get('enable_periodic_discovery', True):
            logger.info("Periodic discovery disabled")
            return

        scan_interval = self.config['network']['scan_interval_minutes'] * 60
        logger.info(f"Discovery service started (every {scan_interval/60} minutes)")

        while self.running:
            try:
                await asyncio.sleep(scan_interval)
                if not self.running:
                    break

                logger.info("[REFRESH] Running periodic discovery...")
                sweep = self.manager.start_discovery()
                if sweep is None:
                    logger.debug("Previous sweep still running, skipping")
                    continue
                await sweep

            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Discovery service error: {e}")

    # ================== MONITORING ==================

    async def _monitoring_service(self):
        """Background service logging device and discovery health"""
        check_interval = self.config['monitoring']['health_check_interval_minutes'] * 60

        logger.info(f"Monitoring service started (every {check_interval/60} minutes)")

        while self.running:
            try:
                await asyncio.sleep(check_interval)
                if not self.running:
                    break

                devices = list(self.manager.devices.values())
                stalled = [device.id for device in devices if not device.poller.running]
                discovery_health = "ACTIVE" if self.manager.pairing else "READY"

                logger.info(f"Health check: {len(devices)} devices, "
                            f"{len(self.manager.known_addresses)} known addresses, "
                            f"discovery: {discovery_health}")
                if stalled:
                    logger.warning(f"Polling stopped for: {', '.join(stalled)}")

            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Monitoring service error: {e}")

    async def _start_api_server(self):
        """Start the FastAPI server"""
        config = uvicorn.Config(
            self.api.app,
            host=self.config['api']['host'],
            port=self.config['api']['port'],
            log_level="info",
            access_log=False  # We handle our own logging
        )

        server = uvicorn.Server(config)

        logger.info(f"Starting API server on {self.config['api']['host']}:{self.config['api']['port']}")
        logger.info(f"API documentation: http://localhost:{self.config['api']['port']}/docs")

        await server.serve()
