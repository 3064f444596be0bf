"""
System health and discovery control API routes
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import Optional
from datetime import datetime, timezone
import logging
import time

logger = logging.getLogger(__name__)

# Response models
class DiscoveryStatusResponse(BaseModel):
    pairing: bool
    known_addresses: int
    last_sweep: Optional[dict] = None

class HealthResponse(BaseModel):
    status: str
    devices: int
    pairing: bool
    uptime_seconds: float
    timestamp: datetime


def create_system_routes(manager, registry):
    """Create discovery control and system monitoring routes"""
    router = APIRouter(prefix="/api", tags=["system"])

    def _discovery_status() -> DiscoveryStatusResponse:
        return DiscoveryStatusResponse(
            pairing=manager.pairing,
            known_addresses=len(manager.known_addresses),
            last_sweep=manager.last_result.to_dict() if manager.last_result else None,
        )

    @router.post("/discovery/start", response_model=DiscoveryStatusResponse)
    async def start_discovery():
        """Start a discovery sweep (no-op if one is running)"""
        if manager.start_discovery() is None:
            logger.info("Discovery start requested while a sweep is active")
        return _discovery_status()

    @router.post("/discovery/cancel", response_model=DiscoveryStatusResponse)
    async def cancel_discovery():
        manager.cancel_pairing()
        return _discovery_status()

    @router.get("/discovery/status", response_model=DiscoveryStatusResponse)
    async def discovery_status():
        return _discovery_status()

    @router.get("/system/health", response_model=HealthResponse)
    async def system_health():
        """System health check"""
        return HealthResponse(
            status="healthy",
            devices=len(registry.devices),
            pairing=manager.pairing,
            uptime_seconds=time.time() - registry.started_at,
            timestamp=datetime.now(timezone.utc),
        )

    return router
