"""
Device control API routes
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Any, Optional
import logging

from discovery.models import DeviceNotFoundError

logger = logging.getLogger(__name__)

# Request models
class ActionRequest(BaseModel):
    input: Any = None

class ActionResponse(BaseModel):
    device_id: str
    name: str
    status: str
    error: Optional[str] = None


def create_device_routes(manager, registry):
    """Create device listing and action routes"""
    router = APIRouter(prefix="/api/devices", tags=["devices"])

    @router.get("")
    async def list_devices():
        """Thing descriptions of every registered device"""
        return registry.describe_all()

    @router.get("/{device_id}")
    async def get_device(device_id: str):
        device = registry.get(device_id)
        if device is None:
            raise HTTPException(status_code=404, detail=f"Device not found: {device_id}")
        return device.to_dict()

    @router.post("/{device_id}/actions/{action_name}", response_model=ActionResponse)
    async def perform_action(device_id: str, action_name: str, request: ActionRequest):
        """Run an action and report its terminal status"""
        try:
            invocation = await manager.perform_action(device_id, action_name, request.input)
        except DeviceNotFoundError:
            raise HTTPException(status_code=404, detail=f"Device not found: {device_id}")

        return ActionResponse(
            device_id=device_id,
            name=invocation.name,
            status=invocation.status.value,
            error=invocation.error,
        )

    @router.delete("/{device_id}")
    async def remove_device(device_id: str):
        removed = await manager.remove_device(device_id)
        if not removed:
            raise HTTPException(status_code=404, detail=f"Device not found: {device_id}")
        return {"device_id": device_id, "removed": True}

    return router
