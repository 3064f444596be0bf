"""
In-process host registry

Implements the host side of the device API: keeps registered devices and
the latest property/action notifications so the HTTP API can report them.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class DeviceRegistry:
    """Host registry for bridge devices"""

    def __init__(self):
        self.devices: Dict[str, Any] = {}
        self.action_status: Dict[str, Dict[str, str]] = {}  # device_id -> action -> status
        self.listeners: List[Callable[[str, Dict[str, Any]], None]] = []
        self.started_at = time.time()

    def add_listener(self, callback: Callable[[str, Dict[str, Any]], None]):
        """Add callback receiving (event_type, payload) for every notification"""
        self.listeners.append(callback)

    def _emit(self, event_type: str, payload: Dict[str, Any]):
        for callback in self.listeners:
            try:
                callback(event_type, payload)
            except Exception as e:
                logger.error(f"Registry listener failed for {event_type}: {e}")

    # ================== DeviceHost ==================

    def register_device(self, device) -> None:
        self.devices[device.id] = device
        logger.info(f"Device added: {device.name} ({device.id})")
        self._emit('device_added', {"device_id": device.id})

    def unregister_device(self, device) -> None:
        if self.devices.pop(device.id, None) is None:
            return
        self.action_status.pop(device.id, None)
        logger.info(f"Device removed: {device.name} ({device.id})")
        self._emit('device_removed', {"device_id": device.id})

    def has_device(self, device_id: str) -> bool:
        return device_id in self.devices

    def notify_property_changed(self, device_id: str, property_name: str, value: Any) -> None:
        logger.debug(f"Property changed on {device_id}: {property_name}={value!r}")
        self._emit('property_changed', {"device_id": device_id, "name": property_name, "value": value})

    def notify_action_status(self, device_id: str, action_name: str, status: str) -> None:
        self.action_status.setdefault(device_id, {})[action_name] = status
        logger.debug(f"Action {action_name} on {device_id}: {status}")
        self._emit('action_status', {"device_id": device_id, "name": action_name, "status": status})

    # ================== QUERIES ==================

    def get(self, device_id: str) -> Optional[Any]:
        return self.devices.get(device_id)

    def describe_all(self) -> List[Dict[str, Any]]:
        return [device.to_dict() for device in self.devices.values()]
