"""
Interface of the host device-management framework consumed by the bridge
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DeviceHost(Protocol):
    """Registration and notification API the host exposes to device adapters"""

    def register_device(self, device) -> None:
        ...

    def unregister_device(self, device) -> None:
        ...

    def has_device(self, device_id: str) -> bool:
        ...

    def notify_property_changed(self, device_id: str, property_name: str, value: Any) -> None:
        ...

    def notify_action_status(self, device_id: str, action_name: str, status: str) -> None:
        ...
