"""
Remote client data structures
"""

import re
from typing import Any, Dict, Mapping, Optional
from dataclasses import dataclass, field


class RemoteError(Exception):
    """Transport failure talking to a device (unreachable, bad status, malformed reply)"""


_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])([A-Z])')


def _normalize_key(key: str) -> str:
    """friendly-device-name / friendlyDeviceName -> friendly_device_name"""
    key = _CAMEL_BOUNDARY.sub(r'_\1', key)
    return key.replace('-', '_').lower()


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return value == 'true'


@dataclass
class DeviceInfo:
    """Subset of /query/device-info the bridge relies on"""
    device_id: str
    friendly_device_name: str
    friendly_model_name: str
    is_tv: bool = False
    supports_find_remote: bool = False
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'DeviceInfo':
        """Build from a device-info payload; accepts kebab, camel or snake keys"""
        raw = {_normalize_key(k): v for k, v in data.items()}
        device_id = raw.get('device_id') or raw.get('serial_number')
        if not device_id:
            raise RemoteError("device-info response has no device id")

        return cls(
            device_id=str(device_id),
            friendly_device_name=raw.get('friendly_device_name')
                or raw.get('user_device_name')
                or f"Roku {device_id}",
            friendly_model_name=raw.get('friendly_model_name') or raw.get('model_name') or 'Roku',
            is_tv=_flag(raw.get('is_tv')),
            supports_find_remote=_flag(raw.get('supports_find_remote')),
            raw=raw,
        )


@dataclass(frozen=True)
class App:
    """An installed channel/application"""
    id: str
    name: str
    type: Optional[str] = None
    version: Optional[str] = None
