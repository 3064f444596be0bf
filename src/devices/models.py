"""
Device entity data structures: properties, action descriptions and invocations
"""

import time
from enum import Enum
from typing import Any, Dict, Optional
from dataclasses import dataclass, field


class ActionKind(Enum):
    """Every action a Roku device can expose"""
    SEND_TEXT = "sendText"
    SEND_KEYPRESS = "sendKeypress"
    LAUNCH_APP = "launchApp"
    TUNE_TO_CHANNEL = "tuneToChannel"

    @classmethod
    def from_name(cls, name: str) -> Optional['ActionKind']:
        try:
            return cls(name)
        except ValueError:
            return None


class ActionStatus(Enum):
    """Action invocation status"""
    PENDING = "pending"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class ActionResult:
    """Outcome of one executor handler"""
    success: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> 'ActionResult':
        return cls(success=True)

    @classmethod
    def failed(cls, error: str) -> 'ActionResult':
        return cls(success=False, error=error)


@dataclass
class ActionInvocation:
    """A single request to execute one named action on a device"""
    name: str
    input: Any = None
    status: ActionStatus = ActionStatus.PENDING
    error: Optional[str] = None
    time_requested: float = field(default_factory=time.time)
    time_completed: Optional[float] = None

    @property
    def finished(self) -> bool:
        return self.status is not ActionStatus.PENDING

    def finish(self, result: ActionResult):
        """Move to a terminal status; only the first call has any effect"""
        if self.finished:
            return
        self.status = ActionStatus.COMPLETED if result.success else ActionStatus.ERROR
        self.error = result.error
        self.time_completed = time.time()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "input": self.input,
            "status": self.status.value,
            "error": self.error,
            "time_requested": self.time_requested,
            "time_completed": self.time_completed,
        }


@dataclass
class ActionDescription:
    """Action metadata published to the host"""
    label: str
    input: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.label, "input": self.input}


@dataclass
class DeviceProperty:
    """A read-only device property with its cached value"""
    name: str
    label: str
    type: str = "string"
    read_only: bool = True
    value: Any = None

    def set_cached_value(self, value: Any) -> bool:
        """Store value; return True if it differs from what was cached"""
        if value == self.value:
            return False
        self.value = value
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "title": self.label,
            "type": self.type,
            "readOnly": self.read_only,
            "value": self.value,
        }
