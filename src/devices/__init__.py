"""
Device entities, capability resolution, action execution and polling
"""

from .entity import RokuDevice
from .executor import ActionExecutor
from .host import DeviceHost
from .models import ActionInvocation, ActionKind, ActionResult, ActionStatus
from .poller import ActiveAppPoller

__all__ = [
    'RokuDevice', 'ActionExecutor', 'DeviceHost', 'ActionInvocation',
    'ActionKind', 'ActionResult', 'ActionStatus', 'ActiveAppPoller',
]
