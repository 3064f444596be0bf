"""
Roku device entity - identity, cached properties and available actions
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Set

from remote.keys import all_commands
from remote.models import App, DeviceInfo
from .capabilities import resolve_actions, resolve_keypress_commands
from .executor import ActionExecutor
from .host import DeviceHost
from .models import ActionDescription, ActionInvocation, ActionKind, ActionResult, DeviceProperty
from .poller import ActiveAppPoller, DEFAULT_POLL_INTERVAL

logger = logging.getLogger(__name__)

SCHEMA_CONTEXT = 'https://iot.mozilla.org/schemas'
ACTIVE_APP_PROPERTY = 'activeApp'


class RokuDevice:
    """One Roku player or TV exposed to the host.

    Construction is synchronous and never touches the network. Call
    initialize() to run the seeding fetches before registering the device.
    """

    def __init__(
        self,
        host: DeviceHost,
        client,
        info: DeviceInfo,
        catalog: Optional[Iterable[str]] = None,
        executor: Optional[ActionExecutor] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self.host = host
        self.client = client
        self.info = info

        self.id = f"roku-{info.device_id}"
        self.name = info.friendly_device_name
        self.description = info.friendly_model_name
        self.context = SCHEMA_CONTEXT
        self.types: Set[str] = set()

        self.catalog = list(catalog) if catalog is not None else all_commands()
        self.keypress_commands: List[str] = resolve_keypress_commands(info, self.catalog)
        self.apps: List[App] = []
        self.actions: Dict[str, ActionDescription] = resolve_actions(info, self.catalog)

        self.properties: Dict[str, DeviceProperty] = {
            ACTIVE_APP_PROPERTY: DeviceProperty(name=ACTIVE_APP_PROPERTY, label='Active App'),
        }

        self.executor = executor or ActionExecutor()
        self.poller = ActiveAppPoller(self, poll_interval)

    @property
    def address(self) -> str:
        return self.client.address

    @property
    def active_app(self) -> Optional[str]:
        return self.properties[ACTIVE_APP_PROPERTY].value

    # ================== SEEDING ==================

    async def initialize(self):
        """Fetch the current app and the app catalog concurrently; raises if either fails"""
        await asyncio.gather(self._seed_active_app(), self._seed_apps())

    async def _seed_active_app(self):
        app = await self.client.active_app()
        self.properties[ACTIVE_APP_PROPERTY].set_cached_value(app.name if app else None)

    async def _seed_apps(self):
        self.apps = list(await self.client.apps())
        self.actions = resolve_actions(self.info, self.catalog, self.apps)

    # ================== STATE ==================

    def update_active_app(self, app: Optional[App]) -> bool:
        """Cache the polled app and notify the host if it changed"""
        prop = self.properties[ACTIVE_APP_PROPERTY]
        changed = prop.set_cached_value(app.name if app else None)
        if changed:
            logger.info(f"{self.id} active app changed: {prop.value}")
            self.host.notify_property_changed(self.id, prop.name, prop.value)
        return changed

    def start_polling(self):
        self.poller.start()

    async def stop_polling(self):
        await self.poller.stop()

    # ================== ACTIONS ==================

    async def perform_action(self, action_name: str, action_input: Any = None) -> ActionInvocation:
        """Run an action; the returned invocation is always in a terminal state"""
        invocation = ActionInvocation(name=action_name, input=action_input)

        if ActionKind.from_name(action_name) is not None:
            self.host.notify_action_status(self.id, action_name, invocation.status.value)
            try:
                result = await self.executor.perform(self, invocation)
            except asyncio.CancelledError:
                logger.warning(f"Action {action_name} on {self.id} was cancelled")
                invocation.finish(ActionResult.failed("Action cancelled"))
                self.host.notify_action_status(self.id, action_name, invocation.status.value)
                raise
        else:
            result = ActionResult.failed(f"Unknown action: {action_name}")

        if not result.success:
            logger.warning(f"Action {action_name} failed on {self.id}: {result.error}")

        invocation.finish(result)
        self.host.notify_action_status(self.id, action_name, invocation.status.value)
        return invocation

    # ================== DESCRIPTION ==================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.name,
            "description": self.description,
            "@context": self.context,
            "@type": sorted(self.types),
            "address": self.address,
            "properties": {name: prop.to_dict() for name, prop in self.properties.items()},
            "actions": {name: action.to_dict() for name, action in self.actions.items()},
        }

    def __repr__(self) -> str:
        return f"RokuDevice({self.id!r}, {self.address!r})"
