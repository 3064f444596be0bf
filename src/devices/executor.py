"""
Action execution against a Roku device's remote client
"""

import logging
from typing import Awaitable, Callable, Dict

from .models import ActionInvocation, ActionKind, ActionResult

logger = logging.getLogger(__name__)


class ActionExecutor:
    """Runs one named action against a device and reports the outcome.

    Every ActionKind maps to exactly one handler. Handlers validate input
    first and return a failed result without touching the network when it
    is invalid; otherwise they issue exactly one remote call. Remote errors
    become failed results, so perform() never raises.
    """

    def __init__(self):
        self._handlers: Dict[ActionKind, Callable[..., Awaitable[ActionResult]]] = {
            ActionKind.SEND_TEXT: self._send_text,
            ActionKind.SEND_KEYPRESS: self._send_keypress,
            ActionKind.LAUNCH_APP: self._launch_app,
            ActionKind.TUNE_TO_CHANNEL: self._tune_to_channel,
        }
        missing = set(ActionKind) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No handler for actions: {sorted(k.value for k in missing)}")

    async def perform(self, device, invocation: ActionInvocation) -> ActionResult:
        kind = ActionKind.from_name(invocation.name)
        if kind is None:
            return ActionResult.failed(f"Unknown action: {invocation.name}")

        if invocation.name not in device.actions:
            return ActionResult.failed(f"Action {invocation.name} not supported by {device.id}")

        try:
            return await self._handlers[kind](device, invocation.input)
        except Exception as e:
            logger.error(f"Failed to perform {invocation.name} on {device.id}: {e}")
            return ActionResult.failed(str(e))

    async def _send_text(self, device, value) -> ActionResult:
        if not isinstance(value, str):
            return ActionResult.failed("Text input must be a string")
        await device.client.text(value)
        return ActionResult.ok()

    async def _send_keypress(self, device, value) -> ActionResult:
        if value not in device.keypress_commands:
            return ActionResult.failed(f"Key not found: {value}")
        await device.client.keypress(value)
        return ActionResult.ok()

    async def _launch_app(self, device, value) -> ActionResult:
        app = next((a for a in device.apps if a.name == value), None)
        if app is None:
            return ActionResult.failed(f"App not found: {value}")
        await device.client.launch(app.id)
        return ActionResult.ok()

    async def _tune_to_channel(self, device, value) -> ActionResult:
        if value is None or isinstance(value, bool) or not str(value).strip():
            return ActionResult.failed("Channel input is required")
        await device.client.tune(str(value).strip())
        return ActionResult.ok()
