"""
Capability resolution for Roku devices

Pure functions computing which keypresses and actions a specific device
supports, from its device-info flags and already-fetched app catalog.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from remote.models import App, DeviceInfo
from .models import ActionDescription, ActionKind

TV_ONLY_PREFIXES = ('Volume', 'Channel', 'Input', 'Power')
FIND_REMOTE_COMMAND = 'FindRemote'


def resolve_keypress_commands(info: DeviceInfo, catalog: Iterable[str]) -> List[str]:
    """Keypress commands valid for this device, deduplicated and sorted"""
    commands = set()
    for command in catalog:
        if not info.is_tv and command.startswith(TV_ONLY_PREFIXES):
            continue
        if command == FIND_REMOTE_COMMAND and not info.supports_find_remote:
            continue
        commands.add(command)
    return sorted(commands)


def resolve_launchable_apps(apps: Sequence[App]) -> List[str]:
    """Names of installed apps, sorted"""
    return sorted(app.name for app in apps)


def supports_tuning(info: DeviceInfo) -> bool:
    return info.is_tv


def resolve_actions(
    info: DeviceInfo,
    catalog: Iterable[str],
    apps: Optional[Sequence[App]] = None,
) -> Dict[str, ActionDescription]:
    """Full action map for a device; launchApp only once the app catalog is known"""
    actions = {
        ActionKind.SEND_TEXT.value: ActionDescription(
            label='Send Text',
            input={'type': 'string'},
        ),
        ActionKind.SEND_KEYPRESS.value: ActionDescription(
            label='Send Keypress',
            input={'type': 'string', 'enum': resolve_keypress_commands(info, catalog)},
        ),
    }

    if apps is not None:
        actions[ActionKind.LAUNCH_APP.value] = ActionDescription(
            label='Launch App',
            input={'type': 'string', 'enum': resolve_launchable_apps(apps)},
        )

    if supports_tuning(info):
        actions[ActionKind.TUNE_TO_CHANNEL.value] = ActionDescription(
            label='Tune to Channel',
            input={'type': 'string'},
        )

    return actions
