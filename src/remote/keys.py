"""
ECP keypress catalog

Maps symbolic key names to the command string sent to /keypress/<command>.
Several aliases share a command, so consumers should deduplicate.
"""

from typing import List

KEYS = {
    'HOME': 'Home',
    'REV': 'Rev',
    'REVERSE': 'Rev',
    'FWD': 'Fwd',
    'FORWARD': 'Fwd',
    'PLAY': 'Play',
    'SELECT': 'Select',
    'LEFT': 'Left',
    'RIGHT': 'Right',
    'DOWN': 'Down',
    'UP': 'Up',
    'BACK': 'Back',
    'INSTANT_REPLAY': 'InstantReplay',
    'INFO': 'Info',
    'BACKSPACE': 'Backspace',
    'SEARCH': 'Search',
    'ENTER': 'Enter',
    'FIND_REMOTE': 'FindRemote',

    # TV-class devices only
    'VOLUME_DOWN': 'VolumeDown',
    'VOLUME_MUTE': 'VolumeMute',
    'VOLUME_UP': 'VolumeUp',
    'POWER': 'Power',
    'POWER_OFF': 'PowerOff',
    'POWER_ON': 'PowerOn',
    'CHANNEL_UP': 'ChannelUp',
    'CHANNEL_DOWN': 'ChannelDown',
    'INPUT_TUNER': 'InputTuner',
    'INPUT_HDMI1': 'InputHDMI1',
    'INPUT_HDMI2': 'InputHDMI2',
    'INPUT_HDMI3': 'InputHDMI3',
    'INPUT_HDMI4': 'InputHDMI4',
    'INPUT_AV1': 'InputAV1',
}


def all_commands() -> List[str]:
    """Every command in the catalog, aliases included"""
    return list(KEYS.values())
