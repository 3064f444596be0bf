from conftest import make_info

from devices.capabilities import (
    resolve_actions,
    resolve_keypress_commands,
    resolve_launchable_apps,
    supports_tuning,
)
from remote.keys import all_commands
from remote.models import App

TV_ONLY = ('Volume', 'Channel', 'Input', 'Power')


def test_non_tv_excludes_tv_only_commands():
    info = make_info(is_tv="false", supports_find_remote="true")
    catalog = all_commands() + ["PowerOff", "VolumeUp", "ChannelDown", "InputHDMI2", "Power"]

    commands = resolve_keypress_commands(info, catalog)

    assert not [c for c in commands if c.startswith(TV_ONLY)]
    assert "Power" not in commands
    assert "Home" in commands
    assert "FindRemote" in commands


def test_tv_with_find_remote_keeps_everything():
    info = make_info(is_tv="true", supports_find_remote="true")

    commands = resolve_keypress_commands(info, all_commands())

    assert "FindRemote" in commands
    assert "VolumeUp" in commands
    assert "InputHDMI1" in commands
    assert "Power" in commands


def test_find_remote_requires_support():
    info = make_info(is_tv="true", supports_find_remote="false")
    assert "FindRemote" not in resolve_keypress_commands(info, all_commands())


def test_keypress_commands_are_deduplicated_and_sorted():
    info = make_info(is_tv="true")
    catalog = ["Select", "Home", "Rev", "Home", "Back", "Rev"]

    assert resolve_keypress_commands(info, catalog) == ["Back", "Home", "Rev", "Select"]


def test_flags_only_accept_literal_true():
    info = make_info(is_tv="yes", supports_find_remote="TRUE")
    assert not info.is_tv
    assert not info.supports_find_remote
    assert not supports_tuning(info)


def test_launchable_apps_sorted_by_name():
    apps = [App(id="2", name="YouTube"), App(id="1", name="Hulu"), App(id="3", name="Amazon")]
    assert resolve_launchable_apps(apps) == ["Amazon", "Hulu", "YouTube"]


def test_resolve_actions_without_apps():
    actions = resolve_actions(make_info(is_tv="false"), all_commands())
    assert set(actions) == {"sendText", "sendKeypress"}


def test_resolve_actions_for_tv_with_apps():
    apps = [App(id="12", name="Netflix")]
    actions = resolve_actions(make_info(is_tv="true"), all_commands(), apps)

    assert set(actions) == {"sendText", "sendKeypress", "launchApp", "tuneToChannel"}
    assert actions["launchApp"].input == {"type": "string", "enum": ["Netflix"]}
    assert actions["tuneToChannel"].label == "Tune to Channel"
