import logging

import pytest
import yaml

from config_loader import TimezoneFormatter, get_sample_config, load_config, setup_logging


def write_config(tmp_path, data):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data))
    return str(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_defaults_applied(tmp_path):
    path = write_config(tmp_path, {"network": {}, "polling": {}})

    config = load_config(path)

    assert config["devices"] == []
    assert config["polling"]["active_app_interval_seconds"] == 5
    assert config["network"]["scan_interval_minutes"] == 30
    assert config["api"]["port"] == 8000
    assert config["logging"]["level"] == "INFO"
    assert config["monitoring"]["health_check_interval_minutes"] == 5


def test_explicit_values_preserved(tmp_path):
    path = write_config(tmp_path, {
        "devices": ["http://192.168.1.5:8060"],
        "network": {"request_timeout": 2},
        "polling": {"active_app_interval_seconds": 10},
    })

    config = load_config(path)

    assert config["devices"] == ["http://192.168.1.5:8060"]
    assert config["network"]["request_timeout"] == 2
    assert config["polling"]["active_app_interval_seconds"] == 10


@pytest.mark.parametrize("data", [
    {"polling": {}},
    {"network": {}},
    {"network": {}, "polling": {}, "devices": "http://192.168.1.5:8060"},
    {"network": {}, "polling": {"active_app_interval_seconds": 0}},
])
def test_invalid_config_rejected(tmp_path, data):
    with pytest.raises(ValueError):
        load_config(write_config(tmp_path, data))


def test_sample_config_is_valid(tmp_path):
    config = load_config(write_config(tmp_path, get_sample_config()))
    assert config["logging"]["timezone"] == "America/New_York"


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "bridge.log"
    setup_logging({"logging": {"level": "DEBUG", "file": str(log_file), "console_output": False}})

    logging.getLogger("test").info("hello bridge")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "hello bridge" in log_file.read_text()
    for handler in list(logging.getLogger().handlers):
        handler.close()
        logging.getLogger().removeHandler(handler)


def test_unknown_timezone_falls_back_to_utc():
    formatter = TimezoneFormatter("%(message)s", "Mars/Olympus")
    assert formatter.tz.zone == "UTC"
