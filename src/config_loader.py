"""
Configuration loader for the Roku Local Bridge
Loads and validates configuration from YAML files
"""

import yaml
import logging
from typing import Dict, Any
from pathlib import Path
from datetime import datetime
import pytz

logger = logging.getLogger(__name__)

def load_config(config_path: str = "config/config.yaml") -> Dict[str, Any]:
    """
    Load configuration from YAML file with validation
    """
    try:
        config_file = Path(config_path)
        if not config_file.exists():
            logger.error(f"Configuration file not found: {config_path}")
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r') as f:
            config = yaml.safe_load(f) or {}

        # Validate required sections
        _validate_config(config)

        # Apply defaults
        config = _apply_defaults(config)

        logger.info(f"Configuration loaded from {config_path}")
        return config

    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise

def _validate_config(config: Dict) -> None:
    """Validate that required configuration sections exist"""
    required_sections = ['network', 'polling']

    for section in required_sections:
        if not isinstance(config.get(section), dict):
            raise ValueError(f"Missing required configuration section: {section}")

    # Configured devices must be a list of strings; malformed entries are
    # filtered later by the discovery manager
    devices = config.get('devices', [])
    if devices is not None and not isinstance(devices, list):
        raise ValueError("devices must be a list of addresses")

    # Validate polling section
    interval = config['polling'].get('active_app_interval_seconds', 5)
    if not isinstance(interval, (int, float)) or interval <= 0:
        raise ValueError("polling.active_app_interval_seconds must be a positive number")

def _apply_defaults(config: Dict) -> Dict:
    """Apply default values to configuration"""

    if config.get('devices') is None:
        config['devices'] = []

    # Network defaults
    network_defaults = {
        'discovery_timeout': 3,
        'request_timeout': 5,
        'scan_interval_minutes': 30,
        'enable_periodic_discovery': True,
        'discover_on_startup': True
    }
    for key, default_value in network_defaults.items():
        if key not in config['network']:
            config['network'][key] = default_value

    # Polling defaults
    polling_defaults = {
        'active_app_interval_seconds': 5
    }
    for key, default_value in polling_defaults.items():
        if key not in config['polling']:
            config['polling'][key] = default_value

    # API defaults
    if 'api' not in config:
        config['api'] = {}
    api_defaults = {
        'host': '0.0.0.0',
        'port': 8000
    }
    for key, default_value in api_defaults.items():
        if key not in config['api']:
            config['api'][key] = default_value

    # Logging defaults
    if 'logging' not in config:
        config['logging'] = {}
    logging_defaults = {
        'level': 'INFO',
        'file': 'logs/roku_bridge.log',
        'console_output': True,
        'timezone': 'UTC'
    }
    for key, default_value in logging_defaults.items():
        if key not in config['logging']:
            config['logging'][key] = default_value

    # Monitoring defaults
    if 'monitoring' not in config:
        config['monitoring'] = {}
    monitoring_defaults = {
        'health_check_interval_minutes': 5
    }
    for key, default_value in monitoring_defaults.items():
        if key not in config['monitoring']:
            config['monitoring'][key] = default_value

    return config


class TimezoneFormatter(logging.Formatter):
    """Formatter that renders timestamps in a configured timezone"""

    def __init__(self, fmt=None, tz_name: str = 'UTC'):
        super().__init__(fmt)
        try:
            self.tz = pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError:
            logger.warning(f"Unknown logging timezone {tz_name!r}, using UTC")
            self.tz = pytz.utc

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=self.tz)
        if datefmt:
            return dt.strftime(datefmt)
        else:
            # Default format: YYYY-MM-DD HH:MM:SS TZ
            return dt.strftime('%Y-%m-%d %H:%M:%S %Z')

def setup_logging(config: Dict) -> None:
    """Setup logging based on configuration with timezone-aware timestamps"""
    log_config = config.get('logging', {})
    level = log_config.get('level', 'INFO')

    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    formatter = TimezoneFormatter(log_format, log_config.get('timezone', 'UTC'))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))
    for handler in list(root.handlers):
        root.removeHandler(handler)

    # Console handler
    if log_config.get('console_output', True):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    # File handler
    log_file = log_config.get('file')
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logger.info(f"Logging configured: level={level}, console={log_config.get('console_output', True)}, file={log_file}")

def get_sample_config() -> Dict:
    """Return a sample configuration for reference"""
    return {
        "devices": [
            "http://192.168.1.5:8060"
        ],
        "network": {
            "discovery_timeout": 3,
            "request_timeout": 5,
            "scan_interval_minutes": 30,
            "enable_periodic_discovery": True,
            "discover_on_startup": True
        },
        "polling": {
            "active_app_interval_seconds": 5
        },
        "api": {
            "host": "0.0.0.0",
            "port": 8000
        },
        "logging": {
            "level": "INFO",
            "file": "logs/roku_bridge.log",
            "console_output": True,
            "timezone": "America/New_York"
        },
        "monitoring": {
            "health_check_interval_minutes": 5
        }
    }
