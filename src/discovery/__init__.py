"""
Discovery module for Roku device discovery and reconciliation
"""

from .manager import DeviceDiscoveryManager, ADDRESS_PATTERN
from .models import DeviceNotFoundError, DiscoveryResult, ProbeOutcome, ProbeResult

__all__ = [
    'DeviceDiscoveryManager', 'ADDRESS_PATTERN', 'DeviceNotFoundError',
    'DiscoveryResult', 'ProbeOutcome', 'ProbeResult',
]
