"""
Discovery data structures and models
"""

from enum import Enum
from typing import List, Optional
from dataclasses import dataclass, field


class DeviceNotFoundError(KeyError):
    """No managed device has the requested id"""


class ProbeOutcome(Enum):
    """Result of probing one address (info query -> construct -> seed -> register)"""
    REGISTERED = "registered"
    UNREACHABLE = "unreachable"
    INIT_FAILED = "init_failed"
    DUPLICATE = "duplicate"
    ABANDONED = "abandoned"


@dataclass
class ProbeResult:
    """Outcome of probing a single address"""
    address: str
    source: str  # "config" or "ssdp"
    outcome: ProbeOutcome
    device_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def registered(self) -> bool:
        return self.outcome is ProbeOutcome.REGISTERED


@dataclass
class DiscoveryResult:
    """Results from one discovery sweep"""
    started_at: float
    duration_seconds: float
    responders: int
    probes: List[ProbeResult] = field(default_factory=list)
    cancelled: bool = False
    error: Optional[str] = None

    @property
    def success_count(self) -> int:
        return sum(1 for probe in self.probes if probe.registered)

    def to_dict(self) -> dict:
        return {
            "started_at": self.started_at,
            "duration_seconds": self.duration_seconds,
            "responders": self.responders,
            "probed": len(self.probes),
            "registered": self.success_count,
            "cancelled": self.cancelled,
            "error": self.error,
        }
