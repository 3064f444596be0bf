"""
Device discovery and reconciliation

Merges statically configured addresses with SSDP discovery sweeps, makes sure
each physical device is registered with the host exactly once, and routes
host action requests to the right device.
"""

import asyncio
import logging
import re
import time
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Set

from devices.entity import RokuDevice
from devices.host import DeviceHost
from devices.models import ActionInvocation
from devices.poller import DEFAULT_POLL_INTERVAL
from remote.client import RokuClient, normalize_address
from remote.ssdp import discover_all
from .models import DeviceNotFoundError, DiscoveryResult, ProbeOutcome, ProbeResult

logger = logging.getLogger(__name__)

ADDRESS_PATTERN = re.compile(r'^http://\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}:\d+$')


class DeviceDiscoveryManager:
    """Owns the known-address set, the pairing flag and every managed device"""

    def __init__(
        self,
        host: DeviceHost,
        config: Dict,
        client_factory: Callable[..., Any] = RokuClient,
        discover: Callable[..., Awaitable[List[Any]]] = discover_all,
        catalog: Optional[Iterable[str]] = None,
    ):
        self.host = host
        self.config = config
        self.client_factory = client_factory
        self.discover = discover
        self.catalog = list(catalog) if catalog is not None else None

        network = config.get('network', {})
        self.discovery_timeout = network.get('discovery_timeout', 3)
        self.request_timeout = network.get('request_timeout', 5)
        self.poll_interval = config.get('polling', {}).get('active_app_interval_seconds', DEFAULT_POLL_INTERVAL)

        self.known_addresses: Set[str] = set()
        self.devices: Dict[str, RokuDevice] = {}

        self.pairing = False
        self._sweep_generation = 0
        self.last_result: Optional[DiscoveryResult] = None

        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    # ================== STATIC CONFIGURATION ==================

    async def add_known_devices(self, addresses: Iterable[str]) -> List[ProbeResult]:
        """Probe every well-formed configured address not already known"""
        clients = []
        for address in addresses:
            if not isinstance(address, str) or not ADDRESS_PATTERN.fullmatch(address):
                logger.debug(f"Ignoring malformed device address: {address!r}")
                continue

            try:
                address = normalize_address(address)
            except ValueError as e:
                logger.warning(f"Ignoring invalid device address {address!r}: {e}")
                continue
            if address in self.known_addresses:
                continue

            self.known_addresses.add(address)
            clients.append(self.client_factory(address, self.request_timeout))

        if not clients:
            return []

        logger.info(f"Adding {len(clients)} configured device(s)...")
        # Configured addresses stay known even when unreachable
        return list(await asyncio.gather(
            *(self._probe(client, "config", release_on_failure=False) for client in clients)
        ))

    # ================== DISCOVERY SWEEPS ==================

    def start_discovery(self) -> Optional[asyncio.Task]:
        """Start a discovery sweep in the background; None if one is already running"""
        if self.pairing:
            logger.debug("Discovery already in progress")
            return None

        self.pairing = True
        self._sweep_generation += 1
        return self._spawn(self._sweep(self._sweep_generation))

    def cancel_pairing(self):
        """Clear the pairing flag; probes already in flight still register their devices"""
        if self.pairing:
            logger.info("Discovery cancelled")
        self.pairing = False

    def _sweep_active(self, generation: int) -> bool:
        return self.pairing and generation == self._sweep_generation

    async def _sweep(self, generation: int) -> DiscoveryResult:
        logger.info("[DISCOVERY] Starting SSDP discovery sweep...")
        start_time = time.time()

        try:
            clients = await self.discover(timeout=self.discovery_timeout, request_timeout=self.request_timeout)
        except Exception as e:
            logger.error(f"Discovery failed: {e}")
            self._finish_sweep(generation)
            result = DiscoveryResult(start_time, time.time() - start_time, 0, error=str(e))
            self.last_result = result
            return result

        probes = []
        cancelled = False
        for client in clients:
            if not self._sweep_active(generation):
                cancelled = True
                break

            if client.address in self.known_addresses:
                continue

            self.known_addresses.add(client.address)
            probes.append(self._probe(client, "ssdp", release_on_failure=True))

        results = list(await asyncio.gather(*probes))
        self._finish_sweep(generation)

        result = DiscoveryResult(
            started_at=start_time,
            duration_seconds=time.time() - start_time,
            responders=len(clients),
            probes=results,
            cancelled=cancelled,
        )
        self.last_result = result
        logger.info(
            f"[DISCOVERY] Sweep complete: {len(clients)} responders, "
            f"{result.success_count} new device(s) in {result.duration_seconds:.1f}s"
        )
        return result

    def _finish_sweep(self, generation: int):
        # A newer sweep owns the flag after a cancel + restart
        if generation == self._sweep_generation:
            self.pairing = False

    # ================== DEVICE CONSTRUCTION ==================

    async def _probe(self, client, source: str, release_on_failure: bool) -> ProbeResult:
        """Info query -> construct -> seed -> register, for one address"""
        address = client.address

        def failed(outcome: ProbeOutcome, error: str = None, device_id: str = None) -> ProbeResult:
            if release_on_failure:
                self.known_addresses.discard(address)
            return ProbeResult(address, source, outcome, device_id=device_id, error=error)

        try:
            info = await client.info()
        except Exception as e:
            logger.error(f"Could not connect to {address}: {e}")
            return failed(ProbeOutcome.UNREACHABLE, str(e))

        device = RokuDevice(
            self.host,
            client,
            info,
            catalog=self.catalog,
            poll_interval=self.poll_interval,
        )
        if device.id in self.devices:
            logger.info(f"{device.id} already managed at {self.devices[device.id].address}, ignoring {address}")
            return failed(ProbeOutcome.DUPLICATE, device_id=device.id)

        try:
            await device.initialize()
        except Exception as e:
            logger.error(f"Failed to create device {device.id} ({address}): {e}")
            return failed(ProbeOutcome.INIT_FAILED, str(e), device.id)

        # Re-check after the seeding await: a concurrent probe may have won
        if device.id in self.devices:
            return failed(ProbeOutcome.DUPLICATE, device_id=device.id)
        if self._closed:
            return failed(ProbeOutcome.ABANDONED, device_id=device.id)

        self.devices[device.id] = device
        self.host.register_device(device)
        device.start_polling()
        logger.info(f"[DEVICE] Registered {device.name} ({device.id}) at {address} via {source}")
        return ProbeResult(address, source, ProbeOutcome.REGISTERED, device_id=device.id)

    # ================== HOST ENTRY POINTS ==================

    def get_device(self, device_id: str) -> RokuDevice:
        device = self.devices.get(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        return device

    async def perform_action(self, device_id: str, action_name: str, action_input: Any = None) -> ActionInvocation:
        device = self.get_device(device_id)
        logger.info(f"Performing {action_name} on {device_id} (input={action_input!r})")
        return await device.perform_action(action_name, action_input)

    async def remove_device(self, device_id: str) -> bool:
        """Forget a device and its address; returns False if it was not managed"""
        device = self.devices.pop(device_id, None)
        if device is None:
            return False

        self.known_addresses.discard(device.address)
        await device.stop_polling()
        if self.host.has_device(device_id):
            self.host.unregister_device(device)
        logger.info(f"Removed device {device_id} ({device.address})")
        return True

    # ================== LIFECYCLE ==================

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def close(self):
        """Stop sweeps and pollers; managed devices are dropped"""
        self._closed = True
        self.pairing = False

        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

        for device in self.devices.values():
            await device.stop_polling()
        logger.info(f"Discovery manager closed ({len(self.devices)} device(s) released)")
