"""
SSDP discovery for Roku devices
"""

import asyncio
import logging
import socket
from typing import Dict, List, Optional

from .client import RokuClient, normalize_address
from .models import RemoteError

logger = logging.getLogger(__name__)

SSDP_ADDR = "239.255.255.250"
SSDP_PORT = 1900

MSEARCH_REQUEST = (
    "M-SEARCH * HTTP/1.1\r\n"
    f"HOST: {SSDP_ADDR}:{SSDP_PORT}\r\n"
    "MAN: \"ssdp:discover\"\r\n"
    "MX: {mx}\r\n"
    "ST: roku:ecp\r\n"
    "\r\n"
)


def parse_response(data: bytes) -> Dict[str, str]:
    """Parse SSDP response headers (keys upper-cased)"""
    headers = {}
    lines = data.decode('utf-8', errors='ignore').split('\r\n')
    for line in lines[1:]:  # Skip status line
        if ':' in line:
            key, value = line.split(':', 1)
            headers[key.strip().upper()] = value.strip()
    return headers


def location_to_address(headers: Dict[str, str]) -> Optional[str]:
    """Extract the ECP base address from a roku:ecp response"""
    if 'roku:ecp' not in headers.get('ST', '').lower():
        return None
    location = headers.get('LOCATION')
    if not location:
        return None
    try:
        return normalize_address(location)
    except ValueError:
        return None


async def discover_all(timeout: float = 3.0, request_timeout: float = 5) -> List[RokuClient]:
    """
    Broadcast an M-SEARCH for roku:ecp and collect responders for `timeout` seconds.
    Raises RemoteError if the broadcast itself cannot be sent.
    """
    loop = asyncio.get_running_loop()
    addresses: List[str] = []

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
    except OSError as e:
        raise RemoteError(f"Could not open SSDP socket: {e}") from e

    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.setblocking(False)
        sock.bind(('', 0))

        request = MSEARCH_REQUEST.replace('{mx}', str(max(1, int(timeout)))).encode('utf-8')
        try:
            sock.sendto(request, (SSDP_ADDR, SSDP_PORT))
        except OSError as e:
            raise RemoteError(f"SSDP broadcast failed: {e}") from e
        logger.info("Sent SSDP M-SEARCH for roku:ecp")

        end_time = loop.time() + timeout
        while True:
            remaining = end_time - loop.time()
            if remaining <= 0:
                break
            try:
                data, _ = await asyncio.wait_for(loop.sock_recvfrom(sock, 4096), timeout=remaining)
            except asyncio.TimeoutError:
                break
            except OSError as e:
                logger.warning(f"Error receiving SSDP response: {e}")
                break

            address = location_to_address(parse_response(data))
            if address and address not in addresses:
                addresses.append(address)
                logger.info(f"Found Roku via SSDP: {address}")
    finally:
        sock.close()

    return [RokuClient(address, request_timeout) for address in addresses]
