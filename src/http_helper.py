# HTTP Helper for Roku ECP connections
# Session configuration for local device control (plain HTTP on port 8060)

import aiohttp
import logging

logger = logging.getLogger(__name__)

def create_device_session(timeout_seconds: float = 5) -> aiohttp.ClientSession:
    """
    Create properly configured aiohttp session for local Roku connections (always HTTP)
    Prevents connection leaks with proper cleanup and limits
    """
    connector = aiohttp.TCPConnector(
        limit_per_host=2,           # Max 2 connections per device IP
        ssl=False,                  # ECP is HTTP only
        force_close=True,           # Force connection cleanup
        enable_cleanup_closed=True
    )

    return aiohttp.ClientSession(
        connector=connector,
        timeout=aiohttp.ClientTimeout(total=timeout_seconds)
    )
