"""
Service orchestration for the Roku Local Bridge
"""

from .bridge_server import RokuBridgeServer

__all__ = ['RokuBridgeServer']
