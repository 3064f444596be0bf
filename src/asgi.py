"""
ASGI entry point for uvicorn
This module exposes the FastAPI app for use with uvicorn command line
"""

import logging
import os

from services.bridge_server import RokuBridgeServer

# Load configuration and build components synchronously for uvicorn
server = RokuBridgeServer(config_path=os.environ.get('CONFIG_FILE', 'config/config.yaml'))

logger = logging.getLogger(__name__)

# Expose the FastAPI app for uvicorn
app = server.api.app

@app.on_event("startup")
async def startup_event():
    """Register configured devices and start background services"""
    logger.info("Starting up application...")
    await server.start(serve_api=False)

@app.on_event("shutdown")
async def shutdown_event():
    """Stop pollers and discovery"""
    logger.info("Shutting down application...")
    await server.stop()
    logger.info("Application shut down complete")

logger.info("ASGI app ready for uvicorn")
