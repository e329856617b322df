#!/usr/bin/env python3
"""
Entry point script to run the content dashboard API.

This script should be run from the project root directory:
    python run.py

Environment variables:
    APP_HOST: Host to bind to (default: 127.0.0.1)
    APP_PORT: Port to bind to (default: 3001)
    APP_DEBUG: Enable debug mode (default: false)
"""
import os
import asyncio
from hypercorn.config import Config
from hypercorn.asyncio import serve

if __name__ == "__main__":
    from application.app import app, logger

    host = os.getenv("APP_HOST", "127.0.0.1")  # Default to localhost for security
    port = int(os.getenv("APP_PORT", "3001"))
    debug = os.getenv("APP_DEBUG", "false").lower() == "true"

    config = Config()
    config.bind = [f"{host}:{port}"]
    config.graceful_timeout = 30

    if debug:
        config.loglevel = "DEBUG"
        config.accesslog = "-"  # Log to stdout
        config.errorlog = "-"

    logger.info(f"Starting content dashboard on {host}:{port}")
    logger.info(f"Debug mode: {debug}")

    # Run with Hypercorn
    asyncio.run(serve(app, config))
