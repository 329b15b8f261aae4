#!/usr/bin/env python3
"""
App Config Validation Daemon

Main entry point for running the validation API as a service.
"""

import os
import sys
import logging
import signal
import argparse
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

def setup_logging(level: str = "INFO", log_file: str = None):
    """Set up logging configuration."""
    handlers = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )

    if log_file:
        logger = logging.getLogger(__name__)
        logger.info(f"Logging to file: {log_file}")

def signal_handler(signum, frame):
    """Handle shutdown signals gracefully."""
    logging.info(f"Received signal {signum}, shutting down...")
    sys.exit(0)

def main():
    """Main entry point for the validation daemon."""
    parser = argparse.ArgumentParser(description="App Config Validation Daemon")
    parser.add_argument("--host", default=None, help="Host to bind to (default: from environment)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to (default: from environment)")
    parser.add_argument("--log-level", default=None,
                       choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                       help="Logging level (default: from environment)")
    parser.add_argument("--log-file", default=None,
                       help="Also write logs to this file (default: from environment)")

    args = parser.parse_args()

    log_level = args.log_level or os.getenv("APPSPEC_LOG_LEVEL", "INFO")
    setup_logging(log_level, args.log_file or os.getenv("APPSPEC_LOG_FILE"))
    logger = logging.getLogger(__name__)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    host = args.host or os.getenv("APPSPEC_HOST", DEFAULT_HOST)
    try:
        port = args.port or int(os.getenv("APPSPEC_PORT", DEFAULT_PORT))
    except ValueError:
        logger.error(f"APPSPEC_PORT must be an integer, got '{os.getenv('APPSPEC_PORT')}'")
        sys.exit(1)

    logger.info("Starting app config validation service...")
    logger.info(f"API will be available at http://{host}:{port}")

    try:
        import uvicorn
        from controller.api import app

        uvicorn.run(
            app,
            host=host,
            port=port,
            log_level=log_level.lower(),
            access_log=True
        )
    except Exception as e:
        logger.error(f"Failed to start validation service: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
