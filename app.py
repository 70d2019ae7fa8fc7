#!/usr/bin/env python3
"""
Main entry point for the Text Diff Tool.
This file serves as the application launcher that imports and runs the Flask app from the src directory.
"""

import sys
import os
import argparse
import logging
from pathlib import Path

# Add the src directory to the Python path so we can import from it
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from main import app, configure_logging
from config.settings import get_config_directory

logger = logging.getLogger("text_diff.launcher")


def write_port_file(port):
    """Write the port number to .port file for other processes to read."""
    config_dir = get_config_directory()
    config_dir.mkdir(parents=True, exist_ok=True)
    port_file = config_dir / ".port"
    with open(port_file, 'w') as f:
        f.write(str(port))
    logger.info("Port %s written to %s", port, port_file)


def cleanup_port_file():
    """Remove the .port file on shutdown."""
    port_file = get_config_directory() / ".port"
    if port_file.exists():
        port_file.unlink()
        logger.info("Port file cleaned up")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Text Diff Tool Server')
    parser.add_argument('--port', '-p', type=int, default=8000,
                       help='Port to run the server on (default: 8000)')
    parser.add_argument('--host', default='127.0.0.1',
                       help='Host to bind to (default: 127.0.0.1)')
    parser.add_argument('--debug', action='store_true',
                       help='Run Flask in debug mode with debug logging')
    args = parser.parse_args()

    # Change working directory to project root to ensure relative paths work correctly
    os.chdir(project_root)
    configure_logging(level=logging.DEBUG if args.debug else logging.INFO)

    write_port_file(args.port)

    try:
        logger.info("Starting Text Diff Tool on http://%s:%s", args.host, args.port)
        app.run(host=args.host, port=args.port, debug=args.debug)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    finally:
        cleanup_port_file()
