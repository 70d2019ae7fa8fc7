"""
pytest configuration for the Text Diff Tool.
Puts src/ on the path and detects a running server for integration tests.
"""

import os
import socket
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from config.settings import get_config_directory


def get_server_port():
    """Get the server port from .port file or environment variable."""
    port_file = get_config_directory() / '.port'

    # Try to read port from .port file first
    if port_file.exists():
        try:
            return int(port_file.read_text().strip())
        except (ValueError, IOError):
            pass

    # Fall back to environment variable
    port = os.environ.get('TEXT_DIFF_PORT', '8000')
    try:
        return int(port)
    except ValueError:
        return 8000


def is_server_running(port):
    """Check whether something accepts connections on the port."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.settimeout(0.5)
        return sock.connect_ex(('127.0.0.1', port)) == 0


@pytest.fixture(scope="session")
def server_url():
    """Base URL of a running server; skips the test when none is up."""
    base_url = os.environ.get('TEXT_DIFF_BASE_URL')
    if base_url:
        return base_url.rstrip('/')

    port = get_server_port()
    if not is_server_running(port):
        pytest.skip(f"Server is not running on port {port} (start with: python app.py --port {port})")
    return f'http://127.0.0.1:{port}'
