from __future__ import annotations

import socket
import threading
import time
from pathlib import Path
from typing import Callable

import pytest


def start_daemon(target: Callable[..., None], *args) -> threading.Thread:
    thread = threading.Thread(target=target, args=args, daemon=True)
    thread.start()
    return thread


def wait_for_bytes(path: Path, expected: bytes, timeout: float = 10.0) -> bytes:
    """Poll ``path`` until it holds ``expected`` (or the deadline passes)."""
    deadline = time.monotonic() + timeout
    data = b""
    while time.monotonic() < deadline:
        if path.exists():
            data = path.read_bytes()
            if data == expected:
                return data
        time.sleep(0.05)
    return data


@pytest.fixture
def udp_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def ipv6_loopback() -> None:
    if not socket.has_ipv6:
        pytest.skip("IPv6 not supported")
    try:
        with socket.socket(socket.AF_INET6, socket.SOCK_DGRAM) as s:
            s.bind(("::1", 0))
    except OSError:
        pytest.skip("no ::1 loopback")
