from __future__ import annotations

import logging
import socket

from pynetcat.config import Config, Endpoint, IpVersion, Protocol, socket_timeout
from pynetcat.errors import ConnectError, DatagramTooLargeError, IoTimeoutError, TransportError
from pynetcat.server import MAX_DATAGRAM
from pynetcat.sink import read_source

log = logging.getLogger("pynetcat")


def _send_all(conn: socket.socket, buffer: bytes) -> None:
    # One send per loop so the socket timeout bounds each write, not the transfer.
    view = memoryview(buffer)
    while view:
        sent = conn.send(view)
        view = view[sent:]


def run_tcp_client(target: Endpoint, buffer: bytes, timeout: float) -> None:
    try:
        conn = socket.create_connection(target.sockaddr)
    except OSError as exc:
        raise ConnectError(f"Failed to connect to tcp://{target}: {exc}") from exc

    with conn:
        conn.settimeout(socket_timeout(timeout))
        try:
            _send_all(conn, buffer)
        except socket.timeout as exc:
            raise IoTimeoutError(f"Write to {target} timed out after {timeout}s") from exc
        except OSError as exc:
            raise TransportError(f"Write to {target} failed: {exc}") from exc


def run_udp_client(target: Endpoint, buffer: bytes, timeout: float, ip_version: IpVersion = IpVersion.V4) -> None:
    if len(buffer) > MAX_DATAGRAM:
        raise DatagramTooLargeError(
            f"Payload of {len(buffer)} bytes exceeds the {MAX_DATAGRAM}-byte UDP datagram limit"
        )

    with socket.socket(ip_version.family, socket.SOCK_DGRAM) as sock:
        try:
            sock.bind((ip_version.wildcard, 0))
        except OSError as exc:
            raise ConnectError(f"Failed to bind a local UDP socket: {exc}") from exc
        sock.settimeout(socket_timeout(timeout))
        try:
            sock.sendto(buffer, target.sockaddr)
        except socket.timeout as exc:
            raise IoTimeoutError(f"Send to {target} timed out after {timeout}s") from exc
        except OSError as exc:
            raise TransportError(f"Send to {target} failed: {exc}") from exc


def run_client(
    config: Config,
    protocol: Protocol | str,
    timeout: float,
    logger: logging.Logger | None = None,
) -> None:
    """Read the whole source, then send it to the configured endpoint."""
    logger = logger or log
    target = config.endpoint()
    protocol = Protocol.parse(protocol)

    buffer = read_source(config)
    logger.info("Sending %d bytes to %s://%s", len(buffer), protocol.value, target)

    if protocol is Protocol.TCP:
        run_tcp_client(target, buffer, timeout)
    else:
        run_udp_client(target, buffer, timeout, config.ip_version)
