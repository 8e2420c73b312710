from __future__ import annotations

import logging
import socket

from pynetcat.config import Config, Endpoint, IpVersion, Protocol, socket_timeout
from pynetcat.errors import BindError, IoTimeoutError, NetcatError, TransportError
from pynetcat.sink import deliver

MAX_DATAGRAM = 65535
_RECV_CHUNK = 65536

log = logging.getLogger("pynetcat")


def open_tcp_listener(bind: Endpoint, ip_version: IpVersion, backlog: int = 128) -> socket.socket:
    server = socket.socket(ip_version.family, socket.SOCK_STREAM)
    try:
        server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        server.bind(bind.sockaddr)
        server.listen(backlog)
    except OSError as exc:
        server.close()
        raise BindError(f"Failed to bind tcp://{bind}: {exc}") from exc
    return server


def _read_until_eof(conn: socket.socket, peer: object, timeout: float) -> bytes:
    chunks: list[bytes] = []
    while True:
        try:
            data = conn.recv(_RECV_CHUNK)
        except socket.timeout as exc:
            raise IoTimeoutError(f"Read from {peer} timed out after {timeout}s") from exc
        except OSError as exc:
            raise TransportError(f"Read from {peer} failed: {exc}") from exc
        if not data:
            return b"".join(chunks)
        chunks.append(data)


def handle_tcp_connection(
    conn: socket.socket,
    peer: object,
    config: Config,
    timeout: float,
    logger: logging.Logger | None = None,
) -> None:
    logger = logger or log
    with conn:
        conn.settimeout(socket_timeout(timeout))
        buffer = _read_until_eof(conn, peer, timeout)
    logger.info("Received %d bytes from %s", len(buffer), peer)
    deliver(buffer, config, logger)


def serve_tcp(
    listener: socket.socket,
    config: Config,
    timeout: float,
    logger: logging.Logger | None = None,
) -> None:
    """Accept and handle connections one at a time, forever.

    A failing connection is logged and never stops the loop. Returns only if
    the listening socket has been closed.
    """
    logger = logger or log
    while True:
        try:
            conn, peer = listener.accept()
        except OSError as exc:
            if listener.fileno() == -1:
                return
            logger.error("Failed to accept connection: %s", exc)
            continue

        logger.debug("Accepted connection from %s", peer)
        try:
            handle_tcp_connection(conn, peer, config, timeout, logger)
        except NetcatError as exc:
            logger.error("Failed to handle connection: %s", exc)


def run_tcp_server(config: Config, bind: Endpoint, timeout: float, logger: logging.Logger | None = None) -> None:
    logger = logger or log
    with open_tcp_listener(bind, config.ip_version) as listener:
        logger.info("Listening on %s...", bind)
        serve_tcp(listener, config, timeout, logger)


def open_udp_socket(bind: Endpoint, ip_version: IpVersion) -> socket.socket:
    sock = socket.socket(ip_version.family, socket.SOCK_DGRAM)
    try:
        sock.bind(bind.sockaddr)
    except OSError as exc:
        sock.close()
        raise BindError(f"Failed to bind udp://{bind}: {exc}") from exc
    return sock


def receive_datagram(sock: socket.socket, timeout: float) -> tuple[bytes, object]:
    # The timeout is set before the receive so it bounds this call.
    sock.settimeout(socket_timeout(timeout))
    try:
        data, peer = sock.recvfrom(MAX_DATAGRAM)
    except socket.timeout as exc:
        raise IoTimeoutError(f"No datagram received within {timeout}s") from exc
    except OSError as exc:
        raise TransportError(f"Receive failed: {exc}") from exc
    return data, peer


def run_udp_server(config: Config, bind: Endpoint, timeout: float, logger: logging.Logger | None = None) -> None:
    """Receive exactly one datagram, route it, and return."""
    logger = logger or log
    with open_udp_socket(bind, config.ip_version) as sock:
        logger.info("Listening on %s...", bind)
        buffer, peer = receive_datagram(sock, timeout)
    logger.info("Received %d bytes from %s", len(buffer), peer)
    deliver(buffer, config, logger)


def run_server(
    config: Config,
    protocol: Protocol | str,
    timeout: float,
    logger: logging.Logger | None = None,
) -> None:
    bind = config.endpoint()
    protocol = Protocol.parse(protocol)

    if protocol is Protocol.TCP:
        run_tcp_server(config, bind, timeout, logger)
    else:
        run_udp_server(config, bind, timeout, logger)
