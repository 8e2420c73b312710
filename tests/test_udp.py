import os
import socket

import pytest

from conftest import start_daemon, wait_for_bytes
from pynetcat.client import run_client, run_udp_client
from pynetcat.config import Config, Endpoint, IpVersion, Protocol
from pynetcat.errors import DatagramTooLargeError, IoTimeoutError
from pynetcat.server import MAX_DATAGRAM, open_udp_socket, receive_datagram, run_server


@pytest.fixture
def udp_sock():
    sock = open_udp_socket(Endpoint("127.0.0.1", 0), IpVersion.V4)
    yield sock
    sock.close()


@pytest.mark.parametrize("size", [1, 1024, 60000])
def test_datagram_arrives_intact(udp_sock, size):
    payload = os.urandom(size)
    target = Endpoint("127.0.0.1", udp_sock.getsockname()[1])

    run_udp_client(target, payload, 5)

    data, _peer = receive_datagram(udp_sock, 5)
    assert data == payload


def test_oversized_datagram_fails_before_sending(udp_sock):
    target = Endpoint("127.0.0.1", udp_sock.getsockname()[1])

    with pytest.raises(DatagramTooLargeError):
        run_udp_client(target, b"x" * (MAX_DATAGRAM + 1), 5)

    with pytest.raises(IoTimeoutError):
        receive_datagram(udp_sock, 0.5)


def test_receive_times_out(udp_sock):
    with pytest.raises(IoTimeoutError):
        receive_datagram(udp_sock, 1)


def test_server_handles_one_datagram_then_returns(tmp_path, udp_port):
    out = tmp_path / "datagram.txt"
    config = Config(address="127.0.0.1", port=udp_port, protocol=Protocol.UDP, listen=True, file=out)
    server = start_daemon(run_server, config, Protocol.UDP, 5)

    # Resend until the server is bound and has consumed one datagram.
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sender:
        for _ in range(50):
            sender.sendto(b"ping", ("127.0.0.1", udp_port))
            server.join(0.1)
            if not server.is_alive():
                break

    assert not server.is_alive()
    assert wait_for_bytes(out, b"ping") == b"ping"


def test_client_run_uses_udp(udp_sock, tmp_path):
    src = tmp_path / "ping.txt"
    src.write_bytes(b"ping")
    port = udp_sock.getsockname()[1]

    run_client(Config(address="127.0.0.1", port=port, protocol=Protocol.UDP, file=src), "UDP", 5)

    data, _peer = receive_datagram(udp_sock, 5)
    assert data == b"ping"


def test_datagram_over_ipv6_loopback(ipv6_loopback):
    with open_udp_socket(Endpoint("::1", 0), IpVersion.V6) as sock:
        target = Endpoint("::1", sock.getsockname()[1])

        run_udp_client(target, b"ping6", 5, IpVersion.V6)

        data, _peer = receive_datagram(sock, 5)
    assert data == b"ping6"
