from __future__ import annotations

import enum
import socket
from dataclasses import dataclass
from pathlib import Path

from pynetcat.errors import ConfigurationError


class Protocol(str, enum.Enum):
    TCP = "tcp"
    UDP = "udp"

    @classmethod
    def parse(cls, value: object) -> "Protocol":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(f"Invalid protocol '{str(value).upper()}'.") from None


class IpVersion(enum.IntEnum):
    V4 = 4
    V6 = 6

    @classmethod
    def parse(cls, value: object) -> "IpVersion":
        try:
            return cls(int(value))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid IP version: {value!r} (expected 4 or 6)") from None

    @property
    def family(self) -> socket.AddressFamily:
        return socket.AF_INET if self is IpVersion.V4 else socket.AF_INET6

    @property
    def wildcard(self) -> str:
        return "0.0.0.0" if self is IpVersion.V4 else "::"


@dataclass(frozen=True)
class Endpoint:
    host: str
    port: int

    @property
    def sockaddr(self) -> tuple[str, int]:
        return (self.host, self.port)

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class Config:
    """Resolved, read-only settings for one invocation.

    When ``exec_command`` is set it wins over ``file`` as the sink for
    received data; ``file`` is still used as the source in client mode.
    """

    address: str | None = None
    port: int | None = None
    protocol: Protocol = Protocol.TCP
    ip_version: IpVersion = IpVersion.V4
    listen: bool = False
    timeout: int = 0
    file: Path | None = None
    exec_command: str | None = None
    verbose: bool = False

    def endpoint(self) -> Endpoint:
        if self.address is None or self.port is None:
            mode = "Listening" if self.listen else "Client"
            raise ConfigurationError(f"{mode} mode requires both address and port to be specified.")
        return Endpoint(self.address, self.port)


def socket_timeout(seconds: float) -> float | None:
    # 0 means block forever; socket.settimeout(0) would mean non-blocking.
    return float(seconds) if seconds > 0 else None
