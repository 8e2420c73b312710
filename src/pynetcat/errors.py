from __future__ import annotations


class NetcatError(Exception):
    """Base class for every failure reported by pynetcat."""


class ConfigurationError(NetcatError):
    pass


class TransportError(NetcatError):
    """A socket operation failed after the endpoint was set up."""


class BindError(TransportError):
    pass


class ConnectError(TransportError):
    pass


class IoTimeoutError(TransportError):
    pass


class DatagramTooLargeError(TransportError):
    pass


class SinkError(NetcatError):
    """Received bytes could not be written to a file, stdout or a command."""


class SourceError(NetcatError):
    """Outbound bytes could not be read from a file or stdin."""
