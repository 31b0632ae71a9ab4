# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""
UDP destination handling

Resolves the collector address and owns the datagram socket used for sending.

"""
from .types import DatagramSocket
from typing import Callable, NamedTuple, Tuple

import socket

Address = Tuple[str, int]
SocketFactory = Callable[[int, int, int], DatagramSocket]


class StatsError(Exception):
    """StatsD client error"""


class StatsConnectionError(StatsError):
    """Socket creation or address resolution failed"""


class TransmissionError(StatsError):
    """Sending a datagram failed"""


def _validate_port(port) -> int:
    if isinstance(port, bool) or not isinstance(port, int):
        raise StatsConnectionError("Invalid port {!r}".format(port))
    if not 0 <= port <= 65535:
        raise StatsConnectionError("Port {} out of range".format(port))
    return port


def resolve_address(host: str, port: int) -> Address:
    """Resolve host (dotted-quad or hostname) and port into an IPv4 socket address"""
    port = _validate_port(port)
    if not host or not isinstance(host, str):
        raise StatsConnectionError("Invalid host {!r}".format(host))

    try:
        return socket.inet_ntoa(socket.inet_aton(host)), port
    except (OSError, ValueError):
        pass  # not an IPv4 literal, try resolving it as a hostname

    try:
        addr_infos = socket.getaddrinfo(host, port, socket.AF_INET, socket.SOCK_DGRAM)
    except (OSError, ValueError) as ex:
        raise StatsConnectionError("Failed to resolve {!r}: {}".format(host, ex)) from ex
    if not addr_infos:
        raise StatsConnectionError("No IPv4 address found for {!r}".format(host))

    _, _, _, _, sock_addr = addr_infos[0]
    return sock_addr[0], port


class OpenConnection(NamedTuple):
    sock: DatagramSocket
    address: Address

    def send(self, message: bytes) -> None:
        try:
            self.sock.sendto(message, self.address)
        except OSError as ex:
            raise TransmissionError("Failed to send to {}:{}: {}".format(self.address[0], self.address[1], ex)) from ex

    def close(self) -> None:
        self.sock.close()


def open_connection(host: str, port: int, socket_factory: SocketFactory = socket.socket) -> OpenConnection:
    address = resolve_address(host, port)
    try:
        sock = socket_factory(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
    except OSError as ex:
        raise StatsConnectionError("Failed to create UDP socket: {}".format(ex)) from ex
    return OpenConnection(sock, address)
