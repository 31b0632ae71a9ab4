from typing import List

import pytest
import socket


class UdpReceiver:
    """Collects datagrams sent to a local UDP port"""

    def __init__(self):
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self._socket.bind(("127.0.0.1", 0))
        self._socket.settimeout(2.0)
        self.host, self.port = self._socket.getsockname()

    def receive(self) -> bytes:
        data, _ = self._socket.recvfrom(65535)
        return data

    def receive_all(self, timeout: float = 0.2) -> List[bytes]:
        """Read everything that arrives before the socket has been idle for `timeout` seconds"""
        received = []
        self._socket.settimeout(timeout)
        try:
            while True:
                received.append(self.receive())
        except socket.timeout:
            pass
        finally:
            self._socket.settimeout(2.0)
        return received

    def close(self):
        self._socket.close()


@pytest.fixture
def udp_receiver():
    """Starts listening on a random local UDP port"""
    receiver = UdpReceiver()

    yield receiver

    receiver.close()
