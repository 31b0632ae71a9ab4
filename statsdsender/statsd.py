"""
StatsD client

Emits counters, gauges, timers and sets as single UDP datagrams in the plain
statsd text format:

  <prefix><key>:<value>|<unit>[|@<sample_rate>]

Failures never propagate to the caller. They are logged and passed to the
optional error handler, and the metric is dropped.

"""
from .sampling import Sampler
from .transport import open_connection, OpenConnection, SocketFactory, StatsError
from .types import MetricUnit, RandomSource
from typing import Callable, Optional, Union

import logging
import math
import socket

ErrorHandler = Callable[[StatsError], None]

_RESERVED_CHARS = str.maketrans({":": ".", "|": ".", "@": "."})


def normalize(key: str) -> str:
    """Replace characters with a meaning in the wire format with dots"""
    return key.translate(_RESERVED_CHARS)


class StatsClient:
    """StatsD client; does nothing until open() succeeds"""

    def __init__(
        self,
        prefix: str = "",
        *,
        random_source: Optional[RandomSource] = None,
        error_handler: Optional[ErrorHandler] = None,
        socket_factory: Optional[SocketFactory] = None,
        log: Optional[logging.Logger] = None
    ) -> None:
        self.log = log or logging.getLogger("StatsClient")
        self.prefix = prefix
        self.error_handler = error_handler
        self._sampler = Sampler(random_source)
        self._socket_factory: SocketFactory = socket_factory or socket.socket
        self._connection: Optional[OpenConnection] = None

    def __enter__(self) -> "StatsClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    @property
    def address(self):
        return self._connection.address if self._connection is not None else None

    def open(self, host: str, port: int) -> None:
        if self._connection is not None:
            return

        try:
            self._connection = open_connection(host, port, socket_factory=self._socket_factory)
        except StatsError as ex:
            self._report_error(ex)
            return
        self.log.info("Opened StatsD connection to %s:%d", *self._connection.address)

    def close(self) -> None:
        if self._connection is None:
            return

        connection, self._connection = self._connection, None
        try:
            connection.close()
        except OSError as ex:
            self.log.warning("Error closing StatsD socket: %s", ex)
        self.log.debug("Closed StatsD connection to %s:%d", *connection.address)

    def set_prefix(self, prefix: str) -> None:
        self.prefix = prefix

    def timing(self, key: str, value: int, sample_rate: float = 1.0) -> None:
        self.send(key, value, sample_rate, MetricUnit.TIMING)

    def increment(self, key: str, sample_rate: float = 1.0) -> None:
        self.count(key, 1, sample_rate)

    def decrement(self, key: str, sample_rate: float = 1.0) -> None:
        self.count(key, -1, sample_rate)

    def count(self, key: str, value: int, sample_rate: float = 1.0) -> None:
        self.send(key, value, sample_rate, MetricUnit.COUNTER)

    def gauge(self, key: str, value: int, sample_rate: float = 1.0) -> None:
        self.send(key, value, sample_rate, MetricUnit.GAUGE)

    def set(self, key: str, value: int, sample_rate: float = 1.0) -> None:
        self.send(key, value, sample_rate, MetricUnit.SET)

    def should_send(self, sample_rate: float) -> bool:
        return self._sampler.should_send(sample_rate)

    def prepare(self, key: str, value: int, sample_rate: float, unit: Union[MetricUnit, str]) -> str:
        # format: "app.user.logins:1|c|@0.5"
        message = "{}{}:{}|{}".format(self.prefix, normalize(key), int(value), unit)
        # NaN never passes sampling, so it has no meaningful rate to report
        if sample_rate != 1.0 and not math.isnan(sample_rate):
            message += "|@{:.1g}".format(sample_rate)
        return message

    def send(self, key: str, value: int, sample_rate: float, unit: Union[MetricUnit, str]) -> None:
        connection = self._connection
        if connection is None:
            return

        if not self.should_send(sample_rate):
            return

        message = self.prepare(key, value, sample_rate, unit)
        try:
            connection.send(message.encode("utf-8"))
        except StatsError as ex:
            self._report_error(ex)

    def _report_error(self, ex: StatsError) -> None:
        self.log.warning("StatsD %s: %s", ex.__class__.__name__, ex)
        if self.error_handler is not None:
            self.error_handler(ex)
