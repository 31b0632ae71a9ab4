"""statsdsender internal types"""

from typing import Any, Protocol, Tuple

import enum


class StrEnum(str, enum.Enum):
    def __str__(self):
        return str(self.value)


class MetricUnit(StrEnum):
    TIMING = "ms"
    COUNTER = "c"
    GAUGE = "g"
    SET = "s"


class RandomSource(Protocol):
    """
    Provides the subset of functionality we depend on from random.Random.

    Anything returning uniformly distributed floats in [0, 1) can be used
    for sampling decisions.
    """

    def random(self) -> float:
        ...


class DatagramSocket(Protocol):
    """The subset of socket.socket used for sending metrics"""

    def sendto(self, data: bytes, address: Tuple[str, int]) -> int:
        ...

    def close(self) -> Any:
        ...
