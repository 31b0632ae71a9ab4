from .statsd import normalize, StatsClient
from .transport import StatsConnectionError, StatsError, TransmissionError
from .types import MetricUnit

__version__ = "1.0.0"


def version() -> str:
    return __version__


__all__ = [
    "MetricUnit",
    "normalize",
    "StatsClient",
    "StatsConnectionError",
    "StatsError",
    "TransmissionError",
    "version",
]
