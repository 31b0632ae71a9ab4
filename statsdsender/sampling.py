from .types import RandomSource
from typing import Optional

import random


class Sampler:
    """Decides whether a measurement with a given sample rate is transmitted

    Every sampler owns its random source so that clients running on different
    threads never draw from the same generator.
    """

    def __init__(self, random_source: Optional[RandomSource] = None) -> None:
        # random.Random() seeds itself from os.urandom when available
        self._random: RandomSource = random_source if random_source is not None else random.Random()

    def should_send(self, sample_rate: float) -> bool:
        if sample_rate >= 1.0:
            return True
        return self._random.random() < sample_rate
