from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RandomProvider:
    """
    Single source for every random decision in a battle: critical checks,
    luck rolls, speed-tie breaks and enemy attack picks.

    Inject one seeded instance to replay a battle exactly; share it between
    collaborators so the draw sequence stays in one stream.
    """

    seed: Optional[int] = None

    def __post_init__(self):
        self._rng = random.Random(self.seed)

    def reseed(self, seed: Optional[int]) -> None:
        self.seed = seed
        self._rng.seed(seed)
        logger.debug("RNG reseeded with %r", seed)

    def roll_d100(self) -> int:
        """Uniform integer in [0, 100)."""
        return self._rng.randrange(100)

    def roll_percent(self) -> float:
        """Uniform float in [0, 100)."""
        return self._rng.random() * 100.0

    def coin_flip(self) -> bool:
        return self._rng.randint(0, 1) == 0

    def pick(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("Cannot pick from an empty sequence")
        return self._rng.choice(options)
