"""Random sources for spin resolution."""
import secrets
from abc import ABC, abstractmethod


class RNGBase(ABC):
    """
    Abstract random source.

    Engines draw everything through random(); randint() is derived from it
    so a scripted source only needs to supply floats.
    """

    @abstractmethod
    def random(self) -> float:
        """Return random float in [0, 1)."""
        pass

    def randint(self, a: int, b: int) -> int:
        """Return random int in [a, b] inclusive."""
        span = b - a + 1
        return a + min(int(self.random() * span), span - 1)


class ProductionRNG(RNGBase):
    """
    Production RNG.

    Backed by the OS entropy pool, no fixed seed. Safe to share between
    threads.
    """

    def random(self) -> float:
        return secrets.randbelow(2**32) / (2**32)

    def randint(self, a: int, b: int) -> int:
        return secrets.randbelow(b - a + 1) + a


class SeededRNG(RNGBase):
    """
    Test/Simulation RNG.

    Deterministic, fully controlled by seed. Not thread-safe; keep one per
    simulation.
    """

    def __init__(self, seed: int):
        import random

        self._rng = random.Random(seed)
        self.seed = seed

    def random(self) -> float:
        return self._rng.random()
