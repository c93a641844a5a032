"""Random noise sources for synthetic test signals."""
from __future__ import annotations

import math

import numpy as np

from tonelab.errors import InvalidArgument
from tonelab.types import NoiseType


def _check_level(name: str, value: float) -> float:
    value = float(value)
    if math.isnan(value) or value < 0:
        raise InvalidArgument(f"{name} must be a non-negative number, got {value}.")
    return value


class RandomNoiseSource:
    """
    Uniform and Gaussian noise drawn from a single numpy Generator.

    All draws of one pipeline run go through the same instance so that
    successive samples are statistically independent. Passing a seed makes
    the sequence reproducible.
    """

    def __init__(self, seed: int | None = None, *, rng: np.random.Generator | None = None):
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def uniform(self, scale: float) -> float:
        """Return one sample uniform over [-scale, scale)."""
        scale = _check_level("scale", scale)
        return scale * (2.0 * float(self._rng.random()) - 1.0)

    def gaussian(self, std_dev: float) -> float:
        """Return one N(0, std_dev²) sample via the Box-Muller transform."""
        std_dev = _check_level("std_dev", std_dev)
        # 1 - U keeps the log argument in (0, 1]
        u1 = 1.0 - float(self._rng.random())
        u2 = float(self._rng.random())
        return std_dev * math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)

    def uniform_block(self, scale: float, n: int) -> np.ndarray:
        scale = _check_level("scale", scale)
        return scale * (2.0 * self._rng.random(int(n)) - 1.0)

    def gaussian_block(self, std_dev: float, n: int) -> np.ndarray:
        std_dev = _check_level("std_dev", std_dev)
        n = int(n)
        u1 = 1.0 - self._rng.random(n)
        u2 = self._rng.random(n)
        return std_dev * np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)

    def sample(self, noise_type: NoiseType, level: float, n: int) -> np.ndarray:
        """Draw n samples of the given noise type; level is scale or std."""
        noise_type = NoiseType(noise_type)
        if noise_type is NoiseType.GAUSSIAN:
            return self.gaussian_block(level, n)
        return self.uniform_block(level, n)
