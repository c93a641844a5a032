from __future__ import annotations

import numpy as np
import pytest

from tonelab.dsp.noise import RandomNoiseSource
from tonelab.errors import InvalidArgument
from tonelab.types import NoiseType


def test_uniform_scalar_within_range():
    src = RandomNoiseSource(seed=0)
    vals = [src.uniform(0.5) for _ in range(2000)]
    assert min(vals) >= -0.5
    assert max(vals) < 0.5


def test_gaussian_block_moments():
    src = RandomNoiseSource(seed=1)
    x = src.gaussian_block(2.0, 200_000)
    assert abs(np.mean(x)) < 0.03
    assert np.isclose(np.std(x), 2.0, rtol=0.02)


def test_gaussian_scalar_moments():
    src = RandomNoiseSource(seed=2)
    x = np.array([src.gaussian(0.5) for _ in range(20_000)])
    assert abs(np.mean(x)) < 0.02
    assert np.isclose(np.std(x), 0.5, rtol=0.05)


def test_uniform_block_variance():
    src = RandomNoiseSource(seed=3)
    x = src.uniform_block(1.0, 100_000)
    assert np.all((x >= -1.0) & (x < 1.0))
    assert np.isclose(np.var(x), 1.0 / 3.0, rtol=0.03)


def test_seed_reproducible_and_draws_independent():
    a = RandomNoiseSource(seed=7).sample(NoiseType.GAUSSIAN, 1.0, 64)
    b = RandomNoiseSource(seed=7).sample(NoiseType.GAUSSIAN, 1.0, 64)
    assert np.array_equal(a, b)
    src = RandomNoiseSource(seed=7)
    assert not np.array_equal(src.uniform_block(1.0, 64), src.uniform_block(1.0, 64))


@pytest.mark.parametrize("method", ["uniform", "gaussian"])
def test_negative_level_rejected(method):
    src = RandomNoiseSource(seed=0)
    with pytest.raises(InvalidArgument):
        getattr(src, method)(-0.1)


def test_zero_level_is_silent():
    src = RandomNoiseSource(seed=0)
    assert np.all(src.sample("uniform", 0.0, 16) == 0.0)
