from __future__ import annotations

import numpy as np
import pytest

from tonelab.dsp.fir import (
    apply_fir,
    fir_dc_gain,
    fir_group_delay,
    fir_phase_delay,
    fir_response,
    fir_settle_samples,
)
from tonelab.errors import InvalidArgument


@pytest.mark.parametrize(
    "taps",
    [[0.25, 0.5, 0.25], [0.2] * 5, [1.0], [0.1, 0.4, 0.4, 0.1]],
)
def test_unit_dc_taps_preserve_constant(taps):
    x = np.full(64, 3.5)
    y = apply_fir(taps, x)
    m = len(taps)
    assert y.shape == x.shape
    assert np.allclose(y[m - 1:], 3.5)


def test_zero_history_edge():
    y = apply_fir([0.25, 0.5, 0.25], np.ones(4))
    assert np.allclose(y, [0.25, 0.75, 1.0, 1.0])


def test_impulse_response_is_taps():
    x = np.zeros(8)
    x[0] = 1.0
    taps = [0.1, 0.2, 0.3]
    assert np.allclose(apply_fir(taps, x)[:3], taps)


def test_empty_taps_rejected():
    with pytest.raises(InvalidArgument):
        apply_fir([], np.ones(4))


def test_group_delay_and_dc_gain():
    assert fir_group_delay([0.25, 0.5, 0.25]) == 1.0
    assert fir_group_delay([0.25] * 4) == 1.5
    assert fir_settle_samples([0.25] * 4) == 3
    assert np.isclose(fir_dc_gain([0.25, 0.5, 0.25]), 1.0)


def test_response_of_smoothing_taps():
    fs = 8000.0
    f = np.array([0.0, 440.0, 2000.0, 4000.0])
    h = fir_response([0.25, 0.5, 0.25], f, fs)
    assert np.allclose(np.abs(h), np.cos(np.pi * f / fs) ** 2, atol=1e-12)
    assert abs(h[1]) == pytest.approx(0.970, abs=1e-3)


def test_phase_delay_of_symmetric_taps_is_group_delay():
    taps = [0.1, 0.2, 0.4, 0.2, 0.1]
    assert fir_phase_delay(taps, 440.0, 8000.0) == pytest.approx(fir_group_delay(taps))
    assert fir_phase_delay(taps, 0.0, 8000.0) == 0.0
