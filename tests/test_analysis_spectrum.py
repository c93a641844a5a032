from __future__ import annotations

import numpy as np
import pytest

from tonelab.analysis.spectrum import analyze_spectrum, coherent_gain, hann_window, peak
from tonelab.errors import InvalidArgument


@pytest.mark.parametrize(
    "fs,n,k",
    [(8000.0, 1024, 56), (48000.0, 4096, 100), (1000.0, 256, 32), (44100.0, 2048, 300)],
)
def test_exact_bin_tone_peaks_on_its_bin(fs, n, k):
    f0 = k * fs / n
    t = np.arange(n) / fs
    spec = analyze_spectrum(np.sin(2 * np.pi * f0 * t), fs)
    freq, mag = peak(spec)
    assert spec.freqs_hz.size == n // 2 + 1
    assert spec.freqs_hz[k] == pytest.approx(f0)
    assert abs(freq - spec.freqs_hz[k]) <= fs / n / 2
    assert mag == pytest.approx(0.5 * coherent_gain(hann_window(n)), rel=0.02)


def test_bin_frequencies_and_window_name():
    spec = analyze_spectrum(np.zeros(16), 160.0)
    assert spec.window == "Hann"
    assert np.allclose(spec.freqs_hz, np.arange(9) * 10.0)
    assert np.all(spec.magnitudes == 0.0)


def test_hann_window_formula():
    n = 16
    i = np.arange(n)
    assert np.allclose(hann_window(n), 0.5 * (1 - np.cos(2 * np.pi * i / (n - 1))))


def test_non_power_of_two_rejected():
    with pytest.raises(InvalidArgument):
        analyze_spectrum(np.ones(1000), 8000.0)
