"""Windowed one-sided magnitude spectrum."""
from __future__ import annotations

import numpy as np

from tonelab.dsp.fft import fft_radix2
from tonelab.errors import InvalidArgument
from tonelab.types import Spectrum

WINDOW_NAME = "Hann"


def hann_window(n: int) -> np.ndarray:
    """Symmetric Hann window, w[i] = 0.5*(1 - cos(2*pi*i/(n-1)))."""
    return np.hanning(n).astype(np.float64)


def coherent_gain(w: np.ndarray) -> float:
    """Amplitude gain of a window, mean(w)."""
    return float(np.mean(np.asarray(w, dtype=np.float64)))


def analyze_spectrum(x: np.ndarray, fs: float) -> Spectrum:
    """
    Compute the Hann-windowed, N-normalized one-sided magnitude spectrum.

    Magnitudes are |FFT(w*x)| / N for bins 0..N/2, so a unit sine on an
    exact bin reads 0.5 * mean(w) ~= 0.25. Downstream metrics are ratios and
    do not depend on this constant.

    Args:
        x: Mono input signal, length a power of two
        fs: Sample rate in Hz

    Returns:
        Spectrum with bin center frequencies k*fs/N
    """
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise InvalidArgument("analyze_spectrum expects a 1D signal.")
    if fs <= 0:
        raise InvalidArgument("Sample rate must be positive.")
    n = x.size

    w = hann_window(n)
    X = fft_radix2(x * w, normalize=True)
    half = n // 2 + 1
    mags = np.abs(X[:half]).astype(np.float64)
    freqs = np.arange(half, dtype=np.float64) * (float(fs) / n)
    return Spectrum(
        freqs_hz=freqs,
        magnitudes=mags,
        window=WINDOW_NAME,
        fs=float(fs),
        n_fft=n,
    )


def peak(spectrum: Spectrum) -> tuple[float, float]:
    """Return (frequency_hz, magnitude) of the first maximum bin."""
    if spectrum.magnitudes.size == 0:
        return 0.0, 0.0
    idx = int(np.argmax(spectrum.magnitudes))
    return float(spectrum.freqs_hz[idx]), float(spectrum.magnitudes[idx])
