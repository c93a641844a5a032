"""Finite impulse response filtering."""
from __future__ import annotations

import math

import numpy as np

from tonelab.errors import InvalidArgument


def _validate_taps(coeffs) -> np.ndarray:
    h = np.asarray(coeffs, dtype=np.float64)
    if h.ndim != 1 or h.size == 0:
        raise InvalidArgument("FIR filter needs a non-empty 1D coefficient set.")
    if not np.all(np.isfinite(h)):
        raise InvalidArgument("FIR coefficients must be finite.")
    return h


def apply_fir(coeffs, x: np.ndarray) -> np.ndarray:
    """
    Causal convolution y[n] = sum_k h[k] * x[n-k] with zero history.

    The output has the same length as the input.
    """
    h = _validate_taps(coeffs)
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise InvalidArgument("apply_fir expects a 1D signal.")
    if x.size == 0:
        return x.copy()
    return np.convolve(x, h)[:x.size].astype(np.float64)


def fir_group_delay(coeffs) -> float:
    """Group delay of a symmetric M-tap filter, (M-1)/2 samples."""
    h = _validate_taps(coeffs)
    return (h.size - 1) / 2.0


def fir_dc_gain(coeffs) -> float:
    """DC gain (sum of taps)."""
    return float(np.sum(_validate_taps(coeffs)))


def fir_settle_samples(coeffs) -> int:
    """Leading samples affected by the zero history, M-1."""
    return int(_validate_taps(coeffs).size - 1)


def fir_response(coeffs, freqs_hz, fs: float) -> np.ndarray:
    """Complex frequency response H(e^jw) = sum_k h[k] e^(-jwk) at freqs_hz."""
    h = _validate_taps(coeffs)
    w = 2.0 * np.pi * np.atleast_1d(np.asarray(freqs_hz, dtype=np.float64)) / float(fs)
    k = np.arange(h.size, dtype=np.float64)
    return np.exp(-1j * np.outer(w, k)) @ h


def fir_phase_delay(coeffs, freq_hz: float, fs: float) -> float:
    """Phase delay -arg(H)/w in samples at freq_hz (0 at DC)."""
    if freq_hz <= 0:
        return 0.0
    w = 2.0 * math.pi * float(freq_hz) / float(fs)
    return float(-np.angle(fir_response(coeffs, [freq_hz], fs)[0]) / w)
