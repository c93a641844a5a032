"""
Second-order IIR (biquad) low-pass design and filtering.

Design follows the RBJ "Audio EQ Cookbook" low-pass section obtained by the
bilinear transform of H(s) = 1 / (s^2 + s/Q + 1). With Q = 1/sqrt(2) the
section is a 2nd-order Butterworth low-pass.

Filtering uses the direct form I difference equation

    y[n] = b0*x[n] + b1*x[n-1] + b2*x[n-2] - a1*y[n-1] - a2*y[n-2]

with a0 normalized to 1 and zero initial state on every call.
"""
from __future__ import annotations

import math

import numpy as np

from tonelab.errors import InvalidArgument
from tonelab.types import BiquadCoefficients

BUTTERWORTH_Q = 1.0 / math.sqrt(2.0)
# Reported IIR latency; nominal, not derived from the phase response.
IIR_NOMINAL_DELAY_SAMPLES = 1.0
# Relative guard band below Nyquist; the poles reach the unit circle at fs/2.
NYQUIST_GUARD = 1e-3


def max_cutoff_hz(fs: float) -> float:
    """Largest cutoff design_lowpass accepts for sample rate fs."""
    return float(fs) / 2.0 * (1.0 - NYQUIST_GUARD)


def design_lowpass(fc: float, q: float, fs: float) -> BiquadCoefficients:
    """Compute normalized low-pass biquad coefficients for (fc, Q, fs)."""
    fc = float(fc)
    q = float(q)
    fs = float(fs)
    if not fs > 0:
        raise InvalidArgument("Sample rate must be positive.")
    if not 0.0 < fc <= max_cutoff_hz(fs):
        raise InvalidArgument(
            f"Cutoff {fc} Hz must be positive and below Nyquist ({fs / 2.0} Hz)."
        )
    if not q > 0:
        raise InvalidArgument(f"Q must be positive, got {q}.")

    w0 = 2.0 * math.pi * fc / fs
    cos_w0 = math.cos(w0)
    alpha = math.sin(w0) / (2.0 * q)

    b0 = (1.0 - cos_w0) / 2.0
    b1 = 1.0 - cos_w0
    b2 = (1.0 - cos_w0) / 2.0
    a0 = 1.0 + alpha
    a1 = -2.0 * cos_w0
    a2 = 1.0 - alpha

    return BiquadCoefficients(
        b0=b0 / a0,
        b1=b1 / a0,
        b2=b2 / a0,
        a0=1.0,
        a1=a1 / a0,
        a2=a2 / a0,
    )


def apply_biquad(coeffs: BiquadCoefficients, x: np.ndarray) -> np.ndarray:
    """Run the biquad over x; output length equals input length."""
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise InvalidArgument("apply_biquad expects a 1D signal.")
    if coeffs.a0 == 0:
        raise InvalidArgument("Biquad a0 must be non-zero.")

    # Coefficients are re-normalized in case a caller built an un-normalized set.
    b0 = coeffs.b0 / coeffs.a0
    b1 = coeffs.b1 / coeffs.a0
    b2 = coeffs.b2 / coeffs.a0
    a1 = coeffs.a1 / coeffs.a0
    a2 = coeffs.a2 / coeffs.a0

    y = np.empty_like(x)
    x1 = x2 = 0.0
    y1 = y2 = 0.0
    for i, xn in enumerate(x.tolist()):
        yn = b0 * xn + b1 * x1 + b2 * x2 - a1 * y1 - a2 * y2
        y[i] = yn
        x2, x1 = x1, xn
        y2, y1 = y1, yn
    return y


def biquad_response(
    coeffs: BiquadCoefficients,
    freqs_hz: np.ndarray,
    fs: float
) -> np.ndarray:
    """Complex frequency response H(e^jw) evaluated at freqs_hz."""
    f = np.asarray(freqs_hz, dtype=np.float64)
    z1 = np.exp(-1j * 2.0 * np.pi * f / float(fs))
    z2 = z1 * z1
    num = coeffs.b0 + coeffs.b1 * z1 + coeffs.b2 * z2
    den = coeffs.a0 + coeffs.a1 * z1 + coeffs.a2 * z2
    return num / den


def biquad_phase_delay(coeffs: BiquadCoefficients, freq_hz: float, fs: float) -> float:
    """Phase delay -arg(H)/w in samples at freq_hz (0 at DC)."""
    if freq_hz <= 0:
        return 0.0
    w = 2.0 * math.pi * float(freq_hz) / float(fs)
    h = biquad_response(coeffs, np.array([freq_hz]), fs)[0]
    return float(-np.angle(h) / w)


def biquad_settle_samples(coeffs: BiquadCoefficients, tol: float = 1e-3) -> int:
    """Samples until the zero-state transient decays below tol."""
    poles = np.roots([1.0, coeffs.a1 / coeffs.a0, coeffs.a2 / coeffs.a0])
    r = float(np.max(np.abs(poles)))
    if r >= 1.0:
        raise InvalidArgument("Biquad is not stable (pole on or outside unit circle).")
    if r == 0.0:
        return 2
    return int(math.ceil(math.log(tol) / math.log(r))) + 2
