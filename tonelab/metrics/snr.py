"""Time-domain signal-to-noise ratio."""
from __future__ import annotations

import numpy as np

from tonelab.errors import InvalidArgument


def _validate_pair(reference: np.ndarray, test: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    ref = np.asarray(reference, dtype=np.float64)
    tst = np.asarray(test, dtype=np.float64)
    if ref.ndim != 1 or tst.ndim != 1:
        raise InvalidArgument("SNR expects 1D signals.")
    if ref.size == 0:
        raise InvalidArgument("SNR expects non-empty signals.")
    if ref.size != tst.size:
        raise InvalidArgument(
            f"SNR signals differ in length ({ref.size} vs {tst.size})."
        )
    return ref, tst


def snr_db(reference: np.ndarray, test: np.ndarray) -> float:
    """
    SNR in dB of test against reference.

    Signal power is mean(reference**2), noise power is mean((test - reference)**2).
    Returns +inf when the noise power is exactly zero.
    """
    ref, tst = _validate_pair(reference, test)
    noise_power = float(np.mean((tst - ref) ** 2))
    if noise_power == 0.0:
        return float("inf")
    signal_power = float(np.mean(ref ** 2))
    if signal_power <= 0:
        return float("-inf")
    return float(10.0 * np.log10(signal_power / noise_power))
