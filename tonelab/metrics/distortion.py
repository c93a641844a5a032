"""Spectral distortion metrics: THD, SINAD and ENOB."""
from __future__ import annotations

import math

import numpy as np

from tonelab.errors import InvalidArgument
from tonelab.types import DistortionMetrics


DEFAULT_HARMONIC_COUNT = 5
DEFAULT_BIN_TOLERANCE_HZ = 1.5
# Hann main lobe spans +/-2 bins around a tone.
DEFAULT_LOBE_BINS = 2

_NAN_METRICS = DistortionMetrics(
    thd_db=float("nan"),
    sinad_db=float("nan"),
    enob_bits=float("nan"),
)


def _locate_bin(freqs_hz: np.ndarray, target_hz: float, radius_hz: float) -> int | None:
    """Index of the bin nearest target_hz if it lies within radius_hz."""
    idx = int(np.argmin(np.abs(freqs_hz - target_hz)))
    if abs(float(freqs_hz[idx]) - target_hz) > radius_hz:
        return None
    return idx


def _lobe_mask(size: int, center: int, lobe_bins: int) -> np.ndarray:
    mask = np.zeros(size, dtype=bool)
    mask[max(0, center - lobe_bins):min(size, center + lobe_bins + 1)] = True
    return mask


def enob_from_sinad(sinad_db: float) -> float:
    """Effective number of bits, (SINAD - 1.76) / 6.02."""
    return (sinad_db - 1.76) / 6.02


def thd_sinad_enob(
    freqs_hz: np.ndarray,
    magnitudes: np.ndarray,
    fundamental_hz: float,
    harmonic_count: int = DEFAULT_HARMONIC_COUNT,
    bin_tolerance_hz: float = DEFAULT_BIN_TOLERANCE_HZ,
    *,
    lobe_bins: int = DEFAULT_LOBE_BINS
) -> DistortionMetrics:
    """
    Estimate THD, SINAD and ENOB from a one-sided magnitude spectrum.

    The fundamental is the bin nearest fundamental_hz, accepted within
    max(bin_tolerance_hz, df/2). A tolerance finer than half a bin only
    matters past the ends of the grid: inside it the nearest bin is always
    within df/2 and is used. Harmonics 2..harmonic_count+1 are located
    the same way and skipped when out of range. Each tone owns +/-lobe_bins
    bins; bins 0..lobe_bins (DC leakage) are ignored.

    Returns NaN for every field when the fundamental cannot be located.
    THD is -inf with no harmonic energy; SINAD and ENOB are +inf with no
    noise or distortion energy.
    """
    freqs_hz = np.asarray(freqs_hz, dtype=np.float64)
    magnitudes = np.asarray(magnitudes, dtype=np.float64)
    if freqs_hz.ndim != 1 or freqs_hz.shape != magnitudes.shape:
        raise InvalidArgument("Frequencies and magnitudes must be 1D and equal length.")
    if int(harmonic_count) < 0:
        raise InvalidArgument("harmonic_count must be non-negative.")
    if not bin_tolerance_hz >= 0:
        raise InvalidArgument("bin_tolerance_hz must be non-negative.")
    if int(lobe_bins) < 0:
        raise InvalidArgument("lobe_bins must be non-negative.")
    if freqs_hz.size < 2 or not math.isfinite(fundamental_hz) or fundamental_hz <= 0:
        return _NAN_METRICS

    size = freqs_hz.size
    df = float(freqs_hz[1] - freqs_hz[0])
    radius = max(float(bin_tolerance_hz), df / 2.0)
    power = magnitudes ** 2

    dc_mask = np.zeros(size, dtype=bool)
    dc_mask[:int(lobe_bins) + 1] = True

    k0 = _locate_bin(freqs_hz, float(fundamental_hz), radius)
    if k0 is None:
        return _NAN_METRICS
    fund_mask = _lobe_mask(size, k0, int(lobe_bins)) & ~dc_mask
    p_fund = float(np.sum(power[fund_mask]))
    if p_fund <= 0:
        return _NAN_METRICS

    harm_mask = np.zeros(size, dtype=bool)
    for h in range(2, int(harmonic_count) + 2):
        kh = _locate_bin(freqs_hz, h * float(fundamental_hz), radius)
        if kh is None:
            continue
        harm_mask |= _lobe_mask(size, kh, int(lobe_bins))
    harm_mask &= ~fund_mask & ~dc_mask
    p_harm = float(np.sum(power[harm_mask]))

    p_rest = float(np.sum(power[~fund_mask & ~dc_mask]))

    thd_db = 10.0 * math.log10(p_harm / p_fund) if p_harm > 0 else float("-inf")
    sinad_db = 10.0 * math.log10(p_fund / p_rest) if p_rest > 0 else float("inf")
    return DistortionMetrics(
        thd_db=thd_db,
        sinad_db=sinad_db,
        enob_bits=enob_from_sinad(sinad_db),
    )
