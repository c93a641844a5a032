"""Pipeline configuration validation helpers."""
from __future__ import annotations
from typing import Any
import math

from tonelab.dsp.biquad import max_cutoff_hz
from tonelab.errors import InvalidArgument
from tonelab.types import NoiseType


def _is_number(v: Any) -> bool:
    return (
        isinstance(v, (int, float))
        and not isinstance(v, bool)
        and not math.isnan(v)
        and not math.isinf(v)
    )


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def validate_config_dict(j: dict) -> None:
    """Validate a merged configuration dict, reporting every problem at once."""
    errors: list[str] = []

    def err(msg: str) -> None:
        errors.append(msg)

    fs = j.get("fs")
    if not _is_number(fs) or fs <= 0:
        err("fs must be a positive number.")
        fs = None

    n = j.get("n")
    if not _is_int(n) or n <= 0 or (n & (n - 1)) != 0:
        err("n must be a positive power of two.")

    tone = j.get("tone_hz")
    if not _is_number(tone) or tone < 0:
        err("tone_hz must be a non-negative number.")
    elif fs is not None and tone >= fs / 2:
        err("tone_hz must be below fs/2.")

    if not _is_number(j.get("amplitude")):
        err("amplitude must be a finite number.")

    if j.get("noise_type") not in {t.value for t in NoiseType}:
        err("noise_type must be 'uniform' or 'gaussian'.")

    level = j.get("noise_level")
    if not _is_number(level) or level < 0:
        err("noise_level must be a non-negative number.")

    taps = j.get("fir_taps")
    if not isinstance(taps, (list, tuple)) or len(taps) == 0:
        err("fir_taps must be a non-empty list.")
    else:
        for i, v in enumerate(taps):
            if not _is_number(v):
                err(f"fir_taps[{i}] must be a finite number.")
                break

    cutoff = j.get("iir_cutoff_hz")
    if not _is_number(cutoff) or cutoff <= 0:
        err("iir_cutoff_hz must be a positive number.")
    elif fs is not None and cutoff > max_cutoff_hz(fs):
        err("iir_cutoff_hz must stay below fs/2.")

    q = j.get("iir_q")
    if not _is_number(q) or q <= 0:
        err("iir_q must be a positive number.")

    hc = j.get("harmonic_count")
    if not _is_int(hc) or hc < 0:
        err("harmonic_count must be a non-negative integer.")

    tol = j.get("bin_tolerance_hz")
    if not _is_number(tol) or tol < 0:
        err("bin_tolerance_hz must be a non-negative number.")

    if not isinstance(j.get("align_delay"), bool):
        err("align_delay must be a boolean.")

    seed = j.get("seed")
    if seed is not None and (not _is_int(seed) or seed < 0):
        err("seed must be null or a non-negative integer.")

    unknown = sorted(set(j) - set(_KNOWN_KEYS))
    if unknown:
        err(f"unknown keys: {', '.join(unknown)}")

    if errors:
        raise InvalidArgument("; ".join(errors))


_KNOWN_KEYS = (
    "fs",
    "n",
    "tone_hz",
    "amplitude",
    "noise_type",
    "noise_level",
    "fir_taps",
    "iir_cutoff_hz",
    "iir_q",
    "harmonic_count",
    "bin_tolerance_hz",
    "align_delay",
    "seed",
)
