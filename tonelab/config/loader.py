from __future__ import annotations
import json
import math
from tonelab.config.validator import validate_config_dict
from tonelab.errors import InvalidArgument
from tonelab.types import NoiseType, PipelineConfig


DEFAULT_CONFIG = {
    "fs": 8000.0,
    "n": 1024,
    "tone_hz": 440.0,
    "amplitude": 1.0,
    "noise_type": "gaussian",
    "noise_level": 0.03,
    "fir_taps": [0.25, 0.5, 0.25],
    "iir_cutoff_hz": 1800.0,
    "iir_q": 1.0 / math.sqrt(2.0),
    "harmonic_count": 5,
    "bin_tolerance_hz": 1.5,
    "align_delay": True,
    "seed": None,
}


def config_from_dict(j: dict | None = None) -> PipelineConfig:
    """
    Merge overrides over DEFAULT_CONFIG, validate and build a PipelineConfig.

    Args:
        j: Partial configuration; missing keys take their defaults

    Returns:
        Validated PipelineConfig
    """
    merged = {**DEFAULT_CONFIG, **(j or {})}
    validate_config_dict(merged)
    return PipelineConfig(
        fs=float(merged["fs"]),
        n=int(merged["n"]),
        tone_hz=float(merged["tone_hz"]),
        amplitude=float(merged["amplitude"]),
        noise_type=NoiseType(merged["noise_type"]),
        noise_level=float(merged["noise_level"]),
        fir_taps=tuple(float(v) for v in merged["fir_taps"]),
        iir_cutoff_hz=float(merged["iir_cutoff_hz"]),
        iir_q=float(merged["iir_q"]),
        harmonic_count=int(merged["harmonic_count"]),
        bin_tolerance_hz=float(merged["bin_tolerance_hz"]),
        align_delay=bool(merged["align_delay"]),
        seed=merged["seed"],
    )


def load_config(path: str) -> PipelineConfig:
    """Load a pipeline configuration from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        j = json.load(f)
    if not isinstance(j, dict):
        raise InvalidArgument("Configuration root must be a JSON object.")
    return config_from_dict(j)


def config_to_dict(cfg: PipelineConfig) -> dict:
    """Plain-JSON view of a PipelineConfig."""
    return {
        "fs": cfg.fs,
        "n": cfg.n,
        "tone_hz": cfg.tone_hz,
        "amplitude": cfg.amplitude,
        "noise_type": NoiseType(cfg.noise_type).value,
        "noise_level": cfg.noise_level,
        "fir_taps": list(cfg.fir_taps),
        "iir_cutoff_hz": cfg.iir_cutoff_hz,
        "iir_q": cfg.iir_q,
        "harmonic_count": cfg.harmonic_count,
        "bin_tolerance_hz": cfg.bin_tolerance_hz,
        "align_delay": cfg.align_delay,
        "seed": cfg.seed,
    }
