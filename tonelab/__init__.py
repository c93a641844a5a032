"""
tonelab - Synthetic Tone DSP Pipeline

Generates a noisy test tone, runs FIR and biquad IIR low-pass filters, and
scores the result with a Hann-windowed FFT (SNR, THD, SINAD, ENOB).
"""
from tonelab.version import __version__
from tonelab.errors import InvalidArgument
from tonelab.types import (
    NoiseType,
    SignalSet,
    BiquadCoefficients,
    Spectrum,
    DistortionMetrics,
    FilterDelay,
    PipelineResult,
    PipelineConfig,
)

__all__ = [
    "__version__",
    "InvalidArgument",
    "NoiseType",
    "SignalSet",
    "BiquadCoefficients",
    "Spectrum",
    "DistortionMetrics",
    "FilterDelay",
    "PipelineResult",
    "PipelineConfig",
]
