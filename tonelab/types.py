from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import math
import numpy as np

class NoiseType(str, Enum):
    UNIFORM = "uniform"
    GAUSSIAN = "gaussian"

@dataclass(frozen=True)
class SignalSet:
    time: np.ndarray
    clean: np.ndarray
    noisy: np.ndarray
    fs: float

    @property
    def n(self) -> int:
        return int(self.time.size)

@dataclass(frozen=True)
class BiquadCoefficients:
    """Direct-form biquad coefficients, a0 normalized to 1."""
    b0: float
    b1: float
    b2: float
    a0: float
    a1: float
    a2: float

    def as_dict(self) -> dict[str, float]:
        return {
            "b0": self.b0, "b1": self.b1, "b2": self.b2,
            "a0": self.a0, "a1": self.a1, "a2": self.a2,
        }

@dataclass(frozen=True)
class Spectrum:
    freqs_hz: np.ndarray
    magnitudes: np.ndarray
    window: str
    fs: float
    n_fft: int

@dataclass(frozen=True)
class DistortionMetrics:
    thd_db: float
    sinad_db: float
    enob_bits: float

@dataclass(frozen=True)
class FilterDelay:
    samples: float
    seconds: float

@dataclass(frozen=True)
class PipelineResult:
    fs: float
    n: int
    tone_hz: float
    noise_type: NoiseType
    signals: SignalSet
    fir_filtered: np.ndarray
    iir_filtered: np.ndarray
    spectrum: Spectrum
    snr_input_db: float
    snr_fir_db: float
    snr_iir_db: float
    snr_fir_gain_db: float
    snr_iir_gain_db: float
    fir_delay: FilterDelay
    iir_delay: FilterDelay
    iir_phase_delay_samples: float
    distortion: DistortionMetrics
    peak_freq_hz: float
    peak_magnitude: float
    fir_taps: tuple[float, ...]
    iir_cutoff_hz: float
    iir_q: float
    iir_coeffs: BiquadCoefficients

@dataclass(frozen=True)
class PipelineConfig:
    fs: float = 8000.0
    n: int = 1024
    tone_hz: float = 440.0
    amplitude: float = 1.0
    noise_type: NoiseType = NoiseType.GAUSSIAN
    noise_level: float = 0.03
    fir_taps: tuple[float, ...] = (0.25, 0.5, 0.25)
    iir_cutoff_hz: float = 1800.0
    iir_q: float = 1.0 / math.sqrt(2.0)
    harmonic_count: int = 5
    bin_tolerance_hz: float = 1.5
    align_delay: bool = True
    seed: int | None = None
