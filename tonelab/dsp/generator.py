"""Synthetic test tone generation."""
from __future__ import annotations

import numpy as np

from tonelab.dsp.noise import RandomNoiseSource
from tonelab.errors import InvalidArgument
from tonelab.types import NoiseType, SignalSet


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def tone(
    fs: float,
    n: int,
    tone_hz: float,
    *,
    amplitude: float = 1.0,
    delay_samples: float = 0.0
) -> np.ndarray:
    """Sine amplitude*sin(2*pi*f0*(i - delay)/fs) for i in [0, n)."""
    t = (np.arange(int(n), dtype=np.float64) - float(delay_samples)) / float(fs)
    return float(amplitude) * np.sin(2.0 * np.pi * float(tone_hz) * t)


def generate_signals(
    fs: float,
    n: int,
    tone_hz: float,
    noise_type: NoiseType,
    noise_level: float,
    noise_source: RandomNoiseSource,
    *,
    amplitude: float = 1.0
) -> SignalSet:
    """
    Generate a clean sine and a noisy copy sampled at fs.

    Args:
        fs: Sample rate in Hz
        n: Number of samples (power of two)
        tone_hz: Tone frequency in Hz, below Nyquist
        noise_type: Uniform or Gaussian noise
        noise_level: Uniform half-width or Gaussian standard deviation
        noise_source: Generator used for every noise draw
        amplitude: Peak amplitude of the tone

    Returns:
        SignalSet with index-aligned time, clean and noisy buffers
    """
    fs = float(fs)
    n = int(n)
    if fs <= 0:
        raise InvalidArgument("Sample rate must be positive.")
    if not is_power_of_two(n):
        raise InvalidArgument(f"Sample count must be a power of two, got {n}.")
    if not 0.0 <= tone_hz < fs / 2.0:
        raise InvalidArgument(f"Tone frequency {tone_hz} Hz must lie in [0, fs/2).")

    t = np.arange(n, dtype=np.float64) / fs
    clean = tone(fs, n, tone_hz, amplitude=amplitude)
    noise = noise_source.sample(noise_type, noise_level, n)
    return SignalSet(time=t, clean=clean, noisy=clean + noise, fs=fs)
