"""DSP modules for tonelab."""

from tonelab.dsp.biquad import (
    BUTTERWORTH_Q,
    apply_biquad,
    biquad_response,
    design_lowpass,
)
from tonelab.dsp.fft import fft_radix2
from tonelab.dsp.fir import apply_fir, fir_dc_gain, fir_group_delay
from tonelab.dsp.generator import generate_signals
from tonelab.dsp.noise import RandomNoiseSource

__all__ = [
    "BUTTERWORTH_Q",
    "apply_biquad",
    "biquad_response",
    "design_lowpass",
    "fft_radix2",
    "apply_fir",
    "fir_dc_gain",
    "fir_group_delay",
    "generate_signals",
    "RandomNoiseSource",
]
