from __future__ import annotations
import math
import numpy as np
from tonelab.types import PipelineResult


def _fmt(x: float, digits: int) -> str:
    """Round for display; inf and NaN are spelled out."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "INF" if x > 0 else "-INF"
    return f"{round(x, digits)}"


def render_console_summary(result: PipelineResult) -> str:
    """Render the human-readable results block printed after a run."""
    d = result.distortion
    c = result.iir_coeffs
    fir_head = ", ".join(_fmt(v, 6) for v in np.asarray(result.fir_filtered[:5]).tolist())
    lines = [
        "DSP Simulation Results",
        "-" * 42,
        f"Signal length         : {result.n} samples",
        f"Sampling rate         : {result.fs:g} Hz",
        f"Tone frequency        : {result.tone_hz:g} Hz",
        f"Noise type            : {result.noise_type.value}",
        f"Peak frequency (FFT)  : {_fmt(result.peak_freq_hz, 1)} Hz",
        f"Max FFT magnitude     : {_fmt(result.peak_magnitude, 4)}",
        "",
        f"SNR (input noisy)     : {_fmt(result.snr_input_db, 2)} dB",
        f"SNR (after FIR)       : {_fmt(result.snr_fir_db, 2)} dB",
        f"SNR (after IIR)       : {_fmt(result.snr_iir_db, 2)} dB",
        "",
        f"SNR gain (FIR)        : {_fmt(result.snr_fir_gain_db, 2)} dB",
        f"SNR gain (IIR)        : {_fmt(result.snr_iir_gain_db, 2)} dB",
        "",
        f"THD (approx)          : {_fmt(d.thd_db, 2)} dB",
        f"SINAD (approx)        : {_fmt(d.sinad_db, 2)} dB",
        f"ENOB (approx)         : {_fmt(d.enob_bits, 3)} bits",
        "",
        (
            f"FIR delay             : {_fmt(result.fir_delay.samples, 2)} samples "
            f"({_fmt(result.fir_delay.seconds * 1e3, 3)} ms)"
        ),
        (
            f"IIR delay (approx)    : {_fmt(result.iir_delay.samples, 2)} samples "
            f"({_fmt(result.iir_delay.seconds * 1e3, 3)} ms)"
        ),
        "",
        f"FIR first 5 samples   : [{fir_head}]",
        (
            f"IIR biquad coeffs     : b0={c.b0:.6g} b1={c.b1:.6g} b2={c.b2:.6g} "
            f"a0={c.a0:.6g} a1={c.a1:.6g} a2={c.a2:.6g}"
        ),
    ]
    return "\n".join(lines) + "\n"
