from __future__ import annotations
from datetime import datetime, timezone
import numpy as np
from tonelab.types import PipelineResult
from tonelab.utils.digest import INTEGRITY_KEY, document_digest
from tonelab.utils.numbers import json_number, json_numbers


PLOT_SUGGESTIONS = [
    "time-domain: clean vs noisy vs FIR vs IIR",
    "frequency-domain: FFT magnitude with tone peak",
    "SNR evolution: input vs FIR vs IIR",
    "DSP metrics: THD / SINAD / ENOB vs configuration",
]


def _tolist(a: np.ndarray) -> list[float | str]:
    """Convert numpy array to a JSON-safe list."""
    return json_numbers(np.asarray(a, dtype=np.float64).tolist())


def build_result_document(
    result: PipelineResult,
    *,
    generated_utc: str | None = None
) -> dict:
    """
    Build the JSON export document for a pipeline run.

    Non-finite values are replaced with "Infinity", "-Infinity" or "NaN" so
    the document is strict JSON. The integrity hash covers everything except
    the integrity object itself.

    Args:
        result: Pipeline output
        generated_utc: ISO timestamp; current UTC time when omitted

    Returns:
        Export document with integrity hash
    """
    if generated_utc is None:
        generated_utc = datetime.now(timezone.utc).isoformat()
    sig = result.signals
    noise = result.noise_type.value

    doc = {
        "schema_version": "1.0",
        "fs": json_number(result.fs),
        "N": int(result.n),
        "time": _tolist(sig.time),
        "signals": {
            "clean": _tolist(sig.clean),
            "noisy": _tolist(sig.noisy),
            "fir": _tolist(result.fir_filtered),
            "iir": _tolist(result.iir_filtered),
        },
        "fft": {
            "freq": _tolist(result.spectrum.freqs_hz),
            "mag": _tolist(result.spectrum.magnitudes),
            "window": result.spectrum.window,
        },
        "snr_db": {
            "input_noisy": json_number(result.snr_input_db),
            "fir": json_number(result.snr_fir_db),
            "iir": json_number(result.snr_iir_db),
        },
        "snr_improvement": {
            "fir_gain_db": json_number(result.snr_fir_gain_db),
            "iir_gain_db": json_number(result.snr_iir_gain_db),
        },
        "latency": {
            "fir": {
                "samples": json_number(result.fir_delay.samples),
                "seconds": json_number(result.fir_delay.seconds),
            },
            "iir": {
                "samples": json_number(result.iir_delay.samples),
                "seconds": json_number(result.iir_delay.seconds),
                "phase_delay_samples": json_number(result.iir_phase_delay_samples),
            },
        },
        "dsp_metrics": {
            "thd_db": json_number(result.distortion.thd_db),
            "sinad_db": json_number(result.distortion.sinad_db),
            "enob_bits": json_number(result.distortion.enob_bits),
        },
        "metadata": {
            "tone_hz": json_number(result.tone_hz),
            "peak_frequency_hz": json_number(result.peak_freq_hz),
            "peak_magnitude": json_number(result.peak_magnitude),
            "generated_at": generated_utc,
            "description_en": (
                f"DSP demo: {result.tone_hz:g} Hz sine, noise ({noise}), FIR/IIR low-pass, "
                "Hann FFT, SNR, THD, SINAD, ENOB & latency estimation."
            ),
            "filters": {
                "fir_coeffs": json_numbers(result.fir_taps),
                "iir_cutoff_hz": json_number(result.iir_cutoff_hz),
                "iir_Q": json_number(result.iir_q),
                "iir_coeffs": {
                    k: json_number(v) for k, v in result.iir_coeffs.as_dict().items()
                },
            },
            "plot_suggestions": list(PLOT_SUGGESTIONS),
        },
    }

    doc[INTEGRITY_KEY] = {"document_hash_sha256": document_digest(doc)}
    return doc
