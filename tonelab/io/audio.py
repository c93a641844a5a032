"""Audio I/O module."""
from __future__ import annotations
from pathlib import Path
import warnings as py_warnings
import numpy as np
from tonelab.types import PipelineResult

WAV_SUBTYPE = "FLOAT"


def _soundfile():
    try:
        import soundfile as sf
    except Exception as exc:
        raise RuntimeError("soundfile backend not available.") from exc
    return sf


def signal_buffers(result: PipelineResult) -> dict[str, np.ndarray]:
    """Named time-domain buffers of a run, in export order."""
    return {
        "clean": result.signals.clean,
        "noisy": result.signals.noisy,
        "fir": result.fir_filtered,
        "iir": result.iir_filtered,
    }


def write_signals_wav(
    result: PipelineResult,
    out_dir: str | Path,
    *,
    prefix: str = "signal_dsp"
) -> dict[str, Path]:
    """
    Write each time-domain buffer as a 32-bit float mono WAV.

    Float samples keep the noisy signal's excursions past +/-1 intact.
    """
    sf = _soundfile()
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    fs = int(round(result.fs))
    paths: dict[str, Path] = {}
    for name, samples in signal_buffers(result).items():
        path = out / f"{prefix}_{name}.wav"
        sf.write(str(path), np.asarray(samples, dtype=np.float64), fs, subtype=WAV_SUBTYPE)
        paths[f"wav_{name}"] = path
    return paths


def load_wav_mono(path: str | Path) -> tuple[np.ndarray, float, list[str]]:
    """Load a WAV file as mono float64; returns (samples, fs, warnings)."""
    sf = _soundfile()
    with py_warnings.catch_warnings(record=True) as w:
        py_warnings.simplefilter("always")
        data, fs = sf.read(str(path), always_2d=True, dtype="float64")
    warn_list = [str(wi.message) for wi in w]
    if data.shape[1] > 1:
        warn_list.append(f"downmixed {data.shape[1]} channels to mono.")
    return np.mean(data, axis=1).astype(np.float64), float(fs), warn_list
