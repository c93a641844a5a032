"""Flat CSV views of a pipeline result."""
from __future__ import annotations

import csv
import io

import numpy as np

from tonelab.errors import InvalidArgument
from tonelab.types import PipelineResult
from tonelab.utils.numbers import format_number, parse_number

SPECTRUM_FIELDS = ["freq_hz", "magnitude"]
TIME_FIELDS = ["t_seconds", "clean", "noisy", "fir", "iir"]


def _render_rows(header: list[str], columns: list[np.ndarray]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(header)
    for row in zip(*(np.asarray(c, dtype=np.float64).tolist() for c in columns)):
        writer.writerow([format_number(v) for v in row])
    return buffer.getvalue()


def render_spectrum_csv(result: PipelineResult) -> str:
    """Render the one-sided spectrum as freq_hz,magnitude rows."""
    return _render_rows(
        SPECTRUM_FIELDS,
        [result.spectrum.freqs_hz, result.spectrum.magnitudes],
    )


def render_time_signals_csv(result: PipelineResult) -> str:
    """Render the time-domain buffers as t_seconds,clean,noisy,fir,iir rows."""
    sig = result.signals
    return _render_rows(
        TIME_FIELDS,
        [sig.time, sig.clean, sig.noisy, result.fir_filtered, result.iir_filtered],
    )


def read_spectrum_csv(text: str) -> tuple[np.ndarray, np.ndarray]:
    """Parse render_spectrum_csv output back into (freqs_hz, magnitudes)."""
    reader = csv.DictReader(io.StringIO(text))
    if reader.fieldnames != SPECTRUM_FIELDS:
        raise InvalidArgument(f"Unexpected spectrum CSV header: {reader.fieldnames}")
    freqs: list[float] = []
    mags: list[float] = []
    for row in reader:
        freqs.append(parse_number(row["freq_hz"]))
        mags.append(parse_number(row["magnitude"]))
    return np.asarray(freqs, dtype=np.float64), np.asarray(mags, dtype=np.float64)
