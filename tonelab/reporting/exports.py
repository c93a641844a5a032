"""Write a run's JSON, CSV and optional WAV artifacts."""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path

from tonelab.io.audio import write_signals_wav
from tonelab.reporting.document import build_result_document
from tonelab.reporting.tables import render_spectrum_csv, render_time_signals_csv
from tonelab.types import PipelineResult

log = logging.getLogger(__name__)

JSON_NAME = "signal_dsp_demo.json"
SPECTRUM_CSV_NAME = "signal_dsp_fft_spectrum.csv"
TIME_CSV_NAME = "signal_dsp_time_signals.csv"


def write_exports(
    result: PipelineResult,
    out_dir: str | Path,
    *,
    wav: bool = False,
    generated_utc: str | None = None
) -> dict[str, Path]:
    """
    Render every artifact, then move the whole set into out_dir.

    Files are produced in a hidden staging directory inside out_dir and
    only renamed into place once all of them, WAV included, exist. A
    failure at any step leaves out_dir without new artifacts.

    Returns:
        Mapping of artifact name to written path
    """
    doc = build_result_document(result, generated_utc=generated_utc)
    rendered = {
        "json": (JSON_NAME, json.dumps(doc, indent=2, allow_nan=False)),
        "fft_csv": (SPECTRUM_CSV_NAME, render_spectrum_csv(result)),
        "time_csv": (TIME_CSV_NAME, render_time_signals_csv(result)),
    }

    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    stage = Path(tempfile.mkdtemp(prefix=".tonelab-export-", dir=out))
    try:
        staged: dict[str, Path] = {}
        for key, (name, text) in rendered.items():
            path = stage / name
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            staged[key] = path
        if wav:
            staged.update(write_signals_wav(result, stage))

        paths: dict[str, Path] = {}
        try:
            for key, src in staged.items():
                dst = out / src.name
                os.replace(src, dst)
                paths[key] = dst
                log.debug("wrote %s", dst)
        except OSError:
            for dst in paths.values():
                dst.unlink(missing_ok=True)
            raise
        return paths
    finally:
        shutil.rmtree(stage, ignore_errors=True)
