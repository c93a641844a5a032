from __future__ import annotations

import json

import numpy as np
import pytest
import soundfile as sf

from tonelab.config.loader import config_from_dict
from tonelab.io.audio import load_wav_mono, write_signals_wav
from tonelab.pipeline.run import run_pipeline
from tonelab.reporting import exports
from tonelab.reporting.exports import write_exports
from tonelab.reporting.tables import read_spectrum_csv
from tests.conftest import build_config_dict


def _result():
    return run_pipeline(config_from_dict(build_config_dict(n=256)))


def test_write_signals_wav_round_trip(tmp_path):
    result = _result()
    paths = write_signals_wav(result, tmp_path)
    assert set(paths) == {"wav_clean", "wav_noisy", "wav_fir", "wav_iir"}
    samples, fs, warnings = load_wav_mono(paths["wav_noisy"])
    assert fs == 8000.0
    assert warnings == []
    assert np.allclose(samples, result.signals.noisy, atol=1e-6)


def test_load_wav_mono_downmixes(tmp_path):
    path = tmp_path / "stereo.wav"
    sf.write(path, np.array([[1.0, 0.0], [0.5, 0.5]]) * 0.5, 8000, subtype="FLOAT")
    samples, _, warnings = load_wav_mono(path)
    assert np.allclose(samples, [0.25, 0.25])
    assert any("downmixed" in w for w in warnings)


def test_write_exports_writes_every_artifact(tmp_path):
    result = _result()
    out_dir = tmp_path / "out"
    paths = write_exports(result, out_dir, wav=True, generated_utc="now")
    assert {"json", "fft_csv", "time_csv", "wav_iir"} <= set(paths)
    for p in paths.values():
        assert p.exists()
    doc = json.loads(paths["json"].read_text(encoding="utf-8"))
    assert doc["metadata"]["generated_at"] == "now"
    freqs, mags = read_spectrum_csv(paths["fft_csv"].read_text(encoding="utf-8"))
    assert np.allclose(mags, result.spectrum.magnitudes, rtol=1e-9)
    assert sorted(p.name for p in out_dir.iterdir()) == sorted(p.name for p in paths.values())


def test_write_exports_failed_wav_leaves_no_files(tmp_path, monkeypatch):
    def broken_wav(result, out_dir, **kwargs):
        (out_dir / "signal_dsp_clean.wav").write_bytes(b"partial")
        raise RuntimeError("libsndfile error")

    monkeypatch.setattr(exports, "write_signals_wav", broken_wav)
    out_dir = tmp_path / "out"
    with pytest.raises(RuntimeError, match="libsndfile"):
        write_exports(_result(), out_dir, wav=True)
    assert list(out_dir.iterdir()) == []


def test_write_exports_keeps_existing_files_on_failure(tmp_path, monkeypatch):
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    (out_dir / "notes.txt").write_text("keep", encoding="utf-8")

    def broken_wav(result, out_dir, **kwargs):
        raise RuntimeError("soundfile backend not available.")

    monkeypatch.setattr(exports, "write_signals_wav", broken_wav)
    with pytest.raises(RuntimeError):
        write_exports(_result(), out_dir, wav=True)
    assert [p.name for p in out_dir.iterdir()] == ["notes.txt"]
