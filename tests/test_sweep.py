from __future__ import annotations

import csv
import io

from tonelab.pipeline.sweep import SWEEP_FIELDS, expand_sweep, render_sweep_csv, run_sweep
from tonelab.types import PipelineConfig


def test_expand_sweep_grid():
    base = PipelineConfig(n=256, seed=1)
    configs = expand_sweep(base, noise_levels=[0.01, 0.1], cutoffs=[1000.0, 2000.0, 3000.0])
    assert len(configs) == 6
    assert {c.noise_level for c in configs} == {0.01, 0.1}
    assert all(c.seed == 1 for c in configs)
    assert expand_sweep(base) == [base]


def test_run_sweep_orders_rows_and_records_errors():
    base = PipelineConfig(n=256, seed=1)
    configs = expand_sweep(base, noise_levels=[0.01, 0.1], cutoffs=[1800.0, 5000.0])
    rows = run_sweep(configs)
    assert [r.index for r in rows] == [0, 1, 2, 3]
    assert [r.status for r in rows] == ["ok", "error", "ok", "error"]
    assert rows[0].metrics["snr_input_db"] > rows[2].metrics["snr_input_db"]
    assert "iir_cutoff_hz" in rows[1].error


def test_run_sweep_in_worker_processes():
    configs = expand_sweep(PipelineConfig(n=128, seed=2), noise_levels=[0.01, 0.02, 0.05])
    serial = run_sweep(configs, workers=1)
    parallel = run_sweep(configs, workers=2)
    assert [r.metrics for r in serial] == [r.metrics for r in parallel]


def test_render_sweep_csv():
    rows = run_sweep(expand_sweep(PipelineConfig(n=128, seed=3), cutoffs=[1000.0, 9000.0]))
    reader = csv.DictReader(io.StringIO(render_sweep_csv(rows)))
    assert reader.fieldnames == SWEEP_FIELDS
    out = list(reader)
    assert out[0]["status"] == "ok"
    assert out[0]["iir_cutoff_hz"] == "1000.0"
    assert out[1]["status"] == "error"
    assert out[1]["snr_input_db"] == ""
