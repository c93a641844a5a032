from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def build_config_dict(**overrides) -> dict:
    cfg = {
        "fs": 8000.0,
        "n": 1024,
        "tone_hz": 440.0,
        "noise_type": "gaussian",
        "noise_level": 0.03,
        "fir_taps": [0.25, 0.5, 0.25],
        "iir_cutoff_hz": 1800.0,
        "iir_q": 0.7071067811865475,
        "seed": 1234,
    }
    cfg.update(overrides)
    return cfg


def write_config(tmp_path: Path, cfg: dict) -> Path:
    path = tmp_path / "pipeline.json"
    path.write_text(json.dumps(cfg), encoding="utf-8")
    return path
