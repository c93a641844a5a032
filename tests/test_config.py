from __future__ import annotations

import json

import pytest

from tonelab.config.loader import DEFAULT_CONFIG, config_from_dict, config_to_dict, load_config
from tonelab.errors import InvalidArgument
from tonelab.types import NoiseType, PipelineConfig
from tests.conftest import build_config_dict, write_config


def test_defaults_match_dataclass():
    assert config_from_dict() == PipelineConfig()
    assert config_to_dict(PipelineConfig()) == DEFAULT_CONFIG


def test_load_config_merges_over_defaults(tmp_path):
    path = write_config(tmp_path, {"noise_type": "uniform", "seed": 3})
    cfg = load_config(str(path))
    assert cfg.noise_type is NoiseType.UNIFORM
    assert cfg.seed == 3
    assert cfg.fs == 8000.0
    assert cfg.fir_taps == (0.25, 0.5, 0.25)


def test_round_trip_dict():
    cfg = config_from_dict(build_config_dict(fir_taps=[0.5, 0.5]))
    assert config_from_dict(config_to_dict(cfg)) == cfg


def test_validation_reports_every_problem():
    with pytest.raises(InvalidArgument) as exc:
        config_from_dict({"n": 1000, "noise_type": "pink", "iir_q": 0, "bogus": 1})
    msg = str(exc.value)
    assert "n must be a positive power of two." in msg
    assert "noise_type" in msg
    assert "iir_q" in msg
    assert "unknown keys: bogus" in msg


@pytest.mark.parametrize(
    "override",
    [
        {"iir_cutoff_hz": 4000.0},
        {"tone_hz": 4000.0},
        {"fir_taps": []},
        {"noise_level": -0.1},
        {"n": True},
        {"align_delay": 1},
        {"seed": -1},
    ],
)
def test_invalid_values_rejected(override):
    with pytest.raises(InvalidArgument):
        config_from_dict(build_config_dict(**override))


def test_non_object_root_rejected(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps([1, 2]), encoding="utf-8")
    with pytest.raises(InvalidArgument):
        load_config(str(path))


def test_plain_string_noise_type_round_trips():
    d = config_to_dict(PipelineConfig(noise_type="uniform"))
    assert d["noise_type"] == "uniform"
    assert config_from_dict(d).noise_type is NoiseType.UNIFORM


def test_unknown_string_noise_type_rejected():
    with pytest.raises(ValueError):
        config_to_dict(PipelineConfig(noise_type="pink"))
