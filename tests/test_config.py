"""Tests for TemplateConfig defaults and environment loading."""

from pathlib import Path

import pytest

from jersey_template.config import TemplateConfig

ENV_VARS = [
    "JERSEY_GAP",
    "ALPHA_THRESHOLD_STRICT",
    "ALPHA_THRESHOLD_PRECISE",
    "TRIM_THRESHOLD",
    "COLLAR_SCALE",
    "COLLAR_PATH",
    "MAX_IMAGE_PIXELS",
    "VALID_IMAGE_EXTENSIONS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults() -> None:
    config = TemplateConfig()
    assert config.gap == -18
    assert config.collar is None
    assert config.alpha_threshold_strict == 5
    assert config.alpha_threshold_precise == 1
    assert config.collar_scale == 0.5
    assert ".webp" in config.valid_exts


def test_from_env_without_variables_matches_defaults(clean_env) -> None:
    assert TemplateConfig.from_env() == TemplateConfig()


def test_from_env_reads_variables(clean_env) -> None:
    clean_env.setenv("JERSEY_GAP", "4")
    clean_env.setenv("ALPHA_THRESHOLD_STRICT", "10")
    clean_env.setenv("ALPHA_THRESHOLD_PRECISE", "0")
    clean_env.setenv("COLLAR_SCALE", "0.25")
    clean_env.setenv("COLLAR_PATH", "assets/Jersey-Collar.png")
    clean_env.setenv("VALID_IMAGE_EXTENSIONS", ".PNG, .jpg")
    config = TemplateConfig.from_env()
    assert config.gap == 4
    assert config.alpha_threshold_strict == 10
    assert config.alpha_threshold_precise == 0
    assert config.collar_scale == 0.25
    assert config.collar_path == Path("assets/Jersey-Collar.png")
    assert config.valid_exts == {".png", ".jpg"}


def test_from_env_names_bad_variable(clean_env) -> None:
    clean_env.setenv("JERSEY_GAP", "minus eighteen")
    with pytest.raises(ValueError, match="JERSEY_GAP"):
        TemplateConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"alpha_threshold_strict": 256},
        {"alpha_threshold_precise": -1},
        {"trim_threshold": 300},
        {"collar_scale": 0},
        {"max_image_pixels": 0},
    ],
)
def test_invalid_values_are_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        TemplateConfig(**kwargs)
