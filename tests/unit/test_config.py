"""Tests for environment-driven settings."""
from summit.analysis.vital_score import DEFAULT_WEIGHTS
from summit.config import Settings


def test_default_weights_match_score_defaults():
    assert Settings().score_weights() == DEFAULT_WEIGHTS


def test_weights_read_from_environment(monkeypatch):
    monkeypatch.setenv("SCORE_WEIGHT_SLEEP", "0.5")
    monkeypatch.setenv("SCORE_WEIGHT_RECOVERY", "0.2")
    weights = Settings().score_weights()
    assert weights.sleep == 0.5
    assert weights.recovery == 0.2
    assert weights.stress == 0.20


def test_mock_seed_optional(monkeypatch):
    assert Settings().mock_seed is None
    monkeypatch.setenv("MOCK_SEED", "42")
    assert Settings().mock_seed == 42
