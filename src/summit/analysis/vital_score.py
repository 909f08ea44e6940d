"""
Vital Score: one 0-100 readiness number per day, with component breakdown.

Components:
  recovery: Body Battery (already 0-100), neutral 50 when missing
  sleep   : Garmin sleep score (already 0-100), neutral 50 when missing
  strain  : intensity minutes scaled so 21 min = 50 and 42+ min = 100

The final score is a weighted blend of recovery, sleep, inverted stress and
normalized HRV. Strain is reported but not blended in.
"""
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Tuple

from summit.analysis.metrics import MetricRecord, is_present
from summit.analysis.numeric import clamp, round_half_up

NEUTRAL = 50

# Garmin recommends 150 intensity minutes/week, ~21/day. Twice that is "high strain".
HIGH_STRAIN_MINUTES = 42

# HRV normalization: 20 ms → 0, 100 ms → 100
HRV_FLOOR_MS = 20
HRV_SPAN_MS = 80


@dataclass(frozen=True)
class ScoreWeights:
    """Blend weights. Callers keep the sum at 1.0; nothing renormalizes."""
    recovery: float = 0.35
    sleep: float = 0.35
    stress: float = 0.20
    hrv: float = 0.10


DEFAULT_WEIGHTS = ScoreWeights()


@dataclass
class VitalScore:
    """Derived score for one day. Recomputation replaces the whole record."""
    date: date
    score: int
    sleep_component: int
    recovery_component: int
    strain_component: int
    recommendation: str


@dataclass(frozen=True)
class ScoreComponents:
    recovery: int
    sleep: int
    strain: int
    stress: int  # inverted: 100 = no stress
    hrv: int


def _bounded(value: Optional[float], default: int) -> int:
    if not is_present(value):
        return default
    return int(clamp(round_half_up(value), 0, 100))


def _strain(intensity_minutes: Optional[float]) -> int:
    minutes = intensity_minutes if is_present(intensity_minutes) else 0
    return int(clamp(round_half_up(minutes / HIGH_STRAIN_MINUTES * 100), 0, 100))


def _inverted_stress(stress_avg: Optional[float]) -> int:
    if not is_present(stress_avg):
        return NEUTRAL
    return int(clamp(round_half_up(100 - stress_avg), 0, 100))


def _normalized_hrv(hrv_avg: Optional[float]) -> int:
    if not is_present(hrv_avg):
        return NEUTRAL
    return int(clamp(round_half_up((hrv_avg - HRV_FLOOR_MS) / HRV_SPAN_MS * 100), 0, 100))


def score_components(day: MetricRecord) -> ScoreComponents:
    """Compute each 0-100 component, substituting defaults for missing readings."""
    return ScoreComponents(
        recovery=_bounded(day.body_battery, NEUTRAL),
        sleep=_bounded(day.sleep_score, NEUTRAL),
        strain=_strain(day.intensity_minutes),
        stress=_inverted_stress(day.stress_avg),
        hrv=_normalized_hrv(day.hrv_avg),
    )


# ─── Recommendation rules ──────────────────────────────────────────────────────

# Evaluated in order, first match wins. The last rule always matches.
RECOMMENDATION_RULES: List[Tuple[Callable[[int, ScoreComponents], bool], str]] = [
    (
        lambda score, c: score >= 80,
        "You're primed for a high-intensity day. Push hard if you want to.",
    ),
    (
        lambda score, c: score >= 60,
        "Solid foundation. A moderate workout would be beneficial.",
    ),
    (
        lambda score, c: score >= 40 and c.sleep < 50,
        "Sleep was lacking. Consider light activity and earlier bedtime tonight.",
    ),
    (
        lambda score, c: score >= 40 and c.recovery < 50,
        "Recovery is lagging. Active recovery or rest day recommended.",
    ),
    (
        lambda score, c: score >= 40,
        "Take it easy today. Light movement, focus on recovery.",
    ),
    (
        lambda score, c: True,
        "Rest day strongly recommended. Prioritize sleep and stress management.",
    ),
]


def recommend(score: int, components: ScoreComponents) -> str:
    for matches, message in RECOMMENDATION_RULES:
        if matches(score, components):
            return message
    raise AssertionError("recommendation rules must end with a catch-all")


def compute_score(day: MetricRecord, weights: ScoreWeights = DEFAULT_WEIGHTS) -> VitalScore:
    """
    Calculate the Vital Score for one day of metrics.

    score = round(recovery*w.recovery + sleep*w.sleep
                  + (100 - stress)*w.stress + hrv_norm*w.hrv), clamped to 0-100

    Args:
        day: one MetricRecord; all readings are optional.
        weights: blend weights, DEFAULT_WEIGHTS unless overridden.

    Returns:
        VitalScore with integer score, three sub-scores and a recommendation.
    """
    c = score_components(day)
    blended = (
        c.recovery * weights.recovery
        + c.sleep * weights.sleep
        + c.stress * weights.stress
        + c.hrv * weights.hrv
    )
    score = int(clamp(round_half_up(blended), 0, 100))

    return VitalScore(
        date=day.date,
        score=score,
        sleep_component=c.sleep,
        recovery_component=c.recovery,
        strain_component=c.strain,
        recommendation=recommend(score, c),
    )
