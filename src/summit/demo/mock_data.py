"""
Synthetic daily wellness history for development and demos.

Each day starts from a UserProfile baseline, then:
  1. Scenario shifts are applied (gradual = linear ramp, sudden = step)
  2. Weekend patterns nudge sleep, stress, steps and intensity
  3. Uniform daily variance is added
  4. Values are rounded and clamped to realistic ranges

Shifts are positioned in days before the end date, so a shift with
start_days_ago=21 begins three weeks before the last generated day.
Pass a seeded random.Random for reproducible output.
"""
import random
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import Dict, List, Optional

from summit.analysis.metrics import MetricRecord
from summit.analysis.numeric import clamp, round_half_up


@dataclass(frozen=True)
class UserProfile:
    """Baseline for a simulated user (healthy, moderately active adult by default)."""
    body_battery: float = 65
    sleep_score: float = 72
    sleep_hours: float = 7.2
    deep_sleep_pct: float = 0.18    # 15-25% is normal
    rem_sleep_pct: float = 0.22     # 20-25% is normal
    stress: float = 35
    resting_hr: float = 62
    hrv: float = 55
    intensity_minutes: float = 28
    steps: float = 8500


@dataclass(frozen=True)
class Shift:
    """A change applied to one profile field over the final days of history."""
    target: str                # UserProfile attribute name
    start_days_ago: int
    delta: float
    sudden: bool = False


@dataclass(frozen=True)
class Scenario:
    days: int = 180
    profile: UserProfile = field(default_factory=UserProfile)
    shifts: List[Shift] = field(default_factory=list)


DEFAULT_PROFILE = UserProfile()

# Gradual burnout pattern (common for knowledge workers)
BURNOUT_SHIFTS = [
    Shift("sleep_score", 21, -12),
    Shift("deep_sleep_pct", 21, -0.04),
    Shift("stress", 30, 15),
    Shift("hrv", 25, -12),
    Shift("body_battery", 20, -10),
    Shift("intensity_minutes", 14, -12),
    Shift("steps", 14, -2000),
    Shift("resting_hr", 18, 5),
]

SCENARIOS: Dict[str, Scenario] = {
    "healthy": Scenario(),
    "burnout": Scenario(shifts=BURNOUT_SHIFTS),
    # Was struggling, now improving
    "recovery": Scenario(
        profile=replace(DEFAULT_PROFILE, body_battery=55, sleep_score=62, stress=48),
        shifts=[
            Shift("sleep_score", 45, 15),
            Shift("stress", 45, -18),
            Shift("hrv", 40, 12),
            Shift("body_battery", 35, 15),
        ],
    ),
    # Athlete increasing load, with fitness adaptations
    "training_ramp": Scenario(
        profile=replace(DEFAULT_PROFILE, intensity_minutes=20, steps=7000),
        shifts=[
            Shift("intensity_minutes", 60, 25),
            Shift("steps", 60, 4000),
            Shift("resting_hr", 45, -4),
            Shift("hrv", 45, 8),
        ],
    ),
    # Illness, travel or a major life event
    "acute_stress": Scenario(
        days=90,
        shifts=[
            Shift("sleep_score", 10, -20, sudden=True),
            Shift("stress", 10, 25, sudden=True),
            Shift("hrv", 10, -18, sudden=True),
            Shift("body_battery", 10, -25, sudden=True),
        ],
    ),
}

# Multipliers applied on Saturday/Sunday
_WEEKEND_FACTORS = {
    "sleep_hours": 1.08,
    "stress": 0.85,
    "steps": 0.75,
    "intensity_minutes": 1.15,
}

# Fractional daily variance per field
_VARIANCE = {
    "body_battery": 0.12,
    "sleep_score": 0.10,
    "sleep_hours": 0.08,
    "stress": 0.20,
    "resting_hr": 0.05,
    "hrv": 0.15,
    "intensity_minutes": 0.30,
    "steps": 0.25,
}


def shift_effect(shift: Shift, days_ago: int) -> float:
    """How much of shift.delta applies on a day days_ago before the end."""
    if days_ago > shift.start_days_ago:
        return 0.0
    if shift.sudden:
        return shift.delta
    progress = min((shift.start_days_ago - days_ago) / shift.start_days_ago, 1.0)
    return shift.delta * progress


def _vary(rng: random.Random, base: float, variance_pct: float) -> float:
    spread = base * variance_pct
    return base + (rng.random() - 0.5) * 2 * spread


def _bounded_int(value: float, low: int, high: int) -> int:
    return int(clamp(round_half_up(value), low, high))


def generate_day(
    day: date,
    profile: UserProfile,
    shifts: List[Shift],
    days_ago: int,
    rng: random.Random,
) -> MetricRecord:
    base = {name: getattr(profile, name) for name in profile.__dataclass_fields__}
    for shift in shifts:
        base[shift.target] += shift_effect(shift, days_ago)

    if day.weekday() >= 5:
        for name, factor in _WEEKEND_FACTORS.items():
            base[name] *= factor

    v = {name: _vary(rng, base[name], pct) for name, pct in _VARIANCE.items()}

    duration = _bounded_int(v["sleep_hours"] * 3600, 3600, 36000)  # 1-10 hours
    deep = _bounded_int(duration * _vary(rng, base["deep_sleep_pct"], 0.15), 0, int(duration * 0.40))
    rem = _bounded_int(duration * _vary(rng, base["rem_sleep_pct"], 0.15), 0, int(duration * 0.35))

    return MetricRecord(
        date=day,
        body_battery=_bounded_int(v["body_battery"], 5, 100),
        sleep_score=_bounded_int(v["sleep_score"], 20, 100),
        sleep_duration_seconds=duration,
        deep_sleep_seconds=deep,
        rem_sleep_seconds=rem,
        stress_avg=_bounded_int(v["stress"], 5, 95),
        resting_hr=_bounded_int(v["resting_hr"], 40, 100),
        hrv_avg=float(_bounded_int(v["hrv"], 15, 150)),
        intensity_minutes=_bounded_int(v["intensity_minutes"], 0, 180),
        steps=_bounded_int(v["steps"], 500, 30000),
    )


def generate_mock_data(
    days: int = 180,
    profile: UserProfile = DEFAULT_PROFILE,
    shifts: Optional[List[Shift]] = None,
    end: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> List[MetricRecord]:
    """
    Generate `days` consecutive MetricRecords ending at `end` (default today),
    oldest first.
    """
    end = end or date.today()
    rng = rng or random.Random()
    shifts = BURNOUT_SHIFTS if shifts is None else shifts

    return [
        generate_day(end - timedelta(days=days_ago), profile, shifts, days_ago, rng)
        for days_ago in range(days - 1, -1, -1)
    ]


def generate_scenario(
    name: str,
    end: Optional[date] = None,
    seed: Optional[int] = None,
) -> List[MetricRecord]:
    """
    Generate history for a named preset.

    Raises:
        KeyError: name is not one of SCENARIOS.
    """
    if name not in SCENARIOS:
        raise KeyError(f"Unknown scenario {name!r}. Available: {', '.join(SCENARIOS)}")
    scenario = SCENARIOS[name]
    return generate_mock_data(
        days=scenario.days,
        profile=scenario.profile,
        shifts=list(scenario.shifts),
        end=end,
        rng=random.Random(seed),
    )
