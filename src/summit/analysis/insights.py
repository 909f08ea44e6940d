"""
Trend insights: plain-English summary, why it matters, and what to do.

explain() turns one Trend into a TrendInsight. significant_shifts() picks the
declining trends worth alerting on, most severe first.

Every lookup table here is keyed by enum member and must cover all members;
tests enforce this so a new MetricKind or Timeframe can't slip through
without copy.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from summit.analysis.metrics import MetricKind, Timeframe
from summit.analysis.numeric import round_half_up
from summit.analysis.trends import SIGNIFICANCE_THRESHOLD, Trend, TrendDirection


@dataclass
class TrendInsight:
    """Presentation-ready explanation of one Trend. Never persisted."""
    metric: MetricKind
    timeframe: Timeframe
    percent_change: float
    direction: TrendDirection
    summary: str
    rationale: str
    actions: List[str] = field(default_factory=list)


METRIC_LABELS: Dict[MetricKind, str] = {
    MetricKind.BODY_BATTERY: "Body Battery",
    MetricKind.SLEEP_SCORE: "sleep quality",
    MetricKind.SLEEP_DURATION: "sleep duration",
    MetricKind.DEEP_SLEEP: "deep sleep",
    MetricKind.REM_SLEEP: "REM sleep",
    MetricKind.STRESS: "stress levels",
    MetricKind.RESTING_HR: "resting heart rate",
    MetricKind.HRV: "heart rate variability",
    MetricKind.INTENSITY_MINUTES: "activity intensity",
    MetricKind.STEPS: "daily steps",
}

TIMEFRAME_PHRASES: Dict[Timeframe, str] = {
    Timeframe.ONE_WEEK: "the past week",
    Timeframe.TWO_WEEKS: "the past 2 weeks",
    Timeframe.ONE_MONTH: "the past month",
    Timeframe.THREE_MONTHS: "the past 3 months",
    Timeframe.SIX_MONTHS: "the past 6 months",
    Timeframe.ONE_YEAR: "the past year",
}

STABLE_RATIONALE = "This metric is holding steady - consistency is good."
STABLE_ACTIONS = ("Keep doing what you're doing - it's working.",)

# (rationale, actions) per metric and non-stable direction
Guidance = Tuple[str, Tuple[str, ...]]

GUIDANCE: Dict[MetricKind, Dict[TrendDirection, Guidance]] = {
    MetricKind.BODY_BATTERY: {
        TrendDirection.IMPROVING: (
            "Higher energy reserves mean better workout capacity and mental clarity.",
            (
                "Keep your current sleep and rest-day rhythm",
                "Use high-reserve mornings for your hardest sessions",
                "Add training load gradually rather than all at once",
            ),
        ),
        TrendDirection.DECLINING: (
            "Declining energy reserves may indicate overtraining or insufficient recovery.",
            (
                "Schedule a rest day or deload week",
                "Check sleep consistency",
                "Review training load - may need to reduce volume",
            ),
        ),
    },
    MetricKind.SLEEP_SCORE: {
        TrendDirection.IMPROVING: (
            "Better sleep quality enhances recovery, cognitive function, and immune health.",
            (
                "Protect the bedtime routine that got you here",
                "Keep the bedroom setup unchanged",
                "Note which evening habits preceded your best nights",
            ),
        ),
        TrendDirection.DECLINING: (
            "Reduced sleep quality impacts recovery, mood, and long-term health.",
            (
                "Set a consistent bedtime",
                "Reduce screen time 1 hour before bed",
                "Check bedroom temperature (65-68°F ideal)",
                "Limit caffeine after 2pm",
            ),
        ),
    },
    MetricKind.SLEEP_DURATION: {
        TrendDirection.IMPROVING: (
            "Adequate sleep duration supports physical recovery and mental performance.",
            (
                "Keep your lights-out time fixed on weekends too",
                "Hold on to the evening commitments you trimmed",
                "Aim to wake without an alarm on rest days",
            ),
        ),
        TrendDirection.DECLINING: (
            "Insufficient sleep accumulates as sleep debt, affecting all aspects of health.",
            (
                "Set a non-negotiable bedtime",
                "Create a wind-down routine",
                "Audit evening commitments",
            ),
        ),
    },
    MetricKind.DEEP_SLEEP: {
        TrendDirection.IMPROVING: (
            "Deep sleep is when physical recovery and memory consolidation occur.",
            (
                "Keep workouts finished well before bedtime",
                "Stay consistent with an alcohol-free evening routine",
                "Maintain a cool, dark bedroom",
            ),
        ),
        TrendDirection.DECLINING: (
            "Less deep sleep means reduced physical recovery and potential cognitive impacts.",
            (
                "Avoid alcohol close to bedtime",
                "Exercise earlier in the day",
                "Keep bedroom cool and dark",
            ),
        ),
    },
    MetricKind.REM_SLEEP: {
        TrendDirection.IMPROVING: (
            "REM sleep supports emotional regulation and learning.",
            (
                "Keep a consistent wake time",
                "Let yourself finish the final sleep cycle on rest days",
                "Continue limiting alcohol in the evening",
            ),
        ),
        TrendDirection.DECLINING: (
            "Reduced REM can affect mood, creativity, and memory.",
            (
                "Reduce alcohol intake",
                "Address sources of anxiety/stress",
                "Maintain consistent wake time",
            ),
        ),
    },
    MetricKind.STRESS: {
        TrendDirection.IMPROVING: (
            "Lower chronic stress supports better recovery and overall health.",
            (
                "Keep the breaks and boundaries that lowered your load",
                "Continue your breathwork or meditation practice",
                "Schedule time for the activities that recharge you",
            ),
        ),
        TrendDirection.DECLINING: (
            "Elevated stress increases cortisol, impairing recovery and immune function.",
            (
                "Add 10 minutes of daily breathwork",
                "Review workload and commitments",
                "Consider meditation or journaling",
                "Prioritize social connection",
            ),
        ),
    },
    MetricKind.RESTING_HR: {
        TrendDirection.IMPROVING: (
            "A lower resting HR often indicates improved cardiovascular fitness.",
            (
                "Keep building aerobic base with easy-paced sessions",
                "Maintain your hydration habits",
                "Keep recovery weeks in your training plan",
            ),
        ),
        TrendDirection.DECLINING: (
            "Elevated resting HR can signal overtraining, stress, or illness.",
            (
                "Check for signs of overtraining",
                "Ensure adequate hydration",
                "Review recent illness or stress",
                "Consider a recovery week",
            ),
        ),
    },
    MetricKind.HRV: {
        TrendDirection.IMPROVING: (
            "Higher HRV indicates better autonomic balance and recovery capacity.",
            (
                "Use high-HRV days for quality training sessions",
                "Keep your sleep schedule consistent",
                "Continue your current recovery routine",
            ),
        ),
        TrendDirection.DECLINING: (
            "Lower HRV suggests accumulated stress or insufficient recovery.",
            (
                "Prioritize sleep quality",
                "Reduce training intensity temporarily",
                "Check hydration and nutrition",
                "Add recovery modalities (stretching, massage)",
            ),
        ),
    },
    MetricKind.INTENSITY_MINUTES: {
        TrendDirection.IMPROVING: (
            "More activity supports cardiovascular health and energy levels.",
            (
                "Balance harder days with easy ones",
                "Watch Body Battery and HRV for signs of overload",
                "Keep workouts on the calendar",
            ),
        ),
        TrendDirection.DECLINING: (
            "Reduced activity may impact fitness maintenance and energy.",
            (
                "Schedule workouts like appointments",
                "Start with short sessions (even 10 min helps)",
                "Find activities you enjoy",
            ),
        ),
    },
    MetricKind.STEPS: {
        TrendDirection.IMPROVING: (
            "Increased movement supports metabolic health and energy.",
            (
                "Keep the walks that built the habit",
                "Add a short walk after meals",
                "Set a weekly step goal slightly above your average",
            ),
        ),
        TrendDirection.DECLINING: (
            "Reduced movement can impact circulation and energy levels.",
            (
                "Take walking meetings",
                "Set hourly movement reminders",
                "Park farther away",
                "Use stairs instead of elevators",
            ),
        ),
    },
}


def build_summary(trend: Trend) -> str:
    """'Your sleep quality has decreased 29% over the past week.'"""
    label = METRIC_LABELS[trend.metric]
    phrase = TIMEFRAME_PHRASES[trend.timeframe]
    change_word = "increased" if trend.percent_change > 0 else "decreased"
    magnitude = abs(round_half_up(trend.percent_change))
    return f"Your {label} has {change_word} {magnitude}% over {phrase}."


def explain(trend: Trend) -> TrendInsight:
    """
    Generate a human-readable insight from a trend.

    The summary wording follows the raw sign of the change; rationale and
    actions follow the classified direction (so a rising resting HR reads
    "increased" but gets the declining guidance).
    """
    if trend.direction == TrendDirection.STABLE:
        rationale, actions = STABLE_RATIONALE, STABLE_ACTIONS
    else:
        rationale, actions = GUIDANCE[trend.metric][trend.direction]

    return TrendInsight(
        metric=trend.metric,
        timeframe=trend.timeframe,
        percent_change=trend.percent_change,
        direction=trend.direction,
        summary=build_summary(trend),
        rationale=rationale,
        actions=list(actions),
    )


def significant_shifts(trends: Iterable[Trend]) -> List[TrendInsight]:
    """
    Declining trends beyond the significance threshold, most severe first.

    Ties in magnitude keep their input order (sorted() is stable).
    """
    declining = [
        t for t in trends
        if t.direction == TrendDirection.DECLINING
        and abs(t.percent_change) > SIGNIFICANCE_THRESHOLD
    ]
    insights = [explain(t) for t in declining]
    return sorted(insights, key=lambda i: abs(i.percent_change), reverse=True)
