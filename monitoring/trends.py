"""
Per test type comparison of recent cognitive performance against the
onboarding baseline.
"""
import logging
from dataclasses import dataclass, field, asdict
from typing import Dict, Iterable, Optional

from . import conf, storage
from .models import BASELINE_COMPONENT_MAX, BaselineAssessment, CognitiveTest, CognitiveTestType

logger = logging.getLogger(__name__)

IMPROVING = "improving"
DECLINING = "declining"
STABLE = "stable"

TREND_THRESHOLD = 10  # percentage points either way

# which onboarding component a recurring test is measured against
BASELINE_COMPONENT_FOR_TEST = {
    CognitiveTestType.ORIENTATION.value: "orientation",
    CognitiveTestType.RECALL.value: "recall",
    CognitiveTestType.TRAIL_MAKING.value: "trail",
}


@dataclass
class TypeTrend:
    baseline: float
    current: float
    change: float
    direction: str


@dataclass
class TrendReport:
    has_baseline: bool
    trends: Dict[str, TypeTrend] = field(default_factory=dict)

    def as_dict(self):
        return asdict(self)

    def declines(self, below):
        """Test types whose trend is declining and whose change is under ``below``."""
        return {
            test_type: trend
            for test_type, trend in self.trends.items()
            if trend.direction == DECLINING and trend.change < below
        }


def baseline_percentage(baseline: BaselineAssessment, test_type: str) -> float:
    component = BASELINE_COMPONENT_FOR_TEST.get(test_type)
    if component is None:
        return 0.0
    value = (baseline.components or {}).get(component)
    if value is None:
        return 0.0
    return value / BASELINE_COMPONENT_MAX[component] * 100


def direction_for(change: float) -> str:
    if change > TREND_THRESHOLD:
        return IMPROVING
    if change < -TREND_THRESHOLD:
        return DECLINING
    return STABLE


def compute_trends(baseline: Optional[BaselineAssessment], recent_tests: Iterable[CognitiveTest]) -> TrendReport:
    recent_tests = list(recent_tests)
    if baseline is None or not recent_tests:
        return TrendReport(has_baseline=False)

    by_type = {}
    for test in recent_tests:
        by_type.setdefault(test.test_type, []).append(test.ratio * 100)

    trends = {}
    for test_type, percentages in by_type.items():
        current = sum(percentages) / len(percentages)
        reference = baseline_percentage(baseline, test_type)
        change = current - reference
        trends[test_type] = TypeTrend(
            baseline=reference,
            current=current,
            change=change,
            direction=direction_for(change),
        )
    return TrendReport(has_baseline=True, trends=trends)


def analyze_trend(user, days=None, now=None) -> TrendReport:
    """Trend report for the caregiver view; insufficient data is not an error."""
    baseline = storage.get_baseline(user)
    if baseline is None:
        logger.debug("No baseline for user %s, trend analysis skipped", user.pk)
        return TrendReport(has_baseline=False)
    tests = storage.get_cognitive_tests(user, days or conf.window_days(), now)
    return compute_trends(baseline, tests)
