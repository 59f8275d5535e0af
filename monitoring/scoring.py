"""
Risk score for a patient over the trailing window.

``score_window`` is a pure function of a ``WindowSnapshot``; loading the
snapshot and appending the result to the score history are separate steps
so the caller decides when history grows.
"""
import logging
from dataclasses import dataclass, asdict

from . import conf, storage
from .models import CognitiveTestType, MEDICATION_ACTIVITY, Mood, RiskStatus

logger = logging.getLogger(__name__)

MAX_SCORE = 10.0
EXPECTED_MEDICATION_LOGS = 7  # one a day over the week

RECALL_THRESHOLD = 0.6
TRAIL_MAKING_THRESHOLD = 0.5
NEGATIVE_MOODS = {Mood.CONFUSED.value, Mood.SAD.value}

MILD_DECLINE = 10    # percentage points below baseline
SEVERE_DECLINE = 20


@dataclass(frozen=True)
class RiskBreakdown:
    missed_medications: int = 0
    abnormal_functional_tasks: int = 0
    low_memory_recall: int = 0
    slow_trail_making: int = 0
    negative_mood_days: int = 0
    trend_factor: float = 0.0  # measured decline vs baseline in points, not the deduction


@dataclass(frozen=True)
class RiskResult:
    score: float
    status: str
    breakdown: RiskBreakdown

    def as_dict(self):
        return {"score": self.score, "status": self.status, "breakdown": asdict(self.breakdown)}


def status_for(score):
    if score >= 8:
        return RiskStatus.GREEN.value
    if score >= 5:
        return RiskStatus.AMBER.value
    return RiskStatus.RED.value


def _mean_ratio(tests):
    return sum(t.ratio for t in tests) / len(tests)


def score_window(snapshot, tz=None) -> RiskResult:
    tz = tz or conf.get_timezone()
    score = MAX_SCORE

    # 1. medication adherence - counts logs, not days, so two logs on one day cover a missed one
    medication_logs = [log for log in snapshot.routine_logs if log.activity == MEDICATION_ACTIVITY]
    missed_medications = max(0, EXPECTED_MEDICATION_LOGS - len(medication_logs))
    score -= missed_medications

    # 2. functional tasks done out of order or with too many errors
    abnormal_tasks = sum(1 for task in snapshot.functional_tasks if task.is_abnormal)
    score -= abnormal_tasks * 2

    # 3. memory recall
    low_memory_recall = 0
    recall_tests = [t for t in snapshot.cognitive_tests if t.test_type == CognitiveTestType.RECALL]
    if recall_tests and _mean_ratio(recall_tests) < RECALL_THRESHOLD:
        low_memory_recall = 1
        score -= 1

    # 4. trail making
    slow_trail_making = 0
    trail_tests = [t for t in snapshot.cognitive_tests if t.test_type == CognitiveTestType.TRAIL_MAKING]
    if trail_tests and _mean_ratio(trail_tests) < TRAIL_MAKING_THRESHOLD:
        slow_trail_making = 1
        score -= 1

    # 5. days with a confused or sad mood
    negative_days = {
        conf.local_day(log.timestamp, tz)
        for log in snapshot.routine_logs
        if log.mood in NEGATIVE_MOODS
    }
    score -= len(negative_days)

    # 6. overall cognitive performance against the onboarding baseline
    trend_factor = 0.0
    if snapshot.baseline is not None and snapshot.cognitive_tests:
        baseline_pct = snapshot.baseline.cognitive_score / 10 * 100
        recent_pct = _mean_ratio(snapshot.cognitive_tests) * 100
        decline = baseline_pct - recent_pct
        trend_factor = round(decline, 1)
        if decline > SEVERE_DECLINE:
            score -= 2
        elif decline > MILD_DECLINE:
            score -= 1

    score = max(0.0, min(MAX_SCORE, score))

    breakdown = RiskBreakdown(
        missed_medications=missed_medications,
        abnormal_functional_tasks=abnormal_tasks,
        low_memory_recall=low_memory_recall,
        slow_trail_making=slow_trail_making,
        negative_mood_days=len(negative_days),
        trend_factor=trend_factor,
    )
    return RiskResult(score=score, status=status_for(score), breakdown=breakdown)


def calculate_risk_score(user, now=None) -> RiskResult:
    """Current risk score for ``user``. Reads only, nothing is written."""
    snapshot = storage.load_snapshot(user, conf.window_days(), now)
    return score_window(snapshot)


def record_risk_score(user, result: RiskResult):
    risk_score = storage.insert_risk_score(
        user,
        score=result.score,
        status=result.status,
        breakdown=asdict(result.breakdown),
    )
    logger.info("Recorded risk score %.1f (%s) for user %s", result.score, result.status, user.pk)
    return risk_score


def compute_and_record_risk_score(user, now=None) -> RiskResult:
    result = calculate_risk_score(user, now)
    record_risk_score(user, result)
    return result
