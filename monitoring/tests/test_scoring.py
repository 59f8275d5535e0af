from datetime import timedelta
from zoneinfo import ZoneInfo

import pytest

from monitoring import scoring
from monitoring.models import RiskScore, RoutineLog
from monitoring.storage import WindowSnapshot

from .conftest import NOW, baseline, cognitive_test, functional_task, medication_logs, mood_log


def test_full_adherence_and_no_other_data_is_a_perfect_score():
    snapshot = WindowSnapshot(routine_logs=medication_logs(7))

    result = scoring.score_window(snapshot)

    assert result.score == 10
    assert result.status == "green"
    assert result.breakdown.missed_medications == 0
    assert result.breakdown == scoring.RiskBreakdown()


def test_no_medication_logged_all_week():
    result = scoring.score_window(WindowSnapshot())

    assert result.breakdown.missed_medications == 7
    assert result.score == 3
    assert result.status == "red"


def test_medication_counts_logs_not_days():
    # seven logs squeezed into a single morning still count as a full week
    logs = [
        RoutineLog(activity="medication", timestamp=NOW - timedelta(minutes=i))
        for i in range(7)
    ]

    result = scoring.score_window(WindowSnapshot(routine_logs=logs))

    assert result.breakdown.missed_medications == 0


@pytest.mark.parametrize("recall_scores", [
    [(2, 5), (3, 5)],
    [(2, 5), (3, 5), (2, 5), (3, 5)],
])
def test_low_recall_deducts_a_single_point(recall_scores):
    tests = [cognitive_test("recall", score, max_score) for score, max_score in recall_scores]
    snapshot = WindowSnapshot(routine_logs=medication_logs(7), cognitive_tests=tests)

    result = scoring.score_window(snapshot)

    assert result.breakdown.low_memory_recall == 1
    assert result.score == 9


def test_recall_at_threshold_is_not_flagged():
    snapshot = WindowSnapshot(
        routine_logs=medication_logs(7),
        cognitive_tests=[cognitive_test("recall", 3, 5)],
    )

    result = scoring.score_window(snapshot)

    assert result.breakdown.low_memory_recall == 0
    assert result.score == 10


def test_slow_trail_making():
    snapshot = WindowSnapshot(
        routine_logs=medication_logs(7),
        cognitive_tests=[cognitive_test("trail-making", 0, 2), cognitive_test("trail-making", 1, 2)],
    )

    result = scoring.score_window(snapshot)

    assert result.breakdown.slow_trail_making == 1
    assert result.score == 9


def test_abnormal_functional_tasks_cost_two_points_each():
    snapshot = WindowSnapshot(
        routine_logs=medication_logs(7),
        functional_tasks=[
            functional_task(sequence_correct=False),
            functional_task(errors=3),
            functional_task(errors=2),
        ],
    )

    result = scoring.score_window(snapshot)

    assert result.breakdown.abnormal_functional_tasks == 2
    assert result.score == 6
    assert result.status == "amber"


def test_negative_mood_counts_distinct_days():
    logs = medication_logs(7) + [
        mood_log("confused", NOW - timedelta(hours=1)),
        mood_log("sad", NOW - timedelta(hours=2)),
        mood_log("sad", NOW - timedelta(days=2)),
        mood_log("happy", NOW - timedelta(days=3)),
    ]

    result = scoring.score_window(WindowSnapshot(routine_logs=logs))

    assert result.breakdown.negative_mood_days == 2
    assert result.score == 8


def test_negative_mood_days_follow_the_configured_timezone():
    # 23:30 and 00:30 UTC straddle midnight in UTC but fall on the same New York evening
    logs = [
        mood_log("confused", NOW.replace(hour=0, minute=30)),
        mood_log("confused", NOW.replace(hour=0, minute=30) - timedelta(hours=1)),
    ]
    snapshot = WindowSnapshot(routine_logs=logs)

    in_utc = scoring.score_window(snapshot, tz=ZoneInfo("UTC"))
    in_new_york = scoring.score_window(snapshot, tz=ZoneInfo("America/New_York"))

    assert in_utc.breakdown.negative_mood_days == 2
    assert in_new_york.breakdown.negative_mood_days == 1


@pytest.mark.parametrize("score, max_score, expected_score", [
    (3, 4, 8),     # 75% of a 100% baseline: decline 25 -> -2
    (17, 20, 9),   # 85%: decline 15 -> -1
    (19, 20, 10),  # 95%: decline 5 -> nothing
])
def test_decline_against_baseline(score, max_score, expected_score):
    snapshot = WindowSnapshot(
        routine_logs=medication_logs(7),
        cognitive_tests=[cognitive_test("orientation", score, max_score)],
        baseline=baseline(),
    )

    result = scoring.score_window(snapshot)

    assert result.score == expected_score
    assert result.breakdown.trend_factor == round(100 - score / max_score * 100, 1)


def test_baseline_is_ignored_without_recent_tests():
    snapshot = WindowSnapshot(routine_logs=medication_logs(7), baseline=baseline(orientation=0, recall=0, trail=0))

    result = scoring.score_window(snapshot)

    assert result.breakdown.trend_factor == 0.0
    assert result.score == 10


def test_score_is_clamped_to_zero():
    snapshot = WindowSnapshot(
        functional_tasks=[functional_task(sequence_correct=False) for _ in range(5)],
        routine_logs=[mood_log("sad", NOW - timedelta(days=d)) for d in range(6)],
    )

    result = scoring.score_window(snapshot)

    assert result.score == 0
    assert result.status == "red"
    assert result.breakdown.abnormal_functional_tasks == 5


def test_adding_an_abnormal_task_never_raises_the_score():
    tasks = [functional_task()]
    previous = scoring.score_window(WindowSnapshot(routine_logs=medication_logs(7), functional_tasks=tasks)).score

    for _ in range(6):
        tasks = tasks + [functional_task(sequence_correct=False)]
        current = scoring.score_window(WindowSnapshot(routine_logs=medication_logs(7), functional_tasks=tasks)).score
        assert current <= previous
        previous = current


@pytest.mark.parametrize("score, status", [
    (10, "green"), (8, "green"), (7.999, "amber"), (5, "amber"), (4.999, "red"), (0, "red"),
])
def test_status_bands(score, status):
    assert scoring.status_for(score) == status


@pytest.mark.django_db
def test_calculate_reads_only_the_trailing_window(patient, now):
    RoutineLog.objects.bulk_create(
        medication_logs(7, now=now, user=patient)
        + [RoutineLog(user=patient, activity="medication", timestamp=now - timedelta(days=10))]
    )

    result = scoring.calculate_risk_score(patient, now=now)

    assert result.score == 10
    assert RiskScore.objects.count() == 0


@pytest.mark.django_db
def test_reading_twice_is_stable_but_recording_appends_history(patient, now):
    RoutineLog.objects.bulk_create(medication_logs(4, now=now, user=patient))

    first = scoring.compute_and_record_risk_score(patient, now=now)
    second = scoring.compute_and_record_risk_score(patient, now=now)

    assert first == second
    assert first.score == 7
    history = RiskScore.objects.filter(user=patient)
    assert history.count() == 2
    assert all(row.breakdown["missed_medications"] == 3 for row in history)
    assert {row.status for row in history} == {"amber"}
