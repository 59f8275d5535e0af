import logging
from datetime import timedelta

import pytest

from monitoring import alerts
from monitoring.models import Alert, BaselineAssessment, CognitiveTest, RoutineLog

from .conftest import NOW, baseline, cognitive_test, mood_log

EVENING = NOW.replace(hour=19)

pytestmark = pytest.mark.django_db


class TestMissedMedication:

    def test_raised_after_cutoff_without_a_dose_today(self, patient):
        yesterday = RoutineLog(activity="medication", timestamp=EVENING - timedelta(days=1))

        alert = alerts.check_missed_medication(patient, [yesterday], now=EVENING)

        assert alert.type == "routine"
        assert alert.priority == "high"
        assert alert.message == "Medication not logged today"

    def test_not_raised_before_cutoff(self, patient):
        assert alerts.check_missed_medication(patient, [], now=NOW) is None
        assert not Alert.objects.exists()

    def test_not_raised_when_taken_today(self, patient):
        dose = RoutineLog(activity="medication", timestamp=EVENING.replace(hour=8))

        assert alerts.check_missed_medication(patient, [dose], now=EVENING) is None

    def test_cutoff_uses_the_monitoring_timezone(self, patient, settings):
        # 12:00 UTC is 21:00 in Tokyo
        settings.MONITORING = {**settings.MONITORING, "TIMEZONE": "Asia/Tokyo"}

        alert = alerts.check_missed_medication(patient, [], now=NOW)

        assert alert is not None


class TestConfusionPattern:

    def test_three_confused_moods_in_a_row(self, patient):
        logs = [mood_log("confused", NOW - timedelta(hours=h)) for h in range(3)]

        alert = alerts.check_confusion_pattern(patient, logs)

        assert alert.type == "mood"
        assert alert.priority == "medium"
        assert alert.message == "Pattern of confusion detected in recent mood logs"

    def test_latest_three_moods_must_all_be_confused(self, patient):
        logs = [
            mood_log("confused", NOW),
            mood_log("happy", NOW - timedelta(hours=1)),
            mood_log("confused", NOW - timedelta(hours=2)),
            mood_log("confused", NOW - timedelta(hours=3)),
        ]

        assert alerts.check_confusion_pattern(patient, logs) is None

    def test_logs_without_a_mood_are_skipped(self, patient):
        logs = [
            mood_log("confused", NOW),
            RoutineLog(activity="water", value=250, timestamp=NOW - timedelta(minutes=30)),
            mood_log("confused", NOW - timedelta(hours=1)),
            mood_log("confused", NOW - timedelta(hours=2)),
        ]

        assert alerts.check_confusion_pattern(patient, logs) is not None

    def test_fewer_than_three_moods(self, patient):
        logs = [mood_log("confused", NOW), mood_log("confused", NOW - timedelta(hours=1))]

        assert alerts.check_confusion_pattern(patient, logs) is None


class TestCognitiveScore:

    def test_below_forty_percent_is_high_priority(self, patient):
        alert = alerts.check_cognitive_score(patient, "recall", 2, 10)

        assert alert.type == "cognitive"
        assert alert.priority == "high"
        assert alert.message == "Low score on recall test: 2/10 (20%)"
        assert alert.data == {"test_type": "recall", "score": 2, "max_score": 10}
        assert Alert.objects.filter(priority="medium").count() == 0

    def test_forty_percent_is_below_average(self, patient):
        alert = alerts.check_cognitive_score(patient, "orientation", 4, 10)

        assert alert.priority == "medium"
        assert alert.message == "Below average score on orientation test: 4/10"

    def test_sixty_percent_is_fine(self, patient):
        assert alerts.check_cognitive_score(patient, "trail-making", 6, 10) is None


class TestFunctionalTask:

    @pytest.mark.parametrize("errors, sequence_correct", [(0, False), (3, True)])
    def test_failure(self, patient, errors, sequence_correct):
        alert = alerts.check_functional_task(patient, "tea-making", errors, sequence_correct, task_id=7)

        assert alert.type == "functional_task"
        assert alert.priority == "high"
        assert alert.message == (
            f'Functional task "tea-making" completed with {errors} errors or incorrect sequence'
        )
        assert alert.data == {"task_id": 7, "errors": errors, "sequence_correct": sequence_correct}

    def test_two_errors_in_order_is_fine(self, patient):
        assert alerts.check_functional_task(patient, "tea-making", 2, True) is None


class TestBaselineDecline:

    def test_declining_type_raises_trend_alert(self, patient, now):
        BaselineAssessment.objects.bulk_create([baseline(user=patient)])
        CognitiveTest.objects.bulk_create([cognitive_test("recall", 2, 5, user=patient)])

        raised = alerts.on_cognitive_test_inserted(patient, "recall", 2, 5, now=now)

        assert [(a.type, a.priority) for a in raised] == [("cognitive", "medium"), ("trend", "high")]
        trend = raised[1]
        assert trend.data["test_type"] == "recall"
        assert trend.data["change"] == -60.0
        assert trend.message == "recall performance is 60 points below baseline"

    def test_mild_decline_is_not_alerted(self, patient, now):
        BaselineAssessment.objects.bulk_create([baseline(user=patient)])
        CognitiveTest.objects.bulk_create([cognitive_test("orientation", 87, 100, user=patient)])

        raised = alerts.on_cognitive_test_inserted(patient, "orientation", 87, 100, now=now)

        assert raised == []

    def test_no_trend_alert_without_baseline(self, patient, now):
        CognitiveTest.objects.bulk_create([cognitive_test("recall", 0, 5, user=patient)])

        alerts.on_cognitive_test_inserted(patient, "recall", 0, 5, now=now)

        assert not Alert.objects.filter(type="trend").exists()
        assert Alert.objects.filter(type="cognitive", priority="high").count() == 1


def test_routine_entry_point_runs_both_rules(patient):
    RoutineLog.objects.bulk_create(
        [mood_log("confused", EVENING - timedelta(hours=h), user=patient) for h in range(3)]
    )

    raised = alerts.on_routine_log_inserted(patient, now=EVENING)

    assert sorted(a.type for a in raised) == ["mood", "routine"]


def test_repeated_triggers_are_not_deduplicated(patient):
    for _ in range(3):
        alerts.check_cognitive_score(patient, "recall", 1, 5)

    assert Alert.objects.filter(user=patient, type="cognitive").count() == 3


def test_functional_entry_point(patient):
    assert alerts.on_functional_task_inserted(patient, "tea-making", 0, True) == []
    assert len(alerts.on_functional_task_inserted(patient, "tea-making", 4, True)) == 1


def test_quiet_rules_log_at_debug(patient, caplog, monkeypatch):
    monkeypatch.setattr(logging.getLogger("monitoring"), "propagate", True)

    with caplog.at_level(logging.DEBUG, logger="monitoring.alerts"):
        alerts.check_cognitive_score(patient, "recall", 5, 5)
        alerts.check_functional_task(patient, "tea-making", 0, True)
        alerts.check_confusion_pattern(patient, [])
        alerts.check_missed_medication(patient, [], now=NOW)

    messages = [r.getMessage() for r in caplog.records if r.name == "monitoring.alerts"]
    assert len(messages) == 4
    assert all(r.levelno == logging.DEBUG for r in caplog.records if r.name == "monitoring.alerts")
    assert not Alert.objects.exists()
