from datetime import datetime, timedelta, timezone as dt_timezone

import pytest
from django.contrib.auth import get_user_model

from monitoring.models import BaselineAssessment, CognitiveTest, FunctionalTask, RoutineLog

# a fixed "now" keeps every window and calendar day deterministic; noon UTC is before the medication cutoff
NOW = datetime(2026, 3, 10, 12, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def patient(db):
    return get_user_model().objects.create_user(
        email="john@example.com", password="pass1234", name="John Doe"
    )


@pytest.fixture
def caregiver(db):
    return get_user_model().objects.create_user(
        email="carer@example.com", password="pass1234", name="Jane Carer", role="caregiver"
    )


def medication_logs(count, now=NOW, user=None):
    return [
        RoutineLog(user=user, activity="medication", timestamp=now - timedelta(hours=12 * i))
        for i in range(count)
    ]


def mood_log(mood, at, user=None):
    return RoutineLog(user=user, activity="mood", mood=mood, timestamp=at)


def cognitive_test(test_type, score, max_score, at=NOW, user=None):
    return CognitiveTest(user=user, test_type=test_type, score=score, max_score=max_score, timestamp=at)


def functional_task(errors=0, sequence_correct=True, at=NOW, user=None):
    return FunctionalTask(
        user=user,
        task_type="tea-making",
        completed=True,
        errors=errors,
        sequence_correct=sequence_correct,
        timestamp=at,
    )


def baseline(orientation=3, recall=5, trail=2, tea_task=5, user=None):
    cognitive = orientation + recall + trail
    return BaselineAssessment(
        user=user,
        cognitive_score=cognitive,
        functional_score=tea_task,
        total_score=cognitive + tea_task,
        risk_level="normal",
        components={"orientation": orientation, "recall": recall, "trail": trail, "teaTask": tea_task},
        timestamp=NOW - timedelta(days=30),
    )
