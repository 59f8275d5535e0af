"""
Reads and writes the scoring engine needs from the database.

Windowed reads return records newest first. Inserts of patient records go
through ``full_clean()`` so unknown enum values and broken invariants are
rejected before they reach the engine. Database errors are not caught here.
"""
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from . import conf
from .models import (
    Alert,
    BaselineAssessment,
    CognitiveTest,
    FunctionalTask,
    RiskScore,
    RoutineLog,
)

logger = logging.getLogger(__name__)


@dataclass
class WindowSnapshot:
    """Everything one scoring or alerting pass looks at, read once."""
    routine_logs: List[RoutineLog] = field(default_factory=list)
    cognitive_tests: List[CognitiveTest] = field(default_factory=list)
    functional_tasks: List[FunctionalTask] = field(default_factory=list)
    baseline: Optional[BaselineAssessment] = None


def _cutoff(days, now=None):
    return (now or timezone.now()) - timedelta(days=days)


def _windowed(model, user, days, now=None):
    return list(
        model.objects.filter(user=user, timestamp__gte=_cutoff(days, now))
        .order_by('-timestamp', '-id')
    )


def get_routine_logs(user, days=7, now=None):
    return _windowed(RoutineLog, user, days, now)


def get_cognitive_tests(user, days=7, now=None):
    return _windowed(CognitiveTest, user, days, now)


def get_functional_tasks(user, days=7, now=None):
    return _windowed(FunctionalTask, user, days, now)


def get_baseline(user):
    # several baselines can exist, the newest one is authoritative
    return BaselineAssessment.objects.filter(user=user).order_by('-timestamp', '-id').first()


def load_snapshot(user, days=None, now=None):
    days = days or conf.window_days()
    with transaction.atomic():
        return WindowSnapshot(
            routine_logs=get_routine_logs(user, days, now),
            cognitive_tests=get_cognitive_tests(user, days, now),
            functional_tasks=get_functional_tasks(user, days, now),
            baseline=get_baseline(user),
        )


def _create_validated(model, **fields):
    # post_save alert rules run inside this block, a failing rule rolls the record back
    with transaction.atomic():
        instance = model(**fields)
        instance.full_clean()
        instance.save()
    return instance


def add_routine_log(user, activity, value=None, mood=None, timestamp=None):
    fields = {"user": user, "activity": activity, "value": value, "mood": mood}
    if timestamp is not None:
        fields["timestamp"] = timestamp
    return _create_validated(RoutineLog, **fields)


def add_cognitive_test(user, test_type, score, max_score, time_taken=None, details=None, timestamp=None):
    fields = {
        "user": user,
        "test_type": test_type,
        "score": score,
        "max_score": max_score,
        "time_taken": time_taken,
        "details": details,
    }
    if timestamp is not None:
        fields["timestamp"] = timestamp
    return _create_validated(CognitiveTest, **fields)


def add_functional_task(user, task_type, completed=False, errors=0, sequence_correct=False,
                        time_taken=None, steps=None, timestamp=None):
    fields = {
        "user": user,
        "task_type": task_type,
        "completed": completed,
        "errors": errors,
        "sequence_correct": sequence_correct,
        "time_taken": time_taken,
        "steps": steps,
    }
    if timestamp is not None:
        fields["timestamp"] = timestamp
    return _create_validated(FunctionalTask, **fields)


def insert_alert(user, type, priority, message, data=None):
    alert = Alert.objects.create(user=user, type=type, priority=priority, message=message, data=data)
    logger.info("Alert %s/%s raised for user %s: %s", type, priority, user.pk, message)
    return alert


def insert_risk_score(user, score, status, breakdown=None):
    return RiskScore.objects.create(user=user, score=score, status=status, breakdown=breakdown)


def get_alerts(user, unread_only=False):
    alerts = Alert.objects.filter(user=user)
    if unread_only:
        alerts = alerts.filter(read=False)
    return list(alerts.order_by('-timestamp', '-id'))


def mark_alert_read(alert_id):
    alert = Alert.objects.filter(pk=alert_id).first()
    if alert is None:
        return None
    return alert.mark_read()


def get_risk_scores(user, days=7, now=None):
    return _windowed(RiskScore, user, days, now)


def get_latest_risk_score(user):
    return RiskScore.objects.filter(user=user).order_by('-timestamp', '-id').first()
