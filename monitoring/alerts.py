"""
Alert rules run after a patient record is stored.

Every rule is independent and appends at most one alert per run. Repeated
triggers append repeated alerts, nothing is de-duplicated.
"""
import logging

from django.db import transaction
from django.utils import timezone

from . import conf, storage
from .models import AlertPriority, AlertType, MEDICATION_ACTIVITY, Mood
from .trends import compute_trends

logger = logging.getLogger(__name__)

LOW_SCORE_THRESHOLD = 0.40
BELOW_AVERAGE_THRESHOLD = 0.60
CONFUSION_PATTERN_LENGTH = 3
BASELINE_DECLINE_THRESHOLD = -15  # percentage points against the baseline component


# routine logs

def check_missed_medication(user, logs, now=None, tz=None):
    now = now or timezone.now()
    tz = tz or conf.get_timezone()
    today = conf.local_day(now, tz)

    taken_today = any(
        log.activity == MEDICATION_ACTIVITY and conf.local_day(log.timestamp, tz) == today
        for log in logs
    )
    if taken_today or now.astimezone(tz).hour < conf.medication_cutoff_hour():
        logger.debug("Medication check for user %s: no alert (taken today: %s)", user.pk, taken_today)
        return None

    return storage.insert_alert(
        user,
        type=AlertType.ROUTINE,
        priority=AlertPriority.HIGH,
        message="Medication not logged today",
    )


def check_confusion_pattern(user, logs):
    # logs arrive newest first
    recent_moods = [log.mood for log in logs if log.mood][:CONFUSION_PATTERN_LENGTH]
    if len(recent_moods) < CONFUSION_PATTERN_LENGTH or any(mood != Mood.CONFUSED for mood in recent_moods):
        logger.debug("Confusion check for user %s: no pattern in %s", user.pk, recent_moods)
        return None

    return storage.insert_alert(
        user,
        type=AlertType.MOOD,
        priority=AlertPriority.MEDIUM,
        message="Pattern of confusion detected in recent mood logs",
    )


# cognitive tests

def check_cognitive_score(user, test_type, score, max_score):
    ratio = score / max_score
    percentage = ratio * 100
    data = {"test_type": test_type, "score": score, "max_score": max_score}

    if ratio < LOW_SCORE_THRESHOLD:
        return storage.insert_alert(
            user,
            type=AlertType.COGNITIVE,
            priority=AlertPriority.HIGH,
            message=f"Low score on {test_type} test: {score}/{max_score} ({percentage:.0f}%)",
            data=data,
        )
    if ratio < BELOW_AVERAGE_THRESHOLD:
        return storage.insert_alert(
            user,
            type=AlertType.COGNITIVE,
            priority=AlertPriority.MEDIUM,
            message=f"Below average score on {test_type} test: {score}/{max_score}",
            data=data,
        )
    logger.debug("Cognitive check for user %s: %s %s/%s is fine", user.pk, test_type, score, max_score)
    return None


def check_baseline_decline(user, report):
    """One trend alert per test type that has fallen well below its baseline component."""
    raised = []
    for test_type, trend in report.declines(BASELINE_DECLINE_THRESHOLD).items():
        raised.append(storage.insert_alert(
            user,
            type=AlertType.TREND,
            priority=AlertPriority.HIGH,
            message=f"{test_type} performance is {abs(trend.change):.0f} points below baseline",
            data={
                "test_type": test_type,
                "baseline": round(trend.baseline, 1),
                "current": round(trend.current, 1),
                "change": round(trend.change, 1),
            },
        ))
    return raised


# functional tasks

def check_functional_task(user, task_type, errors, sequence_correct, task_id=None):
    if sequence_correct and errors <= 2:
        logger.debug("Functional task check for user %s: %s passed", user.pk, task_type)
        return None

    return storage.insert_alert(
        user,
        type=AlertType.FUNCTIONAL_TASK,
        priority=AlertPriority.HIGH,
        message=f'Functional task "{task_type}" completed with {errors} errors or incorrect sequence',
        data={"task_id": task_id, "errors": errors, "sequence_correct": sequence_correct},
    )


# entry points called once a record has been stored

def on_routine_log_inserted(user, now=None):
    logs = storage.get_routine_logs(user, conf.window_days(), now)
    raised = [
        check_missed_medication(user, logs, now),
        check_confusion_pattern(user, logs),
    ]
    return [alert for alert in raised if alert is not None]


def on_cognitive_test_inserted(user, test_type, score, max_score, now=None):
    raised = []
    alert = check_cognitive_score(user, test_type, score, max_score)
    if alert is not None:
        raised.append(alert)

    with transaction.atomic():
        baseline = storage.get_baseline(user)
        tests = storage.get_cognitive_tests(user, conf.window_days(), now) if baseline else []
    if baseline is None:
        logger.debug("No baseline for user %s, skipping decline check", user.pk)
        return raised

    raised.extend(check_baseline_decline(user, compute_trends(baseline, tests)))
    return raised


def on_functional_task_inserted(user, task_type, errors, sequence_correct, task_id=None):
    alert = check_functional_task(user, task_type, errors, sequence_correct, task_id)
    return [alert] if alert is not None else []
