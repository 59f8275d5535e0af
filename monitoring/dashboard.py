import logging

from . import conf, scoring, storage
from .serializers import (
    AlertSerializer,
    BaselineAssessmentSerializer,
    CognitiveTestSerializer,
    FunctionalTaskSerializer,
    PatientSerializer,
    RiskScoreSerializer,
    RoutineLogSerializer,
)
from .trends import analyze_trend

logger = logging.getLogger(__name__)


def get_dashboard_snapshot(user, days=None, persist=True, now=None):
    """Collect everything a caregiver dashboard shows for one patient."""
    days = days or conf.window_days()

    # the score always covers the fixed scoring window, the lists follow ``days``
    if persist:
        current = scoring.compute_and_record_risk_score(user, now)
    else:
        current = scoring.calculate_risk_score(user, now)

    baseline = storage.get_baseline(user)
    logger.debug("Building %s-day dashboard for user %s (persisted: %s)", days, user.pk, persist)

    return {
        'user': PatientSerializer(user).data,
        'baseline': BaselineAssessmentSerializer(baseline).data if baseline else None,
        'routine_logs': RoutineLogSerializer(storage.get_routine_logs(user, days, now), many=True).data,
        'cognitive_tests': CognitiveTestSerializer(storage.get_cognitive_tests(user, days, now), many=True).data,
        'functional_tasks': FunctionalTaskSerializer(storage.get_functional_tasks(user, days, now), many=True).data,
        'alerts': AlertSerializer(storage.get_alerts(user), many=True).data,
        'risk_scores': RiskScoreSerializer(storage.get_risk_scores(user, days, now), many=True).data,
        'current_risk_score': current.as_dict(),
        'trend': analyze_trend(user, days, now).as_dict(),
    }
