"""
Scoring of the one-off onboarding assessment that later tests are compared to.
"""
import logging
from dataclasses import dataclass

from django.db import transaction

from .models import BaselineAssessment, RiskLevel, validate_baseline_components

logger = logging.getLogger(__name__)

COGNITIVE_COMPONENTS = ("orientation", "recall", "trail")
FUNCTIONAL_COMPONENT = "teaTask"


@dataclass(frozen=True)
class BaselineResult:
    cognitive_score: int
    functional_score: int
    total_score: int
    risk_level: str


def risk_level_for(total_score):
    if total_score >= 10:
        return RiskLevel.NORMAL.value
    if total_score >= 6:
        return RiskLevel.MILD.value
    return RiskLevel.HIGH.value


def score_baseline(components):
    validate_baseline_components(components)
    cognitive = sum(components[name] for name in COGNITIVE_COMPONENTS)
    functional = components[FUNCTIONAL_COMPONENT]
    total = cognitive + functional
    return BaselineResult(
        cognitive_score=cognitive,
        functional_score=functional,
        total_score=total,
        risk_level=risk_level_for(total),
    )


def record_baseline(user, components, timestamp=None):
    """Score and store an onboarding assessment; the newest one becomes authoritative."""
    result = score_baseline(components)
    baseline = BaselineAssessment(
        user=user,
        cognitive_score=result.cognitive_score,
        functional_score=result.functional_score,
        total_score=result.total_score,
        risk_level=result.risk_level,
        components=dict(components),
    )
    if timestamp is not None:
        baseline.timestamp = timestamp
    baseline.full_clean()
    # the onboarding flag is set by a post_save receiver and commits with the row
    with transaction.atomic():
        baseline.save()
    logger.info(
        "Stored baseline for user %s: %s/15 (%s)", user.pk, result.total_score, result.risk_level
    )
    return baseline
