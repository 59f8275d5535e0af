from django.db import models
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.utils import timezone


class Mood(models.TextChoices):
    HAPPY = "happy", "Happy"
    NORMAL = "normal", "Normal"
    CONFUSED = "confused", "Confused"
    SAD = "sad", "Sad"
    ANXIOUS = "anxious", "Anxious"
    TIRED = "tired", "Tired"


class CognitiveTestType(models.TextChoices):
    ORIENTATION = "orientation", "Orientation"
    RECALL = "recall", "Five-word recall"
    TRAIL_MAKING = "trail-making", "Trail making"


class RiskLevel(models.TextChoices):
    NORMAL = "normal", "Normal"
    MILD = "mild", "Mild"
    HIGH = "high", "High"


class AlertType(models.TextChoices):
    ROUTINE = "routine", "Routine"
    MOOD = "mood", "Mood"
    COGNITIVE = "cognitive", "Cognitive"
    FUNCTIONAL_TASK = "functional_task", "Functional task"
    TREND = "trend", "Trend"


class AlertPriority(models.TextChoices):
    HIGH = "high", "High"
    MEDIUM = "medium", "Medium"
    LOW = "low", "Low"


class RiskStatus(models.TextChoices):
    GREEN = "green", "Green"
    AMBER = "amber", "Amber"
    RED = "red", "Red"


MEDICATION_ACTIVITY = "medication"
MOOD_ACTIVITY = "mood"

# onboarding sub-test maxima, cognitive = orientation + recall + trail
BASELINE_COMPONENT_MAX = {
    "orientation": 3,
    "recall": 5,
    "trail": 2,
    "teaTask": 5,
}


def validate_baseline_components(components):
    """Raise ValidationError unless every onboarding sub-score is present and in range."""
    if not isinstance(components, dict):
        raise ValidationError("Baseline components must be a mapping of sub-test scores.")
    for name, upper in BASELINE_COMPONENT_MAX.items():
        value = components.get(name)
        if value is None:
            raise ValidationError(f"Baseline component '{name}' is missing.")
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"Baseline component '{name}' must be a whole number.")
        if not 0 <= value <= upper:
            raise ValidationError(f"Baseline component '{name}' must be between 0 and {upper}.")
    unknown = set(components) - set(BASELINE_COMPONENT_MAX)
    if unknown:
        raise ValidationError(f"Unknown baseline components: {', '.join(sorted(unknown))}.")


class RoutineLog(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='routine_logs')
    activity = models.CharField(max_length=50)  # medication, mood, breakfast, water etc
    value = models.FloatField(blank=True, null=True)
    mood = models.CharField(max_length=20, choices=Mood.choices, blank=True, null=True)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['user', '-timestamp'], name='routine_user_ts_idx'),
        ]

    def clean(self):
        if self.activity == MOOD_ACTIVITY and not self.mood:
            raise ValidationError("A mood log must carry a mood value.")

    def __str__(self):
        return f"{self.user} - {self.activity} @ {self.timestamp}"


class CognitiveTest(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='cognitive_tests')
    test_type = models.CharField(max_length=20, choices=CognitiveTestType.choices)
    score = models.PositiveIntegerField()
    max_score = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    time_taken = models.PositiveIntegerField(blank=True, null=True)  # seconds
    details = models.JSONField(blank=True, null=True)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['user', '-timestamp'], name='cogtest_user_ts_idx'),
        ]

    def clean(self):
        if self.score is not None and self.max_score is not None and self.score > self.max_score:
            raise ValidationError("Score cannot exceed the maximum score.")

    @property
    def ratio(self):
        return self.score / self.max_score

    def __str__(self):
        return f"{self.user} - {self.test_type} {self.score}/{self.max_score} @ {self.timestamp}"


class FunctionalTask(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='functional_tasks')
    task_type = models.CharField(max_length=50)  # e.g. "tea-making"
    completed = models.BooleanField(default=False)
    errors = models.PositiveIntegerField(default=0)
    sequence_correct = models.BooleanField(default=False)
    time_taken = models.PositiveIntegerField(blank=True, null=True)
    steps = models.JSONField(blank=True, null=True)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['user', '-timestamp'], name='task_user_ts_idx'),
        ]

    @property
    def is_abnormal(self):
        return not self.sequence_correct or self.errors > 2

    def __str__(self):
        return f"{self.user} - {self.task_type} ({self.errors} errors) @ {self.timestamp}"


class BaselineAssessment(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='baseline_assessments')
    cognitive_score = models.PositiveIntegerField()   # 0-10
    functional_score = models.PositiveIntegerField()  # 0-5
    total_score = models.PositiveIntegerField()       # 0-15
    risk_level = models.CharField(max_length=10, choices=RiskLevel.choices)
    components = models.JSONField()  # {"orientation": .., "recall": .., "trail": .., "teaTask": ..}
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-timestamp']
        get_latest_by = 'timestamp'

    def clean(self):
        validate_baseline_components(self.components)
        if self.cognitive_score is None or self.functional_score is None:
            return  # already reported by clean_fields()
        if not 0 <= self.cognitive_score <= 10 or not 0 <= self.functional_score <= 5:
            raise ValidationError("Baseline scores are out of range.")

    def __str__(self):
        return f"Baseline for {self.user}: {self.total_score}/15 ({self.risk_level})"


class Alert(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='alerts')
    type = models.CharField(max_length=20, choices=AlertType.choices)
    priority = models.CharField(max_length=10, choices=AlertPriority.choices)
    message = models.TextField()
    data = models.JSONField(blank=True, null=True)
    read = models.BooleanField(default=False)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['user', 'read'], name='alert_user_read_idx'),
        ]

    def mark_read(self):
        # the only mutation an alert ever gets
        if not self.read:
            self.read = True
            self.save(update_fields=['read'])
        return self

    def __str__(self):
        return f"[{self.priority}] {self.type} for {self.user}: {self.message}"


class RiskScore(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='risk_scores')
    score = models.FloatField()
    status = models.CharField(max_length=10, choices=RiskStatus.choices)
    breakdown = models.JSONField(blank=True, null=True)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-timestamp']
        get_latest_by = 'timestamp'
        indexes = [
            models.Index(fields=['user', '-timestamp'], name='riskscore_user_ts_idx'),
        ]

    def __str__(self):
        return f"{self.user} - {self.score} ({self.status}) @ {self.timestamp}"
