from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Alert, BaselineAssessment, CognitiveTest, FunctionalTask, RiskScore, RoutineLog


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = get_user_model()
        fields = ['id', 'email', 'name', 'role', 'date_of_birth', 'caregiver', 'onboarding_completed']


class RoutineLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = RoutineLog
        fields = ['id', 'user', 'activity', 'value', 'mood', 'timestamp']


class CognitiveTestSerializer(serializers.ModelSerializer):
    class Meta:
        model = CognitiveTest
        fields = ['id', 'user', 'test_type', 'score', 'max_score', 'time_taken', 'details', 'timestamp']


class FunctionalTaskSerializer(serializers.ModelSerializer):
    class Meta:
        model = FunctionalTask
        fields = ['id', 'user', 'task_type', 'completed', 'errors', 'sequence_correct', 'time_taken', 'steps', 'timestamp']


class BaselineAssessmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = BaselineAssessment
        fields = ['id', 'user', 'cognitive_score', 'functional_score', 'total_score', 'risk_level', 'components', 'timestamp']


class AlertSerializer(serializers.ModelSerializer):
    class Meta:
        model = Alert
        fields = ['id', 'user', 'type', 'priority', 'message', 'data', 'read', 'timestamp']
        read_only_fields = ['user', 'type', 'priority', 'message', 'data', 'timestamp']  # only "read" changes


class RiskScoreSerializer(serializers.ModelSerializer):
    class Meta:
        model = RiskScore
        fields = ['id', 'user', 'score', 'status', 'breakdown', 'timestamp']
