from django.contrib import admin

from .models import Alert, BaselineAssessment, CognitiveTest, FunctionalTask, RiskScore, RoutineLog


@admin.register(RoutineLog)
class RoutineLogAdmin(admin.ModelAdmin):
    list_display = ['user', 'activity', 'value', 'mood', 'timestamp']
    list_filter = ['activity', 'mood']
    search_fields = ['user__email', 'user__name']


@admin.register(CognitiveTest)
class CognitiveTestAdmin(admin.ModelAdmin):
    list_display = ['user', 'test_type', 'score', 'max_score', 'timestamp']
    list_filter = ['test_type']
    search_fields = ['user__email', 'user__name']


@admin.register(FunctionalTask)
class FunctionalTaskAdmin(admin.ModelAdmin):
    list_display = ['user', 'task_type', 'completed', 'errors', 'sequence_correct', 'timestamp']
    list_filter = ['task_type', 'sequence_correct']
    search_fields = ['user__email', 'user__name']


@admin.register(BaselineAssessment)
class BaselineAssessmentAdmin(admin.ModelAdmin):
    list_display = ['user', 'cognitive_score', 'functional_score', 'total_score', 'risk_level', 'timestamp']
    list_filter = ['risk_level']
    search_fields = ['user__email', 'user__name']


@admin.register(Alert)
class AlertAdmin(admin.ModelAdmin):
    list_display = ['user', 'type', 'priority', 'message', 'read', 'timestamp']
    list_filter = ['type', 'priority', 'read']
    search_fields = ['user__email', 'user__name', 'message']
    readonly_fields = ['user', 'type', 'priority', 'message', 'data', 'timestamp']
    actions = ['mark_as_read']

    def has_add_permission(self, request):
        return False  # alerts come from the rule engine only

    @admin.action(description="Mark selected alerts as read")
    def mark_as_read(self, request, queryset):
        updated = queryset.filter(read=False).update(read=True)
        self.message_user(request, f"{updated} alert(s) marked as read.")


@admin.register(RiskScore)
class RiskScoreAdmin(admin.ModelAdmin):
    list_display = ['user', 'score', 'status', 'timestamp']
    list_filter = ['status']
    search_fields = ['user__email', 'user__name']
    readonly_fields = ['user', 'score', 'status', 'breakdown', 'timestamp']

    def has_add_permission(self, request):
        return False
