from django.db.models.signals import post_save
from django.dispatch import receiver

from . import alerts
from .models import BaselineAssessment, CognitiveTest, FunctionalTask, RoutineLog


# alert rules only look at fresh inserts, edits made in the admin do not re-trigger them

@receiver(post_save, sender=RoutineLog)
def routine_log_saved(sender, instance, created, **kwargs):
    if not created:
        return
    alerts.on_routine_log_inserted(instance.user)


@receiver(post_save, sender=CognitiveTest)
def cognitive_test_saved(sender, instance, created, **kwargs):
    if not created:
        return
    alerts.on_cognitive_test_inserted(
        instance.user, instance.test_type, instance.score, instance.max_score
    )


@receiver(post_save, sender=FunctionalTask)
def functional_task_saved(sender, instance, created, **kwargs):
    if not created:
        return
    alerts.on_functional_task_inserted(
        instance.user,
        instance.task_type,
        instance.errors,
        instance.sequence_correct,
        task_id=instance.pk,
    )


@receiver(post_save, sender=BaselineAssessment)
def baseline_saved(sender, instance, created, **kwargs):
    if not created:
        return
    user = instance.user
    if not user.onboarding_completed:
        type(user).objects.filter(pk=user.pk).update(onboarding_completed=True)
        user.onboarding_completed = True
