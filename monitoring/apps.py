from django.apps import AppConfig


class MonitoringConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'monitoring'

    # alert rules hang off post_save, see signals.py
    def ready(self):
        import monitoring.signals  # noqa: F401
