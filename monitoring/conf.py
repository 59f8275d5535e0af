from zoneinfo import ZoneInfo

from django.conf import settings

DEFAULTS = {
    "TIMEZONE": None,  # falls back to settings.TIME_ZONE
    "WINDOW_DAYS": 7,
    "MEDICATION_CUTOFF_HOUR": 18,
}


def _get(name):
    return getattr(settings, "MONITORING", {}).get(name, DEFAULTS[name])


def get_timezone():
    """Timezone used to derive calendar days and the local hour."""
    return ZoneInfo(_get("TIMEZONE") or settings.TIME_ZONE)


def window_days():
    return int(_get("WINDOW_DAYS"))


def medication_cutoff_hour():
    return int(_get("MEDICATION_CUTOFF_HOUR"))


def local_day(moment, tz=None):
    """Calendar date of an aware datetime in the monitoring timezone."""
    return moment.astimezone(tz or get_timezone()).date()
