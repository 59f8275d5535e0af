"""
WSGI config for the neuroassist project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'neuroassist.settings')

application = get_wsgi_application()
