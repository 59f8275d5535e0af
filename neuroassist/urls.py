"""
URL configuration for the neuroassist project.

Only the admin is routed here: patients and caregivers reach the monitoring
data through the request layer, which lives outside this repository.
"""
from django.contrib import admin
from django.urls import path

urlpatterns = [
    path('neuroadmin/', admin.site.urls),
]
