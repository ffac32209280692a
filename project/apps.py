"""Django app configuration for project module."""

from django.apps import AppConfig


class ProjectConfig(AppConfig):
    """Configuration for the project application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "project"
    verbose_name = "Projects"
