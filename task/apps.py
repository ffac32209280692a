"""Django app configuration for task module."""

from django.apps import AppConfig


class TaskConfig(AppConfig):
    """Configuration for the task application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "task"
    verbose_name = "Tasks"
