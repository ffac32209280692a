"""Django admin configuration for task module."""

from django.contrib import admin

from .models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['task_id', 'title', 'project', 'team', 'status', 'deadline']
    list_filter = ['status', 'deadline']
    search_fields = ['task_id', 'title', 'project__project_id', 'team__team_id']
    readonly_fields = ['task_id', 'created_at', 'updated_at']
    filter_horizontal = ['assigned_to']
    ordering = ['task_id']
