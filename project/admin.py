"""Django admin configuration for project module."""

from django.contrib import admin

from .models import AssignedProjectLog, Project, Team


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['project_id', 'title', 'status', 'deadline', 'manager', 'updated_at']
    list_filter = ['status', 'created_at']
    search_fields = ['project_id', 'title', 'description']
    readonly_fields = ['project_id', 'created_at', 'updated_at']
    ordering = ['-updated_at']


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ['team_id', 'team_name', 'team_leader', 'manager', 'created_at']
    search_fields = ['team_id', 'team_name']
    readonly_fields = ['team_id', 'created_at', 'updated_at']
    filter_horizontal = ['members']
    ordering = ['team_id']


@admin.register(AssignedProjectLog)
class AssignedProjectLogAdmin(admin.ModelAdmin):
    """Project/team assignments and the task identifiers recorded for them."""

    list_display = ['assign_project_id', 'project', 'team', 'deadline', 'updated_at']
    search_fields = ['assign_project_id', 'project__project_id', 'team__team_id']
    readonly_fields = ['assign_project_id', 'created_at', 'updated_at']
    ordering = ['assign_project_id']
