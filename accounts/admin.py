"""Django admin configuration for accounts module."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Admin, ProjectManager, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for accounts, logging in by email."""

    list_display = ['user_id', 'email', 'first_name', 'last_name', 'user_type', 'is_active']
    list_filter = ['user_type', 'is_active', 'is_staff']
    search_fields = ['user_id', 'email', 'first_name', 'last_name']
    readonly_fields = ['user_id', 'created_at', 'updated_at', 'last_login', 'date_joined']
    ordering = ['user_id']

    fieldsets = [
        ('Account', {'fields': ['user_id', 'email', 'password', 'user_type']}),
        ('Profile', {'fields': ['first_name', 'last_name', 'contact', 'profile_pic']}),
        ('Permissions', {'fields': ['is_active', 'is_staff', 'is_superuser'], 'classes': ['collapse']}),
        ('Timestamps', {'fields': ['last_login', 'date_joined', 'created_at', 'updated_at']}),
    ]
    add_fieldsets = [
        (
            None,
            {
                'classes': ['wide'],
                'fields': ['email', 'first_name', 'last_name', 'user_type', 'password1', 'password2'],
            },
        ),
    ]


@admin.register(Admin)
class AdminAccountAdmin(UserAdmin):
    """Accounts with the Admin role."""


@admin.register(ProjectManager)
class ProjectManagerAdmin(UserAdmin):
    """Accounts with the ProjectManager role."""
