"""
Service layer for admin-managed accounts.

Encapsulates creating, updating and deleting project managers, team members
and admins. Deleting a project manager cascades to their projects and teams,
and through those to tasks and assignment logs.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from django.db import transaction
from django.db.models import QuerySet

from accounts.models import User
from common.exceptions import DuplicateRecordError, ValidationFailedError
from project.models import AssignedProjectLog, Project, Team
from task.models import Task

logger = logging.getLogger(__name__)


class AccountService:
    """Account management for the admin area."""

    UPDATABLE_FIELDS = ('first_name', 'last_name', 'contact', 'profile_pic')

    @staticmethod
    def normalize_emails(emails: Sequence[str]) -> list[str]:
        return [email for email in dict.fromkeys(e.strip().lower() for e in emails) if email]

    @staticmethod
    def get_accounts_queryset(user_type: str) -> QuerySet[User]:
        return User.objects.filter(user_type=user_type).order_by('user_id')

    @staticmethod
    def create_account(
        user_type: str,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        contact: str = '',
        profile_pic: str = '',
    ) -> User:
        """Create an account of the given role."""
        email = email.strip().lower()
        if User.objects.filter(email=email).exists():
            raise DuplicateRecordError(f'An account with email {email} already exists.')

        user = User.objects.create_user(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            contact=contact or '',
            profile_pic=profile_pic or '',
            user_type=user_type,
            is_staff=user_type == User.TYPE_ADMIN,
        )
        logger.info(f'Created {user_type} account {user.user_id} ({email})')
        return user

    @classmethod
    def update_accounts(cls, user_type: str, updates: Sequence[dict]) -> tuple[list[User], list[str]]:
        """Apply per-email updates; returns updated accounts and unknown emails."""
        if not updates:
            raise ValidationFailedError('At least one update is required.')

        updated: list[User] = []
        not_found: list[str] = []

        with transaction.atomic():
            for update in updates:
                email = update['email'].strip().lower()
                user = User.objects.filter(email=email, user_type=user_type).first()
                if user is None:
                    not_found.append(email)
                    continue

                update_fields = []
                for field in cls.UPDATABLE_FIELDS:
                    value = update.get(field)
                    if value is not None:
                        setattr(user, field, value)
                        update_fields.append(field)

                if update.get('password'):
                    user.set_password(update['password'])
                    update_fields.append('password')

                if update_fields:
                    user.save(update_fields=[*update_fields, 'updated_at'])
                updated.append(user)

        logger.info(f'Updated {len(updated)} {user_type} accounts, {len(not_found)} not found')
        return updated, not_found

    @classmethod
    def delete_accounts(cls, user_type: str, emails: Sequence[str]) -> dict:
        """Delete accounts by email, cascading to owned records."""
        normalized = cls.normalize_emails(emails)
        if not normalized:
            raise ValidationFailedError('Please select at least one account to delete.')

        with transaction.atomic():
            users = User.objects.filter(email__in=normalized, user_type=user_type)
            found = set(users.values_list('email', flat=True))
            not_found = [email for email in normalized if email not in found]

            cascade = {
                'projects': Project.objects.filter(manager__in=users).count(),
                'teams': Team.objects.filter(manager__in=users).count(),
                'tasks': Task.objects.filter(project__manager__in=users).count(),
                'assignment_logs': AssignedProjectLog.objects.filter(
                    project__manager__in=users
                ).count(),
            }

            deleted_count = len(found)
            users.delete()

        logger.info(f'Deleted {deleted_count} {user_type} accounts, cascade={cascade}')
        return {
            'deleted_count': deleted_count,
            'not_found': not_found,
            'cascade': cascade,
        }
