"""
Service layer for Projects feature.

Encapsulates business logic for projects, teams and the assignment of
projects to teams. Every lookup is scoped to the calling project manager.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q, QuerySet

from common.exceptions import DuplicateRecordError, RecordNotFoundError, ValidationFailedError
from task.models import Task

from .models import AssignedProjectLog, Project, Team

User = get_user_model()
logger = logging.getLogger(__name__)


def _normalize_ids(identifiers: Sequence[str]) -> list[str]:
    return [identifier for identifier in dict.fromkeys(i.strip() for i in identifiers) if identifier]


class ProjectService:
    """Projects owned by a project manager."""

    DEFAULT_SORT = '-updated_at'

    ALLOWED_SORT_FIELDS = {
        'title',
        '-title',
        'created_at',
        '-created_at',
        'updated_at',
        '-updated_at',
        'deadline',
        '-deadline',
        'project_id',
        '-project_id',
    }

    UPDATABLE_FIELDS = ('title', 'description', 'deadline', 'status')

    @classmethod
    def get_projects_queryset(
        cls,
        manager,
        q: str | None = None,
        status: str | None = None,
        sort: str = DEFAULT_SORT,
    ) -> QuerySet[Project]:
        queryset = Project.objects.filter(manager=manager)

        if q:
            queryset = queryset.filter(Q(title__icontains=q) | Q(description__icontains=q))

        if status:
            queryset = queryset.filter(status=status)

        sort_field = sort if sort in cls.ALLOWED_SORT_FIELDS else cls.DEFAULT_SORT
        return queryset.order_by(sort_field)

    @staticmethod
    def find_project(manager, project_id: str) -> Project | None:
        return Project.objects.filter(project_id=project_id, manager=manager).first()

    @classmethod
    def get_project(cls, manager, project_id: str) -> Project:
        project = cls.find_project(manager, project_id)
        if project is None:
            raise RecordNotFoundError('Project', project_id)
        return project

    @staticmethod
    def create_project(
        manager,
        title: str,
        description: str = '',
        deadline: date | None = None,
    ) -> Project:
        project = Project.objects.create(
            title=title.strip(),
            description=description or '',
            deadline=deadline,
            manager=manager,
        )
        logger.info(f'Project {project.project_id} created by {manager.user_id}')
        return project

    @classmethod
    def update_project(cls, manager, project_id: str, **changes) -> Project:
        project = cls.get_project(manager, project_id)

        update_fields = []
        for field in cls.UPDATABLE_FIELDS:
            value = changes.get(field)
            if value is not None:
                setattr(project, field, value)
                update_fields.append(field)

        if update_fields:
            project.save(update_fields=[*update_fields, 'updated_at'])
            logger.info(f'Project {project_id} updated: {", ".join(update_fields)}')

        return project

    @staticmethod
    def delete_projects(manager, project_ids: Sequence[str]) -> dict:
        """Delete projects with their tasks and assignment logs."""
        normalized = _normalize_ids(project_ids)
        if not normalized:
            raise ValidationFailedError('Please select at least one project to delete.')

        with transaction.atomic():
            projects = Project.objects.filter(project_id__in=normalized, manager=manager)
            found = set(projects.values_list('project_id', flat=True))
            projects.delete()

        not_found = [project_id for project_id in normalized if project_id not in found]
        logger.info(f'Deleted projects {sorted(found)} for {manager.user_id}')
        return {'deleted_count': len(found), 'not_found': not_found}

    @classmethod
    def assign_project_to_team(
        cls,
        manager,
        project_id: str,
        team_id: str,
        deadline: date | None = None,
    ) -> AssignedProjectLog:
        """Open the assignment log that tasks of this project/team are recorded in."""
        project = cls.get_project(manager, project_id)
        team = TeamService.get_team(manager, team_id)

        if AssignedProjectLog.objects.filter(project=project, team=team).exists():
            raise DuplicateRecordError(f'Project {project_id} is already assigned to team {team_id}.')

        log = AssignedProjectLog.objects.create(
            project=project,
            team=team,
            deadline=deadline or project.deadline,
        )
        logger.info(f'Project {project_id} assigned to team {team_id} ({log.assign_project_id})')
        return log

    @classmethod
    def get_assignment_logs(cls, manager, project_id: str) -> QuerySet[AssignedProjectLog]:
        project = cls.get_project(manager, project_id)
        return AssignedProjectLog.objects.filter(project=project).order_by('assign_project_id')


class TeamService:
    """Teams owned by a project manager."""

    @staticmethod
    def get_teams_queryset(manager) -> QuerySet[Team]:
        return Team.objects.filter(manager=manager).prefetch_related('members').order_by('team_id')

    @staticmethod
    def get_team(manager, team_id: str) -> Team:
        team = Team.objects.filter(team_id=team_id, manager=manager).first()
        if team is None:
            raise RecordNotFoundError('Team', team_id)
        return team

    @staticmethod
    def resolve_members(user_ids: Sequence[str]) -> list:
        """Look up team members by user identifier; every id must be a team member account."""
        normalized = _normalize_ids(user_ids)
        users = list(User.objects.filter(user_id__in=normalized, user_type=User.TYPE_USER))
        found = {user.user_id for user in users}
        missing = [user_id for user_id in normalized if user_id not in found]
        if missing:
            raise ValidationFailedError(f'Unknown team members: {", ".join(missing)}')
        return users

    @staticmethod
    def _resolve_leader(team_leader: str | None, members: list):
        if not team_leader:
            return None
        for member in members:
            if member.user_id == team_leader:
                return member
        raise ValidationFailedError('Team leader must be a member of the team.')

    @classmethod
    def create_team(
        cls,
        manager,
        team_name: str,
        members: Sequence[str] = (),
        team_leader: str | None = None,
    ) -> Team:
        member_users = cls.resolve_members(members)
        leader = cls._resolve_leader(team_leader, member_users)

        with transaction.atomic():
            team = Team.objects.create(
                team_name=team_name.strip(),
                team_leader=leader,
                manager=manager,
            )
            team.members.set(member_users)

        logger.info(f'Team {team.team_id} created by {manager.user_id} with {len(member_users)} members')
        return team

    @classmethod
    def update_team(
        cls,
        manager,
        team_id: str,
        team_name: str | None = None,
        members: Sequence[str] | None = None,
        team_leader: str | None = None,
    ) -> Team:
        """Update a team. ``None`` leaves a field unchanged; an empty ``team_leader`` clears it."""
        team = cls.get_team(manager, team_id)

        with transaction.atomic():
            if members is not None:
                member_users = cls.resolve_members(members)
                team.members.set(member_users)
            else:
                member_users = list(team.members.all())

            if team_leader is not None:
                team.team_leader = cls._resolve_leader(team_leader, member_users)
            elif team.team_leader_id and team.team_leader_id not in {m.user_id for m in member_users}:
                team.team_leader = None

            if team_name is not None:
                team.team_name = team_name.strip()

            team.save()

        logger.info(f'Team {team_id} updated')
        return team

    @staticmethod
    def delete_teams(manager, team_ids: Sequence[str]) -> dict:
        """Delete teams with their tasks and assignment logs."""
        normalized = _normalize_ids(team_ids)
        if not normalized:
            raise ValidationFailedError('Please select at least one team to delete.')

        with transaction.atomic():
            teams = Team.objects.filter(team_id__in=normalized, manager=manager)
            found = set(teams.values_list('team_id', flat=True))
            task_count = Task.objects.filter(team__in=teams).count()
            teams.delete()

        not_found = [team_id for team_id in normalized if team_id not in found]
        logger.info(f'Deleted teams {sorted(found)} and {task_count} tasks for {manager.user_id}')
        return {'deleted_count': len(found), 'not_found': not_found}
